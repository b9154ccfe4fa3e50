"""Data models for indicator time series."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum


MS_PER_DAY = 24 * 60 * 60 * 1000

# FRED marks a missing observation with a lone dot
MISSING_SENTINEL = "."

_EPOCH = date(1970, 1, 1)


def date_to_ms(d: date) -> int:
    """Epoch milliseconds for a calendar day (UTC midnight)."""
    if isinstance(d, datetime):
        d = d.date()
    return (d - _EPOCH).days * MS_PER_DAY


def ms_to_date(ms: int) -> date:
    """Calendar day for an epoch-millisecond timestamp."""
    return _EPOCH + timedelta(days=ms // MS_PER_DAY)


def days_between(start_ms: int, end_ms: int) -> int:
    """Whole days from start_ms to end_ms."""
    return (ms_to_date(end_ms) - ms_to_date(start_ms)).days


class Frequency(Enum):
    """Observation frequency of a series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def period_days(self) -> int:
        """Approximate days covered by one observation."""
        return {"daily": 1, "weekly": 7, "monthly": 30, "quarterly": 91}[self.value]


class RiskLevel(Enum):
    """Ordinal recession-risk classification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def severity(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.value]

    @classmethod
    def from_severity(cls, severity: int) -> "RiskLevel":
        severity = min(max(severity, 0), 2)
        return (cls.LOW, cls.MEDIUM, cls.HIGH)[severity]

    def relax(self) -> "RiskLevel":
        return RiskLevel.from_severity(self.severity - 1)

    def tighten(self) -> "RiskLevel":
        return RiskLevel.from_severity(self.severity + 1)


@dataclass(frozen=True)
class TimePoint:
    """Single observation. value is None for a missing upstream reading."""

    date: int  # epoch ms
    value: float | None


@dataclass(frozen=True)
class MAPoint:
    """Moving-average value at a date."""

    date: int  # epoch ms
    ma_value: float


@dataclass(frozen=True)
class MASummary:
    """Statistics over a full moving-average line."""

    average: float
    high: float
    low: float
    count: int = 0

    @property
    def width(self) -> float:
        return self.high - self.low


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window in epoch ms."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"DateRange start {ms_to_date(self.start)} is after end {ms_to_date(self.end)}"
            )

    def contains(self, ms: int) -> bool:
        return self.start <= ms <= self.end

    @classmethod
    def from_dates(cls, start: date, end: date) -> "DateRange":
        return cls(start=date_to_ms(start), end=date_to_ms(end))


@dataclass(frozen=True)
class Series:
    """Immutable, date-sorted sequence of observations from one source."""

    source_id: str
    frequency: Frequency
    points: tuple[TimePoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    @property
    def valid_points(self) -> list[TimePoint]:
        """Points with a non-null value."""
        return [p for p in self.points if p.value is not None]

    def with_points(self, points) -> "Series":
        """New series with the same tags and different points."""
        return Series(self.source_id, self.frequency, tuple(points))


@dataclass(frozen=True)
class RecessionPeriod:
    """Historical recession interval (NBER dates)."""

    start_date: int  # epoch ms
    end_date: int  # epoch ms
    name: str

    def overlaps(self, date_range: DateRange) -> bool:
        return self.start_date <= date_range.end and self.end_date >= date_range.start

    @property
    def duration_days(self) -> int:
        return days_between(self.start_date, self.end_date)

