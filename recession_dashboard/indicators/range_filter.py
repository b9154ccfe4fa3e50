"""Restrict series to a selected date range."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

import pandas as pd

from recession_dashboard.config import DEFAULT_START_DATE
from recession_dashboard.models import DateRange, MAPoint, Series, TimePoint, date_to_ms


logger = logging.getLogger(__name__)

EMPTY_RANGE_WARNING = "No data available for the selected date range. Showing full dataset."

# Date-range selector presets: (years, months) back from today
RANGE_PRESETS: dict[str, tuple[int, int]] = {
    "1 month": (0, 1),
    "3 months": (0, 3),
    "1 year": (0, 12),
    "5 years": (5, 0),
    "10 years": (10, 0),
}


@dataclass(frozen=True)
class RangeFilterResult:
    """Points selected by a range, and whether the full series was substituted."""

    points: tuple[TimePoint, ...]
    fell_back_to_full: bool = False

    @property
    def warning(self) -> str | None:
        return EMPTY_RANGE_WARNING if self.fell_back_to_full else None


def filter_range(series: Series, date_range: DateRange | None) -> RangeFilterResult:
    """
    Select points with start <= date <= end.

    An empty selection returns the whole series with fell_back_to_full set,
    so a chart is never left blank. No range means no filtering.
    """
    if date_range is None:
        return RangeFilterResult(points=series.points)

    selected = tuple(p for p in series.points if date_range.contains(p.date))
    if selected:
        return RangeFilterResult(points=selected)

    logger.warning(f"{series.source_id}: range excludes all {len(series)} points, showing full series")
    return RangeFilterResult(points=series.points, fell_back_to_full=True)


def filter_ma_to_span(ma_line: Iterable[MAPoint], points: tuple[TimePoint, ...]) -> list[MAPoint]:
    """MA points falling between the first and last displayed dates."""
    if not points:
        return []
    first, last = points[0].date, points[-1].date
    return [m for m in ma_line if first <= m.date <= last]


def _months_back(today: date, years: int = 0, months: int = 0) -> date:
    return (pd.Timestamp(today) - pd.DateOffset(years=years, months=months)).date()


def default_date_range(today: date | None = None, years: int = 5) -> DateRange:
    """Five years back through today, unless told otherwise."""
    today = today or date.today()
    return DateRange.from_dates(_months_back(today, years=years), today)


def preset_range(name: str, today: date | None = None) -> DateRange:
    """Range for a selector preset ("1 month" ... "10 years", "max")."""
    today = today or date.today()
    key = name.strip().lower()
    if key == "max":
        return DateRange.from_dates(date.fromisoformat(DEFAULT_START_DATE), today)
    if key not in RANGE_PRESETS:
        raise ValueError(f"Unknown range preset: {name!r}. Available: {', '.join([*RANGE_PRESETS, 'max'])}")
    years, months = RANGE_PRESETS[key]
    return DateRange.from_dates(_months_back(today, years, months), today)


def parse_date_range(
    start: str | None, end: str | None, today: date | None = None
) -> DateRange | None:
    """
    Build a range from optional YYYY-MM-DD strings.

    Both absent means no range. A missing start is open-ended, a missing end
    is today.
    """
    if not start and not end:
        return None
    today = today or date.today()
    start_ms = date_to_ms(date.fromisoformat(start)) if start else date_to_ms(date.min)
    end_ms = date_to_ms(date.fromisoformat(end)) if end else date_to_ms(today)
    return DateRange(start=start_ms, end=end_ms)
