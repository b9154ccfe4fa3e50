"""Moving-average lines and their full-history summary statistics."""

import math
from dataclasses import dataclass
from enum import Enum

import pandas as pd

from recession_dashboard.models import Frequency, MAPoint, MASummary, Series


EMPTY_SUMMARY = MASummary(average=0.0, high=0.0, low=0.0, count=0)


class WindowMode(Enum):
    """How the trailing window is measured."""

    COUNT = "count"  # last N points
    TIME = "time"  # last N calendar days
    PERIOD_EQUIVALENT = "period_equivalent"  # N days expressed as a point count


@dataclass(frozen=True)
class MovingAverageResult:
    """MA line plus statistics over the entire line."""

    ma_line: tuple[MAPoint, ...]
    summary: MASummary

    def __len__(self) -> int:
        return len(self.ma_line)


def effective_window(window_size: int, mode: WindowMode, frequency: Frequency) -> int:
    """
    Point count (COUNT / PERIOD_EQUIVALENT) or day count (TIME) actually used.

    A period-equivalent request on weekly or monthly data turns a day count
    into observations, e.g. 200 days of monthly data is 7 points.
    """
    if mode is WindowMode.PERIOD_EQUIVALENT and frequency is not Frequency.DAILY:
        return max(2, math.ceil(window_size / frequency.period_days))
    return window_size


def summarize(ma_line) -> MASummary:
    """Average, high and low of MA values."""
    values = [m.ma_value for m in ma_line]
    if not values:
        return EMPTY_SUMMARY
    return MASummary(
        average=sum(values) / len(values),
        high=max(values),
        low=min(values),
        count=len(values),
    )


@dataclass(frozen=True)
class MovingAverageEngine:
    """Configured moving average, applied to any series."""

    window_size: int = 50
    mode: WindowMode = WindowMode.COUNT
    frequency: Frequency | None = None

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be positive, got {self.window_size}")

    def compute(self, series: Series) -> MovingAverageResult:
        """
        Compute the MA line over the whole series.

        Input is sorted here; callers need not pre-sort. Null values shrink
        the divisor of their window, and a window with no valid values emits
        no point. Summary stats cover the entire line, never a zoomed view.
        """
        points = sorted(series.points, key=lambda p: p.date)
        if not points:
            return MovingAverageResult(ma_line=(), summary=EMPTY_SUMMARY)

        frequency = self.frequency or series.frequency
        window = effective_window(self.window_size, self.mode, frequency)

        dates = [p.date for p in points]
        values = pd.Series(
            [p.value for p in points],
            index=pd.to_datetime(dates, unit="ms"),
            dtype=float,
        )

        if self.mode is WindowMode.TIME:
            rolled = values.rolling(f"{window}D", closed="both", min_periods=1).mean()
            first = 0
        else:
            rolled = values.rolling(window=window, min_periods=1).mean()
            first = window - 1

        ma_line = tuple(
            MAPoint(date=d, ma_value=float(v))
            for d, v in zip(dates[first:], rolled.to_numpy()[first:])
            if not math.isnan(v)
        )
        return MovingAverageResult(ma_line=ma_line, summary=summarize(ma_line))


def compute_moving_average(
    series: Series,
    window_size: int,
    mode: WindowMode = WindowMode.COUNT,
    frequency: Frequency | None = None,
) -> MovingAverageResult:
    """Shorthand for MovingAverageEngine(...).compute(series)."""
    return MovingAverageEngine(window_size, mode, frequency).compute(series)


def ma_value_at(ma_line, ms: int) -> MAPoint | None:
    """MA point on the given date, else the one closest to it."""
    if not ma_line:
        return None
    for point in ma_line:
        if point.date == ms:
            return point
    return min(ma_line, key=lambda m: abs(m.date - ms))
