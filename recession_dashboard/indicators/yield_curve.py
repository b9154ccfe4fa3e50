"""Yield-curve inversion analytics."""

from datetime import date

from recession_dashboard.models import Series, date_to_ms, days_between


def inversion_periods(series: Series) -> list[tuple[int, int]]:
    """
    Contiguous spans where the spread is negative.

    Returns (first_inverted_date, last_inverted_date) pairs in epoch ms.
    Missing observations neither start nor end a span.
    """
    periods: list[tuple[int, int]] = []
    start = last = None
    for point in sorted(series.valid_points, key=lambda p: p.date):
        if point.value < 0:
            if start is None:
                start = point.date
            last = point.date
        elif start is not None:
            periods.append((start, last))
            start = last = None
    if start is not None:
        periods.append((start, last))
    return periods


def is_inverted(series: Series) -> bool:
    """Whether the latest valid reading is below zero."""
    valid = series.valid_points
    return bool(valid) and max(valid, key=lambda p: p.date).value < 0


def days_since_inversion_recovery(series: Series, as_of: date | None = None) -> int | None:
    """
    Days from the first non-negative reading after the last inversion to as_of.

    None when the curve is inverted now or never inverted.
    """
    if is_inverted(series):
        return None
    periods = inversion_periods(series)
    if not periods:
        return None

    last_inverted = periods[-1][1]
    recovery = min(
        (p.date for p in series.valid_points if p.date > last_inverted),
        default=None,
    )
    if recovery is None:
        return None
    as_of_ms = date_to_ms(as_of or date.today())
    return max(0, days_between(recovery, as_of_ms))
