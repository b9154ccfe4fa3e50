"""Secondary datasets drawn on top of a primary indicator chart."""

import logging
from collections.abc import Mapping, Sequence

from recession_dashboard.data.recession_periods import RECESSION_PERIODS
from recession_dashboard.indicators.parser import MalformedSeriesError, parse_date, parse_value
from recession_dashboard.models import DateRange, RecessionPeriod, Series, TimePoint


logger = logging.getLogger(__name__)

# Checked in order; older payloads used "value", newer ones "nasdaqValue"
AUX_VALUE_FIELDS = ("nasdaqValue", "value")


def align_recession_periods(
    periods: Sequence[RecessionPeriod] = RECESSION_PERIODS,
    visible_range: DateRange | None = None,
) -> tuple[RecessionPeriod, ...]:
    """Recession periods for overlay, unchanged. The chart clips them to its axis."""
    return tuple(periods)


def recession_periods_in_range(
    date_range: DateRange | None, periods: Sequence[RecessionPeriod] = RECESSION_PERIODS
) -> list[RecessionPeriod]:
    """Periods overlapping the range (all of them if there is no range)."""
    if date_range is None:
        return list(periods)
    return [p for p in periods if p.overlaps(date_range)]


def _aux_value(record: Mapping) -> float | None:
    for field in AUX_VALUE_FIELDS:
        if record.get(field) is not None:
            return parse_value(record[field])
    return None


def _aux_date(raw) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    return parse_date(raw)


def align_auxiliary_series(aux, primary_range: DateRange | None) -> list[TimePoint]:
    """
    Filter an auxiliary index to the primary chart's window.

    Accepts a parsed Series or raw records keyed `date` plus either value
    field name. Missing overlay data yields an empty list, never an error.
    Records without a usable date or value are skipped.
    """
    if not aux:
        return []

    if isinstance(aux, Series):
        points = [p for p in aux.points if p.value is not None]
    else:
        points = []
        skipped = 0
        for record in aux:
            if not isinstance(record, Mapping):
                skipped += 1
                continue
            try:
                ms = _aux_date(record.get("date"))
            except MalformedSeriesError:
                skipped += 1
                continue
            value = _aux_value(record)
            if value is None:
                skipped += 1
                continue
            points.append(TimePoint(date=ms, value=value))
        if skipped:
            logger.debug(f"Skipped {skipped} unusable overlay records")

    if primary_range is not None:
        points = [p for p in points if primary_range.contains(p.date)]
    return sorted(points, key=lambda p: p.date)
