"""Normalize raw FRED-style observation records into a Series."""

import logging
import math
from collections.abc import Mapping
from datetime import date

import pandas as pd

from recession_dashboard.models import (
    MISSING_SENTINEL,
    Frequency,
    Series,
    TimePoint,
    date_to_ms,
)


logger = logging.getLogger(__name__)


class MalformedSeriesError(ValueError):
    """Upstream payload is not the expected shape."""

    def __init__(self, message: str, field: str, source_id: str = "") -> None:
        self.field = field
        self.source_id = source_id
        prefix = f"{source_id}: " if source_id else ""
        super().__init__(f"{prefix}{message} (field: {field})")


def parse_date(raw, source_id: str = "", index: int | None = None) -> int:
    """Calendar day of a date string, as epoch ms at UTC midnight.

    Any time-of-day or offset in a full ISO string is ignored so the same
    calendar day maps to the same timestamp in every series.
    """
    field = "date" if index is None else f"[{index}].date"
    if isinstance(raw, date):
        return date_to_ms(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedSeriesError(f"expected a date string, got {raw!r}", field, source_id)
    try:
        ts = pd.Timestamp(raw.strip())
    except (ValueError, TypeError) as e:
        raise MalformedSeriesError(f"unparseable date {raw!r}", field, source_id) from e
    if pd.isna(ts):
        raise MalformedSeriesError(f"unparseable date {raw!r}", field, source_id)
    return date_to_ms(ts.date())


def parse_value(raw) -> float | None:
    """Finite float, or None for the sentinel and anything unparseable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == MISSING_SENTINEL or not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_series(
    raw,
    source_id: str,
    frequency: Frequency = Frequency.DAILY,
    value_field: str = "value",
) -> Series:
    """
    Convert raw `{date, value}` records into a sorted Series.

    Args:
        raw: List of records as returned by the fetch layer
        source_id: Series code the records belong to
        frequency: Observation frequency of the series
        value_field: Record key holding the value ("value", "spread", ...)

    Returns:
        Series with one TimePoint per record, ascending by date

    Raises:
        MalformedSeriesError: raw is not a list of date-bearing records
    """
    if not isinstance(raw, (list, tuple)):
        raise MalformedSeriesError(
            f"expected a list of observations, got {type(raw).__name__}",
            "observations",
            source_id,
        )

    by_date: dict[int, TimePoint] = {}
    for i, record in enumerate(raw):
        if not isinstance(record, Mapping):
            raise MalformedSeriesError(
                f"expected an observation record, got {type(record).__name__}",
                f"[{i}]",
                source_id,
            )
        if "date" not in record:
            raise MalformedSeriesError("missing date", f"[{i}].date", source_id)
        ms = parse_date(record["date"], source_id, i)
        by_date[ms] = TimePoint(date=ms, value=parse_value(record.get(value_field)))

    if len(by_date) != len(raw):
        logger.warning(
            f"{source_id}: dropped {len(raw) - len(by_date)} duplicate dates (kept latest)"
        )

    points = tuple(by_date[ms] for ms in sorted(by_date))
    return Series(source_id=source_id, frequency=frequency, points=points)


def parse_or_fallback(
    raw,
    fallback: list[dict],
    source_id: str,
    frequency: Frequency = Frequency.DAILY,
    value_field: str = "value",
) -> Series:
    """Parse raw, substituting the static fallback dataset if it is malformed."""
    try:
        return parse_series(raw, source_id, frequency, value_field)
    except MalformedSeriesError as e:
        logger.warning(f"Malformed payload, using fallback data: {e}")
        return parse_series(fallback, source_id, frequency, value_field)
