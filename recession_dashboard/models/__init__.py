"""Data models for indicator time series."""

from recession_dashboard.models.series import (
    MISSING_SENTINEL,
    MS_PER_DAY,
    DateRange,
    Frequency,
    MAPoint,
    MASummary,
    RecessionPeriod,
    RiskLevel,
    Series,
    TimePoint,
    date_to_ms,
    days_between,
    ms_to_date,
)

__all__ = [
    "MISSING_SENTINEL",
    "MS_PER_DAY",
    "DateRange",
    "Frequency",
    "MAPoint",
    "MASummary",
    "RecessionPeriod",
    "RiskLevel",
    "Series",
    "TimePoint",
    "date_to_ms",
    "days_between",
    "ms_to_date",
]
