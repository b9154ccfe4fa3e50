"""Settings and static series catalogs."""

from recession_dashboard.config.settings import (
    ALL_FRED_SERIES,
    DEFAULT_START_DATE,
    FRED_OVERLAY_SERIES,
    FRED_SERIES,
    SERIES_START_DATES,
    Settings,
)

__all__ = [
    "ALL_FRED_SERIES",
    "DEFAULT_START_DATE",
    "FRED_OVERLAY_SERIES",
    "FRED_SERIES",
    "SERIES_START_DATES",
    "Settings",
]
