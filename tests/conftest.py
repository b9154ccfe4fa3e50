"""
Shared fixtures for the recession dashboard test suite.

Provides:
- FRED-style raw observation records
- Parsed daily series with and without gaps
- Settings pointed at a temporary cache directory
"""

from datetime import date, timedelta

import pytest

from recession_dashboard.config import Settings
from recession_dashboard.models import Frequency, Series, TimePoint, date_to_ms


def daily_records(values, start=date(2024, 1, 1)):
    """FRED-style records, one per day from start. None becomes the "." sentinel."""
    return [
        {
            "date": (start + timedelta(days=i)).isoformat(),
            "value": "." if v is None else str(v),
        }
        for i, v in enumerate(values)
    ]


def daily_series(values, start=date(2024, 1, 1), source_id="TEST"):
    """Parsed daily Series, one point per day from start."""
    points = tuple(
        TimePoint(date=date_to_ms(start + timedelta(days=i)), value=v)
        for i, v in enumerate(values)
    )
    return Series(source_id=source_id, frequency=Frequency.DAILY, points=points)


def ms(iso: str) -> int:
    return date_to_ms(date.fromisoformat(iso))


@pytest.fixture
def ten_day_series():
    """Values 1..10 on 2024-01-01 .. 2024-01-10."""
    return daily_series([float(v) for v in range(1, 11)])


@pytest.fixture
def settings(tmp_path):
    """Settings with a key and a throwaway cache directory."""
    return Settings(fred_api_key="test-key", cache_dir=tmp_path)


@pytest.fixture
def offline_settings(tmp_path):
    """Settings with no FRED key."""
    return Settings(fred_api_key="", cache_dir=tmp_path)
