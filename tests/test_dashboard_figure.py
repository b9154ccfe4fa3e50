"""Tests for the chart figure builder."""

from datetime import date

import pytest

from recession_dashboard.data.fallback import FALLBACK_DATA
from recession_dashboard.data.recession_periods import RECESSION_PERIODS
from recession_dashboard.indicators.overlay import align_auxiliary_series
from recession_dashboard.indicators.pipeline import run_indicator
from recession_dashboard.indicators.range_filter import preset_range
from recession_dashboard.indicators.registry import INDICATOR_CONFIGS
from recession_dashboard.models import date_to_ms
from recession_dashboard.ui.dashboard import (
    build_indicator_figure,
    get_probability_band,
    overlay_for_view,
)

from conftest import daily_records


@pytest.fixture
def covid_view():
    """Daily 10Y-2Y readings across the start of the 2020 recession."""
    values = [0.2 - i * 0.01 for i in range(60)]
    return run_indicator(daily_records(values, start=date(2020, 1, 15)), INDICATOR_CONFIGS["t10y2y"])


def test_value_and_ma_traces(covid_view):
    fig = build_indicator_figure(covid_view)

    assert [trace.name for trace in fig.data] == ["Value", "Moving Average"]
    assert len(fig.data[0].x) == 60
    assert len(fig.layout.shapes) == 0


def test_recession_shading_clipped_to_display(covid_view):
    fig = build_indicator_figure(covid_view, recessions=RECESSION_PERIODS)

    # Only the COVID-19 recession overlaps early 2020
    assert len(fig.layout.shapes) == 1


def test_auxiliary_on_secondary_axis(covid_view):
    aux = align_auxiliary_series(
        [{"date": "2020-02-03", "value": "3248.92"}, {"date": "2020-02-04", "value": "3297.59"}],
        None,
    )
    fig = build_indicator_figure(covid_view, auxiliary=aux, auxiliary_name="S&P 500")

    assert fig.data[-1].name == "S&P 500"
    assert fig.data[-1].yaxis == "y2"
    assert fig.data[0].yaxis == "y"


def test_missing_values_drawn_as_gaps():
    view = run_indicator(daily_records([0.1, None, 0.3]), INDICATOR_CONFIGS["t10y2y"])
    fig = build_indicator_figure(view)

    assert list(fig.data[0].y) == [0.1, None, 0.3]


@pytest.mark.parametrize(
    "probability,label",
    [(0, "LOW"), (29, "LOW"), (30, "MODERATE"), (59, "MODERATE"), (60, "HIGH"), (100, "HIGH")],
)
def test_probability_band(probability, label):
    assert get_probability_band(probability)[1] == label


class TestOverlayForView:
    def test_follows_full_series_after_range_fallback(self):
        # Fallback spread data ends in 2023, so a recent window is empty
        view = run_indicator(
            FALLBACK_DATA["T10Y2Y"],
            INDICATOR_CONFIGS["t10y2y"],
            preset_range("1 month", today=date(2026, 10, 18)),
        )
        assert view.warning is not None
        assert view.visible_range.start == date_to_ms(date(2023, 1, 1))
        assert view.visible_range.end == date_to_ms(date(2023, 5, 14))

        overlay = overlay_for_view(view, FALLBACK_DATA["SP500"])

        assert [p.date for p in overlay] == [
            date_to_ms(date(2023, month, 1)) for month in range(1, 6)
        ]

    def test_clipped_to_displayed_dates(self, covid_view):
        overlay = overlay_for_view(
            covid_view,
            [{"date": "2019-12-31", "value": "3230.78"}, {"date": "2020-02-03", "value": "3248.92"}],
        )

        assert [p.value for p in overlay] == [3248.92]

    def test_empty_view_gets_no_overlay(self):
        view = run_indicator([], INDICATOR_CONFIGS["t10y2y"])

        assert view.visible_range is None
        assert overlay_for_view(view, FALLBACK_DATA["SP500"]) == []
