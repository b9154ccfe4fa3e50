"""Tests for the end-to-end indicator pipeline."""

import pytest

from recession_dashboard.data.fallback import FALLBACK_DATA
from recession_dashboard.indicators.moving_average import summarize
from recession_dashboard.indicators.parser import MalformedSeriesError
from recession_dashboard.indicators.pipeline import (
    probability_from_views,
    run_dashboard,
    run_indicator,
    select_subseries,
)
from recession_dashboard.indicators.registry import (
    INDICATOR_CONFIGS,
    PROBABILITY_INPUTS,
    IndicatorConfig,
)
from recession_dashboard.indicators.moving_average import WindowMode
from recession_dashboard.indicators.risk import IndicatorKind
from recession_dashboard.models import DateRange, Frequency, RiskLevel

from conftest import daily_records, ms


# Plain 5-point count MA on daily data, threshold-classified
GDP_CONFIG = IndicatorConfig(
    "test_gdp", IndicatorKind.GDP_GROWTH, "TEST", Frequency.DAILY, 5, WindowMode.COUNT, suffix="%",
)


class TestRunIndicator:
    def test_full_series(self):
        view = run_indicator(daily_records(range(1, 11)), GDP_CONFIG)

        assert view.key == "test_gdp"
        assert len(view.display_series) == 10
        assert len(view.ma_line) == 6
        assert view.current_value == 10.0
        assert view.previous_value == 9.0
        assert view.risk_level is RiskLevel.LOW
        assert view.percent_from_ma == pytest.approx(25.0)
        assert view.warning is None

    def test_summary_is_full_history(self):
        raw = daily_records(range(1, 11))
        zoom = DateRange(ms("2024-01-08"), ms("2024-01-10"))

        full = run_indicator(raw, GDP_CONFIG)
        zoomed = run_indicator(raw, GDP_CONFIG, zoom)

        assert [p.value for p in zoomed.display_series] == [8.0, 9.0, 10.0]
        assert [m.ma_value for m in zoomed.ma_line] == pytest.approx([6.0, 7.0, 8.0])
        assert zoomed.summary == full.summary
        # Recomputing on the zoomed line gives different numbers
        assert summarize(zoomed.ma_line) != full.summary

    def test_empty_range_falls_back_to_full(self):
        view = run_indicator(
            daily_records(range(1, 11)), GDP_CONFIG, DateRange(ms("2030-01-01"), ms("2030-02-01"))
        )

        assert len(view.display_series) == 10
        assert view.warning is not None

    def test_missing_values_in_display(self):
        view = run_indicator(daily_records([1.0, 2.0, None, 0.2, None]), GDP_CONFIG)

        assert view.display_series[2].value is None
        assert view.current_value == 0.2
        assert view.previous_value == 2.0
        assert view.risk_level is RiskLevel.HIGH

    def test_all_missing_is_medium(self):
        view = run_indicator(daily_records([None, None, None]), GDP_CONFIG)

        assert view.current_value is None
        assert view.risk_level is RiskLevel.MEDIUM
        assert view.percent_from_ma is None
        assert view.ma_line == ()

    def test_malformed_raises(self):
        with pytest.raises(MalformedSeriesError):
            run_indicator({"error_code": 400}, GDP_CONFIG)

    def test_scaled_indicator(self):
        config = INDICATOR_CONFIGS["initial_claims"]
        view = run_indicator(FALLBACK_DATA["ICSA"], config)

        assert view.current_value == pytest.approx(300.0)
        assert view.risk_level is RiskLevel.HIGH

    def test_deterministic(self):
        raw = daily_records([1.0, None, 3.0, 2.0, 5.0, 4.0])
        assert run_indicator(raw, GDP_CONFIG) == run_indicator(raw, GDP_CONFIG)


class TestSelectSubseries:
    def test_selects_key(self):
        payload = {"spread": daily_records([0.1]), "sp500": []}
        assert select_subseries(payload, "spread") == payload["spread"]

    def test_missing_key(self):
        with pytest.raises(MalformedSeriesError) as exc:
            select_subseries({"spread": []}, "nasdaq")
        assert exc.value.field == "data.nasdaq"

    def test_not_a_mapping(self):
        with pytest.raises(MalformedSeriesError):
            select_subseries([1, 2], "spread")


class TestRunDashboard:
    def test_empty_payload_uses_fallback_data(self):
        views = run_dashboard({})

        assert set(views) == {
            "t10y2y",
            "t10y3m",
            "initial_claims",
            "consumer_sentiment",
            "housing_permits",
            "gdp_nowcast",
            "leading_index",
        }
        assert views["t10y2y"].current_value == pytest.approx(-0.24)
        assert views["t10y2y"].risk_level is RiskLevel.HIGH

    def test_malformed_series_replaced(self):
        views = run_dashboard({"T10Y2Y": {"error_message": "Bad Request"}})
        assert views["t10y2y"].current_value == pytest.approx(-0.24)

    def test_live_data_preferred(self):
        views = run_dashboard({"UNEMPLOY": daily_records([6000.0, 6100.0, 6200.0])})

        assert views["unemploy"].current_value == 6200.0
        assert "u1rate" not in views

    def test_probability_from_fallback_views(self):
        views = run_dashboard({})
        # 20 + 10.5 + 16 + 1.5 + 17 + 1
        assert probability_from_views(views) == 66

    def test_probability_inputs_are_configured(self):
        for kind, key in PROBABILITY_INPUTS.items():
            assert INDICATOR_CONFIGS[key].kind is kind
