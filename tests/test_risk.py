"""Tests for risk classification."""

import pytest

from recession_dashboard.indicators.risk import (
    PROFILES,
    IndicatorKind,
    Polarity,
    RiskFamily,
    classify,
    trend_direction,
)
from recession_dashboard.models import MASummary, RiskLevel


BAND = MASummary(average=200.0, high=300.0, low=100.0, count=10)


class TestThresholdFamily:
    @pytest.mark.parametrize(
        "value,expected",
        [(-1.0, RiskLevel.HIGH), (0.3, RiskLevel.HIGH), (0.7, RiskLevel.MEDIUM), (2.5, RiskLevel.LOW)],
    )
    def test_gdp_growth(self, value, expected):
        assert classify(IndicatorKind.GDP_GROWTH, value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [(-0.1, RiskLevel.HIGH), (0.0, RiskLevel.MEDIUM), (0.49, RiskLevel.MEDIUM), (1.0, RiskLevel.LOW)],
    )
    def test_yield_curve(self, value, expected):
        assert classify(IndicatorKind.YIELD_CURVE, value) is expected

    def test_leading_indicators(self):
        assert classify(IndicatorKind.LEADING_INDICATORS, 98.0) is RiskLevel.HIGH
        assert classify(IndicatorKind.LEADING_INDICATORS, 99.0) is RiskLevel.MEDIUM
        assert classify(IndicatorKind.LEADING_INDICATORS, 101.0) is RiskLevel.LOW

    def test_gdp_monotonic_as_value_drops(self):
        values = [x / 10 for x in range(30, -20, -1)]
        severities = [classify(IndicatorKind.GDP_GROWTH, v).severity for v in values]

        assert severities == sorted(severities)

    def test_summary_ignored(self):
        assert classify(IndicatorKind.GDP_GROWTH, 2.5, summary=BAND) is RiskLevel.LOW


class TestBandFamily:
    def test_higher_is_worse(self):
        assert classify(IndicatorKind.UNEMPLOYMENT, 290, summary=BAND) is RiskLevel.HIGH
        assert classify(IndicatorKind.UNEMPLOYMENT, 120, summary=BAND) is RiskLevel.LOW
        assert classify(IndicatorKind.UNEMPLOYMENT, 200, summary=BAND) is RiskLevel.MEDIUM

    def test_higher_is_better(self):
        band = MASummary(average=75.0, high=100.0, low=50.0, count=10)

        assert classify(IndicatorKind.CONSUMER_SENTIMENT, 95, summary=band) is RiskLevel.LOW
        assert classify(IndicatorKind.CONSUMER_SENTIMENT, 52, summary=band) is RiskLevel.HIGH

    def test_trend_breaks_middle_band(self):
        rising = classify(IndicatorKind.UNEMPLOYMENT, 200, previous=190, summary=BAND)
        falling = classify(IndicatorKind.UNEMPLOYMENT, 200, previous=210, summary=BAND)

        assert rising is RiskLevel.HIGH
        assert falling is RiskLevel.LOW

    def test_outside_band_still_classified(self):
        assert classify(IndicatorKind.UNEMPLOYMENT, 500, summary=BAND) is RiskLevel.HIGH
        assert classify(IndicatorKind.UNEMPLOYMENT, 0, summary=BAND) is RiskLevel.LOW

    def test_flat_band_uses_thresholds(self):
        flat = MASummary(average=200.0, high=200.0, low=200.0, count=10)

        assert classify(IndicatorKind.UNEMPLOYMENT, 260, summary=flat) is RiskLevel.HIGH
        assert classify(IndicatorKind.UNEMPLOYMENT, 240, summary=flat) is RiskLevel.MEDIUM
        assert classify(IndicatorKind.UNEMPLOYMENT, 200, summary=flat) is RiskLevel.LOW

    def test_short_band_uses_thresholds(self):
        short = MASummary(average=200.0, high=300.0, low=100.0, count=2)
        assert classify(IndicatorKind.UNEMPLOYMENT, 120, summary=short) is RiskLevel.LOW
        assert classify(IndicatorKind.HOUSING_PERMITS, 1000, summary=short) is RiskLevel.HIGH

    def test_no_summary_uses_thresholds(self):
        assert classify(IndicatorKind.CONSUMER_SENTIMENT, 55) is RiskLevel.HIGH


class TestProfiles:
    def test_every_kind_has_a_profile(self):
        assert set(PROFILES) == set(IndicatorKind)

    def test_band_kinds(self):
        band = {k for k, p in PROFILES.items() if p.family is RiskFamily.BAND}
        assert band == {
            IndicatorKind.UNEMPLOYMENT,
            IndicatorKind.CONSUMER_SENTIMENT,
            IndicatorKind.HOUSING_PERMITS,
        }

    def test_inverted_profile(self):
        profile = PROFILES[IndicatorKind.UNEMPLOYMENT].inverted().with_thresholds(58, 60)

        assert profile.polarity is Polarity.HIGHER_IS_BETTER
        assert classify(IndicatorKind.UNEMPLOYMENT, 57, profile=profile) is RiskLevel.HIGH
        assert classify(IndicatorKind.UNEMPLOYMENT, 61, profile=profile) is RiskLevel.LOW
        band = MASummary(average=60.0, high=62.0, low=58.0, count=10)
        assert classify(IndicatorKind.UNEMPLOYMENT, 61.8, summary=band, profile=profile) is RiskLevel.LOW


class TestTrendDirection:
    def test_directions(self):
        assert trend_direction(2.0, 1.0, Polarity.HIGHER_IS_WORSE) == 1
        assert trend_direction(2.0, 1.0, Polarity.HIGHER_IS_BETTER) == -1
        assert trend_direction(1.0, 1.0, Polarity.HIGHER_IS_WORSE) == 0
        assert trend_direction(1.0, None, Polarity.HIGHER_IS_WORSE) == 0
