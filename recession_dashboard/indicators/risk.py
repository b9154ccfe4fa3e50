"""Three-level risk classification for indicator readings.

Two families:
- Threshold: fixed cut points on the raw value (GDP growth, leading index,
  yield-curve spread).
- Band position: where the current value sits inside the full-history
  moving-average range, read with the indicator's polarity and nudged by
  the latest trend when it lands in the middle of the band.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from recession_dashboard.models import MASummary, RiskLevel


logger = logging.getLogger(__name__)

# Band classification needs at least this many MA points
MIN_BAND_POINTS = 3


class IndicatorKind(Enum):
    """Indicators the dashboard knows how to score."""

    YIELD_CURVE = "yield_curve"
    UNEMPLOYMENT = "unemployment"
    GDP_GROWTH = "gdp_growth"
    CONSUMER_SENTIMENT = "consumer_sentiment"
    HOUSING_PERMITS = "housing_permits"
    LEADING_INDICATORS = "leading_indicators"


class Polarity(Enum):
    HIGHER_IS_WORSE = "higher_is_worse"
    HIGHER_IS_BETTER = "higher_is_better"


class RiskFamily(Enum):
    THRESHOLD = "threshold"
    BAND = "band"


@dataclass(frozen=True)
class ThresholdTable:
    """Cut points on the raw value. `high` is the more severe cut."""

    high: float
    medium: float
    polarity: Polarity

    def classify(self, value: float) -> RiskLevel:
        if self.polarity is Polarity.HIGHER_IS_BETTER:
            if value < self.high:
                return RiskLevel.HIGH
            if value < self.medium:
                return RiskLevel.MEDIUM
            return RiskLevel.LOW
        if value > self.high:
            return RiskLevel.HIGH
        if value > self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


@dataclass(frozen=True)
class RiskProfile:
    """Classification rules for one indicator."""

    kind: IndicatorKind
    family: RiskFamily
    polarity: Polarity
    thresholds: ThresholdTable
    band_bounds: tuple[float, float] = (0.3, 0.7)

    def with_thresholds(self, high: float, medium: float) -> "RiskProfile":
        """Same rules with a threshold table in different units."""
        return replace(self, thresholds=ThresholdTable(high, medium, self.polarity))

    def inverted(self) -> "RiskProfile":
        """Same indicator read with the opposite polarity."""
        polarity = (
            Polarity.HIGHER_IS_BETTER
            if self.polarity is Polarity.HIGHER_IS_WORSE
            else Polarity.HIGHER_IS_WORSE
        )
        return replace(
            self,
            polarity=polarity,
            thresholds=replace(self.thresholds, polarity=polarity),
        )


def _profile(kind, family, polarity, high, medium) -> RiskProfile:
    return RiskProfile(kind, family, polarity, ThresholdTable(high, medium, polarity))


PROFILES: dict[IndicatorKind, RiskProfile] = {
    # Spread in percentage points; inverted curve is the classic warning
    IndicatorKind.YIELD_CURVE: _profile(
        IndicatorKind.YIELD_CURVE, RiskFamily.THRESHOLD, Polarity.HIGHER_IS_BETTER, 0.0, 0.5
    ),
    # Weekly initial claims, thousands
    IndicatorKind.UNEMPLOYMENT: _profile(
        IndicatorKind.UNEMPLOYMENT, RiskFamily.BAND, Polarity.HIGHER_IS_WORSE, 250, 230
    ),
    # Annualized growth, percent
    IndicatorKind.GDP_GROWTH: _profile(
        IndicatorKind.GDP_GROWTH, RiskFamily.THRESHOLD, Polarity.HIGHER_IS_BETTER, 0.5, 1.0
    ),
    # University of Michigan index level
    IndicatorKind.CONSUMER_SENTIMENT: _profile(
        IndicatorKind.CONSUMER_SENTIMENT, RiskFamily.BAND, Polarity.HIGHER_IS_BETTER, 60, 70
    ),
    # Units authorized, thousands (annual rate)
    IndicatorKind.HOUSING_PERMITS: _profile(
        IndicatorKind.HOUSING_PERMITS, RiskFamily.BAND, Polarity.HIGHER_IS_BETTER, 1100, 1300
    ),
    # Composite leading index, 100 = long-run trend
    IndicatorKind.LEADING_INDICATORS: _profile(
        IndicatorKind.LEADING_INDICATORS, RiskFamily.THRESHOLD, Polarity.HIGHER_IS_BETTER, 98.5, 100
    ),
}


def range_position(current: float, summary: MASummary) -> float:
    """Position of current inside [low, high] of the MA band. Not clamped."""
    return (current - summary.low) / summary.width


def trend_direction(current: float, previous: float | None, polarity: Polarity) -> int:
    """+1 worsening, -1 improving, 0 flat or unknown."""
    if previous is None or current == previous:
        return 0
    rising = current > previous
    worsening = rising if polarity is Polarity.HIGHER_IS_WORSE else not rising
    return 1 if worsening else -1


def classify(
    kind: IndicatorKind,
    current: float,
    previous: float | None = None,
    summary: MASummary | None = None,
    profile: RiskProfile | None = None,
) -> RiskLevel:
    """
    Classify a reading as low, medium or high risk.

    Args:
        kind: Indicator being classified
        current: Latest value
        previous: Value before it, used to break ties in the middle band
        summary: Full-history MA statistics (band family only)
        profile: Rules to use instead of the default for `kind`

    Returns:
        RiskLevel. A degenerate or too-short MA band falls back to the
        profile's threshold table instead of dividing by zero.
    """
    profile = profile or PROFILES[kind]

    if profile.family is RiskFamily.THRESHOLD:
        return profile.thresholds.classify(current)

    if summary is None or summary.count < MIN_BAND_POINTS or summary.width <= 0:
        logger.warning(f"{kind.value}: MA band unusable, using threshold table")
        return profile.thresholds.classify(current)

    position = range_position(current, summary)
    severity = position if profile.polarity is Polarity.HIGHER_IS_WORSE else 1 - position
    lower, upper = profile.band_bounds

    if severity < lower:
        return RiskLevel.LOW
    if severity > upper:
        return RiskLevel.HIGH

    trend = trend_direction(current, previous, profile.polarity)
    if trend > 0:
        return RiskLevel.MEDIUM.tighten()
    if trend < 0:
        return RiskLevel.MEDIUM.relax()
    return RiskLevel.MEDIUM
