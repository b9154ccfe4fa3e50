"""Composite recession probability from per-indicator scores."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from recession_dashboard.indicators.risk import IndicatorKind, Polarity


logger = logging.getLogger(__name__)


# Indicator weights for the composite probability (sum to 1.0)
DEFAULT_WEIGHTS: dict[IndicatorKind, float] = {
    IndicatorKind.YIELD_CURVE: 0.25,  # inversion is historically the strongest predictor
    IndicatorKind.UNEMPLOYMENT: 0.15,
    IndicatorKind.GDP_GROWTH: 0.20,
    IndicatorKind.CONSUMER_SENTIMENT: 0.10,
    IndicatorKind.LEADING_INDICATORS: 0.20,
    IndicatorKind.HOUSING_PERMITS: 0.10,
}

# Step functions: (polarity, ((cut, score), ...), score when no cut is crossed).
# Coarser than the chart badges; the two are not expected to agree.
SCORE_STEPS: dict[IndicatorKind, tuple[Polarity, tuple[tuple[float, int], ...], int]] = {
    IndicatorKind.YIELD_CURVE: (Polarity.HIGHER_IS_BETTER, ((0.0, 80), (0.5, 40)), 10),
    IndicatorKind.UNEMPLOYMENT: (Polarity.HIGHER_IS_WORSE, ((275, 70), (250, 50)), 20),
    IndicatorKind.GDP_GROWTH: (Polarity.HIGHER_IS_BETTER, ((0.5, 80), (1.0, 60)), 20),
    IndicatorKind.CONSUMER_SENTIMENT: (Polarity.HIGHER_IS_BETTER, ((60, 75), (70, 40)), 15),
    IndicatorKind.LEADING_INDICATORS: (Polarity.HIGHER_IS_BETTER, ((98.5, 85), (100, 50)), 15),
    IndicatorKind.HOUSING_PERMITS: (Polarity.HIGHER_IS_BETTER, ((1100, 70), (1300, 40)), 10),
}


@dataclass(frozen=True)
class IndicatorScore:
    """One indicator's 0-100 score and its weight in the composite."""

    key: str
    score: float
    weight: float


def score_indicator(kind: IndicatorKind, latest_value: float) -> int:
    """0-100 recession score for an indicator's latest raw value."""
    polarity, steps, default = SCORE_STEPS[kind]
    for cut, score in steps:
        crossed = latest_value < cut if polarity is Polarity.HIGHER_IS_BETTER else latest_value > cut
        if crossed:
            return score
    return default


def aggregate(scores: Iterable[IndicatorScore]) -> int:
    """
    Weighted sum of scores, rounded half up.

    Weights are used as given; they are expected to sum to 1.0 and are
    neither checked nor renormalized.
    """
    total = sum(s.score * s.weight for s in scores)
    return int(math.floor(total + 0.5))


def recession_probability(
    latest_values: Mapping[IndicatorKind, float | None],
    weights: Mapping[IndicatorKind, float] = DEFAULT_WEIGHTS,
) -> int:
    """
    Composite probability from each indicator's live current value.

    Indicators without a value are left out; their weight is not
    redistributed.
    """
    scores = []
    for kind, weight in weights.items():
        value = latest_values.get(kind)
        if value is None:
            logger.info(f"No current value for {kind.value}, excluded from probability")
            continue
        scores.append(IndicatorScore(kind.value, score_indicator(kind, value), weight))
    return aggregate(scores)
