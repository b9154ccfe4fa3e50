"""Per-indicator pipeline configuration."""

from dataclasses import dataclass

from recession_dashboard.config import FRED_SERIES
from recession_dashboard.indicators.moving_average import MovingAverageEngine, WindowMode
from recession_dashboard.indicators.risk import PROFILES, IndicatorKind, RiskProfile
from recession_dashboard.models import Frequency


@dataclass(frozen=True)
class IndicatorConfig:
    """Everything needed to turn one FRED series into a chart view."""

    key: str
    kind: IndicatorKind
    series_id: str
    frequency: Frequency
    window_size: int
    mode: WindowMode
    suffix: str = ""
    value_field: str = "value"
    scale: float = 1.0
    profile: RiskProfile | None = None

    @property
    def title(self) -> str:
        return FRED_SERIES.get(self.series_id, self.series_id)

    @property
    def risk_profile(self) -> RiskProfile:
        return self.profile or PROFILES[self.kind]

    @property
    def engine(self) -> MovingAverageEngine:
        return MovingAverageEngine(self.window_size, self.mode, self.frequency)


_UNEMPLOYMENT = PROFILES[IndicatorKind.UNEMPLOYMENT]

INDICATOR_CONFIGS: dict[str, IndicatorConfig] = {
    cfg.key: cfg
    for cfg in [
        IndicatorConfig(
            "t10y2y", IndicatorKind.YIELD_CURVE, "T10Y2Y",
            Frequency.DAILY, 50, WindowMode.TIME, suffix="%",
        ),
        IndicatorConfig(
            "t10y3m", IndicatorKind.YIELD_CURVE, "T10Y3M",
            Frequency.DAILY, 50, WindowMode.TIME, suffix="%",
        ),
        # 200-day moving average expressed in months
        IndicatorConfig(
            "unemploy", IndicatorKind.UNEMPLOYMENT, "UNEMPLOY",
            Frequency.MONTHLY, 200, WindowMode.PERIOD_EQUIVALENT, suffix=" thousand",
            profile=_UNEMPLOYMENT.with_thresholds(9000, 7000),
        ),
        IndicatorConfig(
            "u1rate", IndicatorKind.UNEMPLOYMENT, "U1RATE",
            Frequency.MONTHLY, 200, WindowMode.PERIOD_EQUIVALENT, suffix="%",
            profile=_UNEMPLOYMENT.with_thresholds(2.5, 1.5),
        ),
        IndicatorConfig(
            "emratio", IndicatorKind.UNEMPLOYMENT, "EMRATIO",
            Frequency.MONTHLY, 200, WindowMode.PERIOD_EQUIVALENT, suffix="%",
            profile=_UNEMPLOYMENT.inverted().with_thresholds(58, 60),
        ),
        IndicatorConfig(
            "initial_claims", IndicatorKind.UNEMPLOYMENT, "ICSA",
            Frequency.WEEKLY, 200, WindowMode.PERIOD_EQUIVALENT, suffix="k", scale=0.001,
        ),
        IndicatorConfig(
            "consumer_sentiment", IndicatorKind.CONSUMER_SENTIMENT, "UMCSENT",
            Frequency.MONTHLY, 200, WindowMode.PERIOD_EQUIVALENT,
        ),
        IndicatorConfig(
            "housing_permits", IndicatorKind.HOUSING_PERMITS, "PERMIT",
            Frequency.MONTHLY, 50, WindowMode.COUNT, suffix="k",
        ),
        IndicatorConfig(
            "gdp_nowcast", IndicatorKind.GDP_GROWTH, "GDPNOW",
            Frequency.QUARTERLY, 365, WindowMode.PERIOD_EQUIVALENT, suffix="%",
        ),
        IndicatorConfig(
            "leading_index", IndicatorKind.LEADING_INDICATORS, "USALOLITONOSTSAM",
            Frequency.MONTHLY, 200, WindowMode.PERIOD_EQUIVALENT,
        ),
    ]
}

# Which chart feeds each term of the composite recession probability
PROBABILITY_INPUTS: dict[IndicatorKind, str] = {
    IndicatorKind.YIELD_CURVE: "t10y2y",
    IndicatorKind.UNEMPLOYMENT: "initial_claims",
    IndicatorKind.GDP_GROWTH: "gdp_nowcast",
    IndicatorKind.CONSUMER_SENTIMENT: "consumer_sentiment",
    IndicatorKind.LEADING_INDICATORS: "leading_index",
    IndicatorKind.HOUSING_PERMITS: "housing_permits",
}
