"""Time-series normalization, moving averages and risk analytics."""

from recession_dashboard.indicators.moving_average import (
    MovingAverageEngine,
    MovingAverageResult,
    WindowMode,
    compute_moving_average,
)
from recession_dashboard.indicators.overlay import (
    align_auxiliary_series,
    align_recession_periods,
)
from recession_dashboard.indicators.parser import MalformedSeriesError, parse_series
from recession_dashboard.indicators.pipeline import (
    IndicatorView,
    run_dashboard,
    run_indicator,
    select_subseries,
)
from recession_dashboard.indicators.probability import aggregate, recession_probability
from recession_dashboard.indicators.range_filter import RangeFilterResult, filter_range
from recession_dashboard.indicators.registry import INDICATOR_CONFIGS, IndicatorConfig
from recession_dashboard.indicators.risk import IndicatorKind, classify

__all__ = [
    "INDICATOR_CONFIGS",
    "IndicatorConfig",
    "IndicatorKind",
    "IndicatorView",
    "MalformedSeriesError",
    "MovingAverageEngine",
    "MovingAverageResult",
    "RangeFilterResult",
    "WindowMode",
    "aggregate",
    "align_auxiliary_series",
    "align_recession_periods",
    "classify",
    "compute_moving_average",
    "filter_range",
    "parse_series",
    "recession_probability",
    "run_dashboard",
    "run_indicator",
    "select_subseries",
]
