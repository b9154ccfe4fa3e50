"""Raw observations in, plottable risk-annotated indicator view out."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from recession_dashboard.data.fallback import get_fallback
from recession_dashboard.indicators.moving_average import ma_value_at
from recession_dashboard.indicators.parser import (
    MalformedSeriesError,
    parse_or_fallback,
    parse_series,
)
from recession_dashboard.indicators.probability import recession_probability
from recession_dashboard.indicators.range_filter import filter_ma_to_span, filter_range
from recession_dashboard.indicators.registry import (
    INDICATOR_CONFIGS,
    PROBABILITY_INPUTS,
    IndicatorConfig,
)
from recession_dashboard.indicators.risk import classify
from recession_dashboard.models import (
    DateRange,
    MAPoint,
    MASummary,
    RiskLevel,
    Series,
    TimePoint,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorView:
    """What a chart needs to draw one indicator."""

    key: str
    display_series: tuple[TimePoint, ...]
    ma_line: tuple[MAPoint, ...]
    risk_level: RiskLevel
    summary: MASummary
    current_value: float | None
    previous_value: float | None
    percent_from_ma: float | None = None
    warning: str | None = None

    @property
    def visible_range(self) -> DateRange | None:
        """Dates actually drawn, which is the whole series after a range fallback."""
        if not self.display_series:
            return None
        return DateRange(self.display_series[0].date, self.display_series[-1].date)


def select_subseries(payload, key: str) -> list:
    """One named sub-series of a multi-series payload."""
    if not isinstance(payload, Mapping):
        raise MalformedSeriesError(
            f"expected a mapping of series, got {type(payload).__name__}", "data"
        )
    if key not in payload:
        raise MalformedSeriesError(
            f"missing sub-series (available: {', '.join(payload)})", f"data.{key}"
        )
    return payload[key]


def build_series(raw, config: IndicatorConfig) -> Series:
    """Parse raw records for an indicator, applying its unit scale."""
    series = parse_series(raw, config.series_id, config.frequency, config.value_field)
    return _scaled(series, config)


def _scaled(series: Series, config: IndicatorConfig) -> Series:
    if config.scale == 1.0:
        return series
    return series.with_points(
        TimePoint(p.date, None if p.value is None else p.value * config.scale)
        for p in series.points
    )


def _latest_two(points: tuple[TimePoint, ...]) -> tuple[float | None, float | None]:
    values = [p.value for p in points if p.value is not None]
    current = values[-1] if values else None
    previous = values[-2] if len(values) > 1 else None
    return current, previous


def view_from_series(
    series: Series, config: IndicatorConfig, date_range: DateRange | None = None
) -> IndicatorView:
    """
    Run the analytics on an already-parsed series.

    The moving average and its summary always cover the full series; only
    the returned display series and MA line are cut to the range.
    """
    ma = config.engine.compute(series)
    if len(ma) == 0:
        logger.info(f"{config.key}: not enough history for a moving average")

    selected = filter_range(series, date_range)
    display = selected.points
    ma_line = tuple(filter_ma_to_span(ma.ma_line, display))

    current, previous = _latest_two(display)
    if current is None:
        # Nothing to classify; show a neutral badge
        risk = RiskLevel.MEDIUM
        percent = None
    else:
        risk = classify(config.kind, current, previous, ma.summary, profile=config.risk_profile)
        latest_date = max(p.date for p in display if p.value is not None)
        ma_point = ma_value_at(ma.ma_line, latest_date)
        percent = None
        if ma_point is not None and ma_point.ma_value != 0:
            percent = (current - ma_point.ma_value) / ma_point.ma_value * 100

    return IndicatorView(
        key=config.key,
        display_series=display,
        ma_line=ma_line,
        risk_level=risk,
        summary=ma.summary,
        current_value=current,
        previous_value=previous,
        percent_from_ma=percent,
        warning=selected.warning,
    )


def run_indicator(
    raw, config: IndicatorConfig, date_range: DateRange | None = None
) -> IndicatorView:
    """
    Full pipeline for one indicator.

    Raises:
        MalformedSeriesError: raw cannot be parsed. Use run_dashboard for
            automatic fallback data.
    """
    return view_from_series(build_series(raw, config), config, date_range)


def run_dashboard(
    payload: Mapping[str, list],
    date_range: DateRange | None = None,
    configs: Mapping[str, IndicatorConfig] = INDICATOR_CONFIGS,
) -> dict[str, IndicatorView]:
    """
    Views for every configured indicator present in a payload keyed by series ID.

    Malformed series are replaced with static fallback data. Indicators
    with neither data nor fallback are skipped.
    """
    views = {}
    for key, config in configs.items():
        raw = payload.get(config.series_id)
        fallback = get_fallback(config.series_id)
        if raw is None and not fallback:
            logger.warning(f"{key}: no data for {config.series_id}, skipping")
            continue
        series = parse_or_fallback(
            raw, fallback, config.series_id, config.frequency, config.value_field
        )
        views[key] = view_from_series(_scaled(series, config), config, date_range)
    return views


def probability_from_views(views: Mapping[str, IndicatorView]) -> int:
    """Composite recession probability from the charts' live current values."""
    latest = {
        kind: views[key].current_value
        for kind, key in PROBABILITY_INPUTS.items()
        if key in views
    }
    return recession_probability(latest)
