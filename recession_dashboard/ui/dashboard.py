"""Streamlit dashboard for recession indicator visualization.

One chart per indicator:
- Value line with its moving average
- Shaded NBER recession periods
- Optional equity index overlay on a secondary axis
- Composite recession probability in the header
"""

from collections.abc import Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from plotly.subplots import make_subplots

from recession_dashboard.config import FRED_OVERLAY_SERIES, Settings
from recession_dashboard.data.fallback import get_fallback
from recession_dashboard.data.fred_fetcher import FredFetcher
from recession_dashboard.data.recession_periods import RECESSION_PERIODS
from recession_dashboard.indicators import INDICATOR_CONFIGS, IndicatorView, run_dashboard
from recession_dashboard.indicators.overlay import (
    align_auxiliary_series,
    align_recession_periods,
    recession_periods_in_range,
)
from recession_dashboard.indicators.parser import parse_or_fallback
from recession_dashboard.indicators.pipeline import probability_from_views
from recession_dashboard.indicators.range_filter import RANGE_PRESETS, preset_range
from recession_dashboard.indicators.yield_curve import days_since_inversion_recovery
from recession_dashboard.models import (
    DateRange,
    RecessionPeriod,
    RiskLevel,
    TimePoint,
    ms_to_date,
)


RISK_COLORS = {
    RiskLevel.LOW: "#10b981",
    RiskLevel.MEDIUM: "#f59e0b",
    RiskLevel.HIGH: "#ef4444",
}

# Probability bands for the header badge: (upper bound, color, label)
PROBABILITY_BANDS = [
    (30, "#10b981", "LOW"),
    (60, "#f59e0b", "MODERATE"),
    (101, "#ef4444", "HIGH"),
]

RANGE_OPTIONS = [*RANGE_PRESETS, "max"]


def get_probability_band(probability: int) -> tuple[str, str]:
    """Color and label for a composite probability."""
    for upper, color, label in PROBABILITY_BANDS:
        if probability < upper:
            return color, label
    return PROBABILITY_BANDS[-1][1], PROBABILITY_BANDS[-1][2]


def _dates(ms_values) -> list[pd.Timestamp]:
    return [pd.Timestamp(ms_to_date(ms)) for ms in ms_values]


def build_indicator_figure(
    view: IndicatorView,
    recessions: Sequence[RecessionPeriod] = (),
    auxiliary: Sequence[TimePoint] = (),
    title: str | None = None,
    auxiliary_name: str = "S&P 500",
) -> go.Figure:
    """
    Plotly figure for one indicator view.

    Missing observations are drawn as gaps. Recession shading is clipped to
    the displayed dates, and the auxiliary index gets its own y-axis.
    """
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    points = view.display_series
    fig.add_trace(go.Scatter(
        x=_dates(p.date for p in points),
        y=[p.value for p in points],
        mode="lines", line=dict(color="#3b82f6", width=2),
        connectgaps=False,
        name="Value",
        hovertemplate="%{y:.2f}<extra></extra>",
    ), secondary_y=False)

    if view.ma_line:
        fig.add_trace(go.Scatter(
            x=_dates(m.date for m in view.ma_line),
            y=[m.ma_value for m in view.ma_line],
            mode="lines", line=dict(color="#f59e0b", width=1.5, dash="dash"),
            name="Moving Average",
            hovertemplate="MA: %{y:.2f}<extra></extra>",
        ), secondary_y=False)

    if auxiliary:
        fig.add_trace(go.Scatter(
            x=_dates(p.date for p in auxiliary),
            y=[p.value for p in auxiliary],
            mode="lines", line=dict(color="#a855f7", width=1.5, dash="dot"),
            name=auxiliary_name,
            hovertemplate=f"{auxiliary_name}: %{{y:,.0f}}<extra></extra>",
        ), secondary_y=True)

    if points:
        first, last = points[0].date, points[-1].date
        for period in recessions:
            if period.end_date < first or period.start_date > last:
                continue
            fig.add_vrect(
                x0=pd.Timestamp(ms_to_date(max(period.start_date, first))),
                x1=pd.Timestamp(ms_to_date(min(period.end_date, last))),
                fillcolor="#64748b", opacity=0.2, line_width=0,
                annotation_text=period.name, annotation_position="top left",
                annotation_font=dict(size=9, color="#94a3b8"),
            )

    fig.update_layout(
        height=320, margin=dict(l=0, r=60, t=30, b=0),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        showlegend=True,
        legend=dict(
            orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1,
            font=dict(size=10, color="#94a3b8"), bgcolor="rgba(0,0,0,0)",
        ),
        title=dict(text=title or view.key, font=dict(size=12, color="#94a3b8"), x=0),
        xaxis=dict(showgrid=True, gridcolor="#1e293b", tickfont=dict(color="#64748b", size=10)),
        hovermode="x unified",
    )
    fig.update_yaxes(
        title_text="", showgrid=True, gridcolor="#1e293b",
        tickfont=dict(color="#64748b", size=10),
        secondary_y=False,
    )
    fig.update_yaxes(
        title_text="", showgrid=False,
        tickfont=dict(color="#a855f7", size=9),
        visible=bool(auxiliary),
        secondary_y=True,
    )
    return fig


def render_probability_header(probability: int) -> None:
    """Render the composite recession probability badge."""
    color, label = get_probability_band(probability)
    st.markdown(
        f"""
        <div style="
            background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
            border: 1px solid #334155;
            border-left: 4px solid {color};
            border-radius: 8px;
            padding: 1.5rem 2rem;
            margin-bottom: 1rem;
        ">
            <div style="color: #94a3b8; font-size: 0.75rem; text-transform: uppercase; letter-spacing: 0.1em;">
                Recession Probability
            </div>
            <div style="display: flex; align-items: baseline; gap: 1rem; margin-top: 0.25rem;">
                <span style="font-size: 3.5rem; font-weight: 700; color: {color}; font-family: 'SF Mono', 'Consolas', monospace;">
                    {probability}%
                </span>
                <span style="color: {color}; font-weight: 600; font-size: 1.1rem;">{label}</span>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def overlay_for_view(view: IndicatorView, aux) -> list[TimePoint]:
    """Auxiliary index cut to the dates this chart actually draws."""
    if not view.display_series:
        return []
    return align_auxiliary_series(aux, view.visible_range)


def render_indicator(
    view: IndicatorView,
    show_recessions: bool,
    overlay_raw,
    overlay_name: str = "",
) -> None:
    """Render one indicator card: risk badge, stats and chart."""
    config = INDICATOR_CONFIGS[view.key]
    color = RISK_COLORS[view.risk_level]

    col_title, col_badge = st.columns([4, 1])
    with col_title:
        st.markdown(f"#### {config.title}")
    with col_badge:
        st.markdown(
            f'<div style="color: {color}; border: 1px solid {color}; border-radius: 4px; '
            f'text-align: center; font-weight: 600;">{view.risk_level.value.upper()}</div>',
            unsafe_allow_html=True,
        )

    if view.warning:
        st.warning(view.warning)

    col1, col2, col3 = st.columns(3)
    current = "N/A" if view.current_value is None else f"{view.current_value:,.2f}{config.suffix}"
    col1.metric("Current", current)
    col2.metric("MA Average", f"{view.summary.average:,.2f}")
    pct = "N/A" if view.percent_from_ma is None else f"{view.percent_from_ma:+.1f}%"
    col3.metric("vs MA", pct)

    recessions = []
    if show_recessions:
        recessions = recession_periods_in_range(
            view.visible_range, align_recession_periods(RECESSION_PERIODS)
        )
    fig = build_indicator_figure(
        view,
        recessions=recessions,
        auxiliary=overlay_for_view(view, overlay_raw),
        title=config.title,
        auxiliary_name=overlay_name or "Overlay",
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def load_views(settings: Settings, date_range: DateRange) -> tuple[dict[str, IndicatorView], dict[str, list]]:
    """Fetch (or fall back) every series and run the indicator pipeline."""
    with FredFetcher(settings) as fetcher:
        payload = fetcher.fetch_payload()
    return run_dashboard(payload, date_range), payload


def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(
        page_title="Recession Indicators",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown("## Recession Indicator Dashboard")

    settings = Settings()
    default_option = f"{settings.default_range_years} years"
    if default_option not in RANGE_OPTIONS:
        default_option = "5 years"

    col_range, col_recessions, col_overlay = st.columns([1, 1, 1])
    with col_range:
        selected = st.selectbox("Date Range", options=RANGE_OPTIONS, index=RANGE_OPTIONS.index(default_option))
    with col_recessions:
        show_recessions = st.toggle("Show recessions", value=True)
    with col_overlay:
        overlay_id = st.selectbox("Overlay", options=["None", *FRED_OVERLAY_SERIES])

    date_range = preset_range(selected)

    with st.spinner("Loading..."):
        views, payload = load_views(settings, date_range)

    if not views:
        st.error("No data available. Run: recession-fetch --full")
        return

    render_probability_header(probability_from_views(views))

    overlay_raw = None
    overlay_name = ""
    if overlay_id != "None":
        overlay_raw = payload.get(overlay_id)
        overlay_name = FRED_OVERLAY_SERIES[overlay_id]

    spread = views.get("t10y2y")
    if spread is not None and spread.display_series:
        yc_series = parse_or_fallback(payload.get("T10Y2Y"), get_fallback("T10Y2Y"), "T10Y2Y")
        days = days_since_inversion_recovery(yc_series)
        if days is not None:
            st.caption(f"Days since the 10Y-2Y curve un-inverted: {days}")

    for key in INDICATOR_CONFIGS:
        if key in views:
            render_indicator(views[key], show_recessions, overlay_raw, overlay_name)


if __name__ == "__main__":
    main()
