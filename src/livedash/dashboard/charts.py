"""Chart series construction and Plotly figure styling."""
from __future__ import annotations

from typing import Protocol, Sequence

import plotly.graph_objects as go

from livedash.models import ChartSeries, ChartStyle, CityWeather, CryptoQuote

# Color palette matching the Streamlit dark theme
COLORS = {
    "line": "#00d1b2",
    "fill": "rgba(0, 209, 178, 0.3)",
    "bg_dark": "#0E1117",
    "text": "#FAFAFA",
}

TRANSITION_MS = 1000


class ChartHandle(Protocol):
    """A live chart bound to the chart area. Must be destroyed before replacement."""

    def destroy(self) -> None:
        ...


def crypto_series(quotes: Sequence[CryptoQuote]) -> ChartSeries:
    """Bar chart of prices, one colour per asset."""
    return ChartSeries(
        labels=tuple(q.asset.label for q in quotes),
        values=tuple(q.price_usd for q in quotes),
        style=ChartStyle.BAR,
        title="Price in USD",
        colors=tuple(q.asset.color for q in quotes),
    )


def weather_series(readings: Sequence[CityWeather]) -> ChartSeries:
    """Line chart of temperature across cities."""
    return ChartSeries(
        labels=tuple(r.city.name for r in readings),
        values=tuple(r.temperature_c for r in readings),
        style=ChartStyle.LINE,
        title="Temperature (°C)",
    )


def build_figure(series: ChartSeries) -> go.Figure:
    """
    Render a ChartSeries as a Plotly figure.

    Bar: category x axis, per-point colours, no legend, y axis anchored at zero.
    Line: single smoothed series with a filled area, y axis free to leave zero.
    """
    fig = go.Figure()

    if series.style is ChartStyle.BAR:
        fig.add_trace(
            go.Bar(
                x=list(series.labels),
                y=list(series.values),
                name=series.title,
                marker_color=list(series.colors) or None,
            )
        )
        fig.update_xaxes(type="category")
        fig.update_yaxes(rangemode="tozero")
        fig.update_layout(showlegend=False)
    else:
        fig.add_trace(
            go.Scatter(
                x=list(series.labels),
                y=list(series.values),
                name=series.title,
                mode="lines+markers",
                line=dict(color=COLORS["line"], shape="spline", smoothing=0.8),
                marker=dict(size=12),
                fill="tozeroy",
                fillcolor=COLORS["fill"],
            )
        )
        # tozeroy would pull autorange down to zero; pin the range to the data
        if series.values:
            fig.update_yaxes(range=line_y_range(series.values))
        fig.update_layout(showlegend=True)

    fig.update_layout(
        title=series.title,
        transition=dict(duration=TRANSITION_MS),
        template="plotly_dark",
        height=400,
        margin=dict(l=40, r=20, t=50, b=40),
    )
    return fig


def line_y_range(values: Sequence[float]) -> list[float]:
    """Data range plus 10% padding (at least 1 unit) on each side."""
    lo, hi = min(values), max(values)
    pad = max((hi - lo) * 0.1, 1.0)
    return [lo - pad, hi + pad]
