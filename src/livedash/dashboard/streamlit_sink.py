"""Streamlit implementation of the render sink.

Every area is an st.empty() placeholder so the controller can rewrite it in
place while values animate.
"""
from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from livedash.dashboard.cards import TREND_COLORS
from livedash.dashboard.charts import build_figure
from livedash.dashboard.sink import CardHandle, RenderSink
from livedash.models import ChartSeries, MetricCard

log = logging.getLogger(__name__)

GRID_COLUMNS = 3

CARD_CSS = """
<style>
    .metric-card {
        background-color: #262730;
        border-radius: 8px;
        padding: 1rem;
        margin-bottom: 0.5rem;
    }
    .metric-card h3 { margin: 0 0 0.5rem 0; }
    .metric-card .value { font-weight: 600; }
</style>
"""


class StreamlitCard(CardHandle):
    def __init__(self, placeholder, card: MetricCard):
        self.placeholder = placeholder
        self.card = card
        self.texts = {"primary": "-", "secondary": "-"}
        self.trends: dict[str, str] = {}
        self._draw()

    def set_field(self, field: str, text: str, trend: Optional[str] = None) -> None:
        self.texts[field] = text
        if trend is not None:
            self.trends[field] = trend
        self._draw()

    def _line(self, field: str, label: Optional[str], unit: Optional[str]) -> str:
        style = ""
        if field in self.trends:
            style = f' style="color: {TREND_COLORS[self.trends[field]]}"'
        suffix = f" {unit}" if unit and unit != "%" else (unit or "")
        return f'<div>{label}: <span class="value"{style}>{self.texts[field]}</span>{suffix}</div>'

    def _draw(self) -> None:
        card = self.card
        html = [f'<div class="metric-card"><h3>{card.label}</h3>']
        html.append(self._line("primary", card.primary_label, card.primary_unit))
        if card.secondary_value is not None:
            html.append(self._line("secondary", card.secondary_label, card.secondary_unit))
        html.append("</div>")
        self.placeholder.markdown("".join(html), unsafe_allow_html=True)


class StreamlitChart:
    def __init__(self, placeholder, series: ChartSeries):
        self.placeholder = placeholder
        self.placeholder.plotly_chart(build_figure(series), use_container_width=True)

    def destroy(self) -> None:
        self.placeholder.empty()


class StreamlitSink(RenderSink):
    """
    Loading indicator, card grid and chart area laid out top to bottom.

    Must be constructed inside a running Streamlit script.
    """

    def __init__(self, columns: int = GRID_COLUMNS):
        st.markdown(CARD_CSS, unsafe_allow_html=True)
        self.columns = columns
        self.loading = st.empty()
        self.grid = st.empty()
        self.chart_area = st.empty()
        self._slots: list = []
        self._cols: list = []

    def clear(self, loading_text: str) -> None:
        self.grid.empty()
        self.chart_area.empty()
        self._slots = []
        self._cols = []
        self.loading.info(loading_text)

    def show_error(self, message: str) -> None:
        self.loading.error(message)

    def show_cards(self) -> None:
        self.loading.empty()
        self._cols = self.grid.container().columns(self.columns)

    def add_card(self, card: MetricCard) -> StreamlitCard:
        if not self._cols:
            self.show_cards()
        col = self._cols[len(self._slots) % self.columns]
        slot = col.empty()
        self._slots.append(slot)
        return StreamlitCard(slot, card)

    def create_chart(self, series: ChartSeries) -> StreamlitChart:
        return StreamlitChart(self.chart_area, series)
