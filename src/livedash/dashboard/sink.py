"""
Render targets for the dashboard controller.

The controller never touches a UI toolkit directly; it talks to a RenderSink
that owns three areas: a loading indicator, a card grid and a chart area.
MemorySink keeps everything in plain attributes and is what the tests and
headless runs use. StreamlitSink (streamlit_sink.py) draws the real page.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from livedash.dashboard.charts import ChartHandle
from livedash.models import ChartSeries, MetricCard

FIELDS = ("primary", "secondary")


class CardHandle(ABC):
    """A card already placed in the grid, whose field text can be updated."""

    @abstractmethod
    def set_field(self, field: str, text: str, trend: Optional[str] = None) -> None:
        """Replace the text of 'primary' or 'secondary'; trend is 'up'/'down' or None."""


class RenderSink(ABC):
    """Abstract presentation layer."""

    @abstractmethod
    def clear(self, loading_text: str) -> None:
        """Empty and hide the cards, hide the chart, show the loading indicator."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Replace the loading text with an error; cards and chart stay hidden."""

    @abstractmethod
    def show_cards(self) -> None:
        """Hide the loading indicator and show the card grid."""

    @abstractmethod
    def add_card(self, card: MetricCard) -> CardHandle:
        """Append a card to the grid."""

    @abstractmethod
    def create_chart(self, series: ChartSeries) -> ChartHandle:
        """Show the chart area and bind a new chart to it."""


# =============================================================================
# In-memory sink
# =============================================================================


@dataclass
class RenderedCard(CardHandle):
    card: MetricCard
    texts: dict = field(default_factory=lambda: {f: "-" for f in FIELDS})
    trends: dict = field(default_factory=dict)
    history: list = field(default_factory=list)

    def set_field(self, field: str, text: str, trend: Optional[str] = None) -> None:
        if field not in FIELDS:
            raise ValueError(f"Unknown card field {field!r}")
        self.texts[field] = text
        if trend is not None:
            self.trends[field] = trend
        self.history.append((field, text))

    @property
    def primary_text(self) -> str:
        return self.texts["primary"]

    @property
    def secondary_text(self) -> str:
        return self.texts["secondary"]


@dataclass
class MemoryChart:
    series: ChartSeries
    destroyed: bool = False

    def destroy(self) -> None:
        if self.destroyed:
            raise RuntimeError("Chart destroyed twice")
        self.destroyed = True


class MemorySink(RenderSink):
    """Keeps the rendered state in attributes so it can be inspected."""

    def __init__(self):
        self.loading_text = ""
        self.loading_visible = False
        self.cards_display = "none"
        self.cards: list[RenderedCard] = []
        self.chart_visible = False
        self.charts: list[MemoryChart] = []
        self.events: list[str] = []

    def clear(self, loading_text: str) -> None:
        self.cards = []
        self.cards_display = "none"
        self.chart_visible = False
        self.loading_visible = True
        self.loading_text = loading_text
        self.events.append("clear")

    def show_error(self, message: str) -> None:
        self.loading_visible = True
        self.loading_text = message
        self.events.append("error")

    def show_cards(self) -> None:
        self.loading_visible = False
        self.cards_display = "grid"
        self.events.append("show_cards")

    def add_card(self, card: MetricCard) -> RenderedCard:
        rendered = RenderedCard(card)
        self.cards.append(rendered)
        self.events.append(f"card:{card.key}")
        return rendered

    def create_chart(self, series: ChartSeries) -> MemoryChart:
        chart = MemoryChart(series)
        self.charts.append(chart)
        self.chart_visible = True
        self.events.append(f"chart:{series.style.value}")
        return chart

    @property
    def current_chart(self) -> Optional[MemoryChart]:
        live = [c for c in self.charts if not c.destroyed]
        return live[-1] if live else None

    def card_texts(self) -> list[tuple[str, str, str]]:
        """(label, primary, secondary) per card, in grid order."""
        return [(c.card.label, c.primary_text, c.secondary_text) for c in self.cards]
