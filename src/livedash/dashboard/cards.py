"""Metric card construction and field formatting."""
from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from livedash.models import CityWeather, CryptoQuote, MetricCard

# Trend colours for the 24h change field
TREND_COLORS = {
    "up": "#0f0",
    "down": "#f55",
}


def crypto_cards(quotes: Sequence[CryptoQuote]) -> list[MetricCard]:
    """One card per quote: price (USD) with the 24h change as secondary value."""
    return [
        MetricCard(
            key=q.asset.id,
            label=q.asset.label,
            primary_value=q.price_usd,
            primary_label="Price (USD)",
            secondary_value=q.change_24h_pct,
            secondary_label="24h Change",
            secondary_unit="%",
        )
        for q in quotes
    ]


def weather_cards(readings: Sequence[CityWeather]) -> list[MetricCard]:
    """One card per city: temperature with windspeed as secondary value."""
    return [
        MetricCard(
            key=r.city.name,
            label=r.city.name,
            primary_value=r.temperature_c,
            primary_label="Temperature",
            primary_unit="°C",
            secondary_value=r.windspeed_kmh,
            secondary_label="Windspeed",
            secondary_unit="km/h",
        )
        for r in readings
    ]


def format_whole(value: float) -> str:
    """Floor to an integer and group thousands: 50000.7 -> '50,000'."""
    return f"{math.floor(value):,}"


def format_change(value: float) -> str:
    """Percent change with two decimals: 2.5 -> '2.50'."""
    return f"{value:.2f}"


def change_trend(value: float) -> str:
    return "up" if value >= 0 else "down"


def secondary_formatter(card: MetricCard) -> Callable[[float], str]:
    """Percent changes keep their decimals, everything else renders whole."""
    return format_change if card.secondary_unit == "%" else format_whole


def secondary_trend(card: MetricCard) -> Optional[str]:
    """Only a percent change carries an up/down trend."""
    if card.secondary_value is None or card.secondary_unit != "%":
        return None
    return change_trend(card.secondary_value)
