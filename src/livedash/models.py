"""Value types shared by the API clients, the controller and the render sinks."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ViewMode(str, Enum):
    """Which dataset/chart pairing the dashboard is showing."""

    CRYPTO = "crypto"
    WEATHER = "weather"

    @classmethod
    def parse(cls, value: "ViewMode | str") -> "ViewMode":
        """Accept a ViewMode or one of the selector strings ('crypto', 'weather')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown view {value!r} (expected one of {valid})") from None


class ChartStyle(str, Enum):
    BAR = "bar"
    LINE = "line"


@dataclass(frozen=True)
class Asset:
    id: str
    color: str

    @property
    def label(self) -> str:
        """Display name: 'bitcoin' -> 'Bitcoin'."""
        return self.id[:1].upper() + self.id[1:]

    @classmethod
    def from_dict(cls, data: dict) -> "Asset":
        return cls(id=data["id"], color=data.get("color", "#888888"))


@dataclass(frozen=True)
class City:
    name: str
    latitude: float
    longitude: float

    @classmethod
    def from_dict(cls, data: dict) -> "City":
        return cls(
            name=data["name"],
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
        )


DEFAULT_ASSETS = (
    Asset("bitcoin", "#f7931a"),
    Asset("ethereum", "#627eea"),
    Asset("dogecoin", "#c2a633"),
)

DEFAULT_CITIES = (
    City("Berlin", 52.52, 13.405),
    City("London", 51.5074, -0.1278),
    City("New York", 40.7128, -74.0060),
)


@dataclass(frozen=True)
class CryptoQuote:
    asset: Asset
    price_usd: float
    change_24h_pct: float


@dataclass(frozen=True)
class CityWeather:
    city: City
    temperature_c: float
    windspeed_kmh: float


@dataclass(frozen=True)
class MetricCard:
    """
    One rendered unit: an entity's headline value plus an optional secondary value.

    Cards are rebuilt on every refresh and never mutated; the sink receives
    the formatted field text separately while values animate.
    """

    key: str
    label: str
    primary_value: float
    primary_label: str
    primary_unit: Optional[str] = None
    secondary_value: Optional[float] = None
    secondary_label: Optional[str] = None
    secondary_unit: Optional[str] = None


@dataclass(frozen=True)
class ChartSeries:
    labels: tuple[str, ...]
    values: tuple[float, ...]
    style: ChartStyle
    title: str = ""
    colors: tuple[str, ...] = field(default_factory=tuple)
