"""Public data API clients."""
from livedash.ingest.coingecko_api import CoinGeckoClient, parse_quotes
from livedash.ingest.open_meteo_api import OpenMeteoClient, parse_current_weather

__all__ = [
    "CoinGeckoClient",
    "OpenMeteoClient",
    "parse_quotes",
    "parse_current_weather",
]
