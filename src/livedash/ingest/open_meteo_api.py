"""
Open-Meteo API client - current temperature and windspeed per city.

One request per city:

    GET {base_url}/forecast?latitude=52.52&longitude=13.405&current_weather=true

    {"current_weather": {"temperature": 12.3, "windspeed": 9.4, ...}, ...}

fetch_all() runs the per-city requests in parallel and joins them. The join
is all-or-nothing: the first failure aborts it, and the result order always
matches the input city order.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

import requests

from livedash.common.config import get_config
from livedash.errors import DecodeError
from livedash.ingest.http import SessionPerThread, get_json
from livedash.models import DEFAULT_CITIES, City, CityWeather

log = logging.getLogger(__name__)


class OpenMeteoClient:
    """Client for the Open-Meteo forecast endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.get_api_base_url('open_meteo')).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_timeout()
        self._sessions = SessionPerThread(session)

    @property
    def session(self) -> requests.Session:
        """The calling thread's session."""
        return self._sessions.get()

    def get_current(self, city: City) -> CityWeather:
        """Blocking fetch of the current conditions for one city."""
        params = {
            "latitude": city.latitude,
            "longitude": city.longitude,
            "current_weather": "true",
        }
        data = get_json(self.session, f"{self.base_url}/forecast", params, self.timeout)
        return parse_current_weather(data, city)

    async def fetch_all(self, cities: Sequence[City] = DEFAULT_CITIES) -> list[CityWeather]:
        """
        Fetch every city in parallel and wait for all of them.

        Returns:
            One CityWeather per city, in the same order as `cities`

        Raises:
            NetworkError / DecodeError from the first city that fails
        """
        log.info(f"Fetching current weather for {len(cities)} cities")
        return list(
            await asyncio.gather(*(asyncio.to_thread(self.get_current, c) for c in cities))
        )


def parse_current_weather(data: dict, city: City) -> CityWeather:
    """Read temperature and windspeed out of a forecast response."""
    try:
        current = data["current_weather"]
        return CityWeather(
            city=city,
            temperature_c=float(current["temperature"]),
            windspeed_kmh=float(current["windspeed"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected weather data for {city.name}: {e!r}") from e
