"""Shared fixtures: isolated configuration and canned API payloads."""
import time
from unittest.mock import Mock

import pytest
import requests

from livedash.common.config import Config

CRYPTO_RESPONSE = {
    "bitcoin": {"usd": 50000, "usd_24h_change": 2.5},
    "ethereum": {"usd": 3000, "usd_24h_change": -1.2},
    "dogecoin": {"usd": 0.1, "usd_24h_change": 5.0},
}

WEATHER_BY_LATITUDE = {
    52.52: {"temperature": 12.3, "windspeed": 9.4},
    51.5074: {"temperature": 8.9, "windspeed": 21.6},
    40.7128: {"temperature": -3.5, "windspeed": 13.0},
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Fresh Config per test: no config.yaml, no env overrides."""
    for var in (
        "LIVEDASH_CONFIG",
        "LIVEDASH_DEFAULT_VIEW",
        "LIVEDASH_REFRESH_INTERVAL",
        "LIVEDASH_ANIMATION_MS",
        "LIVEDASH_HTTP_TIMEOUT",
        "COINGECKO_BASE_URL",
        "OPEN_METEO_BASE_URL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    Config.reset()
    yield
    Config.reset()


def weather_session(delays=None, fail_latitude=None):
    """Mock requests.Session answering per latitude, optionally sleeping or failing per city."""
    delays = delays or {}

    def get(url, params=None, timeout=None):
        lat = params["latitude"]
        time.sleep(delays.get(lat, 0))
        if lat == fail_latitude:
            raise requests.exceptions.ConnectionError(f"no route to {lat}")
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {"current_weather": WEATHER_BY_LATITUDE[lat]}
        return response

    session = Mock()
    session.headers = {}
    session.get.side_effect = get
    return session
