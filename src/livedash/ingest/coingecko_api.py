"""
CoinGecko API client - current USD price and 24h change for a fixed set of assets.

One request covers every asset:

    GET {base_url}/simple/price?ids=bitcoin,ethereum,dogecoin
        &vs_currencies=usd&include_24hr_change=true

    {"bitcoin": {"usd": 50000, "usd_24h_change": 2.5}, ...}

API Documentation: https://docs.coingecko.com/reference/simple-price
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from livedash.common.config import get_config
from livedash.errors import DecodeError
from livedash.ingest.http import SessionPerThread, get_json
from livedash.models import DEFAULT_ASSETS, Asset, CryptoQuote

log = logging.getLogger(__name__)


class CoinGeckoClient:
    """Client for the CoinGecko simple price endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.get_api_base_url('coingecko')).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_timeout()
        self._sessions = SessionPerThread(session)

    @property
    def session(self) -> requests.Session:
        """The calling thread's session."""
        return self._sessions.get()

    def fetch_prices(self, asset_ids: Sequence[str]) -> dict:
        """Return the raw asset-id -> {usd, usd_24h_change} mapping."""
        params = {
            "ids": ",".join(asset_ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
        }
        log.info(f"Fetching prices for {params['ids']}")
        return get_json(self.session, f"{self.base_url}/simple/price", params, self.timeout)

    def get_quotes(self, assets: Sequence[Asset] = DEFAULT_ASSETS) -> list[CryptoQuote]:
        """
        Fetch quotes for the given assets.

        Returns:
            One CryptoQuote per asset, in the order requested

        Raises:
            NetworkError: request failed
            DecodeError: an asset or field is missing from the response
        """
        data = self.fetch_prices([a.id for a in assets])
        return parse_quotes(data, assets)


def parse_quotes(data: dict, assets: Sequence[Asset] = DEFAULT_ASSETS) -> list[CryptoQuote]:
    """Pick each requested asset out of a simple/price response."""
    quotes = []
    for asset in assets:
        try:
            entry = data[asset.id]
            quotes.append(
                CryptoQuote(
                    asset=asset,
                    price_usd=float(entry["usd"]),
                    change_24h_pct=float(entry["usd_24h_change"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Unexpected price data for {asset.id}: {e!r}") from e
    return quotes
