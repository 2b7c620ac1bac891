"""
Dashboard controller - view selection, refresh cycle, chart lifecycle.

Control flow for every user or timer event:

    clear view -> fetch -> render cards -> render chart -> animate values

Everything runs on one asyncio event loop. Outstanding fetches are never
cancelled. Instead each refresh takes a new epoch, and a refresh whose
epoch has been superseded by the time its data (or its failure) arrives
discards it without touching the sink.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from livedash.common.config import Config, get_config
from livedash.dashboard.animation import ValueAnimator
from livedash.dashboard.cards import (
    crypto_cards,
    format_whole,
    secondary_formatter,
    secondary_trend,
    weather_cards,
)
from livedash.dashboard.charts import ChartHandle, crypto_series, weather_series
from livedash.dashboard.sink import CardHandle, RenderSink
from livedash.errors import DashboardError
from livedash.ingest.coingecko_api import CoinGeckoClient
from livedash.ingest.open_meteo_api import OpenMeteoClient
from livedash.models import Asset, ChartSeries, City, MetricCard, ViewMode

log = logging.getLogger(__name__)

ERROR_MESSAGES = {
    ViewMode.CRYPTO: "Error loading crypto data.",
    ViewMode.WEATHER: "Error loading weather data.",
}


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh() call."""

    mode: ViewMode
    epoch: int
    cards: tuple[MetricCard, ...] = ()
    series: Optional[ChartSeries] = None
    error: Optional[DashboardError] = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale


class DashboardController:
    """
    Owns the view selector, the refresh epoch and the single chart slot.

    Example:
        >>> sink = MemorySink()
        >>> controller = DashboardController(sink)
        >>> await controller.set_view("weather")
        >>> [label for label, _, _ in sink.card_texts()]
        ['Berlin', 'London', 'New York']
    """

    def __init__(
        self,
        sink: RenderSink,
        crypto_client: Optional[CoinGeckoClient] = None,
        weather_client: Optional[OpenMeteoClient] = None,
        animator: Optional[ValueAnimator] = None,
        config: Optional[Config] = None,
        mode: ViewMode | str | None = None,
    ):
        config = config or get_config()
        self.sink = sink
        self.crypto_client = crypto_client or CoinGeckoClient()
        self.weather_client = weather_client or OpenMeteoClient()
        self.animator = animator or ValueAnimator(
            config.get_animation_duration_ms(), config.get_frame_rate()
        )
        self.assets = tuple(Asset.from_dict(a) for a in config.get_assets())
        self.cities = tuple(City.from_dict(c) for c in config.get_cities())
        self.loading_text = config.get_loading_text()
        self.refresh_interval = config.get_refresh_interval()

        self.mode = ViewMode.parse(mode or config.get_default_view())
        self._epoch = 0
        self._chart: Optional[ChartHandle] = None
        self._timer: Optional[asyncio.Task] = None
        self._pending: set[asyncio.Task] = set()
        self._halted: Optional[BaseException] = None

    @property
    def epoch(self) -> int:
        return self._epoch

    def is_current(self, epoch: int) -> bool:
        return epoch == self._epoch

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def set_view(self, mode: ViewMode | str) -> asyncio.Task:
        """
        Switch view and trigger a refresh.

        The sink is cleared immediately, before any data arrives. The refresh
        runs as a fire-and-forget task (returned for callers that want to
        await it); earlier refreshes keep running but can no longer render.
        Must be called from a running event loop.
        """
        self.mode = ViewMode.parse(mode)
        log.info(f"View switched to {self.mode.value}")
        # Supersede in-flight refreshes before the sink is cleared
        self._epoch += 1
        self._hide_all()
        return self._spawn_refresh()

    async def refresh(self) -> RefreshResult:
        """Fetch and render the current view."""
        self._epoch += 1
        epoch = self._epoch
        mode = self.mode
        log.info(f"Refreshing {mode.value} (epoch {epoch})")
        self._hide_all()

        try:
            if mode is ViewMode.CRYPTO:
                cards, series = await self._acquire_crypto()
            else:
                cards, series = await self._acquire_weather()
        except DashboardError as e:
            if not self.is_current(epoch):
                log.debug(f"Discarding failure from superseded epoch {epoch}: {e}")
                return RefreshResult(mode, epoch, error=e, stale=True)
            log.exception(f"Failed to load {mode.value} data")
            self.sink.show_error(ERROR_MESSAGES[mode])
            return RefreshResult(mode, epoch, error=e)

        if not self.is_current(epoch):
            log.debug(f"Discarding {mode.value} data from superseded epoch {epoch}")
            return RefreshResult(mode, epoch, tuple(cards), series, stale=True)

        self.sink.show_cards()
        handles = [self.sink.add_card(card) for card in cards]
        self._render_chart(series)
        await self._animate_cards(epoch, cards, handles)

        log.info(f"Rendered {len(cards)} {mode.value} cards (epoch {epoch})")
        return RefreshResult(mode, epoch, tuple(cards), series)

    # -------------------------------------------------------------------------
    # Timer
    # -------------------------------------------------------------------------

    def start(self, interval: Optional[float] = None) -> asyncio.Task:
        """Begin refreshing the current view every `interval` seconds (default from config)."""
        if self._timer is not None and not self._timer.done():
            raise RuntimeError("Refresh timer already running")
        interval = interval if interval is not None else self.refresh_interval
        self._timer = asyncio.get_running_loop().create_task(self._tick(interval))
        log.info(f"Auto refresh every {interval}s")
        return self._timer

    async def stop(self) -> None:
        """Cancel the refresh timer. In-flight refreshes are left to finish."""
        if self._timer is None:
            return
        self._timer.cancel()
        try:
            await self._timer
        except asyncio.CancelledError:
            pass
        self._timer = None
        log.info("Auto refresh stopped")

    async def run(self, interval: Optional[float] = None) -> None:
        """
        Show the current view, then keep it refreshed until cancelled.

        A refresh that dies with a control-flow exception (a BaseException
        that is not an Exception, e.g. a host asking the script to stop)
        halts the timer, and run() re-raises it.
        """
        self._halted = None
        self.set_view(self.mode)
        timer = self.start(interval)
        try:
            await timer
        except asyncio.CancelledError:
            if self._halted is not None:
                raise self._halted
            raise
        finally:
            await self.stop()

    async def _tick(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._spawn_refresh()

    # -------------------------------------------------------------------------
    # Acquisition
    # -------------------------------------------------------------------------

    async def _acquire_crypto(self) -> tuple[list[MetricCard], ChartSeries]:
        quotes = await asyncio.to_thread(self.crypto_client.get_quotes, self.assets)
        return crypto_cards(quotes), crypto_series(quotes)

    async def _acquire_weather(self) -> tuple[list[MetricCard], ChartSeries]:
        readings = await self.weather_client.fetch_all(self.cities)
        return weather_cards(readings), weather_series(readings)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _hide_all(self) -> None:
        self.sink.clear(self.loading_text)

    def _render_chart(self, series: ChartSeries) -> None:
        if self._chart is not None:
            self._chart.destroy()
            self._chart = None
        self._chart = self.sink.create_chart(series)

    async def _animate_cards(
        self, epoch: int, cards: list[MetricCard], handles: list[CardHandle]
    ) -> None:
        def still_current() -> bool:
            return self.is_current(epoch)

        animations = []
        for card, handle in zip(cards, handles):
            animations.append(
                self.animator.animate(
                    0,
                    card.primary_value,
                    lambda v, h=handle: h.set_field("primary", format_whole(v)),
                    still_current,
                )
            )
            if card.secondary_value is None:
                continue

            fmt = secondary_formatter(card)
            trend = secondary_trend(card)
            animations.append(
                self.animator.animate(
                    0,
                    card.secondary_value,
                    lambda v, h=handle, f=fmt, t=trend: h.set_field("secondary", f(v), t),
                    still_current,
                )
            )

        await asyncio.gather(*animations)

    def _spawn_refresh(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(self._on_refresh_done)
        return task

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if isinstance(exc, Exception):
            log.error("Refresh task failed", exc_info=exc)
            return
        log.info(f"Refresh halted by {type(exc).__name__}; stopping auto refresh")
        self._halted = exc
        if self._timer is not None:
            self._timer.cancel()
