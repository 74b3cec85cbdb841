"""Dashboard orchestration — owns the refresh timers and the current snapshot."""
from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Callable

from ..analysis import GeminiAnalyst
from ..config import AppConfig
from ..generator import LeaderboardGenerator, TickerGenerator
from ..interfaces.analyst import StrategyAnalyst
from ..interfaces.view import DashboardView
from ..models import CoinPrice, LeaderboardSnapshot, TimeRange
from .metrics import compute_global_metrics
from .queries import find_trader

logger = logging.getLogger(__name__)

UNKNOWN_TRADER_MESSAGE = "Trader not found on the current leaderboard."


class Dashboard:
    """Builds leaderboard and ticker data and publishes it to a view.

    The leaderboard and the ticker refresh on independent timers; neither
    loop reads state the other writes.
    """

    def __init__(
        self,
        config: AppConfig,
        view: DashboardView,
        generator: LeaderboardGenerator | None = None,
        ticker: TickerGenerator | None = None,
        analyst: StrategyAnalyst | None = None,
    ) -> None:
        self._config = config
        self._view = view

        seed = config.leaderboard.seed
        base_prices = config.market.base_prices
        self._generator = generator or LeaderboardGenerator(
            rng=random.Random(seed), base_prices=base_prices
        )
        self._ticker = ticker or TickerGenerator(
            rng=random.Random(seed), base_prices=base_prices
        )
        self._analyst: StrategyAnalyst = analyst or GeminiAnalyst(config.analyst)

        self._time_range = config.leaderboard.time_range
        self._snapshot: LeaderboardSnapshot | None = None

    @property
    def time_range(self) -> TimeRange:
        return self._time_range

    @property
    def snapshot(self) -> LeaderboardSnapshot | None:
        return self._snapshot

    # ------------------------------------------------------------------
    # Refresh operations
    # ------------------------------------------------------------------

    def refresh_leaderboard(
        self, time_range: TimeRange | str | None = None, publish: bool = True
    ) -> LeaderboardSnapshot:
        """Regenerate traders and metrics, publish and return the snapshot."""
        if time_range is not None:
            self._time_range = TimeRange.parse(time_range)

        traders = self._generator.build_leaderboard(
            self._config.leaderboard.trader_count, self._time_range
        )
        snapshot = LeaderboardSnapshot(
            time_range=self._time_range,
            traders=tuple(traders),
            metrics=compute_global_metrics(traders),
            generated_at=datetime.now(timezone.utc),
        )
        self._snapshot = snapshot

        logger.info(
            "Leaderboard refreshed — %s · %d traders · avg ROI %.2f%%",
            snapshot.time_range.value,
            len(snapshot.traders),
            snapshot.metrics.average_roi,
        )
        if publish:
            self._view.show_leaderboard(snapshot)
        return snapshot

    def set_time_range(self, time_range: TimeRange | str) -> LeaderboardSnapshot:
        return self.refresh_leaderboard(time_range)

    def refresh_ticker(self) -> list[CoinPrice]:
        prices = self._ticker.build_market_ticker()
        logger.debug("Ticker refreshed — %d instruments", len(prices))
        self._view.show_ticker(prices)
        return prices

    async def analyze(self, key: str | int) -> str:
        """Run strategy analysis for a trader in the current snapshot."""
        if self._snapshot is None:
            self.refresh_leaderboard(publish=False)
        trader = find_trader(self._snapshot.traders, key)
        if trader is None:
            logger.warning("No trader matching '%s'", key)
            return UNKNOWN_TRADER_MESSAGE
        return await self._analyst.analyze(trader)

    # ------------------------------------------------------------------
    # Scheduled refresh
    # ------------------------------------------------------------------

    @staticmethod
    async def _run_every(name: str, action: Callable[[], object], interval: float) -> None:
        while True:
            try:
                action()
            except Exception as e:
                logger.error("Error refreshing %s: %s", name, e)
            await asyncio.sleep(interval)

    async def run_continuous(
        self,
        leaderboard_interval: float | None = None,
        ticker_interval: float | None = None,
    ) -> None:
        """Refresh the leaderboard and the ticker on their own cadences."""
        lb_interval = leaderboard_interval or self._config.leaderboard.refresh_seconds
        tk_interval = ticker_interval or self._config.ticker.refresh_seconds
        logger.info(
            "Starting live dashboard (leaderboard every %.0fs, ticker every %.0fs)",
            lb_interval,
            tk_interval,
        )

        await asyncio.gather(
            self._run_every("leaderboard", self.refresh_leaderboard, lb_interval),
            self._run_every("ticker", self.refresh_ticker, tk_interval),
        )
