"""Synthetic leaderboard generation."""
from __future__ import annotations

import logging
import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import Mapping

from ..config import DEFAULT_BASE_PRICES
from ..models import EquitySample, Position, Side, TimeRange, Trader
from .scoring import calculate_risk_score, classify_tags

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30
LONG_PROBABILITY = 0.55
RANK_DECAY = 0.005

ROI_RANGE = (-20.0, 300.0)
ACCOUNT_VALUE_RANGE = (10_000.0, 5_000_000.0)
POSITION_COUNT_RANGE = (1, 5)
LEVERAGE_RANGE = (1, 24)
MARGIN_FRACTION_RANGE = (0.05, 0.30)
ENTRY_JITTER = (0.95, 1.05)
MARK_JITTER = (0.98, 1.02)
WIN_RATE_RANGE = (40.0, 90.0)
DRAWDOWN_RANGE = (5.0, 35.0)
TRADES_RANGE = (50.0, 2000.0)
SHARPE_RANGE = (1.0, 4.0)
DAILY_CHANGE_RANGE = (-0.05, 0.08)


def rank_decay(index: int) -> float:
    """Linear skew toward larger returns for earlier ranks, floored at 0."""
    return max(0.0, 1.0 - RANK_DECAY * index)


class LeaderboardGenerator:
    """Build randomized but self-consistent trader records.

    Args:
        rng: Random source. Pass a seeded ``random.Random`` for reproducible
            output.
        base_prices: Reference price per instrument; its keys are the
            instrument set positions draw from.
        today: Reporting date used for equity history labels. Defaults to
            the current UTC date at generation time.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        base_prices: Mapping[str, float] | None = None,
        today: date | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._base_prices = dict(base_prices or DEFAULT_BASE_PRICES)
        self._coins = list(self._base_prices)
        self._today = today

    def _uniform(self, bounds: tuple[float, float]) -> float:
        return self._rng.uniform(*bounds)

    def _address(self) -> str:
        return "0x" + "".join(self._rng.choice("0123456789abcdef") for _ in range(40))

    def build_positions(self, account_value: float) -> list[Position]:
        """Generate 1-5 open positions sized against ``account_value``."""
        positions: list[Position] = []
        for _ in range(self._rng.randint(*POSITION_COUNT_RANGE)):
            coin = self._rng.choice(self._coins)
            side = Side.LONG if self._rng.random() < LONG_PROBABILITY else Side.SHORT
            leverage = self._rng.randint(*LEVERAGE_RANGE)
            margin_used = account_value * self._uniform(MARGIN_FRACTION_RANGE)
            size_usd = margin_used * leverage

            base_price = self._base_prices[coin]
            entry_price = base_price * self._uniform(ENTRY_JITTER)
            mark_price = base_price * self._uniform(MARK_JITTER)

            price_diff = (mark_price - entry_price) / entry_price
            positions.append(
                Position(
                    coin=coin,
                    size=size_usd / entry_price,
                    entry_price=entry_price,
                    mark_price=mark_price,
                    pnl=size_usd * side.sign * price_diff,
                    leverage=leverage,
                    side=side,
                    margin_used=margin_used,
                )
            )
        return positions

    def build_history(self, start_equity: float) -> list[EquitySample]:
        """Walk equity forward from ``start_equity`` over the last 30 days."""
        today = self._today or datetime.now(timezone.utc).date()
        history: list[EquitySample] = []
        equity = start_equity
        for i in range(HISTORY_DAYS):
            day = today - timedelta(days=HISTORY_DAYS - i)
            change = equity * self._uniform(DAILY_CHANGE_RANGE)
            equity += change
            history.append(
                EquitySample(date=f"{day:%b} {day.day}", pnl=change, equity=equity)
            )
        return history

    def build_trader(self, index: int, time_range: TimeRange) -> Trader:
        """Generate the trader at zero-based ``index`` (rank ``index + 1``)."""
        multiplier = time_range.multiplier

        roi = self._uniform(ROI_RANGE) * rank_decay(index) * multiplier
        account_value = self._uniform(ACCOUNT_VALUE_RANGE)
        pnl = account_value * (roi / 100)
        positions = self.build_positions(account_value)

        avg_leverage = (
            sum(p.leverage for p in positions) / len(positions) if positions else 1.0
        )
        win_rate = self._uniform(WIN_RATE_RANGE)
        max_drawdown = self._uniform(DRAWDOWN_RANGE)

        return Trader(
            rank=index + 1,
            address=self._address(),
            pnl=pnl,
            total_account_value=account_value,
            roi=roi,
            win_rate=win_rate,
            total_trades=math.floor(self._uniform(TRADES_RANGE) * max(multiplier, 1.0)),
            sharpe_ratio=self._uniform(SHARPE_RANGE),
            risk_score=calculate_risk_score(avg_leverage, win_rate, max_drawdown),
            max_drawdown=max_drawdown,
            tags=classify_tags(avg_leverage, roi, account_value, multiplier),
            positions=tuple(positions),
            history=tuple(self.build_history(account_value - pnl)),
        )

    def build_leaderboard(
        self, count: int = 100, time_range: TimeRange | str = TimeRange.D30
    ) -> list[Trader]:
        """Generate ``count`` traders in rank order. ``count <= 0`` yields []."""
        time_range = TimeRange.parse(time_range)
        if count <= 0:
            return []
        if count > 200:
            logger.debug(
                "Rank decay reaches zero past rank 200; %d traders will report 0%% ROI",
                count - 200,
            )
        traders = [self.build_trader(i, time_range) for i in range(count)]
        logger.debug("Generated %d traders for %s", len(traders), time_range.value)
        return traders
