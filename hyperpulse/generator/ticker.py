"""Synthetic market ticker."""
from __future__ import annotations

import random
from typing import Mapping

from ..config import DEFAULT_BASE_PRICES
from ..models import CoinPrice

PRICE_JITTER = (0.99, 1.01)
CHANGE_RANGE = (-5.0, 5.0)


class TickerGenerator:
    """Produce one fresh CoinPrice per instrument on every call."""

    def __init__(
        self,
        rng: random.Random | None = None,
        base_prices: Mapping[str, float] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._base_prices = dict(base_prices or DEFAULT_BASE_PRICES)

    def build_market_ticker(self) -> list[CoinPrice]:
        return [
            CoinPrice(
                symbol=coin,
                price=base * self._rng.uniform(*PRICE_JITTER),
                change_24h=self._rng.uniform(*CHANGE_RANGE),
            )
            for coin, base in self._base_prices.items()
        ]
