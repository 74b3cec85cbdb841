"""Leaderboard aggregation."""
from __future__ import annotations

from typing import Sequence

from ..models import CoinVolume, GlobalMetrics, Side, Trader

TOP_COINS = 5


def compute_global_metrics(traders: Sequence[Trader]) -> GlobalMetrics:
    """Reduce a trader collection into market-wide figures.

    An empty collection reports an average ROI of 0.
    """
    total_longs = 0
    total_shorts = 0
    total_volume = 0.0
    total_roi = 0.0
    coin_volume: dict[str, float] = {}

    for trader in traders:
        total_roi += trader.roi
        for position in trader.positions:
            notional = position.notional
            total_volume += notional
            if position.side is Side.LONG:
                total_longs += 1
            else:
                total_shorts += 1
            coin_volume[position.coin] = coin_volume.get(position.coin, 0.0) + notional

    # sorted() is stable, so equal volumes keep first-seen order
    top_coins = sorted(coin_volume.items(), key=lambda item: item[1], reverse=True)

    total_positions = total_longs + total_shorts
    return GlobalMetrics(
        total_volume=total_volume,
        average_roi=total_roi / len(traders) if traders else 0.0,
        long_percentage=total_longs / total_positions * 100 if total_positions else 0.0,
        short_percentage=total_shorts / total_positions * 100 if total_positions else 0.0,
        top_traded_coins=tuple(
            CoinVolume(name=name, value=value) for name, value in top_coins[:TOP_COINS]
        ),
    )
