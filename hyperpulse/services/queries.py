"""Leaderboard lookups: spotlight, search and tag filter."""
from __future__ import annotations

from typing import Sequence

from ..models import Trader

ANY_TAG = "ALL"


def top_gainers(traders: Sequence[Trader], limit: int = 3) -> list[Trader]:
    """Traders with the highest PnL first."""
    return sorted(traders, key=lambda t: t.pnl, reverse=True)[: max(limit, 0)]


def filter_traders(
    traders: Sequence[Trader], search: str = "", tag: str | None = None
) -> list[Trader]:
    """Address substring match and tag membership, both case-insensitive."""
    needle = search.strip().lower()
    wanted = (tag or ANY_TAG).upper()

    def matches(t: Trader) -> bool:
        if needle and needle not in t.address.lower():
            return False
        if wanted != ANY_TAG and not any(x.upper() == wanted for x in t.tags):
            return False
        return True

    return [t for t in traders if matches(t)]


def find_trader(traders: Sequence[Trader], key: str | int) -> Trader | None:
    """Look a trader up by rank (``"3"`` or ``3``) or by full address."""
    text = str(key).strip().lower()
    if text.isdigit():
        rank = int(text)
        return next((t for t in traders if t.rank == rank), None)
    return next((t for t in traders if t.address.lower() == text), None)
