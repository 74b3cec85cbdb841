"""Dashboard view protocol — where refreshed data is published."""
from typing import Protocol, Sequence

from ..models import CoinPrice, LeaderboardSnapshot


class DashboardView(Protocol):
    """Abstract interface for presenting dashboard updates."""

    def show_leaderboard(self, snapshot: LeaderboardSnapshot) -> None: ...

    def show_ticker(self, prices: Sequence[CoinPrice]) -> None: ...
