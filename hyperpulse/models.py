"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TimeRange(str, Enum):
    """Reporting window; each maps to a multiplier on the monthly baseline."""

    H24 = "24H"
    D7 = "7D"
    D30 = "30D"
    YTD = "YTD"
    ALL = "ALL"

    @property
    def multiplier(self) -> float:
        return _TIME_MULTIPLIERS[self]

    @classmethod
    def parse(cls, value: str | TimeRange) -> TimeRange:
        """Case-insensitive lookup by label, e.g. ``"7d"`` -> ``TimeRange.D7``."""
        if isinstance(value, TimeRange):
            return value
        label = str(value).strip().upper()
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(f"Unknown time range '{value}'")


_TIME_MULTIPLIERS: dict[TimeRange, float] = {
    TimeRange.H24: 0.1,
    TimeRange.D7: 0.3,
    TimeRange.D30: 1.0,
    TimeRange.YTD: 4.5,
    TimeRange.ALL: 8.0,
}


class Side(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"

    @property
    def sign(self) -> int:
        return 1 if self is Side.LONG else -1


@dataclass(frozen=True)
class Position:
    """Single open perpetual position."""

    coin: str
    size: float
    entry_price: float
    mark_price: float
    pnl: float
    leverage: int
    side: Side
    margin_used: float

    @property
    def size_usd(self) -> float:
        """Notional at entry."""
        return self.size * self.entry_price

    @property
    def notional(self) -> float:
        """Notional at the current mark."""
        return self.size * self.mark_price


@dataclass(frozen=True)
class EquitySample:
    """One day of an account's equity curve."""

    date: str
    pnl: float
    equity: float


@dataclass(frozen=True)
class Trader:
    """Leaderboard entry with its positions and equity history."""

    rank: int
    address: str
    pnl: float
    total_account_value: float
    roi: float
    win_rate: float
    total_trades: int
    sharpe_ratio: float
    risk_score: int
    max_drawdown: float
    tags: tuple[str, ...] = ()
    positions: tuple[Position, ...] = ()
    history: tuple[EquitySample, ...] = ()

    @property
    def average_leverage(self) -> float:
        if not self.positions:
            return 1.0
        return sum(p.leverage for p in self.positions) / len(self.positions)

    @property
    def long_count(self) -> int:
        return sum(1 for p in self.positions if p.side is Side.LONG)

    @property
    def short_count(self) -> int:
        return sum(1 for p in self.positions if p.side is Side.SHORT)


@dataclass(frozen=True)
class CoinVolume:
    """Aggregated notional for one coin."""

    name: str
    value: float


@dataclass(frozen=True)
class GlobalMetrics:
    """Market-wide figures derived from a leaderboard."""

    total_volume: float
    average_roi: float
    long_percentage: float
    short_percentage: float
    top_traded_coins: tuple[CoinVolume, ...] = ()


@dataclass(frozen=True)
class CoinPrice:
    """Ticker entry."""

    symbol: str
    price: float
    change_24h: float


@dataclass(frozen=True)
class LeaderboardSnapshot:
    """One refresh of the leaderboard, ready for display."""

    time_range: TimeRange
    traders: tuple[Trader, ...]
    metrics: GlobalMetrics
    generated_at: datetime
