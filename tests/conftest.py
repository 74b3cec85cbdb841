"""Shared test fixtures and sample data."""
from __future__ import annotations

import random
import textwrap
from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from hyperpulse.config import (
    AnalystConfig,
    AppConfig,
    LeaderboardConfig,
    MarketConfig,
    TickerConfig,
)
from hyperpulse.generator import LeaderboardGenerator
from hyperpulse.models import Position, Side, TimeRange, Trader


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        leaderboard=LeaderboardConfig(
            trader_count=10,
            time_range=TimeRange.D30,
            refresh_seconds=30.0,
            seed=7,
        ),
        ticker=TickerConfig(refresh_seconds=2.0),
        market=MarketConfig(),
        analyst=AnalystConfig(api_key="fake-key"),
    )


# ---------------------------------------------------------------------------
# Generator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def report_date() -> date:
    return date(2024, 3, 15)


@pytest.fixture()
def seeded_generator(report_date: date) -> LeaderboardGenerator:
    return LeaderboardGenerator(rng=random.Random(42), today=report_date)


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_position() -> Callable[..., Position]:
    def _make(
        coin: str = "BTC",
        side: Side = Side.LONG,
        size: float = 1.0,
        entry_price: float = 100.0,
        mark_price: float = 110.0,
        leverage: int = 5,
    ) -> Position:
        size_usd = size * entry_price
        return Position(
            coin=coin,
            size=size,
            entry_price=entry_price,
            mark_price=mark_price,
            pnl=size_usd * side.sign * (mark_price - entry_price) / entry_price,
            leverage=leverage,
            side=side,
            margin_used=size_usd / leverage,
        )

    return _make


@pytest.fixture()
def make_trader() -> Callable[..., Trader]:
    def _make(
        rank: int = 1,
        address: str = "0x" + "ab" * 20,
        roi: float = 50.0,
        account_value: float = 100_000.0,
        positions: tuple[Position, ...] = (),
        tags: tuple[str, ...] = ("Trader",),
    ) -> Trader:
        return Trader(
            rank=rank,
            address=address,
            pnl=account_value * roi / 100,
            total_account_value=account_value,
            roi=roi,
            win_rate=60.0,
            total_trades=120,
            sharpe_ratio=2.1,
            risk_score=5,
            max_drawdown=12.5,
            tags=tags,
            positions=positions,
        )

    return _make


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    leaderboard:
      trader_count: 25
      time_range: 7d
      refresh_seconds: 45
      seed: 123
    ticker:
      refresh_seconds: 5
    market:
      base_prices: {BTC: 60000, ETH: 3000, HYPE: 20}
    analyst:
      api_key: "key-123"
      model: gemini-test
      base_url: "https://gemini.example.com/v1beta/"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
