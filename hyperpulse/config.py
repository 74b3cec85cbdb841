"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import TimeRange

logger = logging.getLogger(__name__)

DEFAULT_BASE_PRICES: dict[str, float] = {
    "BTC": 65000.0,
    "ETH": 3200.0,
    "SOL": 145.0,
    "HYPE": 18.5,
    "ARB": 1.15,
    "SUI": 1.6,
    "TIA": 7.4,
    "WIF": 2.3,
    "PEPE": 1.05,
}

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeaderboardConfig:
    trader_count: int = 100
    time_range: TimeRange = TimeRange.D30
    refresh_seconds: float = 60.0
    seed: int | None = None


@dataclass(frozen=True)
class TickerConfig:
    refresh_seconds: float = 3.0


@dataclass(frozen=True)
class MarketConfig:
    base_prices: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_BASE_PRICES)
    )

    @property
    def coins(self) -> tuple[str, ...]:
        return tuple(self.base_prices)


@dataclass(frozen=True)
class AnalystConfig:
    api_key: str = ""
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class AppConfig:
    leaderboard: LeaderboardConfig = field(default_factory=LeaderboardConfig)
    ticker: TickerConfig = field(default_factory=TickerConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    analyst: AnalystConfig = field(default_factory=AnalystConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_leaderboard(raw: dict[str, Any]) -> LeaderboardConfig:
    seed = raw.get("seed")
    return LeaderboardConfig(
        trader_count=int(raw.get("trader_count", 100)),
        time_range=TimeRange.parse(raw.get("time_range", "30D")),
        refresh_seconds=float(raw.get("refresh_seconds", 60.0)),
        seed=int(seed) if seed not in (None, "") else None,
    )


def _build_ticker(raw: dict[str, Any]) -> TickerConfig:
    return TickerConfig(refresh_seconds=float(raw.get("refresh_seconds", 3.0)))


def _build_market(raw: dict[str, Any]) -> MarketConfig:
    prices = raw.get("base_prices")
    if prices is None:
        return MarketConfig()
    return MarketConfig(
        base_prices={str(coin): float(price) for coin, price in prices.items()}
    )


def _build_analyst(raw: dict[str, Any]) -> AnalystConfig:
    return AnalystConfig(
        api_key=raw.get("api_key", "") or "",
        model=raw.get("model", AnalystConfig.model),
        base_url=raw.get("base_url", AnalystConfig.base_url).rstrip("/"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        leaderboard=_build_leaderboard(raw.get("leaderboard") or {}),
        ticker=_build_ticker(raw.get("ticker") or {}),
        market=_build_market(raw.get("market") or {}),
        analyst=_build_analyst(raw.get("analyst") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.leaderboard.trader_count < 0:
        raise ValueError("leaderboard.trader_count must not be negative")
    if cfg.leaderboard.refresh_seconds <= 0:
        raise ValueError("leaderboard.refresh_seconds must be positive")
    if cfg.ticker.refresh_seconds <= 0:
        raise ValueError("ticker.refresh_seconds must be positive")

    if not cfg.market.base_prices:
        raise ValueError("At least one instrument must be configured")
    for coin, price in cfg.market.base_prices.items():
        if price <= 0:
            raise ValueError(f"Instrument '{coin}' has non-positive base price")
