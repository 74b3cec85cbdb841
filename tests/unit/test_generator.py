"""Unit tests for leaderboard and ticker generation."""
from __future__ import annotations

import random
import re
from datetime import date

import pytest

from hyperpulse.config import DEFAULT_BASE_PRICES
from hyperpulse.generator import LeaderboardGenerator, TickerGenerator
from hyperpulse.generator.leaderboard import HISTORY_DAYS, rank_decay
from hyperpulse.models import Side, TimeRange

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")
_TAGS = {"Whale", "Degen", "Safe", "Alpha", "Trader"}


class _FixedBaselineRandom(random.Random):
    """Random source whose baseline ROI draw is always ``baseline``."""

    def __init__(self, baseline: float) -> None:
        super().__init__(0)
        self.baseline = baseline

    def uniform(self, a: float, b: float) -> float:
        if (a, b) == (-20.0, 300.0):
            return self.baseline
        return super().uniform(a, b)


@pytest.fixture(scope="module")
def leaderboard():
    gen = LeaderboardGenerator(rng=random.Random(1), today=date(2024, 3, 15))
    return gen.build_leaderboard(150, TimeRange.D30)


class TestBuildLeaderboard:
    @pytest.mark.parametrize("count", [1, 2, 17, 100])
    def test_exact_count_and_ranks(
        self, seeded_generator: LeaderboardGenerator, count: int
    ) -> None:
        traders = seeded_generator.build_leaderboard(count, "24H")
        assert len(traders) == count
        assert [t.rank for t in traders] == list(range(1, count + 1))

    @pytest.mark.parametrize("count", [0, -1, -50])
    def test_non_positive_count_is_empty(
        self, seeded_generator: LeaderboardGenerator, count: int
    ) -> None:
        assert seeded_generator.build_leaderboard(count, TimeRange.ALL) == []

    def test_first_rank_is_one(self, seeded_generator: LeaderboardGenerator) -> None:
        assert seeded_generator.build_leaderboard(1, "24H")[0].rank == 1

    def test_seeded_output_is_reproducible(self, report_date: date) -> None:
        a = LeaderboardGenerator(rng=random.Random(99), today=report_date)
        b = LeaderboardGenerator(rng=random.Random(99), today=report_date)
        assert a.build_leaderboard(20, "7D") == b.build_leaderboard(20, "7D")

    def test_unknown_time_range_raises(
        self, seeded_generator: LeaderboardGenerator
    ) -> None:
        with pytest.raises(ValueError):
            seeded_generator.build_leaderboard(5, "1Y")

    def test_trader_pnl_matches_roi(self, leaderboard) -> None:
        for t in leaderboard:
            assert t.pnl == pytest.approx(t.total_account_value * t.roi / 100)

    def test_account_value_and_stats_ranges(self, leaderboard) -> None:
        for t in leaderboard:
            assert 10_000 <= t.total_account_value <= 5_000_000
            assert 40 <= t.win_rate <= 90
            assert 5 <= t.max_drawdown <= 35
            assert 1 <= t.sharpe_ratio <= 4
            assert 50 <= t.total_trades <= 2000

    def test_roi_range_respects_decay(self, leaderboard) -> None:
        for i, t in enumerate(leaderboard):
            decay = rank_decay(i)
            assert -20 * decay - 1e-9 <= t.roi <= 300 * decay + 1e-9

    def test_addresses(self, leaderboard) -> None:
        for t in leaderboard:
            assert _ADDRESS_RE.match(t.address)

    def test_tags(self, leaderboard) -> None:
        for t in leaderboard:
            assert 1 <= len(t.tags) <= 2
            assert set(t.tags) <= _TAGS

    def test_risk_score(self, leaderboard) -> None:
        for t in leaderboard:
            assert isinstance(t.risk_score, int)
            assert 1 <= t.risk_score <= 10

    def test_positions(self, leaderboard) -> None:
        for t in leaderboard:
            assert 1 <= len(t.positions) <= 5
            for p in t.positions:
                base = DEFAULT_BASE_PRICES[p.coin]
                assert 1 <= p.leverage <= 24
                assert base * 0.95 <= p.entry_price <= base * 1.05
                assert base * 0.98 <= p.mark_price <= base * 1.02
                assert (
                    t.total_account_value * 0.05
                    <= p.margin_used
                    <= t.total_account_value * 0.30
                )
                assert p.size_usd == pytest.approx(p.margin_used * p.leverage)
                expected = p.size_usd * p.side.sign * (p.mark_price - p.entry_price) / p.entry_price
                assert p.pnl == pytest.approx(expected)

    def test_both_sides_appear(self, leaderboard) -> None:
        sides = {p.side for t in leaderboard for p in t.positions}
        assert sides == {Side.LONG, Side.SHORT}

    def test_history_chain(self, leaderboard) -> None:
        for t in leaderboard:
            assert len(t.history) == HISTORY_DAYS
            equity = t.total_account_value - t.pnl
            for sample in t.history:
                assert sample.equity == pytest.approx(equity + sample.pnl)
                equity = sample.equity

    def test_history_dates(self, leaderboard) -> None:
        labels = [s.date for s in leaderboard[0].history]
        assert labels[0] == "Feb 14"
        assert labels[-1] == "Mar 14"


class TestRoiScaling:
    def test_baseline_scaled_by_window(self, report_date: date) -> None:
        gen = LeaderboardGenerator(rng=_FixedBaselineRandom(200.0), today=report_date)
        trader = gen.build_trader(0, TimeRange.H24)
        assert trader.roi == pytest.approx(20.0)

    def test_rank_decay(self, report_date: date) -> None:
        gen = LeaderboardGenerator(rng=_FixedBaselineRandom(200.0), today=report_date)
        assert gen.build_trader(100, TimeRange.D30).roi == pytest.approx(100.0)

    @pytest.mark.parametrize("index", [200, 201, 350])
    def test_decay_is_clamped_at_zero(self, report_date: date, index: int) -> None:
        gen = LeaderboardGenerator(rng=_FixedBaselineRandom(200.0), today=report_date)
        trader = gen.build_trader(index, TimeRange.ALL)
        assert rank_decay(index) == 0.0
        assert trader.roi == 0.0
        assert trader.pnl == 0.0

    def test_alpha_tag_uses_scaled_threshold(self, report_date: date) -> None:
        gen = LeaderboardGenerator(rng=_FixedBaselineRandom(200.0), today=report_date)
        trader = gen.build_trader(0, TimeRange.YTD)
        assert trader.roi == pytest.approx(900.0)
        assert "Alpha" in trader.tags


class TestTickerGenerator:
    def test_one_price_per_instrument(self) -> None:
        prices = TickerGenerator(rng=random.Random(5)).build_market_ticker()
        assert [p.symbol for p in prices] == list(DEFAULT_BASE_PRICES)

    def test_price_and_change_ranges(self) -> None:
        prices = TickerGenerator(rng=random.Random(5)).build_market_ticker()
        for p in prices:
            base = DEFAULT_BASE_PRICES[p.symbol]
            assert base * 0.99 <= p.price <= base * 1.01
            assert -5 <= p.change_24h <= 5

    def test_custom_instrument_set(self) -> None:
        ticker = TickerGenerator(rng=random.Random(5), base_prices={"DOGE": 0.1})
        (price,) = ticker.build_market_ticker()
        assert price.symbol == "DOGE"

    def test_each_refresh_is_new(self) -> None:
        ticker = TickerGenerator(rng=random.Random(5))
        assert ticker.build_market_ticker() != ticker.build_market_ticker()
