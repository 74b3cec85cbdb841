"""Plain-text rendering of dashboard data."""
from __future__ import annotations

import sys
from typing import Sequence, TextIO

from ..models import CoinPrice, LeaderboardSnapshot, Trader
from ..services.queries import top_gainers


class ConsoleView:
    """Write leaderboard, ticker and trader detail to a text stream."""

    def __init__(self, stream: TextIO | None = None, limit: int = 20) -> None:
        self._stream = stream or sys.stdout
        self._limit = limit

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _format_address(address: str) -> str:
        if len(address) > 16:
            return f"{address[:8]}...{address[-6:]}"
        return address

    @staticmethod
    def _format_usd(value: float) -> str:
        sign = "-" if value < 0 else ""
        value = abs(value)
        if value >= 1_000_000:
            return f"{sign}${value / 1_000_000:.2f}M"
        if value >= 1_000:
            return f"{sign}${value / 1_000:.1f}k"
        return f"{sign}${value:.2f}"

    @staticmethod
    def _format_price(price: float) -> str:
        return f"${price:,.4f}" if price < 1 else f"${price:,.2f}"

    @staticmethod
    def _signed_pct(value: float) -> str:
        return f"{value:+.2f}%"

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

    # ------------------------------------------------------------------
    # Renderers
    # ------------------------------------------------------------------

    def render_leaderboard(
        self, snapshot: LeaderboardSnapshot, traders: Sequence[Trader] | None = None
    ) -> str:
        """Header metrics, spotlight and the leaderboard table."""
        metrics = snapshot.metrics
        tr = snapshot.time_range.value
        rows = list(traders if traders is not None else snapshot.traders)

        lines = [
            f"━━ HyperPulse Leaderboard ({tr}) ━━",
            f"Total volume: {self._format_usd(metrics.total_volume)}"
            f" · Avg ROI ({tr}): {self._signed_pct(metrics.average_roi)}",
            f"Longs {metrics.long_percentage:.1f}% · Shorts {metrics.short_percentage:.1f}%",
        ]
        if metrics.top_traded_coins:
            coins = ", ".join(
                f"{c.name} {self._format_usd(c.value)}" for c in metrics.top_traded_coins
            )
            lines.append(f"Top coins: {coins}")

        spotlight = top_gainers(snapshot.traders)
        if spotlight:
            lines.append("")
            lines.append(f"Spotlight ({tr}):")
            for t in spotlight:
                lines.append(
                    f"  #{t.rank} {self._format_address(t.address)}"
                    f" {t.roi:+.0f}% · Profit {self._format_usd(t.pnl)}"
                )

        lines.append("")
        lines.append(
            f"{'Rank':>4}  {'Trader':<20} {'PnL':>10} {'ROI':>9} {'Win':>7} {'Pos':>3}  Tags"
        )
        for t in rows[: self._limit]:
            lines.append(
                f"{t.rank:>4}  {self._format_address(t.address):<20}"
                f" {self._format_usd(t.pnl):>10} {self._signed_pct(t.roi):>9}"
                f" {t.win_rate:>6.1f}% {len(t.positions):>3}  {', '.join(t.tags)}"
            )
        if len(rows) > self._limit:
            lines.append(f"… {len(rows) - self._limit} more")
        if not rows:
            lines.append("No traders match.")
        return "\n".join(lines)

    def render_ticker(self, prices: Sequence[CoinPrice]) -> str:
        return "  ".join(
            f"{p.symbol} {self._format_price(p.price)} ({p.change_24h:+.2f}%)"
            for p in prices
        )

    def render_trader(self, trader: Trader) -> str:
        """Account summary and open positions for one trader."""
        lines = [
            f"━━ Rank #{trader.rank} · {trader.address} ━━",
            f"Tags: {', '.join(trader.tags)} · Risk score: {trader.risk_score}/10",
            f"Equity: ${trader.total_account_value:,.2f} · PnL: {self._format_usd(trader.pnl)}"
            f" · ROI: {self._signed_pct(trader.roi)}",
            f"Win rate: {trader.win_rate:.2f}% · Trades: {trader.total_trades}"
            f" · Sharpe: {trader.sharpe_ratio:.2f} · Max DD: -{trader.max_drawdown:.2f}%",
            f"Positions: {trader.long_count} long / {trader.short_count} short"
            f" · Avg leverage: {trader.average_leverage:.1f}x",
        ]
        for p in trader.positions:
            lines.append(
                f"  {p.side.value:<5} {p.coin:<5} {p.leverage:>2}x"
                f"  entry {self._format_price(p.entry_price)}"
                f"  mark {self._format_price(p.mark_price)}"
                f"  margin {self._format_usd(p.margin_used)}"
                f"  PnL {self._format_usd(p.pnl)}"
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # DashboardView
    # ------------------------------------------------------------------

    def show_leaderboard(self, snapshot: LeaderboardSnapshot) -> None:
        self._write(self.render_leaderboard(snapshot))

    def show_ticker(self, prices: Sequence[CoinPrice]) -> None:
        self._write(self.render_ticker(prices))

    def show_trader(self, trader: Trader, analysis: str = "") -> None:
        text = self.render_trader(trader)
        if analysis:
            text += "\n\n" + analysis.strip()
        self._write(text)
