"""Prompt construction for trader strategy analysis."""
from __future__ import annotations

import textwrap

from ..models import Trader

NO_POSITIONS = "No active positions."

_PROMPT_TEMPLATE = textwrap.dedent("""\
    Act as a senior crypto derivatives analyst. Analyze this trader's portfolio on Hyperliquid.

    Stats:
    - ROI: {roi:.2f}%
    - Win Rate: {win_rate:.2f}%
    - Max Drawdown: {max_drawdown:.2f}%
    - Risk Score: {risk_score}/10
    - Total Equity: ${equity:,.2f}

    Current Positions:
    {positions}

    Task:
    Provide a specific, actionable analysis in markdown format.
    Structure the response exactly like this:

    **Archetype:** [e.g. Aggressive Scalper, Institutional Whale, Swing Trader]
    **Strengths:** [1-2 short sentences on what they do well]
    **Weaknesses:** [1-2 short sentences on risks/drawbacks]
    **Verdict:** [1 sentence conclusion]
""")


def build_position_summary(trader: Trader) -> str:
    """e.g. ``"LONG BTC (Lev: 10x, PnL: $1523), SHORT SOL (Lev: 3x, PnL: $-40)"``."""
    return ", ".join(
        f"{p.side.value} {p.coin} (Lev: {p.leverage}x, PnL: ${p.pnl:.0f})"
        for p in trader.positions
    )


def build_prompt(trader: Trader) -> str:
    return _PROMPT_TEMPLATE.format(
        roi=trader.roi,
        win_rate=trader.win_rate,
        max_drawdown=trader.max_drawdown,
        risk_score=trader.risk_score,
        equity=trader.total_account_value,
        positions=build_position_summary(trader) or NO_POSITIONS,
    )
