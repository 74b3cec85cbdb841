"""Trader classification rules — risk score and tags."""
from __future__ import annotations

WHALE_ACCOUNT_VALUE = 1_000_000.0
DEGEN_LEVERAGE = 15.0
SAFE_LEVERAGE = 3.0
ALPHA_MONTHLY_ROI = 100.0
MAX_TAGS = 2


def calculate_risk_score(leverage: float, win_rate: float, drawdown: float) -> int:
    """Additive 1-10 risk score from leverage, win rate and drawdown."""
    score = 5
    if leverage > 15:
        score += 3
    elif leverage > 5:
        score += 1

    if win_rate < 45:
        score += 2
    if drawdown > 20:
        score += 2

    return min(10, max(1, score))


def classify_tags(
    avg_leverage: float,
    roi: float,
    account_value: float,
    multiplier: float,
) -> tuple[str, ...]:
    """Return one or two labels in evaluation order.

    The Alpha threshold scales with the reporting window multiplier.
    """
    tags: list[str] = []
    if avg_leverage > DEGEN_LEVERAGE:
        tags.append("Degen")
    elif avg_leverage < SAFE_LEVERAGE:
        tags.append("Safe")

    if roi > ALPHA_MONTHLY_ROI * multiplier:
        tags.append("Alpha")
    if account_value > WHALE_ACCOUNT_VALUE:
        tags.append("Whale")
    if not tags:
        tags.append("Trader")

    return tuple(tags[:MAX_TAGS])
