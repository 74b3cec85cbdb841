"""Synthetic data generators."""
from .leaderboard import LeaderboardGenerator
from .scoring import calculate_risk_score, classify_tags
from .ticker import TickerGenerator

__all__ = [
    "LeaderboardGenerator",
    "TickerGenerator",
    "calculate_risk_score",
    "classify_tags",
]
