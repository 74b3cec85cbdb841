"""Protocol interfaces for the leaderboard dashboard."""
from .analyst import StrategyAnalyst
from .view import DashboardView

__all__ = ["DashboardView", "StrategyAnalyst"]
