"""Service modules"""
from .dashboard import Dashboard
from .metrics import compute_global_metrics
from .queries import filter_traders, find_trader, top_gainers

__all__ = [
    "Dashboard",
    "compute_global_metrics",
    "filter_traders",
    "find_trader",
    "top_gainers",
]
