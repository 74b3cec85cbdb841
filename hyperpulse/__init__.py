"""HyperPulse — synthetic perp trader leaderboard and analytics."""
