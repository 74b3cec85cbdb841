"""Strategy analyst protocol — narrative summary of a trader."""
from typing import Protocol

from ..models import Trader


class StrategyAnalyst(Protocol):
    """Abstract interface for text-generation backends."""

    async def analyze(self, trader: Trader) -> str: ...
