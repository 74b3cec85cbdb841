"""Trader strategy analysis."""
from .gemini import GeminiAnalyst
from .prompt import build_position_summary, build_prompt

__all__ = ["GeminiAnalyst", "build_position_summary", "build_prompt"]
