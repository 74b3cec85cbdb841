"""Gemini text-generation client for trader strategy analysis."""
import logging
import ssl

import aiohttp
import certifi

from ..config import AnalystConfig
from ..models import Trader
from .prompt import build_prompt

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key missing. Cannot generate analysis."
FAILURE_MESSAGE = "AI Analysis failed due to network or rate limit issues."
EMPTY_MESSAGE = "Analysis unavailable."


def _extract_text(data: dict) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts", [])
    return "".join(part.get("text", "") for part in parts)


class GeminiAnalyst:
    """Ask Gemini for a narrative summary of a trader's style.

    ``analyze`` never raises: every failure maps to a fixed message.
    """

    def __init__(self, config: AnalystConfig) -> None:
        self.api_key = config.api_key
        self.model = config.model
        self.base_url = config.base_url

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def analyze(self, trader: Trader) -> str:
        if not self.api_key:
            logger.warning("Gemini API key not configured")
            return MISSING_KEY_MESSAGE

        payload = {"contents": [{"parts": [{"text": build_prompt(trader)}]}]}
        headers = {"x-goog-api-key": self.api_key}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.endpoint, json=payload, headers=headers
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Gemini analysis failed: HTTP %s", response.status
                        )
                        return FAILURE_MESSAGE

                    data = await response.json()
                    text = _extract_text(data)
        except Exception as e:
            logger.error("Gemini analysis error: %s", e)
            return FAILURE_MESSAGE

        logger.info("Strategy analysis received for rank #%d", trader.rank)
        return text or EMPTY_MESSAGE
