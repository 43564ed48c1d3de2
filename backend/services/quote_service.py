"""
quote_service.py - Motivational quotes
Stateless wrapper around the ZenQuotes random-quote endpoint.
"""
import logging

import httpx

from config import QUOTE_API_URL, QUOTE_API_TIMEOUT
from errors import UpstreamError

logger = logging.getLogger(__name__)


class QuoteService:

    def __init__(self, url: str = QUOTE_API_URL, timeout: float = QUOTE_API_TIMEOUT,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def random_quote(self) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, headers={"User-Agent": "HabitTracker/1.0"})
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Quote API request failed: {e}")
            raise UpstreamError("Failed to fetch motivation quote")

        try:
            quotes = response.json()
            first = quotes[0]
            return {
                "quote": first["q"],
                "author": first["a"],
                "category": "Motivation",
            }
        except (ValueError, LookupError, TypeError) as e:
            logger.warning(f"Quote API returned an unexpected payload: {e}")
            raise UpstreamError("Failed to decode motivation quote")


def get_quote_service() -> QuoteService:
    """FastAPI dependency, overridable in tests."""
    return QuoteService()
