"""Anthropic Claude provider."""

from __future__ import annotations

import logging

import anthropic

from seed_scraper.config import Settings
from seed_scraper.providers.base import AIProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(AIProvider):
    name = "anthropic"

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        if not settings.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY is required for the Anthropic provider")
        self._client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)

    async def _chat(self, system: str, user: str, *, json_mode: bool = False) -> str:
        """Send a chat request to Anthropic and return the response text."""
        response = await self._client.messages.create(
            model=self.settings.claude_model,
            max_tokens=1024,
            system=system,
            messages=[{"role": "user", "content": user}],
            temperature=self.settings.temperature,
        )
        return response.content[0].text
