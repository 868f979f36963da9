"""Groq provider via its OpenAI-compatible API."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from seed_scraper.config import Settings
from seed_scraper.providers.base import AIProvider

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqProvider(AIProvider):
    name = "groq"

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        if not settings.groq_api_key:
            raise ValueError("GROQ_API_KEY is required for the Groq provider")
        self._client = AsyncOpenAI(
            api_key=settings.groq_api_key,
            base_url=GROQ_BASE_URL,
        )
        self._model = settings.groq_model

    async def _chat(self, system: str, user: str, *, json_mode: bool = False) -> str:
        """Send a chat request to Groq and return the response text."""
        kwargs: dict = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": self.settings.temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""
