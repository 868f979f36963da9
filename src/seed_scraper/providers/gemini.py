"""Google Gemini provider."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from seed_scraper.config import Settings
from seed_scraper.providers.base import AIProvider

logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    name = "gemini"

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required for the Gemini provider")
        self._client = genai.Client(api_key=settings.gemini_api_key)
        self._model = settings.gemini_model

    async def _chat(self, system: str, user: str, *, json_mode: bool = False) -> str:
        """Send a request to Gemini and return the response text."""
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=self.settings.temperature,
        )
        if json_mode:
            config.response_mime_type = "application/json"

        response = await self._client.aio.models.generate_content(
            model=self._model,
            config=config,
            contents=user,
        )
        return response.text or ""
