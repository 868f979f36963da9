"""Ollama provider for local SLM inference."""

from __future__ import annotations

import logging

import httpx

from seed_scraper.config import Settings
from seed_scraper.providers.base import AIProvider

logger = logging.getLogger(__name__)


class OllamaProvider(AIProvider):
    name = "ollama"

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self._base_url = settings.ollama_base_url.rstrip("/")
        self._model = settings.ollama_model

    async def _chat(self, system: str, user: str, *, json_mode: bool = False, num_ctx: int = 8192) -> str:
        """Send a chat request to Ollama and return the response text."""
        payload: dict = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "stream": False,
            "options": {
                "temperature": self.settings.temperature,
                "num_ctx": num_ctx,
            },
        }
        if json_mode:
            payload["format"] = "json"

        async with httpx.AsyncClient(timeout=self.settings.ai_timeout) as client:
            response = await client.post(f"{self._base_url}/api/chat", json=payload)
            response.raise_for_status()

        return response.json().get("message", {}).get("content", "")
