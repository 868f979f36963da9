"""Provider registry and factory with lazy imports."""

from __future__ import annotations

import importlib

from seed_scraper.config import Settings
from seed_scraper.providers.base import AIProvider

_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "seed_scraper.providers.openai.OpenAIProvider",
    "anthropic": "seed_scraper.providers.anthropic.AnthropicProvider",
    "ollama": "seed_scraper.providers.ollama.OllamaProvider",
    "groq": "seed_scraper.providers.groq.GroqProvider",
    "gemini": "seed_scraper.providers.gemini.GeminiProvider",
}


def get_provider(name: str, settings: Settings) -> AIProvider:
    """Instantiate an AI provider by name. Uses lazy imports."""
    if name not in _PROVIDER_REGISTRY:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        raise ValueError(f"Unknown provider '{name}'. Available: {available}")

    module_path, class_name = _PROVIDER_REGISTRY[name].rsplit(".", 1)
    module = importlib.import_module(module_path)
    provider_class = getattr(module, class_name)
    return provider_class(settings)


def list_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)
