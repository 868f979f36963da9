"""Centralized configuration loaded from .env."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    # AI structured extractor; empty = stage disabled
    extractor_provider: str = "gemini"
    temperature: float = 0.0

    # Gemini config (matches the vendor-page prompt, large context)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: str = ""
    claude_model: str = "claude-haiku-4-5-20251001"

    # Groq config (OpenAI-compatible)
    groq_api_key: str = ""
    groq_model: str = "llama-3.1-8b-instant"

    # Ollama config
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "phi4-mini"

    # Web-search fallback (Tavily); empty = stage disabled
    tavily_api_key: str = ""
    search_region: str = "Zone 10b (Vista, CA)"

    # Timeouts in seconds
    scrape_timeout: float = 15.0
    fetch_timeout: float = 15.0
    ai_timeout: float = 12.0
    search_timeout: float = 10.0
    image_probe_timeout: float = 5.0

    # Image storage/proxy collaborator, used only to verify images
    image_proxy_url: str = ""

    @classmethod
    def from_env(cls) -> Settings:
        _load_env()
        gemini_key = os.getenv("GEMINI_API_KEY", "") or os.getenv(
            "GOOGLE_GENERATIVE_AI_API_KEY", ""
        )
        return cls(
            extractor_provider=os.getenv("EXTRACTOR_PROVIDER", "gemini").strip(),
            gemini_api_key=gemini_key.strip(),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            claude_model=os.getenv("CLAUDE_MODEL", "claude-haiku-4-5-20251001"),
            groq_api_key=os.getenv("GROQ_API_KEY", ""),
            groq_model=os.getenv("GROQ_MODEL", "llama-3.1-8b-instant"),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
            ollama_model=os.getenv("OLLAMA_MODEL", "phi4-mini"),
            tavily_api_key=os.getenv("TAVILY_API_KEY", "").strip(),
            search_region=os.getenv("SEARCH_REGION", "Zone 10b (Vista, CA)"),
            scrape_timeout=_float_env("SCRAPE_TIMEOUT", 15.0),
            fetch_timeout=_float_env("FETCH_TIMEOUT", 15.0),
            ai_timeout=_float_env("AI_TIMEOUT", 12.0),
            search_timeout=_float_env("SEARCH_TIMEOUT", 10.0),
            image_probe_timeout=_float_env("IMAGE_PROBE_TIMEOUT", 5.0),
            image_proxy_url=os.getenv("IMAGE_PROXY_URL", "").strip(),
        )
