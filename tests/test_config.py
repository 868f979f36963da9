"""Tests for seed_scraper.config module."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from seed_scraper.config import Settings


class TestSettings:
    def test_default_values(self):
        s = Settings()
        assert s.extractor_provider == "gemini"
        assert s.temperature == 0.0
        assert s.gemini_api_key == ""
        assert s.gemini_model == "gemini-2.5-flash"
        assert s.openai_model == "gpt-4o-mini"
        assert s.claude_model == "claude-haiku-4-5-20251001"
        assert s.groq_model == "llama-3.1-8b-instant"
        assert s.ollama_base_url == "http://localhost:11434"
        assert s.ollama_model == "phi4-mini"
        assert s.tavily_api_key == ""
        assert s.search_region == "Zone 10b (Vista, CA)"
        assert s.image_proxy_url == ""

    def test_timeout_defaults(self):
        s = Settings()
        assert s.scrape_timeout == 15.0
        assert s.fetch_timeout == 15.0
        assert s.ai_timeout == 12.0
        assert s.search_timeout == 10.0
        assert s.image_probe_timeout == 5.0

    def test_frozen_dataclass(self):
        s = Settings()
        with pytest.raises(AttributeError):
            s.tavily_api_key = "new-key"  # type: ignore[misc]

    def test_from_env_reads_env_vars(self):
        env = {
            "EXTRACTOR_PROVIDER": "anthropic",
            "ANTHROPIC_API_KEY": "my-anthropic-key",
            "CLAUDE_MODEL": "claude-sonnet-4-20250514",
            "OPENAI_API_KEY": "my-openai-key",
            "GROQ_API_KEY": "my-groq-key",
            "OLLAMA_BASE_URL": "http://myhost:11434",
            "TAVILY_API_KEY": " my-tavily-key ",
            "SEARCH_REGION": "Zone 9a",
            "SCRAPE_TIMEOUT": "20",
            "IMAGE_PROXY_URL": "https://img.example.com/proxy",
        }
        with patch.dict("os.environ", env, clear=True), \
             patch("seed_scraper.config.load_dotenv"):
            s = Settings.from_env()
            assert s.extractor_provider == "anthropic"
            assert s.anthropic_api_key == "my-anthropic-key"
            assert s.claude_model == "claude-sonnet-4-20250514"
            assert s.openai_api_key == "my-openai-key"
            assert s.groq_api_key == "my-groq-key"
            assert s.ollama_base_url == "http://myhost:11434"
            assert s.tavily_api_key == "my-tavily-key"
            assert s.search_region == "Zone 9a"
            assert s.scrape_timeout == 20.0
            assert s.image_proxy_url == "https://img.example.com/proxy"

    def test_from_env_defaults_when_unset(self):
        with patch.dict("os.environ", {}, clear=True), \
             patch("seed_scraper.config.load_dotenv"):
            s = Settings.from_env()
            assert s.extractor_provider == "gemini"
            assert s.gemini_api_key == ""
            assert s.tavily_api_key == ""
            assert s.scrape_timeout == 15.0

    def test_google_key_alias(self):
        env = {"GOOGLE_GENERATIVE_AI_API_KEY": "google-key"}
        with patch.dict("os.environ", env, clear=True), \
             patch("seed_scraper.config.load_dotenv"):
            assert Settings.from_env().gemini_api_key == "google-key"

    def test_gemini_key_wins_over_alias(self):
        env = {"GEMINI_API_KEY": "gemini-key", "GOOGLE_GENERATIVE_AI_API_KEY": "google-key"}
        with patch.dict("os.environ", env, clear=True), \
             patch("seed_scraper.config.load_dotenv"):
            assert Settings.from_env().gemini_api_key == "gemini-key"

    def test_empty_extractor_provider_disables_stage(self):
        with patch.dict("os.environ", {"EXTRACTOR_PROVIDER": ""}, clear=True), \
             patch("seed_scraper.config.load_dotenv"):
            assert Settings.from_env().extractor_provider == ""

    def test_invalid_timeout_names_variable(self):
        with (
            patch.dict("os.environ", {"FETCH_TIMEOUT": "soon"}, clear=True),
            patch("seed_scraper.config.load_dotenv"),
            pytest.raises(ValueError, match="FETCH_TIMEOUT must be a number"),
        ):
            Settings.from_env()

    def test_non_positive_timeout_rejected(self):
        with (
            patch.dict("os.environ", {"SEARCH_TIMEOUT": "0"}, clear=True),
            patch("seed_scraper.config.load_dotenv"),
            pytest.raises(ValueError, match="SEARCH_TIMEOUT must be positive"),
        ):
            Settings.from_env()
