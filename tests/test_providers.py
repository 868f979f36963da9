"""Tests for provider registry and base class."""

from __future__ import annotations

import json
from dataclasses import replace
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.providers import get_provider, list_providers
from seed_scraper.providers.base import (
    EXTRACT_SYSTEM_PROMPT,
    MAX_BODY_CHARS,
    AIProvider,
    ExtractionError,
    build_page_text,
)


class TestProviderRegistry:
    def test_list_providers(self):
        providers = list_providers()
        assert "anthropic" in providers
        assert "openai" in providers
        assert "ollama" in providers
        assert "groq" in providers
        assert "gemini" in providers

    def test_list_providers_returns_sorted(self):
        providers = list_providers()
        assert providers == sorted(providers)

    def test_get_provider_unknown_raises(self, settings):
        with pytest.raises(ValueError, match="Unknown provider 'nonexistent'"):
            get_provider("nonexistent", settings)

    def test_get_provider_unknown_shows_available(self, settings):
        with pytest.raises(ValueError, match="Available:"):
            get_provider("bad", settings)

    def test_get_provider_ollama(self, settings):
        provider = get_provider("ollama", settings)
        assert provider.name == "ollama"
        assert isinstance(provider, AIProvider)

    @pytest.mark.parametrize("name", ["openai", "anthropic", "groq", "gemini"])
    def test_hosted_providers_construct_with_keys(self, name, provider_settings):
        provider = get_provider(name, provider_settings)
        assert provider.name == name

    @pytest.mark.parametrize(
        "name, key",
        [
            ("openai", "OPENAI_API_KEY"),
            ("anthropic", "ANTHROPIC_API_KEY"),
            ("groq", "GROQ_API_KEY"),
            ("gemini", "GEMINI_API_KEY"),
        ],
    )
    def test_missing_key_raises(self, name, key, settings):
        with pytest.raises(ValueError, match=key):
            get_provider(name, settings)


class TestBuildPageText:
    def test_title_description_and_body(self):
        text = build_page_text(
            "<html><script>x()</script><body><p>Sow in spring.</p></body></html>",
            Metadata(title="Cherokee Purple Tomato", description="Dusky fruit"),
        )
        assert text == "Cherokee Purple Tomato\n\nDusky fruit\n\nSow in spring."

    def test_body_truncated(self):
        text = build_page_text("<p>" + "a" * (MAX_BODY_CHARS + 500) + "</p>", None)
        assert len(text) == MAX_BODY_CHARS

    def test_empty(self):
        assert build_page_text("", Metadata()) == ""


class TestParseResponse:
    def test_valid_json(self, settings):
        provider = get_provider("ollama", settings)
        raw = json.dumps({
            "varietyName": "Cherokee Purple",
            "daysToMaturity": 80,
            "sowingDepth": "1/4 inch",
            "sunRequirements": "Full Sun",
        })
        result = provider._parse_response(raw)
        assert isinstance(result, ExtractionResult)
        assert result.variety_name == "Cherokee Purple"
        assert result.harvest_days == 80
        assert result.plant_spacing == "1/4 inch"
        assert result.sun == "Full Sun"

    def test_with_code_fences(self, settings):
        provider = get_provider("ollama", settings)
        raw = '```json\n{"varietyName": "Provider", "daysToMaturity": "50 days"}\n```'
        result = provider._parse_response(raw)
        assert result.variety_name == "Provider"
        assert result.harvest_days == 50

    def test_leading_prose_and_trailing_text(self, settings):
        provider = get_provider("ollama", settings)
        raw = 'Here you go: {"sunRequirements": "Part Shade"} Hope that helps!'
        assert provider._parse_response(raw).sun == "Part Shade"

    def test_empty_strings_and_zero_become_none(self, settings):
        provider = get_provider("ollama", settings)
        raw = json.dumps({"varietyName": "", "daysToMaturity": 0, "sowingDepth": "  ", "sunRequirements": ""})
        result = provider._parse_response(raw)
        assert result.variety_name is None
        assert result.harvest_days is None
        assert result.plant_spacing is None
        assert result.sun is None

    def test_boolean_maturity_ignored(self, settings):
        provider = get_provider("ollama", settings)
        assert provider._parse_response('{"daysToMaturity": true}').harvest_days is None

    def test_maturity_range_uses_midpoint(self, settings):
        provider = get_provider("ollama", settings)
        assert provider._parse_response('{"daysToMaturity": "75-90 days"}').harvest_days == 83

    def test_out_of_range_maturity_ignored(self, settings):
        provider = get_provider("ollama", settings)
        assert provider._parse_response('{"daysToMaturity": 7590}').harvest_days is None
        assert provider._parse_response('{"daysToMaturity": "400 days"}').harvest_days is None

    def test_invalid_json_raises(self, settings):
        provider = get_provider("ollama", settings)
        with pytest.raises(ExtractionError, match="Failed to parse"):
            provider._parse_response("not json at all")

    def test_broken_object_raises(self, settings):
        provider = get_provider("ollama", settings)
        with pytest.raises(ExtractionError, match="Failed to parse"):
            provider._parse_response('{"varietyName": ')


class TestExtract:
    @pytest.mark.asyncio
    async def test_sends_vendor_prompt(self, settings):
        provider = get_provider("ollama", settings)
        chat = AsyncMock(return_value='{"varietyName": "Cupani", "daysToMaturity": 75}')
        with patch.object(provider, "_chat", chat):
            result = await provider.extract("Sweet Pea Cupani page")
        assert result.variety_name == "Cupani"
        assert result.harvest_days == 75
        chat.assert_awaited_once_with(EXTRACT_SYSTEM_PROMPT, "Sweet Pea Cupani page", json_mode=True)

    @pytest.mark.asyncio
    async def test_blank_text_raises(self, settings):
        provider = get_provider("ollama", settings)
        with pytest.raises(ExtractionError, match="No page text"):
            await provider.extract("   ")

    @pytest.mark.asyncio
    async def test_request_failure_wrapped(self, settings):
        provider = get_provider("ollama", settings)
        with patch.object(provider, "_chat", AsyncMock(side_effect=RuntimeError("quota exceeded"))):
            with pytest.raises(ExtractionError, match="ollama request failed: quota exceeded"):
                await provider.extract("page text")


class TestOllamaChat:
    @pytest.mark.asyncio
    async def test_posts_chat_request(self, settings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"message": {"content": '{"sunRequirements": "Full Sun"}'}})

        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        provider = get_provider("ollama", replace(settings, ollama_base_url="http://ollama.local:11434/"))
        with patch("seed_scraper.providers.ollama.httpx.AsyncClient", side_effect=client_factory):
            text = await provider._chat("system", "user", json_mode=True)

        assert text == '{"sunRequirements": "Full Sun"}'
        assert str(seen[0].url) == "http://ollama.local:11434/api/chat"
        body = json.loads(seen[0].content)
        assert body["format"] == "json"
        assert body["stream"] is False
        assert body["messages"][0] == {"role": "system", "content": "system"}

    @pytest.mark.asyncio
    async def test_http_error_propagates_as_extraction_error(self, settings):
        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            transport = httpx.MockTransport(lambda request: httpx.Response(500, json={}))
            return real_client(transport=transport, **kwargs)

        provider = get_provider("ollama", settings)
        with patch("seed_scraper.providers.ollama.httpx.AsyncClient", side_effect=client_factory):
            with pytest.raises(ExtractionError, match="ollama request failed"):
                await provider.extract("page text")
