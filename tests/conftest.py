"""Shared fixtures for SeedScraper tests."""

from __future__ import annotations

import json

import httpx
import pytest

from seed_scraper.config import Settings


@pytest.fixture()
def settings() -> Settings:
    """Settings with every external stage disabled."""
    return Settings(
        extractor_provider="",
        tavily_api_key="",
        scrape_timeout=5.0,
        fetch_timeout=5.0,
        ai_timeout=2.0,
        search_timeout=2.0,
        image_probe_timeout=1.0,
    )


@pytest.fixture()
def provider_settings() -> Settings:
    """Settings with dummy keys so every provider can be constructed."""
    return Settings(
        openai_api_key="test-openai-key",
        anthropic_api_key="test-anthropic-key",
        groq_api_key="test-groq-key",
        gemini_api_key="test-gemini-key",
    )


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


def tavily_response(answer: str, contents: list[str] | None = None) -> httpx.Response:
    body = {"answer": answer, "results": [{"content": c} for c in contents or []]}
    return httpx.Response(200, content=json.dumps(body), headers={"content-type": "application/json"})


GENERIC_PRODUCT_HTML = """\
<html><head>
<meta property="og:title" content="Cherokee Purple Tomato">
<meta property="og:description" content="A dusky heirloom beefsteak with rich, complex flavor and a smoky sweetness.">
<meta property="og:image" content="/images/cherokee.jpg">
<script>var tracking = {"sun": "spacing: 1px;"};</script>
<style>.product-grid { margin: 0px; }</style>
</head><body>
<h1>Cherokee Purple Tomato</h1>
<ul>
<li>Sun: Full Sun<br></li>
<li>Plant Spacing: 24-36 inches<br></li>
<li>Days to Germination: 7-14 days<br></li>
<li>Days to Maturity: 80 days<br></li>
</ul>
</body></html>
"""

BARE_PRODUCT_HTML = """\
<html><head>
<meta property="og:title" content="Cherokee Purple Tomato">
<meta property="og:description" content="A dusky heirloom beefsteak with rich, complex flavor and a smoky sweetness.">
</head><body>
<h1>Cherokee Purple Tomato</h1>
<p>Our favorite slicer for summer sandwiches.</p>
</body></html>
"""

BAKER_CREEK_HTML = """\
<html><head>
<meta property="og:title" content="Cherokee Purple Tomato">
</head><body>
<nav class="breadcrumb"><a href="/">Home</a><a href="/tomatoes">Tomatoes</a><a href="/p">Cherokee Purple Tomato</a></nav>
<div class="product description"><p>A famous heirloom (Solanum lycopersicum) with dusky purple fruit.</p><p>Growing Tips: Full sun in warm soil. Plant spacing: 24 to 36 inches. Sprouts in 7-14 days.</p></div>
</body></html>
"""

SEARCH_ANSWER = (
    "Sweet peas need full sun. Space plants 6-8 inches apart. "
    "Expect 75 days to maturity and 10-14 days to germination."
)
