"""AI web-search fallback: ask a search API for growing specs and regex-parse the answer."""

from __future__ import annotations

import logging
import re

import httpx

from seed_scraper.config import Settings
from seed_scraper.models import CANONICAL_FIELDS, ExtractionResult, Provenance
from seed_scraper.sanitizer import clean_result, sanitize_text

logger = logging.getLogger(__name__)

TAVILY_SEARCH_URL = "https://api.tavily.com/search"
MAX_SEARCH_TEXT = 6000
AI_FIELD_MAX_LEN = 120

_RANGE = r"\d+\s*[–-]\s*\d+"


class SearchError(Exception):
    """Raised when the search API cannot be reached or answers with garbage."""


def build_query(variety: str, category: str | None, region: str) -> str:
    subject = f"{variety} {category}" if category else variety
    return (
        f"Growing specifications for {subject} in {region}. "
        "Focus on spacing, sun, and days to maturity."
    )


def normalize_sun(text: str | None) -> str | None:
    """Map free-text sun wording to the closest display value."""
    if not text or not text.strip():
        return None
    t = sanitize_text(text)[:80]
    if re.search(r"\bfull\s*sun\b", t, re.I):
        return "Full Sun"
    if re.search(r"\bpart(?:ial)?\s*shade\b", t, re.I):
        return "Partial Shade"
    if re.search(r"\bfull\s*shade\b", t, re.I):
        return "Full Shade"
    if re.search(r"\bpart(?:ial)?\s*sun\b", t, re.I):
        return "Part Sun"
    if re.search(r"\bsun\b", t, re.I):
        return "Full Sun"
    if re.search(r"\bshade\b", t, re.I):
        return "Partial Shade"
    return None


def _sun_from_keywords(text: str) -> str | None:
    lowered = text.lower()
    if "full sun" in lowered:
        return "Full Sun"
    if "partial shade" in lowered or "part shade" in lowered:
        return "Partial Shade"
    if "full shade" in lowered:
        return "Full Shade"
    if "part sun" in lowered:
        return "Part Sun"
    if "sun" in lowered:
        return "Full Sun"
    if "shade" in lowered:
        return "Partial Shade"
    return None


def _first_match(text: str, patterns: list[str]) -> re.Match[str] | None:
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match
    return None


def _field(match: re.Match[str] | None) -> str | None:
    if match is None:
        return None
    value = sanitize_text(match.group(1) if match.groups() else match.group(0))
    return value[:AI_FIELD_MAX_LEN] or None


def _days(match: re.Match[str] | None) -> int | None:
    if match is None:
        return None
    n = int(match.group(1))
    return n if 0 < n < 365 else None


def parse_snippet(snippet: str) -> ExtractionResult:
    """Parse sun, spacing, maturity and germination from a short synthesized answer."""
    return ExtractionResult(
        sun=_sun_from_keywords(snippet),
        plant_spacing=_field(re.search(rf"({_RANGE})", snippet)),
        harvest_days=_days(
            _first_match(
                snippet,
                [
                    r"(\d+)\s*days?\s*(?:to|until)?\s*maturity",
                    r"maturity[:\s]*(\d+)",
                    r"(\d+)\s*days?\s*to\s*harvest",
                    r"(\d+)\s*days?",
                ],
            )
        ),
        days_to_germination=_field(
            _first_match(
                snippet,
                [
                    rf"(\d+(?:\s*[–-]\s*\d+)?)\s*days?\s*(?:to|for)?\s*germination",
                    r"germination[:\s]*(\d+)",
                ],
            )
        ),
    )


def parse_search_text(text: str, answer: str = "") -> ExtractionResult:
    """Parse the answer first, then fill what it missed from the combined text."""
    found = parse_snippet(answer) if answer else ExtractionResult()
    lowered = text.lower()
    changes: dict = {}

    if not found.sun:
        literal = re.search(r"\b(Full\s*Sun|Part\s*Sun|Partial\s*Shade|Full\s*Shade)\b", text, re.I)
        changes["sun"] = (
            (literal.group(1).strip() if literal else None)
            or _sun_from_keywords(text)
            or normalize_sun(text[:500])
        )

    if not found.plant_spacing:
        spacing = _field(
            _first_match(
                text,
                [
                    rf"({_RANGE})\s*[\"”]",
                    rf"({_RANGE})\s*(?:inch|in\.?)",
                    r"spacing[:\s]+([^\n.]{2,60})",
                    rf"(?:space|plant)\s*(?:d?\s*)?({_RANGE})",
                ],
            )
        )
        if not spacing and re.search(_RANGE, text) and ("inch" in lowered or "spacing" in lowered):
            spacing = _field(re.search(rf"({_RANGE})", text))
        changes["plant_spacing"] = spacing

    if not found.days_to_germination:
        germination = _field(
            _first_match(
                text,
                [
                    rf"({_RANGE})\s*days?\s*(?:to|for)\s*germination",
                    r"germination[:\s]*(\d+(?:\s*[–-]\s*\d+)?)\s*days?",
                    rf"({_RANGE})\s*days?\s*(?:at|to)",
                ],
            )
        )
        if not germination and "germination" in lowered:
            germination = _field(re.search(r"(\d+(?:\s*[–-]\s*\d+)?)\s*days?", text, re.I))
        changes["days_to_germination"] = germination

    if found.harvest_days is None:
        harvest = _days(
            _first_match(
                text,
                [
                    r"(\d+)\s*days?\s*(?:to|until)\s*maturity",
                    r"maturity[:\s]*(\d+)\s*days?",
                    r"(?:DTM|days\s*to\s*maturity)[:\s]*(\d+)",
                    r"(\d+)\s*days?\s*to\s*harvest",
                ],
            )
        )
        if harvest is None and ("maturity" in lowered or "harvest" in lowered):
            harvest = _days(re.search(r"(\d+)\s*days?", text, re.I))
        changes["harvest_days"] = harvest

    # Values that still look like markup are nulled before provenance is tagged
    result = clean_result(found.model_copy(update=changes))
    provenance = {
        name: Provenance.SCRAPED
        for name in ("sun", "plant_spacing", "days_to_germination")
        if result.has(name)
    }
    return result.model_copy(update={"provenance": provenance})


async def _query_tavily(client: httpx.AsyncClient, settings: Settings, query: str) -> tuple[str, str]:
    try:
        response = await client.post(
            TAVILY_SEARCH_URL,
            headers={"Authorization": f"Bearer {settings.tavily_api_key}"},
            json={
                "query": query,
                "search_depth": "basic",
                "max_results": 5,
                "include_answer": "basic",
            },
            timeout=settings.search_timeout,
        )
    except httpx.HTTPError as exc:
        raise SearchError(f"Search request failed: {exc}") from exc
    if not response.is_success:
        raise SearchError(f"Search returned HTTP {response.status_code}")
    try:
        data = response.json()
    except ValueError as exc:
        raise SearchError(f"Search returned invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SearchError("Search returned an unexpected body")

    answer = ""
    if isinstance(data.get("answer"), str):
        answer = sanitize_text(data["answer"])
    contents = [
        sanitize_text(item["content"])
        for item in data.get("results") or []
        if isinstance(item, dict) and isinstance(item.get("content"), str)
    ]
    combined = " ".join(part for part in [answer, *contents] if part)
    combined = re.sub(r"\s+", " ", combined).strip()[:MAX_SEARCH_TEXT]
    return answer, combined


async def search_specs(
    client: httpx.AsyncClient,
    settings: Settings,
    variety: str,
    category: str | None = None,
) -> ExtractionResult | None:
    """Search the web for the four canonical specs of ``variety``.

    Returns None when the stage is disabled, the search fails, or nothing
    usable comes back. Never raises.
    """
    if not settings.tavily_api_key:
        logger.warning("TAVILY_API_KEY is not set; skipping AI search")
        return None
    if not variety.strip():
        return None

    query = build_query(variety.strip(), category, settings.search_region)
    logger.info("AI search: %s", query)
    try:
        answer, text = await _query_tavily(client, settings, query)
    except SearchError as exc:
        logger.warning("%s (partial vendor data will still be returned)", exc)
        return None
    if not text:
        return None

    result = parse_search_text(text, answer)
    if not any(result.has(name) for name in CANONICAL_FIELDS):
        logger.info("AI search returned no usable fields for %r", variety)
        return None
    return result
