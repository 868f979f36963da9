"""Abstract base class for AI structured extractors."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from seed_scraper.config import Settings
from seed_scraper.fuzzy import day_range_midpoint
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.sanitizer import sanitize_text, strip_style_and_script

logger = logging.getLogger(__name__)

MAX_BODY_CHARS = 15_000
MAX_MATURITY_DAYS = 365

EXTRACT_SYSTEM_PROMPT = """\
From this seed vendor URL page text, extract: Variety Name, Days to Maturity, \
Sowing Depth, and Sun Requirements. Return ONLY a valid JSON object with keys: \
varietyName, daysToMaturity, sowingDepth, sunRequirements. Use empty string when \
not found. For daysToMaturity use a single number (e.g. 80) or 0 if unknown. \
No markdown or explanation."""


class ExtractionError(Exception):
    """Raised when AI extraction fails."""


def build_page_text(html: str, metadata: Metadata | None) -> str:
    """Title, description and the tag-stripped body (truncated), blank-line separated."""
    parts: list[str] = []
    if metadata and metadata.title:
        parts.append(metadata.title.strip())
    if metadata and metadata.description:
        parts.append(metadata.description.strip())
    body = sanitize_text(strip_style_and_script(html))
    if body:
        parts.append(body[:MAX_BODY_CHARS])
    return "\n\n".join(parts)


class AIProvider(ABC):
    """Contract for AI-powered structured extraction providers."""

    name: str

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    async def _chat(self, system: str, user: str, *, json_mode: bool = False) -> str:
        """Send one request to the model and return the response text."""
        ...

    async def extract(self, page_text: str) -> ExtractionResult:
        """Extract variety, maturity, spacing and sun from page text.

        Args:
            page_text: Output of ``build_page_text``.

        Returns:
            ExtractionResult with the fields the model found.

        Raises:
            ExtractionError: On any provider failure or unusable response.
        """
        if not page_text.strip():
            raise ExtractionError("No page text to extract from")
        try:
            raw = await self._chat(EXTRACT_SYSTEM_PROMPT, page_text, json_mode=True)
        except Exception as exc:
            logger.error("%s request failed: %s", self.name, exc)
            raise ExtractionError(f"{self.name} request failed: {exc}") from exc
        return self._parse_response(raw)

    def _parse_response(self, raw_json: str) -> ExtractionResult:
        """Parse the model's JSON object into an ExtractionResult."""
        text = (raw_json or "").strip()

        # Strip markdown code fences if present (```json ... ```)
        if text.startswith("```"):
            first_nl = text.find("\n")
            if first_nl != -1:
                text = text[first_nl + 1:]
            if text.rstrip().endswith("```"):
                text = text.rstrip()[:-3].rstrip()

        start = text.find("{")
        if start == -1:
            raise ExtractionError(f"Failed to parse AI response: {text[:200]}")
        try:
            parsed, _ = json.JSONDecoder().raw_decode(text[start:])
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Failed to parse AI response: {text[:200]}") from exc
        if not isinstance(parsed, dict):
            raise ExtractionError(f"AI response is not an object: {text[:200]}")
        return _to_result(parsed)


def _text_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _maturity_days(value: Any) -> int | None:
    """Days to maturity in (0, 365); a ``"75-90 days"`` range yields its midpoint."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        days = int(value)
    elif isinstance(value, str):
        days = day_range_midpoint(value)
    else:
        return None
    return days if days and 0 < days < MAX_MATURITY_DAYS else None


def _to_result(data: dict[str, Any]) -> ExtractionResult:
    return ExtractionResult(
        variety_name=_text_field(data, "varietyName"),
        harvest_days=_maturity_days(data.get("daysToMaturity")),
        plant_spacing=_text_field(data, "sowingDepth"),
        sun=_text_field(data, "sunRequirements"),
    )
