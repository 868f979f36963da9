"""Floret Flowers (floretflowers.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, class_block, clean_description, og_description, paragraphs, text_of
from seed_scraper.sanitizer import is_valid_spec_value, strip_template_placeholders

MAX_SPEC_LEN = 50

_FOOTER_NAV_RE = (
    re.compile(r"\s*\u2190\s*Previous\s+Product\s*", re.IGNORECASE),
    re.compile(r"\s*Next\s+Product\s*\u2192\s*", re.IGNORECASE),
    re.compile(r"&\s*(?:larr|rarr)\s*;", re.IGNORECASE),
    re.compile(r"\s*(?:Previous|Next)\s+Product\s*", re.IGNORECASE),
)


def strip_footer_nav(text: str) -> str:
    """Remove the "Previous Product / Next Product" pager text."""
    for pattern in _FOOTER_NAV_RE:
        text = pattern.sub(" ", text)
    return re.sub(r"[ \t]{2,}", " ", text).strip()


def _short_spec(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    value = value.strip()
    return value if len(value) <= MAX_SPEC_LEN and is_valid_spec_value(value) else None


class FloretParser(VendorParser):
    name = "floret"

    def accept_spec(self, value: str | None) -> str | None:
        return _short_spec(value)

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        if not metadata.description:
            return None
        cleaned = strip_footer_nav(strip_template_placeholders(metadata.description))
        return og_description(metadata.model_copy(update={"description": cleaned}), min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        block = class_block(html, "product-details__description", 12000) or class_block(html, "rte", 8000)
        if not block:
            return ExtractionResult()
        story = "\n\n".join(paragraphs(block, min_len=10)).strip()
        description = clean_description(strip_footer_nav(story), max_chars=4000) if len(story) > 20 else None

        spacing = None
        notes: list[str] = []
        planting = re.search(r"Planting\s+Instructions[\s\S]*?(?=</div>|<h[1-6]|$)", block, re.IGNORECASE)
        if planting:
            section = text_of(planting.group(0))
            found = re.search(r"Spacing\s*[:\s]*(\d+)\s*[-–]?\s*(\d+)?", section, re.IGNORECASE) or re.search(
                r"(\d+)\s*[-–]\s*(\d+)\s*inches?", section, re.IGNORECASE
            )
            if found:
                low, high = found.group(1), found.group(2)
                spacing = _short_spec(f"{low}–{high} inches" if high else f"{low} inches")
            depth = re.search(r"Depth\s*[:\s]*([^\n.]{2,60})", section, re.IGNORECASE)
            if depth and is_valid_spec_value(depth.group(1)):
                notes.append(f"Planting Depth: {depth.group(1).strip()}")

        return ExtractionResult(
            plant_description=description,
            plant_spacing=spacing,
            growing_notes="\n\n".join(notes) if notes else None,
        )
