"""Eden Brothers (edenbrothers.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    block_text,
    class_block,
    clean_description,
    inner_html,
    og_description,
    text_of,
)
from seed_scraper.sanitizer import is_valid_spec_value, looks_like_url_slug

_FACTS_RE = re.compile(
    r"(?:Fast\s+Facts|Quick\s+Facts)[\s\S]{0,200}?(?:<div[^>]*>|<ul[^>]*>|[\s\S]{0,100}?)([\s\S]{1,2500})",
    re.IGNORECASE,
)


def _accept(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    value = value.strip()
    if looks_like_url_slug(value) or not is_valid_spec_value(value):
        return None
    return value


def _first_number(value: str | None) -> int | None:
    found = re.search(r"\d+", value or "")
    return int(found.group(0)) or None if found else None


def _labelled_line(lines: list[str], label: str) -> str | None:
    """Value after ``label:`` on the first line where it reads as a spec."""
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    for line in lines:
        match = re.search(rf"\b{escaped}\s*:\s*(.{{2,80}})", line, re.IGNORECASE)
        value = _accept(match.group(1)) if match else None
        if value:
            return value
    return None


class EdenBrothersParser(VendorParser):
    name = "eden_brothers"

    def accept_spec(self, value: str | None) -> str | None:
        return _accept(value)

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        heading = text_of(inner_html(html, "h1"))
        description = clean_description(text_of(class_block(html, "product-details__description", 5000)))
        result = ExtractionResult(
            og_title=heading if len(heading) > 1 else metadata.title,
            plant_description=description,
        )
        facts = _FACTS_RE.search(html)
        if facts:
            result = merge_results(result, self._specs(facts.group(1)))
        listing = class_block(html, "product-details__list", 3000, tag="ul")
        if listing:
            result = merge_results(result, self._specs(listing))
        return result

    @staticmethod
    def _specs(block: str) -> ExtractionResult:
        lines = block_text(block).split("\n")

        def first(*labels: str) -> str | None:
            for label in labels:
                value = _labelled_line(lines, label)
                if value:
                    return value
            return None

        return ExtractionResult(
            sun=first("Light", "Sun", "Exposure"),
            plant_spacing=first("Spacing", "Plant Spacing"),
            days_to_germination=first("Germination", "Days to Emerge"),
            harvest_days=_first_number(first("Days to Maturity", "Maturity")),
        )

