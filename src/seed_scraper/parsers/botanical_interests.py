"""Botanical Interests (botanicalinterests.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, id_block, inner_html, span, text_of


def _attribute_item(block: str, label: str) -> str | None:
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    after = re.search(rf"{escaped}[\s\S]*?</[^>]+>\s*<[^>]+>([^<]*)</", block, re.IGNORECASE)
    if after and text_of(after.group(1)):
        return text_of(after.group(1))
    for item in re.findall(r"attribute-item[\s\S]*?</div>", block, re.IGNORECASE):
        if not re.search(escaped, item, re.IGNORECASE):
            continue
        value = re.sub(rf"^.*?{escaped}\s*[:\s]*", "", text_of(item), count=1, flags=re.IGNORECASE).strip()[:80]
        if value:
            return value
    return None


class BotanicalInterestsParser(VendorParser):
    name = "botanical_interests"
    description_chars = 1200

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        scientific = text_of(inner_html(html, "span", "product-scientific-name"))
        attrs = re.search(
            r"<[^>]*\bclass=[\"'][^\"']*product-attributes[^\"']*[\"'][^>]*>([\s\S]{1,4000})", html, re.IGNORECASE
        )
        attrs_block = attrs.group(1) if attrs else ""

        spacing = None
        growing = id_block(html, "growing-instructions", 6000)
        found = re.search(r"Spacing\s*[:\s]*(\d+)\s*[-–]\s*(\d+)", growing, re.IGNORECASE) or re.search(
            r"Spacing\s*[:\s]*(\d+)()", growing, re.IGNORECASE
        )
        if found:
            spacing = span(found.group(1), found.group(2) or None, '"')

        return ExtractionResult(
            latin_name=(
                scientific if 2 <= len(scientific) <= 80 and re.match(r"^[A-Za-z]+\s+[a-z]+", scientific) else None
            ),
            sun=_attribute_item(attrs_block, "Exposure") if attrs_block else None,
            days_to_germination=_attribute_item(attrs_block, "Days to Emerge") if attrs_block else None,
            plant_spacing=spacing,
        )
