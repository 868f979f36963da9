"""Renee's Garden (reneesgarden.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    class_block,
    clean_description,
    og_description,
    shopify_keyword_specs,
    text_of,
)


class ReneesGardenParser(VendorParser):
    name = "renees"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        block = class_block(html, "product-description", 8000)
        if not block:
            return ExtractionResult()
        raw = text_of(block)
        result = ExtractionResult(plant_description=clean_description(raw))
        section = re.search(
            r"Planting\s+and\s+Growing[\s\S]*?(?=</div>|<h[1-6]|Planting\s+Tips|$)", block, re.IGNORECASE
        ) or re.search(r"Planting\s+and\s+Growing[\s\S]{0,1200}", raw, re.IGNORECASE)
        if section:
            result = merge_results(result, shopify_keyword_specs(section.group(0)))
        return result
