"""Swallowtail Garden Seeds (swallowtailgardenseeds.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, class_block, clean_description, og_description, text_of


class SwallowtailParser(VendorParser):
    name = "swallowtail"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        main = class_block(html, "main-content", 8000)
        if not main:
            return ExtractionResult()
        depth = spacing = None
        for listing in re.findall(r"<ul[^>]*>[\s\S]*?</ul>", main, re.IGNORECASE):
            if not re.search(r"Planting\s+Depth|Spacing", listing, re.IGNORECASE):
                continue
            found_depth = re.search(r"Planting\s+Depth[\s\S]*?[:>]\s*([^<\n]+)", listing, re.IGNORECASE)
            if found_depth and depth is None:
                depth = text_of(found_depth.group(1))[:60] or None
            found_spacing = re.search(r"Spacing[\s\S]*?[:>]\s*([^<\n]+)", listing, re.IGNORECASE)
            if found_spacing and spacing is None:
                spacing = text_of(found_spacing.group(1))[:60] or None
        description = clean_description(text_of(main), min_len=40) if len(main) > 100 else None
        return ExtractionResult(
            plant_spacing=spacing,
            plant_description=description,
            growing_notes=f"Planting Depth: {depth}" if depth else None,
        )
