"""Row 7 Seed Company (row7seeds.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import inner_html, text_of
from seed_scraper.parsers.generic import GenericParser
from seed_scraper.sanitizer import is_valid_spec_value


class Row7Parser(GenericParser):
    name = "row7"

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        heading = re.sub(r"\s*Seeds?\s*$", "", text_of(inner_html(html, "h1")), flags=re.IGNORECASE)
        text = f"{metadata.description or ''} {text_of(html)}"

        maturity = re.search(r"Days\s+to\s+Maturity\s*:?\s*(\d+)", text, re.IGNORECASE) or re.search(
            r"(\d+)\s+days\s+to\s+maturity", text, re.IGNORECASE
        )
        spacing = re.search(r"Plant\s+Spacing\s*:\s*([\d\"”\-–]+)", text, re.IGNORECASE)
        spacing_value = spacing.group(1).strip() if spacing else None
        if spacing_value and (len(spacing_value) >= 50 or not is_valid_spec_value(spacing_value)):
            spacing_value = None
        emergence = re.search(r"(\d+\s*-\s*\d+)\s+days\s+to\s+emergence", text, re.IGNORECASE)

        return ExtractionResult(
            og_title=heading or metadata.title,
            harvest_days=int(maturity.group(1)) or None if maturity else None,
            plant_spacing=spacing_value,
            days_to_germination=f"{emergence.group(1)} days" if emergence else None,
        )
