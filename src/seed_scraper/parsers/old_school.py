"""Plain-text catalog vendors (Fedco, Southern Exposure).

These sites describe each variety in a single prose block. The summary is the
first three sentences; numbers are pulled from the prose by unit.
"""

from __future__ import annotations

import re

from seed_scraper.fuzzy import round_half_up
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import (
    VendorParser,
    clean_description,
    og_description,
    selector_block,
    span,
    text_of,
)

SUMMARY_SENTENCES = 3


class OldSchoolParser(VendorParser):
    name = "old_school"
    description_selector = "product-description"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        block = selector_block(html, self.description_selector, 12000)
        if not block:
            return ExtractionResult()
        text = text_of(block)
        sentences = [s for s in re.split(r"(?<=[.!?])\s+", text) if s]
        summary = " ".join(sentences[:SUMMARY_SENTENCES]).strip()

        harvest_days = None
        day_mentions = re.findall(r"(\d+)\s*[-–]?\s*(\d+)?\s*days?", text, re.IGNORECASE)
        if day_mentions:
            low, high = day_mentions[-1]
            harvest_days = round_half_up((int(low) + int(high)) / 2) if high else int(low) or None

        germination = re.search(r"(\d+)\s*[-–]\s*(\d+)\s*days?", text, re.IGNORECASE)
        spacing = re.search(r"(\d+)\s*[-–]\s*(\d+)\s*inches?", text, re.IGNORECASE)
        inch_mark = re.search(r"(\d+)\s*[\"”]", text)
        if spacing:
            plant_spacing = span(spacing.group(1), spacing.group(2), " inches")
        elif inch_mark:
            plant_spacing = f'{inch_mark.group(1)}"'
        else:
            plant_spacing = None

        return ExtractionResult(
            plant_description=clean_description(summary, max_chars=len(summary)),
            harvest_days=harvest_days,
            days_to_germination=span(germination.group(1), germination.group(2), " days") if germination else None,
            plant_spacing=plant_spacing,
        )


class FedcoParser(OldSchoolParser):
    name = "fedco"


class SouthernExposureParser(OldSchoolParser):
    name = "southern_exposure"
    description_selector = "#product-description"
