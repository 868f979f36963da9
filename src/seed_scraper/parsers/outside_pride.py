"""Outside Pride (outsidepride.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import (
    VendorParser,
    block_text,
    class_block,
    clean_description,
    id_block,
    labelled_value,
    text_of,
)
from seed_scraper.sanitizer import is_valid_spec_value


def _reject_item_id(value: str | None) -> str | None:
    """Drop tracking attributes the stats table renders as cell text."""
    text = text_of(value)
    if not text or re.match(r"it-id=", text, re.IGNORECASE):
        return None
    return text if is_valid_spec_value(text) else None


def _stat(table: str, label: str) -> str | None:
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    match = re.search(rf"<t[hd][^>]*>\s*{escaped}\s*</t[hd]>\s*<t[hd][^>]*>([\s\S]*?)</t[hd]>", table, re.IGNORECASE)
    return _reject_item_id(match.group(1)) if match else None


class OutsidePrideParser(VendorParser):
    name = "outside_pride"

    def accept_spec(self, value: str | None) -> str | None:
        return _reject_item_id(value)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        table = id_block(html, "product_stats", 4000)
        sun = _stat(table, "Light Required") if table else None
        spacing = _stat(table, "Sowing Rate") if table else None
        if not sun or not spacing:
            specs = class_block(html, "pdp-specs-container", 4000)
            if specs:
                sun = sun or _reject_item_id(labelled_value(specs, "ENVIRONMENT"))
                spacing = spacing or _reject_item_id(labelled_value(specs, "PLANT SPACING"))

        description = germination = None
        block = class_block(html, "product-description", 10000)
        if block:
            description = clean_description(block_text(block), max_chars=4000)
            weeks = re.search(r"sprout\s+in\s+(\d+)\s*[-–]\s*(\d+)\s*weeks?", text_of(block), re.IGNORECASE)
            if weeks:
                germination = f"{weeks.group(1)}–{weeks.group(2)} weeks"

        return ExtractionResult(
            sun=sun,
            plant_spacing=spacing,
            plant_description=description,
            days_to_germination=germination,
        )
