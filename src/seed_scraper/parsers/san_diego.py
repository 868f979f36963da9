"""San Diego Seed Company (sandiegoseedcompany.com).

The breadcrumb names the broad category ("Vegetables"), so the product title
comes from the page heading. Specs are bold labels inside the description.
"""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import (
    VendorParser,
    class_block,
    clean_description,
    inner_html,
    og_description,
    text_of,
)


def _bolded(block: str, text: str, label: str) -> str | None:
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    match = re.search(
        rf"<(?:b|strong)[^>]*>\s*{escaped}\s*:?\s*</(?:b|strong)>\s*([^<\n]{{0,80}})", block, re.IGNORECASE
    ) or re.search(rf"{escaped}\s*:\s*([^\n]{{0,80}})", text, re.IGNORECASE)
    return text_of(match.group(1)) or None if match else None


class SanDiegoSeedParser(VendorParser):
    name = "san_diego"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        heading = text_of(inner_html(html, "h1"))
        result = ExtractionResult(og_title=heading if len(heading) > 1 else metadata.title)
        block = class_block(html, "product-description", 6000)
        if not block:
            return result
        text = text_of(block)
        harvest = _bolded(block, text, "Days to Harvest") or _bolded(block, text, "Days to Maturity")
        days = re.search(r"\d+", harvest or "")
        return result.model_copy(
            update={
                "plant_description": clean_description(text),
                "sun": _bolded(block, text, "Sun") or _bolded(block, text, "Exposure"),
                "harvest_days": int(days.group(0)) or None if days else None,
                "plant_spacing": _bolded(block, text, "Spacing") or _bolded(block, text, "Plant Spacing"),
                "days_to_germination": _bolded(block, text, "Germination") or _bolded(block, text, "Days to Emerge"),
            }
        )
