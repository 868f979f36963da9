"""Burpee (burpee.com): JSON-LD product data plus the ``pdp-specs`` grid."""

from __future__ import annotations

import re

from seed_scraper.fuzzy import day_range_midpoint, extract_sectioned_growing_guides
from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    class_block,
    inner_html,
    json_ld_product_fields,
    labelled_value,
    og_description,
    text_of,
)

_VARIETY_SPAN_RE = re.compile(
    r"<span[^>]*\bclass=[\"'][^\"']*variety[^\"']*[\"'][^>]*>([\s\S]*?)</span>", re.IGNORECASE
)


def product_title(h1_inner: str | None) -> str | None:
    """``Plant, Variety`` when the heading splits the variety into its own span."""
    if not h1_inner:
        return None
    variety = _VARIETY_SPAN_RE.search(h1_inner)
    if variety and text_of(variety.group(1)):
        main = text_of(_VARIETY_SPAN_RE.sub("", h1_inner))
        return f"{main}, {text_of(variety.group(1))}" if main else text_of(variety.group(1))
    title = text_of(h1_inner)
    return title if len(title) > 1 else None


class BurpeeParser(VendorParser):
    name = "burpee"
    description_chars = 1200

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        title = product_title(inner_html(html, "h1", "product-name")) or metadata.title
        result = json_ld_product_fields(html, origin)
        specs = class_block(html, "pdp-specs", 4000)
        result = merge_results(
            result,
            ExtractionResult(
                og_title=title or None,
                plant_description=og_description(metadata, 1200),
                sun=labelled_value(specs, "Sun") if specs else None,
                plant_spacing=labelled_value(specs, "Plant Spacing") if specs else None,
                harvest_days=day_range_midpoint(labelled_value(specs, "Days to Maturity")) if specs else None,
            ),
        )
        notes = self._growing_notes(html)
        return result.model_copy(update={"growing_notes": notes}) if notes else result

    @staticmethod
    def _growing_notes(html: str) -> str | None:
        notes = extract_sectioned_growing_guides(html)
        sowing = re.search(r"Sowing\s+Method[\s\S]*?</[^>]+>\s*<[^>]+>([^<]*)<", html, re.IGNORECASE) or re.search(
            r"Sowing\s+Method\s*[:\s]*([^\n<]{2,120})", html, re.IGNORECASE
        )
        method = text_of(sowing.group(1)) if sowing else ""
        if not method:
            return notes
        note = f"Sowing Method: {method}"
        return f"{notes}\n\n{note}" if notes else note
