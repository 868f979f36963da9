"""Shopify storefronts whose specs live as prose in the description block."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    clean_description,
    og_description,
    paragraphs,
    selector_block,
    shopify_keyword_specs,
    text_of,
)
from seed_scraper.sanitizer import is_valid_spec_value


class ShopifyKeywordParser(VendorParser):
    """Description block located by ``description_selector`` plus keyword regex specs."""

    name = "shopify"
    description_selector = "product-description"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        block = selector_block(html, self.description_selector, 6000)
        if not block:
            return ExtractionResult()
        described = ExtractionResult(plant_description=clean_description(text_of(block)))
        return merge_results(described, shopify_keyword_specs(block))


class SuperSeedsParser(ShopifyKeywordParser):
    name = "superseeds"


class SowRightParser(ShopifyKeywordParser):
    name = "sow_right"
    description_selector = "product__description"


class VictorySeedsParser(ShopifyKeywordParser):
    name = "victory"


class HudsonValleyParser(VendorParser):
    """Full story from every paragraph of the ``product__description rte`` block."""

    name = "hudson_valley"

    def accept_spec(self, value: str | None) -> str | None:
        return value if value and is_valid_spec_value(value) else None

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, max_chars=len(metadata.description or ""), min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        match = re.search(
            r"<div[^>]*\bclass=[\"'](?:[^\"']*product__description[^\"']*rte|[^\"']*rte[^\"']*product__description)"
            r"[^\"']*[\"'][^>]*>([\s\S]{1,80000})",
            html,
            re.IGNORECASE,
        )
        if not match:
            return ExtractionResult()
        block = match.group(1)
        story = "\n\n".join(paragraphs(block)).strip()
        specs = shopify_keyword_specs(block)
        return ExtractionResult(
            plant_description=clean_description(story, max_chars=len(story)),
            sun=self.accept_spec(specs.sun),
            plant_spacing=self.accept_spec(specs.plant_spacing),
            days_to_germination=self.accept_spec(specs.days_to_germination),
            harvest_days=specs.harvest_days,
        )
