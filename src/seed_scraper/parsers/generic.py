"""Fallback parser for hosts without a dedicated strategy."""

from __future__ import annotations

from seed_scraper.fuzzy import SUN_LITERAL_RE
from seed_scraper.metadata import meta_content
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, og_description, product_description_block
from seed_scraper.sanitizer import sanitize_text


class GenericParser(VendorParser):
    """Runs the fuzzy keyword extractor for every field."""

    name = "generic"
    sun_literal = SUN_LITERAL_RE

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        return ExtractionResult()

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        description = product_description_block(html) or og_description(metadata, min_len=30)
        if description:
            return description
        meta = sanitize_text(meta_content(html, "description", attr="name"))
        return meta if len(meta) > 30 else None
