"""Baker Creek Heirloom Seeds (rareseeds.com)."""

from __future__ import annotations

import re

from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import (
    VendorParser,
    block_text,
    breadcrumb_items,
    class_block,
    og_description,
    product_description_block,
    span,
    text_of,
)
from seed_scraper.sanitizer import contains_blacklist

_DROP_LINES_RE = re.compile(r"Warning!|Add to Cart|Quantity", re.IGNORECASE)


class BakerCreekParser(VendorParser):
    name = "baker_creek"

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        description, body = self._description(html)
        sun = re.search(r"\b(Full sun|Part sun)\b[^\n.]*", body, re.IGNORECASE)
        spacing = re.search(r"Plant spacing:\s*(\d+)\s*(?:to|[-–])\s*(\d+)\s*inches", body, re.IGNORECASE) or re.search(
            r"(\d+)\s*[-–]\s*(\d+)\s*inches", body, re.IGNORECASE
        )
        sprouts = re.search(r"Sprouts in\s*(\d+)\s*[-–]\s*(\d+)\s*days", body, re.IGNORECASE)
        return ExtractionResult(
            plant_name_hint=self._breadcrumb_type(html),
            plant_description=(
                description
                or og_description(metadata)
                or product_description_block(html)
                or (metadata.description or None)
            ),
            sun=sun.group(0).strip()[:60] if sun else None,
            plant_spacing=span(spacing.group(1), spacing.group(2), " inches") if spacing else None,
            days_to_germination=span(sprouts.group(1), sprouts.group(2), " days") if sprouts else None,
            latin_name=self._latin(html),
        )

    @staticmethod
    def _breadcrumb_type(html: str) -> str | None:
        items = breadcrumb_items(html)
        if not items:
            return None
        if len(items[-1].split()) > 1 and len(items) > 1:
            return items[-2]
        return items[-1]

    @staticmethod
    def _description(html: str) -> tuple[str | None, str]:
        """Description text cut before the growing tips, and the full block text."""
        block = class_block(html, "description", 15000)
        if not block:
            return None, ""
        body = block_text(block)
        story = re.split(r"Growing Tips", body, maxsplit=1, flags=re.IGNORECASE)[0]
        lines = [line for line in story.split("\n") if not _DROP_LINES_RE.search(line)]
        story = "\n".join(lines).strip()
        if len(story) > 20 and not contains_blacklist(story):
            return story, body
        return None, body

    @staticmethod
    def _latin(html: str) -> str | None:
        match = re.search(r"<p[^>]*>([\s\S]*?)</p>", html, re.IGNORECASE)
        if not match:
            return None
        inside = re.search(r"\(([^)]+)\)", text_of(match.group(1)))
        if not inside:
            return None
        candidate = inside.group(1).strip()
        return candidate if 3 <= len(candidate) < 80 and re.search(r"[A-Za-z]", candidate) else None
