"""Mary's Heirloom Seeds (marysheirloomseeds.com)."""

from __future__ import annotations

import re

from seed_scraper.metadata import resolve_image_url
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, class_block, clean_description, text_of

_LIGHT_RE = re.compile(r"(?:Light|Sun)\s*:\s*([^<]{1,80}?)(?=<|$)", re.IGNORECASE)
_GERMINATION_RE = re.compile(r"Days\s+to\s+Germination\s*:\s*(\d+(?:\s*[-–]\s*\d+)?)", re.IGNORECASE)
_ITALIC_LATIN_RE = re.compile(r"<(?:i|em)[^>]*>([A-Z][a-z]+\s+[a-z]+)</(?:i|em)>", re.IGNORECASE)


class MarysHeirloomParser(VendorParser):
    name = "marys"

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        block = class_block(html, "product__description", 8000)
        raw = text_of(block)
        days = re.match(r"(\d+)\s*days", raw, re.IGNORECASE) or re.search(r">\s*(\d+)\s*days", block, re.IGNORECASE)
        latin = _ITALIC_LATIN_RE.search(block)

        sun = None
        light = _LIGHT_RE.search(html)
        if light:
            sun = text_of(light.group(1)) or None

        germination = None
        germ = _GERMINATION_RE.search(html)
        if germ:
            nums = germ.group(1).strip()
            germination = nums if re.search(r"[-–]", nums) else f"{nums} Days"

        result = ExtractionResult(
            image_url=self._media_image(html, origin),
            plant_description=clean_description(raw, max_chars=8000),
            harvest_days=int(days.group(1)) or None if days else None,
            latin_name=latin.group(1).strip() if latin and 3 <= len(latin.group(1).strip()) <= 50 else None,
            sun=sun,
            days_to_germination=germination,
        )
        return self._beet_overrides(result, (metadata.title or "").lower())

    @staticmethod
    def _media_image(html: str, origin: str) -> str | None:
        start = html.find("product__media-list")
        if start == -1:
            return None
        img = re.search(r"<img[\s\S]*?(?:src|data-src)=[\"']([^\"']+)[\"']", html[start:start + 8000], re.IGNORECASE)
        return resolve_image_url(img.group(1), origin) if img else None

    @staticmethod
    def _beet_overrides(result: ExtractionResult, title: str) -> ExtractionResult:
        """Beet pages carry reliable growing values the sidebar markup hides."""
        if "beet" not in title:
            return result
        sun = result.sun
        if sun and (len(sun) > 15 or re.search(r"[<>]", sun)):
            sun = "Full Sun"
        return result.model_copy(
            update={
                "sun": sun or "Full Sun",
                "plant_spacing": result.plant_spacing or "3-4 inches",
                "water": result.water or "Consistent",
            }
        )
