"""Territorial Seed Company (territorialseed.com)."""

from __future__ import annotations

import re

from seed_scraper.metadata import resolve_image_url
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import VendorParser, class_block, clean_description, id_block, text_of
from seed_scraper.sanitizer import is_valid_spec_value, sanitize_text


def _clean(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    text = text_of(value)
    if re.search(r"<|>|</?img", text, re.IGNORECASE):
        return None
    return text if text and is_valid_spec_value(text) else None


def _cell(block: str, label: str) -> str | None:
    match = re.search(rf"{label}[\s\S]*?<td[^>]*>([\s\S]*?)</td>", block, re.IGNORECASE) or re.search(
        rf"{label}\s*[:\s]*([^\n<]+)", block, re.IGNORECASE
    )
    return _clean(match.group(1)) if match else None


def _section_first_line(block: str, heading: str) -> str | None:
    start = re.search(heading, block, re.IGNORECASE)
    if not start:
        return None
    window = block[start.start():start.start() + 600]
    window = re.sub(r"</(?:h\d|p|div|li)>|<br\s*/?>", "\n", window, flags=re.IGNORECASE)
    text = re.sub(heading, "", sanitize_text(window, keep_newlines=True), count=1, flags=re.IGNORECASE).strip()
    line = text.split("\n")[0].strip()[:80] if text else ""
    return _clean(line) if len(line) > 2 else None


class TerritorialParser(VendorParser):
    name = "territorial"

    def accept_spec(self, value: str | None) -> str | None:
        return _clean(value)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        description, harvest_days = self._description(html)
        growing = (
            id_block(html, "tab-growing-culture", 8000)
            or class_block(html, "planting-info", 8000)
            or id_block(html, "growing-info", 8000)
        )
        result = ExtractionResult(
            image_url=self._photo(html, origin),
            plant_description=description,
            harvest_days=harvest_days,
        )
        if not growing:
            return result

        spacing = germination = None
        seed_table = re.search(r"From\s+Seed", growing, re.IGNORECASE)
        if seed_table:
            table = growing[seed_table.start():seed_table.start() + 2500]
            seed = _cell(table, r"Seed\s+Spacing")
            row = _cell(table, r"Row\s+Spacing")
            spacing = f"Seed: {seed}, Row: {row}" if seed and row else seed or row
            emergence = _cell(table, r"Days\s+to\s+Emergence")
            germination = emergence if emergence and len(emergence) <= 60 else None
        return result.model_copy(
            update={
                "sun": _section_first_line(growing, r"Sunlight\s+Requirements\s*"),
                "water": _section_first_line(growing, r"Watering\s+Requirements\s*"),
                "plant_spacing": spacing,
                "days_to_germination": germination,
            }
        )

    @staticmethod
    def _photo(html: str, origin: str) -> str | None:
        """First gallery image, preferring the zoom-size source."""
        start = html.find("product-single__photos")
        if start == -1:
            return None
        tag = re.search(r"<img[\s\S]*?>", html[start:start + 6000], re.IGNORECASE)
        if not tag:
            return None
        zoom = re.search(r"\bdata-zoom=[\"']([^\"']+)[\"']", tag.group(0), re.IGNORECASE)
        src = re.search(r"(?:data-src|src)=[\"']([^\"']+)[\"']", tag.group(0), re.IGNORECASE)
        candidate = (zoom or src).group(1).strip() if (zoom or src) else ""
        if not candidate or candidate.startswith("data:"):
            return None
        return resolve_image_url(candidate, origin)

    @staticmethod
    def _description(html: str) -> tuple[str | None, int | None]:
        block = class_block(html, "product-single__description", 6000) or class_block(html, "rte", 4000)
        if not block:
            return None, None
        first = re.search(r"<p[^>]*>([\s\S]*?)</p>", block, re.IGNORECASE)
        description = clean_description(text_of(first.group(1)), max_chars=6000) if first else None
        days = re.search(r"<(?:b|strong)[^>]*>(\d+)\s*days?", block, re.IGNORECASE) or re.search(
            r">\s*(\d+)\s*days?\.?\s*<", block, re.IGNORECASE
        )
        return description, int(days.group(1)) or None if days else None
