"""High Mowing Organic Seeds (highmowingseeds.com)."""

from __future__ import annotations

import re

from seed_scraper.fuzzy import day_range_midpoint, extract_sectioned_growing_guides
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import (
    VendorParser,
    breadcrumb_items,
    class_block,
    id_block,
    inner_html,
    text_of,
)
from seed_scraper.sanitizer import sanitize_plant_type


def _discard_font_or_markup(value: str | None) -> str | None:
    """Spec cells sometimes leak font URLs or markup; those values are dropped."""
    text = text_of(value)
    if not text or re.search(r"\.woff|<|>", text):
        return None
    return text


def _dd_for(block: str, label: str) -> str | None:
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    match = re.search(rf"<dt[^>]*>\s*{escaped}\s*</dt>\s*<dd[^>]*>([\s\S]*?)</dd>", block, re.IGNORECASE)
    return _discard_font_or_markup(match.group(1)) if match else None


def _data_th(block: str, label: str) -> str | None:
    escaped = r"\s+".join(re.escape(w) for w in label.split())
    match = re.search(rf"data-th=[\"']{escaped}[\"'][^>]*>([\s\S]*?)</(?:div|td)>", block, re.IGNORECASE)
    return _discard_font_or_markup(match.group(1)) if match else None


class HighMowingParser(VendorParser):
    name = "high_mowing"
    description_chars = 1200

    def accept_spec(self, value: str | None) -> str | None:
        return _discard_font_or_markup(value)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        attributes = re.search(
            r"<dl[^>]*\bclass=[\"'][^\"']*additional-attributes[^\"']*[\"'][^>]*>([\s\S]{1,4000}?)</dl>",
            html,
            re.IGNORECASE,
        )
        dl = attributes.group(1) if attributes else ""
        specs = (class_block(html, "product-options-bottom", 6000) + class_block(html, "specification", 6000)) or html

        harvest_days = day_range_midpoint(_dd_for(dl, "Days to Maturity")) or day_range_midpoint(
            _data_th(specs, "Days to Maturity")
        )
        sun = _dd_for(dl, "Sun/Shade") or _data_th(specs, "Sun/Shade")

        notes: list[str] = []
        depth = _data_th(specs, "Seeding Depth")
        if depth:
            notes.append(f"Seeding Depth: {depth}")
        growing = id_block(html, "growing-information", 5000)
        if growing and not sun:
            text = text_of(growing)
            found = re.search(r"(?:Sun|Heat)[\s:]*([^\n.]{2,60})", text, re.IGNORECASE) or re.search(
                r"\b(Full\s*Sun|Part\s*Sun|Partial\s*Shade|Heat\s*tolerant)\b", text, re.IGNORECASE
            )
            if found:
                sun = _discard_font_or_markup(found.group(1))
            if len(text) > 40:
                notes.append(text[:1500].strip())

        scientific = text_of(inner_html(html, "div", "product-scientific-name"))
        return ExtractionResult(
            harvest_days=harvest_days,
            sun=sun,
            plant_spacing=_data_th(specs, "Plant Spacing"),
            latin_name=(
                scientific if 2 <= len(scientific) <= 80 and re.match(r"^[A-Za-z]+\s+[a-z]+", scientific) else None
            ),
            growing_notes="\n\n".join(notes) if notes else extract_sectioned_growing_guides(html),
            vendor=metadata.site_name or self._vendor_div(html),
            category=self._category(html),
        )

    @staticmethod
    def _vendor_div(html: str) -> str | None:
        raw = text_of(inner_html(html, "div", "product-single__vendor"))
        return raw if 0 < len(raw) <= 120 else None

    @staticmethod
    def _category(html: str) -> str | None:
        items = breadcrumb_items(html, tags="nav")
        if not items:
            return None
        item = items[-2] if len(items) >= 2 else items[0]
        return sanitize_plant_type(item) or item.strip()
