"""Johnny's Selected Seeds (johnnyseeds.com)."""

from __future__ import annotations

import re

from seed_scraper.fuzzy import day_range_midpoint, extract_first, extract_sun_literal
from seed_scraper.metadata import extract_image_url, resolve_image_url
from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    class_block,
    id_block,
    inner_html,
    og_description,
    span,
    text_of,
)
from seed_scraper.sanitizer import (
    filter_blacklisted_paragraphs,
    is_junk_spec_value,
    is_valid_spec_value,
    sanitize_text,
)

_LOGO_RE = re.compile(r"JSS_Logo|logo\.svg|/logo\b", re.IGNORECASE)
_NOTES_END_RE = re.compile(
    r"Questions\?|Satisfaction Guarantee|From the Grower's Library|<script|<footer|function\s*\(|var\s+\w+\s*=",
    re.IGNORECASE,
)
_NOTES_LABELS = ("DAYS TO GERMINATION", "PLANT SPACING", "LIGHT PREFERENCE", "PLANT HEIGHT", "HARDINESS ZONES")
_NEXT_LABEL_RE = re.compile(
    r"\s+(?:Light(?: Preference| Requirements)?|Sun|Plant Spacing|Spacing|Days to Germination|Germination"
    r"|Emergence|Days to Maturity|Maturity|Plant Height|Height|Hardiness(?: Zones)?)\s*:",
    re.IGNORECASE,
)
MAX_NOTES_CHARS = 2400


def _valid(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip()
    return value if is_valid_spec_value(value) and not is_junk_spec_value(value) else None


def _attribute(text: str, labels: str) -> str | None:
    """Value after a label, cut where the next attribute label begins."""
    value = extract_first(text, rf"(?:{labels})\s*:?\s*([^\n]{{2,60}})")
    if not value:
        return None
    cut = _NEXT_LABEL_RE.search(value)
    return _valid(value[: cut.start()] if cut else value)


class JohnnysParser(VendorParser):
    name = "johnnys"
    description_chars = 1200

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        title = text_of(inner_html(html, "h1", "product-name")) or metadata.title
        description = self._story(html) or og_description(metadata, 1200) or self._after_h1(html)
        result = ExtractionResult(
            og_title=title or None,
            image_url=self._image(html, origin, metadata),
            plant_description=self._with_specs(description, html) if description else None,
        )
        result = merge_results(result, self._attributes(html))
        result = merge_results(result, self._quick_facts(html))
        result = merge_results(result, self._growing_info(html))
        result = merge_results(result, self._labelled_text(html))
        return merge_results(result, ExtractionResult(growing_notes=self._growing_notes(html)))

    def _image(self, html: str, origin: str, metadata: Metadata) -> str | None:
        tag = re.search(r"<img[^>]*\bclass=[\"'][^\"']*primary-image[^\"']*[\"'][^>]*>", html, re.IGNORECASE)
        if tag:
            src = re.search(r"\b(?:data-src|src)=[\"']([^\"']+)[\"']", tag.group(0), re.IGNORECASE)
            if src and not _LOGO_RE.search(src.group(1)):
                return resolve_image_url(src.group(1), origin)
        image = extract_image_url(html, origin, metadata.image)
        return None if image and _LOGO_RE.search(image) else image

    def _attributes(self, html: str) -> ExtractionResult:
        block = class_block(html, "c-product-attributes", 5000)
        if not block:
            return ExtractionResult()
        text = text_of(block)
        maturity = re.search(r"(?:Days to Maturity|Maturity)\s*:?\s*(\d+\s*[-–]\s*\d+|\d+)", text, re.IGNORECASE)
        return ExtractionResult(
            sun=_attribute(text, "Light|Sun"),
            plant_spacing=_attribute(text, "Spacing"),
            days_to_germination=_attribute(text, "Germination|Emergence"),
            harvest_days=day_range_midpoint(maturity.group(1)) if maturity else None,
        )

    def _quick_facts(self, html: str) -> ExtractionResult:
        block = class_block(html, "product-quick-facts", 4000)
        if not block:
            return ExtractionResult()

        def fact(name: str) -> str:
            return text_of(inner_html(block, "div", f"quick-fact-{name}") or inner_html(block, "span", f"quick-fact-{name}"))

        latin = fact("latin-name")
        hybrid = fact("hybrid-status")
        return ExtractionResult(
            latin_name=latin if 2 <= len(latin) <= 80 and re.match(r"^[A-Za-z]+\s+[a-z]+", latin) else None,
            harvest_days=day_range_midpoint(fact("days-to-maturity")),
            hybrid_status=hybrid if 0 < len(hybrid) <= 60 else None,
        )

    def _growing_info(self, html: str) -> ExtractionResult:
        block = id_block(html, "growing-info", 6000)
        if not block:
            return ExtractionResult()
        text = text_of(block)
        spacing = None
        transplant = text.lower().find("transplanting")
        if transplant != -1:
            window = text[transplant:transplant + 800]
            found = re.search(r"(\d+)\s*[-–]\s*(\d+)\s*(?:\"|”|inches)", window, re.IGNORECASE)
            if found:
                spacing = span(found.group(1), found.group(2), " inches")
        germ = re.search(r"germinate\s+in\s+(\d+)\s*[-–]\s*(\d+)\s*days", text, re.IGNORECASE)
        return ExtractionResult(
            plant_spacing=spacing,
            days_to_germination=span(germ.group(1), germ.group(2), " days") if germ else None,
        )

    def _labelled_text(self, html: str) -> ExtractionResult:
        text = text_of(html)
        sun = None
        light = re.search(
            r"(?:LIGHT PREFERENCE:|Light requirements:|(?:Sun|Light):)\s*([^.]{2,60})", text, re.IGNORECASE
        )
        if light and re.search(r"sun|shade", light.group(1), re.IGNORECASE):
            sun = light.group(1).strip()
            if sun.lower() == "sun":
                sun = "Full Sun"
        germ = re.search(r"DAYS TO GERMINATION:\s*(.{3,50}?)\s*SOWING:", text)
        spacing = re.search(r"PLANT SPACING:\s*(.{1,50}?)\s*(?:HARDINESS ZONES|PLANT HEIGHT)", text)
        maturity = re.search(r"Days to Maturity\s*:?\s*(\d+\s*[-–]\s*\d+|\d+)", text, re.IGNORECASE)
        return ExtractionResult(
            sun=_valid(sun) or extract_sun_literal(text),
            days_to_germination=_valid(germ.group(1)) if germ else None,
            plant_spacing=_valid(spacing.group(1)) if spacing else None,
            harvest_days=day_range_midpoint(maturity.group(1)) if maturity else None,
        )

    def _story(self, html: str) -> str | None:
        marker = html.find("Product ID")
        if marker == -1:
            return None
        rest = html[marker:]
        para = re.search(r"<p[^>]*>([\s\S]{1,1200}?)</p>", rest, re.IGNORECASE)
        if para:
            text = text_of(para.group(1))
            if len(text) > 20:
                return text
        end = re.search(r"Specs:|Read More|Size:|Quick Facts|Add to Cart", rest, re.IGNORECASE)
        text = text_of(rest[: end.start() if end else 1200])
        text = re.sub(r"^Product ID\s*:?\s*\S+\s*", "", text)
        return text if len(text) > 20 else None

    @staticmethod
    def _with_specs(description: str, html: str) -> str:
        marker = html.find("Specs:")
        if marker == -1:
            return description
        lines = [
            line.strip()
            for line in re.split(r"[•*\-]|\n", sanitize_text(html[marker + 6:marker + 406], keep_newlines=True))
        ]
        extra = [line for line in lines if 3 <= len(line) < 120]
        return "\n".join([description, *extra]) if extra else description

    @staticmethod
    def _after_h1(html: str) -> str | None:
        match = re.search(r"</h1>([\s\S]{1,1500})", html, re.IGNORECASE)
        text = text_of(match.group(1)) if match else ""
        return text[:1200] if len(text) > 20 else None

    @staticmethod
    def _growing_notes(html: str) -> str | None:
        start = html.find("DAYS TO GERMINATION")
        if start == -1:
            return None
        chunk = html[start:start + MAX_NOTES_CHARS]
        end = _NOTES_END_RE.search(chunk)
        if end:
            chunk = chunk[: end.start()]
        text = sanitize_text(re.sub(r"<br\s*/?>|</p>|</li>", "\n", chunk, flags=re.IGNORECASE), keep_newlines=True)
        for label in _NOTES_LABELS:
            text = text.replace(label, "\n" + label)
        kept = [line for line in text.split("\n") if line.strip() and not line.strip().startswith(_NOTES_LABELS)]
        notes = filter_blacklisted_paragraphs("\n".join(kept))
        return notes if len(notes) > 20 else None
