"""Base class for vendor parsers and the anchor helpers they share."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from seed_scraper.fuzzy import (
    GERMINATION_KEYWORDS,
    HYBRID_KEYWORDS,
    LATIN_NAME_KEYWORDS,
    LIFE_CYCLE_KEYWORDS,
    SPACING_KEYWORDS,
    SUN_KEYWORDS,
    day_range_midpoint,
    extract_fuzzy_label,
    extract_fuzzy_maturity_days,
    extract_sectioned_growing_guides,
)
from seed_scraper.metadata import extract_image_url, resolve_image_url
from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.sanitizer import (
    contains_blacklist,
    filter_surgical_description,
    is_junk_spec_value,
    sanitize_text,
    strip_template_placeholders,
)

logger = logging.getLogger(__name__)

DESCRIPTION_CHARS = 800
SUN_FUZZY_CHARS = 30
LATIN_FUZZY_CHARS = 80
TRAIT_FUZZY_CHARS = 30

# Narrow literal used by vendor parsers; the generic parser also accepts a bare "Sun".
SUN_PHRASE_RE = re.compile(r"\b(Full\s*Sun|Part\s*Sun|Partial\s*Shade|Full\s*Shade)\b", re.IGNORECASE)

_JUNK_CHECKED = ("sun", "plant_spacing", "days_to_germination", "latin_name")

_KEYWORD_MATURITY_RE = re.compile(r"(?:matur|harvest|bloom)\D{0,30}?(\d+(?:\s*[-–]\s*\d+)?)\s*days?", re.IGNORECASE)
# Skips the upper end of a germination range ("10-14 days")
_LONE_DAYS_RE = re.compile(r"(?<![-–\d])(?<![-–]\s)(\d+)\s*days?", re.IGNORECASE)

_JSON_LD_RE = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>([\s\S]*?)</script>",
    re.IGNORECASE,
)


class VendorParser(ABC):
    """Contract for host-specific page parsers.

    Subclasses implement ``extract`` with their vendor anchors. ``parse``
    then fills whatever is still empty from the fuzzy keyword fallbacks and
    drops spec values that look like page junk.
    """

    name: str
    description_chars: int = DESCRIPTION_CHARS
    sun_literal: re.Pattern[str] = SUN_PHRASE_RE

    def parse(self, html: str, origin: str, metadata: Metadata | None = None) -> ExtractionResult:
        metadata = metadata or Metadata()
        specific = self.extract(html, origin, metadata)
        result = merge_results(specific, self.fallbacks(html, origin, metadata))
        junk = {f: None for f in _JUNK_CHECKED if is_junk_spec_value(getattr(result, f))}
        if junk:
            logger.debug("%s parser dropped junk values for %s", self.name, sorted(junk))
            result = result.model_copy(update=junk)
        return result

    @abstractmethod
    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        """Fields found through vendor-specific anchors."""
        ...

    def accept_spec(self, value: str | None) -> str | None:
        """Filter applied to fuzzy spec fallbacks; vendors override to reject their junk."""
        return value

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, self.description_chars)

    def fallbacks(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        sun = self.accept_spec(extract_fuzzy_label(html, SUN_KEYWORDS, SUN_FUZZY_CHARS))
        if not sun:
            literal = self.sun_literal.search(html)
            sun = self.accept_spec(literal.group(1).strip()) if literal else None
        return ExtractionResult(
            image_url=extract_image_url(html, origin, metadata.image),
            harvest_days=extract_fuzzy_maturity_days(html),
            sun=sun,
            plant_spacing=self.accept_spec(extract_fuzzy_label(html, SPACING_KEYWORDS)),
            days_to_germination=self.accept_spec(extract_fuzzy_label(html, GERMINATION_KEYWORDS)),
            plant_description=self.fallback_description(html, metadata),
            growing_notes=extract_sectioned_growing_guides(html),
            latin_name=extract_fuzzy_label(html, LATIN_NAME_KEYWORDS, LATIN_FUZZY_CHARS),
            life_cycle=extract_fuzzy_label(html, LIFE_CYCLE_KEYWORDS, TRAIT_FUZZY_CHARS),
            hybrid_status=extract_fuzzy_label(html, HYBRID_KEYWORDS, TRAIT_FUZZY_CHARS),
        )


# --- Block anchors -----------------------------------------------------------


def class_block(html: str, class_fragment: str, size: int, tag: str = "div") -> str:
    """Raw markup following the first ``<tag class="...fragment...">``, at most ``size`` chars."""
    match = re.search(
        rf"<{tag}[^>]*\bclass=[\"'][^\"']*{re.escape(class_fragment)}[^\"']*[\"'][^>]*>([\s\S]{{1,{size}}})",
        html,
        re.IGNORECASE,
    )
    return match.group(1) if match else ""


def id_block(html: str, element_id: str, size: int) -> str:
    match = re.search(
        rf"\bid=[\"']{re.escape(element_id)}[\"'][^>]*>([\s\S]{{1,{size}}})",
        html,
        re.IGNORECASE,
    )
    return match.group(1) if match else ""


def selector_block(html: str, selector: str, size: int) -> str:
    """``#id`` selects by id, anything else by class fragment."""
    if selector.startswith("#"):
        return id_block(html, selector[1:], size)
    return class_block(html, selector.lstrip("."), size)


def inner_html(html: str, tag: str, class_fragment: str | None = None) -> str | None:
    """Inner markup of the first ``<tag>`` (optionally with a class fragment)."""
    attrs = (
        rf"[^>]*\bclass=[\"'][^\"']*{re.escape(class_fragment)}[^\"']*[\"'][^>]*"
        if class_fragment
        else r"[^>]*"
    )
    match = re.search(rf"<{tag}{attrs}>([\s\S]*?)</{tag}>", html, re.IGNORECASE)
    return match.group(1) if match else None


def text_of(fragment: str | None) -> str:
    return sanitize_text(fragment or "")


def block_text(block: str) -> str:
    """Sanitized block text with paragraph and line breaks kept."""
    block = re.sub(r"<br\s*/?>", "\n", block, flags=re.IGNORECASE)
    block = re.sub(r"</p>\s*<p", "\n\n<p", block, flags=re.IGNORECASE)
    block = re.sub(r"</(?:li|h\d|div)>", "\n", block, flags=re.IGNORECASE)
    return sanitize_text(block, keep_newlines=True)


def paragraphs(block: str, min_len: int = 0) -> list[str]:
    found = (text_of(p) for p in re.findall(r"<p[^>]*>([\s\S]*?)</p>", block, re.IGNORECASE))
    return [p for p in found if len(p) > min_len]


def clean_description(raw: str | None, max_chars: int = 2000, min_len: int = 20) -> str | None:
    """Surgical description from raw text, or None when too short or boilerplate."""
    if not raw:
        return None
    raw = raw.strip()
    if len(raw) <= min_len or contains_blacklist(raw):
        return None
    return filter_surgical_description(strip_template_placeholders(raw[:max_chars])) or None


def og_description(metadata: Metadata, max_chars: int = DESCRIPTION_CHARS, min_len: int = 20) -> str | None:
    return clean_description(metadata.description, max_chars=max_chars, min_len=min_len)


def product_description_block(html: str) -> str | None:
    """Description from a ``product-description`` container, paragraphs preserved."""
    block = class_block(html, "product-description", 12000)
    if not block:
        return None
    raw = block_text(block)
    if len(raw) < 30 or contains_blacklist(raw):
        return None
    return filter_surgical_description(raw[:4000]) or None


# --- Value helpers -----------------------------------------------------------


def span(low: str, high: str | None, unit: str) -> str:
    """``low–high{unit}``, or ``low{unit}`` when there is no upper bound."""
    return f"{low}–{high}{unit}" if high else f"{low}{unit}"


def labelled_value(block: str, label: str) -> str | None:
    """Value in the element after a label element, else inline ``Label: value``."""
    escaped = r"\s+".join(re.escape(word) for word in label.split())
    after = re.search(rf"{escaped}[\s\S]*?</[^>]+>\s*<[^>]+>([^<]*)</", block, re.IGNORECASE)
    if after:
        return text_of(after.group(1)) or None
    inline = re.search(rf"{escaped}\s*[:\s]*([^<\n]{{1,80}})", block, re.IGNORECASE)
    return inline.group(1).strip() or None if inline else None


def shopify_keyword_specs(block: str) -> ExtractionResult:
    """Sun, spacing, germination and maturity by keyword regex over a description block."""
    text = text_of(block)
    sun = re.search(r"(Full Sun|Part Sun|Partial Shade|Full Shade|Shade)", text, re.IGNORECASE)
    spacing = re.search(r"(\d+)\s*[-–]\s*(\d+)\s*[\"”]?(?:\s*inches?)?", text, re.IGNORECASE) or re.search(
        r"(\d+)\s*[\"”]?(?:\s*inches?)?", text, re.IGNORECASE
    )
    germination = re.search(r"(\d+)\s*[-–]\s*(\d+)\s*days?", text, re.IGNORECASE)
    maturity = _KEYWORD_MATURITY_RE.search(text) or _LONE_DAYS_RE.search(text)
    return ExtractionResult(
        sun=sun.group(1).strip() if sun else None,
        plant_spacing=span(spacing.group(1), spacing.group(2), '"') if spacing else None,
        days_to_germination=span(germination.group(1), germination.group(2), " days") if germination else None,
        harvest_days=day_range_midpoint(maturity.group(1)) if maturity else None,
    )


def json_ld_products(html: str) -> Iterator[dict[str, Any]]:
    """Yield JSON-LD nodes whose ``@type`` names a Product, including ``@graph`` members."""
    for match in _JSON_LD_RE.finditer(html):
        try:
            data = json.loads(match.group(1))
        except json.JSONDecodeError:
            continue
        if not isinstance(data, dict):
            continue
        nodes = [data]
        if isinstance(data.get("@graph"), list):
            nodes.extend(n for n in data["@graph"] if isinstance(n, dict))
        for node in nodes:
            kind = node.get("@type")
            kinds = kind if isinstance(kind, list) else [kind]
            if any(isinstance(k, str) and "product" in k.lower() for k in kinds):
                yield node


def json_ld_product_fields(html: str, origin: str, max_chars: int = 2000) -> ExtractionResult:
    """First usable image and description from JSON-LD Product nodes."""
    image_url = None
    description = None
    for node in json_ld_products(html):
        image = node.get("image")
        if isinstance(image, list):
            image = image[0] if image else None
        if image_url is None and isinstance(image, str) and image.startswith("http"):
            image_url = resolve_image_url(image, origin)
        if description is None and isinstance(node.get("description"), str):
            description = clean_description(node["description"], max_chars=max_chars)
    return ExtractionResult(image_url=image_url, plant_description=description)


def breadcrumb_items(html: str, tags: str = "nav|ol") -> list[str]:
    match = re.search(
        rf"<({tags})[^>]*\bclass=[\"'][^\"']*breadcrumb[^\"']*[\"'][^>]*>([\s\S]{{1,2000}}?)</\1>",
        html,
        re.IGNORECASE,
    )
    if not match:
        return []
    items = (text_of(a) for a in re.findall(r"<a[^>]*>([\s\S]*?)</a>", match.group(2), re.IGNORECASE))
    return [item for item in items if item]
