"""MIGardener (migardener.com)."""

from __future__ import annotations

import re

from seed_scraper.fuzzy import SPACING_KEYWORDS, SUN_KEYWORDS, extract_fuzzy_label, extract_sun_literal
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.base import SUN_FUZZY_CHARS
from seed_scraper.parsers.generic import GenericParser

SPECS_CHUNK_CHARS = 3500


def _no_markup(value: str | None) -> str | None:
    if not value or re.search(r"class=|<|>", value):
        return None
    return value


class MIGardenerParser(GenericParser):
    name = "migardener"

    def accept_spec(self, value: str | None) -> str | None:
        return _no_markup(value)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        start = html.find("products-template__specs")
        if start == -1:
            return ExtractionResult()
        chunk = html[start:start + SPECS_CHUNK_CHARS]
        sun = extract_fuzzy_label(chunk, SUN_KEYWORDS, SUN_FUZZY_CHARS) or extract_sun_literal(chunk)
        return ExtractionResult(
            sun=_no_markup(sun),
            plant_spacing=_no_markup(extract_fuzzy_label(chunk, SPACING_KEYWORDS)),
        )
