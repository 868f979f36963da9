"""California native seed vendors (Theodore Payne, Native West)."""

from __future__ import annotations

from seed_scraper.fuzzy import extract_pretreatment_notes
from seed_scraper.models import ExtractionResult, Metadata
from seed_scraper.parsers.generic import GenericParser


class NativePlantParser(GenericParser):
    """Generic extraction plus smoke, boiling-water and stratification notes."""

    name = "native"

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        return ExtractionResult(pretreatment_notes=extract_pretreatment_notes(html))
