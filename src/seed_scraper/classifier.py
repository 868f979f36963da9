"""Completeness classifier for the four canonical growing fields."""

from __future__ import annotations

from seed_scraper.models import CANONICAL_FIELDS, ExtractionResult, Provenance, ScrapeStatus

# Fields whose default-derived value does not count as found.
_SCRAPE_REQUIRED = ("sun", "plant_spacing", "days_to_germination")


def is_complete(result: ExtractionResult) -> bool:
    """True when all canonical fields are present and none of the spec strings are defaults."""
    if not all(result.has(name) for name in CANONICAL_FIELDS):
        return False
    return all(result.source(name) is not Provenance.DEFAULT for name in _SCRAPE_REQUIRED)


def classify(result: ExtractionResult, search_used: bool = False) -> ScrapeStatus:
    """Success, AI_SEARCH or Partial. Failed is decided by the pipeline, never here."""
    if search_used:
        return ScrapeStatus.AI_SEARCH
    if is_complete(result):
        return ScrapeStatus.SUCCESS
    return ScrapeStatus.PARTIAL
