"""Tests for seed_scraper.classifier module."""

from __future__ import annotations

from seed_scraper.classifier import classify, is_complete
from seed_scraper.models import ExtractionResult, Provenance, ScrapeStatus

COMPLETE = ExtractionResult(
    sun="Full Sun",
    plant_spacing="24 inches",
    days_to_germination="7-14 days",
    harvest_days=80,
    provenance={
        "sun": Provenance.SCRAPED,
        "plant_spacing": Provenance.SCRAPED,
        "days_to_germination": Provenance.SCRAPED,
    },
)


class TestIsComplete:
    def test_all_scraped(self):
        assert is_complete(COMPLETE)

    def test_missing_maturity(self):
        assert not is_complete(COMPLETE.model_copy(update={"harvest_days": None}))

    def test_blank_field_is_missing(self):
        assert not is_complete(COMPLETE.model_copy(update={"sun": "  "}))

    def test_default_does_not_count(self):
        provenance = {**COMPLETE.provenance, "plant_spacing": Provenance.DEFAULT}
        assert not is_complete(COMPLETE.model_copy(update={"provenance": provenance}))

    def test_default_water_is_irrelevant(self):
        provenance = {**COMPLETE.provenance, "water": Provenance.DEFAULT}
        assert is_complete(COMPLETE.model_copy(update={"water": "Moderate", "provenance": provenance}))


class TestClassify:
    def test_success(self):
        assert classify(COMPLETE) is ScrapeStatus.SUCCESS

    def test_partial(self):
        assert classify(ExtractionResult(sun="Full Sun")) is ScrapeStatus.PARTIAL

    def test_search_wins(self):
        assert classify(COMPLETE, search_used=True) is ScrapeStatus.AI_SEARCH
        assert classify(ExtractionResult(), search_used=True) is ScrapeStatus.AI_SEARCH

    def test_never_failed(self):
        assert classify(ExtractionResult()) is not ScrapeStatus.FAILED
