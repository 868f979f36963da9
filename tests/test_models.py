"""Tests for seed_scraper.models module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from seed_scraper.models import (
    ExtractionResult,
    Identity,
    InvalidRequestError,
    Provenance,
    ScrapeOutcome,
    ScrapeRequest,
    ScrapeStatus,
    merge_results,
)


class TestScrapeRequest:
    def test_aliases(self):
        req = ScrapeRequest.model_validate(
            {"url": "https://rareseeds.com/x", "knownPlantTypes": ["Tomato"], "skipAiFallback": True}
        )
        assert req.known_plant_types == ["Tomato"]
        assert req.skip_ai_fallback is True

    def test_url_is_trimmed(self):
        assert ScrapeRequest(url="  https://burpee.com/a  ").url == "https://burpee.com/a"

    def test_non_string_url_becomes_empty(self):
        assert ScrapeRequest.model_validate({"url": 42}).url == ""

    def test_known_types_must_all_be_strings(self):
        req = ScrapeRequest.model_validate({"url": "x", "knownPlantTypes": ["Tomato", 3]})
        assert req.known_plant_types is None

    def test_skip_only_for_literal_true(self):
        assert ScrapeRequest.model_validate({"skipAiFallback": "yes"}).skip_ai_fallback is False

    def test_target_url_adds_scheme(self):
        assert ScrapeRequest(url="www.burpee.com/tomato").target_url() == "https://www.burpee.com/tomato"

    def test_target_url_requires_url(self):
        with pytest.raises(InvalidRequestError, match="url is required"):
            ScrapeRequest(url="   ").target_url()

    def test_target_url_rejects_disallowed_domain(self):
        with pytest.raises(InvalidRequestError, match="not allowed"):
            ScrapeRequest(url="https://example.com/seeds").target_url()

    def test_target_url_rejects_lookalike_domain(self):
        with pytest.raises(InvalidRequestError):
            ScrapeRequest(url="https://notburpee.com/a").target_url()

    def test_target_url_allows_subdomain(self):
        assert ScrapeRequest(url="https://shop.floretflowers.com/p").target_url()


class TestExtractionResult:
    def test_frozen(self):
        r = ExtractionResult(sun="Full Sun")
        with pytest.raises(ValidationError):
            r.sun = "Shade"  # type: ignore[misc]

    def test_has_treats_blank_as_missing(self):
        r = ExtractionResult(sun="  ", harvest_days=0)
        assert not r.has("sun")
        assert r.has("harvest_days")
        assert not r.has("plant_spacing")


class TestMergeResults:
    def test_fills_only_empty_fields(self):
        base = ExtractionResult(sun="Full Sun", plant_spacing="")
        update = ExtractionResult(sun="Shade", plant_spacing="12 inches")
        merged = merge_results(base, update)
        assert merged.sun == "Full Sun"
        assert merged.plant_spacing == "12 inches"

    def test_overwrite(self):
        merged = merge_results(ExtractionResult(sun="Full Sun"), ExtractionResult(sun="Shade"), overwrite=True)
        assert merged.sun == "Shade"

    def test_inputs_unchanged(self):
        base = ExtractionResult()
        merge_results(base, ExtractionResult(sun="Full Sun"))
        assert base.sun is None

    def test_provenance_follows_value(self):
        base = ExtractionResult(provenance={"water": Provenance.DEFAULT})
        update = ExtractionResult(sun="Full Sun", provenance={"sun": Provenance.SCRAPED})
        merged = merge_results(base, update)
        assert merged.source("sun") is Provenance.SCRAPED
        assert merged.source("water") is Provenance.DEFAULT

    def test_nothing_to_merge_returns_base(self):
        base = ExtractionResult(sun="Full Sun")
        assert merge_results(base, ExtractionResult()) is base


class TestScrapeOutcome:
    def test_payload_field_names(self):
        outcome = ScrapeOutcome(
            result=ExtractionResult(
                sun="Full Sun",
                image_url="https://burpee.com/a.jpg",
                og_title="Tomato",
                provenance={"sun": Provenance.SCRAPED, "plant_spacing": Provenance.DEFAULT},
            ),
            identity=Identity(plant_name="Tomato", variety_name="Brandywine", vendor_name="Burpee"),
            scrape_status=ScrapeStatus.PARTIAL,
        )
        payload = outcome.to_payload()
        assert payload["plant_name"] == "Tomato"
        assert payload["imageUrl"] == "https://burpee.com/a.jpg"
        assert payload["ogTitle"] == "Tomato"
        assert payload["sunSource"] == "scrape"
        assert payload["sunIsDefault"] is False
        assert payload["plant_spacingSource"] == "default"
        assert payload["plant_spacingIsDefault"] is True
        assert payload["scrape_status"] == "Partial"

    def test_optional_keys_omitted(self):
        payload = ScrapeOutcome(identity=Identity()).to_payload()
        for key in ("scrape_error_log", "error", "image_error", "REQUIRE_CONFIG", "pretreatment_notes"):
            assert key not in payload

    def test_flags_rendered(self):
        payload = ScrapeOutcome(
            identity=Identity(),
            image_error=True,
            require_config=True,
            scrape_error_log="Page returned 403.",
        ).to_payload()
        assert payload["image_error"] is True
        assert payload["REQUIRE_CONFIG"] is True
        assert payload["scrape_error_log"] == "Page returned 403."

    def test_missing_identity_renders_empty_names(self):
        payload = ScrapeOutcome(scrape_status=ScrapeStatus.FAILED).to_payload()
        assert payload["plant_name"] == ""
        assert payload["vendor_name"] == ""

    def test_http_status_not_in_payload(self):
        assert "http_status" not in ScrapeOutcome(http_status=502).to_payload()
