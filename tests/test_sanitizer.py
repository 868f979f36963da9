"""Tests for seed_scraper.sanitizer module."""

from __future__ import annotations

from seed_scraper.models import ExtractionResult
from seed_scraper.sanitizer import (
    clean_result,
    clean_spec,
    filter_blacklisted_paragraphs,
    filter_surgical_description,
    is_junk_spec_value,
    is_valid_spec_value,
    looks_like_code,
    looks_like_url_slug,
    sanitize_plant_type,
    sanitize_text,
    strip_fedco_slug_noise,
    strip_style_and_script,
    strip_vault_noise,
    to_title_case,
)


class TestSanitizeText:
    def test_strips_tags_and_decodes_entities(self):
        assert sanitize_text("<p>Full &amp; <b>rich</b></p>") == "Full & rich"

    def test_encoded_markup_is_removed(self):
        assert sanitize_text("&lt;b&gt;Bold&lt;/b&gt;") == "Bold"

    def test_template_placeholder_removed(self):
        assert sanitize_text("Great flavor %%Excerpt%% here") == "Great flavor here"

    def test_css_fragment_removed(self):
        assert sanitize_text("Tall plants -sections-desktop: 0px; and more") == "Tall plants and more"

    def test_none_and_empty(self):
        assert sanitize_text(None) == ""
        assert sanitize_text("") == ""

    def test_keep_newlines_caps_blank_lines(self):
        assert sanitize_text("Line one\n\n\n\nLine two", keep_newlines=True) == "Line one\n\nLine two"

    def test_collapses_newlines_by_default(self):
        assert sanitize_text("Line one\nLine two") == "Line one Line two"

    def test_idempotent(self):
        for raw in (
            "&amp;lt;b&amp;gt;Hi",
            '<div class="x">">Sow 1/4" deep</div>',
            "**%%Title%%** Sweet &nbsp; corn { color: red }",
        ):
            once = sanitize_text(raw)
            assert sanitize_text(once) == once


class TestStripStyleAndScript:
    def test_removes_blocks(self):
        raw = "<style>a{}</style><p>Hi</p><script>x()</script>"
        assert strip_style_and_script(raw) == "<p>Hi</p>"

    def test_blank_passthrough(self):
        assert strip_style_and_script("") == ""


class TestSpecValues:
    def test_valid_plain_value(self):
        assert is_valid_spec_value("Full Sun")

    def test_css_values_invalid(self):
        assert not is_valid_spec_value("color: red;")
        assert not is_valid_spec_value("{x}")
        assert not is_valid_spec_value("12px")
        assert not is_valid_spec_value("")

    def test_junk(self):
        assert is_junk_spec_value("")
        assert is_junk_spec_value("<b>")
        assert is_junk_spec_value("Call 555-123-4567")
        assert is_junk_spec_value("a" * 121)
        assert is_junk_spec_value("Seed selected for improved traits")
        assert not is_junk_spec_value("Full Sun")

    def test_url_slug(self):
        assert looks_like_url_slug("cherokee-purple")
        assert looks_like_url_slug("my_slug")
        assert looks_like_url_slug("")
        assert not looks_like_url_slug("Cherokee Purple")

    def test_clean_spec(self):
        assert clean_spec("<b>Full Sun</b>") == "Full Sun"
        assert clean_spec("margin: 0px;") is None
        assert clean_spec(None) is None


class TestDescriptionFilters:
    def test_blacklisted_paragraph_dropped(self):
        text = "Good text.\n\nCopyright 2024 Vendor"
        assert filter_blacklisted_paragraphs(text) == "Good text."

    def test_looks_like_code(self):
        assert not looks_like_code("short=1")
        assert looks_like_code("data-target=#carousel-item")

    def test_surgical_filter_keeps_sentences(self):
        text = 'Sweet red fruit.\n<button class="x">Buy</button>\nCopyright 2024'
        assert filter_surgical_description(text) == "Sweet red fruit."

    def test_surgical_filter_blank(self):
        assert filter_surgical_description(None) == ""


class TestNameNoise:
    def test_plant_type_noise(self):
        assert sanitize_plant_type("Non Gmo Burgundy Okra") == "Okra"
        assert sanitize_plant_type("Organic Heirloom Tomato Seeds") == "Tomato"

    def test_vault_noise(self):
        assert strip_vault_noise("Cherokee Purple prod003168 Organic Seeds") == "Cherokee Purple"

    def test_fedco_slug_noise(self):
        assert strip_fedco_slug_noise("Provider Bean Organic Seeds 2150") == "Provider Bean"

    def test_title_case(self):
        assert to_title_case("sweet pea cupani") == "Sweet Pea Cupani"
        assert to_title_case("mcIntosh red") == "McIntosh Red"


class TestCleanResult:
    def test_cleans_fields(self):
        result = ExtractionResult(
            sun="<b>Full Sun</b>",
            plant_spacing="margin: 0px;",
            water="  ",
            growing_notes="Line one\n\n\n\nLine two",
        )
        cleaned = clean_result(result)
        assert cleaned.sun == "Full Sun"
        assert cleaned.plant_spacing is None
        assert cleaned.water is None
        assert cleaned.growing_notes == "Line one\n\nLine two"

    def test_clean_record_returned_unchanged(self):
        result = ExtractionResult(sun="Full Sun", harvest_days=60)
        assert clean_result(result) is result
