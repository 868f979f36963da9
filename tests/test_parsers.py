"""Tests for the vendor parser registry, shared anchors, and parsers."""

from __future__ import annotations

import pytest

from seed_scraper.metadata import extract_metadata
from seed_scraper.models import Metadata
from seed_scraper.parsers import get_parser, list_parsers
from seed_scraper.parsers.baker_creek import BakerCreekParser
from seed_scraper.parsers.base import (
    breadcrumb_items,
    json_ld_product_fields,
    labelled_value,
    shopify_keyword_specs,
    span,
)
from seed_scraper.parsers.botanical_interests import BotanicalInterestsParser
from seed_scraper.parsers.burpee import BurpeeParser
from seed_scraper.parsers.eden_brothers import EdenBrothersParser
from seed_scraper.parsers.floret import FloretParser
from seed_scraper.parsers.generic import GenericParser
from seed_scraper.parsers.high_mowing import HighMowingParser
from seed_scraper.parsers.johnnys import JohnnysParser
from seed_scraper.parsers.marys import MarysHeirloomParser
from seed_scraper.parsers.migardener import MIGardenerParser
from seed_scraper.parsers.native import NativePlantParser
from seed_scraper.parsers.old_school import FedcoParser, SouthernExposureParser
from seed_scraper.parsers.outside_pride import OutsidePrideParser
from seed_scraper.parsers.park_seed import ParkSeedParser
from seed_scraper.parsers.renees import ReneesGardenParser
from seed_scraper.parsers.row7 import Row7Parser
from seed_scraper.parsers.san_diego import SanDiegoSeedParser
from seed_scraper.parsers.shopify import HudsonValleyParser, SowRightParser, SuperSeedsParser
from seed_scraper.parsers.swallowtail import SwallowtailParser
from seed_scraper.parsers.territorial import TerritorialParser
from seed_scraper.sanitizer import strip_style_and_script

from .conftest import BAKER_CREEK_HTML, GENERIC_PRODUCT_HTML


class TestParserRegistry:
    def test_vendor_host(self):
        assert get_parser("www.rareseeds.com").name == "baker_creek"

    def test_subdomain_matches(self):
        assert isinstance(get_parser("shop.rareseeds.com"), BakerCreekParser)

    def test_unknown_host_is_generic(self):
        assert isinstance(get_parser("www.seedsavers.org"), GenericParser)

    def test_every_registered_parser_loads(self):
        for fragment in list_parsers():
            parser = get_parser(fragment)
            assert parser.name != "generic"

    def test_dispatch_order(self):
        assert list_parsers()[0] == "johnnyseeds.com"
        assert "row7seeds.com" in list_parsers()

    @pytest.mark.parametrize(
        ("host", "name"),
        [
            ("johnnyseeds.com", "johnnys"),
            ("marysheirloomseeds.com", "marys"),
            ("www.territorialseed.com", "territorial"),
            ("www.burpee.com", "burpee"),
            ("www.highmowingseeds.com", "high_mowing"),
            ("www.botanicalinterests.com", "botanical_interests"),
            ("www.outsidepride.com", "outside_pride"),
            ("www.edenbrothers.com", "eden_brothers"),
            ("parkseed.com", "park_seed"),
            ("www.swallowtailgardenseeds.com", "swallowtail"),
            ("superseeds.com", "superseeds"),
            ("sowrightseeds.com", "sow_right"),
            ("sandiegoseedcompany.com", "san_diego"),
            ("www.floretflowers.com", "floret"),
            ("www.reneesgarden.com", "renees"),
            ("theodorepayne.org", "native"),
            ("www.nativewest.com", "native"),
            ("www.victoryseeds.com", "victory"),
            ("hudsonvalleyseed.com", "hudson_valley"),
            ("southernexposure.com", "southern_exposure"),
            ("www.fedcoseeds.com", "fedco"),
            ("migardener.com", "migardener"),
            ("row7seeds.com", "row7"),
        ],
    )
    def test_vendor_dispatch(self, host, name):
        assert get_parser(host).name == name


class TestGenericParser:
    def test_fuzzy_fields(self):
        html = strip_style_and_script(GENERIC_PRODUCT_HTML)
        origin = "https://www.seedsavers.org"
        result = GenericParser().parse(html, origin, extract_metadata(html))
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "24-36 inches"
        assert result.days_to_germination == "7-14 days"
        assert result.harvest_days == 80
        assert result.image_url == "https://www.seedsavers.org/images/cherokee.jpg"
        assert result.plant_description.startswith("A dusky heirloom beefsteak")
        assert result.latin_name is None
        assert result.life_cycle is None
        assert result.hybrid_status is None

    def test_junk_values_dropped(self):
        html = "<ul><li>Sun: Call 555-123-4567<br></li></ul>"
        result = GenericParser().parse(html, "https://www.seedsavers.org")
        assert result.sun is None

    def test_empty_page(self):
        result = GenericParser().parse("<html></html>", "https://www.seedsavers.org")
        assert result.sun is None
        assert result.harvest_days is None
        assert result.plant_description is None


class TestBakerCreekParser:
    def test_anchors(self):
        result = BakerCreekParser().parse(BAKER_CREEK_HTML, "https://www.rareseeds.com", extract_metadata(BAKER_CREEK_HTML))
        assert result.plant_name_hint == "Tomatoes"
        assert result.plant_description == "A famous heirloom (Solanum lycopersicum) with dusky purple fruit."
        assert result.sun == "Full sun in warm soil"
        assert result.plant_spacing == "24–36 inches"
        assert result.days_to_germination == "7–14 days"
        assert result.latin_name == "Solanum lycopersicum"


class TestAnchorHelpers:
    def test_span(self):
        assert span("24", "36", " inches") == "24–36 inches"
        assert span("12", None, '"') == '12"'

    def test_labelled_value_next_element(self):
        block = "<span>Days to Maturity</span><span>65 days</span></div>"
        assert labelled_value(block, "Days to Maturity") == "65 days"

    def test_labelled_value_inline(self):
        assert labelled_value("Spacing: 12 inches", "Spacing") == "12 inches"

    def test_shopify_keyword_specs(self):
        block = "<p>Full Sun. Matures in 60 days. Space 12-18 inches apart. Germinates in 7-14 days.</p>"
        result = shopify_keyword_specs(block)
        assert result.sun == "Full Sun"
        assert result.harvest_days == 60
        assert result.plant_spacing == '12–18"'
        assert result.days_to_germination == "7–14 days"

    def test_keyword_maturity_after_germination_range(self):
        result = shopify_keyword_specs("<p>Germinates in 10-14 days. Harvest in 60 days.</p>")
        assert result.days_to_germination == "10–14 days"
        assert result.harvest_days == 60

    def test_lone_day_count_skips_range_end(self):
        result = shopify_keyword_specs("<p>Germinates in 10-14 days. Ready for the table at 60 days.</p>")
        assert result.harvest_days == 60

    def test_json_ld_product_fields(self):
        html = (
            '<script type="application/ld+json">'
            '{"@type": "Product", "image": ["https://cdn.x.com/p.jpg"], '
            '"description": "A sweet and crunchy carrot for fall sowing."}'
            "</script>"
        )
        result = json_ld_product_fields(html, "https://www.burpee.com")
        assert result.image_url == "https://cdn.x.com/p.jpg"
        assert result.plant_description == "A sweet and crunchy carrot for fall sowing."

    def test_breadcrumb_items(self):
        html = '<ol class="breadcrumbs"><a href="/">Home</a><a href="/v">Vegetables</a></ol>'
        assert breadcrumb_items(html) == ["Home", "Vegetables"]


def _meta(**fields) -> Metadata:
    return Metadata(**fields)


class TestJohnnysParser:
    ORIGIN = "https://johnnyseeds.com"
    HTML = (
        '<h1 class="product-name">Sungold Tomato</h1>'
        '<img class="primary-image" data-src="/images/sungold.jpg">'
        "<div>Product ID: 2743</div>"
        "<p>Extremely sweet, tangerine-orange cherry tomato.</p>"
        '<div class="c-product-attributes"><ul>'
        "<li>Light: Full Sun</li><li>Spacing: 18-24 inches</li>"
        "<li>Germination: 7-14 days</li><li>Days to Maturity: 55-65</li>"
        "</ul></div>"
    )

    def test_attribute_block(self):
        result = JohnnysParser().extract(self.HTML, self.ORIGIN, _meta())
        assert result.og_title == "Sungold Tomato"
        assert result.image_url == "https://johnnyseeds.com/images/sungold.jpg"
        assert result.plant_description == "Extremely sweet, tangerine-orange cherry tomato."
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "18-24 inches"
        assert result.days_to_germination == "7-14 days"
        assert result.harvest_days == 60

    def test_logo_image_falls_back_to_metadata(self):
        html = '<img class="primary-image" src="/static/JSS_Logo.png">'
        metadata = _meta(image="https://cdn.johnnyseeds.com/sungold.jpg")
        result = JohnnysParser().extract(html, self.ORIGIN, metadata)
        assert result.image_url == "https://cdn.johnnyseeds.com/sungold.jpg"

    def test_quick_facts(self):
        html = (
            '<div class="product-quick-facts">'
            '<div class="quick-fact-latin-name">Solanum lycopersicum</div>'
            '<div class="quick-fact-hybrid-status">Hybrid</div>'
            '<div class="quick-fact-days-to-maturity">57 Days</div>'
            "</div>"
        )
        result = JohnnysParser().extract(html, self.ORIGIN, _meta())
        assert result.latin_name == "Solanum lycopersicum"
        assert result.hybrid_status == "Hybrid"
        assert result.harvest_days == 57


class TestMarysHeirloomParser:
    ORIGIN = "https://marysheirloomseeds.com"
    HTML = (
        '<div class="product__media-list"><img src="/cdn/beet.jpg"></div>'
        "<ul><li>Days to Germination: 7</li></ul>"
        '<div class="product__description"><p>55 days. <em>Beta vulgaris</em> '
        "A sweet, tender heirloom beet with deep red roots.</p></div>"
    )

    def test_beet_page(self):
        result = MarysHeirloomParser().extract(self.HTML, self.ORIGIN, _meta(title="Detroit Dark Red Beet"))
        assert result.image_url == "https://marysheirloomseeds.com/cdn/beet.jpg"
        assert result.harvest_days == 55
        assert result.latin_name == "Beta vulgaris"
        assert result.days_to_germination == "7 Days"
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "3-4 inches"
        assert result.water == "Consistent"
        assert "heirloom beet" in result.plant_description

    def test_light_kept_for_other_crops(self):
        html = self.HTML + "<ul><li>Light: Full Sun to Part Shade</li></ul>"
        result = MarysHeirloomParser().extract(html, self.ORIGIN, _meta(title="Rainbow Swiss Chard"))
        assert result.sun == "Full Sun to Part Shade"
        assert result.water is None
        assert result.plant_spacing is None


class TestTerritorialParser:
    HTML = (
        '<div class="product-single__photos"><img src="/img/small.jpg" data-zoom="/img/zoom.jpg"></div>'
        '<div class="product-single__description">'
        "<p>Reliable slicing cucumber with crisp dark green fruit.</p><p><strong>58 days</strong></p></div>"
        '<div id="tab-growing-culture">'
        "<h4>Sunlight Requirements</h4><p>Full sun</p>"
        "<h4>Watering Requirements</h4><p>Keep evenly moist</p>"
        "<h4>From Seed</h4><table>"
        "<tr><td>Seed Spacing</td><td>12 inches</td></tr>"
        "<tr><td>Row Spacing</td><td>36 inches</td></tr>"
        "<tr><td>Days to Emergence</td><td>7-10</td></tr>"
        "</table></div>"
    )

    def test_growing_culture_tab(self):
        result = TerritorialParser().extract(self.HTML, "https://territorialseed.com", _meta())
        assert result.image_url == "https://territorialseed.com/img/zoom.jpg"
        assert result.plant_description == "Reliable slicing cucumber with crisp dark green fruit."
        assert result.harvest_days == 58
        assert result.sun == "Full sun"
        assert result.water == "Keep evenly moist"
        assert result.plant_spacing == "Seed: 12 inches, Row: 36 inches"
        assert result.days_to_germination == "7-10"


class TestBurpeeParser:
    HTML = (
        '<h1 class="product-name">Tomato <span class="variety">Better Boy</span></h1>'
        '<script type="application/ld+json">{"@type": "Product", '
        '"image": "https://cdn.burpee.com/better-boy.jpg", '
        '"description": "Reliable slicer with big, juicy red fruit all summer."}</script>'
        '<div class="pdp-specs">'
        "<div><span>Sun</span><span>Full Sun</span></div>"
        "<div><span>Plant Spacing</span><span>36 inches</span></div>"
        "<div><span>Days to Maturity</span><span>70-75</span></div>"
        "</div>"
        "<div><span>Sowing Method</span><span>Start indoors</span></div>"
    )

    def test_specs_grid(self):
        result = BurpeeParser().extract(self.HTML, "https://www.burpee.com", _meta())
        assert result.og_title == "Tomato, Better Boy"
        assert result.image_url == "https://cdn.burpee.com/better-boy.jpg"
        assert result.plant_description == "Reliable slicer with big, juicy red fruit all summer."
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "36 inches"
        assert result.harvest_days == 73
        assert result.growing_notes == "Sowing Method: Start indoors"


class TestHighMowingParser:
    HTML = (
        '<nav class="breadcrumb"><a href="/">Home</a><a href="/vegetables">Vegetables</a>'
        '<a href="/kale">Organic Kale Seeds</a><a href="/lacinato">Lacinato</a></nav>'
        '<div class="product-scientific-name">Brassica oleracea</div>'
        '<dl class="additional-attributes"><dt>Days to Maturity</dt><dd>60-65</dd>'
        "<dt>Sun/Shade</dt><dd>Full Sun</dd></dl>"
        '<div class="specification"><div data-th="Plant Spacing">12-18 inches</div>'
        '<div data-th="Seeding Depth">1/4 inch</div></div>'
    )

    def test_attributes_and_specification(self):
        metadata = _meta(site_name="High Mowing Organic Seeds")
        result = HighMowingParser().extract(self.HTML, "https://www.highmowingseeds.com", metadata)
        assert result.harvest_days == 63
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "12-18 inches"
        assert result.latin_name == "Brassica oleracea"
        assert result.growing_notes == "Seeding Depth: 1/4 inch"
        assert result.vendor == "High Mowing Organic Seeds"
        assert result.category == "Kale"

    def test_font_urls_rejected(self):
        assert HighMowingParser().accept_spec("url(/fonts/brand.woff)") is None


class TestBotanicalInterestsParser:
    HTML = (
        '<span class="product-scientific-name">Lathyrus odoratus</span>'
        '<div class="product-attributes">'
        '<div class="attribute-item"><span>Exposure</span><span>Full Sun</span></div>'
        '<div class="attribute-item"><span>Days to Emerge</span><span>10-14 days</span></div>'
        "</div>"
        '<div id="growing-instructions"><p>Spacing: 4-6 inches</p></div>'
    )

    def test_attribute_items(self):
        result = BotanicalInterestsParser().extract(self.HTML, "https://www.botanicalinterests.com", _meta())
        assert result.latin_name == "Lathyrus odoratus"
        assert result.sun == "Full Sun"
        assert result.days_to_germination == "10-14 days"
        assert result.plant_spacing == '4–6"'


class TestOutsidePrideParser:
    HTML = (
        '<table id="product_stats"><tr><th>Light Required</th><td>Full Sun</td></tr>'
        "<tr><th>Sowing Rate</th><td>it-id=4431</td></tr></table>"
        '<div class="pdp-specs-container"><div><span>PLANT SPACING</span><span>12 inches</span></div></div>'
        '<div class="product-description"><p>Bright annual for beds and borders.</p>'
        "<p>Save with code #SPRING on orders over $50</p>"
        "<p>Seeds sprout in 2-3 weeks.</p></div>"
    )

    def test_stats_table_and_description(self):
        result = OutsidePrideParser().extract(self.HTML, "https://www.outsidepride.com", _meta())
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "12 inches"
        assert result.plant_description == "Bright annual for beds and borders.\nSeeds sprout in 2-3 weeks."
        assert result.days_to_germination == "2–3 weeks"

    def test_item_id_rejected(self):
        assert OutsidePrideParser().accept_spec("it-id=4431") is None


class TestEdenBrothersParser:
    ORIGIN = "https://www.edenbrothers.com"

    def test_detail_list_with_bold_labels(self):
        html = (
            "<h1>Zinnia Seeds - California Giant Mix</h1>"
            '<div class="product-details__description"><p>Huge, dahlia-like blooms in a riot of summer colors.</p></div>'
            '<ul class="product-details__list">'
            "<li><strong>Sun:</strong> Full Sun</li>"
            "<li><strong>Plant Spacing:</strong> 12 inches</li>"
            "<li><strong>Days to Maturity:</strong> 75 days</li>"
            "</ul>"
        )
        result = EdenBrothersParser().extract(html, self.ORIGIN, _meta())
        assert result.og_title == "Zinnia Seeds - California Giant Mix"
        assert result.plant_description == "Huge, dahlia-like blooms in a riot of summer colors."
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "12 inches"
        assert result.harvest_days == 75

    def test_fast_facts(self):
        html = "<h2>Fast Facts</h2><div><p>Light: Full Sun</p><p>Days to Emerge: 7-10 days</p></div>"
        result = EdenBrothersParser().extract(html, self.ORIGIN, _meta(title="Zinnia"))
        assert result.sun == "Full Sun"
        assert result.days_to_germination == "7-10 days"

    def test_slug_values_rejected(self):
        assert EdenBrothersParser().accept_spec("full-sun") is None


class TestParkSeedParser:
    HTML = (
        '<script type="application/ld+json">{"@type": "Product", '
        '"image": ["https://cdn.parkseed.com/zinnia.jpg"], "description": "Short"}</script>'
        '<div class="pdp-specs"><dl><dt>Sun</dt><dd>Full Sun</dd>'
        "<dt>Plant Spacing</dt><dd>9-12 inches</dd>"
        "<dt>Days to Maturity</dt><dd>75-90 days</dd></dl></div>"
        '<div class="pdp-details__description"><p>Dazzling double blooms on sturdy stems all summer long.</p></div>'
    )

    def test_json_ld_then_specs(self):
        result = ParkSeedParser().extract(self.HTML, "https://parkseed.com", _meta())
        assert result.image_url == "https://cdn.parkseed.com/zinnia.jpg"
        assert result.plant_description == "Dazzling double blooms on sturdy stems all summer long."
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "9-12 inches"
        assert result.harvest_days == 83


class TestSwallowtailParser:
    def test_spec_list_in_main_content(self):
        html = (
            '<div class="main-content"><p>Tall heirloom cosmos with feathery foliage and crimson blooms '
            "that bring butterflies to the garden all season.</p>"
            "<ul><li>Planting Depth: 1/8 inch</li><li>Spacing: 12-18 inches</li></ul></div>"
        )
        result = SwallowtailParser().extract(html, "https://www.swallowtailgardenseeds.com", _meta())
        assert result.plant_spacing == "12-18 inches"
        assert result.growing_notes == "Planting Depth: 1/8 inch"
        assert result.plant_description.startswith("Tall heirloom cosmos")

    def test_missing_main_content(self):
        result = SwallowtailParser().extract("<p>Nothing here</p>", "https://www.swallowtailgardenseeds.com", _meta())
        assert result.plant_spacing is None
        assert result.plant_description is None


class TestSanDiegoSeedParser:
    def test_bold_labels(self):
        html = (
            "<h1>Anaheim Pepper</h1>"
            '<div class="product-description"><p>Mild, long green chile great for roasting and stuffing.</p>'
            "<p><strong>Days to Harvest:</strong> 80</p><p><strong>Sun:</strong> Full Sun</p>"
            "<p><strong>Spacing:</strong> 18 inches</p><p><strong>Germination:</strong> 7-14 days</p></div>"
        )
        result = SanDiegoSeedParser().extract(html, "https://sandiegoseedcompany.com", _meta())
        assert result.og_title == "Anaheim Pepper"
        assert result.harvest_days == 80
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "18 inches"
        assert result.days_to_germination == "7-14 days"
        assert result.plant_description.startswith("Mild, long green chile")


class TestFloretParser:
    def test_planting_instructions(self):
        html = (
            '<div class="product-details__description">'
            "<p>Cafe au Lait is a giant dinnerplate dahlia with blush petals.</p>"
            "<p>&larr; Previous Product</p>"
            "<h3>Planting Instructions</h3>"
            "<p>Spacing: 18-24 inches. Depth: 4 inches below the surface.</p></div>"
        )
        result = FloretParser().extract(html, "https://www.floretflowers.com", _meta())
        assert result.plant_spacing == "18–24 inches"
        assert result.growing_notes == "Planting Depth: 4 inches below the surface"
        assert result.plant_description.startswith("Cafe au Lait is a giant dinnerplate dahlia")
        assert "Previous Product" not in result.plant_description

    def test_long_specs_rejected(self):
        assert FloretParser().accept_spec("x" * 60) is None


class TestReneesGardenParser:
    def test_planting_and_growing_section(self):
        html = (
            '<div class="product-description">'
            "<p>Sweet, crunchy snap peas on compact vines that need little support.</p>"
            "<h3>Planting and Growing</h3>"
            "<p>Full Sun. Space 2-3 inches apart. Germinates in 10-14 days. Harvest in 60 days.</p></div>"
        )
        result = ReneesGardenParser().extract(html, "https://www.reneesgarden.com", _meta())
        assert result.sun == "Full Sun"
        assert result.plant_spacing == '2–3"'
        assert result.days_to_germination == "10–14 days"
        assert result.harvest_days == 60
        assert result.plant_description.startswith("Sweet, crunchy snap peas")


class TestNativePlantParser:
    def test_pretreatment_notes(self):
        html = "<p>For best germination, pour boiling water over the seeds and soak overnight.</p>"
        result = NativePlantParser().extract(html, "https://theodorepayne.org", _meta())
        assert result.pretreatment_notes == (
            "For best germination, pour boiling water over the seeds and soak overnight."
        )


class TestMIGardenerParser:
    def test_specs_chunk(self):
        html = '<div class="products-template__specs">Sun: Full Sun<br>Spacing: 6 inches<br></div>'
        result = MIGardenerParser().extract(html, "https://migardener.com", _meta())
        assert result.sun == "Full Sun"
        assert result.plant_spacing == "6 inches"

    def test_markup_rejected(self):
        assert MIGardenerParser().accept_spec('class="spec"') is None


class TestRow7Parser:
    def test_inline_labels(self):
        html = (
            "<h1>Badger Flame Beet Seeds</h1><p>Days to Maturity: 60</p>"
            '<p>Plant Spacing: 3-4"</p><p>7-14 days to emergence</p>'
        )
        result = Row7Parser().extract(html, "https://row7seeds.com", _meta())
        assert result.og_title == "Badger Flame Beet"
        assert result.harvest_days == 60
        assert result.plant_spacing == '3-4"'
        assert result.days_to_germination == "7-14 days"


class TestShopifyParsers:
    PROSE = (
        "<p>Compact bush bean with stringless pods.</p>"
        "<p>Full Sun. Space 4-6 inches apart. Germinates in 7-10 days. Matures in 55 days.</p></div>"
    )

    def test_product_description_block(self):
        html = '<div class="product-description">' + self.PROSE
        result = SuperSeedsParser().extract(html, "https://superseeds.com", _meta())
        assert result.plant_description.startswith("Compact bush bean with stringless pods.")
        assert result.sun == "Full Sun"
        assert result.plant_spacing == '4–6"'
        assert result.days_to_germination == "7–10 days"
        assert result.harvest_days == 55

    def test_custom_selector(self):
        html = '<div class="product__description rte">' + self.PROSE
        result = SowRightParser().extract(html, "https://sowrightseeds.com", _meta())
        assert result.plant_spacing == '4–6"'
        assert result.harvest_days == 55

    def test_missing_block(self):
        result = SowRightParser().extract("<div class='product-description'>x</div>", "https://sowrightseeds.com", _meta())
        assert result.plant_description is None
        assert result.sun is None

    def test_hudson_valley_full_story(self):
        html = (
            '<div class="product__description rte">'
            "<p>Cupani is the original sweet pea, with intensely fragrant bicolor blooms.</p>"
            "<p>Sow in full sun, spacing plants 6-8 inches apart. Blooms in 75 days.</p></div>"
        )
        result = HudsonValleyParser().extract(html, "https://hudsonvalleyseed.com", _meta())
        assert "Cupani is the original sweet pea" in result.plant_description
        assert "Blooms in 75 days." in result.plant_description
        assert result.sun == "full sun"
        assert result.plant_spacing == '6–8"'
        assert result.harvest_days == 75


class TestOldSchoolParsers:
    PROSE = (
        "<p>Open-pollinated slicer. Vigorous vines and reliable yields. Sow 1/2 inch deep. "
        "Transplant 18-24 inches apart. Germinates in 6-10 days. Ready in 70 days.</p></div>"
    )

    def test_fedco_prose(self):
        html = '<div class="product-description">' + self.PROSE
        result = FedcoParser().extract(html, "https://www.fedcoseeds.com", _meta())
        assert result.plant_description == (
            "Open-pollinated slicer. Vigorous vines and reliable yields. Sow 1/2 inch deep."
        )
        assert result.harvest_days == 70
        assert result.days_to_germination == "6–10 days"
        assert result.plant_spacing == "18–24 inches"

    def test_southern_exposure_uses_id(self):
        html = '<div id="product-description">' + self.PROSE
        result = SouthernExposureParser().extract(html, "https://southernexposure.com", _meta())
        assert result.harvest_days == 70
        assert result.plant_spacing == "18–24 inches"

    def test_inch_mark_spacing(self):
        html = '<div class="product-description"><p>Bush habit, space plants 8" apart in rows.</p></div>'
        result = FedcoParser().extract(html, "https://www.fedcoseeds.com", _meta())
        assert result.plant_spacing == '8"'
