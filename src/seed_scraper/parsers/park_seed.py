"""Park Seed (parkseed.com): JSON-LD first, then the ``pdp-specs`` grid."""

from __future__ import annotations

from seed_scraper.fuzzy import day_range_midpoint
from seed_scraper.models import ExtractionResult, Metadata, merge_results
from seed_scraper.parsers.base import (
    VendorParser,
    class_block,
    clean_description,
    json_ld_product_fields,
    labelled_value,
    og_description,
    text_of,
)


class ParkSeedParser(VendorParser):
    name = "park_seed"

    def fallback_description(self, html: str, metadata: Metadata) -> str | None:
        return og_description(metadata, min_len=0)

    def extract(self, html: str, origin: str, metadata: Metadata) -> ExtractionResult:
        result = json_ld_product_fields(html, origin)
        details = class_block(html, "pdp-details__description", 4000)
        specs = class_block(html, "pdp-specs", 4000)
        return merge_results(
            result,
            ExtractionResult(
                plant_description=clean_description(text_of(details)) if details else None,
                sun=labelled_value(specs, "Sun") if specs else None,
                plant_spacing=labelled_value(specs, "Plant Spacing") if specs else None,
                harvest_days=day_range_midpoint(labelled_value(specs, "Days to Maturity")) if specs else None,
            ),
        )
