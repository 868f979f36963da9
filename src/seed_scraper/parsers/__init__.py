"""Vendor parser registry with lazy imports.

A page host is matched against ``_PARSER_REGISTRY`` in order; the first host
fragment contained in the host wins. Unmatched hosts use the generic parser.
"""

from __future__ import annotations

import importlib
import logging

from seed_scraper.parsers.base import VendorParser

logger = logging.getLogger(__name__)

_PARSER_REGISTRY: list[tuple[str, str]] = [
    ("johnnyseeds.com", "seed_scraper.parsers.johnnys.JohnnysParser"),
    ("marysheirloomseeds.com", "seed_scraper.parsers.marys.MarysHeirloomParser"),
    ("rareseeds.com", "seed_scraper.parsers.baker_creek.BakerCreekParser"),
    ("territorialseed.com", "seed_scraper.parsers.territorial.TerritorialParser"),
    ("burpee.com", "seed_scraper.parsers.burpee.BurpeeParser"),
    ("highmowingseeds.com", "seed_scraper.parsers.high_mowing.HighMowingParser"),
    ("botanicalinterests.com", "seed_scraper.parsers.botanical_interests.BotanicalInterestsParser"),
    ("outsidepride.com", "seed_scraper.parsers.outside_pride.OutsidePrideParser"),
    ("edenbrothers.com", "seed_scraper.parsers.eden_brothers.EdenBrothersParser"),
    ("parkseed.com", "seed_scraper.parsers.park_seed.ParkSeedParser"),
    ("swallowtailgardenseeds.com", "seed_scraper.parsers.swallowtail.SwallowtailParser"),
    ("superseeds.com", "seed_scraper.parsers.shopify.SuperSeedsParser"),
    ("sowrightseeds.com", "seed_scraper.parsers.shopify.SowRightParser"),
    ("sandiegoseedcompany.com", "seed_scraper.parsers.san_diego.SanDiegoSeedParser"),
    ("floretflowers.com", "seed_scraper.parsers.floret.FloretParser"),
    ("reneesgarden.com", "seed_scraper.parsers.renees.ReneesGardenParser"),
    ("theodorepayne.org", "seed_scraper.parsers.native.NativePlantParser"),
    ("nativewest.com", "seed_scraper.parsers.native.NativePlantParser"),
    ("victoryseeds.com", "seed_scraper.parsers.shopify.VictorySeedsParser"),
    ("hudsonvalleyseed.com", "seed_scraper.parsers.shopify.HudsonValleyParser"),
    ("southernexposure.com", "seed_scraper.parsers.old_school.SouthernExposureParser"),
    ("fedcoseeds.com", "seed_scraper.parsers.old_school.FedcoParser"),
    ("migardener.com", "seed_scraper.parsers.migardener.MIGardenerParser"),
    ("row7seeds.com", "seed_scraper.parsers.row7.Row7Parser"),
]

_GENERIC_PARSER = "seed_scraper.parsers.generic.GenericParser"


def _load(dotted_path: str) -> VendorParser:
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    parser_class = getattr(module, class_name)
    return parser_class()


def get_parser(host: str) -> VendorParser:
    """Instantiate the parser for ``host``. Uses lazy imports."""
    host = host.lower()
    for fragment, dotted_path in _PARSER_REGISTRY:
        if fragment in host:
            parser = _load(dotted_path)
            logger.debug("Host %s matched %s parser", host, parser.name)
            return parser
    logger.debug("No vendor parser for %s; using generic", host)
    return _load(_GENERIC_PARSER)


def list_parsers() -> list[str]:
    """Host fragments with a dedicated parser, in dispatch order."""
    return [fragment for fragment, _ in _PARSER_REGISTRY]
