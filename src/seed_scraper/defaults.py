"""Static plant-category defaults, the regional planting schedule, and the default applier."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from seed_scraper.fuzzy import first_day_count, round_half_up
from seed_scraper.models import ExtractionResult, Provenance, is_present
from seed_scraper.sanitizer import sanitize_plant_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryDefaults:
    sun: str
    plant_spacing: str
    days_to_germination: str
    water: str | None = None
    harvest_days: str | None = None
    life_cycle: str | None = None


GENERAL_CATEGORY = "general"

# Looked up from the page's plant type or the plant name; "general" is the fallback.
CATEGORY_DEFAULTS: dict[str, CategoryDefaults] = {
    "Tomato": CategoryDefaults("Full Sun", "18–36\"", "7–14 Days", water="Consistent"),
    "Eggplant": CategoryDefaults("Full Sun", "18–24\"", "7–14 Days", water="Moderate"),
    "Onion": CategoryDefaults("Full Sun", "3–5\"", "10–14 Days", water="Frequent"),
    "Leek": CategoryDefaults("Full Sun", "4–6\"", "10–14 Days", water="Moderate"),
    "Carrot": CategoryDefaults("Full Sun", "2–3\"", "14–21 Days", water="Consistent"),
    "Corn": CategoryDefaults("Full Sun", "8–12\"", "7–10 Days", water="Heavy"),
    "Pepper": CategoryDefaults("Full Sun", "12–18\"", "10–21 Days", water="Moderate"),
    "Squash": CategoryDefaults("Full Sun", "24–36\"", "7–10 Days", water="Heavy"),
    "Okra": CategoryDefaults("Full Sun", "12–18\"", "7–14 Days", water="Moderate"),
    "Broccoli": CategoryDefaults("Full Sun", "18–24\"", "7–10 Days", water="Consistent"),
    "Cabbage": CategoryDefaults("Full Sun", "12–18\"", "7–10 Days", water="Consistent"),
    "Kohlrabi": CategoryDefaults("Full Sun", "4–6\"", "5–10 Days", water="Consistent"),
    "Bean": CategoryDefaults(
        "Full Sun", "2-4 inches", "8-10 days", harvest_days="50-70 days", life_cycle="Annual"
    ),
    "Beet": CategoryDefaults(
        "Full Sun / Partial Shade", "3-4 inches", "7-14 days",
        harvest_days="50-60 days", life_cycle="Annual",
    ),
    "Cucumber": CategoryDefaults(
        "Full Sun", "12 inches", "7-10 days", harvest_days="50-70 days", life_cycle="Annual"
    ),
    "Sweet Pea": CategoryDefaults(
        "Full Sun", "6 inches", "10-28 days", harvest_days="70-90 days", life_cycle="Annual"
    ),
    "Sunflower": CategoryDefaults("Full Sun", "12–24\"", "7–14 Days", water="Moderate"),
    "Zinnia": CategoryDefaults("Full Sun", "9–12\"", "5–10 Days", water="Moderate"),
    "Marigold": CategoryDefaults("Full Sun", "8–12\"", "5–10 Days", water="Moderate"),
    "Dahlia": CategoryDefaults("Full Sun", "12–18\"", "7–14 Days", water="Low Water"),
    "California Native": CategoryDefaults("Full Sun", "12–24\"", "14–21 Days", water="Low Water"),
    "Banana": CategoryDefaults("Full Sun", "6-10 feet", "varies", water="Moderate"),
    GENERAL_CATEGORY: CategoryDefaults("Full Sun", "12–24\"", "7–21 Days", water="Moderate"),
}

_KEYS_BY_LENGTH = sorted(CATEGORY_DEFAULTS, key=len, reverse=True)


def category_for(type_hint: str | None, plant_name: str | None) -> str | None:
    """Resolve a category key from a page type hint first, then the plant name.

    Keys are tried longest first. A multi-word key matches when all of its
    words appear.
    """
    if type_hint and type_hint.strip():
        sanitized = (sanitize_plant_type(type_hint) or "").lower()
        if sanitized:
            for key in _KEYS_BY_LENGTH:
                k = key.lower()
                if k == sanitized or k in sanitized:
                    return key
                if " " in k and all(w in sanitized for w in k.split()):
                    return key
    name = (plant_name or "").strip().lower()
    if not name:
        return None
    for key in _KEYS_BY_LENGTH:
        k = key.lower()
        if " " in k:
            if all(w in name for w in k.split()):
                return key
        elif k in name:
            return key
    return None


def apply_category_defaults(
    result: ExtractionResult,
    plant_name: str | None,
    type_hint: str | None = None,
) -> ExtractionResult:
    """Fill empty growing fields from the category table and tag provenance.

    Present values are tagged ``scrape``; filled values are tagged ``default``
    and always equal the table entry for the resolved category.
    """
    category = category_for(type_hint, plant_name) or GENERAL_CATEGORY
    d = CATEGORY_DEFAULTS[category]
    logger.debug("Applying %s defaults for %r", category, plant_name)

    changes: dict[str, object] = {}
    provenance = dict(result.provenance)
    for name, default in (
        ("sun", d.sun),
        ("water", d.water),
        ("plant_spacing", d.plant_spacing),
        ("days_to_germination", d.days_to_germination),
    ):
        # A value filled by an earlier pass is re-resolved, not promoted to scraped
        if result.has(name) and result.source(name) is not Provenance.DEFAULT:
            provenance[name] = Provenance.SCRAPED
        elif default:
            changes[name] = default
            provenance[name] = Provenance.DEFAULT
        else:
            if result.source(name) is Provenance.DEFAULT:
                changes[name] = None
            provenance.pop(name, None)

    if d.harvest_days and result.harvest_days is None:
        days = first_day_count(d.harvest_days)
        if days is not None:
            changes["harvest_days"] = days
    if d.life_cycle and not is_present(result.life_cycle):
        changes["life_cycle"] = d.life_cycle

    changes["provenance"] = provenance
    return result.model_copy(update=changes)


# --- Regional schedule -----------------------------------------------------

@dataclass(frozen=True)
class ScheduleEntry:
    sun: str
    spacing: str
    germination_time: str | None = None
    days_to_maturity: str | None = None


def _entry(sun: str, spacing: str, germination: str = "", maturity: str = "") -> ScheduleEntry:
    return ScheduleEntry(sun, spacing, germination or None, maturity or None)


# Zone 10b (coastal Southern California) planting reference.
REGIONAL_SCHEDULE: dict[str, ScheduleEntry] = {
    "Tomato": _entry("Full Sun", "24-36 inches", "7-14 days", "75-90 days"),
    "Pepper": _entry("Full Sun", "12-18 inches", "10-21 days", "70-90 days"),
    "Eggplant": _entry("Full Sun", "18-24 inches", "7-14 days", "70-85 days"),
    "Squash": _entry("Full Sun", "24-36 inches", "7-10 days", "50-60 days"),
    "Zucchini": _entry("Full Sun", "24-36 inches", maturity="45-55 days"),
    "Cucumber": _entry("Full Sun", "12 inches", "3-10 days", "55-70 days"),
    "Melon": _entry("Full Sun", "36-48 inches", maturity="70-100 days"),
    "Watermelon": _entry("Full Sun", "36-60 inches", maturity="80-100 days"),
    "Banana": _entry("Full Sun", "6-10 feet", maturity="varies"),
    "Corn": _entry("Full Sun", "12 inches", "7-14 days", "75-90 days"),
    "Beans": _entry("Full Sun", "4-6 inches", "7-10 days", "50-65 days"),
    "Sweet Potato": _entry("Full Sun", "12-18 inches", maturity="90-120 days"),
    "Okra": _entry("Full Sun", "12-18 inches", "10-14 days", "50-65 days"),
    "Pumpkin": _entry("Full Sun", "36-60 inches", maturity="90-120 days"),
    "Tomatillo": _entry("Full Sun", "24-36 inches", "7-14 days", "75-100 days"),
    "Lettuce": _entry("Part Shade / Full Sun", "6-10 inches", "7-14 days", "45-60 days"),
    "Kale": _entry("Full Sun / Part Shade", "12-18 inches", "5-10 days", "50-65 days"),
    "Swiss Chard": _entry("Full Sun / Part Shade", "8-12 inches", maturity="50-60 days"),
    "Spinach": _entry("Part Shade", "4-6 inches", "7-14 days", "40-50 days"),
    "Arugula": _entry("Full Sun / Part Shade", "4-6 inches", maturity="30-40 days"),
    "Carrot": _entry("Full Sun", "2-3 inches", "14-21 days", "60-80 days"),
    "Beet": _entry("Full Sun", "3-4 inches", "5-10 days", "50-70 days"),
    "Radish": _entry("Full Sun", "2-3 inches", "3-5 days", "25-30 days"),
    "Broccoli": _entry("Full Sun", "18-24 inches", "7-10 days", "60-80 days"),
    "Cauliflower": _entry("Full Sun", "18-24 inches", maturity="60-80 days"),
    "Brussels Sprouts": _entry("Full Sun", "18-24 inches", maturity="90-110 days"),
    "Cabbage": _entry("Full Sun", "12-18 inches", "5-10 days", "70-90 days"),
    "Fennel": _entry("Full Sun", "8-12 inches", "7-14 days", "65-90 days"),
    "Kohlrabi": _entry("Full Sun", "6-8 inches", "5-10 days", "45-60 days"),
    "Leeks": _entry("Full Sun", "6 inches", "10-14 days", "90-120 days"),
    "Bok Choy": _entry("Full Sun / Part Shade", "6-10 inches", "5-7 days", "45-60 days"),
    "Turnips": _entry("Full Sun", "3-4 inches", "5-10 days", "40-60 days"),
    "Artichoke": _entry("Full Sun", "36-48 inches"),
    "Peas": _entry("Full Sun", "2-4 inches", "7-14 days", "60-70 days"),
    "Onion": _entry("Full Sun", "4-6 inches", maturity="100-120 days"),
    "Garlic": _entry("Full Sun", "4-6 inches", maturity="240 days"),
    "Asparagus": _entry("Full Sun", "12-18 inches"),
    "Potato": _entry("Full Sun", "12 inches", maturity="90-110 days"),
    "Basil": _entry("Full Sun", "10-12 inches", "5-10 days"),
    "Cilantro": _entry("Full Sun / Part Shade", "4-8 inches", "7-10 days"),
    "Dill": _entry("Full Sun", "8-12 inches", "10-14 days"),
    "Parsley": _entry("Full Sun / Part Shade", "6-10 inches", "14-28 days"),
    "Chives": _entry("Full Sun", "6-8 inches", "10-14 days"),
    "Celosia": _entry("Full Sun", "9-12 inches", "7-14 days", "90-100 days"),
    "Zinnia": _entry("Full Sun", "9-12 inches", "5-7 days"),
    "Sunflower": _entry("Full Sun", "18-24 inches", "7-14 days"),
    "Cosmos": _entry("Full Sun", "9-12 inches", "5-10 days"),
    "Marigold": _entry("Full Sun", "8-12 inches", "5-7 days"),
    "Dahlia": _entry("Full Sun", "12-24 inches"),
    "Poppy": _entry("Full Sun", "6-8 inches", "10-20 days"),
    "Nasturtium": _entry("Full Sun / Part Shade", "8-12 inches", "7-14 days", "50-60 days"),
    "Calendula": _entry("Full Sun", "8-12 inches", "7-14 days", "45-60 days"),
    "Lisianthus": _entry("Full Sun", "6-8 inches", "14-20 days"),
    "Snapdragon": _entry("Full Sun", "6-10 inches", "10-14 days"),
    "Strawberry": _entry("Full Sun", "12 inches"),
}


def lookup_schedule(plant_name: str | None) -> ScheduleEntry | None:
    """Exact title-cased key, then the first word, then the longest contained key."""
    if not plant_name or not plant_name.strip():
        return None
    normalized = re.sub(r"\b\w", lambda m: m.group(0).upper(), plant_name.strip().lower())
    if normalized in REGIONAL_SCHEDULE:
        return REGIONAL_SCHEDULE[normalized]
    first = normalized.split()[0]
    if first in REGIONAL_SCHEDULE:
        return REGIONAL_SCHEDULE[first]
    lower = normalized.lower()
    for key in sorted(REGIONAL_SCHEDULE, key=len, reverse=True):
        if key.lower() in lower:
            return REGIONAL_SCHEDULE[key]
    return None


def parse_days_to_maturity(text: str | None) -> int | None:
    """``"75-90 days"`` -> 83 (rounded midpoint); ``"240 days"`` -> 240."""
    if not text:
        return None
    rng = re.search(r"(\d+)\s*[-–]\s*(\d+)", text)
    if rng:
        return round_half_up((int(rng.group(1)) + int(rng.group(2))) / 2)
    single = re.search(r"\d+", text)
    return int(single.group(0)) if single else None


def backfill_from_schedule(result: ExtractionResult, plant_name: str | None) -> ExtractionResult:
    """Fill sun, spacing, germination, and maturity gaps from the regional schedule."""
    entry = lookup_schedule(plant_name)
    if entry is None:
        return result
    changes: dict[str, object] = {}
    if not result.has("sun") and entry.sun:
        changes["sun"] = entry.sun
    if not result.has("plant_spacing") and entry.spacing:
        changes["plant_spacing"] = entry.spacing
    if not result.has("days_to_germination") and entry.germination_time:
        changes["days_to_germination"] = entry.germination_time
    if not result.harvest_days and entry.days_to_maturity:
        days = parse_days_to_maturity(entry.days_to_maturity)
        if days is not None:
            changes["harvest_days"] = days
    return result.model_copy(update=changes) if changes else result


# --- Regional maturity defaults --------------------------------------------

REGIONAL_MATURITY_DAYS: dict[str, int] = {
    "Celosia": 90,
    "Tomato": 85,
    "Pepper": 90,
    "Zinnia": 75,
    "Sunflower": 80,
    "Squash": 55,
    "Marigold": 60,
}

REGIONAL_MATURITY_NOTE = "Note: Using local Zone 10b default DTM."


def apply_regional_maturity(result: ExtractionResult, plant_name: str | None) -> ExtractionResult:
    """Set harvest_days from the regional table when missing, noting it in growing_notes."""
    if result.harvest_days:
        return result
    name = (plant_name or result.og_title or "").strip().lower()
    if not name:
        return result
    for key, days in REGIONAL_MATURITY_DAYS.items():
        if key.lower() in name:
            notes = (result.growing_notes or "").strip()
            note = f"{notes}\n\n{REGIONAL_MATURITY_NOTE}" if notes else REGIONAL_MATURITY_NOTE
            return result.model_copy(update={"harvest_days": days, "growing_notes": note})
    return result
