"""Identity resolution: plant name, variety name, and vendor name.

Each vendor names products differently. Some put the plant first in the
title, some only in the URL path, some use a ``-seeds-`` marker in the
slug. Vendor rules run first; the generic title parser is the fallback.
Whatever rule fires, the result never names a broad category ("Herbs",
"Flowers", ...) as the plant.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple
from urllib.parse import urlparse

from seed_scraper.defaults import CATEGORY_DEFAULTS
from seed_scraper.models import ExtractionResult, Identity, Metadata
from seed_scraper.sanitizer import (
    sanitize_text,
    strip_fedco_slug_noise,
    strip_title_noise,
    strip_vault_noise,
    to_title_case,
)
from seed_scraper.vendors import bare_host, vendor_display_name

logger = logging.getLogger(__name__)

FORBIDDEN_BROAD_TYPES = ("Herbs", "Flowers", "Vegetables", "Seeds")
GENERAL = "General"

_EXTENSION_RE = re.compile(r"\.(?:html?|aspx|php)$", re.IGNORECASE)
_DASH_ONLY_RE = re.compile(r"^[-—–]\s*$")
_USELESS_SLUG_RE = re.compile(r"^(?:product|products|seeds|seed|item|p)$", re.IGNORECASE)
_ERROR_TITLE_RE = re.compile(
    r"^(?:page\s*not\s*found|404\s*not\s*found|not\s*found|error)\b|page\s*not\s*found\s*[-–—]|floret\s*shop|^\d+\s*$",
    re.IGNORECASE,
)


class NamePair(NamedTuple):
    plant: str
    variety: str


def is_forbidden_broad_type(plant: str | None) -> bool:
    value = (plant or "").strip().lower()
    return any(t.lower() == value for t in FORBIDDEN_BROAD_TYPES)


def path_segments(url: str) -> list[str]:
    return [s for s in urlparse(url).path.split("/") if s]


def url_slug(url: str) -> str:
    """Last path segment without a page extension."""
    segments = path_segments(url)
    return _EXTENSION_RE.sub("", segments[-1]).strip() if segments else ""


def _join_clean(parts: list[str], clean: Callable[[str], str] = strip_vault_noise) -> str:
    return " ".join(p for p in (clean(part) for part in parts) if p)


# --- Slug grammars ---------------------------------------------------------

def parse_slug_plant_variety(slug: str) -> NamePair:
    """First slug part is the plant, the rest is the variety."""
    no_num = re.sub(r"[-_]?\d+$", "", slug).strip()
    parts = [p for p in (strip_vault_noise(x) for x in re.split(r"[-_]", no_num)) if p]
    if not parts:
        return NamePair(GENERAL, "")
    if len(parts) == 1:
        return NamePair(to_title_case(parts[0]), "")
    return NamePair(to_title_case(parts[0]), to_title_case(" ".join(parts[1:])))


def parse_eden_brothers_slug(slug: str) -> NamePair | None:
    """``lobelia-seeds-starship-blue`` -> Lobelia / Starship Blue.

    Also handles underscore slugs (``annual_phlox_seeds_dwarf_mixed``),
    variety-first nasturtiums, and ``<variety>-<plant>-seeds`` suffixes.
    """
    s = slug.strip()
    if len(s) < 3:
        return None
    lower = s.lower()
    parts = [p for p in s.replace("-", "_").split("_") if p]
    parts_lower = [p.lower() for p in parts]

    def index(word: str) -> int:
        return parts_lower.index(word) if word in parts_lower else -1

    phlox, seeds, annual = index("phlox"), index("seeds"), index("annual")
    if phlox != -1 and seeds != -1 and seeds >= phlox:
        if seeds + 1 < len(parts):
            variety = _join_clean(parts[seeds + 1:])
        elif annual > 0:
            variety = _join_clean(parts[:annual])
        elif phlox > 0:
            variety = _join_clean(parts[:phlox])
        else:
            variety = ""
        return NamePair("Phlox", to_title_case(variety.strip()) or "")

    nasturtium = index("nasturtium")
    if nasturtium != -1 and seeds != -1 and seeds > nasturtium:
        variety = _join_clean(parts[:nasturtium])
        if variety:
            return NamePair("Nasturtium", to_title_case(variety))

    if "-seeds-" not in lower and len(parts) >= 2 and parts_lower[0] == "nasturtium":
        variety = _join_clean(parts[1:])
        if variety:
            return NamePair("Nasturtium", to_title_case(variety))

    if "-seeds-" in lower:
        idx = lower.index("-seeds-")
        plant_part = s[:idx].replace("-", " ").strip()
        variety_part = s[idx + 7:].replace("-", " ").strip()
        if plant_part and variety_part:
            return NamePair(
                to_title_case(strip_vault_noise(plant_part)) or GENERAL,
                to_title_case(strip_vault_noise(variety_part)) or "",
            )

    suffix = re.match(r"^(.+?)-(pepper|tomato|lettuce|cucumber|bean|squash)s?-seeds?$", s, re.IGNORECASE)
    if suffix:
        variety_part = re.sub(r"^organic-?", "", suffix.group(1), flags=re.IGNORECASE).replace("-", " ").strip()
        if variety_part:
            return NamePair(to_title_case(suffix.group(2)), to_title_case(strip_vault_noise(variety_part)) or "")
    return None


def parse_fedco_slug(slug: str) -> NamePair:
    """``maxibel-organic-bush-haricots-verts-249`` -> Bean / Maxibel Bush Haricots Verts."""
    no_num = re.sub(r"[-_]?\d+$", "", slug).strip()
    parts = [p for p in re.split(r"[-_]", no_num) if p]
    slug_lower = no_num.lower()
    if re.search(r"\bharicots-verts\b|\bharicotsverts\b|\bbush-bean\b|\bbushbean\b", slug_lower):
        return NamePair("Bean", to_title_case(_join_clean(parts, strip_fedco_slug_noise)) or "")
    cleaned = [p for p in (strip_fedco_slug_noise(x) for x in parts) if p]
    if not cleaned:
        return NamePair(GENERAL, "")
    if len(cleaned) == 1:
        return NamePair(to_title_case(cleaned[0]), "")
    return NamePair(to_title_case(cleaned[-1]), to_title_case(" ".join(cleaned[:-1])))


# --- Title grammar ---------------------------------------------------------

def _best_category_match(cleaned: str) -> tuple[str, int] | None:
    """Category key occurring as whole words, preferring the one ending latest."""
    lower = cleaned.lower()
    best: tuple[str, int] | None = None
    for key in sorted(CATEGORY_DEFAULTS, key=len, reverse=True):
        k = key.lower()
        idx = lower.rfind(k)
        if idx == -1:
            continue
        end = idx + len(k)
        ends_on_word = end == len(lower) or lower[end].isspace()
        starts_on_word = idx == 0 or lower[idx - 1].isspace()
        if ends_on_word and starts_on_word and (best is None or end > best[1]):
            best = (key, end)
    return best


def parse_plant_variety_from_title(title: str) -> NamePair:
    """Known category in the title is the plant; the text around it is the variety.

    Falls back to last-word-is-plant.
    """
    cleaned = (strip_title_noise(title) or "").strip()
    if not cleaned:
        return NamePair(GENERAL, "")
    match = _best_category_match(cleaned)
    if match:
        key, end = match
        before = cleaned[: end - len(key)].strip()
        after = cleaned[end:].strip()
        variety = (strip_title_noise(before) or "").strip() or (strip_title_noise(after) or "").strip()
        return NamePair(to_title_case(key), to_title_case(variety) if variety else "")
    words = cleaned.split()
    if len(words) == 1:
        return NamePair(to_title_case(words[0]), "")
    return NamePair(to_title_case(words[-1]), to_title_case(" ".join(words[:-1])))


def _first_word_is_plant(title: str) -> NamePair:
    words = (strip_title_noise(title) or "").strip().split()
    if len(words) >= 2:
        return NamePair(to_title_case(words[0]), to_title_case(" ".join(words[1:])))
    if len(words) == 1:
        return NamePair(to_title_case(words[0]), "")
    return parse_plant_variety_from_title(title or GENERAL)


# --- Vendor rules ----------------------------------------------------------

class _Context(NamedTuple):
    title: str
    url: str
    result: ExtractionResult


def _select_seeds(ctx: _Context) -> NamePair | None:
    if re.search(r"cupani", ctx.title or urlparse(ctx.url).path, re.IGNORECASE):
        return NamePair("Sweet Pea", "Cupani")
    return None


def _sow_right(ctx: _Context) -> NamePair | None:
    if re.match(r"cucumber\s+", ctx.title, re.IGNORECASE):
        return NamePair("Cucumber", re.sub(r"^cucumber\s+", "", ctx.title, flags=re.IGNORECASE).strip())
    return None


def _first_word_vendor(ctx: _Context) -> NamePair | None:
    return _first_word_is_plant(ctx.title) if ctx.title else None


def _eden_brothers(ctx: _Context) -> NamePair | None:
    slug = url_slug(ctx.url)
    from_slug = parse_eden_brothers_slug(slug) if slug else None
    if from_slug and (from_slug.plant != GENERAL or from_slug.variety):
        return from_slug
    if not ctx.title:
        return NamePair(GENERAL, "")
    cleaned = re.sub(r"\bSeeds?\s*$", "", ctx.title, flags=re.IGNORECASE).strip()
    cleaned = (strip_title_noise(cleaned) or "").strip()
    match = _best_category_match(cleaned)
    if match:
        key, end = match
        before = cleaned[: end - len(key)].strip()
        return NamePair(to_title_case(key), to_title_case(strip_title_noise(before).strip()) if before else "")
    return parse_plant_variety_from_title(cleaned or GENERAL)


def _rare_seeds(ctx: _Context) -> NamePair | None:
    if not ctx.title:
        return None
    crumb = (ctx.result.plant_name_hint or "").strip()
    if crumb:
        variety = (strip_title_noise(ctx.title) or "").strip()
        idx = variety.lower().rfind(crumb.lower())
        if idx != -1:
            variety = re.sub(r"\s+", " ", f"{variety[:idx].strip()} {variety[idx + len(crumb):].strip()}").strip()
        pair = NamePair(to_title_case(crumb), to_title_case(variety) if variety else "")
    else:
        pair = parse_plant_variety_from_title(ctx.title)
    if not pair.variety or _DASH_ONLY_RE.match(pair.variety.strip()):
        slug = url_slug(ctx.url)
        if slug:
            pair = parse_slug_plant_variety(slug)
    return pair


def _burpee(ctx: _Context) -> NamePair | None:
    slug = url_slug(ctx.url)
    if re.match(r"^prod\d+$", ctx.title.strip(), re.IGNORECASE) and slug:
        return parse_slug_plant_variety(slug)
    if ctx.title:
        if "," in ctx.title:
            plant, _, variety = ctx.title.partition(",")
            pair = NamePair(to_title_case(plant.strip()), to_title_case(variety.strip()))
        else:
            pair = parse_plant_variety_from_title(ctx.title)
        if (not pair.variety or _DASH_ONLY_RE.match(pair.variety.strip())) and slug:
            pair = parse_slug_plant_variety(slug)
        return pair
    if slug:
        return parse_slug_plant_variety(slug)
    return NamePair(GENERAL, "")


def _row7(ctx: _Context) -> NamePair | None:
    if not ctx.title:
        return None
    words = re.sub(r"\bSeeds\s*$", "", ctx.title, flags=re.IGNORECASE).strip().split()
    if len(words) >= 2:
        return NamePair(to_title_case(words[-1]), to_title_case(" ".join(words[:-1])))
    if len(words) == 1:
        return NamePair(to_title_case(words[0]), "")
    return parse_plant_variety_from_title(ctx.title or GENERAL)


def _outside_pride(ctx: _Context) -> NamePair | None:
    segments = path_segments(ctx.url)
    slug = url_slug(ctx.url)
    category = segments[-2] if len(segments) >= 2 else ""
    plant, variety = "", ""
    if slug:
        lower = slug.lower()
        if "-seeds-" in lower:
            idx = lower.index("-seeds-")
            left = slug[:idx].replace("-", " ").strip()
            right = slug[idx + 7:].replace("-", " ").strip()
            if left and right:
                plant = to_title_case(strip_vault_noise(left))
                variety = to_title_case(strip_vault_noise(right))
        if not plant or not variety:
            from_category = ""
            if category.lower().endswith("-seeds"):
                from_category = category[:-6].replace("-", " ").strip()
            elif category and category.lower() not in ("flower-seed", "flower"):
                from_category = category.replace("-", " ").strip()
            from_slug = lower.split("-seeds-")[0].replace("-", " ").strip()
            base = from_category or from_slug
            if base:
                plant = to_title_case(base)
                prefix = re.sub(r"\s+", "-", base.lower()) + "-seeds-"
                rest = lower[len(prefix):].replace("-", " ").strip() if lower.startswith(prefix) else lower
                variety = to_title_case(strip_vault_noise(rest)) if rest else ""
    if not plant:
        plant = to_title_case(category.replace("-", " ")) if category else GENERAL
        variety = to_title_case(slug.replace("-", " ")) if slug else ""
    if plant == GENERAL and slug:
        parts = [p for p in slug.split("-") if p]
        plant = to_title_case(parts[0]) if parts else GENERAL
        variety = to_title_case(" ".join(parts[1:])) if len(parts) > 1 else ""
    if re.match(r"^flower(?:s|\s*seed)?$", plant.strip(), re.IGNORECASE) and slug:
        first = next((p for p in slug.split("-") if p), "")
        if first:
            plant = to_title_case(first)
    if plant == "Sweet Violet":
        plant = "Sweet Viola"
    return NamePair(plant, variety)


_SWALLOWTAIL_TOP = ("annuals", "perennials", "herbs", "vegetables", "bulk", "flowering-vines")


def _swallowtail(ctx: _Context) -> NamePair | None:
    segments = path_segments(ctx.url)
    slug = url_slug(ctx.url)
    parents = segments[:-1]
    title_variety = to_title_case(strip_title_noise(ctx.title).strip()) if ctx.title else ""
    if parents and slug:
        segment = parents[-1]
        if segment.lower() in _SWALLOWTAIL_TOP:
            return parse_slug_plant_variety(slug)
        plant = to_title_case(segment.replace("-", " "))
        if plant.endswith("s") and len(plant) > 1:
            plant = plant[:-1]
        variety_slug = re.sub(r"-seeds?$", "", slug, flags=re.IGNORECASE)
        variety_slug = re.sub(r"-flowers?$", "", variety_slug, flags=re.IGNORECASE).strip()
        plant_lower = plant.lower()
        if variety_slug.lower().endswith(plant_lower):
            variety_slug = variety_slug[: -len(plant_lower)].rstrip("-").strip()
        if variety_slug and variety_slug.lower() != plant_lower:
            return NamePair(plant, to_title_case(strip_vault_noise(variety_slug.replace("-", " "))) or "")
        return NamePair(plant, title_variety)
    if parents and parents[-1].lower() not in _SWALLOWTAIL_TOP:
        return NamePair(to_title_case(parents[-1].replace("-", " ")), title_variety)
    return parse_plant_variety_from_title(ctx.title or GENERAL)


def _fedco(ctx: _Context) -> NamePair | None:
    slug = url_slug(ctx.url)
    if slug:
        pair = parse_fedco_slug(slug)
    else:
        pair = parse_plant_variety_from_title(ctx.title or GENERAL)
    variety = re.sub(r"\s*[-|:]+\s*$", "", strip_fedco_slug_noise(pair.variety) or "").strip()
    plant = GENERAL if re.match(r"^fedco\s*$", pair.plant, re.IGNORECASE) else pair.plant
    return NamePair(plant, variety)


def _johnnys(ctx: _Context) -> NamePair | None:
    segments = path_segments(ctx.url)
    parents = segments[:-1]
    slug = url_slug(ctx.url)
    title = ctx.title.strip()
    slug_without_code = re.sub(r"-\d+[a-z]*$", "", slug, flags=re.IGNORECASE).rstrip("-").strip()
    title_is_code = bool(
        re.match(r"^\d+[a-z]*$", title, re.IGNORECASE)
        or (len(title) <= 8 and re.search(r"\d+[a-z]*", title, re.IGNORECASE))
    )
    title_variety = to_title_case(strip_title_noise(title).strip()) if title and not title_is_code else ""

    if len(parents) == 1 and slug:
        return NamePair(to_title_case(slug.replace("-", " ")), title_variety)
    if len(parents) >= 2 and (slug_without_code or title_is_code):
        plant = to_title_case(parents[-1].replace("-", " "))
        if not slug_without_code:
            return NamePair(plant, title_variety)
        variety = re.sub(r"-organic\b", "", slug_without_code, flags=re.IGNORECASE)
        variety = re.sub(r"-lettuce\b", "", variety, flags=re.IGNORECASE)
        variety = re.sub(r"-seeds?\b", "", variety, flags=re.IGNORECASE)
        variety = re.sub(r"-bean(?:-seed)?$", "", variety, flags=re.IGNORECASE)
        variety = re.sub(r"-+", " ", variety).strip()
        plant_lower = re.sub(r"\s+", " ", plant.lower())
        if variety.lower().endswith(plant_lower):
            variety = variety[: -len(plant_lower)].strip()
        return NamePair(plant, to_title_case(strip_vault_noise(variety)) or "")
    return parse_plant_variety_from_title(title or GENERAL)


# First host fragment that matches wins.
_VENDOR_RULES: list[tuple[str, Callable[[_Context], NamePair | None]]] = [
    ("selectseeds.com", _select_seeds),
    ("sowrightseeds.com", _sow_right),
    ("floretflowers.com", _first_word_vendor),
    ("edenbrothers.com", _eden_brothers),
    ("rareseeds.com", _rare_seeds),
    ("growitalian.com", _first_word_vendor),
    ("burpee.com", _burpee),
    ("row7seeds.com", _row7),
    ("outsidepride.com", _outside_pride),
    ("swallowtailgardenseeds.com", _swallowtail),
    ("fedcoseeds.com", _fedco),
    ("johnnyseeds.com", _johnnys),
]


def _clean_title(title: str, host: str) -> str:
    if "selectseeds.com" in host:
        title = re.sub(r"\.aspx\b", "", title, flags=re.IGNORECASE).strip()
    if "territorialseed.com" in host:
        title = title.split("|")[0].strip()
        title = re.sub(r"\b(?:Seed|Pelleted|Tape)\b", " ", title, flags=re.IGNORECASE)
        title = re.sub(r"\s+", " ", title).strip()
    return title


def _enforce_broad_type_rule(pair: NamePair, host: str, url: str) -> NamePair:
    """Re-derive a plant named after a broad category from the variety or the slug."""
    if not is_forbidden_broad_type(pair.plant):
        return pair
    slug = url_slug(url)
    slug_has_parts = bool(slug) and bool(re.search(r"[-_]", slug))
    if "reneesgarden.com" in host and slug_has_parts:
        from_slug = parse_slug_plant_variety(slug)
        if from_slug.plant and not is_forbidden_broad_type(from_slug.plant):
            pair = from_slug
    if is_forbidden_broad_type(pair.plant):
        words = pair.variety.strip().split()
        if len(words) >= 2:
            pair = NamePair(to_title_case(words[-1]), to_title_case(" ".join(words[:-1])))
        elif slug_has_parts:
            from_slug = parse_slug_plant_variety(slug)
            if from_slug.plant and not is_forbidden_broad_type(from_slug.plant):
                pair = from_slug
    return pair


def _finish_name(value: str) -> str:
    value = sanitize_text(value)
    return to_title_case(strip_vault_noise(value)) or value


def resolve_vendor_name(result: ExtractionResult, url: str, metadata: Metadata | None) -> str:
    host = bare_host(url)
    vendor = result.vendor or (metadata.site_name if metadata else None)
    vendor = sanitize_text(vendor) if vendor else ""
    if not vendor:
        vendor = vendor_display_name(host)
    if "rareseeds.com" in host:
        vendor = "Rare Seeds"
    return vendor


def resolve_identity(
    result: ExtractionResult,
    url: str,
    metadata: Metadata | None = None,
) -> Identity:
    """Derive plant, variety, and vendor names for a scraped page."""
    host = bare_host(url)
    raw_title = (result.og_title or (metadata.title if metadata else None) or "").strip()
    title = _clean_title(raw_title, host)
    ctx = _Context(title=title, url=url, result=result)

    pair: NamePair | None = None
    for fragment, rule in _VENDOR_RULES:
        if fragment in host:
            pair = rule(ctx)
            break
    if pair is None:
        pair = parse_plant_variety_from_title(title or GENERAL)

    pair = NamePair(pair.plant, re.sub(r"\s*[-|:]+\s*$", "", pair.variety).strip())
    pair = _enforce_broad_type_rule(pair, host, url)

    plant = _finish_name(pair.plant) or GENERAL
    variety = _finish_name(pair.variety)
    if "highmowingseeds.com" in host:
        plant = re.sub(r"\s+", " ", re.sub(r"\s*Pelleted\s*", " ", plant, flags=re.IGNORECASE)).strip() or plant
        variety = re.sub(r"\s+", " ", re.sub(r"\s*Pelleted\s*", " ", variety, flags=re.IGNORECASE)).strip()
    if is_forbidden_broad_type(plant):
        plant = GENERAL
    if variety.lower() == plant.lower():
        variety = ""

    identity = Identity(
        plant_name=plant,
        variety_name=variety,
        vendor_name=resolve_vendor_name(result, url, metadata),
    )
    logger.debug("Resolved identity %s / %s (%s)", identity.plant_name, identity.variety_name, host)
    return identity


# --- Known plant types (Baker Creek) ---------------------------------------

def decode_rare_seeds_slug(slug: str) -> str:
    """``benary-s-giant`` -> ``Benary's Giant``."""
    text = re.sub(r"-s(?=-|$)", "'s", slug, flags=re.IGNORECASE)
    text = re.sub(r"-t(?=-|$)", "'t", text, flags=re.IGNORECASE)
    return to_title_case(text.replace("-", " ").strip())


def identity_from_known_types(slug: str, known_plant_types: list[str]) -> NamePair:
    """Longest known plant type at the start of the decoded slug is the plant."""
    spaced = decode_rare_seeds_slug(slug)
    if not spaced:
        return NamePair(GENERAL, "")
    known = sorted(
        (to_title_case(t.strip()) for t in known_plant_types if t and t.strip()),
        key=len,
        reverse=True,
    )
    for plant_type in known:
        if spaced.lower() == plant_type.lower():
            return NamePair(plant_type, "")
        if spaced.lower().startswith(plant_type.lower() + " "):
            rest = spaced[len(plant_type):].strip()
            rest = re.sub(r"^Seeds\s+", "", rest, flags=re.IGNORECASE).strip()
            return NamePair(plant_type, rest)
    words = spaced.split()
    if len(words) == 1:
        return NamePair(words[0], "")
    return NamePair(words[0], " ".join(words[1:]))


# --- Blocked pages ---------------------------------------------------------

def plant_name_from_slug(url: str) -> str:
    """Title-cased slug with separators turned into spaces; "" when not useful."""
    name = url_slug(url)
    name = re.sub(r"[-_]", " ", name)
    name = re.sub(r"\b\w", lambda m: m.group(0).upper(), name).strip()
    if len(name) <= 1 or _USELESS_SLUG_RE.match(name):
        return ""
    return name


def looks_like_error_title(title: str) -> bool:
    title = title.strip()
    return len(title) < 3 or bool(_ERROR_TITLE_RE.search(title))


def blocked_plant_name(url: str, error_page_title: str | None = None) -> str:
    """Plant name for a page the vendor refused to serve."""
    name = plant_name_from_slug(url)
    if name:
        return name
    title = (error_page_title or "").strip()
    if title and not looks_like_error_title(title):
        return title
    return "vegetable"
