"""Keyword-anchored extraction: the generic primitive every parser falls back to."""

from __future__ import annotations

import re

from seed_scraper.sanitizer import contains_blacklist, filter_surgical_description, sanitize_text

SPACING_KEYWORDS = ["spacing", "plant spacing", "sowing rate", "distancia"]
GERMINATION_KEYWORDS = ["germination", "days to sprout", "emergence", "days to germination"]
SUN_KEYWORDS = ["sun", "light", "exposure", "full sun", "part sun"]
MATURITY_KEYWORDS = ["maturity", "days to harvest", "fruit set", "days to maturity"]
LATIN_NAME_KEYWORDS = ["latin name", "latin", "botanical name", "scientific name", "species"]
LIFE_CYCLE_KEYWORDS = ["life cycle", "plant type", "growth habit", "habit"]
HYBRID_KEYWORDS = ["hybrid status", "hybrid", "pollination", "open pollinated", "open.pollinated"]

MAX_FUZZY_CHARS = 50

SUN_LITERAL_RE = re.compile(r"\b(Full\s*Sun|Part\s*Sun|Sun|Partial\s*Shade|Full\s*Shade)\b", re.IGNORECASE)

GROWING_GUIDE_HEADINGS = [
    "Sunlight Requirements",
    "Watering Requirements",
    "Soil Requirements",
    "Benefits & Care Tips",
    "How to Harvest",
    "Harvest & Storage",
    "Insects & Diseases",
    "Transplanting",
    "Culture",
    "Direct Sowing",
    "From Seed",
    "Growing Info",
]


def keyword_pattern(phrase: str) -> str:
    """Escape a phrase for regex use; inner whitespace matches any run of whitespace."""
    return re.sub(r"(\\\s)+|\s+", r"\\s+", re.escape(phrase.strip()))


def _alternation(keywords: list[str]) -> str:
    return "|".join(keyword_pattern(k) for k in keywords)


def extract_first(html: str, pattern: str | re.Pattern[str], flags: int = re.IGNORECASE) -> str | None:
    """First match of ``pattern``: group 1 when it exists, else the whole match."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    match = pattern.search(html)
    if not match:
        return None
    value = match.group(1) if match.re.groups and match.group(1) is not None else match.group(0)
    return value.strip() or None


def extract_fuzzy_label(
    html: str,
    keywords: list[str],
    max_chars: int = MAX_FUZZY_CHARS,
) -> str | None:
    """Value following the first keyword hit, up to a line break or opening tag.

    The captured text is sanitized and truncated to ``max_chars``.
    """
    if not html:
        return None
    regex = re.compile(
        rf"(?:{_alternation(keywords)})\s*[:\s]*([^\n\r<]*?)(?=\r?\n|<\w|$)",
        re.IGNORECASE,
    )
    match = regex.search(html)
    if not match or not match.group(1):
        return None
    raw = sanitize_text(match.group(1))
    if not raw:
        return None
    return raw[:max_chars].strip() if len(raw) > max_chars else raw


def extract_fuzzy_maturity_days(html: str) -> int | None:
    """Days to maturity near a maturity keyword; a range yields its rounded midpoint."""
    if not html:
        return None
    kw = _alternation(MATURITY_KEYWORDS)
    regex = re.compile(
        rf"(?:{kw})[^\d]*(\d+)\s*[-–]\s*(\d+)|(?:{kw})[^\d]*(\d+)\s*day",
        re.IGNORECASE,
    )
    match = regex.search(html)
    if not match:
        return None
    low, high, single = match.groups()
    if low and high:
        return round_half_up((int(low) + int(high)) / 2)
    if single:
        return int(single)
    return None


def round_half_up(value: float) -> int:
    return int(value + 0.5)


def day_range_midpoint(value: str | None) -> int | None:
    """Rounded midpoint of ``N-M``, else the first integer."""
    if not value:
        return None
    span = re.search(r"(\d+)\s*[-–]\s*(\d+)", value)
    if span:
        return round_half_up((int(span.group(1)) + int(span.group(2))) / 2)
    single = re.search(r"\d+", value)
    return int(single.group(0)) or None if single else None


def extract_sun_literal(text: str) -> str | None:
    match = SUN_LITERAL_RE.search(text or "")
    return match.group(1).strip() if match else None


def first_day_count(text: str | None) -> int | None:
    """First integer in ``text`` when it is a plausible day count (0, 365)."""
    if not text:
        return None
    match = re.search(r"\d+", text)
    if not match:
        return None
    n = int(match.group(0))
    return n if 0 < n < 365 else None


def extract_sectioned_growing_guides(html: str) -> str | None:
    """Capture the block that starts at the earliest growing-guide heading."""
    lower = html.lower()
    positions = [lower.find(h.lower()) for h in GROWING_GUIDE_HEADINGS]
    positions = [p for p in positions if p != -1]
    if not positions:
        return None
    start = min(positions)
    chunk = html[start:start + 14000]
    chunk = re.sub(r"<br\s*/?>|</p>|</li>|</h\d>", "\n", chunk, flags=re.IGNORECASE)
    raw = sanitize_text(chunk, keep_newlines=True)
    if len(raw) < 80 or contains_blacklist(raw):
        return None
    filtered = filter_surgical_description(raw)
    return filtered if len(filtered) > 60 else None


_PRETREATMENT_RE = re.compile(
    r"[^.!?\n]{0,120}(?:smoke|boiling\s+water|stratif(?:y|ication)|cold\s+stratification|pre-?treatment)"
    r"[^.!?\n]{0,150}[.!?]?",
    re.IGNORECASE,
)


def extract_pretreatment_notes(html: str) -> str | None:
    """Sentences mentioning smoke, boiling water, or stratification treatment."""
    body = sanitize_text(html)
    seen: list[str] = []
    for match in _PRETREATMENT_RE.finditer(body):
        sentence = match.group(0).strip()
        if len(sentence) > 15 and sentence not in seen:
            seen.append(sentence)
    if not seen:
        return None
    combined = re.sub(r"\s{2,}", " ", " ".join(seen)).strip()[:600]
    return combined or None
