"""Text sanitization for everything scraped from vendor HTML.

Raw markup, CSS fragments, template placeholders, and boilerplate must never
reach the payload. ``sanitize_text`` runs to a fixed point so applying it
twice is the same as applying it once.
"""

from __future__ import annotations

import html
import re

from seed_scraper.models import SPEC_FIELDS, ExtractionResult

_MAX_PASSES = 10

_TAG_RE = re.compile(r"<[^>]*>")
_ORPHAN_OPEN_RE = re.compile(r'">\s*')
_ORPHAN_CLOSE_RE = re.compile(r"\s*</")
_LEFTOVER_ENTITY_RE = re.compile(r"&#?[A-Za-z0-9]+;")

_PLACEHOLDER_BOLD_RE = re.compile(r"\*\*?%%[^%]*%%\*\*?")
_PLACEHOLDER_RE = re.compile(r"%%[A-Za-z0-9_]+%%")

_CSS_BLOCK_RE = re.compile(r"\{[^}]*\}")
_CSS_DASHED_PROP_RE = re.compile(r"-[\w-]+\s*:\s*[^;]*\s*(?:px|em|rem|vh|vw)\s*;?", re.IGNORECASE)
_CSS_ZERO_PX_RE = re.compile(r"\b[-\w]+\s*:\s*[^;]*\s*0\s*px\s*;?", re.IGNORECASE)


def strip_style_and_script(raw_html: str) -> str:
    """Remove <style> and <script> blocks so no parser ever sees CSS or JS."""
    if not raw_html or not raw_html.strip():
        return raw_html
    text = re.sub(r"<style[\s\S]*?</style>", " ", raw_html, flags=re.IGNORECASE)
    text = re.sub(r"<script[\s\S]*?</script>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def strip_template_placeholders(text: str) -> str:
    """Drop vendor template tokens such as ``%%Excerpt%%``."""
    if not text or not text.strip():
        return text
    text = _PLACEHOLDER_BOLD_RE.sub("", text)
    text = _PLACEHOLDER_RE.sub("", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    return text.strip()


def strip_css_artifacts(text: str) -> str:
    """Drop CSS/class leftovers (``-sections-desktop: 0px;``, ``{ ... }``)."""
    if not text or not text.strip():
        return text
    text = _CSS_BLOCK_RE.sub(" ", text)
    text = _CSS_DASHED_PROP_RE.sub(" ", text)
    text = _CSS_ZERO_PX_RE.sub(" ", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    return text.strip()


def _collapse(text: str, keep_newlines: bool) -> str:
    if not keep_newlines:
        return re.sub(r"\s+", " ", text).strip()
    lines = [re.sub(r"[^\S\n]+", " ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _sanitize_once(text: str, keep_newlines: bool) -> str:
    out = _TAG_RE.sub(" ", text)
    out = _ORPHAN_OPEN_RE.sub(" ", out)
    out = _ORPHAN_CLOSE_RE.sub(" ", out)
    out = html.unescape(out)
    # Decoding can reveal markup (&lt;b&gt;), so strip again
    out = _TAG_RE.sub(" ", out)
    out = out.replace("<", " ").replace(">", " ")
    out = _LEFTOVER_ENTITY_RE.sub(" ", out)
    out = out.replace("\u00a0", " ")
    out = strip_template_placeholders(out)
    out = strip_css_artifacts(out)
    return _collapse(out, keep_newlines)


def sanitize_text(text: str | None, *, keep_newlines: bool = False) -> str:
    """Strip tags, decode entities, drop placeholders and CSS, collapse whitespace."""
    if not text:
        return ""
    current = text
    for _ in range(_MAX_PASSES):
        cleaned = _sanitize_once(current, keep_newlines)
        if cleaned == current:
            break
        current = cleaned
    return current


def is_valid_spec_value(value: str | None) -> bool:
    """False for values that still look like CSS or code."""
    if not value or not value.strip():
        return False
    t = value.strip()
    if "{" in t or "}" in t:
        return False
    if re.search(r"[-\w]+\s*:\s*[^;]*;", t):
        return False
    if re.match(r"\s*[-\w]+\s*:\s*", t):
        return False
    if re.search(r"\d+\s*px\s*;?", t, re.IGNORECASE):
        return False
    return True


_BOILERPLATE_RE = re.compile(
    r"selected for (improved )?traits|,\s*and selected|creates stronger|mechanical seeders",
    re.IGNORECASE,
)
_PHONE_RE = re.compile(r"\d{3}[-.\s]\d{3}[-.\s]\d{4}")
JUNK_MAX_LEN = 120


def is_junk_spec_value(value: str | None) -> bool:
    """True for markup fragments, phone numbers, boilerplate, or overlong text."""
    if not value or not value.strip():
        return True
    t = value.strip()
    if re.search(r"<|>|&lt;|&gt;", t):
        return True
    if _PHONE_RE.search(t):
        return True
    if _BOILERPLATE_RE.search(t):
        return True
    return len(t) > JUNK_MAX_LEN


def looks_like_url_slug(value: str | None) -> bool:
    if not value or not value.strip():
        return True
    t = value.strip()
    if "_" in t:
        return True
    return "-" in t and not re.search(r"\s", t)


def clean_spec(value: str | None) -> str | None:
    """Sanitize a spec-type value; None when it still looks like code."""
    if value is None:
        return None
    cleaned = sanitize_text(value)
    if not is_valid_spec_value(cleaned):
        return None
    return cleaned


# --- Description filtering -------------------------------------------------

BLACKLIST_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"Copyright",
        r"All Rights Reserved",
        r"Sitemap",
        r"Password",
        r"Email Address",
        r"document\.write",
        r"LiveChat",
    )
)

DESCRIPTION_NOISE = re.compile(
    r"carousel|slide-to|nav-link|button|data-|data-target|data-slide|data-ride|target\s*=",
    re.IGNORECASE,
)


def contains_blacklist(text: str) -> bool:
    return any(p.search(text) for p in BLACKLIST_PATTERNS)


def filter_blacklisted_paragraphs(text: str) -> str:
    paragraphs = re.split(r"\n\s*\n", text)
    kept = [p for p in paragraphs if not contains_blacklist(p.strip())]
    return re.sub(r"\n{3,}", "\n\n", "\n\n".join(kept)).strip()


def looks_like_code(line: str) -> bool:
    """Attribute/code line: longer than 20 chars and contains # [ or =."""
    t = line.strip()
    if len(t) <= 20:
        return False
    return bool(re.search(r"[#\[=]", t))


def filter_surgical_description(text: str | None) -> str:
    """Keep only sentence-like lines of a description block."""
    if not text or not text.strip():
        return ""
    decoded = html.unescape(text)
    kept = []
    for line in re.split(r"\r?\n", decoded):
        line = line.strip()
        if not line:
            continue
        if DESCRIPTION_NOISE.search(line) or looks_like_code(line) or contains_blacklist(line):
            continue
        kept.append(line)
    return sanitize_text("\n".join(kept), keep_newlines=True)


# --- Name noise ------------------------------------------------------------

_TYPE_NOISE: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bnon\s*[- ]?gmo\b",
        r"\bheirloom\b",
        r"\borganic\b",
        r"\bburgundy\b",
        r"\bhybrid\b",
        r"\bopen\s*pollinated\b",
        r"\bop\b",
        r"\bheritage\b",
        r"\bnon\s*hybrid\b",
        r"\bseeds?\b",
        r"\bvariety\b",
        r"\bpack\b",
    )
)


def sanitize_plant_type(value: str) -> str:
    """Strip marketing noise: "Non Gmo Burgundy Okra" -> "Okra"."""
    if not value or not value.strip():
        return value
    out = value.strip()
    for pattern in _TYPE_NOISE:
        out = re.sub(r"\s+", " ", pattern.sub(" ", out)).strip()
    return out


strip_title_noise = sanitize_plant_type


def strip_vault_noise(value: str) -> str:
    """Strip product ids (prod003168), hybrid, organic, seeds from display names."""
    if not value or not value.strip():
        return value
    out = re.sub(r"\bprod[a-z0-9]*\b", " ", value, flags=re.IGNORECASE)
    out = re.sub(r"\b(?:hybrid|organic|seeds?)\b", " ", out, flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", out).strip()


def strip_fedco_slug_noise(value: str) -> str:
    if not value or not value.strip():
        return value
    out = re.sub(r"\b(?:organic|seeds?)\b", " ", value, flags=re.IGNORECASE)
    out = re.sub(r"\s*[-_]?\d+\s*$", " ", out)
    return re.sub(r"\s+", " ", out).strip()


def to_title_case(value: str) -> str:
    """Capitalize the first letter of each word, leaving the rest untouched."""
    if not value or not value.strip():
        return value
    return re.sub(r"(^|\s)(\w)", lambda m: m.group(1) + m.group(2).upper(), value.strip())


# --- Whole-record cleaning -------------------------------------------------

_TEXT_FIELDS = (
    "sun",
    "water",
    "plant_spacing",
    "days_to_germination",
    "latin_name",
    "life_cycle",
    "hybrid_status",
    "og_title",
    "variety_name",
    "plant_name_hint",
    "vendor",
    "category",
)
_BLOCK_FIELDS = ("plant_description", "growing_notes", "pretreatment_notes")


def clean_result(result: ExtractionResult) -> ExtractionResult:
    """Sanitize every string field; null spec fields that fail validity."""
    changes: dict[str, str | None] = {}
    for name in _TEXT_FIELDS + _BLOCK_FIELDS:
        value = getattr(result, name)
        if not isinstance(value, str):
            continue
        if not value.strip():
            changes[name] = None
            continue
        cleaned = sanitize_text(value, keep_newlines=name in _BLOCK_FIELDS)
        if name in SPEC_FIELDS and not is_valid_spec_value(cleaned):
            cleaned = ""
        if cleaned != value:
            changes[name] = cleaned or None
    if not changes:
        return result
    return result.model_copy(update=changes)
