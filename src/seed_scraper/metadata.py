"""Open Graph metadata and product-image extraction from raw HTML."""

from __future__ import annotations

import json
import logging
import re
from urllib.parse import urljoin

from seed_scraper.models import Metadata
from seed_scraper.sanitizer import sanitize_text

logger = logging.getLogger(__name__)

MAX_JSON_LD_BLOCKS = 20

_IMAGE_EXT_RE = re.compile(r"\.(?:jpg|jpeg|png|webp)(?:\?|$)", re.IGNORECASE)
_JSON_LD_RE = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>([\s\S]*?)</script>",
    re.IGNORECASE,
)


def meta_content(html: str, key: str, attr: str = "property") -> str | None:
    """Return the ``content`` of ``<meta {attr}="{key}">`` in either attribute order."""
    if not html:
        return None
    k = re.escape(key)
    forward = re.compile(
        rf"<meta\b[^>]*?\b{attr}=[\"']{k}[\"'][^>]*?\bcontent=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )
    reverse = re.compile(
        rf"<meta\b[^>]*?\bcontent=[\"']([^\"']+)[\"'][^>]*?\b{attr}=[\"']{k}[\"']",
        re.IGNORECASE,
    )
    match = forward.search(html) or reverse.search(html)
    return match.group(1) if match else None


def extract_metadata(html: str) -> Metadata:
    """Extract og:title, og:description, og:image and og:site_name.

    Text values are sanitized; the image URL is only trimmed. Missing tags
    leave the field as None.
    """

    def text(key: str) -> str | None:
        raw = meta_content(html, key)
        if raw is None:
            return None
        return sanitize_text(raw) or None

    image = meta_content(html, "og:image")
    return Metadata(
        title=text("og:title"),
        description=text("og:description"),
        image=image.strip() or None if image else None,
        site_name=text("og:site_name"),
    )


def resolve_image_url(raw: str, page_origin: str) -> str:
    """Resolve a possibly relative image URL against the page origin."""
    trimmed = raw.strip()
    if not trimmed or re.match(r"https?://", trimmed, re.IGNORECASE):
        return trimmed
    try:
        return urljoin(page_origin + "/", trimmed)
    except ValueError:
        return trimmed


def _json_ld_image(html: str) -> str | None:
    for count, match in enumerate(_JSON_LD_RE.finditer(html), start=1):
        if count > MAX_JSON_LD_BLOCKS:
            break
        try:
            parsed = json.loads(match.group(1))
        except json.JSONDecodeError:
            continue
        if not isinstance(parsed, dict):
            continue
        candidates = [parsed.get("image")]
        graph = parsed.get("@graph")
        if isinstance(graph, list):
            candidates.extend(node.get("image") for node in graph if isinstance(node, dict))
        for image in candidates:
            if isinstance(image, list):
                image = image[0] if image else None
            if isinstance(image, dict):
                image = image.get("url")
            if isinstance(image, str) and image.startswith("http"):
                return image
    return None


def extract_image_url(html: str, page_origin: str, og_image: str | None = None) -> str | None:
    """Find the product image: og:image, twitter:image, JSON-LD, then <img> heuristics."""
    if og_image and og_image.strip():
        return resolve_image_url(og_image, page_origin)

    og = meta_content(html, "og:image")
    if og:
        return resolve_image_url(og, page_origin)

    twitter = meta_content(html, "twitter:image", attr="name")
    if twitter:
        return resolve_image_url(twitter, page_origin)

    ld = _json_ld_image(html)
    if ld:
        return resolve_image_url(ld, page_origin)

    product_img = re.search(
        r"<img\b[^>]*?(?:id|class)=[\"'][^\"']*(?:product|main|primary)[^\"']*[\"'][^>]*?"
        r"(?:data-src|data-lazy|src)=[\"']([^\"']+)[\"']",
        html,
        re.IGNORECASE,
    ) or re.search(
        r"<img\b[^>]*?(?:data-src|data-lazy|src)=[\"']([^\"']+)[\"'][^>]*?"
        r"(?:id|class)=[\"'][^\"']*(?:product|main|primary)[^\"']*[\"']",
        html,
        re.IGNORECASE,
    )
    if product_img:
        src = product_img.group(1).strip()
        if not src.startswith("data:") and _IMAGE_EXT_RE.search(src):
            return resolve_image_url(src, page_origin)

    generic = re.search(
        r"<img\b[^>]*?(?:data-src|data-lazy|src)=[\"']([^\"']+)[\"']", html, re.IGNORECASE
    )
    if generic:
        src = generic.group(1).strip()
        looks_like_product = any(k in src for k in ("product", "image", "media", "photo"))
        if not src.startswith("data:") and (looks_like_product or _IMAGE_EXT_RE.search(src)):
            return resolve_image_url(src, page_origin)

    logger.debug("No product image found")
    return None
