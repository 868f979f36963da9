"""Static vendor tables: allow-list of root domains and display names."""

from __future__ import annotations

from urllib.parse import urlparse

ALLOWED_HOST_ROOTS: tuple[str, ...] = (
    "johnnyseeds.com",
    "rareseeds.com",
    "marysheirloomseeds.com",
    "territorialseed.com",
    "burpee.com",
    "highmowingseeds.com",
    "botanicalinterests.com",
    "edenbrothers.com",
    "parkseed.com",
    "outsidepride.com",
    "swallowtailgardenseeds.com",
    "superseeds.com",
    "sowrightseeds.com",
    "sandiegoseedcompany.com",
    "victoryseeds.com",
    "hudsonvalleyseed.com",
    "southernexposure.com",
    "fedcoseeds.com",
    "floretflowers.com",
    "reneesgarden.com",
    "theodorepayne.org",
    "nativewest.com",
    "growitalian.com",
    "migardener.com",
    "row7seeds.com",
    "seedsavers.org",
    "selectseeds.com",
)

# Keyed by host without "www."; shop.* subdomains listed explicitly.
VENDOR_DISPLAY_NAMES: dict[str, str] = {
    "rareseeds.com": "Baker Creek",
    "johnnyseeds.com": "Johnny's Seeds",
    "marysheirloomseeds.com": "Mary's",
    "territorialseed.com": "Territorial",
    "edenbrothers.com": "Eden Brothers",
    "outsidepride.com": "Outsidepride",
    "parkseed.com": "Park Seed",
    "burpee.com": "Burpee",
    "botanicalinterests.com": "Botanical Interests",
    "highmowingseeds.com": "High Mowing Seeds",
    "floretflowers.com": "Floret Flowers",
    "shop.floretflowers.com": "Floret Flowers",
    "reneesgarden.com": "Renee's Garden",
    "southernexposure.com": "Southern Exposure",
    "fedcoseeds.com": "Fedco Seeds",
    "hudsonvalleyseed.com": "Hudson Valley Seed",
    "victoryseeds.com": "Victory Seeds",
    "swallowtailgardenseeds.com": "Swallowtail Garden Seeds",
    "selectseeds.com": "Select Seeds",
    "sowrightseeds.com": "Sow Right Seeds",
    "seedsavers.org": "Seed Savers Exchange",
    "row7seeds.com": "Row 7 Seeds",
}


def bare_host(url: str) -> str:
    """Lowercase hostname of ``url`` with a leading ``www.`` removed."""
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def is_allowed_host(host: str) -> bool:
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return any(host == root or host.endswith("." + root) for root in ALLOWED_HOST_ROOTS)


def vendor_display_name(host: str) -> str:
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return VENDOR_DISPLAY_NAMES.get(host, "")
