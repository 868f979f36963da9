"""Fetch vendor pages with browser-like headers and probe product images."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

import httpx

from seed_scraper.config import Settings

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": BROWSER_USER_AGENT,
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.google.com/",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

BLOCKED_STATUSES = frozenset({403, 404})


class FetchError(Exception):
    """Raised when a page cannot be retrieved at the transport level."""


class FetchStatus(str, Enum):
    OK = "ok"
    BLOCKED = "blocked"
    ERROR = "error"


@dataclass(frozen=True)
class FetchResult:
    status: FetchStatus
    url: str
    html: str = ""
    http_status: int | None = None
    error: str | None = None
    timed_out: bool = False

    @property
    def origin(self) -> str:
        parsed = urlparse(self.url)
        return f"{parsed.scheme}://{parsed.netloc}"


def build_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Shared client for one scrape: redirects followed, fetch timeout applied.

    Accept-Encoding is left to httpx so only encodings it can decode are offered.
    """
    return httpx.AsyncClient(
        headers=BROWSER_HEADERS,
        follow_redirects=True,
        timeout=settings.fetch_timeout,
        transport=transport,
    )


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        return await client.get(url)
    except httpx.TimeoutException:
        raise
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc


async def fetch_page(client: httpx.AsyncClient, url: str) -> FetchResult:
    """GET ``url`` and classify the response as OK, BLOCKED (403/404), or ERROR.

    Never raises for HTTP or transport failures; no retries are attempted.
    """
    try:
        response = await _get(client, url)
    except httpx.TimeoutException as exc:
        logger.warning("Fetch timed out for %s: %s", url, exc)
        return FetchResult(FetchStatus.ERROR, url, error=f"Fetch timed out: {exc}", timed_out=True)
    except FetchError as exc:
        logger.error("Fetch failed for %s: %s", url, exc)
        return FetchResult(FetchStatus.ERROR, url, error=str(exc))

    final_url = str(response.url)
    if response.status_code in BLOCKED_STATUSES:
        logger.warning("Vendor blocked %s with %d", url, response.status_code)
        return FetchResult(FetchStatus.BLOCKED, final_url, html=response.text, http_status=response.status_code)
    if not response.is_success:
        logger.warning("Fetch of %s returned %d", url, response.status_code)
        return FetchResult(
            FetchStatus.ERROR,
            final_url,
            http_status=response.status_code,
            error=f"Page returned {response.status_code}.",
        )

    logger.info("Fetched %d bytes from %s", len(response.text), url)
    return FetchResult(FetchStatus.OK, final_url, html=response.text, http_status=response.status_code)


async def probe_image(
    client: httpx.AsyncClient,
    image_url: str,
    page_host: str,
    settings: Settings,
) -> bool:
    """Return True when the image URL answers with a 2xx status.

    Johnny's blocks direct requests, so its images go through the image proxy
    when one is configured. Botanical Interests expects a Referer.
    """
    headers = {"User-Agent": BROWSER_USER_AGENT}
    try:
        if "johnnyseeds.com" in page_host and settings.image_proxy_url:
            response = await client.get(
                settings.image_proxy_url,
                params={"url": image_url},
                headers=headers,
                timeout=settings.image_probe_timeout,
            )
        else:
            if "botanicalinterests.com" in page_host:
                headers["Referer"] = "https://www.google.com/"
            response = await client.head(image_url, headers=headers, timeout=settings.image_probe_timeout)
    except httpx.HTTPError as exc:
        logger.warning("Image probe failed for %s: %s", image_url, exc)
        return False
    if not response.is_success:
        logger.warning("Image probe for %s returned %d", image_url, response.status_code)
    return response.is_success
