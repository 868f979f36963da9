"""HTTP endpoint: POST a vendor URL, get the normalized seed payload back."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from seed_scraper import __version__
from seed_scraper.config import Settings
from seed_scraper.models import InvalidRequestError, ScrapeRequest
from seed_scraper.pipeline import scrape

logger = logging.getLogger(__name__)

app = FastAPI(title="Seed Scraper", version=__version__)


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


@app.get("/scrape-url")
def liveness():
    return {"ok": True, "message": "scrape-url is up. Use POST with body { url: string }."}


@app.post("/scrape-url")
async def scrape_url(request: Request, settings: Settings = Depends(get_settings)):
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Invalid JSON body."}, status_code=400)
    if not isinstance(body, dict):
        body = {}

    scrape_request = ScrapeRequest.model_validate(body)
    try:
        outcome = await scrape(scrape_request, settings)
    except InvalidRequestError as exc:
        logger.info("Rejected scrape request: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=400)

    return JSONResponse(outcome.to_payload(), status_code=outcome.http_status)
