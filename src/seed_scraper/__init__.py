"""SeedScraper - seed vendor product page scraping and normalization."""

__version__ = "0.1.0"

from seed_scraper.models import ScrapeOutcome, ScrapeRequest, ScrapeStatus
from seed_scraper.pipeline import scrape

__all__ = ["scrape", "ScrapeOutcome", "ScrapeRequest", "ScrapeStatus"]
