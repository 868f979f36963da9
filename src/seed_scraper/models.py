"""Pydantic models for the scrape pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seed_scraper.vendors import is_allowed_host

# Fields whose completeness decides the scrape status.
CANONICAL_FIELDS: tuple[str, ...] = ("sun", "plant_spacing", "days_to_germination", "harvest_days")

# Fields that carry a provenance tag in the payload.
PROVENANCE_FIELDS: tuple[str, ...] = ("sun", "water", "plant_spacing", "days_to_germination")

# Growing-spec strings that are nulled rather than kept when they look like code.
SPEC_FIELDS: tuple[str, ...] = ("sun", "plant_spacing", "days_to_germination")


class InvalidRequestError(Exception):
    """Raised when a scrape request is malformed or targets a disallowed host."""


class ScrapeStatus(str, Enum):
    SUCCESS = "Success"
    PARTIAL = "Partial"
    AI_SEARCH = "AI_SEARCH"
    FAILED = "Failed"


class Provenance(str, Enum):
    SCRAPED = "scrape"
    DEFAULT = "default"


class ScrapeRequest(BaseModel):
    """Body of a scrape call."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(default="", description="Vendor product page URL")
    known_plant_types: list[str] | None = Field(
        default=None,
        alias="knownPlantTypes",
        description="Plant type names already in the catalog, used for name disambiguation",
    )
    skip_ai_fallback: bool = Field(
        default=False,
        alias="skipAiFallback",
        description="Suppress the AI web-search stage",
    )

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("known_plant_types", mode="before")
    @classmethod
    def _only_string_lists(cls, value: Any) -> list[str] | None:
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return value
        return None

    @field_validator("skip_ai_fallback", mode="before")
    @classmethod
    def _strict_true(cls, value: Any) -> bool:
        return value is True

    def target_url(self) -> str:
        """Return the normalized absolute URL or raise InvalidRequestError."""
        if not self.url:
            raise InvalidRequestError("url is required.")
        candidate = self.url if self.url.startswith("http") else "https://" + self.url
        parsed = urlparse(candidate)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise InvalidRequestError("Invalid URL.")
        if not is_allowed_host(parsed.hostname):
            raise InvalidRequestError("URL domain is not allowed for scraping.")
        return candidate


class Metadata(BaseModel):
    """Open Graph style metadata; every field optional."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    site_name: str | None = None


class PageSnapshot(BaseModel):
    html: str
    origin: str = Field(description="scheme://host of the fetched page")
    metadata: Metadata = Field(default_factory=Metadata)


class ExtractionResult(BaseModel):
    """Canonical fields extracted from one page, plus parser hints."""

    model_config = ConfigDict(frozen=True)

    image_url: str | None = None
    sun: str | None = None
    water: str | None = None
    plant_spacing: str | None = None
    days_to_germination: str | None = None
    harvest_days: int | None = None
    plant_description: str | None = None
    growing_notes: str | None = None
    latin_name: str | None = None
    life_cycle: str | None = None
    hybrid_status: str | None = None
    pretreatment_notes: str | None = None

    # Hints consumed by identity resolution and category lookup
    og_title: str | None = None
    variety_name: str | None = None
    plant_name_hint: str | None = None
    vendor: str | None = None
    category: str | None = None

    provenance: dict[str, Provenance] = Field(default_factory=dict)

    def has(self, field: str) -> bool:
        return is_present(getattr(self, field))

    def source(self, field: str) -> Provenance | None:
        return self.provenance.get(field)


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def merge_results(
    base: ExtractionResult,
    update: ExtractionResult,
    *,
    overwrite: bool = False,
) -> ExtractionResult:
    """Fold ``update`` into ``base`` and return a new result.

    Present values from ``update`` fill empty fields of ``base`` (or replace
    them when ``overwrite``). Provenance follows the value it describes.
    """
    changes: dict[str, Any] = {}
    provenance = dict(base.provenance)
    for name in ExtractionResult.model_fields:
        if name == "provenance":
            continue
        incoming = getattr(update, name)
        if not is_present(incoming):
            continue
        if overwrite or not is_present(getattr(base, name)):
            changes[name] = incoming
            if name in update.provenance:
                provenance[name] = update.provenance[name]
    if not changes:
        return base
    changes["provenance"] = provenance
    return base.model_copy(update=changes)


class Identity(BaseModel):
    plant_name: str = "General"
    variety_name: str = ""
    vendor_name: str = ""


class ScrapeOutcome(BaseModel):
    """Final, request-scoped result of one scrape."""

    result: ExtractionResult = Field(default_factory=ExtractionResult)
    identity: Identity | None = None
    scrape_status: ScrapeStatus = ScrapeStatus.PARTIAL
    scrape_error_log: str | None = None
    error: str | None = None
    image_error: bool = False
    require_config: bool = False
    http_status: int = Field(default=200, exclude=True)

    def to_payload(self) -> dict[str, Any]:
        """Render the endpoint's JSON body."""
        r = self.result
        identity = self.identity or Identity(plant_name="", variety_name="", vendor_name="")
        payload: dict[str, Any] = {
            "plant_name": identity.plant_name,
            "variety_name": identity.variety_name,
            "vendor_name": identity.vendor_name,
            "sun": r.sun,
            "water": r.water,
            "plant_spacing": r.plant_spacing,
            "days_to_germination": r.days_to_germination,
            "harvest_days": r.harvest_days,
            "plant_description": r.plant_description,
            "growing_notes": r.growing_notes,
            "latin_name": r.latin_name,
            "life_cycle": r.life_cycle,
            "hybrid_status": r.hybrid_status,
            "imageUrl": r.image_url,
            "ogTitle": r.og_title,
        }
        if r.pretreatment_notes:
            payload["pretreatment_notes"] = r.pretreatment_notes
        for name in PROVENANCE_FIELDS:
            tag = r.provenance.get(name)
            if tag is not None:
                payload[f"{name}IsDefault"] = tag is Provenance.DEFAULT
                payload[f"{name}Source"] = tag.value
        payload["scrape_status"] = self.scrape_status.value
        if self.scrape_error_log:
            payload["scrape_error_log"] = self.scrape_error_log
        if self.error:
            payload["error"] = self.error
        if self.image_error:
            payload["image_error"] = True
        if self.require_config:
            payload["REQUIRE_CONFIG"] = True
        return payload
