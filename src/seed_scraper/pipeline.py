"""Scrape orchestrator: a small state machine over an immutable PipelineContext.

Stages:
  Fetch: GET the vendor page; OK, Blocked (403/404) or Error
  Extract AI: optional structured extractor; on success heuristics are skipped
  Heuristic: vendor/generic parser, image probe, sanitize
  Search: AI web-search fallback when canonical fields are still missing
  Finalize: category defaults, identity, regional maturity, classification

Every stage takes the context and returns the next one. The whole run races a
single global deadline; when it trips, the last completed context is used for a
best-effort search with the URL identity, else a metadata-only response.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Awaitable, Callable

import httpx

from seed_scraper.classifier import classify, is_complete
from seed_scraper.config import Settings
from seed_scraper.defaults import (
    apply_category_defaults,
    apply_regional_maturity,
    backfill_from_schedule,
    category_for,
    lookup_schedule,
)
from seed_scraper.fetcher import FetchResult, FetchStatus, build_client, fetch_page, probe_image
from seed_scraper.identity import (
    GENERAL,
    blocked_plant_name,
    identity_from_known_types,
    path_segments,
    plant_name_from_slug,
    resolve_identity,
    url_slug,
)
from seed_scraper.metadata import extract_metadata, resolve_image_url
from seed_scraper.models import (
    CANONICAL_FIELDS,
    ExtractionResult,
    Identity,
    Metadata,
    PageSnapshot,
    ScrapeOutcome,
    ScrapeRequest,
    ScrapeStatus,
    merge_results,
)
from seed_scraper.parsers import get_parser
from seed_scraper.providers import get_provider
from seed_scraper.providers.base import AIProvider, ExtractionError, build_page_text
from seed_scraper.sanitizer import clean_result, strip_style_and_script
from seed_scraper.search import search_specs
from seed_scraper.vendors import bare_host

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    FETCH = "fetch"
    BLOCKED = "blocked"
    EXTRACT_AI = "extract_ai"
    HEURISTIC = "heuristic"
    SEARCH = "search"
    FINALIZE = "finalize"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PipelineContext:
    """Everything one scrape knows so far. Stages return updated copies."""

    request: ScrapeRequest
    url: str
    stage: Stage = Stage.FETCH
    fetch: FetchResult | None = None
    page: PageSnapshot | None = None
    result: ExtractionResult = field(default_factory=ExtractionResult)
    plant_name: str = ""
    type_hint: str | None = None
    search_used: bool = False
    image_error: bool = False
    error_log: str | None = None
    outcome: ScrapeOutcome | None = None

    @property
    def host(self) -> str:
        return bare_host(self.url)

    @property
    def metadata(self) -> Metadata | None:
        return self.page.metadata if self.page else None

    def advance(self, stage: Stage, **changes: Any) -> PipelineContext:
        return replace(self, stage=stage, **changes)

    def finish(self, outcome: ScrapeOutcome) -> PipelineContext:
        return replace(self, outcome=outcome)


async def _race(awaitable: Awaitable[Any], timeout: float) -> tuple[bool, Any]:
    """Race ``awaitable`` against a timer; the loser is cancelled.

    Returns ``(True, value)`` when the awaitable wins, ``(False, None)`` on timeout.
    """
    task = asyncio.ensure_future(awaitable)
    timer = asyncio.ensure_future(asyncio.sleep(max(timeout, 0)))
    try:
        done, _ = await asyncio.wait({task, timer}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for pending in (task, timer):
            if not pending.done():
                pending.cancel()
    if task in done:
        return True, task.result()
    # Let the cancelled stage unwind before the caller moves on
    await asyncio.wait({task})
    return False, None


def _timeout_message(settings: Settings) -> str:
    return f"Request timed out ({settings.scrape_timeout:g}s)."


def _url_plant_name(url: str) -> str:
    return plant_name_from_slug(url) or "vegetable"


def _known_types_identity(identity: Identity, ctx: PipelineContext) -> Identity:
    known = ctx.request.known_plant_types
    if known is None or "rareseeds.com" not in ctx.host:
        return identity
    slug = url_slug(ctx.url)
    if not slug:
        return identity
    pair = identity_from_known_types(slug, known)
    variety = "" if pair.variety.lower() == pair.plant.lower() else pair.variety
    return identity.model_copy(update={"plant_name": pair.plant, "variety_name": variety})


def _finalize_result(
    ctx: PipelineContext,
    result: ExtractionResult,
) -> tuple[ExtractionResult, Identity, bool]:
    """Identity, regional maturity, sanitize and the identity safety rules."""
    identity = _known_types_identity(resolve_identity(result, ctx.url, ctx.metadata), ctx)
    result = apply_regional_maturity(result, identity.plant_name)
    result = clean_result(result)

    if not identity.plant_name.strip():
        identity = identity.model_copy(update={"plant_name": (result.og_title or "").strip() or GENERAL})
    if not result.has("sun"):
        entry = lookup_schedule(identity.plant_name)
        if entry is not None and entry.sun:
            result = result.model_copy(update={"sun": entry.sun})
    return result, identity, identity.plant_name == GENERAL


def _outcome(ctx: PipelineContext, result: ExtractionResult) -> ScrapeOutcome:
    # Invalid spec values must be nulled before defaults so the default replaces them
    result = clean_result(result)
    result = apply_category_defaults(result, ctx.plant_name, ctx.type_hint)
    result, identity, require_config = _finalize_result(ctx, result)
    return ScrapeOutcome(
        result=result,
        identity=identity,
        scrape_status=classify(result, ctx.search_used),
        scrape_error_log=ctx.error_log,
        image_error=ctx.image_error,
        require_config=require_config,
    )


def safety_metadata_outcome(ctx: PipelineContext, message: str) -> ScrapeOutcome:
    """Failed response built only from page metadata, with identity filled in."""
    metadata = ctx.metadata or Metadata()
    result = ExtractionResult(
        og_title=metadata.title,
        plant_description=metadata.description,
        image_url=resolve_image_url(metadata.image, ctx.page.origin) if metadata.image else None,
    )
    result, identity, require_config = _finalize_result(ctx, result)
    return ScrapeOutcome(
        result=result,
        identity=identity,
        scrape_status=ScrapeStatus.FAILED,
        scrape_error_log=message,
        require_config=require_config,
    )


def failed_outcome(message: str, http_status: int = 200) -> ScrapeOutcome:
    return ScrapeOutcome(
        identity=Identity(plant_name="", variety_name="", vendor_name=""),
        scrape_status=ScrapeStatus.FAILED,
        scrape_error_log=message,
        error=message,
        http_status=http_status,
    )


StageFn = Callable[[PipelineContext], Awaitable[PipelineContext]]


class ScrapePipeline:
    """Runs one scrape request through the stages with a shared HTTP client."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        provider: AIProvider | None = None,
    ) -> None:
        self.settings = settings
        self.client = client
        self.provider = provider
        self._stages: dict[Stage, StageFn] = {
            Stage.FETCH: self.fetch,
            Stage.BLOCKED: self.blocked,
            Stage.EXTRACT_AI: self.extract_ai,
            Stage.HEURISTIC: self.heuristic,
            Stage.SEARCH: self.search,
            Stage.FINALIZE: self.finalize,
        }

    async def run(self, request: ScrapeRequest) -> ScrapeOutcome:
        """Scrape ``request``. Raises InvalidRequestError for a bad URL, nothing else."""
        ctx = PipelineContext(request=request, url=request.target_url())
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settings.scrape_timeout

        while ctx.outcome is None:
            if ctx.stage is Stage.TIMED_OUT:
                return await self.timed_out(ctx)
            logger.debug("Stage %s for %s", ctx.stage.value, ctx.url)
            finished, next_ctx = await _race(self._stages[ctx.stage](ctx), deadline - loop.time())
            if not finished:
                logger.warning("Scrape of %s timed out in stage %s", ctx.url, ctx.stage.value)
                return await self.timed_out(ctx)
            ctx = next_ctx
        return ctx.outcome

    # -- stages --------------------------------------------------------------

    async def fetch(self, ctx: PipelineContext) -> PipelineContext:
        fetched = await fetch_page(self.client, ctx.url)
        if fetched.status is FetchStatus.BLOCKED:
            return ctx.advance(Stage.BLOCKED, fetch=fetched)
        if fetched.status is FetchStatus.ERROR:
            if fetched.timed_out:
                return ctx.advance(Stage.TIMED_OUT, fetch=fetched)
            message = fetched.error or "Failed to fetch URL."
            # An HTTP answer is a 200 to our caller; a transport failure is a bad gateway
            http_status = 200 if fetched.http_status is not None else 502
            return ctx.finish(failed_outcome(message, http_status))

        html = strip_style_and_script(fetched.html)
        return ctx.advance(
            Stage.EXTRACT_AI,
            fetch=fetched,
            page=PageSnapshot(html=html, origin=fetched.origin, metadata=extract_metadata(html)),
        )

    async def blocked(self, ctx: PipelineContext) -> PipelineContext:
        status = ctx.fetch.http_status if ctx.fetch else None
        error_title = extract_metadata(ctx.fetch.html).title if ctx.fetch and ctx.fetch.html else None
        plant = blocked_plant_name(ctx.url, error_title)
        message = f"Page returned {status}."
        logger.warning("%s Using URL identity %r for %s", message, plant, ctx.url)

        ctx = replace(ctx, plant_name=plant, error_log=message, result=ExtractionResult(og_title=plant))
        if ctx.request.skip_ai_fallback:
            return ctx.advance(Stage.FINALIZE)
        return ctx.advance(Stage.SEARCH)

    async def extract_ai(self, ctx: PipelineContext) -> PipelineContext:
        if self.provider is None:
            return ctx.advance(Stage.HEURISTIC)

        page = ctx.page
        text = build_page_text(page.html, page.metadata)
        try:
            finished, extracted = await _race(self.provider.extract(text), self.settings.ai_timeout)
        except ExtractionError as exc:
            logger.warning("AI extractor failed, using heuristics: %s", exc)
            return ctx.advance(Stage.HEURISTIC)
        if not finished:
            logger.warning("AI extractor timed out after %gs, using heuristics", self.settings.ai_timeout)
            return ctx.advance(Stage.HEURISTIC)
        if not any(extracted.has(name) for name in ("variety_name", *CANONICAL_FIELDS)):
            logger.info("AI extractor found nothing, using heuristics")
            return ctx.advance(Stage.HEURISTIC)

        metadata = page.metadata
        segments = path_segments(ctx.url)
        plant = (metadata.title or "").strip() or (segments[-1] if segments else "Unknown")
        base = ExtractionResult(
            og_title=metadata.title,
            plant_description=metadata.description,
            image_url=resolve_image_url(metadata.image, page.origin) if metadata.image else None,
        )
        result = merge_results(base, clean_result(extracted))
        result = backfill_from_schedule(result, plant)
        logger.info("AI extractor (%s) handled %s", self.provider.name, ctx.url)
        return ctx.advance(Stage.FINALIZE, result=result, plant_name=plant)

    async def heuristic(self, ctx: PipelineContext) -> PipelineContext:
        parser = get_parser(ctx.host)
        logger.info("Parsing %s with %s parser", ctx.url, parser.name)
        try:
            parsed = parser.parse(ctx.page.html, ctx.page.origin, ctx.page.metadata)
        except Exception as exc:
            logger.error("Parser %s failed for %s: %s", parser.name, ctx.url, exc)
            return ctx.finish(safety_metadata_outcome(ctx, str(exc)))

        image_error = False
        if parsed.image_url:
            image_error = not await probe_image(self.client, parsed.image_url, ctx.host, self.settings)

        plant = (parsed.og_title or (ctx.metadata.title if ctx.metadata else None) or "").strip()
        type_hint = parsed.category or parsed.plant_name_hint
        result = clean_result(parsed)
        ctx = replace(ctx, result=result, plant_name=plant, type_hint=type_hint, image_error=image_error)

        with_defaults = apply_category_defaults(result, plant, type_hint)
        if is_complete(with_defaults) or ctx.request.skip_ai_fallback:
            return ctx.advance(Stage.FINALIZE)
        return ctx.advance(Stage.SEARCH)

    async def search(self, ctx: PipelineContext) -> PipelineContext:
        variety = ctx.plant_name or "vegetable"
        logger.info("Triggering AI search for %r", variety)
        found = await search_specs(
            self.client,
            self.settings,
            variety,
            category_for(ctx.type_hint, ctx.plant_name),
        )
        if found is None:
            return ctx.advance(Stage.FINALIZE)
        return ctx.advance(Stage.FINALIZE, result=merge_results(ctx.result, found), search_used=True)

    async def finalize(self, ctx: PipelineContext) -> PipelineContext:
        return ctx.finish(_outcome(ctx, ctx.result))

    # -- timeout -------------------------------------------------------------

    async def timed_out(self, ctx: PipelineContext) -> ScrapeOutcome:
        """Best-effort answer after the global deadline tripped."""
        message = _timeout_message(self.settings)
        if not ctx.request.skip_ai_fallback:
            plant = _url_plant_name(ctx.url)
            finished, found = await _race(
                search_specs(self.client, self.settings, plant, category_for(None, plant)),
                self.settings.search_timeout,
            )
            if finished and found is not None:
                search_ctx = replace(
                    ctx,
                    plant_name=plant,
                    type_hint=None,
                    search_used=True,
                    image_error=False,
                    error_log=message.rstrip(".") + "; used AI search.",
                )
                result = merge_results(ExtractionResult(og_title=plant), found)
                return _outcome(search_ctx, result)
        if ctx.page is not None:
            return safety_metadata_outcome(ctx, message)
        return failed_outcome(message)


def build_provider(settings: Settings) -> AIProvider | None:
    """The configured structured extractor, or None when it is disabled."""
    if not settings.extractor_provider:
        return None
    try:
        return get_provider(settings.extractor_provider, settings)
    except ValueError as exc:
        logger.info("AI extractor disabled: %s", exc)
        return None


async def scrape(
    request: ScrapeRequest,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
    provider: AIProvider | None = None,
) -> ScrapeOutcome:
    """Scrape one vendor URL. Raises InvalidRequestError for a bad request only.

    When ``provider`` is None the extractor named in settings is used, if any.
    """
    request.target_url()
    if provider is None:
        provider = build_provider(settings)

    owns_client = client is None
    if client is None:
        client = build_client(settings)
    try:
        return await ScrapePipeline(settings, client, provider).run(request)
    except Exception as exc:
        logger.error("Scrape failed for %s: %s", request.url, exc)
        return failed_outcome(str(exc) or "Failed to fetch URL.", http_status=502)
    finally:
        if owns_client:
            await client.aclose()
