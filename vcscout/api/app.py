"""FastAPI application wiring for VC Scout."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from vcscout import __version__
from vcscout.clients.llm_client import LLMClient
from vcscout.core.config import Settings, get_settings, validate_required_settings
from vcscout.core.exceptions import ConfigurationError, InputValidationError, VCScoutError
from vcscout.core.models import EnrichmentRequest
from vcscout.intelligence.cache import EnrichmentStore, InMemoryEnrichmentCache
from vcscout.intelligence.content_fetcher import ContentFetcher
from vcscout.intelligence.enrichment_pipeline import EnrichmentPipeline
from vcscout.intelligence.llm_extractor import LLMExtractor

from .exception_handlers import error_response, register_exception_handlers

ENRICH_PATH = "/api/enrich"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"


def build_pipeline(settings: Settings, cache: EnrichmentStore) -> EnrichmentPipeline:
    """Assemble a pipeline from settings; raises ``ConfigurationError`` without a key."""
    return EnrichmentPipeline(
        fetcher=ContentFetcher(settings.fetch),
        extractor=LLMExtractor(LLMClient(settings.llm)),
        cache=cache,
    )


async def read_json_object(request: Request) -> dict:
    """Decode the request body, raising ``InputValidationError`` unless it is a JSON object."""
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else None
    except ValueError as exc:
        raise InputValidationError(NOT_AN_OBJECT_MESSAGE) from exc
    if not isinstance(payload, dict):
        raise InputValidationError(NOT_AN_OBJECT_MESSAGE)
    return payload


def build_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[EnrichmentPipeline] = None,
    cache: Optional[EnrichmentStore] = None,
) -> FastAPI:
    """Create a configured FastAPI instance."""
    settings = settings or get_settings()
    cache = cache or (
        pipeline.cache if pipeline else InMemoryEnrichmentCache(settings.cache.ttl_seconds)
    )
    state = {"pipeline": pipeline}

    app = FastAPI(title="VC Scout", version=__version__)
    register_exception_handlers(app)

    # Dependency factories
    def require_configuration() -> Settings:
        missing = validate_required_settings(settings)
        if missing:
            raise ConfigurationError(
                f"{', '.join(missing)} is not configured", {"missing": missing}
            )
        return settings

    def get_pipeline(configured: Settings = Depends(require_configuration)) -> EnrichmentPipeline:
        if state["pipeline"] is None:
            state["pipeline"] = build_pipeline(configured, cache)
        return state["pipeline"]

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "model": settings.llm.model,
            "configured": not validate_required_settings(settings),
            "cache": cache.get_stats(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Credentials are checked by the dependency before the body is read.
    @app.post(ENRICH_PATH)
    async def enrich(
        request: Request,
        svc: EnrichmentPipeline = Depends(get_pipeline),
    ) -> Any:
        payload = await read_json_object(request)
        enrichment_request = EnrichmentRequest.from_payload(payload).require_fields()
        try:
            result = await run_in_threadpool(svc.run, enrichment_request)
        except VCScoutError:
            raise
        except Exception as exc:  # noqa: BLE001
            return error_response(exc)
        return JSONResponse(content=result.to_payload())

    return app


def create_app() -> FastAPI:
    """Factory for ``uvicorn --factory``."""
    return build_app()
