"""
Company enrichment pipeline.

Runs strictly in sequence for one request:
cache lookup -> website fetch -> keyword signals -> LLM extraction ->
signal merge -> thesis score -> reference sources -> cache store.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

import structlog

from vcscout.core.models import EnrichmentRequest, EnrichmentResult, Signal, Source
from vcscout.intelligence.cache import EnrichmentStore, make_cache_key
from vcscout.intelligence.content_fetcher import ContentFetcher, normalize_website_url
from vcscout.intelligence.llm_extractor import LLMExtractor
from vcscout.intelligence.signal_detector import detect_website_signals
from vcscout.intelligence.thesis import score_thesis_match
from vcscout.utils.clock import Clock, SystemClock, isoformat

logger = structlog.get_logger(__name__)

_SLUG_SEPARATOR_RE = re.compile(r"\s+")


def directory_slug(company_name: str) -> str:
    """Lowercase the company name and join words with hyphens for directory URLs."""
    return _SLUG_SEPARATOR_RE.sub("-", company_name.strip().lower())


def build_sources(company_name: str, website: str, timestamp: str) -> List[Source]:
    """Reference links shown alongside every enrichment: site, Crunchbase, LinkedIn."""
    slug = directory_slug(company_name)
    return [
        Source(
            url=normalize_website_url(website),
            title=f"{company_name} - Official Website",
            timestamp=timestamp,
        ),
        Source(
            url=f"https://www.crunchbase.com/organization/{slug}",
            title=f"{company_name} - Crunchbase Profile",
            timestamp=timestamp,
        ),
        Source(
            url=f"https://www.linkedin.com/company/{slug}",
            title=f"{company_name} - LinkedIn Company",
            timestamp=timestamp,
        ),
    ]


def merge_signals(
    deterministic: Sequence[Signal], ai: Sequence[Signal], timestamp: str
) -> List[Signal]:
    """Concatenate website and AI signals, stamping each with ``timestamp``."""
    return [
        signal.model_copy(update={"timestamp": timestamp})
        for signal in [*deterministic, *ai]
    ]


class EnrichmentPipeline:
    """Coordinates fetching, extraction, scoring and caching for one company."""

    def __init__(
        self,
        *,
        fetcher: ContentFetcher,
        extractor: LLMExtractor,
        cache: EnrichmentStore,
        clock: Optional[Clock] = None,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.cache = cache
        self.clock = clock or SystemClock()

    def run(self, request: EnrichmentRequest, *, force_refresh: bool = False) -> EnrichmentResult:
        """Enrich the company described by ``request``."""
        request.require_fields()
        company_name = request.company_name
        website = request.website

        cache_key = make_cache_key(company_name, website)
        if not force_refresh:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info("enrichment_cache_hit", company=company_name, key=cache_key)
                return self._with_thesis(cached, request.thesis)

        logger.info("enrichment_started", company=company_name, website=website)

        page = self.fetcher.fetch_content(website)
        content = page.text
        timestamp = isoformat(self.clock.now())

        website_signals = detect_website_signals(content, timestamp, links=page.links)
        extraction = self.extractor.extract(company_name, content, timestamp)

        result = EnrichmentResult(
            summary=extraction.summary,
            what_they_do=extraction.what_they_do,
            keywords=list(extraction.keywords),
            signals=merge_signals(website_signals, extraction.signals, timestamp),
            sources=build_sources(company_name, website, timestamp),
        )
        result = self._with_thesis(result, request.thesis)

        self.cache.put(cache_key, result)
        logger.info(
            "enrichment_completed",
            company=company_name,
            content_chars=len(content),
            website_signals=len(website_signals),
            ai_signals=len(extraction.signals),
            thesis_score=result.thesis_match.score if result.thesis_match else 0,
        )
        return result

    @staticmethod
    def _with_thesis(result: EnrichmentResult, thesis: Optional[str]) -> EnrichmentResult:
        match = score_thesis_match(result.keywords, thesis)
        return result.model_copy(update={"thesis_match": match if match.score > 0 else None})
