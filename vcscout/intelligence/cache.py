"""
Caching layer for enrichment results.

Entries are keyed by company name and website and expire after a fixed
TTL. Expired entries are only dropped when looked up; there is no size
bound and no LRU eviction. Concurrent writers to the same key simply
overwrite each other.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Dict, Optional

import structlog

from vcscout.core.models import CacheEntry, EnrichmentResult
from vcscout.utils.clock import Clock, SystemClock

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600


def make_cache_key(company_name: str, website: str) -> str:
    """Build the lowercased ``"{company_name}:{website}"`` lookup key."""
    return f"{company_name}:{website}".lower()


class CacheStats:
    """Track cache performance metrics."""

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.writes = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Export stats as dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "writes": self.writes,
            "hit_rate": f"{self.hit_rate:.2%}",
        }


class EnrichmentStore(ABC):
    """Key-value store for enrichment results."""

    @abstractmethod
    def get(self, key: str) -> Optional[EnrichmentResult]:
        """Return the live result for ``key`` or ``None``."""

    @abstractmethod
    def put(self, key: str, result: EnrichmentResult) -> None:
        """Store ``result`` under ``key``, replacing any previous entry."""

    @abstractmethod
    def evict(self, key: str) -> bool:
        """Drop ``key``; return whether an entry was removed."""

    def get_stats(self) -> Dict[str, Any]:
        return {}


class InMemoryEnrichmentCache(EnrichmentStore):
    """
    Process-local TTL cache.

    Args:
        ttl_seconds: Maximum age of a servable entry
        clock: Time source for storage and expiry checks
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, clock: Optional[Clock] = None):
        self._entries: Dict[str, CacheEntry] = {}
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock or SystemClock()
        self.stats = CacheStats()

        logger.info("Enrichment cache initialized", ttl_seconds=ttl_seconds)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[EnrichmentResult]:
        entry = self._entries.get(key)
        if entry is None:
            self.stats.misses += 1
            return None

        age = self.clock.now() - entry.stored_at
        if age <= self.ttl:
            self.stats.hits += 1
            logger.debug(
                "Cache hit",
                key=key,
                ttl_remaining=int((self.ttl - age).total_seconds()),
            )
            return entry.payload

        self.evict(key)
        self.stats.misses += 1
        logger.debug("Cache entry expired", key=key, age_seconds=int(age.total_seconds()))
        return None

    def put(self, key: str, result: EnrichmentResult) -> None:
        self._entries[key] = CacheEntry(key=key, payload=result, stored_at=self.clock.now())
        self.stats.writes += 1
        logger.debug("Cache set", key=key)

    def evict(self, key: str) -> bool:
        if self._entries.pop(key, None) is None:
            return False
        self.stats.evictions += 1
        return True

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cache cleared", entries=count)
        return count

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            **self.stats.to_dict(),
            "size": len(self._entries),
            "ttl_seconds": int(self.ttl.total_seconds()),
        }
