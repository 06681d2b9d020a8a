"""Concurrency-bounded fan-out of source resolution over search hits."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

import httpx

from core import DescriptionResult, EnrichmentConfig, SearchHit, SourceUsed
from sources.resolver import SourceResolver


logger = logging.getLogger(__name__)


class EnrichmentScheduler:
    """Semaphore-gated resolver dispatch that preserves input order."""

    def __init__(self, resolver: SourceResolver, config: EnrichmentConfig) -> None:
        self.resolver = resolver
        self.config = config
        self._semaphore = asyncio.Semaphore(config.concurrency)
        self._in_flight = 0
        self.peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def _resolve_into(
        self,
        idx: int,
        hit: SearchHit,
        results: List[Optional[DescriptionResult]],
    ) -> None:
        async with self._semaphore:
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            try:
                results[idx] = await self.resolver.resolve(hit, self.config.timeout_seconds)
            except Exception as exc:
                logger.warning(f"Resolution failed for {hit.slug}: {exc}")
                results[idx] = DescriptionResult.missing(hit)
            finally:
                self._in_flight -= 1

    async def run(self, hits: Sequence[SearchHit]) -> List[DescriptionResult]:
        """Resolve every hit; one result per hit, in input order."""
        self.peak_in_flight = 0
        ordered_hits = list(hits)
        if not self.config.fetch_descriptions:
            return [DescriptionResult.missing(hit) for hit in ordered_hits]
        if not ordered_hits:
            return []

        results: List[Optional[DescriptionResult]] = [None] * len(ordered_hits)
        await asyncio.gather(
            *[self._resolve_into(idx, hit, results) for idx, hit in enumerate(ordered_hits)]
        )

        output = [
            result if result is not None else DescriptionResult.missing(ordered_hits[idx])
            for idx, result in enumerate(results)
        ]
        self._log_summary(output)
        return output

    def _log_summary(self, results: List[DescriptionResult]) -> None:
        sources: Dict[str, int] = {}
        for result in results:
            if result.source_used != SourceUsed.NONE:
                sources[result.source_used.value] = sources.get(result.source_used.value, 0) + 1
        summary = {
            "attempted": len(results),
            "described": sum(sources.values()),
            "sources": sources,
            "peak_in_flight": self.peak_in_flight,
        }
        logger.info(f"Enrichment summary: {summary}")


async def enrich_hits(
    hits: Sequence[SearchHit],
    config: EnrichmentConfig,
    *,
    resolver: Optional[SourceResolver] = None,
) -> List[DescriptionResult]:
    """
    Enrich hits with descriptions using one shared HTTP client for the run.

    In no-fetch mode no client is opened and no request is made.
    """
    if not config.fetch_descriptions:
        return await EnrichmentScheduler(resolver or SourceResolver(), config).run(hits)

    if resolver is not None:
        return await EnrichmentScheduler(resolver, config).run(hits)

    concurrency = int(config.concurrency)
    timeout = httpx.Timeout(float(config.timeout_seconds))
    limits = httpx.Limits(
        max_connections=max(4, concurrency * 2),
        max_keepalive_connections=max(4, concurrency),
    )
    async with httpx.AsyncClient(timeout=timeout, limits=limits) as client:
        scheduler = EnrichmentScheduler(SourceResolver(client=client), config)
        return await scheduler.run(hits)
