"""Enrichment scheduling primitives."""

from .scheduler import EnrichmentScheduler, enrich_hits

__all__ = [
    "EnrichmentScheduler",
    "enrich_hits",
]
