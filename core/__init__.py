"""Core contracts and shared types for the enrichment pipeline."""

from .contracts import (
    DescriptionResult,
    EnrichmentConfig,
    FetchOutcome,
    FetchStatus,
    SearchHit,
    SourceUsed,
)

__all__ = [
    "DescriptionResult",
    "EnrichmentConfig",
    "FetchOutcome",
    "FetchStatus",
    "SearchHit",
    "SourceUsed",
]
