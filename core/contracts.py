"""Data contracts shared by the search, enrichment and render stages."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FetchStatus(str, Enum):
    """Outcome category of a single GET (redirect hops included)."""

    OK = "ok"
    HTTP_ERROR = "http_error"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"


class SourceUsed(str, Enum):
    """Which description source produced the text."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    NONE = "none"


class SearchHit(BaseModel):
    """One parsed `owner/repo@skill` line from the upstream search command."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo_name: str
    skill_name: str
    canonical_url: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo_name}@{self.skill_name}"

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.owner.lower(), self.repo_name.lower(), self.skill_name.lower())

    def format_url(self, template: str) -> str:
        return template.format(owner=self.owner, repo=self.repo_name, skill=self.skill_name)


class FetchOutcome(BaseModel):
    """Result of one redirect-following GET."""

    status: FetchStatus
    status_code: Optional[int] = None
    body: Optional[str] = None
    final_url: str

    @property
    def is_ok(self) -> bool:
        return self.status == FetchStatus.OK


class DescriptionResult(BaseModel):
    """Enrichment result for exactly one SearchHit."""

    hit: SearchHit
    description: Optional[str] = None
    source_used: SourceUsed = SourceUsed.NONE

    @classmethod
    def missing(cls, hit: SearchHit) -> "DescriptionResult":
        return cls(hit=hit, description=None, source_used=SourceUsed.NONE)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "slug": self.hit.slug,
            "owner": self.hit.owner,
            "repo": self.hit.repo_name,
            "skill": self.hit.skill_name,
            "url": self.hit.canonical_url,
            "description": self.description,
            "source": self.source_used.value,
        }


class EnrichmentConfig(BaseModel):
    """Per-invocation options, read-only for the lifetime of the run."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(default=10)
    timeout_seconds: int = Field(default=10)
    concurrency: int = Field(default=5)
    fetch_descriptions: bool = True

    @field_validator("max_results", "timeout_seconds", "concurrency")
    @classmethod
    def _positive(cls, value: int) -> int:
        if int(value) < 1:
            raise ValueError("value must be >= 1")
        return int(value)
