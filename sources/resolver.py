"""Resolve a SearchHit to a description via primary then fallback source."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Optional

import httpx

from config import MIN_DESCRIPTION_CHARS, check_url_template, get_source_settings
from core import DescriptionResult, FetchOutcome, SearchHit, SourceUsed
from utils.exceptions import ConfigurationError

from .extractor import extract_description
from .fetcher import fetch


logger = logging.getLogger(__name__)

FetchFn = Callable[..., Awaitable[FetchOutcome]]


class SourceResolver:
    """
    Ask the primary catalog page, then the fallback documentation host.

    resolve() never raises: any failure of one source is treated as that source
    yielding nothing, and two failures produce DescriptionResult.missing().
    A bad fallback template or description cap raises ConfigurationError here,
    at construction.
    """

    def __init__(
        self,
        *,
        fallback_template: Optional[str] = None,
        fetch_fn: FetchFn = fetch,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
        max_redirects: Optional[int] = None,
        max_chars: Optional[int] = None,
    ):
        sources = get_source_settings()
        self.fallback_template = check_url_template(
            fallback_template or sources.fallback_url_template,
            "fallback url template",
        )
        self._fetch = fetch_fn
        self._client = client
        self._headers: Dict[str, str] = {"User-Agent": user_agent or sources.user_agent}
        self._max_redirects = int(max_redirects if max_redirects is not None else sources.max_redirects)
        self._max_chars = int(max_chars if max_chars is not None else sources.description_max_chars)
        if self._max_chars < MIN_DESCRIPTION_CHARS:
            raise ConfigurationError(f"description cap must be >= {MIN_DESCRIPTION_CHARS}, got {self._max_chars}")

    def primary_url(self, hit: SearchHit) -> str:
        return hit.canonical_url

    def fallback_url(self, hit: SearchHit) -> str:
        return hit.format_url(self.fallback_template)

    async def _describe_from(self, url: str, timeout_seconds: float) -> Optional[str]:
        try:
            outcome = await self._fetch(
                url,
                timeout_seconds,
                client=self._client,
                max_redirects=self._max_redirects,
                headers=self._headers,
            )
        except Exception as exc:
            logger.debug(f"Fetch failed for {url}: {exc}")
            return None

        if not outcome.is_ok:
            logger.debug(f"{url} -> {outcome.status.value} ({outcome.status_code})")
            return None
        return extract_description(outcome.body, max_chars=self._max_chars)

    async def resolve(self, hit: SearchHit, timeout_seconds: float) -> DescriptionResult:
        description = await self._describe_from(self.primary_url(hit), timeout_seconds)
        if description:
            return DescriptionResult(hit=hit, description=description, source_used=SourceUsed.PRIMARY)

        description = await self._describe_from(self.fallback_url(hit), timeout_seconds)
        if description:
            return DescriptionResult(hit=hit, description=description, source_used=SourceUsed.FALLBACK)

        logger.debug(f"No description found for {hit.slug}")
        return DescriptionResult.missing(hit)
