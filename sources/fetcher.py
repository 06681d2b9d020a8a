"""Single GET with bounded manual redirect following and one overall timeout."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

import httpx

from core import FetchOutcome, FetchStatus


logger = logging.getLogger(__name__)

MAX_REDIRECTS = 3


def _validate_url(url: str) -> str:
    text = str(url or "").strip()
    parsed = urlparse(text)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"malformed url: {url!r}")
    return text


async def _follow_redirects(
    client: httpx.AsyncClient,
    trail: List[str],
    *,
    max_redirects: int,
    headers: Optional[Dict[str, str]],
) -> FetchOutcome:
    hops = 0
    while True:
        current = trail[-1]
        response = await client.get(current, headers=headers, follow_redirects=False)
        if response.has_redirect_location:
            if hops >= max_redirects:
                logger.debug(f"Redirect limit ({max_redirects}) exceeded at {current}")
                return FetchOutcome(
                    status=FetchStatus.HTTP_ERROR,
                    status_code=response.status_code,
                    final_url=current,
                )
            try:
                target = _validate_url(urljoin(current, response.headers["location"]))
            except ValueError as exc:
                logger.debug(f"Unusable redirect target from {current}: {exc}")
                return FetchOutcome(
                    status=FetchStatus.NETWORK_ERROR,
                    status_code=response.status_code,
                    final_url=current,
                )
            hops += 1
            trail.append(target)
            continue

        if response.is_success:
            return FetchOutcome(
                status=FetchStatus.OK,
                status_code=response.status_code,
                body=str(response.text or ""),
                final_url=current,
            )
        return FetchOutcome(
            status=FetchStatus.HTTP_ERROR,
            status_code=response.status_code,
            final_url=current,
        )


async def _fetch_with_client(
    client: httpx.AsyncClient,
    url: str,
    timeout_seconds: float,
    *,
    max_redirects: int,
    headers: Optional[Dict[str, str]],
) -> FetchOutcome:
    trail = [url]
    try:
        return await asyncio.wait_for(
            _follow_redirects(client, trail, max_redirects=max_redirects, headers=headers),
            timeout=timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.debug(f"Timed out after {timeout_seconds}s fetching {url}")
        return FetchOutcome(status=FetchStatus.TIMEOUT, final_url=trail[-1])
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.debug(f"Network error fetching {trail[-1]}: {exc}")
        return FetchOutcome(status=FetchStatus.NETWORK_ERROR, final_url=trail[-1])


async def fetch(
    url: str,
    timeout_seconds: float,
    *,
    client: Optional[httpx.AsyncClient] = None,
    max_redirects: int = MAX_REDIRECTS,
    headers: Optional[Dict[str, str]] = None,
) -> FetchOutcome:
    """
    GET `url`, following at most `max_redirects` redirects, within one timeout.

    Network conditions are reported through FetchOutcome.status and never raised.
    A malformed input URL raises ValueError.
    """
    target = _validate_url(url)
    timeout = float(timeout_seconds)
    if timeout <= 0:
        raise ValueError(f"timeout must be positive: {timeout_seconds!r}")

    if client is not None:
        return await _fetch_with_client(
            client,
            target,
            timeout,
            max_redirects=max_redirects,
            headers=headers,
        )

    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as owned_client:
        return await _fetch_with_client(
            owned_client,
            target,
            timeout,
            max_redirects=max_redirects,
            headers=headers,
        )
