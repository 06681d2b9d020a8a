from __future__ import annotations

from typing import Dict, List

import pytest

from core import FetchOutcome, FetchStatus, SearchHit, SourceUsed
from sources.resolver import SourceResolver
from utils.exceptions import ConfigurationError


FALLBACK = "https://fallback.test/{owner}/{repo}/{skill}"


def _hit() -> SearchHit:
    return SearchHit(
        owner="acme",
        repo_name="tools",
        skill_name="react-testing",
        canonical_url="https://primary.test/acme/tools/react-testing",
    )


def _page(text: str) -> str:
    return f"<html><body><div class='prose'><p>{text}</p></div></body></html>"


class _FakeFetch:
    def __init__(self, responses: Dict[str, object]):
        self.responses = responses
        self.calls: List[str] = []

    async def __call__(self, url, timeout_seconds, *, client=None, max_redirects=3, headers=None):
        self.calls.append(url)
        response = self.responses.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FetchOutcome(status=FetchStatus.NETWORK_ERROR, final_url=url)
        if isinstance(response, FetchOutcome):
            return response
        return FetchOutcome(status=FetchStatus.OK, status_code=200, body=str(response), final_url=url)


@pytest.mark.asyncio
async def test_primary_source_wins_without_touching_fallback() -> None:
    fake = _FakeFetch({"https://primary.test/acme/tools/react-testing": _page("Primary text.")})
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake)

    result = await resolver.resolve(_hit(), 5)

    assert result.description == "Primary text."
    assert result.source_used == SourceUsed.PRIMARY
    assert fake.calls == ["https://primary.test/acme/tools/react-testing"]


@pytest.mark.asyncio
async def test_http_error_on_primary_uses_fallback() -> None:
    fake = _FakeFetch(
        {
            "https://primary.test/acme/tools/react-testing": FetchOutcome(
                status=FetchStatus.HTTP_ERROR,
                status_code=404,
                final_url="https://primary.test/acme/tools/react-testing",
            ),
            "https://fallback.test/acme/tools/react-testing": _page("Fallback text."),
        }
    )
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake)

    result = await resolver.resolve(_hit(), 5)

    assert result.description == "Fallback text."
    assert result.source_used == SourceUsed.FALLBACK
    assert fake.calls == [
        "https://primary.test/acme/tools/react-testing",
        "https://fallback.test/acme/tools/react-testing",
    ]


@pytest.mark.asyncio
async def test_empty_extraction_on_primary_uses_fallback() -> None:
    fake = _FakeFetch(
        {
            "https://primary.test/acme/tools/react-testing": "<html><body>nothing useful</body></html>",
            "https://fallback.test/acme/tools/react-testing": '<meta name="description" content="From meta">',
        }
    )
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake)

    result = await resolver.resolve(_hit(), 5)

    assert result.source_used == SourceUsed.FALLBACK
    assert result.description == "From meta"


@pytest.mark.asyncio
async def test_both_sources_failing_yields_missing_result() -> None:
    fake = _FakeFetch(
        {
            "https://primary.test/acme/tools/react-testing": FetchOutcome(
                status=FetchStatus.TIMEOUT,
                final_url="https://primary.test/acme/tools/react-testing",
            ),
        }
    )
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake)

    result = await resolver.resolve(_hit(), 5)

    assert result.description is None
    assert result.source_used == SourceUsed.NONE
    assert len(fake.calls) == 2


@pytest.mark.asyncio
async def test_unexpected_fetch_errors_never_escape() -> None:
    fake = _FakeFetch(
        {
            "https://primary.test/acme/tools/react-testing": ValueError("malformed url"),
            "https://fallback.test/acme/tools/react-testing": RuntimeError("boom"),
        }
    )
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake)

    result = await resolver.resolve(_hit(), 5)

    assert result.source_used == SourceUsed.NONE
    assert result.description is None


@pytest.mark.asyncio
async def test_resolver_passes_redirect_bound_and_user_agent() -> None:
    seen = {}

    async def _fetch(url, timeout_seconds, *, client=None, max_redirects=3, headers=None):
        seen["timeout"] = timeout_seconds
        seen["max_redirects"] = max_redirects
        seen["headers"] = headers
        return FetchOutcome(status=FetchStatus.OK, body=_page("ok"), final_url=url)

    resolver = SourceResolver(
        fallback_template=FALLBACK,
        fetch_fn=_fetch,
        user_agent="tests/1.0",
        max_redirects=2,
    )
    await resolver.resolve(_hit(), 7)

    assert seen == {"timeout": 7, "max_redirects": 2, "headers": {"User-Agent": "tests/1.0"}}


@pytest.mark.parametrize("max_chars", [0, 3])
def test_description_cap_without_room_for_marker_is_rejected(max_chars: int) -> None:
    with pytest.raises(ConfigurationError):
        SourceResolver(fallback_template=FALLBACK, max_chars=max_chars)


@pytest.mark.parametrize(
    "template",
    [
        "https://fallback.test/{owner}/{name}",
        "https://fallback.test/{0}",
        "fallback.test/{owner}/{repo}/{skill}",
    ],
)
def test_unusable_fallback_template_is_rejected(template: str) -> None:
    with pytest.raises(ConfigurationError):
        SourceResolver(fallback_template=template)


@pytest.mark.asyncio
async def test_small_description_cap_is_honoured() -> None:
    fake = _FakeFetch({"https://primary.test/acme/tools/react-testing": _page("Primary text.")})
    resolver = SourceResolver(fallback_template=FALLBACK, fetch_fn=fake, max_chars=6)

    result = await resolver.resolve(_hit(), 5)

    assert result.description == "Pri..."
