from __future__ import annotations

import pytest

from sources.result_parser import parse_search_output, strip_ansi
from utils.exceptions import ConfigurationError


SAMPLE_OUTPUT = """
\x1b[38;5;250mInstall with npx skills add <owner/repo@skill>\x1b[0m

\x1b[1mvercel-labs/agent-skills@vercel-react-best-practices\x1b[0m
\x1b[38;5;102m└ https://skills.sh/vercel-labs/agent-skills/vercel-react-best-practices\x1b[0m

anthropics/skills@frontend-design
└ https://skills.sh/anthropics/skills/frontend-design

some unrelated banner line
acme/tools@react-testing
""".strip()


def test_parse_keeps_order_and_uses_upstream_urls() -> None:
    hits = parse_search_output(SAMPLE_OUTPUT, max_results=10)

    assert [hit.slug for hit in hits] == [
        "vercel-labs/agent-skills@vercel-react-best-practices",
        "anthropics/skills@frontend-design",
        "acme/tools@react-testing",
    ]
    assert hits[0].canonical_url == "https://skills.sh/vercel-labs/agent-skills/vercel-react-best-practices"
    assert hits[1].owner == "anthropics"
    assert hits[1].repo_name == "skills"
    assert hits[1].skill_name == "frontend-design"


def test_parse_builds_url_from_template_when_upstream_omits_it() -> None:
    hits = parse_search_output(
        "acme/tools@react-testing\n",
        max_results=5,
        url_template="https://catalog.example/{owner}/{repo}/{skill}",
    )

    assert len(hits) == 1
    assert hits[0].canonical_url == "https://catalog.example/acme/tools/react-testing"


def test_parse_truncates_at_max_results() -> None:
    hits = parse_search_output(SAMPLE_OUTPUT, max_results=2)
    assert [hit.skill_name for hit in hits] == ["vercel-react-best-practices", "frontend-design"]


def test_parse_dedupes_case_insensitively() -> None:
    text = "\n".join(
        [
            "acme/tools@react-testing",
            "ACME/Tools@React-Testing",
            "acme/tools@other",
        ]
    )
    hits = parse_search_output(text, max_results=10, url_template="https://x.test/{owner}/{repo}/{skill}")
    assert [hit.skill_name for hit in hits] == ["react-testing", "other"]


def test_parse_skips_malformed_lines_and_signals_empty() -> None:
    text = "No skills matched\nnot-a-hit\nowner/repo-without-skill\n@lonely\n"
    assert parse_search_output(text, max_results=10) == []
    assert parse_search_output("", max_results=10) == []


def test_strip_ansi_removes_escape_sequences() -> None:
    assert strip_ansi("\x1b[1mbold\x1b[0m plain") == "bold plain"


def test_parse_rejects_template_with_unknown_placeholder() -> None:
    with pytest.raises(ConfigurationError):
        parse_search_output(
            "acme/tools@react-testing\n",
            max_results=5,
            url_template="https://catalog.example/{owner}/{name}",
        )
