"""Parse the textual output of the skill-search command into SearchHits."""

from __future__ import annotations

import re
from typing import List, Optional

from config import check_url_template, get_source_settings
from core import SearchHit


_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07]*\x07")
_HIT_RE = re.compile(r"(?<![\w.@/<-])([A-Za-z0-9][\w.-]*)/([\w.-]+)@([\w.:-]+)")
_URL_RE = re.compile(r"https?://\S+")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", str(text or ""))


def _url_on_line(line: str) -> Optional[str]:
    if _HIT_RE.search(line):
        return None
    match = _URL_RE.search(line)
    if not match:
        return None
    return match.group(0).rstrip(").,;")


def parse_search_output(
    text: str,
    max_results: int,
    *,
    url_template: Optional[str] = None,
) -> List[SearchHit]:
    """
    Turn raw search output into ordered, deduplicated hits.

    Lines without an `owner/repo@skill` token are skipped. A URL on the line right
    after a hit becomes that hit's canonical URL. An empty list means no skills.
    A template with unknown placeholders raises ConfigurationError.
    """
    limit = max(0, int(max_results))
    if limit == 0:
        return []
    template = check_url_template(
        url_template or get_source_settings().primary_url_template,
        "primary url template",
    )

    lines = strip_ansi(text).splitlines()
    hits: List[SearchHit] = []
    seen = set()
    for idx, line in enumerate(lines):
        match = _HIT_RE.search(line)
        if not match:
            continue
        owner, repo, skill = match.group(1), match.group(2), match.group(3).rstrip(".:")
        key = (owner.lower(), repo.lower(), skill.lower())
        if not skill or key in seen:
            continue

        next_url = _url_on_line(lines[idx + 1]) if idx + 1 < len(lines) else None
        canonical = next_url or template.format(owner=owner, repo=repo, skill=skill)
        seen.add(key)
        hits.append(
            SearchHit(
                owner=owner,
                repo_name=repo,
                skill_name=skill,
                canonical_url=canonical,
            )
        )
        if len(hits) >= limit:
            break
    return hits
