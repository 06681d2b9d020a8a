"""Text and JSON rendering of enrichment results."""

from __future__ import annotations

import json
from typing import Sequence

from rich.text import Text

from core import DescriptionResult, SourceUsed


NO_RESULTS = "No skills found."
NO_DESCRIPTION = "[no description found]"


def build_report(results: Sequence[DescriptionResult], *, fetch_descriptions: bool = True) -> Text:
    """Styled report: bold slug, URL line, then the description (unless no-fetch)."""
    if not results:
        return Text(NO_RESULTS)

    report = Text()
    for idx, result in enumerate(results):
        if idx:
            report.append("\n\n")
        report.append(result.hit.slug, style="bold")
        report.append(f"\n└ {result.hit.canonical_url}")
        if not fetch_descriptions:
            continue
        if result.source_used == SourceUsed.NONE or not result.description:
            report.append(f"\n{NO_DESCRIPTION}", style="dim")
        else:
            report.append(f"\n{result.description}")
    return report


def render_report(results: Sequence[DescriptionResult], *, fetch_descriptions: bool = True) -> str:
    return build_report(results, fetch_descriptions=fetch_descriptions).plain


def render_json(results: Sequence[DescriptionResult]) -> str:
    return json.dumps([result.to_payload() for result in results], ensure_ascii=False, indent=2)
