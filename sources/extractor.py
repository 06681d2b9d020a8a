"""Best-effort description extraction from a skill page's HTML."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from config import MIN_DESCRIPTION_CHARS


logger = logging.getLogger(__name__)

# Tried in order; the first container holding a non-empty <p> wins.
_CONTENT_SELECTORS = (".prose", "article", "main", "[role=main]")
DEFAULT_MAX_CHARS = 500


def _clean_text(value: Any, *, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    text = re.sub(r"\s+", " ", str(value or "")).strip()
    if len(text) > max_chars:
        return text[: max_chars - 3].rstrip() + "..."
    return text


def _first_content_paragraph(soup: BeautifulSoup, *, max_chars: int) -> Optional[str]:
    for selector in _CONTENT_SELECTORS:
        for container in soup.select(selector):
            for paragraph in container.find_all("p"):
                text = _clean_text(paragraph.get_text(" ", strip=True), max_chars=max_chars)
                if text:
                    return text
    return None


def _meta_description(soup: BeautifulSoup, *, max_chars: int) -> Optional[str]:
    candidates = [
        soup.find("meta", attrs={"name": re.compile(r"^description$", re.IGNORECASE)}),
        soup.find("meta", attrs={"property": re.compile(r"^og:description$", re.IGNORECASE)}),
    ]
    for tag in candidates:
        if tag is None:
            continue
        text = _clean_text(tag.get("content"), max_chars=max_chars)
        if text:
            return text
    return None


def extract_description(html: Optional[str], *, max_chars: int = DEFAULT_MAX_CHARS) -> Optional[str]:
    """
    Extract a human-readable description from `html`.

    1. first paragraph inside the main prose/content section
    2. <meta name="description"> content (og:description as a last resort)

    Returns None when nothing matches; malformed markup never raises.
    A cap below MIN_DESCRIPTION_CHARS cannot hold the "..." marker and raises ValueError.
    """
    if int(max_chars) < MIN_DESCRIPTION_CHARS:
        raise ValueError(f"max_chars must be >= {MIN_DESCRIPTION_CHARS}, got {max_chars!r}")
    if not html or not str(html).strip():
        return None
    try:
        soup = BeautifulSoup(html, "lxml")
        return _first_content_paragraph(soup, max_chars=max_chars) or _meta_description(
            soup, max_chars=max_chars
        )
    except Exception as exc:
        logger.debug(f"Description extraction failed: {exc}")
        return None
