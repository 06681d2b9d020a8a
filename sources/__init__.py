"""Search output parsing and description sources."""

from .extractor import extract_description
from .fetcher import MAX_REDIRECTS, fetch
from .resolver import SourceResolver
from .result_parser import parse_search_output, strip_ansi
from .search_command import run_skill_search

__all__ = [
    "MAX_REDIRECTS",
    "SourceResolver",
    "extract_description",
    "fetch",
    "parse_search_output",
    "run_skill_search",
    "strip_ansi",
]
