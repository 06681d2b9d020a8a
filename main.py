"""CLI entrypoint: search skills, then enrich every hit with a description."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich.text import Text

from config import get_enrich_settings
from core import EnrichmentConfig
from orchestrator import enrich_hits
from render import NO_RESULTS, build_report, render_json
from sources import parse_search_output, run_skill_search
from utils.exceptions import ConfigurationError, SearchCommandError, SearchCommandUnavailableError
from utils.logger import configure_package_loggers, console, err_console, get_logger


EXIT_USAGE = 2
EXIT_COMMAND_NOT_FOUND = 127


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    defaults = get_enrich_settings()
    parser = argparse.ArgumentParser(
        prog="enrich-find",
        description="Search skills and enrich each result with a short description.",
    )
    parser.add_argument("query", help="search query passed to the skill search command")
    parser.add_argument("--max", type=_positive_int, default=defaults.max_results, help="maximum results to enrich")
    parser.add_argument("--timeout", type=_positive_int, default=defaults.timeout, help="per-fetch timeout in seconds")
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=defaults.concurrency,
        help="maximum simultaneous fetches",
    )
    parser.add_argument("--no-fetch", action="store_true", help="print raw matches without descriptions")
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log progress to stderr (-vv for debug)")
    return parser


def _report_error(message: str) -> None:
    line = Text("error: ", style="bold red")
    line.append(message)
    err_console.print(line)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        parser = build_parser()
    except ValidationError as exc:
        _report_error(f"invalid configuration: {exc}")
        return EXIT_USAGE
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    configure_package_loggers(level)
    logger = get_logger()

    config = EnrichmentConfig(
        max_results=args.max,
        timeout_seconds=args.timeout,
        concurrency=args.concurrency,
        fetch_descriptions=not args.no_fetch,
    )

    try:
        raw_output = run_skill_search(args.query)
        hits = parse_search_output(raw_output, config.max_results)
        logger.info(f"Parsed {len(hits)} hit(s) for '{args.query}'")
        results = asyncio.run(enrich_hits(hits, config)) if hits else []
    except SearchCommandUnavailableError as exc:
        _report_error(f"{exc.message} (is the skills CLI installed?)")
        return EXIT_COMMAND_NOT_FOUND
    except SearchCommandError as exc:
        detail = f": {exc.stderr}" if exc.stderr else ""
        _report_error(f"{exc.message}{detail}")
        return exc.returncode or 1
    except ConfigurationError as exc:
        _report_error(str(exc))
        return EXIT_USAGE

    if not results:
        # Same sentinel in both output modes.
        print(NO_RESULTS)
    elif args.json:
        print(render_json(results))
    else:
        console.print(build_report(results, fetch_descriptions=config.fetch_descriptions))
    return 0


if __name__ == "__main__":
    sys.exit(main())
