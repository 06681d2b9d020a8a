"""Runs the upstream skill-search command and returns its stdout."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from typing import List, Optional

from config import get_search_settings
from utils.exceptions import ConfigurationError, SearchCommandError, SearchCommandUnavailableError


logger = logging.getLogger(__name__)


def _build_argv(command: str, query: str) -> List[str]:
    try:
        argv = shlex.split(str(command or "").strip())
    except ValueError as exc:
        raise ConfigurationError(f"unparsable search command: {command!r}", {"error": str(exc)}) from exc
    if not argv:
        raise ConfigurationError("search command is empty")
    return [*argv, query]


def run_skill_search(
    query: str,
    *,
    command: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Invoke the search command with `query` appended and return its stdout.

    Raises ConfigurationError for an empty or unparsable command,
    SearchCommandUnavailableError when the executable cannot be found and
    SearchCommandError on a non-zero exit or timeout. Undecodable output bytes
    are replaced rather than raised.
    """
    settings = get_search_settings()
    argv = _build_argv(command or settings.command, query)
    executable = argv[0]
    if shutil.which(executable) is None:
        raise SearchCommandUnavailableError(
            f"search command not found: {executable}",
            returncode=127,
            command=" ".join(argv[:-1]),
        )

    env = dict(os.environ)
    env["NO_COLOR"] = "1"
    env["FORCE_COLOR"] = "0"

    logger.debug(f"Running search command: {shlex.join(argv)}")
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            env=env,
            timeout=float(timeout if timeout is not None else settings.timeout),
            check=False,
        )
    except FileNotFoundError as exc:
        raise SearchCommandUnavailableError(
            f"search command not found: {executable}",
            returncode=127,
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise SearchCommandError(
            f"search command timed out after {exc.timeout}s",
            returncode=None,
        ) from exc

    if proc.returncode != 0:
        stderr = str(proc.stderr or "").strip()
        raise SearchCommandError(
            f"search command exited with code {proc.returncode}",
            returncode=proc.returncode,
            stderr=stderr,
        )
    return str(proc.stdout or "")
