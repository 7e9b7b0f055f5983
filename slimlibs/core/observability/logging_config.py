"""
Logging configuration — the ``slimlibs`` logger tree for the CLI.

main.py calls :func:`configure_cli_logging` once per invocation. Only
the ``slimlibs`` package logger gets handlers, so a host application
that imports the matcher keeps its own root configuration.

The console level comes from the first of:
    --debug / --verbose / --quiet  >  SLIMLIBS_LOG_LEVEL  >  WARNING

A log file is opt-in via SLIMLIBS_LOG_FILE, at SLIMLIBS_LOG_FILE_LEVEL
(defaults to the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "slimlibs"

ENV_LEVEL = "SLIMLIBS_LOG_LEVEL"
ENV_FILE = "SLIMLIBS_LOG_FILE"
ENV_FILE_LEVEL = "SLIMLIBS_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message is the whole story
_FMT_CONSOLE = "%(levelname)s: %(message)s"

# INFO: which stage said it (loader, matcher, use case)
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output: skipped detections and fallbacks need file:line
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant, WARNING if unknown."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the console level from the CLI flags, then the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    env = os.environ if environ is None else environ
    return parse_level(env.get(ENV_LEVEL))


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_SHORT)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_SHORT)
    return logging.Formatter(_FMT_CONSOLE)


def setup_logging(
    level: int = logging.WARNING,
    log_file: str | None = None,
    log_file_level: int | None = None,
) -> logging.Logger:
    """Attach console and optional file handlers to the package logger.

    Replaces any handlers from an earlier call, so repeated CLI
    invocations in one process do not duplicate output.

    Returns:
        The configured ``slimlibs`` logger.
    """
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(_console_formatter(level))
    pkg.addHandler(console)

    effective = level
    if log_file:
        file_level = level if log_file_level is None else log_file_level
        effective = min(effective, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        pkg.addHandler(fh)

    pkg.setLevel(effective)
    pkg.propagate = False
    return pkg


def configure_cli_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Configure logging for one CLI invocation from flags and environment."""
    env = os.environ if environ is None else environ
    level = resolve_level(debug=debug, verbose=verbose, quiet=quiet, environ=env)

    log_file = env.get(ENV_FILE) or None
    file_level_name = env.get(ENV_FILE_LEVEL)
    file_level = parse_level(file_level_name) if file_level_name else None

    return setup_logging(level=level, log_file=log_file, log_file_level=file_level)
