"""
Reference data loader — size statistics and suggestion tables.

Two static tables drive the audit:

    stats table         library → {repository, latest, <version>...}
    suggestion table    library → [smaller replacement, ...]

Both are read from JSON or YAML and validated once at load time. The
suggestion table may be wrapped under a ``suggestions`` key.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from slimlibs.core.config.loader import ConfigError, read_document
from slimlibs.core.models.library import StatsTable, SuggestionTable

logger = logging.getLogger(__name__)

_STATS_ADAPTER = TypeAdapter(StatsTable)
_SUGGESTIONS_ADAPTER = TypeAdapter(SuggestionTable)


class ReferenceDataError(ConfigError):
    """Raised when the static reference tables are missing or corrupt."""


def parse_stats_table(data: Any, source: str = "<stats>") -> StatsTable:
    """Validate a raw stats mapping.

    Raises:
        ReferenceDataError: If any entry is malformed or lacks ``latest``.
    """
    if not isinstance(data, dict):
        raise ReferenceDataError(
            f"Expected a mapping of libraries in {source}, got {type(data).__name__}"
        )
    try:
        return _STATS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ReferenceDataError(f"Invalid stats table in {source}: {e}") from e


def parse_suggestion_table(data: Any, source: str = "<suggestions>") -> SuggestionTable:
    """Validate a raw suggestion mapping.

    Raises:
        ReferenceDataError: If the mapping is not library → list of names.
    """
    if isinstance(data, dict) and isinstance(data.get("suggestions"), dict):
        data = data["suggestions"]
    if not isinstance(data, dict):
        raise ReferenceDataError(
            f"Expected a mapping of suggestions in {source}, got {type(data).__name__}"
        )
    # Empty YAML entries ("mathjs:") mean no suggestions
    data = {key: [] if value is None else value for key, value in data.items()}
    try:
        return _SUGGESTIONS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ReferenceDataError(f"Invalid suggestion table in {source}: {e}") from e


def load_stats_table(path: Path) -> StatsTable:
    """Load and validate the library size statistics table."""
    table = parse_stats_table(read_document(path, ReferenceDataError), source=str(path))
    logger.debug("Loaded stats for %d libraries from %s", len(table), path)
    return table


def load_suggestion_table(path: Path) -> SuggestionTable:
    """Load and validate the library suggestion table."""
    table = parse_suggestion_table(read_document(path, ReferenceDataError), source=str(path))
    logger.debug("Loaded suggestions for %d libraries from %s", len(table), path)
    return table


def check_reference_data(stats: StatsTable, suggestions: SuggestionTable) -> list[str]:
    """Check referential integrity between the two tables.

    Every suggested identifier must have size statistics, otherwise the
    audit fails hard when it meets that library.

    Returns:
        Human-readable problems, empty when the tables are consistent.
    """
    errors: list[str] = []

    for library, candidates in suggestions.items():
        for candidate in candidates:
            if candidate not in stats:
                errors.append(
                    f"Suggestion '{candidate}' for '{library}' has no size statistics"
                )
            if candidate == library:
                errors.append(f"Library '{library}' suggests itself")

        dupes = sorted({c for c in candidates if candidates.count(c) > 1})
        if dupes:
            errors.append(f"Duplicate suggestions for '{library}': {', '.join(dupes)}")

    return errors
