"""
Bundled reference data — default stats and suggestion tables.

Loads the tables shipped in ``slimlibs/core/data/catalogs/`` once at
first access and caches them for the lifetime of the registry.

Usage::

    from slimlibs.core.data import registry_for

    registry = registry_for()               # bundled catalogs, shared
    stats = registry.stats_table            # dict[str, LibraryStats]
    suggestions = registry.suggestion_table  # dict[str, list[str]]
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

from slimlibs.core.config.data_loader import load_stats_table, load_suggestion_table
from slimlibs.core.models.library import StatsTable, SuggestionTable

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

STATS_PATH = _DATA_DIR / "catalogs" / "library_stats.json"
SUGGESTIONS_PATH = _DATA_DIR / "catalogs" / "library_suggestions.yml"


class DataRegistry:
    """Lazy holder for the reference tables.

    Paths default to the bundled catalogs; pass explicit paths to audit
    against a different dataset.
    """

    def __init__(
        self,
        stats_path: Path | None = None,
        suggestions_path: Path | None = None,
    ) -> None:
        self.stats_path = stats_path or STATS_PATH
        self.suggestions_path = suggestions_path or SUGGESTIONS_PATH

    @cached_property
    def stats_table(self) -> StatsTable:
        data = load_stats_table(self.stats_path)
        logger.debug("Loaded %d library stats entries", len(data))
        return data

    @cached_property
    def suggestion_table(self) -> SuggestionTable:
        data = load_suggestion_table(self.suggestions_path)
        logger.debug("Loaded %d suggestion entries", len(data))
        return data


_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Return the process-level registry for the bundled catalogs."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = DataRegistry()
    return _registry


def registry_for(
    stats_path: Path | None = None,
    suggestions_path: Path | None = None,
) -> DataRegistry:
    """Return the shared registry, or a fresh one when a path is overridden."""
    if stats_path is None and suggestions_path is None:
        return get_registry()
    return DataRegistry(stats_path=stats_path, suggestions_path=suggestions_path)
