"""
Shared test fixtures and configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from slimlibs.core.config.data_loader import parse_stats_table, parse_suggestion_table
from slimlibs.core.models.library import StatsTable, SuggestionTable
from slimlibs.core.observability.logging_config import PACKAGE_LOGGER

RAW_STATS = {
    "liba": {
        "repository": "https://example.com/liba",
        "latest": {"gzip": 100},
        "1.0.0": {"gzip": 80},
    },
    "libb": {"repository": "https://example.com/libb", "latest": {"gzip": 50}},
    "libc": {"repository": "https://example.com/libc", "latest": {"gzip": 150}},
    "libd": {"repository": "https://example.com/libd", "latest": {"gzip": 20}},
    "libe": {"repository": "https://example.com/libe", "latest": {"gzip": 100}},
}

RAW_SUGGESTIONS = {
    "liba": ["libb", "libc"],
    "libc": ["libb", "libd", "liba"],
}


@pytest.fixture
def stats_table() -> StatsTable:
    """Small stats table: liba 100, libb 50, libc 150, libd 20, libe 100."""
    return parse_stats_table(RAW_STATS)


@pytest.fixture
def suggestion_table() -> SuggestionTable:
    return parse_suggestion_table(RAW_SUGGESTIONS)


@pytest.fixture
def stats_file(tmp_path: Path) -> Path:
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(RAW_STATS))
    return path


@pytest.fixture
def suggestions_file(tmp_path: Path) -> Path:
    path = tmp_path / "suggestions.json"
    path.write_text(json.dumps(RAW_SUGGESTIONS))
    return path


@pytest.fixture
def detections_file(tmp_path: Path) -> Path:
    """A detected-stack artifact in the upstream layout."""
    path = tmp_path / "stacks.json"
    path.write_text(json.dumps({
        "Stacks": [
            {"detector": "js", "id": "liba", "name": "Lib A", "npm": "liba", "version": "9.9.9"},
            {"detector": "js", "id": "libc", "name": "Lib C", "npm": "libc"},
            {"detector": "js", "id": "mystery", "name": "Mystery"},
            {"detector": "css", "id": "libb", "name": "Lib B", "npm": "libb"},
        ],
    }))
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo CLI logging setup so handlers never outlive a test."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = pkg.handlers[:], pkg.level, pkg.propagate
    yield
    for handler in pkg.handlers:
        if handler not in handlers:
            handler.close()
    pkg.handlers[:] = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate
