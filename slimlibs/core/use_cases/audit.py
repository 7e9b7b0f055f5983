"""
Audit use case — check a page's libraries for smaller alternatives.

Ties together detection loading, reference data loading and the
library matcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from slimlibs.core.config.loader import ConfigError, load_detections
from slimlibs.core.data import registry_for
from slimlibs.core.models.detection import DetectedLibrary
from slimlibs.core.models.report import AuditReport
from slimlibs.core.services.matcher import audit_libraries

logger = logging.getLogger(__name__)


@dataclass
class AuditResult:
    """Result of the audit use case."""

    report: AuditReport | None = None
    detections_path: Path | None = None
    detections_loaded: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["detections_path"] = str(self.detections_path) if self.detections_path else None
        result["detections_loaded"] = self.detections_loaded

        if self.report:
            result["report"] = self.report.to_dict()

        return result


def run_audit(
    detections_path: Path,
    stats_path: Path | None = None,
    suggestions_path: Path | None = None,
) -> AuditResult:
    """Audit the libraries detected on one page.

    Args:
        detections_path: JSON/YAML document with the detected stacks.
        stats_path: Optional override for the size statistics table.
        suggestions_path: Optional override for the suggestion table.

    Returns:
        AuditResult with the report, or an error message.
    """
    result = AuditResult(detections_path=detections_path)

    try:
        detections: list[DetectedLibrary] = load_detections(detections_path)
        result.detections_loaded = len(detections)

        registry = registry_for(stats_path, suggestions_path)
        result.report = audit_libraries(
            detections,
            registry.stats_table,
            registry.suggestion_table,
        )
    except ConfigError as e:
        logger.debug("Audit failed: %s", e)
        result.error = str(e)

    return result
