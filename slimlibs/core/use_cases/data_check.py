"""
Data check use case — validate the reference tables and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from slimlibs.core.config.data_loader import ReferenceDataError, check_reference_data
from slimlibs.core.data import registry_for


@dataclass
class DataCheckResult:
    """Result of reference data validation."""

    valid: bool = False
    stats_path: Path | None = None
    suggestions_path: Path | None = None
    library_count: int = 0
    suggestion_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "stats_path": str(self.stats_path) if self.stats_path else None,
            "suggestions_path": str(self.suggestions_path) if self.suggestions_path else None,
            "library_count": self.library_count,
            "suggestion_count": self.suggestion_count,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_data(
    stats_path: Path | None = None,
    suggestions_path: Path | None = None,
) -> DataCheckResult:
    """Validate the stats and suggestion tables.

    Args:
        stats_path: Optional override for the size statistics table.
        suggestions_path: Optional override for the suggestion table.

    Returns:
        DataCheckResult with validation status and any issues.
    """
    registry = registry_for(stats_path, suggestions_path)
    result = DataCheckResult(
        stats_path=registry.stats_path,
        suggestions_path=registry.suggestions_path,
    )

    # Load and validate
    try:
        stats = registry.stats_table
        suggestions = registry.suggestion_table
    except ReferenceDataError as e:
        result.errors.append(str(e))
        return result

    result.library_count = len(stats)
    result.suggestion_count = sum(len(c) for c in suggestions.values())

    # Referential checks
    result.errors.extend(check_reference_data(stats, suggestions))

    # Semantic checks
    for library in sorted(suggestions):
        if library not in stats:
            result.warnings.append(
                f"'{library}' has suggestions but no size statistics; it is never audited"
            )
            continue
        candidates = [c for c in suggestions[library] if c in stats]
        if candidates and all(
            stats[c].latest.gzip >= stats[library].latest.gzip for c in candidates
        ):
            result.warnings.append(
                f"No suggestion for '{library}' is smaller than its latest version"
            )

    # Result
    result.valid = len(result.errors) == 0
    return result
