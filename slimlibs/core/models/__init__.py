"""
Domain models — Pydantic types for the library audit.

All models are re-exported here for convenient access:

    from slimlibs.core.models import DetectedLibrary, LibraryStats, Pairing, AuditReport
"""

from slimlibs.core.models.detection import JS_DETECTOR, DetectedLibrary
from slimlibs.core.models.library import (
    LATEST,
    LibraryStats,
    LibraryVersionStats,
    StatsTable,
    SuggestionTable,
)
from slimlibs.core.models.report import (
    AuditReport,
    LibraryItem,
    LibraryRef,
    Link,
    Pairing,
    SuggestionItem,
    TableHeading,
)

__all__ = [
    # report.py
    "AuditReport",
    # detection.py
    "DetectedLibrary",
    "JS_DETECTOR",
    # library.py
    "LATEST",
    "LibraryItem",
    "LibraryRef",
    "LibraryStats",
    "LibraryVersionStats",
    "Link",
    "Pairing",
    "StatsTable",
    "SuggestionItem",
    "SuggestionTable",
    "TableHeading",
]
