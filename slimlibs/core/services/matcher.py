"""
Library matcher — find smaller alternatives for detected libraries.

This is the core of the audit. Given a page's detected libraries and
the two reference tables, it pairs every known library with the
alternatives that are strictly smaller, and turns those pairings into
display records with per-alternative byte savings.

Pure logic. No I/O, and inputs are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from slimlibs.core.config.data_loader import ReferenceDataError
from slimlibs.core.models.detection import DetectedLibrary
from slimlibs.core.models.library import LATEST, LibraryStats, StatsTable, SuggestionTable
from slimlibs.core.models.report import (
    AuditReport,
    LibraryItem,
    LibraryRef,
    Link,
    Pairing,
    SuggestionItem,
    TableHeading,
)

logger = logging.getLogger(__name__)

# ── Audit strings ───────────────────────────────────────────────────

AUDIT_ID = "large-javascript-libraries"
TITLE = "Avoids unnecessarily large JavaScript libraries"
FAILURE_TITLE = "Replace unnecessarily large JavaScript libraries"
DESCRIPTION = (
    "Large JavaScript libraries can lead to poor performance. "
    "Prefer smaller, functionally equivalent libraries to reduce your bundle size. "
    "[Learn more](https://developers.google.com/web/fundamentals/performance/webpack/"
    "decrease-frontend-size#optimize_dependencies)."
)

COLUMN_NAME = "Library"
COLUMN_TRANSFER_SIZE = "Transfer Size"
COLUMN_WASTED_BYTES = "Potential Savings"


def known_libraries(
    detected: Iterable[DetectedLibrary],
    stats: StatsTable,
) -> list[DetectedLibrary]:
    """Select the detections the audit can reason about.

    Keeps JavaScript detections whose identifier is in the stats table,
    once per identifier. The first occurrence wins, whatever its version.
    """
    selected: list[DetectedLibrary] = []
    seen: set[str] = set()

    for lib in detected:
        if not lib.is_javascript:
            continue
        if not lib.name or lib.name not in stats:
            logger.debug("Skipping unknown library: %s", lib.display_name or "<unidentified>")
            continue
        if lib.name in seen:
            continue
        seen.add(lib.name)
        selected.append(lib)

    return selected


def _candidate_stats(candidate: str, library: str, stats: StatsTable) -> LibraryStats:
    entry = stats.get(candidate)
    if entry is None:
        raise ReferenceDataError(
            f"Suggestion '{candidate}' for '{library}' has no size statistics"
        )
    return entry


def pair_library(
    lib: DetectedLibrary,
    stats: StatsTable,
    suggestions: SuggestionTable,
) -> Pairing | None:
    """Pair one known library with its strictly smaller alternatives.

    Returns:
        The pairing, or None when no alternative is smaller.

    Raises:
        ReferenceDataError: If a suggested library has no size statistics.
    """
    assert lib.name is not None
    entry = stats[lib.name]
    version, original_stats = entry.resolve(lib.version)
    if lib.version and version == LATEST and lib.version != LATEST:
        logger.debug("No stats for %s@%s, using latest", lib.name, lib.version)

    smaller: list[LibraryRef] = []
    for candidate in suggestions.get(lib.name, []):
        candidate_entry = _candidate_stats(candidate, lib.name, stats)
        candidate_gzip = candidate_entry.latest.gzip
        if candidate_gzip >= original_stats.gzip:
            continue
        smaller.append(
            LibraryRef(
                name=candidate,
                repository=candidate_entry.repository,
                gzip=candidate_gzip,
            )
        )

    if not smaller:
        return None

    smaller.sort(key=lambda ref: ref.gzip)
    return Pairing(
        original=LibraryRef(
            name=lib.name,
            repository=entry.repository,
            gzip=original_stats.gzip,
            version=version,
        ),
        suggestions=smaller,
    )


def find_pairings(
    detected: Iterable[DetectedLibrary],
    stats: StatsTable,
    suggestions: SuggestionTable,
) -> list[Pairing]:
    """Pair every replaceable detected library, in detection order."""
    return _pair_known(known_libraries(detected, stats), stats, suggestions)


def _pair_known(
    known: list[DetectedLibrary],
    stats: StatsTable,
    suggestions: SuggestionTable,
) -> list[Pairing]:
    pairings: list[Pairing] = []
    for lib in known:
        pairing = pair_library(lib, stats, suggestions)
        if pairing is not None:
            pairings.append(pairing)
    return pairings


def build_items(pairings: Iterable[Pairing]) -> list[LibraryItem]:
    """Turn pairings into two-level display records."""
    items: list[LibraryItem] = []
    for pairing in pairings:
        original = pairing.original
        sub_items = [
            SuggestionItem(
                suggestion=Link(text=s.name, url=s.repository),
                transfer_size=s.gzip,
                wasted_bytes=original.gzip - s.gzip,
            )
            for s in pairing.suggestions
        ]
        items.append(
            LibraryItem(
                name=Link(text=original.name, url=original.repository),
                transfer_size=original.gzip,
                wasted_bytes=0,
                sub_items=sub_items,
            )
        )
    return items


def report_headings() -> list[TableHeading]:
    return [
        TableHeading(key="name", value_type="url", label=COLUMN_NAME, sub_items_key="suggestion"),
        TableHeading(
            key="transferSize",
            value_type="bytes",
            label=COLUMN_TRANSFER_SIZE,
            sub_items_key="transferSize",
        ),
        TableHeading(
            key="wastedBytes",
            value_type="bytes",
            label=COLUMN_WASTED_BYTES,
            sub_items_key="wastedBytes",
        ),
    ]


def audit_libraries(
    detected: Iterable[DetectedLibrary],
    stats: StatsTable,
    suggestions: SuggestionTable,
) -> AuditReport:
    """Run the full library audit for one page.

    Args:
        detected: Libraries detected on the page, in detection order.
        stats: Known size statistics per library and version.
        suggestions: Candidate replacements per library.

    Returns:
        AuditReport with one item per replaceable library.

    Raises:
        ReferenceDataError: If the reference tables are inconsistent.
    """
    known = known_libraries(detected, stats)
    items = build_items(_pair_known(known, stats, suggestions))
    report = AuditReport(
        id=AUDIT_ID,
        title=FAILURE_TITLE if items else TITLE,
        description=DESCRIPTION,
        headings=report_headings(),
        items=items,
        libraries_checked=len(known),
    )

    logger.info(
        "Checked %d libraries: %d replaceable, %d bytes avoidable",
        report.libraries_checked,
        report.replaceable_count,
        report.potential_savings,
    )
    return report
