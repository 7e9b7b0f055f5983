"""
Report models — pairings and the display records handed to a renderer.

A Pairing ties one detected library to its strictly smaller
alternatives. Display records flatten pairings into a two-level table:
the original library on top with zero waste, its alternatives nested
below with the bytes each one would save.

``to_dict()`` methods emit the renderer's wire shape (camelCase keys,
links as ``{type: "link", text, url}``).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from slimlibs.core.models.library import LATEST


class LibraryRef(BaseModel):
    """A library with the size it was compared at."""

    name: str
    repository: str = ""
    gzip: int = Field(ge=0)
    version: str = LATEST        # stats entry the size was read from


class Pairing(BaseModel):
    """An original library matched with its smaller alternatives.

    Suggestions are ordered smallest first and every one of them is
    strictly smaller than the original.
    """

    original: LibraryRef
    suggestions: list[LibraryRef] = Field(default_factory=list)

    @property
    def best(self) -> LibraryRef | None:
        """The smallest alternative."""
        return self.suggestions[0] if self.suggestions else None


class Link(BaseModel):
    """A named link cell in the report table."""

    text: str
    url: str = ""
    type: Literal["link"] = "link"

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text, "url": self.url}


class SuggestionItem(BaseModel):
    """Nested row: one alternative and what switching to it saves."""

    suggestion: Link
    transfer_size: int
    wasted_bytes: int

    def to_dict(self) -> dict:
        return {
            "suggestion": self.suggestion.to_dict(),
            "transferSize": self.transfer_size,
            "wastedBytes": self.wasted_bytes,
        }


class LibraryItem(BaseModel):
    """Top row: the original library.

    The original is the baseline, so its own waste is always zero.
    """

    name: Link
    transfer_size: int
    wasted_bytes: int = 0
    sub_items: list[SuggestionItem] = Field(default_factory=list)

    @property
    def best_savings(self) -> int:
        """Bytes saved by switching to the smallest alternative."""
        return max((s.wasted_bytes for s in self.sub_items), default=0)

    def to_dict(self) -> dict:
        return {
            "name": self.name.to_dict(),
            "transferSize": self.transfer_size,
            "wastedBytes": self.wasted_bytes,
            "subItems": {
                "type": "subitems",
                "items": [s.to_dict() for s in self.sub_items],
            },
        }


class TableHeading(BaseModel):
    """Column definition for the two-level report table."""

    key: str
    value_type: str              # url, bytes
    label: str
    sub_items_key: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"key": self.key, "valueType": self.value_type, "label": self.label}
        if self.sub_items_key:
            result["subItemsHeading"] = {"key": self.sub_items_key}
        return result


class AuditReport(BaseModel):
    """Outcome of a library audit over one page."""

    id: str
    title: str
    description: str = ""
    headings: list[TableHeading] = Field(default_factory=list)
    items: list[LibraryItem] = Field(default_factory=list)
    libraries_checked: int = 0   # distinct known libraries considered

    @property
    def replaceable_count(self) -> int:
        return len(self.items)

    @property
    def potential_savings(self) -> int:
        """Total bytes saved if every library took its best alternative."""
        return sum(item.best_savings for item in self.items)

    @property
    def passed(self) -> bool:
        return not self.items

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "passed": self.passed,
            "libraries_checked": self.libraries_checked,
            "replaceable_count": self.replaceable_count,
            "potential_savings": self.potential_savings,
            "details": {
                "type": "opportunity",
                "headings": [h.to_dict() for h in self.headings],
                "items": [i.to_dict() for i in self.items],
            },
        }
