"""
Library statistics model — known compressed sizes per library version.

Each library in the stats table carries a repository URL at the top
level and one size entry per known version, including a mandatory
``latest`` entry. On disk the versions sit flat beside ``repository``::

    moment:
      repository: https://github.com/moment/moment
      latest: {gzip: 72101}
      2.24.0: {gzip: 69412}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LATEST = "latest"


class LibraryVersionStats(BaseModel):
    """Size statistics for one published version of a library."""

    model_config = ConfigDict(extra="ignore")

    gzip: int = Field(ge=0)      # compressed transfer size in bytes
    repository: str = ""


class LibraryStats(BaseModel):
    """All known size statistics for one library."""

    repository: str = ""
    versions: dict[str, LibraryVersionStats]

    @model_validator(mode="before")
    @classmethod
    def _collect_versions(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "versions" in data:
            return data
        versions = {
            str(key): value
            for key, value in data.items()
            if key != "repository" and isinstance(value, dict)
        }
        return {"repository": data.get("repository") or "", "versions": versions}

    @field_validator("versions")
    @classmethod
    def _require_latest(
        cls, versions: dict[str, LibraryVersionStats]
    ) -> dict[str, LibraryVersionStats]:
        if LATEST not in versions:
            raise ValueError(f"missing '{LATEST}' entry")
        return versions

    @property
    def latest(self) -> LibraryVersionStats:
        return self.versions[LATEST]

    def resolve(self, version: str | None) -> tuple[str, LibraryVersionStats]:
        """Pick the stats entry for a detected version.

        An exact version key wins. Anything else, including no version
        at all, falls back to ``latest``.
        """
        if version and version in self.versions:
            return version, self.versions[version]
        return LATEST, self.latest

    def to_dict(self) -> dict:
        """Flat on-disk layout: ``repository`` beside the version keys."""
        result: dict = {"repository": self.repository}
        for key, stats in self.versions.items():
            result[key] = stats.model_dump()
        return result


# Library identifier → statistics
StatsTable = dict[str, LibraryStats]

# Library identifier → candidate replacement identifiers
SuggestionTable = dict[str, list[str]]
