"""
Detection model — a library found on an audited page.

Detections are produced upstream (stack detection of the page's scripts)
and arrive here already computed. The matcher only consults entries
whose detector marks them as JavaScript-library detections; entries
without a detector kind are never treated as JavaScript.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# Detector kind for JavaScript-library detections
JS_DETECTOR = "js"


class DetectedLibrary(BaseModel):
    """One library instance detected on a page.

    ``name`` is the package identifier (registry name) and may be absent
    when the detector recognised a library but could not identify its
    package. The upstream artifact carries the identifier under ``npm``
    and a display name under ``name``; both layouts are accepted.
    """

    model_config = ConfigDict(extra="ignore")

    detector: str | None = None  # detector kind, "js" for JavaScript libraries
    name: str | None = None      # package identifier, e.g. "moment"
    version: str | None = None   # detected version, best-effort
    label: str = ""              # human display name, e.g. "Moment.js"

    @model_validator(mode="before")
    @classmethod
    def _split_artifact_keys(cls, data: Any) -> Any:
        if isinstance(data, dict) and "npm" in data:
            data = dict(data)
            data.setdefault("label", data.get("name") or "")
            data["name"] = data.pop("npm")
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("version", mode="before")
    @classmethod
    def _check_version(cls, value: Any) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            # 3.10 read as a number is already 3.1; refuse to guess
            raise ValueError(
                f"version must be a string, got {type(value).__name__} {value!r}; "
                "quote it in YAML (version: \"3.10\")"
            )
        return value.strip() or None

    @property
    def is_javascript(self) -> bool:
        """Whether this detection came from the JavaScript-library detector."""
        return self.detector == JS_DETECTOR

    @property
    def is_identified(self) -> bool:
        """Whether the detection carries a package identifier."""
        return bool(self.name)

    @property
    def display_name(self) -> str:
        return self.label or self.name or ""
