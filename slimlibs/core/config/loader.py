"""
Input loader — reads the detected-stack document into domain models.

The detected libraries come from an upstream stack detector and are
handed over as a JSON or YAML document. Either a bare list of entries
or a mapping that wraps the list under a ``Stacks`` key is accepted.
In the wrapped artifact layout the package identifier is ``npm`` only;
``name`` there is a display label. Bare lists may use ``name`` as the
identifier. Versions must be strings (quote ``"3.10"`` in YAML)::

    Stacks:
      - detector: js
        name: Moment.js
        npm: moment
        version: 2.24.0
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from slimlibs.core.models.detection import DetectedLibrary

logger = logging.getLogger(__name__)

# Keys the detection list may be wrapped under
STACKS_KEYS = ("Stacks", "stacks")


class ConfigError(Exception):
    """Raised when an input document is missing or unreadable."""


class DetectionInputError(ConfigError):
    """Raised when the detected-stack document is invalid."""


def read_document(path: Path, error: type[ConfigError] = ConfigError) -> Any:
    """Read a JSON or YAML document from disk.

    ``.json`` files go through the json parser; anything else through
    ``yaml.safe_load`` (which also reads JSON).

    Raises:
        error: If the file is missing, unreadable, or does not parse.
    """
    if not path.is_file():
        raise error(f"File not found: {path}")

    logger.debug("Reading %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise error(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise error(f"Invalid JSON in {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise error(f"Invalid YAML in {path}: {e}") from e


def parse_detections(data: Any, source: str = "<input>") -> list[DetectedLibrary]:
    """Validate raw detection data into DetectedLibrary models.

    Args:
        data: A list of entries, or a mapping holding one under ``Stacks``.
        source: Label used in error messages.

    Raises:
        DetectionInputError: If the data is not a list of mappings.
    """
    if data is None:
        return []

    artifact = isinstance(data, dict)
    if artifact:
        for key in STACKS_KEYS:
            if key in data:
                data = data[key] or []
                break
        else:
            raise DetectionInputError(
                f"Expected a list of detections or a 'Stacks' key in {source}"
            )

    if not isinstance(data, list):
        raise DetectionInputError(
            f"Expected a list of detections in {source}, got {type(data).__name__}"
        )

    detections: list[DetectedLibrary] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise DetectionInputError(
                f"Detection #{index} in {source} is not a mapping"
            )
        if artifact and "npm" not in entry:
            # Artifact entries without npm were recognised but not identified
            entry = {**entry, "npm": None}
        try:
            detections.append(DetectedLibrary.model_validate(entry))
        except ValidationError as e:
            raise DetectionInputError(f"Invalid detection #{index} in {source}: {e}") from e

    return detections


def load_detections(path: Path) -> list[DetectedLibrary]:
    """Load the detected-stack document for one page.

    Raises:
        DetectionInputError: If the file is missing or invalid.
    """
    data = read_document(path, DetectionInputError)
    detections = parse_detections(data, source=str(path))
    logger.info("Loaded %d detections from %s", len(detections), path)
    return detections
