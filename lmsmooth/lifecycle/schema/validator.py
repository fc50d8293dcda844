"""
JSON Schema validator

Strict validation for landmark sequence data.
"""

import json
from pathlib import Path

from jsonschema import Draft7Validator

from lmsmooth.detection.formats import LandmarkFormat, get_landmark_count

SCHEMA_VERSION = "1.0.0"

_POINT = {
    "type": "object",
    "required": ["x", "y"],
    "properties": {
        "x": {"type": "number"},
        "y": {"type": "number"},
        "z": {"type": "number"},
    },
}

LANDMARK_SEQUENCE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Landmark sequence",
    "version": SCHEMA_VERSION,
    "type": "object",
    "required": ["landmark_format", "fps", "frames"],
    "properties": {
        "version": {"type": "string"},
        "source": {"type": "string"},
        "landmark_format": {"enum": [f.value for f in LandmarkFormat]},
        "fps": {"type": "number", "exclusiveMinimum": 0},
        "frames": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["frame_idx", "timestamp", "entities"],
                "properties": {
                    "frame_idx": {"type": "integer", "minimum": 0},
                    "timestamp": {"type": "number", "minimum": 0},
                    "entities": {
                        "type": "array",
                        "items": {"type": "array", "items": _POINT},
                    },
                },
            },
        },
    },
}


class ValidationError(Exception):
    """Landmark sequence failed validation"""

    pass


class LandmarkValidator:
    """Landmark sequence validator

    Two layers:
    1. JSON Schema structure validation
    2. Semantic checks (frame order, timestamps, point counts per format)

    Example:
        >>> validator = LandmarkValidator()
        >>> validator.validate_file("data/landmarks/session.json")
        True
    """

    def __init__(self, schema: dict | None = None):
        self.schema = schema if schema is not None else LANDMARK_SEQUENCE_SCHEMA
        self.validator = Draft7Validator(self.schema)

    def get_schema_version(self) -> str:
        return self.schema.get("version", "unknown")

    def validate(self, data: dict) -> bool:
        """Validate landmark sequence data

        Args:
            data: Sequence dictionary

        Returns:
            True when validation passes

        Raises:
            ValidationError: With every problem found
        """
        errors = list(self.validator.iter_errors(data))
        if errors:
            error_messages = []
            for error in errors:
                path = ".".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"  - {path}: {error.message}")

            raise ValidationError("JSON Schema validation failed:\n" + "\n".join(error_messages))

        self._validate_semantics(data)

        return True

    def _validate_semantics(self, data: dict) -> None:
        frames = data["frames"]

        # 1. frame_idx strictly ascending
        frame_indices = [frame["frame_idx"] for frame in frames]
        if any(b <= a for a, b in zip(frame_indices, frame_indices[1:])):
            raise ValidationError(f"Frame indices are not in ascending order: {frame_indices}")

        # 2. timestamps never go backwards (repeats are allowed and get skipped)
        timestamps = [frame["timestamp"] for frame in frames]
        if any(b < a for a, b in zip(timestamps, timestamps[1:])):
            raise ValidationError("Timestamps must be non-decreasing")

        # 3. point counts match the declared format
        expected_count = get_landmark_count(LandmarkFormat(data["landmark_format"]))
        if expected_count is None:
            return
        for frame in frames:
            for entity_idx, points in enumerate(frame["entities"]):
                if len(points) != expected_count:
                    raise ValidationError(
                        f"Frame {frame['frame_idx']}, entity {entity_idx}: point count "
                        f"({len(points)}) does not match {expected_count} for format "
                        f"'{data['landmark_format']}'"
                    )

    def validate_file(self, path: str | Path) -> bool:
        """Validate a JSON file

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If validation fails
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}") from e

        return self.validate(data)


__all__ = ["LANDMARK_SEQUENCE_SCHEMA", "SCHEMA_VERSION", "ValidationError", "LandmarkValidator"]
