"""Landmark data structures shared by the detectors and the smoothers."""
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np


@dataclass
class Point3:
    """A single tracked landmark position.

    Units are whatever the detector emits (normalized [0, 1] or pixels).
    """

    x: float
    y: float
    z: float = 0.0

    def copy(self) -> "Point3":
        return Point3(self.x, self.y, self.z)


PointSet = list[Point3]  # one entity (pose / face), index i is always the same landmark
Frame = list[PointSet]  # all entities detected in one image


def copy_frame(frame: Frame) -> Frame:
    """Deep copy a frame so the result shares no Point3 objects with the input."""
    return [[point.copy() for point in points] for points in frame]


def frame_shape(frame: Frame) -> tuple[int, ...]:
    """Per-entity point counts. len() of the result is the entity count."""
    return tuple(len(points) for points in frame)


def frame_from_array(array: np.ndarray | Sequence[np.ndarray]) -> Frame:
    """Build a frame from an (entities, points, 3) array or a list of (points, 3) arrays."""
    frame: Frame = []
    for entity in array:
        coords = np.asarray(entity, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(f"Expected (points, 3) coordinates per entity, got shape {coords.shape}")
        frame.append([Point3(float(x), float(y), float(z)) for x, y, z in coords])
    return frame


def frame_to_array(frame: Frame) -> list[np.ndarray]:
    """Convert a frame to one (points, 3) float array per entity."""
    return [
        np.array([[p.x, p.y, p.z] for p in points], dtype=float).reshape(len(points), 3)
        for points in frame
    ]


def as_frame(value) -> Frame:
    """Coerce detector output into a Frame.

    Accepts a Frame, a numpy array shaped (entities, points, 3), or nested
    entities whose points are landmark objects with x/y/z attributes,
    {"x", "y", "z"} mappings, or [x, y, z] sequences. A missing z is 0.

    Raises:
        ValueError: If a sequence point does not have exactly three coordinates
    """
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return []
        return frame_from_array(value)

    frame: Frame = []
    for entity in value:
        points: PointSet = []
        for point in entity:
            if isinstance(point, Point3):
                points.append(point.copy())
                continue
            if isinstance(point, Mapping):
                points.append(
                    Point3(float(point["x"]), float(point["y"]), float(point.get("z", 0.0)))
                )
                continue
            if hasattr(point, "x") and hasattr(point, "y"):
                # NormalizedLandmark / Landmark from the landmarker APIs
                z = getattr(point, "z", None)
                points.append(
                    Point3(float(point.x), float(point.y), float(z) if z is not None else 0.0)
                )
                continue
            coords = tuple(point)
            if len(coords) != 3:
                raise ValueError(f"Expected 3 coordinates per point, got {len(coords)}")
            points.append(Point3(float(coords[0]), float(coords[1]), float(coords[2])))
        frame.append(points)
    return frame


__all__ = [
    "Point3",
    "PointSet",
    "Frame",
    "copy_frame",
    "frame_shape",
    "frame_from_array",
    "frame_to_array",
    "as_frame",
]
