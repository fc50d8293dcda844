"""
Landmark sequence schema

File format for recorded landmark streams, used to smooth detections
offline and to exchange results.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from lmsmooth.detection.formats import LandmarkFormat
from lmsmooth.detection.landmarks import Frame, Point3


@dataclass
class LandmarkFrame:
    """Detections for a single video frame"""

    frame_idx: int
    timestamp: float  # seconds
    entities: Frame = field(default_factory=list)


@dataclass
class LandmarkSequence:
    """A complete recorded landmark stream

    Top-level structure serialized to JSON.
    """

    landmark_format: LandmarkFormat
    fps: float
    frames: list[LandmarkFrame]
    version: str = "1.0"
    source: str = ""

    @property
    def entity_frames(self) -> list[Frame]:
        return [frame.entities for frame in self.frames]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "source": self.source,
            "landmark_format": LandmarkFormat(self.landmark_format).value,
            "fps": self.fps,
            "frames": [
                {
                    "frame_idx": frame.frame_idx,
                    "timestamp": frame.timestamp,
                    "entities": [
                        [{"x": p.x, "y": p.y, "z": p.z} for p in points]
                        for points in frame.entities
                    ],
                }
                for frame in self.frames
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LandmarkSequence":
        frames = [
            LandmarkFrame(
                frame_idx=frame_data["frame_idx"],
                timestamp=frame_data["timestamp"],
                entities=[
                    [Point3(x=p["x"], y=p["y"], z=p.get("z", 0.0)) for p in points]
                    for points in frame_data["entities"]
                ],
            )
            for frame_data in data["frames"]
        ]

        return cls(
            version=data.get("version", "1.0"),
            source=data.get("source", ""),
            landmark_format=LandmarkFormat(data["landmark_format"]),
            fps=data["fps"],
            frames=frames,
        )

    def to_json(self, path: str | Path) -> None:
        """Write the sequence to a JSON file

        Args:
            path: Output file path
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False))

    @classmethod
    def from_json(cls, path: str | Path) -> "LandmarkSequence":
        """Load a sequence from a JSON file

        Args:
            path: JSON file path

        Returns:
            LandmarkSequence instance
        """
        return cls.from_dict(json.loads(Path(path).read_text()))


__all__ = [
    "LandmarkFrame",
    "LandmarkSequence",
]
