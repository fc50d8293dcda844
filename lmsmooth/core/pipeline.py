import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

import numpy as np

from lmsmooth.analysis.smoothing import LandmarkSmoother, PassthroughSmoother, create_smoother
from lmsmooth.core.config import Config
from lmsmooth.detection.landmarks import Frame, as_frame, copy_frame, frame_to_array
from lmsmooth.lifecycle.schema import LandmarkFrame, LandmarkSequence

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    poses: Frame = field(default_factory=list)
    faces: Frame = field(default_factory=list)


class LandmarkDetector(Protocol):
    def detect(self, image: Any, timestamp_ms: float) -> DetectionResult: ...


class LandmarkObserver(Protocol):
    def on_landmarks(self, result: DetectionResult, timestamp: float) -> None: ...


class LandmarkPipeline:
    """Runs the detector on each new video frame and smooths its output.

    Poses and faces each get their own smoother instance. A frame whose video
    time equals the previous one is skipped entirely, since feeding a stale
    measurement would still advance the filters.
    """

    def __init__(self, config: Config, detector: LandmarkDetector):
        self.config = config
        self.detector = detector

        self.pose_smoother: LandmarkSmoother = create_smoother(config.smoothing)
        if config.pipeline.smooth_faces:
            self.face_smoother: LandmarkSmoother = create_smoother(config.smoothing)
        else:
            self.face_smoother = PassthroughSmoother()

        self.observers: list[LandmarkObserver] = []
        self._last_video_time: float | None = None

    def add_observer(self, observer: LandmarkObserver) -> None:
        self.observers.append(observer)

    def process_frame(self, image: Any, video_time: float) -> DetectionResult | None:
        """Detect and smooth landmarks for one video frame.

        Args:
            image: Frame handed to the detector as-is
            video_time: Video position in seconds

        Returns:
            Smoothed result, or None when the frame was already processed
        """
        if video_time == self._last_video_time:
            logger.debug(f"Skipping duplicate frame at {video_time:.3f}s")
            return None
        self._last_video_time = video_time

        raw = self.detector.detect(image, video_time * 1000)

        result = DetectionResult(
            poses=self.pose_smoother.update(as_frame(raw.poses)),
            faces=self.face_smoother.update(as_frame(raw.faces)),
        )

        for observer in self.observers:
            observer.on_landmarks(result, video_time)

        return result

    def run(self, frames: Iterable[tuple[float, Any]]) -> int:
        """Process (video_time, image) pairs in order.

        Returns:
            Number of frames that were not skipped
        """
        logger.info("Starting landmark smoothing pipeline...")
        processed = 0
        try:
            for video_time, image in frames:
                if self.process_frame(image, video_time) is not None:
                    processed += 1
        except KeyboardInterrupt:
            logger.info("Stopping pipeline...")
        logger.info(f"Pipeline finished: {processed} frames processed")
        return processed

    def reset(self) -> None:
        self.pose_smoother.reset()
        self.face_smoother.reset()
        self._last_video_time = None


def smooth_sequence(sequence: LandmarkSequence, smoother: LandmarkSmoother) -> LandmarkSequence:
    """Smooth a recorded sequence frame by frame.

    A frame repeating the previous timestamp is not fed to the smoother and
    reuses the previous output.
    """
    smoothed_frames: list[LandmarkFrame] = []
    last_timestamp: float | None = None
    last_output: Frame = []

    for frame in sequence.frames:
        if frame.timestamp == last_timestamp:
            entities = copy_frame(last_output)
        else:
            entities = smoother.update(frame.entities)
            last_output = entities
            last_timestamp = frame.timestamp
        smoothed_frames.append(
            LandmarkFrame(frame_idx=frame.frame_idx, timestamp=frame.timestamp, entities=entities)
        )

    return replace(sequence, frames=smoothed_frames)


def measure_jitter(frames: list[Frame]) -> float:
    """Mean displacement of each point between consecutive frames.

    Only consecutive frame pairs with the same shape are compared.

    Returns:
        Mean Euclidean displacement, 0.0 when nothing is comparable
    """
    displacements: list[np.ndarray] = []
    previous: list[np.ndarray] | None = None

    for frame in frames:
        current = frame_to_array(frame)
        if previous is not None and [a.shape for a in previous] == [b.shape for b in current]:
            for before, after in zip(previous, current):
                if before.size:
                    displacements.append(np.linalg.norm(after - before, axis=1))
        previous = current

    if not displacements:
        return 0.0
    return float(np.mean(np.concatenate(displacements)))
