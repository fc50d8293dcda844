"""Shape reconciliation between incoming frames and held filter state."""

import logging
from enum import Enum

from lmsmooth.detection.landmarks import Frame, frame_shape

logger = logging.getLogger(__name__)


class FrameAction(Enum):
    EMPTY = "empty"
    RESET = "reset"
    REUSE = "reuse"


class FrameNormalizer:
    """Decides whether a smoother's per-point state can be reused for a frame.

    The entity count (how many poses or faces are visible) changes when a
    subject enters or leaves the image, so a change there discards all state.
    By default per-entity point counts are not compared once the entity
    count matches: landmarker models emit a fixed number of points, and a
    drift there is a caller error caught by an assert. Under ``python -O``
    the assert is stripped and smoother output for a drifted entity may be
    cut short to the held point count.

    Args:
        strict: Also reset when any per-entity point count changes.
    """

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._shape: tuple[int, ...] = ()

    @property
    def shape(self) -> tuple[int, ...]:
        """Per-entity point counts of the state currently held."""
        return self._shape

    def reconcile(self, frame: Frame) -> FrameAction:
        """Classify a frame and record its shape when state must be rebuilt.

        Args:
            frame: Incoming landmarks

        Returns:
            EMPTY for a frame without entities (held shape untouched),
            RESET when state must be reinitialized to the frame's shape,
            REUSE when existing state lines up with the frame.
        """
        if len(frame) == 0:
            return FrameAction.EMPTY

        new_shape = frame_shape(frame)

        if len(new_shape) != len(self._shape):
            logger.debug(
                f"Entity count changed {len(self._shape)} -> {len(new_shape)}, "
                "reinitializing state"
            )
            self._shape = new_shape
            return FrameAction.RESET

        if self._strict and new_shape != self._shape:
            logger.debug(f"Point counts changed {self._shape} -> {new_shape}, reinitializing state")
            self._shape = new_shape
            return FrameAction.RESET

        assert new_shape == self._shape, (
            f"Point count per entity changed from {self._shape} to {new_shape} "
            "without an entity count change"
        )
        return FrameAction.REUSE

    def forget(self) -> None:
        """Drop the held shape so the next non-empty frame triggers RESET."""
        self._shape = ()


__all__ = ["FrameAction", "FrameNormalizer"]
