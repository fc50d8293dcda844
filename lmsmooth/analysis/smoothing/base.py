"""Common surface shared by the landmark smoothers."""

from typing import Protocol

from lmsmooth.detection.landmarks import Frame, copy_frame
from .frame_normalizer import FrameNormalizer


class LandmarkSmoother(Protocol):
    def update(self, frame: Frame) -> Frame: ...
    def smooth_batch(self, frames: list[Frame]) -> list[Frame]: ...
    def reset(self) -> None: ...


class BaseSmoother:
    """Owns the shape policy and the batch/reset plumbing.

    Subclasses implement ``update`` and ``_clear_state``. Not safe for
    concurrent use: state is mutated in place on every call.
    """

    def __init__(self, strict_shape: bool = False):
        self._normalizer = FrameNormalizer(strict=strict_shape)

    def update(self, frame: Frame) -> Frame:
        raise NotImplementedError

    def _clear_state(self) -> None:
        raise NotImplementedError

    def smooth_batch(self, frames: list[Frame]) -> list[Frame]:
        """Smooth frames in temporal order.

        Args:
            frames: Frames oldest first

        Returns:
            Smoothed frames, one per input frame
        """
        return [self.update(frame) for frame in frames]

    def reset(self) -> None:
        """Discard all filter state for a new tracking session."""
        self._normalizer.forget()
        self._clear_state()


class PassthroughSmoother(BaseSmoother):
    """No smoothing: returns a copy of every frame."""

    def update(self, frame: Frame) -> Frame:
        return copy_frame(frame)

    def _clear_state(self) -> None:
        pass


__all__ = ["LandmarkSmoother", "BaseSmoother", "PassthroughSmoother"]
