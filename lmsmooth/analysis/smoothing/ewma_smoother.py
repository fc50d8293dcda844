"""Exponentially weighted moving average smoother for landmark frames."""

from lmsmooth.detection.landmarks import Frame, copy_frame
from .base import BaseSmoother
from .frame_normalizer import FrameAction


class EWMASmoother(BaseSmoother):
    """Keeps one running average per (entity, point, axis).

    Each frame the average moves towards the raw value:
    ``average = average * strength + raw * (1 - strength)``. The averages are
    rebuilt from the raw frame whenever the entity count changes.

    Args:
        strength: Retained-history weight in [0, 1). 0 = no smoothing,
                  values close to 1 = heavy smoothing and slow response.
        strict_shape: Also reinitialize on per-entity point count changes.

    Example:
        >>> smoother = EWMASmoother(strength=0.5)
        >>> smoothed = smoother.update(frame)
    """

    def __init__(self, strength: float = 0.5, strict_shape: bool = False):
        # NaN fails the comparison too
        if not 0.0 <= strength < 1.0:
            raise ValueError(f"strength must be in [0, 1), got {strength}")

        super().__init__(strict_shape=strict_shape)
        self._strength = float(strength)
        self._averages: Frame = []

    @property
    def strength(self) -> float:
        return self._strength

    def update(self, frame: Frame) -> Frame:
        """Blend a frame into the running averages.

        Args:
            frame: Raw landmarks for one time step

        Returns:
            New frame with the same shape holding the smoothed values
        """
        action = self._normalizer.reconcile(frame)

        if action is FrameAction.EMPTY:
            return []

        if action is FrameAction.RESET:
            self._averages = copy_frame(frame)
            return copy_frame(self._averages)

        retained = self._strength
        incoming = 1.0 - self._strength
        for averages, points in zip(self._averages, frame):
            for average, point in zip(averages, points):
                average.x = average.x * retained + point.x * incoming
                average.y = average.y * retained + point.y * incoming
                average.z = average.z * retained + point.z * incoming

        return copy_frame(self._averages)

    def _clear_state(self) -> None:
        self._averages = []


__all__ = ["EWMASmoother"]
