"""Kalman smoother for reducing landmark detection jitter.

Runs an independent ScalarKalmanFilter on each landmark's x, y and z
coordinate. The axes are treated as uncorrelated 1-D processes.
"""

import math
from typing import NamedTuple

from lmsmooth.detection.landmarks import Frame, Point3
from .base import BaseSmoother
from .frame_normalizer import FrameAction
from .kalman_filter import ScalarKalmanFilter


class AxisFilters(NamedTuple):
    x: ScalarKalmanFilter
    y: ScalarKalmanFilter
    z: ScalarKalmanFilter


class KalmanSmoother(BaseSmoother):
    """Smoother holding three scalar Kalman filters per landmark.

    New filters start from an estimate of 0 rather than the first
    measurement, so output converges towards the detected positions over the
    first few frames after every reinitialization.

    Args:
        process_noise: Higher = more responsive to change, noisier output.
        measurement_noise: Higher = smoother, less responsive output.
        estimated_error: Initial estimation error. Higher = trust the first
                         measurements more until the filter settles.
        strict_shape: Also reinitialize on per-entity point count changes.

    Example:
        >>> smoother = KalmanSmoother(process_noise=0.01, measurement_noise=0.1)
        >>> smoothed = smoother.update(frame)
    """

    def __init__(
        self,
        process_noise: float = 0.01,
        measurement_noise: float = 0.1,
        estimated_error: float = 1.0,
        strict_shape: bool = False,
    ):
        for name, value in (
            ("process_noise", process_noise),
            ("measurement_noise", measurement_noise),
            ("estimated_error", estimated_error),
        ):
            if not (value > 0 and math.isfinite(value)):
                raise ValueError(f"{name} must be a positive finite number, got {value}")

        super().__init__(strict_shape=strict_shape)
        self._process_noise = float(process_noise)
        self._measurement_noise = float(measurement_noise)
        self._estimated_error = float(estimated_error)
        self._filters: list[list[AxisFilters]] = []

    def _new_filter(self) -> ScalarKalmanFilter:
        return ScalarKalmanFilter(
            process_noise=self._process_noise,
            measurement_noise=self._measurement_noise,
            estimated_error=self._estimated_error,
            initial_value=0.0,
        )

    def _init_filters(self, frame: Frame) -> None:
        """Create fresh filters matching the frame's exact shape."""
        self._filters = [
            [AxisFilters(self._new_filter(), self._new_filter(), self._new_filter()) for _ in points]
            for points in frame
        ]

    def update(self, frame: Frame) -> Frame:
        """Feed a frame through the per-axis filters.

        Args:
            frame: Raw landmarks for one time step

        Returns:
            New frame with the same shape holding the filtered values
        """
        action = self._normalizer.reconcile(frame)

        if action is FrameAction.EMPTY:
            return []

        if action is FrameAction.RESET:
            self._init_filters(frame)

        smoothed: Frame = []
        for filters, points in zip(self._filters, frame):
            smoothed.append(
                [
                    Point3(f.x.update(point.x), f.y.update(point.y), f.z.update(point.z))
                    for f, point in zip(filters, points)
                ]
            )
        return smoothed

    def _clear_state(self) -> None:
        self._filters = []


__all__ = ["KalmanSmoother"]
