"""Scalar Kalman filter for real-time signal smoothing.

A one-dimensional random-walk Kalman filter: the state is assumed constant
between samples apart from process noise, and every sample is a noisy
measurement of it. Each landmark axis gets its own instance.
"""


class ScalarKalmanFilter:
    """Single-variable Kalman filter.

    Strictly positive ``process_noise`` and ``measurement_noise`` are a
    precondition. They are not checked here; callers such as
    KalmanSmoother validate them. With both at zero and a zero initial
    error the gain is undefined.

    Args:
        process_noise: Process noise covariance (q). Higher = more responsive.
        measurement_noise: Measurement noise covariance (r). Higher = smoother.
        estimated_error: Initial estimation error covariance (p0).
        initial_value: Initial state estimate (x0).

    Example:
        >>> f = ScalarKalmanFilter(process_noise=0.01, measurement_noise=0.1)
        >>> f.update(10.0)  # ~9.099
    """

    def __init__(
        self,
        process_noise: float = 0.01,
        measurement_noise: float = 0.1,
        estimated_error: float = 1.0,
        initial_value: float = 0.0,
    ):
        self._q = process_noise
        self._r = measurement_noise
        self._p = estimated_error
        self._x = initial_value
        self._k = 0.0

    @property
    def estimate(self) -> float:
        return self._x

    @property
    def error_covariance(self) -> float:
        return self._p

    @property
    def gain(self) -> float:
        return self._k

    @property
    def process_noise(self) -> float:
        return self._q

    @property
    def measurement_noise(self) -> float:
        return self._r

    def update(self, measurement: float) -> float:
        """Run one predict/correct step.

        Args:
            measurement: Current noisy observation

        Returns:
            Updated state estimate
        """
        # Prediction
        self._p = self._p + self._q

        # Measurement update
        self._k = self._p / (self._p + self._r)
        self._x = self._x + self._k * (measurement - self._x)
        self._p = (1 - self._k) * self._p

        return self._x


__all__ = ["ScalarKalmanFilter"]
