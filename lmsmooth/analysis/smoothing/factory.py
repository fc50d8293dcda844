"""Build a smoother from configuration."""

from lmsmooth.core.config import SmoothingConfig
from .base import LandmarkSmoother, PassthroughSmoother
from .ewma_smoother import EWMASmoother
from .kalman_smoother import KalmanSmoother

SMOOTHING_METHODS = ("ewma", "kalman", "none")


def create_smoother(config: SmoothingConfig) -> LandmarkSmoother:
    """Create a fresh smoother instance for the configured method.

    Raises:
        ValueError: Unknown method or invalid parameters
    """
    method = config.method.lower()
    if method == "ewma":
        return EWMASmoother(
            strength=config.ewma.strength,
            strict_shape=config.strict_shape,
        )
    if method == "kalman":
        return KalmanSmoother(
            process_noise=config.kalman.process_noise,
            measurement_noise=config.kalman.measurement_noise,
            estimated_error=config.kalman.estimated_error,
            strict_shape=config.strict_shape,
        )
    if method == "none":
        return PassthroughSmoother(strict_shape=config.strict_shape)
    raise ValueError(f"Unknown smoothing method '{config.method}', expected one of {SMOOTHING_METHODS}")


__all__ = ["SMOOTHING_METHODS", "create_smoother"]
