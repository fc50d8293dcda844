"""Landmark smoothing utilities for jitter reduction."""

from .kalman_filter import ScalarKalmanFilter
from .frame_normalizer import FrameAction, FrameNormalizer
from .base import BaseSmoother, LandmarkSmoother, PassthroughSmoother
from .ewma_smoother import EWMASmoother
from .kalman_smoother import KalmanSmoother
from .factory import SMOOTHING_METHODS, create_smoother

__all__ = [
    "ScalarKalmanFilter",
    "FrameAction",
    "FrameNormalizer",
    "BaseSmoother",
    "LandmarkSmoother",
    "PassthroughSmoother",
    "EWMASmoother",
    "KalmanSmoother",
    "SMOOTHING_METHODS",
    "create_smoother",
]
