"""
Landmark format definitions.

Point counts per entity for the landmarker models the smoothers are fed by.
"""

from enum import Enum


class LandmarkFormat(str, Enum):
    """Supported landmark layouts"""

    POSE33 = "pose33"
    FACE478 = "face478"
    CUSTOM = "custom"


# Pose landmarker output order
POSE33_LANDMARKS = [
    # face (0-10)
    "nose",
    "left_eye_inner",
    "left_eye",
    "left_eye_outer",
    "right_eye_inner",
    "right_eye",
    "right_eye_outer",
    "left_ear",
    "right_ear",
    "mouth_left",
    "mouth_right",
    # upper body (11-22)
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_pinky",
    "right_pinky",
    "left_index",
    "right_index",
    "left_thumb",
    "right_thumb",
    # lower body (23-32)
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
    "left_heel",
    "right_heel",
    "left_foot_index",
    "right_foot_index",
]

# Face mesh with iris refinement
FACE478_LANDMARK_COUNT = 478


def get_landmark_count(format: LandmarkFormat) -> int | None:
    """Number of points per entity for a format.

    Args:
        format: Landmark format

    Returns:
        Point count, or None for CUSTOM (any count accepted)
    """
    format = LandmarkFormat(format)
    if format == LandmarkFormat.POSE33:
        return len(POSE33_LANDMARKS)
    elif format == LandmarkFormat.FACE478:
        return FACE478_LANDMARK_COUNT
    return None


__all__ = [
    "LandmarkFormat",
    "POSE33_LANDMARKS",
    "FACE478_LANDMARK_COUNT",
    "get_landmark_count",
]
