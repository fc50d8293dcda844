from types import SimpleNamespace

import pytest
import numpy as np
from unittest.mock import MagicMock

from lmsmooth.analysis.smoothing import EWMASmoother, KalmanSmoother, PassthroughSmoother
from lmsmooth.core.config import Config, SmoothingConfig, PipelineConfig
from lmsmooth.core.pipeline import (
    DetectionResult,
    LandmarkPipeline,
    measure_jitter,
    smooth_sequence,
)
from lmsmooth.detection.formats import LandmarkFormat
from lmsmooth.detection.landmarks import Point3
from lmsmooth.lifecycle.schema import LandmarkFrame, LandmarkSequence


def constant_frame(value: float, *point_counts: int) -> list[list[Point3]]:
    return [[Point3(value, value, value) for _ in range(n)] for n in point_counts]


@pytest.fixture
def detector():
    detector = MagicMock()
    detector.detect.return_value = DetectionResult(
        poses=constant_frame(10.0, 33),
        faces=constant_frame(10.0, 478),
    )
    return detector


@pytest.fixture
def kalman_config():
    return Config(smoothing=SmoothingConfig(method="kalman"))


class TestLandmarkPipeline:
    def test_builds_separate_smoothers(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)
        assert isinstance(pipeline.pose_smoother, KalmanSmoother)
        assert isinstance(pipeline.face_smoother, KalmanSmoother)
        assert pipeline.pose_smoother is not pipeline.face_smoother

    def test_process_frame_smooths_poses_and_faces(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)

        result = pipeline.process_frame(image=None, video_time=0.5)

        expected = 10.0 * 1.01 / 1.11
        assert len(result.poses[0]) == 33
        assert len(result.faces[0]) == 478
        assert result.poses[0][0].x == pytest.approx(expected)
        assert result.faces[0][0].x == pytest.approx(expected)

    def test_detector_called_with_milliseconds(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)
        image = np.zeros((480, 640, 3), dtype=np.uint8)

        pipeline.process_frame(image, video_time=1.5)

        detector.detect.assert_called_once_with(image, 1500.0)

    def test_duplicate_video_time_is_skipped(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)

        first = pipeline.process_frame(None, video_time=0.1)
        skipped = pipeline.process_frame(None, video_time=0.1)
        second = pipeline.process_frame(None, video_time=0.2)

        assert skipped is None
        assert detector.detect.call_count == 2
        # the skipped call did not advance the filters
        reference = KalmanSmoother()
        reference.update(constant_frame(10.0, 33))
        assert second.poses == reference.update(constant_frame(10.0, 33))
        assert first is not None

    def test_faces_passthrough_when_disabled(self, detector):
        config = Config(
            smoothing=SmoothingConfig(method="ewma"),
            pipeline=PipelineConfig(smooth_faces=False),
        )
        pipeline = LandmarkPipeline(config, detector)
        assert isinstance(pipeline.pose_smoother, EWMASmoother)
        assert isinstance(pipeline.face_smoother, PassthroughSmoother)

        result = pipeline.process_frame(None, video_time=0.0)
        assert result.faces == constant_frame(10.0, 478)

    def test_accepts_numpy_detector_output(self, kalman_config):
        detector = MagicMock()
        detector.detect.return_value = DetectionResult(
            poses=np.full((2, 33, 3), 10.0),
            faces=np.zeros((0, 478, 3)),
        )
        pipeline = LandmarkPipeline(kalman_config, detector)

        result = pipeline.process_frame(None, video_time=0.0)

        assert [len(p) for p in result.poses] == [33, 33]
        assert result.faces == []

    def test_accepts_landmark_objects_and_dicts(self, kalman_config):
        detector = MagicMock()
        detector.detect.return_value = DetectionResult(
            poses=[[SimpleNamespace(x=10.0, y=10.0, z=10.0)] * 33],
            faces=[[{"x": 10.0, "y": 10.0, "z": 10.0}] * 478],
        )
        pipeline = LandmarkPipeline(kalman_config, detector)

        result = pipeline.process_frame(None, video_time=0.0)

        expected = 10.0 * 1.01 / 1.11
        assert [len(p) for p in result.poses] == [33]
        assert [len(f) for f in result.faces] == [478]
        assert result.poses[0][0].x == pytest.approx(expected)
        assert result.faces[0][0].z == pytest.approx(expected)

    def test_observers_notified(self, kalman_config, detector):
        observer = MagicMock()
        pipeline = LandmarkPipeline(kalman_config, detector)
        pipeline.add_observer(observer)

        result = pipeline.process_frame(None, video_time=0.3)
        pipeline.process_frame(None, video_time=0.3)

        observer.on_landmarks.assert_called_once_with(result, 0.3)

    def test_run_counts_processed_frames(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)
        frames = [(0.0, None), (0.033, None), (0.033, None), (0.066, None)]

        assert pipeline.run(frames) == 3

    def test_reset_clears_smoothers_and_last_time(self, kalman_config, detector):
        pipeline = LandmarkPipeline(kalman_config, detector)
        first = pipeline.process_frame(None, video_time=0.0)
        pipeline.process_frame(None, video_time=0.1)

        pipeline.reset()

        again = pipeline.process_frame(None, video_time=0.1)
        assert again is not None
        assert again.poses == first.poses


class TestSmoothSequence:
    @pytest.fixture
    def sequence(self):
        return LandmarkSequence(
            landmark_format=LandmarkFormat.CUSTOM,
            fps=30,
            frames=[
                LandmarkFrame(frame_idx=0, timestamp=0.0, entities=constant_frame(0.0, 2)),
                LandmarkFrame(frame_idx=1, timestamp=0.033, entities=constant_frame(10.0, 2)),
                LandmarkFrame(frame_idx=2, timestamp=0.033, entities=constant_frame(10.0, 2)),
                LandmarkFrame(frame_idx=3, timestamp=0.066, entities=constant_frame(10.0, 2)),
            ],
        )

    def test_duplicate_timestamp_reuses_previous_output(self, sequence):
        smoothed = smooth_sequence(sequence, EWMASmoother(strength=0.5))

        xs = [frame.entities[0][0].x for frame in smoothed.frames]
        assert xs == [0.0, 5.0, 5.0, 7.5]

    def test_preserves_metadata(self, sequence):
        smoothed = smooth_sequence(sequence, PassthroughSmoother())
        assert smoothed.fps == 30
        assert [f.frame_idx for f in smoothed.frames] == [0, 1, 2, 3]
        assert smoothed.frames is not sequence.frames

    def test_handles_frames_without_entities(self):
        sequence = LandmarkSequence(
            landmark_format=LandmarkFormat.CUSTOM,
            fps=30,
            frames=[
                LandmarkFrame(frame_idx=0, timestamp=0.0, entities=constant_frame(0.0, 1)),
                LandmarkFrame(frame_idx=1, timestamp=0.1, entities=[]),
                LandmarkFrame(frame_idx=2, timestamp=0.2, entities=constant_frame(10.0, 1)),
            ],
        )
        smoothed = smooth_sequence(sequence, EWMASmoother(strength=0.5))

        assert smoothed.frames[1].entities == []
        assert smoothed.frames[2].entities[0][0].x == 5.0


class TestMeasureJitter:
    def test_static_frames_have_no_jitter(self):
        frames = [constant_frame(1.0, 5)] * 4
        assert measure_jitter(frames) == 0.0

    def test_mean_displacement(self):
        frames = [
            [[Point3(0.0, 0.0, 0.0)]],
            [[Point3(3.0, 4.0, 0.0)]],
            [[Point3(3.0, 4.0, 1.0)]],
        ]
        assert measure_jitter(frames) == pytest.approx(3.0)

    def test_shape_changes_are_not_compared(self):
        frames = [constant_frame(0.0, 2), constant_frame(5.0, 2, 2), []]
        assert measure_jitter(frames) == 0.0

    def test_smoothing_reduces_jitter(self):
        np.random.seed(0)
        raw = [
            [[Point3(0.5 + np.random.randn() * 0.01, 0.5, 0.0) for _ in range(5)]]
            for _ in range(50)
        ]
        smoothed = EWMASmoother(strength=0.8).smooth_batch(raw)
        assert measure_jitter(smoothed) < measure_jitter(raw)
