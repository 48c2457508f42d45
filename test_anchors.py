"""AnchorDeriver 테스트"""

import math

import pytest

from conftest import build_landmarks
from jewelry_tryon.config.settings import AnchorIndices
from jewelry_tryon.models import AnchorName
from jewelry_tryon.processing.anchors import AnchorDeriver
from jewelry_tryon.utils.exceptions import InvalidFrameSizeError, LandmarkIndexError


def test_example_face_at_1280x720(landmarks):
    derived = AnchorDeriver().derive(landmarks, 1280, 720)

    assert derived.scale == pytest.approx(256.0)

    left = derived.anchors[AnchorName.LEFT_EAR]
    assert left.x == pytest.approx(486.4)
    assert left.y == pytest.approx(396.0)

    right = derived.anchors[AnchorName.RIGHT_EAR]
    assert right.x == pytest.approx(0.62 * 1280)

    neck = derived.anchors[AnchorName.NECK]
    assert (neck.x, neck.y) == (pytest.approx(640.0), pytest.approx(540.0))


def test_scale_uses_both_axes():
    points = {33: (0.40, 0.40, 0.0), 263: (0.60, 0.50, 0.0)}
    landmarks = build_landmarks(points=points)

    scale = AnchorDeriver().eye_distance(landmarks, 1000, 500)

    assert scale == pytest.approx(math.hypot(200.0, 50.0))


def test_scale_doubles_with_width_when_eyes_level(landmarks):
    deriver = AnchorDeriver()

    base = deriver.derive(landmarks, 640, 480).scale
    doubled = deriver.derive(landmarks, 1280, 480).scale

    assert doubled == pytest.approx(2 * base)


@pytest.mark.parametrize("factor", [0.5, 2.0, 3.0])
def test_scale_is_linear_in_frame_size(factor):
    points = {33: (0.35, 0.45, 0.0), 263: (0.65, 0.52, 0.0)}
    landmarks = build_landmarks(points=points)
    deriver = AnchorDeriver()

    base = deriver.derive(landmarks, 640, 480).scale
    scaled = deriver.derive(landmarks, int(640 * factor), int(480 * factor)).scale

    assert scaled == pytest.approx(base * factor)


def test_anchors_are_raw_pixels_not_smoothed(landmarks):
    deriver = AnchorDeriver()
    first = deriver.derive(landmarks, 1280, 720)

    moved = landmarks.copy()
    moved[152] = (0.10, 0.90, 0.0)
    second = deriver.derive(moved, 1280, 720)

    assert first.anchors[AnchorName.NECK].x == pytest.approx(640.0)
    assert second.anchors[AnchorName.NECK].x == pytest.approx(128.0)
    assert second.anchors[AnchorName.NECK].y == pytest.approx(648.0)


def test_short_landmark_set_raises():
    deriver = AnchorDeriver()
    assert deriver.required_landmarks == 362

    with pytest.raises(LandmarkIndexError) as exc_info:
        deriver.derive(build_landmarks(361), 1280, 720)

    assert exc_info.value.available == 361
    assert isinstance(exc_info.value, IndexError)


@pytest.mark.parametrize("count", [362, 468, 478])
def test_supported_landmark_counts(count):
    derived = AnchorDeriver().derive(build_landmarks(count), 1280, 720)
    assert derived.scale == pytest.approx(256.0)


def test_custom_indices():
    indices = AnchorIndices(left_eye=0, right_eye=1, left_ear=2, right_ear=3, neck=4)
    landmarks = build_landmarks(5, points={0: (0.0, 0.0, 0.0), 1: (0.5, 0.0, 0.0)})

    deriver = AnchorDeriver(indices)
    derived = deriver.derive(landmarks, 100, 100)

    assert deriver.required_landmarks == 5
    assert derived.scale == pytest.approx(50.0)


@pytest.mark.parametrize("size", [(0, 720), (1280, 0), (-1, 10)])
def test_invalid_frame_size(landmarks, size):
    with pytest.raises(InvalidFrameSizeError):
        AnchorDeriver().derive(landmarks, *size)
