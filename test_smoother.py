"""TemporalSmoother 테스트"""

import numpy as np
import pytest

from conftest import build_landmarks
from jewelry_tryon.models import AnchorName, Point2D, SmoothedState
from jewelry_tryon.processing.smoother import TemporalSmoother, smooth_landmark_set, smooth_point
from jewelry_tryon.utils.exceptions import LandmarkCountMismatch


@pytest.mark.parametrize("alpha", [0.05, 0.2, 0.4, 1.0])
def test_first_frame_returns_current(landmarks, alpha):
    result = smooth_landmark_set(None, landmarks, alpha)

    np.testing.assert_array_equal(result, landmarks)
    assert result is not landmarks


def test_ema_applies_to_every_axis():
    previous = np.array([[0.0, 1.0, -1.0], [0.5, 0.5, 0.5]])
    current = np.array([[1.0, 0.0, 1.0], [0.5, 0.5, 0.5]])

    result = smooth_landmark_set(previous, current, 0.2)

    np.testing.assert_allclose(result[0], [0.2, 0.8, -0.6])
    np.testing.assert_allclose(result[1], [0.5, 0.5, 0.5])


def test_inputs_are_not_mutated():
    previous = build_landmarks(fill=0.1)
    current = build_landmarks(fill=0.9)
    previous_copy, current_copy = previous.copy(), current.copy()

    smooth_landmark_set(previous, current, 0.4)

    np.testing.assert_array_equal(previous, previous_copy)
    np.testing.assert_array_equal(current, current_copy)


def test_length_mismatch_raises():
    with pytest.raises(LandmarkCountMismatch):
        smooth_landmark_set(build_landmarks(468), build_landmarks(478), 0.2)


@pytest.mark.parametrize("alpha", [0.1, 0.2, 0.4, 0.9])
def test_convergence_is_monotonic_without_overshoot(alpha):
    target = np.array([[1.0, 2.0, 3.0]])
    value = np.array([[0.0, 0.0, 0.0]])
    last_distance = np.linalg.norm(target - value)

    for _ in range(10):
        value = smooth_landmark_set(value, target, alpha)
        distance = np.linalg.norm(target - value)

        assert distance < last_distance
        assert np.all(value <= target)
        last_distance = distance

    # 계단 변화를 완전히 따라잡지는 않음
    assert last_distance > 0


def test_smooth_point_bootstrap():
    current = Point2D(10.0, 20.0)
    assert smooth_point(None, current, 0.4) == current


def test_smooth_point_is_componentwise():
    previous = Point2D(100.0, -50.0)
    current = Point2D(0.0, 50.0)
    factor = 0.4

    result = smooth_point(previous, current, factor)

    assert result.x == pytest.approx(previous.x * (1 - factor) + current.x * factor)
    assert result.y == pytest.approx(previous.y * (1 - factor) + current.y * factor)


def test_smoother_keeps_factors_independent():
    smoother = TemporalSmoother(landmark_alpha=0.2, anchor_alpha=0.4)
    state = SmoothedState(
        landmarks=np.zeros((1, 3)),
        anchors={AnchorName.NECK: Point2D(0.0, 0.0)},
    )

    landmarks = smoother.smooth_landmarks(state, np.ones((1, 3)))
    anchors = smoother.smooth_anchors(state, {AnchorName.NECK: Point2D(10.0, 10.0)})

    np.testing.assert_allclose(landmarks, [[0.2, 0.2, 0.2]])
    assert anchors[AnchorName.NECK].x == pytest.approx(4.0)
    assert anchors[AnchorName.NECK].y == pytest.approx(4.0)


def test_smoother_reports_count_change():
    smoother = TemporalSmoother()
    state = SmoothedState(landmarks=build_landmarks(468, fill=0.1))

    with pytest.raises(LandmarkCountMismatch):
        smoother.smooth_landmarks(state, build_landmarks(478, fill=0.9))

    assert len(state.landmarks) == 468


def test_smoother_new_anchor_is_not_smoothed():
    smoother = TemporalSmoother()
    state = SmoothedState(anchors={AnchorName.NECK: Point2D(0.0, 0.0)})

    anchors = smoother.smooth_anchors(state, {
        AnchorName.NECK: Point2D(10.0, 0.0),
        AnchorName.LEFT_EAR: Point2D(5.0, 5.0),
    })

    assert anchors[AnchorName.LEFT_EAR] == Point2D(5.0, 5.0)
    assert anchors[AnchorName.NECK].x == pytest.approx(4.0)


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_invalid_factor_rejected(alpha):
    with pytest.raises(ValueError):
        TemporalSmoother(landmark_alpha=alpha)
