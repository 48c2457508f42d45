"""랜드마크 / 앵커 EMA 평활화"""

from typing import Dict, Optional

import numpy as np

from ..config.settings import SmoothingConfig
from ..models import AnchorName, LandmarkSet, Point2D, SmoothedState
from ..utils.exceptions import LandmarkCountMismatch
from ..utils.validators import validate_smoothing_factor


def smooth_landmark_set(
    previous: Optional[LandmarkSet],
    current: LandmarkSet,
    alpha: float
) -> LandmarkSet:
    """
    랜드마크 셋 EMA: prev * (1 - alpha) + current * alpha

    Args:
        previous: 이전 프레임의 평활화된 랜드마크 (첫 프레임이면 None)
        current: 현재 프레임 랜드마크
        alpha: 평활화 계수

    Returns:
        새 LandmarkSet (입력은 변경하지 않음)

    Raises:
        LandmarkCountMismatch: 두 셋의 랜드마크 개수가 다른 경우
    """
    current = np.asarray(current, dtype=np.float64)
    if previous is None:
        return current.copy()

    previous = np.asarray(previous, dtype=np.float64)
    if previous.shape != current.shape:
        raise LandmarkCountMismatch(len(previous), len(current))

    return previous * (1.0 - alpha) + current * alpha


def smooth_point(previous: Optional[Point2D], current: Point2D, factor: float) -> Point2D:
    """2D 포인트 EMA (z 없음)"""
    if previous is None:
        return current
    return Point2D(
        x=previous.x * (1.0 - factor) + current.x * factor,
        y=previous.y * (1.0 - factor) + current.y * factor,
    )


class TemporalSmoother:
    """
    랜드마크 셋 / 앵커 두 단계의 EMA 평활화

    두 계수는 서로 독립적인 상수로 유지됨
    (landmark_alpha: 전체 랜드마크, anchor_alpha: 귀/목 앵커)
    """

    def __init__(self, landmark_alpha: float = 0.2, anchor_alpha: float = 0.4):
        validate_smoothing_factor(landmark_alpha, "landmark_alpha")
        validate_smoothing_factor(anchor_alpha, "anchor_alpha")
        self.landmark_alpha = landmark_alpha
        self.anchor_alpha = anchor_alpha

    @classmethod
    def from_config(cls, config: SmoothingConfig) -> 'TemporalSmoother':
        return cls(landmark_alpha=config.landmark_alpha, anchor_alpha=config.anchor_alpha)

    def smooth_landmarks(self, state: SmoothedState, current: LandmarkSet) -> LandmarkSet:
        """
        저장된 랜드마크 셋 기준으로 현재 프레임 평활화

        state는 변경하지 않음 (커밋은 FrameProcessor 담당)

        Raises:
            LandmarkCountMismatch: 저장된 셋과 개수가 다른 경우 (호출자가 상태 전체를 리셋)
        """
        return smooth_landmark_set(state.landmarks, current, self.landmark_alpha)

    def smooth_anchors(
        self,
        state: SmoothedState,
        raw_anchors: Dict[AnchorName, Point2D]
    ) -> Dict[AnchorName, Point2D]:
        """앵커별 EMA 적용"""
        return {
            name: smooth_point(state.anchors.get(name), point, self.anchor_alpha)
            for name, point in raw_anchors.items()
        }
