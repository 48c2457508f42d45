"""랜드마크 셋에서 배치 앵커 및 스케일 기준 도출"""

import math
from typing import Optional

from ..config.settings import AnchorIndices
from ..models import AnchorName, DerivedAnchors, LandmarkSet, Point2D
from ..utils.exceptions import LandmarkIndexError
from ..utils.validators import validate_frame_size


class AnchorDeriver:
    """평활화된 랜드마크 셋 → 픽셀 좌표 앵커 + 눈 사이 거리"""

    def __init__(self, indices: Optional[AnchorIndices] = None):
        """
        초기화

        Args:
            indices: 앵커 랜드마크 인덱스 (None이면 FaceMesh 기본값)
        """
        self.indices = indices or AnchorIndices()

    @property
    def required_landmarks(self) -> int:
        return self.indices.required_landmarks

    def derive(self, landmarks: LandmarkSet, width: int, height: int) -> DerivedAnchors:
        """
        앵커 도출

        Args:
            landmarks: (N, 3) 평활화된 랜드마크 셋
            width: 프레임 너비 (px)
            height: 프레임 높이 (px)

        Returns:
            DerivedAnchors: 원시(평활화 전) 앵커와 스케일 기준

        Raises:
            LandmarkIndexError: 랜드마크 개수가 부족한 경우
            InvalidFrameSizeError: 프레임 크기가 0 이하인 경우
        """
        validate_frame_size(width, height)

        available = len(landmarks)
        if available < self.required_landmarks:
            raise LandmarkIndexError(self.required_landmarks - 1, available)

        scale = self.eye_distance(landmarks, width, height)

        anchors = {
            AnchorName.LEFT_EAR: self._to_pixel(landmarks, self.indices.left_ear, width, height),
            AnchorName.RIGHT_EAR: self._to_pixel(landmarks, self.indices.right_ear, width, height),
            AnchorName.NECK: self._to_pixel(landmarks, self.indices.neck, width, height),
        }

        return DerivedAnchors(anchors=anchors, scale=scale)

    def eye_distance(self, landmarks: LandmarkSet, width: int, height: int) -> float:
        """눈 외안각 사이 픽셀 거리 (ScaleReference)"""
        left = landmarks[self.indices.left_eye]
        right = landmarks[self.indices.right_eye]
        return math.hypot((right[0] - left[0]) * width, (right[1] - left[1]) * height)

    @staticmethod
    def _to_pixel(landmarks: LandmarkSet, index: int, width: int, height: int) -> Point2D:
        landmark = landmarks[index]
        return Point2D(x=float(landmark[0]) * width, y=float(landmark[1]) * height)
