"""MediaPipe FaceMesh 기반 랜드마크 소스"""

import time
from typing import Any, Dict, Optional

import cv2
import numpy as np

from ..config.settings import DetectionConfig
from ..models import LandmarkSet, as_landmark_set
from ..utils import get_logger
from ..utils.exceptions import ConfigurationError, DetectionError
from ..utils.validators import validate_image

logger = get_logger(__name__)


class FaceDetector:
    """
    MediaPipe FaceMesh 래퍼

    첫 번째로 검출된 얼굴의 정규화 랜드마크만 반환 (다중 얼굴 미지원)
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        초기화

        Args:
            config: 검출 설정

        Raises:
            ConfigurationError: MediaPipe 초기화 실패 시
        """
        self.config = config or DetectionConfig()
        self.last_processing_time = 0.0  # ms

        try:
            import mediapipe as mp
        except ImportError as e:
            raise ConfigurationError(
                "mediapipe is not installed; install the 'detector' extra"
            ) from e

        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=self.config.static_image_mode,
                max_num_faces=self.config.max_num_faces,
                refine_landmarks=self.config.refine_landmarks,
                min_detection_confidence=self.config.min_detection_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence
            )
            logger.info("MediaPipe FaceMesh initialized successfully")
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}") from e

    def detect(self, image: np.ndarray) -> Optional[LandmarkSet]:
        """
        이미지에서 얼굴 랜드마크 검출

        Args:
            image: BGR 형식 이미지 (H, W, 3)

        Returns:
            (N, 3) LandmarkSet, 얼굴이 없으면 None

        Raises:
            InvalidImageError: 이미지가 유효하지 않은 경우
            DetectionError: 랜드마크 변환 실패 시
        """
        validate_image(image)

        start_time = time.time()

        # BGR → RGB 변환 (MediaPipe 요구사항)
        if image.ndim == 2:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        else:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        results = self.face_mesh.process(image_rgb)

        self.last_processing_time = (time.time() - start_time) * 1000

        if not results or not results.multi_face_landmarks:
            return None

        try:
            return as_landmark_set(results.multi_face_landmarks[0].landmark)
        except ValueError as e:
            raise DetectionError(f"Failed to extract landmarks: {e}") from e

    def get_model_info(self) -> Dict[str, Any]:
        """모델 설정 정보 반환"""
        return {
            'max_num_faces': self.config.max_num_faces,
            'min_detection_confidence': self.config.min_detection_confidence,
            'min_tracking_confidence': self.config.min_tracking_confidence,
            'refine_landmarks': self.config.refine_landmarks,
            'static_image_mode': self.config.static_image_mode,
        }

    def release(self):
        """리소스 해제"""
        face_mesh = getattr(self, 'face_mesh', None)
        if face_mesh is not None:
            face_mesh.close()
            self.face_mesh = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
