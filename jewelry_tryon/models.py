"""데이터 모델 정의"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .config.constants import EARRING_KEYWORD

# (N, 3) float 배열: x, y 정규화 (0-1), z 상대 깊이
LandmarkSet = np.ndarray


class OverlaySlot(Enum):
    """오버레이 슬롯 (카테고리별 독립)"""
    EARRING = "earring"
    NECKLACE = "necklace"

    @classmethod
    def from_category(cls, category: str) -> 'OverlaySlot':
        """카테고리 키(예: 'gold_earrings')로 슬롯 결정"""
        return cls.EARRING if EARRING_KEYWORD in category else cls.NECKLACE


class AnchorName(Enum):
    """배치 앵커 이름"""
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    NECK = "neck"


@dataclass(frozen=True)
class Point2D:
    """픽셀 좌표계 2D 포인트"""

    x: float
    y: float


@dataclass
class DerivedAnchors:
    """랜드마크 셋에서 도출한 원시 앵커 + 스케일 기준"""

    anchors: Dict[AnchorName, Point2D]
    scale: float  # 눈 사이 픽셀 거리 (평활화하지 않음)


@dataclass
class SmoothedState:
    """
    프레임 간 유지되는 평활화 상태

    FrameProcessor가 소유하며 각 단계에 명시적으로 전달됨
    """

    landmarks: Optional[LandmarkSet] = None
    anchors: Dict[AnchorName, Point2D] = field(default_factory=dict)
    missed_frames: int = 0
    frame_size: Optional[Tuple[int, int]] = None  # 앵커 픽셀 좌표의 기준 해상도

    @property
    def is_empty(self) -> bool:
        return self.landmarks is None and not self.anchors

    def reset(self):
        """추적 재시작 시 상태 초기화"""
        self.landmarks = None
        self.anchors = {}
        self.missed_frames = 0
        self.frame_size = None


@dataclass
class OverlayImage:
    """로드 완료된 오버레이 이미지 (BGRA)"""

    image: np.ndarray
    source: Path
    category: str

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def slot(self) -> OverlaySlot:
        return OverlaySlot.from_category(self.category)


@dataclass(frozen=True)
class DrawCommand:
    """렌더 싱크로 전달되는 그리기 명령"""

    image: OverlayImage
    x: float
    y: float
    width: float
    height: float
    slot: OverlaySlot

    def to_tuple(self) -> Tuple[OverlayImage, float, float, float, float]:
        """(image_handle, dest_x, dest_y, dest_w, dest_h)"""
        return (self.image, self.x, self.y, self.width, self.height)


@dataclass
class FrameResult:
    """프레임 처리 결과"""

    frame: Optional[np.ndarray]
    draw_commands: List[DrawCommand] = field(default_factory=list)
    face_detected: bool = False
    skipped: bool = False
    processing_time: float = 0.0  # ms
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """메타데이터 초기화"""
        if 'timestamp' not in self.metadata:
            self.metadata['timestamp'] = time.time()


def as_landmark_set(landmarks: Sequence) -> LandmarkSet:
    """
    (x, y, z) 시퀀스 또는 x/y/z 속성을 가진 객체 시퀀스를 LandmarkSet으로 변환

    Args:
        landmarks: 튜플 리스트, (N, 3) 배열, 또는 MediaPipe NormalizedLandmark 리스트

    Returns:
        (N, 3) float64 배열
    """
    if isinstance(landmarks, np.ndarray):
        array = landmarks.astype(np.float64, copy=True)
    else:
        items = list(landmarks)
        if items and hasattr(items[0], 'x'):
            array = np.array([(lm.x, lm.y, lm.z) for lm in items], dtype=np.float64)
        else:
            array = np.array(items, dtype=np.float64)

    if array.size == 0:
        return array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"Landmarks must have shape (N, 3), got {array.shape}")
    return array
