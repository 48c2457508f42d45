"""시스템 설정 클래스 정의"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from . import constants
from ..utils.config_loader import Config, get_config
from ..utils.exceptions import ConfigurationError
from ..utils.validators import validate_confidence, validate_smoothing_factor


@dataclass
class DetectionConfig:
    """얼굴 검출 설정"""

    # MediaPipe FaceMesh 설정
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6
    max_num_faces: int = 1
    refine_landmarks: bool = True  # 눈/입 주변 정밀 검출

    # 처리 모드
    static_image_mode: bool = False  # True: 이미지, False: 비디오

    def __post_init__(self):
        """설정 값 검증"""
        validate_confidence(self.min_detection_confidence, "min_detection_confidence")
        validate_confidence(self.min_tracking_confidence, "min_tracking_confidence")
        if self.max_num_faces < 1:
            raise ValueError("max_num_faces must be >= 1")


@dataclass
class SmoothingConfig:
    """EMA 평활화 계수 (랜드마크 셋 / 앵커 독립 설정)"""

    landmark_alpha: float = constants.DEFAULT_LANDMARK_ALPHA
    anchor_alpha: float = constants.DEFAULT_ANCHOR_ALPHA

    def __post_init__(self):
        validate_smoothing_factor(self.landmark_alpha, "landmark_alpha")
        validate_smoothing_factor(self.anchor_alpha, "anchor_alpha")


@dataclass
class AnchorIndices:
    """앵커 도출용 랜드마크 인덱스"""

    left_eye: int = constants.ANCHOR_LANDMARKS['left_eye']
    right_eye: int = constants.ANCHOR_LANDMARKS['right_eye']
    left_ear: int = constants.ANCHOR_LANDMARKS['left_ear']
    right_ear: int = constants.ANCHOR_LANDMARKS['right_ear']
    neck: int = constants.ANCHOR_LANDMARKS['neck']

    def __post_init__(self):
        for name, index in self.as_dict().items():
            if index < 0:
                raise ValueError(f"{name} landmark index must be >= 0, got {index}")

    def as_dict(self) -> Dict[str, int]:
        return {
            'left_eye': self.left_eye,
            'right_eye': self.right_eye,
            'left_ear': self.left_ear,
            'right_ear': self.right_ear,
            'neck': self.neck,
        }

    @property
    def required_landmarks(self) -> int:
        """도출에 필요한 최소 랜드마크 개수"""
        # 설정된 인덱스 중 최댓값 + 1 (기본 362). 고정값 364가 아니라 인덱스에서 계산
        return max(self.as_dict().values()) + 1


@dataclass
class PlacementConfig:
    """배치 계수 (눈 사이 거리 대비 배율)"""

    earring_scale: float = constants.DEFAULT_EARRING_SCALE     # K_EAR
    necklace_scale: float = constants.DEFAULT_NECKLACE_SCALE   # K_NECK
    necklace_offset: float = constants.DEFAULT_NECKLACE_OFFSET  # K_OFFSET

    def __post_init__(self):
        if self.earring_scale <= 0:
            raise ValueError(f"earring_scale must be > 0, got {self.earring_scale}")
        if self.necklace_scale <= 0:
            raise ValueError(f"necklace_scale must be > 0, got {self.necklace_scale}")


@dataclass
class TrackingConfig:
    """추적 손실 처리 설정"""

    reset_after_missed_frames: int = constants.DEFAULT_RESET_AFTER_MISSED_FRAMES

    def __post_init__(self):
        if self.reset_after_missed_frames < 0:
            raise ValueError("reset_after_missed_frames must be >= 0")


@dataclass
class CameraConfig:
    """카메라 설정"""

    device_ids: List[int] = field(default_factory=lambda: [0])
    width: int = constants.DEFAULT_CAMERA_SIZE[0]
    height: int = constants.DEFAULT_CAMERA_SIZE[1]

    def __post_init__(self):
        if not self.device_ids:
            raise ValueError("device_ids must not be empty")


@dataclass
class AssetConfig:
    """주얼리 에셋 설정"""

    root: Path = Path('assets')
    exclusive_slots: bool = False
    snapshot_filename: str = constants.SNAPSHOT_FILENAME
    manifest: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        self.root = Path(self.root)
        self.manifest = {key: tuple(files or ()) for key, files in self.manifest.items()}


@dataclass
class TryOnSettings:
    """전체 설정 묶음"""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    anchors: AnchorIndices = field(default_factory=AnchorIndices)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    assets: AssetConfig = field(default_factory=AssetConfig)


def load_settings(config: Optional[Config] = None) -> TryOnSettings:
    """
    config.yaml 내용으로 TryOnSettings 생성

    Args:
        config: Config 인스턴스 (None이면 전역 설정 사용)

    Returns:
        TryOnSettings

    Raises:
        ConfigurationError: 알 수 없는 키 또는 잘못된 값이 있는 경우
    """
    if config is None:
        config = get_config()

    try:
        return TryOnSettings(
            detection=DetectionConfig(**config.section('detection')),
            smoothing=SmoothingConfig(**config.section('smoothing')),
            anchors=AnchorIndices(**config.section('anchors')),
            placement=PlacementConfig(**config.section('placement')),
            tracking=TrackingConfig(**config.section('tracking')),
            camera=CameraConfig(**config.section('camera')),
            assets=AssetConfig(**config.section('assets')),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid settings in {config.config_path}: {e}") from e
