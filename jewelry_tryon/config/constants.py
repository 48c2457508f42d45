"""얼굴 랜드마크 인덱스 및 시스템 상수 정의"""
from typing import Dict, Tuple


# 앵커 도출용 랜드마크 인덱스 (검출기 토폴로지와 일치해야 함)
ANCHOR_LANDMARKS: Dict[str, int] = {
    'left_eye': 33,     # 왼쪽 눈 외안각
    'right_eye': 263,   # 오른쪽 눈 외안각
    'left_ear': 132,    # 왼쪽 귀 영역
    'right_ear': 361,   # 오른쪽 귀 영역
    'neck': 152,        # 턱 끝
}

# EMA 기본 계수
DEFAULT_LANDMARK_ALPHA = 0.2
DEFAULT_ANCHOR_ALPHA = 0.4

# 배치 기본 계수 (눈 사이 거리 배율)
DEFAULT_EARRING_SCALE = 0.42
DEFAULT_NECKLACE_SCALE = 1.6
DEFAULT_NECKLACE_OFFSET = 1.0

# 추적 손실 후 상태 리셋까지의 연속 미검출 프레임 수
DEFAULT_RESET_AFTER_MISSED_FRAMES = 15

# 에셋
IMAGE_EXTENSIONS: Tuple[str, ...] = ('.png', '.webp', '.jpg', '.jpeg')
EARRING_KEYWORD = 'earrings'
SNAPSHOT_FILENAME = 'tryon.png'

# 카메라
DEFAULT_CAMERA_SIZE = (1280, 720)
WINDOW_NAME = 'Jewelry Try-On'
