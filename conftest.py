"""공용 테스트 fixture"""

from pathlib import Path

import numpy as np
import pytest

from jewelry_tryon.models import OverlayImage

# 1280x720 예시 얼굴 (눈 사이 거리 256px)
EXAMPLE_POINTS = {
    33: (0.40, 0.50, 0.0),    # 왼쪽 눈
    263: (0.60, 0.50, 0.0),   # 오른쪽 눈
    132: (0.38, 0.55, 0.0),   # 왼쪽 귀
    361: (0.62, 0.55, 0.0),   # 오른쪽 귀
    152: (0.50, 0.75, 0.0),   # 턱
}


def build_landmarks(count: int = 478, points=None, fill: float = 0.5) -> np.ndarray:
    landmarks = np.full((count, 3), fill, dtype=np.float64)
    landmarks[:, 2] = 0.0
    for index, value in (points or EXAMPLE_POINTS).items():
        if index < count:
            landmarks[index] = value
    return landmarks


def build_overlay(width: int = 100, height: int = 200, category: str = 'gold_earrings',
                  color=(0, 0, 255), alpha: int = 255) -> OverlayImage:
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[..., :3] = color
    image[..., 3] = alpha
    return OverlayImage(image=image, source=Path(f'{category}/test.png'), category=category)


@pytest.fixture
def landmarks():
    return build_landmarks()


@pytest.fixture
def earring_image():
    return build_overlay(100, 200, 'gold_earrings')


@pytest.fixture
def necklace_image():
    return build_overlay(300, 150, 'diamond_necklaces', color=(0, 255, 0))
