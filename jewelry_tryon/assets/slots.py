# -*- coding: utf-8 -*-
"""
오버레이 이미지 로더 및 슬롯 저장소

- 이미지 로드는 워커 스레드에서 수행 가능
- 파이프라인은 로드 완료된 이미지만 읽음 (로딩 중인 이미지는 슬롯에 없음)
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Optional, Union

import cv2
import numpy as np

from ..models import OverlayImage, OverlaySlot
from ..utils import get_logger

logger = get_logger(__name__)


def to_bgra(image: np.ndarray) -> np.ndarray:
    """그레이 / BGR / BGRA 이미지를 BGRA로 변환"""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    return image


def load_overlay_image(path: Union[str, Path], category: str) -> Optional[OverlayImage]:
    """
    오버레이 이미지 로드

    Args:
        path: 이미지 파일 경로
        category: 카테고리 키 (예: 'gold_earrings')

    Returns:
        OverlayImage, 파일이 없거나 디코딩 실패 시 None
    """
    path = Path(path)
    if not path.is_file():
        logger.warning(f"Overlay image not found: {path}")
        return None

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None or image.size == 0:
        logger.warning(f"Failed to decode overlay image: {path}")
        return None

    if image.dtype == np.uint16:
        # 16-bit PNG
        image = (image // 257).astype(np.uint8)

    return OverlayImage(image=to_bgra(image), source=path, category=category)


class OverlaySlots:
    """
    Thread-safe 오버레이 슬롯 저장소

    슬롯은 서로 독립적 (귀걸이 선택이 목걸이를 지우지 않음).
    exclusive=True면 선택 시 모든 슬롯을 비운 뒤 설정
    """

    def __init__(self, exclusive: bool = False, max_workers: int = 2):
        self.exclusive = exclusive
        self.lock = threading.Lock()
        self._slots: Dict[OverlaySlot, Optional[OverlayImage]] = {
            slot: None for slot in OverlaySlot
        }
        self._executor: Optional[ThreadPoolExecutor] = None
        self._max_workers = max_workers

    def select(self, category: str, path: Union[str, Path]) -> Optional[OverlayImage]:
        """
        이미지 로드 후 카테고리에 해당하는 슬롯에 설정

        로드 실패 시 슬롯은 변경되지 않음

        Returns:
            로드된 OverlayImage 또는 None
        """
        image = load_overlay_image(path, category)
        if image is None:
            return None

        self.put(image)
        return image

    def select_async(self, category: str, path: Union[str, Path]) -> Future:
        """워커 스레드에서 select 수행 (완료 전까지 슬롯은 이전 상태 유지)"""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix='overlay-loader'
            )
        return self._executor.submit(self.select, category, path)

    def put(self, image: OverlayImage):
        """로드 완료된 이미지를 슬롯에 설정"""
        slot = image.slot
        with self.lock:
            if self.exclusive:
                for key in self._slots:
                    self._slots[key] = None
            self._slots[slot] = image

        logger.info(f"{slot.value} overlay set: {image.source} ({image.width}x{image.height})")

    def get(self, slot: OverlaySlot) -> Optional[OverlayImage]:
        with self.lock:
            return self._slots[slot]

    def clear(self, slot: Optional[OverlaySlot] = None):
        """슬롯 비우기 (None이면 전체)"""
        with self.lock:
            if slot is None:
                for key in self._slots:
                    self._slots[key] = None
            else:
                self._slots[slot] = None

    def snapshot(self) -> Dict[OverlaySlot, Optional[OverlayImage]]:
        """현재 슬롯 상태 복사본 (프레임 처리 중 일관성 유지용)"""
        with self.lock:
            return dict(self._slots)

    def close(self):
        """로더 스레드 종료"""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
