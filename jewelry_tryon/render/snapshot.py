"""스냅샷 캡처 및 저장"""

from pathlib import Path
from typing import Iterable, Optional, Union

import cv2
import numpy as np

from ..config.constants import SNAPSHOT_FILENAME
from ..models import DrawCommand
from ..utils import get_logger
from ..utils.exceptions import InvalidImageError
from .compositor import OverlayCompositor

logger = get_logger(__name__)


def take_snapshot(
    frame: np.ndarray,
    commands: Iterable[DrawCommand],
    compositor: Optional[OverlayCompositor] = None
) -> bytes:
    """
    현재 프레임 + 오버레이를 별도 캔버스에 합성 후 PNG로 인코딩

    Args:
        frame: 원본 BGR 프레임 (변경하지 않음)
        commands: 그리기 명령
        compositor: 사용할 합성기 (None이면 기본값)

    Returns:
        PNG 바이트

    Raises:
        InvalidImageError: 인코딩 실패 시
    """
    compositor = compositor or OverlayCompositor()
    canvas = compositor.draw(frame, commands)

    ok, buffer = cv2.imencode('.png', canvas)
    if not ok:
        raise InvalidImageError("Failed to encode snapshot as PNG")
    return buffer.tobytes()


def save_snapshot(data: bytes, path: Union[str, Path] = SNAPSHOT_FILENAME) -> Path:
    """PNG 바이트를 파일로 저장"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Snapshot saved: {path} ({len(data):,} bytes)")
    return path
