"""그리기 명령을 프레임에 합성 (알파 블렌딩)"""

from typing import Iterable

import cv2
import numpy as np

from ..models import DrawCommand
from ..utils.validators import validate_image


class OverlayCompositor:
    """DrawCommand를 BGR 프레임 위에 알파 블렌딩으로 합성"""

    def draw(
        self,
        frame: np.ndarray,
        commands: Iterable[DrawCommand],
        in_place: bool = False
    ) -> np.ndarray:
        """
        프레임에 오버레이 합성

        Args:
            frame: BGR 프레임 (H, W, 3), 그레이스케일은 BGR로 변환
            commands: 그리기 명령 (순서대로 그림)
            in_place: True면 입력 프레임에 직접 그림

        Returns:
            합성된 프레임
        """
        validate_image(frame)

        if frame.ndim == 2 or frame.shape[2] == 1:
            canvas = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        else:
            canvas = frame if in_place else frame.copy()

        for command in commands:
            self.draw_command(canvas, command)

        return canvas

    @staticmethod
    def draw_command(canvas: np.ndarray, command: DrawCommand):
        """단일 명령 합성 (프레임 밖 영역은 잘라냄)"""
        width = int(round(command.width))
        height = int(round(command.height))
        if width <= 0 or height <= 0:
            return

        x0 = int(round(command.x))
        y0 = int(round(command.y))
        frame_h, frame_w = canvas.shape[:2]

        # 프레임과 겹치는 영역
        x1, y1 = max(x0, 0), max(y0, 0)
        x2, y2 = min(x0 + width, frame_w), min(y0 + height, frame_h)
        if x1 >= x2 or y1 >= y2:
            return

        source = command.image.image
        interpolation = cv2.INTER_AREA if width < source.shape[1] else cv2.INTER_LINEAR
        resized = cv2.resize(source, (width, height), interpolation=interpolation)

        patch = resized[y1 - y0:y2 - y0, x1 - x0:x2 - x0]
        alpha = patch[..., 3:4].astype(np.float32) / 255.0

        roi = canvas[y1:y2, x1:x2, :3].astype(np.float32)
        blended = patch[..., :3].astype(np.float32) * alpha + roi * (1.0 - alpha)
        canvas[y1:y2, x1:x2, :3] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
