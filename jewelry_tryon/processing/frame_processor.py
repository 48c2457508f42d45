"""프레임 처리 파이프라인"""

import time
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from ..assets.slots import OverlaySlots
from ..config.constants import WINDOW_NAME
from ..config.settings import TryOnSettings
from ..models import DrawCommand, FrameResult, LandmarkSet, Point2D, SmoothedState, as_landmark_set
from ..render.compositor import OverlayCompositor
from ..render.snapshot import save_snapshot, take_snapshot
from ..utils import get_logger
from ..utils.exceptions import (
    ConfigurationError,
    DetectionError,
    InvalidImageError,
    LandmarkCountMismatch,
    LandmarkIndexError,
)
from ..utils.validators import validate_image
from .anchors import AnchorDeriver
from .placement import PlacementPlanner
from .smoother import TemporalSmoother

logger = get_logger(__name__)


class FrameProcessor:
    """
    프레임 처리 파이프라인

    raw landmarks → 랜드마크 EMA → 앵커 도출 → 앵커 EMA → 배치 계산 → 그리기 명령

    SmoothedState는 이 객체가 소유하며 프레임 단위로 순차 갱신됨
    """

    def __init__(
        self,
        settings: Optional[TryOnSettings] = None,
        detector=None,
        slots: Optional[OverlaySlots] = None,
        compositor: Optional[OverlayCompositor] = None
    ):
        """
        초기화

        Args:
            settings: 전체 설정 (None이면 기본값)
            detector: detect(image) -> Optional[LandmarkSet] 를 제공하는 랜드마크 소스
            slots: 오버레이 슬롯 저장소
            compositor: 렌더 싱크
        """
        self.settings = settings or TryOnSettings()
        self.detector = detector
        self.slots = slots or OverlaySlots(exclusive=self.settings.assets.exclusive_slots)
        self.compositor = compositor or OverlayCompositor()

        self.smoother = TemporalSmoother.from_config(self.settings.smoothing)
        self.deriver = AnchorDeriver(self.settings.anchors)
        self.planner = PlacementPlanner(self.settings.placement)

        self.state = SmoothedState()
        self.frame_size: Optional[Tuple[int, int]] = None

    # ------------------------------------------------------------------
    # Core pipeline
    # ------------------------------------------------------------------

    def process_landmarks(
        self,
        landmarks: Optional[Union[LandmarkSet, Sequence]],
        width: int,
        height: int
    ) -> List[DrawCommand]:
        """
        한 프레임의 랜드마크 처리

        Args:
            landmarks: 첫 번째 얼굴의 랜드마크 (얼굴 없으면 None)
            width: 프레임 너비 (px)
            height: 프레임 높이 (px)

        Returns:
            그리기 명령 리스트 (얼굴 없음 / 건너뛴 프레임이면 빈 리스트)
        """
        commands, _ = self._run_pipeline(landmarks, width, height)
        return commands

    def _run_pipeline(
        self,
        landmarks: Optional[Union[LandmarkSet, Sequence]],
        width: int,
        height: int
    ) -> Tuple[List[DrawCommand], bool]:
        """파이프라인 실행, (commands, skipped) 반환"""
        if landmarks is None:
            self._on_missed_frame()
            return [], False

        try:
            landmarks = as_landmark_set(landmarks)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping frame with malformed landmarks: {e}")
            return [], True

        # 1. 랜드마크 EMA (개수가 바뀌면 랜드마크/앵커 모두 이전 상태 없이 시작)
        previous = self.state
        try:
            smoothed = self.smoother.smooth_landmarks(previous, landmarks)
        except LandmarkCountMismatch as e:
            logger.warning(f"{e}; restarting smoothing")
            previous = SmoothedState()
            smoothed = self.smoother.smooth_landmarks(previous, landmarks)

        # 2. 앵커 도출
        try:
            derived = self.deriver.derive(smoothed, width, height)
        except LandmarkIndexError as e:
            logger.warning(f"Skipping frame: {e}")
            return [], True

        # 3. 앵커 EMA
        anchors = self.smoother.smooth_anchors(previous, derived.anchors)

        # 4. 배치 계산
        commands = self.planner.plan(anchors, derived.scale, self.slots.snapshot())

        # 5. 상태 커밋
        self.state.landmarks = smoothed
        self.state.anchors = anchors
        self.state.missed_frames = 0
        self.state.frame_size = (width, height)

        return commands, False

    def _on_missed_frame(self):
        """얼굴 미검출 프레임: 상태 유지, 연속 N 프레임이면 리셋"""
        if self.state.is_empty:
            return

        self.state.missed_frames += 1
        limit = self.settings.tracking.reset_after_missed_frames
        if limit and self.state.missed_frames >= limit:
            logger.info(f"Tracking lost for {self.state.missed_frames} frames; resetting smoothing state")
            self.state.reset()

    def reset(self):
        """평활화 상태 초기화 (카메라 전환 등 불연속 지점)"""
        self.state.reset()
        logger.info("Smoothing state reset")

    def plan_snapshot(self, width: int, height: int) -> List[DrawCommand]:
        """
        현재 평활화 상태로 배치만 다시 계산 (상태 변경 없음)

        저장된 앵커는 마지막 프레임 해상도 기준이므로 캔버스 크기로 비례 변환

        Args:
            width: 스냅샷 캔버스 너비
            height: 스냅샷 캔버스 높이
        """
        if self.state.landmarks is None or not self.state.anchors:
            return []

        try:
            scale = self.deriver.eye_distance(self.state.landmarks, width, height)
        except IndexError as e:
            logger.warning(f"Cannot plan snapshot: {e}")
            return []

        anchors = self.state.anchors
        if self.state.frame_size and self.state.frame_size != (width, height):
            source_w, source_h = self.state.frame_size
            anchors = {
                name: Point2D(point.x * width / source_w, point.y * height / source_h)
                for name, point in anchors.items()
            }

        return self.planner.plan(anchors, scale, self.slots.snapshot())

    # ------------------------------------------------------------------
    # Frame sources
    # ------------------------------------------------------------------

    def process_frame(self, frame: np.ndarray, frame_number: int = 0) -> FrameResult:
        """
        단일 BGR 프레임 처리 (검출 + 파이프라인)

        Raises:
            ConfigurationError: 랜드마크 소스가 없는 경우
            InvalidImageError: 프레임이 유효하지 않은 경우
        """
        if self.detector is None:
            raise ConfigurationError("FrameProcessor has no landmark detector")

        validate_image(frame)
        start_time = time.time()

        height, width = frame.shape[:2]
        self._update_frame_size(width, height)

        skipped = False
        try:
            landmarks = self.detector.detect(frame)
        except DetectionError as e:
            logger.warning(f"Detection failed on frame {frame_number}: {e}")
            landmarks = None
            skipped = True

        if skipped:
            commands = []
        else:
            commands, skipped = self._run_pipeline(landmarks, width, height)

        return FrameResult(
            frame=frame,
            draw_commands=commands,
            face_detected=landmarks is not None,
            skipped=skipped,
            processing_time=(time.time() - start_time) * 1000,
            metadata={
                'frame_number': frame_number,
                'frame_size': (width, height),
            }
        )

    def _update_frame_size(self, width: int, height: int):
        """해상도 변경 감지"""
        if self.frame_size != (width, height):
            if self.frame_size is not None:
                logger.info(f"Frame size changed: {self.frame_size} -> {(width, height)}")
            self.frame_size = (width, height)

    def process_video(
        self,
        video_path: Union[str, Path],
        max_frames: Optional[int] = None
    ) -> Generator[FrameResult, None, None]:
        """
        녹화된 클립을 파이프라인으로 재생 (제너레이터)

        세션 시작 시 평활화 상태를 리셋하므로 이전 세션의 위치가 섞이지 않음

        Args:
            video_path: 비디오 파일 경로
            max_frames: 최대 처리 프레임 수 (None이면 끝까지)

        Yields:
            FrameResult: 각 프레임의 처리 결과 (합성 프레임은 metadata['rendered'])
        """
        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open video: {video_path}")

        self.reset()
        frame_count = 0

        try:
            while cap.isOpened():
                if max_frames and frame_count >= max_frames:
                    break

                ret, frame = cap.read()
                if not ret:
                    break

                result = self.process_frame(frame, frame_count)
                result.metadata['video_path'] = str(video_path)
                result.metadata['rendered'] = self.compositor.draw(frame, result.draw_commands)
                yield result

                frame_count += 1

        finally:
            cap.release()
            logger.info(f"Video finished: {frame_count} frames from {video_path}")

    def _open_camera(self, camera_id: int) -> cv2.VideoCapture:
        cap = cv2.VideoCapture(camera_id)
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open camera {camera_id}")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.settings.camera.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.settings.camera.height)
        logger.info(f"Camera {camera_id} opened")
        return cap

    def process_realtime(
        self,
        camera_id: Optional[int] = None,
        display: bool = True,
        max_frames: Optional[int] = None
    ) -> Generator[FrameResult, None, None]:
        """
        실시간 카메라 처리

        키 입력 (display=True):
            q: 종료 / c: 스냅샷 저장 / r: 평활화 리셋 / f: 다음 카메라로 전환

        Args:
            camera_id: 카메라 디바이스 ID (None이면 설정의 첫 번째)
            display: 결과 화면 표시 여부
            max_frames: 최대 처리 프레임 수 (None이면 무한)

        Yields:
            FrameResult: 각 프레임의 처리 결과 (annotated 프레임은 metadata['rendered'])
        """
        device_ids = list(self.settings.camera.device_ids)
        if camera_id is None:
            camera_id = device_ids[0]

        cap = self._open_camera(camera_id)
        self.reset()
        frame_count = 0

        try:
            while cap.isOpened():
                if max_frames and frame_count >= max_frames:
                    break

                ret, frame = cap.read()
                if not ret:
                    break

                result = self.process_frame(frame, frame_count)
                result.metadata['camera_id'] = camera_id

                rendered = self.compositor.draw(frame, result.draw_commands)
                result.metadata['rendered'] = rendered

                if display:
                    cv2.imshow(WINDOW_NAME, rendered)
                    key = cv2.waitKey(1) & 0xFF

                    if key == ord('q'):
                        break
                    elif key == ord('c'):
                        self.snapshot(frame)
                    elif key == ord('r'):
                        self.reset()
                    elif key == ord('f'):
                        camera_id = self._next_camera(camera_id, device_ids)
                        cap.release()
                        cap = self._open_camera(camera_id)
                        # 불연속 지점: 이전 카메라 상태로 평활화하지 않음
                        self.reset()

                yield result
                frame_count += 1

        finally:
            cap.release()
            if display:
                cv2.destroyAllWindows()

    @staticmethod
    def _next_camera(current: int, device_ids: List[int]) -> int:
        if current not in device_ids:
            return device_ids[0]
        return device_ids[(device_ids.index(current) + 1) % len(device_ids)]

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self, frame: np.ndarray, path: Optional[Union[str, Path]] = None) -> Path:
        """
        현재 프레임 + 오버레이 스냅샷을 PNG로 저장

        Args:
            frame: 원본 BGR 프레임
            path: 저장 경로 (None이면 설정의 snapshot_filename)

        Returns:
            저장된 파일 경로
        """
        height, width = frame.shape[:2]
        commands = self.plan_snapshot(width, height)
        data = take_snapshot(frame, commands, self.compositor)
        return save_snapshot(data, path or self.settings.assets.snapshot_filename)

    def get_pipeline_info(self) -> Dict[str, Any]:
        """파이프라인 설정 정보"""
        info = {
            'landmark_alpha': self.smoother.landmark_alpha,
            'anchor_alpha': self.smoother.anchor_alpha,
            'required_landmarks': self.deriver.required_landmarks,
            'reset_after_missed_frames': self.settings.tracking.reset_after_missed_frames,
        }
        info.update(self.planner.describe())
        return info

    def release(self):
        """리소스 해제"""
        self.slots.close()
        if self.detector is not None and hasattr(self.detector, 'release'):
            self.detector.release()
