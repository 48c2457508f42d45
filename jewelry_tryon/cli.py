#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Jewelry Try-On 실행 스크립트

Usage:
    python -m jewelry_tryon --select gold_earrings s3.png
    python -m jewelry_tryon --list diamond_necklaces
    python -m jewelry_tryon --video clip.mp4 --select gold_earrings s3.png
"""

import argparse
import time
from pathlib import Path
from typing import List, Optional

from .assets.catalog import AssetCatalog, DirectoryAssetCatalog, ManifestAssetCatalog
from .assets.slots import OverlaySlots
from .config.settings import TryOnSettings, load_settings
from .models import OverlaySlot
from .utils import get_logger, setup_logging
from .utils.color_log import ColorLog
from .utils.config_loader import Config
from .utils.exceptions import TryOnException

logger = get_logger(__name__)


def build_catalog(settings: TryOnSettings, kind: str = 'manifest') -> AssetCatalog:
    """설정으로 에셋 카탈로그 생성"""
    if kind == 'directory':
        return DirectoryAssetCatalog(settings.assets.root)
    return ManifestAssetCatalog(settings.assets.root, settings.assets.manifest)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='실시간 주얼리 가상 착용')
    parser.add_argument('--config', help='config.yaml 경로 (기본: 패키지 내장 설정)')
    parser.add_argument('--camera', type=int, default=None, help='카메라 디바이스 ID')
    parser.add_argument('--video', metavar='PATH', help='카메라 대신 녹화된 클립 재생')
    parser.add_argument('--assets', help='에셋 루트 디렉토리 (설정값 덮어쓰기)')
    parser.add_argument(
        '--catalog',
        choices=['manifest', 'directory'],
        default='manifest',
        help='에셋 목록 방식 (기본: manifest)'
    )
    parser.add_argument(
        '--select',
        nargs=2,
        action='append',
        default=[],
        metavar=('CATEGORY', 'FILE'),
        help='시작 시 선택할 에셋 (예: --select gold_earrings s3.png)'
    )
    parser.add_argument('--list', metavar='CATEGORY', help='카테고리 에셋 목록 출력 후 종료')
    parser.add_argument('--max-frames', type=int, default=None, help='최대 처리 프레임 수')
    parser.add_argument('--no-display', action='store_true', help='화면 표시 없이 실행')
    return parser


def list_assets(catalog: AssetCatalog, category: str) -> int:
    paths = catalog.list_assets(category)
    if not paths:
        ColorLog.warning(f"No assets for '{category}' (available: {', '.join(catalog.categories())})")
        return 1

    ColorLog.header(category)
    for path in paths:
        marker = '✅' if path.is_file() else '❌'
        print(f"  {marker} {path}")
    return 0


def run(settings: TryOnSettings, args: argparse.Namespace, catalog: AssetCatalog) -> int:
    """카메라 (또는 --video 클립) 루프 실행"""
    # 무거운 의존성 (mediapipe)은 실행 시점에만 로드
    from .core.face_detector import FaceDetector
    from .processing.frame_processor import FrameProcessor

    slots = OverlaySlots(exclusive=settings.assets.exclusive_slots)
    for category, filename in args.select:
        path = catalog.asset_path(category, filename)
        if slots.select(category, path) is None:
            ColorLog.warning(f"Could not load {path}")

    detector = FaceDetector(settings.detection)
    processor = FrameProcessor(settings, detector=detector, slots=slots)
    logger.info(f"Pipeline: {processor.get_pipeline_info()}")

    ColorLog.header("Jewelry Try-On")
    if not args.no_display and not args.video:
        ColorLog.info("q: quit | c: snapshot | r: reset | f: switch camera")

    fps = 0.0
    interval_start = time.time()
    interval_frames = 0

    try:
        if args.video:
            results = processor.process_video(args.video, max_frames=args.max_frames)
        else:
            results = processor.process_realtime(
                camera_id=args.camera,
                display=not args.no_display,
                max_frames=args.max_frames
            )

        for result in results:
            interval_frames += 1
            now = time.time()
            if now - interval_start >= 1.0:
                fps = interval_frames / (now - interval_start)
                interval_start = now
                interval_frames = 0

            ColorLog.status_line(
                face_tracked=result.face_detected,
                earring=slots.get(OverlaySlot.EARRING) is not None,
                necklace=slots.get(OverlaySlot.NECKLACE) is not None,
                fps=fps
            )
    except KeyboardInterrupt:
        ColorLog.clear_line()
        ColorLog.warning("Keyboard interrupt")
    finally:
        processor.release()

    ColorLog.clear_line()
    ColorLog.success("Session finished")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """메인 엔트리 포인트"""
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config) if args.config else None
        setup_logging(config)
        settings = load_settings(config)
        if args.assets:
            settings.assets.root = Path(args.assets)

        catalog = build_catalog(settings, args.catalog)

        if args.list:
            return list_assets(catalog, args.list)

        return run(settings, args, catalog)

    except (TryOnException, FileNotFoundError) as e:
        ColorLog.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
