# -*- coding: utf-8 -*-
"""
Color Log Utility for Clean Console Output
카메라 루프에서 중요 이벤트만 컬러로 출력하는 유틸리티
"""

import sys
from datetime import datetime


class ColorLog:
    """
    컬러 로그 유틸리티

    Features:
    - 타임스탬프 자동 추가
    - 이모지 + 컬러로 가시성 향상
    - 한 줄 상태 업데이트 (실시간 덮어쓰기)
    """

    # ANSI 색상 코드
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    RESET = '\033[0m'
    BOLD = '\033[1m'

    @staticmethod
    def timestamp() -> str:
        """현재 시간 반환 (HH:MM:SS 형식)"""
        return datetime.now().strftime("%H:%M:%S")

    @staticmethod
    def success(msg: str):
        """성공 메시지 (초록색 + ✅)"""
        print(f"{ColorLog.GREEN}✅ [{ColorLog.timestamp()}] {msg}{ColorLog.RESET}")

    @staticmethod
    def info(msg: str):
        """정보 메시지 (파란색)"""
        print(f"{ColorLog.BLUE}ℹ️  [{ColorLog.timestamp()}] {msg}{ColorLog.RESET}")

    @staticmethod
    def warning(msg: str):
        """경고 메시지 (노란색)"""
        print(f"{ColorLog.YELLOW}⚠️  [{ColorLog.timestamp()}] {msg}{ColorLog.RESET}")

    @staticmethod
    def error(msg: str):
        """에러 메시지 (빨간색)"""
        print(f"{ColorLog.RED}❌ [{ColorLog.timestamp()}] {msg}{ColorLog.RESET}")

    @staticmethod
    def header(title: str):
        """헤더 출력 (굵게)"""
        print(f"\n{ColorLog.BOLD}{ColorLog.CYAN}═══ {title} ═══{ColorLog.RESET}\n")

    @staticmethod
    def status_line(
        face_tracked: bool,
        earring: bool,
        necklace: bool,
        fps: float
    ):
        """
        한 줄 상태 업데이트 (실시간 덮어쓰기)

        Args:
            face_tracked: 현재 프레임 얼굴 추적 여부
            earring: 귀걸이 슬롯 로드 여부
            necklace: 목걸이 슬롯 로드 여부
            fps: 현재 FPS
        """
        face_icon = "✅" if face_tracked else "⏳"
        status = (
            f"\r{ColorLog.CYAN}[{ColorLog.timestamp()}] "
            f"Face:{face_icon} | "
            f"Earring:{'on' if earring else '-'} | "
            f"Necklace:{'on' if necklace else '-'} | "
            f"FPS:{fps:.1f}{ColorLog.RESET}"
        )
        sys.stdout.write(status)
        sys.stdout.flush()

    @staticmethod
    def clear_line():
        """현재 줄 지우기"""
        sys.stdout.write('\r' + ' ' * 100 + '\r')
        sys.stdout.flush()
