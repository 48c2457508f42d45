"""커스텀 예외 클래스 정의"""


class TryOnException(Exception):
    """기본 예외 클래스"""
    pass


class DetectionError(TryOnException):
    """얼굴 검출 실패 예외"""
    pass


class InvalidImageError(TryOnException):
    """잘못된 이미지 입력 예외"""
    pass


class ConfigurationError(TryOnException):
    """설정 오류 예외"""
    pass


class LandmarkIndexError(TryOnException, IndexError):
    """랜드마크 인덱스 범위 초과 (검출기 토폴로지 불일치)"""

    def __init__(self, index: int, available: int):
        self.index = index
        self.available = available
        super().__init__(
            f"Landmark index {index} out of range for set of {available} landmarks"
        )


class LandmarkCountMismatch(TryOnException, ValueError):
    """연속 프레임 간 랜드마크 개수 불일치"""

    def __init__(self, previous: int, current: int):
        self.previous = previous
        self.current = current
        super().__init__(
            f"Landmark count changed between frames: {previous} -> {current}"
        )


class InvalidFrameSizeError(TryOnException, ValueError):
    """잘못된 프레임 크기"""
    pass
