"""
Jewelry Try-On
MediaPipe 랜드마크 기반 실시간 주얼리 오버레이
"""

__version__ = "0.1.0"

from .models import DrawCommand, OverlayImage, OverlaySlot, Point2D, SmoothedState
from .processing import (
    AnchorDeriver,
    FrameProcessor,
    PlacementPlanner,
    TemporalSmoother,
    smooth_landmark_set,
    smooth_point,
)

__all__ = [
    'AnchorDeriver',
    'DrawCommand',
    'FrameProcessor',
    'OverlayImage',
    'OverlaySlot',
    'PlacementPlanner',
    'Point2D',
    'SmoothedState',
    'TemporalSmoother',
    'smooth_landmark_set',
    'smooth_point',
]
