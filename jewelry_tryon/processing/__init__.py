"""Processing layer components"""

from .anchors import AnchorDeriver
from .frame_processor import FrameProcessor
from .placement import PlacementPlanner
from .smoother import TemporalSmoother, smooth_landmark_set, smooth_point

__all__ = [
    'AnchorDeriver',
    'FrameProcessor',
    'PlacementPlanner',
    'TemporalSmoother',
    'smooth_landmark_set',
    'smooth_point',
]
