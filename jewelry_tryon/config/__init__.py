"""Configuration components"""

from .settings import (
    AnchorIndices,
    AssetConfig,
    CameraConfig,
    DetectionConfig,
    PlacementConfig,
    SmoothingConfig,
    TrackingConfig,
    TryOnSettings,
    load_settings,
)

__all__ = [
    'AnchorIndices',
    'AssetConfig',
    'CameraConfig',
    'DetectionConfig',
    'PlacementConfig',
    'SmoothingConfig',
    'TrackingConfig',
    'TryOnSettings',
    'load_settings',
]
