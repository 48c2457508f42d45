"""Jewelry asset catalog and overlay slots"""

from .catalog import AssetCatalog, DirectoryAssetCatalog, ManifestAssetCatalog, category_key
from .slots import OverlaySlots, load_overlay_image

__all__ = [
    'AssetCatalog',
    'DirectoryAssetCatalog',
    'ManifestAssetCatalog',
    'category_key',
    'OverlaySlots',
    'load_overlay_image',
]
