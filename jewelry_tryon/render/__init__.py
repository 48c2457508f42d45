"""Render sink: overlay compositing and snapshots"""

from .compositor import OverlayCompositor
from .snapshot import save_snapshot, take_snapshot

__all__ = [
    'OverlayCompositor',
    'save_snapshot',
    'take_snapshot',
]
