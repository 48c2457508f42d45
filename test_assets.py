"""에셋 카탈로그 / 오버레이 슬롯 테스트"""

from pathlib import Path

import cv2
import numpy as np
import pytest

from conftest import build_overlay
from jewelry_tryon.assets.catalog import DirectoryAssetCatalog, ManifestAssetCatalog, category_key
from jewelry_tryon.assets.slots import OverlaySlots, load_overlay_image
from jewelry_tryon.models import OverlaySlot


@pytest.fixture
def asset_root(tmp_path):
    earrings = tmp_path / 'gold_earrings'
    necklaces = tmp_path / 'gold_necklaces'
    earrings.mkdir()
    necklaces.mkdir()

    bgra = np.zeros((40, 20, 4), dtype=np.uint8)
    bgra[..., 2] = 255
    bgra[..., 3] = 128
    cv2.imwrite(str(earrings / 's3.png'), bgra)
    cv2.imwrite(str(earrings / 's006.png'), bgra)
    cv2.imwrite(str(necklaces / '001.jpg'), np.full((30, 60, 3), 200, dtype=np.uint8))
    (earrings / 'notes.txt').write_text('not an image')
    (earrings / 'broken.png').write_bytes(b'not really a png')
    return tmp_path


def test_category_key():
    assert category_key('gold', 'earrings') == 'gold_earrings'
    with pytest.raises(ValueError):
        category_key('', 'earrings')


@pytest.mark.parametrize("category,slot", [
    ('gold_earrings', OverlaySlot.EARRING),
    ('diamond_earrings', OverlaySlot.EARRING),
    ('gold_necklaces', OverlaySlot.NECKLACE),
    ('diamond_necklaces', OverlaySlot.NECKLACE),
])
def test_slot_from_category(category, slot):
    assert OverlaySlot.from_category(category) is slot


def test_manifest_catalog():
    catalog = ManifestAssetCatalog(Path('assets'), {'gold_earrings': ['s3.png', 's4.png']})

    assert catalog.list_assets('gold_earrings') == [
        Path('assets/gold_earrings/s3.png'),
        Path('assets/gold_earrings/s4.png'),
    ]
    assert catalog.list_assets('silver_earrings') == []
    assert catalog.categories() == ['gold_earrings']


def test_directory_catalog(asset_root):
    catalog = DirectoryAssetCatalog(asset_root)

    names = [path.name for path in catalog.list_assets('gold_earrings')]

    assert names == ['broken.png', 's006.png', 's3.png']
    assert catalog.list_assets('missing_category') == []
    assert catalog.categories() == ['gold_earrings', 'gold_necklaces']


def test_load_keeps_alpha(asset_root):
    image = load_overlay_image(asset_root / 'gold_earrings' / 's3.png', 'gold_earrings')

    assert image is not None
    assert (image.width, image.height) == (20, 40)
    assert image.image.shape[2] == 4
    assert image.image[0, 0, 3] == 128
    assert image.slot is OverlaySlot.EARRING


def test_load_adds_opaque_alpha(asset_root):
    image = load_overlay_image(asset_root / 'gold_necklaces' / '001.jpg', 'gold_necklaces')

    assert image.image.shape == (30, 60, 4)
    assert np.all(image.image[..., 3] == 255)


def test_load_missing_or_broken_returns_none(asset_root):
    assert load_overlay_image(asset_root / 'gold_earrings' / 'nope.png', 'gold_earrings') is None
    assert load_overlay_image(asset_root / 'gold_earrings' / 'broken.png', 'gold_earrings') is None


def test_slots_are_independent(asset_root):
    slots = OverlaySlots()

    slots.select('gold_earrings', asset_root / 'gold_earrings' / 's3.png')
    slots.select('gold_necklaces', asset_root / 'gold_necklaces' / '001.jpg')

    assert slots.get(OverlaySlot.EARRING) is not None
    assert slots.get(OverlaySlot.NECKLACE) is not None


def test_exclusive_slots_clear_others():
    slots = OverlaySlots(exclusive=True)

    slots.put(build_overlay(category='gold_earrings'))
    slots.put(build_overlay(category='gold_necklaces'))

    assert slots.get(OverlaySlot.EARRING) is None
    assert slots.get(OverlaySlot.NECKLACE) is not None


def test_failed_load_leaves_slot_unchanged(asset_root):
    slots = OverlaySlots()
    loaded = slots.select('gold_earrings', asset_root / 'gold_earrings' / 's3.png')

    result = slots.select('gold_earrings', asset_root / 'gold_earrings' / 'missing.png')

    assert result is None
    assert slots.get(OverlaySlot.EARRING) is loaded


def test_select_async(asset_root):
    slots = OverlaySlots()
    try:
        future = slots.select_async('gold_earrings', asset_root / 'gold_earrings' / 's006.png')
        image = future.result(timeout=10)
    finally:
        slots.close()

    assert image is not None
    assert slots.get(OverlaySlot.EARRING) is image


def test_clear_and_snapshot():
    slots = OverlaySlots()
    slots.put(build_overlay(category='gold_earrings'))
    slots.put(build_overlay(category='gold_necklaces'))

    snapshot = slots.snapshot()
    slots.clear(OverlaySlot.EARRING)

    assert snapshot[OverlaySlot.EARRING] is not None
    assert slots.get(OverlaySlot.EARRING) is None
    assert slots.get(OverlaySlot.NECKLACE) is not None

    slots.clear()
    assert all(image is None for image in slots.snapshot().values())
