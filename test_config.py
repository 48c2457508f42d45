"""설정 로딩 테스트"""

from pathlib import Path

import pytest
import yaml

from jewelry_tryon.config.settings import DetectionConfig, TryOnSettings, load_settings
from jewelry_tryon.utils.config_loader import CONFIG_ENV_VAR, Config
from jewelry_tryon.utils.exceptions import ConfigurationError


def write_config(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding='utf-8')
    return path


def test_packaged_config_defaults():
    settings = load_settings(Config())

    assert settings.smoothing.landmark_alpha == 0.2
    assert settings.smoothing.anchor_alpha == 0.4
    assert settings.placement.earring_scale == 0.42
    assert settings.placement.necklace_scale == 1.6
    assert settings.placement.necklace_offset == 1.0
    assert settings.anchors.as_dict() == {
        'left_eye': 33, 'right_eye': 263, 'left_ear': 132, 'right_ear': 361, 'neck': 152,
    }
    assert settings.detection.refine_landmarks is True
    assert settings.detection.min_detection_confidence == 0.6
    assert settings.assets.exclusive_slots is False
    assert 's3.png' in settings.assets.manifest['gold_earrings']


def test_config_access_styles():
    config = Config()

    assert config.get('placement.earring_scale') == 0.42
    assert config.placement.earring_scale == 0.42
    assert config.get('placement.missing', 'default') == 'default'
    with pytest.raises(AttributeError):
        config.not_a_section


def test_env_var_override(tmp_path, monkeypatch):
    path = write_config(tmp_path / 'custom.yaml', {'smoothing': {'anchor_alpha': 0.5}})
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    config = Config()
    settings = load_settings(config)

    assert config.config_path == path
    assert settings.smoothing.anchor_alpha == 0.5
    assert settings.smoothing.landmark_alpha == 0.2
    assert settings.placement == TryOnSettings().placement


def test_invalid_value_raises(tmp_path):
    path = write_config(tmp_path / 'bad.yaml', {'smoothing': {'landmark_alpha': 1.5}})

    with pytest.raises(ConfigurationError):
        load_settings(Config(str(path)))


def test_unknown_key_raises(tmp_path):
    path = write_config(tmp_path / 'bad.yaml', {'placement': {'ring_scale': 1.0}})

    with pytest.raises(ConfigurationError):
        load_settings(Config(str(path)))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / 'missing.yaml'))


def test_detection_validation():
    with pytest.raises(ValueError):
        DetectionConfig(min_detection_confidence=1.2)
    with pytest.raises(ValueError):
        DetectionConfig(max_num_faces=0)
