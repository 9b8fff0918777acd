"""
Tests for configuration presets.
"""

import json

import pytest

from uv_channel_transfer.config.config_manager import ConfigManager
from uv_channel_transfer.core.rasterizer import PreviewConfig, RasterStyle
from uv_channel_transfer.tool import ToolConfig
from uv_channel_transfer.utils.error_handler import ConfigError


@pytest.fixture
def manager(tmp_path):
    return ConfigManager(str(tmp_path / "config"))


def test_default_presets(manager):
    assert manager.get_preset_names()[:3] == ["default", "high_res", "thumbnail"]
    assert manager.get_preset("default").preview.resolution == 512
    assert manager.get_preset("high_res").preview.resolution == 1024
    assert manager.get_preset("missing") is None


def test_user_preset_persists(manager, tmp_path):
    config = ToolConfig(uv_channel=2, preview=PreviewConfig(resolution=256))
    manager.save_preset("lightmap", config, "Lightmap channel")

    reloaded = ConfigManager(str(tmp_path / "config"))

    assert reloaded.get_preset("lightmap") == config
    assert reloaded.get_preset_info("lightmap")["description"] == "Lightmap channel"


def test_cannot_overwrite_or_delete_defaults(manager):
    with pytest.raises(ConfigError):
        manager.save_preset("default", ToolConfig())
    assert not manager.delete_preset("default")


def test_delete_user_preset(manager):
    manager.save_preset("mine", ToolConfig(uv_channel=1))

    assert manager.delete_preset("mine")
    assert manager.get_preset("mine") is None
    assert not manager.delete_preset("mine")


@pytest.mark.parametrize("config, fragment", [
    (ToolConfig(uv_channel=4), "uv_channel"),
    (ToolConfig(preview=PreviewConfig(resolution=0)), "resolution"),
    (ToolConfig(preview=PreviewConfig(style=RasterStyle(line_color=(2.0, 0.0, 0.0)))), "line_color"),
    (ToolConfig(save_suffix=""), "save_suffix"),
])
def test_validate_config(manager, config, fragment):
    issues = manager.validate_config(config)

    assert len(issues) == 1
    assert fragment in issues[0]


def test_export_import(manager, tmp_path):
    config = ToolConfig(uv_channel=3, show_preview=False,
                        preview=PreviewConfig(resolution=64))
    path = tmp_path / "tool.json"

    manager.export_config(config, str(path))

    assert json.loads(path.read_text())["preview"]["style"]["line_color"] == [1.0, 1.0, 1.0]
    assert manager.import_config(str(path)) == config


def test_import_invalid_values(manager, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"uv_channel": 9}))

    with pytest.raises(ConfigError) as exc_info:
        manager.import_config(str(path))
    assert exc_info.value.error_code == 4003


def test_import_unknown_key(manager, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"channel": 1}))

    with pytest.raises(ConfigError) as exc_info:
        manager.import_config(str(path))
    assert exc_info.value.error_code == 4002


def test_import_missing_file(manager, tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        manager.import_config(str(tmp_path / "none.json"))
    assert exc_info.value.error_code == 4001


def test_corrupt_user_presets_are_ignored(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "presets.json").write_text("{not json")

    manager = ConfigManager(str(config_dir))

    assert manager.get_preset_names() == ["default", "high_res", "thumbnail"]


def test_returned_presets_are_copies(tmp_path):
    first = ConfigManager(str(tmp_path / "a"))
    first.get_preset("high_res").preview.resolution = 7

    assert first.get_preset("high_res").preview.resolution == 1024
    assert ConfigManager(str(tmp_path / "b")).get_preset("high_res").preview.resolution == 1024


def test_invalid_user_preset_is_skipped(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    presets = {
        "presets": [
            {"name": "bad", "config": {"preview": {"resolution": 0}}},
            {"name": "good", "config": {"uv_channel": 1}},
        ]
    }
    (config_dir / "presets.json").write_text(json.dumps(presets), encoding="utf-8")

    manager = ConfigManager(str(config_dir))

    assert manager.get_preset("bad") is None
    assert manager.get_preset("good").uv_channel == 1
