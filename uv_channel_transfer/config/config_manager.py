"""
Configuration Manager - Manages tool configurations and presets.
"""

import copy
import json
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, asdict
from pathlib import Path

from ..utils.logger import get_logger
from ..utils.error_handler import ConfigError
from ..core.mesh import is_supported_channel
from ..core.rasterizer import PreviewConfig, RasterStyle
from ..tool import ToolConfig


@dataclass
class PresetConfig:
    """A named configuration preset."""
    name: str
    description: str
    config: ToolConfig


def config_to_dict(config: ToolConfig) -> Dict[str, Any]:
    """Serialize a ToolConfig to plain JSON types."""
    data = asdict(config)
    style = data['preview']['style']
    for key in ('background_color', 'line_color', 'point_color'):
        style[key] = list(style[key])
    return data


def config_from_dict(data: Dict[str, Any]) -> ToolConfig:
    """
    Build a ToolConfig from a dictionary.

    Raises:
        ConfigError: If the dictionary has unknown keys or wrong shapes
    """
    try:
        data = dict(data)
        preview_data = dict(data.pop('preview', {}) or {})
        style_data = dict(preview_data.pop('style', {}) or {})
        style = RasterStyle(**{key: tuple(value) for key, value in style_data.items()})
        preview = PreviewConfig(style=style, **preview_data)
        return ToolConfig(preview=preview, **data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Config parse error: {e}", error_code=4002)


class ConfigManager:
    """
    Manages tool configurations and presets.

    Features:
    - Built-in presets
    - User presets stored as JSON
    - Configuration validation
    - Single-config import/export
    """

    DEFAULT_PRESETS = [
        PresetConfig(
            name="default",
            description="512px preview, UV channel 0",
            config=ToolConfig()
        ),
        PresetConfig(
            name="high_res",
            description="1024px preview for dense UV layouts",
            config=ToolConfig(preview=PreviewConfig(resolution=1024))
        ),
        PresetConfig(
            name="thumbnail",
            description="128px preview for quick checks",
            config=ToolConfig(preview=PreviewConfig(resolution=128))
        ),
    ]

    def __init__(self, config_dir: Optional[str] = None):
        self.logger = get_logger("uv_channel_transfer.config")
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".uv_channel_transfer"
        self.presets: Dict[str, PresetConfig] = {}

        self._load_default_presets()
        self._load_user_presets()

    def _load_default_presets(self):
        """Load default presets."""
        for preset in self.DEFAULT_PRESETS:
            self.presets[preset.name] = copy.deepcopy(preset)

    def _load_user_presets(self):
        """Load user-defined presets from config directory."""
        preset_file = self.config_dir / "presets.json"
        if not preset_file.exists():
            return

        try:
            with open(preset_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            loaded = 0
            for preset_data in data.get('presets', []):
                preset = PresetConfig(
                    name=preset_data['name'],
                    description=preset_data.get('description', ''),
                    config=config_from_dict(preset_data.get('config', {}))
                )
                issues = self.validate_config(preset.config)
                if issues:
                    self.logger.warning(f"Skipping invalid preset '{preset.name}': {', '.join(issues)}")
                    continue
                self.presets[preset.name] = preset
                loaded += 1

            self.logger.info(f"Loaded {loaded} user presets")
        except (OSError, ValueError, KeyError, ConfigError) as e:
            self.logger.warning(f"Failed to load user presets: {e}")

    def get_preset(self, name: str) -> Optional[ToolConfig]:
        """Get configuration by preset name."""
        preset = self.presets.get(name)
        return copy.deepcopy(preset.config) if preset else None

    def get_preset_names(self) -> List[str]:
        """Get list of available preset names."""
        return list(self.presets.keys())

    def get_preset_info(self, name: str) -> Optional[Dict[str, Any]]:
        """Get preset information."""
        preset = self.presets.get(name)
        if preset:
            return {
                'name': preset.name,
                'description': preset.description,
                'config': config_to_dict(preset.config)
            }
        return None

    def save_preset(
        self,
        name: str,
        config: ToolConfig,
        description: str = ""
    ):
        """Save a configuration as a preset."""
        if name in [p.name for p in self.DEFAULT_PRESETS]:
            raise ConfigError(f"Cannot overwrite default preset: {name}", error_code=4003)

        issues = self.validate_config(config)
        if issues:
            raise ConfigError(
                f"Invalid configuration: {', '.join(issues)}",
                error_code=4003
            )

        self.presets[name] = PresetConfig(
            name=name,
            description=description,
            config=copy.deepcopy(config)
        )
        self._save_user_presets()

        self.logger.info(f"Saved preset: {name}")

    def _save_user_presets(self):
        """Save user presets to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        preset_file = self.config_dir / "presets.json"

        user_presets = []
        for name, preset in self.presets.items():
            if name not in [p.name for p in self.DEFAULT_PRESETS]:
                user_presets.append({
                    'name': preset.name,
                    'description': preset.description,
                    'config': config_to_dict(preset.config)
                })

        with open(preset_file, 'w', encoding='utf-8') as f:
            json.dump({'presets': user_presets}, f, indent=2)

    def delete_preset(self, name: str) -> bool:
        """Delete a user preset."""
        if name in [p.name for p in self.DEFAULT_PRESETS]:
            self.logger.warning(f"Cannot delete default preset: {name}")
            return False

        if name in self.presets:
            del self.presets[name]
            self._save_user_presets()
            self.logger.info(f"Deleted preset: {name}")
            return True

        return False

    def validate_config(self, config: ToolConfig) -> List[str]:
        """Validate a configuration and return any issues."""
        issues = []

        if not is_supported_channel(config.uv_channel):
            issues.append(f"uv_channel must be 0-3, got {config.uv_channel}")

        resolution = config.preview.resolution
        if isinstance(resolution, bool) or not isinstance(resolution, int) or resolution <= 0:
            issues.append("preview.resolution must be a positive integer")

        style = config.preview.style
        for key in ('background_color', 'line_color', 'point_color'):
            color = getattr(style, key)
            if len(color) != 3 or any(not 0.0 <= float(c) <= 1.0 for c in color):
                issues.append(f"preview.style.{key} must be three values in [0, 1]")

        if not config.save_suffix:
            issues.append("save_suffix cannot be empty")

        return issues

    def export_config(self, config: ToolConfig, filepath: str):
        """Export configuration to file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(config_to_dict(config), f, indent=2)

        self.logger.info(f"Exported config to {filepath}")

    def import_config(self, filepath: str) -> ToolConfig:
        """Import configuration from file."""
        if not Path(filepath).exists():
            raise ConfigError(f"Config file not found: {filepath}", error_code=4001)

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            raise ConfigError(f"Config parse error: {e}", error_code=4002)

        config = config_from_dict(data)

        issues = self.validate_config(config)
        if issues:
            raise ConfigError(
                f"Invalid configuration: {', '.join(issues)}",
                error_code=4003
            )

        self.logger.info(f"Imported config from {filepath}")
        return config
