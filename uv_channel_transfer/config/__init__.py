"""
Configuration module.
"""

from .config_manager import ConfigManager, PresetConfig

__all__ = ["ConfigManager", "PresetConfig"]
