"""Configuration management for Seedpick."""

from .manager import ConfigManager, default_config_path
from .schema import PatternsConfig, SearchConfig, SelectorsConfig, Settings, SiteConfig

__all__ = [
    "ConfigManager",
    "default_config_path",
    "Settings",
    "SiteConfig",
    "SearchConfig",
    "SelectorsConfig",
    "PatternsConfig",
]
