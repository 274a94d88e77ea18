"""Configuration manager for settings and dynamic sites."""

import logging
import os
from pathlib import Path

import yaml

from ..errors import ConfigError
from .schema import Settings, SiteConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "seedpick"
SITES_FILE = CONFIG_DIR / "sites.yaml"
CONFIG_ENV = "SEEDPICK_CONFIG"


def default_config_path() -> Path:
    """Config file location, honouring the SEEDPICK_CONFIG override."""
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return SITES_FILE


class ConfigManager:
    """Manages reading and writing the configuration file."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or default_config_path()

    def _read(self) -> dict:
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping")
        return data

    def _write(self, data: dict) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def load_settings(self) -> Settings:
        """Load general settings, falling back to defaults."""
        return Settings.from_dict(self._read().get("settings"))

    def _sites(self, data: dict) -> dict:
        sites = data.get("sites")
        if sites is None:
            return {}
        if not isinstance(sites, dict):
            raise ConfigError(f"'sites' in {self.config_path} must be a mapping")
        return sites

    def load_all(self) -> dict[str, SiteConfig]:
        """Load all site configurations."""
        sites = {}
        for key, site_data in self._sites(self._read()).items():
            key = str(key)
            try:
                sites[key] = SiteConfig.from_dict(key, site_data)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping invalid site config %r: %s", key, e)

        return sites

    def load_enabled(self) -> dict[str, SiteConfig]:
        """Load only enabled site configurations."""
        return {k: v for k, v in self.load_all().items() if v.enabled}

    def remove(self, key: str) -> bool:
        """Remove a site configuration. Returns True if removed."""
        data = self._read()
        sites = self._sites(data)
        if key not in sites:
            return False

        del sites[key]
        self._write(data)
        return True

    def set_enabled(self, key: str, enabled: bool) -> bool:
        """Enable or disable a site. Returns True if found."""
        data = self._read()
        sites = self._sites(data)
        if key not in sites:
            return False
        if not isinstance(sites[key], dict):
            raise ConfigError(f"site {key!r} in {self.config_path} must be a mapping")

        sites[key]["enabled"] = enabled
        self._write(data)
        return True
