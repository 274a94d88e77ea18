"""Configuration schema for Seedpick."""

import shlex
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ConfigError

DEFAULT_CLIENT = ("deluge",)
DEFAULT_TIMEOUT = 20.0
DEFAULT_SIZE_REGEX = r"(\d+(?:\.\d+)?\s*(?:GB|MB|KB|TB))"
SEARCH_METHODS = ("GET", "POST")


@dataclass
class Settings:
    """General settings for searching and launching."""

    client: tuple[str, ...] = DEFAULT_CLIENT  # "system" uses the OS handler
    download_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    timeout: float = DEFAULT_TIMEOUT  # seconds per source lookup
    default_source: str = "all"

    @classmethod
    def from_dict(cls, data: dict | None) -> "Settings":
        """Create from dictionary (YAML deserialization)."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("'settings' must be a mapping")

        settings = cls()
        if "client" in data:
            client = data["client"]
            if isinstance(client, str):
                client = shlex.split(client)
            if not client or not all(isinstance(part, str) for part in client):
                raise ConfigError("'client' must be a command string or list")
            settings.client = tuple(client)
        if data.get("download_dir"):
            settings.download_dir = Path(str(data["download_dir"])).expanduser()
        if "timeout" in data:
            try:
                settings.timeout = float(data["timeout"])
            except (TypeError, ValueError):
                raise ConfigError(f"invalid timeout {data['timeout']!r}") from None
            if settings.timeout <= 0:
                raise ConfigError("'timeout' must be positive")
        if data.get("default_source"):
            settings.default_source = str(data["default_source"])
        return settings


@dataclass
class SearchConfig:
    """Search configuration for a site."""

    url_template: str  # e.g., "{base_url}/?s={query}"
    method: str = "GET"  # POST sends the query string as form data


@dataclass
class SelectorsConfig:
    """CSS selectors for extracting data from pages."""

    result_item: str  # Selector for each result item
    title: str  # Selector for title within result item
    magnet: str = "a[href^='magnet:']"  # Selector for magnet link (on detail page)
    torrent: str = "a[href$='.torrent']"  # Selector for .torrent file link
    title_link: str | None = None  # If different from title selector
    size: str | None = None
    seeders: str | None = None
    leechers: str | None = None
    uploaded: str | None = None


@dataclass
class PatternsConfig:
    """Regex patterns for extracting data."""

    size_regex: str = DEFAULT_SIZE_REGEX


@dataclass
class SiteConfig:
    """Configuration for a dynamic torrent site."""

    name: str
    base_url: str
    search: SearchConfig
    selectors: SelectorsConfig
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
    enabled: bool = True

    @classmethod
    def from_dict(cls, key: str, data: dict) -> "SiteConfig":
        """Create from dictionary (YAML deserialization)."""
        search_data = data.get("search", {})
        selectors_data = data.get("selectors", {})
        patterns_data = data.get("patterns", {})

        name = data.get("name", key)
        if not isinstance(name, str) or not name.strip():
            raise TypeError(f"site name must be a non-empty string, not {name!r}")
        method = str(search_data.get("method", "GET")).upper()
        if method not in SEARCH_METHODS:
            raise ValueError(f"unsupported search method {method!r}")

        return cls(
            name=name.strip(),
            base_url=data["base_url"],
            enabled=data.get("enabled", True),
            search=SearchConfig(
                url_template=search_data["url_template"],
                method=method,
            ),
            selectors=SelectorsConfig(
                result_item=selectors_data["result_item"],
                title=selectors_data["title"],
                magnet=selectors_data.get("magnet", "a[href^='magnet:']"),
                torrent=selectors_data.get("torrent", "a[href$='.torrent']"),
                title_link=selectors_data.get("title_link"),
                size=selectors_data.get("size"),
                seeders=selectors_data.get("seeders"),
                leechers=selectors_data.get("leechers"),
                uploaded=selectors_data.get("uploaded"),
            ),
            patterns=PatternsConfig(
                size_regex=patterns_data.get("size_regex", DEFAULT_SIZE_REGEX),
            ),
        )
