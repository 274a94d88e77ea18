"""Torrent source implementations."""

import logging
from collections.abc import Iterator
from pathlib import Path

from ..config import SiteConfig
from ..errors import UnknownSourceError, ValidationError
from ..models import ALL_SOURCES
from .archive import ArchiveSource
from .base import Source
from .dynamic import DynamicSource
from .piratebay import PirateBaySource
from .x1337 import X1337Source

logger = logging.getLogger(__name__)

BUILTIN_SOURCES = (ArchiveSource, PirateBaySource, X1337Source)


class SourceRegistry:
    """Sources by key, in configured order.

    Sources are also reachable by display name, which is what results
    carry in ``Torrent.source``.
    """

    def __init__(self, sources: list[Source] | None = None):
        self._sources: dict[str, Source] = {}
        for source in sources or []:
            self.add(source)

    def add(self, source: Source) -> None:
        if source.key in self._sources:
            raise ValueError(f"duplicate source key '{source.key}'")
        self._sources[source.key] = source

    @property
    def keys(self) -> list[str]:
        return list(self._sources)

    def get(self, key_or_name: str) -> Source | None:
        """Find a source by key, or by display name as a fallback."""
        if key_or_name in self._sources:
            return self._sources[key_or_name]
        for source in self._sources.values():
            if source.name == key_or_name:
                return source
        folded = key_or_name.lower()
        for source in self._sources.values():
            if source.key.lower() == folded or source.name.lower() == folded:
                return source
        return None

    def select(self, target: str) -> list[Source]:
        """Sources to query for a target key, or all of them."""
        if not self._sources:
            raise ValidationError("no sources configured")
        if target.lower() == ALL_SOURCES:
            return list(self._sources.values())
        source = self.get(target)
        if source is None:
            raise UnknownSourceError(target, self.keys)
        return [source]

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)


def build_registry(
    sites: dict[str, SiteConfig] | None = None, download_dir: Path | None = None
) -> SourceRegistry:
    """Registry of built-in sources followed by configured sites."""
    registry = SourceRegistry([cls(download_dir) for cls in BUILTIN_SOURCES])
    for key, config in (sites or {}).items():
        if registry.get(key) or registry.get(config.name):
            logger.warning("Site %r clashes with an existing source, skipping", key)
            continue
        registry.add(DynamicSource(key, config, download_dir))
    return registry


__all__ = [
    "Source",
    "SourceRegistry",
    "build_registry",
    "ArchiveSource",
    "PirateBaySource",
    "X1337Source",
    "DynamicSource",
]
