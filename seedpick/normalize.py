"""Mapping of raw source results to Torrent."""

import re

from .errors import NormalizationError
from .models import Torrent


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable size."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} PB"


def parse_count(value) -> int:
    """Parse a seeder/leecher count, falling back to 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        text = re.sub(r"[,\s]", "", value)
        if text.isdigit():
            return int(text)
    return 0


def size_label(value) -> str:
    """Display label for a size given in bytes or as text."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return format_size(value) if value > 0 else ""
    return str(value).strip()


def _text(raw: dict, *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value:
            return str(value).strip()
    return ""


def normalize(raw: dict, source_name: str) -> Torrent:
    """Build a Torrent from a raw result dict.

    Optional fields fall back to empty values. A result with neither a
    fetchable reference nor a detail page can never be downloaded and
    raises NormalizationError.
    """
    file_ref = _text(raw, "file_url", "magnet_link")
    descriptor_ref = _text(raw, "detail_url")
    if not file_ref and not descriptor_ref:
        raise NormalizationError(
            f"{source_name} result {_text(raw, 'name', 'title')!r} has no download reference"
        )

    return Torrent(
        source=source_name,
        name=_text(raw, "name", "title"),
        file_ref=file_ref,
        descriptor_ref=descriptor_ref,
        size=size_label(raw.get("size")),
        seeders=parse_count(raw.get("seeders")),
        leechers=parse_count(raw.get("leechers")),
        uploaded=_text(raw, "uploaded"),
    )
