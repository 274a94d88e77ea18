"""Seedpick: torrent search aggregation and selection."""

from .models import ALL_SOURCES, LaunchOutcome, SearchRequest, SearchResult, Torrent
from .search import Aggregator

__all__ = [
    "ALL_SOURCES",
    "Aggregator",
    "LaunchOutcome",
    "SearchRequest",
    "SearchResult",
    "Torrent",
]
