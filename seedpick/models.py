"""Data models for Seedpick."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import ValidationError
from .ranking import rank

ALL_SOURCES = "all"


@dataclass(frozen=True)
class Torrent:
    """A single normalized search result."""

    source: str  # name of the adapter that produced it
    name: str = ""
    file_ref: str = ""  # .torrent URL or magnet URI
    descriptor_ref: str = ""  # detail page holding the real reference
    size: str = ""
    seeders: int = 0
    leechers: int = 0
    uploaded: str = ""

    def __post_init__(self):
        if not self.source:
            raise ValueError("torrent source must not be empty")

    @property
    def ref(self) -> str:
        """Reference handed to the source's download."""
        return self.descriptor_ref or self.file_ref


@dataclass(frozen=True)
class SearchRequest:
    """A validated user search."""

    query: str
    target: str = ALL_SOURCES

    def __post_init__(self):
        if not self.query or not self.query.strip():
            raise ValidationError("search query should not be empty")
        if self.query != self.query.strip():
            raise ValidationError(f"search query must be trimmed: {self.query!r}")

    @classmethod
    def create(cls, raw_query: str, target: str = ALL_SOURCES) -> "SearchRequest":
        """Build a request from raw user text, trimming surrounding spaces."""
        query = clean_query(raw_query)
        return cls(query=query, target=target or ALL_SOURCES)

    @property
    def all_sources(self) -> bool:
        return self.target.lower() == ALL_SOURCES


def clean_query(raw_query: str) -> str:
    """Trim user input, failing if nothing is left."""
    query = (raw_query or "").strip()
    if not query:
        raise ValidationError("search query should not be empty")
    return query


@dataclass
class SearchResult:
    """Torrents found for one request, in display order once ranked."""

    query: str
    torrents: list[Torrent] = field(default_factory=list)

    def extend(self, torrents: list[Torrent]) -> None:
        self.torrents.extend(torrents)

    def rank(self) -> None:
        """Reorder in place, most seeded first."""
        self.torrents[:] = rank(self.torrents)

    def __len__(self) -> int:
        return len(self.torrents)

    def __iter__(self) -> Iterator[Torrent]:
        return iter(self.torrents)

    def __getitem__(self, index: int) -> Torrent:
        return self.torrents[index]


@dataclass(frozen=True)
class LaunchOutcome:
    """What was handed to the torrent client."""

    torrent: Torrent
    location: str
    command: tuple[str, ...]
