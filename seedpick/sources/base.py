"""Base class for torrent sources."""

import logging
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote, unquote, urljoin, urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
}
TIMEOUT = 15
MAX_RESULTS = 30

TRACKERS = [
    "udp://tracker.opentrackr.org:1337/announce",
    "udp://open.stealth.si:80/announce",
    "udp://tracker.torrent.eu.org:451/announce",
    "udp://tracker.bittor.pw:1337/announce",
    "udp://public.popcorn-tracker.org:6969/announce",
    "udp://tracker.dler.org:6969/announce",
    "udp://exodus.desync.com:6969/announce",
    "udp://open.demonii.com:1337/announce",
]


def add_trackers(magnet: str) -> str:
    """Add public trackers to a magnet link if missing."""
    if not magnet or "&tr=" in magnet:
        return magnet
    tracker_params = "".join(f"&tr={quote(t, safe='')}" for t in TRACKERS)
    return magnet + tracker_params


def is_magnet(ref: str) -> bool:
    return ref.startswith("magnet:")


def is_torrent_url(ref: str) -> bool:
    return urlparse(ref).path.lower().endswith(".torrent")


def parse_size(size_str: str) -> int:
    """Parse size string like '1.5 GB' to bytes."""
    size_str = size_str.upper().strip()
    match = re.match(r"([\d.]+)\s*(B|KB|MB|GB|TB|KIB|MIB|GIB|TIB)", size_str)
    if not match:
        return 0
    value = float(match.group(1))
    unit = match.group(2)
    multipliers = {
        "B": 1,
        "KB": 1024,
        "KIB": 1024,
        "MB": 1024**2,
        "MIB": 1024**2,
        "GB": 1024**3,
        "GIB": 1024**3,
        "TB": 1024**4,
        "TIB": 1024**4,
    }
    return int(value * multipliers.get(unit, 1))


def torrent_filename(url: str) -> str:
    """Local file name for a .torrent URL."""
    name = unquote(Path(urlparse(url).path).name)
    name = re.sub(r"[^\w.\-]+", "_", name).strip("._")
    if not name:
        name = "download"
    if not name.lower().endswith(".torrent"):
        name += ".torrent"
    return name


class Source(ABC):
    """Abstract base class for torrent sources.

    A source answers ``lookup`` with raw result dicts and turns a reference
    from one of those results into something a torrent client can open:
    a local ``.torrent`` path or a magnet link. Failures propagate as
    exceptions.
    """

    name: str = "Unknown"
    key: str = "unknown"

    # Selectors used to find the real torrent on a detail page
    magnet_selector = "a[href^='magnet:']"
    torrent_selector = "a[href$='.torrent']"

    def __init__(self, download_dir: Path | None = None):
        self.download_dir = Path(download_dir or tempfile.gettempdir())

    @abstractmethod
    def lookup(self, query: str) -> list[dict]:
        """Search for torrents matching the query."""
        ...

    def download(self, ref: str) -> str:
        """Fetch the torrent behind ``ref`` and return what to open."""
        if is_magnet(ref):
            return add_trackers(ref)
        if is_torrent_url(ref):
            return self._save_torrent(ref)
        return self._download_from_page(ref)

    def _download_from_page(self, url: str) -> str:
        """Follow a detail page to its torrent file or magnet link."""
        resp = self._get(url)
        resp.raise_for_status()
        soup = BeautifulSoup(resp.text, "html.parser")

        torrent_link = soup.select_one(self.torrent_selector)
        if torrent_link and torrent_link.get("href"):
            return self._save_torrent(urljoin(url, torrent_link["href"]))

        magnet_link = soup.select_one(self.magnet_selector)
        if magnet_link and is_magnet(magnet_link.get("href", "")):
            return add_trackers(magnet_link["href"])

        raise LookupError(f"no torrent link found on {url}")

    def _save_torrent(self, url: str) -> str:
        """Download a .torrent file into the download directory."""
        resp = self._get(url)
        resp.raise_for_status()

        self.download_dir.mkdir(parents=True, exist_ok=True)
        path = self.download_dir / torrent_filename(url)
        path.write_bytes(resp.content)
        logger.debug("Saved %s to %s", url, path)
        return str(path)

    def _get(self, url: str, **kwargs) -> requests.Response:
        """Make a GET request with standard headers."""
        logger.debug("%s GET %s", self.name, url)
        return requests.get(url, headers=HEADERS, timeout=TIMEOUT, **kwargs)

    def _post(self, url: str, **kwargs) -> requests.Response:
        """Make a POST request with standard headers."""
        logger.debug("%s POST %s", self.name, url)
        return requests.post(url, headers=HEADERS, timeout=TIMEOUT, **kwargs)
