"""Internet Archive torrent source."""

import logging

from .base import MAX_RESULTS, Source, is_magnet, is_torrent_url

logger = logging.getLogger(__name__)

BASE_URL = "https://archive.org"


class ArchiveSource(Source):
    """archive.org torrent source via the advanced search API.

    Search results only point to an item's details page; every item
    publishes an ``<identifier>_archive.torrent`` file that is fetched
    on download.
    """

    name = "Archive"
    key = "archive"
    torrent_selector = "a[href$='_archive.torrent']"

    def lookup(self, query: str) -> list[dict]:
        """Search archive.org items."""
        resp = self._get(
            f"{BASE_URL}/advancedsearch.php",
            params={
                "q": query,
                "fl[]": ["identifier", "title", "item_size", "publicdate"],
                "rows": MAX_RESULTS,
                "page": 1,
                "output": "json",
            },
        )
        resp.raise_for_status()
        docs = resp.json().get("response", {}).get("docs", [])

        results = []
        for doc in docs[:MAX_RESULTS]:
            identifier = doc.get("identifier")
            if not identifier:
                continue
            title = doc.get("title") or identifier
            if isinstance(title, list):
                title = title[0]
            results.append(
                {
                    "title": title,
                    "size": doc.get("item_size", 0),
                    "uploaded": str(doc.get("publicdate", ""))[:10],
                    "detail_url": f"{BASE_URL}/details/{identifier}",
                }
            )
        logger.debug("Archive returned %d items for %r", len(results), query)
        return results

    def download(self, ref: str) -> str:
        """Fetch the item's torrent file, from its page or the standard URL."""
        if is_magnet(ref) or is_torrent_url(ref):
            return super().download(ref)

        try:
            return self._download_from_page(ref)
        except LookupError:
            identifier = ref.rstrip("/").rsplit("/", 1)[-1]
            logger.debug("No torrent link on %s, using standard location", ref)
            return self._save_torrent(
                f"{BASE_URL}/download/{identifier}/{identifier}_archive.torrent"
            )
