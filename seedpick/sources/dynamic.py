"""Dynamic source that uses configuration to scrape any site."""

import re
from pathlib import Path
from urllib.parse import parse_qsl, quote_plus, urljoin

from bs4 import BeautifulSoup

from ..config import SiteConfig
from .base import MAX_RESULTS, Source, is_magnet, parse_size


class DynamicSource(Source):
    """A torrent source that uses SiteConfig to scrape any site."""

    def __init__(self, key: str, config: SiteConfig, download_dir: Path | None = None):
        super().__init__(download_dir)
        self.key = key
        self.config = config
        self.name = config.name
        self.magnet_selector = config.selectors.magnet
        self.torrent_selector = config.selectors.torrent

    def lookup(self, query: str) -> list[dict]:
        """Search the configured site."""
        url = self.config.search.url_template.format(
            base_url=self.config.base_url,
            query=quote_plus(query),
        )

        if self.config.search.method == "POST":
            # The template's query string becomes the form body
            action, _, params = url.partition("?")
            resp = self._post(action, data=parse_qsl(params, keep_blank_values=True))
        else:
            resp = self._get(url)
        resp.raise_for_status()
        soup = BeautifulSoup(resp.text, "html.parser")

        results = []
        for item in soup.select(self.config.selectors.result_item)[:MAX_RESULTS]:
            result = self._parse_result(item)
            if result:
                results.append(result)
        return results

    def _parse_result(self, item) -> dict | None:
        """Parse a single result item into a raw result."""
        selectors = self.config.selectors

        title_elem = item.select_one(selectors.title)
        if not title_elem:
            return None

        title = title_elem.get_text(strip=True)
        if not title:
            return None

        # Get link (either from title_link selector or from title element)
        link_elem = (
            item.select_one(selectors.title_link)
            if selectors.title_link
            else title_elem
        )
        detail_url = None
        if link_elem and link_elem.name == "a":
            href = link_elem.get("href", "")
            if href:
                detail_url = urljoin(self.config.base_url, href)
        elif link_elem:
            # Maybe it's inside an <a> tag
            a_tag = link_elem.find_parent("a") or link_elem.find("a")
            if a_tag and a_tag.get("href"):
                detail_url = urljoin(self.config.base_url, a_tag["href"])

        result = {
            "title": title,
            "detail_url": detail_url,
            "size": self._size(item),
            "seeders": self._text(item, selectors.seeders),
            "leechers": self._text(item, selectors.leechers),
            "uploaded": self._text(item, selectors.uploaded),
        }

        # Results pages sometimes carry the magnet or .torrent link directly
        magnet_elem = item.select_one(selectors.magnet)
        if magnet_elem and is_magnet(magnet_elem.get("href", "")):
            result["magnet_link"] = magnet_elem["href"]
        else:
            torrent_elem = item.select_one(selectors.torrent)
            if torrent_elem and torrent_elem.get("href"):
                result["file_url"] = urljoin(self.config.base_url, torrent_elem["href"])

        return result

    def _size(self, item) -> int:
        if self.config.selectors.size:
            text = self._text(item, self.config.selectors.size)
            return parse_size(text) if text else 0

        match = re.search(self.config.patterns.size_regex, item.get_text(" "), re.IGNORECASE)
        return parse_size(match.group(1)) if match else 0

    @staticmethod
    def _text(item, selector: str | None) -> str:
        if not selector:
            return ""
        elem = item.select_one(selector)
        return elem.get_text(strip=True) if elem else ""
