"""1337x torrent source."""

from urllib.parse import quote_plus

from bs4 import BeautifulSoup

from .base import MAX_RESULTS, Source, parse_size

BASE_URL = "https://1337x.to"


class X1337Source(Source):
    """1337x.to torrent source.

    Search pages list detail pages only, the magnet link lives on the
    detail page and is scraped on download.
    """

    name = "1337x"
    key = "1337x"

    def lookup(self, query: str) -> list[dict]:
        """Search 1337x.to via scraping."""
        results = []
        resp = self._get(f"{BASE_URL}/search/{quote_plus(query)}/1/")
        resp.raise_for_status()
        soup = BeautifulSoup(resp.text, "html.parser")

        for row in soup.select("tbody tr")[:MAX_RESULTS]:
            cols = row.find_all("td")
            if len(cols) < 5:
                continue

            title_link = cols[0].select_one("a:nth-of-type(2)")
            if not title_link or not title_link.get("href"):
                continue

            size_text = cols[4].text.strip().split()[0:2]
            results.append(
                {
                    "title": title_link.text.strip(),
                    "seeders": cols[1].text.strip(),
                    "leechers": cols[2].text.strip(),
                    "size": parse_size(" ".join(size_text)) if size_text else 0,
                    "uploaded": cols[3].text.strip(),
                    "detail_url": BASE_URL + title_link["href"],
                }
            )
        return results

    def _download_from_page(self, url: str) -> str:
        # Detail pages link .torrent mirrors that are mostly dead, prefer the magnet
        resp = self._get(url)
        resp.raise_for_status()
        soup = BeautifulSoup(resp.text, "html.parser")

        magnet_link = soup.select_one(self.magnet_selector)
        if magnet_link and magnet_link.get("href"):
            return self.download(magnet_link["href"])

        raise LookupError(f"no magnet link found on {url}")
