"""Downloading the selected torrent and opening it in a client."""

import logging
import platform
import subprocess
import sys
from collections.abc import Sequence
from typing import TextIO

from .config.schema import DEFAULT_CLIENT
from .errors import DownloadError, LaunchError
from .models import LaunchOutcome, Torrent
from .sources import SourceRegistry

logger = logging.getLogger(__name__)

SYSTEM_CLIENT = "system"


def client_command(client: Sequence[str], location: str) -> list[str]:
    """Command line that opens ``location`` with the configured client."""
    if list(client) != [SYSTEM_CLIENT]:
        return [*client, location]

    system = platform.system()
    if system == "Darwin":
        return ["open", location]
    if system == "Linux":
        return ["xdg-open", location]
    if system == "Windows":
        return ["cmd", "/c", "start", "", location]
    raise OSError(f"no system torrent handler known for {system}")


def open_in_client(client: Sequence[str], location: str) -> list[str]:
    """Run the client on ``location``, raising on spawn failure or non-zero exit."""
    command = client_command(client, location)
    logger.info("Running %s", command)
    subprocess.run(command, check=True, capture_output=True)
    return command


class Launcher:
    """Fetches a torrent through its source, then hands it to the client."""

    def __init__(
        self,
        registry: SourceRegistry,
        client: Sequence[str] = DEFAULT_CLIENT,
        stdout: TextIO | None = None,
    ):
        self.registry = registry
        self.client = tuple(client)
        self.stdout = sys.stdout if stdout is None else stdout

    def execute(self, torrent: Torrent) -> LaunchOutcome:
        """Download ``torrent`` and open it.

        Raises DownloadError before any launch attempt, and LaunchError,
        carrying the downloaded location, if only the client failed.
        """
        location = self.download(torrent)
        print(f"Here is your torrent: {location}", file=self.stdout, flush=True)

        print("Opening torrent in client...", file=self.stdout, flush=True)
        try:
            command = open_in_client(self.client, location)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            logger.debug("Client stderr: %s", stderr)
            raise LaunchError(location, e) from e
        except OSError as e:
            raise LaunchError(location, e) from e

        return LaunchOutcome(torrent=torrent, location=location, command=tuple(command))

    def download(self, torrent: Torrent) -> str:
        """Fetch the torrent through the source that found it."""
        source = self.registry.get(torrent.source)
        if source is None:
            raise DownloadError(torrent.source, LookupError("source is not configured"))

        logger.info("Downloading %r from %s", torrent.name, torrent.source)
        try:
            location = source.download(torrent.ref)
        except Exception as e:
            logger.debug("%s download failed", torrent.source, exc_info=True)
            raise DownloadError(torrent.source, e) from e

        if not location:
            raise DownloadError(torrent.source, LookupError("no torrent returned"))
        return location
