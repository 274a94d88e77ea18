"""Interactive torrent selection."""

import logging
import re
import sys
from typing import TextIO

from .errors import InputExhausted, InputParseError, SelectionCancelled

logger = logging.getLogger(__name__)

QUIT_WORDS = {"q", "quit"}
INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


class Selector:
    """Prompts until the user enters a valid result index.

    Bad input never ends the loop: only a closed input stream (or
    repeated read failures) does, raising InputExhausted.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        max_read_failures: int = 3,
    ):
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout
        self.max_read_failures = max_read_failures

    def choose(self, count: int) -> int:
        """Return an index in ``range(count)`` read from the user."""
        if count <= 0:
            raise ValueError("nothing to select from")

        self._say("Please select a torrent to download (enter its index, q to quit): ")
        failures = 0
        while True:
            try:
                line = self.stdin.readline()
            except (OSError, UnicodeDecodeError) as e:
                failures += 1
                logger.debug("Reading selection failed: %s", e)
                if failures > self.max_read_failures:
                    raise InputExhausted(
                        f"could not read your selection after {failures} attempts"
                    ) from e
                self._say("Could not read your input, please try again (should be an integer):")
                continue

            if not line:
                raise InputExhausted("input closed before a torrent was selected")
            failures = 0

            try:
                return self.parse(line, count)
            except InputParseError as e:
                self._say(str(e))

    @staticmethod
    def parse(line: str, count: int) -> int:
        """Parse one line into an index, raising InputParseError if unusable."""
        text = line.strip()
        if text.lower() in QUIT_WORDS:
            raise SelectionCancelled("selection cancelled")

        # int() also takes underscores and non-ASCII digits
        if not INDEX_PATTERN.fullmatch(text):
            raise InputParseError("Please enter an integer:")
        index = int(text)

        if not 0 <= index < count:
            raise InputParseError(f"Please enter an integer between 0 and {count - 1}:")
        return index

    def _say(self, message: str) -> None:
        print(message, file=self.stdout, flush=True)
