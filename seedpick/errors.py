"""Error types for Seedpick.

Every error carries the exit status the CLI terminates with.
"""


class SeedpickError(Exception):
    """Base class for all Seedpick errors."""

    exit_code = 1


class ValidationError(SeedpickError):
    """User input or configuration rejected before any search."""

    exit_code = 2


class UnknownSourceError(ValidationError):
    """A source key that is not in the registry."""

    def __init__(self, key: str, known: list[str]):
        self.key = key
        self.known = known
        choices = ", ".join(known) or "none"
        super().__init__(f"unknown source '{key}' (available: {choices}, all)")


class ConfigError(ValidationError):
    """The configuration file could not be used."""


class NormalizationError(SeedpickError):
    """A raw result that can never be downloaded."""


class SourceError(SeedpickError):
    """One source failed to answer a lookup."""

    exit_code = 3

    def __init__(self, source: str, cause: BaseException):
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {describe(cause)}")


class AggregateFailure(SeedpickError):
    """Every configured source failed."""

    exit_code = 3

    def __init__(self, errors: list[SourceError]):
        self.errors = errors
        details = "; ".join(str(e) for e in errors)
        super().__init__(f"all sources failed ({details})")

    @property
    def sources(self) -> list[str]:
        return [e.source for e in self.errors]


class InputParseError(SeedpickError):
    """A selection line that is not a usable index."""


class InputExhausted(SeedpickError):
    """Input closed before a valid selection was made."""

    exit_code = 4


class SelectionCancelled(SeedpickError):
    """The user quit at the selection prompt."""

    exit_code = 0


class DownloadError(SeedpickError):
    """The owning source could not fetch the selected torrent."""

    exit_code = 5

    def __init__(self, source: str, cause: BaseException):
        self.source = source
        self.cause = cause
        super().__init__(f"could not download torrent from {source}: {describe(cause)}")


class LaunchError(SeedpickError):
    """The torrent client failed after a successful download."""

    exit_code = 6

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(
            f"could not open your torrent in client ({describe(cause)}). "
            f"The torrent was downloaded successfully, open it manually: {path}"
        )


def describe(exc: BaseException) -> str:
    """Short human-readable description of an exception."""
    if isinstance(exc, TimeoutError) and not str(exc):
        return "timed out"
    return str(exc) or type(exc).__name__
