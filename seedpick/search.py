"""Search orchestration for Seedpick."""

import logging
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field

from .config.schema import DEFAULT_TIMEOUT
from .errors import AggregateFailure, NormalizationError, SourceError
from .models import SearchRequest, SearchResult, Torrent
from .normalize import normalize
from .ranking import rank
from .sources import Source, SourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class SearchUpdate:
    """Outcome of one source's lookup."""

    source: str
    status: str  # "done" or "error"
    results: list[Torrent] = field(default_factory=list)
    error: SourceError | None = None


class Aggregator:
    """Runs a search request against one source or all of them.

    Lookups run concurrently, each bounded by a shared deadline of
    ``timeout`` seconds. Results are merged in registry order whatever
    order the sources answer in.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        timeout: float = DEFAULT_TIMEOUT,
        on_update: Callable[[SearchUpdate], None] | None = None,
    ):
        self.registry = registry
        self.timeout = timeout
        self.on_update = on_update

    def run(self, request: SearchRequest) -> tuple[SearchResult, list[SourceError]]:
        """Search, returning the merged results and the per-source failures.

        A failing single source raises SourceError. With all sources, failures
        are collected, and AggregateFailure is raised only if none answered.
        """
        sources = self.registry.select(request.target)
        updates = self._fan_out(sources, request.query)

        result = SearchResult(query=request.query)
        errors = []
        for update in updates:
            if update.error is not None:
                errors.append(update.error)
            else:
                result.extend(update.results)

        if errors and not request.all_sources:
            raise errors[0]
        if errors and len(errors) == len(sources):
            raise AggregateFailure(errors)

        logger.info(
            "Found %d results for %r (%d of %d sources failed)",
            len(result),
            request.query,
            len(errors),
            len(sources),
        )
        return result, errors

    def _fan_out(self, sources: list[Source], query: str) -> list[SearchUpdate]:
        executor = ThreadPoolExecutor(max_workers=len(sources))
        try:
            futures = [executor.submit(self._lookup, s, query) for s in sources]
            deadline = time.monotonic() + self.timeout
            return [
                self._collect(source, future, deadline)
                for source, future in zip(sources, futures)
            ]
        finally:
            # Lookups past the deadline are abandoned, not waited for
            executor.shutdown(wait=False, cancel_futures=True)

    def _collect(self, source: Source, future: Future, deadline: float) -> SearchUpdate:
        try:
            results = future.result(timeout=max(deadline - time.monotonic(), 0))
        except FutureTimeoutError:
            error = SourceError(
                source.name, TimeoutError(f"no answer within {self.timeout:g}s")
            )
            update = SearchUpdate(source=source.name, status="error", error=error)
        except Exception as e:
            logger.debug("%s lookup failed", source.name, exc_info=True)
            update = SearchUpdate(
                source=source.name, status="error", error=SourceError(source.name, e)
            )
        else:
            update = SearchUpdate(source=source.name, status="done", results=results)

        if update.error is not None:
            logger.info("Source %s failed: %s", source.name, update.error)
        if self.on_update:
            self.on_update(update)
        return update

    @staticmethod
    def _lookup(source: Source, query: str) -> list[Torrent]:
        """Look up and normalize one source's results."""
        torrents = []
        for raw in source.lookup(query):
            try:
                torrents.append(normalize(raw, source.name))
            except NormalizationError as e:
                logger.warning("Skipping result: %s", e)
        return torrents


def search(
    registry: SourceRegistry,
    request: SearchRequest,
    timeout: float = DEFAULT_TIMEOUT,
    on_update: Callable[[SearchUpdate], None] | None = None,
) -> tuple[SearchResult, list[SourceError]]:
    """Run a request and rank its results."""
    result, errors = Aggregator(registry, timeout=timeout, on_update=on_update).run(
        request
    )
    result.rank()
    return result, errors


__all__ = ["Aggregator", "SearchUpdate", "rank", "search"]
