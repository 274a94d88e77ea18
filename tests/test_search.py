import logging

import pytest

from seedpick.errors import AggregateFailure, SourceError, UnknownSourceError, ValidationError
from seedpick.models import SearchRequest
from seedpick.search import Aggregator, search

from .conftest import FakeSource, raw


def test_single_source_is_queried_alone(make_registry):
    archive = FakeSource("Archive", results=[raw("a", 5)], key="archive")
    tpb = FakeSource("TPB", results=[raw("b", 9)])

    result, errors = Aggregator(make_registry(archive, tpb)).run(
        SearchRequest.create("ubuntu", "archive")
    )

    assert [t.name for t in result] == ["a"]
    assert errors == []
    assert archive.queries == ["ubuntu"]
    assert tpb.queries == []


def test_single_source_failure_is_fatal(make_registry):
    archive = FakeSource("Archive", error=ConnectionError("refused"), key="archive")

    with pytest.raises(SourceError) as exc_info:
        Aggregator(make_registry(archive)).run(SearchRequest.create("ubuntu", "archive"))

    assert exc_info.value.source == "Archive"
    assert isinstance(exc_info.value.cause, ConnectionError)


def test_unknown_source_is_rejected_before_lookup(make_registry):
    archive = FakeSource("Archive", key="archive")

    with pytest.raises(UnknownSourceError, match="nowhere"):
        Aggregator(make_registry(archive)).run(SearchRequest.create("ubuntu", "nowhere"))

    assert archive.queries == []


def test_empty_registry_is_rejected(make_registry):
    with pytest.raises(ValidationError):
        Aggregator(make_registry()).run(SearchRequest.create("ubuntu"))


def test_all_sources_merge_in_configured_order(make_registry):
    # The first source answers last
    slow = FakeSource("Slow", results=[raw("s1"), raw("s2")], delay=0.2)
    fast = FakeSource("Fast", results=[raw("f1")])

    result, errors = Aggregator(make_registry(slow, fast)).run(SearchRequest.create("x"))

    assert [t.name for t in result] == ["s1", "s2", "f1"]
    assert [t.source for t in result] == ["Slow", "Slow", "Fast"]
    assert errors == []


def test_partial_failure_keeps_successful_sources(make_registry):
    good = FakeSource("Good", results=[raw("g1"), raw("g2")])
    bad = FakeSource("Bad", error=RuntimeError("boom"))
    other = FakeSource("Other", results=[raw("o1")])

    result, errors = Aggregator(make_registry(good, bad, other)).run(
        SearchRequest.create("x")
    )

    assert [t.name for t in result] == ["g1", "g2", "o1"]
    assert [e.source for e in errors] == ["Bad"]
    assert "boom" in str(errors[0])


def test_partial_failure_with_no_results_is_not_fatal(make_registry):
    empty = FakeSource("Empty")
    bad = FakeSource("Bad", error=RuntimeError("boom"))

    result, errors = Aggregator(make_registry(empty, bad)).run(SearchRequest.create("x"))

    assert len(result) == 0
    assert len(errors) == 1


def test_all_sources_failing_is_fatal(make_registry):
    one = FakeSource("One", error=RuntimeError("down"))
    two = FakeSource("Two", error=ValueError("bad json"))

    with pytest.raises(AggregateFailure) as exc_info:
        Aggregator(make_registry(one, two)).run(SearchRequest.create("x"))

    assert exc_info.value.sources == ["One", "Two"]
    assert "One" in str(exc_info.value)
    assert "Two" in str(exc_info.value)


def test_slow_source_times_out(make_registry):
    slow = FakeSource("Slow", results=[raw("late")], delay=1.0)
    fast = FakeSource("Fast", results=[raw("f1")])

    result, errors = Aggregator(make_registry(slow, fast), timeout=0.1).run(
        SearchRequest.create("x")
    )

    assert [t.name for t in result] == ["f1"]
    assert errors[0].source == "Slow"
    assert isinstance(errors[0].cause, TimeoutError)


def test_unusable_results_are_skipped(make_registry):
    source = FakeSource("Site", results=[raw("ok"), {"title": "no refs"}])

    result, errors = Aggregator(make_registry(source)).run(SearchRequest.create("x"))

    assert [t.name for t in result] == ["ok"]
    assert errors == []


def test_updates_are_reported_per_source(make_registry):
    good = FakeSource("Good", results=[raw("g1")])
    bad = FakeSource("Bad", error=RuntimeError("boom"))
    updates = []

    Aggregator(make_registry(good, bad), on_update=updates.append).run(
        SearchRequest.create("x")
    )

    assert [(u.source, u.status) for u in updates] == [("Good", "done"), ("Bad", "error")]
    assert len(updates[0].results) == 1


def test_search_ranks_results(make_registry):
    archive = FakeSource(
        "Archive", results=[raw("few", 5), raw("many", 50)], key="archive"
    )

    result, _ = search(make_registry(archive), SearchRequest.create("ubuntu", "archive"))

    assert [t.seeders for t in result] == [50, 5]


def test_source_failures_are_not_logged_as_warnings(make_registry, caplog):
    good = FakeSource("Good", results=[raw("g1")])
    bad = FakeSource("Bad", error=RuntimeError("boom"))

    with caplog.at_level(logging.INFO, logger="seedpick.search"):
        Aggregator(make_registry(good, bad)).run(SearchRequest.create("x"))

    failures = [r for r in caplog.records if "Bad" in r.getMessage()]
    assert failures
    assert all(r.levelno < logging.WARNING for r in failures)


@pytest.mark.parametrize("target", ["ALL", "All"])
def test_all_target_ignores_case(make_registry, target):
    one = FakeSource("One", results=[raw("a")])
    two = FakeSource("Two", results=[raw("b")])

    result, _ = Aggregator(make_registry(one, two)).run(SearchRequest.create("x", target))

    assert [t.name for t in result] == ["a", "b"]
