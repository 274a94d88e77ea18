import random

from seedpick.models import Torrent
from seedpick.ranking import rank


def _torrent(name, seeders):
    return Torrent(source="A", name=name, seeders=seeders, file_ref=f"magnet:{name}")


def test_rank_orders_by_seeders_descending():
    torrents = [_torrent("a", 5), _torrent("b", 50), _torrent("c", 0)]
    assert [t.seeders for t in rank(torrents)] == [50, 5, 0]


def test_rank_keeps_relative_order_of_ties():
    torrents = [_torrent("a", 3), _torrent("b", 7), _torrent("c", 3), _torrent("d", 7)]
    assert [t.name for t in rank(torrents)] == ["b", "d", "a", "c"]


def test_rank_is_idempotent():
    rng = random.Random(7)
    torrents = [_torrent(str(i), rng.randint(0, 5)) for i in range(40)]
    ranked = rank(torrents)
    assert rank(ranked) == ranked


def test_rank_is_a_permutation():
    rng = random.Random(11)
    torrents = [_torrent(str(i), rng.randint(0, 20)) for i in range(25)]
    ranked = rank(torrents)
    assert sorted(map(id, ranked)) == sorted(map(id, torrents))


def test_rank_never_deduplicates():
    twin = _torrent("same", 4)
    copy = _torrent("same", 4)
    assert rank([twin, copy]) == [twin, copy]
    assert rank([twin, copy])[1] is copy


def test_rank_empty_and_single():
    assert rank([]) == []
    only = _torrent("only", 1)
    assert rank([only]) == [only]
