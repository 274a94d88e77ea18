"""Result ordering."""


def rank(torrents: list) -> list:
    """Order torrents by seeders, most seeded first.

    The sort is stable: torrents with equal seeders keep their relative
    order, so indices stay the same when the same results are ranked again.
    Nothing is dropped or merged.
    """
    return sorted(torrents, key=lambda t: t.seeders, reverse=True)
