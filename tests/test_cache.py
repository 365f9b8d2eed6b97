import pytest

from src.salon.cache import QueryCache
from src.salon.messages import resolve_language, translate


class Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_get_or_fetch_caches_until_ttl_expires() -> None:
    clock = Clock()
    cache = QueryCache(ttl_seconds=30, clock=clock)
    calls = []

    def fetch():
        calls.append(1)
        return ["salon"]

    assert cache.get_or_fetch(("salons", 1), fetch) == ["salon"]
    assert cache.get_or_fetch(("salons", 1), fetch) == ["salon"]
    assert len(calls) == 1

    clock.now = 31
    cache.get_or_fetch(("salons", 1), fetch)
    assert len(calls) == 2


def test_failed_fetch_is_not_cached() -> None:
    cache = QueryCache(ttl_seconds=30)

    def fail():
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        cache.get_or_fetch(("salons", 1), fail)
    assert len(cache) == 0


def test_expired_entries_are_released_on_write() -> None:
    clock = Clock()
    cache = QueryCache(ttl_seconds=60, clock=clock)

    for index in range(1000):
        clock.now += 120
        cache.get_or_fetch(("salons", 52.0 + index / 1e6, 13.4, 5000), lambda: ["salon"])

    assert len(cache) == 1


def test_cache_is_bounded_by_max_entries() -> None:
    cache = QueryCache(ttl_seconds=60, clock=Clock(), max_entries=3)

    for index in range(5):
        cache.set(("salons", index), index)

    assert len(cache) == 3
    assert cache.get(("salons", 0)) is None
    assert cache.get(("salons", 4)) == 4


def test_max_entries_must_be_positive() -> None:
    with pytest.raises(ValueError):
        QueryCache(max_entries=0)


def test_zero_ttl_disables_caching() -> None:
    cache = QueryCache(ttl_seconds=0)

    cache.get_or_fetch(("salons", 1), lambda: ["salon"])

    assert len(cache) == 0


def test_invalidate_by_prefix_and_all() -> None:
    cache = QueryCache(ttl_seconds=30)
    cache.set(("salons", 1), "a")
    cache.set(("extra_charge_reasons", "salon-1"), "b")
    cache.set(("extra_charge_reasons", "salon-2"), "c")

    assert cache.invalidate(("extra_charge_reasons", "salon-1")) == 1
    assert cache.get(("extra_charge_reasons", "salon-2")) == "c"
    assert cache.invalidate() == 2
    assert len(cache) == 0


def test_language_resolution_and_translation() -> None:
    assert resolve_language("de-DE,de;q=0.9,en;q=0.8") == "de"
    assert resolve_language("fr-FR, en;q=0.5") == "en"
    assert resolve_language(None) == "en"
    assert translate("address_not_found", "de") == "Adresse nicht gefunden. Bitte überprüfe deine Eingabe."
    assert translate("fetch_failed", "fr") == "Failed to fetch salons"
    assert translate("no_such_key") == "no_such_key"
