"""
Tests for the in-memory response cache.
"""

from gemstone_gateway.entities import CandidateItem
from gemstone_gateway.repositories import InMemoryResponseCache
from gemstone_gateway.services import make_cache_key

RUBY = CandidateItem(id="royal-ruby", display_name="Royal Ruby", category="Ruby")


def test_miss(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)
    assert cache.get("nothing|0") is None


def test_put_and_get(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)
    cache.put("ruby|1", "Perfect!", [RUBY])

    entry = cache.get("ruby|1")
    assert entry is not None
    assert entry.response_text == "Perfect!"
    assert entry.candidate_items == (RUBY,)
    assert entry.stored_at == clock.now


def test_entry_expires_at_ttl(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)
    cache.put("k", "v", [])

    clock.advance(599)
    assert cache.get("k") is not None

    clock.advance(1)
    assert cache.get("k") is None
    assert cache.count_all() == 0


def test_put_overwrites(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)
    cache.put("k", "first", [])
    cache.put("k", "second", [])
    assert cache.get("k").response_text == "second"
    assert cache.count_all() == 1


def test_overflow_sweeps_expired_entries(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=2, clock=clock)
    cache.put("old", "v", [])
    clock.advance(601)
    cache.put("a", "v", [])
    cache.put("b", "v", [])

    assert cache.count_all() == 2
    assert cache.get("a") is not None
    assert cache.get("b") is not None


def test_overflow_of_fresh_entries_is_kept(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=2, clock=clock)
    for key in ("a", "b", "c"):
        cache.put(key, "v", [])
    assert cache.count_all() == 3


def test_clear_all(clock):
    cache = InMemoryResponseCache(ttl=600, max_entries=100, clock=clock)
    cache.put("a", "v", [])
    cache.put("b", "v", [])
    assert cache.clear_all() == 2
    assert cache.count_all() == 0


def test_cache_key_normalizes_text_and_includes_count():
    assert make_cache_key("  Budget 20000 Emerald ", 2) == "budget 20000 emerald|2"
    assert make_cache_key("ruby", 0) != make_cache_key("ruby", 1)
