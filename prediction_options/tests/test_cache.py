"""Tests for the chain cache."""

from dataclasses import replace

import pytest

from prediction_options.builders.chain_builder import build_chain
from prediction_options.utils.cache import ChainCache


class TestChainCache:
    """Test suite for ChainCache."""

    def test_hit_returns_same_chain(self, expiration):
        cache = ChainCache()
        calls = []

        def build():
            calls.append(1)
            return build_chain(50.0, expiration)

        first = cache.get_or_build(50.0, expiration, build)
        second = cache.get_or_build(50.0, expiration, build)

        assert first is second
        assert len(calls) == 1
        assert cache.stats()['hits'] == 1
        assert cache.stats()['misses'] == 1
        assert cache.stats()['hit_rate'] == pytest.approx(50.0)

    def test_spot_change_misses(self, expiration):
        cache = ChainCache()
        a = cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration))
        b = cache.get_or_build(51.0, expiration, lambda: build_chain(51.0, expiration))
        assert a is not b
        assert len(cache) == 2

    def test_same_date_later_day_misses(self, expiration):
        """A relisted expiry with fewer days left is a different chain."""
        cache = ChainCache()
        later = replace(expiration, days_to_expiry=expiration.days_to_expiry - 1)
        cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration))
        chain = cache.get_or_build(50.0, later, lambda: build_chain(50.0, later))
        assert chain.expiration.days_to_expiry == later.days_to_expiry
        assert cache.stats()['misses'] == 2

    def test_extra_key(self, expiration):
        cache = ChainCache()
        cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration), extra_key=("v1",))
        cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration), extra_key=("v2",))
        assert len(cache) == 2

    def test_lru_eviction(self, expiration):
        cache = ChainCache(maxsize=2)
        for spot in (40.0, 50.0):
            cache.get_or_build(spot, expiration, lambda s=spot: build_chain(s, expiration))

        # Touch 40 so 50 becomes least recently used
        cache.get_or_build(40.0, expiration, lambda: build_chain(40.0, expiration))
        cache.get_or_build(60.0, expiration, lambda: build_chain(60.0, expiration))

        assert len(cache) == 2
        misses = cache.stats()['misses']
        cache.get_or_build(40.0, expiration, lambda: build_chain(40.0, expiration))
        assert cache.stats()['misses'] == misses
        cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration))
        assert cache.stats()['misses'] == misses + 1

    def test_clear(self, expiration):
        cache = ChainCache()
        cache.get_or_build(50.0, expiration, lambda: build_chain(50.0, expiration))
        cache.clear()
        assert len(cache) == 0

    def test_repr_and_empty_stats(self):
        cache = ChainCache(maxsize=8)
        assert cache.stats()['hit_rate'] == 0.0
        assert "ChainCache(size=0/8" in repr(cache)

    def test_invalid_maxsize(self):
        with pytest.raises(ValueError):
            ChainCache(maxsize=0)
