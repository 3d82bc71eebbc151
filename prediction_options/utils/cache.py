"""Caching for built option chains.

A chain is a pure function of (spot, expiration), so rebuilding it on
every read is wasted work. Uses LRU eviction when the cache is full.
"""

from typing import Callable, Dict, Optional, Tuple
from collections import OrderedDict
import logging

from ..models.chain import OptionsChain
from ..models.expiration import Expiration

logger = logging.getLogger("prediction_options.cache")


class ChainCache:
    """LRU cache of OptionsChain objects keyed by (spot, expiration)."""

    def __init__(self, maxsize: int = 64):
        """Initialize chain cache.

        Args:
            maxsize: Maximum number of cached chains
        """
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self._cache: OrderedDict[Tuple, OptionsChain] = OrderedDict()
        self.maxsize = maxsize
        self._hits = 0
        self._misses = 0

    def get_or_build(
        self,
        spot: float,
        expiration: Expiration,
        build_func: Callable[[], OptionsChain],
        extra_key: Optional[Tuple] = None,
    ) -> OptionsChain:
        """Get a cached chain or build it if not cached.

        Args:
            spot: Spot price the chain is built for
            expiration: Expiration the chain is built for
            build_func: Function that builds the chain on a miss
            extra_key: Optional extra key components (e.g. a config version)

        Returns:
            OptionsChain (from cache or freshly built)

        Example:
            >>> cache = ChainCache()
            >>> chain = cache.get_or_build(
            >>>     spot=62.0,
            >>>     expiration=exp,
            >>>     build_func=lambda: build_chain(62.0, exp),
            >>> )
        """
        # days_to_expiry is part of the key: the same date re-listed on a later day prices differently
        key = (round(spot, 2), expiration.date, expiration.days_to_expiry)
        if extra_key:
            key = key + extra_key

        if key in self._cache:
            self._hits += 1
            self._cache.move_to_end(key)
            logger.debug("Cache hit for chain spot=%.2f exp=%s", spot, expiration.date)
            return self._cache[key]

        self._misses += 1
        logger.debug("Cache miss for chain spot=%.2f exp=%s", spot, expiration.date)

        chain = build_func()

        if len(self._cache) >= self.maxsize:
            self._cache.popitem(last=False)
            logger.debug("Cache full, evicted oldest chain")

        self._cache[key] = chain
        return chain

    def clear(self):
        """Clear all cached entries."""
        self._cache.clear()
        logger.info("Chain cache cleared")

    def __len__(self) -> int:
        return len(self._cache)

    def stats(self) -> Dict[str, int | float]:
        """Get cache statistics."""
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            'size': len(self._cache),
            'maxsize': self.maxsize,
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': hit_rate,
        }

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"ChainCache(size={stats['size']}/{stats['maxsize']}, "
            f"hits={stats['hits']}, misses={stats['misses']}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
