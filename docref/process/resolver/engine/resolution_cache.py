# Path: docref/process/resolver/engine/resolution_cache.py
"""
Resolution Cache

Bounded, thread-safe LRU memo of resolution results keyed by the
normalized evidence key. Entries belong to one catalog generation; a
catalog publish clears the whole cache.
"""

import threading
from collections import OrderedDict
from dataclasses import replace
from typing import Hashable, Optional

from docref.constants import DEFAULT_CACHE_MAX_ENTRIES
from docref.core.logger.ipo_logging import get_process_logger

from ..models.resolution_result import ResolvedResult


class ResolutionCache:
    """
    LRU cache of ResolvedResult values.

    Stored results and returned results are copies, so callers can
    never alter a cached ranking. Two threads missing on the same key
    both compute and insert; the results are identical.

    Example:
        cache = ResolutionCache(max_entries=512)
        cached = cache.get(evidence.cache_key(), generation)
        if cached is None:
            cache.put(evidence.cache_key(), generation, result)
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_MAX_ENTRIES):
        """
        Initialize cache.

        Args:
            max_entries: Maximum number of entries (0 stores nothing)
        """
        self.logger = get_process_logger('resolver.cache')
        self.max_entries = max(max_entries, 0)

        self._entries: OrderedDict[tuple, ResolvedResult] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._invalidations = 0

    def get(self, key: Hashable, generation: int) -> Optional[ResolvedResult]:
        """
        Look up a result.

        Args:
            key: Normalized evidence key
            generation: Catalog generation the caller resolves against

        Returns:
            A copy of the cached result with cache_hit=True, or None
        """
        with self._lock:
            entry = self._entries.get((generation, key))
            if entry is None:
                self._misses += 1
                return None
            self._entries.move_to_end((generation, key))
            self._hits += 1
        return _copy(entry, cache_hit=True)

    def put(self, key: Hashable, generation: int, result: ResolvedResult) -> None:
        """Insert a freshly computed result, evicting the oldest entry if full."""
        if self.max_entries == 0:
            return
        stored = _copy(result, cache_hit=False)
        with self._lock:
            self._entries[(generation, key)] = stored
            self._entries.move_to_end((generation, key))
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def invalidate(self) -> int:
        """
        Drop every entry.

        Returns:
            Number of entries dropped
        """
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._invalidations += 1
        self.logger.info(f"Cache invalidated: {dropped} entries dropped")
        return dropped

    def info(self) -> dict:
        """Cache statistics."""
        with self._lock:
            return {
                'size': len(self._entries),
                'max_entries': self.max_entries,
                'hits': self._hits,
                'misses': self._misses,
                'invalidations': self._invalidations,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _copy(result: ResolvedResult, cache_hit: bool) -> ResolvedResult:
    return replace(
        result,
        references=list(result.references),
        scores=[replace(c, match_reasons=list(c.match_reasons)) for c in result.scores],
        cache_hit=cache_hit,
    )


__all__ = ['ResolutionCache']
