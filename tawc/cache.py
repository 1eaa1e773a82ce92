# -*- coding: utf-8 -*-
"""
Bounded word -> categories memoization with hit-count based eviction.

Eviction pass: drop every entry whose hit count is below the current
threshold (starts at 1). When a pass removes less than 30% of the entries
the threshold goes up by one for later passes, so words that keep coming
back are retained once the vocabulary settles.

The threshold never goes down and has no ceiling; with very diverse input
it can end up evicting the whole cache on every pass.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .config import DEFAULT_CACHE_SIZE

MIN_REMOVAL_RATIO = 0.3


@dataclass
class CacheEntry:
    word: str
    categories: Tuple[str, ...]
    hit_count: int = 0


class ClassificationCache:

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0 (got {max_size})")
        self.max_size = max_size
        self.threshold = 1
        self.evictions = 0
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word) -> bool:
        return word in self._entries

    @property
    def enabled(self) -> bool:
        return self.max_size > 0

    def get(self, word: str) -> Optional[Tuple[str, ...]]:
        """None on a miss; an empty tuple is a cached "no match"."""
        entry = self._entries.get(word)
        return None if entry is None else entry.categories

    def hit_count(self, word: str) -> Optional[int]:
        entry = self._entries.get(word)
        return None if entry is None else entry.hit_count

    def touch(self, word: str) -> None:
        entry = self._entries.get(word)
        if entry is not None:
            entry.hit_count += 1

    def record(self, word: str, categories: Iterable[str]) -> None:
        if not self.enabled:
            return
        if word not in self._entries:
            while len(self._entries) >= self.max_size:
                self.evict()
        self._entries[word] = CacheEntry(word, tuple(categories))

    def evict(self) -> int:
        """
        One eviction pass. Returns the number of removed entries.
        Entries with hit_count >= threshold (as of the start of the pass) survive.
        """
        size = len(self._entries)
        if size == 0:
            return 0

        doomed = [w for w, e in self._entries.items() if e.hit_count < self.threshold]
        for w in doomed:
            del self._entries[w]
        self.evictions += 1

        if len(doomed) < size * MIN_REMOVAL_RATIO:
            self.threshold += 1
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()
