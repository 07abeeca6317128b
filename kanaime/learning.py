"""
Usage learning for kanaime.

Counts how often each (reading, candidate) pair is committed and uses
those counts to reorder suggestions.
"""

import threading
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

# Separator of the flat "reading|candidate" keys used by to_dict()
KEY_SEPARATOR = '|'


class LearningStore:
    """
    Commit counter keyed by (reading, candidate).
    
    Counts only ever grow by one per commit. Increments are serialized
    with a lock so concurrent commits are never lost; reads are not
    locked and may see a slightly stale value.
    """
    
    def __init__(self, counts: Optional[Mapping[Tuple[str, str], int]] = None):
        self._counts: Dict[Tuple[str, str], int] = {}
        self._lock = threading.Lock()
        for (reading, candidate), value in (counts or {}).items():
            if value > 0:
                self._counts[(reading, candidate)] = int(value)
    
    def __len__(self) -> int:
        return len(self._counts)
    
    def __repr__(self) -> str:
        return f'LearningStore(pairs={len(self._counts)})'
    
    def increment(self, reading: str, candidate: str) -> int:
        """
        Add one to the counter for a pair, creating it if absent.
        
        Returns:
            The new count.
        """
        key = (reading, candidate)
        with self._lock:
            value = self._counts.get(key, 0) + 1
            self._counts[key] = value
        return value
    
    def count(self, reading: str, candidate: str) -> int:
        """Return the count for a pair, 0 if it was never committed."""
        return self._counts.get((reading, candidate), 0)
    
    def items(self) -> Iterator[Tuple[Tuple[str, str], int]]:
        """Iterate over a snapshot of ((reading, candidate), count) pairs."""
        return iter(self.snapshot().items())
    
    def snapshot(self) -> Dict[Tuple[str, str], int]:
        """Return a copy of all counters."""
        with self._lock:
            return dict(self._counts)
    
    def to_dict(self) -> Dict[str, int]:
        """Serialize to a flat mapping keyed by ``reading|candidate``."""
        return {
            f'{reading}{KEY_SEPARATOR}{candidate}': value
            for (reading, candidate), value in self.snapshot().items()
        }
    
    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> 'LearningStore':
        """
        Restore a store serialized with to_dict().
        
        Keys without a separator are ignored. The reading is everything
        before the first separator.
        """
        counts = {}
        for key, value in data.items():
            reading, sep, candidate = key.partition(KEY_SEPARATOR)
            if sep and reading and candidate:
                counts[(reading, candidate)] = value
        return cls(counts)


def rerank(reading: str, candidates: Iterable[str], store: LearningStore) -> List[str]:
    """
    Order candidates by descending learned count.
    
    The sort is stable, so candidates with equal counts (including the
    never-committed ones) keep their dictionary order. The output is
    always a permutation of the input.
    """
    return sorted(candidates, key=lambda c: -store.count(reading, c))
