"""
hash_table.py — Separate-Chaining Hash Table
=============================================
Fixed number of buckets (a prime, 7 by default), each an ordered chain of
HashEntry objects.  The table itself does no animation: the hashing
runners in `algorithms.hashing` walk it step by step and apply the final
mutation through `append` / `update` / `remove`.
"""

import itertools
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

TABLE_SIZE = 7


def _code_units(ch: str) -> List[int]:
    """UTF-16 code units of one character: two for anything outside the BMP."""
    data = ch.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def hash_steps(key: str, size: int = TABLE_SIZE) -> List[Tuple[str, int]]:
    """
    Incremental hash trace: [(char, hash_after_unit), …].

        hash = (hash * 31 + unit) % size     for each UTF-16 code unit

    A character outside the BMP (emoji) contributes two entries, one per
    surrogate, both labelled with the character.
    """
    trace = []
    h = 0
    for ch in key:
        for unit in _code_units(ch):
            h = (h * 31 + unit) % size
            trace.append((ch, h))
    return trace


def hash_key(key: str, size: int = TABLE_SIZE) -> int:
    trace = hash_steps(key, size)
    return trace[-1][1] if trace else 0


class EntryState(Enum):
    DEFAULT = "default"
    PROBING = "probing"    # key being compared against the search key
    FOUND   = "found"
    NEW     = "new"        # just appended
    DELETED = "deleted"    # highlighted right before removal


class HashEntry:
    __slots__ = ("id", "key", "value", "state")

    def __init__(self, entry_id: int, key: str, value: str):
        self.id:    int        = entry_id
        self.key:   str        = key
        self.value: str        = value
        self.state: EntryState = EntryState.DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "key": self.key, "value": self.value, "state": self.state.value}


class Bucket:
    __slots__ = ("index", "entries", "highlighted")

    def __init__(self, index: int):
        self.index:       int             = index
        self.entries:     List[HashEntry] = []
        self.highlighted: bool            = False

    def find(self, key: str) -> Optional[int]:
        for i, e in enumerate(self.entries):
            if e.key == key:
                return i
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":       self.index,
            "entries":     [e.to_dict() for e in self.entries],
            "highlighted": self.highlighted,
        }


class HashTable:
    def __init__(self, size: int = TABLE_SIZE):
        if size < 1:
            raise ValueError("Table size must be positive")
        self.size = size
        self.buckets: List[Bucket] = [Bucket(i) for i in range(size)]
        self._ids = itertools.count()

    # ------------------------------------------------------------------
    # Terminal mutations (called by the runners after the animation)
    # ------------------------------------------------------------------
    def append(self, bucket: int, key: str, value: str) -> HashEntry:
        entry = HashEntry(next(self._ids), key, value)
        self.buckets[bucket].entries.append(entry)
        return entry

    def update(self, bucket: int, pos: int, value: str) -> HashEntry:
        entry = self.buckets[bucket].entries[pos]
        entry.value = value
        return entry

    def remove(self, bucket: int, pos: int) -> HashEntry:
        return self.buckets[bucket].entries.pop(pos)

    # ------------------------------------------------------------------
    # Plain (non-animated) access
    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        bucket = self.buckets[hash_key(key, self.size)]
        pos = bucket.find(key)
        return None if pos is None else bucket.entries[pos].value

    def __len__(self) -> int:
        return sum(len(b.entries) for b in self.buckets)

    @property
    def collisions(self) -> int:
        """Buckets holding more than one entry."""
        return sum(1 for b in self.buckets if len(b.entries) > 1)

    @property
    def load_factor(self) -> float:
        return round(len(self) / self.size, 2)

    def clear(self) -> None:
        for b in self.buckets:
            b.entries.clear()

    def reset_states(self) -> None:
        for b in self.buckets:
            b.highlighted = False
            for e in b.entries:
                e.state = EntryState.DEFAULT

    def snapshot(self) -> Dict[str, Any]:
        return {
            "buckets":     [b.to_dict() for b in self.buckets],
            "size":        self.size,
            "entries":     len(self),
            "load_factor": self.load_factor,
            "collisions":  self.collisions,
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot()
