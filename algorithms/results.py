"""
results.py — Runner Return Values
=================================
What each runner hands back through StopIteration.value once it finishes.
"Not found" and "no path" are ordinary results, never exceptions.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class SortResult:
    values: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchResult:
    found: bool          = False
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PathResult:
    found:   bool            = False
    path:    List[int]       = field(default_factory=list)
    cost:    Optional[float] = None     # summed edge weights; None when no path
    visited: List[int]       = field(default_factory=list)   # visit order

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CycleResult:
    has_cycle:     bool          = False
    meeting_index: Optional[int] = None
    cycle_start:   Optional[int] = None
    iterations:    int           = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ListSearchResult:
    found: bool          = False
    index: Optional[int] = None
    value: int           = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HashResult:
    operation: str           = ""
    key:       str           = ""
    bucket:    int           = 0
    found:     bool          = False
    value:     Optional[str] = None
    updated:   bool          = False   # insert replaced an existing key
    collision: bool          = False   # insert landed in a non-empty chain

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
