"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every runner the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, family, fn, pseudocode, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine, the pages and the
analysis table all consume it, so adding an algorithm is: write the
generator, add one entry here.

Every `fn` has the same shape:

    fn(tracer, dataset, **params) -> Generator[Step, None, Result]
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional, Tuple

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms import sorting as _sorting
from algorithms import searching as _searching
from algorithms import hashing as _hashing
from algorithms import cycle_detection as _lists
from algorithms.bfs      import bfs      as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs      import dfs      as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc


FAMILIES: Tuple[str, ...] = ("sorting", "searching", "graph", "linked-list", "hash-table")

# counters each family's Tracer starts with (all at 0)
FAMILY_COUNTERS: Dict[str, Tuple[str, ...]] = {
    "sorting":     ("comparisons", "swaps"),
    "searching":   ("comparisons",),
    "graph":       ("visits", "relaxations"),
    "linked-list": ("iterations", "comparisons"),
    "hash-table":  ("probes",),
}


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble"
    label:            str                    # human label, e.g. "Bubble Sort"
    family:           str                    # page it runs on, one of FAMILIES
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    params:           List[str] = field(default_factory=list)   # required keyword params
    tags:             List[str] = field(default_factory=list)
    complexity_best:  str      = ""
    complexity_avg:   str      = ""
    complexity_worst: str      = ""
    complexity_space: str      = ""
    stable:           Optional[bool] = None  # sorts only
    in_place:         Optional[bool] = None  # sorts only
    requires_sorted:  bool     = False       # searches that need ascending input
    description:      str      = ""          # one-liner for the UI card

    @property
    def counters(self) -> Tuple[str, ...]:
        return FAMILY_COUNTERS[self.family]

    def to_dict(self) -> Dict:
        return {
            "key":         self.key,
            "label":       self.label,
            "family":      self.family,
            "pseudocode":  list(self.pseudocode),
            "params":      list(self.params),
            "tags":        list(self.tags),
            "complexity":  {
                "best":  self.complexity_best,
                "avg":   self.complexity_avg,
                "worst": self.complexity_worst,
                "space": self.complexity_space,
            },
            "stable":          self.stable,
            "in_place":        self.in_place,
            "requires_sorted": self.requires_sorted,
            "description":     self.description,
        }


def _sort(key, label, fn, best, avg, worst, space, stable, in_place, description=""):
    return AlgoInfo(
        key=key, label=label, family="sorting", fn=fn, pseudocode=_sorting.PSEUDOCODE[key],
        tags=["sorting"] + (["stable"] if stable else []),
        complexity_best=best, complexity_avg=avg, complexity_worst=worst, complexity_space=space,
        stable=stable, in_place=in_place, description=description,
    )


def _search(key, label, fn, best, avg, worst, description, requires_sorted=True):
    return AlgoInfo(
        key=key, label=label, family="searching", fn=fn, pseudocode=_searching.PSEUDOCODE[key],
        params=["target"], tags=["searching"],
        complexity_best=best, complexity_avg=avg, complexity_worst=worst, complexity_space="O(1)",
        requires_sorted=requires_sorted, description=description,
    )


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting --
    "bubble":    _sort("bubble", "Bubble Sort", _sorting.bubble_sort,
                       "O(n)", "O(n²)", "O(n²)", "O(1)", True, True,
                       "Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end."),
    "selection": _sort("selection", "Selection Sort", _sorting.selection_sort,
                       "O(n²)", "O(n²)", "O(n²)", "O(1)", False, True,
                       "Selects the minimum of the unsorted part and moves it to the front."),
    "insertion": _sort("insertion", "Insertion Sort", _sorting.insertion_sort,
                       "O(n)", "O(n²)", "O(n²)", "O(1)", True, True,
                       "Grows a sorted prefix by sinking each new key into place."),
    "merge":     _sort("merge", "Merge Sort", _sorting.merge_sort,
                       "O(n log n)", "O(n log n)", "O(n log n)", "O(n)", True, False,
                       "Splits in halves, sorts each, merges the sorted halves."),
    "quick":     _sort("quick", "Quick Sort", _sorting.quick_sort,
                       "O(n log n)", "O(n log n)", "O(n²)", "O(log n)", False, True,
                       "Partitions around a pivot, then sorts both sides."),
    "heap":      _sort("heap", "Heap Sort", _sorting.heap_sort,
                       "O(n log n)", "O(n log n)", "O(n log n)", "O(1)", False, True,
                       "Builds a max-heap, then repeatedly moves the root to the end."),
    "counting":  _sort("counting", "Counting Sort", _sorting.counting_sort,
                       "O(n + k)", "O(n + k)", "O(n + k)", "O(k)", True, False,
                       "Counts occurrences of each value and places elements by prefix sums."),
    "radix":     _sort("radix", "Radix Sort", _sorting.radix_sort,
                       "O(nk)", "O(nk)", "O(nk)", "O(n + k)", True, False,
                       "Stable counting sort on each decimal digit, least significant first."),
    "shell":     _sort("shell", "Shell Sort", _sorting.shell_sort,
                       "O(n log n)", "O(n^1.3)", "O(n²)", "O(1)", False, True,
                       "Insertion sort over shrinking gaps."),

    # -- searching --
    "linear":        _search("linear", "Linear Search", _searching.linear_search,
                             "O(1)", "O(n)", "O(n)",
                             "Sequentially checks each element until found or end reached",
                             requires_sorted=False),
    "binary":        _search("binary", "Binary Search", _searching.binary_search,
                             "O(1)", "O(log n)", "O(log n)",
                             "Divides search space in half each iteration"),
    "jump":          _search("jump", "Jump Search", _searching.jump_search,
                             "O(1)", "O(√n)", "O(√n)",
                             "Jumps ahead by √n steps, then linear search in block"),
    "interpolation": _search("interpolation", "Interpolation Search", _searching.interpolation_search,
                             "O(1)", "O(log log n)", "O(n)",
                             "Estimates position based on value distribution"),
    "exponential":   _search("exponential", "Exponential Search", _searching.exponential_search,
                             "O(1)", "O(log n)", "O(log n)",
                             "Finds range by doubling, then binary search"),
    "ternary":       _search("ternary", "Ternary Search", _searching.ternary_search,
                             "O(1)", "O(log₃ n)", "O(log₃ n)",
                             "Divides array into 3 parts each iteration"),

    # -- graph --
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", family="graph", fn=_bfs, pseudocode=_bfs_pc,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_best="O(V + E)", complexity_avg="O(V + E)", complexity_worst="O(V + E)",
        complexity_space="O(V)",
        description="Explores neighbors level by level using a queue. Shortest path by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", family="graph", fn=_dfs, pseudocode=_dfs_pc,
        tags=["unweighted", "traversal"],
        complexity_best="O(V + E)", complexity_avg="O(V + E)", complexity_worst="O(V + E)",
        complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family="graph", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"],
        complexity_best="O((V + E) log V)", complexity_avg="O((V + E) log V)", complexity_worst="O(V²)",
        complexity_space="O(V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    # -- linked list --
    "floyd": AlgoInfo(
        key="floyd", label="Floyd Cycle Detection", family="linked-list",
        fn=_lists.floyd_cycle, pseudocode=_lists.PSEUDOCODE["floyd"],
        tags=["two-pointer", "cycle"],
        complexity_best="O(1)", complexity_avg="O(n)", complexity_worst="O(n)", complexity_space="O(1)",
        description="Slow and fast pointers meet inside a cycle; restarting one finds its entry.",
    ),

    "list_search": AlgoInfo(
        key="list_search", label="Linked List Search", family="linked-list",
        fn=_lists.list_search, pseudocode=_lists.PSEUDOCODE["list_search"],
        params=["target"], tags=["traversal"],
        complexity_best="O(1)", complexity_avg="O(n)", complexity_worst="O(n)", complexity_space="O(1)",
        description="Follows next pointers from the head until the value is found.",
    ),

    # -- hash table --
    "hash_insert": AlgoInfo(
        key="hash_insert", label="Hash Table Insert", family="hash-table",
        fn=_hashing.hash_insert, pseudocode=_hashing.PSEUDOCODE["insert"],
        params=["key", "value"], tags=["hashing", "chaining"],
        complexity_best="O(1)", complexity_avg="O(1)", complexity_worst="O(n)", complexity_space="O(n)",
        description="Hash the key, then append to (or update within) the bucket's chain.",
    ),

    "hash_search": AlgoInfo(
        key="hash_search", label="Hash Table Search", family="hash-table",
        fn=_hashing.hash_search, pseudocode=_hashing.PSEUDOCODE["search"],
        params=["key"], tags=["hashing", "chaining"],
        complexity_best="O(1)", complexity_avg="O(1)", complexity_worst="O(n)", complexity_space="O(1)",
        description="Hash the key, then walk the bucket's chain.",
    ),

    "hash_delete": AlgoInfo(
        key="hash_delete", label="Hash Table Delete", family="hash-table",
        fn=_hashing.hash_delete, pseudocode=_hashing.PSEUDOCODE["delete"],
        params=["key"], tags=["hashing", "chaining"],
        complexity_best="O(1)", complexity_avg="O(1)", complexity_worst="O(n)", complexity_space="O(1)",
        description="Hash the key, find it in the chain and unlink it.",
    ),
}


# ---------------------------------------------------------------------------
# Data-structure operations for the analysis table (no runner behind them)
# ---------------------------------------------------------------------------
STRUCTURE_OPERATIONS: List[Dict[str, str]] = [
    {"name": "Stack (Push/Pop)",        "best": "O(1)", "avg": "O(1)", "worst": "O(1)", "space": "O(n)"},
    {"name": "Queue (Enqueue/Dequeue)", "best": "O(1)", "avg": "O(1)", "worst": "O(1)", "space": "O(n)"},
    {"name": "Hash Table (Lookup)",     "best": "O(1)", "avg": "O(1)", "worst": "O(n)", "space": "O(n)"},
    {"name": "Linked List (Insert)",    "best": "O(1)", "avg": "O(n)", "worst": "O(n)", "space": "O(n)"},
]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms(family: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order, optionally for one page."""
    return [a for a in REGISTRY.values() if family is None or a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def complexity_table(category: Optional[str] = None) -> List[Dict[str, str]]:
    """Rows for the analysis page: every registered algorithm plus the structure operations."""
    rows = [
        {
            "name":     a.label,
            "category": a.family,
            "best":     a.complexity_best,
            "avg":      a.complexity_avg,
            "worst":    a.complexity_worst,
            "space":    a.complexity_space,
            "stable":   a.stable,
            "in_place": a.in_place,
        }
        for a in REGISTRY.values()
    ]
    rows += [dict(op, category="data-structure") for op in STRUCTURE_OPERATIONS]
    if category is not None:
        rows = [r for r in rows if r["category"] == category]
    return rows


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "FAMILIES",
    "FAMILY_COUNTERS",
    "STRUCTURE_OPERATIONS",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "complexity_table",
]
