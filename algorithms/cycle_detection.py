"""
cycle_detection.py — Linked-List Runners
========================================
Floyd's tortoise-and-hare cycle detection, plus the plain value search
the linked-list page animates node by node.

Floyd:
  Phase 1 – slow moves 1, fast moves 2.  Meeting ⇒ cycle.  Either pointer
            falling off the tail (next_index → None) ⇒ no cycle.
  Phase 2 – restart one pointer at the head; advancing both by 1, they
            meet at the cycle entry.

Phase 1 is also bounded to 2·n + 2 iterations: a pointer pair on a
cycle of length c meets within n + c ≤ 2n iterations, so the guard never
cuts a real detection short.
"""

from typing import Dict, List, Optional, Generator

from structures.linked_list import LinkedList, ListNodeState
from algorithms.step import Step, Tracer
from algorithms.results import CycleResult, ListSearchResult

L = ListNodeState


PSEUDOCODE: Dict[str, List[str]] = {
    "floyd": [
        "slow ← head, fast ← head",
        "while fast and fast.next:",
        "  slow ← slow.next",
        "  fast ← fast.next.next",
        "  if slow == fast: cycle found ✓",
        "return no cycle",
        "slow ← head",
        "while slow != fast: slow, fast ← slow.next, fast.next",
        "return slow  // cycle start",
    ],
    "list_search": [
        "current ← head, i ← 0",
        "while current != null:",
        "  if current.value == target: return i",
        "  current ← current.next, i ← i + 1",
        "return NOT FOUND",
    ],
}


def _pointers(lst: LinkedList, slow: Optional[int], fast: Optional[int]) -> None:
    lst.reset_states()
    if slow is not None and slow == fast:
        lst.nodes[slow].state = L.MEETING
        return
    if slow is not None:
        lst.nodes[slow].state = L.SLOW
    if fast is not None:
        lst.nodes[fast].state = L.FAST


# ---------------------------------------------------------------------------
# Floyd
# ---------------------------------------------------------------------------
def floyd_cycle(tr: Tracer, lst: LinkedList) -> Generator[Step, None, Optional[CycleResult]]:
    n = len(lst)
    if not n:
        yield tr.emit(5, "List is empty: no cycle", delay=0.0, is_final=True)
        return CycleResult(has_cycle=False)

    slow: Optional[int] = 0
    fast: Optional[int] = 0
    _pointers(lst, slow, fast)
    yield tr.emit(0, "Both pointers start at the head", slow=slow, fast=fast)

    meeting = None
    for _ in range(2 * n + 2):
        if tr.cancelled:
            return None
        slow = lst.next_index(slow)
        fast = lst.next_index(lst.next_index(fast))
        tr.count("iterations")
        if slow is None or fast is None:
            _pointers(lst, slow, None)
            yield tr.emit(1, "Fast pointer fell off the end of the list", slow=slow, fast=None)
            break
        _pointers(lst, slow, fast)
        if slow == fast:
            meeting = slow
            yield tr.emit(4, f"Pointers meet at index {slow}: cycle detected!", slow=slow, fast=fast)
            break
        yield tr.emit(3, f"slow → {slow}, fast → {fast}", slow=slow, fast=fast)

    if meeting is None:
        if tr.cancelled:
            return None
        for node in lst.nodes:
            node.state = L.CHECKED
        yield tr.emit(5, "No cycle found", delay=0.0, is_final=True)
        return CycleResult(has_cycle=False, iterations=tr.counters.get("iterations", 0))

    # phase 2: locate the entry
    p, q = 0, meeting
    for _ in range(n):
        if p == q or tr.cancelled:
            break
        lst.reset_states()
        lst.nodes[meeting].state = L.MEETING
        p, q = lst.next_index(p), lst.next_index(q)
        tr.count("iterations")
        lst.nodes[p].state = L.SLOW
        lst.nodes[q].state = L.FAST
        yield tr.emit(7, f"Advance both by one: {p} and {q}", slow=p, fast=q)
    if tr.cancelled:
        return None

    lst.reset_states()
    lst.nodes[meeting].state = L.MEETING
    lst.nodes[p].state = L.CYCLE_START
    yield tr.emit(8, f"Cycle starts at index {p} (value {lst.nodes[p].value})", delay=0.0, is_final=True)
    return CycleResult(
        has_cycle=True,
        meeting_index=meeting,
        cycle_start=p,
        iterations=tr.counters.get("iterations", 0),
    )


# ---------------------------------------------------------------------------
# Value search
# ---------------------------------------------------------------------------
def list_search(tr: Tracer, lst: LinkedList, target: int) -> Generator[Step, None, Optional[ListSearchResult]]:
    lst.reset_states()
    idx: Optional[int] = 0 if len(lst) else None
    # at most n hops, so a cyclic list is walked once
    for i in range(len(lst)):
        if tr.cancelled or idx is None:
            break
        node = lst.nodes[idx]
        node.state = L.SEARCHING
        tr.count("comparisons")
        yield tr.emit(2, f"Node {i}: is {node.value} equal to {target}?")
        if node.value == target:
            node.state = L.FOUND
            yield tr.emit(2, f"Found {target} at position {i}", delay=0.0, is_final=True)
            return ListSearchResult(found=True, index=i, value=target)
        node.state = L.CHECKED
        idx = lst.next_index(idx)
    if tr.cancelled:
        return None
    yield tr.emit(4, f"Value {target} not found in the list", delay=0.0, is_final=True)
    return ListSearchResult(found=False, index=None, value=target)
