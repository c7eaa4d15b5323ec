"""
linked_list.py — Array-backed Singly Linked List
=================================================
The linked-list page keeps its nodes in logical order in a plain list.
`next` pointers are implicit (index + 1), except at the tail: when a
`cycle_target` is set, the tail links back to that earlier index.  That
synthetic back-edge is what Floyd's cycle detection runs against.
"""

import itertools
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from structures.errors import EmptyStructureError, StructureError


class ListNodeState(Enum):
    DEFAULT     = "default"
    SEARCHING   = "searching"    # traversal cursor
    FOUND       = "found"
    SLOW        = "slow"         # tortoise
    FAST        = "fast"         # hare
    MEETING     = "meeting"      # both pointers on the same node
    CYCLE_START = "cycle_start"  # entry of the loop
    CHECKED     = "checked"      # walked past, no longer interesting


class ListNode:
    __slots__ = ("id", "value", "state")

    def __init__(self, node_id: int, value: int):
        self.id:    int           = node_id
        self.value: int           = value
        self.state: ListNodeState = ListNodeState.DEFAULT

    def to_dict(self, has_cycle: bool = False) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "state": self.state.value, "hasCycle": has_cycle}

    def __repr__(self) -> str:
        return f"ListNode(id={self.id}, value={self.value})"


class LinkedList:
    """
    Attributes:
        nodes        : ListNodes in logical order (head first).
        cycle_target : Index the tail points back to, or None for a plain list.
    """

    def __init__(self, values: Iterable[int] = (), cycle_target: Optional[int] = None):
        self._ids = itertools.count()
        self.nodes: List[ListNode] = [ListNode(next(self._ids), v) for v in values]
        self.cycle_target: Optional[int] = None
        if cycle_target is not None:
            self.set_cycle(cycle_target)

    def __len__(self) -> int:
        return len(self.nodes)

    def values(self) -> List[int]:
        return [n.value for n in self.nodes]

    # ------------------------------------------------------------------
    # Pointer arithmetic
    # ------------------------------------------------------------------
    def next_index(self, idx: Optional[int]) -> Optional[int]:
        """Follow one `next` pointer.  None means we fell off the end."""
        if idx is None:
            return None
        if idx + 1 < len(self.nodes):
            return idx + 1
        return self.cycle_target

    @property
    def has_cycle(self) -> bool:
        return self.cycle_target is not None

    def set_cycle(self, target: int) -> None:
        if not 0 <= target < len(self.nodes):
            raise StructureError(f"Cycle target must be between 0 and {len(self.nodes) - 1}")
        self.cycle_target = target

    def clear_cycle(self) -> None:
        self.cycle_target = None

    # ------------------------------------------------------------------
    # Editing operations
    # ------------------------------------------------------------------
    def insert_at(self, position: int, value: int) -> ListNode:
        if not 0 <= position <= len(self.nodes):
            raise StructureError(f"Position must be between 0 and {len(self.nodes)}")
        node = ListNode(next(self._ids), value)
        self.nodes.insert(position, node)
        if self.cycle_target is not None and position <= self.cycle_target:
            self.cycle_target += 1
        return node

    def insert_head(self, value: int) -> ListNode:
        return self.insert_at(0, value)

    def insert_tail(self, value: int) -> ListNode:
        return self.insert_at(len(self.nodes), value)

    def delete_at(self, position: int) -> ListNode:
        if not self.nodes:
            raise EmptyStructureError("List is empty")
        if not 0 <= position < len(self.nodes):
            raise StructureError(f"Position must be between 0 and {len(self.nodes) - 1}")
        node = self.nodes.pop(position)
        if self.cycle_target is not None:
            if position == self.cycle_target or not self.nodes:
                self.cycle_target = None
            elif position < self.cycle_target:
                self.cycle_target -= 1
        return node

    def delete_value(self, value: int) -> ListNode:
        for i, node in enumerate(self.nodes):
            if node.value == value:
                return self.delete_at(i)
        raise StructureError(f"Value {value} not found in the list")

    def clear(self) -> None:
        self.nodes.clear()
        self.cycle_target = None

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def reset_states(self) -> None:
        for n in self.nodes:
            n.state = ListNodeState.DEFAULT

    def snapshot(self) -> Dict[str, Any]:
        return {
            "list":         [n.to_dict(self.has_cycle) for n in self.nodes],
            "cycle_target": self.cycle_target,
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot()

    def __repr__(self) -> str:
        tail = f" ↺{self.cycle_target}" if self.has_cycle else ""
        return f"LinkedList({' → '.join(map(str, self.values()))}{tail})"
