"""
containers.py — Stack & Queue
=============================
The two editable structures whose pages have no algorithm runner: every
operation is a single instantaneous mutation, reported back to the page
as a short message plus the index to highlight.
"""

import itertools
from typing import Any, Dict, List, Optional

from structures.errors import CapacityError, EmptyStructureError, StructureError

STACK_CAPACITY = 10
QUEUE_CAPACITY = 8
DEFAULT_PRIORITY = 5

QUEUE_KINDS = ("linear", "circular", "priority", "deque")

# kind -> (title, [(label, value, priority), …])
QUEUE_EXAMPLES = {
    "linear":   ("Print Queue", [("Report.pdf", 1, None), ("Invoice.doc", 2, None), ("Photo.jpg", 3, None)]),
    "circular": ("Music Player", [("Song 1", 1, None), ("Song 2", 2, None), ("Song 3", 3, None), ("Song 4", 4, None)]),
    "priority": ("Hospital ER", [("Heart Attack", 1, 10), ("Broken Arm", 2, 5), ("Headache", 3, 2)]),
    "deque":    ("Undo/Redo", [("Action 1", 1, None), ("Action 2", 2, None), ("Action 3", 3, None)]),
}


class Item:
    __slots__ = ("id", "value", "priority", "label")

    def __init__(self, item_id: int, value: int, priority: Optional[int] = None, label: Optional[str] = None):
        self.id       = item_id
        self.value    = value
        self.priority = priority
        self.label    = label

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id, "value": self.value}
        if self.priority is not None:
            d["priority"] = self.priority
        if self.label:
            d["label"] = self.label
        return d


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------
class Stack:
    def __init__(self, capacity: int = STACK_CAPACITY):
        self.capacity = capacity
        self.items: List[Item] = []
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self.items)

    def push(self, value: int) -> Item:
        if len(self.items) >= self.capacity:
            raise CapacityError("Stack Overflow! Maximum capacity reached")
        item = Item(next(self._ids), value)
        self.items.append(item)
        return item

    def pop(self) -> Item:
        if not self.items:
            raise EmptyStructureError("Stack Underflow! Stack is empty")
        return self.items.pop()

    def peek(self) -> Item:
        if not self.items:
            raise EmptyStructureError("Stack is empty! Nothing to peek")
        return self.items[-1]

    def clear(self) -> None:
        self.items.clear()

    @property
    def fill_percentage(self) -> float:
        return len(self.items) / self.capacity * 100

    def snapshot(self) -> Dict[str, Any]:
        return {
            "items":    [i.to_dict() for i in self.items],
            "capacity": self.capacity,
            "top":      len(self.items) - 1,
            "fill":     self.fill_percentage,
        }


# ---------------------------------------------------------------------------
# Queue (linear / circular / priority / deque)
# ---------------------------------------------------------------------------
class Queue:
    """
    A bounded queue whose `kind` changes which operations are allowed:

        linear / circular : enqueue at rear, dequeue at front
        priority          : kept sorted by descending priority (stable)
        deque             : both ends open

    `front` / `rear` are the logical ring indices shown on the circular
    page; the items themselves are stored front-first.
    """

    def __init__(self, kind: str = "linear", capacity: int = QUEUE_CAPACITY):
        if kind not in QUEUE_KINDS:
            raise StructureError(f"Unknown queue type: {kind}")
        self.kind = kind
        self.capacity = capacity
        self.items: List[Item] = []
        self.front = 0
        self.rear = 0
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self.items)

    def _check_room(self) -> None:
        if len(self.items) >= self.capacity:
            raise CapacityError("Queue is full!")

    def _check_items(self) -> None:
        if not self.items:
            raise EmptyStructureError("Queue is empty!")

    def _require_deque(self, op: str) -> None:
        if self.kind != "deque":
            raise StructureError(f"{op} is only available on a deque")

    def enqueue(self, value: int, priority: Optional[int] = None, label: Optional[str] = None) -> Item:
        self._check_room()
        if self.kind == "priority":
            item = Item(next(self._ids), value, DEFAULT_PRIORITY if priority is None else priority, label)
            pos = len(self.items)
            # stable: after every item with priority >= the new one
            for i, other in enumerate(self.items):
                if other.priority < item.priority:
                    pos = i
                    break
            self.items.insert(pos, item)
        else:
            item = Item(next(self._ids), value, label=label)
            self.items.append(item)
        self.rear = (self.rear + 1) % self.capacity
        return item

    def enqueue_front(self, value: int) -> Item:
        self._require_deque("enqueue_front")
        self._check_room()
        item = Item(next(self._ids), value)
        self.items.insert(0, item)
        self.front = (self.front - 1) % self.capacity
        return item

    def dequeue(self) -> Item:
        self._check_items()
        self.front = (self.front + 1) % self.capacity
        return self.items.pop(0)

    def dequeue_rear(self) -> Item:
        self._require_deque("dequeue_rear")
        self._check_items()
        self.rear = (self.rear - 1) % self.capacity
        return self.items.pop()

    def peek_front(self) -> Item:
        self._check_items()
        return self.items[0]

    def peek_rear(self) -> Item:
        self._check_items()
        return self.items[-1]

    def clear(self) -> None:
        self.items.clear()
        self.front = self.rear = 0

    def set_kind(self, kind: str) -> None:
        """Switching the queue type starts from an empty queue."""
        if kind not in QUEUE_KINDS:
            raise StructureError(f"Unknown queue type: {kind}")
        self.kind = kind
        self.clear()

    def load_example(self) -> str:
        """Replace the contents with the real-world example for this kind; returns its title."""
        title, rows = QUEUE_EXAMPLES[self.kind]
        self.clear()
        for label, value, priority in rows:
            self.enqueue(value, priority=priority, label=label)
        return title

    @property
    def fill_percentage(self) -> float:
        return len(self.items) / self.capacity * 100

    def snapshot(self) -> Dict[str, Any]:
        return {
            "kind":     self.kind,
            "items":    [i.to_dict() for i in self.items],
            "capacity": self.capacity,
            "front":    self.front,
            "rear":     self.rear,
            "fill":     self.fill_percentage,
        }
