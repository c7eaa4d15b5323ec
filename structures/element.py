"""
element.py — Array Element
==========================
One bar of an array visualization (sorting / searching pages).

Design decisions:
  - `id` is assigned once at generation time and never changes, so the
    renderer can animate a bar moving between positions.
  - `value` is immutable once generated.  Sorting runners reorder the
    Element objects themselves; they never rewrite values.
  - `state` is a closed Enum, not a subclass per state.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List


# ---------------------------------------------------------------------------
# Element State Enum — maps 1-to-1 with the bar colour palette
# ---------------------------------------------------------------------------
class ElementState(Enum):
    DEFAULT   = "default"     # neutral
    COMPARING = "comparing"   # yellow — two values being compared
    SWAPPING  = "swapping"    # red — about to move
    SORTED    = "sorted"      # green — final position
    PIVOT     = "pivot"       # purple — pivot / key / running minimum
    SEARCHING = "searching"   # yellow — probe of a search
    FOUND     = "found"       # green — search hit
    CHECKED   = "checked"     # grey — ruled out
    RANGE     = "range"       # blue — still inside the search window


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------
class Element:
    __slots__ = ("id", "value", "state")

    def __init__(self, element_id: int, value: int, state: ElementState = ElementState.DEFAULT):
        self.id:    int          = element_id
        self.value: int          = value
        self.state: ElementState = state

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "state": self.state.value}

    def __repr__(self) -> str:
        return f"Element(id={self.id}, value={self.value}, state={self.state.value})"


# ---------------------------------------------------------------------------
# ElementArray — the dataset of an array page
# ---------------------------------------------------------------------------
class ElementArray:
    """
    Ordered container of Elements.  Runners index into `elements`
    directly and move items around; identity of each Element is kept.
    """

    def __init__(self, values: Iterable[int] = ()):
        self.elements: List[Element] = [Element(i, v) for i, v in enumerate(values)]

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, idx: int) -> Element:
        return self.elements[idx]

    def values(self) -> List[int]:
        return [e.value for e in self.elements]

    def ids(self) -> List[int]:
        return [e.id for e in self.elements]

    def mark(self, state: ElementState, *indices: int) -> None:
        for i in indices:
            self.elements[i].state = state

    def mark_all(self, state: ElementState) -> None:
        for e in self.elements:
            e.state = state

    def reset_states(self) -> None:
        self.mark_all(ElementState.DEFAULT)

    def swap(self, i: int, j: int) -> None:
        a = self.elements
        a[i], a[j] = a[j], a[i]

    def move(self, src: int, dst: int) -> None:
        """Pop the element at `src` and re-insert it at `dst`."""
        self.elements.insert(dst, self.elements.pop(src))

    def snapshot(self) -> Dict[str, Any]:
        return {"elements": [e.to_dict() for e in self.elements]}

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot()

    def __repr__(self) -> str:
        return f"ElementArray({self.values()})"
