"""
edge.py — Graph Edge
====================
Connects two nodes. Carries a weight and its own visual state so the
renderer can colour-code edges as Exploring / Path as the algorithm
touches them.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Edges are undirected: traversal treats both endpoints as neighbours.
"""

from enum import Enum
from typing import Dict, Any


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT   = "default"     # thin, neutral grey
    EXPLORING = "exploring"   # amber — "this edge was just followed / relaxed"
    PATH      = "path"        # bright, thick — "this edge is on the final route"


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        source   : ID of one endpoint.
        target   : ID of the other endpoint.
        weight   : Numeric cost (Dijkstra reads it, BFS / DFS ignore it).
        state    : EdgeState for visual encoding.
    """

    __slots__ = ("source", "target", "weight", "state")

    def __init__(self, source: int, target: int, weight: float = 1.0):
        self.source: int       = source
        self.target: int       = target
        self.weight: float     = weight
        self.state:  EdgeState = EdgeState.DEFAULT

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.state = EdgeState.DEFAULT

    def connects(self, node_a: int, node_b: int) -> bool:
        """True if this edge links node_a ↔ node_b."""
        return {self.source, self.target} == {node_a, node_b}

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "state":  self.state.value,
        }

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight}, state={self.state.value})"
