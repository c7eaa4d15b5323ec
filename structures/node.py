from enum import Enum
from typing import Optional, Dict, Any


# ---------------------------------------------------------------------------
# Node State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    DEFAULT  = "default"    # grey
    VISITING = "visiting"   # amber — the node being expanded RIGHT NOW
    VISITED  = "visited"    # green — fully processed
    PATH     = "path"       # gold — on the reconstructed route
    START    = "start"      # teal — start node
    END      = "end"        # magenta — goal node


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id), fixed canvas position and mutable algorithm state.

    Attributes:
        id       : Vertex id (int in the sample graph).
        x, y     : Canvas coordinates in pixels.
        state    : Current NodeState for visual encoding.
        distance : Shortest-known distance (Dijkstra only), None otherwise.
    """

    __slots__ = ("id", "x", "y", "state", "distance")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self.id: int                    = node_id
        self.x: float                   = x
        self.y: float                   = y
        self.state: NodeState           = NodeState.DEFAULT
        self.distance: Optional[float]  = None

    # ------------------------------------------------------------------
    # State helpers (used heavily by algorithms + renderer)
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe algorithm state back to defaults — called between runs."""
        self.state = NodeState.DEFAULT
        self.distance = None

    def mark_visiting(self) -> None:
        self.state = NodeState.VISITING

    def mark_visited(self) -> None:
        self.state = NodeState.VISITED

    def mark_path(self) -> None:
        self.state = NodeState.PATH

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        d = self.distance
        return {
            "id":       self.id,
            "x":        self.x,
            "y":        self.y,
            "state":    self.state.value,
            # JSON has no infinity; unreachable reads as None
            "distance": None if d is None or d == float("inf") else d,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, state={self.state.value}, pos=({self.x:.0f},{self.y:.0f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
