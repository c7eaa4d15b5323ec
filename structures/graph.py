"""
graph.py — Graph Container & Sample Factory
============================================
Single source of truth for the graph page.  Algorithms and the renderer
both talk to this object.

Responsibilities:
  1. Building nodes & edges                 (add / create)
  2. Adjacency queries                      (neighbours, edge_between)
  3. The fixed hand-authored sample graph   (Graph.sample)
  4. Serialisation                          (to_dict / snapshot)
  5. Reset helpers                          (wipe algo state, keep structure)

Design decisions:
  - Nodes stored in a dict keyed by id for O(1) lookup; edges in a list
    (the sample graph is small and edge order drives neighbour order).
  - A separate adjacency dict `_adj[node_id] → [(neighbour_id, edge)]`
    is maintained incrementally.  Every edge is registered on BOTH
    endpoints: the graph is undirected for traversal.
"""

from typing import Dict, List, Tuple, Optional, Any

from structures.node import Node, NodeState
from structures.edge import Edge
from structures.errors import StructureError


# (id, x, y)
SAMPLE_NODES: List[Tuple[int, float, float]] = [
    (0, 100, 100), (1, 250, 80),  (2, 400, 100), (3, 150, 220),
    (4, 300, 200), (5, 450, 220), (6, 200, 320), (7, 380, 320),
]

# (source, target, weight)
SAMPLE_EDGES: List[Tuple[int, int, float]] = [
    (0, 1, 4), (0, 3, 2), (1, 2, 3), (1, 4, 5), (2, 5, 1), (3, 4, 3),
    (3, 6, 4), (4, 5, 2), (4, 7, 6), (5, 7, 3), (6, 7, 5),
]


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : [Edge, …] in insertion order
        start      : node id the run starts from (rendered as START)
        end        : node id the run looks for (rendered as END)
        _adj       : {node_id: [(neighbour_id, Edge), …]}
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.edges: List[Edge]      = []
        self.start: Optional[int]   = None
        self.end:   Optional[int]   = None
        self._adj:  Dict[int, List[Tuple[int, Edge]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: int, x: float, y: float) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, x=x, y=y))

    def next_id(self) -> int:
        return max(self.nodes, default=-1) + 1

    def require(self, node_id: int) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise StructureError(f"Unknown node: {node_id}")
        return node

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise ValueError(f"Edge {edge.source}-{edge.target} references an unknown node")
        self.edges.append(edge)
        self._adj.setdefault(edge.source, []).append((edge.target, edge))
        self._adj.setdefault(edge.target, []).append((edge.source, edge))
        return edge

    def create_edge(self, source: int, target: int, weight: float = 1.0) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight))

    def connect(self, a: int, b: int, weight: float) -> Edge:
        """User-drawn edge: both ends must exist, no self-loops, no duplicates."""
        self.require(a)
        self.require(b)
        if a == b:
            raise StructureError("Cannot connect a node to itself")
        if self.edge_between(a, b) is not None:
            raise StructureError(f"Nodes {a} and {b} are already connected")
        return self.create_edge(a, b, weight)

    def edge_between(self, a: int, b: int) -> Optional[Edge]:
        for _, e in self._adj.get(a, []):
            if e.connects(a, b):
                return e
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[Tuple[int, Edge]]:
        """Return [(neighbour_id, edge)] in edge-insertion order."""
        return list(self._adj.get(node_id, []))

    # ==================================================================
    # RESET (keep structure, wipe algo state)
    # ==================================================================
    def reset_states(self) -> None:
        for node in self.nodes.values():
            node.reset()
            if node.id == self.start:
                node.state = NodeState.START
            elif node.id == self.end:
                node.state = NodeState.END
        for edge in self.edges:
            edge.reset()

    # ==================================================================
    # EDITING (graph page ops)
    # ==================================================================
    def set_start(self, node_id: int) -> None:
        self.require(node_id)
        if node_id == self.end:
            raise StructureError("Start and end must be different nodes")
        self.start = node_id
        self.reset_states()

    def set_end(self, node_id: int) -> None:
        self.require(node_id)
        if node_id == self.start:
            raise StructureError("Start and end must be different nodes")
        self.end = node_id
        self.reset_states()

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._adj.clear()
        self.start = self.end = None

    def __len__(self) -> int:
        return len(self.nodes)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def snapshot(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
            "start": self.start,
            "end":   self.end,
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot()

    # ==================================================================
    # FACTORY
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """The fixed 8-node / 11-edge demo graph, start 0 and end 7."""
        g = cls()
        for nid, x, y in SAMPLE_NODES:
            g.create_node(nid, x, y)
        for src, tgt, w in SAMPLE_EDGES:
            g.create_edge(src, tgt, w)
        g.start, g.end = 0, 7
        g.reset_states()
        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"
