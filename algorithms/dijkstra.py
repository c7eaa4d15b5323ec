"""
dijkstra.py — Dijkstra's Shortest Path
======================================
O(V²) Dijkstra: every round scans the unvisited nodes for the smallest
tentative distance.  The sample graph is tiny, and a linear scan makes
the "extract min" step easy to show as a sorted queue overlay.

Rules:
  - every distance starts at ∞ except the start node (0)
  - the loop stops when the cheapest unvisited node is at ∞
  - a predecessor is replaced only on a strictly shorter distance
"""

from typing import Dict, List, Optional, Set

from structures.edge import EdgeState
from structures.graph import Graph
from algorithms.step import Tracer
from algorithms.paths import PathGen, endpoints, no_path, settle, trace_path

INF = float("inf")


PSEUDOCODE: List[str] = [
    "dist[start] ← 0",                      # 0
    "pq ← [(0, start)]",                    # 1
    "while pq not empty:",                  # 2
    "  (d, u) ← extract_min()",             # 3
    "  if u == target: ✓",                  # 4
    "  for (v, weight) in adj[u]:",         # 5
    "    if dist[u]+weight < dist[v]:",     # 6
    "      dist[v] ← dist[u]+weight",       # 7
    "      pq.insert((dist[v], v))",        # 8
]


def _table(dist: Dict[int, float]) -> Dict[str, Optional[float]]:
    # JSON has no infinity
    return {str(k): (None if v == INF else v) for k, v in dist.items()}


def dijkstra(tr: Tracer, graph: Graph, start: Optional[int] = None, end: Optional[int] = None) -> PathGen:
    start, end = endpoints(graph, start, end)
    dist: Dict[int, float] = {nid: INF for nid in graph.nodes}
    dist[start] = 0
    parent: Dict[int, int] = {}
    visited: Set[int] = set()
    order: List[int] = []
    for node in graph.nodes.values():
        node.distance = dist[node.id]

    while len(visited) < len(graph.nodes):
        if tr.cancelled:
            return None

        u, best = None, INF
        for nid, d in dist.items():
            if nid not in visited and d < best:
                u, best = nid, d
        if u is None:
            break

        pq = sorted((n for n, d in dist.items() if n not in visited and d != INF), key=dist.get)
        visited.add(u)
        order.append(u)
        tr.count("visits")

        settle(graph)
        graph.nodes[u].mark_visiting()
        yield tr.emit(
            3,
            f"Extract min: node {u} at distance {best:g}",
            queue=pq,
            distances=_table(dist),
        )

        if u == end:
            return (yield from trace_path(tr, graph, parent, start, end, order, 4))

        relaxed = []
        for v, edge in graph.neighbours(u):
            if v in visited:
                continue
            candidate = best + edge.weight
            if candidate < dist[v]:
                dist[v] = candidate
                parent[v] = u
                graph.nodes[v].distance = candidate
                edge.state = EdgeState.EXPLORING
                tr.count("relaxations")
                relaxed.append(f"{v}→{candidate:g}")
        if relaxed:
            yield tr.emit(7, f"Relax edges of {u}: {', '.join(relaxed)}", distances=_table(dist))

    return (yield from no_path(tr, graph, order, 2))
