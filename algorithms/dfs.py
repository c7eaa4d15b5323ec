"""
dfs.py — Depth-First Search
============================
Recursive DFS written as generator recursion (`yield from`).  Every call
checks for cancellation on entry, so a stop lands within one step at any
depth.  A node's parent is recorded just before descending into it.

The path DFS reports is the branch it happened to find, NOT necessarily
the shortest one.
"""

from typing import Dict, Generator, List, Optional, Set

from structures.edge import EdgeState
from structures.graph import Graph
from algorithms.step import Step, Tracer
from algorithms.paths import PathGen, endpoints, no_path, trace_path


PSEUDOCODE: List[str] = [
    "function DFS(node):",                  # 0
    "  if node == target: ✓",               # 1
    "  visited.add(node)",                  # 2
    "  for neighbor in adj[node]:",         # 3
    "    if neighbor not visited:",         # 4
    "      DFS(neighbor)",                  # 5
    "  // backtrack",                       # 6
]


def dfs(tr: Tracer, graph: Graph, start: Optional[int] = None, end: Optional[int] = None) -> PathGen:
    start, end = endpoints(graph, start, end)
    visited: Set[int] = set()
    order: List[int] = []
    parent: Dict[int, int] = {}
    stack: List[int] = []

    found = yield from _visit(tr, graph, start, end, visited, order, parent, stack)
    if tr.cancelled:
        return None
    if found:
        return (yield from trace_path(tr, graph, parent, start, end, order, 1))
    return (yield from no_path(tr, graph, order, 6))


def _visit(
    tr: Tracer,
    graph: Graph,
    node_id: int,
    end: int,
    visited: Set[int],
    order: List[int],
    parent: Dict[int, int],
    stack: List[int],
) -> Generator[Step, None, bool]:
    if tr.cancelled or node_id in visited:
        return False

    stack.append(node_id)
    visited.add(node_id)
    order.append(node_id)
    tr.count("visits")

    node = graph.nodes[node_id]
    if node_id != end:
        node.mark_visiting()
    yield tr.emit(1, f"Visit {node_id} (depth {len(stack) - 1})", stack=list(stack))

    if node_id == end:
        return True

    for nbr, edge in graph.neighbours(node_id):
        if tr.cancelled:
            return False
        if nbr not in visited:
            parent[nbr] = node_id
            edge.state = EdgeState.EXPLORING
            if (yield from _visit(tr, graph, nbr, end, visited, order, parent, stack)):
                return True

    stack.pop()
    node.mark_visited()
    yield tr.emit(6, f"Dead end at {node_id}: backtrack", delay=0.5, stack=list(stack))
    return False
