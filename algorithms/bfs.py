"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step at every meaningful event:
  1. Dequeue a node  →  mark it VISITING (previous one becomes VISITED)
  2. Scan its neighbours  →  mark the edges to unseen ones EXPLORING
  3. Final steps  →  light the shortest (hop-count) path

The queue may hold duplicates: a node is marked visited when it is
dequeued, not when it is discovered, and stale entries are skipped.  Its
parent is recorded the first time it is discovered, which keeps the path
hop-minimal.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Dict, List, Optional, Set

from structures.edge import EdgeState
from structures.graph import Graph
from algorithms.step import Tracer
from algorithms.paths import PathGen, endpoints, no_path, settle, trace_path


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "queue ← [start]",                      # 0
    "visited ← {start}",                    # 1
    "while queue not empty:",               # 2
    "  current ← dequeue()",                # 3
    "  if current == target: ✓",            # 4
    "  for neighbor in adj[current]:",      # 5
    "    if neighbor not visited:",         # 6
    "      enqueue(neighbor)",              # 7
    "      visited.add(neighbor)",          # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(tr: Tracer, graph: Graph, start: Optional[int] = None, end: Optional[int] = None) -> PathGen:
    """
    Args:
        tr    : Tracer bound to `graph`.
        graph : The graph to search.
        start : Starting node id (defaults to graph.start).
        end   : Goal node id (defaults to graph.end).

    Returns (via StopIteration):
        PathResult, or None if the run was cancelled.
    """
    start, end = endpoints(graph, start, end)
    queue = deque([start])
    visited: Set[int] = set()
    order: List[int] = []
    parent: Dict[int, int] = {}

    while queue:
        if tr.cancelled:
            return None
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        order.append(current)
        tr.count("visits")

        settle(graph)
        node = graph.nodes[current]
        if current != end:
            node.mark_visiting()
        yield tr.emit(
            4,
            f"Dequeue {current}. BFS always expands the node discovered earliest (FIFO).",
            queue=list(queue),
        )

        if current == end:
            return (yield from trace_path(tr, graph, parent, start, end, order, 4))

        fresh = []
        for nbr, edge in graph.neighbours(current):
            if nbr not in visited:
                # may already be queued; the stale copy is skipped on dequeue
                queue.append(nbr)
                parent.setdefault(nbr, current)
                edge.state = EdgeState.EXPLORING
                fresh.append(nbr)
        if fresh:
            yield tr.emit(
                7,
                f"Enqueue neighbours of {current}: {', '.join(map(str, fresh))}",
                queue=list(queue),
            )
        node.mark_visited()

    return (yield from no_path(tr, graph, order, 2))
