"""
paths.py — Path reconstruction shared by the graph runners
===========================================================
"""

from typing import Dict, Generator, List, Optional

from structures.edge import EdgeState
from structures.graph import Graph
from structures.node import NodeState
from algorithms.step import Step, Tracer
from algorithms.results import PathResult

PathGen = Generator[Step, None, Optional[PathResult]]


def reconstruct(parent: Dict[int, int], start: int, end: int) -> List[int]:
    """Walk predecessors back from `end`.  Empty list if `start` is never reached."""
    path = [end]
    cur = end
    seen = {end}
    while cur != start:
        cur = parent.get(cur)
        if cur is None or cur in seen:
            return []
        seen.add(cur)
        path.append(cur)
    path.reverse()
    return path


def path_cost(graph: Graph, path: List[int]) -> float:
    total = 0.0
    for a, b in zip(path, path[1:]):
        edge = graph.edge_between(a, b)
        if edge is not None:
            total += edge.weight
    return total


def settle(graph: Graph) -> None:
    """The node expanded on the previous step becomes VISITED."""
    for node in graph.nodes.values():
        if node.state is NodeState.VISITING:
            node.mark_visited()


def trace_path(
    tr: Tracer,
    graph: Graph,
    parent: Dict[int, int],
    start: int,
    end: int,
    order: List[int],
    line: int,
) -> PathGen:
    """Light the path edge-first, then node by node at half delay."""
    path = reconstruct(parent, start, end)
    settle(graph)
    for a, b in zip(path, path[1:]):
        edge = graph.edge_between(a, b)
        if edge is not None:
            edge.state = EdgeState.PATH
    for nid in path:
        if tr.cancelled:
            return None
        graph.nodes[nid].mark_path()
        yield tr.emit(line, f"Path: {' → '.join(map(str, path))}", delay=0.5)
    cost = path_cost(graph, path)
    yield tr.emit(
        line,
        f"Path found! {len(path) - 1} edge(s), total weight {cost:g}",
        delay=0.0,
        is_final=True,
    )
    return PathResult(found=True, path=path, cost=cost, visited=list(order))


def no_path(tr: Tracer, graph: Graph, order: List[int], line: int) -> PathGen:
    if tr.cancelled:
        return None
    settle(graph)
    yield tr.emit(line, "No path found", delay=0.0, is_final=True)
    return PathResult(found=False, path=[], cost=None, visited=list(order))


def endpoints(graph: Graph, start: Optional[int], end: Optional[int]):
    start = graph.start if start is None else start
    end = graph.end if end is None else end
    graph.start, graph.end = start, end
    graph.reset_states()
    return start, end
