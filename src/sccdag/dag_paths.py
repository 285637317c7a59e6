"""Single-source shortest paths and critical (longest) paths on a DAG.

Both engines relax edges in a supplied topological order, so any signed
integer weights are fine: no non-negativity assumption is made.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .graph import Graph
from .metrics import PathMetrics, elapsed_ms

logger = logging.getLogger(__name__)

UNREACHABLE = int(np.iinfo(np.int64).max)
NO_PATH = int(np.iinfo(np.int64).min)


def _check_order(graph: Graph, order: Sequence[int]) -> List[int]:
    order = [int(v) for v in order]
    if len(order) != graph.n or sorted(order) != list(range(graph.n)):
        raise ValueError(
            f"Expected a full topological order of {graph.n} vertices, got {len(order)} entries; "
            "check TopoResult.is_dag before computing DAG paths."
        )
    return order


def _walk_back(parent: np.ndarray, v: int) -> List[int]:
    path: List[int] = []
    cur = int(v)
    while cur != -1:
        path.append(cur)
        cur = int(parent[cur])
    path.reverse()
    return path


@dataclass(frozen=True, eq=False)
class ShortestPathResult:
    source: int
    distances: np.ndarray     # int64, UNREACHABLE where no path exists
    predecessors: np.ndarray  # int64, -1 for the source and unreachable vertices
    metrics: PathMetrics

    def is_reachable(self, v: int) -> bool:
        return int(self.distances[v]) != UNREACHABLE

    def distance(self, v: int) -> Optional[int]:
        d = int(self.distances[v])
        return None if d == UNREACHABLE else d

    def path(self, v: int) -> List[int]:
        """Vertices from the source to `v`, or [] if `v` is unreachable."""
        if not self.is_reachable(v):
            return []
        return _walk_back(self.predecessors, v)

    @property
    def reachable_count(self) -> int:
        return int(np.count_nonzero(self.distances != UNREACHABLE))

    def max_distance(self) -> int:
        reach = self.distances[self.distances != UNREACHABLE]
        return int(reach.max()) if reach.size else 0


@dataclass(frozen=True, eq=False)
class LongestPathResult:
    distances: np.ndarray     # int64, NO_PATH where no distance was established
    predecessors: np.ndarray
    critical_path: List[int]
    critical_length: Optional[int]
    metrics: PathMetrics

    def distance(self, v: int) -> Optional[int]:
        d = int(self.distances[v])
        return None if d == NO_PATH else d

    def path(self, v: int) -> List[int]:
        if int(self.distances[v]) == NO_PATH:
            return []
        return _walk_back(self.predecessors, v)


def dag_shortest_paths(
    graph: Graph,
    order: Sequence[int],
    source: Optional[int] = None,
) -> ShortestPathResult:
    """Shortest distances from `source` by relaxation in topological order.

    Parameters
    ----------
    graph:
        acyclic graph.
    order:
        full topological order of `graph` (e.g. TopoResult.order).
    source:
        start vertex; defaults to `graph.source`.

    Returns
    -------
    ShortestPathResult. Every edge leaving a reachable vertex is counted as
    one relaxation, whether or not it improves the target's distance.
    """
    if source is None:
        source = graph.source
    if source is None:
        raise ValueError("No source vertex given and the graph has no default source.")
    source = int(source)
    if not 0 <= source < graph.n:
        raise IndexError(f"source vertex {source} out of range [0, {graph.n}).")
    order = _check_order(graph, order)

    dist = np.full(graph.n, UNREACHABLE, dtype=np.int64)
    parent = np.full(graph.n, -1, dtype=np.int64)
    dist[source] = 0
    relaxations = 0

    t0 = time.perf_counter()
    for u in order:
        du = int(dist[u])
        if du == UNREACHABLE:
            continue
        for v, w in graph.out_edges(u):
            relaxations += 1
            cand = du + w
            if cand < dist[v]:
                dist[v] = cand
                parent[v] = u

    metrics = PathMetrics(relaxations, elapsed_ms(t0))
    logger.debug("dag shortest paths from %d: %s", source, metrics)
    return ShortestPathResult(source, dist, parent, metrics)


def dag_longest_paths(graph: Graph, order: Sequence[int]) -> LongestPathResult:
    """Longest distances and the critical path by max-relaxation in topological order.

    Every vertex without incoming edges starts at distance 0. The critical
    path ends at the lowest-numbered vertex holding the maximum distance.
    """
    order = _check_order(graph, order)
    n = graph.n

    dist = np.full(n, NO_PATH, dtype=np.int64)
    parent = np.full(n, -1, dtype=np.int64)
    has_incoming = np.zeros(n, dtype=bool)
    for _, v, _ in graph.edges():
        has_incoming[v] = True
    dist[~has_incoming] = 0
    relaxations = 0

    t0 = time.perf_counter()
    for u in order:
        du = int(dist[u])
        if du == NO_PATH:
            continue
        for v, w in graph.out_edges(u):
            relaxations += 1
            cand = du + w
            if cand > dist[v]:
                dist[v] = cand
                parent[v] = u

    end = -1
    best = NO_PATH
    for v in range(n):
        if dist[v] > best:
            best = int(dist[v])
            end = v

    critical_path = _walk_back(parent, end) if end != -1 else []
    critical_length = best if end != -1 else None
    metrics = PathMetrics(relaxations, elapsed_ms(t0))
    logger.debug("dag longest paths: critical length %s (%s)", critical_length, metrics)
    return LongestPathResult(dist, parent, critical_path, critical_length, metrics)
