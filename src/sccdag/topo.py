from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .graph import Edge, Graph
from .metrics import TopoMetrics, elapsed_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopoResult:
    """Outcome of Kahn's algorithm.

    `order` covers every vertex only when `is_dag` is True; on a cyclic graph
    it is the prefix that could be ordered before the queue ran dry.
    """

    order: List[int]
    is_dag: bool
    metrics: TopoMetrics

    def position(self) -> Dict[int, int]:
        return {v: i for i, v in enumerate(self.order)}


def topological_sort(graph: Graph) -> TopoResult:
    """Topological order via Kahn's algorithm with a FIFO queue.

    Zero in-degree vertices are seeded in ascending order. Every enqueue is
    counted as a push and every dequeue as a pop.
    """
    n = graph.n
    t0 = time.perf_counter()

    indeg = np.zeros(n, dtype=np.int64)
    for _, v, _ in graph.edges():
        indeg[v] += 1

    pushes = 0
    pops = 0
    queue: deque = deque()
    for v in range(n):
        if indeg[v] == 0:
            queue.append(v)
            pushes += 1

    order: List[int] = []
    while queue:
        u = queue.popleft()
        pops += 1
        order.append(u)
        for v, _ in graph.out_edges(u):
            indeg[v] -= 1
            if indeg[v] == 0:
                queue.append(v)
                pushes += 1

    is_dag = len(order) == n
    metrics = TopoMetrics(pushes, pops, elapsed_ms(t0))
    if not is_dag:
        logger.debug("kahn: graph has a cycle, ordered %d of %d vertices", len(order), n)
    return TopoResult(order, is_dag, metrics)


def dfs_topological_order(graph: Graph) -> List[int]:
    """Topological order from reversed DFS post-order (acyclic graphs only).

    Not instrumented. On a cyclic graph the result is a permutation that
    violates at least one edge.
    """
    n = graph.n
    visited = np.zeros(n, dtype=bool)
    post: List[int] = []

    for start in range(n):
        if visited[start]:
            continue
        visited[start] = True
        stack: List[Tuple[int, Tuple[Edge, ...], int]] = [(start, graph.out_edges(start), 0)]
        while stack:
            u, nbrs, idx = stack[-1]
            if idx < len(nbrs):
                stack[-1] = (u, nbrs, idx + 1)
                v = nbrs[idx].to
                if not visited[v]:
                    visited[v] = True
                    stack.append((v, graph.out_edges(v), 0))
            else:
                stack.pop()
                post.append(u)

    post.reverse()
    return post


def is_topological_order(graph: Graph, order: Sequence[int]) -> bool:
    """Check that `order` is a permutation of the vertices with every edge pointing forward."""
    if len(order) != graph.n or sorted(int(v) for v in order) != list(range(graph.n)):
        return False
    pos = {int(v): i for i, v in enumerate(order)}
    return all(pos[u] < pos[v] for u, v, _ in graph.edges())
