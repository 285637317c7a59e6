from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from .condensation import build_condensation
from .graph import Edge, Graph
from .metrics import SCCMetrics, elapsed_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SCCResult:
    """Strongly connected components of one graph.

    Attributes
    ----------
    components:
        components[c] is the ascending list of vertices in component c;
        components are ordered by their minimum vertex.
    comp_id:
        np.ndarray of length n mapping vertex -> component index.
    metrics:
        traversal counters and elapsed time of the run.
    algorithm:
        name of the engine that produced the result.
    """

    components: List[List[int]]
    comp_id: np.ndarray
    metrics: SCCMetrics
    algorithm: str

    @property
    def num_components(self) -> int:
        return len(self.components)

    @property
    def largest_component_size(self) -> int:
        return max((len(c) for c in self.components), default=0)

    def is_dag_partition(self) -> bool:
        """True when every component is a single vertex."""
        return all(len(c) == 1 for c in self.components)

    def component_of(self, v: int) -> int:
        return int(self.comp_id[v])

    def task_order(self, scc_order: Sequence[int]) -> List[int]:
        """Expand an order over component indices into an order over vertices."""
        order: List[int] = []
        for c in scc_order:
            order.extend(self.components[int(c)])
        return order

    def condensation(self, graph: Graph) -> Graph:
        return build_condensation(graph, self.comp_id)


SCCAlgorithm = Callable[[Graph], SCCResult]


def _finalize(comps: List[List[int]], n: int) -> Tuple[List[List[int]], np.ndarray]:
    # members are already ascending, so comp[0] is the minimum
    comps = sorted(comps, key=lambda comp: comp[0])
    comp_id = np.full(n, -1, dtype=np.int32)
    for cid, comp in enumerate(comps):
        comp_id[comp] = cid
    return comps, comp_id


def scc_tarjan(graph: Graph) -> SCCResult:
    """Strongly connected components via Tarjan (single pass, iterative).

    Vertices are discovered from 0 upward. Every vertex entry counts as one
    DFS visit and every examined edge as one explored edge, whatever its
    outcome.

    Parameters
    ----------
    graph:
        graph to decompose (weights ignored).

    Returns
    -------
    SCCResult with components sorted by minimum vertex.
    """
    n = graph.n
    index = np.full(n, -1, dtype=np.int64)
    lowlink = np.zeros(n, dtype=np.int64)
    on_stack = np.zeros(n, dtype=bool)
    stack: List[int] = []
    comps: List[List[int]] = []
    counter = 0
    dfs_visits = 0
    edges_explored = 0

    t0 = time.perf_counter()
    for start in range(n):
        if index[start] != -1:
            continue

        index[start] = lowlink[start] = counter
        counter += 1
        stack.append(start)
        on_stack[start] = True
        dfs_visits += 1
        work: List[Tuple[int, Tuple[Edge, ...], int]] = [(start, graph.out_edges(start), 0)]

        while work:
            v, nbrs, i = work[-1]
            if i < len(nbrs):
                work[-1] = (v, nbrs, i + 1)
                w = nbrs[i].to
                edges_explored += 1
                if index[w] == -1:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    dfs_visits += 1
                    work.append((w, graph.out_edges(w), 0))
                elif on_stack[w]:
                    lowlink[v] = min(lowlink[v], index[w])
                continue

            work.pop()
            if lowlink[v] == index[v]:
                comp: List[int] = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    comp.append(w)
                    if w == v:
                        break
                comp.sort()
                comps.append(comp)
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

    metrics = SCCMetrics(dfs_visits, edges_explored, elapsed_ms(t0))
    comps, comp_id = _finalize(comps, n)
    logger.debug("tarjan: %d components on n=%d (%s)", len(comps), n, metrics)
    return SCCResult(comps, comp_id, metrics, "tarjan")


def scc_kosaraju(graph: Graph) -> SCCResult:
    """Strongly connected components via Kosaraju (two passes, iterative).

    The first pass records vertices in finishing order on the original graph;
    the second pass pops that order and collects one component per DFS tree
    on the transposed graph. Visit and edge counters accumulate over both
    passes.

    Parameters
    ----------
    graph:
        graph to decompose (weights ignored).

    Returns
    -------
    SCCResult with components sorted by minimum vertex.
    """
    n = graph.n
    dfs_visits = 0
    edges_explored = 0

    t0 = time.perf_counter()
    visited = np.zeros(n, dtype=bool)
    finish: List[int] = []

    # first pass: compute finishing order
    for start in range(n):
        if visited[start]:
            continue
        visited[start] = True
        dfs_visits += 1
        stack: List[Tuple[int, Tuple[Edge, ...], int]] = [(start, graph.out_edges(start), 0)]
        while stack:
            u, nbrs, idx = stack[-1]
            if idx < len(nbrs):
                stack[-1] = (u, nbrs, idx + 1)
                v = nbrs[idx].to
                edges_explored += 1
                if not visited[v]:
                    visited[v] = True
                    dfs_visits += 1
                    stack.append((v, graph.out_edges(v), 0))
            else:
                stack.pop()
                finish.append(u)

    # second pass on the transposed graph
    rev = graph.transpose()
    visited[:] = False
    comps: List[List[int]] = []

    while finish:
        start = finish.pop()
        if visited[start]:
            continue
        comp: List[int] = []
        visited[start] = True
        dfs_visits += 1
        stack = [(start, rev.out_edges(start), 0)]
        while stack:
            u, nbrs, idx = stack[-1]
            if idx < len(nbrs):
                stack[-1] = (u, nbrs, idx + 1)
                v = nbrs[idx].to
                edges_explored += 1
                if not visited[v]:
                    visited[v] = True
                    dfs_visits += 1
                    stack.append((v, rev.out_edges(v), 0))
            else:
                stack.pop()
                comp.append(u)
        comp.sort()
        comps.append(comp)

    metrics = SCCMetrics(dfs_visits, edges_explored, elapsed_ms(t0))
    comps, comp_id = _finalize(comps, n)
    logger.debug("kosaraju: %d components on n=%d (%s)", len(comps), n, metrics)
    return SCCResult(comps, comp_id, metrics, "kosaraju")


SCC_ALGORITHMS: Dict[str, SCCAlgorithm] = {
    "tarjan": scc_tarjan,
    "kosaraju": scc_kosaraju,
}
