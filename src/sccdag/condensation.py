from __future__ import annotations

from typing import Set, Tuple

import numpy as np

from .graph import Graph


def build_condensation(graph: Graph, comp_id: np.ndarray) -> Graph:
    """Contract every component of `graph` to a single vertex.

    Parameters
    ----------
    graph:
        original graph.
    comp_id:
        array of length n mapping vertex -> component index in [0, m-1],
        as produced by either SCC engine.

    Returns
    -------
    Simple directed graph on m vertices. Edges are emitted while scanning the
    original edges in storage order, so when several original edges connect
    the same pair of components the first one's weight is kept.
    """
    comp_id = np.asarray(comp_id)
    if comp_id.shape != (graph.n,):
        raise ValueError(
            f"comp_id must have length {graph.n}, got shape {comp_id.shape}."
        )
    m = int(comp_id.max()) + 1 if graph.n else 0

    cond = Graph(m, True, weight_model=graph.weight_model)
    emitted: Set[Tuple[int, int]] = set()
    for u, v, w in graph.edges():
        cu, cv = int(comp_id[u]), int(comp_id[v])
        if cu != cv and (cu, cv) not in emitted:
            cond.add_edge(cu, cv, w)
            emitted.add((cu, cv))
    return cond
