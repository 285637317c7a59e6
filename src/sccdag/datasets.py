"""Synthetic task graphs for exercising the engines.

Three families are produced: pure DAGs (edges only from lower to higher
vertex ids), cyclic graphs (a Hamiltonian ring plus random chords) and
"mixed" graphs made of several ring-shaped SCCs chained by forward edges.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .graph import Graph
from .graph_io import save_graph

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42
WEIGHT_LOW, WEIGHT_HIGH = 1, 10
WEIGHT_MODEL = "edge"

# name -> (family, n, density-or-number-of-sccs)
DATASET_PRESETS: Dict[str, Tuple[str, int, float]] = {
    "small_dag_1": ("dag", 6, 0.3),
    "small_cyclic_1": ("cyclic", 8, 0.2),
    "small_mixed_1": ("mixed", 10, 2),
    "medium_dag_1": ("dag", 12, 0.25),
    "medium_cyclic_1": ("cyclic", 15, 0.2),
    "medium_mixed_1": ("mixed", 18, 3),
    "large_dag_1": ("dag", 25, 0.15),
    "large_cyclic_1": ("cyclic", 35, 0.1),
    "large_mixed_1": ("mixed", 40, 4),
}


def _weight(rng: np.random.Generator) -> int:
    return int(rng.integers(WEIGHT_LOW, WEIGHT_HIGH + 1))


def _new_graph(n: int) -> Graph:
    return Graph(n, True, source=0 if n else None, weight_model=WEIGHT_MODEL)


def generate_dag(n: int, density: float, rng: np.random.Generator) -> Graph:
    """Each pair u < v gets the edge u -> v with probability `density`."""
    g = _new_graph(n)
    for u in range(n - 1):
        for v in range(u + 1, n):
            if rng.random() < density:
                g.add_edge(u, v, _weight(rng))
    return g


def generate_cyclic(n: int, density: float, rng: np.random.Generator) -> Graph:
    """Ring 0 -> 1 -> ... -> n-1 -> 0, then random non-loop edges up to n*(n-1)*density edges."""
    g = _new_graph(n)
    for i in range(n):
        g.add_edge(i, (i + 1) % n, _weight(rng))

    target = int(n * (n - 1) * density)
    while g.num_edges < target:
        u = int(rng.integers(n))
        v = int(rng.integers(n))
        if u != v:
            g.add_edge(u, v, _weight(rng))
    return g


def generate_multi_scc(n: int, num_sccs: int, rng: np.random.Generator) -> Graph:
    """`num_sccs` ring-shaped blocks with random chords, chained by one forward edge each."""
    num_sccs = int(num_sccs)
    if not 1 <= num_sccs <= max(n, 1):
        raise ValueError(f"num_sccs must be in [1, {n}], got {num_sccs}.")
    g = _new_graph(n)
    per = n // num_sccs

    for scc in range(num_sccs):
        start = scc * per
        end = n if scc == num_sccs - 1 else start + per

        for i in range(start, end):
            nxt = start if i == end - 1 else i + 1
            g.add_edge(i, nxt, _weight(rng))

        for i in range(start, end - 1):
            if rng.random() < 0.5:
                j = start + int(rng.integers(end - start))
                if i != j:
                    g.add_edge(i, j, _weight(rng))

    for i in range(num_sccs - 1):
        u = i * per + int(rng.integers(per))
        v = (i + 1) * per + int(rng.integers(per))
        g.add_edge(u, v, _weight(rng))
    return g


GENERATORS: Dict[str, Callable[[int, float, np.random.Generator], Graph]] = {
    "dag": generate_dag,
    "cyclic": generate_cyclic,
    "mixed": generate_multi_scc,
}


def generate_datasets(
    out_dir: Union[str, Path],
    *,
    seed: int = DEFAULT_SEED,
    presets: Optional[Dict[str, Tuple[str, int, float]]] = None,
) -> List[Path]:
    """Write one JSON file per preset into `out_dir` and return their paths.

    A single generator seeded with `seed` is shared across presets, in order,
    so the whole set is reproducible.
    """
    presets = DATASET_PRESETS if presets is None else presets
    rng = np.random.default_rng(seed)
    out_dir = Path(out_dir)

    paths = []
    for name, (family, n, param) in presets.items():
        if family not in GENERATORS:
            raise ValueError(f"Unknown dataset family {family!r} for preset {name!r}.")
        g = GENERATORS[family](n, param, rng)
        path = save_graph(g, out_dir / f"{name}.json")
        logger.info("Generated %s (n=%d, edges=%d)", path, g.n, g.num_edges)
        paths.append(path)
    return paths
