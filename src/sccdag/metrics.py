"""Per-run instrumentation records.

Each engine counts its work in local integers and returns one of these frozen
records next to its result, so two runs never share a counter.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class SCCMetrics:
    dfs_visits: int
    edges_explored: int
    elapsed_ms: float

    def __str__(self) -> str:
        return (f"DFS Visits: {self.dfs_visits}, Edges Explored: {self.edges_explored}, "
                f"Time: {self.elapsed_ms:.3f} ms")


@dataclass(frozen=True)
class TopoMetrics:
    pushes: int
    pops: int
    elapsed_ms: float

    def __str__(self) -> str:
        return f"Queue Pushes: {self.pushes}, Queue Pops: {self.pops}, Time: {self.elapsed_ms:.3f} ms"


@dataclass(frozen=True)
class PathMetrics:
    relaxations: int
    elapsed_ms: float

    def __str__(self) -> str:
        return f"Edge Relaxations: {self.relaxations}, Time: {self.elapsed_ms:.3f} ms"


def elapsed_ms(t0: float) -> float:
    """Milliseconds since `t0` (a time.perf_counter() reading)."""
    return (time.perf_counter() - t0) * 1000.0
