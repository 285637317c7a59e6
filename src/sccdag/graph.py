from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Tuple


class Edge(NamedTuple):
    to: int
    weight: int


class Graph:
    """Directed weighted graph stored as adjacency lists.

    Vertices are the integers 0..n-1. Each vertex keeps its outgoing edges in
    insertion order; duplicate edges and self-loops are allowed. The graph is
    filled through `add_edge` and then treated as read-only by every engine.

    Parameters
    ----------
    n:
        number of vertices (fixed for the lifetime of the graph).
    directed:
        informational flag; edges are always stored u -> v.
    source:
        optional default source vertex for shortest-path queries.
    weight_model:
        optional free-form tag describing what the weights mean.
    """

    def __init__(
        self,
        n: int,
        directed: bool = True,
        *,
        source: Optional[int] = None,
        weight_model: Optional[str] = None,
    ) -> None:
        n = int(n)
        if n < 0:
            raise ValueError(f"Vertex count must be non-negative, got {n}.")
        self._n = n
        self._directed = bool(directed)
        self._adj: List[List[Edge]] = [[] for _ in range(n)]
        self._m = 0
        self._source: Optional[int] = None
        self.source = source
        self.weight_model = weight_model

    def __repr__(self) -> str:
        return f"Graph(n={self._n}, edges={self._m}, directed={self._directed})"

    @property
    def n(self) -> int:
        return self._n

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def num_edges(self) -> int:
        return self._m

    @property
    def source(self) -> Optional[int]:
        return self._source

    @source.setter
    def source(self, value: Optional[int]) -> None:
        if value is not None:
            value = self._check_vertex(value, "source")
        self._source = value

    def _check_vertex(self, v: int, what: str) -> int:
        v = int(v)
        if not 0 <= v < self._n:
            raise IndexError(f"{what} vertex {v} out of range [0, {self._n}).")
        return v

    def add_edge(self, u: int, v: int, weight: int = 1) -> None:
        """Append the edge u -> v with the given integer weight."""
        u = self._check_vertex(u, "edge start")
        v = self._check_vertex(v, "edge end")
        self._adj[u].append(Edge(v, int(weight)))
        self._m += 1

    def out_edges(self, u: int) -> Tuple[Edge, ...]:
        return tuple(self._adj[u])

    def out_degree(self, u: int) -> int:
        return len(self._adj[u])

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (u, v, w) for every edge, vertices ascending, insertion order within a vertex."""
        for u, nbrs in enumerate(self._adj):
            for v, w in nbrs:
                yield u, v, w

    def has_self_loop(self, v: int) -> bool:
        return any(e.to == v for e in self._adj[v])

    def transpose(self) -> "Graph":
        """New graph with every edge (u, v, w) turned into (v, u, w)."""
        rev = Graph(self._n, self._directed, weight_model=self.weight_model)
        for u, v, w in self.edges():
            rev._adj[v].append(Edge(u, w))
        rev._m = self._m
        return rev

    @classmethod
    def from_edges(
        cls,
        n: int,
        edges: List[Tuple[int, int, int]],
        *,
        directed: bool = True,
        source: Optional[int] = None,
        weight_model: Optional[str] = None,
    ) -> "Graph":
        g = cls(n, directed, source=source, weight_model=weight_model)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g
