"""Hypothesis strategies producing task graphs."""

from hypothesis import strategies as st

from sccdag.graph import Graph


@st.composite
def graphs(draw, max_n: int = 12, max_edges: int = 40, min_weight: int = -10, max_weight: int = 10):
    """Arbitrary directed graphs: duplicates, self-loops and cycles allowed."""
    n = draw(st.integers(min_value=0, max_value=max_n))
    if n == 0:
        return Graph(0)
    vertex = st.integers(min_value=0, max_value=n - 1)
    weight = st.integers(min_value=min_weight, max_value=max_weight)
    edges = draw(st.lists(st.tuples(vertex, vertex, weight), max_size=max_edges))
    return Graph.from_edges(n, edges, source=draw(vertex))


@st.composite
def dags(draw, max_n: int = 12, max_edges: int = 40, min_weight: int = -10, max_weight: int = 10):
    """Acyclic graphs: every edge points from a lower to a higher vertex of a shuffled labelling."""
    n = draw(st.integers(min_value=1, max_value=max_n))
    labels = draw(st.permutations(list(range(n))))
    vertex = st.integers(min_value=0, max_value=n - 1)
    weight = st.integers(min_value=min_weight, max_value=max_weight)
    pairs = draw(st.lists(st.tuples(vertex, vertex, weight), max_size=max_edges))
    edges = [(labels[min(a, b)], labels[max(a, b)], w) for a, b, w in pairs if a != b]
    return Graph.from_edges(n, edges, source=draw(vertex))
