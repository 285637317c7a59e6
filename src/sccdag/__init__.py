"""SCC and DAG path analysis for weighted task graphs.

This package provides:
- a weighted adjacency-list digraph with JSON I/O,
- strongly connected components via Tarjan and Kosaraju (iterative),
- condensation of a graph by its SCCs,
- topological ordering via Kahn (with cycle detection) and DFS,
- DAG shortest paths and critical (longest) paths,
- a dataset generator and a batch analysis pipeline with reports.
"""

from .graph import Edge, Graph
from .errors import GraphFormatError
from .graph_io import graph_from_dict, graph_to_dict, load_graph, save_graph
from .metrics import PathMetrics, SCCMetrics, TopoMetrics
from .scc import SCC_ALGORITHMS, SCCResult, scc_kosaraju, scc_tarjan
from .condensation import build_condensation
from .topo import TopoResult, dfs_topological_order, is_topological_order, topological_sort
from .dag_paths import (
    NO_PATH,
    UNREACHABLE,
    LongestPathResult,
    ShortestPathResult,
    dag_longest_paths,
    dag_shortest_paths,
)
from .datasets import generate_datasets
from .pipeline import analyze_graph, run_analysis

__all__ = [
    "Edge",
    "Graph",
    "GraphFormatError",
    "graph_from_dict",
    "graph_to_dict",
    "load_graph",
    "save_graph",
    "PathMetrics",
    "SCCMetrics",
    "TopoMetrics",
    "SCC_ALGORITHMS",
    "SCCResult",
    "scc_kosaraju",
    "scc_tarjan",
    "build_condensation",
    "TopoResult",
    "dfs_topological_order",
    "is_topological_order",
    "topological_sort",
    "NO_PATH",
    "UNREACHABLE",
    "LongestPathResult",
    "ShortestPathResult",
    "dag_longest_paths",
    "dag_shortest_paths",
    "generate_datasets",
    "analyze_graph",
    "run_analysis",
]
