from __future__ import annotations

from pathlib import Path
from typing import List, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .dag_paths import dag_longest_paths, dag_shortest_paths
from .graph import Graph
from .pipeline import summarize
from .scc import scc_kosaraju, scc_tarjan
from .topo import dfs_topological_order, topological_sort


def _table(df: pd.DataFrame, title: str) -> str:
    body = df.to_string(index=False, na_rep="N/A")
    return f"### {title}\n```\n{body}\n```"


def overview_table(df: pd.DataFrame) -> pd.DataFrame:
    return df[["dataset", "nodes", "edges", "density", "sccs", "largest_scc", "type"]].round({"density": 3})


def scc_comparison_table(df: pd.DataFrame) -> pd.DataFrame:
    out = df[["dataset", "nodes", "tarjan_ms", "kosaraju_ms"]].copy()
    out["faster"] = np.where(out["tarjan_ms"] < out["kosaraju_ms"], "Tarjan", "Kosaraju")
    lo = out[["tarjan_ms", "kosaraju_ms"]].min(axis=1)
    hi = out[["tarjan_ms", "kosaraju_ms"]].max(axis=1)
    out["speedup"] = (hi / lo.where(lo > 0)).round(2)
    return out.round({"tarjan_ms": 3, "kosaraju_ms": 3})


def scc_detection_table(df: pd.DataFrame) -> pd.DataFrame:
    cols = ["dataset", "nodes", "edges", "sccs", "tarjan_dfs_visits", "tarjan_edges_explored",
            "kosaraju_dfs_visits", "kosaraju_edges_explored", "tarjan_ms"]
    return df[cols].round({"tarjan_ms": 3})


def topo_table(df: pd.DataFrame) -> pd.DataFrame:
    out = df[["dataset", "nodes", "sccs", "topo_pushes", "topo_pops", "topo_ms"]].copy()
    out["is_dag"] = np.where(df["condensation_is_dag"], "Yes", "No")
    return out.round({"topo_ms": 3})


def paths_table(df: pd.DataFrame) -> pd.DataFrame:
    cols = ["dataset", "paths_on", "max_distance", "sp_relaxations", "sp_ms",
            "critical_length", "lp_relaxations", "lp_ms", "critical_path"]
    return df[cols]


def format_report(df: pd.DataFrame) -> str:
    """Markdown-ish text report with the five comparison tables and a summary."""
    if df.empty:
        return "No datasets analyzed."
    parts: List[str] = [
        _table(overview_table(df), "Table 1: Dataset Overview"),
        _table(scc_comparison_table(df), "Table 2: Tarjan vs Kosaraju Comparison"),
        _table(scc_detection_table(df), "Table 3: SCC Detection"),
        _table(topo_table(df), "Table 4: Topological Sort (on Condensation)"),
        _table(paths_table(df), "Table 5: DAG Shortest/Longest Paths"),
    ]
    s = summarize(df)
    parts.append(
        f"Average Tarjan Time:   {s['avg_tarjan_ms']:.3f} ms\n"
        f"Average Kosaraju Time: {s['avg_kosaraju_ms']:.3f} ms\n"
        f"Tarjan faster in: {s['tarjan_faster']}/{s['datasets']} cases"
    )
    return "\n\n".join(parts) + "\n"


def write_report(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_report(df), encoding="utf-8")
    return path


def plot_scc_timings(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Grouped bar chart of Tarjan vs Kosaraju time per dataset."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    x = np.arange(len(df))
    width = 0.4
    plt.figure(figsize=(max(6.0, 0.8 * len(df)), 4.0))
    plt.bar(x - width / 2, df["tarjan_ms"], width, label="Tarjan")
    plt.bar(x + width / 2, df["kosaraju_ms"], width, label="Kosaraju")
    plt.xticks(x, df["dataset"], rotation=45, ha="right")
    plt.ylabel("Time (ms)")
    plt.title("SCC engine running time")
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()
    return path


def describe_graph(graph: Graph, *, name: str = "graph") -> str:
    """Detailed text view of one graph: components, orders and paths.

    Paths run on the original graph when it is acyclic and on the condensation
    otherwise, where vertex c stands for component c.
    """
    tarjan = scc_tarjan(graph)
    kosaraju = scc_kosaraju(graph)
    cond = tarjan.condensation(graph)
    topo = topological_sort(cond)

    lines = [
        f"=== {name}: {graph.n} nodes, {graph.num_edges} edges ===",
        f"Tarjan:   {tarjan.metrics}",
        f"Kosaraju: {kosaraju.metrics}",
        "Engines agree: " + ("yes" if tarjan.components == kosaraju.components else "NO"),
        f"Components ({tarjan.num_components}):",
    ]
    lines += [f"  C{c}: {comp}" for c, comp in enumerate(tarjan.components)]
    lines += [
        f"Condensation: {cond.n} nodes, {cond.num_edges} edges",
        f"Kahn order (condensation): {topo.order}",
        f"  {topo.metrics}",
        f"DFS order (condensation): {dfs_topological_order(cond)}",
        f"Task order: {tarjan.task_order(topo.order)}",
    ]

    graph_topo = topological_sort(graph)
    if graph.n == 0:
        return "\n".join(lines + ["Paths: empty graph."])
    if graph_topo.is_dag:
        target, order, unit = graph, graph_topo.order, "vertex"
    elif tarjan.is_dag_partition():
        return "\n".join(lines + ["Paths: skipped, the graph has self-loops."])
    else:
        target, order, unit = cond, topo.order, "component"

    source = graph.source if graph.source is not None else 0
    if target is cond:
        source = tarjan.component_of(source)
    sp = dag_shortest_paths(target, order, source)
    lp = dag_longest_paths(target, order)

    lines.append(f"Shortest paths from {unit} {source} ({sp.metrics}):")
    for v in range(target.n):
        d = sp.distance(v)
        lines.append(f"  {v}: " + ("unreachable" if d is None else f"{d}  via {sp.path(v)}"))
    lines.append(f"Longest paths ({lp.metrics}):")
    for v in range(target.n):
        lines.append(f"  {v}: {lp.distance(v)}  via {lp.path(v)}")
    lines.append(f"Critical path: {lp.critical_path} (length {lp.critical_length})")
    return "\n".join(lines)
