from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from .errors import GraphFormatError
from .graph import Graph

_INT64 = np.iinfo(np.int64)


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GraphFormatError(f"Field {field!r} must be an integer, got {value!r}.")
    return value


def _as_weight(value: Any, field: str) -> int:
    w = _as_int(value, field)
    if not _INT64.min <= w <= _INT64.max:
        raise GraphFormatError(f"Field {field!r} does not fit in a 64-bit integer: {w}.")
    return w


def graph_from_dict(data: Dict[str, Any]) -> Graph:
    """Build a Graph from the JSON document layout.

    Expected keys: "n" (required), "edges" (list of {"u", "v", "w"}),
    "directed" (default True), "source" and "weight_model" (optional).
    A missing "w" means weight 1.
    """
    if not isinstance(data, dict):
        raise GraphFormatError(f"Graph document must be an object, got {type(data).__name__}.")
    if "n" not in data:
        raise GraphFormatError("Graph document has no vertex count 'n'.")
    n = _as_int(data["n"], "n")
    if n < 0:
        raise GraphFormatError(f"Vertex count must be non-negative, got {n}.")

    source = data.get("source")
    if source is not None:
        source = _as_int(source, "source")
        if not 0 <= source < n:
            raise GraphFormatError(f"Source vertex {source} out of range [0, {n}).")

    directed = data.get("directed", True)
    if not isinstance(directed, bool):
        raise GraphFormatError(f"Field 'directed' must be a boolean, got {directed!r}.")

    weight_model = data.get("weight_model")
    g = Graph(n, directed, source=source,
              weight_model=None if weight_model is None else str(weight_model))

    edges = data.get("edges", [])
    if not isinstance(edges, list):
        raise GraphFormatError("Field 'edges' must be a list.")
    for i, e in enumerate(edges):
        if not isinstance(e, dict) or "u" not in e or "v" not in e:
            raise GraphFormatError(f"Edge #{i} must be an object with 'u' and 'v': {e!r}.")
        u = _as_int(e["u"], f"edges[{i}].u")
        v = _as_int(e["v"], f"edges[{i}].v")
        w = _as_weight(e.get("w", 1), f"edges[{i}].w")
        try:
            g.add_edge(u, v, w)
        except IndexError as exc:
            raise GraphFormatError(f"Edge #{i}: {exc}") from exc
    return g


def graph_to_dict(graph: Graph) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "directed": graph.directed,
        "n": graph.n,
        "edges": [{"u": u, "v": v, "w": w} for u, v, w in graph.edges()],
    }
    if graph.source is not None:
        data["source"] = graph.source
    if graph.weight_model is not None:
        data["weight_model"] = graph.weight_model
    return data


def load_graph(path: Union[str, Path]) -> Graph:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise GraphFormatError(f"{path}: not a UTF-8 JSON document ({exc})") from exc
    return graph_from_dict(data)


def save_graph(graph: Graph, path: Union[str, Path], *, indent: int = 2) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(graph_to_dict(graph), f, indent=indent)
    return path
