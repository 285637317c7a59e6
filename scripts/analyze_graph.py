#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sccdag.graph_io import load_graph
from sccdag.report import describe_graph


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Print components, condensation, orders and DAG paths of one JSON task graph.")
    ap.add_argument("graph", help="Path to a *.json graph.")
    ap.add_argument("--source", type=int, default=None,
                    help="Shortest-path source (default: the graph's own source, else 0).")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity.")
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.graph)
    graph = load_graph(path)
    if args.source is not None:
        graph.source = args.source

    print(describe_graph(graph, name=path.name))


if __name__ == "__main__":
    main()
