#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sccdag.datasets import DEFAULT_SEED, generate_datasets
from sccdag.pipeline import RESULTS_CSV, run_analysis
from sccdag.report import format_report, plot_scc_timings, write_report


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Run SCC, condensation, topological sort and DAG path analysis on JSON task graphs.")

    ap.add_argument("--data-dir", default="data", help="Directory holding the *.json graphs.")
    ap.add_argument("--outputs-dir", default="outputs", help="Directory to save CSV/report/figures.")
    ap.add_argument("--generate", action="store_true",
                    help="Synthesize the nine preset datasets into --data-dir first.")
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed for --generate.")
    ap.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    ap.add_argument("--no-plot", action="store_true", help="Skip the timing figure.")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity.")

    args = ap.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    data_dir = Path(args.data_dir)
    outputs_dir = Path(args.outputs_dir)

    if args.generate:
        for p in generate_datasets(data_dir, seed=args.seed):
            print("Generated:", p)

    paths = sorted(data_dir.glob("*.json"))
    if not paths:
        print(f"No *.json graphs found in {data_dir} (try --generate).")
        return

    results = run_analysis(paths, outputs_dir=outputs_dir, progress=not args.no_progress)

    print(format_report(results))
    report_path = write_report(results, outputs_dir / "results_summary.md")
    print("Saved:", outputs_dir / RESULTS_CSV)
    print("Saved:", report_path)

    if not args.no_plot and not results.empty:
        fig = plot_scc_timings(results, outputs_dir / "figures" / "scc_timings.png")
        print("Saved figure:", fig)


if __name__ == "__main__":
    main()
