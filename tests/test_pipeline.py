"""Tests for the batch analysis pipeline and the text/figure reports."""

import logging

import pandas as pd
import pytest

from sccdag.graph import Graph
from sccdag.graph_io import save_graph
from sccdag.pipeline import PATH_COLUMNS, RESULTS_CSV, analyze_graph, run_analysis, summarize
from sccdag.report import describe_graph, format_report, plot_scc_timings, write_report


def _chain() -> Graph:
    return Graph.from_edges(4, [(0, 1, 2), (1, 2, 3), (2, 3, 1)], source=0)


def _three_cycle() -> Graph:
    return Graph.from_edges(5, [(0, 1, 1), (1, 2, 2), (2, 3, 3), (3, 1, 1), (3, 4, 2)], source=0)


class TestAnalyzeGraph:
    def test_dag_row(self) -> None:
        row = analyze_graph(_chain(), name="chain")
        assert row["dataset"] == "chain"
        assert row["type"] == "DAG"
        assert row["sccs"] == 4
        assert row["tarjan_dfs_visits"] == 4
        assert row["kosaraju_dfs_visits"] == 8
        assert row["condensation_is_dag"]
        assert row["max_distance"] == 6
        assert row["critical_length"] == 6
        assert row["paths_on"] == "graph"
        assert row["critical_path"] == "0 -> 1 -> 2 -> 3"
        assert row["sp_relaxations"] == 3
        assert row["density"] == pytest.approx(3 / 12)

    def test_cyclic_row_paths_on_condensation(self) -> None:
        row = analyze_graph(_three_cycle(), name="cyc")
        assert row["type"] == "Cyclic"
        assert row["sccs"] == 3
        assert row["largest_scc"] == 3
        assert row["condensation_nodes"] == 3
        assert row["condensation_edges"] == 2
        assert row["condensation_is_dag"]
        assert row["topo_pushes"] == 3
        assert row["paths_on"] == "condensation"
        assert row["max_distance"] == 3
        assert row["sp_relaxations"] == 2
        assert row["critical_length"] == 3
        assert row["critical_path"] == "{0} -> {1,2,3} -> {4}"

    def test_cyclic_source_maps_to_its_component(self) -> None:
        g = _three_cycle()
        g.source = 2
        row = analyze_graph(g)
        assert row["max_distance"] == 2
        assert row["sp_relaxations"] == 1

    def test_self_loop_singletons_get_no_paths(self, caplog) -> None:
        g = Graph.from_edges(2, [(0, 1, 1), (1, 1, 1)])
        with caplog.at_level(logging.WARNING, logger="sccdag.pipeline"):
            row = analyze_graph(g, name="loop")
        assert row["type"] == "DAG"
        assert row["sccs"] == 2
        assert row["condensation_edges"] == 1
        for col in PATH_COLUMNS:
            assert row[col] is None
        assert "loop: singleton SCCs" in caplog.text

    def test_missing_source_defaults_to_zero(self) -> None:
        g = Graph.from_edges(3, [(0, 1, 4), (1, 2, 4)])
        assert analyze_graph(g)["max_distance"] == 8

    def test_empty_graph(self) -> None:
        row = analyze_graph(Graph(0))
        assert row["sccs"] == 0
        assert row["density"] == 0.0
        assert row["paths_on"] is None
        assert row["critical_length"] is None


class TestRunAnalysis:
    def test_collects_rows_and_writes_csv(self, tmp_path) -> None:
        data = tmp_path / "data"
        save_graph(_chain(), data / "chain.json")
        save_graph(_three_cycle(), data / "cyc.json")
        (data / "broken.json").write_text("[1, 2", encoding="utf-8")

        paths = sorted(data.glob("*.json")) + [data / "missing.json"]
        df = run_analysis(paths, outputs_dir=tmp_path / "out", progress=False)

        assert list(df["dataset"]) == ["chain.json", "cyc.json"]
        csv = pd.read_csv(tmp_path / "out" / RESULTS_CSV)
        assert list(csv["sccs"]) == [4, 3]

    def test_skips_file_that_is_not_utf8(self, tmp_path) -> None:
        save_graph(_chain(), tmp_path / "a.json")
        (tmp_path / "b.json").write_bytes(b'{"n": 2, "edges": []}\xff\xfe')
        df = run_analysis(sorted(tmp_path.glob("*.json")), progress=False)
        assert list(df["dataset"]) == ["a.json"]

    def test_no_inputs(self) -> None:
        df = run_analysis([], progress=False)
        assert df.empty
        assert summarize(df)["datasets"] == 0

    def test_summary(self, tmp_path) -> None:
        save_graph(_chain(), tmp_path / "a.json")
        save_graph(_three_cycle(), tmp_path / "b.json")
        df = run_analysis(sorted(tmp_path.glob("*.json")), progress=False)
        s = summarize(df)
        assert s["datasets"] == 2
        assert 0 <= s["tarjan_faster"] <= 2
        assert s["avg_tarjan_ms"] >= 0.0


class TestReport:
    @pytest.fixture
    def results(self, tmp_path) -> pd.DataFrame:
        save_graph(_chain(), tmp_path / "a.json")
        save_graph(_three_cycle(), tmp_path / "b.json")
        return run_analysis(sorted(tmp_path.glob("*.json")), progress=False)

    def test_report_has_all_tables(self, results: pd.DataFrame) -> None:
        text = format_report(results)
        for n in range(1, 6):
            assert f"Table {n}:" in text
        assert "0 -> 1 -> 2 -> 3" in text
        assert "Tarjan faster in:" in text

    def test_empty_report(self) -> None:
        assert format_report(pd.DataFrame()) == "No datasets analyzed."

    def test_write_report_and_plot(self, results: pd.DataFrame, tmp_path) -> None:
        report = write_report(results, tmp_path / "out" / "summary.md")
        assert report.read_text(encoding="utf-8").startswith("### Table 1")
        fig = plot_scc_timings(results, tmp_path / "out" / "figures" / "scc.png")
        assert fig.exists() and fig.stat().st_size > 0


class TestDescribeGraph:
    def test_dag_paths_on_vertices(self) -> None:
        text = describe_graph(_chain(), name="chain")
        assert text.startswith("=== chain: 4 nodes, 3 edges ===")
        assert "Engines agree: yes" in text
        assert "Task order: [0, 1, 2, 3]" in text
        assert "Shortest paths from vertex 0" in text
        assert "  3: 6  via [0, 1, 2, 3]" in text
        assert "Critical path: [0, 1, 2, 3] (length 6)" in text

    def test_cyclic_paths_on_components(self) -> None:
        text = describe_graph(_three_cycle(), name="cyc")
        assert "  C1: [1, 2, 3]" in text
        assert "Condensation: 3 nodes, 2 edges" in text
        assert "Kahn order (condensation): [0, 1, 2]" in text
        assert "DFS order (condensation): [0, 1, 2]" in text
        assert "Task order: [0, 1, 2, 3, 4]" in text
        assert "Shortest paths from component 0" in text
        assert "  2: 3  via [0, 1, 2]" in text
        assert "Critical path: [0, 1, 2] (length 3)" in text

    def test_unreachable_vertex(self) -> None:
        g = Graph.from_edges(3, [(1, 2, 5)], source=0)
        text = describe_graph(g)
        assert "  1: unreachable" in text
        assert "Critical path: [1, 2] (length 5)" in text

    def test_self_loop_and_empty(self) -> None:
        assert "self-loops" in describe_graph(Graph.from_edges(2, [(0, 1, 1), (1, 1, 1)]))
        assert describe_graph(Graph(0)).endswith("Paths: empty graph.")
