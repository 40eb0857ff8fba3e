"""Integration tests for loading, export and the CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bipgraph.cli import app
from bipgraph.core.exceptions import LoadError
from bipgraph.core.graph import BipartiteGraph, from_dict, from_edges, load_json, to_dict, to_dot

BASE_DOC = {"nr1": 3, "nr2": 2, "edges": [[0, 0], [1, 0], [2, 0], [1, 1], [2, 1]]}

runner = CliRunner()


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    """Write the base graph document to disk."""
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(BASE_DOC))
    return path


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    path = tmp_path / "tree.json"
    path.write_text(json.dumps({"edges": [[0, 0], [1, 0], [1, 1]]}))
    return path


class TestLoader:
    """Tests for building graphs from edge lists and documents."""

    def test_from_edges_infers_counts(self) -> None:
        graph = from_edges([(0, 3), (2, 1)])
        assert graph.nr1 == 3
        assert graph.nr2 == 4
        assert graph.num_edges == 2

    def test_from_edges_empty(self) -> None:
        graph = from_edges([])
        assert (graph.nr1, graph.nr2) == (0, 0)

    def test_from_dict(self) -> None:
        graph = from_dict(BASE_DOC)
        assert graph == BipartiteGraph(3, 2, [tuple(e) for e in BASE_DOC["edges"]])

    def test_explicit_counts_keep_isolated_nodes(self) -> None:
        graph = from_dict({"nr1": 5, "nr2": 2, "edges": [[0, 0]]})
        assert graph.nr1 == 5

    def test_to_dict_round_trip(self) -> None:
        graph = from_dict(BASE_DOC)
        assert to_dict(graph) == {
            "nr1": 3,
            "nr2": 2,
            "edges": [[0, 0], [1, 0], [1, 1], [2, 0], [2, 1]],
        }
        assert from_dict(to_dict(graph)) == graph

    def test_load_json(self, graph_file: Path) -> None:
        graph = load_json(graph_file)
        assert graph.num_edges == 5

    @pytest.mark.parametrize(
        "doc",
        [
            [],
            {"edges": "nope"},
            {"edges": [[0, 0, 0]]},
            {"edges": [[0, -1]]},
            {"edges": [[0, True]]},
            {"nr1": "3", "edges": []},
        ],
    )
    def test_malformed_documents(self, doc: object) -> None:
        with pytest.raises(LoadError):
            from_dict(doc)  # type: ignore[arg-type]

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LoadError) as exc_info:
            load_json(path)
        assert "Invalid JSON" in str(exc_info.value)


class TestDotExport:
    """Tests for GraphViz rendering."""

    def test_structure(self) -> None:
        text = to_dot(from_dict(BASE_DOC))
        assert text.startswith("graph G {\n")
        assert text.endswith("}\n")
        assert "subgraph cluster_type1" in text
        assert "subgraph cluster_type2" in text
        assert '\t\tx2 [label="2"];' in text
        assert '\t\ty1 [label="1"];' in text

    def test_edges(self) -> None:
        lines = to_dot(from_dict(BASE_DOC)).splitlines()
        edges = [line.strip() for line in lines if " -- " in line]
        assert edges == ["x0 -- y0;", "x1 -- y0;", "x1 -- y1;", "x2 -- y0;", "x2 -- y1;"]

    def test_empty_graph(self) -> None:
        text = to_dot(BipartiteGraph())
        assert " -- " not in text


class TestCli:
    """Tests for the command line interface."""

    def test_stats_json(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["stats", str(graph_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {
            "nr1": 3,
            "nr2": 2,
            "edges": 5,
            "components": 1,
            "connected": True,
            "tree": False,
        }

    def test_stats_table(self, tree_file: Path) -> None:
        result = runner.invoke(app, ["stats", str(tree_file)])
        assert result.exit_code == 0
        assert "Type-1 nodes" in result.stdout

    def test_neighbors_json(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["neighbors", str(graph_file), "2", "0", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["type"] == 2
        assert [r["node"] for r in data["neighbors"]] == [0, 1, 2]
        assert all(r["dual"] == 0 for r in data["neighbors"])

    def test_neighbors_second_order(self, graph_file: Path) -> None:
        result = runner.invoke(
            app, ["neighbors", str(graph_file), "1", "1", "--second-order", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["second_order"] == [0, 2]

    def test_neighbors_out_of_range(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["neighbors", str(graph_file), "1", "9"])
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_dot_stdout(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["dot", str(graph_file)])
        assert result.exit_code == 0
        assert result.stdout.startswith("graph G {")
        assert result.stdout.count(" -- ") == 5

    def test_dot_to_file(self, graph_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "graph.dot"
        result = runner.invoke(app, ["dot", str(graph_file), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text().startswith("graph G {")

    def test_cycle_reports_cycle(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["cycle", str(graph_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["tree"] is False
        assert len(data["cycle"]) == 4

    def test_cycle_tree(self, tree_file: Path) -> None:
        result = runner.invoke(app, ["cycle", str(tree_file), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"tree": True, "cycle": None}

    def test_cycle_text(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["cycle", str(graph_file)])
        assert result.exit_code == 0
        assert "Not a tree" in result.stdout
        assert "Cycle: " in result.stdout

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"nr1": 1, "nr2": 1, "edges": [[0, 4]]}))
        result = runner.invoke(app, ["stats", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output
