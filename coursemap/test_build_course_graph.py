"""Tests for the command line graph builder."""

import json
import sys

import pandas as pd
import pytest

import build_course_graph


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["build_course_graph.py", *args])
    build_course_graph.main()


def write_catalog(tmp_path, records):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


class TestMain:

    def test_writes_graph_and_node_table(self, tmp_path, monkeypatch, sample_records):
        out = tmp_path / "graph.json"
        nodes_csv = tmp_path / "nodes.csv"
        run(monkeypatch,
            "--catalog", write_catalog(tmp_path, sample_records),
            "--course", "COMP2611",
            "--out", str(out),
            "--nodes-csv", str(nodes_csv))

        payload = json.loads(out.read_text(encoding="utf-8"))
        assert len(payload["nodes"]) == 11
        assert len(payload["edges"]) == 10

        table = pd.read_csv(nodes_csv)
        assert len(table) == 11
        assert table.iloc[-1]["Course Code"] == "COMP2611"
        assert bool(table.iloc[-1]["Master"])

    def test_options(self, tmp_path, monkeypatch, sample_records):
        out = tmp_path / "graph.json"
        run(monkeypatch,
            "--catalog", write_catalog(tmp_path, sample_records),
            "--course", "COMP2611",
            "--out", str(out),
            "--max-prereq-depth", "1",
            "--no-exclusions",
            "--no-corequisites")

        ids = {node["id"] for node in json.loads(out.read_text(encoding="utf-8"))["nodes"]}
        assert "MATH1003" not in ids
        assert "ELEC2300" not in ids
        assert "COMP2711" not in ids

    def test_unknown_course(self, tmp_path, monkeypatch, sample_records, capsys):
        out = tmp_path / "graph.json"
        run(monkeypatch,
            "--catalog", write_catalog(tmp_path, sample_records),
            "--course", "NOPE1234",
            "--out", str(out))

        assert json.loads(out.read_text(encoding="utf-8")) == {"nodes": [], "edges": []}
        assert "not found" in capsys.readouterr().out

    @pytest.mark.parametrize("option", ["--max-prereq-depth", "--max-postreq-depth"])
    def test_invalid_depth(self, tmp_path, monkeypatch, sample_records, capsys, option):
        out = tmp_path / "graph.json"
        with pytest.raises(SystemExit) as exc:
            run(monkeypatch,
                "--catalog", write_catalog(tmp_path, sample_records),
                "--out", str(out),
                option, "0")

        assert exc.value.code == 2
        err = capsys.readouterr().err
        assert "invalid graph options" in err
        assert "greater than or equal to 1" in err
        assert not out.exists()
