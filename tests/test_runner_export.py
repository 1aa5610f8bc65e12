"""
Tests for the headless runner, exporters and CLI.
"""

import io
import json

import numpy as np
import pandas as pd
import pytest
import yaml

from spring_grid.cli import main
from spring_grid.config import CanvasConfig, GraphConfig, LayoutConfig, OutputConfig, RunConfig
from spring_grid.core.compute import SerialBackend
from spring_grid.exporters import (
    POSITION_COLUMNS,
    TICK_COLUMNS,
    CsvExportStrategy,
    ExportManager,
    MetadataExportStrategy,
)
from spring_grid.graph import build_ring
from spring_grid.runner import LayoutRunner, TickRecord, run_layout


def small_config(**run_kwargs):
    run = dict(ticks=20, backend="numpy", record_every=5)
    run.update(run_kwargs)
    return LayoutConfig(
        canvas=CanvasConfig(seed=7),
        graph=GraphConfig(kind="ring", nodes=6),
        run=RunConfig(**run),
        output=OutputConfig(run_name="test_run"),
    )


class TestRunner:
    """LayoutRunner / run_layout."""

    def test_records_every_n_ticks(self):
        result = run_layout(small_config())
        assert [rec.tick for rec in result.records] == [5, 10, 15, 20]
        assert result.ticks_run == 20
        assert result.node_count == 6
        assert result.link_count == 12
        assert result.backend_name == "numpy"
        assert set(result.final_positions) == set(range(6))

    def test_last_tick_always_recorded(self):
        result = run_layout(small_config(ticks=10, record_every=3))
        assert [rec.tick for rec in result.records] == [3, 6, 9, 10]

    def test_displacements_non_negative(self):
        result = run_layout(small_config(record_every=1))
        for rec in result.records:
            assert 0.0 <= rec.mean_displacement <= rec.max_displacement
            assert rec.kinetic_proxy >= 0.0

    def test_seeded_runs_repeat(self):
        first = run_layout(small_config())
        second = run_layout(small_config())
        assert first.final_positions == second.final_positions

    def test_final_positions_match_graph(self):
        graph = build_ring(5)
        result = LayoutRunner(small_config(), graph=graph).run()
        assert result.final_positions == graph.positions()

    def test_empty_graph(self):
        config = small_config()
        config.graph = GraphConfig(kind="ring", nodes=0)
        result = run_layout(config)
        assert result.ticks_run == 0
        assert result.records == []

    def test_injected_backend(self):
        backend = SerialBackend()
        result = LayoutRunner(small_config(ticks=2, record_every=1), backend=backend).run()
        assert result.backend_name == "serial"
        assert len(result.records) == 2

    def test_threads_backend(self):
        result = run_layout(small_config(backend="threads", workers=2))
        assert result.backend_name == "threads"
        assert result.ticks_run == 20

    def test_tick_record_from_grids(self):
        before = np.array([[[0.0, 0.0], [0.0, 0.0]], [[-1.0, -1.0], [-1.0, -1.0]]])
        after = np.array([[[3.0, 4.0], [0.0, 1.0]], [[-1.0, -1.0], [-1.0, -1.0]]])
        rec = TickRecord.from_grids(1, before, after, node_count=2)
        assert rec.max_displacement == pytest.approx(5.0)
        assert rec.mean_displacement == pytest.approx(3.0)
        assert rec.kinetic_proxy == pytest.approx(26.0)


class TestExporters:
    """Export strategies and manager."""

    @pytest.fixture
    def result(self):
        return run_layout(small_config())

    def test_csv_export(self, result):
        files = dict(CsvExportStrategy().generate_export(result))
        assert set(files) == {"ticks.csv", "positions.csv"}

        ticks = pd.read_csv(io.BytesIO(files["ticks.csv"]))
        assert list(ticks.columns) == TICK_COLUMNS
        assert ticks["tick"].tolist() == [5, 10, 15, 20]

        positions = pd.read_csv(io.BytesIO(files["positions.csv"]))
        assert list(positions.columns) == POSITION_COLUMNS
        assert len(positions) == 6

    def test_metadata_export(self, result):
        [(filename, content)] = MetadataExportStrategy().generate_export(result)
        assert filename == "metadata.json"
        metadata = json.loads(content)
        assert metadata["backend"] == "numpy"
        assert metadata["summary"]["node_count"] == 6
        assert metadata["summary"]["ticks_run"] == 20
        assert metadata["config"]["graph"]["kind"] == "ring"
        assert metadata["feature_flags"]["DETECT_STALE_ENCODING"] is True

    def test_manager_writes_files(self, result, tmp_path, memory_log):
        paths = ExportManager().export(result, tmp_path, "run1")
        assert set(paths) == {"ticks.csv", "positions.csv", "metadata.json"}
        for path in paths.values():
            assert path.parent == tmp_path / "run1"
            assert path.exists()
        assert any("Saved file" in m for m in memory_log.messages())

    def test_manager_with_explicit_strategies(self, result, tmp_path):
        paths = ExportManager().export(result, tmp_path, "run2", strategies=[MetadataExportStrategy()])
        assert list(paths) == ["metadata.json"]

    def test_manager_rejects_file_as_folder(self, result, tmp_path):
        (tmp_path / "clash").write_text("occupied")
        with pytest.raises(ValueError):
            ExportManager().export(result, tmp_path, "clash")


class TestCli:
    """spring-grid command line."""

    def write_config(self, tmp_path, **run):
        data = {
            "graph": {"kind": "ring", "nodes": 5},
            "run": {"ticks": 4, "backend": "numpy", **run},
            "output": {"out_dir": str(tmp_path / "default_out"), "run_name": "cli_run"},
        }
        path = tmp_path / "layout.yaml"
        path.write_text(yaml.safe_dump(data))
        return path

    def run_cli(self, tmp_path, *args):
        with pytest.raises(SystemExit) as exc_info:
            main([*args, "--log-file", str(tmp_path / "spring_grid.log")])
        return exc_info.value.code

    def test_full_run(self, tmp_path):
        config = self.write_config(tmp_path)
        code = self.run_cli(tmp_path, "--config", str(config), "--out", str(tmp_path / "out"), "--quiet")
        assert code == 0
        out = tmp_path / "out" / "cli_run"
        assert (out / "ticks.csv").exists()
        assert (out / "positions.csv").exists()
        assert (out / "metadata.json").exists()
        assert (tmp_path / "spring_grid.log").exists()

    def test_overrides(self, tmp_path, capsys):
        config = self.write_config(tmp_path)
        code = self.run_cli(tmp_path, "-c", str(config), "-n", "renamed", "--ticks", "2", "--backend", "SERIAL")
        assert code == 0
        metadata = json.loads((tmp_path / "default_out" / "renamed" / "metadata.json").read_text())
        assert metadata["backend"] == "serial"
        assert metadata["summary"]["ticks_run"] == 2
        assert "LAYOUT COMPLETE" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        code = self.run_cli(tmp_path, "--config", str(tmp_path / "nope.yaml"))
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_override(self, tmp_path, capsys):
        config = self.write_config(tmp_path)
        code = self.run_cli(tmp_path, "--config", str(config), "--ticks", "0")
        assert code == 1
        assert "ticks" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("run:\n  backend: gpu\n")
        assert self.run_cli(tmp_path, "--config", str(path)) == 1
