"""
Tests for CSV and metadata export.
"""

import json

import pytest

from spring_sim.config import DynamicsConfig, ModelConfig, OutputConfig, SimulationConfig
from spring_sim.engine import SimEngine
from spring_sim.exporters import CSV_COLUMNS, export_results, write_csv
from spring_sim.model import MassSpringModel
from spring_sim.runner import run_simulation
from spring_sim.timeseries import TimeSeriesLog


@pytest.fixture
def three_sample_log():
    engine = SimEngine(MassSpringModel(), TimeSeriesLog())
    engine.apply_params({"m": 1.0, "k": 20.0, "x0": 0.2, "dt": 0.01})
    engine.step_once()
    engine.step_once()
    return engine.log


class TestCsvSchema:

    def test_columns(self):
        assert CSV_COLUMNS == ["t", "x", "v", "a", "KE", "PE", "E"]

    def test_header_plus_one_line_per_sample(self, three_sample_log, tmp_path):
        path = tmp_path / "run.csv"
        write_csv(three_sample_log, path)

        text = path.read_text()
        lines = text.splitlines()
        assert text.endswith("\n")
        assert len(lines) == 4
        assert lines[0] == "t,x,v,a,KE,PE,E"

    def test_rows_match_log(self, three_sample_log, tmp_path):
        path = tmp_path / "run.csv"
        write_csv(three_sample_log, path)

        rows = path.read_text().splitlines()[1:]
        for sample, line in zip(three_sample_log, rows):
            fields = line.split(",")
            assert len(fields) == 7
            assert float(fields[0]) == sample.time
            assert tuple(float(f) for f in fields[1:]) == sample.values

    def test_no_trailing_delimiter(self, three_sample_log, tmp_path):
        path = tmp_path / "run.csv"
        write_csv(three_sample_log, path)
        assert not any(line.endswith(",") for line in path.read_text().splitlines())

    def test_header_omitted(self, three_sample_log, tmp_path):
        path = tmp_path / "run.csv"
        write_csv(three_sample_log, path, header=None)
        lines = path.read_text().splitlines()
        assert len(lines) == 3
        assert float(lines[0].split(",")[0]) == 0.0

    def test_creates_parent_directories(self, three_sample_log, tmp_path):
        path = tmp_path / "nested" / "dir" / "run.csv"
        write_csv(three_sample_log, path)
        assert path.exists()

    def test_empty_log(self, tmp_path):
        path = tmp_path / "empty.csv"
        write_csv(TimeSeriesLog(), path)
        assert path.read_text() == "t,x,v,a,KE,PE,E\n"


class TestExportResults:

    @pytest.fixture
    def result(self):
        config = SimulationConfig(
            model=ModelConfig(mass=1.0, spring_constant=20.0, damping=0.8, x0=0.2),
            dynamics=DynamicsConfig(dt=0.01, t_end=0.5)
        )
        return run_simulation(config)

    def test_writes_csv_and_metadata(self, result, tmp_path):
        paths = export_results(result, tmp_path, "demo")

        csv_lines = (tmp_path / "demo.csv").read_text().splitlines()
        assert paths["csv"] == str(tmp_path / "demo.csv")
        assert len(csv_lines) == result.log.count() + 1

        with open(paths["metadata"]) as f:
            metadata = json.load(f)
        assert metadata["columns"] == CSV_COLUMNS
        assert metadata["config"]["model"]["damping"] == 0.8
        assert metadata["summary"]["n_steps"] == 50
        assert metadata["summary"]["n_samples"] == 51
        assert "timestamp" in metadata
        assert "git_commit" in metadata

    def test_write_header_false(self, result, tmp_path):
        result.config.output = OutputConfig(write_header=False)
        paths = export_results(result, tmp_path, "bare")
        lines = open(paths["csv"]).read().splitlines()
        assert len(lines) == result.log.count()
        assert lines[0].split(",")[0] == "0.0"
