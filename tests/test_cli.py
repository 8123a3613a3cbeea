"""
Tests for the command-line entry point.
"""

import pytest

from spring_sim.cli import build_parser, main


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setenv("SPRING_SIM_LOG_PATH", str(tmp_path / "cli_log.txt"))


class TestParser:

    def test_config_or_preset_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_config_and_preset_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--config", "a.yaml", "--preset", "undamped"])


class TestMain:

    def test_preset_run(self, tmp_path):
        out = tmp_path / "out"
        with pytest.raises(SystemExit) as exc_info:
            main(["--preset", "undamped", "--out", str(out), "--name", "run", "--t-end", "0.5", "-q"])

        assert exc_info.value.code == 0
        lines = (out / "run.csv").read_text().splitlines()
        # ceil(0.5 / 0.016) = 32 ticks, plus the t = 0 sample and the header
        assert len(lines) == 34
        assert lines[0] == "t,x,v,a,KE,PE,E"
        assert (out / "run_metadata.json").exists()

    def test_config_file_run(self, tmp_path, capsys):
        config = tmp_path / "c.yaml"
        config.write_text(
            "model:\n  mass: 1.0\n  spring_constant: 4.0\n"
            "dynamics:\n  dt: 0.1\n  t_end: 1.0\n"
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config), "--out", str(tmp_path), "--name", "c", "--no-header"])

        assert exc_info.value.code == 0
        assert "SIMULATION COMPLETE" in capsys.readouterr().out
        assert len((tmp_path / "c.csv").read_text().splitlines()) == 11

    def test_missing_config_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("model:\n  mass: -1.0\n  spring_constant: 4.0\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config)])
        assert exc_info.value.code == 1
        assert "mass" in capsys.readouterr().err

    def test_non_positive_t_end(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--preset", "undamped", "--out", str(tmp_path), "--t-end", "0"])
        assert exc_info.value.code == 1

    def test_infinite_t_end_exits_cleanly(self, tmp_path, capsys):
        config = tmp_path / "forever.yaml"
        config.write_text(
            "model:\n  mass: 1.0\n  spring_constant: 20.0\n"
            "dynamics:\n  t_end: .inf\n"
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config), "--out", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "t_end" in capsys.readouterr().err

    def test_prints_natural_period(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--preset", "undamped", "--out", str(tmp_path), "--t-end", "0.1"])
        # 2*pi*sqrt(1/20)
        assert "Natural period: 1.4050 s" in capsys.readouterr().out

    def test_coarse_dt_logged(self, tmp_path):
        config = tmp_path / "coarse.yaml"
        config.write_text(
            "model:\n  mass: 1.0\n  spring_constant: 20.0\n"
            "dynamics:\n  dt: 0.2\n  t_end: 1.0\n"
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config), "--out", str(tmp_path), "-q"])
        assert exc_info.value.code == 0
        log_text = (tmp_path / "cli_log.txt").read_text()
        assert "steps per natural period" in log_text
