"""Tests for the command line entry point."""

import logging

import pytest
from matplotlib.figure import Figure

from ada_staking_simulator import main


@pytest.fixture
def pool_in_cwd(tmp_path, monkeypatch, write_pool_file, pool_document):
    """Write pool.json into a temporary working directory."""
    monkeypatch.chdir(tmp_path)
    write_pool_file(pool_document)
    return tmp_path


class TestMain:
    """Tests for main()."""

    def test_default_run(self, pool_in_cwd, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out

        assert "Initial ADA Per Year (Excluding Compounding Interest): " in out
        assert "Starting Result: 1000.0 ADA @ $0.50 = $500.00" in out
        assert "Final Result:" in out
        assert "[Pay Day:" not in out
        assert list(pool_in_cwd.glob("*.csv")) == []
        assert list(pool_in_cwd.glob("*.svg")) == []

    def test_verbose(self, pool_in_cwd, capsys):
        assert main(["--verbose"]) == 0
        out = capsys.readouterr().out

        assert "Day 0: 1000.0 ADA" in out
        assert "[Pay Day: Yes]" in out
        # 2 years -> 731 days, one line per day after day 0
        assert out.count("[Pay Day:") == 730

    def test_exports_to_working_directory(self, pool_in_cwd, capsys):
        assert main(["-g", "-G"]) == 0
        out = capsys.readouterr().out

        assert "CSV will be saved in current working directory." in out
        assert len(list(pool_in_cwd.glob("raw_ada_calc_data_*.csv"))) == 1
        assert len(list(pool_in_cwd.glob("ada_growth_graph_*.svg"))) == 1

    def test_exports_to_output_dir(self, pool_in_cwd, capsys):
        out_dir = pool_in_cwd / "out"
        out_dir.mkdir()

        assert main(["--generate_csv", "--output-dir", str(out_dir)]) == 0

        assert f"CSV will be saved in {out_dir}." in capsys.readouterr().out
        assert len(list(out_dir.glob("raw_ada_calc_data_*.csv"))) == 1

    def test_explicit_config_path(self, tmp_path, monkeypatch, write_pool_file, pool_document, capsys):
        monkeypatch.chdir(tmp_path)
        path = write_pool_file(pool_document, name="bull.json")

        assert main(["--config", str(path)]) == 0
        assert "Final Result:" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, monkeypatch, capsys, caplog):
        monkeypatch.chdir(tmp_path)

        with caplog.at_level(logging.ERROR):
            assert main([]) == 1

        assert "Failed to find pool.json" in caplog.text
        assert "Final Result:" not in capsys.readouterr().out

    def test_malformed_config(self, tmp_path, monkeypatch, write_pool_file, caplog):
        monkeypatch.chdir(tmp_path)
        write_pool_file("{ not json")

        with caplog.at_level(logging.ERROR):
            assert main([]) == 1

        assert "Failed to parse" in caplog.text

    def test_invalid_config(self, tmp_path, monkeypatch, write_pool_file, pool_document, caplog):
        monkeypatch.chdir(tmp_path)
        pool_document["epoch_in_days"] = 0
        write_pool_file(pool_document)

        with caplog.at_level(logging.ERROR):
            assert main([]) == 1

        assert "epoch_days must be positive" in caplog.text

    def test_overflowing_years_exits_cleanly(self, tmp_path, monkeypatch, write_pool_file, pool_document, caplog):
        monkeypatch.chdir(tmp_path)
        pool_document["years_holding"] = 1e308
        write_pool_file(pool_document)

        with caplog.at_level(logging.ERROR):
            assert main([]) == 1

        assert "overflows the simulated day count" in caplog.text

    def test_export_failure_is_not_fatal(self, pool_in_cwd, capsys, caplog):
        missing = pool_in_cwd / "missing"

        with caplog.at_level(logging.ERROR):
            assert main(["-g", "-G", "-o", str(missing)]) == 0

        assert "Final Result:" in capsys.readouterr().out
        assert "Failed to Write CSV" in caplog.text
        assert "Failed to Write SVG" in caplog.text
        assert "raw_ada_calc_data_" in caplog.text

    def test_graph_render_failure_is_not_fatal(self, pool_in_cwd, monkeypatch, capsys, caplog):
        def broken_savefig(self, *args, **kwargs):
            raise RuntimeError("renderer exploded")

        monkeypatch.setattr(Figure, "savefig", broken_savefig)

        with caplog.at_level(logging.ERROR):
            assert main(["-G"]) == 0

        assert "Final Result:" in capsys.readouterr().out
        assert "renderer exploded" in caplog.text
        assert list(pool_in_cwd.glob("*.svg")) == []

    def test_zero_principal_reports_na(self, pool_in_cwd, write_pool_file, pool_document, capsys):
        pool_document["ada"] = 0.0
        write_pool_file(pool_document)

        assert main([]) == 0
        assert "Yield: N/A of initial (Gainz: N/A)" in capsys.readouterr().out

    def test_sensitivity(self, pool_in_cwd, capsys):
        assert main(["--sensitivity"]) == 0
        out = capsys.readouterr().out

        assert "SUMMARY REPORT" in out
        assert "ANNUAL YIELD × DAILY PRICE MULTIPLIER" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "ada-staking" in capsys.readouterr().out
