"""
tests/test_io.py - Tests for track, progress and summary outputs and the CLI.
"""

import csv
import json

import numpy as np
import pytest

from replisim.config.simulation_config import SimulationConfig
from replisim.io.output_io import load_track_csv, save_progress_csv, save_run_summary, save_track_csv
from replisim.models.track import SegmentTrack
from replisim.replication.replication_simulator import ReplicationSimulator

import run_simulation


class TestTrackCsv:

    def test_writes_non_empty_segments(self, tmp_path):
        track = SegmentTrack.from_lengths([0, 25, 11, 64], max_forks=2)
        path = tmp_path / "nested" / "track.csv"
        save_track_csv(track, path)
        rows = load_track_csv(path)
        assert [row["status"] for row in rows] == ["unreplicated", "replicated", "unreplicated"]
        assert [int(row["start_bp"]) for row in rows] == [0, 25, 36]
        assert [int(row["end_bp"]) for row in rows] == [25, 36, 100]
        assert sum(int(row["length_bp"]) for row in rows) == 100

    def test_load_rejects_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("segment_index,status,start_bp,end_bp,length_bp\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_track_csv(path)


class TestProgressCsv:

    def test_fraction_column(self, tmp_path):
        path = tmp_path / "progress.csv"
        save_progress_csv([80, 40, 0], 100, path)
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [int(r["iteration"]) for r in rows] == [1, 2, 3]
        assert [float(r["replicated_fraction"]) for r in rows] == pytest.approx([0.2, 0.6, 1.0])

    def test_rejects_bad_genome_length(self, tmp_path):
        with pytest.raises(ValueError):
            save_progress_csv([1], 0, tmp_path / "p.csv")


class TestRunSummary:

    def test_summary_contents(self, tmp_path):
        cfg = SimulationConfig(genome_length=5_000, replication_rate=10, random_seed=3, max_forks=4)
        simulator = ReplicationSimulator.from_config(cfg)
        result = simulator.run(cfg.g_phase_threshold, np.random.default_rng(cfg.random_seed))
        path = tmp_path / "summary.json"
        save_run_summary(result, cfg, path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["iterations"] == result.iterations
        assert payload["config"]["max_forks"] == 4
        assert payload["final_track"][0] == 5_000
        assert len(payload["final_track"]) == 11


class TestCli:

    def test_main_writes_outputs(self, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "genome_length: 20000\n"
            "replication_rate: 25\n"
            "max_forks: 6\n"
            "random_seed: 1701\n"
            "out_path: out/track.csv\n",
            encoding="utf-8",
        )
        run_simulation.main(["--config", str(config_path), "--log-level", "WARNING"])
        out = capsys.readouterr().out
        assert "Converged in" in out
        assert (tmp_path / "out" / "track.csv").exists()
        assert (tmp_path / "out" / "track_progress.csv").exists()
        assert (tmp_path / "out" / "track_summary.json").exists()
        rows = load_track_csv(tmp_path / "out" / "track.csv")
        assert rows == [
            {"segment_index": "0", "status": "replicated", "start_bp": "0", "end_bp": "20000", "length_bp": "20000"}
        ]

    def test_main_without_out_path(self, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "genome_length: 2000\nreplication_rate: 10\nmax_forks: 2\nrandom_seed: 5\n",
            encoding="utf-8",
        )
        run_simulation.main(["--config", str(config_path)])
        out = capsys.readouterr().out
        assert "Entered S phase after" in out
        assert "Wrote" not in out
