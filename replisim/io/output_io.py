from __future__ import annotations

import csv
import dataclasses
import json
import pathlib
from typing import Sequence

import numpy as np

from replisim.config.simulation_config import SimulationConfig
from replisim.models.track import SegmentTrack
from replisim.replication.replication_simulator import ReplicationResult

_TRACK_FIELDS = ["segment_index", "status", "start_bp", "end_bp", "length_bp"]
_PROGRESS_FIELDS = ["iteration", "unreplicated_bp", "replicated_fraction"]


def _prepare(path: str | pathlib.Path) -> pathlib.Path:
    path_obj = pathlib.Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    return path_obj


def save_track_csv(track: SegmentTrack, path: str | pathlib.Path) -> None:
    """Write one row per non-empty segment of the track."""
    path_obj = _prepare(path)
    with open(path_obj, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_TRACK_FIELDS)
        writer.writeheader()
        for idx, (start, length, replicated) in enumerate(track.segments()):
            writer.writerow(
                {
                    "segment_index": idx,
                    "status": "replicated" if replicated else "unreplicated",
                    "start_bp": start,
                    "end_bp": start + length,
                    "length_bp": length,
                }
            )


def load_track_csv(path: str | pathlib.Path) -> list[dict[str, object]]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [dict(row) for row in reader]
    if not rows:
        raise ValueError(f"No segment rows found in {path}")
    return rows


def save_progress_csv(progress: Sequence[int] | np.ndarray, genome_length: int, path: str | pathlib.Path) -> None:
    """Write the unreplicated length and replicated fraction per iteration."""
    if genome_length <= 0:
        raise ValueError("genome_length must be positive")
    progress_arr = np.asarray(progress, dtype=np.int64)
    path_obj = _prepare(path)
    with open(path_obj, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_PROGRESS_FIELDS)
        writer.writeheader()
        for iteration, unreplicated in enumerate(progress_arr.tolist(), start=1):
            writer.writerow(
                {
                    "iteration": iteration,
                    "unreplicated_bp": unreplicated,
                    "replicated_fraction": 1.0 - unreplicated / genome_length,
                }
            )


def save_run_summary(
    result: ReplicationResult,
    sim_config: SimulationConfig,
    path: str | pathlib.Path,
) -> None:
    """Write run configuration and diagnostics as JSON."""
    payload = {
        "config": dataclasses.asdict(sim_config),
        "iterations": result.iterations,
        "warmup_iterations": result.warmup_iterations,
        "origins_fired": result.origins_fired,
        "merge_events": result.merge_events,
        "elapsed_s": result.elapsed_s,
        "final_track": [int(v) for v in result.track],
    }
    path_obj = _prepare(path)
    with open(path_obj, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
