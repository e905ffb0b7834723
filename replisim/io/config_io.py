from __future__ import annotations

import pathlib
from typing import Any, Mapping

import yaml

from replisim.config.simulation_config import SimulationConfig


def _resolve_path(value: str, base_dir: pathlib.Path) -> pathlib.Path:
    path = pathlib.Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _require(raw: Mapping[str, Any], key: str) -> Any:
    if key not in raw:
        raise ValueError(f"Missing required config field: {key}")
    return raw[key]


def _optional_int(raw: Mapping[str, Any], key: str) -> int | None:
    value = raw.get(key)
    return int(value) if value is not None else None


def load_simulation_config(path: str | pathlib.Path) -> SimulationConfig:
    """Load and validate a replication run configuration from YAML."""
    path = pathlib.Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a YAML mapping: {path}")

    base_dir = path.resolve().parent
    out_path = raw.get("out_path")
    if out_path is not None:
        out_path = _resolve_path(str(out_path), base_dir)

    cfg = SimulationConfig(
        genome_length=int(_require(raw, "genome_length")),
        replication_rate=int(_require(raw, "replication_rate")),
        random_seed=int(_require(raw, "random_seed")),
        max_forks=_optional_int(raw, "max_forks"),
        g_phase_threshold=float(raw.get("g_phase_threshold", 0.9)),
        firing_probability=float(raw.get("firing_probability", 0.1)),
        max_sampling_attempts=int(raw.get("max_sampling_attempts", 10_000)),
        max_iterations=_optional_int(raw, "max_iterations"),
        out_path=str(out_path) if out_path is not None else None,
    )
    return cfg
