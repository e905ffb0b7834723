"""Input/output helpers for configs, tracks, and run summaries."""

from .config_io import load_simulation_config
from .output_io import (
    load_track_csv,
    save_progress_csv,
    save_run_summary,
    save_track_csv,
)

__all__ = [
    "load_simulation_config",
    "load_track_csv",
    "save_progress_csv",
    "save_run_summary",
    "save_track_csv",
]
