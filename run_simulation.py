from __future__ import annotations

import argparse
import logging
import pathlib
from typing import Sequence

import numpy as np

from replisim.io.config_io import load_simulation_config
from replisim.io.output_io import save_progress_csv, save_run_summary, save_track_csv
from replisim.replication.replication_simulator import ReplicationSimulator


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run stochastic chromosome replication simulation.")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to simulation YAML config (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args(argv)


def _sibling_path(out_path: pathlib.Path, suffix: str, extension: str) -> pathlib.Path:
    return out_path.with_name(out_path.stem + suffix + extension)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sim_config = load_simulation_config(args.config)

    simulator = ReplicationSimulator.from_config(sim_config)
    print(f"Position 0 replicated before S phase: {simulator.contains(0)}")
    print(f"Fully replicated before S phase: {simulator.is_complete()}")

    rng = np.random.default_rng(sim_config.random_seed)
    result = simulator.run(sim_config.g_phase_threshold, rng)

    print(f"Entered S phase after {result.warmup_iterations} warmups")
    print(f"Time taken: {result.elapsed_s:.2f}s")
    print(f"Converged in {result.iterations} iterations to: {result.track.tolist()}")

    if sim_config.out_path is not None:
        out_path = pathlib.Path(sim_config.out_path)
        save_track_csv(simulator.track, out_path)
        print(f"Wrote final track to {out_path}")

        progress_path = _sibling_path(out_path, "_progress", ".csv")
        save_progress_csv(result.progress, sim_config.genome_length, progress_path)
        print(f"Wrote per-iteration progress to {progress_path}")

        summary_path = _sibling_path(out_path, "_summary", ".json")
        save_run_summary(result, sim_config, summary_path)
        print(f"Wrote run summary to {summary_path}")


if __name__ == "__main__":
    main()
