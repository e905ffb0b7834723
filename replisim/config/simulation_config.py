"""Simulation configuration for stochastic chromosome replication.

Defines the genome size, the replication machinery limits (concurrent fork cap,
fork speed) and the stochastic parameters (G-phase exit threshold, origin
firing probability) used by the replication simulator.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Mean spacing between licensed origins used to derive max_forks when omitted.
ORIGIN_SPACING_BP = 1_600_000


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration parameters for a single replication run."""
    genome_length: int
    replication_rate: int
    random_seed: int
    max_forks: int | None = field(default=None)
    g_phase_threshold: float = 0.9
    firing_probability: float = 0.1
    max_sampling_attempts: int = 10_000
    max_iterations: int | None = None
    out_path: str | None = None

    def __post_init__(self) -> None:
        if self.genome_length <= 0:
            raise ValueError("genome_length must be positive")
        computed_forks = max(1, self.genome_length // ORIGIN_SPACING_BP)
        object.__setattr__(self, "max_forks", computed_forks if self.max_forks is None else self.max_forks)
        if self.max_forks <= 0:
            raise ValueError("max_forks must be positive")
        if self.replication_rate <= 0:
            raise ValueError("replication_rate must be positive")
        if not 0.0 <= self.g_phase_threshold < 1.0:
            raise ValueError("g_phase_threshold must be in [0, 1)")
        if not 0.0 < self.firing_probability <= 1.0:
            raise ValueError("firing_probability must be in (0, 1]")
        if self.max_sampling_attempts <= 0:
            raise ValueError("max_sampling_attempts must be positive")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive when set")
