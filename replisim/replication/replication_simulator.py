"""Replication simulator for a single chromosome.

A cell first waits in G phase (geometric waiting time), then replicates:
each iteration fires origins at random unreplicated positions while the fork
quota allows, advances every fork by the replication rate, and returns quota
for each pair of converging forks. The run ends when no unreplicated DNA is
left. Termination is guaranteed for a positive rate since unreplicated length
never grows and placements are bounded by the quota.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from time import perf_counter

import numpy as np

from replisim.config.simulation_config import SimulationConfig
from replisim.models.phase import CellPhase, PhaseGate
from replisim.models.track import SegmentTrack
from replisim.stochastic import DEFAULT_FIRING_PROBABILITY, DEFAULT_MAX_ATTEMPTS, OriginSampler

logger = logging.getLogger(__name__)


@dataclass
class ReplicationResult:
    """Outcome of a replication run.

    Attributes:
        track: Final run-length array of the chromosome.
        iterations: Number of replication iterations until completion.
        warmup_iterations: Failed G-phase exit draws before S phase.
        origins_fired: Total origins placed during the run.
        merge_events: Total fork convergences during the run.
        progress: Unreplicated length (bp) after each iteration.
        elapsed_s: Wall-clock duration of the run.
    """
    track: np.ndarray
    iterations: int
    warmup_iterations: int
    origins_fired: int
    merge_events: int
    progress: np.ndarray = field(repr=False)
    elapsed_s: float = 0.0

    def __iter__(self):
        """Unpack as (track, iterations)."""
        yield self.track
        yield self.iterations


class ReplicationSimulator:
    """Stochastic origin firing and fork progression on one chromosome."""

    def __init__(
        self,
        genome_length: int,
        max_forks: int,
        replication_rate: int,
        firing_probability: float = DEFAULT_FIRING_PROBABILITY,
        max_sampling_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_iterations: int | None = None,
    ) -> None:
        if replication_rate <= 0:
            raise ValueError("replication_rate must be positive")
        if max_iterations is not None and max_iterations <= 0:
            raise ValueError("max_iterations must be positive when set")
        self.track = SegmentTrack(genome_length, max_forks)
        self.sampler = OriginSampler(firing_probability, max_sampling_attempts)
        self.gate = PhaseGate()
        self.replication_rate = int(replication_rate)
        self.max_iterations = max_iterations
        self.fork_quota = self.track.max_forks
        self.iterations = 0
        self.origins_fired = 0
        self.merge_events = 0

    @classmethod
    def from_config(cls, sim_config: SimulationConfig) -> "ReplicationSimulator":
        return cls(
            genome_length=sim_config.genome_length,
            max_forks=sim_config.max_forks,
            replication_rate=sim_config.replication_rate,
            firing_probability=sim_config.firing_probability,
            max_sampling_attempts=sim_config.max_sampling_attempts,
            max_iterations=sim_config.max_iterations,
        )

    @property
    def genome_length(self) -> int:
        return self.track.genome_length

    @property
    def phase(self) -> CellPhase:
        return self.gate.phase

    def contains(self, position: int) -> bool:
        """Return True if position has been replicated."""
        return self.track.contains(position)

    def is_complete(self) -> bool:
        return self.track.is_complete()

    def enter_synthesis(self, threshold: float, rng: np.random.Generator) -> int:
        """Run the G-phase gate until the cell enters S phase.

        Returns the number of failed draws before the transition.
        """
        while not self.gate.in_synthesis:
            self.gate.advance(threshold, rng)
        logger.info("Entered S phase after %d warmups", self.gate.iterations)
        return self.gate.iterations

    def _assign_origins(self, rng: np.random.Generator) -> int:
        """Fire origins while quota remains; stop early if no gap can take one."""
        placed = 0
        while self.fork_quota > 0:
            if not self.sampler.sample_and_place(self.track, rng):
                break
            self.fork_quota -= 1
            placed += 1
        self.origins_fired += placed
        return placed

    def step(self, rng: np.random.Generator) -> int:
        """Perform one replication iteration and return its merge count."""
        if not self.gate.in_synthesis:
            raise RuntimeError("Replication cannot start before the cell enters S phase")
        placed = self._assign_origins(rng)
        merged = self.track.grow_and_merge(self.replication_rate)
        self.fork_quota += merged
        self.merge_events += merged
        self.iterations += 1
        logger.debug(
            "Iteration %d: placed=%d merged=%d quota=%d unreplicated=%d",
            self.iterations,
            placed,
            merged,
            self.fork_quota,
            self.track.unreplicated_length(),
        )
        return merged

    def run(self, threshold: float, rng: np.random.Generator) -> ReplicationResult:
        """Run G phase then replicate until the chromosome is fully copied.

        The generator is consumed in order, so reproducing a run requires the
        same seed (or generator state) and the same configuration.
        """
        t_start = perf_counter()
        warmups = self.enter_synthesis(threshold, rng)
        start_iteration = self.iterations
        progress: list[int] = []

        while not self.track.is_complete():
            if self.max_iterations is not None and self.iterations - start_iteration >= self.max_iterations:
                raise RuntimeError(
                    f"Replication did not converge within {self.max_iterations} iterations "
                    f"({self.track.unreplicated_length()} bp unreplicated). "
                    "Increase max_iterations or the replication rate."
                )
            self.step(rng)
            progress.append(self.track.unreplicated_length())

        elapsed = perf_counter() - t_start
        iterations = self.iterations - start_iteration
        logger.info(
            "Converged in %d iterations (%d origins, %d merges) in %.2fs",
            iterations,
            self.origins_fired,
            self.merge_events,
            elapsed,
        )
        return ReplicationResult(
            track=self.track.lengths,
            iterations=iterations,
            warmup_iterations=warmups,
            origins_fired=self.origins_fired,
            merge_events=self.merge_events,
            progress=np.asarray(progress, dtype=np.int64),
            elapsed_s=elapsed,
        )
