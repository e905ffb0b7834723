"""Replication state of a single chromosome as alternating run lengths.

The chromosome [0, L) is stored as a fixed-capacity integer array
    s_0, s_1, ..., s_{2k+2}
where even slots hold replicated run lengths and odd slots hold unreplicated
run lengths (k = maximum number of concurrently placed origins). Any slot may
be zero. The lengths always sum to L, and trailing unused slots are zero.

Capacity 2k+3 covers the worst case of k isolated origins: the leading
sentinel pair plus one (replicated point, right gap) pair per origin, with a
spare slot so that the final even slot always exists as a right neighbour.
"""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np


class DomainError(ValueError):
    """Raised when a genome position lies outside [0, genome_length)."""


class CapacityError(RuntimeError):
    """Raised when an origin is inserted into a track with no free slots."""


class SegmentTrack:
    """Alternating replicated/unreplicated run lengths along one chromosome."""

    def __init__(self, genome_length: int, max_forks: int) -> None:
        if genome_length <= 0:
            raise ValueError("genome_length must be positive")
        if max_forks <= 0:
            raise ValueError("max_forks must be positive")
        self.genome_length = int(genome_length)
        self.max_forks = int(max_forks)
        self._lengths = np.zeros(2 * self.max_forks + 3, dtype=np.int64)
        self._lengths[1] = self.genome_length

    @classmethod
    def from_lengths(cls, lengths: Iterable[int], max_forks: int | None = None) -> "SegmentTrack":
        """Rebuild a track from a run-length snapshot.

        The snapshot is zero-padded up to capacity. When max_forks is omitted,
        the smallest fork cap whose capacity fits the snapshot is used.
        """
        values = np.asarray(list(lengths), dtype=np.int64)
        if values.ndim != 1 or values.size == 0:
            raise ValueError("lengths must be a non-empty 1-D sequence")
        if np.any(values < 0):
            raise ValueError("lengths must be non-negative")
        total = int(values.sum())
        if total <= 0:
            raise ValueError("lengths must sum to a positive genome length")
        if max_forks is None:
            max_forks = max(1, (values.size - 2) // 2)
        track = cls(total, max_forks)
        if values.size > track.capacity:
            raise ValueError(
                f"{values.size} lengths do not fit a track of capacity {track.capacity}"
            )
        track._lengths[:] = 0
        track._lengths[: values.size] = values
        return track

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return int(self._lengths.size)

    @property
    def lengths(self) -> np.ndarray:
        """Copy of the raw run-length array."""
        return self._lengths.copy()

    def replicated_length(self) -> int:
        return int(self._lengths[0::2].sum())

    def unreplicated_length(self) -> int:
        return int(self._lengths[1::2].sum())

    def segments(self) -> Iterator[tuple[int, int, bool]]:
        """Yield (start, length, replicated) for every non-empty segment."""
        start = 0
        for index, length in enumerate(self._lengths.tolist()):
            if length > 0:
                yield start, length, index % 2 == 0
            start += length

    def replicated_intervals(self) -> list[tuple[int, int]]:
        """Half-open [start, end) intervals of replicated DNA, in order."""
        return [(start, start + length) for start, length, replicated in self.segments() if replicated]

    def _check_position(self, position: int) -> None:
        if not 0 <= position < self.genome_length:
            raise DomainError(
                f"Position {position} is outside the genome [0, {self.genome_length})"
            )

    def _slot_of(self, position: int) -> tuple[int, np.ndarray]:
        """Return the slot containing position and the cumulative end bounds."""
        bounds = np.cumsum(self._lengths)
        return int(np.searchsorted(bounds, position, side="right")), bounds

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, position: int) -> bool:
        """Return True if position has been replicated."""
        self._check_position(position)
        slot, _ = self._slot_of(position)
        return slot % 2 == 0

    def is_complete(self) -> bool:
        return not self._lengths[1::2].any()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert_origin(self, position: int) -> bool:
        """Fire an origin at position, splitting its unreplicated segment.

        The containing gap [a, b) becomes (p - a) unreplicated, 1 replicated,
        (b - p - 1) unreplicated, and later slots shift right by two. Returns
        False, leaving the track untouched, if position is already replicated.
        """
        self._check_position(position)
        slot, bounds = self._slot_of(position)
        if slot % 2 == 0:
            return False
        if self._lengths[-2:].any():
            raise CapacityError(
                f"No free slots left for a new origin (capacity {self.capacity}, "
                f"max_forks {self.max_forks})"
            )
        end = int(bounds[slot])
        start = end - int(self._lengths[slot])
        self._lengths[slot + 2:] = self._lengths[slot:-2].copy()
        self._lengths[slot] = position - start
        self._lengths[slot + 1] = 1
        self._lengths[slot + 2] = end - position - 1
        return True

    def grow_and_merge(self, rate: int) -> int:
        """Advance every fork by up to rate positions and merge converged forks.

        Gaps are handled as in a sweep from the highest slot down: each
        non-empty gap first gives up to rate positions to its left replicated
        neighbour, then up to rate of what remains to its right neighbour.
        Neighbour occupancy is judged before the sweep, since a sweep edit
        never changes whether a not-yet-visited neighbour is empty. A gap that
        ends at zero between two occupied neighbours collapses them into one
        replicated segment (one merge event). Finally a leading [0, 0] pair,
        left behind when forks reach coordinate 0, is shifted out.

        Returns the number of merge events.
        """
        if rate < 0:
            raise ValueError("rate must be non-negative")
        lengths = self._lengths
        replicated = lengths[0::2].copy()
        gaps = lengths[1::2].copy()
        left_occupied = replicated[:-1] > 0
        right_occupied = replicated[1:] > 0

        to_left = np.where(left_occupied, np.minimum(gaps, rate), 0)
        gaps -= to_left
        to_right = np.where(right_occupied, np.minimum(gaps, rate), 0)
        gaps -= to_right
        replicated[:-1] += to_left
        replicated[1:] += to_right

        merged = (gaps == 0) & left_occupied & right_occupied
        n_merged = int(np.count_nonzero(merged))
        if n_merged:
            kept = ~merged
            # Each run of replicated segments joined by merged gaps sums into its first member.
            starts = np.concatenate(([0], np.flatnonzero(kept) + 1))
            replicated = np.add.reduceat(replicated, starts)
            gaps = gaps[kept]

        lengths[:] = 0
        lengths[0:2 * gaps.size + 1:2] = replicated
        lengths[1:2 * gaps.size:2] = gaps

        if lengths[0] == 0 and lengths[1] == 0:
            lengths[:-2] = lengths[2:].copy()
            lengths[-2:] = 0
        return n_merged

    def __repr__(self) -> str:
        return (
            f"SegmentTrack(genome_length={self.genome_length}, max_forks={self.max_forks}, "
            f"replicated={self.replicated_length()})"
        )
