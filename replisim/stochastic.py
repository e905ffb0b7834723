"""Stochastic origin placement.

Origins fire at positions drawn uniformly over all unreplicated DNA: a gap is
chosen with probability proportional to its length and a position is drawn
uniformly inside it. Each candidate fires only with a fixed probability; a
rejected candidate triggers a fresh draw.
"""

from __future__ import annotations

import logging

import numpy as np

from replisim.models.track import SegmentTrack

logger = logging.getLogger(__name__)

DEFAULT_FIRING_PROBABILITY = 0.1
DEFAULT_MAX_ATTEMPTS = 10_000


class SamplingError(RuntimeError):
    """Raised when no candidate origin fires within the attempt cap."""


# -----------------------------------------------------------------------------
# Origin sampler
# -----------------------------------------------------------------------------

class OriginSampler:
    """Length-weighted accept/reject sampler of new origin positions."""

    def __init__(
        self,
        firing_probability: float = DEFAULT_FIRING_PROBABILITY,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if not 0.0 < firing_probability <= 1.0:
            raise ValueError("firing_probability must be in (0, 1]")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        self.firing_probability = float(firing_probability)
        self.max_attempts = int(max_attempts)

    def draw_position(self, track: SegmentTrack, rng: np.random.Generator) -> int | None:
        """Draw an accepted origin position, or None if nothing is unreplicated.

        Drawing an offset uniformly over the total unreplicated length and
        mapping it back onto the gaps is the same as choosing a gap weighted by
        its length and then a uniform position inside it. The track does not
        change between retries, so the weights are computed once per call.
        """
        lengths = track.lengths
        gaps = lengths[1::2]
        total = int(gaps.sum())
        if total == 0:
            return None
        bounds = np.cumsum(lengths)
        gap_bounds = np.cumsum(gaps)

        for _ in range(self.max_attempts):
            offset = int(rng.integers(0, total))
            gap_idx = int(np.searchsorted(gap_bounds, offset, side="right"))
            if rng.random() < self.firing_probability:
                slot = 2 * gap_idx + 1
                gap_start = int(bounds[slot] - lengths[slot])
                return gap_start + offset - int(gap_bounds[gap_idx] - gaps[gap_idx])
        raise SamplingError(
            f"Origin placement failed after {self.max_attempts} attempts "
            f"with firing probability {self.firing_probability}"
        )

    def sample_and_place(self, track: SegmentTrack, rng: np.random.Generator) -> bool:
        """Fire one origin on the track. Returns False if no gap is left."""
        position = self.draw_position(track, rng)
        if position is None:
            return False
        placed = track.insert_origin(position)
        logger.debug("Fired origin at %d", position)
        return placed
