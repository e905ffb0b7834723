"""
tests/test_stochastic.py - Tests for length-weighted origin sampling.
"""

import numpy as np
import pytest

from replisim.models.track import SegmentTrack
from replisim.stochastic import OriginSampler, SamplingError


class CountingRng:
    """Wraps a generator and counts draws; optionally forces rejections."""

    def __init__(self, seed=0, uniform=None, uniforms=None):
        self._rng = np.random.default_rng(seed)
        self._uniform = uniform
        self._uniforms = list(uniforms) if uniforms is not None else None
        self.offsets = []
        self.calls = 0

    def integers(self, low, high):
        self.calls += 1
        offset = int(self._rng.integers(low, high))
        self.offsets.append(offset)
        return offset

    def random(self):
        self.calls += 1
        if self._uniforms:
            return self._uniforms.pop(0)
        if self._uniform is not None:
            return self._uniform
        return self._rng.random()


class TestDrawPosition:

    def test_always_lands_in_unreplicated_dna(self):
        track = SegmentTrack.from_lengths([3, 10, 4, 5, 8], max_forks=3)
        sampler = OriginSampler(firing_probability=0.5)
        rng = np.random.default_rng(11)
        for _ in range(500):
            position = sampler.draw_position(track, rng)
            assert not track.contains(position)

    def test_long_gaps_are_favoured(self):
        """Selection is uniform over unreplicated bases, not over gaps."""
        track = SegmentTrack.from_lengths([0, 10, 5, 90], max_forks=2)
        sampler = OriginSampler(firing_probability=1.0)
        rng = np.random.default_rng(3)
        positions = np.array([sampler.draw_position(track, rng) for _ in range(20000)])
        in_short_gap = np.mean(positions < 10)
        assert abs(in_short_gap - 0.1) < 0.015
        assert positions.min() >= 0
        assert not np.any((positions >= 10) & (positions < 15))
        assert positions.max() <= 104

    def test_returns_none_when_complete(self):
        """No unreplicated DNA is a silent outcome and consumes no draws."""
        track = SegmentTrack.from_lengths([20, 0, 0])
        rng = CountingRng()
        assert OriginSampler().draw_position(track, rng) is None
        assert rng.calls == 0

    def test_rejections_are_capped(self):
        track = SegmentTrack(100, 2)
        sampler = OriginSampler(firing_probability=0.1, max_attempts=5)
        rng = CountingRng(uniform=0.99)
        with pytest.raises(SamplingError):
            sampler.draw_position(track, rng)
        assert rng.calls == 10

    def test_rejected_draws_are_retried(self):
        """Two rejected candidates are redrawn; the third, accepted, one is returned."""
        track = SegmentTrack(100, 2)
        sampler = OriginSampler(firing_probability=0.1)
        rng = CountingRng(seed=5, uniforms=[0.99, 0.99, 0.0])
        position = sampler.draw_position(track, rng)
        assert rng.calls == 6
        assert len(rng.offsets) == 3
        # A single gap spanning the genome maps offsets straight to positions.
        assert position == rng.offsets[2]

    @pytest.mark.parametrize("probability", [0.0, -0.5, 1.5])
    def test_invalid_firing_probability(self, probability):
        with pytest.raises(ValueError):
            OriginSampler(firing_probability=probability)

    def test_invalid_attempt_cap(self):
        with pytest.raises(ValueError):
            OriginSampler(max_attempts=0)


class TestSampleAndPlace:

    def test_places_origin(self):
        track = SegmentTrack(1000, 3)
        sampler = OriginSampler()
        assert sampler.sample_and_place(track, np.random.default_rng(1))
        assert track.replicated_length() == 1
        assert int(track.lengths.sum()) == 1000

    def test_no_gap_means_no_placement(self):
        track = SegmentTrack.from_lengths([7, 0, 0])
        before = track.lengths
        assert OriginSampler().sample_and_place(track, np.random.default_rng(1)) is False
        assert np.array_equal(track.lengths, before)

    def test_same_seed_same_positions(self):
        sampler = OriginSampler()
        draws = []
        for _ in range(2):
            track = SegmentTrack(10_000, 5)
            rng = np.random.default_rng(42)
            for _ in range(5):
                sampler.sample_and_place(track, rng)
            draws.append(track.lengths)
        assert np.array_equal(draws[0], draws[1])
