#!/usr/bin/env python3
"""
Tests for the deterministic random source.

These tests verify:
1. Identical seeds give identical sequences
2. Derived streams are stable and independent
3. Every sampler respects its bounds
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cosmos import Randomizer, MAX_SEED


class TestSeeding:
    """Tests for seed handling."""

    def test_same_seed_same_sequence(self):
        a = Randomizer(7)
        b = Randomizer(7)
        assert [a.next_u32() for _ in range(20)] == [b.next_u32() for _ in range(20)]

    def test_different_seeds_differ(self):
        a = Randomizer(7)
        b = Randomizer(8)
        assert [a.next_double() for _ in range(5)] != [b.next_double() for _ in range(5)]

    def test_random_seed_when_none(self):
        rng = Randomizer()
        assert 0 <= rng.seed <= MAX_SEED

    @pytest.mark.parametrize("seed", [-1, MAX_SEED + 1])
    def test_out_of_range_seed_rejected(self, seed):
        with pytest.raises(ValueError):
            Randomizer(seed)

    def test_streams_are_stable(self):
        assert Randomizer.for_stream(99, 3).seed == Randomizer.for_stream(99, 3).seed

    def test_streams_are_distinct(self):
        seeds = {Randomizer.for_stream(99, stream).seed for stream in range(10)}
        assert len(seeds) == 10


class TestSamplers:
    """Tests for the sampling methods."""

    def test_next_double_bounds(self, rng):
        for _ in range(500):
            value = rng.next_double(-3.0, 5.0)
            assert -3.0 <= value < 5.0

    def test_next_double_swapped_bounds(self, rng):
        for _ in range(100):
            assert 1.0 <= rng.next_double(2.0, 1.0) <= 2.0

    def test_positive_normal_respects_minimum(self, rng):
        for _ in range(500):
            assert rng.next_positive_normal(0.0, 5.0, minimum=1.0) >= 1.0

    def test_zero_stddev_returns_mean(self, rng):
        assert rng.next_normal(4.5, 0.0) == 4.5

    def test_next_bool_extremes(self, rng):
        assert all(rng.next_bool(1.0) for _ in range(50))
        assert not any(rng.next_bool(0.0) for _ in range(50))

    def test_int_inclusive_covers_both_ends(self, rng):
        values = {rng.next_int_inclusive(1, 3) for _ in range(300)}
        assert values == {1, 2, 3}

    def test_weighted_index_skips_zero_weights(self, rng):
        for _ in range(200):
            assert rng.next_weighted_index([0.0, 2.0, 0.0, 1.0]) in (1, 3)

    def test_weighted_index_needs_positive_weight(self, rng):
        with pytest.raises(ValueError):
            rng.next_weighted_index([0.0, 0.0])

    def test_angle_range(self, rng):
        for _ in range(200):
            assert 0.0 <= rng.next_angle() < 2 * math.pi

    def test_unit_vector_is_normalised(self, rng):
        for _ in range(50):
            assert np.linalg.norm(rng.next_unit_vector()) == pytest.approx(1.0)
