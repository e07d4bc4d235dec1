#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Deterministic Random Source

Seeded pseudo-random generator used by every generation step. Each body
stores the seed that produced it, so regenerating from the same seed and
call sequence yields identical results.

Instances are not safe for concurrent use; create one per generation task.
"""

import math
from typing import Optional, Sequence

import numpy as np

# Seeds are unsigned 32-bit integers
MAX_SEED = 2**32 - 1


class Randomizer:
    """
    Seeded random source backed by numpy's PCG64 bit generator.

    Parameters
    ----------
    seed : int, optional
        Seed in [0, 2^32). A fresh seed is drawn from OS entropy if None.

    Attributes
    ----------
    seed : int
        The seed this instance was created from.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(np.random.SeedSequence().entropy) & MAX_SEED
        if not 0 <= seed <= MAX_SEED:
            raise ValueError(f"Seed must be in [0, {MAX_SEED}], got {seed}")

        self.seed = int(seed)
        self._rng = np.random.Generator(np.random.PCG64(self.seed))

    @classmethod
    def for_stream(cls, seed: int, stream: int) -> "Randomizer":
        """
        Create an independent random source derived from a seed.

        Used where one body needs several unrelated random streams
        (e.g. its own derivation and the population of its region).

        Parameters
        ----------
        seed : int
            Base seed.
        stream : int
            Stream index; different indices give independent sequences.

        Returns
        -------
        Randomizer
            New random source seeded from the derived state.
        """
        sequence = np.random.SeedSequence(seed, spawn_key=(stream,))
        derived = int(sequence.generate_state(1, dtype=np.uint32)[0])
        return cls(derived)

    def next_u32(self) -> int:
        """Uniform integer in [0, 2^32)."""
        return int(self._rng.integers(0, MAX_SEED, endpoint=True))

    def next_double(self, minimum: float = 0.0, maximum: float = 1.0) -> float:
        """
        Uniform float in [minimum, maximum).

        Parameters
        ----------
        minimum : float
            Inclusive lower bound.
        maximum : float
            Exclusive upper bound.

        Returns
        -------
        float
            Sampled value.
        """
        if maximum < minimum:
            minimum, maximum = maximum, minimum
        return minimum + (maximum - minimum) * float(self._rng.random())

    def next_normal(self, mean: float, stddev: float) -> float:
        """Sample from a normal distribution."""
        if stddev <= 0:
            return float(mean)
        return float(self._rng.normal(mean, stddev))

    def next_positive_normal(
        self,
        mean: float,
        stddev: float,
        minimum: float = 0.0,
    ) -> float:
        """
        Sample from a normal distribution reflected about a minimum.

        Samples below ``minimum`` are mirrored back above it, so a single
        draw always suffices.

        Parameters
        ----------
        mean : float
            Mean of the underlying normal distribution.
        stddev : float
            Standard deviation of the underlying normal distribution.
        minimum : float
            Lowest value that may be returned.

        Returns
        -------
        float
            Sample >= minimum.
        """
        value = self.next_normal(mean, stddev)
        if value < minimum:
            value = minimum + (minimum - value)
        return value

    def next_log_normal(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        """Sample from a log-normal distribution (parameters of the underlying normal)."""
        return float(self._rng.lognormal(mean, sigma))

    def next_bool(self, probability: float = 0.5) -> bool:
        """True with the given probability."""
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return float(self._rng.random()) < probability

    def next_int_inclusive(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]."""
        if high < low:
            low, high = high, low
        return int(self._rng.integers(low, high, endpoint=True))

    def next_weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index with probability proportional to its weight.

        Parameters
        ----------
        weights : sequence of float
            Non-negative weights; at least one must be positive.

        Returns
        -------
        int
            Chosen index.
        """
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("At least one weight must be positive")

        target = self.next_double(0.0, total)
        cumulative = 0.0
        for index, weight in enumerate(weights):
            cumulative += weight
            if target < cumulative:
                return index
        return len(weights) - 1

    def next_angle(self) -> float:
        """Uniform angle in [0, 2π)."""
        return self.next_double(0.0, 2 * math.pi)

    def next_unit_vector(self) -> np.ndarray:
        """Direction drawn uniformly over the unit sphere."""
        while True:
            vector = self._rng.normal(0.0, 1.0, 3)
            norm = float(np.linalg.norm(vector))
            if norm > 1e-12:
                return vector / norm

    def __repr__(self) -> str:
        return f"Randomizer(seed={self.seed})"
