#!/usr/bin/env python3
"""
Tests for the Keplerian orbit model.

These tests verify:
1. Derived parameters (period, apsides, Hill sphere)
2. Propagation: t=0 matches the initial state, one period returns to it
3. Orbit requests resolve against the orbiting body's position
4. Invalid elements raise InvalidConfigurationError
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cosmos import (
    G,
    InvalidConfigurationError,
    MissingOrbitalContextError,
    Orbit,
    OrbitKind,
    Randomizer,
    explicit_orbit,
    from_eccentricity,
    hill_sphere_radius,
    orbital_period,
    resolve_orbit,
)
from cosmos.orbit import semi_major_axis_for_period


class TestDerivedParameters:
    """Tests for parameters computed on construction."""

    def test_period_is_one_year(self, earth_orbit):
        assert earth_orbit.period == pytest.approx(3.156e7, rel=1e-2)

    def test_apsides(self, earth_orbit):
        a = earth_orbit.semi_major_axis
        e = earth_orbit.eccentricity
        assert earth_orbit.periapsis == pytest.approx(a * (1 - e))
        assert earth_orbit.apoapsis == pytest.approx(a * (1 + e))

    def test_gravitational_parameter_includes_both_masses(self, earth_orbit):
        assert earth_orbit.gravitational_parameter == pytest.approx(
            G * (1.989e30 + 5.972e24)
        )

    def test_hill_sphere(self, earth_orbit):
        assert earth_orbit.hill_sphere_radius() == pytest.approx(1.47e9, rel=0.02)

    def test_period_round_trip(self):
        mu = G * 2e30
        assert orbital_period(semi_major_axis_for_period(1e7, mu), mu) == pytest.approx(1e7)


class TestPropagation:
    """Tests for state vectors over time."""

    def test_time_zero_matches_initial_state(self, earth_orbit):
        position, velocity = earth_orbit.state_vectors_at_time(0.0)
        initial_position, initial_velocity = earth_orbit.initial_state

        np.testing.assert_allclose(position, initial_position, rtol=0, atol=1e-6 * 1.496e11)
        np.testing.assert_allclose(velocity, initial_velocity, rtol=0, atol=1e-2)

    def test_returns_after_one_period(self, earth_orbit):
        position, velocity = earth_orbit.state_vectors_at_time(earth_orbit.period)
        initial_position, initial_velocity = earth_orbit.initial_state

        np.testing.assert_allclose(position, initial_position, rtol=0, atol=1e-6 * 1.496e11)
        np.testing.assert_allclose(velocity, initial_velocity, rtol=0, atol=1e-2)

    def test_half_period_reaches_far_side(self):
        orbit = Orbit(2e30, 0.0, 1e11, 0.3, 0.0, 0.0, 0.0, true_anomaly=0.0)
        position, _ = orbit.state_vectors_at_time(orbit.period / 2)
        assert np.linalg.norm(position) == pytest.approx(orbit.apoapsis, rel=1e-6)

    def test_vis_viva_holds(self, earth_orbit):
        mu = earth_orbit.gravitational_parameter
        a = earth_orbit.semi_major_axis
        for t in (1e5, 4e6, 2.2e7):
            position, velocity = earth_orbit.state_vectors_at_time(t)
            r = np.linalg.norm(position)
            assert np.dot(velocity, velocity) == pytest.approx(mu * (2 / r - 1 / a), rel=1e-6)

    def test_advance_accumulates_time(self, earth_orbit):
        earth_orbit.advance(1000.0)
        earth_orbit.advance(500.0)
        assert earth_orbit.elapsed == 1500.0

        expected, _ = earth_orbit.state_vectors_at_time(1500.0)
        position, _ = earth_orbit.advance(0.0)
        np.testing.assert_allclose(position, expected)

    def test_advance_leaves_elements_unchanged(self, earth_orbit):
        initial = earth_orbit.initial_position.copy()
        earth_orbit.advance(1e6)
        np.testing.assert_array_equal(earth_orbit.initial_position, initial)
        assert earth_orbit.true_anomaly == pytest.approx(0.3)


class TestOrbitRequests:
    """Tests for resolving orbit requests."""

    def test_explicit_orbit_semi_major_axis(self):
        parameters = explicit_orbit(2e30, np.zeros(3), 1e11, 0.2, 0.1, 0.0, 0.0, 0.0)
        orbit = resolve_orbit(parameters, 6e24, np.array([1e11, 0.0, 0.0]))

        assert parameters.kind == OrbitKind.EXPLICIT
        assert orbit.semi_major_axis == pytest.approx(1e11 / 0.8)
        assert orbit.periapsis == pytest.approx(1e11)

    def test_eccentricity_orbit_passes_through_position(self):
        relative = np.array([3e10, -4e10, 1e10])
        parameters = from_eccentricity(2e30, np.zeros(3), 0.4)
        orbit = resolve_orbit(parameters, 6e24, relative, rng=Randomizer(5))

        assert orbit.eccentricity == pytest.approx(0.4)
        assert np.linalg.norm(orbit.initial_position) == pytest.approx(
            np.linalg.norm(relative), rel=1e-9
        )

    def test_eccentricity_orbit_respects_max_inclination(self):
        rng = Randomizer(9)
        parameters = from_eccentricity(2e30, np.zeros(3), 0.1, max_inclination=0.2)
        for _ in range(20):
            orbit = resolve_orbit(parameters, 1e20, np.array([1e11, 0.0, 0.0]), rng=rng)
            assert 0.0 <= orbit.inclination <= 0.2

    def test_negative_eccentricity_uses_absolute_value(self):
        assert from_eccentricity(2e30, np.zeros(3), -0.3).eccentricity == pytest.approx(0.3)

    def test_coincident_body_rejected(self):
        parameters = from_eccentricity(2e30, np.zeros(3), 0.1)
        with pytest.raises(InvalidConfigurationError):
            resolve_orbit(parameters, 1e20, np.zeros(3), rng=Randomizer(1))


class TestInvalidOrbits:
    """Tests for rejected elements."""

    @pytest.mark.parametrize("eccentricity", [1.0, 1.5])
    def test_unbound_eccentricity(self, eccentricity):
        with pytest.raises(InvalidConfigurationError):
            Orbit(2e30, 1.0, 1e11, eccentricity, 0.0, 0.0, 0.0)
        with pytest.raises(InvalidConfigurationError):
            from_eccentricity(2e30, np.zeros(3), eccentricity)

    def test_non_positive_orbited_mass(self):
        with pytest.raises(InvalidConfigurationError):
            Orbit(0.0, 1.0, 1e11, 0.1, 0.0, 0.0, 0.0)
        with pytest.raises(InvalidConfigurationError):
            from_eccentricity(0.0, np.zeros(3), 0.1)

    def test_inclination_out_of_range(self):
        with pytest.raises(InvalidConfigurationError):
            Orbit(2e30, 1.0, 1e11, 0.1, 4.0, 0.0, 0.0)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Orbit(2e30, 1.0, -1e11, 0.1, 0.0, 0.0, 0.0)

    def test_hill_sphere_needs_orbit(self, hierarchy, make_location):
        body = make_location(hierarchy, [0.0, 0.0, 0.0])
        with pytest.raises(MissingOrbitalContextError):
            hill_sphere_radius(body)
