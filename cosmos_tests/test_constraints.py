#!/usr/bin/env python3
"""
Tests for the physical constraint helpers.

These tests verify:
1. Planemo masses stay within their type and orbit-clearing bounds
2. Over-massive bodies are reclassified
3. Radius, Roche and ring limits
4. Layer proportions and equilibrium temperature
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cosmos import (
    GenerationConfig,
    GenerationContext,
    MissingOrbitalContextError,
    PlanetType,
    Randomizer,
    StructureType,
)
from cosmos.constraints import (
    ASTEROID_MAX_MASS,
    DWARF_MIN_MASS,
    MINIMUM_HYDROSTATIC_RADIUS,
    SOLAR_LUMINOSITY,
    TERRESTRIAL_MAX_MASS,
    clamp_mass,
    clearing_semi_major_axis,
    equilibrium_temperature,
    generate_rings,
    layer_proportions,
    mass_bounds,
    planemo_radius,
    reclassify,
    roche_limit,
    stern_levison_mass,
    stern_levison_mass_for,
)
from bodies.planetoid import planemo_mass


class TestMassBounds:
    """Tests for planemo mass sampling."""

    @pytest.mark.parametrize("planet_type", [
        PlanetType.GAS_GIANT,
        PlanetType.ICE_GIANT,
        PlanetType.TERRESTRIAL,
        PlanetType.OCEAN,
        PlanetType.DWARF,
    ])
    def test_masses_within_type_bounds(self, rng, planet_type):
        minimum, maximum = mass_bounds(planet_type)
        for _ in range(200):
            mass = planemo_mass(rng, planet_type)
            assert minimum <= mass <= maximum

    def test_terrestrial_clears_its_orbit(self, rng):
        limit = 10 * stern_levison_mass(1.5e11)
        for _ in range(200):
            assert planemo_mass(rng, PlanetType.TERRESTRIAL, orbital_distance=1.5e11) >= limit * 0.999999

    def test_dwarf_cannot_clear_its_orbit(self, rng):
        bound = max(DWARF_MIN_MASS, stern_levison_mass(1e13) / 100)
        for _ in range(200):
            assert planemo_mass(rng, PlanetType.DWARF, orbital_distance=1e13) <= bound * 1.000001

    def test_extra_upper_bound(self, rng):
        for _ in range(50):
            assert planemo_mass(rng, PlanetType.TERRESTRIAL, max_mass=1e23) <= 1e23 * 1.000001


class TestReclassification:
    """Tests for type changes of over-massive bodies."""

    def test_carbonaceous_asteroid_becomes_dwarf(self):
        assert reclassify(PlanetType.ASTEROID_C, ASTEROID_MAX_MASS * 2) == PlanetType.DWARF

    def test_metallic_asteroid_becomes_rocky_dwarf(self):
        assert reclassify(PlanetType.ASTEROID_M, ASTEROID_MAX_MASS * 2) == PlanetType.ROCKY_DWARF

    def test_massive_dwarf_becomes_terrestrial(self):
        assert reclassify(PlanetType.DWARF, 1e26) == PlanetType.TERRESTRIAL

    def test_massive_lava_dwarf_becomes_lava_planet(self):
        assert reclassify(PlanetType.LAVA_DWARF, 1e26) == PlanetType.LAVA

    def test_clamp_to_type(self):
        assert clamp_mass(PlanetType.TERRESTRIAL, 1e27) == TERRESTRIAL_MAX_MASS
        assert clamp_mass(PlanetType.DWARF, 1e10) == DWARF_MIN_MASS
        assert clamp_mass(PlanetType.OCEAN, 5e24) == 5e24

    def test_in_range_type_unchanged(self):
        assert reclassify(PlanetType.ASTEROID_S, 1e15) == PlanetType.ASTEROID_S
        assert reclassify(PlanetType.GAS_GIANT, 1e27) == PlanetType.GAS_GIANT


class TestLimits:
    """Tests for radius, Stern-Levison, Roche and ring limits."""

    def test_radius_floor(self):
        assert planemo_radius(1e15, 3000) == MINIMUM_HYDROSTATIC_RADIUS

    def test_earth_radius(self):
        assert planemo_radius(5.972e24, 5514) == pytest.approx(6.371e6, rel=0.01)

    def test_stern_levison_needs_context(self, hierarchy, make_location):
        lone = make_location(hierarchy, [1e11, 0.0, 0.0])
        with pytest.raises(MissingOrbitalContextError):
            stern_levison_mass_for(lone)

    def test_stern_levison_from_parent_distance(self, hierarchy, make_location):
        root = make_location(hierarchy, [0.0, 0.0, 0.0])
        child = make_location(hierarchy, [3e11, 4e11, 0.0], parent=root)
        assert stern_levison_mass_for(child) == pytest.approx(stern_levison_mass(5e11))

    def test_clearing_axis_needs_distance(self):
        context = GenerationContext(StructureType.PLANET, GenerationConfig(seed=1))
        with pytest.raises(MissingOrbitalContextError):
            clearing_semi_major_axis(context)

    def test_clearing_axis_from_position(self):
        context = GenerationContext(
            StructureType.PLANET,
            GenerationConfig(seed=1),
            position=np.array([0.0, 2e11, 0.0]),
            orbited_position=np.zeros(3),
        )
        assert clearing_semi_major_axis(context) == pytest.approx(2e11)

    def test_roche_limit(self):
        assert roche_limit(2e27, 2000) == pytest.approx(0.8947 * (1e24) ** (1.0 / 3.0))

    def test_rings_inside_hill_third(self):
        for seed in range(30):
            rings = generate_rings(Randomizer(seed), PlanetType.GAS_GIANT, 7e7, 1300, hill_radius=3e8)
            for ring in rings:
                assert 7e7 <= ring.inner_radius <= ring.outer_radius <= 1e8 * (1 + 1e-12)

    def test_dwarfs_have_no_rings(self, rng):
        assert generate_rings(rng, PlanetType.DWARF, 1e6, 2000) == []


class TestCompositionAndTemperature:
    """Tests for layer proportions and equilibrium temperature."""

    @pytest.mark.parametrize("planet_type, radius", [
        (PlanetType.TERRESTRIAL, 6.4e6),
        (PlanetType.IRON, 3e6),
        (PlanetType.DWARF, 6e5),
        (PlanetType.GAS_GIANT, 7e7),
    ])
    def test_layer_proportions_sum_to_one(self, rng, planet_type, radius):
        proportions = layer_proportions(rng, planet_type, radius)
        assert sum(proportions) == pytest.approx(1.0)
        assert all(p >= 0 for p in proportions)

    def test_earth_equilibrium_temperature(self):
        assert equilibrium_temperature(SOLAR_LUMINOSITY, 0.306, 1.496e11) == pytest.approx(255, abs=3)

    def test_temperature_falls_with_distance(self):
        near = equilibrium_temperature(SOLAR_LUMINOSITY, 0.3, 1e11)
        far = equilibrium_temperature(SOLAR_LUMINOSITY, 0.3, 4e11)
        assert far == pytest.approx(near / 2)
