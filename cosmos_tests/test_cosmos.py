#!/usr/bin/env python3
"""
Tests for the Cosmos facade and the generator registry.

These tests verify:
1. Generation is reproducible from the seed
2. Orbits of every body advance together
3. create_cosmos routes configuration and generator options
4. Generators are looked up, listed and replaced through the registry
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import bodies
from bodies import (
    BodyGenerator,
    StarGenerator,
    get_generator_class,
    list_generators,
    register_generator,
)
from cosmos import (
    Cosmos,
    GenerationConfig,
    Material,
    Sphere,
    StructureType,
    Substance,
    create_cosmos,
)


def _records(cosmos):
    return [location.to_record() for location in cosmos.hierarchy]


class TestDeterminism:
    """Tests for seed reproducibility."""

    def test_same_seed_same_cosmos(self):
        first = create_cosmos("star_system", seed=99)
        second = create_cosmos("star_system", seed=99)
        assert _records(first) == _records(second)

    def test_different_seeds_differ(self):
        first = create_cosmos("star_system", seed=99)
        second = create_cosmos("star_system", seed=100)
        assert _records(first) != _records(second)

    def test_population_is_reproducible(self):
        def build():
            cosmos = create_cosmos("asteroid_field", seed=5)
            field = cosmos.hierarchy.roots()[0]
            cosmos.populate(field, max_children=4)
            return _records(cosmos)

        assert build() == build()

    def test_records_are_plain_values(self, sunlike_cosmos):
        for record in _records(sunlike_cosmos):
            assert isinstance(record["position"], list)
            assert isinstance(record["structure_type"], str)


class TestAdvance:
    """Tests for orbit propagation through the facade."""

    def test_advance_moves_orbiting_bodies(self, sunlike_cosmos):
        orbiting = [loc for loc in sunlike_cosmos.hierarchy if loc.orbit is not None]
        before = {loc.id: loc.position.copy() for loc in orbiting}

        count = sunlike_cosmos.advance(86400.0)

        assert count == len(orbiting)
        assert count > 0
        assert any(not np.allclose(loc.position, before[loc.id]) for loc in orbiting)
        assert all(loc.orbit.elapsed == 86400.0 for loc in orbiting)

    def test_advance_keeps_distance_to_orbited_body(self, sunlike_cosmos, sunlike_system):
        hierarchy = sunlike_cosmos.hierarchy
        primary_id = sunlike_system.details.primary_id
        planets = [
            loc for loc in hierarchy
            if loc.orbit is not None and loc.orbit.orbited_id == primary_id
        ]

        sunlike_cosmos.advance(3.0e6)

        for planet in planets:
            distance = hierarchy.distance_to(planet, primary_id)
            assert planet.orbit.periapsis * (1 - 1e-6) <= distance <= planet.orbit.apoapsis * (1 + 1e-6)

    def test_nothing_to_advance(self, cosmos):
        cosmos.new_location(StructureType.BLACK_HOLE)
        assert cosmos.advance(10.0) == 0


class TestCreateCosmos:
    """Tests for the factory function."""

    def test_empty_cosmos(self):
        cosmos = create_cosmos(seed=1)
        assert len(cosmos.hierarchy) == 0
        assert cosmos.seed == 1

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown structure type"):
            create_cosmos("quasar")

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            create_cosmos(max_children=-1)

    def test_invalid_seed(self):
        with pytest.raises(ValueError):
            create_cosmos(seed=-5)

    def test_routes_config_and_options(self):
        cosmos = create_cosmos(
            "star", seed=8, max_children=3, ambient_temperature=3.0, spectral_class="M"
        )
        star = cosmos.hierarchy.roots()[0]

        assert cosmos.config.max_children == 3
        assert cosmos.config.ambient_temperature == 3.0
        assert star.details.spectral_class.value == "M"

    def test_summary(self, sunlike_cosmos):
        summary = sunlike_cosmos.get_summary()

        assert summary["seed"] == 42
        assert summary["total_locations"] == len(sunlike_cosmos.hierarchy)
        assert summary["roots"] == ["star-system-0001"]
        assert summary["counts"]["star"] == 1
        assert sum(summary["counts"].values()) == summary["total_locations"]

    def test_unknown_location_type(self, cosmos):
        with pytest.raises(ValueError):
            cosmos.new_location("quasar")


class FixedCometGenerator(BodyGenerator):
    name = "fixed_comet"
    description = "Comet of fixed size"
    structure_types = (StructureType.COMET,)

    def generate(self, rng, context):
        shape = Sphere(500.0)
        material = Material.homogeneous(1234.0, shape, [(Substance.WATER_ICE, 1.0)])
        return self.create(rng, context, material)


class TestRegistry:
    """Tests for the generator registry."""

    def test_lookup_by_name_and_type(self):
        assert get_generator_class("star") is StarGenerator
        assert get_generator_class(StructureType.STAR) is StarGenerator

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Available generators"):
            get_generator_class("quasar")

    def test_every_structure_type_listed(self):
        assert set(list_generators()) == {t.value for t in StructureType}

    def test_register_rejects_non_generators(self):
        with pytest.raises(TypeError):
            register_generator("comet", dict)

    def test_registered_generator_is_used(self, monkeypatch):
        monkeypatch.setitem(bodies.GENERATOR_REGISTRY, "comet", bodies.GENERATOR_REGISTRY["comet"])
        register_generator(StructureType.COMET, FixedCometGenerator)

        cosmos = Cosmos(GenerationConfig(seed=3))
        comet = cosmos.new_location("comet")

        assert comet.mass == 1234.0
        assert comet.id == "comet-0001"
