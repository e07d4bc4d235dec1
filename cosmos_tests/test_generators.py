#!/usr/bin/env python3
"""
Tests for the type-specific body generators.

These tests verify:
1. Stars: Sun-like stars match the Sun
2. Planetoids: layers, mass bounds, radius floor, temperature
3. Star systems: primary, planets around it, moons and rings inside the
   Hill sphere, Oort cloud
4. Galaxies, nebulae and black holes
5. Galaxy groups, clusters, superclusters and the universe
6. Lava worlds
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cosmos import (
    GenerationContext,
    GenerationConfig,
    LuminosityClass,
    MissingOrbitalContextError,
    PlanetType,
    Randomizer,
    SpectralClass,
    StarDetails,
    StarType,
    StructureType,
    Substance,
    create_cosmos,
    from_eccentricity,
)
from cosmos.constraints import (
    MINIMUM_HYDROSTATIC_RADIUS,
    SOLAR_MASS,
    equilibrium_temperature,
    mass_bounds,
    roche_limit,
)
from bodies.black_hole import hawking_temperature, schwarzschild_radius
from bodies.large_scale import GROUP_SPACE, SuperclusterGenerator
from bodies.nebula import NEBULA_SPACE
from bodies.planetoid import LAVA_TEMPERATURE_RANGE, planemo_layers, planet_density, satellite_type


def _of_type(cosmos, structure_type):
    return [loc for loc in cosmos.hierarchy if loc.structure_type == structure_type]


@pytest.fixture(scope="module")
def sunlike_systems():
    """Several Sun-like systems, so that every body kind shows up."""
    return [create_cosmos("star_system", seed=seed, sunlike=True) for seed in range(1, 9)]


class TestStars:
    """Tests for star generation."""

    def test_sunlike_star(self, sunlike_cosmos):
        stars = _of_type(sunlike_cosmos, StructureType.STAR)
        assert len(stars) == 1
        star = stars[0]

        assert star.details.spectral_class == SpectralClass.G
        assert star.details.luminosity_class == LuminosityClass.V
        assert star.temperature == pytest.approx(5778.0)
        assert star.containing_radius == pytest.approx(6.96e8, rel=0.05)

    def test_requested_classification(self, cosmos):
        star = cosmos.new_location(StructureType.STAR, spectral_class="K")
        assert star.details.star_type == StarType.MAIN_SEQUENCE
        assert star.details.spectral_class == SpectralClass.K

    @pytest.mark.parametrize("star_type", [
        StarType.BROWN_DWARF,
        StarType.WHITE_DWARF,
        StarType.NEUTRON_STAR,
        StarType.RED_GIANT,
        StarType.BLUE_GIANT,
    ])
    def test_star_types(self, cosmos, star_type):
        star = cosmos.new_location(StructureType.STAR, star_type=star_type)
        assert star.details.star_type == star_type
        assert star.mass > 0
        assert star.details.luminosity > 0


class TestPlanetoids:
    """Tests for planets, dwarf planets, asteroids and comets."""

    def test_planet_layers_sum_to_one(self, sunlike_systems):
        planets = [p for c in sunlike_systems for p in _of_type(c, StructureType.PLANET)]
        assert planets

        for planet in planets:
            assert sum(layer.proportion for layer in planet.material.layers) == pytest.approx(1.0, abs=1e-6)
            minimum, maximum = mass_bounds(planet.details.planet_type)
            assert minimum * 0.999999 <= planet.mass <= maximum * 1.000001
            assert planet.containing_radius >= MINIMUM_HYDROSTATIC_RADIUS

    def test_over_massive_asteroid_reclassified(self, cosmos):
        body = cosmos.new_location(StructureType.ASTEROID, planet_type="asteroid_c", mass=1e21)
        assert body.structure_type == StructureType.DWARF_PLANET
        assert body.details.planet_type == PlanetType.DWARF

    def test_unlit_body_at_ambient_temperature(self, cosmos):
        comet = cosmos.new_location(StructureType.COMET)
        assert comet.temperature == pytest.approx(cosmos.config.ambient_temperature)

    def test_explicit_mass_clamped_to_type(self, cosmos):
        planet = cosmos.new_location(StructureType.PLANET, planet_type="terrestrial", mass=1e27)

        assert planet.details.planet_type == PlanetType.TERRESTRIAL
        assert planet.mass == pytest.approx(mass_bounds(PlanetType.TERRESTRIAL)[1])

    def test_over_massive_lava_dwarf_becomes_lava_planet(self, cosmos):
        body = cosmos.new_location(StructureType.DWARF_PLANET, planet_type="lava_dwarf", mass=1e26)

        assert body.structure_type == StructureType.PLANET
        assert body.details.planet_type == PlanetType.LAVA
        assert body.mass <= mass_bounds(PlanetType.LAVA)[1] * 1.000001

    def test_root_planet_bounded_by_type(self):
        for seed in range(1, 6):
            planet = create_cosmos("planet", seed=seed).hierarchy.roots()[0]
            minimum, maximum = mass_bounds(planet.details.planet_type)
            assert minimum * 0.999999 <= planet.mass <= maximum * 1.000001

    def test_planet_at_parent_centre_without_distance(self, cosmos):
        nebula = cosmos.new_location(StructureType.NEBULA)
        with pytest.raises(MissingOrbitalContextError):
            cosmos.new_location(StructureType.PLANET, parent=nebula)

    def test_clearing_distance_scaled_by_eccentricity(self):
        context = GenerationContext(
            StructureType.PLANET,
            GenerationConfig(seed=1),
            position=np.array([1e11, 0.0, 0.0]),
            orbited_position=np.zeros(3),
            orbit_parameters=from_eccentricity(2e30, np.zeros(3), 0.5),
        )

        assert context.orbital_distance == pytest.approx(1e11)
        assert context.provisional_semi_major_axis == pytest.approx(3e11)


class TestLavaWorlds:
    """Tests for molten planets and dwarf planets."""

    def test_lava_planet(self, cosmos):
        planet = cosmos.new_location(StructureType.PLANET, planet_type="lava", mass=5e24)

        low, high = LAVA_TEMPERATURE_RANGE
        assert low <= planet.temperature <= high
        assert planet.details.satellite_ids == []
        assert sum(layer.proportion for layer in planet.material.layers) == pytest.approx(1.0, abs=1e-6)

    def test_lava_dwarf(self, cosmos, rng):
        body = cosmos.new_location(StructureType.DWARF_PLANET, planet_type="lava_dwarf", mass=1e22)

        assert body.structure_type == StructureType.DWARF_PLANET
        assert body.details.planet_type == PlanetType.LAVA_DWARF
        assert planet_density(rng, PlanetType.LAVA_DWARF) == 4000.0

    def test_lava_dwarf_crust(self, rng):
        for _ in range(20):
            crust = planemo_layers(rng, PlanetType.LAVA_DWARF, 1e6)[-1]
            assert crust.name == "crust"
            assert sum(p for _, p in crust.components) == pytest.approx(1.0)

    def test_satellite_near_roche_limit_is_molten(self, rng):
        planet_mass = 6e24
        periapsis = roche_limit(planet_mass, 2000.0)
        kinds = {satellite_type(rng, 1e22, periapsis, planet_mass) for _ in range(50)}

        assert PlanetType.LAVA_DWARF in kinds
        assert not kinds & {PlanetType.DWARF, PlanetType.ROCKY_DWARF}


class TestStarSystems:
    """Tests for star system configuration."""

    def test_root_identity(self, sunlike_system):
        assert sunlike_system.id == "star-system-0001"
        assert sunlike_system.parent_id is None

    def test_primary_and_mass(self, sunlike_cosmos, sunlike_system):
        details = sunlike_system.details
        assert details.star_ids == [details.primary_id]

        primary = sunlike_cosmos.hierarchy.get(details.primary_id)
        assert isinstance(primary.details, StarDetails)
        assert sunlike_system.mass == pytest.approx(1.001 * primary.mass)
        np.testing.assert_array_equal(primary.position, np.zeros(3))

    def test_planets_orbit_primary(self, sunlike_systems):
        for cosmos in sunlike_systems:
            system = cosmos.hierarchy.roots()[0]
            primary = cosmos.hierarchy.get(system.details.primary_id)
            for planet in _of_type(cosmos, StructureType.PLANET):
                assert planet.parent_id == system.id
                if planet.orbit.orbited_id == primary.id:
                    continue
                # Large moons are planets too
                host = cosmos.hierarchy.get(planet.orbit.orbited_id)
                assert planet.id in host.details.satellite_ids

    def test_planet_temperature_from_primary(self, sunlike_systems):
        checked = 0
        for cosmos in sunlike_systems:
            system = cosmos.hierarchy.roots()[0]
            primary = cosmos.hierarchy.get(system.details.primary_id)
            for planet in _of_type(cosmos, StructureType.PLANET):
                if planet.orbit.orbited_id != primary.id or planet.details.planet_type.is_lava:
                    continue
                expected = equilibrium_temperature(
                    primary.details.luminosity,
                    planet.details.albedo,
                    planet.orbit.semi_major_axis,
                )
                assert planet.temperature == pytest.approx(expected, rel=1e-9)
                checked += 1
        assert checked > 0

    def test_satellites_inside_hill_third(self, sunlike_systems):
        for cosmos in sunlike_systems:
            for planet in _of_type(cosmos, StructureType.PLANET):
                limit = planet.orbit.hill_sphere_radius() / 3
                for satellite_id in planet.details.satellite_ids:
                    satellite = cosmos.hierarchy.get(satellite_id)
                    assert satellite.parent_id == planet.parent_id
                    assert satellite.orbit.orbited_id == planet.id
                    assert satellite.orbit.apoapsis <= limit * (1 + 1e-9)

    def test_rings_inside_hill_third(self, sunlike_systems):
        for cosmos in sunlike_systems:
            for planet in _of_type(cosmos, StructureType.PLANET):
                limit = planet.orbit.hill_sphere_radius() / 3
                for ring in planet.details.rings:
                    assert ring.inner_radius <= ring.outer_radius <= limit * (1 + 1e-9)

    def test_single_oort_cloud(self, sunlike_cosmos, sunlike_system):
        clouds = _of_type(sunlike_cosmos, StructureType.OORT_CLOUD)
        assert len(clouds) == 1
        assert clouds[0].parent_id == sunlike_system.id
        assert clouds[0].details.orbited_id == sunlike_system.details.primary_id

    def test_no_satellites_when_disabled(self):
        cosmos = create_cosmos("star_system", seed=3, sunlike=True, generate_satellites=False)
        for planet in _of_type(cosmos, StructureType.PLANET):
            assert planet.details.satellite_ids == []


class TestGalaxies:
    """Tests for galaxy-like regions."""

    def test_core_black_hole(self, cosmos):
        galaxy = cosmos.new_location(StructureType.SPIRAL_GALAXY)
        children = cosmos.hierarchy.children_of(galaxy)

        assert children[0].structure_type == StructureType.BLACK_HOLE
        assert galaxy.mass >= 5 * children[0].mass
        assert children[0].orbit is None

    @pytest.mark.slow
    def test_barycentric_orbits(self, cosmos):
        galaxy = cosmos.new_location(StructureType.SPIRAL_GALAXY)
        created = cosmos.populate(galaxy, max_children=3)

        assert 0 < len(created) <= 3
        for child in created:
            assert child.parent_id == galaxy.id
            assert child.orbit is not None
            assert child.orbit.orbited_id is None
            assert child.orbit.orbited_mass == pytest.approx(galaxy.mass)

    def test_subgroup_central_galaxy(self, cosmos):
        subgroup = cosmos.new_location(StructureType.GALAXY_SUBGROUP)
        central = cosmos.hierarchy.children_of(subgroup)[0]
        assert central.structure_type in (StructureType.SPIRAL_GALAXY, StructureType.ELLIPTICAL_GALAXY)


class TestLargeScaleStructure:
    """Tests for galaxy groups, clusters, superclusters and the universe."""

    def test_group_subgroups(self, cosmos):
        group = cosmos.new_location(StructureType.GALAXY_GROUP)
        subgroups = cosmos.hierarchy.children_of(group)

        assert group.mass == pytest.approx(2e44)
        assert 1 <= len(subgroups) <= 5
        for subgroup in subgroups:
            assert subgroup.structure_type == StructureType.GALAXY_SUBGROUP
            assert subgroup.orbit is not None
            assert subgroup.orbit.orbited_mass == pytest.approx(group.mass)

    def test_cluster_holds_groups(self, cosmos):
        cluster = cosmos.new_location(StructureType.GALAXY_CLUSTER)
        definitions = cosmos.generator_for(cluster).child_definitions(cluster)

        assert 2e45 <= cluster.mass <= 2e46
        assert [d.structure_type for d in definitions] == [StructureType.GALAXY_GROUP]
        assert definitions[0].space == pytest.approx(GROUP_SPACE)

    def test_supercluster_is_filament_or_wall(self):
        for seed in range(20):
            shape = SuperclusterGenerator.supercluster_shape(Randomizer(seed))
            short, middle, major = sorted((shape.axis_x, shape.axis_y, shape.axis_z))

            assert 9.4607e23 <= major <= 9.4607e25
            assert short >= 0.02 * major * (1 - 1e-12)
            assert middle <= 0.15 * major * (1 + 1e-12)

    def test_universe(self, cosmos):
        universe = cosmos.new_location(StructureType.UNIVERSE)

        assert universe.temperature == pytest.approx(2.73)
        assert universe.material.composition == [(Substance.WARM_HOT_INTERGALACTIC_MEDIUM, 1.0)]

        created = cosmos.populate(universe, max_children=1)
        assert len(created) == 1
        assert created[0].structure_type == StructureType.SUPERCLUSTER
        assert created[0].orbit is None


class TestNebulae:
    """Tests for nebulae."""

    def test_nebula_axis_bounded(self):
        for seed in range(20):
            cosmos = create_cosmos("nebula", seed=seed)
            nebula = cosmos.hierarchy.roots()[0]
            assert nebula.shape.axis_x <= NEBULA_SPACE

    def test_hii_region_temperature(self, cosmos):
        region = cosmos.new_location(StructureType.HII_REGION)
        assert region.temperature == pytest.approx(10000.0)

    def test_planetary_nebula_white_dwarf(self, cosmos):
        nebula = cosmos.new_location(StructureType.PLANETARY_NEBULA)
        children = cosmos.hierarchy.children_of(nebula)

        assert len(children) == 1
        assert children[0].details.star_type == StarType.WHITE_DWARF


class TestBlackHoles:
    """Tests for black hole physics."""

    def test_schwarzschild_radius(self):
        assert schwarzschild_radius(SOLAR_MASS) == pytest.approx(2953, rel=1e-3)

    def test_hawking_temperature(self):
        assert hawking_temperature(SOLAR_MASS) == pytest.approx(6.169e-8)
        assert hawking_temperature(2 * SOLAR_MASS) == pytest.approx(6.169e-8 / 2)

    def test_generated_black_hole(self, cosmos):
        hole = cosmos.new_location(StructureType.BLACK_HOLE, mass=1e31)
        assert hole.containing_radius == pytest.approx(schwarzschild_radius(1e31))
        assert hole.temperature == pytest.approx(hawking_temperature(1e31))
