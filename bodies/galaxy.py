#!/usr/bin/env python3
"""
Galaxy, Globular Cluster and Galaxy Subgroup Generators

Galaxies are flattened ellipsoids of interstellar medium around a central
black hole. Their children are stars, star systems, rogue planets and
nebulae whose proportions follow the local stellar population; each child
orbits the galaxy's barycentre.

Galaxy subgroups are the largest regions: a central galaxy surrounded by
dwarf galaxies and globular clusters.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from cosmos.context import GenerationContext
from cosmos.location import (
    CosmicLocation,
    LuminosityClass,
    PlanetType,
    SpectralClass,
    StarType,
    StructureType,
)
from cosmos.material import Material, Substance
from cosmos.orbit import OrbitalParameters, from_eccentricity
from cosmos.population import ChildDefinition
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, Sphere

from .base import BodyGenerator

logger = logging.getLogger(__name__)

# Number density of star systems (per m³)
GALAXY_SYSTEM_DENSITY = 2.75e-51
CLUSTER_SYSTEM_DENSITY = 1.5e-48

# Space needed by each kind of child (m)
STAR_SPACE = 3.5e16
STAR_SYSTEM_SPACE = 3.5e16
ROGUE_PLANET_SPACE = 2.5e8
PLANETARY_NEBULA_SPACE = 9.5e15
NEBULA_SPACE = 5.5e18
BLACK_HOLE_SPACE = 6e4
GALAXY_SPACE = 2.5e22
SUBGROUP_SPACE = 5e22

# Stellar mass represented by one unit of system density (kg)
_MASS_PER_UNIT_DENSITY = 1e30

# Upper eccentricity of orbits around a galactic barycentre
BARYCENTRIC_MAX_ECCENTRICITY = 0.1

# Proportions of each main-sequence class among main-sequence systems,
# with their luminosity-class splits
_MAIN_SEQUENCE_SPLITS = [
    (SpectralClass.M, 0.7645, [(LuminosityClass.V, 0.998), (LuminosityClass.SUBDWARF, 0.002)]),
    (SpectralClass.K, 0.121, [
        (LuminosityClass.V, 0.987),
        (LuminosityClass.IV, 0.01),
        (LuminosityClass.SUBDWARF, 0.003),
    ]),
    (SpectralClass.G, 0.076, [(LuminosityClass.V, 0.992), (LuminosityClass.IV, 0.008)]),
    (SpectralClass.F, 0.03, [(LuminosityClass.V, 0.982), (LuminosityClass.IV, 0.018)]),
    (SpectralClass.A, 0.006, [(LuminosityClass.V, 1.0)]),
    (SpectralClass.B, 0.0013, [(LuminosityClass.V, 1.0)]),
    (SpectralClass.O, 3e-7, [(LuminosityClass.V, 1.0)]),
]

_CLUSTER_OVERRIDES = {
    SpectralClass.K: [
        (LuminosityClass.V, 0.989),
        (LuminosityClass.IV, 0.007),
        (LuminosityClass.SUBDWARF, 0.004),
    ],
    SpectralClass.G: [(LuminosityClass.V, 0.986), (LuminosityClass.IV, 0.014)],
}

_GIANT_SPLITS = [
    (StarType.RED_GIANT, 0.045, [
        (None, 0.96),
        (LuminosityClass.II, 0.018),
        (LuminosityClass.IB, 0.016),
        (LuminosityClass.IA, 0.0055),
        (LuminosityClass.ZERO, 0.0005),
    ]),
    (StarType.BLUE_GIANT, 0.035, [
        (None, 0.95),
        (LuminosityClass.II, 0.025),
        (LuminosityClass.IB, 0.02),
        (LuminosityClass.IA, 0.0045),
        (LuminosityClass.ZERO, 0.0005),
    ]),
    (StarType.YELLOW_GIANT, 0.02, [
        (None, 0.95),
        (LuminosityClass.II, 0.02),
        (LuminosityClass.IB, 0.023),
        (LuminosityClass.IA, 0.006),
        (LuminosityClass.ZERO, 0.001),
    ]),
]

_ELLIPTICAL_GIANT_SPLITS = [
    (StarType.RED_GIANT, 1.0, [(None, 0.9997), (LuminosityClass.II, 0.0003)]),
]

_ROGUE_PLANET_SPLITS = [
    (PlanetType.GAS_GIANT, 5.0 / 12.0),
    (PlanetType.ICE_GIANT, 0.25),
    (PlanetType.TERRESTRIAL, 1.0 / 6.0),
    (PlanetType.OCEAN, 1.0 / 24.0),
    (PlanetType.IRON, 1.0 / 24.0),
    (PlanetType.CARBON, 1.0 / 12.0),
]


def stellar_population(
    system_density: float,
    population_ii: bool = False,
    cluster: bool = False,
    elliptical: bool = False,
    rogue_planets: bool = True,
    nebulae: bool = True,
) -> List[ChildDefinition]:
    """
    Child definitions of a stellar population.

    Parameters
    ----------
    system_density : float
        Number density of star systems (per m³); every other kind of child
        is a proportion of it.
    population_ii : bool
        Metal-poor stars, as found in globular clusters.
    cluster : bool
        Use the globular-cluster luminosity-class splits.
    elliptical : bool
        Old population: red giants only, and only planetary nebulae.
    rogue_planets : bool
        Include free-floating planets.
    nebulae : bool
        Include nebulae and planetary nebulae.

    Returns
    -------
    list of ChildDefinition
    """
    definitions: List[ChildDefinition] = []
    star_options = {"population_ii": True} if population_ii else {}

    if rogue_planets:
        rogue_density = 3 * system_density
        for planet_type, proportion in _ROGUE_PLANET_SPLITS:
            definitions.append(ChildDefinition.fraction(
                StructureType.PLANET, ROGUE_PLANET_SPACE, rogue_density, proportion,
                planet_type=planet_type,
            ))

    definitions.append(ChildDefinition.fraction(
        StructureType.STAR, STAR_SPACE, system_density, 1.0 / 6.0,
        star_type=StarType.BROWN_DWARF, **star_options,
    ))

    main_sequence = system_density * 0.9096
    for spectral_class, proportion, splits in _MAIN_SEQUENCE_SPLITS:
        if cluster:
            splits = _CLUSTER_OVERRIDES.get(spectral_class, splits)
        for luminosity_class, share in splits:
            definitions.append(ChildDefinition.fraction(
                StructureType.STAR_SYSTEM, STAR_SYSTEM_SPACE, main_sequence, proportion * share,
                star_type=StarType.MAIN_SEQUENCE,
                spectral_class=spectral_class,
                luminosity_class=luminosity_class,
                **star_options,
            ))

    for star_type, proportion in (
        (StarType.WHITE_DWARF, 0.04),
        (StarType.NEUTRON_STAR, 4e-4),
    ):
        definitions.append(ChildDefinition.fraction(
            StructureType.STAR_SYSTEM, STAR_SYSTEM_SPACE, system_density, proportion,
            star_type=star_type, **star_options,
        ))
    definitions.append(ChildDefinition.fraction(
        StructureType.BLACK_HOLE, BLACK_HOLE_SPACE, system_density, 4e-4,
    ))

    giants = system_density * 0.05
    for star_type, proportion, splits in (_ELLIPTICAL_GIANT_SPLITS if elliptical else _GIANT_SPLITS):
        for luminosity_class, share in splits:
            options = dict(star_options, star_type=star_type)
            if luminosity_class is not None:
                options["luminosity_class"] = luminosity_class
            definitions.append(ChildDefinition.fraction(
                StructureType.STAR_SYSTEM, STAR_SYSTEM_SPACE, giants, proportion * share,
                **options,
            ))

    if nebulae:
        definitions.append(ChildDefinition.fraction(
            StructureType.PLANETARY_NEBULA, PLANETARY_NEBULA_SPACE, system_density, 1.5e-8,
        ))
        if not elliptical:
            definitions.append(ChildDefinition.fraction(
                StructureType.NEBULA, NEBULA_SPACE, system_density, 4e-10,
            ))
            definitions.append(ChildDefinition.fraction(
                StructureType.HII_REGION, NEBULA_SPACE, system_density, 4e-10,
            ))

    return definitions


def barycentric_orbit(
    parent: CosmicLocation,
    child: CosmicLocation,
    rng: Randomizer,
) -> Optional[OrbitalParameters]:
    """Orbit of a child around its region's centre, carrying the whole region's mass."""
    if np.linalg.norm(child.position) == 0 or parent.material.mass <= 0:
        return None
    return from_eccentricity(
        parent.material.mass,
        np.zeros(3),
        rng.next_double(0, BARYCENTRIC_MAX_ECCENTRICITY),
    )


class GalaxyGenerator(BodyGenerator):
    """
    Generator for spiral galaxies; the base of every galaxy-like region.

    Subclasses override the shape, the core and the population through the
    class attributes and `_shape`.
    """

    name = "spiral_galaxy"
    description = "Flattened disc of stars around a supermassive black hole"
    structure_types = (StructureType.SPIRAL_GALAXY,)
    space = GALAXY_SPACE
    configures_before_orbit = True

    system_density = GALAXY_SYSTEM_DENSITY
    supermassive_core = True

    def _shape(self, rng: Randomizer) -> Tuple[float, float]:
        radius = rng.next_double(2.4e20, 2.5e21)
        return radius, radius * rng.next_positive_normal(0.02, 0.001)

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        radius, axis = self._shape(rng)
        shape = Ellipsoid(radius, radius, axis)

        # Provisional mass from the expected stellar population; refined once
        # the core exists
        mass = shape.volume * self.system_density * _MASS_PER_UNIT_DENSITY
        material = Material.homogeneous(
            mass,
            shape,
            [(Substance.INTERSTELLAR_MEDIUM, 1.0)],
            context.config.ambient_temperature,
        )
        return self.create(rng, context, material)

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        """Create the central black hole and settle the total mass."""
        core = cosmos.new_location(
            StructureType.BLACK_HOLE,
            parent=location,
            position=np.zeros(3),
            seed=rng.next_u32(),
            supermassive=self.supermassive_core,
        )

        stellar_mass = location.material.volume * self.system_density * _MASS_PER_UNIT_DENSITY
        location.material.mass = (stellar_mass + core.material.mass) * rng.next_double(5, 15)
        logger.debug(
            f"{location.id} core {core.id}: mass={core.material.mass:.4g} kg, "
            f"total={location.material.mass:.4g} kg"
        )
        return [core]

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return stellar_population(self.system_density)

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        children = cosmos.hierarchy.children_of(location)
        if children and children[0].structure_type == StructureType.BLACK_HOLE:
            return children[0]
        return None

    def child_orbit(
        self,
        cosmos,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        """
        Orbit around the region's barycentre.

        The whole mass of the region is treated as concentrated at its
        centre; children placed exactly at the centre get no orbit.
        """
        return barycentric_orbit(parent, child, rng)


class EllipticalGalaxyGenerator(GalaxyGenerator):
    """Generator for elliptical galaxies: old, red, no star-forming nebulae."""

    name = "elliptical_galaxy"
    description = "Ellipsoid of old stars around a supermassive black hole"
    structure_types = (StructureType.ELLIPTICAL_GALAXY,)

    def _shape(self, rng: Randomizer) -> Tuple[float, float]:
        radius = rng.next_double(1.5e18, 1.5e21)
        return radius, radius * rng.next_positive_normal(0.5, 1.0)

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return stellar_population(self.system_density, elliptical=True)


class DwarfGalaxyGenerator(GalaxyGenerator):
    """Generator for dwarf galaxies, with a stellar-mass core."""

    name = "dwarf_galaxy"
    description = "Small galaxy orbiting a larger one"
    structure_types = (StructureType.DWARF_GALAXY,)
    space = 9.5e18
    supermassive_core = False

    def _shape(self, rng: Randomizer) -> Tuple[float, float]:
        radius = rng.next_double(2.5e18, 9.5e18)
        return radius, radius * rng.next_positive_normal(0.02, 1.0)


class GlobularClusterGenerator(GalaxyGenerator):
    """Generator for globular clusters: dense, metal-poor, planetless."""

    name = "globular_cluster"
    description = "Dense spherical cluster of old population II stars"
    structure_types = (StructureType.GLOBULAR_CLUSTER,)
    space = 2.1e17
    supermassive_core = False
    system_density = CLUSTER_SYSTEM_DENSITY

    def _shape(self, rng: Randomizer) -> Tuple[float, float]:
        radius = rng.next_double(8e16, 2.1e17)
        return radius, radius

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return stellar_population(
            self.system_density,
            population_ii=True,
            cluster=True,
            rogue_planets=False,
            nebulae=False,
        )


class GalaxySubgroupGenerator(GalaxyGenerator):
    """
    Generator for galaxy subgroups.

    A subgroup holds one large galaxy at its centre, spiral 70% of the
    time, surrounded by dwarf galaxies and globular clusters.
    """

    name = "galaxy_subgroup"
    description = "Central galaxy with its satellite galaxies and clusters"
    structure_types = (StructureType.GALAXY_SUBGROUP,)
    space = SUBGROUP_SPACE

    MASS = 3.333e43
    DWARF_GALAXY_DENSITY = 1.25e-69
    GLOBULAR_CLUSTER_DENSITY = 3.75e-69

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        material = Material.homogeneous(
            self.MASS,
            Sphere(rng.next_double(6.25e22, 1.25e23)),
            [(Substance.INTRACLUSTER_MEDIUM, 1.0)],
            context.config.ambient_temperature,
        )
        return self.create(rng, context, material)

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        if rng.next_bool(0.7):
            structure_type = StructureType.SPIRAL_GALAXY
        else:
            structure_type = StructureType.ELLIPTICAL_GALAXY
        central = cosmos.new_location(
            structure_type,
            parent=location,
            position=np.zeros(3),
            seed=rng.next_u32(),
        )
        return [central]

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return [
            ChildDefinition(
                StructureType.DWARF_GALAXY, DwarfGalaxyGenerator.space, self.DWARF_GALAXY_DENSITY
            ),
            ChildDefinition(
                StructureType.GLOBULAR_CLUSTER,
                GlobularClusterGenerator.space,
                self.GLOBULAR_CLUSTER_DENSITY,
            ),
        ]

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        children = cosmos.hierarchy.children_of(location)
        return children[0] if children else None
