#!/usr/bin/env python3
"""
Asteroid Field and Oort Cloud Generators

Fields describe a distribution of orbits around a body rather than a
spatial cluster: when a field is populated, each child is moved out of the
field into its orbited body's parent and given an orbit around that body.
A field with nothing to orbit keeps its children.
"""

import logging
import math
from typing import List, Optional

from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, FieldDetails, PlanetType, StructureType
from cosmos.material import Material, Substance
from cosmos.orbit import OrbitalParameters, from_eccentricity
from cosmos.population import ChildDefinition
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, HollowSphere, Torus

from .base import MAX_CHILD_ECCENTRICITY, BodyGenerator

logger = logging.getLogger(__name__)

# Mean density of a field's material over its whole volume (kg/m³)
FIELD_MATERIAL_DENSITY = 7e-8

FIELD_CHILD_DENSITY = 13e-31
OORT_CHILD_DENSITY = 8.31e-38

ASTEROID_SPACE = 4e5
COMET_SPACE = 2.5e4
DWARF_SPACE = 1.5e6

# Inclination bounds of field children (radians)
ASTEROID_MAX_INCLINATION = 0.5
COMET_MAX_INCLINATION = math.pi


class AsteroidFieldGenerator(BodyGenerator):
    """
    Generator for asteroid fields and debris belts.

    Options
    -------
    major_radius, minor_radius : float
        Build a torus-shaped belt with these radii instead of an ellipsoid.
    orbited_id : str
        Body the field's children orbit; defaults to the provisional
        orbited body of the field itself.
    """

    name = "asteroid_field"
    description = "Asteroid field or belt whose members orbit a central body"
    structure_types = (StructureType.ASTEROID_FIELD,)
    space = 3.15e12
    retains_children = False

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        major_radius = context.option("major_radius")
        minor_radius = context.option("minor_radius")
        if major_radius is not None and minor_radius is not None:
            shape = Torus(major_radius, minor_radius)
        else:
            axis = rng.next_double(1.5e11, 3.15e12)
            shape = Ellipsoid(
                axis,
                axis * rng.next_double(0.5, 1.5),
                axis * rng.next_double(0.5, 1.5),
            )

        material = Material.homogeneous(
            shape.volume * FIELD_MATERIAL_DENSITY,
            shape,
            [
                (Substance.ROCK, 0.74),
                (Substance.IRON_NICKEL, 0.1),
                (Substance.WATER_ICE, 0.14),
                (Substance.DUST, 0.02),
            ],
            context.config.ambient_temperature,
        )
        return self.create(rng, context, material, details=self._details(context))

    @staticmethod
    def _details(context: GenerationContext) -> FieldDetails:
        orbited_id = context.option("orbited_id")
        if orbited_id is None and context.orbited is not None:
            orbited_id = context.orbited.id
        return FieldDetails(orbited_id)

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        total = FIELD_CHILD_DENSITY
        return [
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.74, planet_type=PlanetType.ASTEROID_C
            ),
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.14, planet_type=PlanetType.ASTEROID_S
            ),
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.10, planet_type=PlanetType.ASTEROID_M
            ),
            ChildDefinition.fraction(StructureType.COMET, COMET_SPACE, total, 0.02),
            ChildDefinition.fraction(
                StructureType.DWARF_PLANET, DWARF_SPACE, total, 3e-10, planet_type=PlanetType.DWARF
            ),
            ChildDefinition.fraction(
                StructureType.DWARF_PLANET, DWARF_SPACE, total, 1e-10, planet_type=PlanetType.ROCKY_DWARF
            ),
        ]

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        details = location.details
        if isinstance(details, FieldDetails) and details.orbited_id in cosmos.hierarchy:
            return cosmos.hierarchy.get(details.orbited_id)
        if location.orbit is not None and location.orbit.orbited_id in cosmos.hierarchy:
            return cosmos.hierarchy.get(location.orbit.orbited_id)

        parent = cosmos.hierarchy.parent_of(location)
        if parent is None:
            return None
        return cosmos.generator_for(parent).orbited_reference(cosmos, parent)

    def child_orbit(
        self,
        cosmos,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        """
        Orbit of a field member around the field's orbited body.

        Members share the field's own eccentricity; asteroids keep close to
        the reference plane while comets may orbit at any inclination.
        """
        orbited = self.orbited_reference(cosmos, parent)
        if orbited is None or orbited.material.mass <= 0:
            return None

        if parent.orbit is not None:
            eccentricity = parent.orbit.eccentricity
        else:
            eccentricity = min(rng.next_positive_normal(0.0, 0.05), MAX_CHILD_ECCENTRICITY)

        if child.structure_type == StructureType.COMET:
            max_inclination = COMET_MAX_INCLINATION
        else:
            max_inclination = ASTEROID_MAX_INCLINATION

        return from_eccentricity(
            orbited.material.mass,
            cosmos.hierarchy.translate_to_local(orbited, child.parent_id),
            eccentricity,
            max_inclination=max_inclination,
            orbited_id=orbited.id,
        )


class OortCloudGenerator(AsteroidFieldGenerator):
    """Generator for the spherical comet shell around a star system."""

    name = "oort_cloud"
    description = "Spherical shell of comets surrounding a star system"
    structure_types = (StructureType.OORT_CLOUD,)
    space = 7.5e15

    INNER_RADIUS = 3e15
    OUTER_RADIUS = 7.5e15
    MASS = 3e25

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        shape = HollowSphere(self.INNER_RADIUS, self.OUTER_RADIUS)
        material = Material.homogeneous(
            self.MASS,
            shape,
            [
                (Substance.WATER_ICE, 0.6),
                (Substance.DUST, 0.2),
                (Substance.CARBON_DIOXIDE, 0.1),
                (Substance.AMMONIA, 0.05),
                (Substance.METHANE, 0.05),
            ],
            context.config.ambient_temperature,
        )
        return self.create(rng, context, material, details=self._details(context))

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        total = OORT_CHILD_DENSITY
        return [
            ChildDefinition.fraction(StructureType.COMET, COMET_SPACE, total, 0.85),
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.11, planet_type=PlanetType.ASTEROID_C
            ),
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.025, planet_type=PlanetType.ASTEROID_S
            ),
            ChildDefinition.fraction(
                StructureType.ASTEROID, ASTEROID_SPACE, total, 0.015, planet_type=PlanetType.ASTEROID_M
            ),
        ]
