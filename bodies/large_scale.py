#!/usr/bin/env python3
"""
Large-Scale Structure Generators

The regions above galaxy subgroups: the universe itself, superclusters
(filaments and walls of galaxy clusters), galaxy clusters and galaxy groups.
Only galaxy groups are gravitationally bound, so only their subgroups orbit;
the members of every larger region drift with the cosmic expansion.
"""

import itertools
import logging
from typing import List, Optional

from cosmos.config import UNIVERSE_AMBIENT_TEMPERATURE
from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, StructureType
from cosmos.material import Material, Substance
from cosmos.orbit import OrbitalParameters
from cosmos.population import ChildDefinition, find_open_position
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, Shape, Sphere

from .base import BodyGenerator
from .galaxy import SUBGROUP_SPACE, barycentric_orbit

logger = logging.getLogger(__name__)

GROUP_SPACE = 3e23
CLUSTER_SPACE = 1.5e24
SUPERCLUSTER_SPACE = 9.4607e25

GROUP_DENSITY_IN_CLUSTER = 1.415e-72
CLUSTER_DENSITY_IN_SUPERCLUSTER = 2.563e-77
GROUP_DENSITY_IN_SUPERCLUSTER = 5.126e-77
SUPERCLUSTER_DENSITY = 5.8e-26


def _intracluster(context: GenerationContext, mass: float, shape: Shape) -> Material:
    return Material.homogeneous(
        mass,
        shape,
        [(Substance.INTRACLUSTER_MEDIUM, 1.0)],
        context.config.ambient_temperature,
    )


class GalaxyGroupGenerator(BodyGenerator):
    """
    Generator for galaxy groups.

    A group is created with one to five galaxy subgroups, each placed clear
    of the others; placement stops at the first subgroup that does not fit.
    """

    name = "galaxy_group"
    description = "Bound group of galaxy subgroups"
    structure_types = (StructureType.GALAXY_GROUP,)
    space = GROUP_SPACE
    configures_before_orbit = True

    MASS = 2e44
    MAX_SUBGROUPS = 5

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        shape = Sphere(rng.next_double(1.5e23, 3e23))
        return self.create(rng, context, _intracluster(context, self.MASS, shape))

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        subgroups = []
        for _ in range(rng.next_int_inclusive(1, self.MAX_SUBGROUPS)):
            position = find_open_position(
                rng,
                location.material.shape,
                SUBGROUP_SPACE,
                cosmos.hierarchy.children_of(location),
                cosmos.config.max_placement_attempts,
            )
            if position is None:
                break
            subgroups.append(cosmos.new_location(
                StructureType.GALAXY_SUBGROUP,
                parent=location,
                position=position,
                seed=rng.next_u32(),
            ))

        logger.debug(f"{location.id} holds {len(subgroups)} subgroup(s)")
        return subgroups

    def child_orbit(
        self,
        cosmos,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        return barycentric_orbit(parent, child, rng)


class GalaxyClusterGenerator(BodyGenerator):
    """Generator for galaxy clusters, populated with galaxy groups."""

    name = "galaxy_cluster"
    description = "Cluster of galaxy groups in hot intracluster gas"
    structure_types = (StructureType.GALAXY_CLUSTER,)
    space = CLUSTER_SPACE

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        shape = Sphere(rng.next_double(3e23, 1.5e24))
        return self.create(rng, context, _intracluster(context, rng.next_double(2e45, 2e46), shape))

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return [ChildDefinition(StructureType.GALAXY_GROUP, GROUP_SPACE, GROUP_DENSITY_IN_CLUSTER)]


class SuperclusterGenerator(BodyGenerator):
    """
    Generator for superclusters.

    A supercluster is a filament (two equal short axes) or a wall (two
    different short axes), with its long axis along a random coordinate
    axis.
    """

    name = "supercluster"
    description = "Filament or wall of galaxy clusters and groups"
    structure_types = (StructureType.SUPERCLUSTER,)
    space = SUPERCLUSTER_SPACE

    @staticmethod
    def supercluster_shape(rng: Randomizer) -> Ellipsoid:
        """Sample the ellipsoid of a filament or wall."""
        major = rng.next_double(9.4607e23, 9.4607e25)
        minor = major * rng.next_double(0.02, 0.15)
        if rng.next_bool():
            second = minor
        else:
            second = major * rng.next_double(0.03, 0.08)

        orders = list(itertools.permutations((major, minor, second)))
        return Ellipsoid(*orders[rng.next_int_inclusive(0, len(orders) - 1)])

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        shape = self.supercluster_shape(rng)
        return self.create(rng, context, _intracluster(context, rng.next_double(2e46, 2e47), shape))

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return [
            ChildDefinition(
                StructureType.GALAXY_CLUSTER, CLUSTER_SPACE, CLUSTER_DENSITY_IN_SUPERCLUSTER
            ),
            ChildDefinition(StructureType.GALAXY_GROUP, GROUP_SPACE, GROUP_DENSITY_IN_SUPERCLUSTER),
        ]


class UniverseGenerator(BodyGenerator):
    """
    Generator for the universe: the outermost region, filled with
    superclusters and bathed in the cosmic background.
    """

    name = "universe"
    description = "Observable universe, filled with superclusters"
    structure_types = (StructureType.UNIVERSE,)

    RADIUS = 1.89214e33
    MASS = 1.5e53
    space = RADIUS

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        material = Material.homogeneous(
            self.MASS,
            Sphere(self.RADIUS),
            [(Substance.WARM_HOT_INTERGALACTIC_MEDIUM, 1.0)],
            UNIVERSE_AMBIENT_TEMPERATURE,
        )
        return self.create(rng, context, material)

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return [ChildDefinition(StructureType.SUPERCLUSTER, SUPERCLUSTER_SPACE, SUPERCLUSTER_DENSITY)]
