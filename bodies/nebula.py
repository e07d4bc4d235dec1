#!/usr/bin/env python3
"""
Nebula Generators

Covers molecular clouds, HII regions and planetary nebulae. HII regions
are the star-forming kind and are populated with systems of young hot
stars; a planetary nebula is the ionized shell around a single white dwarf.
"""

import logging
from typing import List, Optional

import numpy as np

from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, LuminosityClass, SpectralClass, StarType, StructureType
from cosmos.material import Material, Substance
from cosmos.population import ChildDefinition
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, Sphere

from .base import BodyGenerator

logger = logging.getLogger(__name__)

NEBULA_SPACE = 5.5e18
PLANETARY_NEBULA_SPACE = 9.5e15

NEBULA_MASS_RANGE = (1.99e33, 1.99e37)
PLANETARY_NEBULA_MASS_RANGE = (1.99e29, 1.99e30)

HII_REGION_TEMPERATURE = 10000.0
HII_CHILD_DENSITY = 6e-50
STAR_SYSTEM_SPACE = 3.5e16

# Attempts at drawing an axis no larger than the nebula's space
_MAX_AXIS_ATTEMPTS = 100


class NebulaGenerator(BodyGenerator):
    """Generator for cold molecular clouds."""

    name = "nebula"
    description = "Irregular cloud of cold molecular gas"
    structure_types = (StructureType.NEBULA,)
    space = NEBULA_SPACE

    axis_factor = 1.5e17
    substance = Substance.MOLECULAR_CLOUD

    def _axis(self, rng: Randomizer) -> float:
        """Log-normal major axis, redrawn while it exceeds the space."""
        axis = self.space
        for _ in range(_MAX_AXIS_ATTEMPTS):
            axis = self.axis_factor + rng.next_log_normal() * self.axis_factor
            if axis <= self.space:
                return axis
        return min(axis, self.space)

    def _temperature(self, context: GenerationContext) -> float:
        return context.config.ambient_temperature

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        axis = self._axis(rng)
        shape = Ellipsoid(
            axis,
            axis * rng.next_double(0.5, 1.5),
            axis * rng.next_double(0.5, 1.5),
        )
        material = Material.homogeneous(
            rng.next_double(*NEBULA_MASS_RANGE),
            shape,
            [(self.substance, 1.0)],
            self._temperature(context),
        )
        return self.create(rng, context, material)


class HIIRegionGenerator(NebulaGenerator):
    """Generator for HII regions, ionized by the young stars inside them."""

    name = "hii_region"
    description = "Ionized hydrogen cloud around newly formed hot stars"
    structure_types = (StructureType.HII_REGION,)

    axis_factor = 1e17
    substance = Substance.IONIZED_CLOUD

    def _temperature(self, context: GenerationContext) -> float:
        return HII_REGION_TEMPERATURE

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        return [
            ChildDefinition.fraction(
                StructureType.STAR_SYSTEM, STAR_SYSTEM_SPACE, HII_CHILD_DENSITY, 0.9998,
                star_type=StarType.MAIN_SEQUENCE,
                spectral_class=SpectralClass.B,
                luminosity_class=LuminosityClass.V,
            ),
            ChildDefinition.fraction(
                StructureType.STAR_SYSTEM, STAR_SYSTEM_SPACE, HII_CHILD_DENSITY, 0.0002,
                star_type=StarType.MAIN_SEQUENCE,
                spectral_class=SpectralClass.O,
                luminosity_class=LuminosityClass.V,
            ),
        ]


class PlanetaryNebulaGenerator(BodyGenerator):
    """Generator for planetary nebulae, each holding its central white dwarf."""

    name = "planetary_nebula"
    description = "Ionized shell thrown off by a dying star"
    structure_types = (StructureType.PLANETARY_NEBULA,)
    space = PLANETARY_NEBULA_SPACE

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        material = Material.homogeneous(
            rng.next_double(*PLANETARY_NEBULA_MASS_RANGE),
            Sphere(PLANETARY_NEBULA_SPACE),
            [(Substance.IONIZED_CLOUD, 1.0)],
            HII_REGION_TEMPERATURE,
        )
        return self.create(rng, context, material)

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        star = cosmos.new_location(
            StructureType.STAR,
            parent=location,
            position=np.zeros(3),
            seed=rng.next_u32(),
            star_type=StarType.WHITE_DWARF,
        )
        return [star]

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        children = cosmos.hierarchy.children_of(location)
        return children[0] if children else None
