#!/usr/bin/env python3
"""
Black Hole Generator
"""

import logging

from cosmos.constraints import SOLAR_MASS, SPEED_OF_LIGHT
from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, StructureType
from cosmos.material import Material, Substance
from cosmos.orbit import G
from cosmos.randomizer import Randomizer
from cosmos.shapes import Sphere

from .base import BodyGenerator

logger = logging.getLogger(__name__)

STELLAR_MASS_RANGE = (6e30, 4e31)
SUPERMASSIVE_MASS_RANGE = (2e35, 2e40)

# Hawking temperature of a one solar mass black hole (K)
_SOLAR_HAWKING_TEMPERATURE = 6.169e-8


def schwarzschild_radius(mass: float) -> float:
    """Event horizon radius 2GM/c² (m)."""
    return 2 * G * mass / SPEED_OF_LIGHT**2


def hawking_temperature(mass: float) -> float:
    """Hawking radiation temperature (K)."""
    return _SOLAR_HAWKING_TEMPERATURE * SOLAR_MASS / mass


class BlackHoleGenerator(BodyGenerator):
    """
    Generator for stellar and supermassive black holes.

    Options
    -------
    supermassive : bool
        Draw from the galactic-core mass range.
    mass : float
        Fixed mass.
    """

    name = "black_hole"
    description = "Stellar or supermassive black hole"
    structure_types = (StructureType.BLACK_HOLE,)
    space = 6e4

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        mass = context.option("mass")
        if mass is None:
            low, high = (
                SUPERMASSIVE_MASS_RANGE if context.option("supermassive") else STELLAR_MASS_RANGE
            )
            mass = rng.next_double(low, high)

        material = Material.homogeneous(
            mass,
            Sphere(schwarzschild_radius(mass)),
            [(Substance.FUZZBALL, 1.0)],
            hawking_temperature(mass),
        )
        return self.create(rng, context, material)

    def orbited_reference(self, cosmos, location: CosmicLocation) -> CosmicLocation:
        return location
