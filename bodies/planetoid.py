#!/usr/bin/env python3
"""
Planetoid Generator

Planets, dwarf planets, asteroids and comets. Planemos (planets and dwarf
planets) are rounded bodies whose mass is bounded by their type and, for
terrestrial planets, by their ability to clear their orbit; asteroids are
irregular ellipsoids and comets small icy spheres.

After a planet is attached and its orbit assigned it receives rings inside
its Roche bands and natural satellites inside a third of its Hill sphere.
"""

import logging
import math
from typing import List, Optional, Tuple

from cosmos.constraints import (
    ASTEROID_MAX_MASS,
    ASTEROID_MIN_MASS,
    DWARF_MIN_MASS,
    TERRESTRIAL_MIN_MASS,
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
)
from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, PlanetoidDetails, PlanetType, StructureType
from cosmos.material import Layer, Material, Substance
from cosmos.orbit import explicit_orbit
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, Sphere

from .base import BodyGenerator, coerce_enum

logger = logging.getLogger(__name__)

# Density assumed for satellites when bounding their periapsis (kg/m³)
SATELLITE_DENSITY = 3000.0

# Maximum inclination of a satellite orbit (radians)
SATELLITE_MAX_INCLINATION = 0.5

# Densities bounding where tidal heating melts a satellite (kg/m³)
LAVA_PLANET_DENSITY = 6000.0
LAVA_DWARF_DENSITY = 2000.0

# Surface temperature range of lava worlds (K)
LAVA_TEMPERATURE_RANGE = (974.0, 1574.0)

_DEFAULT_TYPES = {
    StructureType.PLANET: PlanetType.TERRESTRIAL,
    StructureType.DWARF_PLANET: PlanetType.DWARF,
    StructureType.ASTEROID: PlanetType.ASTEROID_C,
    StructureType.COMET: PlanetType.COMET,
}

_ASTEROID_DENSITIES = {
    PlanetType.ASTEROID_C: 1380.0,
    PlanetType.ASTEROID_M: 5320.0,
    PlanetType.ASTEROID_S: 2710.0,
}


def planet_density(rng: Randomizer, planet_type: PlanetType) -> float:
    """Sample the bulk density of a planemo (kg/m³)."""
    if planet_type == PlanetType.GAS_GIANT:
        if rng.next_bool(0.2):
            return rng.next_double(600, 1100)
        return rng.next_double(1100, 1650)
    if planet_type == PlanetType.ICE_GIANT:
        return rng.next_double(1100, 1650)
    if planet_type == PlanetType.IRON:
        return rng.next_double(5250, 8000)
    if planet_type == PlanetType.DWARF:
        return 2000.0
    if planet_type in (PlanetType.ROCKY_DWARF, PlanetType.LAVA_DWARF):
        return 4000.0
    return rng.next_double(3750, 6000)


def albedo_for(rng: Randomizer, planet_type: PlanetType) -> float:
    """Sample a Bond albedo for a planet type."""
    if planet_type == PlanetType.ASTEROID_C:
        return rng.next_double(0.03, 0.1)
    if planet_type == PlanetType.ASTEROID_M:
        return rng.next_double(0.1, 0.2)
    if planet_type == PlanetType.ASTEROID_S:
        return rng.next_double(0.1, 0.22)
    if planet_type == PlanetType.COMET:
        return rng.next_double(0.025, 0.055)
    if planet_type.is_giant:
        return rng.next_double(0.275, 0.35)
    return rng.next_double(0.1, 0.6)


def _log_uniform(rng: Randomizer, minimum: float, maximum: float) -> float:
    if maximum <= minimum:
        return maximum
    return math.exp(rng.next_double(math.log(minimum), math.log(maximum)))


def planemo_mass(
    rng: Randomizer,
    planet_type: PlanetType,
    orbital_distance: Optional[float] = None,
    max_mass: Optional[float] = None,
) -> float:
    """
    Sample the mass of a planet or dwarf planet.

    Terrestrial planets must be able to clear their orbit, so their minimum
    is ten times the Stern-Levison mass at their distance. Dwarf planets
    must not, so their maximum is a hundredth of it.

    The distance should be the provisional semi-major axis (see
    ``GenerationContext.provisional_semi_major_axis``). A planemo with no
    distance, such as a free-standing root body, is bounded by its type
    alone.

    Parameters
    ----------
    rng : Randomizer
        Random source.
    planet_type : PlanetType
        Giant, terrestrial or dwarf type.
    orbital_distance : float, optional
        Provisional orbital distance (m). Without it only the type bounds
        apply.
    max_mass : float, optional
        Additional upper bound (kg), e.g. for satellites.

    Returns
    -------
    float
        Mass (kg)
    """
    minimum, maximum = mass_bounds(planet_type)
    if max_mass is not None:
        maximum = min(maximum, max_mass)

    if planet_type.is_giant:
        return rng.next_double(minimum, max(minimum, maximum))

    if orbital_distance is not None:
        limit = stern_levison_mass(orbital_distance)
        if planet_type.is_dwarf:
            maximum = max(DWARF_MIN_MASS, min(maximum, limit / 100))
        else:
            minimum = max(minimum, 10 * limit)

    minimum = min(minimum, maximum)
    return _log_uniform(rng, minimum, maximum)


def planemo_layers(
    rng: Randomizer,
    planet_type: PlanetType,
    radius: float,
) -> List[Layer]:
    """Core, mantle, crust (or envelope) layers of a planemo."""
    core, mantle, crust = layer_proportions(rng, planet_type, radius)

    if planet_type.is_giant:
        envelope = mantle * rng.next_double(0.4, 0.6)
        mantle -= envelope
        if planet_type == PlanetType.GAS_GIANT:
            mantle_components = [(Substance.METALLIC_HYDROGEN, 0.9), (Substance.HELIUM, 0.1)]
            envelope_components = [
                (Substance.HYDROGEN, 0.86),
                (Substance.HELIUM, 0.13),
                (Substance.METHANE, 0.01),
            ]
        else:
            mantle_components = [
                (Substance.WATER_ICE, 0.6),
                (Substance.AMMONIA, 0.2),
                (Substance.METHANE, 0.2),
            ]
            envelope_components = [
                (Substance.HYDROGEN, 0.8),
                (Substance.HELIUM, 0.15),
                (Substance.METHANE, 0.05),
            ]
        return [
            Layer("core", core, [(Substance.ROCK, 0.5), (Substance.IRON, 0.5)]),
            Layer("mantle", mantle, mantle_components),
            Layer("envelope", envelope, envelope_components),
        ]

    if planet_type == PlanetType.DWARF:
        ice = rng.next_double()
        return [
            Layer("core", core, [(Substance.ROCK, 0.6), (Substance.IRON, 0.4)]),
            Layer("mantle", mantle, [(Substance.WATER_ICE, 0.8), (Substance.ROCK, 0.2)]),
            Layer("crust", crust, [
                (Substance.WATER_ICE, ice),
                (Substance.METHANE, (1 - ice) / 2),
                (Substance.CARBON_DIOXIDE, (1 - ice) / 2),
            ]),
        ]

    if planet_type == PlanetType.ROCKY_DWARF:
        return [
            Layer("core", core, [(Substance.IRON, 1.0)]),
            Layer("mantle", mantle, [(Substance.ROCK, 1.0)]),
            Layer("crust", crust, [(Substance.ROCK, 0.9), (Substance.DUST, 0.1)]),
        ]

    if planet_type == PlanetType.LAVA_DWARF:
        dust = max(0.0, rng.next_double(-0.5, 0.5))
        return [
            Layer("core", core, [(Substance.IRON, 1.0)]),
            Layer("mantle", mantle, [(Substance.MAGMA, 1.0)]),
            Layer("crust", crust, [(Substance.ROCK, 1 - dust), (Substance.DUST, dust)]),
        ]

    if planet_type == PlanetType.LAVA:
        return [
            Layer("core", core, [(Substance.IRON_NICKEL, 1.0)]),
            Layer("mantle", mantle, [(Substance.MAGMA, 1.0)]),
            Layer("crust", crust, [(Substance.MAGMA, 0.6), (Substance.ROCK, 0.4)]),
        ]

    if planet_type == PlanetType.IRON:
        return [
            Layer("core", core, [(Substance.IRON, 1.0)]),
            Layer("mantle", mantle, [(Substance.IRON, 0.5), (Substance.ROCK, 0.5)]),
            Layer("crust", crust, [(Substance.ROCK, 1.0)]),
        ]

    if planet_type == PlanetType.CARBON:
        return [
            Layer("core", core, [(Substance.IRON, 1.0)]),
            Layer("mantle", mantle, [
                (Substance.CARBON, 0.6),
                (Substance.DIAMOND, 0.2),
                (Substance.ROCK, 0.2),
            ]),
            Layer("crust", crust, [(Substance.CARBON, 0.5), (Substance.ROCK, 0.5)]),
        ]

    if planet_type == PlanetType.OCEAN:
        crust_components = [(Substance.WATER, 0.7), (Substance.ROCK, 0.3)]
    else:
        water = rng.next_double(0, 0.2)
        crust_components = [(Substance.ROCK, 1 - water), (Substance.WATER, water)]
    return [
        Layer("core", core, [(Substance.IRON_NICKEL, 1.0)]),
        Layer("mantle", mantle, [(Substance.ROCK, 1.0)]),
        Layer("crust", crust, crust_components),
    ]


def asteroid_components(rng: Randomizer, planet_type: PlanetType) -> List[Tuple[Substance, float]]:
    """Bulk composition of an asteroid of the given type."""
    if planet_type == PlanetType.ASTEROID_M:
        rock = rng.next_double(0, 0.2)
        gold = rng.next_double(0, 0.05)
        return [
            (Substance.IRON_NICKEL, 0.95 - rock),
            (Substance.ROCK, rock),
            (Substance.GOLD, gold),
            (Substance.PLATINUM, 0.05 - gold),
        ]
    if planet_type == PlanetType.ASTEROID_S:
        gold = rng.next_double(0, 0.005)
        return [
            (Substance.IRON_NICKEL, 0.568),
            (Substance.ROCK, 0.427),
            (Substance.GOLD, gold),
            (Substance.PLATINUM, 0.005 - gold),
        ]
    clay = rng.next_double(0.1, 0.2)
    ice = rng.next_double(0, 0.22)
    return [
        (Substance.ROCK, 1 - clay - ice),
        (Substance.CLAY, clay),
        (Substance.WATER_ICE, ice),
    ]


def satellite_type(
    rng: Randomizer,
    max_mass: float,
    periapsis: Optional[float] = None,
    primary_mass: Optional[float] = None,
) -> Optional[PlanetType]:
    """
    Type of a natural satellite no more massive than ``max_mass``.

    Satellites whose periapsis lies just outside the primary's Roche limit
    for their density are tidally molten, and a small fraction of the rest
    are molten anyway.

    Parameters
    ----------
    rng : Randomizer
        Random source.
    max_mass : float
        Upper mass bound (kg).
    periapsis : float, optional
        Periapsis of the satellite orbit (m).
    primary_mass : float, optional
        Mass of the planet orbited (kg).

    Returns
    -------
    PlanetType or None
        None if nothing fits.
    """
    def molten(density: float, chance: float) -> bool:
        if periapsis is not None and primary_mass is not None:
            if periapsis < 1.05 * roche_limit(primary_mass, density):
                return True
        return chance <= 0.01

    if max_mass > TERRESTRIAL_MIN_MASS and rng.next_bool():
        chance = rng.next_double()
        if molten(LAVA_PLANET_DENSITY, chance):
            return PlanetType.LAVA
        if chance <= 0.25:
            return PlanetType.OCEAN
        if chance <= 0.4:
            return PlanetType.IRON
        return PlanetType.TERRESTRIAL
    if max_mass > DWARF_MIN_MASS and rng.next_bool():
        chance = rng.next_double()
        if molten(LAVA_DWARF_DENSITY, chance):
            return PlanetType.LAVA_DWARF
        return PlanetType.DWARF if chance <= 0.75 else PlanetType.ROCKY_DWARF
    if max_mass > ASTEROID_MIN_MASS:
        chance = rng.next_double()
        if chance <= 0.75:
            return PlanetType.ASTEROID_C
        if chance <= 0.9:
            return PlanetType.ASTEROID_S
        return PlanetType.ASTEROID_M
    return None


class PlanetoidGenerator(BodyGenerator):
    """
    Generator for planets, dwarf planets, asteroids and comets.

    Options
    -------
    planet_type : PlanetType or str
        Type of body; defaults by structure type.
    mass : float
        Fixed mass; the type is reclassified if it exceeds the type's range.
    max_mass : float
        Upper mass bound (used for satellites).
    satellite : bool
        The body is a natural satellite and receives no satellites itself.
    """

    name = "planetoid"
    description = "Planet, dwarf planet, asteroid or comet"
    structure_types = (
        StructureType.PLANET,
        StructureType.DWARF_PLANET,
        StructureType.ASTEROID,
        StructureType.COMET,
    )
    space = 1.75e7

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        planet_type = coerce_enum(PlanetType, context.option("planet_type"))
        if planet_type is None:
            planet_type = _DEFAULT_TYPES.get(context.structure_type, PlanetType.TERRESTRIAL)

        if planet_type == PlanetType.COMET:
            material, albedo = self._comet(rng)
        else:
            mass = context.option("mass")
            if mass is not None:
                planet_type = reclassify(planet_type, mass)
                if not planet_type.is_asteroid:
                    clamped = clamp_mass(planet_type, mass)
                    if clamped != mass:
                        logger.debug(
                            f"Clamped {planet_type.value} mass {mass:.4g} kg to {clamped:.4g} kg"
                        )
                    mass = clamped
            if planet_type.is_asteroid:
                material, albedo = self._asteroid(rng, planet_type, mass, context.option("max_mass"))
            else:
                if mass is None:
                    mass = planemo_mass(
                        rng,
                        planet_type,
                        self._clearing_distance(context, planet_type),
                        context.option("max_mass"),
                    )
                material, albedo = self._planemo(rng, planet_type, mass)

        if planet_type.is_lava:
            material.temperature = rng.next_double(*LAVA_TEMPERATURE_RANGE)
        else:
            material.temperature = self._temperature(context, albedo)
        details = PlanetoidDetails(planet_type, albedo)

        logger.debug(
            f"Generated {planet_type.value}: mass={material.mass:.4g} kg, "
            f"radius={material.containing_radius:.4g} m"
        )
        return self.create(
            rng, context, material, structure_type=planet_type.structure_type, details=details
        )

    def _comet(self, rng: Randomizer) -> Tuple[Material, float]:
        density = rng.next_double(300, 700)
        shape = Sphere(rng.next_positive_normal(10000.0, 4500.0, minimum=1000.0))
        ice = rng.next_double(0.5, 0.7)
        material = Material(
            mass=shape.volume * density,
            shape=shape,
            layers=[Layer("nucleus", 1.0, [
                (Substance.WATER_ICE, ice),
                (Substance.DUST, 1 - ice - 0.1),
                (Substance.CARBON_DIOXIDE, 0.05),
                (Substance.AMMONIA, 0.025),
                (Substance.METHANE, 0.025),
            ])],
        )
        return material, albedo_for(rng, PlanetType.COMET)

    def _asteroid(
        self,
        rng: Randomizer,
        planet_type: PlanetType,
        mass: Optional[float],
        max_mass: Optional[float],
    ) -> Tuple[Material, float]:
        if mass is None:
            maximum = ASTEROID_MAX_MASS if max_mass is None else min(ASTEROID_MAX_MASS, max_mass)
            spread = (ASTEROID_MAX_MASS - ASTEROID_MIN_MASS) / 3
            mass = min(rng.next_positive_normal(ASTEROID_MIN_MASS, spread, minimum=ASTEROID_MIN_MASS), maximum)

        density = _ASTEROID_DENSITIES[planet_type]
        axis = (0.75 * mass / (density * math.pi)) ** (1.0 / 3.0)
        irregularity = rng.next_double(0.5, 1.0)
        shape = Ellipsoid(axis, axis * irregularity, axis / irregularity)

        material = Material(
            mass=mass,
            shape=shape,
            layers=[Layer("bulk", 1.0, asteroid_components(rng, planet_type))],
        )
        return material, albedo_for(rng, planet_type)

    def _planemo(self, rng: Randomizer, planet_type: PlanetType, mass: float) -> Tuple[Material, float]:
        density = planet_density(rng, planet_type)
        radius = planemo_radius(mass, density)
        shape = Ellipsoid.flattened(radius, rng.next_double(0, 0.1))
        material = Material(mass=mass, shape=shape, layers=planemo_layers(rng, planet_type, radius))
        return material, albedo_for(rng, planet_type)

    @staticmethod
    def _clearing_distance(context: GenerationContext, planet_type: PlanetType) -> Optional[float]:
        """
        Semi-major axis at which a planemo's orbit-clearing bound applies.

        Giants are bounded by type alone. A free-standing root planemo has no
        neighbourhood to clear, so it gets None as well; a planemo with a
        parent or an orbit request but no distance raises
        MissingOrbitalContextError.
        """
        if planet_type.is_giant or not context.has_orbital_context:
            return None
        return clearing_semi_major_axis(context)

    @staticmethod
    def _temperature(context: GenerationContext, albedo: float) -> float:
        if context.illumination is not None:
            luminosity, distance = context.illumination
            if distance > 0:
                return equilibrium_temperature(luminosity, albedo, distance)
        return context.config.ambient_temperature

    # ------------------------------------------------------------------
    # Rings and satellites
    # ------------------------------------------------------------------

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        details: PlanetoidDetails = location.details
        planet_type = details.planet_type
        if planet_type.is_asteroid or planet_type == PlanetType.COMET:
            return []

        hill_radius = location.orbit.hill_sphere_radius() if location.orbit is not None else None
        details.rings = generate_rings(
            rng,
            planet_type,
            location.material.containing_radius,
            location.material.density,
            hill_radius,
        )

        if (
            location.structure_type != StructureType.PLANET
            or planet_type.is_lava
            or context.option("satellite", False)
            or not cosmos.config.generate_satellites
        ):
            return []
        return self.generate_satellites(cosmos, location, rng)

    def generate_satellites(
        self,
        cosmos,
        planet: CosmicLocation,
        rng: Randomizer,
    ) -> List[CosmicLocation]:
        """
        Create natural satellites of a planet.

        Satellites are siblings of the planet with explicit orbits around
        it. They are placed outward from the Roche limit (and any rings),
        each beyond the previous one's sphere of influence, and never reach
        beyond a third of the planet's Hill sphere.

        Parameters
        ----------
        cosmos : Cosmos
            Owner of the hierarchy.
        planet : CosmicLocation
            The planet, already attached and with its orbit assigned.
        rng : Randomizer
            Random source.

        Returns
        -------
        list of CosmicLocation
            Satellites created.
        """
        radius = planet.material.containing_radius
        mass = planet.material.mass
        details: PlanetoidDetails = planet.details

        if planet.orbit is not None:
            max_apoapsis = planet.orbit.hill_sphere_radius() / 3
        else:
            max_apoapsis = radius * 100
        min_periapsis = max(radius, roche_limit(mass, SATELLITE_DENSITY))
        if details.rings:
            min_periapsis = max(min_periapsis, max(ring.outer_radius for ring in details.rings))

        satellites = []
        for _ in range(cosmos.config.max_satellites):
            if min_periapsis >= max_apoapsis:
                break

            periapsis = rng.next_double(min_periapsis, max_apoapsis)
            max_eccentricity = (max_apoapsis - periapsis) / (max_apoapsis + periapsis)
            if max_eccentricity < 0.01:
                eccentricity = rng.next_double(0, max_eccentricity)
            else:
                eccentricity = min(rng.next_positive_normal(0.0, 0.05), max_eccentricity)

            semi_major_axis = periapsis / (1 - eccentricity)
            max_mass = max(0.0, mass / (semi_major_axis / radius - 1))
            planet_type = satellite_type(rng, max_mass, periapsis, mass)
            if planet_type is None:
                break

            parameters = explicit_orbit(
                mass,
                planet.position,
                periapsis,
                eccentricity,
                rng.next_double(0, SATELLITE_MAX_INCLINATION),
                rng.next_angle(),
                rng.next_angle(),
                rng.next_angle(),
                orbited_id=planet.id,
            )
            satellite = cosmos.new_location(
                planet_type.structure_type,
                parent=planet.parent_id,
                position=planet.position.copy(),
                orbit_parameters=parameters,
                seed=rng.next_u32(),
                planet_type=planet_type,
                satellite=True,
                max_mass=max_mass,
            )
            satellites.append(satellite)
            details.satellite_ids.append(satellite.id)
            min_periapsis = satellite.orbit.apoapsis + satellite.orbit.sphere_of_influence()

        if satellites:
            logger.debug(f"{planet.id} received {len(satellites)} satellite(s)")
        return satellites

    def orbited_reference(self, cosmos, location) -> Optional[CosmicLocation]:
        return location

