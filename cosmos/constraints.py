#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Physical Constraints

Free functions shared by the body generators: mass bounds per planet type,
hydrostatic radius, Stern-Levison mass, Roche limits and ring bands, layered
composition proportions and equilibrium temperature.
"""

import math
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidConfigurationError, MissingOrbitalContextError
from .location import PlanetaryRing, PlanetType
from .randomizer import Randomizer

# Stefan-Boltzmann constant in W/(m²·K⁴)
STEFAN_BOLTZMANN = 5.670374419e-8

SOLAR_LUMINOSITY = 3.846e26
SOLAR_MASS = 1.98847e30
SOLAR_TEMPERATURE = 5778.0
SPEED_OF_LIGHT = 299792458.0

# Below this radius a body cannot be rounded by its own gravity
MINIMUM_HYDROSTATIC_RADIUS = 600000.0

ASTEROID_MIN_MASS = 5.9e8
ASTEROID_MAX_MASS = 3.4e20
DWARF_MIN_MASS = 3.4e20
DWARF_MAX_MASS = 6e25
TERRESTRIAL_MIN_MASS = 2e22
TERRESTRIAL_MAX_MASS = 6e25
GIANT_MIN_MASS = 6e25
GIANT_MAX_MASS = 2.5e28

ICY_RING_DENSITY = 300.0
ROCKY_RING_DENSITY = 1380.0

# Stern-Levison parameter scale
_STERN_LEVISON_K = 2.5e-28

_MAX_RINGS = 10


def mass_bounds(planet_type: PlanetType) -> Tuple[float, float]:
    """
    Allowed mass range for a planet type.

    Parameters
    ----------
    planet_type : PlanetType
        Type of planetoid.

    Returns
    -------
    tuple
        (minimum, maximum) mass in kg
    """
    if planet_type.is_giant:
        return GIANT_MIN_MASS, GIANT_MAX_MASS
    if planet_type.is_dwarf:
        return DWARF_MIN_MASS, DWARF_MAX_MASS
    if planet_type.is_asteroid:
        return ASTEROID_MIN_MASS, ASTEROID_MAX_MASS
    if planet_type == PlanetType.COMET:
        return 0.0, ASTEROID_MAX_MASS
    return TERRESTRIAL_MIN_MASS, TERRESTRIAL_MAX_MASS


def reclassify(planet_type: PlanetType, mass: float) -> PlanetType:
    """
    Type a body of the given mass should have.

    Asteroids too massive for their type become dwarf planets; dwarf planets
    too massive for their type become terrestrial planets (molten dwarfs
    become lava planets).
    """
    if planet_type.is_asteroid and mass > ASTEROID_MAX_MASS:
        planet_type = PlanetType.DWARF if planet_type == PlanetType.ASTEROID_C else PlanetType.ROCKY_DWARF
    if planet_type.is_dwarf and mass > DWARF_MAX_MASS:
        planet_type = PlanetType.LAVA if planet_type == PlanetType.LAVA_DWARF else PlanetType.TERRESTRIAL
    return planet_type


def clamp_mass(planet_type: PlanetType, mass: float) -> float:
    """Mass limited to the allowed range of a planet type (kg)."""
    minimum, maximum = mass_bounds(planet_type)
    return min(max(mass, minimum), maximum)


def sphere_radius(mass: float, density: float) -> float:
    """Radius of a sphere of the given mass and density (m)."""
    if density <= 0:
        raise InvalidConfigurationError(f"Density must be positive, got {density}")
    return (mass / density / (4.0 / 3.0 * math.pi)) ** (1.0 / 3.0)


def planemo_radius(mass: float, density: float) -> float:
    """
    Radius of a planemo, never below the hydrostatic minimum.

    Parameters
    ----------
    mass : float
        Mass (kg).
    density : float
        Bulk density (kg/m³).

    Returns
    -------
    float
        Radius (m)
    """
    return max(MINIMUM_HYDROSTATIC_RADIUS, sphere_radius(mass, density))


def stern_levison_mass(semi_major_axis: float) -> float:
    """
    Mass at which a body can just clear its orbital neighbourhood.

    Parameters
    ----------
    semi_major_axis : float
        Orbital distance (m).

    Returns
    -------
    float
        Mass for a Stern-Levison parameter of 1 (kg)
    """
    return math.sqrt(semi_major_axis**1.5 / _STERN_LEVISON_K)


def stern_levison_mass_for(body) -> float:
    """
    Stern-Levison mass for a body, using its orbit or its distance from its parent.

    Raises
    ------
    MissingOrbitalContextError
        If the body has neither an orbit nor a parent.
    """
    if body.orbit is not None:
        return stern_levison_mass(body.orbit.semi_major_axis)
    if body.parent_id is not None:
        return stern_levison_mass(float(np.linalg.norm(body.position)))
    raise MissingOrbitalContextError(
        f"{body.id} has no orbit and no parent; its orbital distance is unknown"
    )


def clearing_semi_major_axis(context) -> float:
    """
    Provisional semi-major axis of a body still being generated.

    Parameters
    ----------
    context : GenerationContext
        Context of the body.

    Returns
    -------
    float
        Semi-major axis (m) its orbit-clearing mass bound is computed at.

    Raises
    ------
    MissingOrbitalContextError
        If neither an orbit request nor a distance to the orbited body or
        parent is known.
    """
    semi_major_axis = context.provisional_semi_major_axis
    if semi_major_axis is None:
        raise MissingOrbitalContextError(
            f"A {context.structure_type.value} at its parent's centre with nothing to "
            f"orbit has no orbital distance"
        )
    return semi_major_axis


def roche_limit(primary_mass: float, satellite_density: float) -> float:
    """Distance inside which a satellite of the given density is torn apart (m)."""
    return 0.8947 * (primary_mass / satellite_density) ** (1.0 / 3.0)


def ring_roche_limit(radius: float, body_density: float, ring_density: float) -> float:
    """Outer limit of a ring of the given material around a body (m)."""
    return 1.26 * radius * (body_density / ring_density) ** (1.0 / 3.0)


def ring_chance(planet_type: PlanetType) -> float:
    """Probability that a body of this type has at least one ring."""
    if planet_type.is_giant:
        return 0.9
    if planet_type.is_terrestrial:
        return 0.1
    return 0.0


def generate_rings(
    rng: Randomizer,
    planet_type: PlanetType,
    radius: float,
    density: float,
    hill_radius: Optional[float] = None,
) -> List[PlanetaryRing]:
    """
    Generate ring bands from the outside in.

    The first ring appears with the type's ring chance and each further ring
    with half the previous probability. Each ring's inner radius becomes the
    outer limit of the next band.

    Parameters
    ----------
    rng : Randomizer
        Random source.
    planet_type : PlanetType
        Type of the ringed body.
    radius : float
        Radius of the ringed body (m).
    density : float
        Bulk density of the ringed body (kg/m³).
    hill_radius : float, optional
        Hill sphere radius; rings stay within a third of it.

    Returns
    -------
    list of PlanetaryRing
        Rings, outermost first.
    """
    chance = ring_chance(planet_type)
    if chance <= 0:
        return []

    outer_icy = ring_roche_limit(radius, density, ICY_RING_DENSITY)
    outer_rocky = ring_roche_limit(radius, density, ROCKY_RING_DENSITY)
    if hill_radius is not None:
        outer_icy = min(outer_icy, hill_radius / 3)
        outer_rocky = min(outer_rocky, hill_radius / 3)

    rings = []
    inner_limit = radius
    while len(rings) < _MAX_RINGS and inner_limit < outer_icy and rng.next_bool(chance):
        if inner_limit < outer_rocky and rng.next_bool():
            inner = rng.next_double(inner_limit, outer_rocky)
            rings.append(PlanetaryRing(inner, outer_rocky, icy=False))
        else:
            inner = rng.next_double(inner_limit, outer_icy)
            rings.append(PlanetaryRing(inner, outer_icy, icy=True))
        outer_rocky = min(outer_rocky, inner)
        outer_icy = min(outer_icy, inner)
        chance /= 2

    return rings


def core_proportion(rng: Randomizer, planet_type: PlanetType) -> float:
    """Fraction of a planemo's mass in its core."""
    if planet_type.is_dwarf:
        return rng.next_double(0.2, 0.55)
    if planet_type in (PlanetType.IRON, PlanetType.CARBON):
        return 0.4
    return 0.15


def crust_proportion(planet_type: PlanetType, radius: float) -> float:
    """Fraction of a planemo's mass in its crust; smaller bodies cool faster."""
    if planet_type.is_giant:
        return 0.0
    return 400000.0 / radius**1.6


def layer_proportions(rng: Randomizer, planet_type: PlanetType, radius: float) -> Tuple[float, float, float]:
    """
    Core, mantle and crust mass fractions.

    Returns
    -------
    tuple
        (core, mantle, crust), summing to 1
    """
    core = core_proportion(rng, planet_type)
    crust = min(crust_proportion(planet_type, radius), 1.0 - core)
    return core, 1.0 - core - crust, crust


def equilibrium_temperature(luminosity: float, albedo: float, distance: float) -> float:
    """
    Blackbody equilibrium temperature of a body lit by a star.

    Parameters
    ----------
    luminosity : float
        Stellar luminosity (W).
    albedo : float
        Bond albedo.
    distance : float
        Distance from the star (m).

    Returns
    -------
    float
        Temperature (K)
    """
    if distance <= 0:
        raise InvalidConfigurationError("Distance from the star must be positive")
    return (
        luminosity * (1 - albedo) / (16 * math.pi * STEFAN_BOLTZMANN * distance**2)
    ) ** 0.25
