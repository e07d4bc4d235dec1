#!/usr/bin/env python3
"""
Star System Generator

A star system is a region around a primary star at its centre. Configuring
a system creates, in order:

1. The primary star
2. Companion stars on explicit orbits around the primary
3. Planets for every star, spaced outward by mutual Hill radii
4. A debris belt beyond the primary's outermost planet, when it has
   terrestrial planets
5. An Oort cloud, for single stars and close binaries

The system's mass and radius are only known once its stars exist, so its
contents are created before its own orbit is assigned.
"""

import logging
import math
from typing import List, Optional

import numpy as np

from cosmos.context import GenerationContext
from cosmos.location import (
    CosmicLocation,
    PlanetType,
    StarType,
    StructureType,
    SystemDetails,
)
from cosmos.constraints import roche_limit
from cosmos.material import Material, Substance
from cosmos.orbit import (
    G,
    OrbitalParameters,
    explicit_orbit,
    from_eccentricity,
    semi_major_axis_for_period,
)
from cosmos.randomizer import Randomizer
from cosmos.shapes import Sphere

from .asteroid_field import OortCloudGenerator
from .base import MAX_CHILD_ECCENTRICITY, BodyGenerator
from .star import companion_count, companion_spectral_class, planet_counts

logger = logging.getLogger(__name__)

STAR_SYSTEM_SPACE = 3.5e16

# Radius of a system before companion orbits are added (m)
BASE_RADIUS = 1.125e16

# Binaries wider than this have no shared Oort cloud (m)
CLOSE_BINARY_APOAPSIS = 1.5e13

# Upper bound of planet inclinations (radians)
PLANET_MAX_INCLINATION = 0.1

GIANT_PLANET_DENSITY = 1650.0
TERRESTRIAL_PLANET_DENSITY = 6000.0

# Masses used to space planets before the next planet exists (kg)
NOMINAL_GIANT_MASS = 1e27
NOMINAL_TERRESTRIAL_MASS = 6e24
BELT_NEIGHBOUR_MASS = 3e25

# Typical planet spacing in mutual Hill radii
HILL_SPACING_MEAN = 21.7
HILL_SPACING_STDDEV = 9.5

# Orbital period thresholds of companions (s)
CLOSE_PERIOD_MEAN = 36000.0
CLOSE_PERIOD_STDDEV = 1.732e7
WIDE_PERIOD_SCALE = 1.5768e9
ECCENTRICITY_PERIOD_SCALE = 3.1536e9

_STAR_OPTIONS = ("star_type", "spectral_class", "luminosity_class", "population_ii", "sunlike")


class StarSystemGenerator(BodyGenerator):
    """
    Generator for star systems.

    Options
    -------
    star_type, spectral_class, luminosity_class, population_ii, sunlike
        Passed to the primary star.
    """

    name = "star_system"
    description = "Primary star with companions, planets, belts and an Oort cloud"
    structure_types = (StructureType.STAR_SYSTEM,)
    space = STAR_SYSTEM_SPACE
    configures_before_orbit = True

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        material = Material.homogeneous(
            0.0,
            Sphere(BASE_RADIUS),
            [(Substance.INTERPLANETARY_MEDIUM, 1.0)],
            context.config.ambient_temperature,
        )
        return self.create(rng, context, material, details=SystemDetails())

    def configure_contents(self, cosmos, location, rng, context) -> List[CosmicLocation]:
        details: SystemDetails = location.details
        star_options = {key: context.options[key] for key in _STAR_OPTIONS if key in context.options}

        primary = cosmos.new_location(
            StructureType.STAR,
            parent=location,
            position=np.zeros(3),
            seed=rng.next_u32(),
            **star_options,
        )
        details.primary_id = primary.id
        details.star_ids.append(primary.id)

        stars = [primary]
        if cosmos.config.allow_binary_stars:
            sunlike = bool(context.option("sunlike", False))
            for _ in range(companion_count(rng, primary.details, sunlike)):
                companion = self._add_companion(cosmos, location, primary, rng)
                details.star_ids.append(companion.id)
                stars.append(companion)

        companion_apoapsis = max((star.orbit.apoapsis for star in stars[1:]), default=0.0)
        location.material = Material.homogeneous(
            1.001 * sum(star.material.mass for star in stars),
            Sphere(BASE_RADIUS + companion_apoapsis),
            [(Substance.INTERPLANETARY_MEDIUM, 1.0)],
            location.material.temperature,
        )

        created = list(stars)
        for star in stars:
            created.extend(self._add_planets(cosmos, location, star, stars, rng))

        if len(stars) == 1 or (len(stars) == 2 and companion_apoapsis < CLOSE_BINARY_APOAPSIS):
            created.append(cosmos.new_location(
                StructureType.OORT_CLOUD,
                parent=location,
                position=np.zeros(3),
                seed=rng.next_u32(),
                orbited_id=primary.id,
            ))

        logger.debug(
            f"Configured star system with {len(stars)} star(s) and "
            f"{len(created) - len(stars)} other bodies"
        )
        return created

    # ------------------------------------------------------------------
    # Stars
    # ------------------------------------------------------------------

    def _add_companion(
        self,
        cosmos,
        system: CosmicLocation,
        primary: CosmicLocation,
        rng: Randomizer,
    ) -> CosmicLocation:
        companion = cosmos.new_location(
            StructureType.STAR,
            parent=system,
            position=primary.position.copy(),
            seed=rng.next_u32(),
            spectral_class=companion_spectral_class(rng, primary.details),
            population_ii=primary.details.population_ii,
        )

        if rng.next_bool(0.2):
            sample = abs(rng.next_normal(CLOSE_PERIOD_MEAN, CLOSE_PERIOD_STDDEV))
            period = min(max(sample, CLOSE_PERIOD_MEAN), CLOSE_PERIOD_MEAN + 3 * CLOSE_PERIOD_STDDEV)
        else:
            period = rng.next_log_normal() * WIDE_PERIOD_SCALE

        eccentricity = min(
            abs(rng.next_normal(0.0, 1e-4)) * period / ECCENTRICITY_PERIOD_SCALE,
            MAX_CHILD_ECCENTRICITY,
        )
        mu = G * (primary.material.mass + companion.material.mass)
        semi_major_axis = semi_major_axis_for_period(period, mu)

        # Keep the two stars from touching at periapsis
        contact = 2 * (primary.material.containing_radius + companion.material.containing_radius)
        periapsis = max(semi_major_axis * (1 - eccentricity), contact)

        cosmos.hierarchy.assign_orbit(
            companion,
            explicit_orbit(
                primary.material.mass,
                primary.position,
                periapsis,
                eccentricity,
                rng.next_double(0, math.pi),
                rng.next_angle(),
                rng.next_angle(),
                rng.next_angle(),
                orbited_id=primary.id,
            ),
            rng,
        )
        return companion

    # ------------------------------------------------------------------
    # Planets
    # ------------------------------------------------------------------

    @staticmethod
    def _max_planet_apoapsis(star: CosmicLocation, stars: List[CosmicLocation]) -> float:
        if star.orbit is not None:
            return star.orbit.hill_sphere_radius() / 3
        companions = [other for other in stars if other.orbit is not None]
        if companions:
            return min(other.orbit.periapsis for other in companions) / 3
        return OortCloudGenerator.INNER_RADIUS

    @staticmethod
    def _terrestrial_type(rng: Randomizer, star: CosmicLocation, periapsis: float) -> PlanetType:
        star_type = star.details.star_type
        roche = roche_limit(star.material.mass, TERRESTRIAL_PLANET_DENSITY)
        chance = rng.next_double()
        if periapsis < 1.05 * roche or chance <= 0.01:
            return PlanetType.LAVA
        if periapsis < 200 * roche and chance <= 0.5:
            return PlanetType.IRON
        if star_type == StarType.NEUTRON_STAR and chance <= 0.2:
            return PlanetType.CARBON
        if star_type == StarType.BROWN_DWARF and chance <= 0.75:
            return PlanetType.CARBON
        if chance <= 0.25:
            return PlanetType.OCEAN
        return PlanetType.TERRESTRIAL

    def _add_planets(
        self,
        cosmos,
        system: CosmicLocation,
        star: CosmicLocation,
        stars: List[CosmicLocation],
        rng: Randomizer,
    ) -> List[CosmicLocation]:
        """
        Create the planets of one star.

        The first planet is placed near a typical distance that grows with
        the number of giants; every later planet is placed a random number of
        mutual Hill radii inside the innermost or outside the outermost
        planet. Giants always go outward.

        Returns
        -------
        list of CosmicLocation
            Planets, their satellites and the debris belt, if any.
        """
        giants, ice_giants, terrestrials = planet_counts(rng, star.details)
        kinds: List[Optional[PlanetType]] = (
            [PlanetType.GAS_GIANT] * giants
            + [PlanetType.ICE_GIANT] * ice_giants
            + [None] * terrestrials
        )
        if not kinds:
            return []

        star_mass = star.material.mass
        star_radius = star.material.containing_radius
        min_giant_periapsis = max(roche_limit(star_mass, GIANT_PLANET_DENSITY), 2 * star_radius)
        min_terrestrial_periapsis = max(roche_limit(star_mass, TERRESTRIAL_PLANET_DENSITY), 2 * star_radius)
        max_apoapsis = self._max_planet_apoapsis(star, stars)

        created: List[CosmicLocation] = []
        planets: List[CosmicLocation] = []
        inner = outer = None
        skipped = 0

        for kind in kinds:
            is_giant = kind is not None
            min_periapsis = min_giant_periapsis if is_giant else min_terrestrial_periapsis
            eccentricity = min(rng.next_positive_normal(0.0, 0.05), 0.5)
            nominal_mass = NOMINAL_GIANT_MASS if is_giant else NOMINAL_TERRESTRIAL_MASS
            spacing = rng.next_positive_normal(HILL_SPACING_MEAN, HILL_SPACING_STDDEV, minimum=1.0)

            periapsis = None
            if inner is None:
                mean = 7.48e11 - (4 - max(1, giants)) * 2.34e11
                if min_periapsis > 1.25 * mean:
                    periapsis = min_periapsis
                else:
                    periapsis = max(min_periapsis, rng.next_normal(mean, mean / 3))
            else:
                if not is_giant and rng.next_bool(0.75):
                    apoapsis = inner.orbit.periapsis - inner.orbit.mutual_hill_sphere_radius(nominal_mass) * spacing
                    candidate = apoapsis * (1 - eccentricity) / (1 + eccentricity)
                    if candidate >= min_periapsis:
                        periapsis = candidate
                if periapsis is None:
                    periapsis = outer.orbit.apoapsis + outer.orbit.mutual_hill_sphere_radius(nominal_mass) * spacing

            if periapsis * (1 + eccentricity) / (1 - eccentricity) > max_apoapsis:
                skipped += 1
                continue

            planet_type = kind or self._terrestrial_type(rng, star, periapsis)
            planet = cosmos.new_location(
                StructureType.PLANET,
                parent=system,
                position=star.position.copy(),
                orbit_parameters=explicit_orbit(
                    star_mass,
                    star.position,
                    periapsis,
                    eccentricity,
                    rng.next_double(0, PLANET_MAX_INCLINATION),
                    rng.next_angle(),
                    rng.next_angle(),
                    rng.next_angle(),
                    orbited_id=star.id,
                ),
                seed=rng.next_u32(),
                planet_type=planet_type,
            )
            planets.append(planet)
            created.append(planet)
            created.extend(cosmos.hierarchy.get(i) for i in planet.details.satellite_ids)

            if inner is None or planet.orbit.periapsis < inner.orbit.periapsis:
                inner = planet
            if outer is None or planet.orbit.apoapsis > outer.orbit.apoapsis:
                outer = planet

        if skipped:
            logger.warning(f"{skipped} planet(s) of {star.id} found no stable orbit")

        has_terrestrial = any(p.details.planet_type.is_terrestrial for p in planets)
        if star.orbit is None and has_terrestrial and outer is not None:
            belt = self._add_belt(cosmos, system, star, outer, max_apoapsis, rng)
            if belt is not None:
                created.append(belt)
        return created

    def _add_belt(
        self,
        cosmos,
        system: CosmicLocation,
        star: CosmicLocation,
        outer: CosmicLocation,
        max_apoapsis: float,
        rng: Randomizer,
    ) -> Optional[CosmicLocation]:
        spacing = rng.next_positive_normal(HILL_SPACING_MEAN, HILL_SPACING_STDDEV, minimum=1.0)
        inner_radius = outer.orbit.apoapsis + outer.orbit.mutual_hill_sphere_radius(BELT_NEIGHBOUR_MASS) * spacing
        width = min(rng.next_double(3e12, 4.5e12), (inner_radius - outer.orbit.apoapsis) * 0.9)
        if inner_radius + width > max_apoapsis:
            logger.debug(f"No room for a debris belt around {star.id}")
            return None

        return cosmos.new_location(
            StructureType.ASTEROID_FIELD,
            parent=system,
            position=star.position.copy(),
            seed=rng.next_u32(),
            major_radius=inner_radius + width / 2,
            minor_radius=width / 2,
            orbited_id=star.id,
        )

    # ------------------------------------------------------------------
    # Population rules
    # ------------------------------------------------------------------

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        primary_id = location.details.primary_id if location.details is not None else None
        if primary_id is None or primary_id not in cosmos.hierarchy:
            return None
        return cosmos.hierarchy.get(primary_id)

    def child_orbit(
        self,
        cosmos,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        """Orbit around the primary; planetary bodies stay close to its equator."""
        primary = self.orbited_reference(cosmos, parent)
        if primary is None or primary.id == child.id:
            return None

        primary_position = cosmos.hierarchy.translate_to_local(primary, child.parent_id)
        if np.linalg.norm(child.position - primary_position) == 0:
            return None

        if child.structure_type in (StructureType.PLANET, StructureType.DWARF_PLANET):
            max_inclination = PLANET_MAX_INCLINATION
        else:
            max_inclination = math.pi
        return from_eccentricity(
            primary.material.mass,
            primary_position,
            min(rng.next_positive_normal(0.0, 0.05), MAX_CHILD_ECCENTRICITY),
            max_inclination=max_inclination,
            orbited_id=primary.id,
        )
