#!/usr/bin/env python3
"""
Star Generator

Derives the classification, temperature, luminosity, size and mass of
stars. Main-sequence stars follow a temperature-luminosity relation and a
radius-mass power law; remnants and giants draw from per-type
distributions.
"""

import logging
import math
from typing import List, Optional, Tuple

from cosmos.constraints import (
    SOLAR_LUMINOSITY,
    SOLAR_TEMPERATURE,
    STEFAN_BOLTZMANN,
)
from cosmos.context import GenerationContext
from cosmos.location import (
    CosmicLocation,
    LuminosityClass,
    SpectralClass,
    StarDetails,
    StarType,
    StructureType,
)
from cosmos.material import Material, Substance
from cosmos.randomizer import Randomizer
from cosmos.shapes import Ellipsoid, Shape, Sphere

from .base import BodyGenerator, coerce_enum

logger = logging.getLogger(__name__)

SOLAR_RADIUS = 6.955e8
JUPITER_RADIUS = 69911000.0

# Cumulative chance of each main-sequence spectral class; M takes the rest
_MAIN_SEQUENCE_CHANCES = [
    (SpectralClass.O, 3e-7),
    (SpectralClass.B, 0.0013),
    (SpectralClass.A, 0.0073),
    (SpectralClass.F, 0.0373),
    (SpectralClass.G, 0.1133),
    (SpectralClass.K, 0.2343),
]

# Lower temperature bound of each spectral class (K), hottest first
_CLASS_TEMPERATURES = [
    (SpectralClass.O, 30000.0),
    (SpectralClass.B, 10000.0),
    (SpectralClass.A, 7500.0),
    (SpectralClass.F, 6000.0),
    (SpectralClass.G, 5200.0),
    (SpectralClass.K, 3700.0),
    (SpectralClass.M, 2400.0),
    (SpectralClass.L, 1300.0),
    (SpectralClass.T, 500.0),
    (SpectralClass.Y, 250.0),
]

_POPULATION_I = [
    (Substance.HYDROGEN, 0.7346),
    (Substance.HELIUM, 0.2483),
    (Substance.HEAVY_ELEMENTS, 0.0171),
]
_POPULATION_II = [
    (Substance.HYDROGEN, 0.75),
    (Substance.HELIUM, 0.2499),
    (Substance.HEAVY_ELEMENTS, 0.0001),
]

_BRIGHT_CLASSES = (LuminosityClass.ZERO, LuminosityClass.IA, LuminosityClass.IB)


def spectral_class_for_temperature(temperature: float) -> SpectralClass:
    """Spectral class of a star with the given surface temperature."""
    for spectral_class, minimum in _CLASS_TEMPERATURES:
        if temperature >= minimum:
            return spectral_class
    return SpectralClass.Y


def temperature_for_class(rng: Randomizer, spectral_class: SpectralClass) -> float:
    """Sample a surface temperature within a spectral class (K)."""
    if spectral_class == SpectralClass.O:
        return rng.next_positive_normal(30000.0, 6666.0, minimum=30000.0)
    if spectral_class == SpectralClass.W:
        return rng.next_positive_normal(600000.0, 133333.0)

    bounds = [minimum for _, minimum in _CLASS_TEMPERATURES]
    index = [c for c, _ in _CLASS_TEMPERATURES].index(spectral_class)
    return rng.next_double(bounds[index], bounds[index - 1] if index > 0 else 30000.0)


def blackbody_luminosity(radius: float, temperature: float) -> float:
    """Luminosity of a spherical black body, 4πr²σT⁴ (W)."""
    return 4 * math.pi * radius**2 * STEFAN_BOLTZMANN * temperature**4


def blackbody_radius(luminosity: float, temperature: float) -> float:
    """Radius of a black body of the given luminosity and temperature (m)."""
    return math.sqrt(luminosity / (4 * math.pi * STEFAN_BOLTZMANN * temperature**4))


def _flattened(rng: Randomizer, radius: float) -> Shape:
    flattening = min(rng.next_positive_normal(0.15, 0.05), 0.9)
    return Ellipsoid.flattened(radius, flattening)


def _main_sequence(
    rng: Randomizer,
    spectral_class: Optional[SpectralClass],
    luminosity_class: Optional[LuminosityClass],
    sunlike: bool,
) -> Tuple[StarDetails, float, Shape, float]:
    if sunlike:
        spectral_class = SpectralClass.G
        luminosity_class = LuminosityClass.V
        temperature = SOLAR_TEMPERATURE
    else:
        if spectral_class is None:
            chance = rng.next_double()
            spectral_class = SpectralClass.M
            for candidate, cumulative in _MAIN_SEQUENCE_CHANCES:
                if chance <= cumulative:
                    spectral_class = candidate
                    break
        luminosity_class = luminosity_class or LuminosityClass.V
        temperature = temperature_for_class(rng, spectral_class)

    luminosity = (temperature / SOLAR_TEMPERATURE) ** 5.6 * SOLAR_LUMINOSITY
    if luminosity_class == LuminosityClass.SUBDWARF:
        luminosity /= rng.next_double(55, 100)
    elif luminosity_class == LuminosityClass.IV:
        luminosity *= rng.next_double(55, 100)

    radius = blackbody_radius(luminosity, temperature)
    shape = _flattened(rng, radius)
    exponent = 1.25 if radius < SOLAR_RADIUS else 1.75
    mass = (radius / SOLAR_RADIUS) ** exponent * 1.99e30

    details = StarDetails(StarType.MAIN_SEQUENCE, spectral_class, luminosity_class, luminosity)
    return details, mass, shape, temperature


def _brown_dwarf(rng: Randomizer, spectral_class: Optional[SpectralClass]):
    if spectral_class is None:
        chance = rng.next_double()
        if chance <= 0.29:
            spectral_class = SpectralClass.M
        elif chance <= 0.79:
            spectral_class = SpectralClass.L
        elif chance <= 0.99:
            spectral_class = SpectralClass.T
        else:
            spectral_class = SpectralClass.Y

    temperature = temperature_for_class(rng, spectral_class)
    mass = rng.next_double(2.468e28, 1.7088e29)
    radius = rng.next_positive_normal(JUPITER_RADIUS, 3495550.0)
    shape = Ellipsoid.flattened(radius, rng.next_double(0, 0.1))
    luminosity = blackbody_luminosity(radius, temperature)

    details = StarDetails(StarType.BROWN_DWARF, spectral_class, LuminosityClass.V, luminosity)
    return details, mass, shape, temperature


def _white_dwarf(rng: Randomizer):
    temperature = rng.next_positive_normal(16850.0, 600.0)
    mass = rng.next_positive_normal(1.194e30, 9.95e28)
    radius = (1.8986e27 / mass) ** (1.0 / 3.0) * JUPITER_RADIUS
    luminosity = blackbody_luminosity(radius, temperature)

    details = StarDetails(
        StarType.WHITE_DWARF,
        spectral_class_for_temperature(temperature),
        LuminosityClass.WHITE_DWARF,
        luminosity,
    )
    return details, mass, Sphere(radius), temperature


def _neutron_star(rng: Randomizer):
    temperature = temperature_for_class(rng, SpectralClass.W)
    mass = rng.next_positive_normal(4.4178e30, 5.174e29)
    radius = rng.next_double(1e4, 2e4)
    luminosity = blackbody_luminosity(radius, temperature)

    details = StarDetails(StarType.NEUTRON_STAR, SpectralClass.W, LuminosityClass.WHITE_DWARF, luminosity)
    return details, mass, Sphere(radius), temperature


def giant_luminosity_class(rng: Randomizer) -> LuminosityClass:
    """Sample the luminosity class of a giant star."""
    if rng.next_bool(0.05):
        chance = rng.next_double()
        if chance <= 0.01:
            return LuminosityClass.ZERO
        if chance <= 0.14:
            return LuminosityClass.IA
        if chance <= 0.5:
            return LuminosityClass.IB
        return LuminosityClass.II
    return LuminosityClass.III


def giant_luminosity(rng: Randomizer, luminosity_class: LuminosityClass) -> float:
    """Sample the luminosity of a giant of the given class (W)."""
    if luminosity_class == LuminosityClass.ZERO:
        return 3.846e31 + rng.next_positive_normal(0.0, 3.0768e32)
    if luminosity_class == LuminosityClass.IA:
        return rng.next_positive_normal(1.923e31, 3.846e29)
    if luminosity_class == LuminosityClass.IB:
        return rng.next_positive_normal(3.846e30, 3.846e29)
    if luminosity_class == LuminosityClass.II:
        return rng.next_positive_normal(3.846e29, 2.3076e29)
    return rng.next_positive_normal(1.5384e29, 4.9998e28)


def _giant_mass(
    rng: Randomizer,
    star_type: StarType,
    luminosity_class: LuminosityClass,
    luminosity: float,
) -> float:
    bright = luminosity_class in _BRIGHT_CLASSES
    if star_type == StarType.RED_GIANT:
        if bright:
            return rng.next_double(1.592e31, 4.975e31)
        return rng.next_double(5.97e29, 1.592e31)

    if star_type == StarType.YELLOW_GIANT:
        if luminosity_class == LuminosityClass.ZERO:
            return rng.next_double(1e31, 8.96e31)
        if bright:
            return rng.next_double(5.97e31, 6.97e31)
        return rng.next_double(5.97e29, 1.592e31)

    if luminosity_class == LuminosityClass.ZERO:
        # Up to the Eddington limit for this luminosity
        eddington = luminosity / 1.23072e31 * 1.99e30
        return rng.next_double(7.96e31, max(7.96e31, eddington))
    if bright:
        return rng.next_double(9.95e30, 2.0895e32)
    return rng.next_double(3.98e30, 1.99e31)


def _giant(rng: Randomizer, star_type: StarType, luminosity_class: Optional[LuminosityClass]):
    if star_type == StarType.RED_GIANT:
        temperature = rng.next_positive_normal(3800.0, 466.0)
    elif star_type == StarType.YELLOW_GIANT:
        temperature = rng.next_positive_normal(7600.0, 800.0)
    else:
        temperature = rng.next_positive_normal(10000.0, 13333.0, minimum=10000.0)

    luminosity_class = luminosity_class or giant_luminosity_class(rng)
    luminosity = giant_luminosity(rng, luminosity_class)
    radius = blackbody_radius(luminosity, temperature)
    mass = _giant_mass(rng, star_type, luminosity_class, luminosity)

    details = StarDetails(
        star_type,
        spectral_class_for_temperature(temperature),
        luminosity_class,
        luminosity,
    )
    return details, mass, _flattened(rng, radius), temperature


class StarGenerator(BodyGenerator):
    """
    Generator for individual stars.

    Options
    -------
    star_type : StarType or str
        Default main sequence.
    spectral_class, luminosity_class : SpectralClass, LuminosityClass or str
        Fixed classification; sampled when omitted.
    population_ii : bool
        Metal-poor composition.
    sunlike : bool
        A G V main-sequence star at 5778 K.
    """

    name = "star"
    description = "Single star: main sequence, dwarf, remnant or giant"
    structure_types = (StructureType.STAR,)
    space = 3.5e16

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        sunlike = bool(context.option("sunlike", False))
        star_type = coerce_enum(StarType, context.option("star_type")) or StarType.MAIN_SEQUENCE
        spectral_class = coerce_enum(SpectralClass, context.option("spectral_class"))
        luminosity_class = coerce_enum(LuminosityClass, context.option("luminosity_class"))
        population_ii = bool(context.option("population_ii", False))

        if sunlike or star_type == StarType.MAIN_SEQUENCE:
            details, mass, shape, temperature = _main_sequence(
                rng, spectral_class, luminosity_class, sunlike
            )
        elif star_type == StarType.BROWN_DWARF:
            details, mass, shape, temperature = _brown_dwarf(rng, spectral_class)
        elif star_type == StarType.WHITE_DWARF:
            details, mass, shape, temperature = _white_dwarf(rng)
        elif star_type == StarType.NEUTRON_STAR:
            details, mass, shape, temperature = _neutron_star(rng)
        else:
            details, mass, shape, temperature = _giant(rng, star_type, luminosity_class)

        details.population_ii = population_ii
        if star_type == StarType.WHITE_DWARF:
            components = [(Substance.ELECTRON_DEGENERATE_MATTER, 1.0)]
        elif star_type == StarType.NEUTRON_STAR:
            components = [(Substance.NEUTRON_DEGENERATE_MATTER, 1.0)]
        else:
            components = _POPULATION_II if population_ii else _POPULATION_I

        material = Material.homogeneous(mass, shape, components, temperature)
        logger.debug(
            f"Generated {details.star_type.value} star {details.designation}: "
            f"T={temperature:.0f} K, L={details.luminosity:.4g} W"
        )
        return self.create(rng, context, material, details=details)


def planet_chances(details: StarDetails) -> Tuple[float, float, float]:
    """
    Chances that a star has giant, ice giant and terrestrial planets.

    Returns
    -------
    tuple
        (giant, ice giant, terrestrial) probabilities
    """
    if details.star_type == StarType.WHITE_DWARF:
        return 0.12, 0.12, 0.12

    spectral = details.spectral_class
    main_sequence = details.star_type == StarType.MAIN_SEQUENCE
    sunlike_class = main_sequence and spectral in (SpectralClass.F, SpectralClass.G, SpectralClass.K)
    red_dwarf = (
        spectral == SpectralClass.M and details.luminosity_class == LuminosityClass.V
    )
    cool = spectral in (SpectralClass.L, SpectralClass.T, SpectralClass.Y)

    if details.population_ii:
        giant = 0.1
    elif sunlike_class:
        giant = 0.32
    elif red_dwarf:
        giant = 0.02
    elif cool or spectral == SpectralClass.O:
        giant = 0.0
    else:
        giant = 1.0 / 6.0

    if sunlike_class:
        ice_giant = 0.7
    elif red_dwarf:
        ice_giant = 1.0 / 3.0
    else:
        ice_giant = 1.0 / 6.0

    if details.population_ii or spectral == SpectralClass.O:
        terrestrial = 0.0
    elif sunlike_class:
        terrestrial = 0.62
    elif red_dwarf or cool:
        terrestrial = 0.45
    else:
        terrestrial = 1.0 / 6.0

    return giant, ice_giant, terrestrial


def planet_counts(rng: Randomizer, details: StarDetails) -> Tuple[int, int, int]:
    """
    Sample how many planets of each kind orbit a star.

    Returns
    -------
    tuple
        (giants, ice giants, terrestrial planets)
    """
    if details.star_type != StarType.WHITE_DWARF and rng.next_bool(0.45):
        total = int(round(rng.next_double(4.2, 8)))
    else:
        total = int(math.ceil(1 + abs(rng.next_normal(0.0, 1.0))))

    giant_chance, ice_chance, terrestrial_chance = planet_chances(details)

    giants = 0
    if rng.next_bool(giant_chance):
        giants = max(1, int(round(rng.next_double(0, total / 3))))

    ice_giants = 0
    if giants < total and rng.next_bool(ice_chance):
        ice_giants = max(1, int(round(rng.next_double(0, total / 3))))

    if giants + ice_giants >= total and total > 2:
        if giants > 0 and (ice_giants == 0 or rng.next_bool()):
            giants -= 1
        else:
            ice_giants -= 1

    terrestrials = 0
    if rng.next_bool(terrestrial_chance):
        terrestrials = max(0, total - giants - ice_giants)

    return giants, ice_giants, terrestrials


def companion_count(rng: Randomizer, details: StarDetails, sunlike: bool = False) -> int:
    """Number of companion stars orbiting a system's primary."""
    if sunlike or details.star_type == StarType.BROWN_DWARF:
        return 0

    chance = rng.next_double()
    if details.star_type == StarType.WHITE_DWARF:
        return 1 if chance <= 4.0 / 9.0 else 0
    if details.star_type.is_giant or details.star_type == StarType.NEUTRON_STAR:
        thresholds = [(2, 0.0625), (1, 0.4375)]
    elif details.spectral_class == SpectralClass.A:
        thresholds = [(2, 0.065), (1, 0.435)]
    elif details.spectral_class == SpectralClass.B:
        thresholds = [(1, 0.8)]
    elif details.spectral_class == SpectralClass.O:
        thresholds = [(1, 2.0 / 3.0)]
    else:
        thresholds = [(3, 0.01), (2, 0.03), (1, 0.3)]

    for count, threshold in thresholds:
        if chance <= threshold:
            return count
    return 0


# Relative likelihood of each class among companions
_COMPANION_WEIGHTS = [
    (SpectralClass.O, 0.8),
    (SpectralClass.B, 0.8),
    (SpectralClass.A, 0.55),
    (SpectralClass.F, 0.55),
    (SpectralClass.G, 0.4),
    (SpectralClass.K, 0.4),
    (SpectralClass.M, 0.25),
]


def companion_spectral_class(rng: Randomizer, primary: StarDetails) -> SpectralClass:
    """Spectral class of a main-sequence companion, no hotter than the primary."""
    classes: List[Tuple[SpectralClass, float]] = _COMPANION_WEIGHTS
    for index, (spectral_class, _) in enumerate(_COMPANION_WEIGHTS):
        if spectral_class == primary.spectral_class:
            classes = _COMPANION_WEIGHTS[index:]
            break
    return classes[rng.next_weighted_index([w for _, w in classes])][0]
