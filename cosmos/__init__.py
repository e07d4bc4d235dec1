#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cosmos Package

This package provides the core of the celestial hierarchy generator:
the deterministic random source, shapes and materials, the Keplerian
orbit model, the location hierarchy, the population engine and the
`Cosmos` facade that drives the type-specific generators in `bodies`.

Generation and orbit propagation do not depend on any output surface.
"""

from .randomizer import (
    Randomizer,
    MAX_SEED,
)

from .errors import (
    CosmosError,
    InvalidConfigurationError,
    MissingOrbitalContextError,
    DisjointHierarchyError,
)

from .shapes import (
    Shape,
    Sphere,
    Ellipsoid,
    HollowSphere,
    Torus,
)

from .material import (
    Substance,
    Layer,
    Material,
)

from .orbit import (
    G,
    Orbit,
    OrbitKind,
    OrbitalParameters,
    circular_orbit,
    from_eccentricity,
    explicit_orbit,
    resolve_orbit,
    assign_orbit,
    hill_sphere_radius,
    orbital_period,
)

from .location import (
    StructureType,
    StarType,
    SpectralClass,
    LuminosityClass,
    PlanetType,
    StarDetails,
    PlanetaryRing,
    PlanetoidDetails,
    SystemDetails,
    FieldDetails,
    CosmicLocation,
)

from .hierarchy import CosmicHierarchy

from .population import (
    ChildDefinition,
    PopulationResult,
    sample_count,
    populate,
)

from .config import (
    GenerationConfig,
    UNIVERSE_AMBIENT_TEMPERATURE,
)

from .context import GenerationContext

from .generator import (
    Cosmos,
    create_cosmos,
)


__all__ = [
    # Random source
    "Randomizer",
    "MAX_SEED",

    # Errors
    "CosmosError",
    "InvalidConfigurationError",
    "MissingOrbitalContextError",
    "DisjointHierarchyError",

    # Shapes and materials
    "Shape",
    "Sphere",
    "Ellipsoid",
    "HollowSphere",
    "Torus",
    "Substance",
    "Layer",
    "Material",

    # Orbit
    "G",
    "Orbit",
    "OrbitKind",
    "OrbitalParameters",
    "circular_orbit",
    "from_eccentricity",
    "explicit_orbit",
    "resolve_orbit",
    "assign_orbit",
    "hill_sphere_radius",
    "orbital_period",

    # Locations
    "StructureType",
    "StarType",
    "SpectralClass",
    "LuminosityClass",
    "PlanetType",
    "StarDetails",
    "PlanetaryRing",
    "PlanetoidDetails",
    "SystemDetails",
    "FieldDetails",
    "CosmicLocation",
    "CosmicHierarchy",

    # Population
    "ChildDefinition",
    "PopulationResult",
    "sample_count",
    "populate",

    # Configuration
    "GenerationConfig",
    "GenerationContext",
    "UNIVERSE_AMBIENT_TEMPERATURE",

    # Facade
    "Cosmos",
    "create_cosmos",
]

__version__ = "1.0.0"
