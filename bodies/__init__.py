#!/usr/bin/env python3
"""
Bodies Package

Provides the type-specific generators used to derive every kind of cosmic
location, from the universe down to comets. Each generator turns a
seeded random source and a generation context into a location, creates
the location's intrinsic contents and supplies the rules used when the
location is populated.

Class Hierarchy
---------------
BodyGenerator (base class)
    The class that all generators subclass.
    Provides default population rules: no children, orbits around the
    region's orbited body.

UniverseGenerator, SuperclusterGenerator, GalaxyClusterGenerator,
GalaxyGroupGenerator
    Large-scale structure above galaxy subgroups.

GalaxyGenerator(BodyGenerator)
    Spiral galaxies; subclassed by EllipticalGalaxyGenerator,
    DwarfGalaxyGenerator, GlobularClusterGenerator and
    GalaxySubgroupGenerator.

NebulaGenerator(BodyGenerator)
    Molecular clouds; subclassed by HIIRegionGenerator.

StarSystemGenerator, StarGenerator, PlanetoidGenerator,
AsteroidFieldGenerator (and OortCloudGenerator), BlackHoleGenerator,
PlanetaryNebulaGenerator
    One generator per remaining structure type.

Creating Custom Generators
--------------------------
To create a custom generator, subclass BodyGenerator and override
generate():

    from bodies import BodyGenerator, register_generator
    from cosmos.location import StructureType
    from cosmos.material import Material, Substance
    from cosmos.shapes import Sphere

    class RogueMoonGenerator(BodyGenerator):
        name = "rogue_moon"
        description = "Small icy body with no parent planet"
        structure_types = (StructureType.DWARF_PLANET,)

        def generate(self, rng, context):
            shape = Sphere(rng.next_double(2e5, 6e5))
            material = Material.homogeneous(
                shape.volume * 1500, shape, [(Substance.WATER_ICE, 1.0)]
            )
            return self.create(rng, context, material)

    # Replace the default generator of dwarf planets
    register_generator("dwarf_planet", RogueMoonGenerator)

Usage
-----
    from bodies import get_generator, list_generators

    # Get a generator instance by structure type
    generator = get_generator("star_system")

    # List available generators
    for name, desc in list_generators().items():
        print(f"{name}: {desc}")
"""

from typing import Dict, Type, Union

from cosmos.location import StructureType

from .base import BodyGenerator, coerce_enum
from .asteroid_field import AsteroidFieldGenerator, OortCloudGenerator
from .black_hole import BlackHoleGenerator
from .galaxy import (
    DwarfGalaxyGenerator,
    EllipticalGalaxyGenerator,
    GalaxyGenerator,
    GalaxySubgroupGenerator,
    GlobularClusterGenerator,
)
from .large_scale import (
    GalaxyClusterGenerator,
    GalaxyGroupGenerator,
    SuperclusterGenerator,
    UniverseGenerator,
)
from .nebula import HIIRegionGenerator, NebulaGenerator, PlanetaryNebulaGenerator
from .planetoid import PlanetoidGenerator
from .star import StarGenerator
from .star_system import StarSystemGenerator


# Registry mapping structure type values to generator classes
GENERATOR_REGISTRY: Dict[str, Type[BodyGenerator]] = {
    "universe": UniverseGenerator,
    "supercluster": SuperclusterGenerator,
    "galaxy_cluster": GalaxyClusterGenerator,
    "galaxy_group": GalaxyGroupGenerator,
    "galaxy_subgroup": GalaxySubgroupGenerator,
    "spiral_galaxy": GalaxyGenerator,
    "elliptical_galaxy": EllipticalGalaxyGenerator,
    "dwarf_galaxy": DwarfGalaxyGenerator,
    "globular_cluster": GlobularClusterGenerator,
    "nebula": NebulaGenerator,
    "hii_region": HIIRegionGenerator,
    "planetary_nebula": PlanetaryNebulaGenerator,
    "star_system": StarSystemGenerator,
    "asteroid_field": AsteroidFieldGenerator,
    "oort_cloud": OortCloudGenerator,
    "black_hole": BlackHoleGenerator,
    "star": StarGenerator,
    "planet": PlanetoidGenerator,
    "dwarf_planet": PlanetoidGenerator,
    "asteroid": PlanetoidGenerator,
    "comet": PlanetoidGenerator,
}


def _registry_key(name: Union[str, StructureType]) -> str:
    if isinstance(name, StructureType):
        return name.value
    return name


def get_generator_class(name: Union[str, StructureType]) -> Type[BodyGenerator]:
    """
    Get a generator class by structure type.

    Parameters
    ----------
    name : str or StructureType
        Structure type or its value (e.g., "star_system", "comet").

    Returns
    -------
    Type[BodyGenerator]
        The generator class (a subclass of BodyGenerator).

    Raises
    ------
    ValueError
        If the structure type has no registered generator.
    """
    key = _registry_key(name)
    if key not in GENERATOR_REGISTRY:
        available = ", ".join(GENERATOR_REGISTRY.keys())
        raise ValueError(
            f"Unknown structure type: '{key}'. Available generators: {available}"
        )
    return GENERATOR_REGISTRY[key]


def get_generator(name: Union[str, StructureType]) -> BodyGenerator:
    """Instance of the generator registered for a structure type."""
    return get_generator_class(name)()


def list_generators() -> Dict[str, str]:
    """
    List all registered generators with their descriptions.

    Returns
    -------
    dict
        Mapping of structure type values to descriptions.
    """
    return {
        name: cls.description
        for name, cls in GENERATOR_REGISTRY.items()
    }


def register_generator(name: Union[str, StructureType], generator_class: Type[BodyGenerator]) -> None:
    """
    Register a generator for a structure type.

    The generator class should be a subclass of BodyGenerator.

    Parameters
    ----------
    name : str or StructureType
        Structure type the generator produces.
    generator_class : Type[BodyGenerator]
        The generator class to register.

    Raises
    ------
    TypeError
        If generator_class is not a subclass of BodyGenerator.
    ValueError
        If name is not a known structure type.
    """
    if not isinstance(generator_class, type) or not issubclass(generator_class, BodyGenerator):
        raise TypeError(
            f"Generator class must be a subclass of BodyGenerator, got {generator_class}"
        )
    structure_type = coerce_enum(StructureType, name)
    GENERATOR_REGISTRY[structure_type.value] = generator_class


__all__ = [
    # Base class for subclassing
    "BodyGenerator",
    # Generators
    "AsteroidFieldGenerator",
    "BlackHoleGenerator",
    "DwarfGalaxyGenerator",
    "EllipticalGalaxyGenerator",
    "GalaxyClusterGenerator",
    "GalaxyGenerator",
    "GalaxyGroupGenerator",
    "GalaxySubgroupGenerator",
    "GlobularClusterGenerator",
    "HIIRegionGenerator",
    "NebulaGenerator",
    "OortCloudGenerator",
    "PlanetaryNebulaGenerator",
    "PlanetoidGenerator",
    "StarGenerator",
    "StarSystemGenerator",
    "SuperclusterGenerator",
    "UniverseGenerator",
    # Registry
    "GENERATOR_REGISTRY",
    # Functions
    "get_generator_class",
    "get_generator",
    "list_generators",
    "register_generator",
]
