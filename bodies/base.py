#!/usr/bin/env python3
"""
Body Generator - Base Class for Type-Specific Generators

Provides the class every generator subclasses. A generator defines:
1. The pure derivation step (`generate`) turning a seeded random source and
   a generation context into a new location
2. The intrinsic contents created right after the location is attached
   (`configure_contents`), e.g. the stars of a system or a galaxy's core
3. The rules used when the location is populated (`child_definitions`,
   `orbited_reference`, `child_orbit`)

Subclasses usually only need `generate`; the defaults give a region with no
children and no contents.
"""

import logging
from typing import Any, List, Optional, Tuple

import numpy as np

from cosmos.context import GenerationContext
from cosmos.location import CosmicLocation, StructureType
from cosmos.material import Material
from cosmos.orbit import OrbitalParameters, from_eccentricity
from cosmos.population import ChildDefinition
from cosmos.randomizer import Randomizer

logger = logging.getLogger(__name__)

# Eccentricities above this are not assigned to generated children
MAX_CHILD_ECCENTRICITY = 0.9


class BodyGenerator:
    """
    Base class for type-specific body generators.

    Generators are stateless; all randomness comes from the ``Randomizer``
    passed to each call, so one instance can serve any number of bodies.

    Attributes
    ----------
    name : str
        Registry name.
    description : str
        One-line description.
    structure_types : tuple of StructureType
        Kinds of location this generator produces.
    space : float
        Default radius of the space a generated location needs (m).
    retains_children : bool
        False for regions whose children are moved out to orbit the
        region's orbited body.
    configures_before_orbit : bool
        True when the location's mass is only known after its contents are
        created, so the contents must exist before its orbit is assigned.

    Examples
    --------
    >>> class MoonletGenerator(BodyGenerator):
    ...     name = "moonlet"
    ...     description = "Tiny rocky sphere"
    ...     structure_types = (StructureType.ASTEROID,)
    ...
    ...     def generate(self, rng, context):
    ...         shape = Sphere(rng.next_double(10, 100))
    ...         material = Material.homogeneous(
    ...             shape.volume * 2000, shape, [(Substance.ROCK, 1.0)]
    ...         )
    ...         return self.create(rng, context, material)
    """

    name = "base"
    description = "Base generator: produces nothing"
    structure_types: Tuple[StructureType, ...] = ()
    space = 0.0
    retains_children = True
    configures_before_orbit = False

    def generate(self, rng: Randomizer, context: GenerationContext) -> CosmicLocation:
        """
        Derive a new location from its seed and constraints.

        Parameters
        ----------
        rng : Randomizer
            Random source seeded with the location's seed.
        context : GenerationContext
            Parent, position, provisional orbit and options.

        Returns
        -------
        CosmicLocation
            New location, not yet attached to a hierarchy.
        """
        raise NotImplementedError(f"{type(self).__name__} does not generate locations")

    def configure_contents(
        self,
        cosmos,
        location: CosmicLocation,
        rng: Randomizer,
        context: GenerationContext,
    ) -> List[CosmicLocation]:
        """
        Create the intrinsic contents of a freshly attached location.

        Returns
        -------
        list of CosmicLocation
            Locations created.
        """
        return []

    def child_definitions(self, location: CosmicLocation) -> List[ChildDefinition]:
        """Rules for populating the location, base rules first."""
        return []

    def orbited_reference(self, cosmos, location: CosmicLocation) -> Optional[CosmicLocation]:
        """Body that children of the location orbit, if any."""
        return None

    def child_orbit(
        self,
        cosmos,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        """
        Orbit request for a child placed in the location.

        The default orbits the orbited reference with a small random
        eccentricity; children with no reference, or sitting on it, get none.
        """
        orbited = self.orbited_reference(cosmos, parent)
        if orbited is None or orbited.id == child.id or orbited.material.mass <= 0:
            return None

        orbited_position = cosmos.hierarchy.translate_to_local(orbited, child.parent_id)
        if np.linalg.norm(child.position - orbited_position) == 0:
            return None

        eccentricity = min(rng.next_positive_normal(0.0, 0.05), MAX_CHILD_ECCENTRICITY)
        return from_eccentricity(
            orbited.material.mass,
            orbited_position,
            eccentricity,
            orbited_id=orbited.id,
        )

    def create(
        self,
        rng: Randomizer,
        context: GenerationContext,
        material: Material,
        structure_type: Optional[StructureType] = None,
        details: Any = None,
    ) -> CosmicLocation:
        """
        Build the location record for a generated body.

        Identifiers are assigned when the location is added to a hierarchy.
        """
        return CosmicLocation(
            id="",
            structure_type=structure_type or context.structure_type,
            seed=rng.seed,
            material=material,
            position=np.array(context.position, dtype=float),
            name=context.option("name"),
            details=details,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"


def coerce_enum(enum_type, value):
    """Enum member from a member, its value or its name; None passes through."""
    if value is None or isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        try:
            return enum_type[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown {enum_type.__name__}: {value}") from None
