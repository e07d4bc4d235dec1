#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cosmos Generation Facade

Ties the hierarchy arena, the body generators and the population engine
together. Every location, whether requested directly, created as the
intrinsic content of another location or placed by a population pass, is
created through `Cosmos.new_location`, which:

1. Draws a seed for the location and builds its generation context
2. Runs the type-specific generator on a private random source
3. Attaches the result to the hierarchy
4. Applies the parent's orbit rule (or the requested orbit)
5. Creates the location's intrinsic contents

Orbits are then propagated with `advance_orbit` / `advance`.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

import bodies

from .config import GenerationConfig
from .context import GenerationContext
from .hierarchy import CosmicHierarchy, LocationRef
from .location import CosmicLocation, StarDetails, StructureType
from .orbit import OrbitalParameters
from .population import ChildDefinition, populate as populate_region
from .randomizer import Randomizer

logger = logging.getLogger(__name__)

# Orbit hops followed when looking for the star lighting a body
MAX_ILLUMINATION_HOPS = 8


class Cosmos:
    """
    A generated hierarchy of cosmic locations.

    Parameters
    ----------
    config : GenerationConfig, optional
        Generation configuration. Defaults are used if None.

    Attributes
    ----------
    config : GenerationConfig
        Configuration shared by every generator.
    hierarchy : CosmicHierarchy
        Arena holding every location.
    seed : int
        Seed of the top-level random source.
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self.hierarchy = CosmicHierarchy()
        self._rng = Randomizer(self.config.seed)
        self.seed = self._rng.seed
        self._population_passes: Dict[str, int] = {}

    def generator_for(self, location: LocationRef) -> "bodies.BodyGenerator":
        """Generator registered for a location's structure type."""
        return bodies.get_generator(self.hierarchy.get(location).structure_type)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def new_location(
        self,
        structure_type: Union[StructureType, str],
        parent: Optional[LocationRef] = None,
        position: Optional[np.ndarray] = None,
        orbit_parameters: Optional[OrbitalParameters] = None,
        seed: Optional[int] = None,
        **options: Any,
    ) -> CosmicLocation:
        """
        Generate a location and attach it to the hierarchy.

        Parameters
        ----------
        structure_type : StructureType or str
            Kind of location to generate.
        parent : str or CosmicLocation, optional
            Containing location. None creates a new root.
        position : np.ndarray, optional
            Position in the parent frame (m). Defaults to the parent's centre.
        orbit_parameters : OrbitalParameters, optional
            Explicit orbit request. Without one, the parent's orbit rule
            decides whether the location orbits anything.
        seed : int, optional
            Seed of the location. Drawn from the top-level source if None.
        **options
            Generator options (see each generator's docstring).

        Returns
        -------
        CosmicLocation
            The attached location.

        Raises
        ------
        ValueError
            If the structure type is unknown.
        """
        structure_type = bodies.coerce_enum(StructureType, structure_type)
        generator = bodies.get_generator(structure_type)
        parent_node = self.hierarchy.get(parent) if parent is not None else None
        if seed is None:
            seed = self._rng.next_u32()

        orbited = None
        orbited_position = None
        if orbit_parameters is not None:
            if orbit_parameters.orbited_id is not None and orbit_parameters.orbited_id in self.hierarchy:
                orbited = self.hierarchy.get(orbit_parameters.orbited_id)
            else:
                orbited_position = np.array(orbit_parameters.orbited_position, dtype=float)
        elif parent_node is not None:
            orbited = self.generator_for(parent_node).orbited_reference(self, parent_node)
        if orbited is not None:
            orbited_position = self.hierarchy.translate_to_local(
                orbited, parent_node.id if parent_node is not None else None
            )

        context = GenerationContext(
            structure_type=structure_type,
            config=self.config,
            parent=parent_node,
            position=np.zeros(3) if position is None else np.array(position, dtype=float),
            options=options,
            orbited=orbited,
            orbited_position=orbited_position,
            orbit_parameters=orbit_parameters,
        )
        context.illumination = self._illumination(context)

        rng = Randomizer(seed)
        location = generator.generate(rng, context)
        location.id = self.hierarchy.new_id(location.structure_type)
        self.hierarchy.add(location, parent_node)

        if orbit_parameters is None and parent_node is not None:
            orbit_parameters = self._child_orbit(parent_node, location, rng)

        if generator.configures_before_orbit:
            generator.configure_contents(self, location, rng, context)
        if orbit_parameters is not None:
            self.hierarchy.assign_orbit(location, orbit_parameters, rng)
        if not generator.configures_before_orbit:
            generator.configure_contents(self, location, rng, context)

        logger.debug(
            f"Created {location.id} under {location.parent_id or 'root'} "
            f"(seed={seed}, mass={location.material.mass:.4g} kg)"
        )
        return location

    def _child_orbit(
        self,
        parent: CosmicLocation,
        child: CosmicLocation,
        rng: Randomizer,
    ) -> Optional[OrbitalParameters]:
        """
        Orbit request for a child just attached to a parent.

        Children of regions that do not retain them are first moved into
        the parent of the region's orbited body. When that body is a root
        there is nothing to move into and the child stays in the region.
        """
        generator = self.generator_for(parent)
        if not generator.retains_children:
            orbited = generator.orbited_reference(self, parent)
            if orbited is not None and orbited.parent_id is not None:
                self.hierarchy.reparent(child, orbited.parent_id)
            elif orbited is not None:
                logger.debug(f"{child.id} stays in {parent.id}: orbited body {orbited.id} is a root")
        return generator.child_orbit(self, parent, child, rng)

    def _illumination(self, context: GenerationContext):
        """(luminosity, distance) of the star a new body orbits, directly or through its primary."""
        body = context.orbited
        distance = context.orbital_distance
        for _ in range(MAX_ILLUMINATION_HOPS):
            if body is None or distance is None:
                return None
            if isinstance(body.details, StarDetails):
                return body.details.luminosity, distance
            if body.orbit is None or body.orbit.orbited_id not in self.hierarchy:
                return None
            distance = body.orbit.semi_major_axis
            body = self.hierarchy.get(body.orbit.orbited_id)
        return None

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def populate(
        self,
        parent: LocationRef,
        definitions: Optional[Sequence[ChildDefinition]] = None,
        max_children: Optional[int] = None,
    ) -> List[CosmicLocation]:
        """
        Fill a location with children.

        Parameters
        ----------
        parent : str or CosmicLocation
            Region to fill.
        definitions : sequence of ChildDefinition, optional
            Rules to apply. Defaults to the generator's own rules.
        max_children : int, optional
            Cap on the number of children. Defaults to the configured cap.

        Returns
        -------
        list of CosmicLocation
            Children placed by the pass. Their own contents (a system's
            stars, a planet's moons) are not listed.
        """
        node = self.hierarchy.get(parent)
        if definitions is None:
            definitions = self.generator_for(node).child_definitions(node)
        if max_children is None:
            max_children = self.config.max_children

        passes = self._population_passes.get(node.id, 0)
        self._population_passes[node.id] = passes + 1
        rng = Randomizer.for_stream(node.seed, passes)

        result = populate_region(
            self,
            node,
            definitions,
            rng,
            max_children=max_children,
            max_attempts=self.config.max_placement_attempts,
        )
        return result.created

    # ------------------------------------------------------------------
    # Dynamics
    # ------------------------------------------------------------------

    def advance_orbit(self, body: LocationRef, elapsed: float) -> CosmicLocation:
        """Propagate one body along its orbit by ``elapsed`` seconds."""
        return self.hierarchy.advance_orbit(body, elapsed)

    def advance(self, elapsed: float) -> int:
        """
        Propagate every orbiting body by ``elapsed`` seconds.

        Bodies are advanced in creation order, so an orbited body always
        moves before the bodies orbiting it.

        Returns
        -------
        int
            Number of bodies advanced.
        """
        count = 0
        for location in self.hierarchy:
            if location.orbit is not None:
                self.hierarchy.advance_orbit(location, elapsed)
                count += 1
        logger.debug(f"Advanced {count} orbit(s) by {elapsed:.4g} s")
        return count

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the generated cosmos."""
        counts: Dict[str, int] = {}
        for location in self.hierarchy:
            key = location.structure_type.value
            counts[key] = counts.get(key, 0) + 1

        return {
            "seed": self.seed,
            "total_locations": len(self.hierarchy),
            "roots": [root.id for root in self.hierarchy.roots()],
            "orbiting": sum(1 for location in self.hierarchy if location.orbit is not None),
            "counts": counts,
        }

    def __repr__(self) -> str:
        return (
            f"Cosmos(\n"
            f"  seed={self.seed},\n"
            f"  locations={len(self.hierarchy)},\n"
            f"  roots={[root.id for root in self.hierarchy.roots()]}\n"
            f")"
        )


def create_cosmos(root_type: Optional[str] = None, **kwargs) -> Cosmos:
    """
    Create a cosmos, optionally with a root location.

    Parameters
    ----------
    root_type : str, optional
        Structure type of the root location (e.g. "star_system",
        "spiral_galaxy"). No root is created if None.
    **kwargs
        Configuration parameters; keys matching ``GenerationConfig`` fields
        configure the cosmos, all others are passed to the root's generator.

    Returns
    -------
    Cosmos
        Configured cosmos.
    """
    type_map = {structure_type.value: structure_type for structure_type in StructureType}

    if root_type is not None and root_type not in type_map:
        raise ValueError(f"Unknown structure type: {root_type}")

    config = GenerationConfig()
    options = {}

    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            options[key] = value
    config.__post_init__()

    cosmos = Cosmos(config)
    if root_type is not None:
        cosmos.new_location(type_map[root_type], **options)
    return cosmos


if __name__ == "__main__":
    print("Cosmos Generation Demo")
    print("=" * 60)

    cosmos = create_cosmos("star_system", seed=42, sunlike=True)
    print(f"\nCreated cosmos: {cosmos}")

    root = cosmos.hierarchy.roots()[0]
    for location in cosmos.hierarchy.descendants(root):
        print(f"  {location}")

    print(f"\nAdvancing one year...")
    cosmos.advance(3.15576e7)

    summary = cosmos.get_summary()
    print(f"\nSummary:")
    for structure_type, count in sorted(summary["counts"].items()):
        print(f"  {structure_type}: {count}")
