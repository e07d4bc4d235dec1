#!/usr/bin/env python3
"""
Example: Generating Star Systems and Galaxies

Demonstrates how to drive the generator programmatically. Useful for:
- Inspecting the bodies of a single system
- Propagating orbits over time
- Populating large regions with a capped number of children
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from cosmos import (
    Cosmos,
    GenerationConfig,
    StructureType,
    create_cosmos,
)


SECONDS_PER_DAY = 86400.0


def example_sunlike_system():
    """
    Generate a Sun-like system and list its bodies.
    """
    print("=" * 70)
    print("Example 1: Sun-like Star System")
    print("=" * 70)

    cosmos = create_cosmos("star_system", seed=2024, sunlike=True)
    system = cosmos.hierarchy.roots()[0]

    print(f"\nSystem {system.id}:")
    print(f"  Radius: {system.material.containing_radius:.3e} m")
    print(f"  Mass: {system.material.mass:.3e} kg")

    for location in cosmos.hierarchy.children_of(system):
        line = f"  {location.id:28s} mass={location.material.mass:.3e} kg"
        if location.orbit is not None:
            line += f"  a={location.orbit.semi_major_axis:.3e} m"
        if location.material.temperature is not None:
            line += f"  T={location.material.temperature:.0f} K"
        print(line)


def example_orbit_propagation():
    """
    Advance every orbit in a system and report how far the planets moved.
    """
    print("\n" + "=" * 70)
    print("Example 2: Orbit Propagation")
    print("=" * 70)

    cosmos = create_cosmos("star_system", seed=7, sunlike=True, generate_satellites=False)
    planets = [
        location for location in cosmos.hierarchy
        if location.structure_type == StructureType.PLANET
    ]
    start = {planet.id: planet.position.copy() for planet in planets}

    for _ in range(30):
        cosmos.advance(SECONDS_PER_DAY)

    print(f"\nAfter 30 days:")
    for planet in planets:
        moved = np.linalg.norm(planet.position - start[planet.id])
        print(
            f"  {planet.id}: moved {moved:.3e} m "
            f"(period {planet.orbit.period / SECONDS_PER_DAY:.1f} days)"
        )


def example_populated_galaxy():
    """
    Create a spiral galaxy and place a capped number of children in it.
    """
    print("\n" + "=" * 70)
    print("Example 3: Populated Galaxy")
    print("=" * 70)

    config = GenerationConfig(seed=11, max_children=10)
    cosmos = Cosmos(config)
    galaxy = cosmos.new_location(StructureType.SPIRAL_GALAXY)
    children = cosmos.populate(galaxy)

    print(f"\nGalaxy {galaxy.id}: radius {galaxy.material.containing_radius:.3e} m")
    print(f"Placed {len(children)} children:")
    for child in children:
        print(f"  {child.id}")

    summary = cosmos.get_summary()
    print(f"\nTotal locations: {summary['total_locations']}")


if __name__ == "__main__":
    example_sunlike_system()
    example_orbit_propagation()
    example_populated_galaxy()
