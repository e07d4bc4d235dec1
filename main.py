#!/usr/bin/env python3
"""
Cosmos - Procedural Celestial Hierarchy Generator

Command-line entry point for generating a cosmic location, optionally
populating it and propagating its orbits.

Usage:
    python main.py                                  # Default star system
    python main.py --sunlike --seed 42              # Sun-like system
    python main.py --type spiral_galaxy --populate  # Galaxy with children
    python main.py --advance 86400 --steps 30       # Propagate 30 days
    python main.py --list                           # List structure types
    python main.py --help                           # Show all options
"""

import argparse
import logging
import sys


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set the root log level from the verbosity flags."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Procedural Celestial Hierarchy Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                    # Random star system
  %(prog)s --sunlike --seed 7                 # Sun-like star system
  %(prog)s --type asteroid_field --populate   # Field with asteroids
  %(prog)s --type spiral_galaxy --populate --max-children 10
  %(prog)s --advance 3600 --steps 24          # One day in hourly steps
        """,
    )

    # -------------------------------------------------------------------------
    # Root location
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--type",
        "-t",
        type=str,
        default="star_system",
        help="Structure type of the root location (default: star_system)",
    )
    parser.add_argument(
        "--sunlike",
        action="store_true",
        help="Use a Sun-like primary star (star systems and stars only)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--populate",
        "-p",
        action="store_true",
        help="Populate the root location with children",
    )
    parser.add_argument(
        "--max-children",
        type=int,
        default=25,
        help="Maximum children placed by one population pass (default: 25)",
    )

    # -------------------------------------------------------------------------
    # Orbit propagation
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--advance",
        type=float,
        default=0.0,
        help="Seconds to advance all orbits per step (default: 0)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=1,
        help="Number of propagation steps (default: 1)",
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available structure types and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every generated body",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # -------------------------------------------------------------------------
    # Import generation components
    # -------------------------------------------------------------------------
    from bodies import list_generators
    from cosmos import Cosmos, GenerationConfig, StructureType

    if args.list:
        for name, description in list_generators().items():
            print(f"{name:20s} {description}")
        return 0

    configure_logging(args.verbose, args.quiet)

    type_map = {structure_type.value: structure_type for structure_type in StructureType}
    if args.type not in type_map:
        parser.error(f"unknown structure type '{args.type}' (see --list)")

    # -------------------------------------------------------------------------
    # Create cosmos
    # -------------------------------------------------------------------------
    try:
        config = GenerationConfig(seed=args.seed, max_children=args.max_children)
    except ValueError as e:
        parser.error(str(e))

    cosmos = Cosmos(config)
    options = {"sunlike": True} if args.sunlike else {}
    root = cosmos.new_location(type_map[args.type], **options)

    created = []
    if args.populate:
        created = cosmos.populate(root)

    # -------------------------------------------------------------------------
    # Print generation summary
    # -------------------------------------------------------------------------
    print("=" * 60)
    print("Cosmos - Procedural Celestial Hierarchy Generator")
    print("=" * 60)
    print(f"\nSeed: {cosmos.seed}")
    print(f"Root: {root.id} ({root.structure_type.value})")
    print(f"  Mass: {root.material.mass:.4g} kg")
    print(f"  Radius: {root.material.containing_radius:.4g} m")
    if root.material.temperature is not None:
        print(f"  Temperature: {root.material.temperature:.4g} K")

    if args.populate:
        print(f"\nPopulation: {len(created)} children placed")

    summary = cosmos.get_summary()
    print(f"\nLocations: {summary['total_locations']} ({summary['orbiting']} orbiting)")
    for name, count in sorted(summary["counts"].items()):
        print(f"  {name}: {count}")

    # -------------------------------------------------------------------------
    # Propagate orbits
    # -------------------------------------------------------------------------
    if args.advance > 0:
        print(f"\n{'=' * 60}")
        print(f"Advancing orbits: {args.steps} step(s) of {args.advance:.0f} seconds")
        print(f"{'=' * 60}")

        for _ in range(args.steps):
            cosmos.advance(args.advance)

        orbiting = [location for location in cosmos.hierarchy if location.orbit is not None]
        for location in orbiting[:5]:
            distance = cosmos.hierarchy.distance_to(location, root)
            print(
                f"  {location.id}: {distance:.4g} m from {root.id}, "
                f"period={location.orbit.period:.4g} s"
            )
        if len(orbiting) > 5:
            print(f"  ... and {len(orbiting) - 5} more orbiting bodies")

    return 0


if __name__ == "__main__":
    sys.exit(main())
