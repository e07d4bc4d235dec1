#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Population Engine

Stochastic filling of a region with typed children. Each child definition
gives an expected count per unit volume; counts are sampled around the
expectation and positions are found by rejection sampling inside the
region's shape.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .location import CosmicLocation, StructureType
from .randomizer import Randomizer
from .shapes import Shape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildDefinition:
    """
    Rule for one kind of child of a region.

    Attributes
    ----------
    structure_type : StructureType
        Kind of child to create.
    space : float
        Radius of the space the child needs to itself (m).
    density : float
        Expected number of children per m³ of the region's volume.
    options : dict
        Generator options (e.g. star type, planet type).
    """

    structure_type: StructureType
    space: float
    density: float
    options: Dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def fraction(
        cls,
        structure_type: StructureType,
        space: float,
        total_density: float,
        proportion: float,
        **options,
    ) -> "ChildDefinition":
        """Definition whose density is a share of a region's total child density."""
        return cls(structure_type, space, total_density * proportion, dict(options))


@dataclass
class PopulationResult:
    """
    Outcome of one population pass.

    Attributes
    ----------
    created : list
        Children created, in creation order.
    requested : int
        Units sampled across all definitions.
    skipped : int
        Units dropped because no free position was found.
    """

    created: List[CosmicLocation] = field(default_factory=list)
    requested: int = 0
    skipped: int = 0


def expected_count(volume: float, density: float) -> float:
    """Expected number of children, V·ρ."""
    return max(0.0, volume * density)


def sample_count(rng: Randomizer, volume: float, density: float) -> int:
    """
    Sample a child count around its expectation.

    Rounds a normal sample with mean V·ρ and standard deviation sqrt(V·ρ),
    floored at zero.
    """
    expected = expected_count(volume, density)
    if expected <= 0:
        return 0
    return max(0, int(round(rng.next_normal(expected, math.sqrt(expected)))))


def sample_unit_counts(
    rng: Randomizer,
    volume: float,
    definitions: Sequence[ChildDefinition],
    max_children: Optional[int] = None,
) -> List[int]:
    """
    Sample a count for each definition, honouring an overall cap.

    When the total exceeds ``max_children`` the cap is re-allotted by
    weighted draws proportional to the sampled counts.

    Parameters
    ----------
    rng : Randomizer
        Random source.
    volume : float
        Volume of the region (m³).
    definitions : sequence of ChildDefinition
        Rules, in evaluation order.
    max_children : int, optional
        Cap on the total. None = unlimited.

    Returns
    -------
    list of int
        Count per definition.
    """
    counts = [sample_count(rng, volume, definition.density) for definition in definitions]
    total = sum(counts)
    if max_children is None or total <= max_children:
        return counts

    capped = [0] * len(counts)
    for _ in range(max_children):
        capped[rng.next_weighted_index(counts)] += 1
    logger.debug(f"Capped {total} sampled children to {max_children}")
    return capped


def find_open_position(
    rng: Randomizer,
    shape: Shape,
    space: float,
    occupants: Sequence[CosmicLocation],
    max_attempts: int = 100,
) -> Optional[np.ndarray]:
    """
    Find a position inside a shape clear of existing occupants.

    Parameters
    ----------
    rng : Randomizer
        Random source.
    shape : Shape
        Shape of the region, centred on the origin of its frame.
    space : float
        Radius of the sphere the new child needs (m).
    occupants : sequence of CosmicLocation
        Children already in the region.
    max_attempts : int
        Candidates to try.

    Returns
    -------
    np.ndarray or None
        Position in the region's frame, or None when every attempt failed.
    """
    for _ in range(max_attempts):
        candidate = shape.random_point(rng, margin=space)
        if candidate is None:
            return None
        if not any(
            occupant.material.shape.intersects_sphere(candidate - occupant.position, space)
            for occupant in occupants
        ):
            return candidate
    return None


def populate(
    cosmos,
    parent: CosmicLocation,
    definitions: Sequence[ChildDefinition],
    rng: Randomizer,
    max_children: Optional[int] = None,
    max_attempts: int = 100,
) -> PopulationResult:
    """
    Fill a region with children.

    Definitions are evaluated in order. Each placed unit is created through
    ``cosmos.new_location`` so its generator, orbit rule and contents run as
    for a directly requested location. Units with no free position are
    skipped and counted.

    Parameters
    ----------
    cosmos : Cosmos
        Owner of the hierarchy.
    parent : CosmicLocation
        Region to fill.
    definitions : sequence of ChildDefinition
        Rules, in evaluation order.
    rng : Randomizer
        Random source for counts and positions.
    max_children : int, optional
        Cap on the number of units. None = unlimited.
    max_attempts : int
        Candidate positions per unit.

    Returns
    -------
    PopulationResult
        Created children and counts.
    """
    result = PopulationResult()
    if not definitions:
        return result

    counts = sample_unit_counts(rng, parent.material.volume, definitions, max_children)
    result.requested = sum(counts)

    for definition, count in zip(definitions, counts):
        for _ in range(count):
            occupants = cosmos.hierarchy.children_of(parent)
            position = find_open_position(
                rng, parent.material.shape, definition.space, occupants, max_attempts
            )
            if position is None:
                result.skipped += 1
                continue

            child = cosmos.new_location(
                definition.structure_type,
                parent=parent,
                position=position,
                seed=rng.next_u32(),
                **definition.options,
            )
            result.created.append(child)

    logger.info(
        f"Populated {parent.id}: {len(result.created)} created, "
        f"{result.skipped} skipped of {result.requested} sampled"
    )
    return result
