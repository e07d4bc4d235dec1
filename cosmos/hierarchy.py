#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cosmic Hierarchy

Arena holding every location by identifier, with the parent/child links,
coordinate translation between frames and orbit bookkeeping that span
hierarchy levels.

A location's position is relative to its parent's centre. Root locations
share a common frame, but locations in different trees are unrelated and
cannot be measured against each other.
"""

import logging
from typing import Dict, Iterator, List, Optional, Union

import numpy as np

from .errors import DisjointHierarchyError, MissingOrbitalContextError
from .location import CosmicLocation, StructureType
from .orbit import Orbit, OrbitalParameters, assign_orbit as _assign_orbit
from .randomizer import Randomizer

logger = logging.getLogger(__name__)

LocationRef = Union[str, CosmicLocation]


class CosmicHierarchy:
    """
    Identifier-keyed store of cosmic locations.

    Nodes are listed in exactly one parent's child list; orbits refer to
    the orbited node by identifier only.
    """

    def __init__(self):
        self._nodes: Dict[str, CosmicLocation] = {}
        self._counters: Dict[StructureType, int] = {}

    # ------------------------------------------------------------------
    # Identity and lookup
    # ------------------------------------------------------------------

    def new_id(self, structure_type: StructureType) -> str:
        """Next unused identifier for a structure type, e.g. ``star-0001``."""
        count = self._counters.get(structure_type, 0) + 1
        self._counters[structure_type] = count
        return f"{structure_type.value.replace('_', '-')}-{count:04d}"

    def get(self, location: LocationRef) -> CosmicLocation:
        """
        Look up a location.

        Parameters
        ----------
        location : str or CosmicLocation
            Identifier or the location itself.

        Returns
        -------
        CosmicLocation
            The stored location.

        Raises
        ------
        KeyError
            If the location is not part of this hierarchy.
        """
        location_id = location.id if isinstance(location, CosmicLocation) else location
        try:
            return self._nodes[location_id]
        except KeyError:
            raise KeyError(f"Unknown location: {location_id}") from None

    def __contains__(self, location: LocationRef) -> bool:
        location_id = location.id if isinstance(location, CosmicLocation) else location
        return location_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[CosmicLocation]:
        return iter(list(self._nodes.values()))

    def add(self, location: CosmicLocation, parent: Optional[LocationRef] = None) -> CosmicLocation:
        """
        Insert a location under a parent (or as a root).

        Parameters
        ----------
        location : CosmicLocation
            New location; its identifier must be unused.
        parent : str or CosmicLocation, optional
            Containing location.

        Returns
        -------
        CosmicLocation
            The inserted location.
        """
        if location.id in self._nodes:
            raise ValueError(f"Duplicate location id: {location.id}")

        if parent is not None:
            parent_node = self.get(parent)
            location.parent_id = parent_node.id
            parent_node.children.append(location.id)
        else:
            location.parent_id = None

        self._nodes[location.id] = location
        self.refresh_absolute_position(location)
        return location

    def parent_of(self, location: LocationRef) -> Optional[CosmicLocation]:
        node = self.get(location)
        return None if node.parent_id is None else self._nodes[node.parent_id]

    def children_of(self, location: LocationRef) -> List[CosmicLocation]:
        return [self._nodes[child_id] for child_id in self.get(location).children]

    def ancestors(self, location: LocationRef) -> List[CosmicLocation]:
        """Ancestors from the parent up to the root."""
        chain = []
        parent = self.parent_of(location)
        while parent is not None:
            chain.append(parent)
            parent = self.parent_of(parent)
        return chain

    def descendants(self, location: LocationRef) -> List[CosmicLocation]:
        """All locations below a location, depth first."""
        result = []
        for child in self.children_of(location):
            result.append(child)
            result.extend(self.descendants(child))
        return result

    def roots(self) -> List[CosmicLocation]:
        return [node for node in self._nodes.values() if node.parent_id is None]

    def root_of(self, location: LocationRef) -> CosmicLocation:
        chain = self.ancestors(location)
        return chain[-1] if chain else self.get(location)

    # ------------------------------------------------------------------
    # Structure changes
    # ------------------------------------------------------------------

    def remove(self, location: LocationRef) -> List[str]:
        """
        Detach and delete a location and everything below it.

        Orbits of the remaining locations that referenced a removed
        location are cleared, and removed identifiers are dropped from
        their details (satellites, system stars, field orbit references).

        Returns
        -------
        list of str
            Identifiers of removed locations.
        """
        node = self.get(location)
        removed = [node.id] + [d.id for d in self.descendants(node)]

        parent = self.parent_of(node)
        if parent is not None:
            parent.children.remove(node.id)

        for location_id in removed:
            del self._nodes[location_id]

        removed_set = set(removed)
        for other in self._nodes.values():
            if other.orbit is not None and other.orbit.orbited_id in removed_set:
                logger.debug(f"Cleared orbit of {other.id}: {other.orbit.orbited_id} was removed")
                other.orbit = None
            if hasattr(other.details, "forget"):
                other.details.forget(removed_set)

        logger.debug(f"Removed {len(removed)} location(s) under {node.id}")
        return removed

    def reparent(self, location: LocationRef, new_parent: LocationRef) -> CosmicLocation:
        """
        Move a location under a different parent in the same tree.

        Its position is translated into the new parent's frame and its
        orbit re-based accordingly; its absolute position is unchanged.

        Raises
        ------
        DisjointHierarchyError
            If the new parent belongs to another tree.
        ValueError
            If the new parent is the location itself or one of its descendants.
        """
        node = self.get(location)
        target = self.get(new_parent)
        if target.id == node.id or target.id in {d.id for d in self.descendants(node)}:
            raise ValueError(f"Cannot move {node.id} beneath itself")

        new_position = self.translate_to_local(node, target)
        shift = new_position - node.position

        old_parent = self.parent_of(node)
        if old_parent is not None:
            old_parent.children.remove(node.id)
        target.children.append(node.id)
        node.parent_id = target.id
        node.position = new_position
        if node.orbit is not None:
            node.orbit = node.orbit.rebased(shift)

        self.refresh_absolute_position(node)
        logger.debug(f"Moved {node.id} under {target.id}")
        return node

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def offset(self, location: LocationRef, ancestor: Optional[LocationRef] = None) -> np.ndarray:
        """
        Position of a location relative to an ancestor's centre.

        Parameters
        ----------
        location : str or CosmicLocation
            Location to measure.
        ancestor : str or CosmicLocation, optional
            The location itself, one of its ancestors, or None for the root
            frame.

        Returns
        -------
        np.ndarray
            Sum of the positions on the chain up to, but excluding, the ancestor.
        """
        node = self.get(location)
        stop = None if ancestor is None else self.get(ancestor).id
        total = np.zeros(3)
        while node is not None and node.id != stop:
            total = total + node.position
            node = self.parent_of(node)

        if stop is not None and node is None:
            raise DisjointHierarchyError(f"{ancestor} is not an ancestor of {location}")
        return total

    def common_ancestor(self, a: LocationRef, b: LocationRef) -> Optional[CosmicLocation]:
        """Lowest location that is (or contains) both, or None for different trees."""
        first = self.get(a)
        chain_ids = {first.id} | {n.id for n in self.ancestors(first)}
        node = self.get(b)
        while node is not None:
            if node.id in chain_ids:
                return node
            node = self.parent_of(node)
        return None

    def distance_to(self, a: LocationRef, b: LocationRef) -> float:
        """
        Distance between two locations' centres.

        Raises
        ------
        DisjointHierarchyError
            If the locations belong to different trees.
        """
        ancestor = self.common_ancestor(a, b)
        if ancestor is None:
            raise DisjointHierarchyError(f"{a} and {b} share no common ancestor")
        return float(np.linalg.norm(self.offset(a, ancestor) - self.offset(b, ancestor)))

    def translate_to_local(self, location: LocationRef, frame: Optional[LocationRef]) -> np.ndarray:
        """
        Centre of a location expressed relative to another location's centre.

        Parameters
        ----------
        location : str or CosmicLocation
            Location to translate.
        frame : str or CosmicLocation, optional
            Location whose centre is the new origin; None for the root frame.

        Returns
        -------
        np.ndarray
            Translated position (m).
        """
        if frame is None:
            return self.offset(location)

        ancestor = self.common_ancestor(location, frame)
        if ancestor is None:
            raise DisjointHierarchyError(f"{location} and {frame} share no common ancestor")
        return self.offset(location, ancestor) - self.offset(frame, ancestor)

    def refresh_absolute_position(self, location: LocationRef) -> None:
        """Recompute the absolute position chain of a location and its subtree."""
        node = self.get(location)
        parent = self.parent_of(node)
        parent_chain = [] if parent is None else (parent.absolute_position or [])
        node.absolute_position = [node.position.copy()] + [p.copy() for p in parent_chain]
        for child in self.children_of(node):
            self.refresh_absolute_position(child)

    def absolute_position(self, location: LocationRef) -> np.ndarray:
        """Position in the root frame (m)."""
        return self.offset(location)

    # ------------------------------------------------------------------
    # Orbits
    # ------------------------------------------------------------------

    def orbited_position(self, body: LocationRef) -> np.ndarray:
        """
        Current position of a body's orbited location in the body's parent frame.

        Falls back to the position recorded on the orbit when the orbited
        location is a barycentre or no longer present.
        """
        node = self.get(body)
        if node.orbit is None:
            raise MissingOrbitalContextError(f"{node.id} has no orbit")
        orbited_id = node.orbit.orbited_id
        if orbited_id is not None and orbited_id in self._nodes:
            return self.translate_to_local(orbited_id, node.parent_id)
        return node.orbit.orbited_position

    def assign_orbit(
        self,
        body: LocationRef,
        parameters: OrbitalParameters,
        rng: Optional[Randomizer] = None,
    ) -> Orbit:
        """
        Resolve and assign an orbit, locating the orbited body across levels.

        Parameters
        ----------
        body : str or CosmicLocation
            The orbiting location.
        parameters : OrbitalParameters
            Orbit request.
        rng : Randomizer, optional
            Random source for eccentricity-driven requests.

        Returns
        -------
        Orbit
            The assigned orbit.
        """
        node = self.get(body)
        origin = None
        if parameters.orbited_id is not None and parameters.orbited_id in self._nodes:
            origin = self.translate_to_local(parameters.orbited_id, node.parent_id)

        orbit = _assign_orbit(node, parameters, rng, orbited_position=origin)
        self.refresh_absolute_position(node)
        return orbit

    def advance_orbit(self, body: LocationRef, elapsed: float) -> CosmicLocation:
        """
        Propagate a body along its orbit.

        The body is placed relative to the orbited body's current position.

        Raises
        ------
        MissingOrbitalContextError
            If the body has no orbit.
        """
        node = self.get(body)
        if node.orbit is None:
            raise MissingOrbitalContextError(f"{node.id} has no orbit to advance")

        position, velocity = node.orbit.advance(elapsed)
        node.position = self.orbited_position(node) + position
        node.velocity = velocity
        self.refresh_absolute_position(node)
        return node
