#!/usr/bin/env python3
"""
Tests for the location hierarchy.

These tests verify:
1. Identifiers, parent/child links and lookups
2. Distances and frame translation across levels
3. Reparenting keeps absolute positions
4. Removal clears orbits and details that referenced removed locations
5. Orbit propagation follows the orbited body
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cosmos import (
    DisjointHierarchyError,
    FieldDetails,
    MissingOrbitalContextError,
    PlanetoidDetails,
    PlanetType,
    StructureType,
    SystemDetails,
    explicit_orbit,
)


@pytest.fixture
def tree(hierarchy, make_location):
    """root -> (a, b), a -> c."""
    root = make_location(hierarchy, [0.0, 0.0, 0.0])
    a = make_location(hierarchy, [10.0, 0.0, 0.0], parent=root)
    b = make_location(hierarchy, [0.0, 5.0, 0.0], parent=root)
    c = make_location(hierarchy, [1.0, 0.0, 0.0], parent=a)
    return root, a, b, c


class TestStructure:
    """Tests for identifiers and links."""

    def test_sequential_ids(self, hierarchy):
        assert hierarchy.new_id(StructureType.STAR_SYSTEM) == "star-system-0001"
        assert hierarchy.new_id(StructureType.STAR_SYSTEM) == "star-system-0002"
        assert hierarchy.new_id(StructureType.STAR) == "star-0001"

    def test_links(self, hierarchy, tree):
        root, a, b, c = tree

        assert hierarchy.roots() == [root]
        assert [child.id for child in hierarchy.children_of(root)] == [a.id, b.id]
        assert hierarchy.parent_of(c) is a
        assert hierarchy.root_of(c) is root
        assert {d.id for d in hierarchy.descendants(root)} == {a.id, b.id, c.id}
        assert len(hierarchy) == 4

    def test_duplicate_id_rejected(self, hierarchy, tree):
        with pytest.raises(ValueError):
            hierarchy.add(tree[1])

    def test_unknown_lookup(self, hierarchy):
        with pytest.raises(KeyError):
            hierarchy.get("galaxy-9999")

    def test_absolute_position_chain(self, tree):
        c = tree[3]
        assert len(c.absolute_position) == 3
        np.testing.assert_allclose(sum(c.absolute_position), [11.0, 0.0, 0.0])


class TestCoordinates:
    """Tests for distances and frame translation."""

    def test_distance_across_levels(self, hierarchy, tree):
        _, _, b, c = tree
        assert hierarchy.distance_to(c, b) == pytest.approx(math.sqrt(146.0))
        assert hierarchy.distance_to(b.id, c.id) == pytest.approx(math.sqrt(146.0))

    def test_translate_to_local(self, hierarchy, tree):
        _, a, b, c = tree
        np.testing.assert_allclose(hierarchy.translate_to_local(c, b), [11.0, -5.0, 0.0])
        np.testing.assert_allclose(hierarchy.translate_to_local(b, a), [-10.0, 5.0, 0.0])
        np.testing.assert_allclose(hierarchy.absolute_position(c), [11.0, 0.0, 0.0])

    def test_disjoint_trees(self, hierarchy, tree, make_location):
        other = make_location(hierarchy, [0.0, 0.0, 0.0])
        with pytest.raises(DisjointHierarchyError):
            hierarchy.distance_to(tree[3], other)
        with pytest.raises(DisjointHierarchyError):
            hierarchy.translate_to_local(tree[3], other)


class TestStructureChanges:
    """Tests for reparenting and removal."""

    def test_reparent_keeps_absolute_position(self, hierarchy, tree):
        _, a, b, c = tree
        before = hierarchy.absolute_position(c)

        hierarchy.reparent(c, b)

        np.testing.assert_allclose(c.position, [11.0, -5.0, 0.0])
        np.testing.assert_allclose(hierarchy.absolute_position(c), before)
        assert hierarchy.parent_of(c) is b
        assert c.id not in a.children

    def test_reparent_beneath_itself_rejected(self, hierarchy, tree):
        _, a, _, c = tree
        with pytest.raises(ValueError):
            hierarchy.reparent(a, c)

    def test_remove_clears_dependent_orbits(self, hierarchy, tree):
        root, a, b, c = tree
        hierarchy.assign_orbit(
            b, explicit_orbit(1e30, np.zeros(3), 1e3, 0.0, 0.0, 0.0, 0.0, 0.0, orbited_id=c.id)
        )
        assert b.orbit is not None

        removed = hierarchy.remove(a)

        assert set(removed) == {a.id, c.id}
        assert b.orbit is None
        assert a.id not in hierarchy
        assert root.children == [b.id]

    def test_remove_drops_satellite_ids(self, hierarchy, tree):
        root, a, b, c = tree
        b.details = PlanetoidDetails(PlanetType.TERRESTRIAL, 0.3, satellite_ids=[c.id, "planet-0009"])

        hierarchy.remove(c)

        assert b.details.satellite_ids == ["planet-0009"]

    def test_remove_primary_promotes_next_star(self, hierarchy, tree):
        root, a, b, c = tree
        root.details = SystemDetails(star_ids=[a.id, b.id], primary_id=a.id)

        hierarchy.remove(a)
        assert root.details.star_ids == [b.id]
        assert root.details.primary_id == b.id

        hierarchy.remove(b)
        assert root.details.star_ids == []
        assert root.details.primary_id is None

    def test_remove_clears_field_reference(self, hierarchy, tree):
        root, a, b, c = tree
        b.details = FieldDetails(orbited_id=c.id)

        hierarchy.remove(a)

        assert b.details.orbited_id is None

    def test_no_removed_ids_in_records(self, sunlike_cosmos, sunlike_system):
        hierarchy = sunlike_cosmos.hierarchy
        primary_id = sunlike_system.details.primary_id

        removed = set(hierarchy.remove(primary_id))

        assert sunlike_system.details.star_ids == []
        assert sunlike_system.details.primary_id is None
        for location in hierarchy:
            record = location.to_record()
            details = record["details"] or {}
            referenced = set(details.get("satellite_ids", [])) | set(details.get("star_ids", []))
            referenced |= {details.get("primary_id"), details.get("orbited_id")}
            if record["orbit"] is not None:
                referenced.add(record["orbit"]["orbited_id"])
            assert not referenced & removed


class TestOrbits:
    """Tests for orbit bookkeeping across the hierarchy."""

    def test_orbit_placed_relative_to_orbited_sibling(self, hierarchy, make_location):
        system = make_location(hierarchy, [0.0, 0.0, 0.0])
        star = make_location(hierarchy, [50.0, 0.0, 0.0], parent=system)
        planet = make_location(hierarchy, [50.0, 0.0, 0.0], parent=system, mass=1e24)

        hierarchy.assign_orbit(
            planet, explicit_orbit(star.mass, star.position, 1e3, 0.0, 0.0, 0.0, 0.0, 0.0,
                                   orbited_id=star.id)
        )

        np.testing.assert_allclose(planet.position, [1050.0, 0.0, 0.0])

    def test_advance_follows_moved_star(self, hierarchy, make_location):
        system = make_location(hierarchy, [0.0, 0.0, 0.0])
        star = make_location(hierarchy, [0.0, 0.0, 0.0], parent=system)
        planet = make_location(hierarchy, [0.0, 0.0, 0.0], parent=system, mass=1e24)
        hierarchy.assign_orbit(
            planet, explicit_orbit(star.mass, star.position, 1e3, 0.0, 0.0, 0.0, 0.0, 0.0,
                                   orbited_id=star.id)
        )

        star.position = np.array([100.0, 0.0, 0.0])
        hierarchy.advance_orbit(planet, 0.0)

        np.testing.assert_allclose(planet.position, [1100.0, 0.0, 0.0])

    def test_advance_without_orbit(self, hierarchy, tree):
        with pytest.raises(MissingOrbitalContextError):
            hierarchy.advance_orbit(tree[1], 10.0)
