#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides common fixtures, markers, and utilities for testing the
cosmos generator and its body generators.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# RANDOM SOURCE FIXTURES
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random source."""
    from cosmos import Randomizer

    return Randomizer(12345)


# =============================================================================
# ORBIT FIXTURES
# =============================================================================

@pytest.fixture
def earth_orbit():
    """Earth-like orbit around a Sun-like star."""
    from cosmos import Orbit

    return Orbit(
        orbited_mass=1.989e30,
        orbiting_mass=5.972e24,
        semi_major_axis=1.496e11,
        eccentricity=0.0167,
        inclination=0.1,
        longitude_of_ascending_node=0.5,
        argument_of_periapsis=1.2,
        true_anomaly=0.3,
    )


# =============================================================================
# HIERARCHY FIXTURES
# =============================================================================

def _make_location(hierarchy, position, parent=None, mass=1e30, radius=1e9,
                   structure_type=None):
    """Attach a plain spherical location to a hierarchy."""
    from cosmos import CosmicLocation, Material, Sphere, StructureType, Substance

    structure_type = structure_type or StructureType.STAR_SYSTEM
    location = CosmicLocation(
        id=hierarchy.new_id(structure_type),
        structure_type=structure_type,
        seed=0,
        material=Material.homogeneous(mass, Sphere(radius), [(Substance.HYDROGEN, 1.0)]),
        position=np.array(position, dtype=float),
    )
    return hierarchy.add(location, parent)


@pytest.fixture
def make_location():
    """Factory attaching plain spherical locations to a hierarchy."""
    return _make_location


@pytest.fixture
def hierarchy():
    """Empty hierarchy arena."""
    from cosmos import CosmicHierarchy

    return CosmicHierarchy()


# =============================================================================
# COSMOS FIXTURES
# =============================================================================

@pytest.fixture
def cosmos():
    """Empty cosmos with a fixed seed."""
    from cosmos import Cosmos, GenerationConfig

    return Cosmos(GenerationConfig(seed=42))


@pytest.fixture
def sunlike_cosmos():
    """Cosmos holding a single Sun-like star system."""
    from cosmos import create_cosmos

    return create_cosmos("star_system", seed=42, sunlike=True)


@pytest.fixture
def sunlike_system(sunlike_cosmos):
    """Root star system of the Sun-like cosmos."""
    return sunlike_cosmos.hierarchy.roots()[0]
