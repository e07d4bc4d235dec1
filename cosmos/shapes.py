#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shapes

Three-dimensional shapes describing the extent of a location. A shape is
centred on its owner's position; offsets passed to shape methods are
relative to that centre and expressed in the owner's parent frame.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .randomizer import Randomizer

# Attempts made when sampling shapes that need rejection
_MAX_SAMPLE_ATTEMPTS = 100


class Shape(ABC):
    """Abstract base class for location shapes."""

    @property
    @abstractmethod
    def volume(self) -> float:
        """Volume (m³)."""

    @property
    @abstractmethod
    def containing_radius(self) -> float:
        """Radius of the smallest sphere containing the shape (m)."""

    @abstractmethod
    def random_point(self, rng: Randomizer, margin: float = 0.0) -> Optional[np.ndarray]:
        """
        Sample a point uniformly inside the shape shrunk by a margin.

        Parameters
        ----------
        rng : Randomizer
            Random source.
        margin : float
            Clearance to keep from the shape's boundary (m).

        Returns
        -------
        np.ndarray or None
            Offset from the shape's centre, or None if nothing fits.
        """

    def intersects_sphere(self, offset: np.ndarray, radius: float) -> bool:
        """
        Check whether a sphere overlaps this shape.

        Uses the containing sphere as a bound.

        Parameters
        ----------
        offset : np.ndarray
            Centre of the sphere relative to this shape's centre (m).
        radius : float
            Sphere radius (m).

        Returns
        -------
        bool
            True if the two overlap.
        """
        return float(np.linalg.norm(offset)) < self.containing_radius + radius

    def contains_point(self, offset: np.ndarray) -> bool:
        """True if the offset lies within the containing sphere."""
        return float(np.linalg.norm(offset)) <= self.containing_radius


class Sphere(Shape):
    """
    A solid sphere.

    Parameters
    ----------
    radius : float
        Radius (m).
    """

    def __init__(self, radius: float):
        if radius < 0:
            raise ValueError("Sphere radius must be non-negative")
        self.radius = radius

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * self.radius**3

    @property
    def containing_radius(self) -> float:
        return self.radius

    def random_point(self, rng: Randomizer, margin: float = 0.0) -> Optional[np.ndarray]:
        usable = self.radius - margin
        if usable < 0:
            return None
        distance = usable * rng.next_double() ** (1.0 / 3.0)
        return rng.next_unit_vector() * distance

    def __repr__(self) -> str:
        return f"Sphere(radius={self.radius:.4g})"


class Ellipsoid(Shape):
    """
    An axis-aligned ellipsoid.

    Parameters
    ----------
    axis_x, axis_y, axis_z : float
        Semi-axes along x, y and z (m).
    """

    def __init__(self, axis_x: float, axis_y: float, axis_z: float):
        if min(axis_x, axis_y, axis_z) < 0:
            raise ValueError("Ellipsoid axes must be non-negative")
        self.axis_x = axis_x
        self.axis_y = axis_y
        self.axis_z = axis_z

    @classmethod
    def flattened(cls, radius: float, flattening: float) -> "Ellipsoid":
        """Oblate spheroid with equatorial ``radius`` and polar ``radius * (1 - flattening)``."""
        return cls(radius, radius, radius * (1.0 - flattening))

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * self.axis_x * self.axis_y * self.axis_z

    @property
    def containing_radius(self) -> float:
        return max(self.axis_x, self.axis_y, self.axis_z)

    def random_point(self, rng: Randomizer, margin: float = 0.0) -> Optional[np.ndarray]:
        axes = np.array([self.axis_x, self.axis_y, self.axis_z]) - margin
        if np.any(axes < 0):
            return None
        unit = rng.next_unit_vector() * rng.next_double() ** (1.0 / 3.0)
        return unit * axes

    def __repr__(self) -> str:
        return (
            f"Ellipsoid(axes=({self.axis_x:.4g}, {self.axis_y:.4g}, {self.axis_z:.4g}))"
        )


class HollowSphere(Shape):
    """
    A spherical shell.

    Parameters
    ----------
    inner_radius : float
        Radius of the empty cavity (m).
    outer_radius : float
        Outer radius (m).
    """

    def __init__(self, inner_radius: float, outer_radius: float):
        if inner_radius < 0 or outer_radius < inner_radius:
            raise ValueError("HollowSphere requires 0 <= inner_radius <= outer_radius")
        self.inner_radius = inner_radius
        self.outer_radius = outer_radius

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * (self.outer_radius**3 - self.inner_radius**3)

    @property
    def containing_radius(self) -> float:
        return self.outer_radius

    def random_point(self, rng: Randomizer, margin: float = 0.0) -> Optional[np.ndarray]:
        inner = self.inner_radius + margin
        outer = self.outer_radius - margin
        if outer < inner:
            return None
        cube = inner**3 + rng.next_double() * (outer**3 - inner**3)
        return rng.next_unit_vector() * cube ** (1.0 / 3.0)

    def intersects_sphere(self, offset: np.ndarray, radius: float) -> bool:
        # Spheres wholly inside the cavity do not touch the shell
        distance = float(np.linalg.norm(offset))
        return distance - radius < self.outer_radius and distance + radius > self.inner_radius

    def contains_point(self, offset: np.ndarray) -> bool:
        distance = float(np.linalg.norm(offset))
        return self.inner_radius <= distance <= self.outer_radius

    def __repr__(self) -> str:
        return f"HollowSphere(inner={self.inner_radius:.4g}, outer={self.outer_radius:.4g})"


class Torus(Shape):
    """
    A ring torus lying in the x-y plane.

    Parameters
    ----------
    major_radius : float
        Distance from the centre to the middle of the tube (m).
    minor_radius : float
        Radius of the tube (m).
    """

    def __init__(self, major_radius: float, minor_radius: float):
        if minor_radius < 0 or major_radius < minor_radius:
            raise ValueError("Torus requires 0 <= minor_radius <= major_radius")
        self.major_radius = major_radius
        self.minor_radius = minor_radius

    @property
    def volume(self) -> float:
        return 2 * math.pi**2 * self.major_radius * self.minor_radius**2

    @property
    def containing_radius(self) -> float:
        return self.major_radius + self.minor_radius

    def random_point(self, rng: Randomizer, margin: float = 0.0) -> Optional[np.ndarray]:
        tube = self.minor_radius - margin
        if tube < 0:
            return None

        # Points far from the axis occupy more volume; weight by that radius
        for _ in range(_MAX_SAMPLE_ATTEMPTS):
            rho = tube * math.sqrt(rng.next_double())
            theta = rng.next_angle()
            axis_distance = self.major_radius + rho * math.cos(theta)
            if rng.next_double() * (self.major_radius + tube) <= axis_distance:
                break

        phi = rng.next_angle()
        return np.array([
            axis_distance * math.cos(phi),
            axis_distance * math.sin(phi),
            rho * math.sin(theta),
        ])

    def intersects_sphere(self, offset: np.ndarray, radius: float) -> bool:
        in_plane = math.hypot(float(offset[0]), float(offset[1]))
        tube_distance = math.hypot(in_plane - self.major_radius, float(offset[2]))
        return tube_distance < self.minor_radius + radius

    def contains_point(self, offset: np.ndarray) -> bool:
        return self.intersects_sphere(offset, 0.0)

    def __repr__(self) -> str:
        return f"Torus(major={self.major_radius:.4g}, minor={self.minor_radius:.4g})"
