#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Keplerian Orbit Model

Two-body orbits described by Keplerian elements, plus the requests used to
create them (circular, from eccentricity, or explicit elements).

All distances in metres, masses in kilograms, angles in radians, time in
seconds. Orbital state is expressed relative to the orbited body, in the
orbiting body's parent frame.
"""

import copy
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidConfigurationError, MissingOrbitalContextError
from .randomizer import Randomizer

logger = logging.getLogger(__name__)

# Gravitational constant in m³/(kg·s²)
G = 6.67430e-11

# Newton-Raphson bounds for Kepler's equation
KEPLER_MAX_ITERATIONS = 30
KEPLER_TOLERANCE = 1e-8


class OrbitKind(Enum):
    """How an orbit request is resolved into elements."""

    CIRCULAR = "circular"
    FROM_ECCENTRICITY = "from_eccentricity"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class OrbitalParameters:
    """
    A request for an orbit, resolved against the orbiting body on assignment.

    Attributes
    ----------
    kind : OrbitKind
        Resolution strategy.
    orbited_mass : float
        Mass of the orbited body or system (kg).
    orbited_position : np.ndarray
        Position of the orbited body or barycentre, in the orbiting body's
        parent frame (m). Ignored when the orbited body is resolved through
        a hierarchy.
    orbited_id : str, optional
        Identifier of the orbited body; None for a system barycentre.
    eccentricity : float
        Orbit eccentricity in [0, 1).
    periapsis : float
        Periapsis distance for explicit orbits (m).
    inclination : float
        Inclination for explicit orbits (radians).
    longitude_of_ascending_node : float
        Ω for explicit orbits (radians).
    argument_of_periapsis : float
        ω for explicit orbits (radians).
    true_anomaly : float
        Initial true anomaly for explicit orbits (radians).
    max_inclination : float
        Upper bound of the sampled inclination for eccentricity-driven
        orbits (radians).
    """

    kind: OrbitKind
    orbited_mass: float
    orbited_position: np.ndarray = field(default_factory=lambda: np.zeros(3), compare=False)
    orbited_id: Optional[str] = None
    eccentricity: float = 0.0
    periapsis: float = 0.0
    inclination: float = 0.0
    longitude_of_ascending_node: float = 0.0
    argument_of_periapsis: float = 0.0
    true_anomaly: float = 0.0
    max_inclination: float = math.pi


class Orbit:
    """
    A Keplerian orbit around a single orbited body.

    Parameters
    ----------
    orbited_mass : float
        Mass of the orbited body (kg).
    orbiting_mass : float
        Mass of the orbiting body (kg).
    semi_major_axis : float
        Half the longest diameter of the ellipse (m).
    eccentricity : float
        Shape of ellipse (0 = circular, 0 < e < 1 = elliptical).
    inclination : float
        Orbital plane tilt from the reference plane (radians, 0 to π).
    longitude_of_ascending_node : float
        Angle from the reference direction to the ascending node (radians).
    argument_of_periapsis : float
        Angle from the ascending node to periapsis (radians).
    true_anomaly : float
        True anomaly at the epoch (radians).
    orbited_id : str, optional
        Identifier of the orbited body.
    orbited_position : np.ndarray, optional
        Position of the orbited body at the epoch, in the orbiting body's
        parent frame (m).

    Attributes
    ----------
    gravitational_parameter : float
        μ = G * (m1 + m2) (m³/s²)
    period : float
        Time for one complete orbit (seconds)
    semi_latus_rectum : float
        p = a * (1 - e²) (m)
    specific_angular_momentum : float
        Angular momentum per unit mass (m²/s)
    elapsed : float
        Seconds propagated since the epoch.
    current_true_anomaly : float
        True anomaly after the last propagation (radians).
    """

    def __init__(
        self,
        orbited_mass: float,
        orbiting_mass: float,
        semi_major_axis: float,
        eccentricity: float,
        inclination: float,
        longitude_of_ascending_node: float,
        argument_of_periapsis: float,
        true_anomaly: float = 0.0,
        orbited_id: Optional[str] = None,
        orbited_position: Optional[np.ndarray] = None,
    ):
        if orbited_mass <= 0:
            raise InvalidConfigurationError("Orbited mass must be positive")
        if orbiting_mass < 0:
            raise InvalidConfigurationError("Orbiting mass must be non-negative")
        if semi_major_axis <= 0:
            raise InvalidConfigurationError("Semi-major axis must be positive")
        if not 0 <= eccentricity < 1:
            raise InvalidConfigurationError(
                f"Eccentricity must be in [0, 1), got {eccentricity}"
            )
        if not 0 <= inclination <= math.pi:
            raise InvalidConfigurationError("Inclination must be between 0 and π radians")

        self.orbited_mass = orbited_mass
        self.orbiting_mass = orbiting_mass
        self.semi_major_axis = semi_major_axis
        self.eccentricity = eccentricity
        self.inclination = inclination
        self.longitude_of_ascending_node = longitude_of_ascending_node % (2 * math.pi)
        self.argument_of_periapsis = argument_of_periapsis % (2 * math.pi)
        self.true_anomaly = true_anomaly % (2 * math.pi)
        self.orbited_id = orbited_id
        self.orbited_position = (
            np.zeros(3) if orbited_position is None else np.array(orbited_position, dtype=float)
        )

        self._calculate_derived_parameters()

        self.elapsed = 0.0
        self.current_true_anomaly = self.true_anomaly

    def _calculate_derived_parameters(self) -> None:
        """Calculate all derived orbital parameters."""
        a = self.semi_major_axis
        e = self.eccentricity

        self.gravitational_parameter = G * (self.orbited_mass + self.orbiting_mass)
        self.semi_latus_rectum = a * (1 - e**2)
        self.semi_minor_axis = a * math.sqrt(1 - e**2)
        self.periapsis = a * (1 - e)
        self.apoapsis = a * (1 + e)

        # Kepler's third law: T = 2π * sqrt(a³/μ)
        self.period = 2 * math.pi * math.sqrt(a**3 / self.gravitational_parameter)

        # h = sqrt(μ * p)
        self.specific_angular_momentum = math.sqrt(
            self.gravitational_parameter * self.semi_latus_rectum
        )

        eccentric = self.eccentric_anomaly_from_true(self.true_anomaly)
        self.initial_mean_anomaly = (eccentric - e * math.sin(eccentric)) % (2 * math.pi)

        self.initial_position = self.position_at_true_anomaly(self.true_anomaly)
        self.initial_velocity = self.velocity_at_true_anomaly(self.true_anomaly)

    @property
    def mean_motion(self) -> float:
        """Mean angular velocity n = sqrt(μ/a³) (radians/second)."""
        return math.sqrt(self.gravitational_parameter / self.semi_major_axis**3)

    @property
    def initial_state(self) -> Tuple[np.ndarray, np.ndarray]:
        """Position and velocity at the epoch, relative to the orbited body."""
        return self.initial_position.copy(), self.initial_velocity.copy()

    def mean_anomaly_at_time(self, t: float) -> float:
        """
        Calculate mean anomaly at time t after the epoch.

        Parameters
        ----------
        t : float
            Seconds since the epoch.

        Returns
        -------
        float
            Mean anomaly (radians, 0 to 2π)
        """
        return (self.initial_mean_anomaly + self.mean_motion * t) % (2 * math.pi)

    def eccentric_anomaly_from_mean(self, M: float, tolerance: float = KEPLER_TOLERANCE) -> float:
        """
        Calculate eccentric anomaly from mean anomaly using Newton-Raphson iteration.

        Solves Kepler's equation: M = E - e * sin(E)

        Parameters
        ----------
        M : float
            Mean anomaly (radians)
        tolerance : float
            Convergence tolerance

        Returns
        -------
        float
            Eccentric anomaly (radians). The last estimate is returned if the
            iteration bound is reached.
        """
        e = self.eccentricity

        # Initial guess
        E = M if e < 0.8 else math.pi

        for _ in range(KEPLER_MAX_ITERATIONS):
            f = E - e * math.sin(E) - M
            f_prime = 1 - e * math.cos(E)
            E_new = E - f / f_prime

            if abs(E_new - E) < tolerance:
                return E_new
            E = E_new

        logger.debug(f"Kepler solver hit {KEPLER_MAX_ITERATIONS} iterations (M={M:.6f}, e={e:.6f})")
        return E

    def true_anomaly_from_eccentric(self, E: float) -> float:
        """
        Calculate true anomaly from eccentric anomaly.

        Parameters
        ----------
        E : float
            Eccentric anomaly (radians)

        Returns
        -------
        float
            True anomaly (radians)
        """
        e = self.eccentricity

        # Using the half-angle formula for numerical stability
        return 2 * math.atan2(
            math.sqrt(1 + e) * math.sin(E / 2),
            math.sqrt(1 - e) * math.cos(E / 2)
        )

    def eccentric_anomaly_from_true(self, nu: float) -> float:
        """Inverse of :meth:`true_anomaly_from_eccentric`."""
        e = self.eccentricity
        return 2 * math.atan2(
            math.sqrt(1 - e) * math.sin(nu / 2),
            math.sqrt(1 + e) * math.cos(nu / 2)
        )

    def radius_at_true_anomaly(self, nu: float) -> float:
        """
        Calculate orbital radius at a given true anomaly.

        Parameters
        ----------
        nu : float
            True anomaly (radians)

        Returns
        -------
        float
            Distance from the orbited body (m)
        """
        return self.semi_latus_rectum / (1 + self.eccentricity * math.cos(nu))

    def velocity_at_radius(self, r: float) -> float:
        """
        Calculate orbital speed at a given radius (vis-viva equation).

        Parameters
        ----------
        r : float
            Distance from the orbited body (m)

        Returns
        -------
        float
            Orbital speed (m/s)
        """
        mu = self.gravitational_parameter
        a = self.semi_major_axis
        return math.sqrt(mu * (2 / r - 1 / a))

    def position_in_orbital_plane(self, nu: float) -> Tuple[float, float]:
        """Perifocal (x, y) position; x points to periapsis."""
        r = self.radius_at_true_anomaly(nu)
        return r * math.cos(nu), r * math.sin(nu)

    def velocity_in_orbital_plane(self, nu: float) -> Tuple[float, float]:
        """Perifocal (vx, vy) velocity."""
        mu = self.gravitational_parameter
        h = self.specific_angular_momentum
        e = self.eccentricity

        vx = -mu / h * math.sin(nu)
        vy = mu / h * (e + math.cos(nu))
        return vx, vy

    def perifocal_to_parent_matrix(self) -> np.ndarray:
        """
        Get rotation matrix from perifocal coordinates to the parent frame.

        Returns
        -------
        np.ndarray
            3x3 rotation matrix
        """
        i = self.inclination
        omega = self.argument_of_periapsis
        Omega = self.longitude_of_ascending_node

        cos_O = math.cos(Omega)
        sin_O = math.sin(Omega)
        cos_i = math.cos(i)
        sin_i = math.sin(i)
        cos_w = math.cos(omega)
        sin_w = math.sin(omega)

        return np.array([
            [cos_O * cos_w - sin_O * sin_w * cos_i,
             -cos_O * sin_w - sin_O * cos_w * cos_i,
             sin_O * sin_i],
            [sin_O * cos_w + cos_O * sin_w * cos_i,
             -sin_O * sin_w + cos_O * cos_w * cos_i,
             -cos_O * sin_i],
            [sin_w * sin_i,
             cos_w * sin_i,
             cos_i]
        ])

    def position_at_true_anomaly(self, nu: float) -> np.ndarray:
        """Position relative to the orbited body in the parent frame (m)."""
        x_pf, y_pf = self.position_in_orbital_plane(nu)
        return self.perifocal_to_parent_matrix() @ np.array([x_pf, y_pf, 0.0])

    def velocity_at_true_anomaly(self, nu: float) -> np.ndarray:
        """Velocity relative to the orbited body in the parent frame (m/s)."""
        vx_pf, vy_pf = self.velocity_in_orbital_plane(nu)
        return self.perifocal_to_parent_matrix() @ np.array([vx_pf, vy_pf, 0.0])

    def true_anomaly_at_time(self, t: float) -> float:
        """True anomaly t seconds after the epoch (radians)."""
        M = self.mean_anomaly_at_time(t)
        E = self.eccentric_anomaly_from_mean(M)
        return self.true_anomaly_from_eccentric(E)

    def state_vectors_at_time(self, t: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Calculate position and velocity t seconds after the epoch.

        Parameters
        ----------
        t : float
            Seconds since the epoch.

        Returns
        -------
        tuple
            (position, velocity) relative to the orbited body, in m and m/s
        """
        nu = self.true_anomaly_at_time(t)
        return self.position_at_true_anomaly(nu), self.velocity_at_true_anomaly(nu)

    def advance(self, elapsed: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Propagate the orbit forward in place.

        Only the elapsed time and current true anomaly change; the defining
        elements are untouched.

        Parameters
        ----------
        elapsed : float
            Seconds to advance.

        Returns
        -------
        tuple
            New (position, velocity) relative to the orbited body.
        """
        self.elapsed += elapsed
        self.current_true_anomaly = self.true_anomaly_at_time(self.elapsed)
        return (
            self.position_at_true_anomaly(self.current_true_anomaly),
            self.velocity_at_true_anomaly(self.current_true_anomaly),
        )

    def hill_sphere_radius(self) -> float:
        """Hill sphere radius a(1-e)(m/(3M))^(1/3) (m)."""
        return (
            self.semi_major_axis
            * (1 - self.eccentricity)
            * (self.orbiting_mass / (3 * self.orbited_mass)) ** (1.0 / 3.0)
        )

    def mutual_hill_sphere_radius(self, other_mass: float) -> float:
        """Mutual Hill radius with a neighbour of the given mass on a similar orbit (m)."""
        return (
            (self.orbiting_mass + other_mass) / (3 * self.orbited_mass)
        ) ** (1.0 / 3.0) * self.semi_major_axis

    def sphere_of_influence(self) -> float:
        """Laplace sphere of influence a(m/M)^(2/5) (m)."""
        return self.semi_major_axis * (self.orbiting_mass / self.orbited_mass) ** 0.4

    def rebased(self, offset: np.ndarray) -> "Orbit":
        """
        Copy of this orbit with the orbited position shifted by an offset.

        Used when the orbiting body moves to a different parent frame whose
        origin differs by ``-offset``.
        """
        orbit = copy.copy(self)
        orbit.orbited_position = self.orbited_position + np.asarray(offset, dtype=float)
        return orbit

    def __repr__(self) -> str:
        return (
            f"Orbit(\n"
            f"  orbited={self.orbited_id},\n"
            f"  semi_major_axis={self.semi_major_axis:.6g} m,\n"
            f"  eccentricity={self.eccentricity:.6f},\n"
            f"  inclination={math.degrees(self.inclination):.2f}°,\n"
            f"  RAAN={math.degrees(self.longitude_of_ascending_node):.2f}°,\n"
            f"  arg_periapsis={math.degrees(self.argument_of_periapsis):.2f}°,\n"
            f"  period={self.period:.6g} s ({self.period / 86400:.2f} days)\n"
            f")"
        )


def circular_orbit(body, orbited, orbited_position: Optional[np.ndarray] = None) -> OrbitalParameters:
    """
    Request a circular orbit through the body's current position.

    Parameters
    ----------
    body : CosmicLocation
        The body which will orbit.
    orbited : CosmicLocation
        The body to orbit.
    orbited_position : np.ndarray, optional
        Position of ``orbited`` in ``body``'s parent frame. Defaults to
        ``orbited.position`` (both bodies share a parent).

    Returns
    -------
    OrbitalParameters
        Circular orbit request.

    Raises
    ------
    InvalidConfigurationError
        If the orbited body has no mass or both bodies coincide.
    """
    mass = orbited.material.mass
    if mass <= 0:
        raise InvalidConfigurationError(f"Cannot orbit {orbited.id}: it has no mass")

    position = orbited.position if orbited_position is None else orbited_position
    if np.linalg.norm(body.position - position) == 0:
        raise InvalidConfigurationError(f"{body.id} coincides with {orbited.id}")

    return OrbitalParameters(
        kind=OrbitKind.CIRCULAR,
        orbited_mass=mass,
        orbited_position=np.array(position, dtype=float),
        orbited_id=orbited.id,
    )


def from_eccentricity(
    parent_mass: float,
    parent_position: np.ndarray,
    eccentricity: float,
    max_inclination: float = math.pi,
    orbited_id: Optional[str] = None,
) -> OrbitalParameters:
    """
    Request an orbit of the given eccentricity at the current separation.

    Parameters
    ----------
    parent_mass : float
        Mass of the orbited body or system (kg).
    parent_position : np.ndarray
        Position of the orbited body or barycentre (m).
    eccentricity : float
        Eccentricity; the absolute value is used.
    max_inclination : float
        Inclinations are sampled uniformly below this bound. The default
        gives steep orbits for field and rogue bodies; planets around a star
        pass a shallow bound.
    orbited_id : str, optional
        Identifier of the orbited body.

    Returns
    -------
    OrbitalParameters
        Eccentricity-driven orbit request.
    """
    eccentricity = abs(eccentricity)
    if parent_mass <= 0:
        raise InvalidConfigurationError("Orbited mass must be positive")
    if eccentricity >= 1:
        raise InvalidConfigurationError(
            f"Hyperbolic and parabolic orbits are not modelled (e={eccentricity})"
        )
    if not 0 <= max_inclination <= math.pi:
        raise InvalidConfigurationError("Maximum inclination must be between 0 and π radians")

    return OrbitalParameters(
        kind=OrbitKind.FROM_ECCENTRICITY,
        orbited_mass=parent_mass,
        orbited_position=np.array(parent_position, dtype=float),
        orbited_id=orbited_id,
        eccentricity=eccentricity,
        max_inclination=max_inclination,
    )


def explicit_orbit(
    orbited_mass: float,
    orbited_position: np.ndarray,
    periapsis: float,
    eccentricity: float,
    inclination: float,
    longitude_of_ascending_node: float,
    argument_of_periapsis: float,
    true_anomaly: float,
    orbited_id: Optional[str] = None,
) -> OrbitalParameters:
    """Request an orbit with fully specified elements."""
    if periapsis <= 0:
        raise InvalidConfigurationError("Periapsis must be positive")
    if not 0 <= eccentricity < 1:
        raise InvalidConfigurationError(f"Eccentricity must be in [0, 1), got {eccentricity}")

    return OrbitalParameters(
        kind=OrbitKind.EXPLICIT,
        orbited_mass=orbited_mass,
        orbited_position=np.array(orbited_position, dtype=float),
        orbited_id=orbited_id,
        eccentricity=eccentricity,
        periapsis=periapsis,
        inclination=inclination,
        longitude_of_ascending_node=longitude_of_ascending_node,
        argument_of_periapsis=argument_of_periapsis,
        true_anomaly=true_anomaly,
    )


def _orientation_through(relative_position: np.ndarray) -> Tuple[float, float, float]:
    """
    Orbital plane passing through a position at its highest or lowest point.

    Returns
    -------
    tuple
        (inclination, longitude_of_ascending_node, argument_of_latitude)
    """
    x, y, z = (float(c) for c in relative_position)
    r = math.sqrt(x * x + y * y + z * z)
    inclination = math.asin(min(1.0, abs(z) / r))

    if z >= 0:
        return inclination, math.atan2(-x, y), math.pi / 2
    return inclination, math.atan2(x, -y), 3 * math.pi / 2


def resolve_orbit(
    parameters: OrbitalParameters,
    orbiting_mass: float,
    relative_position: np.ndarray,
    rng: Optional[Randomizer] = None,
    orbited_position: Optional[np.ndarray] = None,
) -> Orbit:
    """
    Turn an orbit request into an :class:`Orbit`.

    Parameters
    ----------
    parameters : OrbitalParameters
        The request.
    orbiting_mass : float
        Mass of the orbiting body (kg).
    relative_position : np.ndarray
        Current position of the orbiting body relative to the orbited body (m).
    rng : Randomizer, optional
        Random source; required for eccentricity-driven requests.
    orbited_position : np.ndarray, optional
        Orbited position to record on the orbit; defaults to the request's.

    Returns
    -------
    Orbit
        Resolved orbit.
    """
    origin = parameters.orbited_position if orbited_position is None else orbited_position
    kind = parameters.kind
    common = dict(
        orbited_mass=parameters.orbited_mass,
        orbiting_mass=orbiting_mass,
        orbited_id=parameters.orbited_id,
        orbited_position=origin,
    )

    if kind == OrbitKind.EXPLICIT:
        e = parameters.eccentricity
        return Orbit(
            semi_major_axis=parameters.periapsis / (1 - e),
            eccentricity=e,
            inclination=parameters.inclination,
            longitude_of_ascending_node=parameters.longitude_of_ascending_node,
            argument_of_periapsis=parameters.argument_of_periapsis,
            true_anomaly=parameters.true_anomaly,
            **common,
        )

    distance = float(np.linalg.norm(relative_position))
    if distance == 0:
        raise InvalidConfigurationError("An orbiting body cannot coincide with the body it orbits")

    if kind == OrbitKind.CIRCULAR:
        inclination, ascending_node, latitude = _orientation_through(relative_position)
        return Orbit(
            semi_major_axis=distance,
            eccentricity=0.0,
            inclination=inclination,
            longitude_of_ascending_node=ascending_node,
            argument_of_periapsis=0.0,
            true_anomaly=latitude,
            **common,
        )

    if rng is None:
        raise InvalidConfigurationError("Eccentricity-driven orbits need a random source")

    # The current separation is the radius at a random true anomaly
    e = parameters.eccentricity
    nu = rng.next_angle()
    semi_latus_rectum = distance * (1 + e * math.cos(nu))
    return Orbit(
        semi_major_axis=semi_latus_rectum / (1 - e**2),
        eccentricity=e,
        inclination=rng.next_double(0.0, parameters.max_inclination),
        longitude_of_ascending_node=rng.next_angle(),
        argument_of_periapsis=rng.next_angle(),
        true_anomaly=nu,
        **common,
    )


def assign_orbit(
    body,
    parameters: OrbitalParameters,
    rng: Optional[Randomizer] = None,
    orbited_position: Optional[np.ndarray] = None,
) -> Orbit:
    """
    Resolve an orbit request and apply it to a body.

    Sets ``body.orbit``, moves the body onto the orbit at the epoch and sets
    its velocity to the initial orbital velocity.

    Parameters
    ----------
    body : CosmicLocation
        The orbiting body.
    parameters : OrbitalParameters
        The request.
    rng : Randomizer, optional
        Random source; required for eccentricity-driven requests.
    orbited_position : np.ndarray, optional
        Orbited position in ``body``'s parent frame, when it differs from
        the one stored in the request (e.g. resolved through a hierarchy).

    Returns
    -------
    Orbit
        The assigned orbit.
    """
    origin = np.array(
        parameters.orbited_position if orbited_position is None else orbited_position,
        dtype=float,
    )
    orbit = resolve_orbit(
        parameters,
        body.material.mass,
        body.position - origin,
        rng=rng,
        orbited_position=origin,
    )

    position, velocity = orbit.initial_state
    body.orbit = orbit
    body.position = origin + position
    body.velocity = velocity

    logger.debug(
        f"Assigned {parameters.kind.value} orbit to {body.id}: "
        f"a={orbit.semi_major_axis:.4g} m, e={orbit.eccentricity:.4f}"
    )
    return orbit


def hill_sphere_radius(body) -> float:
    """
    Hill sphere radius of an orbiting body.

    Raises
    ------
    MissingOrbitalContextError
        If the body has no orbit.
    """
    if body.orbit is None:
        raise MissingOrbitalContextError(f"{body.id} has no orbit; its Hill sphere is undefined")
    return body.orbit.hill_sphere_radius()


def orbital_period(semi_major_axis: float, gravitational_parameter: float) -> float:
    """Period of an orbit, 2π sqrt(a³/μ) (seconds)."""
    return 2 * math.pi * math.sqrt(semi_major_axis**3 / gravitational_parameter)


def semi_major_axis_for_period(period: float, gravitational_parameter: float) -> float:
    """Semi-major axis giving the requested period (m)."""
    return (gravitational_parameter * (period / (2 * math.pi)) ** 2) ** (1.0 / 3.0)


if __name__ == "__main__":
    # Example: an Earth-like orbit around a Sun-like star
    earth = Orbit(
        orbited_mass=1.989e30,
        orbiting_mass=5.972e24,
        semi_major_axis=1.496e11,
        eccentricity=0.0167,
        inclination=0.0,
        longitude_of_ascending_node=0.0,
        argument_of_periapsis=math.radians(102.9),
    )

    print("Earth-like orbit:")
    print(earth)
    print(f"Hill sphere: {earth.hill_sphere_radius():.4g} m")
