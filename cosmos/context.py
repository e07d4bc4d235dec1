#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Generation Context

Everything a body generator may know about the place a new body is being
created in: its parent, position, provisional orbited body, requested orbit
and the star lighting it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .config import GenerationConfig
from .location import CosmicLocation, StructureType
from .orbit import OrbitalParameters, OrbitKind


@dataclass
class GenerationContext:
    """
    Constraints passed to a body generator.

    Attributes
    ----------
    structure_type : StructureType
        Requested kind of location.
    config : GenerationConfig
        Configuration of the owning cosmos.
    parent : CosmicLocation, optional
        Containing location.
    position : np.ndarray
        Requested position in the parent frame (m).
    options : dict
        Generator options (star type, planet type, ...).
    orbited : CosmicLocation, optional
        Body the new location will orbit, when known in advance.
    orbited_position : np.ndarray, optional
        Position of the orbited body or barycentre in the parent frame (m).
    orbit_parameters : OrbitalParameters, optional
        Orbit requested by the caller.
    illumination : tuple, optional
        (luminosity in W, distance in m) of the nearest lighting star.
    """

    structure_type: StructureType
    config: GenerationConfig
    parent: Optional[CosmicLocation] = None
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    options: Dict[str, Any] = field(default_factory=dict)
    orbited: Optional[CosmicLocation] = None
    orbited_position: Optional[np.ndarray] = None
    orbit_parameters: Optional[OrbitalParameters] = None
    illumination: Optional[Tuple[float, float]] = None

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    @property
    def orbital_distance(self) -> Optional[float]:
        """
        Provisional orbital distance of the new body (m).

        The semi-major axis of an explicit orbit request, else the distance
        to the orbited body, else the distance to the parent's centre. None
        when the body has no orbital context at all.
        """
        parameters = self.orbit_parameters
        if parameters is not None and parameters.kind == OrbitKind.EXPLICIT:
            return parameters.periapsis / (1 - parameters.eccentricity)
        if self.orbited_position is not None:
            distance = float(np.linalg.norm(self.position - self.orbited_position))
            if distance > 0:
                return distance
        if self.parent is not None:
            distance = float(np.linalg.norm(self.position))
            if distance > 0:
                return distance
        return None

    @property
    def provisional_semi_major_axis(self) -> Optional[float]:
        """
        Semi-major axis the new body is expected to end up with (m).

        An explicit request gives it directly. Otherwise the current
        distance is taken as the periapsis of an orbit with the requested
        eccentricity, so it is scaled by (1 + e) / (1 - e); without a
        requested eccentricity the orbit is taken as circular.
        """
        distance = self.orbital_distance
        parameters = self.orbit_parameters
        if distance is None or parameters is None or parameters.kind == OrbitKind.EXPLICIT:
            return distance
        eccentricity = abs(parameters.eccentricity)
        return distance * (1 + eccentricity) / (1 - eccentricity)

    @property
    def has_orbital_context(self) -> bool:
        """False for a free-standing root body with no orbit request."""
        return self.parent is not None or self.orbit_parameters is not None
