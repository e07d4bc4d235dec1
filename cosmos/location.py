#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cosmic Locations

The node type of the cosmic hierarchy and the classifications carried by
its type-specific details.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

import numpy as np

from .material import Material
from .orbit import Orbit


class StructureType(Enum):
    """Closed set of location kinds."""

    UNIVERSE = "universe"
    SUPERCLUSTER = "supercluster"
    GALAXY_CLUSTER = "galaxy_cluster"
    GALAXY_GROUP = "galaxy_group"
    GALAXY_SUBGROUP = "galaxy_subgroup"
    SPIRAL_GALAXY = "spiral_galaxy"
    ELLIPTICAL_GALAXY = "elliptical_galaxy"
    DWARF_GALAXY = "dwarf_galaxy"
    GLOBULAR_CLUSTER = "globular_cluster"
    NEBULA = "nebula"
    HII_REGION = "hii_region"
    PLANETARY_NEBULA = "planetary_nebula"
    STAR_SYSTEM = "star_system"
    ASTEROID_FIELD = "asteroid_field"
    OORT_CLOUD = "oort_cloud"
    BLACK_HOLE = "black_hole"
    STAR = "star"
    PLANET = "planet"
    DWARF_PLANET = "dwarf_planet"
    ASTEROID = "asteroid"
    COMET = "comet"


class StarType(Enum):
    MAIN_SEQUENCE = "main_sequence"
    BROWN_DWARF = "brown_dwarf"
    WHITE_DWARF = "white_dwarf"
    NEUTRON_STAR = "neutron_star"
    RED_GIANT = "red_giant"
    YELLOW_GIANT = "yellow_giant"
    BLUE_GIANT = "blue_giant"

    @property
    def is_giant(self) -> bool:
        return self in (StarType.RED_GIANT, StarType.YELLOW_GIANT, StarType.BLUE_GIANT)


class SpectralClass(Enum):
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"
    L = "L"
    T = "T"
    Y = "Y"
    W = "W"


class LuminosityClass(Enum):
    ZERO = "0"
    IA = "Ia"
    IB = "Ib"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"
    SUBDWARF = "sd"
    WHITE_DWARF = "D"


class PlanetType(Enum):
    GAS_GIANT = "gas_giant"
    ICE_GIANT = "ice_giant"
    TERRESTRIAL = "terrestrial"
    OCEAN = "ocean"
    IRON = "iron"
    CARBON = "carbon"
    LAVA = "lava"
    DWARF = "dwarf"
    ROCKY_DWARF = "rocky_dwarf"
    LAVA_DWARF = "lava_dwarf"
    ASTEROID_C = "asteroid_c"
    ASTEROID_M = "asteroid_m"
    ASTEROID_S = "asteroid_s"
    COMET = "comet"

    @property
    def is_giant(self) -> bool:
        return self in (PlanetType.GAS_GIANT, PlanetType.ICE_GIANT)

    @property
    def is_dwarf(self) -> bool:
        return self in (PlanetType.DWARF, PlanetType.ROCKY_DWARF, PlanetType.LAVA_DWARF)

    @property
    def is_asteroid(self) -> bool:
        return self in (PlanetType.ASTEROID_C, PlanetType.ASTEROID_M, PlanetType.ASTEROID_S)

    @property
    def is_terrestrial(self) -> bool:
        return self in (
            PlanetType.TERRESTRIAL,
            PlanetType.OCEAN,
            PlanetType.IRON,
            PlanetType.CARBON,
            PlanetType.LAVA,
        )

    @property
    def is_lava(self) -> bool:
        """Molten worlds, heated by tidal stress or impacts."""
        return self in (PlanetType.LAVA, PlanetType.LAVA_DWARF)

    @property
    def structure_type(self) -> StructureType:
        """Structure type of a body of this planet type."""
        if self.is_dwarf:
            return StructureType.DWARF_PLANET
        if self.is_asteroid:
            return StructureType.ASTEROID
        if self == PlanetType.COMET:
            return StructureType.COMET
        return StructureType.PLANET


@dataclass
class StarDetails:
    """Classification of a star."""

    star_type: StarType
    spectral_class: SpectralClass
    luminosity_class: LuminosityClass
    luminosity: float
    population_ii: bool = False

    @property
    def designation(self) -> str:
        """Spectral designation, e.g. "GV"."""
        return f"{self.spectral_class.value}{self.luminosity_class.value}"


@dataclass
class PlanetaryRing:
    """A ring band around a planetoid, radii from its centre (m)."""

    inner_radius: float
    outer_radius: float
    icy: bool


@dataclass
class PlanetoidDetails:
    """Classification of a planet, dwarf planet, asteroid or comet."""

    planet_type: PlanetType
    albedo: float
    rings: List[PlanetaryRing] = field(default_factory=list)
    satellite_ids: List[str] = field(default_factory=list)

    def forget(self, removed: Set[str]) -> None:
        self.satellite_ids = [i for i in self.satellite_ids if i not in removed]


@dataclass
class SystemDetails:
    """Members of a star system."""

    star_ids: List[str] = field(default_factory=list)
    primary_id: Optional[str] = None

    def forget(self, removed: Set[str]) -> None:
        """Drop removed stars; the next remaining star becomes the primary."""
        self.star_ids = [i for i in self.star_ids if i not in removed]
        if self.primary_id in removed:
            self.primary_id = self.star_ids[0] if self.star_ids else None


@dataclass
class FieldDetails:
    """Orbit reference of an asteroid field or Oort cloud."""

    orbited_id: Optional[str] = None

    def forget(self, removed: Set[str]) -> None:
        if self.orbited_id in removed:
            self.orbited_id = None


@dataclass(eq=False)
class CosmicLocation:
    """
    A node of the cosmic hierarchy.

    Attributes
    ----------
    id : str
        Stable identifier, unique within a hierarchy.
    structure_type : StructureType
        Kind of location.
    seed : int
        Seed its properties were derived from.
    material : Material
        Mass, shape, temperature and composition.
    position : np.ndarray
        Position relative to the parent's centre (m).
    velocity : np.ndarray
        Velocity in the parent frame (m/s).
    parent_id : str, optional
        Identifier of the containing location.
    children : list of str
        Identifiers of contained locations, in insertion order.
    absolute_position : list of np.ndarray, optional
        Positions from this node up to the root, innermost first.
    orbit : Orbit, optional
        Current orbit.
    name : str, optional
        Display name.
    details : StarDetails, PlanetoidDetails, SystemDetails or FieldDetails, optional
        Type-specific classification.
    """

    id: str
    structure_type: StructureType
    seed: int
    material: Material
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    parent_id: Optional[str] = None
    children: List[str] = field(default_factory=list)
    absolute_position: Optional[List[np.ndarray]] = None
    orbit: Optional[Orbit] = None
    name: Optional[str] = None
    details: Any = None

    def __post_init__(self):
        self.position = np.array(self.position, dtype=float)
        self.velocity = np.array(self.velocity, dtype=float)

    @property
    def mass(self) -> float:
        return self.material.mass

    @property
    def shape(self):
        return self.material.shape

    @property
    def containing_radius(self) -> float:
        return self.material.containing_radius

    @property
    def volume(self) -> float:
        return self.material.volume

    @property
    def density(self) -> float:
        return self.material.density

    @property
    def temperature(self) -> Optional[float]:
        return self.material.temperature

    @property
    def composition(self):
        return self.material.composition

    def to_record(self) -> Dict[str, Any]:
        """
        Full attribute set as plain Python values.

        Returns
        -------
        dict
            Nested dictionaries, lists, strings and floats only.
        """
        record = {
            "id": self.id,
            "structure_type": self.structure_type.value,
            "name": self.name,
            "seed": self.seed,
            "parent_id": self.parent_id,
            "children": list(self.children),
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "absolute_position": (
                None if self.absolute_position is None
                else [p.tolist() for p in self.absolute_position]
            ),
            "mass": self.material.mass,
            "shape": {
                "type": type(self.material.shape).__name__,
                **{k: v for k, v in vars(self.material.shape).items()},
            },
            "containing_radius": self.material.containing_radius,
            "volume": self.material.volume,
            "density": self.material.density,
            "temperature": self.material.temperature,
            "layers": [
                {
                    "name": layer.name,
                    "proportion": layer.proportion,
                    "components": [(s.value, p) for s, p in layer.components],
                }
                for layer in self.material.layers
            ],
            "orbit": None,
            "details": None,
        }

        if self.orbit is not None:
            record["orbit"] = {
                "orbited_id": self.orbit.orbited_id,
                "orbited_mass": self.orbit.orbited_mass,
                "semi_major_axis": self.orbit.semi_major_axis,
                "eccentricity": self.orbit.eccentricity,
                "inclination": self.orbit.inclination,
                "longitude_of_ascending_node": self.orbit.longitude_of_ascending_node,
                "argument_of_periapsis": self.orbit.argument_of_periapsis,
                "true_anomaly": self.orbit.true_anomaly,
                "period": self.orbit.period,
                "elapsed": self.orbit.elapsed,
            }

        if self.details is not None:
            record["details"] = {
                key: (value.value if isinstance(value, Enum) else value)
                for key, value in vars(self.details).items()
                if key != "rings"
            }
            if isinstance(self.details, PlanetoidDetails):
                record["details"]["rings"] = [vars(ring).copy() for ring in self.details.rings]
                record["details"]["satellite_ids"] = list(self.details.satellite_ids)
            if isinstance(self.details, SystemDetails):
                record["details"]["star_ids"] = list(self.details.star_ids)

        return record

    def __repr__(self) -> str:
        return (
            f"CosmicLocation(id='{self.id}', type={self.structure_type.value}, "
            f"mass={self.material.mass:.4g} kg, radius={self.material.containing_radius:.4g} m)"
        )
