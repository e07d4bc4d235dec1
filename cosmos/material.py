#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Material

Physical description of a location: mass, shape, temperature and a layered
composition. Bulk density is derived from mass and shape volume, so
``volume == mass / density`` always holds.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidConfigurationError
from .shapes import Shape

class Substance(Enum):
    """Substances that make up generated bodies."""

    HYDROGEN = "hydrogen"
    HELIUM = "helium"
    HEAVY_ELEMENTS = "heavy_elements"
    METALLIC_HYDROGEN = "metallic_hydrogen"
    WATER_ICE = "water_ice"
    WATER = "water"
    AMMONIA = "ammonia"
    METHANE = "methane"
    CARBON_DIOXIDE = "carbon_dioxide"
    ROCK = "rock"
    MAGMA = "magma"
    CLAY = "clay"
    DUST = "dust"
    IRON = "iron"
    IRON_NICKEL = "iron_nickel"
    CARBON = "carbon"
    DIAMOND = "diamond"
    GOLD = "gold"
    PLATINUM = "platinum"
    ELECTRON_DEGENERATE_MATTER = "electron_degenerate_matter"
    NEUTRON_DEGENERATE_MATTER = "neutron_degenerate_matter"
    FUZZBALL = "fuzzball"
    INTERPLANETARY_MEDIUM = "interplanetary_medium"
    INTERSTELLAR_MEDIUM = "interstellar_medium"
    INTRACLUSTER_MEDIUM = "intracluster_medium"
    WARM_HOT_INTERGALACTIC_MEDIUM = "warm_hot_intergalactic_medium"
    MOLECULAR_CLOUD = "molecular_cloud"
    IONIZED_CLOUD = "ionized_cloud"


def normalize_components(
    components: Sequence[Tuple[Substance, float]],
) -> List[Tuple[Substance, float]]:
    """
    Scale a substance list so its proportions sum to one.

    Entries with non-positive proportion are dropped and repeated
    substances are merged, keeping first-seen order.

    Parameters
    ----------
    components : sequence of (Substance, float)
        Unnormalised substance proportions.

    Returns
    -------
    list of (Substance, float)
        Normalised substance proportions.
    """
    merged: Dict[Substance, float] = {}
    for substance, proportion in components:
        if proportion > 0:
            merged[substance] = merged.get(substance, 0.0) + proportion

    total = sum(merged.values())
    if total <= 0:
        raise InvalidConfigurationError("A composition needs at least one positive proportion")
    return [(substance, proportion / total) for substance, proportion in merged.items()]


@dataclass
class Layer:
    """
    One concentric layer of a body.

    Attributes
    ----------
    name : str
        Layer name (e.g. "core", "mantle", "crust").
    proportion : float
        Fraction of the body's mass held in this layer.
    components : list of (Substance, float)
        Substances in this layer; normalised on construction.
    """

    name: str
    proportion: float
    components: List[Tuple[Substance, float]]

    def __post_init__(self):
        if self.proportion < 0:
            raise InvalidConfigurationError(f"Layer '{self.name}' has a negative proportion")
        self.components = normalize_components(self.components)


@dataclass
class Material:
    """
    Physical properties of a location.

    Attributes
    ----------
    mass : float
        Mass (kg).
    shape : Shape
        Extent of the location, centred on its position.
    layers : list of Layer
        Layered composition, innermost first. Layer proportions are
        normalised on construction.
    temperature : float, optional
        Representative temperature (K).
    """

    mass: float
    shape: Shape
    layers: List[Layer] = field(default_factory=list)
    temperature: Optional[float] = None

    def __post_init__(self):
        if self.mass < 0 or math.isnan(self.mass):
            raise InvalidConfigurationError(f"Mass must be non-negative, got {self.mass}")

        layers = [layer for layer in self.layers if layer.proportion > 0]
        total = sum(layer.proportion for layer in layers)
        if layers and total > 0:
            for layer in layers:
                layer.proportion /= total
        self.layers = layers

    @classmethod
    def homogeneous(
        cls,
        mass: float,
        shape: Shape,
        components: Sequence[Tuple[Substance, float]],
        temperature: Optional[float] = None,
    ) -> "Material":
        """Material made of a single, uniform layer."""
        return cls(
            mass=mass,
            shape=shape,
            layers=[Layer("bulk", 1.0, list(components))],
            temperature=temperature,
        )

    @property
    def volume(self) -> float:
        """Shape volume (m³)."""
        return self.shape.volume

    @property
    def containing_radius(self) -> float:
        """Radius of the containing sphere (m)."""
        return self.shape.containing_radius

    @property
    def density(self) -> float:
        """Bulk density (kg/m³)."""
        volume = self.shape.volume
        if volume <= 0:
            return math.inf if self.mass > 0 else 0.0
        return self.mass / volume

    @property
    def composition(self) -> List[Tuple[Substance, float]]:
        """Whole-body (substance, proportion) pairs, merged across layers."""
        if not self.layers:
            return []
        weighted = [
            (substance, layer.proportion * proportion)
            for layer in self.layers
            for substance, proportion in layer.components
        ]
        return normalize_components(weighted)
