#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Generation Configuration
"""

from dataclasses import dataclass
from typing import Optional

# Temperature of the cosmic microwave background (K)
UNIVERSE_AMBIENT_TEMPERATURE = 2.73


@dataclass
class GenerationConfig:
    """
    Configuration for a cosmos.

    Attributes
    ----------
    seed : int, optional
        Seed of the top-level random source. Random if None.
    max_children : int, optional
        Upper bound on the number of children placed by one population
        pass. None = unlimited.
    max_placement_attempts : int
        Candidate positions tried per child before it is skipped.
    ambient_temperature : float
        Temperature of empty space (K).
    allow_binary_stars : bool
        Whether star systems may receive companion stars.
    generate_satellites : bool
        Whether planets receive natural satellites.
    max_satellites : int
        Upper bound on natural satellites per planet.
    """

    seed: Optional[int] = None
    max_children: Optional[int] = 25
    max_placement_attempts: int = 100
    ambient_temperature: float = UNIVERSE_AMBIENT_TEMPERATURE
    allow_binary_stars: bool = True
    generate_satellites: bool = True
    max_satellites: int = 5

    def __post_init__(self):
        if self.max_children is not None and self.max_children < 0:
            raise ValueError("max_children must be non-negative")
        if self.max_placement_attempts < 1:
            raise ValueError("max_placement_attempts must be at least 1")
        if self.max_satellites < 0:
            raise ValueError("max_satellites must be non-negative")
