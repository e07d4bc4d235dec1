#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error conditions raised by the generator and orbit engine.

Placement exhaustion during population is not represented here: it is
counted and logged, and the affected unit is skipped.
"""


class CosmosError(Exception):
    """Base class for all named generation conditions."""


class InvalidConfigurationError(CosmosError, ValueError):
    """
    A requested orbit or body is physically nonsensical given its inputs.

    Examples are a zero-mass orbited body, a negative density, or an
    eccentricity outside [0, 1).
    """


class MissingOrbitalContextError(CosmosError, RuntimeError):
    """
    A constraint helper needs orbital context that does not exist.

    Raised, for instance, when a Stern-Levison mass is requested for a body
    that has neither a parent nor an assigned orbit.
    """


class DisjointHierarchyError(CosmosError, ValueError):
    """A distance or frame query spans nodes in unrelated trees."""
