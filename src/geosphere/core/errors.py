"""Exceptions raised by the geodesy core."""

from __future__ import annotations


class InvalidArgumentTypeError(TypeError):
    """An operation expecting a `LatLon` point was given something else."""
