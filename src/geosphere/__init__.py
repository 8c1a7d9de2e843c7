"""Spherical-earth and rhumb-line geodesy on latitude/longitude points."""

__version__ = "0.1.0"
