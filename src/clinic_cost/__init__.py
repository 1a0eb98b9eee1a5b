"""Clinic visit cost calculator — cumulative cost vs. visit interval."""

__version__ = "1.0.0"
