"""Satellite orbit usage per launch year, rendered from the UCS Satellite Database."""

__version__ = "0.1.0"
