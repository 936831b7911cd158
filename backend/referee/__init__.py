"""Referee — multi-criteria decision engine for technical comparisons."""

__version__ = "1.0.0"
