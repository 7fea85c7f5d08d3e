"""Concept Social API: a social backend composed of independent concepts."""

__version__ = "1.0.0"
