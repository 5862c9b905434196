"""Salvo: a human vs. computer grid-combat game engine."""

__version__ = "0.1.0"
