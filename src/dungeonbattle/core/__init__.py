"""Core helpers shared by every layer."""

from .rng import RNG

__all__ = ["RNG"]
