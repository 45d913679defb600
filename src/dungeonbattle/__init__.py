"""Turn-based dungeon battle engine."""

__version__ = "0.1.0"
