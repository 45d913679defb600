"""Runtime entity exports."""

from .stats import STAT_KEYS, Stats, resolve_stat_name

__all__ = [
    "STAT_KEYS",
    "Stats",
    "resolve_stat_name",
]
