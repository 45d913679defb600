"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping

# Master-data stat keys mapped onto Stats attribute names.
STAT_KEYS: dict[str, str] = {
    "maxHp": "max_hp",
    "maxMp": "max_mp",
    "atk": "atk",
    "matk": "matk",
    "def": "defense",
    "speed": "speed",
}


@dataclass(slots=True)
class Stats:
    """Stores basic combat stats."""

    max_hp: int = 0
    max_mp: int = 0
    atk: int = 0
    matk: int = 0
    defense: int = 0
    speed: int = 0

    def copy(self) -> "Stats":
        return Stats(
            max_hp=self.max_hp,
            max_mp=self.max_mp,
            atk=self.atk,
            matk=self.matk,
            defense=self.defense,
            speed=self.speed,
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> "Stats":
        """Build stats from a master-data mapping; missing keys default to 0."""
        stats = cls()
        if not raw:
            return stats
        for key, attr in STAT_KEYS.items():
            value = raw.get(key, 0)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                setattr(stats, attr, value)
        return stats


def resolve_stat_name(stat: str | None) -> str | None:
    """Return the Stats attribute for a master-data or attribute stat name."""
    if stat is None:
        return None
    if stat in STAT_KEYS:
        return STAT_KEYS[stat]
    if stat in {f.name for f in fields(Stats)}:
        return stat
    return None
