"""Playable character definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from dungeonbattle.domain.entities import Stats


@dataclass(slots=True)
class CharacterDef:
    """Describes a recruitable party member and its growth curve."""

    id: str
    name: str
    base_stats: Stats
    growth_per_level: Stats
    initial_skill_ids: Tuple[str, ...] = ()
    learnable_skill_ids: Tuple[str, ...] = ()
    skill_learn_levels: Dict[str, int] = field(default_factory=dict)
    description: str = ""
