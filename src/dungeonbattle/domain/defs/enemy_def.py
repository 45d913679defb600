"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from dungeonbattle.domain.entities import Stats


@dataclass(slots=True)
class EnemyDef:
    """Enemy species with its spawn window and encounter cost."""

    id: str
    name: str
    base_stats: Stats
    growth_per_level: Stats
    base_cost: int
    base_exp: int = 0
    appear_min_floor: int = 1
    appear_max_floor: int | None = None
    is_boss: bool = False
    skill_ids: Tuple[str, ...] = ("attack_basic",)
