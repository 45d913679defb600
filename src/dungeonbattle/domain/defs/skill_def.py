"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from dungeonbattle.core.types import PowerType, SkillType, TargetType


@dataclass(slots=True)
class SkillConditionDef:
    """A condition a skill may inflict, rolled against ``chance``."""

    condition_id: str
    chance: float = 1.0


@dataclass(slots=True)
class SkillDef:
    """Describes an active or passive combat skill."""

    id: str
    name: str
    skill_type: SkillType
    target_type: TargetType = "enemy"
    power: int = 100
    power_type: PowerType = "physical"
    cost: int = 0
    accuracy: float = 1.0
    crit_rate: float = 0.0
    crit_mag: float = 1.5
    conditions: Tuple[SkillConditionDef, ...] = ()
    unlock_level: int = 1
    prerequisite_ids: Tuple[str, ...] = ()
    is_passive: bool = False
    revive: bool = False
    description: str = ""
