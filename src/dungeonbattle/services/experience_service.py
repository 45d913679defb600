"""Experience rewards, stock allocation and battle-delta application."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from dungeonbattle.data.master_data import MasterData
from dungeonbattle.domain.battle_models import BattleDelta, Combatant
from dungeonbattle.domain.progress import (
    CharacterProgress,
    ExpAllocation,
    PlayerProgress,
    SkillProgress,
)
from dungeonbattle.services.errors import AllocationError

logger = logging.getLogger(__name__)

CHARACTER_LEVEL_CAP = 99
SKILL_LEVEL_CAP = 10
EXP_PER_LEVEL_STEP = 0.2


def experience_reward(enemies: Iterable[Combatant]) -> int:
    """Experience for an encounter; each enemy's base_exp scales with its level."""
    total = 0.0
    for enemy in enemies:
        level = max(1, enemy.level)
        total += enemy.base_exp * (1 + EXP_PER_LEVEL_STEP * (level - 1))
    return math.floor(total)


def character_next_exp(level: int) -> int:
    return 50 * level * level


def skill_next_exp(level: int) -> int:
    return 3 * level


@dataclass(frozen=True, slots=True)
class LevelChange:
    kind: str
    id: str
    level_before: int
    level_after: int
    exp: int


@dataclass(frozen=True, slots=True)
class AllocationResult:
    spent: int
    exp_stock: int
    changes: List[LevelChange] = field(default_factory=list)


class ExperienceService:
    """Moves experience from the shared stock into characters and skills."""

    def __init__(self, *, master: MasterData) -> None:
        self._master = master

    def allocate_exp(self, progress: PlayerProgress, allocations: Sequence[ExpAllocation]) -> AllocationResult:
        """Apply every allocation or none of them.

        Raises AllocationError before touching ``progress`` when any entry is invalid
        or the combined amount exceeds the stock.
        """
        if not allocations:
            raise AllocationError("No allocations given.")
        total = 0
        for allocation in allocations:
            if isinstance(allocation.amount, bool) or not isinstance(allocation.amount, int) or allocation.amount <= 0:
                raise AllocationError(f"Allocation amount for '{allocation.id}' must be a positive integer.")
            if allocation.kind == "character":
                if allocation.id not in progress.characters and self._master.character(allocation.id) is None:
                    raise AllocationError(f"Unknown character '{allocation.id}'.")
            elif allocation.kind == "skill":
                if allocation.id not in progress.skills and self._master.skill(allocation.id) is None:
                    raise AllocationError(f"Unknown skill '{allocation.id}'.")
            else:
                raise AllocationError(f"Unknown allocation kind '{allocation.kind}'.")
            total += allocation.amount
        if total > progress.exp_stock:
            raise AllocationError(f"Not enough experience: requested {total}, available {progress.exp_stock}.")

        changes: List[LevelChange] = []
        for allocation in allocations:
            if allocation.kind == "character":
                changes.append(self._grant_character_exp(progress, allocation.id, allocation.amount))
            else:
                changes.append(self._grant_skill_exp(progress, allocation.id, allocation.amount))
        progress.exp_stock -= total
        return AllocationResult(spent=total, exp_stock=progress.exp_stock, changes=changes)

    def apply_battle_delta(self, progress: PlayerProgress, delta: BattleDelta) -> None:
        """Write a battle's delta back into the persisted snapshot."""
        progress.items = dict(delta.items)
        for status in delta.party_status:
            character = progress.characters.setdefault(status.id, CharacterProgress())
            character.hp = status.current_hp
            character.mp = status.current_mp
            if status.level:
                character.level = status.level
            if self._master.character(status.id) is None:
                logger.warning("Party status for unknown character '%s'", status.id)
        if delta.exp_stock_add:
            progress.exp_stock += delta.exp_stock_add
        progress.current_run_max_damage = max(progress.current_run_max_damage, delta.max_damage)

    @staticmethod
    def _grant_character_exp(progress: PlayerProgress, character_id: str, amount: int) -> LevelChange:
        character = progress.characters.setdefault(character_id, CharacterProgress())
        before = character.level
        level, exp = _level_up(character.level, character.exp + amount, character_next_exp, CHARACTER_LEVEL_CAP)
        character.level = level
        character.exp = exp
        return LevelChange(kind="character", id=character_id, level_before=before, level_after=level, exp=exp)

    @staticmethod
    def _grant_skill_exp(progress: PlayerProgress, skill_id: str, amount: int) -> LevelChange:
        skill = progress.skills.setdefault(skill_id, SkillProgress())
        before = skill.level
        level, exp = _level_up(skill.level, skill.exp + amount, skill_next_exp, SKILL_LEVEL_CAP)
        skill.level = level
        skill.exp = exp
        return LevelChange(kind="skill", id=skill_id, level_before=before, level_after=level, exp=exp)


def _level_up(level: int, exp: int, next_exp, cap: int) -> tuple[int, int]:
    while level < cap and exp >= next_exp(level):
        exp -= next_exp(level)
        level += 1
    return level, exp
