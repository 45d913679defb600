"""In-memory bundle of master definitions consumed by the battle engine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from dungeonbattle.data.errors import DataReferenceError
from dungeonbattle.data.repositories import (
    CharactersRepository,
    ConditionsRepository,
    EnemiesRepository,
    ItemsRepository,
    SkillsRepository,
)
from dungeonbattle.domain.defs import CharacterDef, ConditionDef, EnemyDef, ItemDef, SkillDef

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MasterData:
    """Master records keyed by id.

    Lookups return None for unknown ids; callers log and skip the affected effect.
    """

    characters: Dict[str, CharacterDef] = field(default_factory=dict)
    skills: Dict[str, SkillDef] = field(default_factory=dict)
    items: Dict[str, ItemDef] = field(default_factory=dict)
    conditions: Dict[str, ConditionDef] = field(default_factory=dict)
    enemies: Dict[str, EnemyDef] = field(default_factory=dict)

    @classmethod
    def load(cls, base_path: Path | str | None = None) -> "MasterData":
        """Load every definition file from ``base_path`` (defaults to data/definitions)."""
        master = cls(
            characters=CharactersRepository(base_path).as_dict(),
            skills=SkillsRepository(base_path).as_dict(),
            items=ItemsRepository(base_path).as_dict(),
            conditions=ConditionsRepository(base_path).as_dict(),
            enemies=EnemiesRepository(base_path).as_dict(),
        )
        logger.info(
            "Loaded master data: %d characters, %d skills, %d items, %d conditions, %d enemies",
            len(master.characters),
            len(master.skills),
            len(master.items),
            len(master.conditions),
            len(master.enemies),
        )
        return master

    def character(self, character_id: str) -> CharacterDef | None:
        return self.characters.get(character_id)

    def skill(self, skill_id: str) -> SkillDef | None:
        return self.skills.get(skill_id)

    def item(self, item_id: str) -> ItemDef | None:
        return self.items.get(item_id)

    def condition(self, condition_id: str) -> ConditionDef | None:
        return self.conditions.get(condition_id)

    def enemy_table(self) -> List[EnemyDef]:
        """Enemy definitions in file order."""
        return list(self.enemies.values())

    def validate_references(self) -> None:
        """Raise DataReferenceError when a record links to a missing definition."""
        for character in self.characters.values():
            for skill_id in character.initial_skill_ids + character.learnable_skill_ids:
                if skill_id not in self.skills:
                    raise DataReferenceError(f"Character '{character.id}' references missing skill '{skill_id}'.")
        for skill in self.skills.values():
            for entry in skill.conditions:
                if entry.condition_id not in self.conditions:
                    raise DataReferenceError(
                        f"Skill '{skill.id}' references missing condition '{entry.condition_id}'."
                    )
            for prerequisite_id in skill.prerequisite_ids:
                if prerequisite_id not in self.skills:
                    raise DataReferenceError(
                        f"Skill '{skill.id}' references missing prerequisite '{prerequisite_id}'."
                    )
        for enemy in self.enemies.values():
            for skill_id in enemy.skill_ids:
                if skill_id not in self.skills:
                    raise DataReferenceError(f"Enemy '{enemy.id}' references missing skill '{skill_id}'.")
        for name, table in (("skills", self.skills), ("items", self.items), ("enemies", self.enemies)):
            if not table:
                logger.warning("Master data has no %s", name)
