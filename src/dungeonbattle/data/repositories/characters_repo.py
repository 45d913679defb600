"""Characters repository."""
from __future__ import annotations

from typing import Dict

from dungeonbattle.data.repositories.base import RepositoryBase
from dungeonbattle.domain.defs import CharacterDef


class CharactersRepository(RepositoryBase[CharacterDef]):
    """Loads playable character definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("characters.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, CharacterDef]:
        characters: Dict[str, CharacterDef] = {}
        for raw_id, payload in raw.items():
            context = f"character '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "baseStats", "growthPerLevel"}, context)

            learn_levels_raw = self._require_mapping(data.get("skillLearnLevels", {}), f"{context} skillLearnLevels")
            learn_levels = {
                skill_id: self._require_int(level, f"{context} skillLearnLevels.{skill_id}")
                for skill_id, level in learn_levels_raw.items()
            }
            characters[raw_id] = CharacterDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                base_stats=self._require_stats(data["baseStats"], f"{context} baseStats"),
                growth_per_level=self._require_stats(data["growthPerLevel"], f"{context} growthPerLevel"),
                initial_skill_ids=tuple(
                    self._require_str_list(data.get("initialSkillIds", []), f"{context} initialSkillIds")
                ),
                learnable_skill_ids=tuple(
                    self._require_str_list(data.get("learnableSkillIds", []), f"{context} learnableSkillIds")
                ),
                skill_learn_levels=learn_levels,
                description=self._require_str(data.get("description", ""), f"{context} description"),
            )
        return characters
