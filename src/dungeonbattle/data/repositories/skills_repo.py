"""Skills repository."""
from __future__ import annotations

from typing import Dict, Tuple

from dungeonbattle.data.errors import DataValidationError
from dungeonbattle.data.repositories.base import RepositoryBase
from dungeonbattle.domain.defs import SkillConditionDef, SkillDef

VALID_SKILL_TYPES = {"attack", "heal", "buff", "debuff"}
VALID_TARGET_TYPES = {"self", "ally", "enemy", "any"}
VALID_POWER_TYPES = {"physical", "magical"}


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads active and passive skills."""

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            context = f"skill '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "skillType"}, context)

            # Unknown skill types load as "unsupported" so a newer master file never aborts a battle.
            skill_type = self._require_str(data["skillType"], f"{context} skillType")
            target_type = self._require_str(data.get("targetType", "enemy"), f"{context} targetType")
            if target_type not in VALID_TARGET_TYPES:
                raise DataValidationError(f"{context} targetType must be one of {sorted(VALID_TARGET_TYPES)}.")
            power_type = self._require_str(data.get("powerType", "physical"), f"{context} powerType")
            if power_type not in VALID_POWER_TYPES:
                raise DataValidationError(f"{context} powerType must be one of {sorted(VALID_POWER_TYPES)}.")

            skills[raw_id] = SkillDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                skill_type=skill_type if skill_type in VALID_SKILL_TYPES else "unsupported",
                target_type=target_type,
                power=self._require_int(data.get("power", 100), f"{context} power"),
                power_type=power_type,
                cost=self._require_int(data.get("cost", 0), f"{context} cost"),
                accuracy=self._require_number(data.get("accuracy", 1.0), f"{context} accuracy"),
                crit_rate=self._require_number(data.get("critRate", 0.0), f"{context} critRate"),
                crit_mag=self._require_number(data.get("critMag", 1.5), f"{context} critMag"),
                conditions=self._parse_conditions(data.get("conditions", []), context),
                unlock_level=self._require_int(data.get("unlockLevel", 1), f"{context} unlockLevel"),
                prerequisite_ids=tuple(
                    self._require_str_list(data.get("prerequisiteIds", []), f"{context} prerequisiteIds")
                ),
                is_passive=self._require_bool(data.get("isPassive", False), f"{context} isPassive"),
                revive=self._require_bool(data.get("revive", raw_id == "revive"), f"{context} revive"),
                description=self._require_str(data.get("description", ""), f"{context} description"),
            )
        return skills

    def _parse_conditions(self, raw_conditions: object, context: str) -> Tuple[SkillConditionDef, ...]:
        if not isinstance(raw_conditions, list):
            raise DataValidationError(f"{context} conditions must be a list.")
        conditions = []
        for index, entry in enumerate(raw_conditions):
            entry_context = f"{context} conditions[{index}]"
            data = self._require_mapping(entry, entry_context)
            self._assert_required(data, {"conditionId"}, entry_context)
            conditions.append(
                SkillConditionDef(
                    condition_id=self._require_str(data["conditionId"], f"{entry_context} conditionId"),
                    chance=self._require_number(data.get("chance", 1.0), f"{entry_context} chance"),
                )
            )
        return tuple(conditions)
