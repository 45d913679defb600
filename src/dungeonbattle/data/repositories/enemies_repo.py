"""Enemies repository."""
from __future__ import annotations

from typing import Dict

from dungeonbattle.data.repositories.base import RepositoryBase
from dungeonbattle.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "baseStats", "growthPerLevel", "baseCost"}, context)

            max_floor = data.get("appearMaxFloor")
            skill_ids = self._require_str_list(data.get("skillIds", ["attack_basic"]), f"{context} skillIds")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                base_stats=self._require_stats(data["baseStats"], f"{context} baseStats"),
                growth_per_level=self._require_stats(data["growthPerLevel"], f"{context} growthPerLevel"),
                base_cost=self._require_int(data["baseCost"], f"{context} baseCost"),
                base_exp=self._require_int(data.get("baseExp", 0), f"{context} baseExp"),
                appear_min_floor=self._require_int(data.get("appearMinFloor", 1), f"{context} appearMinFloor"),
                appear_max_floor=(
                    self._require_int(max_floor, f"{context} appearMaxFloor") if max_floor is not None else None
                ),
                is_boss=self._require_bool(data.get("isBoss", False), f"{context} isBoss"),
                skill_ids=tuple(skill_ids) or ("attack_basic",),
            )
        return enemies
