"""Items repository."""
from __future__ import annotations

from typing import Dict

from dungeonbattle.data.repositories.base import RepositoryBase
from dungeonbattle.domain.defs import EffectDef, ItemDef

VALID_EFFECT_KINDS = {"heal_hp", "heal_mp", "heal_full", "revive", "buff"}


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates item definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            context = f"item '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "effect"}, context)
            items[raw_id] = ItemDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                effect=self._parse_effect(data["effect"], context),
                battle_usable=self._require_bool(data.get("battleUsable", True), f"{context} battleUsable"),
                max_stack=self._require_int(data.get("maxStack", 99), f"{context} maxStack"),
                description=self._require_str(data.get("description", ""), f"{context} description"),
            )
        return items

    def _parse_effect(self, raw_effect: object, context: str) -> EffectDef:
        effect_context = f"{context} effect"
        data = self._require_mapping(raw_effect, effect_context)
        self._assert_required(data, {"kind"}, effect_context)
        kind = self._require_str(data["kind"], f"{effect_context} kind")
        stat = data.get("stat")
        duration = data.get("duration")
        return EffectDef(
            kind=kind if kind in VALID_EFFECT_KINDS else "unsupported",
            power=self._require_int(data.get("power", 0), f"{effect_context} power"),
            stat=self._require_str(stat, f"{effect_context} stat") if stat is not None else None,
            duration=self._require_int(duration, f"{effect_context} duration") if duration is not None else None,
        )
