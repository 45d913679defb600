"""Shared type aliases for the core and domain layers."""
from typing import Literal

Side = Literal["party", "enemies"]
ConditionKind = Literal["dot", "buff", "debuff", "stun", "silence", "blind", "unsupported"]
ValueType = Literal["add", "multiply"]
SkillType = Literal["attack", "heal", "buff", "debuff", "unsupported"]
TargetType = Literal["self", "ally", "enemy", "any"]
PowerType = Literal["physical", "magical"]
ItemEffectKind = Literal["heal_hp", "heal_mp", "heal_full", "revive", "buff", "unsupported"]

__all__ = [
    "ConditionKind",
    "ItemEffectKind",
    "PowerType",
    "Side",
    "SkillType",
    "TargetType",
    "ValueType",
]
