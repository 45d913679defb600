"""Item definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from .effect_def import EffectDef


@dataclass(slots=True)
class ItemDef:
    """Consumable or usable item definition."""

    id: str
    name: str
    effect: EffectDef
    battle_usable: bool = True
    max_stack: int = 99
    description: str = ""
