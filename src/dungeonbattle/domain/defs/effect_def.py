"""Item effect primitives."""
from __future__ import annotations

from dataclasses import dataclass

from dungeonbattle.core.types import ItemEffectKind


@dataclass(slots=True)
class EffectDef:
    """Single item effect (e.g., heal 50 HP, +20% atk for 3 turns)."""

    kind: ItemEffectKind
    power: int = 0
    stat: str | None = None
    duration: int | None = None
