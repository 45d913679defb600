"""Status condition definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from dungeonbattle.core.types import ConditionKind, ValueType


@dataclass(slots=True)
class ConditionDef:
    """Timed modifier template (poison, atk up, stun, ...)."""

    id: str
    name: str
    kind: ConditionKind
    duration: int
    stat: str | None = None
    value: float = 0
    value_type: ValueType = "add"
