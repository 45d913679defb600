"""Per-turn processing of timed status conditions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from dungeonbattle.domain.battle_models import Combatant


@dataclass(frozen=True, slots=True)
class TurnStart:
    """Outcome of start-of-turn processing."""

    stunned: bool
    dot_damage: int = 0
    regenerated: int = 0


def start_of_turn(combatant: Combatant, log: List[str]) -> TurnStart:
    """Apply DOT ticks and regeneration, then report whether the combatant is stunned."""
    dot_total = 0
    for condition in combatant.conditions:
        if condition.kind != "dot":
            continue
        tick = max(0, int(condition.value))
        combatant.current_hp = max(0, combatant.current_hp - tick)
        dot_total += tick
        log.append(f"{combatant.name} takes {tick} damage from {condition.id}")

    # A negative hp "buff" is regeneration.
    regenerated = 0
    for condition in combatant.conditions:
        if condition.kind != "buff" or condition.stat != "hp" or condition.value >= 0:
            continue
        before = combatant.current_hp
        combatant.current_hp = min(combatant.base.max_hp, combatant.current_hp + int(abs(condition.value)))
        healed = combatant.current_hp - before
        if healed > 0:
            regenerated += healed
            log.append(f"{combatant.name} regenerates {healed} HP")

    return TurnStart(
        stunned=combatant.has_condition("stun"),
        dot_damage=dot_total,
        regenerated=regenerated,
    )


def end_of_turn(combatant: Combatant) -> None:
    for condition in combatant.conditions:
        condition.duration -= 1
    combatant.conditions = [condition for condition in combatant.conditions if condition.duration > 0]
    combatant.guard = False
