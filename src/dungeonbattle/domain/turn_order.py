"""Initiative-based turn ordering."""
from __future__ import annotations

from typing import List, Sequence

from dungeonbattle.core.rng import RNG
from dungeonbattle.domain.battle_models import Combatant


def initiative(combatant: Combatant) -> float:
    return combatant.base.speed * combatant.level


def build_turn_order(actors: Sequence[Combatant], rng: RNG) -> List[int]:
    """Return actor indices by initiative, then raw speed, then a per-build random draw."""
    keyed = [
        (idx, initiative(actor), actor.base.speed, rng.random())
        for idx, actor in enumerate(actors)
    ]
    keyed.sort(key=lambda entry: (-entry[1], -entry[2], -entry[3]))
    return [entry[0] for entry in keyed]
