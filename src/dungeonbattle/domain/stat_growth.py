"""Level-driven stat growth shared by party members and enemies."""
from __future__ import annotations

import math

from dungeonbattle.domain.entities import Stats

# Combat stats grow linearly per level; HP/MP follow an accelerating curve.
HP_CURVE_LINEAR = 0.2
HP_CURVE_QUADRATIC = 0.08
POWER_CURVE_LINEAR = 0.1
POWER_CURVE_QUADRATIC = 0.05


def level_multiplier(level: int) -> float:
    """Damage/healing multiplier for an actor of the given level."""
    return 1 + level * POWER_CURVE_LINEAR + level * level * POWER_CURVE_QUADRATIC


def hp_level_multiplier(level: int) -> float:
    return 1 + level * HP_CURVE_LINEAR + level * level * HP_CURVE_QUADRATIC


def scale_stats(base: Stats, growth: Stats | None, level: int) -> Stats:
    """Apply per-level growth and the HP/MP curve to a base stat block."""
    lv = max(1, level)
    steps = lv - 1
    growth = growth or Stats()
    hp_lvl = hp_level_multiplier(lv)
    return Stats(
        max_hp=math.floor((base.max_hp + steps * growth.max_hp) * hp_lvl),
        max_mp=math.floor((base.max_mp + steps * growth.max_mp) * hp_lvl),
        atk=base.atk + steps * growth.atk,
        matk=base.matk + steps * growth.matk,
        defense=base.defense + steps * growth.defense,
        speed=base.speed + steps * growth.speed,
    )
