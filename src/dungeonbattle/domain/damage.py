"""Pure damage, healing and effective-stat formulas."""
from __future__ import annotations

import math
from dataclasses import dataclass

from dungeonbattle.core.rng import RNG
from dungeonbattle.domain.battle_models import Combatant
from dungeonbattle.domain.defs import SkillDef
from dungeonbattle.domain.entities import Stats, resolve_stat_name
from dungeonbattle.domain.stat_growth import level_multiplier

DAMAGE_VARIANCE = (0.9, 1.1)
HEAL_VARIANCE = (0.95, 1.05)
DEFENSE_WEIGHT = 0.5
GUARD_FACTOR = 0.5


@dataclass(frozen=True, slots=True)
class DamageResult:
    damage: int
    is_hit: bool = True
    is_critical: bool = False


def effective_stats(combatant: Combatant) -> Stats:
    """Return base stats adjusted by buff/debuff conditions, applied in list order."""
    stats = combatant.base.copy()
    for condition in combatant.conditions:
        if condition.kind not in ("buff", "debuff"):
            continue
        attr = resolve_stat_name(condition.stat)
        if attr is None:
            continue
        current = getattr(stats, attr)
        if condition.value_type == "multiply":
            setattr(stats, attr, math.floor(current * (1 + condition.value)))
        else:
            setattr(stats, attr, current + condition.value)
    # Negative stats would invert the defense curve.
    for attr in ("max_hp", "max_mp", "atk", "matk", "defense", "speed"):
        setattr(stats, attr, max(0, getattr(stats, attr)))
    return stats


def diminishing_base(attack_stat: float, defense_stat: float) -> float:
    """ATK^2 / (ATK + DEF/2): defense reduces damage but never nullifies it."""
    denominator = attack_stat + defense_stat * DEFENSE_WEIGHT
    if denominator <= 0:
        return 0.0
    return (attack_stat * attack_stat) / denominator


def apply_guard(damage: int, guard: bool) -> int:
    if guard:
        return math.floor(damage * GUARD_FACTOR)
    return damage


def consume_guard(defender: Combatant, damage: int) -> int:
    """Halve one incoming hit if the defender is guarding; the guard is spent."""
    if not defender.guard:
        return damage
    defender.guard = False
    return apply_guard(damage, True)


def attack_damage(attacker: Combatant, defender: Combatant, rng: RNG) -> int:
    """Basic attack damage; basic attacks always hit."""
    atk_stats = effective_stats(attacker)
    def_stats = effective_stats(defender)
    base = diminishing_base(atk_stats.atk, def_stats.defense)
    variance = rng.uniform(*DAMAGE_VARIANCE)
    damage = math.floor(max(1, base) * level_multiplier(attacker.level) * variance)
    return max(0, consume_guard(defender, damage))


def skill_damage(attacker: Combatant, defender: Combatant, skill: SkillDef, rng: RNG) -> DamageResult:
    """Skill damage with accuracy and critical rolls.

    Draw order is variance, accuracy, then crit (only on a hit).
    """
    atk_stats = effective_stats(attacker)
    def_stats = effective_stats(defender)
    stat = atk_stats.matk if skill.power_type == "magical" else atk_stats.atk
    scaled = stat * skill.power / 100
    base = diminishing_base(scaled, def_stats.defense)
    variance = rng.uniform(*DAMAGE_VARIANCE)
    damage = math.floor(max(1, base) * level_multiplier(attacker.level) * variance)

    if rng.random() > skill.accuracy:
        return DamageResult(damage=0, is_hit=False, is_critical=False)

    is_critical = rng.random() < skill.crit_rate
    if is_critical:
        damage = math.floor(damage * skill.crit_mag)
    return DamageResult(damage=max(0, consume_guard(defender, damage)), is_hit=True, is_critical=is_critical)


def healing(caster: Combatant, power: float, rng: RNG) -> int:
    value = power * level_multiplier(caster.level) * rng.uniform(*HEAL_VARIANCE)
    return max(0, math.floor(value))
