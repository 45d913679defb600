import math

from dungeonbattle.domain.battle_models import ConditionInstance
from dungeonbattle.domain.damage import attack_damage, effective_stats, healing, skill_damage
from dungeonbattle.domain.stat_growth import level_multiplier

from tests.helpers.builders import make_combatant, make_skill
from tests.helpers.scripted_rng import ScriptedRNG


def _variance(value: float) -> float:
    return ScriptedRNG([value]).uniform(0.9, 1.1)


def test_attack_damage_level_one_against_zero_defense() -> None:
    attacker = make_combatant("attacker", atk=10, level=1)
    defender = make_combatant("defender", is_enemy=True, defense=0, level=1)

    damage = attack_damage(attacker, defender, ScriptedRNG([0.5]))

    expected = math.floor(max(1, 100 / 10) * level_multiplier(1) * _variance(0.5))
    assert damage == expected
    assert damage == 11


def test_guard_halves_one_attack_then_is_spent() -> None:
    attacker = make_combatant("attacker", atk=10)
    defender = make_combatant("defender", is_enemy=True)
    defender.guard = True

    damage = attack_damage(attacker, defender, ScriptedRNG([0.5]))

    assert damage == math.floor(11 / 2)
    assert defender.guard is False
    assert attack_damage(attacker, defender, ScriptedRNG([0.5])) == 11


def test_defense_reduces_but_never_nullifies_damage() -> None:
    attacker = make_combatant("attacker", atk=10)
    soft = make_combatant("soft", is_enemy=True, defense=0)
    hard = make_combatant("hard", is_enemy=True, defense=500)

    soft_damage = attack_damage(attacker, soft, ScriptedRNG([0.5]))
    hard_damage = attack_damage(attacker, hard, ScriptedRNG([0.5]))

    assert 0 < hard_damage < soft_damage


def test_zero_attack_still_deals_minimum_base() -> None:
    attacker = make_combatant("attacker", atk=0)
    defender = make_combatant("defender", is_enemy=True, defense=0)

    assert attack_damage(attacker, defender, ScriptedRNG([0.5])) == math.floor(1 * level_multiplier(1) * _variance(0.5))


def test_effective_stats_compound_in_list_order() -> None:
    combatant = make_combatant(atk=10, defense=10)
    combatant.conditions = [
        ConditionInstance(id="up1", kind="buff", duration=2, stat="atk", value=0.5, value_type="multiply"),
        ConditionInstance(id="up2", kind="buff", duration=2, stat="atk", value=0.5, value_type="multiply"),
        ConditionInstance(id="flat", kind="buff", duration=2, stat="atk", value=3, value_type="add"),
        ConditionInstance(id="down", kind="debuff", duration=2, stat="def", value=-0.5, value_type="multiply"),
        ConditionInstance(id="poison", kind="dot", duration=2, stat="atk", value=100),
    ]

    stats = effective_stats(combatant)

    assert stats.atk == 25
    assert stats.defense == 5
    assert combatant.base.atk == 10


def test_skill_damage_forced_miss() -> None:
    attacker = make_combatant("attacker", atk=20)
    defender = make_combatant("defender", is_enemy=True)
    skill = make_skill("slash", accuracy=0.9, crit_rate=1.0)

    result = skill_damage(attacker, defender, skill, ScriptedRNG([0.5, 0.95]))

    assert result.damage == 0
    assert result.is_hit is False
    assert result.is_critical is False


def test_skill_damage_critical_hit_uses_crit_magnitude() -> None:
    attacker = make_combatant("attacker", atk=20)
    defender = make_combatant("defender", is_enemy=True)
    skill = make_skill("slash", power=150, crit_rate=0.1, crit_mag=2.0)

    normal = skill_damage(attacker, defender, skill, ScriptedRNG([0.5, 0.0, 0.5]))
    critical = skill_damage(attacker, defender, skill, ScriptedRNG([0.5, 0.0, 0.05]))

    assert normal.is_hit and not normal.is_critical
    assert critical.is_critical
    assert critical.damage == math.floor(normal.damage * 2.0)


def test_magical_skill_scales_with_matk() -> None:
    attacker = make_combatant("caster", atk=1, matk=30)
    defender = make_combatant("defender", is_enemy=True)
    physical = make_skill("bash", power=100, power_type="physical")
    magical = make_skill("bolt", power=100, power_type="magical")

    physical_result = skill_damage(attacker, defender, physical, ScriptedRNG([0.5, 0.0, 0.9]))
    magical_result = skill_damage(attacker, defender, magical, ScriptedRNG([0.5, 0.0, 0.9]))

    assert magical_result.damage == math.floor(30 * level_multiplier(1) * _variance(0.5))
    assert physical_result.damage < magical_result.damage


def test_healing_scales_with_caster_level() -> None:
    low = make_combatant("low", level=1)
    high = make_combatant("high", level=5)
    heal_variance = ScriptedRNG([0.5]).uniform(0.95, 1.05)

    assert healing(low, 30, ScriptedRNG([0.5])) == math.floor(30 * level_multiplier(1) * heal_variance)
    assert healing(high, 30, ScriptedRNG([0.5])) > healing(low, 30, ScriptedRNG([0.5]))


def test_effective_stats_never_go_negative() -> None:
    attacker = make_combatant("attacker", atk=10)
    exposed = make_combatant("exposed", is_enemy=True, defense=5)
    exposed.conditions = [
        ConditionInstance(id="shred", kind="debuff", duration=2, stat="def", value=-100, value_type="add"),
    ]
    bare = make_combatant("bare", is_enemy=True, defense=0)

    assert effective_stats(exposed).defense == 0
    assert attack_damage(attacker, exposed, ScriptedRNG([0.5])) == attack_damage(attacker, bare, ScriptedRNG([0.5]))
