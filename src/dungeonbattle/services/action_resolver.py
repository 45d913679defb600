"""Validation and application of a single battle action."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig
from dungeonbattle.core.rng import RNG
from dungeonbattle.data.master_data import MasterData
from dungeonbattle.domain import damage
from dungeonbattle.domain.battle_models import (
    AttackAction,
    BattleAction,
    BattleState,
    Combatant,
    ConditionInstance,
    DefendAction,
    ItemAction,
    SkillAction,
)
from dungeonbattle.domain.defs import ItemDef, SkillDef
from dungeonbattle.domain.stat_growth import level_multiplier

logger = logging.getLogger(__name__)

SKILL_LEVEL_STEP = 0.1


class ActionResolver:
    """Applies attack/skill/item/defend actions to resolved targets.

    Rule violations (unknown skill, not enough MP, empty stock, ...) are not errors:
    they append an explanatory log line and leave the battle untouched, and the
    caller still consumes the turn.
    """

    def __init__(self, master: MasterData, rng: RNG, config: BattleConfig = DEFAULT_CONFIG) -> None:
        self._master = master
        self._rng = rng
        self._config = config

    def resolve(
        self,
        state: BattleState,
        actor: Combatant,
        action: BattleAction,
        target_ids: Sequence[str] = (),
    ) -> None:
        requested = list(target_ids) or list(getattr(action, "target_ids", ()))
        wanted = set(requested)
        targets = [combatant for combatant in state.actors if combatant.id in wanted]

        if isinstance(action, AttackAction):
            self._attack(state, actor, targets)
        elif isinstance(action, SkillAction):
            self._use_skill(state, actor, action.skill_id, targets)
        elif isinstance(action, ItemAction):
            self._use_item(state, actor, action.item_id, targets)
        elif isinstance(action, DefendAction):
            actor.guard = True
            state.log.append(f"{actor.name} defends")
        else:
            state.log.append(f"{actor.name} did nothing")

    # -----------------------
    # Attack
    # -----------------------
    def _attack(self, state: BattleState, actor: Combatant, targets: List[Combatant]) -> None:
        for target in targets:
            dealt = damage.attack_damage(actor, target, self._rng)
            target.current_hp = max(0, target.current_hp - dealt)
            state.log.append(f"{actor.name} attacks! {target.name} takes {dealt} damage")
            self._record_party_hit(state, actor, dealt)

    # -----------------------
    # Skills
    # -----------------------
    def _use_skill(self, state: BattleState, actor: Combatant, skill_id: str, targets: List[Combatant]) -> None:
        skill = self._master.skill(skill_id)
        if skill is None:
            logger.warning("Skill '%s' not found in master data", skill_id)
            state.log.append(f"{actor.name} did nothing")
            return
        if not self._can_use_skill(state, actor, skill):
            return

        typed_targets = self._narrow_targets(actor, skill, targets)
        revive_targets = [t for t in typed_targets if t.is_enemy == actor.is_enemy and not t.is_alive] if skill.revive else []
        if skill.revive and not revive_targets:
            state.log.append(f"{actor.name} casts {skill.name}... but it had no effect")
            return

        if actor.current_mp < skill.cost:
            state.log.append(f"{actor.name} does not have enough MP for {skill.name}")
            return
        actor.current_mp -= skill.cost

        if skill.skill_type == "attack":
            for target in typed_targets:
                result = damage.skill_damage(actor, target, skill, self._rng)
                target.current_hp = max(0, target.current_hp - result.damage)
                if not result.is_hit:
                    state.log.append(f"{actor.name} uses {skill.name}! It missed {target.name}")
                    continue
                crit = " Critical hit!" if result.is_critical else ""
                state.log.append(f"{actor.name} uses {skill.name}!{crit} {target.name} takes {result.damage} damage")
                self.apply_conditions_from_skill(state, skill, actor, target)
                self._record_party_hit(state, actor, result.damage)
        elif skill.skill_type == "heal":
            if skill.revive:
                for target in revive_targets:
                    revived_hp = self._revive(target, self._config.revive_hp_ratio)
                    state.log.append(f"{actor.name} casts {skill.name}! {target.name} is revived (HP {revived_hp})")
            else:
                for target in typed_targets:
                    if not target.is_alive:
                        state.log.append(f"{target.name} is down and cannot be healed")
                        continue
                    amount = damage.healing(actor, skill.power, self._rng)
                    target.current_hp = min(target.base.max_hp, target.current_hp + amount)
                    state.log.append(f"{actor.name} heals {target.name} (+{amount})")
        elif skill.skill_type in ("buff", "debuff"):
            for target in typed_targets:
                self.apply_conditions_from_skill(state, skill, actor, target)
                state.log.append(f"{actor.name} uses {skill.name}")
        else:
            logger.warning("Skill '%s' has an unsupported type", skill.id)
            state.log.append(f"{actor.name} uses {skill.name}")

    def _can_use_skill(self, state: BattleState, actor: Combatant, skill: SkillDef) -> bool:
        if actor.has_condition("silence") and skill.id != self._config.basic_attack_skill_id:
            state.log.append(f"{actor.name} is silenced and cannot use {skill.name}")
            return False
        if skill.is_passive:
            state.log.append(f"{actor.name} cannot actively use {skill.name}")
            return False
        if skill.id not in actor.skill_ids:
            state.log.append(f"{actor.name} does not know {skill.name}")
            return False
        if actor.level < skill.unlock_level:
            state.log.append(f"{actor.name} cannot use {skill.name} yet")
            return False
        for prerequisite_id in skill.prerequisite_ids:
            prerequisite = self._master.skill(prerequisite_id)
            if prerequisite is None:
                logger.warning("Prerequisite '%s' of skill '%s' not found", prerequisite_id, skill.id)
                state.log.append(f"{actor.name} cannot use {skill.name} (unknown prerequisite)")
                return False
            if actor.level < prerequisite.unlock_level:
                state.log.append(f"{actor.name} cannot use {skill.name} (requires {prerequisite.name})")
                return False
        return True

    @staticmethod
    def _narrow_targets(actor: Combatant, skill: SkillDef, targets: List[Combatant]) -> List[Combatant]:
        if skill.target_type == "self":
            return [actor]
        if skill.target_type == "ally":
            return [t for t in targets if t.is_enemy == actor.is_enemy]
        if skill.target_type == "enemy":
            return [t for t in targets if t.is_enemy != actor.is_enemy]
        return list(targets)

    def apply_conditions_from_skill(
        self, state: BattleState, skill: SkillDef, caster: Combatant, target: Combatant
    ) -> List[ConditionInstance]:
        """Roll each of the skill's conditions and attach the successes to ``target``.

        DOT magnitude is baked here from the caster's level and skill level, so later
        stat changes never alter a DOT that is already ticking.
        """
        applied: List[ConditionInstance] = []
        for entry in skill.conditions:
            if self._rng.random() > entry.chance:
                continue
            definition = self._master.condition(entry.condition_id)
            if definition is None:
                logger.warning("Condition '%s' referenced by skill '%s' not found", entry.condition_id, skill.id)
                state.log.append(f"{skill.name} tried to inflict an unknown condition")
                continue
            if definition.kind == "unsupported":
                logger.warning("Condition '%s' has an unsupported type", definition.id)
                continue

            value = definition.value
            if definition.kind == "dot":
                skill_level = caster.skill_levels.get(skill.id, 1)
                skill_multiplier = 1 + SKILL_LEVEL_STEP * (skill_level - 1)
                value = math.floor(definition.value * level_multiplier(caster.level) * skill_multiplier)

            instance = ConditionInstance(
                id=definition.id,
                kind=definition.kind,
                duration=definition.duration,
                stat=definition.stat,
                value=value,
                value_type=definition.value_type,
            )
            target.conditions.append(instance)
            applied.append(instance)
            state.log.append(f"{target.name} is afflicted with {definition.name}")
        return applied

    # -----------------------
    # Items
    # -----------------------
    def _use_item(self, state: BattleState, actor: Combatant, item_id: str, targets: List[Combatant]) -> None:
        item = self._master.item(item_id)
        if item is None:
            logger.warning("Item '%s' not found in master data", item_id)
            state.log.append(f"{actor.name} did nothing")
            return
        if not item.battle_usable:
            state.log.append(f"{actor.name} cannot use {item.name} in battle")
            return
        stock = state.items.get(item.id, 0)
        if stock <= 0:
            state.log.append(f"{actor.name} has no {item.name} left!")
            return
        state.items[item.id] = stock - 1

        for target in targets:
            self._apply_item_effect(state, actor, item, target)

    def _apply_item_effect(self, state: BattleState, actor: Combatant, item: ItemDef, target: Combatant) -> None:
        effect = item.effect
        prefix = f"{actor.name} uses {item.name}."
        if effect.kind == "revive":
            if target.is_alive:
                state.log.append(f"{prefix} Nothing happened to {target.name}")
                return
            ratio = effect.power / 100 if effect.power > 0 else self._config.revive_hp_ratio
            revived_hp = self._revive(target, ratio)
            state.log.append(f"{prefix} {target.name} is revived (HP {revived_hp})")
            return
        if effect.kind == "unsupported":
            state.log.append(prefix)
            return
        if not target.is_alive:
            state.log.append(f"{prefix} {target.name} is down and unaffected")
            return

        if effect.kind == "heal_hp":
            before = target.current_hp
            target.current_hp = min(target.base.max_hp, target.current_hp + max(0, effect.power))
            state.log.append(f"{prefix} {target.name} recovers {target.current_hp - before} HP")
        elif effect.kind == "heal_mp":
            before = target.current_mp
            target.current_mp = min(target.base.max_mp, target.current_mp + max(0, effect.power))
            state.log.append(f"{prefix} {target.name} recovers {target.current_mp - before} MP")
        elif effect.kind == "heal_full":
            target.current_hp = target.base.max_hp
            target.current_mp = target.base.max_mp
            state.log.append(f"{prefix} {target.name} is fully restored")
        elif effect.kind == "buff":
            target.conditions.append(
                ConditionInstance(
                    id=item.id,
                    kind="buff",
                    duration=effect.duration or self._config.default_buff_duration,
                    stat=effect.stat,
                    value=effect.power / 100,
                    value_type="multiply",
                )
            )
            state.log.append(f"{prefix} {target.name} feels stronger")

    # -----------------------
    # Helpers
    # -----------------------
    @staticmethod
    def _revive(target: Combatant, ratio: float) -> int:
        target.current_hp = max(1, math.floor(target.base.max_hp * ratio))
        target.current_mp = 0
        target.conditions = []
        target.guard = False
        return target.current_hp

    @staticmethod
    def _record_party_hit(state: BattleState, actor: Combatant, dealt: int) -> None:
        if not actor.is_enemy and dealt > state.max_damage_by_party:
            state.max_damage_by_party = dealt
