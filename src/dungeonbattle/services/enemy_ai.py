"""Uniform-random enemy decision making."""
from __future__ import annotations

import logging
from typing import List

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig
from dungeonbattle.core.rng import RNG
from dungeonbattle.data.master_data import MasterData
from dungeonbattle.domain.battle_models import AttackAction, BattleState, Combatant, SkillAction
from dungeonbattle.services.action_resolver import ActionResolver

logger = logging.getLogger(__name__)


class EnemyAI:
    """Picks one affordable skill at random for the enemy whose turn it is."""

    def __init__(
        self,
        master: MasterData,
        resolver: ActionResolver,
        rng: RNG,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self._master = master
        self._resolver = resolver
        self._rng = rng
        self._config = config

    def take_turn(self, state: BattleState) -> bool:
        """Act for the current actor if it is a living enemy. Returns True when it acted."""
        actor = state.current_actor()
        if actor is None or not actor.is_enemy or not actor.is_alive:
            return False
        living_party = [member for member in state.party if member.is_alive]
        if not living_party:
            return False

        candidates = self.affordable_skill_ids(actor)
        pick = self._rng.choice(candidates) if candidates else self._config.basic_attack_skill_id
        skill = None if pick == self._config.basic_attack_skill_id else self._master.skill(pick)
        if skill is None:
            if pick != self._config.basic_attack_skill_id:
                logger.warning("Enemy skill '%s' not found in master data; attacking instead", pick)
            target = self._rng.choice(living_party)
            self._resolver.resolve(state, actor, AttackAction(), [target.id])
            return True

        if skill.target_type == "self":
            target_ids = [actor.id]
        elif skill.target_type == "ally":
            allies = [enemy for enemy in state.enemies if enemy.is_alive]
            target_ids = [self._rng.choice(allies).id]
        else:
            target_ids = [self._rng.choice(living_party).id]
        self._resolver.resolve(state, actor, SkillAction(skill_id=pick, target_ids=tuple(target_ids)), target_ids)
        return True

    def affordable_skill_ids(self, actor: Combatant) -> List[str]:
        affordable: List[str] = []
        for skill_id in actor.skill_ids:
            if skill_id == self._config.basic_attack_skill_id:
                affordable.append(skill_id)
                continue
            skill = self._master.skill(skill_id)
            if skill is None:
                continue
            if actor.current_mp >= skill.cost:
                affordable.append(skill_id)
        return affordable
