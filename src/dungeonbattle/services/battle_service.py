"""Battle orchestration: turn sequencing, auto-advance and result deltas."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig
from dungeonbattle.core.rng import RNG
from dungeonbattle.core.types import Side
from dungeonbattle.data.master_data import MasterData
from dungeonbattle.domain.battle_models import (
    BattleAction,
    BattleDelta,
    BattleState,
    Combatant,
    DefendAction,
    MilestoneGrant,
    PartyStatus,
)
from dungeonbattle.domain.conditions import end_of_turn, start_of_turn
from dungeonbattle.domain.progress import RosterEntry
from dungeonbattle.domain.turn_order import build_turn_order
from dungeonbattle.services.action_resolver import ActionResolver
from dungeonbattle.services.battle_store import BattleStore
from dungeonbattle.services.enemy_ai import EnemyAI
from dungeonbattle.services.errors import (
    BattleNotFoundError,
    BattleValidationError,
    InternalInconsistencyError,
    OutOfTurnError,
)
from dungeonbattle.services.experience_service import experience_reward
from dungeonbattle.services.factories import EnemyFactory, create_party, make_battle_id

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActResult:
    state: BattleState
    delta: BattleDelta


def determine_winner(state: BattleState) -> Side | None:
    """Recompute the winner from living members. Safe to call repeatedly."""
    if not any(member.is_alive for member in state.party):
        state.winner = "enemies"
    elif not any(enemy.is_alive for enemy in state.enemies):
        state.winner = "party"
    else:
        state.winner = None
    return state.winner


def advance_cursor(state: BattleState) -> None:
    if state.turn_order:
        state.turn_cursor = (state.turn_cursor + 1) % len(state.turn_order)


class BattleService:
    """Owns live battles for one surrounding service.

    All battles share the injected RNG; callers must serialize ``act`` calls per
    battle id.
    """

    def __init__(
        self,
        master: MasterData,
        store: BattleStore,
        rng: RNG | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self._master = master
        self._store = store
        self._rng = rng or RNG()
        self._config = config
        self._resolver = ActionResolver(master, self._rng, config)
        self._enemy_ai = EnemyAI(master, self._resolver, self._rng, config)
        self._enemy_factory = EnemyFactory(self._rng, config)

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def start(self, floor: int, roster: Sequence[RosterEntry], items: Mapping[str, int] | None = None) -> BattleState:
        """Create and register a battle, advancing to the first living party member."""
        if isinstance(floor, bool) or not isinstance(floor, int) or floor < 1:
            raise BattleValidationError(f"Floor must be a positive integer, got {floor!r}.")
        if not roster:
            raise BattleValidationError("Cannot start a battle with an empty roster.")

        party = create_party(roster, self._master, self._config)
        enemies = self._enemy_factory.generate(floor, self._master.enemy_table())
        actors: List[Combatant] = [*party, *enemies]
        state = BattleState(
            battle_id=make_battle_id(self._rng),
            floor=floor,
            party=party,
            enemies=enemies,
            actors=actors,
            items=dict(items or {}),
            turn_order=build_turn_order(actors, self._rng),
            log=["Battle start!"],
        )
        logger.info(
            "Battle %s started on floor %d: %d party vs %d enemies",
            state.battle_id,
            floor,
            len(party),
            len(enemies),
        )
        self._store.create(state)
        self._run_auto_turns(state)
        if determine_winner(state) is not None:
            self._finish(state)
        self._store.update(state)
        return state

    def act(
        self,
        battle_id: str,
        actor_id: str,
        action: BattleAction,
        target_ids: Sequence[str] = (),
    ) -> ActResult:
        """Resolve one party action followed by any automatic enemy turns."""
        state = self._store.get(battle_id)
        if state is None:
            raise BattleNotFoundError(f"Battle '{battle_id}' not found.")
        if state.is_over:
            raise BattleValidationError(f"Battle '{battle_id}' is already over.")
        current = state.current_actor()
        if current is None:
            raise InternalInconsistencyError(f"Battle '{battle_id}' has no valid current actor.")
        if current.id != actor_id:
            raise OutOfTurnError(f"It is not '{actor_id}''s turn (current: '{current.id}').")
        if current.is_enemy:
            raise OutOfTurnError(f"'{actor_id}' is not player-controlled.")

        if current.is_alive:
            self._take_turn(state, current, action, target_ids)
        else:
            advance_cursor(state)

        if determine_winner(state) is None:
            self._run_auto_turns(state)
        delta = self._finish(state) if determine_winner(state) is not None else self._build_delta(state)
        self._store.update(state)
        return ActResult(state=state, delta=delta)

    def get(self, battle_id: str) -> BattleState | None:
        return self._store.get(battle_id)

    # -----------------------
    # Turn processing
    # -----------------------
    def _take_turn(
        self,
        state: BattleState,
        actor: Combatant,
        action: BattleAction | None,
        target_ids: Sequence[str] = (),
    ) -> None:
        """One full turn for ``actor``; ``action`` None means the enemy AI decides."""
        turn = start_of_turn(actor, state.log)
        defended = False
        if turn.stunned:
            state.log.append(f"{actor.name} is stunned and cannot act!")
        elif not actor.is_alive:
            state.log.append(f"{actor.name} collapses")
        elif action is None:
            self._enemy_ai.take_turn(state)
        else:
            self._resolver.resolve(state, actor, action, target_ids)
            defended = isinstance(action, DefendAction)
        end_of_turn(actor)
        if defended:
            # Raised after end-of-turn so it covers the replies until the next hit or turn end.
            actor.guard = True
        advance_cursor(state)

    def _run_auto_turns(self, state: BattleState) -> None:
        """Skip defeated actors and play enemy turns until a living party member is up."""
        turns = 0
        while determine_winner(state) is None:
            actor = state.current_actor()
            if actor is None:
                raise InternalInconsistencyError(f"Battle '{state.battle_id}' has no valid current actor.")
            if actor.is_alive and not actor.is_enemy:
                break
            if turns >= self._config.max_auto_turns:
                logger.warning(
                    "Battle %s hit the auto-turn cap (%d); stopping",
                    state.battle_id,
                    self._config.max_auto_turns,
                )
                break
            turns += 1
            if not actor.is_alive:
                advance_cursor(state)
                continue
            self._take_turn(state, actor, None)
        logger.debug("Battle %s auto-advanced %d turns", state.battle_id, turns)

    # -----------------------
    # Results
    # -----------------------
    def _finish(self, state: BattleState) -> BattleDelta:
        delta = self._build_delta(state)
        if state.winner == "party":
            reward = experience_reward(state.enemies)
            delta.exp_stock_add = reward
            if not state.rewards_granted:
                state.rewards_granted = True
                state.log.append(f"Victory! Experience stock +{reward}")
                delta.milestone_reward = self._grant_milestone(state)
                delta.items = dict(state.items)
                logger.info("Battle %s won on floor %d (+%d exp)", state.battle_id, state.floor, reward)
        elif state.winner == "enemies":
            delta.game_over = True
            delta.reset_state = True
            if not state.rewards_granted:
                state.rewards_granted = True
                state.log.append("Defeat...")
                state.log.append("The party has fallen...")
                logger.info("Battle %s lost on floor %d", state.battle_id, state.floor)
        return delta

    def _grant_milestone(self, state: BattleState) -> MilestoneGrant | None:
        if state.floor % self._config.boss_floor_interval != 0 or not self._config.milestone_rewards:
            return None
        reward = self._rng.choice(self._config.milestone_rewards)
        state.items[reward.item_id] = state.items.get(reward.item_id, 0) + reward.count
        item = self._master.item(reward.item_id)
        name = item.name if item is not None else reward.item_id
        state.log.append(f"Boss bonus! Obtained {name} x{reward.count}")
        return MilestoneGrant(item_id=reward.item_id, count=reward.count)

    @staticmethod
    def _build_delta(state: BattleState) -> BattleDelta:
        items: Dict[str, int] = dict(state.items)
        return BattleDelta(
            items=items,
            max_damage=state.max_damage_by_party,
            party_status=[
                PartyStatus(
                    id=member.source_id or member.id,
                    current_hp=member.current_hp,
                    current_mp=member.current_mp,
                    level=member.level,
                )
                for member in state.party
            ],
        )
