"""Caller-facing battle controller that validates raw requests."""
from __future__ import annotations

from typing import Any, List, Literal, Mapping, Sequence

from dungeonbattle.domain.battle_models import (
    AttackAction,
    BattleAction,
    BattleState,
    Combatant,
    DefendAction,
    ItemAction,
    SkillAction,
)
from dungeonbattle.domain.progress import PlayerProgress, RosterEntry, build_roster
from dungeonbattle.services.battle_service import ActResult, BattleService
from dungeonbattle.services.errors import BattleValidationError, MalformedActionError

BattleActionType = Literal["attack", "skill", "item", "defend"]


def _require_id(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value:
        raise MalformedActionError(f"'{field_name}' must be a non-empty string.")
    return value


def parse_target_ids(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        raise MalformedActionError("'targetIds' must be a list of strings.")
    return [_require_id(target_id, "targetIds[]") for target_id in raw]


def parse_action(payload: Mapping[str, Any]) -> BattleAction:
    """Turn a raw ``{"type": ..., ...}`` mapping into a typed action.

    Accepts both ``skillId``/``itemId`` and ``skill_id``/``item_id`` spellings.
    """
    if not isinstance(payload, Mapping):
        raise MalformedActionError("Action payload must be an object.")
    action_type = payload.get("type")
    targets = tuple(parse_target_ids(payload.get("targetIds", payload.get("target_ids"))))
    if action_type == "attack":
        return AttackAction()
    if action_type == "defend":
        return DefendAction()
    if action_type == "skill":
        skill_id = _require_id(payload.get("skillId", payload.get("skill_id")), "skillId")
        return SkillAction(skill_id=skill_id, target_ids=targets)
    if action_type == "item":
        item_id = _require_id(payload.get("itemId", payload.get("item_id")), "itemId")
        return ItemAction(item_id=item_id, target_ids=targets)
    raise MalformedActionError(f"Unknown action type {action_type!r}.")


class BattleController:
    """
    Request-level wrapper around BattleService.

    Responsibilities:
    - Parse raw payloads into typed actions
    - Reject malformed, unknown-battle and out-of-turn requests before any mutation
    - Expose structured turn information

    It does not render, persist or authenticate.
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service

    def start(
        self,
        floor: Any,
        roster: Sequence[RosterEntry],
        items: Mapping[str, int] | None = None,
    ) -> BattleState:
        if isinstance(floor, bool) or not isinstance(floor, int) or floor < 1:
            raise BattleValidationError("Invalid floor.")
        if not roster:
            raise BattleValidationError("Party is empty.")
        return self._service.start(floor, roster, items)

    def start_from_progress(
        self,
        progress: PlayerProgress,
        floor: Any,
        party_ids: List[str] | None = None,
    ) -> BattleState:
        """Start a battle for the persisted party, carrying its item stock in."""
        roster = build_roster(progress, party_ids)
        return self.start(floor, roster, progress.items)

    def act(
        self,
        battle_id: Any,
        actor_id: Any,
        payload: Mapping[str, Any],
        target_ids: Any = None,
    ) -> ActResult:
        battle_id = _require_id(battle_id, "battleId")
        actor_id = _require_id(actor_id, "actorId")
        action = parse_action(payload)
        targets = parse_target_ids(target_ids)
        return self._service.act(battle_id, actor_id, action, targets)

    def current_actor(self, battle_id: str) -> Combatant | None:
        state = self._service.get(battle_id)
        if state is None or state.is_over:
            return None
        return state.current_actor()

    def is_player_turn(self, battle_id: str) -> bool:
        """Check if the battle is waiting on a living party member."""
        actor = self.current_actor(battle_id)
        return actor is not None and not actor.is_enemy and actor.is_alive
