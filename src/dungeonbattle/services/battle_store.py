"""Keyed registry of live battles."""
from __future__ import annotations

from typing import Dict, Iterator

from dungeonbattle.domain.battle_models import BattleState


class BattleStore:
    """Holds live BattleState objects by battle id.

    Owned by the surrounding service and passed to BattleService explicitly; deletion
    policy is up to the owner.
    """

    def __init__(self) -> None:
        self._battles: Dict[str, BattleState] = {}

    def create(self, state: BattleState) -> None:
        self._battles[state.battle_id] = state

    def get(self, battle_id: str) -> BattleState | None:
        return self._battles.get(battle_id)

    def update(self, state: BattleState) -> None:
        self._battles[state.battle_id] = state

    def delete(self, battle_id: str) -> None:
        self._battles.pop(battle_id, None)

    def __contains__(self, battle_id: object) -> bool:
        return battle_id in self._battles

    def __len__(self) -> int:
        return len(self._battles)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._battles))
