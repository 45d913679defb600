"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from dungeonbattle.core.types import ConditionKind, Side, ValueType
from dungeonbattle.domain.entities import Stats


@dataclass(slots=True)
class ConditionInstance:
    """A timed modifier attached to one combatant."""

    id: str
    kind: ConditionKind
    duration: int
    stat: str | None = None
    value: float = 0
    value_type: ValueType = "add"


@dataclass(slots=True)
class Combatant:
    """Represents an individual participant in battle."""

    id: str
    name: str
    is_enemy: bool
    level: int
    base: Stats
    current_hp: int
    current_mp: int
    conditions: List[ConditionInstance] = field(default_factory=list)
    guard: bool = False
    skill_ids: Tuple[str, ...] = ()
    skill_levels: Dict[str, int] = field(default_factory=dict)
    source_id: str | None = None  # master definition id
    base_exp: int = 0

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def has_condition(self, kind: ConditionKind) -> bool:
        return any(condition.kind == kind for condition in self.conditions)


@dataclass(slots=True)
class BattleState:
    """Tracks the state of an ongoing battle."""

    battle_id: str
    floor: int
    party: List[Combatant]
    enemies: List[Combatant]
    actors: List[Combatant]
    items: Dict[str, int] = field(default_factory=dict)
    turn_order: List[int] = field(default_factory=list)
    turn_cursor: int = 0
    log: List[str] = field(default_factory=list)
    winner: Side | None = None
    max_damage_by_party: int = 0
    rewards_granted: bool = False

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def current_actor(self) -> Combatant | None:
        if not self.turn_order:
            return None
        if not 0 <= self.turn_cursor < len(self.turn_order):
            return None
        idx = self.turn_order[self.turn_cursor]
        if not 0 <= idx < len(self.actors):
            return None
        return self.actors[idx]

    def find(self, combatant_id: str) -> Combatant | None:
        for combatant in self.actors:
            if combatant.id == combatant_id:
                return combatant
        return None


@dataclass(slots=True)
class AttackAction:
    """Basic attack against the selected targets."""


@dataclass(slots=True)
class SkillAction:
    skill_id: str
    target_ids: Tuple[str, ...] = ()


@dataclass(slots=True)
class ItemAction:
    item_id: str
    target_ids: Tuple[str, ...] = ()


@dataclass(slots=True)
class DefendAction:
    """Raise guard until the end of the actor's next turn."""


BattleAction = Union[AttackAction, SkillAction, ItemAction, DefendAction]


@dataclass(frozen=True, slots=True)
class PartyStatus:
    """Persisted resources for one party member after an action."""

    id: str
    current_hp: int
    current_mp: int
    level: int


@dataclass(frozen=True, slots=True)
class MilestoneGrant:
    item_id: str
    count: int


@dataclass(slots=True)
class BattleDelta:
    """Compact change set handed back to the caller for persistence."""

    items: Dict[str, int]
    max_damage: int
    party_status: List[PartyStatus]
    exp_stock_add: int | None = None
    milestone_reward: MilestoneGrant | None = None
    game_over: bool = False
    reset_state: bool = False
