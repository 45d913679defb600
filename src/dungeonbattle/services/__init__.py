"""Service layer exports."""

from .errors import (
    AllocationError,
    BattleNotFoundError,
    BattleValidationError,
    FactoryError,
    InternalInconsistencyError,
    MalformedActionError,
    OutOfTurnError,
)
from .action_resolver import ActionResolver
from .battle_store import BattleStore
from .enemy_ai import EnemyAI
from .experience_service import AllocationResult, ExperienceService, experience_reward
from .battle_service import ActResult, BattleService, determine_winner

__all__ = [
    "ActResult",
    "ActionResolver",
    "AllocationError",
    "AllocationResult",
    "BattleNotFoundError",
    "BattleService",
    "BattleStore",
    "BattleValidationError",
    "EnemyAI",
    "ExperienceService",
    "FactoryError",
    "InternalInconsistencyError",
    "MalformedActionError",
    "OutOfTurnError",
    "determine_winner",
    "experience_reward",
]
