"""Repository exports."""

from .characters_repo import CharactersRepository
from .conditions_repo import ConditionsRepository
from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository
from .skills_repo import SkillsRepository

__all__ = [
    "CharactersRepository",
    "ConditionsRepository",
    "EnemiesRepository",
    "ItemsRepository",
    "SkillsRepository",
]
