"""Domain definition exports."""

from .character_def import CharacterDef
from .condition_def import ConditionDef
from .effect_def import EffectDef
from .enemy_def import EnemyDef
from .item_def import ItemDef
from .skill_def import SkillConditionDef, SkillDef

__all__ = [
    "CharacterDef",
    "ConditionDef",
    "EffectDef",
    "EnemyDef",
    "ItemDef",
    "SkillConditionDef",
    "SkillDef",
]
