"""Factory helpers for battle participants and identifiers."""

from .enemy_factory import EnemyFactory, effective_cost, enemy_level, floor_enemy_cost, rarity_weight
from .id_factory import make_battle_id, make_instance_id, make_party_member_id
from .party_factory import create_party, create_party_member

__all__ = [
    "EnemyFactory",
    "create_party",
    "create_party_member",
    "effective_cost",
    "enemy_level",
    "floor_enemy_cost",
    "make_battle_id",
    "make_instance_id",
    "make_party_member_id",
    "rarity_weight",
]
