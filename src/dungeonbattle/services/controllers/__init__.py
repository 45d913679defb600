"""Caller-facing controllers for battle requests."""
from __future__ import annotations

from .battle_controller import BattleActionType, BattleController, parse_action, parse_target_ids

__all__ = [
    "BattleActionType",
    "BattleController",
    "parse_action",
    "parse_target_ids",
]
