"""Utilities for creating battle-scoped identifiers."""
from __future__ import annotations

import time

from dungeonbattle.core.rng import RNG

_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"


def _random_suffix(rng: RNG, length: int) -> str:
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


def make_instance_id(prefix: str, rng: RNG, length: int = 5) -> str:
    """Generate a combatant identifier using the provided RNG."""
    return f"{prefix}_{_random_suffix(rng, length)}"


def make_battle_id(rng: RNG) -> str:
    """Opaque battle id composed from a millisecond timestamp and a random suffix."""
    return f"battle_{int(time.time() * 1000)}_{_random_suffix(rng, 4)}"


def make_party_member_id(character_id: str, slot: int) -> str:
    return f"pc_{character_id}_{slot}"
