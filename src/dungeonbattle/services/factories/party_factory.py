"""Factory for turning persisted roster entries into party combatants."""
from __future__ import annotations

import logging
from typing import List, Sequence

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig
from dungeonbattle.data.master_data import MasterData
from dungeonbattle.domain.battle_models import Combatant
from dungeonbattle.domain.progress import RosterEntry
from dungeonbattle.domain.stat_growth import scale_stats
from dungeonbattle.services.errors import FactoryError

from .id_factory import make_party_member_id

logger = logging.getLogger(__name__)


def create_party_member(
    entry: RosterEntry,
    slot: int,
    master: MasterData,
    config: BattleConfig = DEFAULT_CONFIG,
) -> Combatant | None:
    """Instantiate one party member, or None when its definition is missing."""
    character = master.character(entry.character_id)
    if character is None:
        logger.warning("Character '%s' not found in master data; skipping", entry.character_id)
        return None

    level = max(1, entry.level)
    stats = scale_stats(character.base_stats, character.growth_per_level, level)
    hp = stats.max_hp if entry.hp is None else entry.hp
    mp = stats.max_mp if entry.mp is None else entry.mp

    skill_ids = tuple(entry.skill_ids) or character.initial_skill_ids or (config.basic_attack_skill_id,)
    skill_levels = {skill_id: entry.skill_levels.get(skill_id, 1) for skill_id in skill_ids}
    return Combatant(
        id=make_party_member_id(character.id, slot),
        name=character.name,
        is_enemy=False,
        level=level,
        base=stats,
        current_hp=min(max(0, hp), stats.max_hp),
        current_mp=min(max(0, mp), stats.max_mp),
        skill_ids=skill_ids,
        skill_levels=skill_levels,
        source_id=character.id,
    )


def create_party(
    roster: Sequence[RosterEntry],
    master: MasterData,
    config: BattleConfig = DEFAULT_CONFIG,
) -> List[Combatant]:
    party: List[Combatant] = []
    for slot, entry in enumerate(roster):
        member = create_party_member(entry, slot, master, config)
        if member is not None:
            party.append(member)
    if not party:
        raise FactoryError("No party member could be created from the roster.")
    return party
