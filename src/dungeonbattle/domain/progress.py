"""Persisted overworld progress consumed and produced around battles."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Tuple

AllocationKind = Literal["character", "skill"]


@dataclass(slots=True)
class CharacterProgress:
    """Level, experience and carried resources for one recruited character."""

    level: int = 1
    exp: int = 0
    hp: int | None = None
    mp: int | None = None
    skill_ids: Tuple[str, ...] = ()


@dataclass(slots=True)
class SkillProgress:
    level: int = 1
    exp: int = 0


@dataclass(slots=True)
class PlayerProgress:
    """Minimal snapshot of a run that battles read from and write back to."""

    exp_stock: int = 0
    party: List[str] = field(default_factory=list)
    characters: Dict[str, CharacterProgress] = field(default_factory=dict)
    skills: Dict[str, SkillProgress] = field(default_factory=dict)
    items: Dict[str, int] = field(default_factory=dict)
    current_run_max_damage: int = 0


@dataclass(slots=True)
class RosterEntry:
    """One party slot handed to the battle engine."""

    character_id: str
    level: int = 1
    hp: int | None = None
    mp: int | None = None
    skill_ids: Tuple[str, ...] = ()
    skill_levels: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExpAllocation:
    kind: AllocationKind
    id: str
    amount: int


def build_roster(progress: PlayerProgress, party_ids: List[str] | None = None) -> List[RosterEntry]:
    """Build roster entries for the given party (defaults to ``progress.party``)."""
    roster: List[RosterEntry] = []
    for character_id in party_ids if party_ids is not None else progress.party:
        character = progress.characters.get(character_id, CharacterProgress())
        # Levels cover initial skills the party factory falls back to.
        skill_levels = {skill_id: skill.level for skill_id, skill in progress.skills.items()}
        for skill_id in character.skill_ids:
            skill_levels.setdefault(skill_id, 1)
        roster.append(
            RosterEntry(
                character_id=character_id,
                level=character.level,
                hp=character.hp,
                mp=character.mp,
                skill_ids=character.skill_ids,
                skill_levels=skill_levels,
            )
        )
    return roster
