"""Procedural encounter generation under a floor cost budget."""
from __future__ import annotations

import logging
import math
import string
from collections import Counter
from typing import List, Sequence

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig
from dungeonbattle.core.rng import RNG
from dungeonbattle.domain.battle_models import Combatant
from dungeonbattle.domain.defs import EnemyDef
from dungeonbattle.domain.stat_growth import scale_stats
from dungeonbattle.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)

# Floors where the cost and level curves change slope.
FIRST_BREAKPOINT = 100
SECOND_BREAKPOINT = 300
COST_PER_LEVEL = 2
RARITY_OFFSET = 1000
RARITY_EXPONENT = 1.3
MIN_NORMAL_PICKS = 2
MAX_NORMAL_PICKS = 4
MAX_ENCOUNTER_SIZE = 5


def floor_enemy_cost(floor: int) -> int:
    """Total encounter cost budget for a floor."""
    first = 30 + floor * 5 + (floor // 10) * 10
    if floor <= FIRST_BREAKPOINT:
        return first
    over = floor - FIRST_BREAKPOINT
    second = first + over * 12 + (over // 10) * 25
    if floor <= SECOND_BREAKPOINT:
        return second
    return second + (floor - SECOND_BREAKPOINT) * 15


def base_enemy_level(floor: int) -> float:
    """Enemy level before jitter: quadratic up to floor 100, then two gentler lines."""
    if floor <= FIRST_BREAKPOINT:
        return 1 + 0.3 * floor + 0.002 * floor * floor
    if floor <= SECOND_BREAKPOINT:
        return 51 + 0.25 * (floor - FIRST_BREAKPOINT)
    return 101 + 0.1 * (floor - SECOND_BREAKPOINT)


def level_jitter(floor: int) -> float:
    if floor <= FIRST_BREAKPOINT:
        return 0.15
    if floor <= SECOND_BREAKPOINT:
        return 0.10
    return 0.05


def enemy_level(floor: int, rng: RNG) -> int:
    jitter = level_jitter(floor)
    return max(1, math.floor(base_enemy_level(floor) * rng.uniform(1 - jitter, 1 + jitter)))


def effective_cost(base_cost: int, level: int) -> int:
    return base_cost + level * COST_PER_LEVEL


def rarity_weight(enemy: EnemyDef) -> float:
    """Stronger (higher base_exp) enemies are drawn less often."""
    return 1 / math.pow(max(0, enemy.base_exp) + RARITY_OFFSET, RARITY_EXPONENT)


def candidate_pool(floor: int, table: Sequence[EnemyDef]) -> List[EnemyDef]:
    if floor > FIRST_BREAKPOINT:
        return list(table)
    return [
        enemy
        for enemy in table
        if enemy.appear_min_floor <= floor
        and (enemy.appear_max_floor is None or floor <= enemy.appear_max_floor)
    ]


def create_enemy_combatant(enemy_def: EnemyDef, level: int, rng: RNG) -> Combatant:
    stats = scale_stats(enemy_def.base_stats, enemy_def.growth_per_level, level)
    return Combatant(
        id=make_instance_id(f"enemy_{enemy_def.id}", rng),
        name=enemy_def.name,
        is_enemy=True,
        level=level,
        base=stats,
        current_hp=stats.max_hp,
        current_mp=stats.max_mp,
        skill_ids=enemy_def.skill_ids,
        source_id=enemy_def.id,
        base_exp=enemy_def.base_exp,
    )


def disambiguate_names(enemies: Sequence[Combatant]) -> None:
    """Suffix colliding names with A, B, C... in encounter order."""
    counts = Counter(enemy.name for enemy in enemies)
    seen: Counter = Counter()
    for enemy in enemies:
        if counts[enemy.name] < 2:
            continue
        base_name = enemy.name
        letter = string.ascii_uppercase[seen[base_name] % len(string.ascii_uppercase)]
        seen[base_name] += 1
        enemy.name = f"{base_name} {letter}"


class EnemyFactory:
    """Builds a floor-appropriate encounter from the master enemy table."""

    def __init__(self, rng: RNG, config: BattleConfig = DEFAULT_CONFIG) -> None:
        self._rng = rng
        self._config = config

    def is_boss_floor(self, floor: int) -> bool:
        return floor % self._config.boss_floor_interval == 0

    def generate(self, floor: int, table: Sequence[EnemyDef]) -> List[Combatant]:
        if not table:
            raise FactoryError("Enemy table is empty.")

        budget = floor_enemy_cost(floor)
        candidates = candidate_pool(floor, table)
        enemies: List[Combatant] = []
        spent = 0

        if self.is_boss_floor(floor):
            bosses = [enemy for enemy in candidates if enemy.is_boss]
            logger.debug("Floor %d: attempting boss pick among %d candidates", floor, len(bosses))
            if bosses:
                boss = bosses[self._rng.weighted_index([rarity_weight(b) for b in bosses])]
                level = enemy_level(floor, self._rng)
                cost = effective_cost(boss.base_cost, level)
                if cost <= budget:
                    enemies.append(create_enemy_combatant(boss, level, self._rng))
                    spent += cost

        target_normals = self._rng.randint(MIN_NORMAL_PICKS, MAX_NORMAL_PICKS)
        pool = [enemy for enemy in candidates if not enemy.is_boss]
        normals = 0
        while normals < target_normals and len(enemies) < MAX_ENCOUNTER_SIZE and pool:
            idx = self._rng.weighted_index([rarity_weight(enemy) for enemy in pool])
            pick = pool[idx]
            level = enemy_level(floor, self._rng)
            cost = effective_cost(pick.base_cost, level)
            if spent + cost <= budget:
                enemies.append(create_enemy_combatant(pick, level, self._rng))
                spent += cost
                normals += 1
            else:
                pool.pop(idx)

        if not enemies:
            fallback = candidates[0] if candidates else table[0]
            logger.debug("Floor %d: nothing fit budget %d, falling back to '%s'", floor, budget, fallback.id)
            enemies.append(create_enemy_combatant(fallback, enemy_level(floor, self._rng), self._rng))

        disambiguate_names(enemies)
        logger.debug(
            "Floor %d encounter (cost %d/%d): %s",
            floor,
            spent,
            budget,
            ", ".join(f"{enemy.name} Lv{enemy.level}" for enemy in enemies),
        )
        return enemies
