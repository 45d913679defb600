"""Engine configuration with JSON persistence."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MilestoneReward:
    item_id: str
    count: int


def _default_milestone_rewards() -> Tuple[MilestoneReward, ...]:
    return (
        MilestoneReward(item_id="high_potion", count=2),
        MilestoneReward(item_id="high_ether", count=2),
        MilestoneReward(item_id="revival_bead", count=1),
    )


@dataclass(frozen=True, slots=True)
class BattleConfig:
    """Tunables for turn progression and rewards."""

    max_auto_turns: int = 50
    boss_floor_interval: int = 10
    basic_attack_skill_id: str = "attack_basic"
    revive_hp_ratio: float = 0.3
    default_buff_duration: int = 3
    milestone_rewards: Tuple[MilestoneReward, ...] = field(default_factory=_default_milestone_rewards)


DEFAULT_CONFIG = BattleConfig()


def _valid_reward(entry: dict) -> bool:
    item_id = entry.get("item_id")
    count = entry.get("count", 1)
    if not isinstance(item_id, str) or not item_id:
        return False
    return not isinstance(count, bool) and isinstance(count, int) and count >= 1


def _coerce(raw: dict) -> BattleConfig:
    defaults = DEFAULT_CONFIG
    rewards = defaults.milestone_rewards
    raw_rewards = raw.get("milestone_rewards")
    if isinstance(raw_rewards, list):
        parsed = tuple(
            MilestoneReward(item_id=entry["item_id"], count=entry.get("count", 1))
            for entry in raw_rewards
            if isinstance(entry, dict) and _valid_reward(entry)
        )
        if parsed:
            rewards = parsed

    def _int(key: str, default: int, minimum: int) -> int:
        value = raw.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            return default
        return value

    ratio = raw.get("revive_hp_ratio", defaults.revive_hp_ratio)
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not 0 < ratio <= 1:
        ratio = defaults.revive_hp_ratio
    basic = raw.get("basic_attack_skill_id", defaults.basic_attack_skill_id)
    return BattleConfig(
        max_auto_turns=_int("max_auto_turns", defaults.max_auto_turns, 1),
        boss_floor_interval=_int("boss_floor_interval", defaults.boss_floor_interval, 1),
        basic_attack_skill_id=basic if isinstance(basic, str) and basic else defaults.basic_attack_skill_id,
        revive_hp_ratio=float(ratio),
        default_buff_duration=_int("default_buff_duration", defaults.default_buff_duration, 1),
        milestone_rewards=rewards,
    )


def load_config(path: Path | str | None = None) -> BattleConfig:
    """Load config from disk or return defaults."""
    if path is None:
        return DEFAULT_CONFIG
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return DEFAULT_CONFIG
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable battle config %s: %s", config_path, exc)
        return DEFAULT_CONFIG
    if not isinstance(raw, dict):
        logger.warning("Ignoring battle config %s: expected a JSON object", config_path)
        return DEFAULT_CONFIG
    return _coerce(raw)


def save_config(config: BattleConfig, path: Path | str) -> None:
    """Persist config to disk."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(asdict(config), indent=2, sort_keys=True), encoding="utf-8")
