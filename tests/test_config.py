import json
import logging
from pathlib import Path

import pytest

from dungeonbattle.config import DEFAULT_CONFIG, BattleConfig, MilestoneReward, load_config, save_config


def test_defaults() -> None:
    assert DEFAULT_CONFIG.max_auto_turns == 50
    assert DEFAULT_CONFIG.boss_floor_interval == 10
    assert DEFAULT_CONFIG.revive_hp_ratio == 0.3
    assert [reward.item_id for reward in DEFAULT_CONFIG.milestone_rewards] == [
        "high_potion",
        "high_ether",
        "revival_bead",
    ]


def test_load_without_path_or_file_returns_defaults(tmp_path: Path) -> None:
    assert load_config() is DEFAULT_CONFIG
    assert load_config(tmp_path / "missing.json") is DEFAULT_CONFIG


def test_unreadable_config_logs_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_path = tmp_path / "battle.json"
    config_path.write_text("{broken", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="dungeonbattle.config"):
        config = load_config(config_path)

    assert config is DEFAULT_CONFIG
    assert "Ignoring unreadable battle config" in caplog.text


def test_non_object_config_is_ignored(tmp_path: Path) -> None:
    config_path = tmp_path / "battle.json"
    config_path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(config_path) is DEFAULT_CONFIG


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    config = BattleConfig(
        max_auto_turns=12,
        boss_floor_interval=5,
        revive_hp_ratio=0.5,
        milestone_rewards=(MilestoneReward(item_id="elixir", count=1),),
    )
    config_path = tmp_path / "nested" / "battle.json"

    save_config(config, config_path)

    assert load_config(config_path) == config


def test_invalid_values_fall_back_per_field(tmp_path: Path) -> None:
    config_path = tmp_path / "battle.json"
    config_path.write_text(
        json.dumps(
            {
                "max_auto_turns": 0,
                "boss_floor_interval": True,
                "revive_hp_ratio": 2,
                "basic_attack_skill_id": "",
                "default_buff_duration": 4,
                "milestone_rewards": [{"count": 3}, "potion"],
            }
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.max_auto_turns == DEFAULT_CONFIG.max_auto_turns
    assert config.boss_floor_interval == DEFAULT_CONFIG.boss_floor_interval
    assert config.revive_hp_ratio == DEFAULT_CONFIG.revive_hp_ratio
    assert config.basic_attack_skill_id == "attack_basic"
    assert config.default_buff_duration == 4
    assert config.milestone_rewards == DEFAULT_CONFIG.milestone_rewards


def test_bad_milestone_entries_are_skipped(tmp_path: Path) -> None:
    config_path = tmp_path / "battle.json"
    config_path.write_text(
        json.dumps(
            {
                "milestone_rewards": [
                    {"item_id": "x", "count": "two"},
                    {"item_id": "y", "count": 0},
                    {"item_id": "z", "count": True},
                    {"item_id": "elixir", "count": 2},
                    {"item_id": "ether"},
                ]
            }
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.milestone_rewards == (
        MilestoneReward(item_id="elixir", count=2),
        MilestoneReward(item_id="ether", count=1),
    )


def test_milestone_list_with_only_bad_entries_keeps_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "battle.json"
    config_path.write_text(json.dumps({"milestone_rewards": [{"item_id": "x", "count": "two"}]}), encoding="utf-8")

    assert load_config(config_path).milestone_rewards == DEFAULT_CONFIG.milestone_rewards
