import json
from pathlib import Path

import pytest

from dungeonbattle.data import paths
from dungeonbattle.data.errors import DataLoadError, DataReferenceError, DataValidationError
from dungeonbattle.data.master_data import MasterData
from dungeonbattle.data.repositories import (
    CharactersRepository,
    ConditionsRepository,
    EnemiesRepository,
    ItemsRepository,
    SkillsRepository,
)


def test_shipped_definitions_load_and_cross_reference() -> None:
    master = MasterData.load()

    master.validate_references()
    assert {"warrior", "mage", "priest", "rogue"} <= set(master.characters)
    assert master.skill("attack_basic") is not None
    assert master.skill("revive").revive is True
    assert master.condition("poison").kind == "dot"
    assert master.item("tent").battle_usable is False
    assert any(enemy.is_boss for enemy in master.enemy_table())


def test_definitions_path_defaults_to_repo_data() -> None:
    definitions_path = paths.get_definitions_path()
    assert definitions_path.name == "definitions"
    assert definitions_path.exists()


def test_definitions_path_base_path(tmp_path: Path) -> None:
    assert paths.get_definitions_path(tmp_path) == tmp_path


def test_skills_repo_parses_fields_and_defaults(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "skills.json",
        {
            "fire_bolt": {
                "name": "Fire Bolt",
                "skillType": "attack",
                "powerType": "magical",
                "power": 130,
                "cost": 6,
                "conditions": [{"conditionId": "burn", "chance": 0.3}],
            },
            "mystery": {"name": "Mystery", "skillType": "summon"},
        },
    )

    repo = SkillsRepository(base_path=definitions_dir)
    fire_bolt = repo.get("fire_bolt")
    mystery = repo.get("mystery")

    assert (fire_bolt.power_type, fire_bolt.power, fire_bolt.cost) == ("magical", 130, 6)
    assert fire_bolt.conditions[0].condition_id == "burn"
    assert fire_bolt.conditions[0].chance == 0.3
    assert fire_bolt.accuracy == 1.0
    assert fire_bolt.target_type == "enemy"
    assert mystery.skill_type == "unsupported"
    assert [skill.id for skill in repo.all()] == ["fire_bolt", "mystery"]


def test_exported_list_format_is_accepted(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {
            "schemaVersion": 1,
            "data": [
                {"id": "potion", "name": "Potion", "effect": {"kind": "heal_hp", "power": 50}},
                {"id": "odd", "name": "Odd", "effect": {"kind": "teleport"}},
            ],
        },
    )

    items = ItemsRepository(base_path=definitions_dir).as_dict()

    assert items["potion"].effect.power == 50
    assert items["potion"].battle_usable is True
    assert items["odd"].effect.kind == "unsupported"


def test_exported_list_format_rejects_duplicate_ids(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {
            "data": [
                {"id": "potion", "name": "Potion", "effect": {"kind": "heal_hp"}},
                {"id": "potion", "name": "Potion", "effect": {"kind": "heal_hp"}},
            ]
        },
    )

    with pytest.raises(DataValidationError, match="duplicate"):
        ItemsRepository(base_path=definitions_dir).all()


def test_legacy_condition_without_type_infers_kind(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "conditions.json",
        {
            "poison_strong": {"name": "Strong Poison", "value": 9, "duration": 3},
            "stun": {"name": "Stun", "duration": 1},
            "warp": {"name": "Warp", "conditionType": "warp", "duration": 1},
        },
    )

    conditions = ConditionsRepository(base_path=definitions_dir).as_dict()

    assert conditions["poison_strong"].kind == "dot"
    assert conditions["stun"].kind == "stun"
    assert conditions["warp"].kind == "unsupported"


def test_enemy_defaults_to_basic_attack(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "enemies.json",
        {
            "slime": {
                "name": "Slime",
                "baseStats": {"maxHp": 20, "atk": 5},
                "growthPerLevel": {"maxHp": 2},
                "baseCost": 5,
            }
        },
    )

    slime = EnemiesRepository(base_path=definitions_dir).get("slime")

    assert slime.skill_ids == ("attack_basic",)
    assert slime.appear_min_floor == 1
    assert slime.appear_max_floor is None
    assert slime.base_stats.max_hp == 20


@pytest.mark.parametrize(
    "payload",
    [
        {"warrior": {"name": "Warrior", "growthPerLevel": {}}},
        {"warrior": {"name": "Warrior", "baseStats": {"luck": 3}, "growthPerLevel": {}}},
        {"warrior": {"name": "Warrior", "baseStats": {"atk": "high"}, "growthPerLevel": {}}},
        {"warrior": {"name": 7, "baseStats": {}, "growthPerLevel": {}}},
        {"warrior": {"name": "Warrior", "baseStats": {}, "growthPerLevel": {}, "initialSkillIds": "slash"}},
        ["warrior"],
    ],
)
def test_characters_repo_rejects_bad_records(tmp_path: Path, payload) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "characters.json", payload)

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir).all()


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError):
        SkillsRepository(base_path=definitions_dir).all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "skills.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError):
        SkillsRepository(base_path=definitions_dir).all()


def test_unknown_id_lookup_raises_key_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "skills.json", {"slash": {"name": "Slash", "skillType": "attack"}})

    with pytest.raises(KeyError):
        SkillsRepository(base_path=definitions_dir).get("missing")


def test_validate_references_reports_missing_condition(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_minimal_master(definitions_dir)
    _write_json(
        definitions_dir / "skills.json",
        {
            "attack_basic": {"name": "Attack", "skillType": "attack"},
            "venom": {"name": "Venom", "skillType": "attack", "conditions": [{"conditionId": "poison"}]},
        },
    )

    master = MasterData.load(definitions_dir)

    with pytest.raises(DataReferenceError, match="poison"):
        master.validate_references()


def test_validate_references_reports_missing_enemy_skill(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_minimal_master(definitions_dir)
    _write_json(
        definitions_dir / "enemies.json",
        {
            "imp": {
                "name": "Imp",
                "baseStats": {"maxHp": 10},
                "growthPerLevel": {},
                "baseCost": 3,
                "skillIds": ["attack_basic", "hellfire"],
            }
        },
    )

    master = MasterData.load(definitions_dir)

    with pytest.raises(DataReferenceError, match="hellfire"):
        master.validate_references()


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir


def _write_minimal_master(definitions_dir: Path) -> None:
    _write_json(
        definitions_dir / "characters.json",
        {
            "warrior": {
                "name": "Warrior",
                "baseStats": {"maxHp": 50, "atk": 10},
                "growthPerLevel": {"maxHp": 5},
                "initialSkillIds": ["attack_basic"],
            }
        },
    )
    _write_json(definitions_dir / "skills.json", {"attack_basic": {"name": "Attack", "skillType": "attack"}})
    _write_json(definitions_dir / "items.json", {})
    _write_json(definitions_dir / "conditions.json", {})
    _write_json(definitions_dir / "enemies.json", {})
