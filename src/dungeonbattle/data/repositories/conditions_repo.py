"""Status conditions repository."""
from __future__ import annotations

from typing import Dict

from dungeonbattle.data.errors import DataValidationError
from dungeonbattle.data.repositories.base import RepositoryBase
from dungeonbattle.domain.defs import ConditionDef

VALID_KINDS = {"dot", "buff", "debuff", "stun", "silence", "blind"}
VALID_VALUE_TYPES = {"add", "multiply"}


def infer_condition_kind(condition_id: str) -> str:
    """Guess the kind of a legacy record that predates ``conditionType``."""
    if "poison" in condition_id or "burn" in condition_id:
        return "dot"
    if "stun" in condition_id:
        return "stun"
    if "silence" in condition_id:
        return "silence"
    return "buff"


class ConditionsRepository(RepositoryBase[ConditionDef]):
    """Loads timed status condition templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("conditions.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ConditionDef]:
        conditions: Dict[str, ConditionDef] = {}
        for raw_id, payload in raw.items():
            context = f"condition '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "duration"}, context)

            raw_kind = data.get("conditionType")
            if raw_kind is None:
                kind = infer_condition_kind(raw_id)
            else:
                kind = self._require_str(raw_kind, f"{context} conditionType")
                if kind not in VALID_KINDS:
                    kind = "unsupported"

            value_type = self._require_str(data.get("valueType", "add"), f"{context} valueType")
            if value_type not in VALID_VALUE_TYPES:
                raise DataValidationError(f"{context} valueType must be one of {sorted(VALID_VALUE_TYPES)}.")
            stat = data.get("stat")

            conditions[raw_id] = ConditionDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                kind=kind,
                duration=self._require_int(data["duration"], f"{context} duration"),
                stat=self._require_str(stat, f"{context} stat") if stat is not None else None,
                value=self._require_number(data.get("value", 0), f"{context} value"),
                value_type=value_type,
            )
        return conditions
