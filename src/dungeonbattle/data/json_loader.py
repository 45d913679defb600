"""Low-level JSON helpers for repositories."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .errors import DataLoadError, DataValidationError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file: {path}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def load_records(path: Path) -> Dict[str, object]:
    """Load a definition file as ``{id: record}``.

    Accepts either an object keyed by id or the exported master format
    ``{"schemaVersion": 1, "data": [{"id": ...}, ...]}``.
    """
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise DataValidationError(f"Expected top-level object in {path}")
    if "data" not in raw or not isinstance(raw["data"], list):
        return raw

    records: Dict[str, object] = {}
    for index, entry in enumerate(raw["data"]):
        if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
            raise DataValidationError(f"{path} data[{index}] must be an object with a string id.")
        if entry["id"] in records:
            raise DataValidationError(f"{path} has duplicate id '{entry['id']}'.")
        records[entry["id"]] = {key: value for key, value in entry.items() if key != "id"}
    return records
