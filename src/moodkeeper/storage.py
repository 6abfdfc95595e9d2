"""Read-only import of journal entries from a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ValidationError
from .models import MoodEntry
from .validate import entry_from_dict

logger = logging.getLogger(__name__)


def load_json(path: Path) -> dict[str, Any]:
    """
    Safe load:
    - missing/empty -> {}
    - corrupt or not an object -> {} (logged)
    Never writes to disk.
    """
    path = Path(path)
    if not path.exists():
        return {}

    txt = path.read_text(encoding="utf-8").strip()
    if not txt:
        return {}

    try:
        data = json.loads(txt)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring corrupt data file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring data file %s: top level is %s, not an object", path, type(data).__name__)
        return {}
    return data


def load_entries(path: Path) -> list[MoodEntry]:
    """
    Load {"entries": [...]} records in file order. Records that fail
    validation are skipped with a warning.
    """
    data = load_json(path)
    raw = data.get("entries", [])
    if not isinstance(raw, list):
        logger.warning("Ignoring %s: 'entries' is not a list", path)
        return []

    out: list[MoodEntry] = []
    for i, rec in enumerate(raw):
        try:
            out.append(entry_from_dict(rec))
        except ValidationError as e:
            logger.warning("Skipping entry #%d in %s: %s", i, path, e)
    return out
