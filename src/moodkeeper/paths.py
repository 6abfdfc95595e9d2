from __future__ import annotations

import os
from pathlib import Path

DATA_ENV = "MOODKEEPER_DATA"


def resolve_data_path(data_arg: str | None) -> Path | None:
    """--data beats $MOODKEEPER_DATA; None means "no file, use sample data"."""
    if data_arg:
        return Path(data_arg).expanduser().resolve()
    env = os.environ.get(DATA_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return None
