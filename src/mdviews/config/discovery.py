"""Locate mdviews.toml.

An explicit ``MDVIEWS_CONFIG`` path wins. Otherwise the nearest
``mdviews.toml`` in the start directory or one of its ancestors is used, the
way git finds ``.git/``. The ``--config`` flag bypasses discovery entirely.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "mdviews.toml"
CONFIG_ENV_VAR = "MDVIEWS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any.

    A ``MDVIEWS_CONFIG`` that points at a missing file disables discovery
    instead of falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
