"""Locate ``shelfctl.toml``.

``SHELFCTL_CONFIG`` pins the file explicitly; otherwise the nearest
``shelfctl.toml`` in the start directory or any of its ancestors wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "shelfctl.toml"
CONFIG_ENV_VAR = "SHELFCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    A ``SHELFCTL_CONFIG`` that names a missing file disables discovery
    rather than falling back to the walk-up search.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
