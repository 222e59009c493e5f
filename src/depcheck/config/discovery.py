"""Config file discovery.

Resolution order: an explicit ``--config`` path, then the DEPCHECK_CONFIG
env var, then a walk up from the start directory to the first
depcheck.toml, the way ``go`` finds go.mod.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "depcheck.toml"
CONFIG_ENV_VAR = "DEPCHECK_CONFIG"


def _walk_up(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_config(start: Path | None = None, *, explicit: str | None = None) -> Path | None:
    """Return the config file in effect, or None when there is none.

    Raises:
        FileNotFoundError: If *explicit* is given but is not a file. A
            DEPCHECK_CONFIG naming a missing file only means "no config".
    """
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise FileNotFoundError(explicit)
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    return _walk_up((start or Path.cwd()).resolve())
