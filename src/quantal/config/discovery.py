"""Config file discovery.

Walk-up finder locates quantal.toml, similar to how git finds .git/.
QUANTAL_CONFIG (env) and --config (CLI) take precedence over the walk.
Relative paths inside the file are anchored at the file's directory.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "quantal.toml"
CONFIG_ENV_VAR = "QUANTAL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest quantal.toml at or above *start* (default: cwd).

    An explicit QUANTAL_CONFIG wins; if it names a missing file the
    result is None rather than a walk-up match.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def anchor_path(path: Path | None, config_path: Path | None) -> Path | None:
    """Resolve a relative *path* from a config file against that file's directory."""
    if path is None or path.is_absolute() or config_path is None:
        return path
    return (config_path.parent / path).resolve()
