"""Locating ``importmap.toml`` and the import map it points at.

The config file is found the way git finds ``.git/``: walk up from the
working directory until one turns up. ``IMPORTMAP_CONFIG`` short-circuits
the walk, and ``--config`` bypasses discovery entirely.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "importmap.toml"
CONFIG_ENV_VAR = "IMPORTMAP_CONFIG"
DEFAULT_MAP_FILENAME = "importmap.json"


def _ancestors(start: Path) -> list[Path]:
    current = start.resolve()
    return [current, *current.parents]


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``importmap.toml`` governing *start* (default: cwd), or None.

    A set ``IMPORTMAP_CONFIG`` wins even when it names a missing file, in
    which case no config is used.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_import_map(project_root: Path) -> Path | None:
    """Return ``importmap.json`` in *project_root* if present.

    Used when ``[map]`` names neither a ``path`` nor an ``inline`` map.
    """
    candidate = project_root / DEFAULT_MAP_FILENAME
    return candidate if candidate.is_file() else None

