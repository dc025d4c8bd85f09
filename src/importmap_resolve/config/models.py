"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, importmap.toml only contains
overrides. With an empty config the session falls back to
``importmap.json`` in the project directory, then to an empty map.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel

# --- importmap.toml sections ---


class MapConfig(BaseModel):
    """[map] section.

    ``path`` and a path-valued ``base_url`` are relative to the project
    root (the directory holding ``importmap.toml``). ``inline`` is used
    only when no ``path`` is set.
    """

    model_config = {"frozen": True}

    path: Path | None = None
    base_url: str | None = None
    inline: dict[str, Any] | None = None


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    rich: bool = True

