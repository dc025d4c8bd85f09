"""Import-map file loading.

Reads the JSON form of an import map (the content of a
``<script type="importmap">`` block, or a standalone ``importmap.json``).
Structural validation is left to :func:`parse_import_map`; this module
only guarantees a JSON object comes back, with no key repeated inside
any object.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from importmap_resolve.domain.errors import InvalidMapError


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise InvalidMapError("Duplicate key in import map JSON", key=key)
        obj[key] = value
    return obj


def load_import_map(path: Path) -> dict[str, Any]:
    """Read and decode the import map at *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidMapError: If the top-level JSON value is not an object, or
            an object repeats a key.
    """
    data = json.loads(path.read_text(encoding="utf-8"), object_pairs_hook=_reject_duplicate_keys)
    if not isinstance(data, dict):
        raise InvalidMapError(f"Import map in {path} must be a JSON object, got {type(data).__name__}")
    return data
