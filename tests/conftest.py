"""Shared pytest fixtures and test helpers for importmap-resolve tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from importmap_resolve.domain.importmap import ResolvedImportMap, parse_import_map

BASE_URL = "https://example.com/app/"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_map() -> dict[str, Any]:
    """A raw import map with top-level entries, prefixes, and scopes."""
    return {
        "imports": {
            "react": "https://cdn.example/react.js",
            "lodash/": "https://cdn.example/lodash/",
            "blocked": None,
        },
        "scopes": {
            "https://example.com/app/legacy/": {
                "react": "https://cdn.example/react-16.js",
            },
        },
    }


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, sample_map: dict[str, Any]) -> Path:
    """Temporary project with ``importmap.json`` and ``importmap.toml``.

    The CWD is switched to the project so CLI commands discover the config.
    """
    monkeypatch.delenv("IMPORTMAP_CONFIG", raising=False)
    (tmp_path / "importmap.json").write_text(json.dumps(sample_map), encoding="utf-8")
    (tmp_path / "importmap.toml").write_text(
        f'[map]\npath = "importmap.json"\nbase_url = "{BASE_URL}"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def parse(raw: dict[str, Any], base_url: str = BASE_URL) -> ResolvedImportMap:
    """Parse *raw* against the shared test base URL."""
    return parse_import_map(raw, base_url)
