"""Tests for ResolveService: resolve, check, show, and error mapping."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pluggy

from importmap_resolve.config.settings import ImportMapSettings
from importmap_resolve.plugins.manager import PluginManager
from importmap_resolve.services.resolve import ResolveService
from importmap_resolve.services.session import ImportMapSession

hookimpl = pluggy.HookimplMarker("importmap_resolve")


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    @hookimpl
    def post_resolve(
        self, specifier: str, referrer: str, status: str, resolved: str | None
    ) -> None:
        self.calls.append(
            {"specifier": specifier, "referrer": referrer, "status": status, "resolved": resolved}
        )


class _Broken:
    @hookimpl
    def post_resolve(
        self, specifier: str, referrer: str, status: str, resolved: str | None
    ) -> None:
        raise RuntimeError("boom")


def _service(project_root: Path, **kwargs: Any) -> ResolveService:
    return ResolveService(ImportMapSettings.from_cli(project_root=project_root), **kwargs)


class TestResolve:
    def test_resolves_each_specifier(self, project_root: Path) -> None:
        result = _service(project_root).resolve(["react", "lodash/fp.js", "./local.js", "vue"])
        assert result.ok is True
        assert result.op == "resolve"
        assert result.data["count"] == 4
        assert result.data["referrer"] == "https://example.com/app/"
        by_spec = {r["specifier"]: r for r in result.data["results"]}
        assert by_spec["react"]["resolved"] == "https://cdn.example/react.js"
        assert by_spec["react"]["status"] == "resolved"
        assert by_spec["lodash/fp.js"]["resolved"] == "https://cdn.example/lodash/fp.js"
        assert by_spec["./local.js"]["status"] == "passthrough"
        assert by_spec["./local.js"]["resolved"] == "https://example.com/app/local.js"
        assert by_spec["vue"]["status"] == "unmatched"
        assert by_spec["vue"]["resolved"] is None

    def test_referrer_selects_scope(self, project_root: Path) -> None:
        result = _service(project_root).resolve(
            ["react"], referrer="https://example.com/app/legacy/widget.js"
        )
        assert result.data["results"][0]["resolved"] == "https://cdn.example/react-16.js"

    def test_blocked_fails_with_outcomes(self, project_root: Path) -> None:
        result = _service(project_root).resolve(["react", "blocked"])
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "BLOCKED"
        assert "'blocked'" in result.error.message
        assert result.error.detail["specifiers"] == ["blocked"]
        assert [r["status"] for r in result.data["results"]] == ["resolved", "blocked"]

    def test_strict_fails_on_unmatched_bare_specifier(self, project_root: Path) -> None:
        result = _service(project_root).resolve(["react", "vue", "./local.js"], strict=True)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "UNMATCHED"
        assert result.error.detail["specifiers"] == ["vue"]
        assert result.data["count"] == 3

    def test_strict_passes_when_everything_maps(self, project_root: Path) -> None:
        result = _service(project_root).resolve(["react", "./local.js"], strict=True)
        assert result.ok is True

    def test_blocked_reported_before_unmatched(self, project_root: Path) -> None:
        result = _service(project_root).resolve(["vue", "blocked"], strict=True)
        assert result.error is not None
        assert result.error.code == "BLOCKED"
        assert result.error.detail["specifiers"] == ["blocked"]

    def test_explicit_session_skips_settings(self, project_root: Path) -> None:
        session = ImportMapSession.from_raw(
            {"imports": {"react": "https://other.example/react.js"}}, "https://e.com/"
        )
        result = _service(project_root, session=session).resolve(["react"])
        assert result.data["results"][0]["resolved"] == "https://other.example/react.js"


class TestLoadErrors:
    def test_missing_map(self, project_root: Path) -> None:
        (project_root / "importmap.json").unlink()
        result = _service(project_root).resolve(["react"])
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "MAP_NOT_FOUND"

    def test_invalid_json(self, project_root: Path) -> None:
        (project_root / "importmap.json").write_text("{not json")
        result = _service(project_root).check()
        assert result.error is not None
        assert result.error.code == "INVALID_JSON"

    def test_invalid_map(self, project_root: Path) -> None:
        (project_root / "importmap.json").write_text('{"imports": {"a/": "https://x.com/a"}}')
        result = _service(project_root).show()
        assert result.ok is False
        assert result.op == "show"
        assert result.error is not None
        assert result.error.code == "INVALID_MAP"
        assert result.error.detail["key"] == "a/"


class TestCheckAndShow:
    def test_check_summary(self, project_root: Path) -> None:
        result = _service(project_root).check()
        assert result.ok is True
        assert result.data == {
            "base_url": "https://example.com/app/",
            "imports": 3,
            "scopes": 1,
            "prefix_keys": 1,
            "blocked": 1,
        }

    def test_show_normalized_map(self, project_root: Path) -> None:
        result = _service(project_root).show()
        assert result.ok is True
        assert result.data["base_url"] == "https://example.com/app/"
        assert result.data["imports"]["blocked"] is None
        assert list(result.data["scopes"]) == ["https://example.com/app/legacy/"]


class TestEventDispatch:
    def test_post_resolve_fired(self, project_root: Path) -> None:
        plugins = PluginManager()
        recorder = _Recorder()
        plugins.register_plugin(recorder, name="recorder")
        _service(project_root, plugins=plugins).resolve(["react", "vue"])
        assert [c["specifier"] for c in recorder.calls] == ["react", "vue"]
        assert recorder.calls[0]["status"] == "resolved"
        assert recorder.calls[1]["resolved"] is None

    def test_plugin_failure_is_warning(self, project_root: Path) -> None:
        plugins = PluginManager()
        plugins.register_plugin(_Broken(), name="broken")
        result = _service(project_root, plugins=plugins).resolve(["react"])
        assert result.ok is True
        assert result.warnings == ["Event dispatch failed for post_resolve"]
