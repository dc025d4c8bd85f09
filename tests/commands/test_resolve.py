"""Tests for the resolve CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from importmap_resolve.cli import cli


@pytest.mark.usefixtures("project_root")
class TestResolveCommand:
    def test_resolve_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "react"])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "https://cdn.example/react.js" in result.stdout

    def test_resolve_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "react", "lodash/fp/map.js"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "resolve"
        assert data["data"]["referrer"] == "https://example.com/app/"
        assert data["data"]["count"] == 2
        resolved = [item["resolved"] for item in data["data"]["results"]]
        assert resolved == [
            "https://cdn.example/react.js",
            "https://cdn.example/lodash/fp/map.js",
        ]

    def test_referrer_selects_scope(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "resolve", "react", "--referrer", "https://example.com/app/legacy/old.js"],
        )
        assert result.exit_code == 0
        item = json.loads(result.stdout)["data"]["results"][0]
        assert item["resolved"] == "https://cdn.example/react-16.js"
        assert item["status"] == "resolved"

    def test_passthrough_and_unmatched(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "./local.js", "vue"])
        assert result.exit_code == 0
        items = json.loads(result.stdout)["data"]["results"]
        assert items[0]["status"] == "passthrough"
        assert items[0]["resolved"] == "https://example.com/app/local.js"
        assert items[0]["matched"] is False
        assert items[1]["status"] == "unmatched"
        assert items[1]["resolved"] is None

    def test_relative_path_referrer(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "./util.js", "-r", "src/app.js"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["referrer"] == (project_root / "src" / "app.js").as_uri()
        assert data["results"][0]["resolved"] == (project_root / "src" / "util.js").as_uri()

    def test_blocked_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "react", "blocked"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["ok"] is False
        assert payload["error"]["code"] == "BLOCKED"
        assert payload["error"]["detail"]["specifiers"] == ["blocked"]
        assert payload["data"]["results"][1]["status"] == "blocked"

    def test_blocked_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "blocked"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "'blocked'" in result.stderr

    def test_strict_unmatched_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "--strict", "react", "vue"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "UNMATCHED"
        assert payload["error"]["detail"]["specifiers"] == ["vue"]

    def test_quiet_prints_urls_only(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "resolve", "react", "vue"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["https://cdn.example/react.js", "unmatched"]

    def test_requires_specifier(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve"])
        assert result.exit_code == 2

    def test_plain_output_when_rich_disabled(self, cli_runner: CliRunner, project_root: Path) -> None:
        config = project_root / "importmap.toml"
        config.write_text(config.read_text() + "[output]\nrich = false\n")
        result = cli_runner.invoke(cli, ["resolve", "react"])
        assert result.exit_code == 0
        assert result.stdout.startswith("OK: resolve")


@pytest.mark.usefixtures("project_root")
class TestMapOverrides:
    def test_map_option_overrides_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"imports": {"react": "./vendor/react.js"}}))
        result = cli_runner.invoke(cli, ["--json", "--map", str(other), "resolve", "react"])
        assert result.exit_code == 0
        item = json.loads(result.stdout)["data"]["results"][0]
        assert item["resolved"] == "https://example.com/app/vendor/react.js"

    def test_base_url_option_overrides_config(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--base-url", "https://static.example/", "resolve", "./x.js"]
        )
        assert result.exit_code == 0
        item = json.loads(result.stdout)["data"]["results"][0]
        assert item["resolved"] == "https://static.example/x.js"

    def test_base_url_directory_path(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "web").mkdir()
        result = cli_runner.invoke(cli, ["--json", "--base-url", "web", "resolve", "./x.js"])
        assert result.exit_code == 0
        item = json.loads(result.stdout)["data"]["results"][0]
        assert item["resolved"] == (project_root / "web" / "x.js").as_uri()

    def test_missing_map(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--map", "missing.json", "resolve", "react"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "MAP_NOT_FOUND"

    def test_invalid_json(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "broken.json").write_text("{not json")
        result = cli_runner.invoke(cli, ["--json", "--map", "broken.json", "resolve", "react"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_JSON"

    def test_repeated_key_is_invalid_map(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "dupes.json").write_text('{"imports": {"a": "/x.js", "a": "/y.js"}}')
        result = cli_runner.invoke(cli, ["--json", "--map", "dupes.json", "resolve", "a"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "INVALID_MAP"
        assert payload["error"]["detail"]["key"] == "a"

    def test_invalid_map(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "bad.json").write_text(json.dumps({"imports": {"a/": "https://x.com/a"}}))
        result = cli_runner.invoke(cli, ["--json", "--map", "bad.json", "resolve", "a/b"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "INVALID_MAP"
        assert payload["error"]["detail"]["key"] == "a/"
