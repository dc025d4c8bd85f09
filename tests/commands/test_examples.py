"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from importmap_resolve.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["resolve", "--examples"], ["importmap resolve react", "--referrer"]),
    (["check", "--examples"], ["importmap check"]),
    (["show", "--examples"], ["importmap --json show"]),
]


@pytest.mark.parametrize(
    ("args", "keywords"),
    EXAMPLES_COMMANDS,
    ids=[args[0] for args, _ in EXAMPLES_COMMANDS],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_help_does_not_include_examples_text(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["resolve", "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
    assert "importmap resolve lodash/fp" not in result.output
