"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from yamldb import DiskOptions, YamlDb
from yamldb.cli import app

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_base(tmp_path):
    """Base path used by the CLI under test."""
    return str(tmp_path / "cli-data")


@pytest.fixture
def seeded_base(cli_base):
    """A store with a few records."""
    db = YamlDb(DiskOptions(base_path=cli_base, append_extension=True))
    db.write("users/1", {"id": 1, "name": "Alice"})
    db.write("users/2", {"id": 2, "name": "Bob"})
    db.write("posts/1", {"id": 1, "message": "Hello"})
    return cli_base


def invoke(
    runner: CliRunner, args: list[str], base_path: str | None = None, input: str | None = None
) -> "Result":
    """Invoke CLI with the base path injected before the subcommand."""
    if base_path:
        args = ["--base-path", base_path] + args
    return runner.invoke(app, args, input=input, catch_exceptions=False)
