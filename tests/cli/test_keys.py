"""Tests for yamldb keys / purge / info."""

import json

from tests.cli.conftest import invoke
from yamldb.cli import _exitcodes as ec


def test_keys(runner, seeded_base):
    result = invoke(runner, ["keys"], seeded_base)
    assert result.exit_code == 0
    assert set(result.output.split()) == {"users/1.yaml", "users/2.yaml", "posts/1.yaml"}


def test_keys_prefix_sorted(runner, seeded_base):
    result = invoke(runner, ["--json", "keys", "users/", "--sorted"], seeded_base)
    assert result.exit_code == 0
    assert json.loads(result.output) == ["users/1.yaml", "users/2.yaml"]


def test_keys_reverse(runner, seeded_base):
    result = invoke(runner, ["--json", "keys", "--reverse"], seeded_base)
    assert json.loads(result.output) == ["users/2.yaml", "users/1.yaml", "posts/1.yaml"]


def test_keys_start_after(runner, seeded_base):
    result = invoke(runner, ["--json", "keys", "--start-after", "posts/1.yaml"], seeded_base)
    assert json.loads(result.output) == ["users/1.yaml", "users/2.yaml"]


def test_purge_requires_yes(runner, seeded_base):
    result = invoke(runner, ["purge", "users"], seeded_base)
    assert result.exit_code == ec.USAGE_ERROR


def test_purge_requires_prefix(runner, seeded_base):
    result = invoke(runner, ["purge", "--yes"], seeded_base)
    assert result.exit_code == ec.USAGE_ERROR


def test_purge_prefix(runner, seeded_base):
    result = invoke(runner, ["purge", "users", "--yes"], seeded_base)
    assert result.exit_code == 0
    keys = invoke(runner, ["--json", "keys"], seeded_base)
    assert json.loads(keys.output) == ["posts/1.yaml"]


def test_purge_all(runner, seeded_base):
    result = invoke(runner, ["purge", "--all", "--yes"], seeded_base)
    assert result.exit_code == 0
    keys = invoke(runner, ["--json", "keys"], seeded_base)
    assert json.loads(keys.output) == []


def test_info_json(runner, seeded_base):
    result = invoke(runner, ["--json", "info"], seeded_base)
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["keys"] == 3
    assert data["size_bytes"] > 0
    assert data["base_path"] == seeded_base


def test_version(runner):
    result = invoke(runner, ["--version"])
    assert result.exit_code == 0
    assert "yamldb" in result.output
