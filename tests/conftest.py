"""Shared test fixtures for yamldb tests."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ConfigDict, Field

from yamldb import DiskOptions, YamlDb

# --- Test record types ---


class Mock(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: int = 0
    ok: bool = False
    foo_bar_baz: str = Field(default="", alias="foo")
    values: list[str] = Field(default_factory=list)


class User(BaseModel):
    id: int
    name: str


class Post(BaseModel):
    id: int
    message: str


# --- Fixtures ---


@pytest.fixture
def base_path(tmp_path):
    """Directory the store writes into."""
    return str(tmp_path / "test-data")


@pytest.fixture
def db(base_path):
    """A store that appends the .yaml extension to keys."""
    return YamlDb(DiskOptions(base_path=base_path, append_extension=True))


@pytest.fixture
def raw_db(base_path):
    """A store that uses keys as file names unchanged."""
    return YamlDb(DiskOptions(base_path=base_path, append_extension=False))


@pytest.fixture
def make_db(base_path):
    """Build a store with custom options rooted at the test base path."""

    def _make(**kwargs) -> YamlDb:
        return YamlDb(DiskOptions(base_path=base_path, **kwargs))

    return _make
