"""Tests for key <-> path mapping."""

from __future__ import annotations

import pytest

from yamldb.transform import EXTENSION, KeyTransform, PathKey


class TestToPath:
    def test_nested_key(self):
        path_key = KeyTransform().to_path("users/admins/42")
        assert path_key.path == ("users", "admins")
        assert path_key.file_name == "42"

    def test_key_without_separator_is_direct_child(self):
        path_key = KeyTransform().to_path("foo")
        assert path_key.path == ()
        assert path_key.file_name == "foo"

    def test_appends_extension(self):
        path_key = KeyTransform(append_extension=True).to_path("users/42")
        assert path_key.file_name == "42" + EXTENSION

    def test_extension_not_appended_twice(self):
        transform = KeyTransform(append_extension=True)
        assert transform.to_path("users/42.yaml") == transform.to_path("users/42")
        assert transform.to_path("users/42.yaml").file_name == "42.yaml"

    def test_no_extension_when_disabled(self):
        assert KeyTransform().to_path("a").file_name == "a"

    @pytest.mark.parametrize("key", ["", "a/", "/a", "a//b", "../a", "a/./b"])
    def test_rejects_invalid_keys(self, key):
        with pytest.raises(ValueError):
            KeyTransform().to_path(key)


class TestFromPath:
    def test_round_trip(self):
        transform = KeyTransform()
        assert transform.from_path(transform.to_path("data/sub/value")) == "data/sub/value"

    def test_round_trip_keeps_extension(self):
        transform = KeyTransform(append_extension=True)
        assert transform.from_path(transform.to_path("a")) == "a.yaml"
        assert transform.from_path(transform.to_path("a.yaml")) == "a.yaml"

    def test_file_name_kept_as_found(self):
        transform = KeyTransform(append_extension=True)
        assert transform.from_path(PathKey(path=("x",), file_name="stray.txt")) == "x/stray.txt"

    def test_relative_path(self):
        assert PathKey(path=("a", "b"), file_name="c").relative_path() == "a/b/c"

    def test_normalize_is_idempotent(self):
        transform = KeyTransform(append_extension=True)
        once = transform.normalize("k")
        assert transform.normalize(once) == once == "k.yaml"
