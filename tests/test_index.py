"""Tests for the ordered key index and the key ordering functions."""

from __future__ import annotations

import pytest

from yamldb.index import OrderedIndex
from yamldb.sorting import order_alphabetically, order_alphabetically_reversed


def test_order_functions():
    assert order_alphabetically("a", "b")
    assert not order_alphabetically("b", "a")
    assert order_alphabetically_reversed("b", "a")
    assert not order_alphabetically_reversed("a", "a")


class TestOrderedIndex:
    def test_defaults_to_alphabetical(self):
        index = OrderedIndex()
        for key in ["d", "b", "a", "c"]:
            index.insert(key)
        assert index.keys("", 10) == ["a", "b", "c", "d"]

    def test_reversed(self):
        index = OrderedIndex(order_alphabetically_reversed)
        index.initialize(["d", "b", "a", "c"])
        assert index.keys("", 10) == ["d", "c", "b", "a"]

    def test_keys_start_strictly_after(self):
        index = OrderedIndex()
        index.initialize(["a", "b", "c", "d"])
        assert index.keys("b", 10) == ["c", "d"]
        assert index.keys("d", 10) == []

    def test_start_after_missing_key(self):
        index = OrderedIndex()
        index.initialize(["a", "c", "e"])
        assert index.keys("b", 10) == ["c", "e"]

    def test_chunks(self):
        index = OrderedIndex()
        index.initialize(["a", "b", "c", "d", "e"])
        assert index.keys("", 2) == ["a", "b"]
        assert index.keys("b", 2) == ["c", "d"]
        assert index.keys("d", 2) == ["e"]

    def test_insert_is_idempotent(self):
        index = OrderedIndex()
        index.insert("a")
        index.insert("a")
        assert len(index) == 1
        assert "a" in index

    def test_delete(self):
        index = OrderedIndex()
        index.initialize(["a", "b", "c"])
        index.delete("b")
        index.delete("missing")
        assert index.keys("", 10) == ["a", "c"]
        assert "b" not in index

    def test_delete_among_equivalent_keys(self):
        index = OrderedIndex(lambda a, b: a.lower() < b.lower())
        index.initialize(["A", "a", "b"])
        index.delete("a")
        assert index.keys("", 10) == ["A", "b"]

    def test_paging_through_equivalent_keys(self):
        index = OrderedIndex(lambda a, b: a.lower() < b.lower())
        index.initialize(["b", "a", "A"])
        assert index.keys("", 1) == ["A"]
        assert index.keys("A", 1) == ["a"]
        assert index.keys("a", 1) == ["b"]

    def test_clear(self):
        index = OrderedIndex()
        index.initialize(["a"])
        index.clear()
        assert len(index) == 0

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            OrderedIndex().keys("", 0)
