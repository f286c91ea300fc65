"""Tests for configstore.patch module."""

import pytest

from configstore.patch import apply_patches, delete_path, get_path, set_path, split_path


class TestSplitPath:
    def test_split(self):
        assert split_path("a.b.c") == ["a", "b", "c"]

    def test_empty(self):
        with pytest.raises(KeyError, match="Empty path"):
            split_path("")

    def test_empty_segment(self):
        with pytest.raises(KeyError):
            split_path("a..b")


class TestGetPath:
    def test_nested(self):
        assert get_path({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_missing_returns_default(self):
        assert get_path({"a": {}}, "a.b") is None
        assert get_path({"a": 1}, "a.b", "fallback") == "fallback"


class TestSetAndDeletePath:
    def test_set_creates_intermediate(self):
        config = {}
        set_path(config, "db.pool.size", 5)
        assert config == {"db": {"pool": {"size": 5}}}

    def test_set_through_scalar_fails(self):
        with pytest.raises(TypeError, match="does not point to a mapping: db"):
            set_path({"db": "sqlite"}, "db.port", 1)

    def test_delete(self):
        config = {"db": {"port": 1, "host": "x"}}
        delete_path(config, "db.port")
        assert config == {"db": {"host": "x"}}

    def test_delete_missing_is_noop(self):
        config = {"db": {"host": "x"}}
        delete_path(config, "db.port")
        delete_path(config, "cache.ttl")
        assert config == {"db": {"host": "x"}}


class TestApplyPatches:
    def test_operations_in_order(self):
        config = {"db": {"host": "localhost"}}
        apply_patches(
            config,
            [
                {"op": "set", "path": "db.port", "value": 1},
                {"op": "set", "path": "db.port", "value": 2},
                {"op": "merge", "path": "cache", "value": {"ttl": 60}},
                {"op": "delete", "path": "db.host"},
            ],
        )
        assert config == {"db": {"port": 2}, "cache": {"ttl": 60}}

    def test_merge_into_existing(self):
        config = {"db": {"host": "localhost", "opts": {"a": 1}}}
        apply_patches(config, [{"op": "merge", "path": "db", "value": {"opts": {"b": 2}}}])
        assert config == {"db": {"host": "localhost", "opts": {"a": 1, "b": 2}}}

    def test_set_value_is_copied(self):
        value = {"hosts": ["a"]}
        config = apply_patches({}, [{"op": "set", "path": "db", "value": value}])
        value["hosts"].append("b")
        assert config == {"db": {"hosts": ["a"]}}

    @pytest.mark.parametrize(
        "patch",
        [
            {"op": "replace", "path": "a", "value": 1},
            {"op": "set", "value": 1},
            {"op": "set", "path": "a"},
            {"op": "delete", "path": "a..b"},
            "set a=1",
        ],
    )
    def test_malformed(self, patch):
        with pytest.raises(ValueError):
            apply_patches({}, [patch])

    def test_merge_requires_mapping(self):
        with pytest.raises(TypeError):
            apply_patches({}, [{"op": "merge", "path": "a", "value": [1]}])
