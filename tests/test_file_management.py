"""Tests for configstore.file_management module."""

import os
from unittest.mock import patch

from configstore.file_management import find_app_root, read_text_file, resolve_path


def test_find_app_root_walks_up(tmp_path):
    (tmp_path / "pyproject.toml").write_text("")
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    assert find_app_root(str(nested)) == str(tmp_path)


def test_find_app_root_prefers_nearest(tmp_path):
    (tmp_path / "package.json").write_text("{}")
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / "setup.py").write_text("")
    assert find_app_root(str(inner)) == str(inner)


def test_find_app_root_defaults_to_cwd(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    assert find_app_root() == str(tmp_path)


def test_resolve_path_relative():
    assert resolve_path("/app", "config/default.json") == os.path.join("/app", "config", "default.json")


def test_resolve_path_normalizes():
    assert resolve_path("/app", "./config/../local.yaml") == os.path.join("/app", "local.yaml")


def test_resolve_path_absolute_kept():
    assert resolve_path("/app", "/etc/app/config.yaml") == "/etc/app/config.yaml"


def test_read_text_file_utf8(tmp_path):
    path = tmp_path / "unicode.yaml"
    path.write_text("name: café\n", encoding="utf-8")
    assert read_text_file(str(path)) == "name: café\n"


def test_find_app_root_without_markers_returns_start(tmp_path):
    start = tmp_path / "nested" / "dir"
    start.mkdir(parents=True)
    with patch("configstore.file_management.os.path.exists", return_value=False):
        assert find_app_root(str(start)) == str(start)
