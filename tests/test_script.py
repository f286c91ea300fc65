"""Tests for configstore.script module."""

import pytest

from configstore.script import build_builtins, run_script


def test_run_script_updates_bindings():
    bindings = {"port": 1, "hosts": ["a"]}
    result = run_script("port = port * 10\nhosts.append('b')\nname = 'svc'", bindings)
    assert result is bindings
    assert bindings == {"port": 10, "hosts": ["a", "b"], "name": "svc"}


def test_run_script_builtins_removed_after_error():
    bindings = {"port": 1}
    with pytest.raises(KeyError):
        run_script("port = 2\n{}['missing']", bindings)
    assert bindings == {"port": 2}


def test_run_script_syntax_error():
    bindings = {"port": 1}
    with pytest.raises(SyntaxError):
        run_script("port = = 2", bindings)
    assert bindings == {"port": 1}


def test_reduced_builtins():
    table = build_builtins()
    assert table["len"] is len
    assert "open" not in table
    assert "__import__" not in table


def test_import_is_unavailable():
    with pytest.raises(ImportError):
        run_script("import os", {})
