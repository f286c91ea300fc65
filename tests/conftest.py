import json

import pytest

from configstore.logging_manager import shutdown_loggers


@pytest.fixture
def app_root(tmp_path):
    """An application root with a package.json and a config/ directory."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "test-app", "version": "1.2.3"}))
    (tmp_path / "config").mkdir()
    return tmp_path


@pytest.fixture(autouse=True)
def _release_log_handlers():
    yield
    shutdown_loggers()
