"""File management utilities for configuration."""

import os
from typing import Optional

PROJECT_MARKERS = ("pyproject.toml", "setup.py", "package.json", ".git")


def find_app_root(start_dir: Optional[str] = None) -> str:
    """Finds the application root by walking up from a starting directory.

    The root is the first directory that contains one of ``PROJECT_MARKERS``.
    If none is found before reaching the filesystem root, the starting
    directory itself is returned.

    Args:
        start_dir: Directory to start from. Defaults to the current directory.

    Returns:
        The absolute path of the application root.
    """
    start = os.path.abspath(start_dir or os.getcwd())
    current = start
    while True:
        if any(os.path.exists(os.path.join(current, marker)) for marker in PROJECT_MARKERS):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return start
        current = parent


def resolve_path(app_root: str, path: str) -> str:
    """Resolves a path against the application root.

    Absolute paths are kept as they are; relative paths are joined onto
    ``app_root``. The result is normalized.
    """
    return os.path.abspath(os.path.join(app_root, path))


def read_text_file(path: str) -> str:
    """Reads a UTF-8 text file."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
