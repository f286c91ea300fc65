"""Layered configuration loading.

Collects configuration fragments from files, strings, mappings, patches and
trusted scripts, and deep-merges them into one configuration.
"""

from importlib import metadata

from .core import ConfigLoadError, ConfigStore, ScriptsDisabledError
from .merge import deep_merge

try:
    __version__ = metadata.version("configstore")
except metadata.PackageNotFoundError:
    # Fallback: read from pyproject.toml directly
    import tomllib
    from pathlib import Path

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "rb") as f:
            pyproject = tomllib.load(f)
            __version__ = pyproject.get("project", {}).get("version", "unknown")
    else:
        __version__ = "unknown"

__all__ = ["ConfigStore", "ConfigLoadError", "ScriptsDisabledError", "deep_merge", "__version__"]
