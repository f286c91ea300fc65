import copy
import json
import os
from collections.abc import Mapping
from typing import Any, Iterable, Optional

import yaml

from .file_management import find_app_root, read_text_file, resolve_path
from .json_encoder import ConfigJSONEncoder
from .logging_manager import LoggingMixin
from .merge import deep_merge
from .parsers import DEFAULT_FORMAT, detect_format, parse_content
from .patch import apply_patches, get_path
from .script import run_script

# Errors raised while reading or parsing a fragment. UnicodeDecodeError, JSON5
# and TOML decode errors are all ValueError subclasses.
LOAD_ERRORS = (OSError, ValueError, yaml.YAMLError)


class ConfigLoadError(Exception):
    """Raised when a configuration fragment cannot be read or parsed."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class ScriptsDisabledError(RuntimeError):
    """Raised when add_script is called on a store that does not allow scripts."""


class ConfigStore(LoggingMixin):
    """Aggregates configuration fragments into one deep-merged configuration.

    Fragments come from files (YAML, JSON/JSON5, TOML, dotenv), raw strings,
    mappings, declarative patches and, when enabled, trusted scripts. Each one
    is merged on top of everything added before it. A store that has not been
    given any fragment reports its defaults (application name, version and
    root).

    Files are parsed at most once per store. Missing files count as empty
    fragments and are cached as such, so a file created later is only seen
    after `clear_cache`.

    Example:
        >>> store = ConfigStore("/app")
        >>> store = store.add_config({"db": {"host": "localhost", "port": 5432}}).add_config({"db": {"port": 5433}})
        >>> store["db"]
        {'host': 'localhost', 'port': 5433}
    """

    def __init__(self, app_root: Optional[str] = None, package_file: str = "pyproject.toml", allow_scripts: bool = False):
        """Initializes an empty store.

        Args:
            app_root: Base directory that relative paths are resolved against.
                Defaults to the nearest enclosing project directory.
            package_file: Package metadata file, relative to `app_root`, that
                provides the application name and version.
            allow_scripts: Whether `add_script` may execute script content.
        """
        self.app_root = os.path.abspath(app_root) if app_root else find_app_root()
        self.package_file = package_file
        self.allow_scripts = allow_scripts
        self.file_cache: dict[str, dict] = {}
        self.config: Optional[dict] = None
        self._defaults: Optional[dict] = None

    def add_file(self, path: str) -> "ConfigStore":
        """Loads a configuration file and merges it into the configuration.

        A missing file contributes nothing.

        Args:
            path: Path of the file, absolute or relative to `app_root`.

        Returns:
            The store itself, for chaining.

        Raises:
            ConfigLoadError: If the file exists but cannot be read or parsed.
        """
        return self.add_config(self.load_file(path))

    def add_string(self, content: str, format_hint: Optional[str] = DEFAULT_FORMAT) -> "ConfigStore":
        """Parses a configuration string and merges it into the configuration.

        Args:
            content: The raw configuration text.
            format_hint: Format name or extension, e.g. "yaml" or ".toml".
                Anything unrecognized is parsed as JSON5.

        Returns:
            The store itself, for chaining.

        Raises:
            ConfigLoadError: If the content cannot be parsed.
        """
        try:
            fragment = self.parse_content(content, format_hint)
        except LOAD_ERRORS as e:
            raise ConfigLoadError(f"Error parsing config string: {e}") from e
        return self.add_config(fragment)

    def add_script(self, script: str) -> "ConfigStore":
        """Runs a trusted Python script against the current configuration.

        The top-level configuration keys are the script's global variables.
        Whatever they hold once the script finishes is the new configuration.
        If the script raises, the error propagates and the configuration keeps
        whatever changes the script made before failing.

        Only pass script content you would trust as source code.

        Raises:
            ScriptsDisabledError: If the store was created without allow_scripts.
        """
        if not self.allow_scripts:
            raise ScriptsDisabledError("Script fragments are disabled. Create the store with allow_scripts=True to enable them.")
        self._log("Running config script", log_type="warning")
        self.config = self.to_snapshot()
        run_script(script, self.config)
        return self

    def add_config(self, config: Optional[Mapping]) -> "ConfigStore":
        """Deep-merges a mapping into the configuration.

        Nested mappings merge key by key. Lists and scalars replace the
        previous value.

        Args:
            config: The fragment to merge. None is treated as empty.

        Returns:
            The store itself, for chaining.

        Raises:
            TypeError: If the fragment is not a mapping.
        """
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise TypeError(f"Config fragment must be a mapping, got: {type(config).__name__}")
        self.config = deep_merge(config, self.to_snapshot())
        return self

    def add_patch(self, patches: Iterable[Mapping]) -> "ConfigStore":
        """Applies declarative set/merge/delete operations to the configuration.

        The operations are applied to a copy, so the configuration is only
        replaced if all of them succeed.

        Args:
            patches: Operations like {"op": "set", "path": "db.port", "value": 5433}.

        Returns:
            The store itself, for chaining.

        Raises:
            ValueError: If an operation is malformed.
            TypeError: If a path runs through a value that is not a mapping.
        """
        self.config = apply_patches(self.to_snapshot(), patches)
        return self

    def get_package(self) -> dict:
        """Loads the package metadata file."""
        return self.load_file(self.package_file)

    def get_defaults(self) -> dict:
        """Returns the default configuration values.

        The name and version are read from the `[project]` table of the
        package file if there is one, otherwise from its top level.

        Returns:
            A dict with APP_NAME, APP_VERSION and APP_ROOT.
        """
        if self._defaults is None:
            package = self.get_package()
            metadata = package.get("project") if isinstance(package.get("project"), dict) else package
            self._defaults = {
                "APP_NAME": metadata.get("name"),
                "APP_VERSION": metadata.get("version"),
                "APP_ROOT": self.app_root,
            }
        return copy.deepcopy(self._defaults)

    def parse_content(self, content: str, format_hint: Optional[str] = DEFAULT_FORMAT) -> dict:
        """Parses configuration text with the parser selected by format_hint."""
        return parse_content(content, format_hint)

    def load_file(self, path: str) -> dict:
        """Loads and parses a configuration file, caching the result.

        Args:
            path: Path of the file, absolute or relative to `app_root`.

        Returns:
            A copy of the parsed fragment, or an empty dict if the file
            doesn't exist.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed. Failures
                are not cached.
        """
        path = resolve_path(self.app_root, path)

        if path in self.file_cache:
            self._log(f"Using cached config file {path}")
            return copy.deepcopy(self.file_cache[path])

        if not os.path.exists(path):
            self._log(f"Config file not found, skipping: {path}")
            self.file_cache[path] = {}
            return {}

        try:
            content = read_text_file(path)
        except LOAD_ERRORS as e:
            raise ConfigLoadError(f"Error loading config {path}: {e}", file_name=path) from e

        self._log(f"Loading config file {path}")
        try:
            data = self.parse_content(content, detect_format(path))
        except LOAD_ERRORS as e:
            raise ConfigLoadError(f"Error loading config {path}: {e}", file_name=path) from e

        self.file_cache[path] = data
        return copy.deepcopy(data)

    def clear_cache(self):
        """Forgets all cached files and the derived defaults."""
        self.file_cache.clear()
        self._defaults = None

    def to_snapshot(self) -> dict:
        """Returns a copy of the configuration, or the defaults if nothing was added."""
        if self.config is None:
            return self.get_defaults()
        return copy.deepcopy(self.config)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serializes the configuration snapshot to a JSON string.

        Dates and times are written as ISO 8601 strings.
        """
        return json.dumps(self.to_snapshot(), indent=indent, cls=ConfigJSONEncoder)

    def get(self, path: str, default: Any = None) -> Any:
        """Returns the value at a dot-separated key path, or default if absent."""
        return copy.deepcopy(get_path(self.config if self.config is not None else self.get_defaults(), path, default))

    def __getitem__(self, path: str):
        """Allows dictionary-style access to config settings with dot-notation support.

        Returns None if the key/path doesn't exist, allowing for fallback patterns
        like `store["db.port"] or 5432`.

        Raises:
            KeyError: If the path is empty or invalid.
        """
        return self.get(path)
