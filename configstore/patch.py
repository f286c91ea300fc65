"""Dotted key paths and declarative configuration patches.

A patch is a list of operations, each a mapping with an ``op``, a
dot-separated ``path`` and, except for ``delete``, a ``value``::

    [
        {"op": "set", "path": "db.port", "value": 5433},
        {"op": "merge", "path": "db", "value": {"pool": {"size": 5}}},
        {"op": "delete", "path": "db.password"},
    ]
"""

import copy
from collections.abc import Mapping
from typing import Any, Iterable

from .merge import deep_merge

PATCH_OPS = ("set", "merge", "delete")


def split_path(path: str) -> list[str]:
    """Splits a dot-separated key path into its segments.

    Raises:
        KeyError: If the path is empty or contains an empty segment.
    """
    if not path:
        raise KeyError("Empty path")
    keys = path.split(".")
    if any(not key for key in keys):
        raise KeyError(f"Invalid key path: {path!r}")
    return keys


def get_path(config: Mapping, path: str, default: Any = None) -> Any:
    """Looks up a value by dot-separated key path.

    Returns ``default`` if any segment of the path doesn't exist.
    """
    current = config
    for key in split_path(path):
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        else:
            return default
    return current


def _get_parent(config: dict, keys: list[str], create: bool) -> dict | None:
    current = config
    for depth, key in enumerate(keys[:-1]):
        if key not in current:
            if not create:
                return None
            current[key] = {}
        next_value = current[key]
        if not isinstance(next_value, dict):
            dotted = ".".join(keys[: depth + 1])
            raise TypeError(f"Configuration key path does not point to a mapping: {dotted}")
        current = next_value
    return current


def set_path(config: dict, path: str, value: Any) -> None:
    """Sets a value at a dotted key path, creating intermediate mappings."""
    keys = split_path(path)
    parent = _get_parent(config, keys, create=True)
    parent[keys[-1]] = value


def delete_path(config: dict, path: str) -> None:
    """Removes the key at a dotted key path. Missing keys are ignored."""
    keys = split_path(path)
    parent = _get_parent(config, keys, create=False)
    if parent is not None:
        parent.pop(keys[-1], None)


def apply_patches(config: dict, patches: Iterable[Mapping]) -> dict:
    """Applies patch operations to a configuration dict in place.

    Args:
        config: The configuration to modify.
        patches: The operations to apply, in order.

    Returns:
        The modified configuration.

    Raises:
        ValueError: If an operation is malformed or unknown.
        TypeError: If a path crosses a non-mapping value, or a ``merge``
            value is not a mapping.
    """
    for index, patch in enumerate(patches):
        if not isinstance(patch, Mapping):
            raise ValueError(f"Patch #{index} must be a mapping, got: {type(patch).__name__}")
        op = patch.get("op")
        path = patch.get("path")
        if op not in PATCH_OPS:
            raise ValueError(f"Patch #{index} has unknown op {op!r}. Valid ops are: {PATCH_OPS}")
        if not isinstance(path, str) or not path:
            raise ValueError(f"Patch #{index} needs a non-empty string 'path'")
        if op != "delete" and "value" not in patch:
            raise ValueError(f"Patch #{index} ({op} {path}) needs a 'value'")

        try:
            if op == "set":
                set_path(config, path, copy.deepcopy(patch["value"]))
            elif op == "merge":
                value = patch["value"]
                if not isinstance(value, Mapping):
                    raise TypeError(f"Patch #{index} (merge {path}) value must be a mapping")
                target = get_path(config, path)
                if not isinstance(target, dict):
                    target = {}
                    set_path(config, path, target)
                deep_merge(value, target)
            else:
                delete_path(config, path)
        except KeyError as e:
            raise ValueError(f"Patch #{index} has an invalid path: {path!r}") from e
    return config
