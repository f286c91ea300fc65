"""Dictionary merging utilities."""

import copy
from collections.abc import Mapping


def deep_merge(source: Mapping, destination: dict) -> dict:
    """Recursively merges two dictionaries, overwriting destination with source values.

    Nested mappings are merged key-wise. Any other value in ``source`` (lists,
    scalars, ``None``) replaces the value in ``destination``. Values taken from
    ``source`` are deep-copied so the result never shares mutable state with it.

    Args:
        source: The dictionary with values to merge.
        destination: The dictionary to be merged into. Modified in place.

    Returns:
        The merged dictionary.
    """
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), dict):
            deep_merge(value, destination[key])
        elif isinstance(value, Mapping):
            destination[key] = deep_merge(value, {})
        else:
            destination[key] = copy.deepcopy(value)
    return destination
