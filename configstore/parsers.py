"""Format detection and dispatch parsing for configuration fragments.

Supported formats:
    - YAML (``.yaml``, ``.yml``) via PyYAML
    - TOML (``.toml``) via the standard library ``tomllib``
    - dotenv (``.env``) via python-dotenv, values kept as flat strings
    - JSON5 for ``.json``, ``.json5`` and anything else, so plain JSON,
      comments, trailing commas and unquoted keys are all accepted
"""

import io
import os
import tomllib
from typing import Optional

import json5
import yaml
from dotenv import dotenv_values

YAML_FORMATS = {"yaml", "yml"}
TOML_FORMATS = {"toml"}
ENV_FORMATS = {"env"}
DEFAULT_FORMAT = "json"


def normalize_format(format_hint: Optional[str]) -> str:
    """Turns an extension or format hint into a bare lower-case format name.

    ``".YAML"``, ``"yaml"`` and ``"yml"`` all map to a YAML name, ``None`` or an
    empty hint falls back to JSON.
    """
    if not format_hint:
        return DEFAULT_FORMAT
    return format_hint.strip().lstrip(".").lower() or DEFAULT_FORMAT


def detect_format(path: str) -> str:
    """Returns the format name for a file path based on its name and extension.

    A file called ``.env`` has no extension as far as ``os.path.splitext`` is
    concerned, so it is matched by name.
    """
    name = os.path.basename(path).lower()
    if name == ".env":
        return "env"
    _, ext = os.path.splitext(name)
    return normalize_format(ext)


def _parse_env(content: str) -> dict:
    # Keys declared without a value come back as None
    return dict(dotenv_values(stream=io.StringIO(content)))


def parse_content(content: str, format_hint: Optional[str] = None) -> dict:
    """Parses configuration text into a dictionary.

    Args:
        content: The raw configuration text.
        format_hint: File extension or format name selecting the parser.

    Returns:
        The parsed mapping. Empty documents yield an empty dict.

    Raises:
        ValueError: If the content is malformed JSON5/TOML, or its top level
            is not a mapping.
        yaml.YAMLError: If the content is malformed YAML.
    """
    fmt = normalize_format(format_hint)
    if fmt in YAML_FORMATS:
        data = yaml.safe_load(content)
    elif fmt in TOML_FORMATS:
        data = tomllib.loads(content)
    elif fmt in ENV_FORMATS:
        data = _parse_env(content)
    else:
        data = json5.loads(content)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level config must be a mapping, got: {type(data).__name__}")
    return data
