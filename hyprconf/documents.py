"""Parsers turning config file content into structured documents."""

import json
import tomllib
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import IncludeParseError, IncludeReadError

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def parse_document(content: str, suffix: str = ".toml") -> Dict[str, Any]:
    """
    Parse config content into a structured document.

    YAML is used for ``.yaml``/``.yml``, JSON for ``.json`` and TOML for
    every other suffix (``.conf`` files included).

    Args:
        content: Text of the config file.
        suffix: File suffix selecting the format.

    Returns:
        The parsed document. Its root is always a dict.

    Raises:
        ValueError: If the content cannot be parsed or its root is not a table.
    """
    suffix = suffix.lower()

    if suffix in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e
        if data is None:
            data = {}
    elif suffix in JSON_SUFFIXES:
        data = json.loads(content)
    else:
        data = tomllib.loads(content)

    if not isinstance(data, dict):
        raise ValueError(f"document root must be a table, got {type(data).__name__}")

    return data


def load_document(path: Path) -> Dict[str, Any]:
    """
    Read and parse a single config file.

    Args:
        path: Path to the config file.

    Returns:
        The parsed document.

    Raises:
        IncludeReadError: If the file cannot be read as UTF-8 text.
        IncludeParseError: If the content is not a valid document.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IncludeReadError(path, str(e)) from e

    try:
        return parse_document(content, path.suffix)
    except ValueError as e:
        raise IncludeParseError(path, str(e)) from e
