"""
Config file identification by metadata header.

Tools find their config files by a human-readable header instead of a
hard-coded filename::

    # hypr metadata
    # type = bar
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .expand import is_directory, is_regular_file

logger = logging.getLogger("hyprconf.metadata")

TYPE_KEY = "type"
HEADER_LINE = "# hypr metadata"
HEADER_SCAN_LINES = 64


@dataclass(frozen=True)
class ConfigMetaSpec:
    """Metadata contract for selecting config files."""

    config_type: str
    extensions: Tuple[str, ...] = ("conf",)

    @classmethod
    def for_type(cls, config_type: str, extensions: Iterable[str]) -> "ConfigMetaSpec":
        """Build a spec from a type and an iterable of extensions (no leading dot)."""
        return cls(config_type, tuple(ext.lstrip(".") for ext in extensions))


@dataclass(frozen=True)
class ConfigMetadata:
    """Parsed metadata values from a file header."""

    config_type: str


def parse_metadata_header(content: str) -> Dict[str, str]:
    """
    Parse ``key = value`` comment lines from the header of a config file.

    The first line must be the metadata marker. Only the first 64 lines
    are considered. Both ``=`` and ``:`` are accepted as separators.

    Args:
        content: Full text of a config file.

    Returns:
        Mapping of lower-cased keys to values. Empty if there is no header.
    """
    if not content:
        return {}
    lines = [line.removesuffix("\r") for line in content.split("\n")[:HEADER_SCAN_LINES]]

    first_line = lines[0].lstrip("\ufeff").strip()
    if first_line.lower() != HEADER_LINE:
        return {}

    out: Dict[str, str] = {}
    for line in lines[1:]:
        trimmed = line.strip()
        if not trimmed.startswith("#"):
            continue

        body = trimmed.lstrip("#").strip()
        if "=" in body:
            key, value = body.split("=", 1)
        elif ":" in body:
            key, value = body.split(":", 1)
        else:
            continue

        key = key.strip().lower()
        value = value.strip().strip('"').strip("'")
        if value:
            out[key] = value

    return out


def metadata_from_content(content: str) -> Optional[ConfigMetadata]:
    """Parse the required metadata keys, or return None if any is absent."""
    parsed = parse_metadata_header(content)
    if TYPE_KEY not in parsed:
        return None
    return ConfigMetadata(config_type=parsed[TYPE_KEY])


def matches_spec(content: str, spec: ConfigMetaSpec) -> bool:
    """Check whether file content declares the type the spec asks for."""
    meta = metadata_from_content(content)
    return meta is not None and meta.config_type == spec.config_type


def file_matches(path: Path, spec: ConfigMetaSpec) -> bool:
    """
    Check whether a file matches the extension and metadata requirements.

    Unreadable files never match.
    """
    ext = path.suffix.lstrip(".").lower()
    if ext not in {candidate.lower() for candidate in spec.extensions}:
        return False

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False

    return matches_spec(content, spec)


def _iter_files(root: Path) -> Iterator[Path]:
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", root, e)
        return

    for entry in entries:
        if is_directory(entry):
            yield from _iter_files(entry)
        elif is_regular_file(entry):
            yield entry


def discover_config_files(root: Path, spec: ConfigMetaSpec) -> List[Path]:
    """
    Discover config files below ``root`` whose header matches the spec.

    Args:
        root: Directory to search recursively.
        spec: Expected type and allowed extensions.

    Returns:
        Matching files, sorted.
    """
    return sorted(path for path in _iter_files(root) if file_matches(path, spec))


def resolve_config_path_strict(
    root: Path,
    fallback: Path,
    spec: ConfigMetaSpec,
) -> Optional[Path]:
    """
    Resolve a config path with strict metadata enforcement.

    Returns ``fallback`` if it exists and matches, else the first matching
    file below ``root``, else None.
    """
    if is_regular_file(fallback) and file_matches(fallback, spec):
        return fallback

    found = discover_config_files(root, spec)
    return found[0] if found else None


def resolve_config_path(root: Path, fallback: Path, spec: ConfigMetaSpec) -> Path:
    """
    Resolve a config path using metadata discovery with a fallback.

    Resolution order:
    1. ``fallback`` if it exists and matches the metadata spec
    2. first metadata-matching file below ``root``
    3. ``fallback`` (even if missing)
    """
    resolved = resolve_config_path_strict(root, fallback, spec)
    return resolved if resolved is not None else fallback
