"""Expansion of source/include expressions into concrete file paths."""

import fnmatch
import glob
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("hyprconf.expand")

GLOB_CHARS = ("*", "?", "[")
HOME_TOKENS = ("${HOME}", "$HOME")


def has_glob_chars(value: str) -> bool:
    """Return True when the value contains glob wildcard syntax."""
    return any(char in value for char in GLOB_CHARS)


def is_regular_file(path: Path) -> bool:
    """Return True for an existing regular file; stat failures count as absent."""
    try:
        return path.is_file()
    except OSError:
        return False


def is_directory(path: Path) -> bool:
    """Return True for an existing directory; stat failures count as absent."""
    try:
        return path.is_dir()
    except OSError:
        return False


def expand_expression(
    value: str,
    base_dir: Path,
    home_dir: Optional[Path] = None,
) -> Path:
    """
    Expand a source expression into an absolute or base-relative path.

    Supports ``${HOME}`` and ``$HOME`` tokens, a leading ``~/`` and paths
    relative to ``base_dir``. The filesystem is never touched.

    Args:
        value: The raw expression taken from a directive.
        base_dir: Directory of the file that declared the expression.
        home_dir: The user's home directory (default: ``Path.home()``).

    Returns:
        The expanded path. It may not exist.
    """
    if home_dir is None:
        home_dir = Path.home()

    expanded = value.strip()
    home = str(home_dir)
    for token in HOME_TOKENS:
        expanded = expanded.replace(token, home)

    if expanded.startswith("~/"):
        return home_dir / expanded[2:]

    path = Path(expanded)
    if path.is_absolute():
        return path

    return base_dir / path


def is_valid_pattern(pattern: str) -> bool:
    """
    Check that a glob pattern is well formed.

    A pattern is malformed when a ``[`` character class is never closed, or
    when ``**`` does not form a whole path component.
    """
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            # A ']' right after the opening bracket is a literal member
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                return False
            i = close + 1
            continue
        if char == "*" and pattern.startswith("**", i):
            end = i
            while end < len(pattern) and pattern[end] == "*":
                end += 1
            if end - i > 2:
                return False
            before_ok = i == 0 or pattern[i - 1] == "/"
            after_ok = end == len(pattern) or pattern[end] == "/"
            if not (before_ok and after_ok):
                return False
            i = end
            continue
        i += 1
    return True


def resolve_targets(
    value: str,
    base_dir: Path,
    home_dir: Optional[Path] = None,
) -> List[Path]:
    """
    Resolve one source expression to concrete file targets.

    Non-glob expressions always yield exactly one path, whether or not it
    exists. Glob expressions yield every existing regular file matching the
    pattern, sorted; a malformed pattern yields nothing.

    Args:
        value: The raw expression taken from a directive.
        base_dir: Directory of the file that declared the expression.
        home_dir: The user's home directory (default: ``Path.home()``).

    Returns:
        List of target paths.
    """
    expanded = expand_expression(value, base_dir, home_dir)
    pattern = str(expanded)

    if not has_glob_chars(pattern):
        return [expanded]

    if not is_valid_pattern(pattern):
        logger.debug("Ignoring malformed glob pattern: %s", pattern)
        return []

    try:
        matches = glob.glob(pattern, recursive=True, include_hidden=True)
    except (OSError, ValueError) as e:
        logger.debug("Glob evaluation failed for %s: %s", pattern, e)
        return []

    return [Path(match) for match in sorted(matches) if is_regular_file(Path(match))]


def path_matches(
    value: str,
    base_dir: Path,
    home_dir: Optional[Path],
    target: Path,
) -> bool:
    """
    Check whether ``target`` is covered by a source expression.

    Args:
        value: The raw expression taken from a directive.
        base_dir: Directory of the file that declared the expression.
        home_dir: The user's home directory (``None`` for ``Path.home()``).
        target: The concrete path to test.

    Returns:
        True if the expanded expression equals or matches ``target``.
    """
    expanded = expand_expression(value, base_dir, home_dir)
    pattern = str(expanded)

    if not has_glob_chars(pattern):
        return expanded == Path(target)

    if not is_valid_pattern(pattern):
        return False

    return fnmatch.fnmatchcase(str(target), pattern)
