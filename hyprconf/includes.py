"""Recursive loading of structured documents with top-level include arrays."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Set

from .directives import DEFAULT_INCLUDE_KEY, extract_include_patterns
from .documents import load_document
from .errors import CyclicIncludeError
from .expand import is_regular_file, resolve_targets
from .merge import merge_values
from .walker import canonicalize

logger = logging.getLogger("hyprconf.includes")


def load_with_includes(
    path: Path,
    include_key: str = DEFAULT_INCLUDE_KEY,
    home_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load a config document and recursively merge the files it includes.

    The include key is read from the parsed document and stays in the
    result. Included documents are merged in declaration order: tables
    merge by key, while scalars and arrays from included files overwrite
    those of the including file.

    Include targets that do not exist (or are not regular files) are
    skipped. The same file may be reached through several include chains;
    only a file that includes itself is an error.

    Args:
        path: The root config file.
        include_key: Top-level key holding the include expressions.
        home_dir: The user's home directory (default: ``Path.home()``).

    Returns:
        The merged document.

    Raises:
        CyclicIncludeError: If a file includes itself through a chain.
        IncludeParseError: If any loaded file is not a valid document.
        IncludeReadError: If a loaded file cannot be read.
    """
    if home_dir is None:
        home_dir = Path.home()
    return _load(Path(path), include_key, home_dir, set())


def _load(
    path: Path,
    include_key: str,
    home_dir: Path,
    open_files: Set[Path],
) -> Dict[str, Any]:
    """Load one file; ``open_files`` holds the canonical paths of its ancestors."""
    canonical = canonicalize(path)
    if canonical in open_files:
        raise CyclicIncludeError(canonical)

    open_files.add(canonical)
    try:
        document = load_document(path)
        base_dir = path.parent

        for pattern in extract_include_patterns(document, include_key):
            for include_path in resolve_targets(pattern, base_dir, home_dir):
                if not is_regular_file(include_path):
                    logger.debug("Skipping include %s from %s: not a file", include_path, path)
                    continue

                included = _load(include_path, include_key, home_dir, open_files)
                logger.debug("Merging %s into %s", include_path, path)
                document = merge_values(document, included)

        return document
    finally:
        open_files.discard(canonical)
