"""Cycle-safe traversal of ``source = ...`` graphs."""

import logging
from pathlib import Path
from typing import List, Optional, Set

from graph.model import SourceGraph
from .directives import extract_sources
from .expand import is_regular_file, resolve_targets

logger = logging.getLogger("hyprconf.walker")


def canonicalize(path: Path) -> Path:
    """
    Resolve symlinks and relative segments for identity comparison.

    Falls back to the path as given when it cannot be resolved (for
    example because it does not exist).
    """
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path


def collect_source_graph(root: Path, home_dir: Optional[Path] = None) -> List[Path]:
    """
    Collect every file reachable from ``root`` through source directives.

    Each file appears at most once, so cycles terminate. Unreadable files
    are listed but not descended into.

    Args:
        root: The root config file.
        home_dir: The user's home directory (default: ``Path.home()``).

    Returns:
        Visited files in visitation order (depth-first, last-sourced first).
    """
    return _walk(Path(root), home_dir)


def build_source_graph(root: Path, home_dir: Optional[Path] = None) -> SourceGraph:
    """
    Walk the source graph from ``root`` and record it as a SourceGraph.

    Edges link each file to the existing files it sources. Non-glob
    directives pointing at files that do not exist are recorded as missing.

    Args:
        root: The root config file.
        home_dir: The user's home directory (default: ``Path.home()``).

    Returns:
        SourceGraph with nodes, edges, missing references and visitation order.
    """
    graph = SourceGraph()
    _walk(Path(root), home_dir, graph)
    return graph


def _walk(
    root: Path,
    home_dir: Optional[Path],
    graph: Optional[SourceGraph] = None,
) -> List[Path]:
    if home_dir is None:
        home_dir = Path.home()

    visited: List[Path] = []
    stack: List[Path] = [root]
    seen: Set[Path] = set()

    while stack:
        file_path = stack.pop()
        canonical = canonicalize(file_path)
        if canonical in seen:
            continue
        seen.add(canonical)

        visited.append(file_path)
        if graph is not None:
            graph.mark_visited(file_path)

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Not descending into %s: %s", file_path, e)
            continue

        base_dir = file_path.parent
        sources, _ = extract_sources(content)
        for value in sources:
            for target in resolve_targets(value, base_dir, home_dir):
                if is_regular_file(target):
                    stack.append(target)
                    if graph is not None:
                        graph.add_edge(file_path, target)
                elif graph is not None:
                    graph.add_missing(file_path, str(target))

    return visited
