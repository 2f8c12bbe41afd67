"""ASCII tree-style exporter for source graphs."""

from pathlib import Path
from typing import Optional, Set, List, Tuple

from graph.model import SourceGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    graph: SourceGraph,
    base: Optional[Path] = None,
    style: str = "tree",
    include_missing: bool = True,
) -> str:
    """
    Convert a source graph to an ASCII tree.

    Each tree starts at a file nobody sources (normally the walk's root).
    A file sourced again further down its own branch is marked ``[*]``
    and not expanded a second time.

    Args:
        graph: The source graph to export.
        base: Optional base directory for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_missing: If True, show missing (nonexistent) sources.

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    root_nodes = sorted(graph.get_roots())

    # Every node is sourced by another one: the root is part of a cycle
    if not root_nodes and graph.order:
        root_nodes = [graph.order[0]]

    lines: List[str] = []

    for i, root_node in enumerate(root_nodes):
        _render_node(
            graph=graph,
            node=root_node,
            base=base,
            prefix="",
            is_last=True,
            chars=chars,
            visited=set(),
            lines=lines,
            is_root=True,
            include_missing=include_missing,
        )

        if i < len(root_nodes) - 1:
            lines.append("")

    return "\n".join(lines)


def _render_node(
    graph: SourceGraph,
    node: Path,
    base: Optional[Path],
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    visited: Set[Path],
    lines: List[str],
    is_root: bool = False,
    include_missing: bool = True,
) -> None:
    """
    Recursively render a node and its children.

    Args:
        graph: The source graph.
        node: Current node to render.
        base: Base directory for display.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        visited: Nodes on the current branch (to detect cycles).
        lines: Output lines list (modified in place).
        is_root: Whether this is a root-level node.
        include_missing: If True, show missing sources.
    """
    branch, last, vertical, space = chars

    display_path = _get_display_path(node, base)
    is_cycle = node in visited
    cycle_marker = " [*]" if is_cycle else ""

    if is_root:
        lines.append(f"{display_path}{cycle_marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{display_path}{cycle_marker}")

    if is_cycle:
        return

    visited.add(node)

    children = sorted(graph.get_targets(node))
    missing_refs: List[str] = sorted(graph.get_missing(node)) if include_missing else []

    if is_root:
        child_prefix = ""
    else:
        child_prefix = prefix + (space if is_last else vertical)

    total_items = len(children) + len(missing_refs)
    item_index = 0

    for child in children:
        item_index += 1
        _render_node(
            graph=graph,
            node=child,
            base=base,
            prefix=child_prefix,
            is_last=(item_index == total_items),
            chars=chars,
            visited=visited,
            lines=lines,
            include_missing=include_missing,
        )

    for missing in missing_refs:
        item_index += 1
        connector = last if item_index == total_items else branch
        lines.append(f"{child_prefix}{connector}{missing} [MISSING]")

    # Backtrack so a file sourced from two branches is drawn under both
    visited.discard(node)


def _get_display_path(node: Path, base: Optional[Path]) -> str:
    """Get the display path for a node."""
    if base is not None:
        try:
            return node.resolve().relative_to(base.resolve()).as_posix()
        except ValueError:
            pass
    return node.as_posix()
