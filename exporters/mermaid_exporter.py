"""Mermaid flowchart exporter for source graphs."""

import re
from pathlib import Path
from typing import Optional, Dict

from graph.model import SourceGraph


def to_mermaid(
    graph: SourceGraph,
    orientation: str = "LR",
    base: Optional[Path] = None,
    include_missing: bool = True,
) -> str:
    """
    Convert a source graph to Mermaid flowchart syntax.

    Args:
        graph: The source graph to export.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        base: Optional base directory for relative labels.
        include_missing: If True, show missing (nonexistent) sources.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    node_ids: Dict[Path, str] = {}
    for node in sorted(graph.nodes):
        node_ids[node] = _sanitize_id(_get_label(node, base))

    missing_ids: Dict[str, str] = {}
    if include_missing:
        for _, candidate in graph.iter_missing():
            if candidate not in missing_ids:
                missing_ids[candidate] = _sanitize_id(f"missing_{candidate}")

    for node in sorted(graph.nodes):
        lines.append(f'    {node_ids[node]}["{_get_label(node, base)}"]')

    if missing_ids:
        lines.append("")
        lines.append("    %% Missing sources")
        for candidate in sorted(missing_ids):
            missing_id = missing_ids[candidate]
            lines.append(f'    {missing_id}["{candidate} [MISSING]"]')
            lines.append(f"    style {missing_id} stroke:#ff0000,stroke-dasharray: 5 5")

    lines.append("")
    for source, target in graph.iter_edges():
        lines.append(f"    {node_ids[source]} --> {node_ids[target]}")

    if include_missing:
        for source, candidate in graph.iter_missing():
            lines.append(f"    {node_ids[source]} -.-> {missing_ids[candidate]}")

    return "\n".join(lines)


def _sanitize_id(value: str) -> str:
    """
    Convert a string to a valid Mermaid node ID.

    Mermaid IDs can only contain letters, digits, and underscores.
    """
    sanitized = re.sub(r"[/\\.\-]", "_", value)
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"


def _get_label(path: Path, base: Optional[Path]) -> str:
    """Get the display label for a node."""
    if base is not None:
        try:
            return path.resolve().relative_to(base.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()
