"""JSON exporter for source graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Optional, Dict, List, Any

from graph.model import SourceGraph


def to_json(
    graph: SourceGraph,
    base: Optional[Path] = None,
    indent: int = 2,
    include_missing: bool = True,
) -> str:
    """
    Convert a source graph to JSON format.

    Args:
        graph: The source graph to export.
        base: Optional base directory for relative path display.
        indent: JSON indentation level.
        include_missing: If True, include missing (nonexistent) sources.

    Returns:
        JSON string with ``order``, ``nodes`` and ``edges`` keys.
    """
    order: List[str] = [_get_path_str(node, base) for node in graph.order]
    nodes: List[str] = sorted(_get_path_str(node, base) for node in graph.nodes)

    edges: List[Dict[str, Any]] = []
    for source, target in graph.iter_edges():
        edges.append({
            "source": _get_path_str(source, base),
            "target": _get_path_str(target, base),
        })

    if include_missing:
        for source, candidate in graph.iter_missing():
            edges.append({
                "source": _get_path_str(source, base),
                "target": candidate,
                "missing": True,
            })

    data: Dict[str, Any] = {
        "order": order,
        "nodes": nodes,
        "edges": edges,
    }

    return json.dumps(data, indent=indent)


def _get_path_str(path: Path, base: Optional[Path]) -> str:
    """Get the string representation of a path, relative to base when possible."""
    if base is not None:
        try:
            return path.resolve().relative_to(base.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()
