"""Graph data model for config source relationships."""

from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple


class SourceGraph:
    """
    A directed graph of config files and the files they source.

    Nodes are file paths, and edges represent 'declaring file -> sourced file'.
    Sourced paths that do not exist are tracked separately as missing.
    ``order`` keeps the sequence in which a walk visited the nodes.
    """

    def __init__(self):
        self._nodes: Set[Path] = set()
        self._edges: Dict[Path, Set[Path]] = {}
        self._missing: Dict[Path, Set[str]] = {}  # source -> set of missing path strings
        self._order: List[Path] = []

    @property
    def nodes(self) -> Set[Path]:
        """Return all nodes in the graph."""
        return self._nodes.copy()

    @property
    def edges(self) -> Dict[Path, Set[Path]]:
        """Return adjacency list representation of edges."""
        return {k: v.copy() for k, v in self._edges.items()}

    @property
    def missing(self) -> Dict[Path, Set[str]]:
        """Return missing references (source -> set of unresolved path strings)."""
        return {k: v.copy() for k, v in self._missing.items()}

    @property
    def order(self) -> List[Path]:
        """Return visited nodes in visitation order."""
        return list(self._order)

    def add_node(self, node: Path) -> None:
        """Add a node to the graph."""
        self._nodes.add(node)

    def mark_visited(self, node: Path) -> None:
        """Add a node and append it to the visitation order."""
        self._nodes.add(node)
        self._order.append(node)

    def add_edge(self, source: Path, target: Path) -> None:
        """
        Add a directed edge from source to target.

        Automatically adds both nodes to the graph.
        """
        self._nodes.add(source)
        self._nodes.add(target)

        if source not in self._edges:
            self._edges[source] = set()
        self._edges[source].add(target)

    def add_missing(self, source: Path, candidate: str) -> None:
        """
        Record a missing reference (sourced path that does not exist).

        Args:
            source: The file containing the directive.
            candidate: The expanded path string.
        """
        self._nodes.add(source)
        if source not in self._missing:
            self._missing[source] = set()
        self._missing[source].add(candidate)

    def get_missing(self, source: Path) -> Set[str]:
        """Get all missing references from the source file."""
        return self._missing.get(source, set()).copy()

    def has_missing(self) -> bool:
        """Check if there are any missing references."""
        return bool(self._missing)

    def get_targets(self, source: Path) -> Set[Path]:
        """Get all files that the source file sources."""
        return self._edges.get(source, set()).copy()

    def get_roots(self) -> Set[Path]:
        """Get nodes that are never sourced by other nodes."""
        all_targets: Set[Path] = set()
        for targets in self._edges.values():
            all_targets.update(targets)

        return self._nodes - all_targets

    def get_sources(self, target: Path) -> Set[Path]:
        """Get all files that source the target file."""
        sources = set()
        for source, targets in self._edges.items():
            if target in targets:
                sources.add(source)
        return sources

    def iter_edges(self) -> Iterator[Tuple[Path, Path]]:
        """Iterate over all edges as (source, target) tuples."""
        for source in sorted(self._edges):
            for target in sorted(self._edges[source]):
                yield source, target

    def iter_missing(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all missing references as (source, candidate) tuples."""
        for source in sorted(self._missing):
            for candidate in sorted(self._missing[source]):
                yield source, candidate

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: Path) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes

    def __repr__(self) -> str:
        missing_count = sum(len(m) for m in self._missing.values())
        edge_count = sum(len(t) for t in self._edges.values())
        return f"SourceGraph(nodes={len(self._nodes)}, edges={edge_count}, missing={missing_count})"
