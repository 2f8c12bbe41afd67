"""Tests for graph data model."""

import pytest
from pathlib import Path

from graph.model import SourceGraph


class TestSourceGraph:
    """Tests for SourceGraph class."""

    def test_empty_graph(self):
        """Test empty graph initialization."""
        graph = SourceGraph()
        assert len(graph) == 0
        assert graph.nodes == set()
        assert graph.edges == {}
        assert graph.order == []

    def test_add_node(self):
        """Test adding nodes."""
        graph = SourceGraph()
        path = Path("hypr/hyprland.conf")

        graph.add_node(path)

        assert len(graph) == 1
        assert path in graph
        assert graph.order == []

    def test_mark_visited(self):
        """Test that visited nodes keep their order."""
        graph = SourceGraph()
        first = Path("hypr/hyprland.conf")
        second = Path("hypr/colors.conf")

        graph.mark_visited(first)
        graph.mark_visited(second)

        assert graph.order == [first, second]
        assert graph.nodes == {first, second}

    def test_add_edge(self):
        """Test adding edges."""
        graph = SourceGraph()
        source = Path("hypr/hyprland.conf")
        target = Path("hypr/colors.conf")

        graph.add_edge(source, target)

        assert len(graph) == 2
        assert target in graph.get_targets(source)
        assert graph.get_sources(target) == {source}

    def test_get_roots(self):
        """Test getting files nobody sources."""
        graph = SourceGraph()
        root = Path("hyprland.conf")
        shared = Path("colors.conf")
        leaf = Path("palette.conf")

        graph.add_edge(root, shared)
        graph.add_edge(shared, leaf)

        assert graph.get_roots() == {root}

    def test_cycle_has_no_roots(self):
        """Test that a pure cycle has no roots."""
        graph = SourceGraph()
        a, b = Path("a.conf"), Path("b.conf")

        graph.add_edge(a, b)
        graph.add_edge(b, a)

        assert graph.get_roots() == set()

    def test_iter_edges_sorted(self):
        """Test iterating over edges in sorted order."""
        graph = SourceGraph()
        graph.add_edge(Path("b.conf"), Path("c.conf"))
        graph.add_edge(Path("a.conf"), Path("c.conf"))
        graph.add_edge(Path("a.conf"), Path("b.conf"))

        assert list(graph.iter_edges()) == [
            (Path("a.conf"), Path("b.conf")),
            (Path("a.conf"), Path("c.conf")),
            (Path("b.conf"), Path("c.conf")),
        ]

    def test_missing(self):
        """Test recording missing sources."""
        graph = SourceGraph()
        source = Path("hyprland.conf")

        assert not graph.has_missing()
        graph.add_missing(source, "/home/u/gone.conf")

        assert graph.has_missing()
        assert source in graph
        assert graph.get_missing(source) == {"/home/u/gone.conf"}
        assert list(graph.iter_missing()) == [(source, "/home/u/gone.conf")]

    def test_copies_are_returned(self):
        """Test that accessors do not expose internal state."""
        graph = SourceGraph()
        graph.add_edge(Path("a.conf"), Path("b.conf"))

        graph.get_targets(Path("a.conf")).add(Path("x.conf"))
        graph.order.append(Path("x.conf"))

        assert graph.get_targets(Path("a.conf")) == {Path("b.conf")}
        assert graph.order == []

    def test_repr(self):
        """Test the summary representation."""
        graph = SourceGraph()
        graph.add_edge(Path("a.conf"), Path("b.conf"))
        graph.add_missing(Path("a.conf"), "c.conf")

        assert repr(graph) == "SourceGraph(nodes=2, edges=1, missing=1)"
