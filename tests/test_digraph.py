"""Tests for SimpleDiGraph."""

import pytest

from bipartite_graphs import EdgeNotFoundError, SimpleDiGraph, VertexOutOfRangeError


class TestSimpleDiGraph:
    """Tests for the materialized directed graph."""

    def test_empty(self):
        """A new graph has vertices and no edges."""
        g = SimpleDiGraph(3)
        assert g.num_vertices == 3
        assert g.num_edges == 0
        assert g.vertices() == range(1, 4)
        assert g.is_directed

    def test_with_vertices(self):
        """with_vertices is an alternate constructor."""
        assert SimpleDiGraph.with_vertices(2) == SimpleDiGraph(2)

    def test_add_edge(self):
        """Edges are stored in both directions, sorted."""
        g = SimpleDiGraph(3)
        assert g.add_edge(1, 3)
        assert g.add_edge(1, 2)
        assert g.add_edge(3, 2)
        assert g.out_neighbors(1) == [2, 3]
        assert g.in_neighbors(2) == [1, 3]
        assert g.num_edges == 3

    def test_add_duplicate_edge(self):
        """Parallel edges are not stored."""
        g = SimpleDiGraph(2)
        g.add_edge(1, 2)
        assert not g.add_edge(1, 2)
        assert g.num_edges == 1

    def test_rem_edge(self):
        """Removing updates both tables."""
        g = SimpleDiGraph(2)
        g.add_edge(1, 2)
        assert g.rem_edge(1, 2)
        assert g.out_neighbors(1) == []
        assert g.in_neighbors(2) == []
        assert g.num_edges == 0

    def test_rem_missing_edge(self):
        """Removing an absent edge raises."""
        with pytest.raises(EdgeNotFoundError, match="1 -> 2"):
            SimpleDiGraph(2).rem_edge(1, 2)

    def test_out_of_range(self):
        """Endpoints must exist."""
        g = SimpleDiGraph(2)
        with pytest.raises(VertexOutOfRangeError):
            g.add_edge(1, 3)
        with pytest.raises(VertexOutOfRangeError):
            g.out_neighbors(0)
        assert not g.has_edge(1, 3)

    def test_add_vertex(self):
        """New vertices get the next id."""
        g = SimpleDiGraph()
        assert g.add_vertex() == 1
        assert g.add_vertex() == 2
        assert g.add_edge(2, 1)

    def test_edges_and_repr(self):
        """Edges are listed by tail."""
        g = SimpleDiGraph(3)
        g.add_edge(2, 1)
        g.add_edge(1, 3)
        assert list(g.edges()) == [(1, 3), (2, 1)]
        assert repr(g) == "SimpleDiGraph(num_vertices=3, num_edges=2)"
