"""
Tests for condensation views.
"""

import numpy as np
import pytest

from bipartite_graphs import (
    BipartiteGraph,
    CondensationGraph,
    DiCMOBiGraph,
    GraphStructureWarning,
    InducedCondensationGraph,
    InvalidPartitionError,
    MatchedCondensationGraph,
    Matching,
    NotCompletedError,
    VertexOutOfRangeError,
    has_cycle,
    maximum_matching,
    strongly_connected_components,
    topological_sort,
)


def cyclic_view():
    """Sources 1 and 2 form a cycle; source 3 points into it twice."""
    g = BipartiteGraph([[1, 2], [1, 2], [1, 2, 3]], 3).complete()
    m = Matching.from_pairs(3, [(1, 1), (2, 2), (3, 3)]).complete()
    return DiCMOBiGraph(g, m)


class TestMatchedCondensation:
    """Tests for condensing a matching-induced graph."""

    def test_singletons_are_unboxed(self):
        """One-element components are stored as bare ids."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], [3]])
        assert cond.sccs == [[1, 2], 3]
        assert cond.scc_assignment == [1, 1, 2]

    def test_vertices(self):
        """One vertex per component."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], 3])
        assert cond.num_vertices == 2
        assert cond.vertices() == range(1, 3)
        assert cond.members(1) == (1, 2)
        assert cond.members(2) == (3,)
        assert cond.component_of(3) == 2

    def test_out_neighbors_with_multiplicity(self):
        """Each crossing edge contributes one neighbor entry."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], [3]])
        assert list(cond.out_neighbors(2)) == [1, 1]
        assert list(cond.out_neighbors(1)) == []

    def test_in_neighbors(self):
        """Edges inside a component are not reported."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], [3]])
        assert sorted(cond.in_neighbors(1)) == [2, 2]
        assert list(cond.in_neighbors(2)) == []

    def test_component_out_of_range(self):
        """Component ids are range-checked."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], [3]])
        with pytest.raises(VertexOutOfRangeError, match="component 3"):
            cond.out_neighbors(3)
        with pytest.raises(VertexOutOfRangeError):
            cond.members(0)

    def test_all_singletons_reproduce_graph(self):
        """Condensing into singletons leaves the edges unchanged."""
        view = cyclic_view()
        cond = MatchedCondensationGraph(view, [[v] for v in view.vertices()])
        for v in view.vertices():
            assert list(cond.out_neighbors(v)) == list(view.out_neighbors(v))
            assert sorted(cond.in_neighbors(v)) == sorted(view.in_neighbors(v))

    def test_precomputed_assignment(self):
        """A supplied assignment list is used as-is."""
        assignment = [1, 1, 2]
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], 3], scc_assignment=assignment)
        assert cond.scc_assignment is assignment

    def test_repr(self):
        """repr shows the class and component count."""
        cond = MatchedCondensationGraph(cyclic_view(), [[1, 2], [3]])
        assert repr(cond) == "MatchedCondensationGraph(num_vertices=2)"

    @pytest.mark.parametrize("seed", range(6))
    def test_condensed_scc_graph_is_acyclic(self, seed):
        """Condensing the strongly connected components removes every cycle."""
        rng = np.random.default_rng(seed)
        fadj = [[d for d in range(1, 11) if rng.random() < 0.3] for _ in range(10)]
        g = BipartiteGraph(fadj, 10).complete()
        view = DiCMOBiGraph(g, maximum_matching(g).complete(10))
        cond = MatchedCondensationGraph(view, strongly_connected_components(view))
        assert not has_cycle(cond)
        assert topological_sort(cond) is not None


class TestInducedCondensation:
    """Tests for condensing destinations related through shared sources."""

    def graph(self):
        return BipartiteGraph([[1, 2], [2, 3]], 3).complete()

    def test_neighbors_follow_component_order(self):
        """Out-neighbors have larger numbers, in-neighbors smaller ones."""
        cond = InducedCondensationGraph(self.graph(), [[1], [2], [3]])
        assert list(cond.out_neighbors(1)) == [2]
        assert list(cond.in_neighbors(1)) == []
        assert list(cond.out_neighbors(2)) == [3]
        assert list(cond.in_neighbors(2)) == [1]
        assert list(cond.out_neighbors(3)) == []
        assert list(cond.in_neighbors(3)) == [2]

    def test_merged_components(self):
        """Destinations in the same component are not neighbors."""
        cond = InducedCondensationGraph(self.graph(), [[1, 2], [3]])
        assert list(cond.out_neighbors(1)) == [2]
        assert list(cond.in_neighbors(2)) == [1]

    def test_vertex_count_uses_destinations(self):
        """The partition ranges over destination ids."""
        g = BipartiteGraph([[1, 2, 3, 4]], 4).complete()
        cond = InducedCondensationGraph(g, [[1, 2], [3, 4]])
        assert cond.num_vertices == 2
        with pytest.raises(InvalidPartitionError):
            InducedCondensationGraph(g, [[5]])

    def test_requires_complete(self):
        """The backward table is needed to relate destinations."""
        with pytest.raises(NotCompletedError):
            InducedCondensationGraph(BipartiteGraph([[1]], 1), [[1]])


class TestPartitionChecks:
    """Tests for partition validation."""

    def test_duplicate_vertex(self):
        """A vertex may appear in one component only."""
        with pytest.raises(InvalidPartitionError, match="already assigned"):
            MatchedCondensationGraph(cyclic_view(), [[1, 2], [2, 3]])

    def test_out_of_range_vertex(self):
        """Components may only name existing vertices."""
        with pytest.raises(InvalidPartitionError, match="out of range"):
            MatchedCondensationGraph(cyclic_view(), [[1, 2], [4]])

    def test_empty_component(self):
        """Empty components are rejected."""
        with pytest.raises(InvalidPartitionError, match="empty"):
            MatchedCondensationGraph(cyclic_view(), [[1, 2, 3], []])

    def test_uncovered_vertices_warn(self):
        """Vertices outside every component are reported."""
        with pytest.warns(GraphStructureWarning, match="1 of 3 vertices"):
            cond = MatchedCondensationGraph(cyclic_view(), [[1, 2]])
        assert cond.component_of(3) == 0

    def test_uncovered_vertices_are_not_neighbors(self):
        """Edges into uncovered vertices never yield component 0."""
        view = cyclic_view()
        with pytest.warns(GraphStructureWarning):
            cond = MatchedCondensationGraph(view, [[1]])
        assert list(cond.out_neighbors(1)) == []
        assert list(cond.in_neighbors(1)) == []
        assert topological_sort(cond) == [1]
        assert strongly_connected_components(cond) == [[1]]

    def test_uncovered_destinations_induced(self):
        """The induced view skips uncovered destinations as well."""
        g = BipartiteGraph([[1, 2], [2, 3]], 3).complete()
        with pytest.warns(GraphStructureWarning):
            cond = InducedCondensationGraph(g, [[2], [3]])
        assert list(cond.in_neighbors(1)) == []
        assert list(cond.in_neighbors(2)) == [1]
        assert all(c in cond.vertices() for c in cond.out_neighbors(1))

    def test_numpy_component_ids(self):
        """numpy integers are accepted as vertex ids in a partition."""
        sccs = [np.int64(3), np.array([1, 2])]
        cond = MatchedCondensationGraph(cyclic_view(), sccs)
        assert cond.sccs == [3, [1, 2]]
        assert cond.scc_assignment == [2, 2, 1]
        assert list(cond.out_neighbors(1)) == [2, 2]

    def test_abstract_base(self):
        """The base class cannot be instantiated."""
        with pytest.raises(TypeError):
            CondensationGraph(cyclic_view(), [[1, 2, 3]])
