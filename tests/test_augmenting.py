"""
Tests for augmenting-path maximum matching.
"""

import itertools

import numpy as np
import pytest

from bipartite_graphs import (
    BipartiteGraph,
    Matching,
    VertexOutOfRangeError,
    incidence_matrix,
    is_matched,
    is_scipy_available,
    maximal_matching,
    maximum_matching,
    try_augment,
    unassigned,
)


def brute_force_size(g):
    """Largest matching size by exhaustive search (small graphs only)."""
    best = 0
    edges = list(g.src_edges())
    for k in range(min(g.nsrcs, g.ndsts), 0, -1):
        for combo in itertools.combinations(edges, k):
            if len({e.src for e in combo}) == k and len({e.dst for e in combo}) == k:
                return k
    return best


def random_graph(rng, nsrcs, ndsts, p):
    fadj = [[d for d in range(1, ndsts + 1) if rng.random() < p] for _ in range(nsrcs)]
    return BipartiteGraph(fadj, ndsts)


def assert_valid_matching(m, g):
    """Matched pairs are edges and no source is used twice."""
    used = set()
    for d, s in m.matched_pairs():
        assert g.has_edge(s, d)
        assert s not in used
        used.add(s)


class TestMaximumMatching:
    """Tests for maximum_matching."""

    def test_reference_example(self):
        """Direct matches are preferred and the lowest sources win."""
        g = BipartiteGraph([[1], [1], [2], [2], [1], [1, 2]], 2)
        m = maximum_matching(g)
        assert len(m) == 6
        assert m[1] == 1
        assert m[2] == 3
        assert list(m)[2:] == [unassigned] * 4

    def test_alias(self):
        """maximal_matching is the same function."""
        assert maximal_matching is maximum_matching

    def test_result_not_complete(self):
        """The matching comes back without an inverse."""
        m = maximum_matching(BipartiteGraph([[1]], 1))
        assert not m.is_complete

    def test_length_covers_both_classes(self):
        """The entry list has max(nsrcs, ndsts) entries."""
        assert len(maximum_matching(BipartiteGraph([[1]], 4))) == 4
        assert len(maximum_matching(BipartiteGraph([[1], [1], [1]], 1))) == 3

    def test_empty_graph(self):
        """No vertices, no entries."""
        m = maximum_matching(BipartiteGraph.empty(0, 0))
        assert len(m) == 0

    def test_reroutes_along_path(self):
        """A later source displaces an earlier one along an alternating path."""
        g = BipartiteGraph([[1, 2], [1]], 2)
        m = maximum_matching(g)
        assert m[1] == 2
        assert m[2] == 1

    def test_long_augmenting_path(self):
        """Paths longer than the recursion limit are handled."""
        n = 3000
        fadj = [[i, i + 1] for i in range(1, n + 1)] + [[1]]
        g = BipartiteGraph(fadj, n + 1)
        m = maximum_matching(g)
        assert m.cardinality == n + 1
        assert m[1] == n + 1
        assert all(m[i + 1] == i for i in range(1, n + 1))

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_brute_force(self, seed):
        """The matching has maximum cardinality on small random graphs."""
        rng = np.random.default_rng(seed)
        g = random_graph(rng, 5, 4, 0.35)
        m = maximum_matching(g)
        assert_valid_matching(m, g)
        assert m.cardinality == brute_force_size(g)

    @pytest.mark.skipif(not is_scipy_available(), reason="scipy not installed")
    @pytest.mark.parametrize("seed", range(5))
    def test_matches_scipy(self, seed):
        """Cardinality agrees with scipy's Hopcroft-Karp."""
        from scipy.sparse.csgraph import maximum_bipartite_matching

        rng = np.random.default_rng(100 + seed)
        g = random_graph(rng, 30, 25, 0.08)
        m = maximum_matching(g)
        assert_valid_matching(m, g)
        expected = maximum_bipartite_matching(incidence_matrix(g, sparse=True), perm_type="column")
        assert m.cardinality == int(np.sum(expected >= 0))


class TestFilters:
    """Tests for source/destination filters and payloads."""

    def test_src_filter_skips_sources(self):
        """Filtered sources are never matched."""
        g = BipartiteGraph([[1], [1]], 1)
        m = maximum_matching(g, src_filter=lambda s: s != 1)
        assert m[1] == 2

    def test_dst_filter_excludes_destinations(self):
        """Filtered destinations stay unassigned."""
        g = BipartiteGraph([[1, 2]], 2)
        m = maximum_matching(g, dst_filter=lambda d: d != 1)
        assert m[1] is unassigned
        assert m[2] == 1

    def test_dst_filter_blocks_rerouting(self):
        """Filtered destinations are not used to re-route either."""
        g = BipartiteGraph([[1, 2], [1]], 2)
        m = maximum_matching(g, dst_filter=lambda d: d != 2)
        assert m[1] == 1
        assert m[2] is unassigned

    def test_payload_fills_unmatched_destinations(self):
        """A custom unassigned value marks leftovers without blocking the search."""
        g = BipartiteGraph([[1], [2]], 2)
        m = maximum_matching(g, unassigned_value="why")
        assert list(m) == [1, 2]
        assert m.cardinality == 2

        g = BipartiteGraph([[1], [1]], 2)
        m = maximum_matching(g, unassigned_value=False)
        assert list(m) == [1, False]

    @pytest.mark.parametrize("seed", range(5))
    def test_payload_keeps_cardinality(self, seed):
        """A payload run matches the same pairs as a default run."""
        rng = np.random.default_rng(200 + seed)
        g = random_graph(rng, 8, 6, 0.3)
        default = maximum_matching(g)
        payload = maximum_matching(g, unassigned_value="removed")
        assert payload.cardinality == default.cardinality
        assert list(payload.matched_pairs()) == list(default.matched_pairs())
        assert all(e == "removed" for e in payload if not is_matched(e))


class TestTryAugment:
    """Tests for single augmenting searches."""

    def test_direct_match(self):
        """A free neighbor is taken directly."""
        g = BipartiteGraph([[2]], 2)
        m = Matching(2)
        assert try_augment(m, g, 1)
        assert m[2] == 1

    def test_failure_leaves_matching(self):
        """Without an augmenting path the matching is unchanged."""
        g = BipartiteGraph([[1], [1]], 1)
        m = Matching([1])
        assert not try_augment(m, g, 2)
        assert list(m) == [1]

    def test_colors_are_recorded(self):
        """Visited destinations and sources are marked in the buffers."""
        g = BipartiteGraph([[1], [1]], 1)
        m = Matching([1])
        dcolor = [False]
        scolor = [False, False]
        try_augment(m, g, 2, dcolor=dcolor, scolor=scolor)
        assert dcolor == [True]
        assert scolor == [True, True]

    def test_colored_destinations_are_skipped(self):
        """A pre-colored destination is not re-routed through."""
        g = BipartiteGraph([[1, 2], [1]], 2)
        m = Matching([1, unassigned])
        assert not try_augment(m, g, 2, dcolor=[True, False])
        assert try_augment(m, g, 2, dcolor=[False, False])
        assert m[1] == 2
        assert m[2] == 1

    def test_complete_matching_stays_consistent(self):
        """Augmenting a complete matching keeps the inverse in sync."""
        g = BipartiteGraph([[1, 2], [1]], 2)
        m = Matching([1, unassigned]).complete(2)
        assert try_augment(m, g, 2)
        assert m.inv_match == [2, 1]
        assert all(m.inv_match[s - 1] == d for d, s in m.matched_pairs())

    def test_source_out_of_range(self):
        """The root source must exist."""
        g = BipartiteGraph([[1]], 1)
        with pytest.raises(VertexOutOfRangeError):
            try_augment(Matching(1), g, 2)

    def test_matched_entries_are_ints(self):
        """Entries written by the search are plain source ids."""
        g = BipartiteGraph([[1, 2], [1]], 2)
        m = maximum_matching(g)
        assert all(is_matched(s) for s in m)
