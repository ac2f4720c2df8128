"""
Directed, contracted, matching-oriented view of a bipartite graph.

DiCMOBiGraph pairs an undirected BipartiteGraph with a Matching of its
destination vertices and exposes, without copying, the directed graph the
pair induces:

1. The matching orients the bipartite edges. Matched edges point from
   destination to source, all other edges from source to destination.
   (Transposed: the other way around.)

2. Each destination is contracted into the source it is matched to.
   (Transposed: each source into its matched destination.)

The result is a directed graph on the source vertices (transposed: on the
destination vertices). It is acyclic if and only if the oriented bipartite
graph is acyclic, which makes its strongly connected components the blocks
of a block-triangular decomposition of the underlying sparse system.

Seen as the incidence graph of a hypergraph, a matching is a
(1, n)-orientation: every hyperedge gets exactly one head. This view expands
each directed hyperedge into ordinary edges from its tails to its head.
"""

from __future__ import annotations

import warnings
from typing import Iterator, Optional

from .bipartite import BipartiteGraph
from .digraph import SimpleDiGraph
from .matching import Matching
from .types import is_matched
from .validation import GraphStructureWarning, check_vertex


def _oriented_neighbors(v: int, dsts: list[int], matching: Matching) -> Iterator[int]:
    # The matched edge of v is reversed in the induced graph and unmatched
    # destinations vanish in the contraction, both are skipped.
    get = matching.get
    for d in dsts:
        s = get(d)
        if not is_matched(s) or s == v:
            continue
        yield s


def _contracted_neighbors(
    v: int,
    fadjlist: list[list[int]],
    matching: Matching,
) -> Iterator[int]:
    s = matching.get(v)
    if not is_matched(s):
        return
    for d in fadjlist[s - 1]:
        if d != v:
            yield d


class DiCMOBiGraph:
    """
    Directed graph induced by a bipartite graph and a matching.

    The view aliases both inputs. The edge count is computed on first
    request and memoized; it goes stale if the graph or the matching is
    mutated afterwards, so create a fresh view after mutating either.

    Attributes:
        graph: Underlying bipartite graph
        matching: Matching indexed by destination of ``graph``
        transposed: False for a graph on the sources, True for the destinations

    Example:
        >>> g = BipartiteGraph([[1, 2], [2, 3], [3]], 3).complete()
        >>> m = Matching.from_pairs(3, [(1, 1), (2, 2), (3, 3)])
        >>> list(DiCMOBiGraph(g, m).out_neighbors(1))
        [2]
    """

    is_directed = True

    def __init__(
        self,
        graph: BipartiteGraph,
        matching: Optional[Matching] = None,
        transposed: bool = False,
    ) -> None:
        """
        Create the view.

        Args:
            graph: Bipartite graph
            matching: Matching of the destinations of ``graph``. Defaults to an
                empty matching, whose induced graph has no edges.
            transposed: Build the graph on destinations instead of sources
        """
        ne: Optional[int] = None
        if matching is None:
            matching = Matching(graph.ndsts)
            ne = 0
        elif len(matching) < graph.ndsts:
            warnings.warn(
                f"Matching covers {len(matching)} of {graph.ndsts} destinations. "
                "Destinations beyond its end are treated as unassigned.",
                GraphStructureWarning,
                stacklevel=2,
            )
        self.graph = graph
        self.matching = matching
        self.transposed = bool(transposed)
        self._ne = ne

    @classmethod
    def _alias(
        cls,
        graph: BipartiteGraph,
        matching: Matching,
        transposed: bool,
        ne: Optional[int],
    ) -> DiCMOBiGraph:
        view = cls.__new__(cls)
        view.graph = graph
        view.matching = matching
        view.transposed = transposed
        view._ne = ne
        return view

    @classmethod
    def with_vertices(cls, n: int) -> SimpleDiGraph:
        """
        Plain directed graph with ``n`` vertices and no edges.

        A DiCMOBiGraph cannot exist without a backing bipartite graph, so
        utilities that build a same-shaped empty graph get a SimpleDiGraph.
        """
        return SimpleDiGraph(n)

    def invview(self) -> DiCMOBiGraph:
        """
        Return the opposite orientation over the inverted graph and matching.

        The view aliases this one's storage.

        Raises:
            NotCompletedError: If the graph or the matching is not complete
        """
        return DiCMOBiGraph._alias(
            self.graph.invview(),
            self.matching.invview(),
            not self.transposed,
            self._ne,
        )

    # -------------------------------------------------------------------------
    # Vertices
    # -------------------------------------------------------------------------

    @property
    def num_vertices(self) -> int:
        return self.graph.ndsts if self.transposed else self.graph.nsrcs

    def vertices(self) -> range:
        return self.graph.dst_vertices() if self.transposed else self.graph.src_vertices()

    # -------------------------------------------------------------------------
    # Neighbors
    # -------------------------------------------------------------------------

    def out_neighbors(self, v: int) -> Iterator[int]:
        """
        Vertices reached from ``v`` by one induced edge.

        Not transposed: for every destination of source ``v`` matched to
        another source, that source. Transposed: computed on the inverted
        view, which requires a completed graph and matching.
        """
        if self.transposed:
            return self.invview().out_neighbors(v)
        check_vertex(v, self.graph.nsrcs, "source")
        return _oriented_neighbors(v, self.graph.fadjlist[v - 1], self.matching)

    def in_neighbors(self, v: int) -> Iterator[int]:
        """
        Vertices with an induced edge into ``v``.

        Transposed: if destination ``v`` is matched to source s, every other
        destination of s; nothing if ``v`` is unmatched. Not transposed:
        computed on the inverted view, which requires a completed graph and
        matching.
        """
        if not self.transposed:
            return self.invview().in_neighbors(v)
        check_vertex(v, self.graph.ndsts, "destination")
        return _contracted_neighbors(v, self.graph.fadjlist, self.matching)

    def has_edge(self, a: int, b: int) -> bool:
        """Check for the induced edge ``a -> b``. O(degree)."""
        n = self.num_vertices
        if not (1 <= a <= n and 1 <= b <= n):
            return False
        if self.transposed:
            return a in self.in_neighbors(b)
        return b in self.out_neighbors(a)

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over induced ``(u, v)`` edges."""
        if self.transposed:
            for v in self.vertices():
                for w in self.in_neighbors(v):
                    yield w, v
        else:
            for v in self.vertices():
                for w in self.out_neighbors(v):
                    yield v, w

    @property
    def num_edges(self) -> int:
        """Number of induced edges, memoized on first access."""
        if self._ne is None:
            self._ne = sum(1 for _ in self.edges())
        return self._ne

    def __repr__(self) -> str:
        kind = "destinations" if self.transposed else "sources"
        return f"DiCMOBiGraph on {self.num_vertices} {kind} of {self.graph!r}"


__all__ = ["DiCMOBiGraph"]
