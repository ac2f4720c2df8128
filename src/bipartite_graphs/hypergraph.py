"""
Hypergraph on top of a BipartiteGraph.

Each hyperedge is a source vertex of the underlying bipartite graph and each
hypergraph vertex a destination vertex; a hyperedge has a bipartite edge to
every vertex it contains. Vertices carry arbitrary hashable labels.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterable, TypeVar

from .bipartite import BipartiteGraph
from .types import VertexKind

V = TypeVar("V", bound=Hashable)


class UnionFind:
    """
    Disjoint-set forest over the ids ``1..n`` with path halving and union by size.
    """

    __slots__ = ("parent", "size")

    def __init__(self, n: int) -> None:
        self.parent = list(range(n + 1))
        self.size = [1] * (n + 1)

    def add(self) -> int:
        """Add a new singleton set and return its id."""
        self.parent.append(len(self.parent))
        self.size.append(1)
        return len(self.parent) - 1

    def find(self, x: int) -> int:
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, x: int, y: int) -> int:
        """Merge the sets of ``x`` and ``y``; return the representative."""
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return rx
        if self.size[rx] < self.size[ry]:
            rx, ry = ry, rx
        self.parent[ry] = rx
        self.size[rx] += self.size[ry]
        return rx

    def groups(self) -> list[list[int]]:
        """All sets, each sorted, ordered by their smallest member."""
        by_root: dict[int, list[int]] = {}
        for x in range(1, len(self.parent)):
            by_root.setdefault(self.find(x), []).append(x)
        return list(by_root.values())


class HyperGraph(Generic[V]):
    """
    Hypergraph with labelled vertices.

    Attributes:
        labels: Mapping from vertex label to integer id
        invmap: ``invmap[i - 1]`` is the label of vertex i
        graph: Bipartite graph with hyperedges as sources, vertices as destinations

    Example:
        >>> h = HyperGraph()
        >>> h.add_edge(["a", "b"])
        1
        >>> h.add_edge(["b", "c"])
        2
        >>> h.connected_components()
        [['a', 'b', 'c']]
    """

    def __init__(self) -> None:
        self.labels: dict[V, int] = {}
        self.invmap: list[V] = []
        self.graph = BipartiteGraph.empty(0, 0, complete=True)

    @property
    def num_vertices(self) -> int:
        return len(self.invmap)

    @property
    def num_edges(self) -> int:
        return self.graph.nsrcs

    def add_vertex(self, label: V) -> int:
        """Add a vertex; no-op if the label exists. Returns the vertex id."""
        j = self.labels.get(label)
        if j is not None:
            return j
        j = self.graph.add_vertex(VertexKind.DST)
        self.invmap.append(label)
        assert len(self.invmap) == j
        self.labels[label] = j
        return j

    def add_edge(self, labels: Iterable[V]) -> int:
        """Add a hyperedge, adding missing vertices. Returns the hyperedge id."""
        i = self.graph.add_vertex(VertexKind.SRC)
        for label in labels:
            self.graph.add_edge(i, self.add_vertex(label))
        return i

    def vertex_id(self, label: V) -> int:
        """Id of the vertex labelled ``label``; KeyError if absent."""
        return self.labels[label]

    def label(self, j: int) -> V:
        return self.invmap[j - 1]

    def edge_vertices(self, e: int) -> list[V]:
        """Labels of the vertices of hyperedge ``e``, ordered by vertex id."""
        return [self.invmap[j - 1] for j in self.graph.src_neighbors(e)]

    def connected_components(self) -> list[list[V]]:
        """
        Group vertices connected through shared hyperedges.

        Returns:
            Lists of labels, each ordered by vertex id, components ordered by
            their first vertex.
        """
        uf = UnionFind(self.num_vertices)
        for e in self.graph.src_vertices():
            members = self.graph.src_neighbors(e)
            for j in members[1:]:
                uf.union(members[0], j)
        return [[self.invmap[j - 1] for j in group] for group in uf.groups()]

    def __repr__(self) -> str:
        return f"HyperGraph with {self.num_vertices} vertices and {self.num_edges} hyperedges"

    def __str__(self) -> str:
        from .display import format_hypergraph

        return format_hypergraph(self)


__all__ = ["UnionFind", "HyperGraph"]
