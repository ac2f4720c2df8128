"""
A small materialized directed graph.

SimpleDiGraph is the concrete graph that derived views produce when a
same-shaped graph has to be built from a vertex count alone (for example
by ``induced_subgraph``). Vertices are numbered ``1..n``; adjacency lists are
kept sorted and duplicate-free.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterator

from .validation import EdgeNotFoundError, check_vertex


class SimpleDiGraph:
    """
    Directed graph without parallel edges.

    Attributes:
        fadjlist: ``fadjlist[v - 1]`` is the sorted out-neighbor list of v
        badjlist: ``badjlist[v - 1]`` is the sorted in-neighbor list of v
    """

    __slots__ = ("fadjlist", "badjlist", "_ne")

    is_directed = True

    def __init__(self, n: int = 0) -> None:
        self.fadjlist: list[list[int]] = [[] for _ in range(n)]
        self.badjlist: list[list[int]] = [[] for _ in range(n)]
        self._ne = 0

    @classmethod
    def with_vertices(cls, n: int) -> SimpleDiGraph:
        """Empty graph with ``n`` vertices."""
        return cls(n)

    @property
    def num_vertices(self) -> int:
        return len(self.fadjlist)

    @property
    def num_edges(self) -> int:
        return self._ne

    def vertices(self) -> range:
        return range(1, len(self.fadjlist) + 1)

    def add_vertex(self) -> int:
        """Add a vertex and return its id."""
        self.fadjlist.append([])
        self.badjlist.append([])
        return len(self.fadjlist)

    def has_edge(self, u: int, v: int) -> bool:
        n = len(self.fadjlist)
        if not (1 <= u <= n and 1 <= v <= n):
            return False
        outs = self.fadjlist[u - 1]
        i = bisect_left(outs, v)
        return i < len(outs) and outs[i] == v

    def add_edge(self, u: int, v: int) -> bool:
        """
        Add the edge ``u -> v``.

        Returns:
            True if the edge was added, False if it was already present

        Raises:
            VertexOutOfRangeError: If either endpoint is out of range
        """
        n = len(self.fadjlist)
        check_vertex(u, n)
        check_vertex(v, n)
        outs = self.fadjlist[u - 1]
        i = bisect_left(outs, v)
        if i < len(outs) and outs[i] == v:
            return False
        outs.insert(i, v)
        ins = self.badjlist[v - 1]
        ins.insert(bisect_left(ins, u), u)
        self._ne += 1
        return True

    def rem_edge(self, u: int, v: int) -> bool:
        """
        Remove the edge ``u -> v``.

        Raises:
            VertexOutOfRangeError: If either endpoint is out of range
            EdgeNotFoundError: If the edge is not in the graph
        """
        n = len(self.fadjlist)
        check_vertex(u, n)
        check_vertex(v, n)
        if not self.has_edge(u, v):
            raise EdgeNotFoundError(f"graph does not have edge {u} -> {v}")
        outs = self.fadjlist[u - 1]
        del outs[bisect_left(outs, v)]
        ins = self.badjlist[v - 1]
        del ins[bisect_left(ins, u)]
        self._ne -= 1
        return True

    def out_neighbors(self, v: int) -> list[int]:
        check_vertex(v, len(self.fadjlist))
        return self.fadjlist[v - 1]

    def in_neighbors(self, v: int) -> list[int]:
        check_vertex(v, len(self.badjlist))
        return self.badjlist[v - 1]

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over ``(u, v)`` edges ordered by source, then target."""
        for u, outs in enumerate(self.fadjlist, start=1):
            for v in outs:
                yield u, v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleDiGraph):
            return NotImplemented
        return self.fadjlist == other.fadjlist

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SimpleDiGraph(num_vertices={self.num_vertices}, num_edges={self.num_edges})"


__all__ = ["SimpleDiGraph"]
