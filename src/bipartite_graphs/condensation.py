"""
Condensation views over strongly connected components.

A condensation graph collapses each component of a partition into a single
vertex. Neighbor relations are not stored: they are derived on demand from
the underlying graph, so edge multiplicity between two components reflects
the number of underlying crossing edges. The views expose only a vertex
count, a contiguous vertex range and neighbor enumeration.
"""

from __future__ import annotations

import numbers
import warnings
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Sequence, Union

from .bipartite import BipartiteGraph
from .dicmo import DiCMOBiGraph
from .validation import GraphStructureWarning, check_vertex, validate_partition

# A component: a bare vertex id for a singleton, or a list of ids
Component = Union[int, list[int]]


class CondensationGraph(ABC):
    """
    Abstract base for condensation views.

    Attributes:
        graph: Underlying graph
        sccs: Components; singletons are stored as a bare vertex id
        scc_assignment: ``scc_assignment[v - 1]`` is the component number of
            vertex v (1-based), or 0 if no component contains v. Such
            vertices are never reported as neighbors.
    """

    is_directed = True

    def __init__(
        self,
        graph: Union[DiCMOBiGraph, BipartiteGraph],
        sccs: Sequence[Union[int, Sequence[int]]],
        scc_assignment: Optional[list[int]] = None,
        validate: bool = True,
    ) -> None:
        """
        Build the view from a frozen partition.

        Args:
            graph: Underlying graph
            sccs: Components, each a vertex id or a list of vertex ids
            scc_assignment: Precomputed membership list (derived when omitted)
            validate: Check that every vertex is listed at most once and in range

        Raises:
            InvalidPartitionError: If validate=True and the partition is malformed
        """
        n = graph.ndsts if isinstance(graph, BipartiteGraph) else graph.num_vertices
        comps: list[Component] = []
        for comp in sccs:
            if isinstance(comp, numbers.Integral):
                comps.append(int(comp))
            elif len(comp) == 1:
                comps.append(int(comp[0]))
            else:
                comps.append([int(v) for v in comp])
        if validate:
            validate_partition(comps, n)

        if scc_assignment is None:
            scc_assignment = [0] * n
            for i, comp in enumerate(comps, start=1):
                for v in _members(comp):
                    scc_assignment[v - 1] = i

        uncovered = scc_assignment.count(0)
        if uncovered:
            warnings.warn(
                f"{uncovered} of {n} vertices are not covered by any component; "
                "edges into them are left out of the condensation.",
                GraphStructureWarning,
                stacklevel=3,
            )

        self.graph = graph
        self.sccs = comps
        self.scc_assignment = scc_assignment

    @property
    def num_vertices(self) -> int:
        """Number of components."""
        return len(self.sccs)

    def vertices(self) -> range:
        return range(1, len(self.sccs) + 1)

    def members(self, c: int) -> tuple[int, ...]:
        """Vertices of component ``c``."""
        check_vertex(c, len(self.sccs), "component")
        return tuple(_members(self.sccs[c - 1]))

    def component_of(self, v: int) -> int:
        """Component number of underlying vertex ``v`` (0 if uncovered)."""
        check_vertex(v, len(self.scc_assignment))
        return self.scc_assignment[v - 1]

    @abstractmethod
    def out_neighbors(self, c: int) -> Iterator[int]:
        """Components reached from ``c``, with multiplicity."""

    @abstractmethod
    def in_neighbors(self, c: int) -> Iterator[int]:
        """Components with edges into ``c``, with multiplicity."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_vertices={self.num_vertices})"


def _members(comp: Component) -> Sequence[int]:
    return (comp,) if isinstance(comp, numbers.Integral) else comp


class MatchedCondensationGraph(CondensationGraph):
    """
    Condensation of the directed graph induced by a DiCMOBiGraph.

    Components need not be in topological order. Out-neighbors of a
    component are the components of the out-neighbors of its members,
    excluding itself; in-neighbors mirror this.
    """

    graph: DiCMOBiGraph

    def out_neighbors(self, c: int) -> Iterator[int]:
        check_vertex(c, len(self.sccs), "component")
        return self._crossing(c, self.graph.out_neighbors)

    def in_neighbors(self, c: int) -> Iterator[int]:
        check_vertex(c, len(self.sccs), "component")
        return self._crossing(c, self.graph.in_neighbors)

    def _crossing(self, c: int, neighbors) -> Iterator[int]:
        assignment = self.scc_assignment
        for v in _members(self.sccs[c - 1]):
            for w in neighbors(v):
                cw = assignment[w - 1]
                if cw and cw != c:
                    yield cw


class InducedCondensationGraph(CondensationGraph):
    """
    Condensation over the destination vertices of a completed BipartiteGraph.

    Two destinations are related when they share a source. Components are
    assumed to be in topological order: out-neighbors of component ``c`` are
    the related components with a larger number, in-neighbors those with a
    smaller one. The order is not verified; an out-of-order partition yields
    an inconsistent graph.
    """

    graph: BipartiteGraph

    def __init__(
        self,
        graph: BipartiteGraph,
        sccs: Sequence[Union[int, Sequence[int]]],
        scc_assignment: Optional[list[int]] = None,
        validate: bool = True,
    ) -> None:
        """
        Raises:
            NotCompletedError: If ``graph`` is not complete
        """
        graph.require_complete()
        super().__init__(graph, sccs, scc_assignment, validate)

    def _related(self, c: int) -> Iterator[int]:
        fadjlist = self.graph.fadjlist
        badjlist = self.graph.badjlist
        assert not isinstance(badjlist, int)
        assignment = self.scc_assignment
        for v in _members(self.sccs[c - 1]):
            for s in badjlist[v - 1]:
                for d in fadjlist[s - 1]:
                    cd = assignment[d - 1]
                    if cd:
                        yield cd

    def out_neighbors(self, c: int) -> Iterator[int]:
        check_vertex(c, len(self.sccs), "component")
        return (cd for cd in self._related(c) if cd > c)

    def in_neighbors(self, c: int) -> Iterator[int]:
        check_vertex(c, len(self.sccs), "component")
        return (cd for cd in self._related(c) if cd < c)


__all__ = [
    "Component",
    "CondensationGraph",
    "MatchedCondensationGraph",
    "InducedCondensationGraph",
]
