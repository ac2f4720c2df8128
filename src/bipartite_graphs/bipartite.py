"""
Bipartite graph with lazily-completable dual adjacency.

A BipartiteGraph maps source vertices ``1..nsrcs`` to the destination
vertices ``1..ndsts`` they are incident on. The forward table (destinations
per source) is always stored. The backward table (sources per destination)
is optional: an incomplete graph only records the destination count, and
``complete()`` materializes the transpose on demand. A completed graph offers
O(1) backward lookup at the cost of slower edge insertion.

Example:
    >>> g = BipartiteGraph([[1], [1], [2], [2], [1], [1, 2]], 2)
    >>> g.num_edges
    7
    >>> g.complete().dst_neighbors(1)
    [1, 2, 5, 6]
"""

from __future__ import annotations

import copy as _copy
from bisect import bisect_left
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional, Sequence, Union

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import NO_METADATA, BipartiteEdge, VertexKind
from .validation import (
    EdgeNotFoundError,
    InvalidAdjacencyError,
    InvalidVertexKindError,
    NotCompletedError,
    check_vertex,
    validate_adjacency,
)


class _EdgeCounter:
    """Edge count shared between a graph and its inverted views."""

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value


def _find_sorted(lst: list[int], x: int) -> int:
    """Return the position of ``x`` in sorted ``lst``, or -1."""
    i = bisect_left(lst, x)
    if i < len(lst) and lst[i] == x:
        return i
    return -1


class BipartiteGraph:
    """
    Bipartite graph between source and destination vertices.

    Attributes:
        fadjlist: ``fadjlist[s - 1]`` is the sorted destination list of source s
        badjlist: ``badjlist[d - 1]`` is the sorted source list of destination d,
            or the destination count when the graph is not complete
        metadata: Optional per-edge payloads, ``metadata[s - 1][k]`` belongs
            to the k-th edge of source s
    """

    def __init__(
        self,
        fadjlist: Sequence[Sequence[int]],
        badjlist: Union[Sequence[Sequence[int]], int, None] = None,
        ne: Optional[int] = None,
        metadata: Optional[Sequence[Sequence[Any]]] = None,
        validate: bool = True,
    ) -> None:
        """
        Build a graph from explicit adjacency lists.

        Args:
            fadjlist: Destination lists per source
            badjlist: Source lists per destination, the number of destinations,
                or None to infer the count from the largest destination in use.
                When only a count is given the backward table is computed lazily
                by ``complete()``.
            ne: Number of edges (default: inferred from ``fadjlist``)
            metadata: Per-edge payloads shaped like ``fadjlist``
            validate: Check sortedness, ranges, transposition and edge count

        Raises:
            InvalidAdjacencyError: If validate=True and an invariant is violated
        """
        fadj = [list(dsts) for dsts in fadjlist]
        badj: Union[list[list[int]], int]
        if badjlist is None:
            badj = max((max(dsts) for dsts in fadj if dsts), default=0)
        elif isinstance(badjlist, int):
            badj = badjlist
        else:
            badj = [list(srcs) for srcs in badjlist]

        counted = sum(len(dsts) for dsts in fadj)
        if ne is None:
            ne = counted

        md = None if metadata is None else [list(vals) for vals in metadata]

        if validate:
            ndsts = badj if isinstance(badj, int) else len(badj)
            validate_adjacency(fadj, ndsts, None if isinstance(badj, int) else badj)
            if ne != counted:
                raise InvalidAdjacencyError(
                    f"Edge count {ne} does not match the {counted} forward entries"
                )
            if md is not None and [len(v) for v in md] != [len(d) for d in fadj]:
                raise InvalidAdjacencyError("Metadata shape does not match the forward table")

        self.fadjlist: list[list[int]] = fadj
        self.badjlist: Union[list[list[int]], int] = badj
        self.metadata: Optional[list[list[Any]]] = md
        # Payloads aligned with badjlist; only set on inverted views
        self._back_metadata: Optional[list[list[Any]]] = None
        self._ne = _EdgeCounter(ne)

    @classmethod
    def empty(
        cls,
        nsrcs: int,
        ndsts: int,
        complete: bool = True,
        metadata: bool = False,
    ) -> BipartiteGraph:
        """
        Build a graph with ``nsrcs`` sources, ``ndsts`` destinations and no edges.

        Args:
            nsrcs: Number of source vertices
            ndsts: Number of destination vertices
            complete: Store the (empty) backward table right away
            metadata: Allocate per-edge metadata lists
        """
        fadj: list[list[int]] = [[] for _ in range(nsrcs)]
        badj: Union[list[list[int]], int] = [[] for _ in range(ndsts)] if complete else ndsts
        md: Optional[list[list[Any]]] = [[] for _ in range(nsrcs)] if metadata else None
        return cls._alias(fadj, badj, _EdgeCounter(0), md)

    @classmethod
    def _alias(
        cls,
        fadjlist: list[list[int]],
        badjlist: Union[list[list[int]], int],
        counter: _EdgeCounter,
        metadata: Optional[list[list[Any]]],
        back_metadata: Optional[list[list[Any]]] = None,
    ) -> BipartiteGraph:
        """Wrap existing tables without copying or validating them."""
        g = cls.__new__(cls)
        g.fadjlist = fadjlist
        g.badjlist = badjlist
        g.metadata = metadata
        g._back_metadata = back_metadata
        g._ne = counter
        return g

    # -------------------------------------------------------------------------
    # Completion and views
    # -------------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        """True if the backward adjacency table is stored."""
        return not isinstance(self.badjlist, int)

    def complete(self) -> Self:
        """
        Populate the backward adjacency table in place, if not already stored.

        Returns:
            The graph itself
        """
        if not isinstance(self.badjlist, int):
            return self
        badj: list[list[int]] = [[] for _ in range(self.badjlist)]
        for s, dsts in enumerate(self.fadjlist, start=1):
            for d in dsts:
                badj[d - 1].append(s)
        self.badjlist = badj
        return self

    def require_complete(self) -> None:
        """Raise NotCompletedError if the graph has no backward adjacency."""
        if isinstance(self.badjlist, int):
            raise NotCompletedError("The graph has no back edges. Use `complete`.")

    def invview(self) -> BipartiteGraph:
        """
        Return a view with source and destination vertices swapped.

        The view shares adjacency lists and the edge count with this graph:
        mutations through either are visible through both. The view cannot
        report payloads, but edges added or removed through it keep this
        graph's metadata aligned (new edges get None). Inverting the view
        again restores payload access.

        Raises:
            NotCompletedError: If the graph is not complete
        """
        self.require_complete()
        assert not isinstance(self.badjlist, int)
        return BipartiteGraph._alias(
            self.badjlist, self.fadjlist, self._ne, self._back_metadata, self.metadata
        )

    # -------------------------------------------------------------------------
    # Vertex queries
    # -------------------------------------------------------------------------

    @property
    def nsrcs(self) -> int:
        """Number of source vertices."""
        return len(self.fadjlist)

    @property
    def ndsts(self) -> int:
        """Number of destination vertices."""
        if isinstance(self.badjlist, int):
            return self.badjlist
        return len(self.badjlist)

    @property
    def num_vertices(self) -> int:
        """Total number of vertices of both classes."""
        return self.nsrcs + self.ndsts

    @property
    def num_edges(self) -> int:
        """Number of edges."""
        return self._ne.value

    def src_vertices(self) -> range:
        """Source vertex ids."""
        return range(1, self.nsrcs + 1)

    def dst_vertices(self) -> range:
        """Destination vertex ids."""
        return range(1, self.ndsts + 1)

    def vertices(self) -> tuple[range, range]:
        """Source and destination vertex ids as a tuple."""
        return self.src_vertices(), self.dst_vertices()

    def has_src_vertex(self, v: int) -> bool:
        return 1 <= v <= self.nsrcs

    def has_dst_vertex(self, v: int) -> bool:
        return 1 <= v <= self.ndsts

    # -------------------------------------------------------------------------
    # Neighbor queries
    # -------------------------------------------------------------------------

    def src_neighbors(self, s: int, with_metadata: bool = False) -> Any:
        """
        Destinations of source ``s``.

        The returned list is the graph's own storage; do not mutate it.

        Args:
            s: Source vertex id
            with_metadata: Return ``(dst, payload)`` pairs instead

        Raises:
            VertexOutOfRangeError: If ``s`` is not a source vertex
        """
        check_vertex(s, len(self.fadjlist), "source")
        dsts = self.fadjlist[s - 1]
        if with_metadata:
            return list(zip(dsts, self._require_metadata()[s - 1]))
        return dsts

    def dst_neighbors(self, d: int, with_metadata: bool = False) -> Any:
        """
        Sources of destination ``d``.

        Args:
            d: Destination vertex id
            with_metadata: Return ``(src, payload)`` pairs instead

        Raises:
            NotCompletedError: If the graph is not complete
            VertexOutOfRangeError: If ``d`` is not a destination vertex
        """
        self.require_complete()
        assert not isinstance(self.badjlist, int)
        check_vertex(d, len(self.badjlist), "destination")
        srcs = self.badjlist[d - 1]
        if with_metadata:
            md = self._require_metadata()
            return [(s, md[s - 1][_find_sorted(self.fadjlist[s - 1], d)]) for s in srcs]
        return srcs

    def _require_metadata(self) -> list[list[Any]]:
        if self.metadata is None:
            raise ValueError("Graph carries no edge metadata")
        return self.metadata

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def has_edge(self, src: Union[int, BipartiteEdge], dst: Optional[int] = None) -> bool:
        """Check if the edge ``src -> dst`` exists. Out-of-range ids give False."""
        s, d = _unpack_edge(src, dst)
        if not (self.has_src_vertex(s) and self.has_dst_vertex(d)):
            return False
        return _find_sorted(self.fadjlist[s - 1], d) >= 0

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, BipartiteEdge):
            return False
        return self.has_edge(edge)

    def add_edge(
        self,
        src: Union[int, BipartiteEdge],
        dst: Optional[int] = None,
        metadata: Any = NO_METADATA,
    ) -> bool:
        """
        Add the edge ``src -> dst``.

        Args:
            src: Source vertex id, or a BipartiteEdge (then omit ``dst``)
            dst: Destination vertex id
            metadata: Payload stored alongside the edge. Graphs that carry
                metadata store None when it is omitted.

        Returns:
            True if the edge was added, False if it was already present

        Raises:
            VertexOutOfRangeError: If either endpoint is out of range
        """
        s, d = _unpack_edge(src, dst)
        check_vertex(s, self.nsrcs, "source")
        check_vertex(d, self.ndsts, "destination")
        if metadata is not NO_METADATA and self.metadata is None:
            raise ValueError("Graph carries no edge metadata")

        dsts = self.fadjlist[s - 1]
        index = bisect_left(dsts, d)
        if index < len(dsts) and dsts[index] == d:
            return False
        dsts.insert(index, d)
        if self.metadata is not None:
            self.metadata[s - 1].insert(index, None if metadata is NO_METADATA else metadata)

        self._ne.value += 1
        if not isinstance(self.badjlist, int):
            srcs = self.badjlist[d - 1]
            bindex = bisect_left(srcs, s)
            srcs.insert(bindex, s)
            if self._back_metadata is not None:
                self._back_metadata[d - 1].insert(bindex, None)
        return True

    def rem_edge(self, src: Union[int, BipartiteEdge], dst: Optional[int] = None) -> bool:
        """
        Remove the edge ``src -> dst``.

        Returns:
            True

        Raises:
            VertexOutOfRangeError: If either endpoint is out of range
            EdgeNotFoundError: If the edge is not in the graph
        """
        s, d = _unpack_edge(src, dst)
        check_vertex(s, self.nsrcs, "source")
        check_vertex(d, self.ndsts, "destination")

        dsts = self.fadjlist[s - 1]
        index = _find_sorted(dsts, d)
        if index < 0:
            raise EdgeNotFoundError(f"graph does not have edge {BipartiteEdge(s, d)!r}")
        del dsts[index]
        if self.metadata is not None:
            del self.metadata[s - 1][index]

        self._ne.value -= 1
        if not isinstance(self.badjlist, int):
            srcs = self.badjlist[d - 1]
            bindex = bisect_left(srcs, s)
            del srcs[bindex]
            if self._back_metadata is not None:
                del self._back_metadata[d - 1][bindex]
        return True

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_vertex(self, kind: VertexKind) -> int:
        """
        Add a vertex of class ``kind``.

        Returns:
            The id of the new vertex

        Raises:
            InvalidVertexKindError: If ``kind`` is not VertexKind.SRC or VertexKind.DST
        """
        if kind is VertexKind.DST:
            if isinstance(self.badjlist, int):
                self.badjlist += 1
                return self.badjlist
            self.badjlist.append([])
            if self._back_metadata is not None:
                self._back_metadata.append([])
            return len(self.badjlist)
        elif kind is VertexKind.SRC:
            self.fadjlist.append([])
            if self.metadata is not None:
                self.metadata.append([])
            return len(self.fadjlist)
        raise InvalidVertexKindError(f"kind ({kind!r}) must be either SRC or DST")

    def set_neighbors(self, src: int, new_neighbors: Iterable[int]) -> None:
        """
        Replace the destination list of source ``src``.

        The new list is sorted and deduplicated. Metadata of destinations that
        remain neighbors is kept; new neighbors get None.

        Raises:
            VertexOutOfRangeError: If ``src`` or any new neighbor is out of range
        """
        s = check_vertex(src, self.nsrcs, "source")
        new = sorted(set(new_neighbors))
        ndsts = self.ndsts
        for d in new:
            check_vertex(d, ndsts, "destination")

        old = self.fadjlist[s - 1]
        self._ne.value += len(new) - len(old)

        if not isinstance(self.badjlist, int):
            new_set = set(new)
            old_set = set(old)
            for d in old:
                if d not in new_set:
                    srcs = self.badjlist[d - 1]
                    index = _find_sorted(srcs, s)
                    if index >= 0:
                        del srcs[index]
                        if self._back_metadata is not None:
                            del self._back_metadata[d - 1][index]
            for d in new:
                if d not in old_set:
                    srcs = self.badjlist[d - 1]
                    index = bisect_left(srcs, s)
                    if not (index < len(srcs) and srcs[index] == s):
                        srcs.insert(index, s)
                        if self._back_metadata is not None:
                            self._back_metadata[d - 1].insert(index, None)

        if self.metadata is not None:
            kept = dict(zip(old, self.metadata[s - 1]))
            self.metadata[s - 1][:] = [kept.get(d) for d in new]
        old[:] = new

    def delete_srcs(self, srcs: Iterable[int], remove_vertices: bool = False) -> Self:
        """
        Remove all edges incident on the given sources.

        All ids are checked before the graph is touched.

        Args:
            srcs: Source vertex ids
            remove_vertices: Also remove the vertices. Remaining sources are
                renumbered to stay contiguous.

        Raises:
            VertexOutOfRangeError: If any id is out of range
        """
        n = self.nsrcs
        ids = sorted({check_vertex(s, n, "source") for s in srcs})
        for s in ids:
            self.set_neighbors(s, ())

        if remove_vertices and ids:
            removed = set(ids)
            old_to_new = [0] * n
            offset = 0
            for i in range(1, n + 1):
                if i in removed:
                    offset += 1
                    continue
                old_to_new[i - 1] = i - offset

            if not isinstance(self.badjlist, int):
                for back in self.badjlist:
                    back[:] = [old_to_new[s - 1] for s in back if old_to_new[s - 1]]
            self.fadjlist[:] = [
                dsts for i, dsts in enumerate(self.fadjlist, start=1) if i not in removed
            ]
            if self.metadata is not None:
                self.metadata[:] = [
                    vals for i, vals in enumerate(self.metadata, start=1) if i not in removed
                ]
        return self

    def delete_dsts(self, dsts: Iterable[int], remove_vertices: bool = False) -> Self:
        """
        Remove all edges incident on the given destinations.

        Implemented as ``delete_srcs`` on the inverted view.

        Args:
            dsts: Destination vertex ids
            remove_vertices: Also remove the vertices, renumbering the rest

        Raises:
            NotCompletedError: If the graph is not complete
            VertexOutOfRangeError: If any id is out of range
        """
        self.require_complete()
        assert not isinstance(self.badjlist, int)
        n = self.ndsts
        ids = sorted({check_vertex(d, n, "destination") for d in dsts})

        self.invview().delete_srcs(ids, remove_vertices=remove_vertices)
        return self

    def clear(self) -> None:
        """Remove all edges, keeping the vertices."""
        for dsts in self.fadjlist:
            dsts.clear()
        if not isinstance(self.badjlist, int):
            for srcs in self.badjlist:
                srcs.clear()
        for table in (self.metadata, self._back_metadata):
            if table is not None:
                for vals in table:
                    vals.clear()
        self._ne.value = 0

    # -------------------------------------------------------------------------
    # Edge iteration
    # -------------------------------------------------------------------------

    def src_edges(self) -> Iterator[BipartiteEdge]:
        """Iterate over all edges ordered by source, then destination."""
        for s, dsts in enumerate(self.fadjlist, start=1):
            for d in dsts:
                yield BipartiteEdge(s, d)

    def dst_edges(self) -> Iterator[BipartiteEdge]:
        """
        Iterate over all edges ordered by destination, then source.

        Raises:
            NotCompletedError: If the graph is not complete
        """
        self.require_complete()
        return self._iter_dst_edges()

    def _iter_dst_edges(self) -> Iterator[BipartiteEdge]:
        assert not isinstance(self.badjlist, int)
        for d, srcs in enumerate(self.badjlist, start=1):
            for s in srcs:
                yield BipartiteEdge(s, d)

    def edges(self) -> Iterator[BipartiteEdge]:
        """Iterate over all edges ordered by source."""
        return self.src_edges()

    # -------------------------------------------------------------------------
    # Copying and comparison
    # -------------------------------------------------------------------------

    def copy(self) -> BipartiteGraph:
        """Independent copy of the graph, metadata included."""
        badj: Union[list[list[int]], int]
        if isinstance(self.badjlist, int):
            badj = self.badjlist
        else:
            badj = [list(srcs) for srcs in self.badjlist]
        md = None if self.metadata is None else _copy.deepcopy(self.metadata)
        return BipartiteGraph._alias(
            [list(dsts) for dsts in self.fadjlist],
            badj,
            _EdgeCounter(self._ne.value),
            md,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BipartiteGraph):
            return NotImplemented
        return (
            self.num_edges == other.num_edges
            and self.fadjlist == other.fadjlist
            and self.badjlist == other.badjlist
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"BipartiteGraph with ({self.nsrcs}, {self.ndsts}) (src, dst)-vertices "
            f"and {self.num_edges} edges"
        )

    def __str__(self) -> str:
        from .display import format_bipartite_graph

        return format_bipartite_graph(self)


def _unpack_edge(src: Union[int, BipartiteEdge], dst: Optional[int]) -> tuple[int, int]:
    if isinstance(src, BipartiteEdge):
        return src.src, src.dst
    if dst is None:
        raise TypeError("destination vertex is required when src is not a BipartiteEdge")
    return src, dst


__all__ = ["BipartiteGraph"]
