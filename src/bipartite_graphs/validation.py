"""
Input validation utilities for bipartite graph structures.

Provides the exception taxonomy shared by all modules and centralized
validation functions for adjacency tables, vertex ids and component
partitions. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import numbers
from typing import Any, Optional, Sequence, Union


class GraphError(Exception):
    """Base exception for bipartite graph errors."""

    pass


class NotCompletedError(GraphError, ValueError):
    """Raised when backward adjacency or an inverse matching is needed but absent."""

    pass


class VertexOutOfRangeError(GraphError, IndexError):
    """Raised when a vertex id lies outside the current vertex range."""

    pass


class EdgeNotFoundError(GraphError, LookupError):
    """Raised when removing an edge that is not in the graph."""

    pass


class InvalidVertexKindError(GraphError, ValueError):
    """Raised when a vertex class tag is neither SRC nor DST."""

    pass


class InvalidAdjacencyError(GraphError, ValueError):
    """Raised when an explicit adjacency table violates a graph invariant."""

    pass


class InvalidPartitionError(GraphError, ValueError):
    """Raised when a component partition is malformed."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning for structures that are legal but probably not what the caller meant."""

    pass


def check_vertex(v: Any, count: int, kind: str = "vertex") -> int:
    """
    Check that ``v`` is a vertex id in ``1..count``.

    Args:
        v: Candidate vertex id
        count: Number of vertices in the class
        kind: Vertex class name used in the error message

    Returns:
        The id as a plain int

    Raises:
        VertexOutOfRangeError: If ``v`` is not in range
    """
    if not 1 <= v <= count:
        raise VertexOutOfRangeError(f"{kind} {v} out of range [1, {count}]")
    return int(v)


def validate_adjacency(
    fadjlist: Sequence[Sequence[int]],
    ndsts: int,
    badjlist: Optional[Sequence[Sequence[int]]] = None,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate a forward adjacency table (and optionally its backward table).

    Each list must be sorted, duplicate-free and in range. When ``badjlist``
    is given it must be the exact transpose of ``fadjlist``.

    Args:
        fadjlist: Destination lists per source
        ndsts: Number of destination vertices
        badjlist: Source lists per destination, or None
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (source_index, issue_description) tuples

    Raises:
        InvalidAdjacencyError: If strict=True and issues were found
    """
    issues: list[tuple[int, str]] = []

    for s, dsts in enumerate(fadjlist, start=1):
        prev = 0
        for d in dsts:
            if d < 1 or d > ndsts:
                issues.append((s, f"Source {s}: destination {d} out of range [1, {ndsts}]"))
            elif d <= prev:
                issues.append((s, f"Source {s}: neighbors not sorted and unique at {d}"))
            prev = max(prev, d)

    if badjlist is not None:
        if len(badjlist) != ndsts:
            issues.append((0, f"Backward table has {len(badjlist)} entries, expected {ndsts}"))
        transposed: list[list[int]] = [[] for _ in range(len(badjlist))]
        for s, dsts in enumerate(fadjlist, start=1):
            for d in dsts:
                if 1 <= d <= len(badjlist):
                    transposed[d - 1].append(s)
        for d, srcs in enumerate(badjlist, start=1):
            if list(srcs) != transposed[d - 1]:
                issues.append((0, f"Destination {d}: backward list is not the transpose"))

    if strict and issues:
        msg = "Invalid adjacency:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidAdjacencyError(msg)

    return issues


def validate_partition(
    sccs: Sequence[Union[int, Sequence[int]]],
    n: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that a component partition only names vertices in ``1..n``, once each.

    Args:
        sccs: Components, each a bare vertex id or a list of ids
        n: Number of vertices in the underlying graph
        strict: If True, raises on invalid

    Returns:
        List of (component_index, issue_description) tuples

    Raises:
        InvalidPartitionError: If strict=True and issues were found
    """
    issues: list[tuple[int, str]] = []
    seen = [False] * n

    for ci, comp in enumerate(sccs, start=1):
        members = (comp,) if isinstance(comp, numbers.Integral) else comp
        if not members:
            issues.append((ci, f"Component {ci}: empty"))
        for v in members:
            if v < 1 or v > n:
                issues.append((ci, f"Component {ci}: vertex {v} out of range [1, {n}]"))
            elif seen[v - 1]:
                issues.append((ci, f"Component {ci}: vertex {v} already assigned"))
            else:
                seen[v - 1] = True

    if strict and issues:
        msg = "Invalid partition:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidPartitionError(msg)

    return issues


__all__ = [
    "GraphError",
    "NotCompletedError",
    "VertexOutOfRangeError",
    "EdgeNotFoundError",
    "InvalidVertexKindError",
    "InvalidAdjacencyError",
    "InvalidPartitionError",
    "GraphStructureWarning",
    "check_vertex",
    "validate_adjacency",
    "validate_partition",
]
