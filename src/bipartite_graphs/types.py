"""
Common types for bipartite graph structures.

This module provides the small value types shared by every other module:
- VertexKind: Tag selecting the source or destination vertex class
- BipartiteEdge: Edge between a source and a destination vertex
- Unassigned: Marker for a destination without a matched source
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union


class VertexKind(IntEnum):
    """
    The two vertex classes of a bipartite graph.

    - SRC: Source vertices (e.g. equations), rows of the incidence matrix
    - DST: Destination vertices (e.g. variables), columns of the incidence matrix
    """

    SRC = 0
    DST = 1


SRC = VertexKind.SRC
DST = VertexKind.DST


@dataclass(frozen=True)
class BipartiteEdge:
    """
    Edge of a bipartite graph.

    Attributes:
        src: Source vertex id (1-based)
        dst: Destination vertex id (1-based)
    """

    src: int
    dst: int

    def __repr__(self) -> str:
        return f"[src: {self.src}] => [dst: {self.dst}]"


class Unassigned:
    """Marker stored in a Matching for a destination without a matched source."""

    _instance: Unassigned | None = None

    def __new__(cls) -> Unassigned:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "u"

    def __reduce__(self) -> str:
        return "unassigned"


unassigned = Unassigned()


class _NoMetadata:
    """Sentinel for add_edge calls that carry no edge metadata."""

    def __repr__(self) -> str:
        return "NO_METADATA"


NO_METADATA = _NoMetadata()


# Entry of a Matching: a source id, ``unassigned``, or a user payload
MatchEntry = Union[int, Unassigned, Any]


def is_matched(entry: Any) -> bool:
    """Check if a matching entry holds a source id (as opposed to any unassigned payload)."""
    return isinstance(entry, numbers.Integral) and not isinstance(entry, bool)


__all__ = [
    "VertexKind",
    "SRC",
    "DST",
    "BipartiteEdge",
    "Unassigned",
    "unassigned",
    "NO_METADATA",
    "MatchEntry",
    "is_matched",
]
