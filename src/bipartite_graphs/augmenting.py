"""
Maximum-cardinality bipartite matching by augmenting paths.

For every source vertex in ascending order, a depth-first search looks for an
alternating path ending in an unassigned destination. Each search first tries
to match the source directly to a free neighbor and only then tries to
re-route the sources occupying its neighbors. This scan order decides which
of several maximum matchings is produced.

Complexity: O(V + E) per search, O(V * (V + E)) overall.
"""

from __future__ import annotations

from typing import Any, Callable, MutableSequence, Optional

import numpy as np

from .bipartite import BipartiteGraph
from .matching import Matching
from .types import is_matched, unassigned
from .validation import check_vertex


def _always_true(_: int) -> bool:
    return True


def try_augment(
    matching: Matching,
    g: BipartiteGraph,
    src: int,
    dst_filter: Optional[Callable[[int], bool]] = None,
    dcolor: Optional[MutableSequence[bool]] = None,
    scolor: Optional[MutableSequence[bool]] = None,
) -> bool:
    """
    Try to grow ``matching`` by one pair along an augmenting path from ``src``.

    The search runs on an explicit stack, so long alternating paths do not
    hit the interpreter recursion limit. Reassignments along a found path
    are applied deepest-first.

    Args:
        matching: Matching indexed by destination, updated in place
        g: Bipartite graph
        src: Root source vertex
        dst_filter: Destinations for which this returns False are never used
        dcolor: Visited flags per destination (``dcolor[d - 1]``). Caller-owned
            scratch: it is not reset here, so reset it before an unrelated search.
        scolor: Optional visited flags per source (``scolor[s - 1]``)

    Returns:
        True if the matching grew, False if no augmenting path exists. On
        failure the matching is unchanged but the color buffers may not be.
    """
    check_vertex(src, g.nsrcs, "source")
    if dst_filter is None:
        dst_filter = _always_true
    if dcolor is None:
        dcolor = [False] * g.ndsts

    fadjlist = g.fadjlist
    # Frames: (source, next neighbor position, destination being re-routed)
    stack: list[tuple[int, int, int]] = []
    vsrc = src

    while True:
        if scolor is not None:
            scolor[vsrc - 1] = True

        for vdst in fadjlist[vsrc - 1]:
            if dst_filter(vdst) and matching[vdst] is unassigned:
                matching[vdst] = vsrc
                for s, _, d in reversed(stack):
                    matching[d] = s
                return True

        stack.append((vsrc, 0, 0))

        # Advance the topmost frame to its next re-routable destination,
        # popping exhausted frames.
        next_src = 0
        while stack:
            s, pos, _ = stack[-1]
            dsts = fadjlist[s - 1]
            while pos < len(dsts):
                vdst = dsts[pos]
                pos += 1
                if not dst_filter(vdst) or dcolor[vdst - 1]:
                    continue
                dcolor[vdst - 1] = True
                occupant = matching[vdst]
                if is_matched(occupant):
                    stack[-1] = (s, pos, vdst)
                    next_src = occupant
                    break
            if next_src:
                break
            stack.pop()

        if not next_src:
            return False
        vsrc = next_src


def maximum_matching(
    g: BipartiteGraph,
    src_filter: Optional[Callable[[int], bool]] = None,
    dst_filter: Optional[Callable[[int], bool]] = None,
    unassigned_value: Any = unassigned,
) -> Matching:
    """
    Compute a maximum-cardinality matching of destinations to sources.

    Every source accepted by ``src_filter`` is tried once, in ascending id
    order; a source stays unmatched only if no augmenting path exists when
    it is tried. Vertices rejected by a filter are never matched.

    Args:
        g: Bipartite graph
        src_filter: Sources for which this returns False are skipped
        dst_filter: Destinations for which this returns False are never used
        unassigned_value: Entry written into destinations left unmatched.
            The search itself always starts from ``unassigned``, so the
            payload does not change which pairs are found.

    Returns:
        A Matching with ``max(nsrcs, ndsts)`` entries, no inverse

    Example:
        >>> g = BipartiteGraph([[1], [1], [2], [2], [1], [1, 2]], 2)
        >>> m = maximum_matching(g)
        >>> m[1], m[2]
        (1, 3)
    """
    if src_filter is None:
        src_filter = _always_true
    if dst_filter is None:
        dst_filter = _always_true

    matching = Matching(max(g.nsrcs, g.ndsts))
    dcolor = np.zeros(g.ndsts, dtype=bool)
    for vsrc in g.src_vertices():
        if not src_filter(vsrc):
            continue
        dcolor.fill(False)
        try_augment(matching, g, vsrc, dst_filter, dcolor)

    if unassigned_value is not unassigned:
        entries = matching.match
        for i, entry in enumerate(entries):
            if entry is unassigned:
                entries[i] = unassigned_value
    return matching


# The conventional name in structural analysis. The result is maximum, not
# merely inclusion-maximal.
maximal_matching = maximum_matching


__all__ = ["try_augment", "maximum_matching", "maximal_matching"]
