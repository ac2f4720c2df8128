"""
Directed graph analysis utilities.

This module provides algorithms over any directed graph view that exposes
``vertices()`` and ``out_neighbors(v)``: DiCMOBiGraph, SimpleDiGraph and the
condensation graphs.
- Strongly connected components (the partitions condensation views consume)
- Topological sorting
- Cycle detection
- Induced subgraph extraction

All traversals use explicit stacks, so deep graphs do not hit the
interpreter recursion limit.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Iterator, Optional, Protocol

from .digraph import SimpleDiGraph


class DirectedGraphLike(Protocol):
    """Minimal interface the algorithms in this module rely on."""

    def vertices(self) -> range: ...

    def out_neighbors(self, v: int) -> Iterable[int]: ...


# =============================================================================
# Strongly Connected Components
# =============================================================================


def strongly_connected_components(g: DirectedGraphLike) -> list[list[int]]:
    """
    Find the strongly connected components of a directed graph.

    Uses Tarjan's algorithm. Components come out in reverse topological
    order: every edge between two components points from a later component
    to an earlier one. Reverse the result for a topological order.

    Args:
        g: Directed graph view

    Returns:
        List of components, each a sorted list of vertex ids.

    Example:
        >>> h = SimpleDiGraph(3)
        >>> _ = h.add_edge(1, 2); _ = h.add_edge(2, 1); _ = h.add_edge(2, 3)
        >>> strongly_connected_components(h)
        [[3], [1, 2]]
    """
    verts = g.vertices()
    n = len(verts)
    index = [0] * (n + 1)  # 0 = unvisited, otherwise DFS number
    lowlink = [0] * (n + 1)
    on_stack = [False] * (n + 1)
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for root in verts:
        if index[root]:
            continue
        counter += 1
        index[root] = lowlink[root] = counter
        stack.append(root)
        on_stack[root] = True
        work: list[tuple[int, Iterator[int]]] = [(root, iter(g.out_neighbors(root)))]

        while work:
            v, it = work[-1]
            advanced = False
            for w in it:
                if not index[w]:
                    counter += 1
                    index[w] = lowlink[w] = counter
                    stack.append(w)
                    on_stack[w] = True
                    work.append((w, iter(g.out_neighbors(w))))
                    advanced = True
                    break
                elif on_stack[w]:
                    lowlink[v] = min(lowlink[v], index[w])
            if advanced:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

            if lowlink[v] == index[v]:
                comp: list[int] = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    comp.append(w)
                    if w == v:
                        break
                comp.sort()
                components.append(comp)

    return components


# =============================================================================
# Topological Sort
# =============================================================================


def topological_sort(g: DirectedGraphLike) -> Optional[list[int]]:
    """
    Compute a topological ordering of the vertices.

    Uses Kahn's algorithm (BFS-based). Edges are counted with multiplicity,
    so non-strict views are handled correctly.

    Args:
        g: Directed graph view

    Returns:
        List of vertex ids in topological order, or None if the graph has cycles.
    """
    verts = g.vertices()
    n = len(verts)
    in_degree = [0] * (n + 1)
    for v in verts:
        for w in g.out_neighbors(v):
            in_degree[w] += 1

    queue: deque[int] = deque(v for v in verts if in_degree[v] == 0)
    result: list[int] = []

    while queue:
        v = queue.popleft()
        result.append(v)
        for w in g.out_neighbors(v):
            in_degree[w] -= 1
            if in_degree[w] == 0:
                queue.append(w)

    # If not all vertices processed, graph has a cycle
    if len(result) != n:
        return None
    return result


# =============================================================================
# Cycle Detection
# =============================================================================


def detect_cycle(g: DirectedGraphLike) -> Optional[list[int]]:
    """
    Detect if a directed graph contains a cycle.

    Returns the first cycle found by depth-first search, or None if the
    graph is acyclic.

    Args:
        g: Directed graph view

    Returns:
        Vertex ids along the cycle, first vertex repeated at the end, or None.
    """
    verts = g.vertices()
    n = len(verts)
    # DFS states: 0=unvisited, 1=visiting, 2=visited
    state = [0] * (n + 1)

    for start in verts:
        if state[start]:
            continue
        state[start] = 1
        path = [start]
        work: list[Iterator[int]] = [iter(g.out_neighbors(start))]

        while work:
            advanced = False
            for w in work[-1]:
                if state[w] == 1:
                    # Found cycle - extract it
                    return path[path.index(w) :] + [w]
                if state[w] == 0:
                    state[w] = 1
                    path.append(w)
                    work.append(iter(g.out_neighbors(w)))
                    advanced = True
                    break
            if not advanced:
                work.pop()
                state[path.pop()] = 2

    return None


def has_cycle(g: DirectedGraphLike) -> bool:
    """Check if a directed graph contains any cycle."""
    return detect_cycle(g) is not None


# =============================================================================
# Subgraphs
# =============================================================================


def induced_subgraph(g: Any, vlist: Iterable[int]) -> tuple[Any, list[int]]:
    """
    Extract the subgraph induced by ``vlist``.

    The result is built with ``type(g).with_vertices(n)``, so views that
    cannot be materialized (DiCMOBiGraph) produce a SimpleDiGraph.

    Args:
        g: Directed graph view
        vlist: Vertex ids to keep, in the order they should be numbered

    Returns:
        Tuple of (subgraph, vmap) where ``vmap[i - 1]`` is the original id of
        subgraph vertex i.

    Raises:
        ValueError: If ``vlist`` repeats a vertex
    """
    vmap = list(vlist)
    new_id = {v: i for i, v in enumerate(vmap, start=1)}
    if len(new_id) != len(vmap):
        raise ValueError("Vertices to keep must be unique")

    factory = getattr(type(g), "with_vertices", SimpleDiGraph.with_vertices)
    sub = factory(len(vmap))
    for v in vmap:
        u = new_id[v]
        for w in g.out_neighbors(v):
            if w in new_id:
                sub.add_edge(u, new_id[w])
    return sub, vmap


__all__ = [
    "DirectedGraphLike",
    "strongly_connected_components",
    "topological_sort",
    "detect_cycle",
    "has_cycle",
    "induced_subgraph",
]
