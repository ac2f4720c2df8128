"""
Plain-text rendering of graphs, matchings and hypergraphs.

Rendering is read-only. Tables list one row per vertex id; a source and a
destination with the same id share a row.

Symbols:
- ``.``: the vertex class has no vertex with this id
- ``{}``: the vertex has no neighbors
- ``-``: backward adjacency is not stored (graph not complete)
- ``(i)``: neighbor i is the matched partner of this vertex
- ``u``: unassigned matching entry
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

from .types import is_matched, unassigned

if TYPE_CHECKING:
    from .bipartite import BipartiteGraph
    from .hypergraph import HyperGraph
    from .matching import Matching


def _format_list(items: Sequence[int], partner: Any = None) -> str:
    if not items:
        return "{}"
    parts = [f"({i})" if i == partner else str(i) for i in items]
    return "[" + ", ".join(parts) + "]"


def format_bipartite_graph(g: BipartiteGraph, matching: Optional[Matching] = None) -> str:
    """
    Render ``g`` as a ``#``/``src``/``dst`` table.

    Args:
        g: Bipartite graph
        matching: Optional matching of the destinations of ``g``; matched
            partners are shown in parentheses and unassigned payloads other
            than ``unassigned`` are printed before the destination's list.

    Returns:
        Multi-line string
    """
    nsrcs, ndsts = g.nsrcs, g.ndsts
    # Matched destination per source
    src_partner: dict[int, int] = {}
    if matching is not None:
        for d, s in matching.matched_pairs():
            src_partner[s] = d

    rows: list[tuple[str, str, str]] = [("#", "src", "dst")]
    for i in range(1, max(nsrcs, ndsts) + 1):
        if i <= nsrcs:
            src_col = _format_list(g.fadjlist[i - 1], src_partner.get(i))
        else:
            src_col = "."

        if i > ndsts:
            dst_col = "."
        elif not g.is_complete:
            dst_col = "-"
        else:
            entry = matching.get(i) if matching is not None else unassigned
            dst_col = _format_list(g.dst_neighbors(i), entry if is_matched(entry) else None)
            if entry is not unassigned and not is_matched(entry):
                dst_col = f"{entry!r} {dst_col}"
        rows.append((str(i), src_col, dst_col))

    widths = [max(len(row[k]) for row in rows) for k in range(3)]
    lines = [f"BipartiteGraph with ({nsrcs}, {ndsts}) (src, dst)-vertices"]
    for row in rows:
        line = "  ".join(cell.ljust(width) for cell, width in zip(row, widths))
        lines.append(line.rstrip())
    return "\n".join(lines)


def format_matching(m: Matching) -> str:
    """Render ``m`` as ``dst => src`` lines, ``u`` marking unassigned entries."""
    lines = [f"Matching with {len(m)} destinations, {m.cardinality} matched"]
    width = len(str(len(m)))
    for d, entry in enumerate(m, start=1):
        lines.append(f"  {str(d).rjust(width)} => {entry!r}")
    return "\n".join(lines)


def format_hypergraph(h: HyperGraph[Any], max_edges: Optional[int] = None) -> str:
    """
    Render ``h`` with one ``<label, ...>`` line per hyperedge.

    Args:
        h: Hypergraph
        max_edges: Show at most this many hyperedges, then an ellipsis line
    """
    lines = [repr(h)]
    for e in h.graph.src_vertices():
        if max_edges is not None and e > max_edges:
            lines.append("  ...")
            break
        lines.append("  <" + ", ".join(str(label) for label in h.edge_vertices(e)) + ">")
    return "\n".join(lines)


__all__ = ["format_bipartite_graph", "format_matching", "format_hypergraph"]
