"""
Incidence matrices of bipartite graphs.

Rows are sources, columns are destinations, with one entry per edge. Dense
matrices are numpy arrays; sparse matrices need scipy.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .bipartite import BipartiteGraph

# Try to import scipy for sparse output
try:
    from scipy.sparse import csr_matrix

    _HAS_SCIPY = True
except ImportError:
    _HAS_SCIPY = False


def is_scipy_available() -> bool:
    """Check if scipy is available for sparse incidence matrices."""
    return _HAS_SCIPY


def incidence_matrix(
    g: BipartiteGraph,
    val: Any = 1,
    sparse: bool = False,
    dtype: Optional[Any] = None,
) -> Any:
    """
    Build the incidence matrix of ``g``.

    Entry ``(s - 1, d - 1)`` holds ``val`` for every edge ``s -> d``; all
    other entries are zero.

    Args:
        g: Bipartite graph
        val: Value stored for each edge
        sparse: Return a ``scipy.sparse.csr_matrix`` instead of a numpy array
        dtype: Element type (default: inferred from ``val``)

    Returns:
        Array of shape ``(nsrcs, ndsts)``

    Raises:
        ImportError: If sparse=True and scipy is not installed
    """
    if dtype is None:
        dtype = np.asarray(val).dtype
    shape = (g.nsrcs, g.ndsts)

    rows: list[int] = []
    cols: list[int] = []
    for s in g.src_vertices():
        for d in g.src_neighbors(s):
            rows.append(s - 1)
            cols.append(d - 1)

    if sparse:
        if not _HAS_SCIPY:
            raise ImportError("scipy is required for sparse incidence matrices")
        data = np.full(len(rows), val, dtype=dtype)
        return csr_matrix((data, (rows, cols)), shape=shape)

    matrix = np.zeros(shape, dtype=dtype)
    if rows:
        matrix[rows, cols] = val
    return matrix


__all__ = ["incidence_matrix", "is_scipy_available"]
