"""
bipartite-graphs: Bipartite graph structures for sparse incidence analysis.

This package provides graph data structures and algorithms for analyzing
bipartite incidence structures such as variable/equation incidence in
symbolic systems.

Available components:
- BipartiteGraph: Dual adjacency store with lazily-completed backward table
- Matching: Partial injective destination-to-source mapping
- maximum_matching: Augmenting-path maximum-cardinality matcher
- DiCMOBiGraph: Directed, contracted, matching-oriented graph view
- Condensation graphs: Views collapsing strongly connected components
- HyperGraph: Labelled hypergraph on top of a BipartiteGraph

Vertex ids are 1-based throughout.
"""

__version__ = "0.1.0"

# Directed graph algorithms
from .algorithms import (
    detect_cycle,
    has_cycle,
    induced_subgraph,
    strongly_connected_components,
    topological_sort,
)

# Matching algorithms
from .augmenting import maximal_matching, maximum_matching, try_augment

# Core graph
from .bipartite import BipartiteGraph

# Condensation views
from .condensation import (
    CondensationGraph,
    InducedCondensationGraph,
    MatchedCondensationGraph,
)

# Derived views
from .dicmo import DiCMOBiGraph
from .digraph import SimpleDiGraph

# Display
from .display import format_bipartite_graph, format_hypergraph, format_matching

# Hypergraphs
from .hypergraph import HyperGraph, UnionFind

# Incidence matrices
from .incidence import incidence_matrix, is_scipy_available
from .matching import Matching
from .types import (
    DST,
    NO_METADATA,
    SRC,
    BipartiteEdge,
    Unassigned,
    VertexKind,
    is_matched,
    unassigned,
)

# Validation utilities
from .validation import (
    EdgeNotFoundError,
    GraphError,
    GraphStructureWarning,
    InvalidAdjacencyError,
    InvalidPartitionError,
    InvalidVertexKindError,
    NotCompletedError,
    VertexOutOfRangeError,
    validate_adjacency,
    validate_partition,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "VertexKind",
    "SRC",
    "DST",
    "BipartiteEdge",
    "Unassigned",
    "unassigned",
    "NO_METADATA",
    "is_matched",
    # Graphs and views
    "BipartiteGraph",
    "Matching",
    "DiCMOBiGraph",
    "SimpleDiGraph",
    "CondensationGraph",
    "MatchedCondensationGraph",
    "InducedCondensationGraph",
    "HyperGraph",
    "UnionFind",
    # Matching algorithms
    "try_augment",
    "maximum_matching",
    "maximal_matching",
    # Directed graph algorithms
    "strongly_connected_components",
    "topological_sort",
    "detect_cycle",
    "has_cycle",
    "induced_subgraph",
    # Incidence matrices
    "incidence_matrix",
    "is_scipy_available",
    # Display
    "format_bipartite_graph",
    "format_matching",
    "format_hypergraph",
    # Validation
    "GraphError",
    "NotCompletedError",
    "VertexOutOfRangeError",
    "EdgeNotFoundError",
    "InvalidVertexKindError",
    "InvalidAdjacencyError",
    "InvalidPartitionError",
    "GraphStructureWarning",
    "validate_adjacency",
    "validate_partition",
]
