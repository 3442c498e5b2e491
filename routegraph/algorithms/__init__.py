"""Path algorithms over the directed adjacency projection."""

from routegraph.algorithms.adjacency import (
    AdjacencyEntry,
    AdjacencyProjection,
    build_adjacency,
    resolve_costs,
)
from routegraph.algorithms.paths import enumerate_paths, enumerate_paths_on
from routegraph.algorithms.spf import (
    resolve_path,
    shortest_path,
    shortest_path_cost,
    spf,
)

__all__ = [
    "AdjacencyEntry",
    "AdjacencyProjection",
    "build_adjacency",
    "resolve_costs",
    "enumerate_paths",
    "enumerate_paths_on",
    "resolve_path",
    "shortest_path",
    "shortest_path_cost",
    "spf",
]
