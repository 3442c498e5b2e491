"""routegraph: path and impact analysis for router topologies.

routegraph computes shortest paths over links with direction-dependent costs,
enumerates loop-free alternates, builds cost matrices, and evaluates how link
cost or status changes ripple through routes between regions.

Primary API:
    shortest_path_cost(), shortest_path() - Dijkstra over directional costs
    enumerate_paths() - Bounded alternate path enumeration
    build_cost_matrix(), build_group_cost_matrix() - All-pairs costs
    analyze_impact() - Before/after route comparison with link attribution
    score_transit_groups() - Transit criticality ranking
    Node, Link, Path - Topology and result values

Example:
    from routegraph import Link, Node, shortest_path_cost

    nodes = [Node("A", group="US"), Node("B", group="DE")]
    links = [Link("A", "B", forward_cost=10, reverse_cost=100)]

    shortest_path_cost(nodes, links, "A", "B")  # 10
    shortest_path_cost(nodes, links, "B", "A")  # 100
"""

from __future__ import annotations

from routegraph import logging
from routegraph._version import __version__
from routegraph.algorithms import (
    build_adjacency,
    enumerate_paths,
    resolve_costs,
    shortest_path,
    shortest_path_cost,
)
from routegraph.analysis import (
    CostMatrix,
    GroupCostMatrix,
    GroupPairAnalysis,
    ImpactResult,
    LinkChange,
    ScenarioImpact,
    TransitGroupImpact,
    analyze_group_pair,
    analyze_impact,
    apply_link_changes,
    build_cost_matrix,
    build_group_cost_matrix,
    compare_scenario,
    find_single_points_of_failure,
    score_transit_groups,
)
from routegraph.config import ENGINE_CONFIG, EngineConfig
from routegraph.lib.nx import to_networkx
from routegraph.model import (
    Link,
    LinkStatus,
    Node,
    Path,
    links_from_records,
    nodes_from_records,
)
from routegraph.types.base import UNREACHABLE

__all__ = [
    # Version
    "__version__",
    # Model
    "Node",
    "Link",
    "LinkStatus",
    "Path",
    "nodes_from_records",
    "links_from_records",
    # Path engine
    "build_adjacency",
    "resolve_costs",
    "shortest_path_cost",
    "shortest_path",
    "enumerate_paths",
    "UNREACHABLE",
    # Analyses
    "CostMatrix",
    "GroupCostMatrix",
    "build_cost_matrix",
    "build_group_cost_matrix",
    "ImpactResult",
    "LinkChange",
    "analyze_impact",
    "apply_link_changes",
    "TransitGroupImpact",
    "score_transit_groups",
    "GroupPairAnalysis",
    "analyze_group_pair",
    "ScenarioImpact",
    "compare_scenario",
    "find_single_points_of_failure",
    # Configuration
    "EngineConfig",
    "ENGINE_CONFIG",
    # Library integrations (NetworkX)
    "to_networkx",
    # Utilities
    "logging",
]
