"""Network analyses built on the path engine.

Usage:
    from routegraph.analysis import analyze_impact, build_cost_matrix

    matrix = build_cost_matrix(nodes, links)
    impact = analyze_impact(nodes, links, modified_links)
"""

from __future__ import annotations

from routegraph.analysis.cost_matrix import (
    CostMatrix,
    GroupCostCell,
    GroupCostMatrix,
    build_cost_matrix,
    build_group_cost_matrix,
)
from routegraph.analysis.impact import (
    ImpactResult,
    LinkChange,
    LinkImpact,
    PairImpact,
    PathComparison,
    analyze_impact,
    apply_link_changes,
)
from routegraph.analysis.pair import GroupPairAnalysis, TransitUsage, analyze_group_pair
from routegraph.analysis.scenario import (
    RouteChange,
    RouteChangeSeverity,
    ScenarioImpact,
    compare_scenario,
    find_single_points_of_failure,
)
from routegraph.analysis.transit import (
    PairCount,
    TransitGroupImpact,
    score_transit_groups,
)

__all__ = [
    "CostMatrix",
    "GroupCostCell",
    "GroupCostMatrix",
    "build_cost_matrix",
    "build_group_cost_matrix",
    "ImpactResult",
    "LinkChange",
    "LinkImpact",
    "PairImpact",
    "PathComparison",
    "analyze_impact",
    "apply_link_changes",
    "GroupPairAnalysis",
    "TransitUsage",
    "analyze_group_pair",
    "RouteChange",
    "RouteChangeSeverity",
    "ScenarioImpact",
    "compare_scenario",
    "find_single_points_of_failure",
    "PairCount",
    "TransitGroupImpact",
    "score_transit_groups",
]
