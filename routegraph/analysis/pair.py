"""Path statistics between two groups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from routegraph.algorithms.adjacency import build_adjacency
from routegraph.algorithms.paths import enumerate_paths_on
from routegraph.analysis.transit import path_transit_groups
from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, Node
from routegraph.types.base import Cost
from routegraph.utils.groups import group_by_node, group_members

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitUsage:
    """How often a transit group is crossed by the paths of a group pair."""

    group: str
    path_count: int
    node_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "path_count": self.path_count,
            "node_count": self.node_count,
        }


@dataclass(frozen=True)
class GroupPairAnalysis:
    """Paths and statistics from one group to another.

    Attributes:
        source_group: Group the paths start in.
        dest_group: Group the paths end in.
        paths: All enumerated paths, by ascending cost.
        node_count: Distinct nodes used by the paths.
        link_count: Distinct directed hops used by the paths.
        avg_cost: Mean path cost (0 without paths).
        min_cost: Cheapest path cost (0 without paths).
        max_cost: Most expensive path cost (0 without paths).
        transit_groups: Transit groups by descending path count.
    """

    source_group: str
    dest_group: str
    paths: Tuple[Path, ...]
    node_count: int
    link_count: int
    avg_cost: float
    min_cost: Cost
    max_cost: Cost
    transit_groups: Tuple[TransitUsage, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_group": self.source_group,
            "dest_group": self.dest_group,
            "paths": [p.to_dict() for p in self.paths],
            "node_count": self.node_count,
            "link_count": self.link_count,
            "avg_cost": self.avg_cost,
            "min_cost": self.min_cost,
            "max_cost": self.max_cost,
            "transit_groups": [t.to_dict() for t in self.transit_groups],
        }


def analyze_group_pair(
    nodes: Sequence[Node],
    links: Sequence[Link],
    source_group: str,
    dest_group: str,
    paths_per_pair: Optional[int] = None,
) -> GroupPairAnalysis:
    """Enumerate paths between the members of two groups and summarize them.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.
        source_group: Group the paths start in.
        dest_group: Group the paths end in.
        paths_per_pair: Paths enumerated per member node pair. Defaults to
            ``ENGINE_CONFIG.pair_analysis_paths_per_pair``.

    Returns:
        GroupPairAnalysis. Unknown groups simply yield no paths.

    Raises:
        ValueError: If ``paths_per_pair`` is smaller than 1.
    """
    if paths_per_pair is None:
        paths_per_pair = ENGINE_CONFIG.pair_analysis_paths_per_pair
    if paths_per_pair < 1:
        raise ValueError(f"paths_per_pair must be at least 1, got {paths_per_pair}.")

    adjacency = build_adjacency(nodes, links)
    members = group_members(nodes)
    group_of = group_by_node(nodes)

    paths: List[Path] = []
    for src in members.get(source_group, []):
        for dst in members.get(dest_group, []):
            paths.extend(enumerate_paths_on(adjacency, src, dst, paths_per_pair))
    paths.sort(key=lambda p: p.total_cost)

    used_nodes: Set[str] = set()
    used_hops: Set[Tuple[str, str]] = set()
    transit_paths: Dict[str, int] = {}
    transit_nodes: Dict[str, Set[str]] = {}
    for path in paths:
        used_nodes.update(path.nodes)
        used_hops.update(path.hops())
        for group, node_ids in path_transit_groups(path, group_of).items():
            transit_paths[group] = transit_paths.get(group, 0) + 1
            transit_nodes.setdefault(group, set()).update(node_ids)

    costs = [p.total_cost for p in paths]
    transit = sorted(
        (
            TransitUsage(group, count, len(transit_nodes[group]))
            for group, count in transit_paths.items()
        ),
        key=lambda t: t.path_count,
        reverse=True,
    )

    logger.debug(
        "Group pair %s->%s: %d path(s), %d transit group(s)",
        source_group,
        dest_group,
        len(paths),
        len(transit),
    )
    return GroupPairAnalysis(
        source_group=source_group,
        dest_group=dest_group,
        paths=tuple(paths),
        node_count=len(used_nodes),
        link_count=len(used_hops),
        avg_cost=sum(costs) / len(costs) if costs else 0.0,
        min_cost=min(costs) if costs else 0,
        max_cost=max(costs) if costs else 0,
        transit_groups=tuple(transit),
    )
