"""What-if scenarios over group-level routes.

``compare_scenario`` looks at the best route of each ordered group pair (the
cheapest path over all member node pairs) before and after a set of link
changes and classifies every change by severity. A change counts as major
when the cost grows by more than ``major_reroute_cost_delta`` or by more than
``major_reroute_ratio`` of the old cost.

``find_single_points_of_failure`` reports links whose failure disconnects a
group pair that is connected in the baseline.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from routegraph.algorithms.adjacency import AdjacencyProjection, build_adjacency
from routegraph.algorithms.spf import spf
from routegraph.analysis.impact import best_path, check_alignment, route_changed
from routegraph.analysis.transit import path_transit_groups
from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, LinkStatus, Node
from routegraph.utils.groups import group_by_node, group_members, group_pairs

logger = get_logger(__name__)

PairKey = Tuple[str, str]


class RouteChangeSeverity(str, Enum):
    """Classification of a changed group-level route."""

    BROKEN = "broken"
    RESTORED = "restored"
    IMPROVED = "improved"
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class RouteChange:
    """Best route of a group pair before and after the scenario."""

    source_group: str
    dest_group: str
    before: Optional[Path]
    after: Optional[Path]
    severity: RouteChangeSeverity

    @property
    def cost_delta(self) -> Optional[float]:
        """Cost difference ``after - before``; None if either side is missing."""
        if self.before is None or self.after is None:
            return None
        return self.after.total_cost - self.before.total_cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_group": self.source_group,
            "dest_group": self.dest_group,
            "before": self.before.to_dict() if self.before else None,
            "after": self.after.to_dict() if self.after else None,
            "cost_delta": self.cost_delta,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ScenarioImpact:
    """Outcome of :func:`compare_scenario`.

    Attributes:
        total_pairs: Group pairs with a route before the change.
        route_changes: Changed routes in group pair order.
        transit_before: Transit groups of the best routes before.
        transit_after: Transit groups of the best routes after.
    """

    total_pairs: int
    route_changes: Tuple[RouteChange, ...]
    transit_before: Tuple[str, ...]
    transit_after: Tuple[str, ...]

    def count(self, severity: RouteChangeSeverity) -> int:
        """Return the number of route changes with ``severity``."""
        return sum(1 for change in self.route_changes if change.severity is severity)

    @property
    def affected_pairs(self) -> Tuple[PairKey, ...]:
        return tuple((c.source_group, c.dest_group) for c in self.route_changes)

    @property
    def average_cost_change(self) -> float:
        """Mean cost delta over changes where both routes exist."""
        deltas = [c.cost_delta for c in self.route_changes if c.cost_delta is not None]
        return sum(deltas) / len(deltas) if deltas else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_pairs": self.total_pairs,
            "route_changes": [c.to_dict() for c in self.route_changes],
            "counts": {s.value: self.count(s) for s in RouteChangeSeverity},
            "average_cost_change": self.average_cost_change,
            "transit_before": list(self.transit_before),
            "transit_after": list(self.transit_after),
        }


def classify_route_change(
    before: Optional[Path], after: Optional[Path]
) -> RouteChangeSeverity:
    """Classify a changed route.

    Args:
        before: Best route before the change (None if unreachable).
        after: Best route after the change (None if unreachable).

    Returns:
        The severity. Callers only classify routes that changed.
    """
    if after is None:
        return RouteChangeSeverity.BROKEN
    if before is None:
        return RouteChangeSeverity.RESTORED
    delta = after.total_cost - before.total_cost
    if delta < 0:
        return RouteChangeSeverity.IMPROVED
    if delta > ENGINE_CONFIG.major_reroute_cost_delta or (
        before.total_cost > 0
        and delta / before.total_cost > ENGINE_CONFIG.major_reroute_ratio
    ):
        return RouteChangeSeverity.MAJOR
    return RouteChangeSeverity.MINOR


def _best_group_route(
    adjacency: AdjacencyProjection,
    sources: Sequence[str],
    destinations: Sequence[str],
) -> Optional[Path]:
    best: Optional[Path] = None
    for src in sources:
        for dst in destinations:
            path = best_path(adjacency, src, dst)
            if path is not None and (best is None or path.total_cost < best.total_cost):
                best = path
    return best


def compare_scenario(
    nodes: Sequence[Node],
    original_links: Sequence[Link],
    modified_links: Sequence[Link],
) -> ScenarioImpact:
    """Compare best group-level routes before and after link changes.

    Args:
        nodes: Ordered node snapshot.
        original_links: Links before the scenario.
        modified_links: Links after the scenario, index-aligned.

    Returns:
        ScenarioImpact with classified route changes.

    Raises:
        ValueError: If the link collections are not index-aligned.
    """
    check_alignment(original_links, modified_links)
    adj_before = build_adjacency(nodes, original_links)
    adj_after = build_adjacency(nodes, modified_links)
    members = group_members(nodes)
    group_of = group_by_node(nodes)

    total_pairs = 0
    changes: List[RouteChange] = []
    transit_before: Dict[str, None] = {}
    transit_after: Dict[str, None] = {}

    for src_group, dst_group in group_pairs(nodes):
        sources = members.get(src_group, [])
        destinations = members.get(dst_group, [])
        before = _best_group_route(adj_before, sources, destinations)
        after = _best_group_route(adj_after, sources, destinations)
        if before is not None:
            total_pairs += 1
            transit_before.update(dict.fromkeys(path_transit_groups(before, group_of)))
        if after is not None:
            transit_after.update(dict.fromkeys(path_transit_groups(after, group_of)))
        if route_changed(before, after):
            changes.append(
                RouteChange(
                    source_group=src_group,
                    dest_group=dst_group,
                    before=before,
                    after=after,
                    severity=classify_route_change(before, after),
                )
            )

    impact = ScenarioImpact(
        total_pairs=total_pairs,
        route_changes=tuple(changes),
        transit_before=tuple(transit_before),
        transit_after=tuple(transit_after),
    )
    logger.info(
        "Scenario: %d of %d group pair route(s) changed (%d broken)",
        len(changes),
        total_pairs,
        impact.count(RouteChangeSeverity.BROKEN),
    )
    return impact


def _connected_group_pairs(
    adjacency: AdjacencyProjection,
    nodes: Sequence[Node],
    group_of: Mapping[str, str],
) -> Set[PairKey]:
    connected: Set[PairKey] = set()
    for node in nodes:
        costs, _ = spf(adjacency, node.id)
        for reached in costs:
            if group_of[reached] != node.group:
                connected.add((node.group, group_of[reached]))
    return connected


def find_single_points_of_failure(
    nodes: Sequence[Node], links: Sequence[Link]
) -> List[int]:
    """Return positions of links whose failure disconnects a group pair.

    Each up link is set down in turn; a link is a single point of failure if
    some ordered group pair reachable in the baseline (over any member node
    pair) becomes unreachable.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.

    Returns:
        Positions in ``links``, ascending.
    """
    group_of = group_by_node(nodes)
    baseline = _connected_group_pairs(build_adjacency(nodes, links), nodes, group_of)

    spof: List[int] = []
    for position, link in enumerate(links):
        if not link.is_up:
            continue
        failed = list(links)
        failed[position] = replace(link, status=LinkStatus.DOWN)
        remaining = _connected_group_pairs(
            build_adjacency(nodes, failed), nodes, group_of
        )
        if baseline - remaining:
            spof.append(position)

    logger.info("Found %d single point(s) of failure", len(spof))
    return spof
