"""Impact of link cost and status changes on computed routes.

The analyzer computes the best path for every concrete node pair of every
requested group pair twice, once over the original links and once over the
modified links, and reports which routes changed. A route counts as changed
when it appears or disappears, when its cost differs, or when its node
sequence differs position by position (an equal-cost reroute is still a
change).

Original and modified link collections must be index-aligned: position ``i``
in both refers to the same physical link. The analyzer checks lengths and
endpoints and raises ``ValueError`` on mismatch instead of attributing impact
to the wrong link.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from routegraph.algorithms.adjacency import (
    AdjacencyProjection,
    build_adjacency,
    link_index_of,
    resolve_costs,
)
from routegraph.algorithms.spf import resolve_path, spf
from routegraph.analysis.transit import TransitGroupImpact, score_transit_groups
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, LinkStatus, Node
from routegraph.types.base import Cost, NodeID
from routegraph.utils.groups import group_members, group_pairs

logger = get_logger(__name__)

PairKey = Tuple[str, str]


def best_path(
    adjacency: AdjacencyProjection, src: NodeID, dst: NodeID
) -> Optional[Path]:
    """Return the SPF path between two nodes of a prebuilt projection."""
    if src == dst:
        return Path((src,), (), 0)
    costs, pred = spf(adjacency, src, dst)
    return resolve_path(src, dst, costs, pred)


def route_changed(before: Optional[Path], after: Optional[Path]) -> bool:
    """Return True if two best paths differ in existence, cost or node sequence."""
    if before is None or after is None:
        return before is not after
    return before.total_cost != after.total_cost or not before.same_route(after)


@dataclass(frozen=True)
class PathComparison:
    """Best path of one node pair before and after the change."""

    source: NodeID
    dest: NodeID
    source_group: str
    dest_group: str
    before: Optional[Path]
    after: Optional[Path]

    @property
    def changed(self) -> bool:
        return route_changed(self.before, self.after)

    def used_link_before(self, link: Link) -> bool:
        """Return True if the pre-change path steps across ``link``."""
        return self.before is not None and self.before.uses_pair(link.source, link.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "dest": self.dest,
            "source_group": self.source_group,
            "dest_group": self.dest_group,
            "before": self.before.to_dict() if self.before else None,
            "after": self.after.to_dict() if self.after else None,
            "changed": self.changed,
        }


@dataclass(frozen=True)
class PairImpact:
    """Path sets of one group pair before and after the change."""

    source_group: str
    dest_group: str
    before: Tuple[Path, ...]
    after: Tuple[Path, ...]
    changed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_group": self.source_group,
            "dest_group": self.dest_group,
            "before": [p.to_dict() for p in self.before],
            "after": [p.to_dict() for p in self.after],
            "changed": self.changed,
        }


@dataclass(frozen=True)
class LinkImpact:
    """Impact attributed to one modified link.

    Attributes:
        link_index: Stable index of the link.
        link: The modified link.
        affected_paths: Changed routes whose pre-change path traversed the link.
        affected_pairs: Group pairs containing such a route.
        local_impact: The link's two endpoints.
        downstream_impact: Every node on those pre-change paths.
    """

    link_index: int
    link: Link
    affected_paths: int
    affected_pairs: Tuple[PairKey, ...]
    local_impact: Tuple[NodeID, NodeID]
    downstream_impact: Tuple[NodeID, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "link_index": self.link_index,
            "source": self.link.source,
            "target": self.link.target,
            "affected_paths": self.affected_paths,
            "affected_pairs": [list(pair) for pair in self.affected_pairs],
            "local_impact": list(self.local_impact),
            "downstream_impact": list(self.downstream_impact),
        }


@dataclass(frozen=True)
class ImpactResult:
    """Aggregate outcome of :func:`analyze_impact`.

    Attributes:
        total_paths: Node pairs with a path before the change.
        affected_paths: Node pairs whose route changed.
        changed_pairs: Group pairs with at least one changed route.
        pair_impacts: Per group pair path sets.
        link_impacts: One entry per modified link.
        comparisons: Per node pair before/after paths.
        transit_groups: Transit criticality over the after-change paths.
    """

    total_paths: int
    affected_paths: int
    changed_pairs: Tuple[PairKey, ...]
    pair_impacts: Dict[PairKey, PairImpact]
    link_impacts: Tuple[LinkImpact, ...]
    comparisons: Tuple[PathComparison, ...]
    transit_groups: Tuple[TransitGroupImpact, ...]

    @property
    def impact_percentage(self) -> float:
        """Share of pre-change paths that changed, in percent."""
        if self.total_paths == 0:
            return 0.0
        return self.affected_paths / self.total_paths * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_paths": self.total_paths,
            "affected_paths": self.affected_paths,
            "impact_percentage": self.impact_percentage,
            "changed_pairs": [list(pair) for pair in self.changed_pairs],
            "pair_impacts": {
                f"{src}->{dst}": impact.to_dict()
                for (src, dst), impact in self.pair_impacts.items()
            },
            "link_impacts": [impact.to_dict() for impact in self.link_impacts],
            "transit_groups": [t.to_dict() for t in self.transit_groups],
        }


def check_alignment(original_links: Sequence[Link], modified_links: Sequence[Link]) -> None:
    """Verify that two link collections are index-aligned.

    Raises:
        ValueError: If the lengths differ or a position holds links with
            different endpoints.
    """
    if len(original_links) != len(modified_links):
        logger.error(
            "Link collections are not aligned: %d original vs %d modified",
            len(original_links),
            len(modified_links),
        )
        raise ValueError(
            f"Original and modified links must be index-aligned: got "
            f"{len(original_links)} and {len(modified_links)} links."
        )
    for position, (orig, mod) in enumerate(zip(original_links, modified_links)):
        if not orig.connects(mod.source, mod.target):
            logger.error("Link endpoints differ at position %d", position)
            raise ValueError(
                f"Link at position {position} connects {orig.source}-{orig.target} "
                f"originally but {mod.source}-{mod.target} after modification."
            )


def link_modified(original: Link, modified: Link) -> bool:
    """Return True if two versions of a link differ in resolved cost or status."""
    return (
        resolve_costs(original) != resolve_costs(modified)
        or original.status != modified.status
    )


def compare_best_paths(
    nodes: Sequence[Node],
    original_links: Sequence[Link],
    modified_links: Sequence[Link],
    source_groups: Optional[Iterable[str]] = None,
    dest_groups: Optional[Iterable[str]] = None,
) -> List[PathComparison]:
    """Compute best paths before and after for every member node pair.

    Node pairs without a path on either side are left out.
    """
    adj_before = build_adjacency(nodes, original_links)
    adj_after = build_adjacency(nodes, modified_links)
    members = group_members(nodes)

    comparisons: List[PathComparison] = []
    for src_group, dst_group in group_pairs(nodes, source_groups, dest_groups):
        for src in members.get(src_group, []):
            for dst in members.get(dst_group, []):
                before = best_path(adj_before, src, dst)
                after = best_path(adj_after, src, dst)
                if before is None and after is None:
                    continue
                comparisons.append(
                    PathComparison(src, dst, src_group, dst_group, before, after)
                )
    return comparisons


def analyze_impact(
    nodes: Sequence[Node],
    original_links: Sequence[Link],
    modified_links: Sequence[Link],
    source_groups: Optional[Iterable[str]] = None,
    dest_groups: Optional[Iterable[str]] = None,
) -> ImpactResult:
    """Evaluate how modified links change routes between groups.

    Args:
        nodes: Ordered node snapshot.
        original_links: Links before the change.
        modified_links: Links after the change, index-aligned with
            ``original_links``.
        source_groups: Source groups to analyze (default: all).
        dest_groups: Destination groups to analyze (default: all).

    Returns:
        ImpactResult with per-pair and per-link attribution.

    Raises:
        ValueError: If the link collections are not index-aligned.
    """
    check_alignment(original_links, modified_links)
    source_groups = list(source_groups) if source_groups is not None else None
    dest_groups = list(dest_groups) if dest_groups is not None else None

    comparisons = compare_best_paths(
        nodes, original_links, modified_links, source_groups, dest_groups
    )

    pair_impacts: Dict[PairKey, PairImpact] = {}
    for pair in group_pairs(nodes, source_groups, dest_groups):
        pair_cmp = [c for c in comparisons if (c.source_group, c.dest_group) == pair]
        pair_impacts[pair] = PairImpact(
            source_group=pair[0],
            dest_group=pair[1],
            before=tuple(c.before for c in pair_cmp if c.before is not None),
            after=tuple(c.after for c in pair_cmp if c.after is not None),
            changed=any(c.changed for c in pair_cmp),
        )

    changed = [c for c in comparisons if c.changed]
    total_paths = sum(1 for c in comparisons if c.before is not None)

    link_impacts: List[LinkImpact] = []
    for position, (orig, mod) in enumerate(zip(original_links, modified_links)):
        if not link_modified(orig, mod):
            continue
        # Attribution follows pre-change paths only.
        touching = [c for c in changed if c.used_link_before(orig)]
        downstream: Dict[NodeID, None] = {}
        pairs: Dict[PairKey, None] = {}
        for comparison in touching:
            downstream.update(dict.fromkeys(comparison.before.nodes))
            pairs[(comparison.source_group, comparison.dest_group)] = None
        link_impacts.append(
            LinkImpact(
                link_index=link_index_of(mod, position),
                link=mod,
                affected_paths=len(touching),
                affected_pairs=tuple(pairs),
                local_impact=(mod.source, mod.target),
                downstream_impact=tuple(downstream),
            )
        )

    transit = score_transit_groups(nodes, (c.after for c in comparisons))

    result = ImpactResult(
        total_paths=total_paths,
        affected_paths=len(changed),
        changed_pairs=tuple(pair for pair, impact in pair_impacts.items() if impact.changed),
        pair_impacts=pair_impacts,
        link_impacts=tuple(link_impacts),
        comparisons=tuple(comparisons),
        transit_groups=tuple(transit),
    )
    logger.info(
        "Impact analysis: %d/%d path(s) affected across %d group pair(s), %d modified link(s)",
        result.affected_paths,
        result.total_paths,
        len(result.changed_pairs),
        len(result.link_impacts),
    )
    return result


@dataclass(frozen=True)
class LinkChange:
    """Override for one link; ``None`` fields keep the current value."""

    forward_cost: Optional[Cost] = None
    reverse_cost: Optional[Cost] = None
    status: Optional[LinkStatus] = None


def apply_link_changes(
    links: Sequence[Link], changes: Mapping[int, LinkChange]
) -> List[Link]:
    """Return a new, index-aligned link list with ``changes`` applied.

    Changes are keyed by link index (``Link.index``, or the list position for
    links without one), the same index reported by ``LinkImpact.link_index``.

    Args:
        links: Original links.
        changes: Mapping of link index to the override to apply.

    Returns:
        New list in the order of ``links``; unchanged links are the original
        objects.

    Raises:
        KeyError: If a change refers to an index not present in ``links``.
    """
    position_of = {
        link_index_of(link, position): position for position, link in enumerate(links)
    }
    unknown: Set[int] = {i for i in changes if i not in position_of}
    if unknown:
        logger.error("Link change(s) for unknown index(es): %s", sorted(unknown))
        raise KeyError(f"Link change(s) for unknown index(es): {sorted(unknown)}")

    modified = list(links)
    for link_index, change in changes.items():
        position = position_of[link_index]
        link = modified[position]
        updates: Dict[str, Any] = {}
        if change.forward_cost is not None:
            updates["forward_cost"] = change.forward_cost
        if change.reverse_cost is not None:
            updates["reverse_cost"] = change.reverse_cost
        if change.status is not None:
            updates["status"] = change.status
        if updates:
            modified[position] = replace(link, **updates)
    return modified
