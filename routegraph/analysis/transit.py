"""Transit group criticality.

A transit group is a group (region/country) that a path passes through
without being the path's source or destination group. Each group is scored
from how many paths cross it, how many distinct group pairs it serves, and
how many of its nodes are used as transit points::

    score = 70 * (path_count / max_path_count)
          + 20 * 100 * (pair_count / (G * (G - 1)))
          + 10 * 100 * (transit_node_count / N)

clamped to [0, 100], where ``G`` is the number of groups and ``N`` the number
of nodes. The weights live in :class:`routegraph.config.EngineConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Node
from routegraph.utils.groups import group_by_node, list_groups

logger = get_logger(__name__)


@dataclass(frozen=True)
class PairCount:
    """Number of paths observed for a ``(source, dest)`` group pair."""

    source: str
    dest: str
    path_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "dest": self.dest, "path_count": self.path_count}


@dataclass(frozen=True)
class TransitGroupImpact:
    """Transit role of one group across a set of paths.

    Attributes:
        group: Group name.
        transit_path_count: Paths that cross the group as a non-endpoint.
        transit_for_pairs: Group pairs served, by descending path count.
        criticality_score: Integer score in [0, 100].
        node_count: Distinct nodes of the group used as transit points.
    """

    group: str
    transit_path_count: int
    transit_for_pairs: Tuple[PairCount, ...]
    criticality_score: int
    node_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "transit_path_count": self.transit_path_count,
            "transit_for_pairs": [pair.to_dict() for pair in self.transit_for_pairs],
            "criticality_score": self.criticality_score,
            "node_count": self.node_count,
        }


def path_transit_groups(path: Path, group_of: Mapping[str, str]) -> Dict[str, List[str]]:
    """Return the transit groups of a single path.

    Args:
        path: Path to inspect.
        group_of: Node id to group mapping.

    Returns:
        Mapping of transit group to the intermediate node ids inside it, in
        path order. Empty when the path has fewer than three nodes, an unknown
        endpoint, or both endpoints in the same group.
    """
    if len(path.nodes) < 3:
        return {}
    src_group = group_of.get(path.source)
    dst_group = group_of.get(path.destination)
    if src_group is None or dst_group is None or src_group == dst_group:
        return {}

    transit: Dict[str, List[str]] = {}
    for node_id in path.intermediate_nodes:
        group = group_of.get(node_id)
        if group is None or group in (src_group, dst_group):
            continue
        transit.setdefault(group, []).append(node_id)
    return transit


def score_transit_groups(
    nodes: Sequence[Node], paths: Iterable[Optional[Path]]
) -> List[TransitGroupImpact]:
    """Rank groups by their criticality as transit.

    Args:
        nodes: Node snapshot providing group membership.
        paths: Paths to analyze. ``None`` entries (missing paths) are ignored.

    Returns:
        One entry per group with at least one transit path, sorted by
        descending score, then group name.
    """
    group_of = group_by_node(nodes)
    path_counts: Dict[str, int] = {}
    pair_counts: Dict[str, Dict[Tuple[str, str], int]] = {}
    transit_nodes: Dict[str, Set[str]] = {}

    for path in paths:
        if path is None:
            continue
        transit = path_transit_groups(path, group_of)
        if not transit:
            continue
        pair = (group_of[path.source], group_of[path.destination])
        for group, node_ids in transit.items():
            path_counts[group] = path_counts.get(group, 0) + 1
            pairs = pair_counts.setdefault(group, {})
            pairs[pair] = pairs.get(pair, 0) + 1
            transit_nodes.setdefault(group, set()).update(node_ids)

    if not path_counts:
        return []

    group_count = len(list_groups(nodes))
    max_path_count = max(path_counts.values())
    results: List[TransitGroupImpact] = []
    for group, count in path_counts.items():
        pairs = sorted(
            (PairCount(src, dst, n) for (src, dst), n in pair_counts[group].items()),
            key=lambda p: p.path_count,
            reverse=True,
        )
        score = ENGINE_CONFIG.transit_score(
            path_count=count,
            max_path_count=max_path_count,
            pair_count=len(pairs),
            group_count=group_count,
            transit_node_count=len(transit_nodes[group]),
            node_count=len(nodes),
        )
        results.append(
            TransitGroupImpact(
                group=group,
                transit_path_count=count,
                transit_for_pairs=tuple(pairs),
                criticality_score=score,
                node_count=len(transit_nodes[group]),
            )
        )

    results.sort(key=lambda t: (-t.criticality_score, t.group))
    logger.debug("Scored %d transit group(s)", len(results))
    return results
