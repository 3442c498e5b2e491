"""Directed adjacency projection of a link collection.

Every link expands into up to two directed entries: ``source -> target`` at
the resolved forward cost and ``target -> source`` at the resolved reverse
cost. Both entries carry the link's index so paths can be attributed back to
the physical link. The projection is rebuilt for every computation and never
shared across calls.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.topology import Link, Node
from routegraph.types.base import Cost, NodeID

logger = get_logger(__name__)


class AdjacencyEntry(NamedTuple):
    """One directed hop reachable from a node."""

    target: NodeID
    cost: Cost
    link_index: int


AdjacencyProjection = Mapping[NodeID, Tuple[AdjacencyEntry, ...]]


def resolve_costs(link: Link, default_cost: Optional[Cost] = None) -> Tuple[Cost, Cost]:
    """Return the ``(forward, reverse)`` costs of a link.

    Fallback chain: forward is ``forward_cost``, else the legacy ``cost``, else
    ``default_cost``; reverse is ``reverse_cost``, else the resolved forward.

    Args:
        link: Link to resolve.
        default_cost: Cost used when neither ``forward_cost`` nor ``cost`` is
            set. Defaults to ``ENGINE_CONFIG.default_cost``.

    Returns:
        Tuple of forward and reverse cost.
    """
    if default_cost is None:
        default_cost = ENGINE_CONFIG.default_cost
    if link.forward_cost is not None:
        forward = link.forward_cost
    elif link.cost is not None:
        forward = link.cost
    else:
        forward = default_cost
    reverse = link.reverse_cost if link.reverse_cost is not None else forward
    return forward, reverse


def link_index_of(link: Link, position: int) -> int:
    """Return the link's stable index, falling back to its position."""
    return link.index if link.index is not None else position


def _usable(cost: Cost) -> bool:
    return not math.isnan(cost) and cost >= 0


def build_adjacency(
    nodes: Sequence[Node], links: Sequence[Link]
) -> AdjacencyProjection:
    """Build the directed adjacency projection for one computation.

    Links that are down, reference nodes outside ``nodes``, or resolve to a
    negative cost in a direction contribute no entry for that direction.

    Args:
        nodes: Ordered node snapshot. Ids are assumed unique.
        links: Ordered link snapshot.

    Returns:
        Read-only mapping of node id to its outgoing entries, in link order.
    """
    adj: Dict[NodeID, List[AdjacencyEntry]] = {node.id: [] for node in nodes}

    for position, link in enumerate(links):
        if not link.is_up:
            continue
        if link.source not in adj or link.target not in adj:
            logger.debug(
                "Skipping link %s-%s: endpoint not in node set",
                link.source,
                link.target,
            )
            continue

        link_index = link_index_of(link, position)
        forward, reverse = resolve_costs(link)

        if _usable(forward):
            adj[link.source].append(AdjacencyEntry(link.target, forward, link_index))
        else:
            logger.debug(
                "Skipping %s->%s on link %d: invalid cost %r",
                link.source,
                link.target,
                link_index,
                forward,
            )

        if _usable(reverse):
            adj[link.target].append(AdjacencyEntry(link.source, reverse, link_index))
        else:
            logger.debug(
                "Skipping %s->%s on link %d: invalid cost %r",
                link.target,
                link.source,
                link_index,
                reverse,
            )

    return MappingProxyType({node_id: tuple(entries) for node_id, entries in adj.items()})
