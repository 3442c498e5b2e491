"""Shortest-path-first (SPF) over the adjacency projection.

Dijkstra with a binary heap. Heap entries are ``(cost, sequence, node)``
where ``sequence`` is an insertion counter: frontier nodes with equal
tentative cost pop in discovery order, and a predecessor is only replaced on
strict improvement, so the first discovered route wins. Repeated runs on the
same input therefore produce identical paths.

Notes:
    When a destination is given, the search stops as soon as the destination
    is popped at its settled cost.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Optional, Sequence, Tuple

from routegraph.algorithms.adjacency import AdjacencyProjection, build_adjacency
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, Node
from routegraph.types.base import UNREACHABLE, Cost, NodeID

logger = get_logger(__name__)

#: Predecessor map: node -> (previous node, link index used to reach it).
PredMap = Dict[NodeID, Tuple[NodeID, int]]


def spf(
    adjacency: AdjacencyProjection,
    src_node: NodeID,
    dst_node: Optional[NodeID] = None,
) -> Tuple[Dict[NodeID, Cost], PredMap]:
    """Compute shortest paths from a source node.

    Args:
        adjacency: Directed adjacency projection.
        src_node: Node the search starts from.
        dst_node: Optional destination. If provided, the search terminates once
            ``dst_node`` is settled.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each reached node to its minimal cost from ``src_node``.
            When ``dst_node`` is given, only ``dst_node`` is guaranteed final.
          - pred: For each reached node except the source, the predecessor
            node and the index of the link traversed from it.

    Raises:
        KeyError: If ``src_node`` is not in the adjacency projection.
    """
    if src_node not in adjacency:
        raise KeyError(f"Source node '{src_node}' is not in the graph.")

    costs: Dict[NodeID, Cost] = {src_node: 0}
    pred: PredMap = {}
    settled = set()
    sequence = 0
    min_pq: List[Tuple[Cost, int, NodeID]] = [(0, sequence, src_node)]

    while min_pq:
        current_cost, _, node_id = heappop(min_pq)
        if node_id in settled or current_cost > costs[node_id]:
            continue
        settled.add(node_id)

        if node_id == dst_node:
            break

        for neighbor_id, edge_cost, link_index in adjacency.get(node_id, ()):
            if neighbor_id in settled:
                continue
            new_cost = current_cost + edge_cost
            if neighbor_id not in costs or new_cost < costs[neighbor_id]:
                costs[neighbor_id] = new_cost
                pred[neighbor_id] = (node_id, link_index)
                sequence += 1
                heappush(min_pq, (new_cost, sequence, neighbor_id))

    return costs, pred


def resolve_path(
    src_node: NodeID,
    dst_node: NodeID,
    costs: Dict[NodeID, Cost],
    pred: PredMap,
) -> Optional[Path]:
    """Walk ``pred`` back from ``dst_node`` and build the realized path.

    Returns:
        The path, or None if ``dst_node`` was not reached.
    """
    if dst_node == src_node:
        return Path((src_node,), (), 0)
    if dst_node not in pred:
        return None

    nodes = [dst_node]
    links: List[int] = []
    current = dst_node
    while current != src_node:
        prev, link_index = pred[current]
        nodes.append(prev)
        links.append(link_index)
        current = prev

    nodes.reverse()
    links.reverse()
    return Path(tuple(nodes), tuple(links), costs[dst_node])


def _check_endpoints(nodes: Sequence[Node], start: NodeID, end: NodeID) -> None:
    known = {node.id for node in nodes}
    for role, node_id in (("Start", start), ("End", end)):
        if node_id not in known:
            logger.error("%s node '%s' is not among the supplied nodes", role, node_id)
            raise KeyError(f"{role} node '{node_id}' is not in the topology.")


def shortest_path_cost(
    nodes: Sequence[Node],
    links: Sequence[Link],
    start: NodeID,
    end: NodeID,
) -> float:
    """Return the minimal directional cost from ``start`` to ``end``.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.
        start: Source node id.
        end: Destination node id.

    Returns:
        The minimal cost, 0 when ``start == end``, or ``UNREACHABLE`` (+inf)
        when no path exists.

    Raises:
        KeyError: If ``start`` or ``end`` is not among ``nodes``.
    """
    _check_endpoints(nodes, start, end)
    if start == end:
        return 0

    costs, _ = spf(build_adjacency(nodes, links), start, end)
    return costs.get(end, UNREACHABLE)


def shortest_path(
    nodes: Sequence[Node],
    links: Sequence[Link],
    start: NodeID,
    end: NodeID,
) -> Optional[Path]:
    """Return the realized minimal-cost path from ``start`` to ``end``.

    Same contract as :func:`shortest_path_cost`, but returns the node and link
    sequence. A zero-hop path is returned when ``start == end`` and None when
    ``end`` is unreachable.

    Raises:
        KeyError: If ``start`` or ``end`` is not among ``nodes``.
    """
    _check_endpoints(nodes, start, end)
    if start == end:
        return Path((start,), (), 0)

    costs, pred = spf(build_adjacency(nodes, links), start, end)
    return resolve_path(start, end, costs, pred)
