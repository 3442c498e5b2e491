"""Bounded enumeration of loop-free alternate paths.

The first collected path is always the SPF path, so the cheapest result is
guaranteed minimal. Alternates come from an iterative depth-first search that
explores cheaper neighbors first and stops once ``limit`` paths are collected.
Beyond the first path the result is a good sample, not the k globally
cheapest paths; dense graphs have too many simple paths to list.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set, Tuple

from routegraph.algorithms.adjacency import AdjacencyProjection, build_adjacency
from routegraph.algorithms.spf import resolve_path, spf
from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, Node
from routegraph.types.base import Cost, NodeID

logger = get_logger(__name__)


def enumerate_paths_on(
    adjacency: AdjacencyProjection,
    start: NodeID,
    end: NodeID,
    limit: int,
) -> List[Path]:
    """Enumerate up to ``limit`` simple paths over a prebuilt projection.

    Args:
        adjacency: Directed adjacency projection.
        start: Source node id.
        end: Destination node id.
        limit: Maximum number of paths to return (at least 1).

    Returns:
        Paths sorted by ascending total cost, then hop count. Empty when either
        endpoint is absent from ``adjacency`` or they are disconnected.
    """
    if start not in adjacency or end not in adjacency:
        return []
    if start == end:
        return [Path((start,), (), 0)]

    costs, pred = spf(adjacency, start, end)
    best = resolve_path(start, end, costs, pred)
    if best is None:
        return []

    results: List[Path] = [best]
    seen: Set[Tuple[Tuple[str, ...], Tuple[int, ...]]] = {(best.nodes, best.links)}

    stack: List[Tuple[NodeID, Tuple[NodeID, ...], Tuple[int, ...], Cost]] = [
        (start, (start,), (), 0)
    ]
    while stack and len(results) < limit:
        node_id, path_nodes, path_links, path_cost = stack.pop()

        if node_id == end:
            key = (path_nodes, path_links)
            if key not in seen:
                seen.add(key)
                results.append(Path(path_nodes, path_links, path_cost))
            continue

        # LIFO stack: push the most expensive neighbor first so the cheapest
        # is explored next.
        neighbors = sorted(adjacency[node_id], key=lambda entry: entry.cost, reverse=True)
        for entry in neighbors:
            if entry.target in path_nodes:
                continue
            stack.append(
                (
                    entry.target,
                    path_nodes + (entry.target,),
                    path_links + (entry.link_index,),
                    path_cost + entry.cost,
                )
            )

    results.sort(key=lambda path: (path.total_cost, path.hop_count))
    logger.debug(
        "Enumerated %d path(s) %s->%s (limit %d)", len(results), start, end, limit
    )
    return results


def enumerate_paths(
    nodes: Sequence[Node],
    links: Sequence[Link],
    start: NodeID,
    end: NodeID,
    limit: Optional[int] = None,
) -> List[Path]:
    """Enumerate up to ``limit`` loop-free paths from ``start`` to ``end``.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.
        start: Source node id.
        end: Destination node id.
        limit: Maximum number of paths. Defaults to
            ``ENGINE_CONFIG.default_path_limit``.

    Returns:
        Paths sorted by ascending total cost, then hop count. The first path
        is a minimal-cost path. Empty when the endpoints are disconnected or
        not part of the topology.

    Raises:
        ValueError: If ``limit`` is smaller than 1.
    """
    if limit is None:
        limit = ENGINE_CONFIG.default_path_limit
    if limit < 1:
        raise ValueError(f"Path limit must be at least 1, got {limit}.")
    return enumerate_paths_on(build_adjacency(nodes, links), start, end, limit)
