"""NetworkX graph conversion utilities.

Exports the directed adjacency projection of a topology as a
``networkx.MultiDiGraph`` so it can be inspected or fed to NetworkX
algorithms.

Example:
    >>> import networkx as nx
    >>> from routegraph.lib.nx import to_networkx
    >>>
    >>> G = to_networkx(nodes, links)
    >>> nx.dijkstra_path_length(G, "A", "D", weight="cost")
"""

from __future__ import annotations

from typing import Sequence

import networkx as nx

from routegraph.algorithms.adjacency import build_adjacency, link_index_of
from routegraph.model.topology import Link, Node

#: Edge key direction tags: forward is source->target as defined in the Link.
FORWARD = "fwd"
REVERSE = "rev"


def to_networkx(nodes: Sequence[Node], links: Sequence[Link]) -> nx.MultiDiGraph:
    """Convert a topology snapshot to a NetworkX multi-digraph.

    Each node keeps its ``name``, ``group`` and ``active`` attributes plus its
    ``attrs``. Each adjacency entry becomes one directed edge keyed by
    ``(link_index, "fwd" | "rev")`` with ``cost`` and ``link_index``
    attributes, so down links and negative-cost directions are absent exactly
    as they are for the path engine.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.

    Returns:
        networkx.MultiDiGraph of the adjacency projection.
    """
    graph = nx.MultiDiGraph()
    for node in nodes:
        attrs = dict(node.attrs)
        attrs.update(name=node.name, group=node.group, active=node.active)
        graph.add_node(node.id, **attrs)

    endpoints = {
        link_index_of(link, position): link.source
        for position, link in enumerate(links)
    }

    for source, entries in build_adjacency(nodes, links).items():
        for entry in entries:
            direction = FORWARD if endpoints.get(entry.link_index) == source else REVERSE
            graph.add_edge(
                source,
                entry.target,
                key=(entry.link_index, direction),
                cost=entry.cost,
                link_index=entry.link_index,
            )
    return graph
