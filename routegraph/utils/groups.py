"""Node group (region/country) helpers.

Groups are listed in order of first appearance in the node sequence so that
every analysis iterates them deterministically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from routegraph.model.topology import Node


def list_groups(nodes: Iterable["Node"]) -> List[str]:
    """Return distinct node groups in order of first appearance."""
    return list(dict.fromkeys(node.group for node in nodes))


def group_by_node(nodes: Iterable["Node"]) -> Dict[str, str]:
    """Map node id to its group."""
    return {node.id: node.group for node in nodes}


def group_members(nodes: Iterable["Node"]) -> Dict[str, List[str]]:
    """Map each group to the ids of its nodes, preserving node order."""
    members: Dict[str, List[str]] = {}
    for node in nodes:
        members.setdefault(node.group, []).append(node.id)
    return members


def group_pairs(
    nodes: Sequence["Node"],
    source_groups: Optional[Iterable[str]] = None,
    dest_groups: Optional[Iterable[str]] = None,
) -> List[Tuple[str, str]]:
    """Return ordered ``(source, destination)`` group pairs, excluding self pairs.

    Args:
        nodes: Node snapshot providing the default group list.
        source_groups: Source groups to consider (default: all groups).
        dest_groups: Destination groups to consider (default: all groups).

    Returns:
        Pairs in source-major order.
    """
    all_groups = list_groups(nodes)
    sources = list(source_groups) if source_groups is not None else all_groups
    destinations = list(dest_groups) if dest_groups is not None else all_groups
    return [(src, dst) for src in sources for dst in destinations if src != dst]
