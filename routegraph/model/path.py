"""Lightweight representation of a single routing path.

``Path`` stores the ordered node ids, the indices of the links traversed
between consecutive nodes, and the sum of the directional costs actually used.
Paths are values: equality compares all three fields and ordering is by cost,
then hop count.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Dict, Iterator, Tuple

from routegraph.types.base import Cost


@total_ordering
@dataclass(frozen=True)
class Path:
    """A simple path through the topology.

    Attributes:
        nodes: Node ids from source to destination; no id repeats.
        links: Link indices between consecutive nodes (``len(nodes) - 1`` items).
        total_cost: Sum of the directional costs along the path.
    """

    nodes: Tuple[str, ...]
    links: Tuple[int, ...]
    total_cost: Cost

    def __post_init__(self) -> None:
        """Validate the node/link sequence lengths.

        Raises:
            ValueError: If ``nodes`` is empty or the lengths disagree.
        """
        if not self.nodes:
            raise ValueError("Path must contain at least one node.")
        if len(self.links) != len(self.nodes) - 1:
            raise ValueError(
                f"Path with {len(self.nodes)} nodes needs {len(self.nodes) - 1} "
                f"links, got {len(self.links)}."
            )

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (self.total_cost, self.hop_count) < (other.total_cost, other.hop_count)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    @property
    def source(self) -> str:
        """Return the first node of the path."""
        return self.nodes[0]

    @property
    def destination(self) -> str:
        """Return the last node of the path."""
        return self.nodes[-1]

    @property
    def hop_count(self) -> int:
        """Return the number of links traversed."""
        return len(self.links)

    @property
    def intermediate_nodes(self) -> Tuple[str, ...]:
        """Return the nodes strictly between source and destination."""
        return self.nodes[1:-1]

    def hops(self) -> Iterator[Tuple[str, str]]:
        """Yield consecutive ``(from_node, to_node)`` pairs."""
        return zip(self.nodes, self.nodes[1:])

    def uses_pair(self, a: str, b: str) -> bool:
        """Return True if the path steps directly between ``a`` and ``b``.

        Either direction matches, so a link is detected whichever side it was
        traversed from.
        """
        return any((u == a and v == b) or (u == b and v == a) for u, v in self.hops())

    def same_route(self, other: "Path") -> bool:
        """Return True if both paths visit the same nodes in the same order."""
        return self.nodes == other.nodes

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "nodes": list(self.nodes),
            "links": list(self.links),
            "total_cost": self.total_cost,
            "hop_count": self.hop_count,
        }
