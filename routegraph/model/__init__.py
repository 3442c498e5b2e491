"""Topology and path value objects."""

from routegraph.model.path import Path
from routegraph.model.topology import (
    Link,
    LinkStatus,
    Node,
    links_from_records,
    nodes_from_records,
)

__all__ = [
    "Link",
    "LinkStatus",
    "Node",
    "Path",
    "links_from_records",
    "nodes_from_records",
]
