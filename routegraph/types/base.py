"""Base type aliases used by the path engine and analyses."""

from __future__ import annotations

from typing import Union

#: Represents numeric cost in the network (e.g. OSPF metric).
Cost = Union[int, float]

#: Node identifiers are plain strings.
NodeID = str

#: Sentinel cost for a destination that cannot be reached.
UNREACHABLE: float = float("inf")
