"""Shared type aliases and constants."""

from routegraph.types.base import UNREACHABLE, Cost, NodeID

__all__ = ["Cost", "NodeID", "UNREACHABLE"]
