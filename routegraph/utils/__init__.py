"""Utility helpers used across routegraph.

This package contains small, self-contained utilities that do not depend on
the algorithms. Keep modules minimal and focused.
"""

from routegraph.utils.groups import (
    group_by_node,
    group_members,
    group_pairs,
    list_groups,
)

__all__ = [
    "group_by_node",
    "group_members",
    "group_pairs",
    "list_groups",
]
