"""All-pairs cost matrices.

``build_cost_matrix`` runs one SPF per source node over a shared adjacency
projection and records the minimal cost (and realized path) to every other
node. Callers needing a subset (for example a single region) filter ``nodes``
before calling; the builder itself performs no filtering.

``build_group_cost_matrix`` summarizes paths between every ordered pair of
groups, including the cost of the opposite direction to flag asymmetric
routing.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from routegraph.algorithms.adjacency import AdjacencyProjection, build_adjacency
from routegraph.algorithms.paths import enumerate_paths_on
from routegraph.algorithms.spf import resolve_path, spf
from routegraph.analysis.transit import path_transit_groups
from routegraph.config import ENGINE_CONFIG
from routegraph.logging import get_logger
from routegraph.model.path import Path
from routegraph.model.topology import Link, Node
from routegraph.types.base import UNREACHABLE, Cost, NodeID
from routegraph.utils.groups import group_by_node, group_members, list_groups

logger = get_logger(__name__)

PairKey = Tuple[str, str]


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class CostMatrix:
    """Row-major all-pairs shortest-path costs.

    Attributes:
        ordered_ids: Node ids indexing both rows and columns.
        matrix: ``matrix[i][j]`` is the cost from ``ordered_ids[i]`` to
            ``ordered_ids[j]``; 0 on the diagonal, +inf when unreachable.
        paths: Realized shortest path for every reachable off-diagonal pair.
    """

    ordered_ids: Tuple[NodeID, ...]
    matrix: Tuple[Tuple[Cost, ...], ...]
    paths: Dict[PairKey, Path] = field(default_factory=dict, compare=False)

    def _position(self, node_id: NodeID) -> int:
        try:
            return self.ordered_ids.index(node_id)
        except ValueError:
            raise KeyError(f"Node '{node_id}' is not in the cost matrix.") from None

    def cost(self, src: NodeID, dst: NodeID) -> Cost:
        """Return the cost from ``src`` to ``dst``.

        Raises:
            KeyError: If either id is not part of the matrix.
        """
        return self.matrix[self._position(src)][self._position(dst)]

    def path(self, src: NodeID, dst: NodeID) -> Optional[Path]:
        """Return the realized path for a pair, or None if unreachable or self."""
        return self.paths.get((src, dst))

    def to_numpy(self) -> np.ndarray:
        """Return the matrix as a float array (``inf`` for unreachable)."""
        return np.array(self.matrix, dtype=float).reshape(
            len(self.ordered_ids), len(self.ordered_ids)
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Return the matrix as a DataFrame indexed by source, columned by target."""
        df = pd.DataFrame(
            self.to_numpy(), index=list(self.ordered_ids), columns=list(self.ordered_ids)
        )
        df.index.name = "source"
        df.columns.name = "target"
        return df

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation (unreachable -> None)."""
        return {
            "ordered_ids": list(self.ordered_ids),
            "matrix": [[_finite_or_none(c) for c in row] for row in self.matrix],
            "paths": {
                f"{src}->{dst}": path.to_dict() for (src, dst), path in self.paths.items()
            },
        }


def _cost_row(
    adjacency: AdjacencyProjection, src: NodeID, ordered_ids: Sequence[NodeID]
) -> Tuple[Tuple[Cost, ...], Dict[PairKey, Path]]:
    costs, pred = spf(adjacency, src)
    row: List[Cost] = []
    paths: Dict[PairKey, Path] = {}
    for dst in ordered_ids:
        if dst == src:
            row.append(0)
            continue
        row.append(costs.get(dst, UNREACHABLE))
        path = resolve_path(src, dst, costs, pred)
        if path is not None:
            paths[(src, dst)] = path
    return tuple(row), paths


def build_cost_matrix(
    nodes: Sequence[Node], links: Sequence[Link], workers: int = 1
) -> CostMatrix:
    """Compute shortest-path costs for every ordered pair of nodes.

    Args:
        nodes: Ordered node snapshot; defines the matrix order.
        links: Ordered link snapshot.
        workers: Number of threads for the per-source SPF runs. Rows are
            gathered in source order, so the result does not depend on it.

    Returns:
        CostMatrix over the ids of ``nodes``.

    Raises:
        ValueError: If ``workers`` is smaller than 1.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}.")

    adjacency = build_adjacency(nodes, links)
    ordered_ids = tuple(node.id for node in nodes)

    if workers > 1 and len(ordered_ids) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_cost_row, adjacency, src, ordered_ids)
                for src in ordered_ids
            ]
            rows = [future.result() for future in futures]
    else:
        rows = [_cost_row(adjacency, src, ordered_ids) for src in ordered_ids]

    paths: Dict[PairKey, Path] = {}
    for _, row_paths in rows:
        paths.update(row_paths)

    logger.debug(
        "Built %dx%d cost matrix with %d reachable pair(s)",
        len(ordered_ids),
        len(ordered_ids),
        len(paths),
    )
    return CostMatrix(
        ordered_ids=ordered_ids, matrix=tuple(row for row, _ in rows), paths=paths
    )


@dataclass(frozen=True)
class GroupCostCell:
    """Path summary for one ordered group pair.

    Costs are +inf and ``path_count`` is 0 when no member pair is connected.
    """

    source_group: str
    dest_group: str
    min_cost: Cost
    max_cost: Cost
    avg_cost: float
    path_count: int
    best_path: Optional[Path]
    paths: Tuple[Path, ...]
    transit_groups: Tuple[str, ...]
    reverse_cost: Cost
    is_asymmetric: bool
    asymmetry_ratio: float

    @property
    def reachable(self) -> bool:
        return self.path_count > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_group": self.source_group,
            "dest_group": self.dest_group,
            "min_cost": _finite_or_none(self.min_cost),
            "max_cost": _finite_or_none(self.max_cost),
            "avg_cost": _finite_or_none(self.avg_cost),
            "path_count": self.path_count,
            "best_path": self.best_path.to_dict() if self.best_path else None,
            "transit_groups": list(self.transit_groups),
            "reverse_cost": _finite_or_none(self.reverse_cost),
            "is_asymmetric": self.is_asymmetric,
            "asymmetry_ratio": self.asymmetry_ratio,
        }


@dataclass(frozen=True)
class GroupCostMatrix:
    """Summaries for every ordered pair of distinct groups."""

    groups: Tuple[str, ...]
    cells: Dict[PairKey, GroupCostCell]

    def cell(self, source_group: str, dest_group: str) -> GroupCostCell:
        """Return the cell for a group pair.

        Raises:
            KeyError: If the pair is not part of the matrix.
        """
        try:
            return self.cells[(source_group, dest_group)]
        except KeyError:
            raise KeyError(
                f"Group pair '{source_group}->{dest_group}' is not in the matrix."
            ) from None

    def to_dataframe(self) -> pd.DataFrame:
        """Return minimal costs as a DataFrame (0 on the diagonal)."""
        data = [
            [
                0.0 if src == dst else float(self.cells[(src, dst)].min_cost)
                for dst in self.groups
            ]
            for src in self.groups
        ]
        df = pd.DataFrame(data, index=list(self.groups), columns=list(self.groups))
        df.index.name = "source_group"
        df.columns.name = "dest_group"
        return df

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": list(self.groups),
            "cells": [cell.to_dict() for cell in self.cells.values()],
        }


def _pair_paths(
    adjacency: AdjacencyProjection,
    sources: Iterable[NodeID],
    destinations: Sequence[NodeID],
    limit: int,
) -> List[Path]:
    paths: List[Path] = []
    for src in sources:
        for dst in destinations:
            paths.extend(enumerate_paths_on(adjacency, src, dst, limit))
    return paths


def build_group_cost_matrix(
    nodes: Sequence[Node],
    links: Sequence[Link],
    groups: Optional[Iterable[str]] = None,
    paths_per_pair: Optional[int] = None,
) -> GroupCostMatrix:
    """Summarize paths between every ordered pair of distinct groups.

    Args:
        nodes: Ordered node snapshot.
        links: Ordered link snapshot.
        groups: Groups to include (default: all, in order of appearance).
        paths_per_pair: Paths enumerated per member node pair. Defaults to
            ``ENGINE_CONFIG.group_matrix_paths_per_pair``.

    Returns:
        GroupCostMatrix keyed by ``(source_group, dest_group)``.

    Raises:
        ValueError: If ``paths_per_pair`` is smaller than 1.
    """
    if paths_per_pair is None:
        paths_per_pair = ENGINE_CONFIG.group_matrix_paths_per_pair
    if paths_per_pair < 1:
        raise ValueError(f"paths_per_pair must be at least 1, got {paths_per_pair}.")

    group_list = tuple(groups) if groups is not None else tuple(list_groups(nodes))
    members = group_members(nodes)
    group_of = group_by_node(nodes)
    adjacency = build_adjacency(nodes, links)

    pair_paths: Dict[PairKey, List[Path]] = {}
    for src_group in group_list:
        for dst_group in group_list:
            if src_group == dst_group:
                continue
            paths = _pair_paths(
                adjacency,
                members.get(src_group, []),
                members.get(dst_group, []),
                paths_per_pair,
            )
            paths.sort(key=lambda p: p.total_cost)
            pair_paths[(src_group, dst_group)] = paths

    cells: Dict[PairKey, GroupCostCell] = {}
    for (src_group, dst_group), paths in pair_paths.items():
        reverse_paths = pair_paths[(dst_group, src_group)]
        reverse_cost = reverse_paths[0].total_cost if reverse_paths else UNREACHABLE

        if not paths:
            cells[(src_group, dst_group)] = GroupCostCell(
                source_group=src_group,
                dest_group=dst_group,
                min_cost=UNREACHABLE,
                max_cost=UNREACHABLE,
                avg_cost=UNREACHABLE,
                path_count=0,
                best_path=None,
                paths=(),
                transit_groups=(),
                reverse_cost=reverse_cost,
                is_asymmetric=False,
                asymmetry_ratio=1.0,
            )
            continue

        costs = [p.total_cost for p in paths]
        min_cost = costs[0]
        transit: Dict[str, None] = {}
        for path in paths:
            transit.update(dict.fromkeys(path_transit_groups(path, group_of)))

        comparable = math.isfinite(reverse_cost) and reverse_cost > 0 and min_cost > 0
        cells[(src_group, dst_group)] = GroupCostCell(
            source_group=src_group,
            dest_group=dst_group,
            min_cost=min_cost,
            max_cost=costs[-1],
            avg_cost=sum(costs) / len(costs),
            path_count=len(paths),
            best_path=paths[0],
            paths=tuple(paths),
            transit_groups=tuple(transit),
            reverse_cost=reverse_cost,
            is_asymmetric=comparable
            and abs(min_cost - reverse_cost) > ENGINE_CONFIG.asymmetry_threshold,
            asymmetry_ratio=(
                max(min_cost, reverse_cost) / min(min_cost, reverse_cost)
                if comparable
                else 1.0
            ),
        )

    logger.debug("Built group cost matrix over %d group(s)", len(group_list))
    return GroupCostMatrix(groups=group_list, cells=cells)
