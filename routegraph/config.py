"""Configuration for routegraph analyses."""

import math
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Tunable defaults shared by the path engine and the analyses."""

    # Cost used when a link carries neither forward_cost nor cost
    default_cost: float = 1

    # Default cap on the number of paths returned by enumerate_paths
    default_path_limit: int = 50

    # Paths enumerated per node pair in group cost matrices
    group_matrix_paths_per_pair: int = 5

    # Paths enumerated per node pair in group pair analysis
    pair_analysis_paths_per_pair: int = 3

    # Absolute cost difference above which a group pair counts as asymmetric
    asymmetry_threshold: float = 10

    # Cost increase (absolute or relative to the old cost) marking a major reroute
    major_reroute_cost_delta: float = 50
    major_reroute_ratio: float = 0.5

    # Transit criticality weights: path share, pair diversity, node involvement
    transit_path_weight: float = 70
    transit_pair_weight: float = 20
    transit_node_weight: float = 10

    def transit_score(
        self,
        path_count: int,
        max_path_count: int,
        pair_count: int,
        group_count: int,
        transit_node_count: int,
        node_count: int,
    ) -> int:
        """Return the 0-100 criticality score of a transit group.

        ``score = 70 * (paths / max_paths)
        + 20 * 100 * (pairs / (G * (G - 1)))
        + 10 * 100 * (transit_nodes / N)``, clamped to [0, 100] and rounded half up.
        """
        path_score = self.transit_path_weight * (path_count / max(max_path_count, 1))
        possible_pairs = group_count * (group_count - 1)
        pair_score = (
            self.transit_pair_weight * 100 * (pair_count / possible_pairs)
            if possible_pairs > 0
            else 0.0
        )
        node_score = (
            self.transit_node_weight * 100 * (transit_node_count / node_count)
            if node_count > 0
            else 0.0
        )
        score = max(0.0, min(100.0, path_score + pair_score + node_score))
        return int(math.floor(score + 0.5))


# Global configuration instance
ENGINE_CONFIG = EngineConfig()
