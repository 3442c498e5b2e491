import math

import pytest

from routegraph.algorithms.adjacency import (
    AdjacencyEntry,
    build_adjacency,
    link_index_of,
    resolve_costs,
)
from routegraph.model.topology import Link, LinkStatus
from tests.sample_topologies import make_nodes


class TestResolveCosts:
    def test_forward_and_reverse(self):
        assert resolve_costs(Link("A", "B", forward_cost=10, reverse_cost=100)) == (10, 100)

    def test_reverse_falls_back_to_forward(self):
        assert resolve_costs(Link("A", "B", forward_cost=10)) == (10, 10)

    def test_legacy_cost(self):
        assert resolve_costs(Link("A", "B", cost=7)) == (7, 7)
        assert resolve_costs(Link("A", "B", cost=7, reverse_cost=3)) == (7, 3)

    def test_forward_cost_wins_over_legacy_cost(self):
        assert resolve_costs(Link("A", "B", forward_cost=5, cost=7)) == (5, 5)

    def test_default_cost(self):
        assert resolve_costs(Link("A", "B")) == (1, 1)
        assert resolve_costs(Link("A", "B"), default_cost=4) == (4, 4)

    def test_zero_is_not_missing(self):
        assert resolve_costs(Link("A", "B", forward_cost=0, cost=7)) == (0, 0)


def test_link_index_of():
    assert link_index_of(Link("A", "B"), 3) == 3
    assert link_index_of(Link("A", "B", index=9), 3) == 9


class TestBuildAdjacency:
    def test_two_entries_per_link(self):
        nodes = make_nodes("A", "B", "C")
        links = [
            Link("A", "B", forward_cost=10, reverse_cost=100),
            Link("B", "C", forward_cost=5),
        ]
        adj = build_adjacency(nodes, links)

        assert adj["A"] == (AdjacencyEntry("B", 10, 0),)
        assert adj["B"] == (AdjacencyEntry("A", 100, 0), AdjacencyEntry("C", 5, 1))
        assert adj["C"] == (AdjacencyEntry("B", 5, 1),)

    def test_isolated_nodes_present(self):
        adj = build_adjacency(make_nodes("A", "B"), [])
        assert dict(adj) == {"A": (), "B": ()}

    def test_down_links_skipped(self):
        nodes = make_nodes("A", "B")
        adj = build_adjacency(nodes, [Link("A", "B", status=LinkStatus.DOWN)])
        assert adj["A"] == ()
        assert adj["B"] == ()

    def test_unknown_endpoint_skipped(self):
        nodes = make_nodes("A", "B")
        links = [Link("A", "Z", forward_cost=1), Link("A", "B", forward_cost=2)]
        adj = build_adjacency(nodes, links)
        assert "Z" not in adj
        assert adj["A"] == (AdjacencyEntry("B", 2, 1),)

    def test_negative_direction_skipped(self):
        nodes = make_nodes("A", "B")
        adj = build_adjacency(nodes, [Link("A", "B", forward_cost=-5, reverse_cost=3)])
        assert adj["A"] == ()
        assert adj["B"] == (AdjacencyEntry("A", 3, 0),)

    def test_nan_direction_skipped(self):
        nodes = make_nodes("A", "B")
        adj = build_adjacency(nodes, [Link("A", "B", forward_cost=math.nan)])
        assert adj["A"] == ()
        assert adj["B"] == ()

    def test_explicit_indices_preserved(self):
        nodes = make_nodes("A", "B")
        adj = build_adjacency(nodes, [Link("A", "B", forward_cost=1, index=42)])
        assert adj["A"][0].link_index == 42

    def test_projection_is_read_only(self):
        adj = build_adjacency(make_nodes("A"), [])
        with pytest.raises(TypeError):
            adj["B"] = ()  # type: ignore[index]
