"""Sample topologies shared across the test suite.

Link costs are symmetric unless a fixture says otherwise. Diagrams show
``forward/reverse`` costs where they differ.
"""

from __future__ import annotations

import random

import pytest

from routegraph.model.topology import Link, LinkStatus, Node


def make_nodes(*entries: str) -> list[Node]:
    """Build nodes from ``"id:group"`` strings (group defaults to the id)."""
    nodes = []
    for entry in entries:
        node_id, _, group = entry.partition(":")
        nodes.append(Node(node_id, group=group or node_id))
    return nodes


@pytest.fixture
def diamond():
    #        [10]     [20]
    #      ┌──────B───────┐
    #      A              D
    #      └──────C───────┘
    #        [15]     [25]
    nodes = make_nodes("A", "B", "C", "D")
    links = [
        Link("A", "B", forward_cost=10),
        Link("A", "C", forward_cost=15),
        Link("B", "D", forward_cost=20),
        Link("C", "D", forward_cost=25),
    ]
    return nodes, links


@pytest.fixture
def asymmetric_diamond():
    #       [100/10]
    #   A──────────────B
    #   │              │
    #   │ [20/80]      │ [20/80]
    #   └──────C───────┘   (C -> B forward)
    nodes = make_nodes("A", "B", "C")
    links = [
        Link("A", "B", forward_cost=100, reverse_cost=10),
        Link("A", "C", forward_cost=20, reverse_cost=80),
        Link("C", "B", forward_cost=20, reverse_cost=80),
    ]
    return nodes, links


@pytest.fixture
def shortcut_line():
    # A──D direct at 100, A──B──C──D at 10 each.
    nodes = make_nodes("A", "B", "C", "D")
    links = [
        Link("A", "D", forward_cost=100),
        Link("A", "B", forward_cost=10),
        Link("B", "C", forward_cost=10),
        Link("C", "D", forward_cost=10),
    ]
    return nodes, links


@pytest.fixture
def europe():
    # One router per country, arranged in a ring:
    #
    #          [10]
    #   us1 ────────── gb1
    #    │              │
    #    │ [15]         │ [10]
    #    │              │
    #   fr1 ────────── de1
    #          [16]
    nodes = make_nodes("us1:US", "gb1:GB", "de1:DE", "fr1:FR")
    links = [
        Link("us1", "gb1", forward_cost=10, index=0),
        Link("gb1", "de1", forward_cost=10, index=1),
        Link("us1", "fr1", forward_cost=15, index=2),
        Link("fr1", "de1", forward_cost=16, index=3),
    ]
    return nodes, links


@pytest.fixture
def complete_5():
    """Fully connected graph with 5 nodes and unit costs."""
    nodes = make_nodes("A", "B", "C", "D", "E")
    ids = [n.id for n in nodes]
    links = [
        Link(a, b, forward_cost=1)
        for i, a in enumerate(ids)
        for b in ids[i + 1 :]
    ]
    return nodes, links


def random_topology(seed: int, node_count: int = 12, link_count: int = 24):
    """Build a reproducible random topology with cycles, asymmetric costs and
    some down links. Nodes are spread over three groups."""
    rng = random.Random(seed)
    nodes = make_nodes(*[f"n{i}:G{i % 3}" for i in range(node_count)])
    links = []
    while len(links) < link_count:
        a, b = rng.sample(range(node_count), 2)
        status = LinkStatus.DOWN if rng.random() < 0.1 else LinkStatus.UP
        links.append(
            Link(
                f"n{a}",
                f"n{b}",
                forward_cost=rng.randint(1, 20),
                reverse_cost=rng.choice([None, rng.randint(1, 20)]),
                status=status,
            )
        )
    return nodes, links
