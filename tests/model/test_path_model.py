"""Tests for routegraph.model.path."""

import pytest

from routegraph.model.path import Path


def test_path_properties():
    path = Path(("A", "B", "C"), (0, 1), 30)
    assert path.source == "A"
    assert path.destination == "C"
    assert path.hop_count == 2
    assert path.intermediate_nodes == ("B",)
    assert list(path.hops()) == [("A", "B"), ("B", "C")]
    assert len(path) == 3


def test_path_length_mismatch_rejected():
    with pytest.raises(ValueError):
        Path(("A", "B"), (), 1)
    with pytest.raises(ValueError):
        Path((), (), 0)


def test_uses_pair_matches_either_direction():
    path = Path(("A", "B", "C"), (0, 1), 2)
    assert path.uses_pair("B", "A")
    assert path.uses_pair("B", "C")
    assert not path.uses_pair("A", "C")


def test_ordering_by_cost_then_hops():
    cheap = Path(("A", "B"), (0,), 5)
    same_cost_longer = Path(("A", "C", "B"), (1, 2), 5)
    expensive = Path(("A", "D", "B"), (3, 4), 9)
    assert sorted([expensive, same_cost_longer, cheap]) == [
        cheap,
        same_cost_longer,
        expensive,
    ]


def test_equality_includes_links():
    assert Path(("A", "B"), (0,), 1) == Path(("A", "B"), (0,), 1)
    # Parallel links between the same nodes are distinct paths.
    assert Path(("A", "B"), (0,), 1) != Path(("A", "B"), (1,), 1)


def test_to_dict():
    assert Path(("A", "B"), (3,), 7).to_dict() == {
        "nodes": ["A", "B"],
        "links": [3],
        "total_cost": 7,
        "hop_count": 1,
    }
