"""Tests for routegraph.model.topology."""

import pytest

from routegraph.model.topology import (
    Link,
    LinkStatus,
    Node,
    links_from_records,
    nodes_from_records,
)


class TestNode:
    def test_name_defaults_to_id(self):
        node = Node("r1", group="US")
        assert node.name == "r1"
        assert node.active is True

    def test_from_dict_accepts_country_alias(self):
        node = Node.from_dict(
            {
                "id": "deu-r1",
                "name": "Frankfurt",
                "country": "DEU",
                "is_active": False,
                "hostname": "fra-core-01",
                "loopback_ip": "10.0.0.1",
            }
        )
        assert node.id == "deu-r1"
        assert node.name == "Frankfurt"
        assert node.group == "DEU"
        assert node.active is False
        assert node.attrs == {"hostname": "fra-core-01", "loopback_ip": "10.0.0.1"}

    def test_nodes_are_immutable(self):
        node = Node("r1")
        with pytest.raises(AttributeError):
            node.group = "X"  # type: ignore[misc]


class TestLinkStatus:
    @pytest.mark.parametrize("raw", ["up", "UP", " Up "])
    def test_from_string_up(self, raw):
        assert LinkStatus.from_string(raw) is LinkStatus.UP

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Invalid link status"):
            LinkStatus.from_string("flapping")


class TestLink:
    def test_defaults(self):
        link = Link("A", "B")
        assert link.forward_cost is None
        assert link.reverse_cost is None
        assert link.cost is None
        assert link.status is LinkStatus.UP
        assert link.is_up

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError, match="must differ"):
            Link("A", "A", forward_cost=1)

    def test_status_string_is_normalized(self):
        link = Link("A", "B", status="DOWN")  # type: ignore[arg-type]
        assert link.status is LinkStatus.DOWN
        assert not link.is_up

    def test_connects_either_direction(self):
        link = Link("A", "B")
        assert link.connects("A", "B")
        assert link.connects("B", "A")
        assert not link.connects("A", "C")

    def test_from_dict_nested_endpoints(self):
        link = Link.from_dict(
            {
                "source": {"id": "A", "name": "A"},
                "target": "B",
                "forward_cost": 10,
                "reverse_cost": 20,
                "cost": 10,
                "status": "up",
                "source_interface": "Gi0/0",
                "target_interface": "Gi0/1",
                "edge_type": "backbone",
            }
        )
        assert (link.source, link.target) == ("A", "B")
        assert link.forward_cost == 10.0
        assert link.reverse_cost == 20.0
        assert link.source_interface == "Gi0/0"
        assert link.attrs == {"edge_type": "backbone"}

    def test_links_from_records_assigns_positions(self):
        links = links_from_records(
            [
                {"source": "A", "target": "B", "cost": 1},
                {"source": "B", "target": "C", "cost": 1, "index": 7},
                {"source": "C", "target": "A", "cost": 1},
            ]
        )
        assert [link.index for link in links] == [0, 7, 2]

    def test_nodes_from_records_preserves_order(self):
        nodes = nodes_from_records([{"id": "b"}, {"id": "a"}])
        assert [n.id for n in nodes] == ["b", "a"]
