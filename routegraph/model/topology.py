"""Topology records consumed by the path engine.

``Node`` and ``Link`` are immutable snapshots handed over by the ingestion
layer. Links carry directional costs: ``forward_cost`` applies to
``source -> target`` and ``reverse_cost`` to ``target -> source``. Missing
values fall back as described in
:func:`routegraph.algorithms.adjacency.resolve_costs`.

The ``from_dict`` helpers adapt the shape of exported topology records
(``country`` / ``is_active`` keys, nested ``source`` / ``target`` objects). They
do not validate schemas; that is the ingestion layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from routegraph.logging import get_logger

logger = get_logger(__name__)


class LinkStatus(str, Enum):
    """Operational state of a link. Only ``UP`` links carry traffic."""

    UP = "up"
    DOWN = "down"

    @classmethod
    def from_string(cls, value: str) -> "LinkStatus":
        """Parse a case-insensitive status string.

        Args:
            value: Status string such as ``"up"`` or ``"DOWN"``.

        Returns:
            The corresponding LinkStatus member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(e.value for e in cls)
            raise ValueError(
                f"Invalid link status '{value}'. Valid values are: {valid}"
            ) from None


@dataclass(frozen=True)
class Node:
    """A router in the topology.

    Attributes:
        id: Unique identifier.
        name: Display name (defaults to ``id``).
        group: Membership tag (region or country) used by group analyses.
        active: Informational activity flag; it does not affect traversal.
        attrs: Additional metadata (hostname, loopback address, ...).
    """

    id: str
    name: str = ""
    group: str = ""
    active: bool = True
    attrs: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Node":
        """Build a node from an exported topology record.

        ``country`` and ``region`` are accepted as aliases of ``group`` and
        ``is_active`` as alias of ``active``. Unrecognized keys go to ``attrs``.
        """
        data = dict(record)
        node_id = str(data.pop("id"))
        name = data.pop("name", "") or ""
        group = ""
        for key in ("group", "country", "region"):
            value = data.pop(key, None)
            if value and not group:
                group = value
        active = data.pop("active", data.pop("is_active", True))
        return cls(
            id=node_id, name=str(name), group=str(group), active=bool(active), attrs=data
        )


@dataclass(frozen=True)
class Link:
    """One physical connection with directional costs.

    Attributes:
        source: Source node id.
        target: Target node id.
        forward_cost: Cost of traversing ``source -> target``.
        reverse_cost: Cost of traversing ``target -> source``.
        cost: Legacy undifferentiated cost, used when ``forward_cost`` is absent.
        status: Operational state; ``DOWN`` links are excluded from traversal.
        index: Stable position in the original link collection.
        source_interface: Interface name on the source side.
        target_interface: Interface name on the target side.
        attrs: Additional metadata.
    """

    source: str
    target: str
    forward_cost: Optional[float] = None
    reverse_cost: Optional[float] = None
    cost: Optional[float] = None
    status: LinkStatus = LinkStatus.UP
    index: Optional[int] = None
    source_interface: str = ""
    target_interface: str = ""
    attrs: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize ``status`` and reject self-loops.

        Raises:
            ValueError: If ``source == target`` or ``status`` is unknown.
        """
        if self.source == self.target:
            logger.error("Link self-loop on node '%s' rejected", self.source)
            raise ValueError(
                f"Link source and target must differ (got '{self.source}')."
            )
        if not isinstance(self.status, LinkStatus):
            object.__setattr__(self, "status", LinkStatus.from_string(str(self.status)))

    @property
    def is_up(self) -> bool:
        """Return True if the link is operational."""
        return self.status is LinkStatus.UP

    def connects(self, a: str, b: str) -> bool:
        """Return True if the link joins ``a`` and ``b`` in either direction."""
        return (self.source == a and self.target == b) or (
            self.source == b and self.target == a
        )

    def with_index(self, index: int) -> "Link":
        """Return a copy of this link carrying ``index``."""
        return replace(self, index=index)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Link":
        """Build a link from an exported topology record.

        ``source`` / ``target`` may be node ids or nested mappings with an ``id``.
        Unrecognized keys go to ``attrs``.
        """
        data = dict(record)
        source = _endpoint_id(data.pop("source"))
        target = _endpoint_id(data.pop("target"))
        status = data.pop("status", LinkStatus.UP.value) or LinkStatus.UP.value
        index = data.pop("index", None)
        return cls(
            source=source,
            target=target,
            forward_cost=_optional_cost(data.pop("forward_cost", None)),
            reverse_cost=_optional_cost(data.pop("reverse_cost", None)),
            cost=_optional_cost(data.pop("cost", None)),
            status=LinkStatus.from_string(str(status)),
            index=None if index is None else int(index),
            source_interface=str(data.pop("source_interface", "") or ""),
            target_interface=str(data.pop("target_interface", "") or ""),
            attrs=data,
        )


def _endpoint_id(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value["id"])
    return str(value)


def _optional_cost(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def nodes_from_records(records: Iterable[Mapping[str, Any]]) -> List[Node]:
    """Convert exported node records into ``Node`` objects, preserving order."""
    return [Node.from_dict(record) for record in records]


def links_from_records(records: Iterable[Mapping[str, Any]]) -> List[Link]:
    """Convert exported link records into ``Link`` objects, preserving order.

    Records without an ``index`` get their position in ``records``.
    """
    links: List[Link] = []
    for position, record in enumerate(records):
        link = Link.from_dict(record)
        if link.index is None:
            link = link.with_index(position)
        links.append(link)
    return links
