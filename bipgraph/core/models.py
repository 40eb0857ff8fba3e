"""Data models for bipgraph."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, NewType, overload

NodeId = NewType("NodeId", int)
"""Absolute index of a node among the nodes of its type."""

Position = NewType("Position", int)
"""Relative index into one node's neighbor list."""


class NodeType(Enum):
    """The two disjoint node types of a bipartite graph."""

    TYPE1 = 1
    TYPE2 = 2

    @property
    def other(self) -> NodeType:
        return NodeType.TYPE2 if self is NodeType.TYPE1 else NodeType.TYPE1

    @classmethod
    def parse(cls, value: NodeType | int | str) -> NodeType:
        """Accept a NodeType, 1/2, or "1"/"2"/"type1"/"type2"."""
        if isinstance(value, NodeType):
            return value
        text = str(value).strip().lower().removeprefix("type")
        try:
            return cls(int(text))
        except ValueError:
            raise ValueError(f"Invalid node type: {value!r}") from None


@dataclass(frozen=True, slots=True)
class Neighbor:
    """One entry of a node's neighbor list.

    ``iter`` is the position of this entry in its owner's list, ``node`` the
    absolute id of the neighboring node and ``dual`` the position of the
    reciprocal entry in the neighbor's own list::

        n = graph.neighbor(NodeType.TYPE1, i, _I)
        n.iter == _I
        graph.neighbor(NodeType.TYPE2, n.node, n.dual).node == i
    """

    iter: Position
    node: NodeId
    dual: Position


class Edge(NamedTuple):
    """Edge between node ``n1`` of type 1 and node ``n2`` of type 2."""

    n1: NodeId
    n2: NodeId


class Neighbors(Sequence[Neighbor]):
    """Read-only view of one node's neighbor list.

    Reflects later mutations of the graph, so it should not be held across a
    structural change.
    """

    __slots__ = ("_records",)

    def __init__(self, records: list[Neighbor]) -> None:
        self._records = records

    @overload
    def __getitem__(self, index: int) -> Neighbor: ...

    @overload
    def __getitem__(self, index: slice) -> list[Neighbor]: ...

    def __getitem__(self, index: int | slice) -> Neighbor | list[Neighbor]:
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Neighbor]:
        return iter(self._records)

    def nodes(self) -> list[NodeId]:
        """Absolute ids of all neighbors, in list order."""
        return [nb.node for nb in self._records]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Neighbors):
            return self._records == other._records
        if isinstance(other, Sequence):
            return list(self._records) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Neighbors({self._records!r})"
