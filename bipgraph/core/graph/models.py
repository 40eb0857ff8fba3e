"""Data models for graph operations."""

from __future__ import annotations

from dataclasses import dataclass

from bipgraph.core.models import NodeId, NodeType

Node = tuple[NodeType, NodeId]
"""A node addressed by type and positional id."""


@dataclass(frozen=True, slots=True)
class Handle:
    """Stable reference to a node of a HandleGraph.

    Survives removal of other nodes. ``generation`` distinguishes successive
    occupants of a reused slot, so a handle to a removed node never aliases
    the node that later takes its slot.
    """

    node_type: NodeType
    slot: int
    generation: int

    def __repr__(self) -> str:
        return f"Handle({self.node_type.name}, slot={self.slot}, gen={self.generation})"
