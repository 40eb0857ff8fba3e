"""Deprecated flat edge index over a BipartiteGraph.

Older inference code addresses edges by a global ordinal instead of walking
neighbor lists. LegacyEdgeIndex provides that view as a derived cache: it is
built explicitly with ``rebuild()`` and refuses to answer once the graph has
been mutated since, rather than handing out stale ordinals.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

from bipgraph.core.exceptions import EdgeNotFoundError, IndexOutOfRangeError, NotIndexedError
from bipgraph.core.models import Edge, NodeId

if TYPE_CHECKING:
    from bipgraph.core.graph.base import BipartiteGraph

logger = logging.getLogger(__name__)


class LegacyEdgeIndex:
    """Edges of a graph sorted by (type-1 id, type-2 id), addressable by ordinal."""

    __slots__ = ("_graph", "_edges", "_ordinals", "_indexed_version")

    def __init__(self, graph: BipartiteGraph) -> None:
        self._graph = graph
        self._edges: list[Edge] = []
        self._ordinals: dict[Edge, int] = {}
        self._indexed_version: int | None = None

    def rebuild(self) -> None:
        """Rebuild the edge list and ordinal map. O(E log E)."""
        warnings.warn(
            "LegacyEdgeIndex is deprecated; iterate graph.neighbors() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        logger.warning("Rebuilding obsolete edge index for %r", self._graph)
        self._edges = sorted(self._graph.edges())
        self._ordinals = {}
        for i, edge in enumerate(self._edges):
            # Parallel edges keep the ordinal of their first occurrence.
            self._ordinals.setdefault(edge, i)
        self._indexed_version = self._graph.version

    @property
    def is_current(self) -> bool:
        """Whether the index reflects the graph's current structure."""
        return self._indexed_version == self._graph.version

    def edge(self, ordinal: int) -> Edge:
        """The edge with the given ordinal."""
        self._require_index()
        if not 0 <= ordinal < len(self._edges):
            raise IndexOutOfRangeError(
                f"Edge ordinal {ordinal} out of range [0, {len(self._edges)})"
            )
        return self._edges[ordinal]

    def ordinal(self, n1: int, n2: int) -> int:
        """Ordinal of the edge between type-1 node ``n1`` and type-2 node ``n2``."""
        self._require_index()
        try:
            return self._ordinals[Edge(NodeId(n1), NodeId(n2))]
        except KeyError:
            raise EdgeNotFoundError(f"Edge ({n1}, {n2}) is not indexed") from None

    def edges(self) -> list[Edge]:
        """All indexed edges in ordinal order."""
        self._require_index()
        return list(self._edges)

    @property
    def num_edges(self) -> int:
        self._require_index()
        return len(self._edges)

    def _require_index(self) -> None:
        if self._indexed_version is None:
            raise NotIndexedError("Edge index has not been built; call rebuild() first")
        if not self.is_current:
            raise NotIndexedError("Graph changed since the edge index was built; call rebuild()")
