"""Stable node handles on top of a positionally indexed BipartiteGraph."""

from __future__ import annotations

from collections.abc import Iterable

from bipgraph.config import GraphSettings
from bipgraph.core.exceptions import StaleHandleError
from bipgraph.core.graph.base import BipartiteGraph
from bipgraph.core.graph.models import Handle
from bipgraph.core.models import NodeId, NodeType


class _SlotTable:
    """Slot bookkeeping for the nodes of one type."""

    __slots__ = ("generations", "dense", "order", "free")

    def __init__(self) -> None:
        self.generations: list[int] = []
        self.dense: list[int | None] = []  # slot -> positional id, None when free
        self.order: list[int] = []  # positional id -> slot
        self.free: list[int] = []

    def acquire(self, dense_id: int) -> tuple[int, int]:
        if self.free:
            slot = self.free.pop()
        else:
            slot = len(self.generations)
            self.generations.append(0)
            self.dense.append(None)
        self.dense[slot] = dense_id
        self.order.append(slot)
        return slot, self.generations[slot]

    def release(self, slot: int, dense_id: int) -> None:
        self.dense[slot] = None
        self.generations[slot] += 1
        self.free.append(slot)
        del self.order[dense_id]
        for pos in range(dense_id, len(self.order)):
            self.dense[self.order[pos]] = pos


class HandleGraph:
    """Bipartite graph addressed by stable handles.

    Removing a node invalidates only that node's handle; handles of other
    nodes keep working even though their positional ids shift. The wrapped
    ``graph`` gives dense positional access for algorithms that iterate by
    id, and ``index_of``/``handle_at`` translate between the two. The wrapped
    graph must only be mutated through this class.
    """

    def __init__(self, settings: GraphSettings | None = None) -> None:
        self._graph = BipartiteGraph(settings=settings)
        self._tables = {NodeType.TYPE1: _SlotTable(), NodeType.TYPE2: _SlotTable()}

    @property
    def graph(self) -> BipartiteGraph:
        return self._graph

    def add_node(
        self, node_type: NodeType | int, neighbors: Iterable[Handle] | None = None
    ) -> Handle:
        """Add a node, optionally connected to existing nodes of the other type."""
        node_type = NodeType.parse(node_type)
        ids = None
        if neighbors is not None:
            ids = [self._index_of_type(h, node_type.other) for h in neighbors]
        dense_id = self._graph.add_node(node_type, ids)
        slot, generation = self._tables[node_type].acquire(dense_id)
        return Handle(node_type, slot, generation)

    def remove_node(self, handle: Handle) -> None:
        """Remove a node and its edges; ``handle`` becomes stale."""
        dense_id = self.index_of(handle)
        self._graph.remove_node(handle.node_type, dense_id)
        self._tables[handle.node_type].release(handle.slot, dense_id)

    def add_edge(self, a: Handle, b: Handle, check: bool = True) -> bool:
        n1, n2 = self._edge_ids(a, b)
        return self._graph.add_edge(n1, n2, check)

    def erase_edge(self, a: Handle, b: Handle) -> None:
        n1, n2 = self._edge_ids(a, b)
        self._graph.erase_edge(n1, n2)

    def has_edge(self, a: Handle, b: Handle) -> bool:
        n1, n2 = self._edge_ids(a, b)
        return self._graph.has_edge(n1, n2)

    def neighbors(self, handle: Handle) -> list[Handle]:
        """Handles of all neighbors, in neighbor-list order."""
        other = handle.node_type.other
        records = self._graph.neighbors(handle.node_type, self.index_of(handle))
        return [self.handle_at(other, rec.node) for rec in records]

    def degree(self, handle: Handle) -> int:
        return self._graph.degree(handle.node_type, self.index_of(handle))

    def handles(self, node_type: NodeType | int) -> list[Handle]:
        """Live handles of one type, in positional order."""
        node_type = NodeType.parse(node_type)
        return [self.handle_at(node_type, i) for i in range(self._graph.count(node_type))]

    def index_of(self, handle: Handle) -> NodeId:
        """Current positional id of the node behind ``handle``."""
        table = self._tables[handle.node_type]
        if not 0 <= handle.slot < len(table.generations):
            raise StaleHandleError(f"Unknown handle {handle!r}")
        dense_id = table.dense[handle.slot]
        if dense_id is None or table.generations[handle.slot] != handle.generation:
            raise StaleHandleError(f"Handle {handle!r} refers to a removed node")
        return NodeId(dense_id)

    def handle_at(self, node_type: NodeType | int, node: int) -> Handle:
        """Handle of the node currently at positional id ``node``."""
        node_type = NodeType.parse(node_type)
        self._graph.degree(node_type, node)  # bounds check
        slot = self._tables[node_type].order[node]
        return Handle(node_type, slot, self._tables[node_type].generations[slot])

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, Handle):
            return False
        try:
            self.index_of(handle)
        except StaleHandleError:
            return False
        return True

    def __len__(self) -> int:
        return self._graph.nr1 + self._graph.nr2

    def __repr__(self) -> str:
        return f"HandleGraph({self._graph!r})"

    def _index_of_type(self, handle: Handle, node_type: NodeType) -> NodeId:
        if handle.node_type is not node_type:
            raise ValueError(f"Expected a {node_type.name} handle, got {handle!r}")
        return self.index_of(handle)

    def _edge_ids(self, a: Handle, b: Handle) -> tuple[NodeId, NodeId]:
        if a.node_type is NodeType.TYPE2:
            a, b = b, a
        return (
            self._index_of_type(a, NodeType.TYPE1),
            self._index_of_type(b, NodeType.TYPE2),
        )
