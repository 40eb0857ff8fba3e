"""Core BipartiteGraph class with dual cross-referenced adjacency lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace

from bipgraph.config import GraphSettings, get_settings
from bipgraph.core.exceptions import EdgeNotFoundError, IndexOutOfRangeError
from bipgraph.core.graph import analysis, traversal
from bipgraph.core.models import Edge, Neighbor, Neighbors, NodeId, NodeType, Position

logger = logging.getLogger(__name__)

T1 = NodeType.TYPE1
T2 = NodeType.TYPE2


class BipartiteGraph:
    """Sparse bipartite graph.

    Every node keeps a list of Neighbor records for the nodes of the other
    type it is connected to. Each record also stores the position of its
    reciprocal record (``dual``), so an edge can be walked in O(1) from both
    ends. All mutations go through this class and leave that invariant intact.

    Node ids are positional: removing a node renumbers the higher-indexed
    nodes of the same type. Use HandleGraph when ids must stay stable.
    """

    __slots__ = ("_nb", "_settings", "_version")

    def __init__(
        self,
        nr1: int = 0,
        nr2: int = 0,
        edges: Iterable[tuple[int, int]] = (),
        check: bool | None = None,
        settings: GraphSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_settings()
        self._nb: dict[NodeType, list[list[Neighbor]]] = {T1: [], T2: []}
        self._version = 0
        self.construct(nr1, nr2, edges, check=check)

    # Construction

    def construct(
        self,
        nr1: int,
        nr2: int,
        edges: Iterable[tuple[int, int]],
        check: bool | None = None,
    ) -> None:
        """(Re)build from node counts and an edge list, discarding prior state.

        With ``check`` (default from settings) duplicate edges are skipped;
        without it they are inserted as parallel edges. The edge list is
        validated before anything is modified.
        """
        if nr1 < 0 or nr2 < 0:
            raise ValueError(f"Node counts must be non-negative, got {nr1}, {nr2}")
        if check is None:
            check = self._settings.check_duplicates

        pairs = [Edge(NodeId(n1), NodeId(n2)) for n1, n2 in edges]
        for n1, n2 in pairs:
            _require_int(n1, "type-1 node id")
            _require_int(n2, "type-2 node id")
            if not 0 <= n1 < nr1:
                raise IndexOutOfRangeError(f"Edge ({n1}, {n2}): type-1 node out of range [0, {nr1})")
            if not 0 <= n2 < nr2:
                raise IndexOutOfRangeError(f"Edge ({n1}, {n2}): type-2 node out of range [0, {nr2})")

        self._nb = {T1: [[] for _ in range(nr1)], T2: [[] for _ in range(nr2)]}
        for n1, n2 in pairs:
            self._link(n1, n2, check)
        logger.debug("Constructed %r from %d input edges", self, len(pairs))
        self._mutated()

    # Read access

    @property
    def nr1(self) -> int:
        """Number of type-1 nodes."""
        return len(self._nb[T1])

    @property
    def nr2(self) -> int:
        """Number of type-2 nodes."""
        return len(self._nb[T2])

    def count(self, node_type: NodeType | int) -> int:
        """Number of nodes of the given type."""
        return len(self._nb[NodeType.parse(node_type)])

    @property
    def num_edges(self) -> int:
        """Number of edges. O(nr1)."""
        return sum(len(records) for records in self._nb[T1])

    @property
    def version(self) -> int:
        """Counter bumped by every structural mutation."""
        return self._version

    @property
    def settings(self) -> GraphSettings:
        return self._settings

    def neighbors(self, node_type: NodeType | int, node: int) -> Neighbors:
        """Read-only view of all neighbors of a node. O(1)."""
        node_type = NodeType.parse(node_type)
        self._check_node(node_type, node)
        return Neighbors(self._nb[node_type][node])

    def nb1(self, n1: int) -> Neighbors:
        """Neighbors of type-1 node ``n1``."""
        return self.neighbors(T1, n1)

    def nb2(self, n2: int) -> Neighbors:
        """Neighbors of type-2 node ``n2``."""
        return self.neighbors(T2, n2)

    def neighbor(self, node_type: NodeType | int, node: int, pos: int) -> Neighbor:
        """The ``pos``'th neighbor record of a node. O(1)."""
        node_type = NodeType.parse(node_type)
        self._check_node(node_type, node)
        _require_int(pos, "Position")
        records = self._nb[node_type][node]
        if not 0 <= pos < len(records):
            raise IndexOutOfRangeError(
                f"Position {pos} out of range for {node_type.name} node {node} "
                f"(degree {len(records)})"
            )
        return records[pos]

    def degree(self, node_type: NodeType | int, node: int) -> int:
        """Number of neighbors of a node. O(1)."""
        node_type = NodeType.parse(node_type)
        self._check_node(node_type, node)
        return len(self._nb[node_type][node])

    def has_edge(self, n1: int, n2: int) -> bool:
        """Whether type-1 node ``n1`` and type-2 node ``n2`` are adjacent. O(degree(n1))."""
        self._check_edge(n1, n2)
        return self._find(n1, n2) is not None

    def edges(self) -> Iterator[Edge]:
        """Iterate edges grouped by type-1 node, in neighbor-list order."""
        for n1, records in enumerate(self._nb[T1]):
            for rec in records:
                yield Edge(NodeId(n1), rec.node)

    # Mutation

    def add_node(
        self, node_type: NodeType | int, neighbors: Iterable[int] | None = None
    ) -> NodeId:
        """Append a node, optionally connected to the given opposite-type nodes.

        Repeated ids in ``neighbors`` are connected once. Returns the new id.
        """
        node_type = NodeType.parse(node_type)
        other = node_type.other
        ids = list(dict.fromkeys(neighbors)) if neighbors is not None else []
        for nid in ids:
            self._check_node(other, nid)

        new_id = NodeId(len(self._nb[node_type]))
        records: list[Neighbor] = []
        for pos, nid in enumerate(ids):
            theirs = self._nb[other][nid]
            records.append(Neighbor(Position(pos), NodeId(nid), Position(len(theirs))))
            theirs.append(Neighbor(Position(len(theirs)), new_id, Position(pos)))
        self._nb[node_type].append(records)
        self._mutated()
        return new_id

    def add1(self, neighbors: Iterable[int] | None = None) -> NodeId:
        """Append a type-1 node."""
        return self.add_node(T1, neighbors)

    def add2(self, neighbors: Iterable[int] | None = None) -> NodeId:
        """Append a type-2 node."""
        return self.add_node(T2, neighbors)

    def add_edge(self, n1: int, n2: int, check: bool = True) -> bool:
        """Connect type-1 node ``n1`` and type-2 node ``n2``.

        With ``check`` the call is a no-op when the edge already exists
        (O(degree(n1))); without it the edge is appended unconditionally in
        O(1) and the caller must avoid duplicates. Returns whether an edge was
        added.
        """
        self._check_edge(n1, n2)
        added = self._link(NodeId(n1), NodeId(n2), check)
        if added:
            self._mutated()
        return added

    def erase_edge(self, n1: int, n2: int) -> None:
        """Remove the edge between ``n1`` and ``n2``, repairing positions on both sides.

        Raises EdgeNotFoundError if the nodes are not adjacent.
        """
        self._check_edge(n1, n2)
        pos = self._find(n1, n2)
        if pos is None:
            raise EdgeNotFoundError(f"No edge between type-1 node {n1} and type-2 node {n2}")
        self._unlink(T1, n1, pos)
        self._mutated()

    def remove_node(self, node_type: NodeType | int, node: int) -> None:
        """Remove a node with all incident edges. O(V + E).

        Nodes of the same type with a higher id shift down by one.
        """
        node_type = NodeType.parse(node_type)
        self._check_node(node_type, node)
        records = self._nb[node_type][node]
        degree = len(records)
        # Unlinking from the back never shifts this node's own list.
        while records:
            self._unlink(node_type, node, len(records) - 1)
        del self._nb[node_type][node]

        for others in self._nb[node_type.other]:
            for pos, rec in enumerate(others):
                if rec.node > node:
                    others[pos] = replace(rec, node=NodeId(rec.node - 1))
        logger.debug("Removed %s node %d with %d edges", node_type.name, node, degree)
        self._mutated()

    def erase1(self, n1: int) -> None:
        """Remove type-1 node ``n1``."""
        self.remove_node(T1, n1)

    def erase2(self, n2: int) -> None:
        """Remove type-2 node ``n2``."""
        self.remove_node(T2, n2)

    # Derived queries

    def second_order_neighbors(
        self, node_type: NodeType | int, node: int, include: bool = False
    ) -> list[NodeId]:
        """Same-type nodes sharing a neighbor with ``node``, sorted."""
        return traversal.second_order_neighbors(self, node_type, node, include)

    def delta1(self, n1: int, include: bool = False) -> list[NodeId]:
        return self.second_order_neighbors(T1, n1, include)

    def delta2(self, n2: int, include: bool = False) -> list[NodeId]:
        return self.second_order_neighbors(T2, n2, include)

    def is_connected(self) -> bool:
        return analysis.is_connected(self)

    def is_tree(self) -> bool:
        return analysis.is_tree(self)

    def check(self) -> None:
        """Raise InvariantError if any neighbor record is inconsistent."""
        analysis.check_invariant(self)

    def copy(self) -> BipartiteGraph:
        """Independent copy with the same structure and settings."""
        clone = BipartiteGraph(settings=self._settings)
        clone._nb = {t: [list(records) for records in lists] for t, lists in self._nb.items()}
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BipartiteGraph):
            return NotImplemented
        return self._nb == other._nb

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BipartiteGraph(nr1={self.nr1}, nr2={self.nr2}, edges={self.num_edges})"

    # Internals

    def _check_node(self, node_type: NodeType, node: int) -> None:
        _require_int(node, f"{node_type.name} node id")
        count = len(self._nb[node_type])
        if not 0 <= node < count:
            raise IndexOutOfRangeError(
                f"{node_type.name} node {node} out of range [0, {count})"
            )

    def _check_edge(self, n1: int, n2: int) -> None:
        self._check_node(T1, n1)
        self._check_node(T2, n2)

    def _find(self, n1: int, n2: int) -> Position | None:
        for rec in self._nb[T1][n1]:
            if rec.node == n2:
                return rec.iter
        return None

    def _link(self, n1: NodeId, n2: NodeId, check: bool) -> bool:
        if check and self._find(n1, n2) is not None:
            return False
        nb1 = self._nb[T1][n1]
        nb2 = self._nb[T2][n2]
        p1, p2 = Position(len(nb1)), Position(len(nb2))
        nb1.append(Neighbor(p1, n2, p2))
        nb2.append(Neighbor(p2, n1, p1))
        return True

    def _unlink(self, node_type: NodeType, node: int, pos: int) -> None:
        """Remove the record at ``pos`` of ``node`` together with its reciprocal."""
        rec = self._nb[node_type][node][pos]
        self._drop_record(node_type, node, pos)
        self._drop_record(node_type.other, rec.node, rec.dual)

    def _drop_record(self, node_type: NodeType, node: int, pos: int) -> None:
        """Delete one record and renumber the records after it.

        Each shifted record gets its ``iter`` decremented and its reciprocal's
        ``dual`` pointed at the new position.
        """
        records = self._nb[node_type][node]
        del records[pos]
        opposite = self._nb[node_type.other]
        for p in range(pos, len(records)):
            rec = records[p]
            records[p] = Neighbor(Position(p), rec.node, rec.dual)
            back = opposite[rec.node]
            back[rec.dual] = replace(back[rec.dual], dual=Position(p))

    def _mutated(self) -> None:
        self._version += 1
        if self._settings.verify_invariant:
            self.check()


def _require_int(value: object, what: str) -> None:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__} {value!r}")
