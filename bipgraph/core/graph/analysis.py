"""Graph analysis: connectivity, trees, cycles, invariant checking."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from bipgraph.core.exceptions import InvariantError
from bipgraph.core.graph.models import Node
from bipgraph.core.models import NodeId, NodeType, Position

if TYPE_CHECKING:
    from bipgraph.core.graph.base import BipartiteGraph


def _first_node(graph: BipartiteGraph) -> Node | None:
    if graph.nr1:
        return (NodeType.TYPE1, NodeId(0))
    if graph.nr2:
        return (NodeType.TYPE2, NodeId(0))
    return None


def is_connected(graph: BipartiteGraph) -> bool:
    """Whether every node is reachable from every other. O(V + E).

    A graph without nodes is connected.
    """
    start = _first_node(graph)
    if start is None:
        return True

    visited: set[Node] = {start}
    stack: list[Node] = [start]
    while stack:
        node_type, node = stack.pop()
        for nb in graph.neighbors(node_type, node):
            nxt = (node_type.other, nb.node)
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return len(visited) == graph.nr1 + graph.nr2


def is_tree(graph: BipartiteGraph) -> bool:
    """Whether the graph is connected and acyclic. O(V + E).

    Expands level by level from an arbitrary node, alternating node types.
    Each node is entered through one neighbor record; reaching an already
    visited node through any other record means there is a cycle. A graph
    without nodes is not a tree.
    """
    start = _first_node(graph)
    if start is None:
        return False

    visited: set[Node] = {start}
    level: list[tuple[Node, Position | None]] = [(start, None)]
    while level:
        next_level: list[tuple[Node, Position | None]] = []
        for (node_type, node), via in level:
            for nb in graph.neighbors(node_type, node):
                if nb.iter == via:
                    continue
                nxt = (node_type.other, nb.node)
                if nxt in visited:
                    return False
                visited.add(nxt)
                next_level.append((nxt, nb.dual))
        level = next_level
    return len(visited) == graph.nr1 + graph.nr2


def find_cycle(graph: BipartiteGraph) -> list[Node] | None:
    """Find one cycle, or None if the graph is acyclic.

    The cycle is returned as its nodes in walking order; the last node is
    adjacent to the first. Two parallel edges form a cycle of two nodes.
    """
    parent: dict[Node, tuple[Node, Position] | None] = {}
    for node_type in NodeType:
        for i in range(graph.count(node_type)):
            root = (node_type, NodeId(i))
            if root in parent:
                continue
            parent[root] = None
            queue: deque[tuple[Node, Position | None]] = deque([(root, None)])
            while queue:
                current, via = queue.popleft()
                current_type, current_id = current
                for nb in graph.neighbors(current_type, current_id):
                    if nb.iter == via:
                        continue
                    nxt = (current_type.other, nb.node)
                    if nxt in parent:
                        return _close_cycle(parent, current, nxt)
                    parent[nxt] = (current, nb.dual)
                    queue.append((nxt, nb.dual))
    return None


def _close_cycle(
    parent: dict[Node, tuple[Node, Position] | None], u: Node, v: Node
) -> list[Node]:
    """Join the tree paths of ``u`` and ``v`` at their lowest common ancestor."""

    def ancestry(node: Node) -> list[Node]:
        path = [node]
        link = parent[node]
        while link is not None:
            path.append(link[0])
            link = parent[link[0]]
        return path

    u_path = ancestry(u)
    v_path = ancestry(v)
    v_index = {node: i for i, node in enumerate(v_path)}
    for i, node in enumerate(u_path):
        if node in v_index:
            return u_path[: i + 1] + list(reversed(v_path[: v_index[node]]))
    raise InvariantError(f"Nodes {u} and {v} share an edge but not a component")


def check_invariant(graph: BipartiteGraph) -> None:
    """Verify every neighbor record against its reciprocal. O(V + E).

    Raises InvariantError describing the first inconsistent record.
    """
    for node_type in NodeType:
        other = node_type.other
        other_count = graph.count(other)
        for a in range(graph.count(node_type)):
            for p, rec in enumerate(graph.neighbors(node_type, a)):
                where = f"{node_type.name} node {a}, position {p}"
                if rec.iter != p:
                    raise InvariantError(f"{where}: iter is {rec.iter}")
                if not 0 <= rec.node < other_count:
                    raise InvariantError(f"{where}: neighbor {rec.node} out of range")
                back = graph.neighbors(other, rec.node)
                if not 0 <= rec.dual < len(back):
                    raise InvariantError(f"{where}: dual {rec.dual} out of range")
                reciprocal = back[rec.dual]
                if reciprocal.node != a or reciprocal.dual != p:
                    raise InvariantError(
                        f"{where}: reciprocal {reciprocal} does not point back"
                    )
