"""Neighborhood expansion and breadth-first traversal."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from bipgraph.core.graph.models import Node
from bipgraph.core.models import NodeId, NodeType

if TYPE_CHECKING:
    from bipgraph.core.graph.base import BipartiteGraph


def second_order_neighbors(
    graph: BipartiteGraph, node_type: NodeType | int, node: int, include: bool = False
) -> list[NodeId]:
    """Same-type nodes reachable in exactly two hops, sorted.

    O(degree * max neighbor degree). ``node`` itself is part of the result
    only when ``include`` is set.
    """
    node_type = NodeType.parse(node_type)
    other = node_type.other
    found: set[NodeId] = set()
    for nb in graph.neighbors(node_type, node):
        found.update(rec.node for rec in graph.neighbors(other, nb.node))
    if include:
        found.add(NodeId(node))
    else:
        found.discard(NodeId(node))
    return sorted(found)


def bfs_order(graph: BipartiteGraph, node_type: NodeType | int, node: int) -> list[Node]:
    """Nodes reachable from a start node, in breadth-first order. O(V + E)."""
    start: Node = (NodeType.parse(node_type), NodeId(node))
    graph.degree(*start)  # bounds check

    visited: set[Node] = {start}
    order: list[Node] = []
    queue: deque[Node] = deque([start])
    while queue:
        current = queue.popleft()
        order.append(current)
        current_type, current_id = current
        for nb in graph.neighbors(current_type, current_id):
            nxt = (current_type.other, nb.node)
            if nxt not in visited:
                visited.add(nxt)
                queue.append(nxt)
    return order


def connected_components(graph: BipartiteGraph) -> list[list[Node]]:
    """Split the graph into connected components.

    Components are ordered by their first node, type-1 nodes before type-2
    nodes; each component lists its nodes in BFS order.
    """
    seen: set[Node] = set()
    components: list[list[Node]] = []
    for node_type in NodeType:
        for i in range(graph.count(node_type)):
            if (node_type, NodeId(i)) in seen:
                continue
            component = bfs_order(graph, node_type, i)
            seen.update(component)
            components.append(component)
    return components
