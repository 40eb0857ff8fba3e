"""
Bipgraph: sparse bipartite graphs for graphical-model inference.

Nodes come in two types (e.g. variables and factors) and edges only run
between types. Every neighbor record knows where its reciprocal lives, so
message-passing loops can walk an edge from either end in O(1):

    from bipgraph import BipartiteGraph, NodeType

    graph = BipartiteGraph(3, 2, [(0, 0), (1, 0), (2, 0), (1, 1), (2, 1)])
    for i in range(graph.nr1):
        for nb in graph.nb1(i):
            reciprocal = graph.neighbor(NodeType.TYPE2, nb.node, nb.dual)
"""

from bipgraph.core import (
    BipGraphError,
    Edge,
    EdgeNotFoundError,
    IndexOutOfRangeError,
    InvariantError,
    Neighbor,
    NodeType,
    NotIndexedError,
)
from bipgraph.core.graph import BipartiteGraph, HandleGraph, LegacyEdgeIndex

__version__ = "0.1.0"

__all__ = [
    "BipartiteGraph",
    "HandleGraph",
    "LegacyEdgeIndex",
    "NodeType",
    "Neighbor",
    "Edge",
    "BipGraphError",
    "IndexOutOfRangeError",
    "EdgeNotFoundError",
    "NotIndexedError",
    "InvariantError",
]
