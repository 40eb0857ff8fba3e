"""
Bipartite graph data structure and algorithms.

Data Structures:
    - BipartiteGraph: Dual cross-referenced adjacency lists with O(1) edge walks
    - HandleGraph: Stable generation-counted handles over a BipartiteGraph
    - LegacyEdgeIndex: Deprecated flat edge list addressed by ordinal

Algorithms:
    - traversal: second-order neighborhoods, BFS order, connected components
    - analysis: connectivity, tree test, cycle search, invariant check

Loading and export:
    - from_edges() / from_dict() / load_json(): Build graphs from edge lists
    - to_dot() / write_dot(): GraphViz rendering
"""

from bipgraph.core.graph.base import BipartiteGraph
from bipgraph.core.graph.dot import to_dot, write_dot
from bipgraph.core.graph.handles import HandleGraph
from bipgraph.core.graph.legacy import LegacyEdgeIndex
from bipgraph.core.graph.loader import from_dict, from_edges, load_json, to_dict
from bipgraph.core.graph.models import Handle, Node

__all__ = [
    "BipartiteGraph",
    "Handle",
    "HandleGraph",
    "LegacyEdgeIndex",
    "Node",
    "from_dict",
    "from_edges",
    "load_json",
    "to_dict",
    "to_dot",
    "write_dot",
]
