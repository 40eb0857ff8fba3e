"""
Core module: data models and exceptions.

Models (models.py):
    - NodeType: The two node types of a bipartite graph
    - Neighbor: One dual cross-referenced neighbor record
    - Edge: A (type-1 id, type-2 id) pair
    - NodeId/Position: Absolute node ids vs. positions in a neighbor list

Exceptions (exceptions.py):
    - BipGraphError: Base exception for all bipgraph errors
    - IndexOutOfRangeError: Node id or position beyond the current count
    - EdgeNotFoundError: Requested edge doesn't exist
    - NotIndexedError: Legacy edge index missing or stale

Graph (graph/):
    - BipartiteGraph and the algorithms operating on it
"""

from bipgraph.core.exceptions import (
    BipGraphError,
    EdgeNotFoundError,
    IndexOutOfRangeError,
    InvariantError,
    LoadError,
    NotIndexedError,
    StaleHandleError,
)
from bipgraph.core.models import Edge, Neighbor, Neighbors, NodeId, NodeType, Position

__all__ = [
    # Models
    "NodeType",
    "Neighbor",
    "Neighbors",
    "Edge",
    "NodeId",
    "Position",
    # Exceptions
    "BipGraphError",
    "IndexOutOfRangeError",
    "EdgeNotFoundError",
    "NotIndexedError",
    "InvariantError",
    "StaleHandleError",
    "LoadError",
]
