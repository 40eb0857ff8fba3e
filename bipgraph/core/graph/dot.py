"""GraphViz export."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from bipgraph.core.graph.base import BipartiteGraph


def write_dot(graph: BipartiteGraph, stream: TextIO) -> None:
    """Write ``graph`` in GraphViz .dot syntax.

    Type-1 nodes are named ``x<i>`` and drawn as circles, type-2 nodes are
    named ``y<j>`` and drawn as boxes; each type gets its own cluster.
    """
    stream.write("graph G {\n")
    stream.write("\tsubgraph cluster_type1 {\n")
    stream.write("\t\tnode[shape=circle,width=0.4,fixedsize=true];\n")
    for n1 in range(graph.nr1):
        stream.write(f'\t\tx{n1} [label="{n1}"];\n')
    stream.write("\t}\n")
    stream.write("\tsubgraph cluster_type2 {\n")
    stream.write("\t\tnode[shape=box,width=0.3,height=0.3,fixedsize=true];\n")
    for n2 in range(graph.nr2):
        stream.write(f'\t\ty{n2} [label="{n2}"];\n')
    stream.write("\t}\n")
    for n1, n2 in graph.edges():
        stream.write(f"\tx{n1} -- y{n2};\n")
    stream.write("}\n")


def to_dot(graph: BipartiteGraph) -> str:
    """Render ``graph`` as a .dot string."""
    buffer = io.StringIO()
    write_dot(graph, buffer)
    return buffer.getvalue()
