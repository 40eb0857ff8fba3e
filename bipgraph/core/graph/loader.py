"""Load BipartiteGraph from edge lists and JSON documents."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from bipgraph.core.exceptions import LoadError
from bipgraph.core.graph.base import BipartiteGraph


def from_edges(
    edges: Iterable[tuple[int, int]],
    nr1: int | None = None,
    nr2: int | None = None,
    check: bool | None = None,
) -> BipartiteGraph:
    """Build a graph from an edge list. O(E).

    Missing node counts are inferred as the largest id seen plus one.
    """
    pairs = [(int(n1), int(n2)) for n1, n2 in edges]
    if nr1 is None:
        nr1 = max((n1 for n1, _ in pairs), default=-1) + 1
    if nr2 is None:
        nr2 = max((n2 for _, n2 in pairs), default=-1) + 1
    return BipartiteGraph(nr1, nr2, pairs, check=check)


def from_dict(data: dict[str, Any], check: bool | None = None) -> BipartiteGraph:
    """Build a graph from ``{"nr1": int, "nr2": int, "edges": [[n1, n2], ...]}``."""
    if not isinstance(data, dict):
        raise LoadError(f"Expected a JSON object, got {type(data).__name__}")
    raw_edges = data.get("edges", [])
    if not isinstance(raw_edges, list):
        raise LoadError("'edges' must be a list of [n1, n2] pairs")

    pairs: list[tuple[int, int]] = []
    for i, item in enumerate(raw_edges):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise LoadError(f"Edge #{i} must be a pair, got {item!r}")
        n1, n2 = item
        if not _is_index(n1) or not _is_index(n2):
            raise LoadError(f"Edge #{i} must hold non-negative integers, got {item!r}")
        pairs.append((n1, n2))

    counts = {}
    for key in ("nr1", "nr2"):
        value = data.get(key)
        if value is not None and not _is_index(value):
            raise LoadError(f"'{key}' must be a non-negative integer, got {value!r}")
        counts[key] = value
    return from_edges(pairs, counts["nr1"], counts["nr2"], check=check)


def load_json(path: Path, check: bool | None = None) -> BipartiteGraph:
    """Load a graph from a JSON edge-list document."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {path}: {e}") from e
    return from_dict(data, check=check)


def to_dict(graph: BipartiteGraph) -> dict[str, Any]:
    """Serialize a graph to the JSON edge-list document layout."""
    return {
        "nr1": graph.nr1,
        "nr2": graph.nr2,
        "edges": [[n1, n2] for n1, n2 in graph.edges()],
    }


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
