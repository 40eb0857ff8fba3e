"""Bipgraph custom exceptions."""


class BipGraphError(Exception):
    """Base exception for bipgraph errors."""


class IndexOutOfRangeError(BipGraphError, IndexError):
    """Node id or neighbor position beyond the current count."""


class EdgeNotFoundError(BipGraphError, KeyError):
    """Edge does not exist in the graph."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable.
        return str(self.args[0]) if self.args else ""


class NotIndexedError(BipGraphError):
    """Legacy edge index queried before it was (re)built."""


class InvariantError(BipGraphError):
    """The dual cross-reference invariant is broken."""


class StaleHandleError(BipGraphError):
    """Handle refers to a node that has been removed."""


class LoadError(BipGraphError):
    """Malformed edge-list document."""
