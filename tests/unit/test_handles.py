"""Unit tests for stable node handles."""

import pytest

from bipgraph.core.exceptions import StaleHandleError
from bipgraph.core.graph import Handle, HandleGraph
from bipgraph.core.models import NodeType

T1 = NodeType.TYPE1
T2 = NodeType.TYPE2


@pytest.fixture
def handle_graph() -> tuple[HandleGraph, list[Handle], Handle]:
    """Three variables all attached to one factor."""
    hg = HandleGraph()
    variables = [hg.add_node(T1) for _ in range(3)]
    factor = hg.add_node(T2, variables)
    return hg, variables, factor


class TestHandleGraph:
    """Tests for handle allocation and translation."""

    def test_handles_map_to_positions(self, handle_graph) -> None:
        hg, variables, factor = handle_graph
        assert [hg.index_of(h) for h in variables] == [0, 1, 2]
        assert hg.index_of(factor) == 0
        assert hg.degree(factor) == 3
        assert len(hg) == 4

    def test_removal_keeps_other_handles(self, handle_graph) -> None:
        hg, (a, b, c), factor = handle_graph
        hg.remove_node(b)
        assert hg.index_of(a) == 0
        assert hg.index_of(c) == 1
        assert hg.neighbors(factor) == [a, c]
        hg.graph.check()

    def test_removed_handle_is_stale(self, handle_graph) -> None:
        hg, (_, b, _), _ = handle_graph
        hg.remove_node(b)
        assert b not in hg
        with pytest.raises(StaleHandleError):
            hg.index_of(b)
        with pytest.raises(StaleHandleError):
            hg.degree(b)

    def test_slot_reuse_bumps_generation(self, handle_graph) -> None:
        hg, (a, b, c), _ = handle_graph
        hg.remove_node(b)
        fresh = hg.add_node(T1)
        assert fresh.slot == b.slot
        assert fresh.generation == b.generation + 1
        assert fresh != b
        assert b not in hg
        assert hg.index_of(fresh) == 2
        assert hg.handles(T1) == [a, c, fresh]

    def test_handle_at_round_trip(self, handle_graph) -> None:
        hg, variables, _ = handle_graph
        for h in variables:
            assert hg.handle_at(T1, hg.index_of(h)) == h

    def test_edges_in_either_order(self, handle_graph) -> None:
        hg, (a, _, _), factor = handle_graph
        other = hg.add_node(T2)
        assert hg.add_edge(other, a) is True
        assert hg.has_edge(a, other)
        hg.erase_edge(a, other)
        assert not hg.has_edge(other, a)

    def test_same_type_edge_rejected(self, handle_graph) -> None:
        hg, (a, b, _), _ = handle_graph
        with pytest.raises(ValueError):
            hg.add_edge(a, b)

    def test_neighbors_must_be_other_type(self, handle_graph) -> None:
        hg, (a, _, _), _ = handle_graph
        with pytest.raises(ValueError):
            hg.add_node(T1, [a])

    def test_removing_factor_renumbers_nothing_visible(self, handle_graph) -> None:
        hg, variables, factor = handle_graph
        second = hg.add_node(T2, variables[:1])
        hg.remove_node(factor)
        assert hg.index_of(second) == 0
        assert hg.neighbors(variables[0]) == [second]
        assert hg.degree(variables[1]) == 0

    def test_unknown_handle(self) -> None:
        hg = HandleGraph()
        assert Handle(T1, 0, 0) not in hg
        with pytest.raises(StaleHandleError):
            hg.index_of(Handle(T1, 0, 0))
