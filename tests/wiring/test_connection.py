"""Tests for wiring.connection (single-input/single-output policy)."""

import pytest

from arithflow.errors import ConnectionRejected, RejectReason
from arithflow.foundation.graph import Graph, Wire
from arithflow.foundation.kinds import ADD_KIND, MULTIPLY_KIND
from arithflow.wiring.connection import can_connect, connect, is_ancestor, propose_connection
from tests.foundation.helpers import build_chain, wired_pairs


def test_propose_connection_adds_wire(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    w = propose_connection(graph, Wire("1", a.block_id))
    assert graph.list_wires() == [w]
    assert graph.get_wire_out("1") == w
    assert graph.get_wire_in(a.block_id) == w


def test_second_wire_into_occupied_target_is_rejected(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    b = graph.add_block(ADD_KIND)
    original = connect(graph, "1", b.block_id)
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, a.block_id, b.block_id)
    assert exc.value.reason == RejectReason.TARGET_OCCUPIED
    assert graph.list_wires() == [original]


def test_second_wire_out_of_occupied_source_is_rejected(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    b = graph.add_block(MULTIPLY_KIND)
    connect(graph, "1", a.block_id)
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, "1", b.block_id)
    assert exc.value.reason == RejectReason.SOURCE_OCCUPIED
    assert wired_pairs(graph) == {("1", a.block_id)}


def test_target_occupied_is_checked_before_source(graph: Graph) -> None:
    a, b = build_chain(graph, (ADD_KIND, "1"), (ADD_KIND, "2"))
    # "1" already has an output and b already has an input
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, "1", b)
    assert exc.value.reason == RejectReason.TARGET_OCCUPIED


def test_identical_wire_is_rejected_as_target_occupied(graph: Graph) -> None:
    (a,) = build_chain(graph, (ADD_KIND, "1"))
    v = graph.version
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, "1", a)
    assert exc.value.reason == RejectReason.TARGET_OCCUPIED
    assert graph.list_wires() == [Wire("1", a)]
    assert graph.version == v


def test_unknown_block_rejected(graph: Graph) -> None:
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, "1", "99")
    assert exc.value.reason == RejectReason.UNKNOWN_BLOCK
    assert graph.list_wires() == []


def test_input_block_has_no_input_port(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, a.block_id, "1")
    assert exc.value.reason == RejectReason.PORT_MISSING


def test_unknown_handle_rejected(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    with pytest.raises(ConnectionRejected) as exc:
        propose_connection(graph, Wire("1", a.block_id, target_handle="side"))
    assert exc.value.reason == RejectReason.PORT_MISSING


def test_self_loop_rejected(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, a.block_id, a.block_id)
    assert exc.value.reason == RejectReason.SELF_LOOP


def test_guard_cycles_rejects_wire_back_to_ancestor(graph: Graph) -> None:
    # Detached pair b -> c; closing c -> b would form a loop
    b = graph.add_block(ADD_KIND)
    c = graph.add_block(ADD_KIND)
    d = graph.add_block(ADD_KIND)
    connect(graph, b.block_id, c.block_id)
    connect(graph, c.block_id, d.block_id)
    assert is_ancestor(graph, b.block_id, d.block_id)
    assert not is_ancestor(graph, d.block_id, b.block_id)
    graph.remove_wire(Wire(b.block_id, c.block_id))
    connect(graph, d.block_id, b.block_id)
    with pytest.raises(ConnectionRejected) as exc:
        connect(graph, b.block_id, c.block_id, guard_cycles=True)
    assert exc.value.reason == RejectReason.WOULD_CYCLE
    assert wired_pairs(graph) == {(c.block_id, d.block_id), (d.block_id, b.block_id)}


def test_can_connect_mirrors_policy(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    b = graph.add_block(ADD_KIND)
    assert can_connect(graph, Wire("1", a.block_id)) is True
    connect(graph, "1", a.block_id)
    assert can_connect(graph, Wire("1", a.block_id)) is False  # already present
    assert can_connect(graph, Wire("1", b.block_id)) is False
    assert can_connect(graph, Wire(b.block_id, a.block_id)) is False
    assert can_connect(graph, Wire(a.block_id, "1")) is False
    assert len(graph.list_wires()) == 1


def test_rejection_message_names_wire(graph: Graph) -> None:
    a = graph.add_block(ADD_KIND)
    with pytest.raises(ConnectionRejected, match=r"self_loop.*\(2\.out\) -> \(2\.in\)"):
        connect(graph, a.block_id, a.block_id)
