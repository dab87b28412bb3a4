"""
Connection policy: validate a proposed wire and insert it into the graph.

Each block has at most one wire into its "in" port and one wire out of its
"out" port, so the chain reachable from the input block is a simple path.
Cycles cannot be built through this policy from a well-formed graph; the
optional guard_cycles check walks upstream from the source anyway.
"""

from __future__ import annotations

import logging

from arithflow.errors import ConnectionRejected, RejectReason
from arithflow.foundation.graph import Graph, Wire

logger = logging.getLogger(__name__)


def propose_connection(graph: Graph, wire: Wire, *, guard_cycles: bool = False) -> Wire:
    """
    Add wire to graph or raise ConnectionRejected. Returns the wire.
    Re-proposing a wire that is already present hits TARGET_OCCUPIED.
    """
    _check_endpoints(graph, wire)
    if graph.get_wire_in(wire.target_id, wire.target_handle) is not None:
        _reject(RejectReason.TARGET_OCCUPIED, wire)
    if graph.get_wire_out(wire.source_id, wire.source_handle) is not None:
        _reject(RejectReason.SOURCE_OCCUPIED, wire)
    if guard_cycles and is_ancestor(graph, wire.target_id, wire.source_id):
        _reject(RejectReason.WOULD_CYCLE, wire)
    graph._attach_wire(wire)
    logger.debug("Connected %s -> %s", wire.source_id, wire.target_id)
    return wire


def connect(graph: Graph, source_id: str, target_id: str, *, guard_cycles: bool = False) -> Wire:
    """Shorthand: propose (source_id.out) -> (target_id.in)."""
    return propose_connection(graph, Wire(source_id, target_id), guard_cycles=guard_cycles)


def can_connect(graph: Graph, wire: Wire, *, guard_cycles: bool = False) -> bool:
    """True if propose_connection would accept the wire (without adding it)."""
    try:
        _check_endpoints(graph, wire)
    except ConnectionRejected:
        return False
    if graph.get_wire_in(wire.target_id, wire.target_handle) is not None:
        return False
    if graph.get_wire_out(wire.source_id, wire.source_handle) is not None:
        return False
    return not (guard_cycles and is_ancestor(graph, wire.target_id, wire.source_id))


def is_ancestor(graph: Graph, candidate_id: str, block_id: str) -> bool:
    """True if candidate_id is block_id or lies upstream of it (walk incoming wires)."""
    seen = set()
    current = block_id
    while current is not None and current not in seen:
        if current == candidate_id:
            return True
        seen.add(current)
        incoming = graph.get_wire_in(current)
        current = incoming.source_id if incoming is not None else None
    return False


def _check_endpoints(graph: Graph, wire: Wire) -> None:
    source = graph.get_block(wire.source_id)
    target = graph.get_block(wire.target_id)
    if source is None or target is None:
        _reject(RejectReason.UNKNOWN_BLOCK, wire)
    if wire.source_id == wire.target_id:
        _reject(RejectReason.SELF_LOOP, wire)
    source_kind = graph.registry.get(source.kind)
    target_kind = graph.registry.get(target.kind)
    sp = source_kind.get_port(wire.source_handle) if source_kind else None
    tp = target_kind.get_port(wire.target_handle) if target_kind else None
    if sp is None or tp is None or not sp.compatible_with(tp):
        _reject(RejectReason.PORT_MISSING, wire)


def _reject(reason: RejectReason, wire: Wire) -> None:
    logger.debug("Rejected %s -> %s: %s", wire.source_id, wire.target_id, reason.value)
    raise ConnectionRejected(reason, wire)
