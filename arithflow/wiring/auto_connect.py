"""
Proximity auto-connect: snap a dragged block onto a neighbour's output anchor.

A block's output anchor sits BLOCK_WIDTH to the right of its position. When a
dragged block B ends up within SNAP_DISTANCE (on both axes, strict) of the
anchor of another block O, B is placed exactly on that anchor and O -> B is
proposed. Neighbours are tried in graph enumeration order; the first one that
qualifies wins even if a later one is closer.
"""

from __future__ import annotations

import logging
from typing import Optional

from arithflow.errors import ConnectionRejected
from arithflow.foundation.block import Block, Position
from arithflow.foundation.graph import Graph, Wire
from arithflow.wiring.connection import propose_connection

logger = logging.getLogger(__name__)

BLOCK_WIDTH = 160.0
SNAP_DISTANCE = 40.0


def output_anchor(block: Block, block_width: float = BLOCK_WIDTH) -> Position:
    return Position(block.position.x + block_width, block.position.y)


def find_snap_target(
    graph: Graph,
    block_id: str,
    *,
    block_width: float = BLOCK_WIDTH,
    snap_distance: float = SNAP_DISTANCE,
) -> Optional[Block]:
    """First other block whose output anchor is within snap_distance of block_id, or None."""
    block = graph.get_block(block_id)
    if block is None:
        return None
    for other in graph.list_blocks():
        if other.block_id == block_id:
            continue
        anchor = output_anchor(other, block_width)
        dx = block.position.x - anchor.x
        dy = block.position.y - anchor.y
        if abs(dx) < snap_distance and abs(dy) < snap_distance:
            return other
    return None


def apply_proximity_snap(
    graph: Graph,
    block_id: str,
    *,
    block_width: float = BLOCK_WIDTH,
    snap_distance: float = SNAP_DISTANCE,
    guard_cycles: bool = False,
) -> Optional[Wire]:
    """
    Snap block_id onto the first qualifying neighbour and propose neighbour -> block.
    Returns the new wire, or None when the proposal is rejected; the snap is kept either way.
    """
    other = find_snap_target(graph, block_id, block_width=block_width, snap_distance=snap_distance)
    if other is None:
        return None
    graph.move_block(block_id, output_anchor(other, block_width))
    try:
        return propose_connection(graph, Wire(other.block_id, block_id), guard_cycles=guard_cycles)
    except ConnectionRejected as e:
        logger.debug("Snapped %s onto %s without wiring: %s", block_id, other.block_id, e)
        return None


def drag_block(
    graph: Graph,
    block_id: str,
    position: Position,
    *,
    block_width: float = BLOCK_WIDTH,
    snap_distance: float = SNAP_DISTANCE,
    guard_cycles: bool = False,
) -> Optional[Wire]:
    """Move block_id to position, then apply the proximity snap."""
    if not graph.has_block(block_id):
        return None
    graph.move_block(block_id, position)
    return apply_proximity_snap(
        graph, block_id,
        block_width=block_width, snap_distance=snap_distance, guard_cycles=guard_cycles,
    )
