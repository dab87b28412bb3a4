"""
Wiring: connection policy and proximity auto-connect.
"""

from arithflow.wiring.connection import (
    propose_connection,
    connect,
    can_connect,
    is_ancestor,
)
from arithflow.wiring.auto_connect import (
    BLOCK_WIDTH,
    SNAP_DISTANCE,
    output_anchor,
    find_snap_target,
    apply_proximity_snap,
    drag_block,
)

__all__ = [
    "propose_connection",
    "connect",
    "can_connect",
    "is_ancestor",
    "BLOCK_WIDTH",
    "SNAP_DISTANCE",
    "output_anchor",
    "find_snap_target",
    "apply_proximity_snap",
    "drag_block",
]
