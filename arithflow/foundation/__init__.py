"""
Foundation: ports, blocks, block kinds, graph store.

Importing the package registers the built-in kinds (input, add, multiply).
"""

from arithflow.foundation.port import Port, PortDirection, IN_HANDLE, OUT_HANDLE
from arithflow.foundation.block import Block, Position
from arithflow.foundation.registry import BlockKind, BlockRegistry, register_kind
from arithflow.foundation.kinds import (
    INPUT_KIND,
    ADD_KIND,
    MULTIPLY_KIND,
    register_builtin_kinds,
)
from arithflow.foundation.graph import Graph, Wire, INPUT_BLOCK_ID

__all__ = [
    "Port",
    "PortDirection",
    "IN_HANDLE",
    "OUT_HANDLE",
    "Block",
    "Position",
    "BlockKind",
    "BlockRegistry",
    "register_kind",
    "INPUT_KIND",
    "ADD_KIND",
    "MULTIPLY_KIND",
    "register_builtin_kinds",
    "Graph",
    "Wire",
    "INPUT_BLOCK_ID",
]
