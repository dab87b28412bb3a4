"""
Graph store: the authoritative set of blocks and wires.

- Blocks (block_id -> Block, insertion order is the enumeration order)
- Wires (source_id, source_handle) -> (target_id, target_handle)
- delete_block removes the block and all incident wires in one step.

The store keeps its records consistent; connection rules (occupancy, cycles)
live in arithflow.wiring.connection, which is the only caller of _attach_wire.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from arithflow.foundation.block import Block, Position
from arithflow.foundation.kinds import INPUT_KIND
from arithflow.foundation.port import IN_HANDLE, OUT_HANDLE
from arithflow.foundation.registry import BlockRegistry

logger = logging.getLogger(__name__)

INPUT_BLOCK_ID = "1"

DEFAULT_INPUT_POSITION = Position(50.0, 100.0)
DEFAULT_LAYOUT_ORIGIN = Position(100.0, 200.0)
DEFAULT_LAYOUT_SPACING = 180.0


@dataclass(frozen=True)
class Wire:
    """Single wire: (source_id, source_handle) -> (target_id, target_handle)."""

    source_id: str
    target_id: str
    source_handle: str = OUT_HANDLE
    target_handle: str = IN_HANDLE

    def __post_init__(self) -> None:
        for name in ("source_id", "target_id", "source_handle", "target_handle"):
            v = getattr(self, name)
            if not v or (isinstance(v, str) and not v.strip()):
                raise ValueError(f"{name} must be non-empty")

    @property
    def source_key(self) -> Tuple[str, str]:
        return (self.source_id, self.source_handle)

    @property
    def target_key(self) -> Tuple[str, str]:
        return (self.target_id, self.target_handle)

    def touches(self, block_id: str) -> bool:
        return self.source_id == block_id or self.target_id == block_id


class Graph:
    """
    Graph = blocks (block_id -> Block) + wires.
    Created with exactly one input block; that block cannot be deleted and no
    second one can be added.
    """

    def __init__(
        self,
        registry: Optional[BlockRegistry] = None,
        *,
        graph_id: Optional[str] = None,
        input_position: Position = DEFAULT_INPUT_POSITION,
        layout_origin: Position = DEFAULT_LAYOUT_ORIGIN,
        layout_spacing: float = DEFAULT_LAYOUT_SPACING,
    ) -> None:
        self._graph_id = graph_id or "graph"
        self._registry = registry if registry is not None else BlockRegistry.global_registry()
        self._layout_origin = layout_origin
        self._layout_spacing = layout_spacing
        self._blocks: Dict[str, Block] = {}
        self._wires: List[Wire] = []
        self._wire_by_source: Dict[Tuple[str, str], Wire] = {}
        self._wire_by_target: Dict[Tuple[str, str], Wire] = {}
        self._next_id = int(INPUT_BLOCK_ID) + 1
        # Bump on every mutation so a renderer can tell its snapshot is stale
        self._version = 0
        kind = self._registry.require(INPUT_KIND)
        self._blocks[INPUT_BLOCK_ID] = Block(INPUT_BLOCK_ID, kind.name, kind.default_value, input_position)

    @property
    def graph_id(self) -> str:
        return self._graph_id

    @property
    def registry(self) -> BlockRegistry:
        return self._registry

    @property
    def input_block_id(self) -> str:
        return INPUT_BLOCK_ID

    @property
    def block_ids(self) -> Set[str]:
        return set(self._blocks)

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    # --- Read accessors ---

    def list_blocks(self) -> List[Block]:
        return list(self._blocks.values())

    def list_wires(self) -> List[Wire]:
        return list(self._wires)

    def get_block(self, block_id: str) -> Optional[Block]:
        return self._blocks.get(block_id)

    def has_block(self, block_id: str) -> bool:
        return block_id in self._blocks

    def get_wire_out(self, block_id: str, handle: str = OUT_HANDLE) -> Optional[Wire]:
        return self._wire_by_source.get((block_id, handle))

    def get_wire_in(self, block_id: str, handle: str = IN_HANDLE) -> Optional[Wire]:
        return self._wire_by_target.get((block_id, handle))

    def get_wires_touching(self, block_id: str) -> List[Wire]:
        return [w for w in self._wires if w.touches(block_id)]

    # --- Mutation ---

    def default_position(self) -> Position:
        """Placement for a new block when the caller gives none: one step right per block."""
        n = len(self._blocks)
        return self._layout_origin.offset(dx=n * self._layout_spacing)

    def add_block(self, kind: str, position: Optional[Position] = None) -> Block:
        """Create a block of the given kind with a fresh id and default operand. Returns the block."""
        block_kind = self._registry.require(kind)
        if block_kind.name == INPUT_KIND:
            raise ValueError("Graph already has an input block")
        block_id = self._allocate_id()
        block = Block(
            block_id=block_id,
            kind=block_kind.name,
            value=block_kind.default_value,
            position=position if position is not None else self.default_position(),
        )
        self._blocks[block_id] = block
        self._version += 1
        logger.debug("Added block %s (%s) at %s", block_id, kind, block.position.as_tuple())
        return block

    def update_block_value(self, block_id: str, value: Optional[str]) -> None:
        """Replace the operand text. Unknown block_id is a no-op."""
        block = self._blocks.get(block_id)
        if block is None:
            logger.debug("update_block_value: block %s not found, ignored", block_id)
            return
        self._blocks[block_id] = block.with_value(value)
        self._version += 1

    def move_block(self, block_id: str, position: Position) -> None:
        """Replace the position. Unknown block_id is a no-op."""
        block = self._blocks.get(block_id)
        if block is None:
            logger.debug("move_block: block %s not found, ignored", block_id)
            return
        self._blocks[block_id] = block.with_position(position)
        self._version += 1

    def delete_block(self, block_id: str) -> List[Wire]:
        """
        Remove the block together with every wire touching it.
        Returns the removed wires. Unknown block_id is a no-op.
        """
        if block_id == INPUT_BLOCK_ID:
            raise ValueError("The input block cannot be deleted")
        if block_id not in self._blocks:
            return []
        incident = self.get_wires_touching(block_id)
        for w in incident:
            self._detach_wire(w)
        del self._blocks[block_id]
        self._version += 1
        logger.debug("Deleted block %s with %d wire(s)", block_id, len(incident))
        return incident

    def remove_wire(self, wire: Wire) -> bool:
        """Detach a single wire. Returns False if it was not present."""
        if self._wire_by_source.get(wire.source_key) != wire:
            return False
        self._detach_wire(wire)
        self._version += 1
        logger.debug("Removed wire %s -> %s", wire.source_id, wire.target_id)
        return True

    def _attach_wire(self, wire: Wire) -> None:
        """Insert a wire whose endpoints exist and whose port slots are free."""
        if wire.source_id not in self._blocks:
            raise ValueError(f"Source block not found: {wire.source_id}")
        if wire.target_id not in self._blocks:
            raise ValueError(f"Target block not found: {wire.target_id}")
        if wire.source_key in self._wire_by_source or wire.target_key in self._wire_by_target:
            raise ValueError(f"Port already wired: {wire}")
        self._wires.append(wire)
        self._wire_by_source[wire.source_key] = wire
        self._wire_by_target[wire.target_key] = wire
        self._version += 1

    def _detach_wire(self, wire: Wire) -> None:
        self._wires.remove(wire)
        self._wire_by_source.pop(wire.source_key, None)
        self._wire_by_target.pop(wire.target_key, None)

    def _allocate_id(self) -> str:
        candidate = str(self._next_id)
        while candidate in self._blocks:
            self._next_id += 1
            candidate = str(self._next_id)
        self._next_id += 1
        return candidate

    def __repr__(self) -> str:
        return f"Graph(graph_id={self._graph_id!r}, blocks={len(self._blocks)}, wires={len(self._wires)})"
