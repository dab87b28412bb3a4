"""
Block: a node of the flow graph.

Records are frozen; the graph store replaces a record when its operand or
position changes, so a snapshot handed to a renderer never mutates under it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Position:
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Block:
    """
    block_id: unique in graph, stable for the block's lifetime.
    kind: registry key ("input", "add", "multiply", ...).
    value: operand text; None for kinds without an operand.
    """

    block_id: str
    kind: str
    value: Optional[str] = None
    position: Position = Position(0.0, 0.0)

    def __post_init__(self) -> None:
        if not self.block_id or not self.block_id.strip():
            raise ValueError("block_id must be non-empty")
        if not self.kind or not self.kind.strip():
            raise ValueError("kind must be non-empty")

    def with_value(self, value: Optional[str]) -> Block:
        return replace(self, value=value)

    def with_position(self, position: Position) -> Block:
        return replace(self, position=position)

    def __repr__(self) -> str:
        return (
            f"Block(block_id={self.block_id!r}, kind={self.kind!r}, "
            f"value={self.value!r}, position=({self.position.x}, {self.position.y}))"
        )
