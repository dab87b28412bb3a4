"""
Editor session: the explicitly owned state behind the canvas.

The rendering layer calls these methods by block id in response to pointer
events and reads back list_blocks()/list_wires(); nothing here calls into
rendering. compute() returns a ComputeResult for the UI to display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from omegaconf import DictConfig

from arithflow.config import ConfigSource, load_config
from arithflow.errors import CycleDetectedError, EvalError, InvalidOperandError
from arithflow.evaluator import ChainEvaluator
from arithflow.foundation.block import Block, Position
from arithflow.foundation.graph import Graph, Wire
from arithflow.foundation.registry import BlockRegistry
from arithflow.wiring.auto_connect import drag_block
from arithflow.wiring.connection import propose_connection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComputeResult:
    """Outcome of compute(): a value, or an error with the offending block id if any."""

    value: Optional[float] = None
    error: Optional[EvalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def block_id(self) -> Optional[str]:
        if isinstance(self.error, InvalidOperandError):
            return self.error.block_id
        return None

    @property
    def message(self) -> str:
        if isinstance(self.error, InvalidOperandError):
            return f"Enter a number in block {self.error.block_id}"
        if isinstance(self.error, CycleDetectedError):
            return "The chain loops back on itself"
        if self.error is not None:
            return str(self.error)
        return f"Result: {format_number(self.value)}"


def format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


class Editor:
    """One graph plus the user actions of the editor: add, edit, drag, wire, delete, compute."""

    def __init__(
        self,
        config: ConfigSource = None,
        registry: Optional[BlockRegistry] = None,
    ) -> None:
        self._config: DictConfig = load_config(config)
        cfg = self._config
        self._graph = Graph(
            registry,
            input_position=Position(cfg.input_x, cfg.input_y),
            layout_origin=Position(cfg.layout_x, cfg.layout_y),
            layout_spacing=cfg.layout_spacing,
        )

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def config(self) -> DictConfig:
        return self._config

    def list_blocks(self) -> List[Block]:
        return self._graph.list_blocks()

    def list_wires(self) -> List[Wire]:
        return self._graph.list_wires()

    def add_block(self, kind: str, x: Optional[float] = None, y: Optional[float] = None) -> Block:
        if (x is None) != (y is None):
            raise ValueError("x and y must be given together")
        position = Position(x, y) if x is not None else None
        return self._graph.add_block(kind, position)

    def set_value(self, block_id: str, value: str) -> None:
        self._graph.update_block_value(block_id, value)

    def drag_block(self, block_id: str, x: float, y: float) -> Optional[Wire]:
        """Drop block_id at (x, y); with auto_connect on, snap and wire to a neighbour."""
        if not self._config.auto_connect:
            self._graph.move_block(block_id, Position(x, y))
            return None
        return drag_block(
            self._graph,
            block_id,
            Position(x, y),
            block_width=self._config.block_width,
            snap_distance=self._config.snap_distance,
            guard_cycles=self._config.guard_cycles,
        )

    def connect(self, source_id: str, target_id: str) -> Wire:
        return propose_connection(
            self._graph, Wire(source_id, target_id), guard_cycles=self._config.guard_cycles
        )

    def disconnect(self, source_id: str, target_id: str) -> bool:
        return self._graph.remove_wire(Wire(source_id, target_id))

    def delete_block(self, block_id: str) -> List[Wire]:
        return self._graph.delete_block(block_id)

    def compute(self) -> ComputeResult:
        try:
            value = ChainEvaluator().run(self._graph)
        except EvalError as e:
            logger.info("Compute failed: %s", e)
            return ComputeResult(error=e)
        return ComputeResult(value=value)
