"""
Errors raised by the graph store, connection policy and chain evaluator.

ConnectionRejected is local to a single proposed wire: nothing is committed.
EvalError aborts the fold and names the offending block; the graph is untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from arithflow.foundation.graph import Wire


class ArithflowError(Exception):
    """Base class for arithflow errors."""


class RejectReason(str, Enum):
    TARGET_OCCUPIED = "target_occupied"
    SOURCE_OCCUPIED = "source_occupied"
    UNKNOWN_BLOCK = "unknown_block"
    PORT_MISSING = "port_missing"
    SELF_LOOP = "self_loop"
    WOULD_CYCLE = "would_cycle"


class ConnectionRejected(ArithflowError):
    """Proposed wire was not added to the graph."""

    def __init__(self, reason: RejectReason, wire: Optional["Wire"] = None) -> None:
        self.reason = reason
        self.wire = wire
        where = ""
        if wire is not None:
            where = f": ({wire.source_id}.{wire.source_handle}) -> ({wire.target_id}.{wire.target_handle})"
        super().__init__(f"Connection rejected ({reason.value}){where}")


class EvalError(ArithflowError):
    """Base class for chain evaluation failures."""


class InvalidOperandError(EvalError):
    """Operand text of a block is not a finite number."""

    def __init__(self, block_id: str, value: Optional[str] = None) -> None:
        self.block_id = block_id
        self.value = value
        super().__init__(f"Invalid operand {value!r} in block {block_id}")


class CycleDetectedError(EvalError):
    """Chain revisits a block; the graph is malformed."""

    def __init__(self, steps: int) -> None:
        self.steps = steps
        super().__init__(f"Cycle detected in chain after {steps} steps")
