"""
arithflow — flow-graph model and evaluation engine for an arithmetic block editor.

Blocks (input, add, multiply) are wired into a single chain starting at the
input block; evaluation folds the chain into one number.
Levels: foundation → wiring → evaluator → editor.
"""

__version__ = "0.1.0"

from arithflow.errors import (
    ArithflowError,
    ConnectionRejected,
    RejectReason,
    EvalError,
    InvalidOperandError,
    CycleDetectedError,
)
from arithflow.foundation import (
    Block,
    BlockKind,
    BlockRegistry,
    Graph,
    Port,
    PortDirection,
    Position,
    Wire,
    register_kind,
)
from arithflow.wiring import propose_connection, apply_proximity_snap, drag_block
from arithflow.evaluator import ChainEvaluator, evaluate
from arithflow.editor import ComputeResult, Editor

__all__ = [
    "__version__",
    "ArithflowError",
    "ConnectionRejected",
    "RejectReason",
    "EvalError",
    "InvalidOperandError",
    "CycleDetectedError",
    "Block",
    "BlockKind",
    "BlockRegistry",
    "Graph",
    "Port",
    "PortDirection",
    "Position",
    "Wire",
    "register_kind",
    "propose_connection",
    "apply_proximity_snap",
    "drag_block",
    "ChainEvaluator",
    "evaluate",
    "ComputeResult",
    "Editor",
]
