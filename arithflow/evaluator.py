"""ChainEvaluator — folds the chain that starts at the input block into a number.

Walks wires out of the input block one at a time:
1. No outgoing wire -> the chain has ended, return the accumulator
2. Target block missing from the store -> stop early, return the accumulator
3. Parse the operand of the target (plain decimal, finite), else InvalidOperandError
4. Apply the kind's fold; kinds without a fold are skipped

The graph is only read. Iteration is bounded by the block count so a corrupted
graph with a cycle fails with CycleDetectedError instead of looping.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Callable, List, Optional

from arithflow.errors import CycleDetectedError, InvalidOperandError
from arithflow.foundation.graph import Graph
from arithflow.foundation.registry import BlockRegistry

logger = logging.getLogger(__name__)

StepCallback = Callable[[str, str, Optional[float], float], None]


# Plain ASCII decimal with optional exponent; float() alone also takes "1_000" and non-ASCII digits
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_operand(block_id: str, value: Optional[str]) -> float:
    """Operand text -> finite float, or InvalidOperandError naming block_id."""
    if value is None or not _NUMBER_RE.fullmatch(value.strip()):
        raise InvalidOperandError(block_id, value)
    number = float(value.strip())
    if not math.isfinite(number):
        raise InvalidOperandError(block_id, value)
    return number


class ChainEvaluator:
    """Evaluator of the input block's chain.

    Supports:
    - A registry override (default: the graph's own registry)
    - Callbacks cb(block_id, kind, operand, accumulator) after every step
    - Debug mode with per-step logging
    """

    def __init__(
        self,
        registry: BlockRegistry | None = None,
        debug: bool = False,
        callbacks: List[StepCallback] | None = None,
    ):
        self.registry = registry
        self.debug = debug
        self.callbacks = callbacks or []

    def run(self, graph: Graph) -> float:
        registry = self.registry if self.registry is not None else graph.registry
        acc = 0.0
        current = graph.input_block_id
        max_steps = len(graph)
        steps = 0

        if self.debug:
            logger.info(f"Evaluating graph '{graph.graph_id}' from block {current}")

        while True:
            wire = graph.get_wire_out(current)
            if wire is None:
                break
            if steps >= max_steps:
                raise CycleDetectedError(steps)
            steps += 1

            block = graph.get_block(wire.target_id)
            if block is None:
                logger.debug("Chain points at missing block %s; stopping", wire.target_id)
                break

            kind = registry.get(block.kind)
            operand: Optional[float] = None
            if kind is None:
                logger.warning(f"Unknown block kind {block.kind!r} in block {block.block_id}; skipped")
            elif kind.takes_operand:
                operand = parse_operand(block.block_id, block.value)
                acc = kind.fold(acc, operand)

            if self.debug:
                logger.info(f"  [{block.block_id}] {block.kind} {operand} -> {acc}")

            for cb in self.callbacks:
                cb(block.block_id, block.kind, operand, acc)

            current = block.block_id

        return acc

    def chain_ids(self, graph: Graph) -> List[str]:
        """Block ids along the chain, input block first; stops at a missing block or a revisit."""
        ids = [graph.input_block_id]
        seen = {graph.input_block_id}
        current = graph.input_block_id
        while True:
            wire = graph.get_wire_out(current)
            if wire is None or wire.target_id in seen or graph.get_block(wire.target_id) is None:
                return ids
            ids.append(wire.target_id)
            seen.add(wire.target_id)
            current = wire.target_id


def evaluate(graph: Graph, registry: BlockRegistry | None = None, *, debug: bool = False) -> float:
    """Evaluate graph's chain. Raises InvalidOperandError or CycleDetectedError."""
    return ChainEvaluator(registry=registry, debug=debug).run(graph)


def chain_ids(graph: Graph) -> List[str]:
    return ChainEvaluator().chain_ids(graph)
