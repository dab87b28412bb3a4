"""Chain builders and a hand-wired graph double for evaluator and policy tests."""

from typing import Dict, List, Optional, Tuple

from arithflow.foundation.block import Block, Position
from arithflow.foundation.graph import Graph, Wire
from arithflow.foundation.kinds import INPUT_KIND
from arithflow.foundation.registry import BlockRegistry
from arithflow.wiring.connection import propose_connection


def build_chain(graph: Graph, *steps: Tuple[str, str]) -> List[str]:
    """Add (kind, value) blocks and wire them input -> first -> second ... Returns their ids."""
    ids: List[str] = []
    prev = graph.input_block_id
    for kind, value in steps:
        block = graph.add_block(kind)
        graph.update_block_value(block.block_id, value)
        propose_connection(graph, Wire(prev, block.block_id))
        ids.append(block.block_id)
        prev = block.block_id
    return ids


def wired_pairs(graph: Graph) -> set:
    return {(w.source_id, w.target_id) for w in graph.list_wires()}


class HandWiredGraph:
    """
    Graph double with raw wires: lets tests build states the store never
    produces (cycles, wires into missing blocks).
    """

    def __init__(self, registry: BlockRegistry, blocks: List[Block], wires: List[Wire]) -> None:
        self.registry = registry
        self.graph_id = "hand"
        self.input_block_id = next(b.block_id for b in blocks if b.kind == INPUT_KIND)
        self._blocks: Dict[str, Block] = {b.block_id: b for b in blocks}
        self._wires = list(wires)

    def __len__(self) -> int:
        return len(self._blocks)

    def get_block(self, block_id: str) -> Optional[Block]:
        return self._blocks.get(block_id)

    def get_wire_out(self, block_id: str, handle: str = "out") -> Optional[Wire]:
        for w in self._wires:
            if w.source_id == block_id and w.source_handle == handle:
                return w
        return None


def block(block_id: str, kind: str, value: Optional[str] = None) -> Block:
    return Block(block_id, kind, value, Position(0.0, 0.0))
