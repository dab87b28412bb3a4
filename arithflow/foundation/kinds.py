"""
Built-in block kinds: input, add, multiply.

Importing this module registers them in the global registry.
"""

from __future__ import annotations

from arithflow.foundation.registry import BlockKind, BlockRegistry, register_kind

INPUT_KIND = "input"
ADD_KIND = "add"
MULTIPLY_KIND = "multiply"

INPUT = BlockKind(
    name=INPUT_KIND,
    has_input_port=False,
    has_output_port=True,
    fold=None,
    default_value=None,
    label="Initial number",
)


def fold_add(acc: float, operand: float) -> float:
    return acc + operand


def fold_multiply(acc: float, operand: float) -> float:
    return acc * operand


def register_builtin_kinds(registry: BlockRegistry | None = None) -> BlockRegistry:
    """Register input/add/multiply in the given registry (default: global)."""
    reg = registry if registry is not None else BlockRegistry.global_registry()
    reg.register(INPUT)
    register_kind(ADD_KIND, reg, label="Add")(fold_add)
    register_kind(MULTIPLY_KIND, reg, label="Multiply by")(fold_multiply)
    return reg


register_builtin_kinds()
