"""
Block Registry: kind -> BlockKind (ports, fold, default operand).

- register(BlockKind), get(kind), require(kind) -> BlockKind.
- register_kind decorator turns a fold function into a registered kind,
  so new operations can be added without touching the evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from arithflow.foundation.port import INPUT_PORT, OUTPUT_PORT, Port

Fold = Callable[[float, float], float]


@dataclass(frozen=True)
class BlockKind:
    """
    Shape of a block kind.

    fold is None for kinds without an operand (the input block); the evaluator
    treats such kinds as a no-op step.
    """

    name: str
    has_input_port: bool = True
    has_output_port: bool = True
    fold: Optional[Fold] = None
    default_value: Optional[str] = None
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("kind name must be non-empty")

    @property
    def takes_operand(self) -> bool:
        return self.fold is not None

    def declare_ports(self) -> List[Port]:
        ports: List[Port] = []
        if self.has_input_port:
            ports.append(INPUT_PORT)
        if self.has_output_port:
            ports.append(OUTPUT_PORT)
        return ports

    def get_port(self, name: str) -> Optional[Port]:
        for p in self.declare_ports():
            if p.name == name:
                return p
        return None


class BlockRegistry:
    """Maps kind name (str) to BlockKind."""

    _global: Optional["BlockRegistry"] = None

    def __init__(self) -> None:
        self._kinds: Dict[str, BlockKind] = {}

    @classmethod
    def global_registry(cls) -> BlockRegistry:
        if cls._global is None:
            cls._global = cls()
        return cls._global

    def register(self, kind: BlockKind) -> None:
        self._kinds[kind.name.strip()] = kind

    def get(self, name: str) -> Optional[BlockKind]:
        return self._kinds.get(name)

    def require(self, name: str) -> BlockKind:
        kind = self._kinds.get(name)
        if kind is None:
            available = ", ".join(sorted(self._kinds))
            raise KeyError(f"Unknown block kind: {name!r}. Registered: {available}")
        return kind

    def kinds(self) -> List[str]:
        return list(self._kinds)

    def __contains__(self, name: str) -> bool:
        return name in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)


def register_kind(
    name: str,
    registry: Optional[BlockRegistry] = None,
    *,
    default_value: Optional[str] = "0",
    label: Optional[str] = None,
):
    """Decorator: register a fold function (acc, operand) -> acc as an operation kind."""
    reg = registry if registry is not None else BlockRegistry.global_registry()

    def decorator(fold: Fold) -> Fold:
        reg.register(BlockKind(
            name=name,
            has_input_port=True,
            has_output_port=True,
            fold=fold,
            default_value=default_value,
            label=label,
        ))
        return fold
    return decorator
