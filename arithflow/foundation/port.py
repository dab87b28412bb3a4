"""
Ports: the named ends of a wire.

Every block kind exposes at most one input port ("in") and at most one
output port ("out"). A wire always runs from an OUT port to an IN port.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

IN_HANDLE = "in"
OUT_HANDLE = "out"


class PortDirection(str, Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class Port:
    """Single port: name and direction."""

    name: str
    direction: PortDirection

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Port name must be non-empty")

    @property
    def is_input(self) -> bool:
        return self.direction == PortDirection.IN

    @property
    def is_output(self) -> bool:
        return self.direction == PortDirection.OUT

    def compatible_with(self, other: Port) -> bool:
        """True if self (source) can connect to other (target)."""
        return self.direction == PortDirection.OUT and other.direction == PortDirection.IN


INPUT_PORT = Port(IN_HANDLE, PortDirection.IN)
OUTPUT_PORT = Port(OUT_HANDLE, PortDirection.OUT)
