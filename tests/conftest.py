"""Shared test configuration: fresh registries and graphs per test."""

import pytest

from arithflow.foundation.graph import Graph
from arithflow.foundation.kinds import register_builtin_kinds
from arithflow.foundation.registry import BlockRegistry


@pytest.fixture
def registry() -> BlockRegistry:
    return register_builtin_kinds(BlockRegistry())


@pytest.fixture
def graph(registry: BlockRegistry) -> Graph:
    return Graph(registry, graph_id="g1")
