"""Graph query functions for CLI commands.

This module provides pure functions for querying a compiled graph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from wiregraph._name import Name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wiregraph._ir import CompiledGraph


class NodeKind(StrEnum):
    """How a name gets its value."""

    DECLARED = auto()  # Computed by a node function
    BOUND = auto()  # Supplied by the caller (input or override)
    FREE = auto()  # Referenced but not yet bound


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    name: Name
    kind: NodeKind
    dependency_count: int


@dataclass(frozen=True, slots=True)
class NodeDetail:
    """Detailed information about a node."""

    name: Name
    kind: NodeKind
    function: str | None
    dependencies: tuple[Name, ...]
    direct_dependents: frozenset[Name]
    all_dependencies: frozenset[Name]
    all_dependents: frozenset[Name]


@dataclass(slots=True)
class TreeNode:
    """A node in a dependency tree for rendering."""

    name: Name
    children: list[TreeNode]


def node_kind(graph: CompiledGraph, name: Name, bindings: Mapping[Name, Any] | None = None) -> NodeKind:
    if bindings and name in bindings:
        return NodeKind.BOUND
    if name in graph.table:
        return NodeKind.DECLARED
    return NodeKind.FREE


def list_nodes(
    graph: CompiledGraph,
    bindings: Mapping[Name, Any] | None = None,
    *,
    namespaces: list[str] | None = None,
    kinds: list[NodeKind] | None = None,
    leaves_only: bool = False,
) -> list[NodeInfo]:
    """List the names of a graph with optional filtering.

    Args:
        graph: The compiled graph.
        bindings: Bindings used to tell bound names from free ones.
        namespaces: Filter by namespace.
        kinds: Filter by node kind.
        leaves_only: If True, only return names nothing depends on.

    Returns:
        List of NodeInfo sorted by name.

    """
    names = list(graph)

    if namespaces:
        names = [n for n in names if n.namespace in namespaces]

    if leaves_only:
        leaves = graph.graph.leaves()
        names = [n for n in names if n in leaves]

    infos = [
        NodeInfo(
            name=n,
            kind=node_kind(graph, n, bindings),
            dependency_count=len(graph.graph.predecessors(n)),
        )
        for n in names
    ]

    if kinds:
        infos = [info for info in infos if info.kind in kinds]

    return infos


def get_node_detail(
    graph: CompiledGraph,
    name: Name,
    bindings: Mapping[Name, Any] | None = None,
) -> NodeDetail:
    """Get detailed information about a specific node.

    Raises:
        KeyError: If the name does not appear in the graph.

    """
    if name not in graph:
        msg = f"Node not found: {name}"
        raise KeyError(msg)

    spec = graph.table.get(name)

    return NodeDetail(
        name=name,
        kind=node_kind(graph, name, bindings),
        function=spec.label if spec is not None else None,
        dependencies=spec.dependencies if spec is not None else (),
        direct_dependents=graph.graph.successors(name),
        all_dependencies=graph.graph.ancestors(name),
        all_dependents=graph.graph.descendants(name),
    )


def get_dependency_tree(
    graph: CompiledGraph,
    name: Name,
    *,
    invert: bool = False,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a dependency tree for visualization.

    Args:
        graph: The compiled graph.
        name: The root node of the tree.
        invert: If False, show what the node depends on.
                If True, show what depends on the node (reverse dependencies).
        max_depth: Maximum depth to traverse (None for unlimited).

    Returns:
        TreeNode representing the dependency tree.

    Raises:
        KeyError: If the node is not found.

    """
    if name not in graph:
        msg = f"Node not found: {name}"
        raise KeyError(msg)

    def build_tree(node: Name, depth: int, visited: set[Name]) -> TreeNode:
        children: list[TreeNode] = []

        if max_depth is not None and depth >= max_depth:
            return TreeNode(name=node, children=children)

        neighbors = graph.graph.successors(node) if invert else graph.graph.predecessors(node)

        for neighbor in sorted(neighbors, key=Name.sort_key):
            if neighbor not in visited:
                visited.add(neighbor)
                children.append(build_tree(neighbor, depth + 1, visited))

        return TreeNode(name=node, children=children)

    return build_tree(name, 0, {name})
