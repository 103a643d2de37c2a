"""Compile declaration tables into dependency graphs."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from wiregraph._errors import CyclicDependencyError
from wiregraph._graph import DependencyGraph, find_path
from wiregraph._name import Name

from ._graph_spec import CompiledGraph
from ._node_spec import declare

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def compile_graph(table: Mapping[Name | str, object]) -> CompiledGraph:
    """Build a CompiledGraph from a declaration table.

    Each key ``k`` with dependencies ``[d1, ..., dn]`` contributes the edges
    "k depends on di". Dependencies that are not declared become nodes with
    no dependencies of their own; they are the free variables of the graph.

    Edges are inserted one at a time and each insertion is checked against
    the edges already present, so a cycle is reported as soon as the edge
    closing it is seen.

    Args:
        table: Declaration table (see `declare` for accepted forms).

    Returns:
        The compiled graph.

    Raises:
        CyclicDependencyError: If the dependency edges form a cycle.

    Example:
        >>> import operator
        >>> graph = compile_graph({"c": (["a", "b"], operator.mul)})
        >>> sorted(str(n) for n in graph.nodes)
        ['a', 'b', 'c']

    """
    specs = declare(table)

    # Node -> names it directly depends on, for the edges inserted so far
    depends_on: dict[Name, set[Name]] = {}
    edges: list[tuple[Name, Name]] = []

    for key in sorted(specs, key=Name.sort_key):
        for dep in specs[key].dependencies:
            if dep in depends_on.get(key, ()):
                continue
            # Adding key -> dep closes a cycle iff dep already reaches key
            path = find_path(depends_on, dep, key)
            if path is not None:
                raise CyclicDependencyError(key, [key, *path])
            depends_on.setdefault(key, set()).add(dep)
            edges.append((dep, key))

    graph = DependencyGraph.from_edges(edges, nodes=specs)
    logger.debug("Compiled graph with %d nodes and %d edges", len(graph), len(edges))

    return CompiledGraph(graph=graph, table=MappingProxyType(specs))
