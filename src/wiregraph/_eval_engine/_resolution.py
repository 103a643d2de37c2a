"""Value resolution utilities for the evaluation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wiregraph._name import Name

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from wiregraph._ir import CompiledGraph


def free_variables(
    graph: CompiledGraph,
    bindings: Mapping[Name | str, Any] | None = None,
) -> frozenset[Name]:
    """Get the names a graph needs but neither declares nor has bound.

    A free variable is a name that appears as a dependency of some node,
    is not itself a declared node, and is not a key of `bindings`. Names
    nobody depends on are never free.

    Args:
        graph: The compiled graph to analyze.
        bindings: Values supplied by the caller, keyed by name.

    Returns:
        Set of unbound names.

    Example:
        >>> import operator
        >>> from wiregraph._ir import compile_graph
        >>> graph = compile_graph({"c": (["a", "b"], operator.mul)})
        >>> sorted(str(n) for n in free_variables(graph, {"a": 1}))
        ['b']

    """
    bound = frozenset(Name.coerce(k) for k in bindings) if bindings else frozenset()
    return frozenset(graph.dependents) - graph.declared - bound


def resolve_args(results: Mapping[Name, Any], dependencies: Iterable[Name]) -> list[Any]:
    """Look up dependency values in order.

    Raises:
        AssertionError: If a value is missing. Execution validates bindings
            and follows dependency order, so this indicates an engine bug.

    """
    args: list[Any] = []
    for dep in dependencies:
        if dep not in results:
            msg = f"Dependency '{dep}' was not resolved before use"
            raise AssertionError(msg)
        args.append(results[dep])
    return args
