"""Core evaluation engine for compiled graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wiregraph._errors import UnboundVariablesError
from wiregraph._ir import compile_graph
from wiregraph._name import Name

from ._resolution import free_variables, resolve_args

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wiregraph._ir import CompiledGraph

logger = logging.getLogger(__name__)


def normalize_bindings(bindings: Mapping[Name | str, Any] | None) -> dict[Name, Any]:
    """Return a fresh dict of bindings keyed by Name."""
    if not bindings:
        return {}
    return {Name.coerce(k): v for k, v in bindings.items()}


def execute_graph(
    graph: CompiledGraph,
    bindings: Mapping[Name | str, Any] | None = None,
) -> dict[Name, Any]:
    """Evaluate a compiled graph.

    This is a pure function that:
    1. Checks that every free variable is bound
    2. Computes a topological order of the dependency relation
    3. Drops names already present in `bindings` (they are taken as given,
       even when they are also declared nodes)
    4. Evaluates the remaining nodes in order, passing each node function
       the values of its dependencies positionally

    Exceptions raised by node functions propagate unchanged.

    Args:
        graph: The compiled graph.
        bindings: Values for the free variables, and optionally overrides for
            declared nodes.

    Returns:
        A new dict mapping every bound and computed name to its value.

    Raises:
        UnboundVariablesError: If any free variable is left unbound. No node
            function is called in that case.

    Example:
        >>> import operator
        >>> graph = compile_graph({"c": (["a", "b"], operator.mul)})
        >>> execute_graph(graph, {"a": 15, "b": 3})[Name(None, "c")]
        45

    """
    results = normalize_bindings(bindings)

    missing = free_variables(graph, results)
    if missing:
        raise UnboundVariablesError(missing)

    eval_order = [name for name in graph.evaluation_order() if name not in results]

    logger.debug("Starting evaluation of %d nodes (%d bound)", len(eval_order), len(results))

    for name in eval_order:
        spec = graph.get_node(name)
        args = resolve_args(results, spec.dependencies)
        logger.debug("Evaluating %s", name)
        results[name] = spec.apply(args)
        logger.debug("Result for %s: %r", name, results[name])

    return results


def compile_and_execute(
    table: Mapping[Name | str, object],
    bindings: Mapping[Name | str, Any] | None = None,
) -> dict[Name, Any]:
    """Compile `table` and execute it with `bindings` in one step."""
    return execute_graph(compile_graph(table), bindings)
