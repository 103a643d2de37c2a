"""Value formatting for displaying graphs and results."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping
from numbers import Real
from typing import TYPE_CHECKING, Any

from ._name import Name

if TYPE_CHECKING:
    from ._ir import CompiledGraph

FREE = "<free>"

type Describer = Callable[[Name], str]


def format_value(value: Any, filter_keys: Collection[Any] | None = None) -> Any:
    """Prepare a value for display.

    Numbers are rendered with two decimals and missing values (None) as the
    `FREE` marker. Mappings become lists of ``(key, value)`` pairs, except
    for keys listed in `filter_keys`, which are shown without their value.
    Lists, tuples and sets become lists. Everything else is returned as is.

    Example:
        >>> format_value({"a": 1, "b": [2.5, None]}, filter_keys={"a"})
        ['a', ('b', ['2.50', '<free>'])]

    """
    filter_keys = filter_keys or ()
    match value:
        case None:
            return FREE
        case bool():
            return value
        case Real():
            return f"{float(value):.2f}"
        case Mapping():
            return [
                k if k in filter_keys else (k, format_value(v, filter_keys))
                for k, v in value.items()
            ]
        case list() | tuple() | set() | frozenset():
            return [format_value(v, filter_keys) for v in value]
        case _:
            return value


def describe_with_result(
    graph: CompiledGraph,  # noqa: ARG001
    bindings: Mapping[Name, Any],
    results: Mapping[Name, Any],
) -> Describer:
    """Label each name with its value in `results`.

    Names without a value (free variables before binding) are labelled `FREE`.
    Keys of `bindings` are shown without their value when they are mappings.
    """

    def describe(name: Name) -> str:
        return str(format_value(results.get(name), bindings))

    return describe


def describe_with_fn(
    graph: CompiledGraph,
    bindings: Mapping[Name, Any],
    results: Mapping[Name, Any],  # noqa: ARG001
) -> Describer:
    """Label each declared name with the name of its node function."""

    def describe(name: Name) -> str:
        if name in graph.table:
            return str(graph.get_node(name).label)
        return str(format_value(bindings.get(name)))

    return describe


def describe_name(
    graph: CompiledGraph,  # noqa: ARG001
    bindings: Mapping[Name, Any],  # noqa: ARG001
    results: Mapping[Name, Any],  # noqa: ARG001
) -> Describer:
    """Label each name with the name alone."""
    return str
