"""Node specification for computation graphs."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from wiregraph._name import Name

type DeclarationTable = Mapping[Name, NodeSpec]


@dataclass(frozen=True, slots=True)
class NodeSpec:
    """Specification of a computation node.

    Attributes:
        dependencies: Names whose values are passed to `fn`, in order.
        fn: Function taking one positional argument per dependency.

    Example:
        >>> import operator
        >>> spec = NodeSpec((Name("foo", "a"), Name("foo", "b")), operator.mul)
        >>> spec.apply([3, 4])
        12

    """

    dependencies: tuple[Name, ...]
    fn: Callable[..., Any]

    def apply(self, values: Sequence[Any]) -> Any:
        """Call the node function with resolved dependency values."""
        return self.fn(*values)

    @property
    def label(self) -> str:
        """Human readable name of the node function."""
        return getattr(self.fn, "__qualname__", None) or repr(self.fn)


def _to_node_spec(key: Name, value: object) -> NodeSpec:
    if isinstance(value, NodeSpec):
        return value

    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 2:  # noqa: PLR2004
        msg = f"Declaration of '{key}' must be a (dependencies, fn) pair, got {value!r}"
        raise TypeError(msg)

    deps, fn = value
    if isinstance(deps, str) or not isinstance(deps, Sequence):
        msg = f"Dependencies of '{key}' must be a sequence of names, got {deps!r}"
        raise TypeError(msg)
    if not callable(fn):
        msg = f"Function of '{key}' is not callable: {fn!r}"
        raise TypeError(msg)

    return NodeSpec(dependencies=tuple(Name.coerce(d) for d in deps), fn=fn)


def declare(table: Mapping[Name | str, object]) -> dict[Name, NodeSpec]:
    """Normalize a declaration table.

    Keys may be `Name` instances or ``"namespace/local"`` strings. Values may be
    `NodeSpec` instances or ``(dependencies, fn)`` pairs.

    Example:
        >>> import operator
        >>> table = declare({"foo/c": (["foo/a", "foo/b"], operator.mul)})
        >>> table[Name("foo", "c")].dependencies
        (Name(namespace='foo', local='a'), Name(namespace='foo', local='b'))

    Raises:
        TypeError: If a key or declaration is malformed.

    """
    result: dict[Name, NodeSpec] = {}
    for raw_key, value in table.items():
        key = Name.coerce(raw_key)
        result[key] = _to_node_spec(key, value)
    return result
