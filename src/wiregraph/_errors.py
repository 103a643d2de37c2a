"""Exceptions raised by graph compilation and execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ._name import Name


class WiregraphError(Exception):
    """Base class for wiregraph errors."""


class CyclicDependencyError(WiregraphError, ValueError):
    """Raised when a declaration table's dependency edges form a cycle."""

    def __init__(self, name: Name, cycle: Sequence[Name]) -> None:
        self.name = name
        self.cycle = tuple(cycle)
        chain = " -> ".join(str(n) for n in self.cycle)
        super().__init__(f"Circular dependency involving '{name}': {chain}")


class UnboundVariablesError(WiregraphError, ValueError):
    """Raised when a graph is executed without binding all of its free variables."""

    def __init__(self, names: Iterable[Name]) -> None:
        self.names = frozenset(names)
        listed = ", ".join(sorted(str(n) for n in self.names))
        super().__init__(
            f"The arguments {{{listed}}} are not bound. "
            "You may need to pass them as an argument while executing the graph.",
        )
