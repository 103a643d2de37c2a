"""Generic dependency graph abstraction."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ._algorithms import topological_sort

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(frozen=True, slots=True)
class DependencyGraph[T]:
    """A directed acyclic graph representing dependencies between nodes.

    This is a pure, immutable data structure with query methods.
    It is generic over the node type T (e.g., str, int, Name).

    The graph represents "depends on" relationships:
    - predecessors[b] = {a} means "b depends on a"
    - successors[a] = {b} means "a is depended on by b"

    Attributes:
        _predecessors: Mapping from node to its direct dependencies.
        _successors: Mapping from node to nodes that depend on it.

    """

    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)
    _successors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (source, target) edges.

        An edge (a, b) means "b depends on a" (a -> b in the DAG).

        Args:
            edges: Iterable of (source, target) tuples.
            nodes: Additional nodes to include even if no edge touches them.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> # b depends on a, c depends on b
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.predecessors("b")
            frozenset({'a'})

        """
        predecessors: defaultdict[T, set[T]] = defaultdict(set)
        successors: defaultdict[T, set[T]] = defaultdict(set)

        for node in nodes:
            predecessors.setdefault(node, set())
            successors.setdefault(node, set())

        for src, dst in edges:
            predecessors[dst].add(src)
            successors[src].add(dst)
            # Ensure both nodes exist in the graph
            predecessors.setdefault(src, set())
            successors.setdefault(dst, set())

        return cls(
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._predecessors.keys()) | frozenset(self._successors.keys())

    def predecessors(self, node: T) -> frozenset[T]:
        """Get direct dependencies of a node (nodes it depends on).

        Args:
            node: The node to query.

        Returns:
            Set of nodes that this node directly depends on.

        """
        return self._predecessors.get(node, frozenset())

    def successors(self, node: T) -> frozenset[T]:
        """Get direct dependents of a node (nodes that depend on it).

        Args:
            node: The node to query.

        Returns:
            Set of nodes that directly depend on this node.

        """
        return self._successors.get(node, frozenset())

    def leaves(self) -> frozenset[T]:
        """Get nodes with no successors (output/sink nodes).

        Returns:
            Set of nodes that nothing depends on.

        """
        return frozenset(n for n in self.nodes if not self._successors.get(n))

    def ancestors(self, node: T) -> frozenset[T]:
        """Get all transitive dependencies of a node.

        Args:
            node: The node to query.

        Returns:
            Set of all nodes that this node transitively depends on.

        """
        visited: set[T] = set()
        stack = list(self.predecessors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def descendants(self, node: T) -> frozenset[T]:
        """Get all transitive dependents of a node.

        Args:
            node: The node to query.

        Returns:
            Set of all nodes that transitively depend on this node.

        """
        visited: set[T] = set()
        stack = list(self.successors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def topological_order(self, key: Callable[[T], Any] | None = None) -> list[T]:
        """Return nodes in topological order (dependencies before dependents).

        Args:
            key: Optional tie-break key among independent nodes.

        Raises:
            ValueError: If the graph contains a cycle.

        """
        return topological_sort(dict(self._successors), key=key)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors or node in self._successors
