"""Graph algorithms for dependency graph operations."""

import heapq
from collections import defaultdict, deque
from collections.abc import Callable, Collection, Hashable, Mapping
from typing import Any


def topological_sort[T: Hashable](
    successors: Mapping[T, Collection[T]],
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    Given a graph represented as a mapping from nodes to their successors
    (nodes that depend on them), return nodes in an order where each node
    appears before all nodes that depend on it.

    Args:
        successors: Mapping from node to collection of nodes that depend on it.
            An edge (a -> b) means "b depends on a".
        key: Optional sort key. When given, among the nodes whose dependencies
            are all satisfied the one with the smallest key is emitted first,
            which makes the order independent of mapping iteration order.

    Returns:
        List of nodes in topological order.

    Raises:
        ValueError: If the graph contains a cycle.

    Example:
        >>> # a -> b -> c means c depends on b, b depends on a
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']
        >>> topological_sort({"b": [], "a": []}, key=str)
        ['a', 'b']

    """
    # Calculate in-degree for each node
    indegree: defaultdict[T, int] = defaultdict(int)
    for node, deps in successors.items():
        indegree[node] = indegree.get(node, 0)
        for dep in deps:
            indegree[dep] += 1

    order: list[T] = []
    ready = [node for node, deg in indegree.items() if deg == 0]

    if key is None:
        queue = deque(ready)
        while queue:
            node = queue.popleft()
            order.append(node)
            for successor in successors.get(node, []):
                indegree[successor] -= 1
                if indegree[successor] == 0:
                    queue.append(successor)
    else:
        # The counter keeps heap entries comparable when keys tie
        heap = [(key(node), i, node) for i, node in enumerate(ready)]
        heapq.heapify(heap)
        counter = len(heap)
        while heap:
            _, _, node = heapq.heappop(heap)
            order.append(node)
            for successor in successors.get(node, []):
                indegree[successor] -= 1
                if indegree[successor] == 0:
                    heapq.heappush(heap, (key(successor), counter, successor))
                    counter += 1

    if len(order) != len(indegree):
        msg = "Cycle detected in graph"
        raise ValueError(msg)

    return order


def find_path[T: Hashable](adjacency: Mapping[T, Collection[T]], start: T, goal: T) -> list[T] | None:
    """Find a path from `start` to `goal` following `adjacency` edges.

    Args:
        adjacency: Mapping from node to the nodes directly reachable from it.
        start: Node to search from.
        goal: Node to search for.

    Returns:
        The list of nodes ``[start, ..., goal]`` or None if `goal` is unreachable.

    Example:
        >>> find_path({"a": ["b"], "b": ["c"]}, "a", "c")
        ['a', 'b', 'c']

    """
    if start == goal:
        return [start]

    parents: dict[T, T] = {}
    visited: set[T] = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for neighbor in adjacency.get(current, ()):
            if neighbor in visited:
                continue
            parents[neighbor] = current
            if neighbor == goal:
                path = [goal]
                while path[-1] != start:
                    path.append(parents[path[-1]])
                path.reverse()
                return path
            visited.add(neighbor)
            stack.append(neighbor)
    return None
