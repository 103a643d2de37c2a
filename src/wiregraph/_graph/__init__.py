"""Graph module providing dependency graph abstractions.

This module contains:
- DependencyGraph[T]: A generic, immutable directed acyclic graph
- topological_sort: Algorithm for ordering nodes by dependencies
- find_path: Reachability search used for cycle detection
"""

from ._algorithms import find_path, topological_sort
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "find_path", "topological_sort"]
