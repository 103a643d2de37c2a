"""Evaluation engine module for wiregraph.

This module provides pure functions for evaluating compiled graphs.
The engine takes a CompiledGraph and bindings for its free variables, and
produces a mapping from every name to its value without side effects.

Key functions:
- free_variables: Names referenced as dependencies but neither declared nor bound
- execute_graph: Evaluate every node once, in dependency order
- compile_and_execute: Compile a declaration table and execute it in one step
"""

from ._engine import compile_and_execute, execute_graph, normalize_bindings
from ._resolution import free_variables, resolve_args

__all__ = [
    "compile_and_execute",
    "execute_graph",
    "free_variables",
    "normalize_bindings",
    "resolve_args",
]
