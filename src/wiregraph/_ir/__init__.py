"""Intermediate Representation (IR) module for wiregraph.

This module provides the data structures that sit between a caller's
declaration table and the evaluation engine:
- NodeSpec: Dependencies and function of a single node
- declare: Normalize a literal table into NodeSpecs keyed by Name
- CompiledGraph: The acyclic dependency relation plus its declaration table
- compile_graph: Build a CompiledGraph, rejecting cycles
"""

from ._builder import compile_graph
from ._graph_spec import CompiledGraph
from ._node_spec import DeclarationTable, NodeSpec, declare

__all__ = ["CompiledGraph", "DeclarationTable", "NodeSpec", "compile_graph", "declare"]
