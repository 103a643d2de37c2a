"""Declarative computation graphs wired from named functions."""

__all__ = [
    "FREE",
    "CompiledGraph",
    "CyclicDependencyError",
    "DeclarationTable",
    "DependencyGraph",
    "Name",
    "NodeSpec",
    "UnboundVariablesError",
    "WiregraphError",
    "append_namespace",
    "compile_and_execute",
    "compile_graph",
    "declare",
    "describe_name",
    "describe_with_fn",
    "describe_with_result",
    "execute_graph",
    "filter_namespace",
    "format_value",
    "free_variables",
    "list_namespaces",
    "merge_tables",
    "re_filter_namespace",
    "replace_keys",
    "replace_namespaces",
    "with_namespace",
]

from ._compose import (
    append_namespace,
    filter_namespace,
    list_namespaces,
    merge_tables,
    re_filter_namespace,
    replace_keys,
    replace_namespaces,
    with_namespace,
)
from ._errors import CyclicDependencyError, UnboundVariablesError, WiregraphError
from ._eval_engine import compile_and_execute, execute_graph, free_variables
from ._format import FREE, describe_name, describe_with_fn, describe_with_result, format_value
from ._graph import DependencyGraph
from ._ir import CompiledGraph, DeclarationTable, NodeSpec, compile_graph, declare
from ._name import Name
