"""Rich rendering utilities for graph query commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from wiregraph._format import FREE, describe_with_fn, describe_with_result

from .graph_query import NodeKind, node_kind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rich.console import Console

    from wiregraph._ir import CompiledGraph
    from wiregraph._name import Name

    from .graph_query import NodeDetail, NodeInfo, TreeNode


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]No nodes match the given filters[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Deps", justify="right")

    for node in nodes:
        kind_style = _get_kind_style(node.kind)
        table.add_row(
            escape(str(node.name)),
            f"[{kind_style}]{node.kind.upper()}[/{kind_style}]",
            str(node.dependency_count),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_node_detail(detail: NodeDetail, console: Console) -> None:
    """Render detailed node information.

    Args:
        detail: NodeDetail to render.
        console: Rich Console to output to.

    """
    console.print(f"[bold]Node:[/bold] {escape(str(detail.name))}")
    console.print()

    kind_style = _get_kind_style(detail.kind)
    console.print(f"[cyan]Kind:[/cyan]         [{kind_style}]{detail.kind.upper()}[/{kind_style}]")
    console.print(f"[cyan]Namespace:[/cyan]    {escape(detail.name.namespace or '-')}")
    if detail.function is not None:
        console.print(f"[cyan]Function:[/cyan]     {escape(detail.function)}")
    console.print()

    # Dependencies keep their declared (argument) order
    if detail.dependencies:
        console.print(
            f"[cyan]Dependencies ({len(detail.dependencies)} direct, {len(detail.all_dependencies)} total):[/cyan]",
        )
        for dep in detail.dependencies:
            console.print(f"  {escape(str(dep))}")
        console.print()
    else:
        console.print("[cyan]Dependencies:[/cyan] [dim]None[/dim]")
        console.print()

    if detail.direct_dependents:
        console.print(
            f"[cyan]Dependents ({len(detail.direct_dependents)} direct, {len(detail.all_dependents)} total):[/cyan]",
        )
        for dep in sorted(detail.direct_dependents, key=str):
            console.print(f"  {escape(str(dep))}")
    else:
        console.print("[cyan]Dependents:[/cyan] [dim]None[/dim]")


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a dependency tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(str(tree_node.name))}[/bold]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    for child in children:
        child_tree = parent.add(escape(str(child.name)))
        _add_tree_children(child_tree, child.children)


def render_results(
    graph: CompiledGraph,
    bindings: Mapping[Name, Any],
    results: Mapping[Name, Any] | None,
    console: Console,
    *,
    show_functions: bool = False,
) -> None:
    """Render every name of a graph with its value or function.

    Args:
        graph: The compiled graph.
        bindings: Bindings the results were computed from.
        results: Execution results. Names missing from it (e.g. free variables
            before binding) are shown as free.
        console: Rich Console to output to.
        show_functions: Show node function names instead of values.

    """
    results = results or {}
    describer = describe_with_fn if show_functions else describe_with_result
    describe = describer(graph, bindings, results)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Function" if show_functions else "Value")

    names = list(graph)
    names.extend(sorted((n for n in bindings if n not in graph), key=lambda n: n.sort_key()))

    for name in names:
        kind = node_kind(graph, name, bindings)
        kind_style = _get_kind_style(kind)
        table.add_row(
            escape(str(name)),
            f"[{kind_style}]{kind.upper()}[/{kind_style}]",
            escape(describe(name)),
        )

    console.print(table)


def render_free_variables(names: list[Name], console: Console) -> None:
    if not names:
        console.print("[green]All variables are bound[/green]")
        return
    console.print(f"[yellow]Free variables ({len(names)}):[/yellow]")
    for name in names:
        console.print(f"  {escape(str(name))} [dim]{FREE}[/dim]")


def _get_kind_style(kind: NodeKind) -> str:
    match kind:
        case NodeKind.BOUND:
            return "blue"
        case NodeKind.DECLARED:
            return "green"
        case NodeKind.FREE:
            return "yellow"
