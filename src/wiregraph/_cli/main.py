import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

import tomli_w
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wiregraph._compose import list_namespaces
from wiregraph._errors import WiregraphError
from wiregraph._eval_engine import execute_graph, free_variables, normalize_bindings
from wiregraph._ir import CompiledGraph, compile_graph
from wiregraph._name import Name

from .config import ConfigError, ScriptSource, WiregraphConfig, get_config, parse_table_source
from .discover import load_table_from_source
from .graph_query import get_dependency_tree, get_node_detail, list_nodes
from .graph_render import (
    render_free_variables,
    render_node_detail,
    render_node_table,
    render_results,
    render_tree,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

TargetArg = Annotated[
    str | None,
    typer.Argument(
        help="Path to Python script or module path (e.g., examples.arithmetic:TABLE). "
        "Defaults to [tool.wiregraph].table in pyproject.toml",
    ),
]
TableVarOpt = Annotated[
    str | None,
    typer.Option("--table", help="Name of the table variable (for script paths only)"),
]
BindOpt = Annotated[
    list[str] | None,
    typer.Option("-b", "--bind", help="Binding as name=value; value is parsed as a TOML literal"),
]
InputOpt = Annotated[
    Path | None,
    typer.Option("-i", "--input", help="Path to a TOML file of bindings"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Wiregraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def parse_binding(raw: str) -> tuple[str, Any]:
    """Parse a ``name=value`` binding.

    The value is read as a TOML literal (``15``, ``2.5``, ``true``,
    ``[1, 2]``, ``"text"``); anything that is not valid TOML is kept as a
    plain string.

    Raises:
        typer.BadParameter: If there is no ``=``.

    """
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        msg = f"Invalid binding '{raw}'. Expected format: name=value"
        raise typer.BadParameter(msg)
    try:
        parsed = tomllib.loads(f"value = {value.strip()}")["value"]
    except tomllib.TOMLDecodeError:
        parsed = value.strip()
    return name.strip(), parsed


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_config() -> WiregraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        raise _fail(str(e)) from e


def _load_graph(config: WiregraphConfig, target: str | None, table_var: str | None) -> CompiledGraph:
    try:
        if target is None:
            if config.table is None:
                msg = "No table given and no [tool.wiregraph].table configured"
                raise _fail(msg)
            source = config.table
        elif ":" in target:
            source = parse_table_source(target, Path.cwd())
        else:
            source = ScriptSource(script=Path(target), name=table_var)
    except ConfigError as e:
        raise _fail(str(e)) from e

    logger.debug("Loading table from %s", source)
    table = load_table_from_source(source)

    try:
        return compile_graph(table)
    except (WiregraphError, TypeError, ValueError) as e:
        raise _fail(str(e)) from e


def _collect_bindings(
    config: WiregraphConfig,
    binds: list[str] | None,
    input_path: Path | None,
) -> dict[Name, Any]:
    collected: dict[str, Any] = dict(config.bindings)

    if input_path is not None:
        if not input_path.exists():
            msg = f"Input file not found: {input_path}"
            raise _fail(msg)
        with input_path.open("rb") as f:
            try:
                collected.update(tomllib.load(f))
            except tomllib.TOMLDecodeError as e:
                msg = f"Invalid TOML in {input_path}: {e}"
                raise _fail(msg) from e

    for raw in binds or []:
        name, value = parse_binding(raw)
        collected[name] = value

    try:
        return normalize_bindings(collected)
    except (TypeError, ValueError) as e:
        raise _fail(str(e)) from e


def _results_to_toml(results: Mapping[Name, Any]) -> dict[str, Any]:
    return {str(name): value for name, value in sorted(results.items(), key=lambda kv: kv[0].sort_key())}


@app.command()
def run(
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
    bind: BindOpt = None,
    input: InputOpt = None,  # noqa: A002
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    functions: Annotated[
        bool,
        typer.Option("--functions", help="Show node functions instead of values"),
    ] = False,
) -> None:
    """Execute a graph and print every resolved value."""
    config = _load_config()
    graph = _load_graph(config, target, table_var)
    bindings = _collect_bindings(config, bind, input)

    try:
        results = execute_graph(graph, bindings)
    except WiregraphError as e:
        raise _fail(str(e)) from e

    render_results(graph, bindings, results, out_console, show_functions=functions)

    output = output or config.output
    if output is not None:
        err_console.print(f"[cyan]Exporting results to:[/cyan] {output}")
        # An existing output file is only replaced once serialization succeeds
        try:
            text = tomli_w.dumps(_results_to_toml(results))
        except TypeError as e:
            raise _fail(f"Results cannot be written as TOML: {e}") from e
        output.write_text(text, encoding="utf-8")


@app.command()
def free(
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
    bind: BindOpt = None,
    input: InputOpt = None,  # noqa: A002
) -> None:
    """List the names that still need a binding."""
    config = _load_config()
    graph = _load_graph(config, target, table_var)
    bindings = _collect_bindings(config, bind, input)

    names = sorted(free_variables(graph, bindings), key=Name.sort_key)
    render_free_variables(names, out_console)


@app.command()
def nodes(
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
    namespace: Annotated[
        list[str] | None,
        typer.Option("--namespace", "-n", help="Only show names in this namespace"),
    ] = None,
    leaves: Annotated[
        bool,
        typer.Option("--leaves", help="Only show names nothing depends on"),
    ] = False,
) -> None:
    """List the names of a graph."""
    graph = _load_graph(_load_config(), target, table_var)
    render_node_table(list_nodes(graph, namespaces=namespace, leaves_only=leaves), out_console)


@app.command()
def show(
    name: Annotated[str, typer.Argument(help="Node name, e.g. foo/c")],
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
) -> None:
    """Show the declaration and neighbours of one name."""
    graph = _load_graph(_load_config(), target, table_var)
    try:
        detail = get_node_detail(graph, Name.parse(name))
    except KeyError as e:
        raise _fail(e.args[0]) from e
    except ValueError as e:
        raise _fail(str(e)) from e
    render_node_detail(detail, out_console)


@app.command()
def tree(
    name: Annotated[str, typer.Argument(help="Node name, e.g. foo/c")],
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
    invert: Annotated[
        bool,
        typer.Option("--invert", help="Show what depends on the name instead"),
    ] = False,
    depth: Annotated[
        int | None,
        typer.Option("--depth", help="Maximum depth to show"),
    ] = None,
) -> None:
    """Show the dependency tree of one name."""
    graph = _load_graph(_load_config(), target, table_var)
    try:
        tree_node = get_dependency_tree(graph, Name.parse(name), invert=invert, max_depth=depth)
    except KeyError as e:
        raise _fail(e.args[0]) from e
    except ValueError as e:
        raise _fail(str(e)) from e
    render_tree(tree_node, out_console)


@app.command()
def namespaces(
    target: TargetArg = None,
    *,
    table_var: TableVarOpt = None,
) -> None:
    """List the namespaces of a graph's declared names."""
    graph = _load_graph(_load_config(), target, table_var)
    found = list_namespaces(graph.table)
    for namespace in sorted(ns for ns in found if ns is not None):
        out_console.print(namespace)
    if None in found:
        out_console.print("[dim](unqualified)[/dim]")


def main() -> None:
    app()
