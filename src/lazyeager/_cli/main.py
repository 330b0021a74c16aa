import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table

from lazyeager._errors import LazyEagerError
from lazyeager._evaluators import EagerEvaluator, LazyEvaluator, Solution
from lazyeager._graph import Graph
from lazyeager._io import export_solutions

from .config import ConfigError, GraphSource, LazyEagerConfig, ModuleSource, ScriptSource, get_config
from .discover import load_graph_from_source

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

PathArgument = Annotated[
    str | None,
    typer.Argument(
        help="Path to Python script or module path (e.g., examples.stats:graph). "
        "Defaults to the graph configured in pyproject.toml",
    ),
]
GraphVarOption = Annotated[
    str | None,
    typer.Option("--graph", help="Name of the graph variable (for script paths only)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Lazyeager CLI."""
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


def _load_config() -> LazyEagerConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _resolve_source(path: str | None, graph_var: str | None, config: LazyEagerConfig) -> GraphSource:
    if path is None:
        if config.graph is None:
            err_console.print("[red]No graph given and no \\[tool.lazyeager].graph in pyproject.toml[/red]")
            raise typer.Exit(code=1)
        return config.graph

    if ":" in path:
        return ModuleSource(module_path=path)
    return ScriptSource(script=Path(path), name=graph_var)


def _load_graph(source: GraphSource) -> Graph:
    match source:
        case ModuleSource(module_path=module_path):
            err_console.print(f"[cyan]Loading graph from module:[/cyan] {module_path}")
        case ScriptSource(script=script):
            err_console.print(f"[cyan]Loading graph from script:[/cyan] {script}")

    try:
        graph = load_graph_from_source(source)
    except (ImportError, ValueError, TypeError) as e:
        err_console.print(f"[red]✗ Could not load graph: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    err_console.print(f"[cyan]Vertices:[/cyan] [bold]{len(graph)}[/bold]")
    err_console.print()
    return graph


def _solve(graph: Graph, nodes: tuple[str, ...]) -> list[Solution]:
    if not nodes:
        err_console.print("[cyan]Solving all vertices eagerly...[/cyan]")
        return EagerEvaluator(graph).solve()

    err_console.print(f"[cyan]Solving lazily:[/cyan] {', '.join(nodes)}")
    return [LazyEvaluator(graph).solve(name) for name in nodes]


@app.command()
def solve(
    path: PathArgument = None,
    *,
    graph_var: GraphVarOption = None,
    node: Annotated[
        list[str] | None,
        typer.Option("-n", "--node", help="Vertex to solve lazily (repeatable). Solves every vertex if omitted"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML or JSON file"),
    ] = None,
) -> None:
    """Solve a graph and print the value of each requested vertex."""
    config = _load_config()
    err_console.print()

    graph = _load_graph(_resolve_source(path, graph_var, config))
    nodes = tuple(node) if node else config.nodes
    if output is None:
        output = config.output

    try:
        solutions = _solve(graph, nodes)
    except LazyEagerError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    err_console.print()

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Vertex", style="bold")
    table.add_column("Value")
    for name, value in solutions:
        table.add_row(escape(name), Pretty(value))
    out_console.print(table)

    if output is not None:
        err_console.print()
        err_console.print(f"[cyan]Exporting results to:[/cyan] {output}")
        try:
            export_solutions(solutions, output)
        except ValueError as e:
            err_console.print(f"[red]✗ {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e

    err_console.print()
    err_console.print("[green]✓ Solve complete[/green]")
    err_console.print()


@app.command()
def check(
    path: PathArgument = None,
    *,
    graph_var: GraphVarOption = None,
) -> None:
    """Check that every declared dependency is bound, without evaluating anything."""
    config = _load_config()
    err_console.print()

    graph = _load_graph(_resolve_source(path, graph_var, config))
    missing = graph.missing_dependencies()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Vertex", style="bold")
    table.add_column("Dependencies", style="yellow")
    table.add_column("Missing", style="red")

    for name, vertex in graph.vertices.items():
        table.add_row(
            escape(name),
            escape(", ".join(vertex.dependencies)),
            escape(", ".join(missing.get(name, ()))),
        )

    err_console.print(
        Panel(
            table,
            title="[bold]Graph[/bold]",
            subtitle=f"[dim]{len(graph)} vertices[/dim]",
            border_style="cyan",
        ),
    )
    err_console.print()

    if missing:
        n_missing = sum(len(deps) for deps in missing.values())
        err_console.print(f"[red]✗ {n_missing} missing dependenc{'y' if n_missing == 1 else 'ies'}[/red]")
        err_console.print()
        raise typer.Exit(code=1)

    err_console.print("[green]✓ All dependencies are bound[/green]")
    err_console.print()


def main() -> None:
    app()
