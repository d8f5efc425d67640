"""Task planner command line interface."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from taskplan.core.config import settings
from taskplan.core.logging import LogLevel, setup_logging
from taskplan.schemas.plan import PlanResult, StageMetrics
from taskplan.services.export import ResultExporter
from taskplan.services.plan_service import PlanService
from taskplan.services.planning.analyzer import PerformanceAnalyzer
from taskplan.services.planning.exceptions import PlanningError
from taskplan.services.planning.loader import load_graph

app = typer.Typer(
    name="taskplan",
    help="Dependency-aware task planning: SCC (Kosaraju) -> topological sort (Kahn) "
    "-> DAG shortest/longest paths.",
    add_completion=False,
)

console = Console()


def _configure_logging(log_level: LogLevel, verbose: bool) -> None:
    setup_logging(
        log_level=log_level.value,
        log_file=settings.LOG_FILE,
        service_name=settings.PROJECT_NAME,
        enable_json=settings.LOG_JSON_FORMAT,
        enable_console=verbose,
    )


def _resolve_datasets(files: list[Path] | None, data_dir: Path) -> list[Path]:
    if files:
        return files
    return [data_dir / name for name in settings.DEFAULT_DATASETS]


def _format_distance(distance: int | None) -> str:
    return "unreachable" if distance is None else f"{distance} units"


def _print_stage(title: str, stage: StageMetrics) -> None:
    console.print(
        f"[dim]{title}: {stage.time_ms:.3f} ms | dfs visits {stage.dfs_visits} | "
        f"edge traversals {stage.edge_traversals} | "
        f"queue ops {stage.queue_pushes + stage.queue_pops} | "
        f"relax ops {stage.relax_operations}[/]"
    )


def print_plan(plan: PlanResult) -> None:
    """Render one plan as a console report."""
    console.rule(f"[bold]{plan.name}")
    console.print(
        f"Tasks: {plan.node_count} | Dependencies: {plan.edge_count} | "
        f"Density: {plan.density:.3f} | "
        f"Weight range: [{plan.min_weight}, {plan.max_weight}] | "
        f"Source: {plan.original_source}"
    )

    components = Table(title="Strongly connected components")
    components.add_column("Component", justify="right")
    components.add_column("Type")
    components.add_column("Tasks")
    for component in plan.components:
        components.add_row(
            str(component.id),
            "[yellow]Cycle[/]" if component.is_cycle else "Single",
            str(component.nodes),
        )
    console.print(components)
    console.print(
        f"Total: {plan.component_count} | Cycle components: {plan.cycle_component_count} | "
        f"Single task components: {plan.component_count - plan.cycle_component_count}"
    )
    _print_stage("SCC detection", plan.metrics.scc)

    console.print(f"Component order: {plan.component_order}")
    console.print(f"Task execution order: {plan.task_order}")
    _print_stage("Topological sort", plan.metrics.topological_sort)

    if plan.source_component is None:
        return

    distances = Table(title=f"Distances from component {plan.source_component}")
    distances.add_column("Component", justify="right")
    distances.add_column("Tasks")
    distances.add_column("Shortest")
    distances.add_column("Longest")
    for component in plan.components:
        distances.add_row(
            str(component.id),
            str(component.nodes),
            _format_distance(plan.shortest_distances[component.id]),
            _format_distance(plan.longest_distances[component.id]),
        )
    console.print(distances)
    if plan.metrics.shortest_paths is not None:
        _print_stage("Shortest paths", plan.metrics.shortest_paths)

    critical = plan.critical_path
    console.print(f"[bold]Critical path length:[/] {critical.length} units")
    console.print(f"Critical path components: {critical.path}")
    console.print(f"Critical task sequence: {critical.task_path}")
    if plan.metrics.longest_paths is not None:
        _print_stage("Longest paths", plan.metrics.longest_paths)


@app.command()
def run(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Graph descriptor files (defaults to the configured datasets)"),
    ] = None,
    data_dir: Annotated[
        Path, typer.Option(help="Directory holding the default datasets")
    ] = Path(settings.DATA_DIR),
    results_dir: Annotated[
        Path, typer.Option(help="Directory for exported JSON/CSV results")
    ] = Path(settings.RESULTS_DIR),
    export: Annotated[bool, typer.Option(help="Export JSON/CSV results")] = True,
    log_level: Annotated[LogLevel, typer.Option(help="Logging level")] = LogLevel.INFO,
    verbose: Annotated[bool, typer.Option(help="Also log to the console")] = False,
) -> None:
    """Plan every dataset and print a report per dataset."""
    _configure_logging(log_level, verbose)

    datasets = _resolve_datasets(files, data_dir)
    exporter = ResultExporter(results_dir) if export else None
    service = PlanService(exporter=exporter)

    plans = service.process_datasets(datasets)
    for plan in plans:
        print_plan(plan)

    failed = len(datasets) - len(plans)
    console.rule()
    console.print(
        f"[bold]{len(plans)}[/] dataset(s) processed, "
        f"[{'red' if failed else 'green'}]{failed} failed[/]"
    )
    if exporter is not None and plans:
        console.print(f"Results written to {results_dir}")
    if not plans:
        raise typer.Exit(code=1)


@app.command()
def analyze(
    files: Annotated[list[Path], typer.Argument(help="Graph descriptor files")],
    log_level: Annotated[LogLevel, typer.Option(help="Logging level")] = LogLevel.WARNING,
) -> None:
    """Compare pipeline cost across graphs."""
    _configure_logging(log_level, verbose=False)

    analyzer = PerformanceAnalyzer()
    for path in files:
        try:
            analyzer.analyze_graph(load_graph(path), path.stem)
        except PlanningError as e:
            console.print(f"[bold red]Error analyzing {path}: {e.message}[/]")

    table = Table(title="Performance analysis")
    for column in ("Graph", "Nodes", "Edges", "SCC ms", "Components", "Topo ms", "Path ms", "Total ms"):
        table.add_column(column, justify="left" if column == "Graph" else "right")
    for result in analyzer.results:
        table.add_row(
            result.graph_name,
            str(result.node_count),
            str(result.edge_count),
            f"{result.scc_time_ms:.3f}",
            str(result.scc_components),
            f"{result.topo_time_ms:.3f}",
            f"{result.path_time_ms:.3f}",
            f"{result.total_time_ms:.3f}",
        )
    console.print(table)

    if not analyzer.results:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
