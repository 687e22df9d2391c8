"""Command-line interface for devtimeline."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer

from .exceptions import DevTimelineError
from .graph import DependencyGraph
from .loader import InputPaths, load_inputs, load_tasks
from .logger import setup_logger
from .report import build_records, build_timeline, timeline_to_json, write_records_csv
from .scheduler import SchedulingConfig, SchedulingResult, SchedulingService
from .unified_config import UnifiedConfig, discover_config

app = typer.Typer(
    name="devtimeline",
    help="Build a day-by-day developer timeline from task, team and calendar CSV files",
    add_completion=False,
)

DataDirArgument = Annotated[
    Path | None,
    typer.Argument(
        help="Directory holding roles/tasks/developers/oncalls/leaves CSV files "
        "(default: the config file inputs, then the current directory)"
    ),
]
StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict",
        help="Reject dangling dependencies, unparseable dates and out-of-range availability",
    ),
]


def _file_option(table: str) -> Any:
    return typer.Option(f"--{table}", help=f"Path to {table}.csv (overrides DATA_DIR)")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show assignments, 2=show checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: devtimeline_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for devtimeline commands."""
    setup_logger(verbose)
    ctx.obj = {"config_path": config}


def _load_config(ctx: typer.Context, data_dir: Path | None) -> UnifiedConfig:
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        return discover_config(config_path, data_dir) or UnifiedConfig()
    except DevTimelineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    if date_str is None:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid {option_name} '{date_str}'. Use YYYY-MM-DD",
            err=True,
        )
        raise typer.Exit(1) from None


def _resolve_paths(  # noqa: PLR0913 - one override per input table
    unified: UnifiedConfig,
    data_dir: Path | None,
    roles: Path | None = None,
    tasks: Path | None = None,
    developers: Path | None = None,
    oncalls: Path | None = None,
    leaves: Path | None = None,
) -> InputPaths:
    """DATA_DIR wins over the config file's inputs section; file options win over both."""
    if data_dir is not None:
        paths = InputPaths.from_directory(data_dir)
    else:
        paths = unified.input_paths()

    overrides = {
        "roles": roles,
        "tasks": tasks,
        "developers": developers,
        "oncalls": oncalls,
        "leaves": leaves,
    }
    for name, override in overrides.items():
        if override is not None:
            setattr(paths, name, override)
    return paths


def _display_records(result: SchedulingResult) -> None:
    write_records_csv(build_records(result), sys.stdout)


@app.command()
def schedule(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    data_dir: DataDirArgument = None,
    *,
    roles: Annotated[Path | None, _file_option("roles")] = None,
    tasks: Annotated[Path | None, _file_option("tasks")] = None,
    developers: Annotated[Path | None, _file_option("developers")] = None,
    oncalls: Annotated[Path | None, _file_option("oncalls")] = None,
    leaves: Annotated[Path | None, _file_option("leaves")] = None,
    start_date: Annotated[
        str | None,
        typer.Option(
            "--start-date",
            "-s",
            help="First simulated day (YYYY-MM-DD). Defaults to the config value, then today",
        ),
    ] = None,
    strict: StrictOption = False,
    output_csv: Annotated[
        Path | None,
        typer.Option("--output-csv", "-o", help="Write schedule records to a CSV file"),
    ] = None,
    timeline_json: Annotated[
        Path | None,
        typer.Option("--timeline-json", help="Write timeline items to a JSON file"),
    ] = None,
) -> None:
    """Schedule tasks and print or export the resulting timeline."""
    parsed_start = _parse_date_option(start_date, "start-date")

    unified = _load_config(ctx, data_dir)
    scheduler_config: SchedulingConfig = unified.scheduler
    if strict:
        scheduler_config = scheduler_config.model_copy(update={"strict": True})

    paths = _resolve_paths(unified, data_dir, roles, tasks, developers, oncalls, leaves)

    try:
        inputs = load_inputs(paths, scheduler_config)
        service = SchedulingService(inputs, parsed_start or unified.start_date, scheduler_config)
        result = service.schedule()
    except DevTimelineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if output_csv:
        write_records_csv(build_records(result), output_csv)
        typer.echo(f"Schedule written to {output_csv}")
    if timeline_json:
        timeline_json.write_text(timeline_to_json(build_timeline(result)), encoding="utf-8")
        typer.echo(f"Timeline written to {timeline_json}")
    if not output_csv and not timeline_json:
        _display_records(result)

    if result.warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command()
def validate(
    ctx: typer.Context,
    data_dir: DataDirArgument = None,
    *,
    tasks: Annotated[Path | None, _file_option("tasks")] = None,
    strict: StrictOption = False,
) -> None:
    """Check tasks.csv for dependency cycles and unknown dependencies."""
    unified = _load_config(ctx, data_dir)
    scheduler_config = unified.scheduler
    if strict:
        scheduler_config = scheduler_config.model_copy(update={"strict": True})

    tasks_path = _resolve_paths(unified, data_dir, None, tasks, None, None, None).tasks

    try:
        loaded = load_tasks(tasks_path, scheduler_config)
        graph = DependencyGraph(loaded)
        for task_name, dep_name in graph.missing_references():
            typer.echo(f"Warning: {task_name} depends on unknown task {dep_name}", err=True)
        graph.validate(strict=scheduler_config.strict)
    except DevTimelineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"{len(loaded)} tasks, no dependency cycles")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
