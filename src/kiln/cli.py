"""
CLI module - Command line interface for kiln

Entry point for the `kiln` command using Typer. Pipelines and single
tasks are subcommands: `kiln default`, `kiln build --platform mac`,
`kiln linter:all`, `kiln watch`, ...
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import KilnConfig, load_config, validate_config
from .environment import BuildEnvironment
from .errors import KilnError, LintReport, UnsupportedPlatformError
from .platforms import supported_tokens
from .runners import RunnerCallbacks, RunnerResult, SequentialRunner
from .tools import check_tools_status
from .watch import WatchEvents, WatchSession
from .workflow import Pipeline, TaskType, Workflow, create_task_workflow, create_workflow

console = Console()
app = typer.Typer(
    name="kiln",
    help="kiln - Build, bundle and package a desktop application.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_state = {"verbose": False}


def version_callback(value: bool):
    if value:
        console.print(f"kiln version {__version__}")
        raise typer.Exit()


# Type aliases for common options
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config file", exists=True, dir_okay=False),
]
RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Project root (default: KILN_ROOT or cwd)", exists=True, file_okay=False),
]
PlatformOption = Annotated[
    str | None,
    typer.Option("--platform", "-p", help="Target platform: mac, linux, linux32, linux64, win (default: host)"),
]
ProductionOption = Annotated[bool, typer.Option("--production", help="Use production settings")]
DryRunOption = Annotated[bool, typer.Option("--dry-run", help="List the tasks without running them")]


def configure_logging(level: str) -> None:
    """Route log records through Rich at the given level."""
    logging.basicConfig(
        level="DEBUG" if _state["verbose"] else level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def get_config(config_path: Path | None = None, root: Path | None = None) -> KilnConfig:
    """Load configuration, set up logging and check the project root."""
    cfg = load_config(config_path, root)
    configure_logging(cfg.logging.level)

    errors = validate_config(cfg)
    if errors:
        for err in errors:
            console.print(f"[red]Error:[/red] {err}")
        raise typer.Exit(1)
    return cfg


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
):
    """kiln - Build, bundle and package a desktop application."""
    _state["verbose"] = verbose


def _callbacks() -> RunnerCallbacks:
    def on_workflow_start(name: str, total: int):
        console.print(f"\n[bold]Running:[/bold] {name} ({total} tasks)")

    def on_task_start(task_id: str, description: str):
        console.print(f"  [cyan]›[/cyan] {task_id}: {description}")

    def on_task_complete(task_id: str, success: bool):
        if success:
            console.print(f"  [green]✓[/green] {task_id}")
        else:
            console.print(f"  [red]✗[/red] {task_id}")

    def on_styles_skipped():
        console.print("    [dim]styles up to date, skipped[/dim]")

    def on_lint_report(report: LintReport):
        console.print(f"    [yellow]lint violations in {report.label}[/yellow]")
        if report.output:
            console.print(report.output, markup=False, highlight=False)

    def on_package_complete(archive: Path, label: str):
        console.print(f"    [green]archive for {label}:[/green] {archive}")

    return RunnerCallbacks(
        on_workflow_start=on_workflow_start,
        on_task_start=on_task_start,
        on_task_complete=on_task_complete,
        on_styles_skipped=on_styles_skipped,
        on_lint_report=on_lint_report,
        on_package_complete=on_package_complete,
    )


def run_workflow(workflow: Workflow, dry_run: bool = False) -> RunnerResult:
    """Run a workflow, print a summary and map failures to exit status 1."""
    runner = SequentialRunner(dry_run=dry_run)

    try:
        result = runner.run(workflow, _callbacks())
    except UnsupportedPlatformError as e:
        logging.getLogger(__name__).error(str(e))
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Supported platforms: {', '.join(supported_tokens())}")
        raise typer.Exit(1) from None

    console.print()
    if result.success:
        suffix = f", {result.lint_violations} with lint violations" if result.lint_violations else ""
        console.print(f"[bold]Complete:[/bold] {result.tasks_completed} tasks{suffix}")
        return result

    console.print(f"[red]Failed:[/red] {result.failed_task} ({result.tasks_skipped} tasks not run)")
    for err in result.errors:
        console.print(f"  {err}", markup=False, highlight=False)
    raise typer.Exit(1)


def _run_pipeline(
    pipeline: Pipeline,
    config: Path | None,
    root: Path | None,
    platform: str | None = None,
    dry_run: bool = False,
):
    cfg = get_config(config, root)
    run_workflow(create_workflow(pipeline, cfg, platform_token=platform), dry_run=dry_run)


def _run_task(
    task_type: TaskType,
    config: Path | None,
    root: Path | None,
    production: bool = False,
    platform: str | None = None,
):
    cfg = get_config(config, root)
    environment = BuildEnvironment.PRODUCTION if production else BuildEnvironment.DEVELOPMENT
    run_workflow(create_task_workflow(task_type, cfg, environment, platform_token=platform))


# =============================================================================
# Pipelines
# =============================================================================


@app.command("default")
def default_cmd(dry_run: DryRunOption = False, config: ConfigOption = None, root: RootOption = None):
    """
    Development build: lint, styles, html, env marker, bundle (with source maps).

    [bold]Examples:[/bold]

        kiln default

        kiln default --root ./app
    """
    _run_pipeline(Pipeline.DEFAULT, config, root, dry_run=dry_run)


@app.command("production")
def production_cmd(dry_run: DryRunOption = False, config: ConfigOption = None, root: RootOption = None):
    """Production build: clean, lint, styles, html, env marker, minified bundle."""
    _run_pipeline(Pipeline.PRODUCTION, config, root, dry_run=dry_run)


@app.command("build")
def build_cmd(
    platform: PlatformOption = None,
    dry_run: DryRunOption = False,
    config: ConfigOption = None,
    root: RootOption = None,
):
    """
    Production build followed by packaging into build/app.zip.

    [bold]Examples:[/bold]

        kiln build --platform mac

        kiln build -p linux64
    """
    _run_pipeline(Pipeline.BUILD, config, root, platform, dry_run)


@app.command("linter:src")
def lint_src_cmd(config: ConfigOption = None, root: RootOption = None):
    """Lint application sources."""
    _run_pipeline(Pipeline.LINT_SRC, config, root)


@app.command("linter:test")
def lint_test_cmd(config: ConfigOption = None, root: RootOption = None):
    """Lint test scripts."""
    _run_pipeline(Pipeline.LINT_TEST, config, root)


@app.command("linter:all")
def lint_all_cmd(config: ConfigOption = None, root: RootOption = None):
    """Lint sources, then tests."""
    _run_pipeline(Pipeline.LINT_ALL, config, root)


# =============================================================================
# Single tasks
# =============================================================================


@app.command("less")
def less_cmd(config: ConfigOption = None, root: RootOption = None):
    """Compile LESS stylesheets (skipped when compiled CSS is up to date)."""
    _run_task(TaskType.STYLES, config, root)


@app.command("html")
def html_cmd(config: ConfigOption = None, root: RootOption = None):
    """Render _index.html into index.html with built asset references."""
    _run_task(TaskType.INJECT, config, root)


@app.command("env")
def env_cmd(production: ProductionOption = False, config: ConfigOption = None, root: RootOption = None):
    """Write the environment marker (env.json)."""
    _run_task(TaskType.ENV_MARKER, config, root, production)


@app.command("webpack")
def webpack_cmd(production: ProductionOption = False, config: ConfigOption = None, root: RootOption = None):
    """Bundle scripts once."""
    _run_task(TaskType.BUNDLE, config, root, production)


@app.command("cleanup:build")
def clean_cmd(config: ConfigOption = None, root: RootOption = None):
    """Remove previous build output."""
    _run_task(TaskType.CLEAN, config, root)


@app.command("package")
def package_cmd(platform: PlatformOption = None, config: ConfigOption = None, root: RootOption = None):
    """Package the current tree without rebuilding."""
    _run_task(TaskType.PACKAGE, config, root, production=True, platform=platform)


# =============================================================================
# Watch and tooling
# =============================================================================


@app.command()
def watch(config: ConfigOption = None, root: RootOption = None):
    """
    Run the app with live reload and a background bundler.

    Reloads when the bundle, index.html or compiled CSS change; recompiles
    styles when LESS sources change. Stop with Ctrl+C.
    """
    cfg = get_config(config, root)
    session = WatchSession(cfg)

    def on_events(events: WatchEvents):
        if events.error:
            console.print(f"[red]Style rebuild failed:[/red] {escape(events.error)}")
        elif events.styles_changed:
            console.print(f"  [green]✓[/green] styles rebuilt ({len(events.styles_changed)} changed)")
        if events.reloaded:
            console.print(f"  [cyan]↻[/cyan] reload ({', '.join(p.name for p in events.reloaded)})")

    console.print(f"[bold]Watching:[/bold] {cfg.root}  [dim](Ctrl+C to stop)[/dim]")
    try:
        session.run_forever(on_events)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped[/dim]")
    except KilnError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def check(config: ConfigOption = None, root: RootOption = None):
    """Check external tools and show their locations."""
    cfg = get_config(config, root)
    tools = check_tools_status(
        {
            "lessc": cfg.tools.lessc,
            "webpack": cfg.tools.webpack,
            "jshint": cfg.tools.jshint,
            "electron": cfg.tools.electron,
        }
    )

    table = Table(title="External Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Path", style="dim")

    for tool, path in tools.items():
        if path:
            table.add_row(tool, "[green]Available[/green]", str(path))
        else:
            table.add_row(tool, "[red]Missing[/red]", "-")

    console.print(table)

    missing = [t for t, p in tools.items() if p is None]
    if missing:
        console.print("\n[yellow]Warning:[/yellow] Some tools are missing.")
        console.print("Install them with: npm install --save-dev less webpack-cli jshint electron")


def main_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main_cli()
