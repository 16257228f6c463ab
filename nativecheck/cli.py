"""
nativecheck CLI.

Command-line interface for running the build-and-test pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .core.config import get_config
from .core.logging import setup_logging
from .core.types import StageStatus

app = typer.Typer(
    name="nativecheck",
    help="Generate, build, lint, and test a native C/C++ project",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    StageStatus.COMPLETED: "[green]PASSED[/green]",
    StageStatus.SKIPPED: "[yellow]SKIPPED[/yellow]",
    StageStatus.FAILED: "[red]FAILED[/red]",
}


def filter_callback(value: Optional[str]) -> Optional[str]:
    """Reject an empty gtest filter."""
    if value is not None and not value.strip():
        raise typer.BadParameter("must not be empty; omit --filter to run all tests")
    return value


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"nativecheck v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """nativecheck: build-and-test orchestration for native projects."""
    pass


@app.command()
def run(
    gtest_filter: Optional[str] = typer.Option(
        None,
        "--filter",
        "-f",
        help="gtest filter for the unit test binary (default: all tests)",
        callback=filter_callback,
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Repository root (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Log the commands without executing them",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Run the complete build-and-test pipeline.

    Generates sources, configures and builds with CMake, lints when
    clang-tidy is installed, then runs both test binaries. Exits with the
    exit code of the first step that fails.
    """
    from .orchestration import BuildAndTestPipeline

    config = get_config()
    update: dict[str, object] = {}
    if root is not None:
        update["project_root"] = root
    if verbose:
        update["log_level"] = "DEBUG"
    if dry_run:
        update["pipeline"] = config.pipeline.model_copy(update={"dry_run": True})
    if update:
        config = config.model_copy(update=update)
    setup_logging(config)

    result = BuildAndTestPipeline(config=config, console=console).run(gtest_filter=gtest_filter)

    if not result.success:
        raise typer.Exit(result.exit_code)

    table = Table(title="Build and Test")
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")

    for stage in result.stages:
        table.add_row(
            stage.stage_name,
            STATUS_STYLES.get(stage.status, stage.status.value),
            f"{stage.duration_seconds:.1f}s",
        )

    console.print()
    console.print(table)
    console.print(f"\n[bold green]✓ All stages passed[/bold green] in {result.duration_seconds:.1f}s")


@app.command()
def config() -> None:
    """Show the effective configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Log Format", cfg.log_format)
    table.add_row("Project Root", str(cfg.project_root))
    table.add_row("Build Directory", str(cfg.build_dir))
    table.add_row("Build Type", cfg.toolchain.build_type)
    table.add_row("C Compiler", cfg.toolchain.c_compiler)
    table.add_row("C++ Compiler", cfg.toolchain.cxx_compiler)
    table.add_row("Jobs", str(cfg.toolchain.jobs))
    table.add_row("Targets", ", ".join(cfg.toolchain.targets))
    table.add_row("Lint Probe", cfg.tools.lint_probe)
    table.add_row("Timeout Multiplier", str(cfg.suite.timeout_multiplier))
    table.add_row("Test Filter", cfg.suite.gtest_filter)
    table.add_row("Dry Run", str(cfg.pipeline.dry_run))

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  NC_PROJECT_ROOT, NC_BUILD_DIR, NC_BUILD_TYPE, NC_CC, NC_CXX, NC_JOBS")
    console.print("  NC_TIMEOUT_MULTIPLIER, NC_GTEST_FILTER, NC_DRY_RUN, NC_LOG_LEVEL, NC_LOG_FORMAT")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
