"""gdplay CLI — main entry point."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gdplay.core.errors import GdplayError
from gdplay.core.logging import PlaygroundLogger, Verbosity

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _verbosity(verbose: bool, quiet: bool) -> Verbosity:
    if quiet:
        return Verbosity.QUIET
    if verbose:
        return Verbosity.VERBOSE
    return Verbosity.DEFAULT


def clean_cache(cache_root: Path, logger: PlaygroundLogger) -> None:
    """Delete every cached playground workspace."""
    if cache_root.exists():
        logger.info(f"Removing cached playgrounds at {cache_root}...")
        shutil.rmtree(cache_root)
    else:
        logger.info(f"No cache directory found at {cache_root}")


def _print_summary(run_log: dict) -> None:
    table = Table(title="Playground Build", box=box.ROUNDED)
    table.add_column("Stage", style="bold", no_wrap=True)
    table.add_column("Written", justify="right", style="green")
    table.add_column("Unchanged", justify="right", style="cyan")
    table.add_column("Removed", justify="right", style="yellow")
    table.add_column("Commands", justify="right")
    table.add_column("Status", justify="center")

    for name, stage in run_log.get("stages", {}).items():
        table.add_row(
            name,
            str(len(stage["files_written"])),
            str(len(stage["files_unchanged"])),
            str(len(stage["files_removed"])),
            str(len(stage["commands"])),
            "[dim]skipped[/dim]" if stage["skipped"] else "[green]done[/green]",
        )

    console.print()
    console.print(table)
    console.print(f"[bold]Time:[/bold] {run_log.get('total_time', 0.0):.1f}s")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("view_file", required=False, type=click.Path(dir_okay=False))
@click.option("--root", default=None, help="Override the root type (GView or @Godot class)")
@click.option("--assets", multiple=True, type=click.Path(), help="Symlink asset directories into the Godot project (repeatable)")
@click.option("--include", multiple=True, type=click.Path(), help="Copy .swift files from directory into sources (repeatable)")
@click.option("--godot", default=None, help="Path to Godot executable")
@click.option("--cache", default=None, type=click.Path(), help="Workspace cache directory")
@click.option("--builder-path", default=None, type=click.Path(), help="Override the SwiftGodotBuilder dependency path")
@click.option("--builder-rev", default=None, help="SwiftGodotBuilder branch/tag/commit (default: main)")
@click.option("--swiftgodot-rev", default=None, help="SwiftGodot branch/tag/commit (default: main)")
@click.option("--project", default=None, type=click.Path(), help="Use a custom project.godot file")
@click.option("--release", is_flag=True, help="Build in release mode")
@click.option("--no-run", is_flag=True, help="Do not launch Godot after building")
@click.option("--codesign", is_flag=True, help="Codesign dylibs (macOS)")
@click.option("--clean", is_flag=True, help="Delete cached playgrounds and exit")
@click.option("--verbose", is_flag=True, help="Print extra logs and commands")
@click.option("--quiet", is_flag=True, help="Suppress informational logs")
def main(
    view_file: str | None,
    root: str | None,
    assets: tuple[str, ...],
    include: tuple[str, ...],
    godot: str | None,
    cache: str | None,
    builder_path: str | None,
    builder_rev: str | None,
    swiftgodot_rev: str | None,
    project: str | None,
    release: bool,
    no_run: bool,
    codesign: bool,
    clean: bool,
    verbose: bool,
    quiet: bool,
):
    """Build and run a SwiftGodotBuilder GView or @Godot class file.

    VIEW_FILE is a Swift source file containing a GView or @Godot class.
    The file is wrapped in a cached Swift package and Godot project, built
    into a GDExtension and opened in Godot.
    """
    from gdplay.build.runner import run
    from gdplay.build.toolchain import ensure_godot_available, ensure_swift_available, resolve_godot_command
    from gdplay.config import get_settings
    from gdplay.core.models import BuildConfig, absolute_path

    if quiet and verbose:
        raise click.UsageError("Cannot enable both --quiet and --verbose")
    if not clean and view_file is None:
        raise click.UsageError("Missing expected argument 'VIEW_FILE'")

    settings = get_settings()
    base_directory = Path.cwd()
    cache_root = absolute_path(cache if cache else settings.cache_dir, base_directory)
    logger = PlaygroundLogger(_verbosity(verbose, quiet), console=console, err_console=err_console)

    try:
        if clean:
            clean_cache(cache_root, logger)
            return

        ensure_swift_available(settings.swift)

        godot_command = resolve_godot_command(godot or settings.godot)
        config = BuildConfig.from_options(
            view_file=view_file,
            base_directory=base_directory,
            cache_root=cache_root,
            swift_command=settings.swift,
            godot_command=godot_command,
            root=root,
            assets=assets,
            include=include,
            run_godot=not no_run,
            builder_path=builder_path,
            builder_rev=builder_rev,
            builder_env_path=settings.builder_path,
            swiftgodot_rev=swiftgodot_rev,
            project=project,
            release=release,
            verbosity=logger.verbosity,
            codesign=codesign,
        )
        if config.run_godot:
            ensure_godot_available(config.godot_command)

        if not quiet:
            console.print(
                Panel(
                    f"[bold]View:[/bold] {escape(config.view_type)} ({config.view_kind.value})\n"
                    f"[bold]Workspace:[/bold] {escape(str(config.workspace_directory))}\n"
                    f"[bold]Configuration:[/bold] {config.build_configuration.value}",
                    title="[bold cyan]gdplay[/bold cyan]",
                    border_style="cyan",
                )
            )

        logger.log_dir = config.workspace_directory / "logs"
        result = run(config, logger)
    except (GdplayError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if result.godot_exit_code is not None:
        logger.info(f"Godot exited with code {result.godot_exit_code}")
    else:
        logger.info(f"Godot project ready at {result.godot_project}")

    if not quiet:
        _print_summary(result.run_log)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()
