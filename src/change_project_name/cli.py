"""CLI interface for change-project-name."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from change_project_name import __version__
from change_project_name.config import Config
from change_project_name.core.errors import ManifestNotFound, RenameError, ValidationError
from change_project_name.core.manifest import read_manifest_name
from change_project_name.core.models import RenameRequest, RenameSummary
from change_project_name.core.renamer import run_rename
from change_project_name.core.validator import is_valid_name
from change_project_name.notifications.base import ConsoleNotifier
from change_project_name.utils.git import get_tracked_changes

app = typer.Typer(
    name="change-project-name",
    help="Rename a Flutter/Dart project: pubspec name, package imports and package cache.",
    add_completion=False,
)
console = Console()

EXAMPLES = """\
Examples:
  change-project-name --value my_new_app
  change-project-name -v my_new_app
  change-project-name my_new_app
  change-project-name --interactive
  change-project-name --dry-run --value my_new_app"""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"change-project-name {__version__}")
        raise typer.Exit()


def _resolve_new_name(value: str | None, interactive: bool, new_name: str | None) -> str | None:
    """Pick the new name: --value, then the prompt, then the positional argument."""
    if value is not None:
        return value.strip()
    if interactive:
        return typer.prompt("Enter NEW project name", default="", show_default=False).strip()
    if new_name is not None:
        return new_name.strip()
    return None


def _no_arguments_given(ctx: typer.Context) -> bool:
    """True when every parameter still holds its default (bare invocation)."""
    return all(ctx.get_parameter_source(name) in (None, ParameterSource.DEFAULT) for name in ctx.params)


def _confirm_dirty_tree(project_dir: Path) -> None:
    """Warn about uncommitted tracked changes since a rename cannot be rolled back."""
    changed = get_tracked_changes(project_dir)
    if not changed:
        return

    console.print()
    console.print("[bold yellow]Uncommitted changes in working directory[/bold yellow]")
    console.print(f"Found {len(changed)} modified tracked file(s):")
    for path in changed[:10]:
        console.print(f"  [dim]{path}[/dim]")
    console.print("The rename is not reversible automatically; commit or stash first to keep a checkpoint.")
    console.print()
    if not typer.confirm("Proceed with uncommitted changes?", default=False):
        console.print("[yellow]Aborted. Please commit or stash your changes.[/yellow]")
        raise typer.Exit(0)


def _display_summary(summary: RenameSummary, config: Config) -> None:
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Step", style="cyan")
    table.add_column("Result")

    verb = "would change" if summary.dry_run else "changed"
    table.add_row(config.manifest_file, verb if summary.manifest_updated else "[dim]unchanged[/dim]")
    table.add_row(f"{config.source_extension} files", f"{summary.changed_count} {verb}")
    if config.update_platform_ids:
        table.add_row("platform ids", f"{len(summary.platform_files_updated)} {verb}")
    table.add_row(config.package_cache_file, verb if summary.cache_updated else "[dim]unchanged[/dim]")
    if summary.refresh is not None:
        refresh_state = "[green]ok[/green]" if summary.refresh.succeeded else "[red]failed[/red]"
        table.add_row("dependency refresh", refresh_state)

    console.print()
    console.print(table)


@app.command()
def main(
    ctx: typer.Context,
    new_name: Annotated[
        str | None,
        typer.Argument(help="The new project name", show_default=False),
    ] = None,
    value: Annotated[
        str | None,
        typer.Option("--value", "-v", help="The new project name to set", metavar="PROJECT_NAME"),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Prompt for the new project name"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Show what would be changed without making actual changes"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show detailed output"),
    ] = False,
    platform_ids: Annotated[
        bool,
        typer.Option("--platform-ids", help="Also update the Android applicationId and iOS bundle identifier"),
    ] = False,
    no_refresh: Annotated[
        bool,
        typer.Option("--no-refresh", help="Skip 'flutter clean' and 'flutter pub get' after updating the cache"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation on a dirty working tree"),
    ] = False,
    project_dir: Annotated[
        Path,
        typer.Option(
            "--project-dir",
            "-C",
            help="Project root containing pubspec.yaml",
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a config.yaml (default: .change-project-name/config.yaml)"),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Rename the Flutter/Dart project in the current directory."""
    if _no_arguments_given(ctx):
        typer.echo(ctx.get_help())
        typer.echo()
        typer.echo(EXAMPLES)
        raise typer.Exit(0)

    _configure_logging(verbose)

    config = Config.load(config_path, project_root=project_dir)
    if platform_ids:
        config = config.model_copy(update={"update_platform_ids": True})
    if no_refresh:
        config = config.model_copy(update={"refresh": config.refresh.model_copy(update={"enabled": False})})

    manifest_path = project_dir / config.manifest_file
    try:
        old_name = read_manifest_name(manifest_path)
    except ManifestNotFound as e:
        console.print(f"[red]{config.manifest_file} not found. Please run this in a Flutter project root.[/red]")
        raise typer.Exit(1) from e
    except ValidationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if verbose:
        console.print(f"Working directory: {project_dir}")
    console.print(f"Current project name: [bold]{old_name}[/bold]")

    target = _resolve_new_name(value, interactive, new_name)
    if not target:
        console.print("[red]New project name cannot be empty![/red]")
        console.print("Use --value <name>, --interactive, or provide name as argument")
        raise typer.Exit(1)

    if not is_valid_name(target):
        console.print(f'[red]Invalid package name: "{escape(target)}"[/red]')
        console.print("   Package names must be lowercase, can contain underscores and numbers,")
        console.print("   and must start with a lowercase letter.")
        console.print("   Examples: my_app, myapp, my_app_v2")
        raise typer.Exit(1)

    if old_name == target:
        console.print(f'[green]Project name is already "{target}". Nothing to change.[/green]')
        raise typer.Exit(0)

    if not dry_run and not yes:
        _confirm_dirty_tree(project_dir)

    request = RenameRequest(old_name=old_name, new_name=target, dry_run=dry_run, verbose=verbose)
    try:
        summary = run_rename(project_dir, request, config=config, notifier=ConsoleNotifier(console))
    except RenameError as e:
        console.print(f"\n[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    _display_summary(summary, config)


if __name__ == "__main__":
    app()
