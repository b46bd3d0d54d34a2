"""Main CLI interface for Cyber Zen."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path
from typing import List, Optional

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cyber_zen.core.classifier import FileTypeManager
from cyber_zen.core.compressor import compress as run_compress
from cyber_zen.core.config import default_config, ensure_install_dir, load_config
from cyber_zen.core.errors import ConfigError, CyberZenError, UserInputError
from cyber_zen.core.git_ops import CommitPusher, GitRepository, StatusReader
from cyber_zen.core.housekeeping import (
    BUILD_DIR,
    INSTALL_PATH,
    remove_build_dir,
    remove_install_file,
    tool_availability,
)
from cyber_zen.core.logging_setup import configure_logging
from cyber_zen.core.server import DEFAULT_PORT, create_server, serve
from cyber_zen.core.summarizer import ChangeSummarizer, compute_stats
from cyber_zen.models.change import ChangeRecord, ChangeStatus
from cyber_zen.models.compression import (
    BatchSummary,
    CompressionAction,
    CompressionResult,
)

PACKAGE_NAME = "cyber-zen"

console = Console()

STATUS_STYLES = {
    ChangeStatus.ADDED.value: ("✨ added", "green"),
    ChangeStatus.MODIFIED.value: ("🔧 modified", "blue"),
    ChangeStatus.DELETED.value: ("🗑️  deleted", "red"),
    ChangeStatus.RENAMED.value: ("🔄 renamed", "yellow"),
}


def get_version() -> str:
    try:
        return package_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


class CyberZenGroup(click.Group):
    """Command group that turns CyberZenError into a red message and exit 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except CyberZenError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            ctx.exit(1)


@click.group(cls=CyberZenGroup)
@click.version_option(package_name=PACKAGE_NAME)
@click.option("--verbose", "-v", is_flag=True, help="Show debug diagnostics")
def main(verbose: bool):
    """Cyber Zen Tools - everyday developer shortcuts."""
    configure_logging(verbose)
    try:
        config = load_config()
    except ConfigError as e:
        # only status reports a broken config; everything else runs on defaults
        logger.warning(f"Using default configuration: {e}")
        config = default_config()

    try:
        log_dir = ensure_install_dir(config)
    except ConfigError as e:
        logger.warning(str(e))
        log_dir = None
    configure_logging(verbose, log_dir)


@main.command()
@click.argument("message", required=False)
@click.option("--no-push", is_flag=True, help="Commit without pushing")
@click.option(
    "--yes", "-y", is_flag=True, help="Use the generated message without asking"
)
def gcm(message: Optional[str], no_push: bool, yes: bool):
    """Stage everything, commit (skipping hooks) and push.

    Without MESSAGE the working tree changes are analysed and a commit
    message is proposed for confirmation.
    """
    repo = GitRepository()
    repo.ensure_repository()

    if message:
        console.print(f"[cyan]Using commit message:[/cyan] {escape(message)}")
    else:
        console.print("[yellow]No commit message given, analysing changes...[/yellow]")
        message = _generate_commit_message(repo, assume_yes=yes)
        console.print("[green]Commit message generated[/green]")

    _commit_and_push(repo, message, push=not no_push)


def _commit_and_push(pusher: CommitPusher, message: str, push: bool) -> None:
    console.print("[green]Running git operations...[/green]")

    console.print("[yellow]git add .[/yellow]")
    _echo_git_output(pusher.stage_all())
    console.print("[green]✓ git add . done[/green]")

    console.print("[yellow]git commit --no-verify[/yellow]")
    _echo_git_output(pusher.commit(message))
    console.print("[green]✓ git commit done[/green]")

    if push:
        console.print("[yellow]git push[/yellow]")
        _echo_git_output(pusher.push())
        console.print("[green]✓ git push done[/green]")
    else:
        console.print("[yellow]Skipping git push[/yellow]")

    console.print("[green]🎉 Git operations complete![/green]")


def _generate_commit_message(reader: StatusReader, assume_yes: bool) -> str:
    manager = FileTypeManager.from_config_dir()
    summarizer = ChangeSummarizer(reader, manager)

    changes = summarizer.collect()
    _display_changes(changes)
    if changes:
        commit_type = manager.commit_type_for(compute_stats(changes))
        description = manager.get_commit_description(commit_type)
        console.print(f"[cyan]Commit type:[/cyan] {commit_type} ({escape(description)})")

    message = summarizer.compose(changes)
    console.print(Panel(escape(message), title="Generated commit message", expand=False))

    if not assume_yes and not click.confirm("Use this message?", default=True):
        raise UserInputError("Operation cancelled by user")
    return message


def _display_changes(changes: List[ChangeRecord]) -> None:
    if not changes:
        console.print("[yellow]No changes detected[/yellow]")
        return

    table = Table(title="Detected changes")
    table.add_column("Status", no_wrap=True)
    table.add_column("Path", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Kind", style="blue")

    for change in changes:
        label, style = STATUS_STYLES.get(change.status, (f"❓ {change.status}", "cyan"))
        table.add_row(
            f"[{style}]{label}[/{style}]",
            escape(change.path),
            escape(change.category),
            escape(change.file_kind),
        )
    console.print(table)

    stats = compute_stats(changes)
    console.print(
        f"[bold]Added:[/bold] {stats.added}  "
        f"[bold]Modified:[/bold] {stats.modified}  "
        f"[bold]Deleted:[/bold] {stats.deleted}  "
        f"[bold]Total:[/bold] {stats.total}"
    )


def _echo_git_output(output: str) -> None:
    if output and output.strip():
        console.print(output.rstrip(), markup=False, highlight=False)


@main.command()
@click.option(
    "--src",
    required=True,
    type=click.Path(path_type=Path),
    help="Source image file or directory",
)
@click.option(
    "--dist",
    type=click.Path(path_type=Path),
    default=None,
    help="Destination path (defaults to ./compressed_<timestamp>)",
)
@click.option(
    "--rate", type=float, default=0.8, show_default=True, help="Size ratio, 0.1-1.0"
)
def compress(src: Path, dist: Optional[Path], rate: float):
    """Shrink JPEG, PNG and GIF images by RATE.

    JPEG output quality follows the rate but never drops below 70; PNG and
    GIF are re-encoded losslessly; other image formats are copied. Output
    paths get a _YYYYMMDD_HHMMSS suffix so earlier runs are never
    overwritten.
    """
    console.print("[green]Compressing images...[/green]")
    console.print(f"[cyan]Source:[/cyan] {escape(str(src))}")
    console.print(f"[cyan]Rate:[/cyan] {rate:.2f}")

    summary = run_compress(src, dist, rate, on_result=_print_result)
    _print_summary(summary)


def _print_result(result: CompressionResult) -> None:
    name = escape(result.source.name)
    if result.action == CompressionAction.ENCODED:
        console.print(
            f"[green]✓ {name}[/green] "
            f"{result.original_size[0]}x{result.original_size[1]} → "
            f"{result.new_size[0]}x{result.new_size[1]}, "
            f"{result.original_bytes} → {result.compressed_bytes} bytes "
            f"({result.ratio:.2%})"
        )
    elif result.action == CompressionAction.COPIED:
        console.print(f"[yellow]⚠️  {name} copied unchanged ({result.original_bytes} bytes)[/yellow]")
    else:
        console.print(f"[red]✗ {name}: {escape(result.error or '')}[/red]")


def _print_summary(summary: BatchSummary) -> None:
    table = Table(title="Compression summary")
    table.add_column("Encoded", style="green")
    table.add_column("Copied", style="yellow")
    table.add_column("Failed", style="red")
    table.add_column("Bytes before", style="cyan")
    table.add_column("Bytes after", style="cyan")
    table.add_row(
        str(summary.count(CompressionAction.ENCODED)),
        str(summary.count(CompressionAction.COPIED)),
        str(summary.count(CompressionAction.FAILED)),
        str(summary.original_bytes),
        str(summary.compressed_bytes),
    )
    console.print(table)
    console.print(f"[green]✓ Output written to {escape(str(summary.destination))}[/green]")


@main.command()
@click.argument(
    "directory", required=False, default="./", type=click.Path(path_type=Path)
)
@click.option(
    "--port", "-p", type=int, default=DEFAULT_PORT, show_default=True, help="Port to listen on"
)
def server(directory: Path, port: int):
    """Serve DIRECTORY over HTTP, like python -m http.server."""
    httpd = create_server(
        directory,
        port,
        request_sink=lambda line: console.print(line, markup=False, highlight=False),
    )

    console.print("🚀 Starting static file server...")
    console.print(f"📁 Serving: {directory.resolve()}", markup=False)
    console.print(f"🌐 Address: http://localhost:{port}")
    console.print("📋 Press Ctrl+C to stop\n")

    serve(httpd)
    console.print("[yellow]Server stopped[/yellow]")


@main.command()
def status():
    """Show install location, version and tool availability."""
    config = load_config()
    console.print("[bold green]=== Cyber Zen Tools status ===[/bold green]")
    console.print(f"[cyan]Install directory:[/cyan] {escape(str(config.install_dir))}")
    console.print(f"[cyan]Version:[/cyan] {get_version()}")
    console.print(f"[cyan]Platform:[/cyan] {config.platform}/{config.architecture}")

    for tool, path in tool_availability().items():
        if path:
            console.print(f"[green]✓ {tool} available ({path})[/green]")
        else:
            console.print(f"[red]✗ {tool} not available[/red]")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def uninstall(yes: bool):
    """Remove the installed binary (needs sudo) and the local build directory."""
    if not yes and not click.confirm(f"Remove {INSTALL_PATH}?", default=False):
        raise UserInputError("Uninstall cancelled")

    console.print("[yellow]Uninstalling Cyber Zen Tools...[/yellow]")
    if remove_install_file(INSTALL_PATH):
        console.print(f"[green]✓ Removed {INSTALL_PATH}[/green]")
    else:
        console.print(f"[yellow]Not installed: {INSTALL_PATH}[/yellow]")

    if remove_build_dir(BUILD_DIR):
        console.print(f"[green]✓ Removed {BUILD_DIR}/[/green]")

    console.print("[green]✓ Uninstall complete[/green]")


if __name__ == "__main__":
    main()
