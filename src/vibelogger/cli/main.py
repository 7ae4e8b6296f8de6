"""
vibelogger CLI - tools for persisted log files
"""

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vibelogger import __version__
from vibelogger.core.exceptions.custom_exceptions import PersistenceError
from vibelogger.core.logging.logger import get_logger
from vibelogger.logger.levels import LogLevel
from vibelogger.logger.reader import export_for_ai, read_log_file

app = typer.Typer(
    name="vibelogger",
    help="AI-Native Logging for LLM Agent Development",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


@app.command()
def version() -> None:
    """Show vibelogger version information"""
    table = Table(title="vibelogger Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("vibelogger", __version__)
    table.add_row("Python", "3.9+")

    console.print(table)


@app.command()
def export(
    log_file: Path = typer.Argument(..., help="JSON Lines log file"),
    operation: Optional[str] = typer.Option(
        None, "--operation", "-o", help="Only operations containing this text"
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=0, help="Only the newest N records"
    ),
) -> None:
    """
    Print log records as a JSON array for AI analysis.
    """
    try:
        output = export_for_ai(log_file, operation_filter=operation, limit=limit)
    except PersistenceError as e:
        logger.debug("export_failed", **e.to_dict())
        err_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    typer.echo(output)


@app.command()
def summary(
    log_file: Path = typer.Argument(..., help="JSON Lines log file"),
) -> None:
    """
    Show record counts per level and per operation.
    """
    try:
        result = read_log_file(log_file)
    except PersistenceError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    levels = Counter(str(r.get("level", "?")) for r in result.entries)
    operations = Counter(str(r.get("operation", "?")) for r in result.entries)

    level_table = Table(title=f"Levels in {log_file.name}")
    level_table.add_column("Level", style="cyan")
    level_table.add_column("Count", style="green", justify="right")
    for level in LogLevel:
        if levels.get(level.value):
            level_table.add_row(level.value, str(levels[level.value]))
    for name, count in sorted(levels.items()):
        if name not in LogLevel.__members__:
            level_table.add_row(name, str(count))

    op_table = Table(title="Operations")
    op_table.add_column("Operation", style="cyan")
    op_table.add_column("Count", style="green", justify="right")
    for name, count in operations.most_common():
        op_table.add_row(name, str(count))

    console.print(level_table)
    console.print(op_table)
    console.print(f"Total records: {len(result.entries)}")
    if result.skipped_lines:
        console.print(
            f"[yellow]Skipped {result.skipped_lines} malformed line(s)[/yellow]"
        )


if __name__ == "__main__":
    app()
