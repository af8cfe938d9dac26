"""Rich formatting helpers for the parse-comments CLI."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import Comment
from ..parsers.stringify import stringify_type

console = Console()


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any, title: str | None = None) -> None:
    """Print data as highlighted JSON."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    console.print_json(data=data, default=str)


def print_comment(comment: Comment, index: int) -> None:
    """Print one parsed comment: its description and a table of its tags."""
    line = f" (line {comment.loc.start_line})" if comment.loc else ""
    target = ""
    if comment.code is not None and comment.code.name:
        target = f" [cyan]{comment.code.kind or ''} {escape(comment.code.name)}[/cyan]"
    console.print(f"\n[bold blue]Comment {index}[/bold blue]{line}{target}")

    if comment.description:
        console.print(escape(comment.description))

    if not comment.tags:
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Name", style="yellow")
    table.add_column("Description")

    for tag in comment.tags:
        table.add_row(
            f"@{tag.title}",
            escape(stringify_type(tag.type)) if tag.type is not None else "",
            escape(_display_name(tag.name, tag.optional, tag.default)),
            escape(tag.description),
        )

    console.print(table)


def _display_name(name: str | None, optional: bool, default: str | None) -> str:
    if name is None:
        return ""
    if not optional:
        return name
    return f"[{name}={default}]" if default is not None else f"[{name}]"
