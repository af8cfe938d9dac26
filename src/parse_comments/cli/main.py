"""Command line interface for parse-comments."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.markup import escape

from .. import __version__
from ..config.settings import ParserConfig
from ..core.comments import Comments
from ..core.exceptions import ConfigError, TypeSyntaxError
from ..parsers.stringify import stringify_type
from ..parsers.types import parse_type
from .output import (
    console,
    print_comment,
    print_error,
    print_info,
    print_json,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="parse-comments",
    help="Parse JSDoc and Closure Compiler comments into structured data",
    add_completion=False,
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    # Only parse failures reach the console unless --verbose
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"parse-comments {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Parse JSDoc and Closure Compiler comments into structured data."""


@app.command("parse")
def parse_file(
    file: Path = typer.Argument(
        ...,
        help="JavaScript file to parse",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on malformed tags and types instead of dropping them"
    ),
    format_output: bool = typer.Option(
        False, "--format", help="Tidy descriptions of parsed comments"
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with parser settings",
        dir_okay=False,
    ),
    json_output: bool = typer.Option(False, "--json", help="Output comments as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Parse every documentation comment in FILE.

    Examples:
        parse-comments parse src/index.js
        parse-comments parse src/index.js --strict --json
    """
    _configure_logging(verbose)

    try:
        config = ParserConfig.load(config_file) if config_file else ParserConfig()
        options = {}
        if strict:
            options["strict"] = True
        if format_output:
            options["format"] = True
        comments = Comments(config, **options)
    except ConfigError as e:
        print_error(f"Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    source = file.read_text(encoding="utf-8")
    parsed = comments.parse(source)

    if json_output:
        print_json([c.model_dump(mode="json") for c in parsed])
    else:
        if not parsed:
            print_info(f"No documentation comments found in {file}")
        for index, comment in enumerate(parsed, start=1):
            print_comment(comment, index)
        if parsed:
            print_success(f"Parsed {len(parsed)} comment(s) from {file}")

    for error in comments.errors:
        print_warning(f"Skipped comment: {escape(str(error))}")
    if comments.errors:
        raise typer.Exit(1)


@app.command("type")
def parse_type_literal(
    literal: str = typer.Argument(..., help="Type literal, without the tag's braces"),
    json_output: bool = typer.Option(False, "--json", help="Output the AST as JSON"),
) -> None:
    """Parse a type literal and print its AST and canonical form.

    Examples:
        parse-comments type "Array.<string>|null"
        parse-comments type "function(this:Foo, ...number): boolean" --json
        parse-comments type "{a: number}|{b: string}"
    """
    try:
        node = parse_type(literal)
    except TypeSyntaxError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    if json_output:
        print_json(node.model_dump(mode="json"))
        return

    console.print(f"[bold]{escape(stringify_type(node))}[/bold]")
    print_json(node.model_dump(mode="json"), title="AST")


if __name__ == "__main__":
    app()
