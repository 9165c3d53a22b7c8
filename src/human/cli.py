"""
Human CLI.

Commands:
- build: Compile a .human file into the IR (YAML or JSON)
- classify: Show the action type of a single statement
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from human._version import get_version
from human.core.builder import build_application
from human.core.classify import classify
from human.core.errors import HumanError, ParseError
from human.core.manifest import OUTPUT_FORMATS, find_manifest
from human.core.parser import make_statement, parse_file
from human.core.serialize import dump

logger = logging.getLogger(__name__)

err_console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(
    help="""Human – compile structured English into an application IR

  • build: turn a .human file into YAML or JSON
  • classify: show how a single statement is classified
""",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"Human {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Human CLI main callback for global options."""
    pass


@app.command(name="build")
def build_command(
    file: Path | None = typer.Argument(  # noqa: B008
        None,
        help="Source file (default: the manifest entry, or app.human)",
    ),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (yaml or json, default from human.toml or yaml)",
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Output file (default: stdout)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every block the builder handles",
    ),
) -> None:
    """
    Compile a .human file into the application IR.

    Examples:
        human build                      # app.human to stdout as YAML
        human build shop.human -f json   # JSON to stdout
        human build -o app.yaml          # Save to file
    """
    _configure_logging(verbose)

    try:
        manifest = find_manifest(Path.cwd())
    except HumanError as e:
        err_console.print(f"[red]Error loading manifest:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    source = file or manifest.entry_path
    out_format = (format or manifest.output.format).lower()
    out_path = output or manifest.output_path

    if out_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Unknown format '{out_format}'[/red] (expected one of: {', '.join(OUTPUT_FORMATS)})"
        )
        raise typer.Exit(code=1)

    logger.debug("Building %s as %s", source, out_format)
    if not source.exists():
        err_console.print(f"[red]Source file not found:[/red] {source}")
        raise typer.Exit(code=1)

    try:
        program = parse_file(source)
    except ParseError as e:
        err_console.print(f"[red]Parse error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)

    try:
        app_ir = build_application(program)
    except HumanError as e:
        err_console.print(f"[red]Build error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)

    content = dump(app_ir, out_format)

    if out_path:
        out_path.write_text(content, encoding="utf-8")
        err_console.print(
            f"[green]✓[/green] Wrote {out_path} "
            f"({len(app_ir.data)} models, {len(app_ir.pages)} pages, {len(app_ir.apis)} apis)"
        )
    else:
        typer.echo(content, nl=False)


@app.command(name="classify")
def classify_command(
    statement: str = typer.Argument(..., help='Statement text, e.g. "show a list of tasks"'),
) -> None:
    """Print the action type of a single statement."""
    action = classify(make_statement(statement))
    typer.echo(action.type.value)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main()
