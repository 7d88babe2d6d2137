"""
figmark command-line interface.

Commands:

- compile: translate a saved design document to HTML, a page, or JSX
- inspect: show the translated element tree
- plan: show what a collaborator must prefetch before compiling
- parse-url: split a design URL into file key and node id
"""

import logging
import platform
import sys

import typer

from figmark import __version__

app = typer.Typer(
    help="Compile design-tool node trees into inline-styled HTML and component descriptors.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"figmark {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """figmark CLI main callback for global options."""
    pass


# =============================================================================
# Commands
# =============================================================================
from figmark.cli.commands import (  # noqa: E402
    compile_command,
    inspect_command,
    parse_url_command,
    plan_command,
)

app.command(name="compile")(compile_command)
app.command(name="inspect")(inspect_command)
app.command(name="plan")(plan_command)
app.command(name="parse-url")(parse_url_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main", "version_callback", "configure_logging"]
