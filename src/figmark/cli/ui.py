"""
Rich console helpers for the figmark CLI.

Status messages go to stderr so compiled output on stdout stays pipeable.
"""

from rich.console import Console
from rich.style import Style
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
}


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(Text(f"⚠ {message}", style=STYLES["warning"]))

