"""Console helpers shared by the CLI entry points."""

import functools
import sys
from typing import Any, Callable, TypeVar

import click
from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

console = Console()
err_console = Console(stderr=True)


def echo(message: str) -> None:
    """Print a line to stdout verbatim: no markup, emoji codes or wrapping."""
    console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)


def warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[bold yellow]⚠[/bold yellow] {message}", highlight=False)


def error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[bold red]✗[/bold red] {message}", highlight=False)


def handle_errors(func: F) -> F:
    """
    Turn unexpected exceptions into a readable message and an exit code.

    click's own exceptions (usage errors, ``sys.exit`` via ``click.exceptions.Exit``)
    are passed through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except KeyboardInterrupt:
            error("Interrupted")
            sys.exit(130)
        except Exception as e:
            error(str(e))
            sys.exit(1)

    return wrapper  # type: ignore[return-value]
