"""Diagnostic output on stderr."""

from rich.console import Console
from rich.markup import escape

_console = Console(stderr=True)


def warning(message: str) -> None:
  """Print a non-fatal warning."""
  _console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)
