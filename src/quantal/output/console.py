"""Rich Console factory and theme for quantal output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. In non-TTY environments (tests, pipes)
Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

QUANTAL_THEME = Theme(
    {
        "q.ok": "bold green",
        "q.error": "bold red",
        "q.warning": "bold yellow",
        "q.op": "bold cyan",
        "q.key": "dim",
        "q.value": "bold",
        "q.unit": "bold blue",
        "q.symbol": "bold blue",
        "q.code": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=QUANTAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
