"""Rich Console factory and theme for mdviews output.

Consoles render into a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MDV_THEME = Theme(
    {
        "mdv.ok": "bold green",
        "mdv.error": "bold red",
        "mdv.op": "bold cyan",
        "mdv.key": "dim",
        "mdv.title": "bold",
        "mdv.path": "dim",
        "mdv.number": "magenta",
        "mdv.view": "bold blue",
    }
)


CONSOLE_WIDTH = 120


def create_console() -> Console:
    """Create a fixed-width Console that renders to a StringIO buffer."""
    return Console(file=StringIO(), theme=MDV_THEME, highlight=False, width=CONSOLE_WIDTH)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
