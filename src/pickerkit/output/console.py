"""Rich Console factory and theme for pickerkit output.

Consoles render into a StringIO buffer so formatters keep a plain
``format_result() -> str`` contract. Without a TTY (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PICKER_THEME = Theme(
    {
        "pk.ok": "bold green",
        "pk.error": "bold red",
        "pk.warning": "bold yellow",
        "pk.op": "bold cyan",
        "pk.key": "dim",
        "pk.value": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=PICKER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
