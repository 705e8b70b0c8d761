"""Subcommand modules for pickerkit.

register_commands() imports lazily so ``pickerkit --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root group."""
    from pickerkit.commands.format_cmd import format_group
    from pickerkit.commands.overlay import overlay
    from pickerkit.commands.parse import parse
    from pickerkit.commands.range_cmd import range_group
    from pickerkit.commands.step import step

    cli.add_command(parse)
    cli.add_command(format_group)
    cli.add_command(range_group)
    cli.add_command(overlay)
    cli.add_command(step)
