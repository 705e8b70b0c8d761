"""Click base classes with an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints worked invocations and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class PickerCommand(click.Command):
    """Command that accepts an ``examples`` string."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class PickerGroup(click.Group):
    """Group whose subcommands are :class:`PickerCommand` by default."""

    command_class = PickerCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def parse_numbers(raw: str, count: int, label: str) -> list[float]:
    """Parse ``"a,b,..."`` into exactly *count* numbers or raise BadParameter."""
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != count:
        raise click.BadParameter(f"expected {count} comma-separated numbers", param_hint=label)
    try:
        return [float(part) for part in parts]
    except ValueError as exc:
        raise click.BadParameter(f"not a number list: {raw!r}", param_hint=label) from exc
