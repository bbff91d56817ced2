"""Inspect commands -- browse the active catalog.

Provides the read-only ``cheekygit commands`` and ``cheekygit flags``
commands, which list what the interpreter can explain in table or
structured output format.
"""

from __future__ import annotations

import typer

from cheekygit.commands import load_catalog_from_context
from cheekygit.exit_codes import EXIT_NOT_FOUND
from cheekygit.output import error, format_flag_spelling, get_output, info, suggest

_SUMMARY_WIDTH = 60


def _summary(text: str) -> str:
    if len(text) <= _SUMMARY_WIDTH:
        return text
    return text[: _SUMMARY_WIDTH - 3].rstrip() + "..."


def list_commands(ctx: typer.Context) -> None:
    """List the commands of the active catalog.

    Example::

        cheekygit commands
        cheekygit --json commands
    """
    catalog = load_catalog_from_context(ctx)
    if not len(catalog):
        info("The catalog has no commands.")
        return

    headers = ["Command", "Flags", "Description"]
    rows = [
        [f"{catalog.prefix} {command.name}", str(len(command.flags)), _summary(command.description)]
        for command in sorted(catalog.commands.values(), key=lambda c: c.name)
    ]
    get_output().print_table(headers, rows, title=f"Commands ({len(rows)})")


def list_flags(
    ctx: typer.Context,
    command: str = typer.Argument(help="Command name, e.g. 'push'."),
) -> None:
    """List the flags a catalog command understands.

    Example::

        cheekygit flags commit
    """
    catalog = load_catalog_from_context(ctx)
    definition = catalog.find_command(command)
    if definition is None:
        error(f"'{command}' is not a known {catalog.prefix} command")
        suggest("See the known commands: cheekygit commands")
        raise typer.Exit(code=EXIT_NOT_FOUND)

    if not definition.flags:
        info(f"{catalog.prefix} {command} has no documented flags.")
        return

    headers = ["Flag", "Aliases", "Value", "Description"]
    rows = [
        [
            format_flag_spelling(flag.name),
            ", ".join(format_flag_spelling(alias) for alias in flag.aliases) or "-",
            "string" if flag.is_string else "switch",
            _summary(flag.description),
        ]
        for flag in definition.flags
    ]
    get_output().print_table(
        headers, rows, title=f"{catalog.prefix} {command} -- Flags ({len(rows)})"
    )
