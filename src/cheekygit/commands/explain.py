"""Explain command -- resolve an invocation and print what it does.

Implements ``cheekygit explain``. The invocation may be passed as a single
quoted argument or as separate tokens::

    cheekygit explain 'git commit -m "Add example command"'
    cheekygit explain git push --all --prune

``explain`` has no help option of its own, so ``cheekygit explain git add
--help`` explains ``git add --help``.
"""

from __future__ import annotations

import shlex

import typer

from cheekygit.commands import load_catalog_from_context
from cheekygit.exit_codes import EXIT_NOT_FOUND
from cheekygit.interpreter import resolve
from cheekygit.output import error, print_explanation, suggest


def join_invocation(tokens: list[str]) -> str:
    """Rebuild the raw invocation from CLI arguments.

    A single argument is used verbatim; several arguments are re-quoted so
    that tokens containing spaces survive the tokenizer.
    """
    if len(tokens) == 1:
        return tokens[0]
    return shlex.join(tokens)


def explain_command(
    ctx: typer.Context,
    invocation: list[str] = typer.Argument(
        ..., help="The git command line to explain, e.g. 'git add -v .'."
    ),
) -> None:
    """Explain a git command and each of its flags.

    Exits with code 4 when the invocation does not start with ``git`` or
    names a command the catalog does not know. Every token after
    ``explain``, ``--help`` included, is part of the invocation; see
    ``cheekygit --help`` for usage.

    Example::

        cheekygit explain 'git add .'
        cheekygit --json explain git commit -am 'Fix typo'
    """
    catalog = load_catalog_from_context(ctx)
    raw = join_invocation(invocation)

    explanation = resolve(raw, catalog)
    if explanation is None:
        error(f"the command is not a valid {catalog.prefix} command")
        suggest("See the known commands: cheekygit commands")
        raise typer.Exit(code=EXIT_NOT_FOUND)

    print_explanation(explanation, prefix=catalog.prefix)
