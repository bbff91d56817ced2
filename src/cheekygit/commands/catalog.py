"""Catalog commands -- validate, show, and build command catalogs.

Provides the ``cheekygit catalog`` sub-command group:

* ``validate`` loads a catalog file and reports invariant violations.
* ``show`` prints the active catalog in the catalog document format.
* ``build`` runs the offline documentation builder over saved git-scm.com
  pages and writes a catalog file for review.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import yaml

from cheekygit.commands import load_catalog_from_context
from cheekygit.exceptions import CheekyGitError, InvalidUsageError
from cheekygit.output import (
    error,
    format_response,
    info,
    print_data,
    success,
    suggest,
    warning,
)


catalog_app = typer.Typer(no_args_is_help=True)


def render_catalog_document(data: dict, fmt: str) -> str:
    """Serialise a catalog document as ``yaml`` or ``json`` text.

    Raises:
        InvalidUsageError: If *fmt* is neither ``yaml`` nor ``json``.
    """
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=88)
    raise InvalidUsageError(f"Unknown catalog format: {fmt} (expected yaml or json)")


@catalog_app.command("validate")
def catalog_validate(
    source: str = typer.Argument(help="Catalog file (JSON or YAML), or '-' for stdin."),
) -> None:
    """Check that a catalog file loads and satisfies its invariants.

    Example::

        cheekygit catalog validate my-commands.yaml
    """
    from cheekygit.catalog import load_catalog

    try:
        catalog = load_catalog(source)
    except CheekyGitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    flag_count = sum(len(c.flags) for c in catalog.commands.values())
    success(
        f"Catalog OK: {len(catalog)} '{catalog.prefix}' command(s), {flag_count} flag(s)."
    )


@catalog_app.command("show")
def catalog_show(ctx: typer.Context) -> None:
    """Print the active catalog as a catalog document.

    Example::

        cheekygit catalog show --json
    """
    from cheekygit.catalog import dump_catalog

    catalog = load_catalog_from_context(ctx)
    format_response(dump_catalog(catalog))


@catalog_app.command("build")
def catalog_build(
    pages: list[Path] = typer.Argument(
        ..., help="Saved git-scm.com documentation pages (HTML)."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the catalog here instead of stdout."
    ),
    fmt: str = typer.Option(
        "yaml", "--format", help="Catalog file format: yaml or json."
    ),
    prefix: str = typer.Option("git", "--prefix", help="Tool name of the pages."),
) -> None:
    """Build a catalog from documentation pages saved to disk.

    Runs offline: fetch the pages yourself (e.g. save
    https://git-scm.com/docs/git-commit as ``git-commit.html``) and review
    the generated descriptions before using the catalog.

    Example::

        cheekygit catalog build git-commit.html git-push.html -o catalog.yaml
    """
    from cheekygit.catalog import dump_catalog
    from cheekygit.catalog.builder import build_catalog_from_pages
    from cheekygit.config import write_text_atomic

    try:
        catalog = build_catalog_from_pages(pages, prefix=prefix)
        text = render_catalog_document(dump_catalog(catalog), fmt)
    except CheekyGitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    for command in catalog.commands.values():
        if not command.flags:
            warning(f"No flags found for '{command.name}'; check the page's OPTIONS section")

    if output_path is None:
        print_data(text.rstrip("\n"))
        return

    write_text_atomic(output_path, text)
    info(f"Parsed {len(pages)} page(s).")
    success(f"Catalog written to {output_path}")
    suggest(f"Check it: cheekygit catalog validate {output_path}")
