"""Built-in CLI sub-commands for cheekygit.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~cheekygit.commands.explain` -- explain a git invocation.
* :mod:`~cheekygit.commands.inspect` -- list catalog commands and flags.
* :mod:`~cheekygit.commands.catalog` -- validate, show, and build catalogs.
* :mod:`~cheekygit.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``catalog`` and ``config``) or plain callback
functions registered directly on the root app (for single commands like
``explain``).
"""

from __future__ import annotations

from typing import Optional

import typer

from cheekygit.exceptions import CheekyGitError
from cheekygit.models import Catalog


def load_catalog_from_context(ctx: Optional[typer.Context]) -> Catalog:
    """Load the catalog selected by ``--catalog``, env, or config files.

    Raises:
        typer.Exit: With the error's exit code when the configuration or
            the catalog cannot be loaded.
    """
    from cheekygit.config import load_active_catalog, resolve_config
    from cheekygit.output import debug, error

    cli_catalog = None
    if ctx is not None and ctx.obj:
        cli_catalog = ctx.obj.get("catalog")

    try:
        config = resolve_config(cli_catalog=cli_catalog)
        debug(f"Using catalog: {config.catalog or 'bundled'}")
        return load_active_catalog(config)
    except CheekyGitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
