"""Typer application factory and CLI entry point for cheekygit.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``explain``, ``commands``, ``flags``, ``catalog``,
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`cheekygit.config`: Catalog and configuration resolution.
    :mod:`cheekygit.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from cheekygit import __version__
from cheekygit.commands.catalog import catalog_app
from cheekygit.commands.config import config_app
from cheekygit.commands.explain import explain_command
from cheekygit.commands.inspect import list_commands, list_flags
from cheekygit.exit_codes import EXIT_GENERIC_FAILURE

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="cheekygit",
    help="Enter a git command and have it explained to you.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# `--help` after `explain` belongs to the git invocation, not to cheekygit.
app.command(
    "explain",
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
)(explain_command)
app.command("commands")(list_commands)
app.command("flags")(list_flags)
app.add_typer(catalog_app, name="catalog", help="Validate, show, and build catalogs.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"cheekygit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="Catalog file to use instead of the bundled one."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises logging and the global :class:`~cheekygit.output.OutputManager`
    from CLI flags (falling back to the configured output format), and
    stores shared options in the Typer context so that sub-commands can read
    them via ``ctx.obj``.
    """
    from cheekygit.config import resolve_config
    from cheekygit.exceptions import ConfigError
    from cheekygit.output import OutputFormat, OutputManager, error, set_output

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        try:
            fmt = OutputFormat(resolve_config().output.format)
        except ConfigError as exc:
            set_output(OutputManager(no_color=no_color))
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["catalog"] = catalog
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Exit with status 130 on Ctrl-C instead of printing a traceback."""

    def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _on_sigint)


def _write_crash_log() -> Path:
    """Save the traceback being handled to ``<data dir>/logs/crash-<time>.log``."""
    from cheekygit.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(
        f"cheekygit {__version__}\n{traceback.format_exc()}", encoding="utf-8"
    )
    return log_path


def main() -> None:
    """Console-script entry point.

    A :class:`~cheekygit.exceptions.CheekyGitError` that escapes a command
    is reported and mapped to its ``exit_code``. Any other exception is
    saved to a crash log and exits with the generic failure code.
    """
    from cheekygit.exceptions import CheekyGitError
    from cheekygit.output import error

    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except CheekyGitError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
