"""``cheekygit config`` -- inspect and edit the user configuration file.

The file holds a :class:`~cheekygit.models.GlobalConfig`: the catalog to use
instead of the bundled one and the default output format. Project files,
``CHEEKYGIT_CATALOG`` and root options still take precedence over it (see
:func:`~cheekygit.config.resolve_config`).
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from cheekygit.exit_codes import EXIT_INVALID_USAGE
from cheekygit.models import GlobalConfig
from cheekygit.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)

# Values that clear an optional setting such as ``catalog``.
_NULL_WORDS = ("", "none", "null")


def _is_clearable(field_name: str) -> bool:
    field = GlobalConfig.model_fields.get(field_name)
    return field is not None and not field.is_required() and field.default is None


def _usage_error(message: str) -> typer.Exit:
    error(message)
    return typer.Exit(code=EXIT_INVALID_USAGE)


@config_app.command("show")
def config_show() -> None:
    """Print the user configuration.

    Example::

        cheekygit --json config show
    """
    from cheekygit.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting to change, e.g. 'catalog' or 'output.format'."),
    value: str = typer.Argument(help="New value; 'none' clears the catalog override."),
) -> None:
    """Change one setting and save the file.

    Nested settings use dots. The result is validated before anything is
    written, so a bad value leaves the file untouched.

    Example::

        cheekygit config set catalog ~/git-catalog.yaml
        cheekygit config set output.format json
    """
    from cheekygit.config import load_global_config, save_global_config

    data = load_global_config().model_dump(mode="json")
    *parents, leaf = key.split(".")

    section = data
    for part in parents:
        section = section.get(part)
        if not isinstance(section, dict):
            raise _usage_error(f"Invalid config key: {key}")
    if leaf not in section or isinstance(section[leaf], dict):
        raise _usage_error(f"Unknown config key: {key}")

    clear = not parents and _is_clearable(leaf) and value.lower() in _NULL_WORDS
    section[leaf] = None if clear else value

    try:
        updated = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise _usage_error(f"Validation error: {exc}") from None

    save_global_config(updated)
    success(f"Set {key} = {section[leaf]}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Restore every setting to its default.

    Example::

        cheekygit config reset --force
    """
    from cheekygit.config import save_global_config

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
