"""Build, validate, and serialise command catalogs.

A catalog document (see :mod:`cheekygit.catalog.loader`) is a mapping with a
``commands`` list and optional ``prefix`` and ``special_tokens`` entries.
:func:`build_catalog` validates it into an immutable
:class:`~cheekygit.models.Catalog`. Every invariant violation (missing name,
duplicate command, duplicate flag, alias collision) is a configuration error
raised at load time as :class:`~cheekygit.exceptions.CatalogConfigError`, so
a broken catalog aborts startup instead of surfacing per invocation.
"""

from __future__ import annotations

import logging
from importlib import resources
from typing import Any, Optional

from pydantic import ValidationError

from cheekygit.catalog.loader import load_catalog_data, parse_catalog_text
from cheekygit.exceptions import CatalogConfigError
from cheekygit.models import (
    DEFAULT_PREFIX,
    DEFAULT_SPECIAL_TOKENS,
    Catalog,
    CommandDefinition,
)

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "git_commands.yaml"
"""File name of the catalog shipped in :mod:`cheekygit.data`."""

_default: Optional[Catalog] = None


def build_catalog(data: dict[str, Any]) -> Catalog:
    """Validate a raw catalog document into a :class:`~cheekygit.models.Catalog`.

    Args:
        data: Parsed catalog document.

    Returns:
        The validated, immutable catalog.

    Raises:
        CatalogConfigError: If the document is malformed or violates the
            flag-name/alias uniqueness invariant.
    """
    if not isinstance(data, dict):
        raise CatalogConfigError(
            f"Catalog must be a mapping (got {type(data).__name__})"
        )

    raw_commands = data.get("commands")
    if raw_commands is None:
        raise CatalogConfigError("Catalog has no 'commands' list")
    if not isinstance(raw_commands, list):
        raise CatalogConfigError("Catalog 'commands' must be a list")

    commands: dict[str, CommandDefinition] = {}
    for index, raw in enumerate(raw_commands):
        try:
            command = CommandDefinition.model_validate(raw)
        except ValidationError as exc:
            label = raw.get("name") if isinstance(raw, dict) else None
            raise CatalogConfigError(
                f"Invalid command #{index} ({label or 'unnamed'}): {exc}"
            ) from exc
        if command.name in commands:
            raise CatalogConfigError(f"Duplicate command '{command.name}'")
        commands[command.name] = command

    special_tokens = data.get("special_tokens")
    if special_tokens is None:
        special_tokens = dict(DEFAULT_SPECIAL_TOKENS)

    try:
        catalog = Catalog(
            prefix=data.get("prefix") or DEFAULT_PREFIX,
            commands=commands,
            special_tokens=special_tokens,
        )
    except ValidationError as exc:
        raise CatalogConfigError(f"Invalid catalog: {exc}") from exc

    logger.debug(
        "Built catalog for '%s' with %d command(s)", catalog.prefix, len(catalog)
    )
    return catalog


def load_catalog(source: str) -> Catalog:
    """Read and validate the catalog stored at *source* (a path, or ``'-'``).

    Raises:
        CatalogParseError: If the file cannot be read or parsed.
        CatalogConfigError: If the document fails validation.
    """
    logger.debug("Loading catalog from %s", source)
    return build_catalog(load_catalog_data(source))


def default_catalog() -> Catalog:
    """Return the bundled git catalog, loading it on first use."""
    global _default
    if _default is None:
        text = (
            resources.files("cheekygit.data")
            .joinpath(BUNDLED_CATALOG)
            .read_text(encoding="utf-8")
        )
        _default = build_catalog(parse_catalog_text(text, hint="yaml"))
    return _default


def dump_catalog(catalog: Catalog) -> dict[str, Any]:
    """Serialise *catalog* back to the catalog document format.

    Flags use the ``isString`` spelling and ``aliases`` are omitted when
    empty, matching the hand-written catalog files.
    """
    commands: list[dict[str, Any]] = []
    for command in catalog.commands.values():
        flags: list[dict[str, Any]] = []
        for flag in command.flags:
            entry: dict[str, Any] = {"name": flag.name}
            if flag.aliases:
                entry["aliases"] = list(flag.aliases)
            entry["description"] = flag.description
            entry["isString"] = flag.is_string
            flags.append(entry)
        commands.append(
            {"name": command.name, "description": command.description, "flags": flags}
        )
    return {
        "prefix": catalog.prefix,
        "special_tokens": dict(catalog.special_tokens),
        "commands": commands,
    }
