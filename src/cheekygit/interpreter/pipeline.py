"""Run an invocation through every interpreter stage.

:func:`explain_invocation` is the strict form: it raises
:class:`~cheekygit.exceptions.InvalidPrefixError` or
:class:`~cheekygit.exceptions.UnknownCommandError` so callers (and tests)
can tell the two not-found outcomes apart. :func:`resolve` is the entry
point used by the CLI and returns ``None`` for both.

Resolution is a pure function of the raw string, the catalog, and the
special-token table; the same input always yields an equal explanation.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from cheekygit.exceptions import ResolutionError
from cheekygit.interpreter.assembler import assemble_explanation
from cheekygit.interpreter.matcher import match_flags
from cheekygit.interpreter.substitution import (
    describe_flag,
    join_with_final_and,
    replace_special_tokens,
    substitute_marker,
)
from cheekygit.interpreter.tokenizer import parse_invocation
from cheekygit.models import Catalog, FlagExplanation, ResolvedExplanation

logger = logging.getLogger(__name__)


def explain_invocation(
    raw: str,
    catalog: Catalog,
    special_tokens: Optional[Mapping[str, str]] = None,
) -> ResolvedExplanation:
    """Explain *raw*, raising when it does not name a catalog command.

    Args:
        raw: The invocation, e.g. ``'git commit -m "Add example command"'``.
        catalog: The command catalog to resolve against.
        special_tokens: Positional-token table; defaults to the catalog's.

    Returns:
        The fully substituted explanation.

    Raises:
        InvalidPrefixError: If *raw* does not start with ``catalog.prefix``.
        UnknownCommandError: If the command name is not in *catalog*.
    """
    tokens = catalog.special_tokens if special_tokens is None else special_tokens

    parsed = parse_invocation(raw, catalog)
    command = catalog.find_command(parsed.command)
    assert command is not None  # parse_invocation checked the name

    matched = match_flags(command.flags, parsed)
    arguments = join_with_final_and(replace_special_tokens(parsed.positionals, tokens))

    logger.debug(
        "Resolved '%s': %d positional(s), %d of %d parsed flag(s) matched",
        command.name,
        len(parsed.positionals),
        len(matched),
        len(parsed.flags),
    )

    flags = [
        FlagExplanation(
            name=flag.definition.name,
            aliases=flag.definition.aliases,
            description=describe_flag(flag, arguments),
        )
        for flag in matched
    ]
    return assemble_explanation(
        command.name, substitute_marker(command.description, arguments), flags
    )


def resolve(
    raw: str,
    catalog: Catalog,
    special_tokens: Optional[Mapping[str, str]] = None,
) -> Optional[ResolvedExplanation]:
    """Explain *raw*, or return ``None`` if it is not a recognised invocation."""
    try:
        return explain_invocation(raw, catalog, special_tokens)
    except ResolutionError as exc:
        logger.debug("No match for %r: %s", raw, exc)
        return None
