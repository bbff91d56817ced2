"""Cross-reference parsed flags with a command's catalog flag definitions."""

from __future__ import annotations

from typing import Sequence

from cheekygit.models import FlagDefinition, MatchedFlag, ParsedInvocation


def match_flags(
    definitions: Sequence[FlagDefinition],
    parsed: ParsedInvocation,
) -> list[MatchedFlag]:
    """Return the catalog flags that were supplied in *parsed*.

    The result follows catalog declaration order, not input order. Flags
    the catalog does not declare are dropped without error, and a boolean
    flag explicitly switched off (``--no-verbose``) counts as absent.

    Args:
        definitions: The command's flags, in declaration order.
        parsed: Output of the tokenizer for the same command.

    Returns:
        One :class:`~cheekygit.models.MatchedFlag` per supplied flag.
    """
    values = parsed.flag_values()
    matched: list[MatchedFlag] = []
    for definition in definitions:
        if definition.name not in values:
            continue
        value = values[definition.name]
        if value is False:
            continue
        matched.append(MatchedFlag(definition=definition, value=value))
    return matched
