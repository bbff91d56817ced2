"""Split a raw invocation into a command name, positionals, and flags.

This is the first stage of the interpreter. It only looks at flag *names*
and value arity (boolean switch vs string value) as described by the
command's :class:`~cheekygit.models.FlagSchema`; descriptions are never
inspected here.

**Parsing rules:**

* The first token must be the catalog prefix (``git``) and the second a
  known command, otherwise :class:`~cheekygit.exceptions.InvalidPrefixError`
  or :class:`~cheekygit.exceptions.UnknownCommandError` is raised. Both are
  matched ignoring case (``GIT ADD`` is ``git add``); the tokens after
  them keep their case.
* Tokens not starting with ``-`` are positionals, as is a lone ``-``.
  Everything after a bare ``--`` is positional.
* ``--name`` / ``--name=value`` are long flags, ``-x`` / ``-xvalue`` /
  ``-x=value`` / ``-abc`` short flags. Aliases resolve to canonical names.
* Boolean flags record ``True``; ``--no-name`` and ``--name=false`` record
  ``False``. String flags take the attached value or the next token; with
  nothing to consume the value is ``""``.
* Unknown flags are recorded under their raw name and never consume the
  following token. The matcher drops them later.
"""

from __future__ import annotations

import shlex
from typing import Optional, Union

from cheekygit.exceptions import InvalidPrefixError, UnknownCommandError
from cheekygit.models import Catalog, FlagSchema, ParsedFlag, ParsedInvocation

FlagValue = Union[bool, str]

_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def split_invocation(raw: str) -> list[str]:
    """Split *raw* shell-style; quoted substrings stay a single token.

    Never raises. An unterminated quote is closed at the end of the line
    (so it swallows the remainder as one token); input that still cannot be
    tokenized falls back to plain whitespace splitting.

    Example::

        >>> split_invocation('git commit -m "Add example command"')
        ['git', 'commit', '-m', 'Add example command']
        >>> split_invocation('git commit -m "unfinished')
        ['git', 'commit', '-m', 'unfinished']
    """
    for closing in ("", '"', "'"):
        try:
            return shlex.split(raw + closing)
        except ValueError:
            continue
    return raw.split()


def parse_invocation(raw: str, catalog: Catalog) -> ParsedInvocation:
    """Tokenize *raw* against *catalog* and return the parsed invocation.

    Args:
        raw: The invocation as typed by the user.
        catalog: Catalog providing the prefix and per-command flag schema.

    Returns:
        A :class:`~cheekygit.models.ParsedInvocation` for the matched command,
        named as the catalog spells it.

    Raises:
        InvalidPrefixError: If the first token is not ``catalog.prefix``.
        UnknownCommandError: If the second token is missing or unknown.
    """
    tokens = split_invocation(raw)
    if not tokens or tokens[0].casefold() != catalog.prefix.casefold():
        raise InvalidPrefixError(
            f"Invocation does not start with '{catalog.prefix}'", invocation=raw
        )
    if len(tokens) < 2:
        raise UnknownCommandError(
            f"No {catalog.prefix} command given", invocation=raw
        )

    command = _lookup_command(tokens[1], catalog)
    schema = catalog.schema_for(command) if command is not None else None
    if command is None or schema is None:
        raise UnknownCommandError(
            f"'{tokens[1]}' is not a known {catalog.prefix} command", invocation=raw
        )

    positionals, flags = parse_arguments(tokens[2:], schema)
    return ParsedInvocation(
        command=command,
        positionals=tuple(positionals),
        flags=tuple(ParsedFlag(name=name, value=value) for name, value in flags.items()),
    )


def _lookup_command(typed: str, catalog: Catalog) -> Optional[str]:
    """Return the catalog's name for the command typed as *typed*.

    An exact match wins; otherwise the first command equal to it ignoring
    case.
    """
    if typed in catalog.commands:
        return typed
    folded = typed.casefold()
    for name in catalog.commands:
        if name.casefold() == folded:
            return name
    return None


def parse_arguments(
    tokens: list[str], schema: FlagSchema
) -> tuple[list[str], dict[str, FlagValue]]:
    """Separate *tokens* into positionals and canonical flag assignments.

    Args:
        tokens: Tokens following the command name.
        schema: Flag schema of the command.

    Returns:
        ``(positionals, flags)`` where *flags* maps canonical names to
        values in order of first appearance; repeated flags keep the last
        value.
    """
    positionals: list[str] = []
    flags: dict[str, FlagValue] = {}
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            positionals.extend(tokens[index:])
            break
        if token.startswith("--"):
            index = _parse_long(token[2:], tokens, index, schema, flags)
        elif token.startswith("-") and token != "-":
            index = _parse_short(token[1:], tokens, index, schema, flags)
        else:
            positionals.append(token)

    return positionals, flags


def _parse_long(
    body: str,
    tokens: list[str],
    index: int,
    schema: FlagSchema,
    flags: dict[str, FlagValue],
) -> int:
    """Record one ``--name[=value]`` flag; return the next unread index."""
    name, sep, attached = body.partition("=")
    if not name:
        return index

    canonical = schema.canonical(name)
    if schema.takes_value(canonical):
        if sep:
            flags[canonical] = attached
            return index
        value, index = _take_value(tokens, index)
        flags[canonical] = value
    elif canonical in schema.boolean_flags:
        flags[canonical] = _parse_bool(attached) if sep else True
    elif name.startswith("no-") and schema.canonical(name[3:]) in schema.boolean_flags:
        flags[schema.canonical(name[3:])] = False
    else:
        flags[name] = attached if sep else True
    return index


def _parse_short(
    body: str,
    tokens: list[str],
    index: int,
    schema: FlagSchema,
    flags: dict[str, FlagValue],
) -> int:
    """Record a short flag cluster such as ``-av`` or ``-mMessage``."""
    for position, char in enumerate(body):
        canonical = schema.canonical(char)
        rest = body[position + 1:]

        if schema.takes_value(canonical):
            if rest.startswith("="):
                flags[canonical] = rest[1:]
            elif rest:
                flags[canonical] = rest
            else:
                flags[canonical], index = _take_value(tokens, index)
            return index

        if rest.startswith("="):
            if canonical in schema.boolean_flags:
                flags[canonical] = _parse_bool(rest[1:])
            else:
                flags[canonical] = rest[1:]
            return index

        flags[canonical] = True
    return index


def _take_value(tokens: list[str], index: int) -> tuple[str, int]:
    """Consume the value of a string flag at *index*.

    A following token that looks like a flag is left alone and the value
    defaults to the empty string.
    """
    if index < len(tokens):
        candidate = tokens[index]
        if not (candidate.startswith("-") and len(candidate) > 1):
            return candidate, index + 1
    return "", index


def _parse_bool(text: str) -> bool:
    return text.strip().lower() not in _FALSE_WORDS
