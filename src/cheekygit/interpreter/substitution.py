"""Fill description templates with the arguments of an invocation.

Three independent transforms, applied in this order by the pipeline:

1. :func:`replace_special_tokens` -- turn symbolic positionals such as ``.``
   into prose ("all files in the current directory").
2. :func:`join_with_final_and` -- render the positionals as a
   natural-language list ("a, b and c").
3. :func:`substitute_marker` -- put the rendered text in place of the ``%s``
   marker of a description template.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from cheekygit.models import MARKER, MatchedFlag


def replace_special_tokens(
    positionals: Sequence[str], special_tokens: Mapping[str, str]
) -> list[str]:
    """Replace every positional that exactly matches a special token.

    Only whole tokens are replaced: ``./src`` is left untouched even though
    ``.`` is a special token.
    """
    return [special_tokens.get(item, item) for item in positionals]


def join_with_final_and(items: Sequence[str]) -> str:
    """Join *items* with commas and a final "and".

    Example::

        >>> join_with_final_and([])
        ''
        >>> join_with_final_and(["a", "b"])
        'a and b'
        >>> join_with_final_and(["a", "b", "c"])
        'a, b and c'
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} and {items[-1]}"


def substitute_marker(template: str, value: str) -> str:
    """Replace the first ``%s`` marker of *template* with *value*.

    Templates without a marker are returned unchanged.
    """
    return template.replace(MARKER, value, 1)


def describe_flag(flag: MatchedFlag, arguments: str) -> str:
    """Render the description of a supplied flag.

    String flags fill their marker with their own value; boolean flags
    share the command's positional context and receive *arguments*, the
    joined positionals.
    """
    if flag.definition.is_string and isinstance(flag.value, str):
        return substitute_marker(flag.definition.description, flag.value)
    return substitute_marker(flag.definition.description, arguments)
