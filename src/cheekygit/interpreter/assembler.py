"""Compose the final :class:`~cheekygit.models.ResolvedExplanation`."""

from __future__ import annotations

from typing import Sequence

from cheekygit.models import FlagExplanation, ResolvedExplanation


def assemble_explanation(
    name: str,
    description: str,
    flags: Sequence[FlagExplanation],
) -> ResolvedExplanation:
    """Bundle an already substituted command description with its flags.

    Pure composition: no I/O and no failure modes of its own.
    """
    return ResolvedExplanation(name=name, description=description, flags=tuple(flags))
