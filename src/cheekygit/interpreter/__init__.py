"""Interpreter -- turn a raw invocation into a :class:`~cheekygit.models.ResolvedExplanation`.

Typical usage::

    from cheekygit.catalog import default_catalog
    from cheekygit.interpreter import resolve

    explanation = resolve('git commit -m "Add example command"', default_catalog())
    if explanation is None:
        print("not a valid git command")

Sub-modules, in pipeline order:

* :mod:`~cheekygit.interpreter.tokenizer` -- shell-style splitting and flag
  parsing against the command's flag schema.
* :mod:`~cheekygit.interpreter.matcher` -- keep the catalog flags that were
  supplied, in declaration order.
* :mod:`~cheekygit.interpreter.substitution` -- special tokens, list joining,
  and ``%s`` marker substitution.
* :mod:`~cheekygit.interpreter.assembler` -- build the explanation object.
* :mod:`~cheekygit.interpreter.pipeline` -- wire the stages together.
"""

from cheekygit.interpreter.pipeline import explain_invocation, resolve

__all__ = ["explain_invocation", "resolve"]
