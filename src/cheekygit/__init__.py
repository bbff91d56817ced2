"""cheekygit -- explain git command lines in plain English.

This package takes a free-text invocation such as
``git commit -m "Add example command"`` and resolves it against a static
catalog of known commands and flags, producing a human-readable explanation
of what the command and each supplied flag do.

Typical usage::

    cheekygit explain 'git add -v .'
    cheekygit commands
    cheekygit flags push

From Python::

    from cheekygit.catalog import default_catalog
    from cheekygit.interpreter import resolve

    explanation = resolve("git add .", default_catalog())

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    catalog: Command catalog loading, validation, and the offline builder.
    interpreter: Tokenizer, flag matcher, substitution, and assembler.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
