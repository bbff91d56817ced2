"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~cheekygit.exceptions.CheekyGitError` subclass.
Shell scripts can inspect the exit code to tell an unrecognised invocation
apart from a broken catalog without parsing stderr.

Example::

    $ cheekygit explain 'git frobnicate'
    $ echo $?
    4   # EXIT_NOT_FOUND -- not a command the catalog knows about
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The invocation is not a recognised command of the catalog."""

EXIT_CATALOG_ERROR = 7
"""The command catalog could not be read, parsed, or validated."""
