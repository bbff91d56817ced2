"""Exception hierarchy for cheekygit.

All exceptions inherit from :class:`CheekyGitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`cheekygit.exit_codes`.
The top-level error handler in :func:`cheekygit.app.main` catches
``CheekyGitError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    CheekyGitError (exit 1)
    +-- InvalidUsageError         (exit 2)
    +-- NotFoundError             (exit 4)
    |   +-- ResolutionError
    |       +-- InvalidPrefixError
    |       +-- UnknownCommandError
    +-- CatalogParseError         (exit 7)
    +-- CatalogConfigError        (exit 7)
    +-- ConfigError               (exit 1)

The two :class:`ResolutionError` subclasses are expected outcomes: the
public :func:`~cheekygit.interpreter.resolve` collapses both into ``None``.
"""

from cheekygit.exit_codes import (
    EXIT_CATALOG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class CheekyGitError(Exception):
    """Base exception for all cheekygit errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`cheekygit.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CheekyGitError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(CheekyGitError):
    """Raised when something looked up by name does not exist."""

    exit_code = EXIT_NOT_FOUND


class ResolutionError(NotFoundError):
    """Raised when an invocation cannot be resolved against the catalog.

    Args:
        message: Human-readable error description.
        invocation: The raw invocation string that failed to resolve.
    """

    def __init__(self, message: str, invocation: str = ""):
        super().__init__(message)
        self.invocation = invocation


class InvalidPrefixError(ResolutionError):
    """Raised when the invocation does not start with the tool prefix (``git``)."""


class UnknownCommandError(ResolutionError):
    """Raised when the second token is not a command known to the catalog."""


class CatalogParseError(CheekyGitError):
    """Raised when a catalog or documentation file cannot be read or parsed."""

    exit_code = EXIT_CATALOG_ERROR


class CatalogConfigError(CheekyGitError):
    """Raised when a catalog violates its invariants (duplicate names, alias collisions)."""

    exit_code = EXIT_CATALOG_ERROR


class ConfigError(CheekyGitError):
    """Raised for configuration problems (invalid JSON, bad catalog path)."""

    exit_code = EXIT_GENERIC_FAILURE
