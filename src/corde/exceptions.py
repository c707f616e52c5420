"""Exception hierarchy for corde.

All exceptions inherit from :class:`CordeError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`corde.exit_codes`.
The top-level error handler in :func:`corde.app.main` catches
``CordeError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    CordeError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- AuthError                      (exit 3)
    +-- NotFoundError                  (exit 4)
    +-- ServerError                    (exit 5)
    +-- ConnectionError_               (exit 6)
    +-- DefinitionError                (exit 7)
    |   +-- UnsupportedOptionTypeError (exit 7)
    +-- RateLimitError                 (exit 8)
    +-- ConfigError                    (exit 1)
"""

from corde.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_DEFINITION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_SERVER_ERROR,
)


class CordeError(Exception):
    """Base exception for all corde errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`corde.exit_codes`. The entry point catches
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


class InvalidUsageError(CordeError):
    """Raised for invalid CLI arguments or a document the platform refused (HTTP 400)."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(CordeError):
    """Raised when the platform rejects the bot token (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(CordeError):
    """Raised when the platform returns HTTP 404 (unknown application, guild or command)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(CordeError):
    """Raised when the platform returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(CordeError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class DefinitionError(CordeError):
    """Raised when a command definition is malformed or cannot be loaded."""

    exit_code = EXIT_DEFINITION_ERROR


class UnsupportedOptionTypeError(DefinitionError):
    """Raised when a leaf option is declared over a value kind with no option type code.

    Args:
        kind: The offending value kind (normally a Python type).
    """

    def __init__(self, kind: object):
        name = getattr(kind, "__name__", repr(kind))
        super().__init__(f"unsupported option type: {name}")
        self.kind = kind


class RateLimitError(CordeError):
    """Raised when the platform keeps answering HTTP 429 after all retries."""

    exit_code = EXIT_RATE_LIMITED


class ConfigError(CordeError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
