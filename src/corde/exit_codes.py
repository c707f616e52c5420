"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~corde.exceptions.CordeError` subclass.
External tooling (CI scripts, deploy hooks) can inspect the exit code to
determine the failure class without parsing stderr.

Example::

    $ corde register bot.commands:ALL
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the bot token was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid arguments, or the platform rejected the submitted document (HTTP 4xx)."""

EXIT_AUTH_FAILURE = 3
"""The bot token was missing or rejected."""

EXIT_NOT_FOUND = 4
"""The application, guild, or command was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The platform returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DEFINITION_ERROR = 7
"""A command definition could not be loaded or built."""

EXIT_RATE_LIMITED = 8
"""The platform kept rate-limiting the request after all retries."""
