"""HTTP client for the command-registration API.

:class:`RegistrationClient` wraps :mod:`httpx` with bot authentication,
guild/global scope selection, retry with backoff, dry-run mode and
error mapping onto :mod:`corde.exceptions`.

Example::

    from corde.client import RegistrationClient

    with RegistrationClient(profile, token) as client:
        client.bulk_overwrite(commands)
"""

from corde.client.sync_client import RegistrationClient

__all__ = ["RegistrationClient"]
