"""Synchronous client for the command-registration API.

:class:`RegistrationClient` wraps :class:`httpx.Client` and layers on:

- **Scope selection** -- guild commands when the profile names a guild,
  global application commands otherwise.
- **Bot authentication** -- ``Authorization: Bot <token>`` on every request.
- **Dry-run mode** -- prints the request to stderr and returns without
  sending traffic.
- **Retry with backoff** -- retries on 5xx and network errors with
  exponential delay (1 s, 2 s, 4 s, ...), and on 429 after the delay the
  platform asks for.
- **Error mapping** -- HTTP failures become :mod:`corde.exceptions` types.

Request bodies are produced by :mod:`corde.builder.encoder`, never by
serialising models directly, so the per-field omission rules always hold.
"""

from __future__ import annotations

import json
import time
from typing import Any, Optional, Sequence

import httpx

from corde import __version__
from corde.builder.command import CommandLike
from corde.builder.encoder import encode, encode_commands
from corde.exceptions import (
    AuthError,
    ConnectionError_,
    InvalidUsageError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from corde.models import Profile, RegisteredCommand
from corde.output import get_output


class RegistrationClient:
    """Client for registering, listing and deleting application commands.

    Must be used as a context manager so that the underlying transport is
    opened and closed.

    Args:
        profile: The application profile (ids, API base URL, request
            settings).
        token: The bot token.
        dry_run: When ``True``, requests are printed to stderr and nothing
            is sent.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.

    Example::

        with RegistrationClient(profile, token) as client:
            registered = client.bulk_overwrite([ping, coffee])
    """

    def __init__(
        self,
        profile: Profile,
        token: str,
        dry_run: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._profile = profile
        self._token = token
        self._dry_run = dry_run
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RegistrationClient:
        self._client = httpx.Client(
            base_url=self._profile.api_base_url,
            timeout=self._profile.request.timeout,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Command operations
    # ------------------------------------------------------------------ #

    @property
    def commands_path(self) -> str:
        """Path of the command collection for the profile's scope."""
        path = f"/applications/{self._profile.application_id}"
        if self._profile.guild_id:
            path += f"/guilds/{self._profile.guild_id}"
        return path + "/commands"

    def list_commands(self) -> list[RegisteredCommand]:
        """Return the commands currently registered in this scope."""
        response = self.request("GET", self.commands_path)
        if response is None:
            return []
        return [RegisteredCommand.model_validate(item) for item in response.json()]

    def bulk_overwrite(self, commands: Sequence[CommandLike]) -> list[RegisteredCommand]:
        """Replace every command in this scope with *commands*.

        Commands missing from *commands* are deleted by the platform.
        Returns an empty list in dry-run mode.
        """
        response = self.request("PUT", self.commands_path, content=encode_commands(commands))
        if response is None:
            return []
        return [RegisteredCommand.model_validate(item) for item in response.json()]

    def create_command(self, command: CommandLike) -> Optional[RegisteredCommand]:
        """Create (or update by name) a single command.

        Returns ``None`` in dry-run mode.
        """
        response = self.request("POST", self.commands_path, content=encode(command))
        if response is None:
            return None
        return RegisteredCommand.model_validate(response.json())

    def delete_command(self, command_id: str) -> None:
        """Delete the command with id *command_id* from this scope."""
        self.request("DELETE", f"{self.commands_path}/{command_id}")

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        content: Optional[bytes] = None,
    ) -> Optional[httpx.Response]:
        """Send a request with auth, retry and error mapping.

        Returns:
            The :class:`httpx.Response`, or ``None`` in dry-run mode.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            RateLimitError: On 429 after all retries.
            InvalidUsageError: On any other 4xx (the document was rejected).
            ServerError: On 5xx after all retries.
            ConnectionError_: On network / timeout errors after all retries.
        """
        headers = {
            "Authorization": f"Bot {self._token}",
            "User-Agent": f"corde/{__version__}",
        }
        if content is not None:
            headers["Content-Type"] = "application/json"

        if self._dry_run:
            self._print_dry_run(method, path, content)
            return None

        response = self._execute_with_retry(method, path, headers, content)
        self._map_response_error(response)
        return response

    def _execute_with_retry(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        content: Optional[bytes],
    ) -> httpx.Response:
        """Execute the request, retrying on 429, 5xx and network errors."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        max_retries = self._profile.request.max_retries
        output = get_output()

        for attempt in range(max_retries + 1):
            try:
                response = self._client.request(method, path, headers=headers, content=content)
            except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    output.debug(
                        f"Connection error: {exc}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if attempt < max_retries:
                if response.status_code == 429:
                    delay = _retry_after(response, default=2 ** attempt)
                    output.debug(
                        f"Rate limited, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
                    continue
                if response.status_code >= 500:
                    delay = 2 ** attempt
                    output.debug(
                        f"Server error {response.status_code}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
                    continue

            return response

        raise ServerError("Request failed after all retries")  # pragma: no cover

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        full_msg = f"HTTP {status}"
        detail = _error_detail(response)
        if detail:
            full_msg = f"{full_msg}: {detail}"

        if status in (401, 403):
            raise AuthError(full_msg)
        if status == 404:
            raise NotFoundError(full_msg)
        if status == 429:
            raise RateLimitError(full_msg)
        if status >= 500:
            raise ServerError(full_msg)
        raise InvalidUsageError(full_msg)

    def _print_dry_run(self, method: str, path: str, content: Optional[bytes]) -> None:
        output = get_output()
        output.info(f"[dry-run] {method} {self._profile.api_base_url}{path}")
        if content is not None:
            output.info(f"  Body: {content.decode('utf-8')}")


def _retry_after(response: httpx.Response, default: float) -> float:
    """Seconds to wait before retrying a 429, from the body or ``Retry-After``."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("retry_after"), (int, float)):
        return float(body["retry_after"])
    header = response.headers.get("Retry-After")
    if header:
        try:
            return float(header)
        except ValueError:
            pass
    return default


def _error_detail(response: httpx.Response) -> str:
    """Extract a readable message (and field errors) from an error body."""
    try:
        body: Any = response.json()
    except ValueError:
        return response.text[:200] if response.text else ""
    if not isinstance(body, dict):
        return str(body)
    message = str(body.get("message") or "")
    errors = body.get("errors")
    if errors:
        message = f"{message} {json.dumps(errors, separators=(',', ':'))}".strip()
    return message
