"""Init command -- create a profile for an application.

Implements ``corde init``: records the application id, optional guild,
and bot token source in a :class:`~corde.models.Profile`, and writes a
project-local ``corde.json`` pinning it as the default profile.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from corde.output import info, success, suggest


def init_command(
    application_id: str = typer.Option(
        ..., "--application-id", "-a", help="Application (client) id."
    ),
    name: str = typer.Option(
        "default", "--name", help="Profile name."
    ),
    guild_id: Optional[str] = typer.Option(
        None, "--guild-id", "-g", help="Register guild commands for this guild."
    ),
    token_source: str = typer.Option(
        "env:CORDE_BOT_TOKEN",
        "--token-source",
        help="Bot token source: env:VAR, file:/path, or prompt.",
    ),
) -> None:
    """Create a profile for an application.

    Example::

        corde init --application-id 1234567890
        corde init -a 1234567890 --guild-id 42 --token-source file:~/.bot-token
    """
    from corde.config import profile_exists, save_profile
    from corde.models import Profile

    if profile_exists(name):
        info(f'Profile "{name}" already exists and will be overwritten.')

    profile = Profile(
        name=name,
        application_id=application_id,
        guild_id=guild_id,
        token_source=token_source,
    )
    save_profile(profile)

    Path("corde.json").write_text(json.dumps({"default_profile": name}, indent=2) + "\n")

    scope = f"guild {guild_id}" if guild_id else "global commands"
    success(f'Profile "{name}" created ({scope}).')
    suggest("Preview a payload: corde show mybot.commands:COMMANDS")
