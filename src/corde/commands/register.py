"""Registration commands -- submit, list and delete application commands.

* ``corde register TARGET`` -- bulk-overwrite the scope's commands with
  the ones loaded from *TARGET*.
* ``corde commands create TARGET`` -- create or update the commands in
  *TARGET* one by one, leaving the rest of the scope alone.
* ``corde commands list`` -- show what is currently registered.
* ``corde commands delete ID`` -- remove one command.

All of them resolve the active profile (see
:func:`~corde.config.resolve_config`) and its bot token, and honour the
global ``--dry-run`` flag.
"""

from __future__ import annotations

from typing import Optional

import typer

from corde.client import RegistrationClient
from corde.exceptions import InvalidUsageError
from corde.output import get_output, info, success, warning


commands_app = typer.Typer(no_args_is_help=True)


def _open_client(
    ctx: typer.Context,
    guild_id: Optional[str] = None,
) -> RegistrationClient:
    """Build a :class:`RegistrationClient` for the active profile.

    Raises:
        InvalidUsageError: If no profile can be resolved.
        ConfigError: If the token source cannot be resolved.
    """
    from corde.config import resolve_config, resolve_credential

    obj = ctx.obj or {}
    _, profile = resolve_config(cli_profile=obj.get("profile"), cli_guild_id=guild_id)
    if profile is None:
        raise InvalidUsageError(
            "No active profile. Run: corde init --application-id <id>"
        )

    dry_run = obj.get("dry_run", False)
    token = "" if dry_run else resolve_credential(profile.token_source)
    scope = f"guild {profile.guild_id}" if profile.guild_id else "global"
    info(f"Using profile '{profile.name}' ({scope} commands)")
    return RegistrationClient(profile, token, dry_run=dry_run)


def register_command(
    ctx: typer.Context,
    target: str = typer.Argument(
        help="module:ATTRIBUTE, file.py:ATTRIBUTE, or a .json/.yaml document."
    ),
    guild_id: Optional[str] = typer.Option(
        None, "--guild-id", "-g", help="Override the profile's guild."
    ),
) -> None:
    """Replace the registered commands with the ones in TARGET.

    Commands registered earlier but absent from TARGET are removed by the
    platform.

    Example::

        corde register mybot.commands:COMMANDS
        corde register commands.yaml --guild-id 42 --dry-run
    """
    from corde.loader import load_commands

    commands = load_commands(target)
    if not commands:
        warning(f"{target} defines no commands; every command in this scope will be removed.")
    with _open_client(ctx, guild_id) as client:
        registered = client.bulk_overwrite(commands)

    if (ctx.obj or {}).get("dry_run", False):
        info(f"[dry-run] {len(commands)} command(s) not registered.")
        return
    success(f"Registered {len(registered)} command(s).")
    get_output().print_commands(registered)


@commands_app.command("list")
def list_command(
    ctx: typer.Context,
    guild_id: Optional[str] = typer.Option(
        None, "--guild-id", "-g", help="Override the profile's guild."
    ),
) -> None:
    """List the commands currently registered."""
    with _open_client(ctx, guild_id) as client:
        registered = client.list_commands()
    get_output().print_commands(registered)


@commands_app.command("delete")
def delete_command(
    ctx: typer.Context,
    command_id: str = typer.Argument(help="Id of the command to delete."),
    guild_id: Optional[str] = typer.Option(
        None, "--guild-id", "-g", help="Override the profile's guild."
    ),
) -> None:
    """Delete one registered command by id."""
    force = (ctx.obj or {}).get("force", False)
    if not force and not typer.confirm(f"Delete command {command_id}?"):
        info("Cancelled.")
        raise typer.Exit()

    with _open_client(ctx, guild_id) as client:
        client.delete_command(command_id)
    success(f"Deleted command {command_id}.")


@commands_app.command("create")
def create_command(
    ctx: typer.Context,
    target: str = typer.Argument(
        help="module:ATTRIBUTE, file.py:ATTRIBUTE, or a .json/.yaml document."
    ),
    guild_id: Optional[str] = typer.Option(
        None, "--guild-id", "-g", help="Override the profile's guild."
    ),
) -> None:
    """Create or update the commands in TARGET without touching the others.

    A command whose name is already registered is updated in place.

    Example::

        corde commands create mybot.commands:PING
    """
    from corde.loader import load_commands

    commands = load_commands(target)
    created = []
    with _open_client(ctx, guild_id) as client:
        for command in commands:
            result = client.create_command(command)
            if result is not None:
                created.append(result)

    if (ctx.obj or {}).get("dry_run", False):
        info(f"[dry-run] {len(commands)} command(s) not created.")
        return
    success(f"Created or updated {len(created)} command(s).")
    get_output().print_commands(created)
