"""Show command -- render the registration payload for a target.

``corde show TARGET`` loads the commands named by *TARGET* (see
:mod:`corde.loader`) and prints the exact JSON array a bulk registration
would submit. Nothing is sent.
"""

from __future__ import annotations

import typer

from corde.output import debug, get_output


def show_command(
    target: str = typer.Argument(
        help="module:ATTRIBUTE, file.py:ATTRIBUTE, or a .json/.yaml document."
    ),
) -> None:
    """Print the encoded payload for the commands in TARGET.

    In JSON and plain modes the compact document is printed byte for byte;
    on a terminal it is pretty-printed.

    Example::

        corde show mybot.commands:COMMANDS
        corde show commands.yaml --json > payload.json
    """
    from corde.builder import encode_commands
    from corde.loader import load_commands

    commands = load_commands(target)
    debug(f"Encoding {len(commands)} command(s)")
    get_output().print_payload(encode_commands(commands))
