"""Top-level command builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from corde.builder.options import OptionLike, check_option_children
from corde.constants import CommandType
from corde.models import CanonicalCommand


@dataclass(frozen=True)
class SlashCommand:
    """A top-level command with its ordered options.

    ``type`` defaults to a chat-input (slash) command.
    """

    name: str
    description: str = ""
    options: tuple[OptionLike, ...] = field(default=())
    type: CommandType = CommandType.CHAT_INPUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        check_option_children(self.name, self.options)


CommandLike = Union[SlashCommand, CanonicalCommand]
"""Every value that converts to a :class:`~corde.models.CanonicalCommand`."""

COMMAND_VARIANTS = (SlashCommand, CanonicalCommand)


def slash_command(name: str, description: str, *options: OptionLike) -> SlashCommand:
    """Build a chat-input command with *options* as its ordered children.

    Example::

        ping = slash_command("ping", "Check the bot is alive")
        coffee = slash_command(
            "coffee", "Coffee orders",
            subcommand("order", "Order one", string_option("size", "Cup size", True)),
        )
    """
    return SlashCommand(name, description, options)
