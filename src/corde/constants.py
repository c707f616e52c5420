"""Integer type codes fixed by the command-registration API.

The values are part of the platform's wire contract and must match it
exactly; they are not chosen by corde.
"""

from __future__ import annotations

import enum


class CommandType(int, enum.Enum):
    """Kind of an application command (the command-level ``type`` field)."""

    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class OptionType(int, enum.Enum):
    """Kind of a command option (the option-level ``type`` field).

    ``SUB_COMMAND`` and ``SUB_COMMAND_GROUP`` mark composite nodes; every
    other member marks a leaf carrying a single value.
    """

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11
