"""Command builder -- typed declarations, canonical conversion and encoding.

This sub-package is the core of corde: a developer declares a command
tree with typed builders, the tree converts to the canonical wire shape,
and the encoder produces the JSON document the registration API accepts.

Typical usage::

    from corde.builder import (
        Choice, encode_commands, slash_command, string_option, subcommand,
    )

    coffee = slash_command(
        "coffee", "Coffee orders",
        subcommand(
            "order", "Order a coffee",
            string_option("size", "Cup size", True,
                          Choice("Small", "s"), Choice("Large", "l")),
        ),
    )
    payload = encode_commands([coffee])

Sub-modules:

* :mod:`~corde.builder.options` -- leaf and composite option builders.
* :mod:`~corde.builder.command` -- the top-level command builder.
* :mod:`~corde.builder.convert` -- conversion to canonical models.
* :mod:`~corde.builder.encoder` -- wire encoding with omission rules.
"""

from corde.builder.command import CommandLike, SlashCommand, slash_command
from corde.builder.convert import to_canonical_command, to_canonical_option
from corde.builder.encoder import (
    command_to_wire,
    encode,
    encode_commands,
    option_to_wire,
)
from corde.builder.options import (
    OPTION_KINDS,
    Choice,
    CommandOption,
    OptionLike,
    Subcommand,
    SubcommandGroup,
    boolean_option,
    command_option,
    integer_option,
    number_option,
    option_type_for,
    string_option,
    subcommand,
    subcommand_group,
)

__all__ = [
    "OPTION_KINDS",
    "Choice",
    "CommandLike",
    "CommandOption",
    "OptionLike",
    "SlashCommand",
    "Subcommand",
    "SubcommandGroup",
    "boolean_option",
    "command_option",
    "command_to_wire",
    "encode",
    "encode_commands",
    "integer_option",
    "number_option",
    "option_to_wire",
    "option_type_for",
    "slash_command",
    "string_option",
    "subcommand",
    "subcommand_group",
    "to_canonical_command",
    "to_canonical_option",
]
