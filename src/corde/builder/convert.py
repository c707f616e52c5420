"""Conversion of builder values to the canonical wire tree.

Option-like values (:data:`~corde.builder.options.OptionLike`) convert to
:class:`~corde.models.CanonicalOption`; command-like values
(:data:`~corde.builder.command.CommandLike`) convert to
:class:`~corde.models.CanonicalCommand`. Each function is a single
dispatch over the closed variant set, so a new variant without a branch
fails loudly instead of producing a partial tree.

Conversion is a pure function of the source value: calling it twice on
the same value yields equal trees, and the source is never modified.
Canonical values convert to themselves.
"""

from __future__ import annotations

from typing import Any

from corde.builder.command import CommandLike, SlashCommand
from corde.builder.options import (
    CommandOption,
    OptionLike,
    Subcommand,
    SubcommandGroup,
    option_type_for,
)
from corde.constants import OptionType
from corde.exceptions import DefinitionError
from corde.models import CanonicalCommand, CanonicalOption, ChoiceValue


def to_canonical_option(value: OptionLike) -> CanonicalOption:
    """Convert an option-like value to a :class:`~corde.models.CanonicalOption`.

    * Leaf options get the type code of their value kind and have their
      choices erased to :class:`~corde.models.ChoiceValue`.
    * Subcommands and groups get ``SUB_COMMAND`` / ``SUB_COMMAND_GROUP``
      and their children converted recursively, in order. They never
      carry choices.
    * Canonical options are returned unchanged.

    Raises:
        UnsupportedOptionTypeError: If a leaf's value kind has no type code.
        DefinitionError: If *value* is not option-like.
    """
    match value:
        case CanonicalOption():
            return value
        case CommandOption():
            return CanonicalOption(
                name=value.name,
                type=option_type_for(value.kind),
                description=value.description,
                required=value.required,
                choices=tuple(
                    ChoiceValue(name=choice.name, value=choice.value)
                    for choice in value.choices
                ),
            )
        case Subcommand():
            return _composite(value, OptionType.SUB_COMMAND)
        case SubcommandGroup():
            return _composite(value, OptionType.SUB_COMMAND_GROUP)
        case _:
            raise DefinitionError(f"{type(value).__name__} is not an option")


def _composite(value: Subcommand | SubcommandGroup, type_: OptionType) -> CanonicalOption:
    return CanonicalOption(
        name=value.name,
        type=type_,
        description=value.description,
        options=tuple(to_canonical_option(child) for child in value.options),
    )


def to_canonical_command(value: CommandLike) -> CanonicalCommand:
    """Convert a command-like value to a :class:`~corde.models.CanonicalCommand`.

    Raises:
        DefinitionError: If *value* is not command-like.
    """
    match value:
        case CanonicalCommand():
            return value
        case SlashCommand():
            return CanonicalCommand(
                name=value.name,
                description=value.description,
                type=value.type,
                options=tuple(to_canonical_option(child) for child in value.options),
            )
        case _:
            raise DefinitionError(f"{type(value).__name__} is not a command")


def is_command_like(value: Any) -> bool:
    """Return True if *value* can be converted with :func:`to_canonical_command`."""
    return isinstance(value, (SlashCommand, CanonicalCommand))
