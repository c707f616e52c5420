"""Option builders -- typed leaf options and composite subcommand nodes.

A *leaf* option (:class:`CommandOption`) carries a single value of one
scalar kind. The kind is a type parameter restricted to the closed set in
:data:`OPTION_KINDS`, so a static type checker rejects anything else, and
construction fails fast at runtime with
:class:`~corde.exceptions.UnsupportedOptionTypeError` for callers that
bypass the checker.

*Composite* options (:class:`Subcommand` and :class:`SubcommandGroup`)
hold an ordered sequence of option-like children.

All builder values are frozen dataclasses; converting them with
:mod:`corde.builder.convert` never mutates them.

Example::

    from corde.builder import Choice, command_option, subcommand

    size = command_option(
        str, "size", "Cup size", True,
        Choice("Small", "s"), Choice("Large", "l"),
    )
    order = subcommand("order", "Order a coffee", size)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from corde.constants import OptionType
from corde.exceptions import DefinitionError, UnsupportedOptionTypeError
from corde.models import CanonicalOption

T = TypeVar("T", str, int, bool, float)

# Exact-type table: ``bool`` is a subclass of ``int`` but has its own code.
OPTION_KINDS: dict[type, OptionType] = {
    str: OptionType.STRING,
    int: OptionType.INTEGER,
    bool: OptionType.BOOLEAN,
    float: OptionType.NUMBER,
}


def option_type_for(kind: Any) -> OptionType:
    """Return the leaf option type code for a scalar *kind*.

    Args:
        kind: One of ``str``, ``int``, ``bool`` or ``float``.

    Returns:
        The matching :class:`~corde.constants.OptionType`.

    Raises:
        UnsupportedOptionTypeError: If *kind* is not in :data:`OPTION_KINDS`.
            No default code is ever substituted.
    """
    try:
        return OPTION_KINDS[kind]
    except (KeyError, TypeError):
        raise UnsupportedOptionTypeError(kind) from None


def _accepts(kind: type, value: Any) -> bool:
    """Return True if *value* is a valid choice value for a leaf of *kind*."""
    if kind is float:
        return type(value) in (float, int)
    return type(value) is kind


@dataclass(frozen=True)
class Choice(Generic[T]):
    """A predefined value a user can pick for a leaf option."""

    name: str
    value: T


@dataclass(frozen=True)
class CommandOption(Generic[T]):
    """A leaf option over the scalar kind ``T``.

    Prefer :func:`command_option` or one of the kind-specific shorthands
    over calling the class directly.
    """

    kind: type[T]
    name: str
    description: str = ""
    required: bool = False
    choices: tuple[Choice[T], ...] = ()

    def __post_init__(self) -> None:
        option_type_for(self.kind)
        object.__setattr__(self, "choices", tuple(self.choices))
        for choice in self.choices:
            if not isinstance(choice, Choice):
                raise DefinitionError(
                    f"option '{self.name}': choices must be Choice values, "
                    f"got {type(choice).__name__}"
                )
            if not _accepts(self.kind, choice.value):
                raise DefinitionError(
                    f"option '{self.name}': choice '{choice.name}' has a "
                    f"{type(choice.value).__name__} value, expected {self.kind.__name__}"
                )
            if isinstance(choice.value, float) and not math.isfinite(choice.value):
                raise DefinitionError(
                    f"option '{self.name}': choice '{choice.name}' is not a finite number"
                )


def check_option_children(owner: str, options: tuple[Any, ...]) -> None:
    for child in options:
        if not isinstance(child, OPTION_VARIANTS):
            raise DefinitionError(
                f"'{owner}': {type(child).__name__} is not an option "
                "(expected a leaf option, subcommand or subcommand group)"
            )


@dataclass(frozen=True)
class Subcommand:
    """A named subcommand holding its own ordered options."""

    name: str
    description: str = ""
    options: tuple[OptionLike, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        check_option_children(self.name, self.options)


@dataclass(frozen=True)
class SubcommandGroup:
    """A named group of subcommands."""

    name: str
    description: str = ""
    options: tuple[OptionLike, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        check_option_children(self.name, self.options)


OptionLike = Union[CommandOption[Any], Subcommand, SubcommandGroup, CanonicalOption]
"""Every value that converts to a :class:`~corde.models.CanonicalOption`."""

OPTION_VARIANTS = (CommandOption, Subcommand, SubcommandGroup, CanonicalOption)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def command_option(
    kind: type[T],
    name: str,
    description: str,
    required: bool = False,
    *choices: Choice[T],
) -> CommandOption[T]:
    """Build a leaf option whose value kind is *kind*.

    Args:
        kind: The scalar value kind: ``str``, ``int``, ``bool`` or ``float``.
        name: Option name as typed by users.
        description: Help text shown by the client.
        required: Whether users must supply the option.
        *choices: Optional predefined values, in presentation order.

    Returns:
        An immutable :class:`CommandOption`.

    Raises:
        UnsupportedOptionTypeError: If *kind* has no option type code.
        DefinitionError: If a choice value does not match *kind*.

    Example::

        >>> command_option(str, "q", "query")
        CommandOption(kind=<class 'str'>, name='q', description='query', required=False, choices=())
    """
    return CommandOption(kind, name, description, required, tuple(choices))


def string_option(
    name: str, description: str, required: bool = False, *choices: Choice[str]
) -> CommandOption[str]:
    """Shorthand for ``command_option(str, ...)``."""
    return command_option(str, name, description, required, *choices)


def integer_option(
    name: str, description: str, required: bool = False, *choices: Choice[int]
) -> CommandOption[int]:
    """Shorthand for ``command_option(int, ...)``."""
    return command_option(int, name, description, required, *choices)


def boolean_option(
    name: str, description: str, required: bool = False
) -> CommandOption[bool]:
    """Shorthand for ``command_option(bool, ...)``."""
    return command_option(bool, name, description, required)


def number_option(
    name: str, description: str, required: bool = False, *choices: Choice[float]
) -> CommandOption[float]:
    """Shorthand for ``command_option(float, ...)``."""
    return command_option(float, name, description, required, *choices)


def subcommand(name: str, description: str, *options: OptionLike) -> Subcommand:
    """Build a subcommand with *options* as its ordered children."""
    return Subcommand(name, description, options)


def subcommand_group(
    name: str, description: str, *options: OptionLike
) -> SubcommandGroup:
    """Build a subcommand group with *options* as its ordered children.

    The platform only accepts subcommands inside a group; that rule is
    enforced server-side, not here.
    """
    return SubcommandGroup(name, description, options)
