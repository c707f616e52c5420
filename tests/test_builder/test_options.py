"""Tests for corde.builder.options and corde.builder.command.

Covers:
- option_type_for: exact mapping for every supported kind, rejection otherwise
- command_option construction, shorthands, choice validation
- Non-finite number choices are rejected before they reach the encoder
- Builder values are immutable and keep child order
- Composite builders reject children outside the option variants
- slash_command defaults to a chat-input command
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest
from pydantic import ValidationError

from corde.builder import (
    OPTION_KINDS,
    Choice,
    CommandOption,
    SlashCommand,
    Subcommand,
    SubcommandGroup,
    boolean_option,
    command_option,
    integer_option,
    number_option,
    option_type_for,
    slash_command,
    string_option,
    subcommand,
    subcommand_group,
)
from corde.constants import CommandType, OptionType
from corde.exceptions import DefinitionError, UnsupportedOptionTypeError
from corde.models import CanonicalOption, ChoiceValue


# ------------------------------------------------------------------ #
# option_type_for
# ------------------------------------------------------------------ #


class TestOptionTypeFor:
    def test_string(self) -> None:
        assert option_type_for(str) is OptionType.STRING

    def test_integer(self) -> None:
        assert option_type_for(int) is OptionType.INTEGER

    def test_boolean(self) -> None:
        """bool subclasses int but has its own code."""
        assert option_type_for(bool) is OptionType.BOOLEAN

    def test_number(self) -> None:
        assert option_type_for(float) is OptionType.NUMBER

    def test_table_is_closed(self) -> None:
        assert set(OPTION_KINDS) == {str, int, bool, float}

    @pytest.mark.parametrize("kind", [bytes, list, dict, Decimal, complex, object, None])
    def test_unsupported_kind_raises(self, kind: object) -> None:
        with pytest.raises(UnsupportedOptionTypeError, match="unsupported option type"):
            option_type_for(kind)

    def test_unhashable_kind_raises(self) -> None:
        with pytest.raises(UnsupportedOptionTypeError):
            option_type_for([str])

    def test_subclass_of_supported_kind_rejected(self) -> None:
        class Name(str):
            pass

        with pytest.raises(UnsupportedOptionTypeError):
            option_type_for(Name)


# ------------------------------------------------------------------ #
# Leaf options
# ------------------------------------------------------------------ #


class TestCommandOption:
    def test_fields(self) -> None:
        opt = command_option(str, "q", "query")
        assert opt.kind is str
        assert opt.name == "q"
        assert opt.description == "query"
        assert opt.required is False
        assert opt.choices == ()

    def test_choices_keep_order(self) -> None:
        opt = command_option(
            int, "n", "count", True, Choice("one", 1), Choice("three", 3), Choice("two", 2)
        )
        assert [c.name for c in opt.choices] == ["one", "three", "two"]
        assert opt.required is True

    def test_unsupported_kind_rejected_at_construction(self) -> None:
        with pytest.raises(UnsupportedOptionTypeError):
            command_option(bytes, "raw", "raw bytes")  # type: ignore[type-var]

    def test_direct_class_construction_validates(self) -> None:
        with pytest.raises(UnsupportedOptionTypeError):
            CommandOption(list, "xs", "list")  # type: ignore[type-var]

    def test_choice_of_wrong_kind_rejected(self) -> None:
        with pytest.raises(DefinitionError, match="expected str"):
            command_option(str, "size", "Cup size", False, Choice("Small", 1))  # type: ignore[arg-type]

    def test_bool_choice_not_accepted_for_integer(self) -> None:
        with pytest.raises(DefinitionError):
            command_option(int, "n", "count", False, Choice("yes", True))

    def test_int_choice_accepted_for_number(self) -> None:
        opt = number_option("ratio", "Ratio", False, Choice("one", 1), Choice("half", 0.5))
        assert [c.value for c in opt.choices] == [1, 0.5]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_number_choice_rejected(self, value: float) -> None:
        with pytest.raises(DefinitionError, match="not a finite number"):
            number_option("ratio", "Ratio", False, Choice("ok", 0.5), Choice("bad", value))

    def test_non_finite_canonical_choice_rejected(self) -> None:
        with pytest.raises(ValidationError, match="finite"):
            ChoiceValue(name="big", value=float("inf"))

    def test_non_choice_value_rejected(self) -> None:
        with pytest.raises(DefinitionError, match="Choice values"):
            command_option(str, "size", "Cup size", False, ("Small", "s"))  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        opt = string_option("q", "query")
        with pytest.raises(dataclasses.FrozenInstanceError):
            opt.name = "other"  # type: ignore[misc]

    def test_choices_list_becomes_tuple(self) -> None:
        opt = CommandOption(str, "q", "query", False, [Choice("a", "a")])  # type: ignore[arg-type]
        assert opt.choices == (Choice("a", "a"),)


class TestShorthands:
    def test_string_option(self) -> None:
        assert string_option("a", "b").kind is str

    def test_integer_option(self) -> None:
        assert integer_option("a", "b").kind is int

    def test_boolean_option(self) -> None:
        opt = boolean_option("a", "b", True)
        assert opt.kind is bool
        assert opt.required is True

    def test_number_option(self) -> None:
        assert number_option("a", "b").kind is float


# ------------------------------------------------------------------ #
# Composite options
# ------------------------------------------------------------------ #


class TestSubcommand:
    def test_no_children(self) -> None:
        sub = subcommand("ping", "desc")
        assert isinstance(sub, Subcommand)
        assert sub.options == ()

    def test_children_keep_order(self) -> None:
        a = string_option("a", "first")
        b = integer_option("b", "second")
        c = boolean_option("c", "third")
        sub = subcommand("run", "Run it", a, b, c)
        assert sub.options == (a, b, c)

    def test_accepts_canonical_option_child(self) -> None:
        raw = CanonicalOption(name="user", type=OptionType.USER, description="Target")
        sub = subcommand("kick", "Kick someone", raw)
        assert sub.options == (raw,)

    def test_rejects_foreign_child(self) -> None:
        with pytest.raises(DefinitionError, match="not an option"):
            subcommand("bad", "bad", "just a string")  # type: ignore[arg-type]

    def test_rejects_command_as_child(self) -> None:
        with pytest.raises(DefinitionError):
            subcommand("bad", "bad", slash_command("ping", "pong"))  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        sub = subcommand("ping", "desc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            sub.options = ()  # type: ignore[misc]


class TestSubcommandGroup:
    def test_nesting(self) -> None:
        inner = subcommand("add", "Add one", string_option("name", "Name", True))
        group = subcommand_group("tags", "Manage tags", inner)
        assert isinstance(group, SubcommandGroup)
        assert group.options == (inner,)

    def test_rejects_foreign_child(self) -> None:
        with pytest.raises(DefinitionError):
            subcommand_group("tags", "Manage tags", 42)  # type: ignore[arg-type]


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


class TestSlashCommand:
    def test_defaults_to_chat_input(self) -> None:
        cmd = slash_command("ping", "Check the bot")
        assert isinstance(cmd, SlashCommand)
        assert cmd.type is CommandType.CHAT_INPUT
        assert cmd.options == ()

    def test_children_keep_order(self) -> None:
        first = subcommand("a", "A")
        second = subcommand_group("b", "B")
        cmd = slash_command("multi", "Multi", first, second)
        assert cmd.options == (first, second)

    def test_rejects_foreign_child(self) -> None:
        with pytest.raises(DefinitionError):
            slash_command("bad", "bad", {"name": "x"})  # type: ignore[arg-type]

    def test_other_command_kind(self) -> None:
        cmd = SlashCommand("Report", type=CommandType.MESSAGE)
        assert cmd.type is CommandType.MESSAGE
