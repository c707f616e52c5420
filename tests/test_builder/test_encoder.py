"""Tests for corde.builder.encoder.

Covers:
- Per-field omission rules for options and commands
- required is written only as true, never as false
- Key order of the emitted documents
- Nested trees and batch payloads
- Byte-identical output on repeated encoding
"""

from __future__ import annotations

import json

import pytest

from corde.builder import (
    Choice,
    SlashCommand,
    boolean_option,
    command_option,
    command_to_wire,
    encode,
    encode_commands,
    integer_option,
    number_option,
    option_to_wire,
    slash_command,
    string_option,
    subcommand,
    subcommand_group,
)
from corde.constants import CommandType, OptionType
from corde.exceptions import DefinitionError
from corde.models import CanonicalCommand, CanonicalOption


# ------------------------------------------------------------------ #
# Options
# ------------------------------------------------------------------ #


class TestOptionEncoding:
    def test_empty_subcommand(self) -> None:
        doc = json.loads(encode(subcommand("ping", "desc")))
        assert doc == {"name": "ping", "description": "desc", "type": 1}

    def test_optional_string_leaf(self) -> None:
        doc = json.loads(encode(command_option(str, "q", "query", False)))
        assert doc == {"name": "q", "description": "query", "type": 3}

    def test_required_written_only_when_true(self) -> None:
        assert option_to_wire(string_option("q", "query", True))["required"] is True
        assert "required" not in option_to_wire(string_option("q", "query", False))
        assert b'"required":false' not in encode(boolean_option("flag", "Flag"))

    def test_empty_description_omitted(self) -> None:
        assert option_to_wire(integer_option("n", "")) == {"name": "n", "type": 4}

    def test_choices(self) -> None:
        doc = option_to_wire(
            string_option("size", "Cup size", True, Choice("Small", "s"), Choice("Large", "l"))
        )
        assert doc["choices"] == [
            {"name": "Small", "value": "s"},
            {"name": "Large", "value": "l"},
        ]

    def test_number_choices(self) -> None:
        doc = json.loads(encode(number_option("x", "x", False, Choice("half", 0.5))))
        assert doc["type"] == 10
        assert doc["choices"] == [{"name": "half", "value": 0.5}]

    def test_composite_never_carries_choices(self) -> None:
        doc = option_to_wire(subcommand_group("g", "group", subcommand("s", "sub")))
        assert "choices" not in doc
        assert "choices" not in doc["options"][0]

    def test_three_level_tree(self) -> None:
        group = subcommand_group(
            "g", "group", subcommand("s", "sub", integer_option("n", "number", True))
        )
        assert json.loads(encode(group)) == {
            "name": "g",
            "type": 2,
            "description": "group",
            "options": [
                {
                    "name": "s",
                    "type": 1,
                    "description": "sub",
                    "options": [
                        {"name": "n", "type": 4, "description": "number", "required": True}
                    ],
                }
            ],
        }

    def test_key_order(self) -> None:
        doc = option_to_wire(
            string_option("size", "Cup size", True, Choice("Small", "s"))
        )
        assert list(doc) == ["name", "type", "description", "required", "choices"]

    def test_canonical_option_other_kind(self) -> None:
        raw = CanonicalOption(name="who", type=OptionType.USER, description="Target", required=True)
        assert option_to_wire(raw) == {
            "name": "who",
            "type": 6,
            "description": "Target",
            "required": True,
        }

    def test_type_is_plain_int(self) -> None:
        assert type(option_to_wire(subcommand("a", "b"))["type"]) is int


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


class TestCommandEncoding:
    def test_minimal_command(self) -> None:
        assert json.loads(encode(slash_command("ping", "pong"))) == {
            "name": "ping",
            "description": "pong",
            "type": 1,
        }

    def test_key_order(self) -> None:
        doc = command_to_wire(slash_command("ping", "pong", subcommand("a", "b")))
        assert list(doc) == ["name", "description", "type", "options"]

    def test_unset_type_and_empty_fields_omitted(self) -> None:
        assert command_to_wire(CanonicalCommand(name="ping")) == {"name": "ping"}
        assert command_to_wire(CanonicalCommand()) == {}

    def test_other_command_kind(self) -> None:
        doc = command_to_wire(SlashCommand("Report", type=CommandType.MESSAGE))
        assert doc == {"name": "Report", "type": 3}

    def test_full_tree(self, coffee_command: SlashCommand) -> None:
        doc = json.loads(encode(coffee_command))
        hot = doc["options"][0]["options"][0]
        assert [o["name"] for o in doc["options"]] == ["order", "menu"]
        assert [o["type"] for o in hot["options"]] == [3, 4, 5]
        assert hot["options"][0]["required"] is True
        assert "required" not in hot["options"][1]
        assert "options" not in doc["options"][1]

    def test_compact_utf8(self) -> None:
        payload = encode(slash_command("café", "Crème brûlée"))
        assert payload == '{"name":"café","description":"Crème brûlée","type":1}'.encode("utf-8")

    def test_repeatable(self, coffee_command: SlashCommand) -> None:
        assert encode(coffee_command) == encode(coffee_command)

    def test_not_encodable(self) -> None:
        with pytest.raises(DefinitionError):
            encode({"name": "ping"})  # type: ignore[arg-type]


# ------------------------------------------------------------------ #
# Batch payload
# ------------------------------------------------------------------ #


class TestEncodeCommands:
    def test_array_in_order(self) -> None:
        payload = encode_commands(
            [slash_command("b", "second"), CanonicalCommand(name="a", description="first")]
        )
        assert json.loads(payload) == [
            {"name": "b", "description": "second", "type": 1},
            {"name": "a", "description": "first"},
        ]

    def test_empty(self) -> None:
        assert encode_commands([]) == b"[]"

    def test_rejects_options(self) -> None:
        with pytest.raises(DefinitionError, match="not a command"):
            encode_commands([subcommand("ping", "pong")])  # type: ignore[list-item]
