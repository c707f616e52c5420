"""Encode canonical trees into registration API documents.

Omission rules are applied per field rather than by a generic "skip
empty values" serializer:

* ``description`` -- omitted when empty.
* ``required`` -- omitted when false; ``false`` is never written.
* ``options`` -- omitted when there are no children.
* ``choices`` -- omitted when there are no choices.

Commands additionally omit an empty ``name`` and an unset ``type``.
Builder values are converted with :mod:`corde.builder.convert` before
their fields are emitted, so callers may pass either builder values or
canonical models. Output is compact UTF-8 JSON and byte-identical for
equal inputs.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Union

from corde.builder.command import CommandLike
from corde.builder.convert import is_command_like, to_canonical_command, to_canonical_option
from corde.builder.options import OPTION_VARIANTS, OptionLike
from corde.exceptions import DefinitionError


def option_to_wire(value: OptionLike) -> dict[str, Any]:
    """Return the wire dict for an option-like value."""
    option = to_canonical_option(value)
    doc: dict[str, Any] = {"name": option.name, "type": int(option.type)}
    if option.description:
        doc["description"] = option.description
    if option.required:
        doc["required"] = True
    if option.options:
        doc["options"] = [option_to_wire(child) for child in option.options]
    if option.choices:
        doc["choices"] = [
            {"name": choice.name, "value": choice.value} for choice in option.choices
        ]
    return doc


def command_to_wire(value: CommandLike) -> dict[str, Any]:
    """Return the wire dict for a command-like value."""
    command = to_canonical_command(value)
    doc: dict[str, Any] = {}
    if command.name:
        doc["name"] = command.name
    if command.description:
        doc["description"] = command.description
    if command.type is not None:
        doc["type"] = int(command.type)
    if command.options:
        doc["options"] = [option_to_wire(child) for child in command.options]
    return doc


def to_wire(value: Union[OptionLike, CommandLike]) -> dict[str, Any]:
    """Return the wire dict for any option-like or command-like value.

    Raises:
        DefinitionError: If *value* is neither.
    """
    if is_command_like(value):
        return command_to_wire(value)  # type: ignore[arg-type]
    if isinstance(value, OPTION_VARIANTS):
        return option_to_wire(value)
    raise DefinitionError(f"cannot encode {type(value).__name__}")


def _dumps(doc: Any) -> bytes:
    return json.dumps(doc, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def encode(value: Union[OptionLike, CommandLike]) -> bytes:
    """Encode a single option or command as a JSON document.

    Example::

        >>> encode(subcommand("ping", "desc"))
        b'{"name":"ping","type":1,"description":"desc"}'
    """
    return _dumps(to_wire(value))


def encode_commands(values: Iterable[CommandLike]) -> bytes:
    """Encode several commands as the JSON array a bulk registration expects.

    Raises:
        DefinitionError: If an item is not command-like.
    """
    docs = []
    for value in values:
        if not is_command_like(value):
            raise DefinitionError(f"{type(value).__name__} is not a command")
        docs.append(command_to_wire(value))
    return _dumps(docs)
