"""Canonical Pydantic models shared across all corde modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Wire models** -- the canonical tree every builder value converts into,
and the shape the registration API accepts and returns:
    :class:`ChoiceValue`, :class:`CanonicalOption`,
    :class:`CanonicalCommand`, and :class:`RegisteredCommand`.

**Configuration models** -- serialised as JSON in the user's config
directory:
    :class:`RequestConfig`, :class:`OutputConfig`, :class:`GlobalConfig`,
    and :class:`Profile`.

Wire models are frozen: conversion produces new trees and never mutates
an existing one.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from corde.constants import CommandType, OptionType


# --- Wire models ---


class ChoiceValue(BaseModel):
    """A type-erased ``(name, value)`` choice attached to a leaf option.

    Children of one composite may be leaves of different value kinds, so
    the canonical tree stores every choice value under a single union.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    value: Union[bool, int, float, str]

    @field_validator("value")
    @classmethod
    def _finite(cls, value: Union[bool, int, float, str]) -> Union[bool, int, float, str]:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"choice value must be a finite number, got {value}")
        return value


class CanonicalOption(BaseModel):
    """An option node in the shape the registration API expects.

    Leaves carry ``choices``; composite nodes (``SUB_COMMAND`` and
    ``SUB_COMMAND_GROUP``) carry nested ``options``. Validation rejects the
    other combination, so documents loaded from disk keep the same shape
    the builders produce. Defaults mean
    "absent" and are omitted by :mod:`corde.builder.encoder`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: OptionType
    description: str = ""
    required: bool = False
    options: tuple[CanonicalOption, ...] = ()
    choices: tuple[ChoiceValue, ...] = ()

    @model_validator(mode="after")
    def _check_shape(self) -> CanonicalOption:
        composite = self.type in (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP)
        if composite and self.choices:
            raise ValueError(f"option '{self.name}': subcommands and groups cannot have choices")
        if not composite and self.options:
            raise ValueError(f"option '{self.name}': only subcommands and groups can have options")
        return self


class CanonicalCommand(BaseModel):
    """A top-level command in the shape the registration API expects."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    type: Optional[CommandType] = None
    options: tuple[CanonicalOption, ...] = ()


class RegisteredCommand(CanonicalCommand):
    """A command as returned by the platform after registration.

    Adds the identifiers the platform assigns. Response keys corde does not
    model (localisations, permissions, ...) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    application_id: Optional[str] = None
    guild_id: Optional[str] = None
    version: Optional[str] = None


# --- Configuration models ---


class RequestConfig(BaseModel):
    """HTTP request settings applied to every registration API call in a profile."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Max retry attempts")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/corde/config.json``.

    Loaded and saved by :func:`~corde.config.load_global_config` and
    :func:`~corde.config.save_global_config`. See
    :func:`~corde.config.resolve_config` for the full precedence chain.
    """

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """Per-application profile stored as JSON under the ``profiles/`` config directory.

    A profile names the application whose commands are managed, optionally
    a guild to scope registration to, and where the bot token comes from.
    Profiles are created with ``corde init``.

    Example::

        Profile(
            name="mybot",
            application_id="1234567890",
            guild_id="42",
            token_source="env:MYBOT_TOKEN",
        )
    """

    name: str
    application_id: str = Field(description="Application (client) id")
    guild_id: Optional[str] = Field(
        default=None,
        description="Register guild commands for this guild instead of global commands",
    )
    token_source: str = Field(
        default="env:CORDE_BOT_TOKEN",
        description="Bot token source: env:VAR, file:/path, prompt",
    )
    api_base_url: str = Field(
        default="https://discord.com/api/v10",
        description="Base URL of the registration API",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
