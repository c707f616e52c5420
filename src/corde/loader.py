"""Load command definitions from a Python target or a JSON/YAML document.

A *target* names where the commands to register live:

* ``package.module:ATTRIBUTE`` -- an attribute of an importable module.
* ``path/to/commands.py:ATTRIBUTE`` -- an attribute of a source file.
* ``path/to/commands.json`` (or ``.yaml`` / ``.yml``) -- a document holding
  one command object or a list of them, in wire shape.

A Python attribute may hold a single command-like value, a list or tuple
of them, or a zero-argument callable returning either. Every result is
converted to :class:`~corde.models.CanonicalCommand`.
"""

from __future__ import annotations

import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from corde.builder.convert import is_command_like, to_canonical_command
from corde.exceptions import DefinitionError
from corde.models import CanonicalCommand

logger = logging.getLogger(__name__)

_DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


def load_commands(target: str) -> list[CanonicalCommand]:
    """Load and canonicalise the commands named by *target*.

    Args:
        target: A ``module:attribute``, ``file.py:attribute`` or document path.

    Returns:
        The commands in declaration order.

    Raises:
        DefinitionError: If the target cannot be imported, read or parsed,
            or does not hold command-like values.
    """
    if Path(target).suffix.lower() in _DOCUMENT_SUFFIXES:
        return load_document(Path(target))

    module_ref, sep, attribute = target.rpartition(":")
    if not sep or not module_ref or not attribute:
        raise DefinitionError(
            f"Invalid target '{target}': expected 'module:attribute', "
            "'file.py:attribute' or a .json/.yaml document"
        )

    module = _import_target(module_ref)
    try:
        value = getattr(module, attribute)
    except AttributeError:
        raise DefinitionError(f"'{module_ref}' has no attribute '{attribute}'") from None

    if callable(value) and not is_command_like(value):
        logger.debug("Calling %s:%s to obtain commands", module_ref, attribute)
        value = value()

    return _canonicalise(value, target)


def _import_target(module_ref: str) -> Any:
    """Import a dotted module name or a ``.py`` file path."""
    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.is_file():
            raise DefinitionError(f"Command module not found: {module_ref}")
        module_name = f"_corde_target_{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise DefinitionError(f"Cannot import {module_ref}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise DefinitionError(f"Failed to import {module_ref}: {exc}") from exc
        return module

    try:
        return importlib.import_module(module_ref)
    except ImportError as exc:
        raise DefinitionError(f"Cannot import module '{module_ref}': {exc}") from exc


def _canonicalise(value: Any, target: str) -> list[CanonicalCommand]:
    items = list(value) if isinstance(value, (list, tuple)) else [value]
    commands: list[CanonicalCommand] = []
    for index, item in enumerate(items):
        if not is_command_like(item):
            raise DefinitionError(
                f"{target}: item {index} is a {type(item).__name__}, not a command"
            )
        commands.append(to_canonical_command(item))
    logger.debug("Loaded %d command(s) from %s", len(commands), target)
    return commands


def load_document(path: Path) -> list[CanonicalCommand]:
    """Load commands from a JSON or YAML document in wire shape.

    Args:
        path: A ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        The validated commands in document order.

    Raises:
        DefinitionError: If the file is missing, unparsable, or fails
            validation against :class:`~corde.models.CanonicalCommand`.
    """
    if not path.is_file():
        raise DefinitionError(f"Command document not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DefinitionError(f"Failed to read {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            raw = json.loads(content)
        else:
            raw = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DefinitionError(f"Failed to parse {path}: {exc}") from exc

    if raw is None:
        raise DefinitionError(f"Command document is empty: {path}")
    items = raw if isinstance(raw, list) else [raw]

    commands: list[CanonicalCommand] = []
    for index, item in enumerate(items):
        try:
            commands.append(CanonicalCommand.model_validate(item))
        except ValidationError as exc:
            raise DefinitionError(f"{path}: command {index} is invalid: {exc}") from exc
    logger.debug("Loaded %d command(s) from %s", len(commands), path)
    return commands
