"""Persistent configuration: where it lives, how it is read, which wins.

Files
    ``<config>/config.json``
        The user-wide :class:`~corde.models.GlobalConfig`.
    ``<config>/profiles/<name>.json``
        One :class:`~corde.models.Profile` per application.
    ``./corde.json``
        Optional project file; today it only pins ``default_profile``.

``<config>`` is ``$XDG_CONFIG_HOME/corde`` on Linux and the BSDs and
``~/.corde`` elsewhere. Crash logs go under the matching data directory.

Every write goes through :func:`_atomic_write`, so a crash mid-save never
leaves a truncated profile behind.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from corde.exceptions import ConfigError
from corde.models import GlobalConfig, Profile

_APP_NAME = "corde"
_PROJECT_FILE = "corde.json"


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _xdg_dir(env_var: str, *fallback: str) -> Path:
    value = os.environ.get(env_var)
    base = Path(value) if value else Path.home().joinpath(*fallback)
    return base / _APP_NAME


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json`` and ``profiles/`` (created on demand)."""
    if _is_xdg_platform():
        return _ensure(_xdg_dir("XDG_CONFIG_HOME", ".config"))
    return _ensure(Path.home() / f".{_APP_NAME}")


def get_data_dir() -> Path:
    """Directory for crash logs (created on demand).

    ``$XDG_DATA_HOME/corde`` (default ``~/.local/share/corde``) on XDG
    platforms, ``~/.corde/data`` elsewhere.
    """
    if _is_xdg_platform():
        return _ensure(_xdg_dir("XDG_DATA_HOME", ".local", "share"))
    return _ensure(Path.home() / f".{_APP_NAME}" / "data")


def get_profiles_dir() -> Path:
    return _ensure(get_config_dir() / "profiles")


# --- Reading and writing ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a sibling temp file and ``os.replace``.

    The temp file is removed if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _dump(model: GlobalConfig | Profile) -> str:
    return json.dumps(model.model_dump(mode="json"), indent=2) + "\n"


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / "config.json"


def load_global_config() -> GlobalConfig:
    """Read the global config, or return defaults when none has been saved.

    Raises:
        ConfigError: The file is not valid JSON or does not validate.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    _atomic_write(_global_config_path(), _dump(config))


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Names of all saved profiles, sorted."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Read profile *name*.

    Raises:
        ConfigError: The profile does not exist or its file is invalid.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    data = _read_json(path, f"profile '{name}'")
    try:
        return Profile.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    _atomic_write(_profile_path(profile.name), _dump(profile))


# --- Project config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Parsed ``./corde.json``, or ``None`` when the project has none."""
    path = Path.cwd() / _PROJECT_FILE
    if not path.is_file():
        return None
    return _read_json(path, "project config")


# --- Resolution ---


def _profile_name(global_cfg: GlobalConfig, cli_profile: Optional[str]) -> Optional[str]:
    if cli_profile is not None:
        return cli_profile
    env_profile = os.environ.get("CORDE_PROFILE")
    if env_profile:
        return env_profile
    project = load_project_config()
    if project and project.get("default_profile"):
        return project["default_profile"]
    if global_cfg.default_profile:
        return global_cfg.default_profile
    if global_cfg.auto_select_single_profile:
        profiles = list_profiles()
        if len(profiles) == 1:
            return profiles[0]
    return None


def resolve_config(
    cli_profile: Optional[str] = None,
    cli_guild_id: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Work out the effective config and active profile.

    The profile is chosen from, in order: ``--profile``, ``CORDE_PROFILE``,
    ``./corde.json``, the global ``default_profile``, and finally the only
    saved profile when exactly one exists. The guild comes from
    ``--guild-id``, then ``CORDE_GUILD_ID``, then the profile itself.

    Returns:
        ``(global_config, profile)``; *profile* is ``None`` when nothing
        selects one.
    """
    global_cfg = load_global_config()
    if cli_format is not None:
        global_cfg.output.format = cli_format

    name = _profile_name(global_cfg, cli_profile)
    if name is None:
        return global_cfg, None

    profile = load_profile(name)
    guild_id = cli_guild_id or os.environ.get("CORDE_GUILD_ID")
    if guild_id:
        profile.guild_id = guild_id
    return global_cfg, profile


# --- Credentials ---


def resolve_credential(source: str) -> str:
    """Fetch the bot token named by *source*.

    ``env:NAME`` reads an environment variable, ``file:PATH`` reads a file
    (surrounding whitespace stripped), and ``prompt`` asks on the terminal.

    Raises:
        ConfigError: The variable is unset, the file is missing or
            unreadable, stdin is not a TTY, or *source* is unrecognised.
    """
    kind, _, ref = source.partition(":")

    if kind == "env" and ref:
        value = os.environ.get(ref)
        if value is None:
            raise ConfigError(f"Environment variable '{ref}' is not set (source: {source})")
        return value

    if kind == "file" and ref:
        path = Path(ref).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError("Cannot prompt for the bot token: stdin is not a TTY")
        return getpass.getpass("Bot token: ")

    raise ConfigError(f"Unknown credential source format: {source}")
