"""Config commands -- view and modify global configuration.

Provides the ``corde config`` sub-command group for reading, updating,
and resetting the user's global configuration file
(:class:`~corde.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from corde.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show current configuration and the known profiles."""
    from corde.config import get_config_dir, list_profiles, load_global_config

    config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    data = config.model_dump(mode="json")
    data["profiles"] = list_profiles()
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'output.format')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the existing field's type (bool, int, or str)
    and the result is validated before saving.

    Example::

        corde config set default_profile mybot
        corde config set output.format json
    """
    from corde.config import load_global_config, save_global_config
    from corde.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    coerced: object = value
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=2) from None

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Reset configuration to defaults. Asks for confirmation unless ``--force``."""
    from corde.config import save_global_config
    from corde.models import GlobalConfig

    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force:
        if not typer.confirm("Reset all config to defaults?"):
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
