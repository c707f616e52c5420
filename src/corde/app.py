"""Typer application factory and CLI entry point for corde.

This module wires together the top-level Typer application and registers
the built-in sub-commands (``init``, ``show``, ``register``, ``commands``,
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from corde import __version__
from corde.commands.config import config_app
from corde.commands.init import init_command
from corde.commands.register import commands_app, register_command
from corde.commands.show import show_command
from corde.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="corde",
    help="Build, preview and register chat application commands.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("init")(init_command)
app.command("show")(show_command)
app.command("register")(register_command)
app.add_typer(commands_app, name="commands", help="Inspect and delete registered commands.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"corde {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print requests instead of sending them."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~corde.output.OutputManager` from the
    output flags and stores shared options in ``ctx.obj``.
    """
    from corde.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["dry_run"] = dry_run
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return its path."""
    from corde.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``corde`` console script.

    :class:`~corde.exceptions.CordeError` instances cause a clean exit
    with the error's ``exit_code``. All other exceptions produce a crash
    log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from corde.exceptions import CordeError
        from corde.output import error

        if isinstance(exc, CordeError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
