"""Terminal output for the corde CLI.

Two streams, two purposes:

* **stdout** carries data only: the encoded registration payload, the
  listing of registered commands, config dumps. ``corde show X > p.json``
  therefore always yields a clean document.
* **stderr** carries everything a human reads: progress, dry-run request
  previews, warnings and errors.

Rich rendering is used only when stdout is a terminal and colour is
allowed (``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` all turn it off).

The CLI callback installs one :class:`OutputManager` with
:func:`set_output`; library code reaches it through :func:`get_output` or
the module-level shortcuts (:func:`info`, :func:`error`, ...).
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from corde.models import RegisteredCommand


class OutputFormat(str, Enum):
    """How data written to stdout is rendered.

    ``AUTO`` becomes ``RICH`` on a colour-capable terminal and ``PLAIN``
    everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


_COMMAND_COLUMNS = ["id", "name", "type", "description"]


class OutputManager:
    """Renders data to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout data; ``AUTO`` is resolved here.
        no_color: Never emit colour or markup.
        quiet: Drop informational stderr messages (warnings and errors
            still show).
        verbose: Show debug messages.
        output_file: Write data to this file instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def print_payload(self, payload: bytes) -> None:
        """Write an encoded registration payload.

        The compact bytes are written unchanged except in Rich mode, where
        the document is re-indented and highlighted for reading.
        """
        text = payload.decode("utf-8")
        if self._format == OutputFormat.RICH and not self._output_file:
            pretty = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
            self._stdout.print(Syntax(pretty, "json", theme="monokai", word_wrap=True))
            return
        self.print_data(text)

    def print_commands(self, commands: Sequence[RegisteredCommand]) -> None:
        """List registered commands as a table (or JSON records)."""
        rows = [
            [
                cmd.id,
                cmd.name,
                "" if cmd.type is None else str(int(cmd.type)),
                cmd.description,
            ]
            for cmd in commands
        ]
        self.print_table(_COMMAND_COLUMNS, rows, title="Registered commands")

    def format_response(self, data: Any) -> None:
        """Render a dict or list: JSON, key/value lines, or highlighted JSON."""
        if self._output_file:
            self._write_file(data if isinstance(data, str) else _to_json(data))
        elif self._format == OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Tabular data: a Rich table, JSON records, or tab-separated lines."""
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return
        if self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    def print_data(self, text: str) -> None:
        """Write *text* as one line of data (appended when writing to a file)."""
        if not self._output_file:
            print(text, file=sys.stdout, flush=True)
            return
        with open(self._output_file, "a", encoding="utf-8") as f:
            f.write(text if text.endswith("\n") else text + "\n")

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Always shown."""
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def suggest(self, message: str) -> None:
        """A hint about what to run next."""
        if not self._quiet:
            hint = f"→ {message}"
            self._emit(hint, f"[dim]{hint}[/dim]")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _emit(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def _write_file(self, content: str) -> None:
        assert self._output_file is not None
        with open(self._output_file, "w", encoding="utf-8") as f:
            f.write(content if content.endswith("\n") else content + "\n")


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> list[str]:
    # dicts -> "key<TAB>value"; lists of dicts -> one tab-joined row each
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    if "NO_COLOR" in os.environ:
        return True
    return os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
