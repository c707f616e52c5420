"""Shared test fixtures for corde.

Provides reusable fixtures for building sample command trees, creating
isolated config environments, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from corde.builder import (
    Choice,
    SlashCommand,
    boolean_option,
    integer_option,
    slash_command,
    string_option,
    subcommand,
    subcommand_group,
)
from corde.models import Profile, RequestConfig
from corde.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams the
    cached references go stale, so a fresh manager is forced per test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Command tree fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def coffee_command() -> SlashCommand:
    """A three-level command: group -> subcommand -> leaves."""
    return slash_command(
        "coffee",
        "Coffee orders",
        subcommand_group(
            "order",
            "Place orders",
            subcommand(
                "hot",
                "Order a hot drink",
                string_option(
                    "size", "Cup size", True,
                    Choice("Small", "s"), Choice("Large", "l"),
                ),
                integer_option("shots", "Espresso shots"),
                boolean_option("oat", "Oat milk"),
            ),
        ),
        subcommand("menu", "Show the menu"),
    )


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        name="testbot",
        application_id="1000",
        guild_id="42",
        token_source="env:TEST_BOT_TOKEN",
        api_base_url="https://chat.example.com/api/v10",
        request=RequestConfig(timeout=5, max_retries=1),
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    forces XDG path resolution, clears CORDE_* environment variables and
    changes the working directory to tmp_path.
    """
    monkeypatch.setattr("corde.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["CORDE_PROFILE", "CORDE_GUILD_ID", "CORDE_BOT_TOKEN"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
