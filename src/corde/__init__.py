"""corde -- declare chat-platform application commands in typed Python.

A command tree (top-level command, subcommand groups, subcommands and
typed leaf options) is declared with the builders in :mod:`corde.builder`,
converted to a canonical tree, and encoded into the JSON document the
platform's command-registration API expects. The ``corde`` CLI renders
those documents and submits them.

Typical workflow::

    corde init --application-id 1234567890 --guild-id 42
    corde show mybot.commands:COMMANDS       # preview the payload
    corde register mybot.commands:COMMANDS   # bulk-overwrite registration

Modules:
    builder: Typed builders, canonical conversion and encoding.
    models: Pydantic models for wire documents and configuration.
    constants: Command and option type codes.
    loader: Load command definitions from Python targets or documents.
    client: HTTP client for the registration API.
    config: XDG-aware configuration and profile management.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
