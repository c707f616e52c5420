"""Built-in CLI sub-commands for corde.

* :mod:`~corde.commands.init` -- create a profile for an application.
* :mod:`~corde.commands.config` -- view and modify global settings.
* :mod:`~corde.commands.show` -- render the registration payload.
* :mod:`~corde.commands.register` -- submit, list and delete commands.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``config`` and ``commands``) or a plain callback
registered directly on the root app (for single commands like ``init``).
"""
