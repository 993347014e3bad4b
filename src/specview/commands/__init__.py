"""Built-in CLI sub-commands for specview.

* :mod:`~specview.commands.inspect` -- list operations and show one
  operation view.
* :mod:`~specview.commands.config` -- view and modify global settings.

Each module exports a :class:`typer.Typer` sub-application registered on
the root app in :mod:`specview.app`.
"""
