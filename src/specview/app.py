"""Typer application and CLI entry point for specview.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory; :class:`~specview.exceptions.SpecviewError` exits with
its own code.
"""

from __future__ import annotations

import sys
import traceback
from datetime import datetime

import typer

from specview import __version__
from specview.commands.config import config_app
from specview.commands.inspect import inspect_app
from specview.exceptions import SpecviewError
from specview.exit_codes import EXIT_GENERIC_FAILURE
from specview.output import error


app = typer.Typer(
    name="specview",
    help="Inspect OpenAPI operations as resolved, display-ready views.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(inspect_app, name="inspect", help="Inspect operations of a document.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specview {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: install the output manager and logging from CLI flags."""
    from specview.output import OutputFormat, OutputManager, configure_logging, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)


def _configured_format():  # noqa: ANN202
    """The ``output.format`` setting, or ``auto`` if the config cannot be read."""
    from specview.config import resolve_config
    from specview.exceptions import ConfigError
    from specview.output import OutputFormat

    try:
        return OutputFormat(resolve_config().output.format)
    except ConfigError:
        # The sub-command that reads the configuration reports the error.
        return OutputFormat.AUTO


def _write_crash_log() -> str:
    """Save the active traceback under the data directory and return its path."""
    from specview.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(exist_ok=True)
    log_path = logs_dir / datetime.now().strftime("crash-%Y%m%d-%H%M%S.log")
    log_path.write_text(f"specview {__version__}\n\n{traceback.format_exc()}", encoding="utf-8")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``specview`` console script."""
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except SpecviewError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Traceback saved to {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
