"""Terminal output for the specview CLI.

Data and diagnostics never share a stream:

* **stdout** carries the result of a command -- the operations table or
  the flattened view of one operation.
* **stderr** carries everything else: status lines, warnings, errors and
  the library's ``logging`` records (see :func:`configure_logging`).

Three data formats are supported. ``json`` is meant for scripts,
``plain`` prints one ``key<TAB>value`` line per leaf (nested keys joined
with dots) so the output greps well, and ``rich`` draws tables and trees.
``auto`` picks ``rich`` on a colour terminal and ``plain`` otherwise.
``NO_COLOR`` (any value) and ``TERM=dumb`` switch colour off.

:class:`OutputManager` is created once per invocation by
:func:`~specview.app.main_callback` and installed with :func:`set_output`;
the module-level helpers delegate to it.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree


class OutputFormat(str, Enum):
    """Output formats accepted by ``--json``/``--plain`` and ``output.format``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def _dumps(data: Any, indent: Optional[int] = 2) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


def _plain_lines(data: Any, prefix: str = "") -> Iterator[str]:
    """Yield ``key<TAB>value`` lines, descending into nested mappings.

    Lists are kept whole as compact JSON so that one line still holds one
    field.
    """
    if isinstance(data, dict):
        for key, value in data.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, dict) and value:
                yield from _plain_lines(value, name)
            elif isinstance(value, (dict, list)):
                yield f"{name}\t{_dumps(value, indent=None)}"
            else:
                yield f"{name}\t{'' if value is None else value}"
    elif isinstance(data, list):
        for item in data:
            yield _dumps(item, indent=None)
    else:
        yield str(data)


def _build_tree(node: Tree, data: Any) -> None:
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)) and value:
                _build_tree(node.add(f"[bold]{escape(str(key))}[/bold]"), value)
            else:
                node.add(f"[bold]{escape(str(key))}[/bold]: {escape(_dumps(value, indent=None))}")
    elif isinstance(data, list):
        for index, item in enumerate(data):
            if isinstance(item, (dict, list)) and item:
                _build_tree(node.add(f"[dim]{index}[/dim]"), item)
            else:
                node.add(escape(_dumps(item, indent=None)))
    else:
        node.add(escape(str(data)))


class OutputManager:
    """Owns the two consoles and the user's output preferences.

    Args:
        format: Requested format; ``AUTO`` is resolved at construction.
        no_color: Force colour and markup off.
        quiet: Drop informational messages (warnings and errors still show).
        verbose: Show debug messages and DEBUG log records.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich_stdout = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_stdout)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        return self._stderr

    # --- stdout ---

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def format_data(self, data: Any, title: str = "") -> None:
        """Print a structured result: JSON text, plain lines or a Rich tree."""
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps(data))
            return
        if self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
            return
        tree = Tree(f"[bold cyan]{escape(title)}[/bold cyan]" if title else "", hide_root=not title)
        _build_tree(tree, data)
        self._stdout.print(tree)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[Any]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        JSON mode emits one object per row keyed by header; plain mode emits
        tab-separated lines with a header line first.
        """
        cells = [["" if cell is None else str(cell) for cell in row] for row in rows]
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps([dict(zip(headers, row)) for row in cells]))
        elif self._format == OutputFormat.PLAIN:
            for row in [headers, *cells]:
                self.print_data("\t".join(row))
        else:
            table = Table(*headers, title=title, header_style="bold cyan")
            for row in cells:
                table.add_row(*(escape(cell) for cell in row))
            self._stdout.print(table)

    # --- stderr ---

    def _diagnostic(self, label: str, style: str, message: str) -> None:
        if self._no_color:
            print(f"{label} {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[{style}]{escape(label)}[/{style}] {escape(message)}")

    def info(self, message: str) -> None:
        """Status line; dropped with ``--quiet``."""
        if self._quiet:
            return
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(escape(message))

    def warning(self, message: str) -> None:
        self._diagnostic("Warning:", "yellow", message)

    def error(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._diagnostic("Error:", "bold red", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic("[debug]", "dim", message)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def configure_logging(output: OutputManager) -> None:
    """Route records of the ``specview`` logger to the stderr console.

    The level is WARNING, or DEBUG with ``--verbose``. Calling this again
    replaces the previous handler.
    """
    logger = logging.getLogger("specview")
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=output.stderr_console,
            show_time=False,
            show_path=output.is_verbose,
            markup=False,
        )
    )
    logger.setLevel(logging.DEBUG if output.is_verbose else logging.WARNING)


# --- process-wide manager ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
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


def format_data(data: Any, title: str = "") -> None:
    get_output().format_data(data, title)


def print_table(headers: list[str], rows: list[list[Any]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
