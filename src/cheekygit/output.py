"""Terminal output for cheekygit.

Results and diagnostics never share a stream:

* **stdout** carries the result of a command (an explanation, a table, a
  catalog document) so that ``cheekygit --json explain ... | jq`` works.
* **stderr** carries everything addressed to the person at the keyboard:
  progress, warnings, errors, and next-step hints.

Formatting is chosen once per process. ``--json`` and ``--plain`` force a
format; otherwise Rich styling is used on an interactive terminal and plain
text everywhere else. ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` switch
styling off (see `clig.dev <https://clig.dev/>`_).

:func:`~cheekygit.app.main_callback` builds an :class:`OutputManager` from
the root options and installs it with :func:`set_output`. Command modules
then call the module-level helpers (:func:`error`, :func:`print_table`, ...)
instead of passing the manager around.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from cheekygit.models import ResolvedExplanation


class OutputFormat(str, Enum):
    """How results are written to stdout.

    ``AUTO`` becomes ``RICH`` on a colour-capable TTY and ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def format_flag_spelling(name: str) -> str:
    """Return *name* with the dashes it is typed with (``-n``, ``--dry-run``)."""
    return f"-{name}" if len(name) == 1 else f"--{name}"


def format_flag_heading(name: str, aliases: tuple[str, ...] | list[str] = ()) -> str:
    """Render a flag and its aliases the way they are typed.

    Example::

        >>> format_flag_heading("dry-run", ("n",))
        '--dry-run (-n)'
        >>> format_flag_heading("all")
        '--all'
    """
    heading = format_flag_spelling(name)
    if aliases:
        heading += " (" + " / ".join(format_flag_spelling(alias) for alias in aliases) + ")"
    return heading


class OutputManager:
    """Writes results to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` is resolved here, once.
        no_color: Turn off colour and markup even on a terminal.
        quiet: Drop ``info``, ``success`` and ``suggest`` messages.
        verbose: Show ``debug`` messages.
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

        rich = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The format in effect after ``AUTO`` was resolved."""
        return self._format

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unchanged."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Write a document (dict, list, or string) in the active format."""
        if self._format == OutputFormat.JSON:
            self._print_json(data)
        elif self._format == OutputFormat.PLAIN:
            self._print_plain(data)
        else:
            self._print_rich(data)

    def print_explanation(self, explanation: ResolvedExplanation, prefix: str = "git") -> None:
        """Write an explanation: the command line and its description, then
        one heading and description per supplied flag.

        JSON mode writes the explanation model itself.
        """
        if self._format == OutputFormat.JSON:
            self._print_json(explanation.model_dump(mode="json"))
            return

        title = f"{prefix} {explanation.name}"
        headings = [format_flag_heading(f.name, f.aliases) for f in explanation.flags]

        if self._format == OutputFormat.PLAIN:
            lines = [title, explanation.description]
            if explanation.flags:
                lines += ["", "Flags"]
                for heading, flag in zip(headings, explanation.flags):
                    lines += [heading, f"  {flag.description}"]
            for line in lines:
                self.print_data(line)
            return

        out = self._stdout
        out.print(f"[bold cyan]{escape(title)}[/bold cyan]", highlight=False)
        out.print(escape(explanation.description), highlight=False)
        if explanation.flags:
            out.print()
            out.print("[bold]Flags[/bold]")
            for heading, flag in zip(headings, explanation.flags):
                out.print(f"  [green]{escape(heading)}[/green]", highlight=False)
                out.print(f"    {escape(flag.description)}", highlight=False)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows as a Rich table, tab-separated lines, or a JSON array
        of objects keyed by *headers*. *title* is only shown by Rich.
        """
        if self._format == OutputFormat.JSON:
            self._print_json([dict(zip(headers, row)) for row in rows])
            return
        if self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._to_stderr(message, escape(message))

    def success(self, message: str) -> None:
        if not self._quiet:
            self._to_stderr(message, f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._to_stderr(f"Warning: {message}", f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._to_stderr(f"Error: {message}", f"[bold red]Error:[/bold red] {escape(message)}")

    def suggest(self, message: str) -> None:
        """Hint at a follow-up command."""
        if not self._quiet:
            hint = f"→ {message}"
            self._to_stderr(hint, f"[dim]{escape(hint)}[/dim]")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._to_stderr(f"[debug] {message}", f"[dim]\\[debug] {escape(message)}[/dim]")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _to_stderr(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def _print_json(self, data: Any) -> None:
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                self.print_data(data)
                return
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def _print_plain(self, data: Any) -> None:
        if isinstance(data, dict):
            lines = [f"{key}\t{value}" for key, value in data.items()]
        elif isinstance(data, list):
            lines = [
                "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
                for item in data
            ]
        else:
            lines = [str(data)]
        for line in lines:
            self.print_data(line)

    def _print_rich(self, data: Any) -> None:
        if not isinstance(data, (dict, list)):
            self._stdout.print(escape(str(data)))
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide manager
# ------------------------------------------------------------------ #

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
    """Forget the installed manager (tests use this between runs)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_explanation(explanation: ResolvedExplanation, prefix: str = "git") -> None:
    get_output().print_explanation(explanation, prefix)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


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
