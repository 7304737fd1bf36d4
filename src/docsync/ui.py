from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

OUTPUT_ENV_VAR = "DOCSYNC_OUTPUT"
OUTPUT_CHOICES = ("auto", "plain", "rich")
OutputMode = Literal["plain", "rich"]

_LOG_HANDLER: logging.Handler | None = None


def add_output_mode_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        choices=OUTPUT_CHOICES,
        help=f"auto (default), plain or rich; ${OUTPUT_ENV_VAR} applies when omitted",
    )


def _choice(raw: str | None, source: str) -> str | None:
    value = (raw or "").strip().lower()
    if value and value not in OUTPUT_CHOICES:
        raise ValueError(
            f"invalid {source} value {raw!r}; expected one of: {', '.join(OUTPUT_CHOICES)}"
        )
    return value or None


def resolve_output_mode(
    requested: str | None = None,
    *,
    env: Mapping[str, str] | None = None,
    is_tty: bool | None = None,
) -> OutputMode:
    """Pick plain or rich output from ``--output``, the environment, then the tty."""
    environ = os.environ if env is None else env
    selected = (
        _choice(requested, "--output")
        or _choice(environ.get(OUTPUT_ENV_VAR), OUTPUT_ENV_VAR)
        or "auto"
    )
    if selected == "auto":
        tty = sys.stdout.isatty() if is_tty is None else is_tty
        return "rich" if tty else "plain"
    return "rich" if selected == "rich" else "plain"


def make_console(mode: OutputMode, *, stderr: bool = False) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        force_terminal=mode == "rich",
        no_color=mode != "rich",
        highlight=False,
    )


def configure_logging(mode: OutputMode, *, verbose: bool = False) -> None:
    global _LOG_HANDLER
    handler: logging.Handler
    if mode == "rich":
        handler = RichHandler(console=make_console(mode, stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    if _LOG_HANDLER is not None:
        root.removeHandler(_LOG_HANDLER)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    _LOG_HANDLER = handler


def render_table(
    console: Console,
    *,
    headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    title: str | None = None,
    no_wrap_columns: Sequence[int] = (),
) -> None:
    table = Table(title=title)
    for idx, header in enumerate(headers):
        table.add_column(header, no_wrap=idx in no_wrap_columns)
    for row in rows:
        table.add_row(*(str(value or "") for value in row))
    console.print(table)


def render_help(
    *,
    output_mode: OutputMode,
    command: str,
    summary: str,
    usage: Sequence[str],
    sections: Sequence[tuple[str, Sequence[tuple[str, str]]]],
) -> None:
    """Top-level help: a summary panel and option tables, or aligned text."""
    if output_mode == "rich":
        console = make_console("rich")
        console.print(Panel(summary, title=f"[bold blue]{command}[/bold blue]"))
        console.print("[bold]Usage[/bold]")
        for line in usage:
            console.print(f"  {line}", markup=False)
        for title, rows in sections:
            render_table(console, title=title, headers=("Item", "Description"), rows=rows)
        return

    lines = [f"{command}  {summary}", "", "Usage", *(f"  {line}" for line in usage)]
    for title, rows in sections:
        width = max(len(item) for item, _ in rows)
        lines += ["", title, *(f"  {item.ljust(width)}  {text}" for item, text in rows)]
    print("\n".join(lines))
