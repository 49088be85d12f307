"""
console.py

Responsibility: the Rich consoles, status lines and logging setup shared by
every command.

Status text goes to stdout and is silenced by `quiet`; errors and log records
go to stderr.
"""

from __future__ import annotations

import logging
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def configure_logging(verbose: bool = False) -> None:
    """Route stdlib logging through Rich on stderr."""

    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logging.basicConfig(level=level, handlers=[handler], format="%(message)s", force=True)


def status(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        console.print(message)


def elapsed(start: float) -> str:
    return f"{time.perf_counter() - start:.2f}s"


def print_error(title: str, message: str, hint: str | None = None) -> None:
    err_console.print(f"[red]{escape(title)}:[/red]")
    for line in message.splitlines() or [""]:
        err_console.print(f"\t{escape(line)}")
    if hint:
        err_console.print(f"\t{escape(hint)}")


__all__ = ["configure_logging", "console", "elapsed", "err_console", "print_error", "status"]
