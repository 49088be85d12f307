"""
cli.py

Responsibility: CLI entrypoint for gojo.

High-level flow:
1) Pick the subcommand (argparse); everything after it is handed over raw
2) The subcommand parses its own flags (`arguments.py`) and does its work
   (`commands.py`)
3) Any GojoError/OSError is printed as one coloured error line and turned
   into a non-zero exit status
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from gojo import __version__
from gojo.commands import COMMANDS, help_cmd
from gojo.console import configure_logging, console, print_error
from gojo.errors import GojoError, UsageError
from gojo.usage import BANNER

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gojo",
        description="gojo - project scaffolding and build orchestration for C++",
        add_help=False,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every external command")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("command", help="Subcommand to run (see 'gojo help')")
    p.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the subcommand")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    raw = list(sys.argv[1:] if argv is None else argv)
    if not raw:
        console.print(BANNER)
        return help_cmd([])
    if raw[0] in ("-h", "--help"):
        return help_cmd([])

    args = _build_parser().parse_args(raw)
    configure_logging(verbose=bool(args.verbose))

    try:
        handler = COMMANDS.get(args.command)
        if handler is None:
            raise UsageError(f"command not recognized: {args.command}")
        return int(handler(args.args, cwd=Path.cwd()))
    except GojoError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print_error(e.title, str(e), e.hint)
        return 1
    except OSError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print_error("error", str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
