"""
process.py

Responsibility: the only place gojo spawns external tools.

Every call blocks until the child exits and every exit status is checked.
stdin and stderr are inherited; stdout is inherited or discarded.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from gojo.errors import ToolError

logger = logging.getLogger(__name__)


def cpu_count() -> int:
    return os.cpu_count() or 1


def run_tool(
    cmd: Sequence[str],
    *,
    cwd: str | Path,
    env: Mapping[str, str] | None = None,
    quiet: bool = False,
) -> subprocess.CompletedProcess:
    """
    Run `cmd` in `cwd`, raising a ToolError on a non-zero exit or a missing binary.
    """
    argv = [str(part) for part in cmd]
    logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd)
    try:
        return subprocess.run(
            argv,
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=True,
            stdout=subprocess.DEVNULL if quiet else None,
        )
    except FileNotFoundError as e:
        raise ToolError(f"command not found: {argv[0]}") from e
    except subprocess.CalledProcessError as e:
        raise ToolError(f"{' '.join(argv)}\nexited with status {e.returncode}") from e


def run_interactive(cmd: Sequence[str], *, cwd: str | Path) -> int:
    """Run a user program with all streams inherited and return its exit status."""
    argv = [str(part) for part in cmd]
    logger.debug("Executing %s (cwd=%s)", " ".join(argv), cwd)
    try:
        return subprocess.run(argv, cwd=str(cwd)).returncode
    except FileNotFoundError as e:
        raise ToolError(f"command not found: {argv[0]}") from e
