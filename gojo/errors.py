"""
errors.py

Responsibility: the single error channel every command reports through.

`cli.main` catches `GojoError` (and `OSError`), prints `title`, the message and
an optional `hint`, then exits non-zero.
"""

from __future__ import annotations


class GojoError(RuntimeError):
    title = "error"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UsageError(GojoError):
    title = "incorrect usage"

    def __init__(self, message: str, *, command: str | None = None) -> None:
        hint = f"see 'gojo help {command}'" if command else "see 'gojo help'"
        super().__init__(message, hint=hint)
        self.command = command


class NotFoundError(GojoError):
    title = "file not found"


class ConfigError(GojoError):
    title = "malformed config"


class RenderError(GojoError):
    title = "render failed"


class ToolError(GojoError):
    title = "command failed"
