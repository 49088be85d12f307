"""
arguments.py

Responsibility: turn the raw tokens after a subcommand into flag/value pairs.

The tokenizer knows nothing about which flags exist. Each command checks the
result against its own accepted set via `canonicalize`.

Known limitation: a flag without `=` always takes the next token as its value,
so `gojo build -r -t` only sets `-r`. Use `--flag=value` or put value-less
flags last.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from gojo.errors import UsageError


def is_flag(token: str) -> bool:
    return token.startswith("-")


def parse_arguments(tokens: Sequence[str]) -> dict[str, str | None]:
    parsed: dict[str, str | None] = {}
    it = iter(tokens)
    for token in it:
        if not is_flag(token):
            # Stray positional; the caller rejects it as an unknown flag.
            parsed[token] = None
            continue
        if "=" in token:
            key, value = token.split("=", 1)
            parsed[key] = value
            continue
        parsed[token] = next(it, None)
    return parsed


def canonicalize(
    parsed: Mapping[str, str | None],
    accepted: Mapping[str, str],
    command: str,
) -> dict[str, str | None]:
    """
    Map every parsed flag onto its canonical long name.

    `accepted` maps each spelling (`-r`, `--release`) to the canonical name.
    The first unrecognized key raises a UsageError naming it.
    """
    out: dict[str, str | None] = {}
    for flag, value in parsed.items():
        if flag not in accepted:
            raise UsageError(f"invalid option '{flag}'", command=command)
        out[accepted[flag]] = value
    return out


def require_value(flag: str, value: str | None, command: str) -> str:
    if value is None or not value.strip():
        raise UsageError(f"missing value for {flag} flag", command=command)
    return value


def require_choice(flag: str, value: str | None, choices: Iterable[str], command: str) -> str:
    allowed = tuple(choices)
    if value is None or value not in allowed:
        raise UsageError(
            f"unrecognized value for {flag} flag: {value or ''}\nexpected one of: {', '.join(allowed)}",
            command=command,
        )
    return value
