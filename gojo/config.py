"""
config.py

Responsibility: persist the per-project settings in the `.gojo` sidecar file.

Format: 14 `key: value` lines in a fixed order. Booleans are the literal words
`true`/`false`. Each line is split on its first `:` only, so values may contain
colons; values may not contain newlines.

Enumerated fields are validated where they are assigned (CLI parsing), never
when the file is read back.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path

from gojo.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = ".gojo"
DEFAULT_BUILD_DIR = "build"

CXX_STANDARDS = ("11", "14", "17", "20", "23")
SOURCE_EXTENSIONS = ("cc", "cpp", "cxx", "c++")
HEADER_EXTENSIONS = ("h", "hpp", "hxx", "h++")
FORMAT_STYLES = ("llvm", "google", "chromium", "mozilla", "webkit", "microsoft", "gnu")
STYLE_FILE = "file"
COMPILERS = ("g++", "clang++")

DEFAULT_STD = "20"
DEFAULT_STYLE = "google"
DEFAULT_NAME = "project"


def default_src_ext() -> str:
    return "cpp" if sys.platform == "win32" else "cc"


def default_hdr_ext() -> str:
    return "hpp" if sys.platform == "win32" else "h"


@dataclass(frozen=True)
class ProjectConfig:
    """Settings written by `init` and read by every other command."""

    project_root: str
    build_dir: str
    name: str = DEFAULT_NAME
    std: str = DEFAULT_STD
    src_ext: str = "cc"
    hdr_ext: str = "h"
    fmt_style: str = DEFAULT_STYLE
    fmt_args: str = ""
    clang_tidy: bool = False
    cpplint: bool = False
    cpplint_args: str = ""
    cppcheck: bool = False
    cppcheck_args: str = ""
    quiet: bool = False

    @property
    def root_path(self) -> Path:
        return Path(self.project_root)

    @property
    def build_path(self) -> Path:
        return Path(self.build_dir)

    def with_style(self, style: str) -> ProjectConfig:
        return replace(self, fmt_style=style)


# On-disk key for each field, in file order.
_KEYS: tuple[tuple[str, str], ...] = (
    ("project_root", "project_root"),
    ("build_dir", "build_dir"),
    ("name", "name"),
    ("std", "std"),
    ("src", "src_ext"),
    ("hdr", "hdr_ext"),
    ("fmt_style", "fmt_style"),
    ("fmt_args", "fmt_args"),
    ("clang-tidy", "clang_tidy"),
    ("cpplint", "cpplint"),
    ("cpplint_args", "cpplint_args"),
    ("cppcheck", "cppcheck"),
    ("cppcheck_args", "cppcheck_args"),
    ("quiet", "quiet"),
)

_BOOL_FIELDS = frozenset({"clang_tidy", "cpplint", "cppcheck", "quiet"})


def config_path(project_root: str | Path) -> Path:
    return Path(project_root) / CONFIG_FILE


def _render_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def dumps(config: ProjectConfig) -> str:
    lines: list[str] = []
    for key, attr in _KEYS:
        value = _render_value(getattr(config, attr))
        if "\n" in value or "\r" in value:
            raise ConfigError(f"value for '{key}' must not contain a newline")
        lines.append(f"{key}: {value}")
    return "\n".join(lines) + "\n"


def loads(text: str) -> ProjectConfig:
    # Only "\n" separates records; other line-break characters are value text.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if len(lines) < len(_KEYS):
        raise ConfigError(f"expected {len(_KEYS)} lines in {CONFIG_FILE}, found {len(lines)}")

    values: dict[str, object] = {}
    for lineno, (raw, (key, attr)) in enumerate(zip(lines, _KEYS), start=1):
        if ":" not in raw:
            raise ConfigError(f"line {lineno} of {CONFIG_FILE} is not a `key: value` pair")
        k, v = raw.split(":", 1)
        if k.strip() != key:
            raise ConfigError(f"line {lineno} of {CONFIG_FILE}: expected key '{key}', found '{k.strip()}'")
        v = v.strip()
        values[attr] = (v == "true") if attr in _BOOL_FIELDS else v
    return ProjectConfig(**values)  # type: ignore[arg-type]


def write_config(config: ProjectConfig, path: str | Path | None = None) -> Path:
    """Overwrite the sidecar file (default: `<project_root>/.gojo`)."""
    target = Path(path) if path is not None else config_path(config.project_root)
    text = dumps(config)
    target.write_text(text, encoding="utf-8", newline="\n")
    logger.debug("Wrote %s", target)
    return target


def read_config(project_root: str | Path) -> ProjectConfig | None:
    """
    Read `<project_root>/.gojo`.

    Returns None (after a warning) when the file is missing or unreadable.
    A file that exists but is not UTF-8, truncated or out of order raises
    ConfigError.
    """
    path = config_path(project_root)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    except OSError as e:
        logger.warning("no gojo config file found at %s (%s); using defaults", path, e.strerror or e)
        return None
    return loads(text)


def default_config(project_root: str | Path) -> ProjectConfig:
    root = Path(project_root)
    return ProjectConfig(
        project_root=str(root),
        build_dir=str(root / DEFAULT_BUILD_DIR),
        src_ext=default_src_ext(),
        hdr_ext=default_hdr_ext(),
    )


def load_config(cwd: str | Path) -> ProjectConfig:
    return read_config(cwd) or default_config(cwd)
