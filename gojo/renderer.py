"""
renderer.py

Responsibility: produce the text of every file `gojo init` generates.

Rules:
- Each function is pure: primitive string parameters in, file text out.
- Same inputs always give byte-identical output (no timestamps, no environment).
- Templates live in `gojo/templates/` and are rendered with Jinja2 under
  StrictUndefined, so a missing parameter is an error rather than a blank.
- `.clang-tidy` is YAML and is emitted through PyYAML.

This module intentionally does NOT touch the filesystem beyond loading
templates, and knows nothing about CLI parsing or subprocesses.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from gojo.errors import RenderError

TEMPLATES_DIR = Path(__file__).parent / "templates"
CMAKE_DEFAULT_VERSION = "3.28"

CLANG_TIDY_CHECKS = (
    "abseil-*",
    "bugprone-*",
    "clang-analyzer-*",
    "cppcoreguidelines-*",
    "google-*",
    "modernize-*",
    "performance-*",
    "-modernize-use-trailing-return-type",
)
CLANG_TIDY_WARNINGS_AS_ERRORS = ("bugprone-*", "clang-analyzer-*", "cppcoreguidelines-*")


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, **context: Any) -> str:
    try:
        return _environment().get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template file: {template_name}") from e


def root_cmake_lists(
    name: str,
    std: str,
    src_ext: str,
    cmake_version: str = CMAKE_DEFAULT_VERSION,
    compiler: str | None = None,
    description: str = "",
) -> str:
    return _render(
        "CMakeLists.txt.j2",
        name=name,
        std=std,
        src_ext=src_ext,
        cmake_version=cmake_version,
        compiler=compiler or "",
        description=description.replace('"', '\\"'),
    )


def lib_cmake_lists(src_ext: str) -> str:
    return _render("lib_CMakeLists.txt.j2", src_ext=src_ext)


def test_cmake_lists(src_ext: str) -> str:
    return _render("test_CMakeLists.txt.j2", src_ext=src_ext)


def main_source(hdr_ext: str) -> str:
    return _render("main.j2", hdr_ext=hdr_ext)


def lib_source(hdr_ext: str) -> str:
    return _render("hello_world_src.j2", hdr_ext=hdr_ext)


def lib_header(hdr_ext: str) -> str:
    """Header stub; the include guard is the upper-cased extension (`+` becomes `P`)."""
    return _render("hello_world_hdr.j2", hdr_ext=hdr_ext)


def test_source(hdr_ext: str) -> str:
    return _render("hello_world_test.j2", hdr_ext=hdr_ext)


def gitignore(build_dir: str = "build") -> str:
    return _render("gitignore.j2", build_dir=build_dir)


def readme(name: str, description: str = "") -> str:
    return _render("README.md.j2", name=name, description=description)


def clang_tidy() -> str:
    data = {
        "Checks": ",".join(CLANG_TIDY_CHECKS),
        "WarningsAsErrors": ",".join(CLANG_TIDY_WARNINGS_AS_ERRORS),
    }
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, width=4096)
