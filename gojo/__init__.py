"""
gojo package

This package implements gojo, a cargo-style front end for CMake C++ projects.

Key responsibilities are split across modules:
- `arguments.py`: tokenize the flags after a subcommand
- `config.py`: the `.gojo` sidecar file (read / write / defaults)
- `renderer.py`: deterministic text for every file `gojo init` generates
- `sources.py`: recursive source/header collection for fmt and check
- `process.py`: checked subprocess invocation of cmake, ctest, clang-format, ...
- `commands.py`: one handler per subcommand
- `cli.py`: CLI entrypoint and error reporting
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
